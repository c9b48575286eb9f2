"""
zkclaim.claim.validator
=======================

Ordered claim-assertion pipeline.

Two entry points share one tail:

- `validate_direct`: the caller already knows (email, address, resolver).
- `validate_from_command`: the caller has the raw command text; it is parsed
  with the command grammar first and then handed to the direct pipeline.

Checks run strictly in this order and the first failure wins:

    START -> EMAIL_CHECKED -> COMMAND_CHECKED -> PUBKEY_CHECKED -> PROOF_VERIFIED

1. decoded email == caller email                      else EmailMismatch
2. decoded command == rendered(address, resolver)     else CommandMismatch
3. hex(decoded pubkey hash) == caller dkim hash       else PubkeyHashMismatch
4. verifier.verify(vkey, inputs, proof)               raise -> VerificationError
                                                      False -> ProofRejected

The cheap string comparisons always run before the pairing check. Nothing
here holds mutable state, so concurrent calls need no locking.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Sequence, Union

from .. import logging as zlog
from ..errors import (ClaimError, CommandMismatch, EmailMismatch, ProofRejected,
                      PubkeyHashMismatch, VerificationError)
from ..verifiers import ProofVerifier, default_verifier
from .command import parse_command, render_command
from .field_codec import ElementLike, NulPolicy
from .layout import Layout
from .public_inputs import PublicInputView, as_view

log = zlog.get_logger(__name__)

Inputs = Union[PublicInputView, Sequence[ElementLike]]


class ClaimStage(str, Enum):
    START = "start"
    EMAIL_CHECKED = "email_checked"
    COMMAND_CHECKED = "command_checked"
    PUBKEY_CHECKED = "pubkey_checked"
    PROOF_VERIFIED = "proof_verified"


def _fail(err: ClaimError, stage: ClaimStage) -> ClaimError:
    err.with_context(stage=stage)
    log.warning(
        "claim rejected",
        extra={"kind": err.kind, "stage": stage.value, "reason": err.message},
    )
    return err


def _check(
    vkey: Any,
    proof: Any,
    view: PublicInputView,
    email: str,
    address: str,
    resolver: str,
    dkim_pubkey_hash: str,
    verifier: ProofVerifier,
) -> None:
    stage = ClaimStage.START
    try:
        got_email = view.email()
        if got_email != email:
            raise EmailMismatch(expected=email, got=got_email)
        stage = ClaimStage.EMAIL_CHECKED
        log.debug("email matches", extra={"stage": stage.value})

        expected_command = render_command(address, resolver)
        got_command = view.command()
        if got_command != expected_command:
            raise CommandMismatch(expected=expected_command, got=got_command)
        stage = ClaimStage.COMMAND_CHECKED
        log.debug("command matches", extra={"stage": stage.value})

        got_hash = view.pubkey_hash_hex()
        if got_hash != dkim_pubkey_hash:
            raise PubkeyHashMismatch(expected=dkim_pubkey_hash, got=got_hash)
        stage = ClaimStage.PUBKEY_CHECKED
        log.debug("pubkey hash matches", extra={"stage": stage.value})
    except ClaimError as e:
        raise _fail(e, stage)

    try:
        ok = verifier.verify(vkey, view.as_ints(), proof)
    except (ProofRejected, VerificationError) as e:
        raise _fail(e, stage)
    except Exception as e:
        raise _fail(VerificationError(e), stage) from e
    if not ok:
        raise _fail(ProofRejected(), stage)

    log.info(
        "claim accepted",
        extra={"address": address, "resolver": resolver, "stage": ClaimStage.PROOF_VERIFIED.value},
    )


def validate_direct(
    vkey: Any,
    proof: Any,
    inputs: Inputs,
    email: str,
    address: str,
    resolver: str,
    dkim_pubkey_hash: str,
    *,
    verifier: Optional[ProofVerifier] = None,
    layout: Optional[Layout] = None,
    nul_policy: Optional[NulPolicy] = None,
) -> None:
    """
    Accept a claim whose (email, address, resolver) are already known.

    Returns None on success; raises the ClaimError subclass of the first
    failing check otherwise. `dkim_pubkey_hash` is compared as lowercase hex.
    """
    with zlog.trace_scope():
        zlog.bind(mode=zlog.context().get("mode", "direct"))
        try:
            view = as_view(inputs, layout, nul_policy=nul_policy)
        except ClaimError as e:
            raise _fail(e, ClaimStage.START)
        zlog.bind(layout=view.layout.version)
        _check(vkey, proof, view, email, address, resolver, dkim_pubkey_hash, verifier or default_verifier())


def validate_from_command(
    vkey: Any,
    proof: Any,
    inputs: Inputs,
    email: str,
    command_text: str,
    dkim_pubkey_hash: str,
    *,
    verifier: Optional[ProofVerifier] = None,
    layout: Optional[Layout] = None,
    nul_policy: Optional[NulPolicy] = None,
) -> None:
    """
    Accept a claim described by free-text `command_text`.

    The text must match the claim grammar exactly (InvalidCommand otherwise);
    the extracted address and resolver then go through `validate_direct`.
    """
    with zlog.trace_scope():
        zlog.bind(mode="command")
        try:
            action = parse_command(command_text)
        except ClaimError as e:
            raise _fail(e, ClaimStage.START)
        log.debug(
            "command parsed",
            extra={"address": action.address, "resolver": action.resolver},
        )
        validate_direct(
            vkey,
            proof,
            inputs,
            email,
            action.address,
            action.resolver,
            dkim_pubkey_hash,
            verifier=verifier,
            layout=layout,
            nul_policy=nul_policy,
        )


__all__ = ["ClaimStage", "validate_direct", "validate_from_command"]
