"""
zkclaim: validate ENS-name claims authorized by zk-email Groth16 proofs.

A claim carries a proof over a fixed-length public-input vector in which the
sender email, the claim command and the DKIM public-key hash sit at known
offsets. Validation decodes those fields, compares them with what the caller
declares, and only then runs the BN254 pairing check.

Quick use::

    from zkclaim import load_verification_data, validate_from_command

    vk, proof, inputs = load_verification_data("vkey.json", "proof.json", "public.json")
    validate_from_command(vk, proof, inputs, "thezdev1@gmail.com", command_text, dkim_hash)

Any rejection raises a `zkclaim.errors.ClaimError` subclass.
"""

from __future__ import annotations

from .adapters import load_public_inputs, load_verification_data
from .claim import (ENS_CLAIM_V1, ActionDescriptor, ClaimStage, Layout,
                    PublicInputView, parse_command, render_command,
                    validate_direct, validate_from_command)
from .errors import (ClaimError, CommandMismatch, EmailMismatch, InvalidCommand,
                     ProofRejected, PubkeyHashMismatch, VerificationError)
from .version import __version__

__all__ = [
    "__version__",
    "validate_direct",
    "validate_from_command",
    "parse_command",
    "render_command",
    "ActionDescriptor",
    "ClaimStage",
    "PublicInputView",
    "Layout",
    "ENS_CLAIM_V1",
    "load_public_inputs",
    "load_verification_data",
    "ClaimError",
    "InvalidCommand",
    "EmailMismatch",
    "CommandMismatch",
    "PubkeyHashMismatch",
    "ProofRejected",
    "VerificationError",
]
