"""
zkclaim.adapters.snarkjs_loader
===============================

Helpers to **load** the SnarkJS JSON artifacts a claim is checked against:

- verification_key.json → `VerifyingKey`
- proof.json            → `Proof`
- public.json           → `PublicInputView`

This module does **not** verify anything; it only reads files/JSON and turns
them into the typed objects the claim validator consumes.

Typical shapes
--------------
public.json:
  [ "0", "1234", ... ]                       # exactly layout.size decimal strings

Some tools wrap proof and publics as { "proof": {...}, "publicSignals": [...] };
both the proof and the public-input loaders accept that bundle.

Exports
-------
- load_json(source) -> Any
- load_vkey(source) -> VerifyingKey
- load_proof(source) -> Proof
- load_public_inputs(source, layout=ENS_CLAIM_V1, nul_policy="trailing") -> PublicInputView
- load_verification_data(vkey, proof, inputs, ...) -> (VerifyingKey, Proof, PublicInputView)
"""

from __future__ import annotations

import json
import os
from typing import Any, Mapping, Tuple, Union

from ..claim.field_codec import NulPolicy
from ..claim.layout import ENS_CLAIM_V1, Layout
from ..claim.public_inputs import PublicInputView
from ..errors import LoaderError
from ..logging import get_logger
from ..verifiers import groth16_bn254
from ..verifiers.groth16_bn254 import Proof, VerifyingKey

JsonLike = Union[str, bytes, os.PathLike, Mapping[str, Any], list]

log = get_logger(__name__)


def _describe(source: JsonLike) -> str:
    if isinstance(source, (Mapping, list)):
        return "<in-memory>"
    if isinstance(source, (bytes, bytearray)):
        return "<bytes>"
    return os.fspath(source) if isinstance(source, os.PathLike) else str(source)[:200]


# -----------------------------------------------------------------------------
# I/O helpers
# -----------------------------------------------------------------------------


def load_json(source: JsonLike, artifact: str = "json") -> Any:
    """
    Load JSON from:
      - dict/list: returned as a shallow copy
      - path-like or string path
      - string/bytes containing JSON text

    Raises LoaderError on failure.
    """
    if isinstance(source, Mapping):
        return dict(source)
    if isinstance(source, list):
        return list(source)
    try:
        if isinstance(source, (bytes, bytearray, memoryview)):
            return json.loads(bytes(source).decode("utf-8"))
        s = os.fspath(source) if isinstance(source, os.PathLike) else str(source)
        if os.path.isfile(s):
            with open(s, "r", encoding="utf-8") as f:
                return json.load(f)
        if isinstance(source, os.PathLike) or not s.lstrip().startswith(("{", "[")):
            raise FileNotFoundError(f"no such file: {s}")
        return json.loads(s)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise LoaderError(artifact, _describe(source), e) from e


# -----------------------------------------------------------------------------
# Artifacts
# -----------------------------------------------------------------------------


def load_vkey(source: JsonLike) -> VerifyingKey:
    obj = load_json(source, "vkey")
    try:
        vk = groth16_bn254.load_vk(obj)
    except (ValueError, TypeError, AttributeError) as e:
        raise LoaderError("vkey", _describe(source), e) from e
    log.debug("verifying key loaded", extra={"n_public": vk.n_public})
    return vk


def load_proof(source: JsonLike) -> Proof:
    obj = load_json(source, "proof")
    try:
        return groth16_bn254.load_proof(obj)
    except (ValueError, TypeError, AttributeError) as e:
        raise LoaderError("proof", _describe(source), e) from e


def load_public_inputs(
    source: JsonLike,
    layout: Layout = ENS_CLAIM_V1,
    *,
    nul_policy: NulPolicy = "trailing",
) -> PublicInputView:
    """
    Read a public-input vector (bare list or {"publicSignals": [...]}) into a
    PublicInputView. Length/element problems raise MalformedInput.
    """
    obj = load_json(source, "pub inputs")
    if isinstance(obj, Mapping):
        obj = obj.get("publicSignals")
    if not isinstance(obj, list):
        raise LoaderError(
            "pub inputs",
            _describe(source),
            ValueError("public inputs must be a JSON array"),
        )
    return PublicInputView(obj, layout, nul_policy=nul_policy)


def load_verification_data(
    vkey_source: JsonLike,
    proof_source: JsonLike,
    inputs_source: JsonLike,
    layout: Layout = ENS_CLAIM_V1,
    *,
    nul_policy: NulPolicy = "trailing",
) -> Tuple[VerifyingKey, Proof, PublicInputView]:
    """
    Convenience loader:
      (vkey, proof, inputs) = load_verification_data("vkey.json", "proof.json", "public.json")
    """
    vkey = load_vkey(vkey_source)
    proof = load_proof(proof_source)
    inputs = load_public_inputs(inputs_source, layout, nul_policy=nul_policy)
    return vkey, proof, inputs


__all__ = [
    "load_json",
    "load_vkey",
    "load_proof",
    "load_public_inputs",
    "load_verification_data",
]
