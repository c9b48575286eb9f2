# zkclaim/verifiers/__init__.py
"""
zkclaim proof verifiers

The claim validator treats proof verification as an opaque primitive:

    verify(vkey, public_inputs, proof) -> bool

returning the outcome of the cryptographic check and raising on
primitive-level failure (malformed key/proof shape, input count mismatch).
Any object with such a `verify` method satisfies `ProofVerifier`; the
default is the py_ecc-backed BN254 Groth16 verifier.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence, runtime_checkable

from .groth16_bn254 import Groth16Verifier, Proof, VerifyingKey, load_proof, load_vk


@runtime_checkable
class ProofVerifier(Protocol):
    def verify(self, vkey: Any, public_inputs: Sequence[int], proof: Any) -> bool:
        ...


_DEFAULT = Groth16Verifier()


def default_verifier() -> ProofVerifier:
    return _DEFAULT


__all__ = [
    "ProofVerifier",
    "Groth16Verifier",
    "VerifyingKey",
    "Proof",
    "load_vk",
    "load_proof",
    "default_verifier",
]
