"""
zkclaim.adapters: turn external artifacts into the objects the validator uses.

- snarkjs_loader  verification_key.json / proof.json / public.json
"""

from __future__ import annotations

from .snarkjs_loader import (load_json, load_proof, load_public_inputs,
                             load_verification_data, load_vkey)

__all__ = [
    "load_json",
    "load_vkey",
    "load_proof",
    "load_public_inputs",
    "load_verification_data",
]
