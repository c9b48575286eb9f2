"""
zkclaim.verifiers.groth16_bn254
===============================

Groth16 verifier for BN254 (altbn128), compatible with the `snarkjs` JSON
layout used by circom email circuits.

Verification equation (standard form)
-------------------------------------
    e(A, B) == e(alpha1, beta2) * e(VK_x, gamma2) * e(C, delta2)

We implement this as a product check in GT:
    e(A, B) * e(-alpha1, beta2) * e(-VK_x, gamma2) * e(-C, delta2) == 1

JSON compatibility (snarkjs)
----------------------------
- Verifying key:
  {
    "vk_alpha_1": [ax, ay, "1"],
    "vk_beta_2": [[bx0, bx1], [by0, by1], ["1", "0"]],
    "vk_gamma_2": [[gx0, gx1], [gy0, gy1], ["1", "0"]],
    "vk_delta_2": [[dx0, dx1], [dy0, dy1], ["1", "0"]],
    "IC": [[ic0x, ic0y, "1"], [ic1x, ic1y, "1"], ...]   # length = 1 + #public_inputs
  }

- Proof:
  {
    "pi_a": [ax, ay, "1"],
    "pi_b": [[bx0, bx1], [by0, by1], ["1", "0"]],
    "pi_c": [cx, cy, "1"]
  }

Coordinates are decimal strings (or ints / 0x-hex). The trailing projective
coordinate is optional; a zero there (or an all-zero point) is infinity.
For G2, elements are Fq2 with the convention c0 + c1 * i encoded as [c0, c1].

Public API
----------
- load_vk(vk_json: dict) -> VerifyingKey
- load_proof(proof_json: dict) -> Proof
- verify(vk, public_inputs, proof) -> bool
- verify_groth16(vk_json, proof_json, inputs) -> bool
- Groth16Verifier: ProofVerifier implementation used by the claim validator

Errors
------
Malformed keys/proofs and an input count that does not match the key raise
`ValueError`; a clean run of the pairing check returns a bool.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Sequence, Tuple, Union

from py_ecc.optimized_bn128 import FQ, FQ2
from py_ecc.optimized_bn128 import add as _add
from py_ecc.optimized_bn128 import multiply as _mul
from py_ecc.optimized_bn128 import neg as _neg

from .pairing_bn254 import (check_pairing_product, curve_order, is_on_curve_g1,
                            is_on_curve_g2)

G1Point = Any
G2Point = Any

_FR = curve_order()

Num = Union[int, str]


# ---------------------------
# Utilities
# ---------------------------


def _to_int(z: Num) -> int:
    if isinstance(z, bool):
        raise ValueError("boolean is not a coordinate")
    if isinstance(z, int):
        return z
    s = str(z).strip().lower()
    if s.startswith("0x"):
        return int(s, 16)
    return int(s)


def _g1(coords: Sequence[Num]) -> G1Point:
    if len(coords) not in (2, 3):
        raise ValueError("G1 point must have 2 or 3 coordinates")
    xi, yi = _to_int(coords[0]), _to_int(coords[1])
    zi = _to_int(coords[2]) if len(coords) == 3 else 1
    if zi == 0 or (xi == 0 and yi == 0):
        return (FQ(1), FQ(1), FQ(0))  # projective infinity
    if zi != 1:
        raise ValueError("G1 point must be affine (z = 1)")
    return (FQ(xi), FQ(yi), FQ(1))


def _g2(coords: Sequence[Sequence[Num]]) -> G2Point:
    if len(coords) not in (2, 3) or any(len(c) != 2 for c in coords):
        raise ValueError("G2 point must be [[x0,x1],[y0,y1]] with optional [z0,z1]")
    x0, x1 = _to_int(coords[0][0]), _to_int(coords[0][1])
    y0, y1 = _to_int(coords[1][0]), _to_int(coords[1][1])
    z0, z1 = (_to_int(coords[2][0]), _to_int(coords[2][1])) if len(coords) == 3 else (1, 0)
    if (z0, z1) == (0, 0) or (x0, x1, y0, y1) == (0, 0, 0, 0):
        return (FQ2([1, 0]), FQ2([1, 0]), FQ2([0, 0]))
    if (z0, z1) != (1, 0):
        raise ValueError("G2 point must be affine (z = [1, 0])")
    return (FQ2([x0, x1]), FQ2([y0, y1]), FQ2([1, 0]))


def _field(obj: Mapping[str, Any], *names: str) -> Any:
    for n in names:
        if n in obj:
            return obj[n]
    raise ValueError(f"missing '{names[0]}'")


# ---------------------------
# Data classes
# ---------------------------


@dataclass(frozen=True)
class VerifyingKey:
    alpha1: G1Point
    beta2: G2Point
    gamma2: G2Point
    delta2: G2Point
    IC: Tuple[G1Point, ...]  # [IC0, IC1, ..., ICn]

    @property
    def n_public(self) -> int:
        return len(self.IC) - 1


@dataclass(frozen=True)
class Proof:
    A: G1Point
    B: G2Point
    C: G1Point


# ---------------------------
# Loaders (snarkjs JSON)
# ---------------------------


def load_vk(vk_json: Mapping[str, Any]) -> VerifyingKey:
    """Parse a snarkjs-style verifying key JSON object into a VerifyingKey."""
    alpha1 = _g1(_field(vk_json, "vk_alpha_1", "alpha_1"))
    beta2 = _g2(_field(vk_json, "vk_beta_2", "beta_2"))
    gamma2 = _g2(_field(vk_json, "vk_gamma_2", "gamma_2"))
    delta2 = _g2(_field(vk_json, "vk_delta_2", "delta_2"))
    ic = _field(vk_json, "IC", "vk_ic", "ic")
    if not isinstance(ic, (list, tuple)) or not ic:
        raise ValueError("IC must be a non-empty list of G1 points")
    ic_pts = tuple(_g1(p) for p in ic)

    if not (
        is_on_curve_g1(alpha1)
        and is_on_curve_g2(beta2)
        and is_on_curve_g2(gamma2)
        and is_on_curve_g2(delta2)
    ):
        raise ValueError("VK points are not on curve")
    for i, P in enumerate(ic_pts):
        if not is_on_curve_g1(P):
            raise ValueError(f"IC[{i}] is not on the G1 curve")

    return VerifyingKey(alpha1=alpha1, beta2=beta2, gamma2=gamma2, delta2=delta2, IC=ic_pts)


def load_proof(proof_json: Mapping[str, Any]) -> Proof:
    """Parse a snarkjs-style proof JSON object (flat or {proof: ...}) into a Proof."""
    if "proof" in proof_json and isinstance(proof_json["proof"], Mapping):
        proof_json = proof_json["proof"]
    A = _g1(_field(proof_json, "pi_a", "A"))
    B = _g2(_field(proof_json, "pi_b", "B"))
    C = _g1(_field(proof_json, "pi_c", "C"))

    if not (is_on_curve_g1(A) and is_on_curve_g2(B) and is_on_curve_g1(C)):
        raise ValueError("Proof points are not on curve")

    return Proof(A=A, B=B, C=C)


# ---------------------------
# Core verification
# ---------------------------


def _vk_x(IC: Sequence[G1Point], inputs: Sequence[Num]) -> G1Point:
    """VK_x = IC[0] + sum_i inputs[i] * IC[i+1] in G1."""
    if len(IC) != len(inputs) + 1:
        raise ValueError(f"IC length {len(IC)} != 1 + len(inputs) {len(inputs)}")
    acc = IC[0]
    for i, v in enumerate(inputs):
        s = _to_int(v)
        if not 0 <= s < _FR:
            raise ValueError(f"public input #{i} is not in the scalar field")
        if s != 0:
            acc = _add(acc, _mul(IC[i + 1], s))
    return acc


def verify(vk: VerifyingKey, public_inputs: Sequence[Num], proof: Proof) -> bool:
    """
    Verify a Groth16 proof against public inputs.

    Returns the outcome of the pairing check; raises ValueError when the
    key, proof and inputs do not fit together.
    """
    vkx = _vk_x(vk.IC, list(public_inputs))
    pairs: List[Tuple[G1Point, G2Point]] = [
        (proof.A, proof.B),
        (_neg(vk.alpha1), vk.beta2),
        (_neg(vkx), vk.gamma2),
        (_neg(proof.C), vk.delta2),
    ]
    return check_pairing_product(pairs)


def verify_groth16(
    vk_json: Mapping[str, Any],
    proof_json: Mapping[str, Any],
    public_inputs: Sequence[Num],
) -> bool:
    """JSON convenience: load the key and proof, then `verify`."""
    return verify(load_vk(vk_json), public_inputs, load_proof(proof_json))


class Groth16Verifier:
    """`ProofVerifier` backed by the py_ecc BN254 Groth16 check."""

    name = "groth16_bn254"

    def verify(self, vkey: VerifyingKey, public_inputs: Sequence[Num], proof: Proof) -> bool:
        return verify(vkey, public_inputs, proof)


__all__ = [
    "VerifyingKey",
    "Proof",
    "load_vk",
    "load_proof",
    "verify",
    "verify_groth16",
    "Groth16Verifier",
]
