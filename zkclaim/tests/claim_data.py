"""
A complete, *valid* claim for tests.

`simulate_groth16` derives a BN254 Groth16 verifying key and proof from known
trapdoor scalars, so the pairing equation holds for exactly the public-input
vector it was built over. `build_public_inputs` lays out the email, command
and DKIM key hash at their ens-claim-v1 offsets.
"""

from __future__ import annotations

import random
from typing import Any, Dict, List, Sequence, Tuple

from py_ecc.optimized_bn128 import G1, G2, curve_order, multiply

from zkclaim.claim.command import render_command
from zkclaim.claim.field_codec import encode_text
from zkclaim.claim.layout import ENS_CLAIM_V1
from zkclaim.verifiers.pairing_bn254 import normalize_g1, normalize_g2

R = int(curve_order)

EMAIL = "thezdev1@gmail.com"
ADDRESS = "0xafBD210c60dD651892a61804A989eEF7bD63CBA0"
RESOLVER = "resolver.eth"
COMMAND = render_command(ADDRESS, RESOLVER)
DKIM_HASH = "0ea9c777dc7110e5a9e89b13f0cfc540e3845ba120b2b6dc24024d61488d4788"


def build_public_inputs(
    email: str = EMAIL, command: str = COMMAND, dkim_hash: str = DKIM_HASH
) -> List[int]:
    """60 field elements with the three named fields in place; other slots hold filler."""
    out = [(i * 7919 + 13) % 1000003 for i in range(ENS_CLAIM_V1.size)]
    for name, values in (
        ("email", encode_text(email, ENS_CLAIM_V1.field("email").count)),
        ("command", encode_text(command, ENS_CLAIM_V1.field("command").count)),
        ("pubkey_hash", [int(dkim_hash, 16)]),
    ):
        fs = ENS_CLAIM_V1.field(name)
        out[fs.offset : fs.end] = values
    return out


def _g1_json(P: Any) -> List[str]:
    x, y = normalize_g1(P)
    return [str(x), str(y), "1"]


def _g2_json(Q: Any) -> List[List[str]]:
    (x0, x1), (y0, y1) = normalize_g2(Q)
    return [[str(x0), str(x1)], [str(y0), str(y1)], ["1", "0"]]


def simulate_groth16(inputs: Sequence[int], seed: int = 20240611) -> Tuple[Dict, Dict]:
    """
    Build (vkey_json, proof_json) such that

        a*b == alpha*beta + s*gamma + c*delta   (mod r),  s = ic0 + sum x_i * ic_{i+1}

    so e(A, B) == e(alpha, beta) * e(VK_x, gamma) * e(C, delta) holds.
    """
    rng = random.Random(seed)

    def rand() -> int:
        return rng.randrange(1, R)

    alpha, beta, gamma, delta = rand(), rand(), rand(), rand()
    ic = [rand() for _ in range(len(inputs) + 1)]
    s = (ic[0] + sum(x * k for x, k in zip(inputs, ic[1:]))) % R
    a, b = rand(), rand()
    c = (a * b - alpha * beta - s * gamma) * pow(delta, -1, R) % R

    vkey = {
        "protocol": "groth16",
        "curve": "bn128",
        "nPublic": len(inputs),
        "vk_alpha_1": _g1_json(multiply(G1, alpha)),
        "vk_beta_2": _g2_json(multiply(G2, beta)),
        "vk_gamma_2": _g2_json(multiply(G2, gamma)),
        "vk_delta_2": _g2_json(multiply(G2, delta)),
        "IC": [_g1_json(multiply(G1, k)) for k in ic],
    }
    proof = {
        "pi_a": _g1_json(multiply(G1, a)),
        "pi_b": _g2_json(multiply(G2, b)),
        "pi_c": _g1_json(multiply(G1, c)),
        "protocol": "groth16",
        "curve": "bn128",
    }
    return vkey, proof
