"""
Groth16 (BN254) verification over the simulated reference claim.

Pairing-backed tests are marked slow; the shape/range checks run before any
pairing and stay fast.
"""

from __future__ import annotations

import copy

import pytest
from py_ecc.optimized_bn128 import G1, G2, multiply, neg

from zkclaim.verifiers import ProofVerifier, default_verifier
from zkclaim.verifiers.groth16_bn254 import (Groth16Verifier, load_proof,
                                             load_vk, verify, verify_groth16)
from zkclaim.verifiers.pairing_bn254 import (check_pairing_product, curve_order,
                                             is_infinity, is_on_curve_g1, pair)


def _ints(case):
    return [int(x) for x in case.public]


def test_load_vk_and_proof(claim_case):
    vk = load_vk(claim_case.vkey)
    assert vk.n_public == 60
    assert is_on_curve_g1(vk.alpha1)
    pf = load_proof(claim_case.proof)
    assert is_on_curve_g1(pf.A) and is_on_curve_g1(pf.C)


def test_load_proof_bundle(claim_case):
    bundled = {"proof": claim_case.proof, "publicSignals": claim_case.public}
    assert load_proof(bundled) == load_proof(claim_case.proof)


def test_two_coordinate_points(claim_case):
    vkey = copy.deepcopy(claim_case.vkey)
    vkey["vk_alpha_1"] = vkey["vk_alpha_1"][:2]
    vkey["vk_beta_2"] = vkey["vk_beta_2"][:2]
    assert load_vk(vkey) == load_vk(claim_case.vkey)


def test_zero_projective_coordinate_is_infinity(claim_case):
    proof = copy.deepcopy(claim_case.proof)
    proof["pi_c"] = ["1", "2", "0"]
    assert is_infinity(load_proof(proof).C)


@pytest.mark.parametrize(
    "patch",
    [
        lambda v: v["vk_alpha_1"].__setitem__(1, str(int(v["vk_alpha_1"][1]) + 1)),
        lambda v: v["vk_alpha_1"].__setitem__(2, "2"),
        lambda v: v.pop("vk_delta_2"),
        lambda v: v.__setitem__("IC", []),
        lambda v: v["IC"][5].__setitem__(0, "3"),
        lambda v: v["vk_gamma_2"].__setitem__(0, ["1"]),
    ],
)
def test_malformed_vk(claim_case, patch):
    vkey = copy.deepcopy(claim_case.vkey)
    patch(vkey)
    with pytest.raises(ValueError):
        load_vk(vkey)


def test_input_count_mismatch_raises(claim_case):
    vk, pf = load_vk(claim_case.vkey), load_proof(claim_case.proof)
    with pytest.raises(ValueError):
        verify(vk, _ints(claim_case)[:-1], pf)


def test_input_out_of_field_raises(claim_case):
    vk, pf = load_vk(claim_case.vkey), load_proof(claim_case.proof)
    inputs = _ints(claim_case)
    inputs[0] = curve_order()
    with pytest.raises(ValueError):
        verify(vk, inputs, pf)


def test_default_verifier_is_groth16():
    v = default_verifier()
    assert isinstance(v, Groth16Verifier)
    assert isinstance(v, ProofVerifier)


def test_pair_with_infinity_is_one():
    inf = multiply(G1, 0)
    assert pair(inf, G2) == pair(G1, multiply(G2, 0))


@pytest.mark.slow
def test_pairing_product_cancels():
    assert check_pairing_product([(G1, G2), (neg(G1), G2)])
    assert not check_pairing_product([(G1, G2), (G1, G2)])


@pytest.mark.slow
def test_valid_proof_verifies(claim_case):
    vk, pf = load_vk(claim_case.vkey), load_proof(claim_case.proof)
    assert verify(vk, _ints(claim_case), pf) is True
    assert verify_groth16(claim_case.vkey, claim_case.proof, claim_case.public) is True


@pytest.mark.slow
def test_changed_input_is_rejected(claim_case):
    vk, pf = load_vk(claim_case.vkey), load_proof(claim_case.proof)
    inputs = _ints(claim_case)
    inputs[0] += 1
    assert verify(vk, inputs, pf) is False


def test_pairing_module_exports():
    from zkclaim.verifiers import pairing_bn254

    assert set(pairing_bn254.__all__) == {
        "pair",
        "product_of_pairings",
        "check_pairing_product",
        "is_infinity",
        "is_on_curve_g1",
        "is_on_curve_g2",
        "normalize_g1",
        "normalize_g2",
        "curve_order",
        "BACKEND_NAME",
    }
    assert all(hasattr(pairing_bn254, name) for name in pairing_bn254.__all__)
