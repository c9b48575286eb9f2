"""
zkclaim.verifiers.pairing_bn254
===============================

Thin BN254 (altbn128) Ate pairing wrapper over `py_ecc.optimized_bn128`.

Public API
----------
- pair(P: G1Point, Q: G2Point) -> GTElement
- product_of_pairings(pairs) -> GTElement
- check_pairing_product(pairs) -> bool
- is_on_curve_g1(P), is_on_curve_g2(Q), is_infinity(P)
- normalize_g1(P) / normalize_g2(Q)  (to affine ints)
- curve_order()

Notes
-----
- Point ordering follows the common convention e(P, Q) with P in G1, Q in G2.
  The underlying `py_ecc` pairing call expects (Q, P); this wrapper handles it.
- Points are py_ecc projective triples (x, y, z); z == 0 is the point at
  infinity, which pairs to the identity in GT.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Tuple

from py_ecc.optimized_bn128 import FQ12
from py_ecc.optimized_bn128 import b as _B
from py_ecc.optimized_bn128 import b2 as _B2
from py_ecc.optimized_bn128 import curve_order as _Q
from py_ecc.optimized_bn128 import is_on_curve as _is_on_curve
from py_ecc.optimized_bn128 import normalize as _normalize
from py_ecc.optimized_bn128 import pairing as _pairing

# Opaque to callers; py_ecc understands them.
G1Point = Any
G2Point = Any
GTElement = FQ12

BACKEND_NAME = "py_ecc.optimized_bn128"


def curve_order() -> int:
    """Return the BN254 subgroup order r (the scalar field modulus)."""
    return int(_Q)


def is_infinity(P: Any) -> bool:
    """True for `None` or a projective triple with a zero z coordinate."""
    if P is None:
        return True
    if isinstance(P, (tuple, list)) and len(P) == 3:
        z = P[2]
        return z == type(z).zero()
    return False


def is_on_curve_g1(P: G1Point) -> bool:
    """Return True if P is on G1 or is the point at infinity."""
    return is_infinity(P) or bool(_is_on_curve(P, _B))


def is_on_curve_g2(Q: G2Point) -> bool:
    """Return True if Q is on the G2 twist or is the point at infinity."""
    return is_infinity(Q) or bool(_is_on_curve(Q, _B2))


def _limb(c: Any) -> int:
    # FQP coefficients are FQ elements on current py_ecc, plain ints on old ones.
    return int(getattr(c, "n", c))


def normalize_g1(P: G1Point) -> Optional[Tuple[int, int]]:
    """Affine (x, y) as integers; None for the point at infinity."""
    if is_infinity(P):
        return None
    ax, ay = _normalize(P)
    return int(ax.n), int(ay.n)


def normalize_g2(Q: G2Point) -> Optional[Tuple[Tuple[int, int], Tuple[int, int]]]:
    """Affine ((x_c0, x_c1), (y_c0, y_c1)) with integer limbs; None for infinity."""
    if is_infinity(Q):
        return None
    ax, ay = _normalize(Q)
    return (_limb(ax.coeffs[0]), _limb(ax.coeffs[1])), (_limb(ay.coeffs[0]), _limb(ay.coeffs[1]))


# -------------------------
# Pairing
# -------------------------


def pair(P: G1Point, Q: G2Point, *, validate: bool = True) -> GTElement:
    """
    Compute the Ate pairing e(P, Q) on BN254.

    Raises
    ------
    ValueError
        If inputs are not on the curve and validate=True.
    """
    if validate:
        if not is_on_curve_g1(P):
            raise ValueError("G1 point is not on curve")
        if not is_on_curve_g2(Q):
            raise ValueError("G2 point is not on curve")

    if is_infinity(P) or is_infinity(Q):
        return FQ12.one()

    # py_ecc pairing expects (Q, P)
    return _pairing(Q, P)


def product_of_pairings(
    pairs: Iterable[Tuple[G1Point, G2Point]], *, validate: bool = True
) -> GTElement:
    """Compute ∏ e(P_i, Q_i) over an iterable of (P_i, Q_i)."""
    acc = FQ12.one()
    for P, Q in pairs:
        acc *= pair(P, Q, validate=validate)
    return acc


def check_pairing_product(
    pairs: Iterable[Tuple[G1Point, G2Point]], *, validate: bool = True
) -> bool:
    """Return True iff ∏ e(P_i, Q_i) == 1 in GT."""
    return product_of_pairings(pairs, validate=validate) == FQ12.one()


__all__ = [
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
]
