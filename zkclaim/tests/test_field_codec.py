"""
Field codec tests: 31-byte little-endian text packing and fixed-width
big-endian hash packing over BN254 scalar-field elements.
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from zkclaim.claim.field_codec import (FIELD_MODULUS, decode_bytes, decode_text,
                                       encode_bytes, encode_text, to_element)
from zkclaim.errors import EncodingError


def test_modulus_is_bn254_scalar_field():
    assert FIELD_MODULUS == (
        21888242871839275222246405745257275088548364400416034343698204186575808495617
    )


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------


def test_decode_text_is_little_endian():
    assert decode_text([int.from_bytes(b"abc", "little")]) == "abc"
    # 0x616263 big-endian reads "abc" backwards
    assert decode_text([0x616263]) == "cba"


def test_encode_text_known_email():
    elems = encode_text("thezdev1@gmail.com", 9)
    assert len(elems) == 9
    assert elems[0] == int.from_bytes(b"thezdev1@gmail.com", "little")
    assert elems[1:] == [0] * 8


def test_long_text_spans_elements():
    s = "Claim ENS name for address 0xafBD210c60dD651892a61804A989eEF7bD63CBA0 with resolver resolver.eth"
    elems = encode_text(s)
    assert len(elems) == -(-len(s) // 31)
    assert elems[0] == int.from_bytes(s[:31].encode(), "little")
    assert decode_text(elems) == s


def test_decimal_string_elements():
    n = int.from_bytes(b"hello", "little")
    assert decode_text([str(n), "0", "0"]) == "hello"


def test_encode_text_capacity():
    assert len(encode_text("x" * 62, 2)) == 2
    with pytest.raises(EncodingError):
        encode_text("x" * 63, 2)


def test_nul_policies_differ_on_interior_padding():
    # "ab" then "cd" in separate elements leaves 29 NULs between them
    elems = [int.from_bytes(b"ab", "little"), int.from_bytes(b"cd", "little"), 0]
    assert decode_text(elems, "trailing") == "ab" + "\x00" * 29 + "cd"
    assert decode_text(elems, "all") == "abcd"


def test_nul_policies_agree_without_interior_nul():
    elems = encode_text("user@example.org", 4)
    assert decode_text(elems, "trailing") == decode_text(elems, "all") == "user@example.org"


def test_unknown_nul_policy():
    with pytest.raises(ValueError):
        decode_text([0], "none")  # type: ignore[arg-type]


def test_all_zero_elements_decode_to_empty():
    assert decode_text([0] * 9) == ""
    assert decode_text([]) == ""


def test_invalid_utf8():
    with pytest.raises(EncodingError) as ei:
        decode_text([0xFF])
    assert ei.value.code == "CLAIM/ENCODING"


def test_text_element_wider_than_31_bytes():
    with pytest.raises(EncodingError):
        decode_text([1 << 248])
    # exactly 31 bytes is fine
    assert decode_text([int.from_bytes(b"a" * 31, "little")]) == "a" * 31


@settings(max_examples=200)
@given(st.text(max_size=200).filter(lambda s: not s.endswith("\x00")))
def test_text_roundtrip_trailing(s):
    assert decode_text(encode_text(s)) == s


@settings(max_examples=200)
@given(st.text(max_size=200))
def test_text_roundtrip_all(s):
    assert decode_text(encode_text(s), "all") == s.replace("\x00", "")


@given(st.text(max_size=200))
def test_encoded_text_elements_are_field_elements(s):
    assert all(0 <= e < FIELD_MODULUS for e in encode_text(s))


# ---------------------------------------------------------------------------
# Bytes
# ---------------------------------------------------------------------------


def test_decode_bytes_big_endian_fixed_width():
    assert decode_bytes([1]) == b"\x00" * 31 + b"\x01"
    assert decode_bytes([1, 2], width=4) == b"\x00\x00\x00\x01\x00\x00\x00\x02"


def test_pubkey_hash_hex():
    h = "0ea9c777dc7110e5a9e89b13f0cfc540e3845ba120b2b6dc24024d61488d4788"
    assert decode_bytes([int(h, 16)]).hex() == h


def test_decode_bytes_width_overflow():
    with pytest.raises(EncodingError):
        decode_bytes([1 << 256])
    with pytest.raises(EncodingError):
        decode_bytes([256], width=1)


def test_encode_bytes_rejects_bad_length_and_large_chunk():
    with pytest.raises(EncodingError):
        encode_bytes(b"\x01" * 33)
    with pytest.raises(EncodingError):
        encode_bytes(b"\xff" * 32)


@given(st.binary(max_size=31 * 6).map(lambda b: b[: len(b) - len(b) % 31]))
def test_bytes_roundtrip_width_31(b):
    assert decode_bytes(encode_bytes(b, 31), 31) == b


@given(st.integers(0, FIELD_MODULUS - 1).map(lambda n: n.to_bytes(32, "big")))
def test_bytes_roundtrip_width_32(b):
    assert decode_bytes(encode_bytes(b)) == b


# ---------------------------------------------------------------------------
# Element literals
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("value, expected", [(0, 0), (7, 7), ("12", 12), ("042", 42)])
def test_to_element_accepts(value, expected):
    assert to_element(value) == expected


@pytest.mark.parametrize("value", [-1, "-1", "0x10", "1e3", "", " 42 ", "42\n", True, 1.5, None, "１２"])
def test_to_element_rejects(value):
    with pytest.raises(EncodingError):
        to_element(value)
