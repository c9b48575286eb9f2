from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from zkclaim.claim.field_codec import FIELD_MODULUS
from zkclaim.claim.layout import ENS_CLAIM_V1, layout_from_dict
from zkclaim.claim.public_inputs import PublicInputView, as_view
from zkclaim.errors import EncodingError, MalformedInput, RangeError
from zkclaim.tests.claim_data import (COMMAND, DKIM_HASH, EMAIL,
                                      build_public_inputs)


@pytest.fixture
def view() -> PublicInputView:
    return PublicInputView(build_public_inputs())


def test_named_fields(view):
    assert view.email() == EMAIL
    assert view.command() == COMMAND
    assert view.pubkey_hash_hex() == DKIM_HASH
    assert len(view.pubkey_hash()) == 32


def test_read_by_name(view):
    assert view.read("email") == EMAIL
    assert view.read("pubkey_hash") == bytes.fromhex(DKIM_HASH)


def test_decimal_strings_accepted():
    v = PublicInputView([str(x) for x in build_public_inputs()])
    assert v.email() == EMAIL
    assert v.as_strings()[9] == str(int(DKIM_HASH, 16))


def test_sequence_protocol(view):
    ints = build_public_inputs()
    assert len(view) == 60
    assert view[9] == ints[9]
    assert list(view) == ints
    assert view.as_ints() == tuple(ints)
    assert "ens-claim-v1" in repr(view)


@pytest.mark.parametrize("n", [0, 59, 61])
def test_wrong_length(n):
    with pytest.raises(MalformedInput) as ei:
        PublicInputView([0] * n)
    assert ei.value.data["expected"] == 60
    assert ei.value.data["got"] == n


@pytest.mark.parametrize("bad", [FIELD_MODULUS, FIELD_MODULUS + 1, -1, "abc", "0x01"])
def test_non_field_elements(bad):
    raw = build_public_inputs()
    raw[3] = bad
    with pytest.raises(MalformedInput) as ei:
        PublicInputView(raw)
    assert ei.value.data["index"] == 3


def test_largest_field_element_is_accepted():
    raw = build_public_inputs()
    raw[0] = FIELD_MODULUS - 1
    assert PublicInputView(raw)[0] == FIELD_MODULUS - 1


def test_unknown_nul_policy():
    with pytest.raises(ValueError):
        PublicInputView(build_public_inputs(), nul_policy="keep")  # type: ignore[arg-type]


def test_view_is_immutable(view):
    with pytest.raises(TypeError):
        view[0] = 1  # type: ignore[index]


@given(st.integers(-5, 70), st.integers(-5, 70))
def test_slice_bounds(offset, count):
    v = PublicInputView([0] * 60)
    if offset < 0 or count < 0 or offset + count > 60:
        with pytest.raises(RangeError):
            v.slice(offset, count)
    else:
        assert len(v.slice(offset, count)) == count


def test_field_outside_vector_is_range_error():
    layout = layout_from_dict(
        {
            "version": "short",
            "size": 10,
            "fields": {
                "email": {"offset": 5, "count": 9},
                "command": {"offset": 0, "count": 2},
                "pubkey_hash": {"offset": 2, "count": 1, "kind": "bytes"},
            },
        }
    )
    v = PublicInputView([0] * 10, layout)
    with pytest.raises(RangeError) as ei:
        v.email()
    assert ei.value.data["field"] == "email"
    assert v.command() == ""


def test_bad_utf8_is_tagged_with_field():
    raw = build_public_inputs()
    raw[51] = 0xFF
    with pytest.raises(EncodingError) as ei:
        PublicInputView(raw).email()
    assert ei.value.data["field"] == "email"


def test_as_view_reuses_and_rebuilds(view):
    assert as_view(view) is view
    assert as_view(view, ENS_CLAIM_V1, nul_policy="trailing") is view
    other = as_view(view, nul_policy="all")
    assert other is not view and other.nul_policy == "all"
    assert as_view(build_public_inputs()).email() == EMAIL
