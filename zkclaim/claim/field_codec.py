"""
zkclaim.claim.field_codec
=========================

Byte-packing between byte strings and BN254 scalar-field elements.

Two packings are used by the email circuits:

Text fields
-----------
Each field element carries up to 31 bytes of a longer string as a base-256
**little-endian** integer (31 bytes keeps the value below the ~254-bit
modulus). Chunks are concatenated least-significant element first; the
final chunk is zero-padded on the high end.

Hash fields
-----------
One or more elements rendered as fixed-width **big-endian** buffers and
concatenated. No byte is padding.

Public API
----------
- encode_text(data, count=None) -> list[int]
- decode_text(elements, nul_policy="trailing") -> str
- encode_bytes(data, width=32) -> list[int]
- decode_bytes(elements, width=32) -> bytes
- to_element(value, width=None) -> int
"""

from __future__ import annotations

from typing import Iterable, List, Literal, Optional, Sequence, Union

from py_ecc.optimized_bn128 import curve_order

from ..errors import EncodingError

FIELD_MODULUS: int = int(curve_order)

TEXT_CHUNK_BYTES = 31
HASH_CHUNK_BYTES = 32

NulPolicy = Literal["trailing", "all"]
NUL_POLICIES = ("trailing", "all")

ElementLike = Union[int, str]


def to_element(value: ElementLike, width: Optional[int] = None) -> int:
    """
    Validate an integer literal (int or decimal string) as a non-negative
    integer. With `width`, the value must also fit in `width` bytes.
    """
    if isinstance(value, bool):
        raise EncodingError("field element must be an integer", value=value)
    if isinstance(value, int):
        n = value
    elif isinstance(value, str):
        if not value.isdigit() or not value.isascii():
            raise EncodingError("field element is not a decimal literal", value=value)
        n = int(value, 10)
    else:
        raise EncodingError(
            "field element must be int or decimal string", type=type(value).__name__
        )
    if n < 0:
        raise EncodingError("field element is negative", value=n)
    if width is not None and n.bit_length() > 8 * width:
        raise EncodingError(
            f"field element does not fit in {width} bytes", value=n, width=width
        )
    return n


def _chunks(data: bytes, size: int) -> Iterable[bytes]:
    for i in range(0, len(data), size):
        yield data[i : i + size]


# ---------------------------
# Text (31-byte little-endian)
# ---------------------------


def encode_text(data: Union[bytes, str], count: Optional[int] = None) -> List[int]:
    """
    Pack `data` into 31-byte little-endian field elements.

    With `count`, pad with zero elements to exactly `count`; raises
    EncodingError when `data` needs more than `count` elements.
    """
    raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    out = [int.from_bytes(c, "little") for c in _chunks(raw, TEXT_CHUNK_BYTES)]
    if count is not None:
        if len(out) > count:
            raise EncodingError(
                "text does not fit in the field range",
                length=len(raw),
                capacity=count * TEXT_CHUNK_BYTES,
            )
        out.extend([0] * (count - len(out)))
    return out


def decode_text(
    elements: Sequence[ElementLike], nul_policy: NulPolicy = "trailing"
) -> str:
    """
    Render each element as a 31-byte little-endian buffer, concatenate, strip
    NUL bytes and decode as UTF-8.

    nul_policy:
      "trailing"  strip only the trailing run of 0x00 (padding)
      "all"       strip every 0x00 anywhere in the concatenation
    """
    if nul_policy not in NUL_POLICIES:
        raise ValueError(f"unknown nul_policy {nul_policy!r}")
    buf = b"".join(
        to_element(e, TEXT_CHUNK_BYTES).to_bytes(TEXT_CHUNK_BYTES, "little")
        for e in elements
    )
    if nul_policy == "all":
        buf = buf.replace(b"\x00", b"")
    else:
        buf = buf.rstrip(b"\x00")
    try:
        return buf.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingError(
            "failed to convert bytes to string", reason=str(e), bytes=buf
        ) from e


# ---------------------------
# Bytes (fixed-width big-endian)
# ---------------------------


def encode_bytes(data: bytes, width: int = HASH_CHUNK_BYTES) -> List[int]:
    """Split `data` into `width`-byte big-endian field elements."""
    if width <= 0:
        raise ValueError("width must be positive")
    if len(data) % width:
        raise EncodingError(
            f"byte string length is not a multiple of {width}", length=len(data)
        )
    out = []
    for chunk in _chunks(bytes(data), width):
        n = int.from_bytes(chunk, "big")
        if n >= FIELD_MODULUS:
            raise EncodingError("chunk is not below the field modulus", chunk=chunk)
        out.append(n)
    return out


def decode_bytes(
    elements: Sequence[ElementLike], width: int = HASH_CHUNK_BYTES
) -> bytes:
    """Render each element as a `width`-byte big-endian buffer and concatenate."""
    if width <= 0:
        raise ValueError("width must be positive")
    return b"".join(to_element(e, width).to_bytes(width, "big") for e in elements)


__all__ = [
    "FIELD_MODULUS",
    "TEXT_CHUNK_BYTES",
    "HASH_CHUNK_BYTES",
    "NUL_POLICIES",
    "NulPolicy",
    "to_element",
    "encode_text",
    "decode_text",
    "encode_bytes",
    "decode_bytes",
]
