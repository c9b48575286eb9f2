"""
zkclaim.claim.public_inputs
===========================

`PublicInputView`: typed, offset-addressed read access over the public-input
vector of a claim proof.

The view owns an immutable tuple of field elements whose length is fixed by
the layout contract (60 for ``ens-claim-v1``). Named fields are decoded on
demand with the codec matching their kind.
"""

from __future__ import annotations

from typing import Iterator, Sequence, Tuple, Union, overload

from ..errors import EncodingError, MalformedInput, RangeError
from .field_codec import (FIELD_MODULUS, NUL_POLICIES, ElementLike, NulPolicy,
                          decode_bytes, decode_text, to_element)
from .layout import COMMAND, EMAIL, ENS_CLAIM_V1, PUBKEY_HASH, Layout


class PublicInputView(Sequence[int]):
    """Read-only view over exactly `layout.size` field elements."""

    __slots__ = ("_elements", "_layout", "_nul_policy")

    def __init__(
        self,
        elements: Sequence[ElementLike],
        layout: Layout = ENS_CLAIM_V1,
        *,
        nul_policy: NulPolicy = "trailing",
    ) -> None:
        if nul_policy not in NUL_POLICIES:
            raise ValueError(f"unknown nul_policy {nul_policy!r}")
        if len(elements) != layout.size:
            raise MalformedInput(
                f"expected {layout.size} public inputs, got {len(elements)}",
                layout=layout.version,
                expected=layout.size,
                got=len(elements),
            )
        values = []
        for i, e in enumerate(elements):
            try:
                n = to_element(e)
            except EncodingError as err:
                raise MalformedInput(
                    f"public input #{i} is not a field element", index=i, reason=err.message
                ) from err
            if n >= FIELD_MODULUS:
                raise MalformedInput(
                    f"public input #{i} is not below the field modulus", index=i
                )
            values.append(n)
        self._elements: Tuple[int, ...] = tuple(values)
        self._layout = layout
        self._nul_policy: NulPolicy = nul_policy

    # -- sequence protocol ----------------------------------------------------

    def __len__(self) -> int:
        return len(self._elements)

    @overload
    def __getitem__(self, index: int) -> int: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[int, ...]: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[int, Tuple[int, ...]]:
        return self._elements[index]

    def __iter__(self) -> Iterator[int]:
        return iter(self._elements)

    def __repr__(self) -> str:
        return f"PublicInputView(layout={self._layout.version!r}, n={len(self)})"

    @property
    def layout(self) -> Layout:
        return self._layout

    @property
    def nul_policy(self) -> NulPolicy:
        return self._nul_policy

    def as_ints(self) -> Tuple[int, ...]:
        return self._elements

    def as_strings(self) -> list[str]:
        """Decimal-string form, as snarkjs writes public.json."""
        return [str(e) for e in self._elements]

    # -- addressed access -----------------------------------------------------

    def slice(self, offset: int, count: int) -> Tuple[int, ...]:
        if offset < 0 or count < 0 or offset + count > len(self._elements):
            raise RangeError(offset, count, len(self._elements), layout=self._layout.version)
        return self._elements[offset : offset + count]

    def read(self, name: str) -> Union[str, bytes]:
        """Decode a named layout field according to its kind."""
        fs = self._layout.field(name)
        try:
            elements = self.slice(fs.offset, fs.count)
            if fs.kind == "bytes":
                return decode_bytes(elements, fs.width)
            return decode_text(elements, self._nul_policy)
        except (RangeError, EncodingError) as e:
            e.with_context(field=name)
            raise

    def email(self) -> str:
        return self.read(EMAIL)  # type: ignore[return-value]

    def command(self) -> str:
        return self.read(COMMAND)  # type: ignore[return-value]

    def pubkey_hash(self) -> bytes:
        return self.read(PUBKEY_HASH)  # type: ignore[return-value]

    def pubkey_hash_hex(self) -> str:
        return self.pubkey_hash().hex()


def as_view(
    inputs: Union[PublicInputView, Sequence[ElementLike]],
    layout: Layout | None = None,
    *,
    nul_policy: NulPolicy | None = None,
) -> PublicInputView:
    """Return `inputs` as a PublicInputView, building one from a raw sequence."""
    if isinstance(inputs, PublicInputView):
        if (layout is None or layout == inputs.layout) and (
            nul_policy is None or nul_policy == inputs.nul_policy
        ):
            return inputs
        layout = layout or inputs.layout
        nul_policy = nul_policy or inputs.nul_policy
    return PublicInputView(
        inputs, layout or ENS_CLAIM_V1, nul_policy=nul_policy or "trailing"
    )


__all__ = ["PublicInputView", "as_view"]
