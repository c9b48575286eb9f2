"""
zkclaim.claim: public-input contract and claim validation.

- field_codec    bytes ⇄ BN254 field elements (31-byte LE text, fixed-width BE hashes)
- layout         versioned (offset, count, kind) table of named public-input fields
- public_inputs  PublicInputView: fixed-length, offset-addressed, read-only
- command        grammar of "Claim ENS name for address ... with resolver ..."
- validator      ordered email → command → pubkey hash → proof pipeline
"""

from __future__ import annotations

from .command import ActionDescriptor, parse_command, render_command
from .field_codec import decode_bytes, decode_text, encode_bytes, encode_text
from .layout import ENS_CLAIM_V1, LAYOUTS, FieldSpec, Layout, get_layout, load_layout
from .public_inputs import PublicInputView
from .validator import ClaimStage, validate_direct, validate_from_command

__all__ = [
    "ActionDescriptor",
    "parse_command",
    "render_command",
    "encode_text",
    "decode_text",
    "encode_bytes",
    "decode_bytes",
    "FieldSpec",
    "Layout",
    "ENS_CLAIM_V1",
    "LAYOUTS",
    "get_layout",
    "load_layout",
    "PublicInputView",
    "ClaimStage",
    "validate_direct",
    "validate_from_command",
]
