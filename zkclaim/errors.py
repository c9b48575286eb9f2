"""
zkclaim.errors
--------------

A small, consistent error system for claim validation.

Design goals
------------
- One root `ClaimError` with machine-friendly `code` and optional `data`.
- One concrete subclass per failure kind so callers can tell them apart.
- Safe JSON representation (`to_dict`) suitable for logs and the CLI.
- Every kind maps to a distinct process exit status (`EXIT_CODES`).

Nothing at this layer is retryable: a failed validation is terminal for the
call and must be re-invoked with corrected inputs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class ClaimErrorCode(str, Enum):
    # Public-input vector / codec
    MALFORMED_INPUT = "CLAIM/MALFORMED_INPUT"
    RANGE = "CLAIM/RANGE"
    ENCODING = "CLAIM/ENCODING"

    # Command grammar
    INVALID_COMMAND = "CLAIM/INVALID_COMMAND"

    # Decoded fact vs caller expectation
    EMAIL_MISMATCH = "CLAIM/EMAIL_MISMATCH"
    COMMAND_MISMATCH = "CLAIM/COMMAND_MISMATCH"
    PUBKEY_HASH_MISMATCH = "CLAIM/PUBKEY_HASH_MISMATCH"

    # Proof check
    PROOF_REJECTED = "CLAIM/PROOF_REJECTED"
    VERIFICATION = "CLAIM/VERIFICATION_ERROR"

    # Outer layers
    LOADER = "CLAIM/LOADER"
    CONFIG = "CLAIM/CONFIG"


@dataclass(eq=False)
class ClaimError(Exception):
    """
    Root error for zkclaim.

    Attributes
    ----------
    code: str
        Machine-stable error code (see ClaimErrorCode).
    message: str
        Human hint suitable for logs.
    data: dict
        Machine data (field name, expected/got values, pipeline stage).
    cause: Optional[BaseException]
        Wrapped original exception; not part of equality.
    """

    code: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)
    cause: Optional[BaseException] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        super().__init__(f"{self.code}: {self.message}")
        if self.cause is not None:
            self.__cause__ = self.cause

    @property
    def kind(self) -> str:
        """Short kind name, e.g. ``EmailMismatch``."""
        return type(self).__name__

    def with_context(self, **ctx: Any) -> "ClaimError":
        """Merge extra context into `data` in place and return self."""
        for k, v in ctx.items():
            self.data[k] = _coerce_json(v)
        return self

    def to_dict(self, include_cause: bool = False) -> Dict[str, Any]:
        """JSON-safe shape suitable for logs and CLI output."""
        out = {
            "kind": self.kind,
            "code": str(getattr(self.code, "value", self.code)),
            "message": self.message,
            "data": _coerce_json(self.data),
        }
        if include_cause and self.cause is not None:
            out["cause"] = {
                "type": type(self.cause).__name__,
                "message": str(self.cause),
            }
        return out

    def __str__(self) -> str:
        parts = [self.message]
        if self.data:
            preview = ", ".join(f"{k}={_preview(v)}" for k, v in self.data.items())
            parts.append(f"[{preview}]")
        return " ".join(parts)


class MalformedInput(ClaimError):
    def __init__(self, message="malformed public inputs", **data: Any) -> None:
        super().__init__(
            code=ClaimErrorCode.MALFORMED_INPUT, message=message, data=_jsonmap(data)
        )


class RangeError(ClaimError):
    def __init__(self, offset: int, count: int, length: int, **data: Any) -> None:
        super().__init__(
            code=ClaimErrorCode.RANGE,
            message=f"range [{offset}, {offset}+{count}) outside public inputs of length {length}",
            data=_jsonmap({"offset": offset, "count": count, "length": length, **data}),
        )


class EncodingError(ClaimError):
    def __init__(self, message="field element decoding failed", **data: Any) -> None:
        super().__init__(
            code=ClaimErrorCode.ENCODING, message=message, data=_jsonmap(data)
        )


class InvalidCommand(ClaimError):
    def __init__(self, command: str) -> None:
        super().__init__(
            code=ClaimErrorCode.INVALID_COMMAND,
            message="invalid command",
            data={"command": command},
        )


class _Mismatch(ClaimError):
    """Decoded public fact disagrees with what the caller declared."""

    _code: ClaimErrorCode
    _subject: str

    def __init__(self, expected: str, got: str, **data: Any) -> None:
        super().__init__(
            code=self._code,
            message=f"{self._subject} mismatch",
            data=_jsonmap({"field": self._subject, "expected": expected, "got": got, **data}),
        )

    @property
    def expected(self) -> str:
        return self.data["expected"]

    @property
    def got(self) -> str:
        return self.data["got"]


class EmailMismatch(_Mismatch):
    _code = ClaimErrorCode.EMAIL_MISMATCH
    _subject = "email"


class CommandMismatch(_Mismatch):
    _code = ClaimErrorCode.COMMAND_MISMATCH
    _subject = "command"


class PubkeyHashMismatch(_Mismatch):
    _code = ClaimErrorCode.PUBKEY_HASH_MISMATCH
    _subject = "pubkey_hash"


class ProofRejected(ClaimError):
    def __init__(self, message="proof verification failed", **data: Any) -> None:
        super().__init__(
            code=ClaimErrorCode.PROOF_REJECTED, message=message, data=_jsonmap(data)
        )


class VerificationError(ClaimError):
    def __init__(
        self, cause: BaseException, message="error while verifying the proof", **data: Any
    ) -> None:
        super().__init__(
            code=ClaimErrorCode.VERIFICATION,
            message=f"{message}: {cause}",
            data=_jsonmap(data),
            cause=cause,
        )


class LoaderError(ClaimError):
    def __init__(
        self,
        artifact: str,
        source: str,
        cause: Optional[BaseException] = None,
        **data: Any,
    ) -> None:
        msg = f"reading {artifact} file: {source}"
        if cause is not None:
            msg += f" ({cause})"
        super().__init__(
            code=ClaimErrorCode.LOADER,
            message=msg,
            data=_jsonmap({"artifact": artifact, "source": source, **data}),
            cause=cause,
        )


class ConfigError(ClaimError):
    def __init__(self, message="invalid configuration", **data: Any) -> None:
        super().__init__(
            code=ClaimErrorCode.CONFIG, message=message, data=_jsonmap(data)
        )


# ---------------------------------------------------------------------------
# Exit status mapping (CLI)
# ---------------------------------------------------------------------------

EXIT_CODES: Mapping[ClaimErrorCode, int] = {
    ClaimErrorCode.PROOF_REJECTED: 1,
    ClaimErrorCode.CONFIG: 2,
    ClaimErrorCode.LOADER: 3,
    ClaimErrorCode.MALFORMED_INPUT: 4,
    ClaimErrorCode.RANGE: 5,
    ClaimErrorCode.ENCODING: 6,
    ClaimErrorCode.INVALID_COMMAND: 7,
    ClaimErrorCode.EMAIL_MISMATCH: 8,
    ClaimErrorCode.COMMAND_MISMATCH: 9,
    ClaimErrorCode.PUBKEY_HASH_MISMATCH: 10,
    ClaimErrorCode.VERIFICATION: 11,
}


def exit_code_for(err: ClaimError) -> int:
    """Process exit status for an error; 70 (internal) for unknown codes."""
    try:
        return EXIT_CODES[ClaimErrorCode(err.code)]
    except ValueError:
        return 70


def _jsonmap(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: _coerce_json(v) for k, v in data.items()}


def _coerce_json(v: Any) -> Any:
    # Keep JSON primitives; stringify the rest; hex-encode bytes.
    if isinstance(v, Enum):
        return v.value
    if v is None or isinstance(v, (bool, int, float, str)):
        return v
    if isinstance(v, (bytes, bytearray)):
        return v.hex()
    if isinstance(v, (list, tuple)):
        return [_coerce_json(i) for i in v]
    if isinstance(v, dict):
        return {str(k): _coerce_json(i) for k, i in v.items()}
    return str(v)


def _preview(v: Any, limit: int = 120) -> str:
    s = str(_coerce_json(v))
    return s if len(s) <= limit else s[:limit] + "…"


__all__ = [
    "ClaimErrorCode",
    "ClaimError",
    "MalformedInput",
    "RangeError",
    "EncodingError",
    "InvalidCommand",
    "EmailMismatch",
    "CommandMismatch",
    "PubkeyHashMismatch",
    "ProofRejected",
    "VerificationError",
    "LoaderError",
    "ConfigError",
    "EXIT_CODES",
    "exit_code_for",
]
