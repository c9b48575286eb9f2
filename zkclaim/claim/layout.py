"""
zkclaim.claim.layout
====================

Layout contract of the public-input vector.

The positions of the application fields inside the proof's public inputs are
fixed by the circuit that produced the proof; they are not self-describing.
They live here as a versioned table so that a circuit revision is a data
change (a new `Layout`, or a layout description file) rather than a code
change.

Layout description file (JSON or TOML)::

    {
      "version": "ens-claim-v2",
      "size": 60,
      "fields": {
        "email":       {"offset": 51, "count": 9,  "kind": "text"},
        "command":     {"offset": 12, "count": 20, "kind": "text"},
        "pubkey_hash": {"offset": 9,  "count": 1,  "kind": "bytes", "width": 32}
      }
    }
"""

from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Literal, Mapping

from ..errors import ConfigError
from .field_codec import HASH_CHUNK_BYTES, TEXT_CHUNK_BYTES

FieldKind = Literal["text", "bytes"]

EMAIL = "email"
COMMAND = "command"
PUBKEY_HASH = "pubkey_hash"

REQUIRED_FIELDS = (EMAIL, COMMAND, PUBKEY_HASH)


@dataclass(frozen=True)
class FieldSpec:
    name: str
    offset: int
    count: int
    kind: FieldKind = "text"
    width: int = TEXT_CHUNK_BYTES

    @property
    def end(self) -> int:
        return self.offset + self.count


@dataclass(frozen=True)
class Layout:
    version: str
    size: int
    fields: Mapping[str, FieldSpec]

    def field(self, name: str) -> FieldSpec:
        try:
            return self.fields[name]
        except KeyError:
            raise ConfigError(
                f"layout {self.version} has no field {name!r}", layout=self.version
            ) from None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "size": self.size,
            "fields": {
                n: {"offset": f.offset, "count": f.count, "kind": f.kind, "width": f.width}
                for n, f in self.fields.items()
            },
        }


def _field_spec(name: str, offset: int, count: int, kind: FieldKind, width: int | None = None) -> FieldSpec:
    if width is None:
        width = TEXT_CHUNK_BYTES if kind == "text" else HASH_CHUNK_BYTES
    return FieldSpec(name=name, offset=offset, count=count, kind=kind, width=width)


# Email address is CEIL(256 bytes / 31 bytes per field) = 9 fields at 51..59.
ENS_CLAIM_V1 = Layout(
    version="ens-claim-v1",
    size=60,
    fields=MappingProxyType(
        {
            EMAIL: _field_spec(EMAIL, 51, 9, "text"),
            COMMAND: _field_spec(COMMAND, 12, 20, "text"),
            PUBKEY_HASH: _field_spec(PUBKEY_HASH, 9, 1, "bytes"),
        }
    ),
)

DEFAULT_LAYOUT_VERSION = ENS_CLAIM_V1.version

LAYOUTS: Mapping[str, Layout] = MappingProxyType({ENS_CLAIM_V1.version: ENS_CLAIM_V1})


def get_layout(version: str) -> Layout:
    try:
        return LAYOUTS[version]
    except KeyError:
        raise ConfigError(
            f"unknown layout version {version!r}", known=sorted(LAYOUTS)
        ) from None


def layout_from_dict(obj: Mapping[str, Any]) -> Layout:
    """Build a Layout from its dict description (see module docstring)."""
    try:
        version = str(obj["version"])
        size = int(obj["size"])
        raw_fields = obj["fields"]
        fields = {}
        for name, f in raw_fields.items():
            kind = f.get("kind", "text")
            if kind not in ("text", "bytes"):
                raise ConfigError(f"field {name!r} has unknown kind {kind!r}")
            fields[name] = _field_spec(
                name,
                int(f["offset"]),
                int(f["count"]),
                kind,
                int(f["width"]) if "width" in f else None,
            )
    except ConfigError:
        raise
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ConfigError(f"malformed layout description: {e}") from e

    if size <= 0:
        raise ConfigError("layout size must be positive", size=size)
    missing = [n for n in REQUIRED_FIELDS if n not in fields]
    if missing:
        raise ConfigError("layout is missing required fields", missing=missing)
    for f in fields.values():
        if f.offset < 0 or f.count <= 0 or f.width <= 0:
            raise ConfigError(
                f"field {f.name!r} has a bad offset/count/width",
                offset=f.offset,
                count=f.count,
                width=f.width,
            )
    return Layout(version=version, size=size, fields=MappingProxyType(fields))


def load_layout(path: str | Path) -> Layout:
    """Read a layout description from a .json or .toml file."""
    p = Path(path).expanduser()
    if not p.is_file():
        raise ConfigError(f"layout file not found: {p}", path=str(p))
    suffix = p.suffix.lower()
    try:
        with p.open("rb") as f:
            if suffix in (".toml", ".tml"):
                obj = tomllib.load(f)
            elif suffix == ".json":
                obj = json.load(f)
            else:
                raise ConfigError(
                    f"unsupported layout format: {suffix}. Use .toml or .json",
                    path=str(p),
                )
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        raise ConfigError(f"cannot parse layout file {p}: {e}", path=str(p)) from e
    return layout_from_dict(obj)


__all__ = [
    "FieldKind",
    "FieldSpec",
    "Layout",
    "EMAIL",
    "COMMAND",
    "PUBKEY_HASH",
    "ENS_CLAIM_V1",
    "DEFAULT_LAYOUT_VERSION",
    "LAYOUTS",
    "get_layout",
    "layout_from_dict",
    "load_layout",
]
