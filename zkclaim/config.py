"""
zkclaim configuration loader.

Layered config with clear precedence:
    1) Explicit overrides passed to `load()` (highest)
    2) Environment variables (ZKCLAIM_*)
    3) Config file (TOML or JSON)
    4) Built-in defaults (lowest)

Keys
----
  layout_version   name of a built-in layout (default "ens-claim-v1")
  layout_file      path to a layout description; wins over layout_version
  nul_policy       "trailing" | "all" NUL stripping for text fields
  log_level        DEBUG | INFO | WARNING | ERROR
  log_format       "json" | "text" | "" (auto: json unless stderr is a TTY)

A config file may hold these keys at top level or under a [zkclaim] table.
"""

from __future__ import annotations

import json
import os
import tomllib
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .claim.field_codec import NUL_POLICIES
from .claim.layout import DEFAULT_LAYOUT_VERSION, Layout, get_layout, load_layout
from .errors import ConfigError

ENV_PREFIX = "ZKCLAIM_"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
_LOG_FORMATS = ("", "json", "text")


def _expand(p: str | Path) -> Path:
    return Path(p).expanduser().resolve()


@dataclass(frozen=True)
class ClaimConfig:
    layout_version: str = DEFAULT_LAYOUT_VERSION
    layout_file: Optional[Path] = None
    nul_policy: str = "trailing"
    log_level: str = "INFO"
    log_format: str = ""

    def validate(self) -> None:
        if self.nul_policy not in NUL_POLICIES:
            raise ConfigError(
                f"nul_policy must be one of {', '.join(NUL_POLICIES)}",
                nul_policy=self.nul_policy,
            )
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigError("unknown log level", log_level=self.log_level)
        if self.log_format not in _LOG_FORMATS:
            raise ConfigError("log_format must be json or text", log_format=self.log_format)
        if self.layout_file is None:
            get_layout(self.layout_version)

    def layout(self) -> Layout:
        if self.layout_file is not None:
            return load_layout(self.layout_file)
        return get_layout(self.layout_version)

    @property
    def json_logs(self) -> Optional[bool]:
        return None if not self.log_format else self.log_format == "json"

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["layout_file"] = str(self.layout_file) if self.layout_file else None
        return d


# ------------------------------
# File loader (TOML / JSON)
# ------------------------------


def _load_file(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        raise ConfigError(f"config file not found: {path}", path=str(path))
    suffix = path.suffix.lower()
    try:
        with path.open("rb") as f:
            if suffix in {".toml", ".tml"}:
                data = tomllib.load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise ConfigError(
                    f"unsupported config format: {suffix}. Use .toml or .json",
                    path=str(path),
                )
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        raise ConfigError(f"cannot parse config file {path}: {e}", path=str(path)) from e
    if not isinstance(data, dict):
        raise ConfigError("config file must hold a table/object", path=str(path))
    section = data.get("zkclaim", data)
    return dict(section) if isinstance(section, dict) else {}


def _from_env() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key in ("layout_version", "layout_file", "nul_policy", "log_level", "log_format"):
        v = os.environ.get(ENV_PREFIX + key.upper())
        if v is not None and v.strip() != "":
            out[key] = v.strip()
    return out


# ------------------------------
# Main loader
# ------------------------------


def load(config_file: Optional[str | Path] = None, **overrides: Any) -> ClaimConfig:
    """
    Load configuration. Precedence: overrides > env > file > defaults.
    Overrides whose value is None are ignored.
    """
    base: Dict[str, Any] = asdict(ClaimConfig())

    if config_file:
        base.update(_load_file(_expand(config_file)))

    base.update(_from_env())
    base.update({k: v for k, v in overrides.items() if v is not None})

    unknown = sorted(set(base) - set(asdict(ClaimConfig())))
    if unknown:
        raise ConfigError("unknown configuration keys", keys=unknown)

    layout_file = base.get("layout_file")
    cfg = ClaimConfig(
        layout_version=str(base["layout_version"]),
        layout_file=_expand(layout_file) if layout_file else None,
        nul_policy=str(base["nul_policy"]).strip().lower(),
        log_level=str(base["log_level"]).strip().upper(),
        log_format=str(base["log_format"] or "").strip().lower(),
    )
    cfg.validate()
    return cfg


__all__ = ["ClaimConfig", "ENV_PREFIX", "load"]
