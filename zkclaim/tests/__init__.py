"""
zkclaim.tests helpers

Utilities and environment defaults shared by zkclaim tests.

Exports:
- TEST_ROOT
- write_json(path, obj) -> Path
- env_flag(name, default=False) -> bool
- configure_test_logging() -> None

Environment toggles:
- ZKCLAIM_TEST_LOG=1   → enable DEBUG logging for zkclaim.*
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

TEST_ROOT: Path = Path(__file__).resolve().parent


def write_json(path: Path, obj: Any) -> Path:
    path.write_text(json.dumps(obj, indent=2), encoding="utf-8")
    return path


def env_flag(name: str, default: bool = False) -> bool:
    """
    Read an environment flag in a truthy/falsey way: "1", "true", "yes" → True.
    """
    v = os.getenv(name)
    if v is None:
        return default
    return str(v).strip().lower() in {"1", "true", "yes", "on"}


def configure_test_logging(level: int | None = None) -> None:
    """
    Configure basic logging for zkclaim.* loggers when ZKCLAIM_TEST_LOG is set.
    """
    if level is None:
        level = logging.DEBUG
    if env_flag("ZKCLAIM_TEST_LOG", False):
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        logging.getLogger("zkclaim").setLevel(level)


configure_test_logging()

__all__ = [
    "TEST_ROOT",
    "write_json",
    "env_flag",
    "configure_test_logging",
]
