"""
Version of the zkclaim package.

Overridable at build time with the env var ZKCLAIM_VERSION.
"""

from __future__ import annotations

import os

__version__ = os.getenv("ZKCLAIM_VERSION", "0.1.0")


def runtime_banner() -> str:
    """Short human-readable banner for logs and `--version`."""
    from .verifiers.pairing_bn254 import BACKEND_NAME

    return f"zkclaim {__version__} (backend={BACKEND_NAME})"


__all__ = ["__version__", "runtime_banner"]
