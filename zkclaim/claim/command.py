"""
zkclaim.claim.command
=====================

Grammar of the free-text claim instruction carried in the signed email, e.g.::

    Claim ENS name for address 0xafBD210c60dD651892a61804A989eEF7bD63CBA0 with resolver resolver.eth

Literal segments are case-sensitive; the address hex digits are not.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..errors import InvalidCommand

COMMAND_PREFIX = "Claim ENS name for address "
RESOLVER_INFIX = " with resolver "

COMMAND_RE = re.compile(
    re.escape(COMMAND_PREFIX)
    + r"(?P<address>0x[a-fA-F0-9]{40})"
    + re.escape(RESOLVER_INFIX)
    + r"(?P<resolver>\S+)"
)


def render_command(address: str, resolver: str) -> str:
    """Compose the canonical command string verbatim (no normalization)."""
    return f"{COMMAND_PREFIX}{address}{RESOLVER_INFIX}{resolver}"


@dataclass(frozen=True)
class ActionDescriptor:
    address: str
    resolver: str

    @property
    def command(self) -> str:
        return render_command(self.address, self.resolver)


def parse_command(text: str) -> ActionDescriptor:
    """Parse a whole command string; anything but an exact match is InvalidCommand."""
    m = COMMAND_RE.fullmatch(text)
    if m is None:
        raise InvalidCommand(text)
    return ActionDescriptor(address=m["address"], resolver=m["resolver"])


__all__ = [
    "COMMAND_PREFIX",
    "RESOLVER_INFIX",
    "COMMAND_RE",
    "ActionDescriptor",
    "render_command",
    "parse_command",
]
