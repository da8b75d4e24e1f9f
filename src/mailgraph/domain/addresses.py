"""Recover address/display-name pairs from malformed mail header fields.

Upstream recipients arrive as ``{address, name}`` pairs, but either side can
hold several concatenated addresses (``"a@x.com, b@y.com"``), quoted strings
with embedded commas, or no address at all. The resolver matches an
RFC 5322 approximation against both fields and decides how names can be
assigned to the matches.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from logging import getLogger
from typing import Final

log = getLogger(__name__)

_LOCAL_PART = r"[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
_DOMAIN_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
_HOST = rf"{_DOMAIN_LABEL}(?:\.{_DOMAIN_LABEL})+"

ADDRESS_PATTERN: Final[re.Pattern[str]] = re.compile(rf"{_LOCAL_PART}@{_HOST}")
MALFORMED_PREFIX: Final[str] = "'"


@dataclass(frozen=True, slots=True)
class ResolvedAddress:
    address: str
    name: str


def find_addresses(text: str | None) -> list[str]:
    """Return every address-shaped substring of ``text`` in order."""

    if not text:
        return []
    return ADDRESS_PATTERN.findall(text)


def resolve_addresses(address: str | None, name: str | None) -> list[ResolvedAddress]:
    """Split one raw recipient into zero or more clean address/name pairs."""

    address_matches = find_addresses(address)
    name_matches = find_addresses(name)

    if address_matches and name_matches:
        # no reliable name survives a many-to-many split
        candidates = _self_named([*address_matches, *name_matches])
    elif len(address_matches) == 1:
        candidates = [ResolvedAddress(address=address_matches[0], name=name or address_matches[0])]
    elif address_matches:
        candidates = _self_named(address_matches)
    elif name_matches:
        candidates = _self_named(name_matches)
    else:
        log.warning("No email address found in recipient address=%r name=%r", address, name)
        return []

    resolved: list[ResolvedAddress] = []
    for candidate in candidates:
        if candidate.address.startswith(MALFORMED_PREFIX):
            log.debug("Dropping malformed address %r", candidate.address)
            continue
        if candidate in resolved:
            continue
        resolved.append(candidate)
    return resolved


def domain_from_address(address: str) -> str | None:
    """Return the registrable-looking domain of ``address``.

    Only the two rightmost host labels are kept, so ``user@mail.example.com``
    becomes ``example.com``. Multi-label public suffixes are not special-cased:
    ``user@foo.co.uk`` yields ``co.uk``. Returns ``None`` when there is no host.
    """

    parts = address.split("@")
    if len(parts) < 2:  # noqa: PLR2004
        return None
    host = parts[1].strip().strip(".")
    if not host:
        return None
    labels = [label for label in host.split(".") if label]
    return ".".join(labels[-2:]).lower()


def _self_named(addresses: list[str]) -> list[ResolvedAddress]:
    return [ResolvedAddress(address=value, name=value) for value in addresses]
