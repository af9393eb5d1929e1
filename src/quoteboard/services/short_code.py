# src/quoteboard/services/short_code.py
"""Public 5-digit codes used in quote permalinks.

Codes are derived from the opaque quote id and never stored. The mapping is a
classic 32-bit string hash folded onto 100,000 buckets, so it is deterministic
but not collision-free. There is no inverse: resolving a code means scanning
the visible quotes and re-encoding each one.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Final, Protocol, TypeVar

logger = logging.getLogger(__name__)

CODE_LENGTH: Final[int] = 5
CODE_SPACE: Final[int] = 10**CODE_LENGTH

_UINT32_MASK: Final[int] = 0xFFFFFFFF
_INT32_SIGN: Final[int] = 0x80000000


class _HasId(Protocol):
    id: str


RecordT = TypeVar("RecordT", bound=_HasId)


def _utf16_units(value: str) -> Iterable[int]:
    """Yield the UTF-16 code units of ``value`` (surrogate pairs included)."""
    raw = value.encode("utf-16-le", "surrogatepass")
    for offset in range(0, len(raw), 2):
        yield raw[offset] | (raw[offset + 1] << 8)


def string_hash(value: str) -> int:
    """Return the signed 32-bit rolling hash ``h = h*31 + unit`` of ``value``."""
    h = 0
    for unit in _utf16_units(value):
        h = (h * 31 + unit) & _UINT32_MASK
    if h & _INT32_SIGN:
        h -= 1 << 32
    return h


def encode(record_id: str) -> str:
    """Return the 5-digit public code for a record id.

    Args:
        record_id: Opaque identifier assigned by the store.

    Returns:
        Zero-padded decimal string in ``"00000".."99999"``.
    """
    return f"{abs(string_hash(record_id)) % CODE_SPACE:0{CODE_LENGTH}d}"


def is_valid_code(code: str) -> bool:
    """Return True if ``code`` has the public code shape."""
    return len(code) == CODE_LENGTH and code.isascii() and code.isdigit()


def resolve(code: str, candidates: Iterable[RecordT]) -> RecordT | None:
    """Return the first candidate whose id encodes to ``code``.

    The whole candidate set is scanned so that collisions can be reported;
    the first match in scan order is returned regardless.
    """
    if not is_valid_code(code):
        return None

    match: RecordT | None = None
    collisions = 0
    for candidate in candidates:
        if encode(candidate.id) != code:
            continue
        if match is None:
            match = candidate
        else:
            collisions += 1

    if collisions:
        logger.warning(
            "Public code %s matches %d records; resolving to %s",
            code,
            collisions + 1,
            match.id if match is not None else None,
        )
    return match


def permalink(record_id: str, base_url: str) -> str:
    """Return the shareable URL for a record."""
    return f"{base_url.rstrip('/')}/quote/{encode(record_id)}"
