# src/quoteboard/services/ads.py
"""Ad slot placement inside an assembled feed page."""

from __future__ import annotations

from collections.abc import Sized


def place_ads(items: Sized, frequency: int) -> list[int]:
    """Return the 0-based indices after which an ad placeholder renders.

    An ad follows every item whose 1-based position is a multiple of
    ``frequency``. A frequency of zero or less disables interleaving.

    Example:
        >>> place_ads(range(10), 3)
        [2, 5, 8]
    """
    if frequency <= 0:
        return []
    return [index for index in range(len(items)) if (index + 1) % frequency == 0]
