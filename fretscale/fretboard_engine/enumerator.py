"""Sequence Enumerator — every way to play a scale on the fretboard.

The enumeration for ``n`` pitches is the cross-product of the candidate
positions of the first pitch with the enumeration of the remaining
``n - 1`` pitches. The tail is computed once and shared by every head
candidate; each combination costs exactly one tuple prepend.

If any pitch has no candidate position the whole result is empty.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .instrument import Pitch, Position
from .position_table import Fretboard

logger = logging.getLogger(__name__)

# ── Public types ──────────────────────────────────────────────
Fingering = tuple[Position, ...]


def enumerate_fingerings(scale: Sequence[Pitch], fretboard: Fretboard) -> list[Fingering]:
    """Enumerate all fingerings realising *scale* in order.

    Args:
        scale: Ordered pitches, typically from :func:`scale.get_scale`.
        fretboard: Layout and inverse index to draw candidates from.

    Returns:
        List of fingerings, one position per pitch. Ordered by the first
        pitch's candidates (index order), then recursively by the rest.
        Empty when *scale* is empty or any pitch is unplayable.
    """
    if not scale:
        return []
    fingerings = _cross_product(tuple(scale), fretboard)
    logger.debug("Enumerated %d fingerings for %s", len(fingerings), " ".join(map(str, scale)))
    return fingerings


def _cross_product(scale: tuple[Pitch, ...], fretboard: Fretboard) -> list[Fingering]:
    head, tail = scale[0], scale[1:]
    candidates = fretboard.positions_of(head)
    if not candidates:
        return []
    if not tail:
        return [(candidate,) for candidate in candidates]

    sub_fingerings = _cross_product(tail, fretboard)
    if not sub_fingerings:
        return []
    return [(candidate,) + sub for candidate in candidates for sub in sub_fingerings]
