"""Position Table Builder — map every fretboard position to its pitch.

Builds, once per process:
    - the **layout**: total mapping ``(line, slot) → Pitch``
    - the **inverse index**: ``Pitch → tuple[Position, ...]`` for every
      pitch in the modelled octave range (inclusive on both ends)

Both tables are read-only after construction. A pitch outside the
modelled range simply has no positions; lookups never raise.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .instrument import CANONICAL_NOTES, Instrument, Pitch, Position, STANDARD_GUITAR

logger = logging.getLogger(__name__)

# ── Modelled octave range ─────────────────────────────────────
MIN_OCTAVE: int = 2
MAX_OCTAVE: int = 6


@dataclass(frozen=True)
class Fretboard:
    """Layout and inverse index of one instrument.

    Use :func:`build_fretboard` rather than constructing this directly.
    """

    instrument: Instrument
    layout: dict[Position, Pitch] = field(repr=False)
    index: dict[Pitch, tuple[Position, ...]] = field(repr=False)

    @property
    def num_strings(self) -> int:
        return self.instrument.num_strings

    @property
    def num_frets(self) -> int:
        return self.instrument.num_frets

    def pitch_at(self, position: Position) -> Pitch:
        """Pitch sounded at *position*.

        Raises:
            KeyError: If *position* lies outside the instrument.
        """
        return self.layout[position]

    def positions_of(self, pitch: Pitch) -> tuple[Position, ...]:
        """Every position producing *pitch*, ordered by (line, slot).

        Pitches outside the modelled range return an empty tuple.
        """
        return self.index.get(pitch, ())

    def format_table(self) -> str:
        """Tab-separated dump of the layout, one row per string."""
        rows = []
        for line in range(self.num_strings):
            cells = [str(self.layout[Position(line, slot)]) for slot in range(self.num_frets)]
            rows.append("\t".join(cells))
        return "\n".join(rows)


def build_fretboard(
    instrument: Instrument = STANDARD_GUITAR,
    min_octave: int = MIN_OCTAVE,
    max_octave: int = MAX_OCTAVE,
) -> Fretboard:
    """Derive the layout and inverse index for *instrument*.

    For fret ``f`` on a string whose open pitch sits at chromatic index
    ``i``, the name is ``CANONICAL_NOTES[(i + f) % 12]`` and the octave is
    ``open_octave + (i + f) // 12``.

    Args:
        instrument: Open-string pitches and fret count.
        min_octave: Lowest octave keyed in the inverse index.
        max_octave: Highest octave keyed in the inverse index.

    Returns:
        A read-only :class:`Fretboard`.
    """
    layout: dict[Position, Pitch] = {}
    for line, open_pitch in enumerate(instrument.open_pitches):
        for slot in range(instrument.num_frets):
            layout[Position(line, slot)] = open_pitch.transpose(slot)

    # Insertion order of ``layout`` is (line, slot), so every candidate
    # list below is already sorted.
    index: dict[Pitch, list[Position]] = {
        Pitch(name, octave): []
        for octave in range(min_octave, max_octave + 1)
        for name in CANONICAL_NOTES
    }
    for position, pitch in layout.items():
        if pitch in index:
            index[pitch].append(position)
        else:
            logger.debug("Pitch %s at %s lies outside octaves %d..%d", pitch, position, min_octave, max_octave)

    logger.debug(
        "Built fretboard: %d strings x %d frets, %d indexed pitches",
        instrument.num_strings,
        instrument.num_frets,
        len(index),
    )
    return Fretboard(
        instrument=instrument,
        layout=layout,
        index={pitch: tuple(positions) for pitch, positions in index.items()},
    )
