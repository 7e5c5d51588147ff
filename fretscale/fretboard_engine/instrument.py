"""Instrument Model — fixed description of the fretted instrument.

Holds the pure-data building blocks shared by every other engine module:
    - ``CANONICAL_NOTES``  : the 12-note chromatic alphabet (sharps only)
    - ``Pitch``            : named tone with an octave number
    - ``Position``         : (string line, fret slot) coordinate
    - ``Instrument``       : open-string pitches and fret count
    - ``SCALE_STEPS``      : semitone step patterns per scale type

Nothing in here is mutable; instruments are injected into the position
table builder rather than read from module globals.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple


# ── Chromatic alphabet ────────────────────────────────────────
CANONICAL_NOTES: tuple[str, ...] = (
    "C", "C#", "D", "D#",
    "E", "F", "F#", "G",
    "G#", "A", "A#", "B",
)
NUM_CANONICAL_NOTES: int = len(CANONICAL_NOTES)

# ── Step patterns (last step only closes the octave) ─────────
SCALE_STEPS: dict[str, tuple[int, ...]] = {
    "min": (2, 1, 2, 2, 1, 2, 2, 0),
    "maj": (2, 2, 1, 2, 2, 2, 1, 0),
}


class Pitch(NamedTuple):
    """A note name from :data:`CANONICAL_NOTES` plus an octave number."""

    name: str
    octave: int

    def __str__(self) -> str:
        return f"{self.name}{self.octave}"

    @property
    def canonical_index(self) -> int:
        """Position of ``name`` in the chromatic alphabet (C = 0)."""
        return CANONICAL_NOTES.index(self.name)

    def transpose(self, semitones: int) -> Pitch:
        """Return the pitch ``semitones`` above this one.

        The name wraps around the alphabet and the octave increments
        exactly when the wrap occurs.
        """
        offset = self.canonical_index + semitones
        return Pitch(
            CANONICAL_NOTES[offset % NUM_CANONICAL_NOTES],
            self.octave + offset // NUM_CANONICAL_NOTES,
        )


class Position(NamedTuple):
    """A 0-based (string line, fret slot) coordinate; slot 0 is open."""

    line: int
    slot: int


@dataclass(frozen=True)
class Instrument:
    """Open-string pitches (line 0 first) and number of frets per string."""

    open_pitches: tuple[Pitch, ...]
    num_frets: int

    @property
    def num_strings(self) -> int:
        return len(self.open_pitches)


STANDARD_GUITAR = Instrument(
    open_pitches=(
        Pitch("E", 4),
        Pitch("B", 3),
        Pitch("G", 3),
        Pitch("D", 3),
        Pitch("A", 2),
        Pitch("E", 2),
    ),
    num_frets=25,
)
