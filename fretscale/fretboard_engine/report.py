"""Reports — flat artifacts accompanying the diagrams.

    - ``annotations.json`` per scale: ranked fingerings with pitches
    - ``rankings.csv`` per run: one row per ranked fingering (pandas)
    - ``scale.mid`` per scale (optional): the scale as a melody with the
      best fingering stored as ``S<string>F<fret>`` lyrics (pretty_midi)
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import pandas as pd
import pretty_midi

from .instrument import Pitch
from .position_table import Fretboard
from .scorer import ScoredFingering

# ── MIDI export constants ─────────────────────────────────────
_MIDI_PROGRAM: str = "Acoustic Guitar (nylon)"
_NOTE_SECONDS: float = 0.5
_VELOCITY: int = 90


@contextmanager
def atomic_write(target: Path) -> Iterator[Path]:
    """Yield a temporary path next to *target* and move it into place on success.

    On any error the temporary file is removed and *target* is left as it was.
    """
    fd, tmp_name = tempfile.mkstemp(suffix=f"{target.suffix}.tmp", dir=target.parent)
    os.close(fd)
    try:
        yield Path(tmp_name)
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def ranking_to_records(
    ranked: Sequence[ScoredFingering],
    fretboard: Fretboard,
) -> list[dict[str, Any]]:
    """Serialisable view of a ranking.

    Returns:
        One dict per fingering with ``rank``, ``score`` and ``positions``
        (each position carrying ``line``, ``slot`` and ``pitch``).
    """
    return [
        {
            "rank": rank,
            "score": scored.score,
            "positions": [
                {"line": pos.line, "slot": pos.slot, "pitch": str(fretboard.pitch_at(pos))}
                for pos in scored.fingering
            ],
        }
        for rank, scored in enumerate(ranked)
    ]


def write_annotations(
    ranked: Sequence[ScoredFingering],
    fretboard: Fretboard,
    output_dir: str | Path,
) -> Path:
    """Save ``annotations.json`` for one scale into *output_dir*."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / "annotations.json"
    with atomic_write(json_path) as tmp_path, open(tmp_path, "w", encoding="utf-8") as fh:
        json.dump(ranking_to_records(ranked, fretboard), fh, indent=2, ensure_ascii=False)
    return json_path


def rankings_frame(rankings: Iterable[tuple[str, Sequence[ScoredFingering]]]) -> pd.DataFrame:
    """Tabulate ``(label, ranking)`` pairs.

    Positions are flattened to ``"line:slot"`` tokens separated by spaces.
    """
    rows = [
        {
            "label": label,
            "rank": rank,
            "score": scored.score,
            "positions": " ".join(f"{pos.line}:{pos.slot}" for pos in scored.fingering),
        }
        for label, ranked in rankings
        for rank, scored in enumerate(ranked)
    ]
    return pd.DataFrame(rows, columns=["label", "rank", "score", "positions"])


def write_rankings_csv(
    rankings: Iterable[tuple[str, Sequence[ScoredFingering]]],
    output_dir: str | Path,
) -> Path:
    """Save ``rankings.csv`` for a whole run into *output_dir*."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    csv_path = output_dir / "rankings.csv"
    with atomic_write(csv_path) as tmp_path:
        rankings_frame(rankings).to_csv(tmp_path, index=False)
    return csv_path


def scale_to_midi(scale: Sequence[Pitch], best: ScoredFingering | None = None) -> pretty_midi.PrettyMIDI:
    """Build a one-track melody playing *scale* in order.

    When *best* is given each note gets a ``S<string>F<fret>`` lyric,
    with 1-based string numbers as drawn on the diagrams.
    """
    midi = pretty_midi.PrettyMIDI()
    instrument = pretty_midi.Instrument(program=pretty_midi.instrument_name_to_program(_MIDI_PROGRAM))
    for i, pitch in enumerate(scale):
        start = i * _NOTE_SECONDS
        instrument.notes.append(
            pretty_midi.Note(
                velocity=_VELOCITY,
                pitch=pretty_midi.note_name_to_number(str(pitch)),
                start=start,
                end=start + _NOTE_SECONDS,
            )
        )
    midi.instruments.append(instrument)

    if best is not None:
        for i, pos in enumerate(best.fingering):
            midi.lyrics.append(pretty_midi.Lyric(text=f"S{pos.line + 1}F{pos.slot}", time=i * _NOTE_SECONDS))
    return midi


def write_scale_midi(
    scale: Sequence[Pitch],
    ranked: Sequence[ScoredFingering],
    output_dir: str | Path,
) -> Path:
    """Save ``scale.mid`` for one scale into *output_dir*."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    midi_path = output_dir / "scale.mid"
    midi = scale_to_midi(scale, ranked[0] if ranked else None)
    with atomic_write(midi_path) as tmp_path:
        midi.write(str(tmp_path))
    return midi_path
