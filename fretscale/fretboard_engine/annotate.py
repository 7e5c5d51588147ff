"""Annotator — orchestrate scale search and export results.

Responsibilities, per ``(root, octave, scale type)`` request:
    1. Build the scale from the root and the step pattern.
    2. Enumerate every fingering of the scale on the fretboard.
    3. Filter, score and keep the best fingerings.
    4. Draw one PNG per kept fingering and save ``annotations.json``
       (default: ``png/<label>/``).
    5. Optionally export the scale as an annotated MIDI file.

Requests share nothing but the read-only fretboard, so a batch can be
spread over worker processes. A write failure aborts only the artifact
being written; the batch carries on and reports the failure count.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import NamedTuple

from ..config import RenderSettings, Settings, validate_scale_type
from .enumerator import enumerate_fingerings
from .instrument import CANONICAL_NOTES, Pitch, SCALE_STEPS
from .position_table import Fretboard
from .render import save_fingering
from .report import write_annotations, write_rankings_csv, write_scale_midi
from .scale import get_scale
from .scorer import SCALE_CUTOFF, FingeringScorer, ScoredFingering

logger = logging.getLogger(__name__)

DEFAULT_SCALE_TYPES: tuple[str, ...] = ("min", "maj")


class ScaleRequest(NamedTuple):
    """One root note, base octave and scale type to search."""

    root: str
    octave: int
    scale_type: str

    @property
    def label(self) -> str:
        """Output name, e.g. ``"C#3min"``."""
        return f"{self.root}{self.octave}{self.scale_type}"


class ScaleResult(NamedTuple):
    """The scale of a request and its ranked fingerings."""

    request: ScaleRequest
    scale: tuple[Pitch, ...]
    ranked: list[ScoredFingering]


@dataclass
class RunSummary:
    """Outcome of :func:`generate_all`."""

    results: list[ScaleResult] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)
    failures: int = 0


def build_requests(octave: int, scale_types: Sequence[str] = DEFAULT_SCALE_TYPES) -> list[ScaleRequest]:
    """All twelve roots at *octave*, grouped by scale type in the given order."""
    return [
        ScaleRequest(root, octave, scale_type)
        for scale_type in scale_types
        for root in CANONICAL_NOTES
    ]


def solve_scale(
    request: ScaleRequest,
    fretboard: Fretboard,
    cutoff: int = SCALE_CUTOFF,
) -> ScaleResult:
    """Run scale → enumeration → ranking for one request.

    Args:
        request: Root, octave and scale type (must be a key of
            ``SCALE_STEPS``).
        fretboard: Read-only layout and inverse index.
        cutoff: Maximum number of fingerings kept.

    Returns:
        A :class:`ScaleResult`; ``ranked`` is empty when the scale cannot
        be played in full or no fingering is consistent.
    """
    scale = get_scale(Pitch(request.root, request.octave), SCALE_STEPS[request.scale_type])
    fingerings = enumerate_fingerings(scale, fretboard)
    ranked = FingeringScorer(cutoff).rank(fingerings)

    if logger.isEnabledFor(logging.DEBUG):
        for i, pitch in enumerate(scale):
            logger.debug("%s %d: %s", request.label, i, pitch)
        for scored in ranked:
            coords = "".join(f"({pos.line} {pos.slot})" for pos in scored.fingering)
            logger.debug("%s S = %.1f: %s", request.label, scored.score, coords)

    return ScaleResult(request=request, scale=scale, ranked=ranked)


def export_result(
    result: ScaleResult,
    fretboard: Fretboard,
    output_dir: str | Path,
    render_settings: RenderSettings = RenderSettings(),
    export_midi: bool = False,
) -> tuple[list[Path], int]:
    """Write the diagrams and reports of one result.

    Nothing is written when the ranking is empty.

    Returns:
        ``(written_paths, failure_count)``.
    """
    label = result.request.label
    if not result.ranked:
        logger.info("No playable fingering for %s; nothing to render", label)
        return [], 0

    scale_dir = Path(output_dir) / label
    written: list[Path] = []
    failures = 0

    for rank, scored in enumerate(result.ranked):
        png_path = scale_dir / f"{rank}.png"
        try:
            written.append(save_fingering(scored, fretboard, png_path, render_settings))
        except OSError as exc:
            failures += 1
            logger.error("Could not write %s: %s", png_path, exc)

    try:
        written.append(write_annotations(result.ranked, fretboard, scale_dir))
    except OSError as exc:
        failures += 1
        logger.error("Could not write annotations for %s: %s", label, exc)

    if export_midi:
        try:
            written.append(write_scale_midi(result.scale, result.ranked, scale_dir))
        except OSError as exc:
            failures += 1
            logger.error("Could not write MIDI for %s: %s", label, exc)

    logger.info("%s: %d fingering(s) rendered", label, len(result.ranked))
    return written, failures


def _process_request(
    job: tuple[ScaleRequest, Fretboard, Settings, Path, bool],
) -> tuple[ScaleResult, list[Path], int]:
    """Worker entry point: solve one request and export it."""
    request, fretboard, settings, output_dir, export_midi = job
    result = solve_scale(request, fretboard, cutoff=settings.scale_cutoff)
    written, failures = export_result(result, fretboard, output_dir, settings.render, export_midi)
    return result, written, failures


def generate_all(
    fretboard: Fretboard,
    octave: int,
    scale_types: Iterable[str] = DEFAULT_SCALE_TYPES,
    settings: Settings = Settings(),
    output_dir: str | Path | None = None,
    workers: int | None = None,
    export_midi: bool = False,
) -> RunSummary:
    """Search, render and report every root for each scale type.

    Args:
        fretboard: Read-only layout and inverse index.
        octave: Base octave of every root (validated by the caller).
        scale_types: Scale-type labels, processed in order.
        settings: Cutoff and rendering settings.
        output_dir: Root output directory. Defaults to
            ``settings.output_dir``.
        workers: Number of worker processes. ``None`` or ``1`` runs
            everything in the calling process.
        export_midi: Also write ``scale.mid`` for each scale.

    Returns:
        A :class:`RunSummary` with results in request order.

    Raises:
        ValueError: If *workers* is not positive or a scale type is unknown.
    """
    if workers is not None and workers < 1:
        raise ValueError(f"workers must be positive, got {workers}")
    scale_types = tuple(validate_scale_type(label) for label in scale_types)

    out = Path(output_dir if output_dir is not None else settings.output_dir)
    requests = build_requests(octave, scale_types)
    jobs = [(request, fretboard, settings, out, export_midi) for request in requests]

    if workers is None or workers == 1:
        outcomes = [_process_request(job) for job in jobs]
    else:
        with ProcessPoolExecutor(max_workers=workers) as executor:
            outcomes = list(executor.map(_process_request, jobs))

    summary = RunSummary()
    for result, written, failures in outcomes:
        summary.results.append(result)
        summary.written.extend(written)
        summary.failures += failures

    try:
        summary.written.append(
            write_rankings_csv(((r.request.label, r.ranked) for r in summary.results), out)
        )
    except OSError as exc:
        summary.failures += 1
        logger.error("Could not write rankings.csv in %s: %s", out, exc)

    return summary
