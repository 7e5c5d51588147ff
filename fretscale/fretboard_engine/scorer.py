"""Consistency Filter & Scorer — keep the most compact playable fingerings.

A fingering is **consistent** when its string line never increases from
one note to the next. Consistent fingerings are scored by how tightly
their ``(line, slot)`` points cluster around their centroid:

    mean_k  = ((k - 1) * mean_{k-1} + value_k) / k
    score   = Σ_i  ‖ point_i − mean_n ‖₂

Lower is better. Ranking is a stable ascending sort truncated to the
cutoff, so equal scores keep their enumeration order.

Methods:
    is_consistent      – playability predicate for one fingering
    cluster_distance   – compactness score for one fingering
    consistency_mask   – the same predicate over an ``(N, n, 2)`` array
    cluster_distances  – the same score over an ``(N, n, 2)`` array
    rank_fingerings    – filter, score, sort and truncate
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import NamedTuple

import numpy as np

from .enumerator import Fingering

logger = logging.getLogger(__name__)

SCALE_CUTOFF: int = 10

# Fingerings are scored in chunks to bound the size of the working arrays.
_CHUNK_SIZE: int = 1 << 16


class ScoredFingering(NamedTuple):
    """A fingering and its compactness score (lower = easier)."""

    fingering: Fingering
    score: float


def is_consistent(fingering: Fingering) -> bool:
    """True when the line index never strictly increases along *fingering*."""
    return all(prev.line >= cur.line for prev, cur in zip(fingering, fingering[1:]))


def consistency_mask(coords: np.ndarray) -> np.ndarray:
    """Apply :func:`is_consistent` to each fingering of an ``(N, n, 2)`` array."""
    lines = np.asarray(coords)[:, :, 0]
    return np.all(lines[:, 1:] <= lines[:, :-1], axis=1)


def cluster_distances(coords: np.ndarray) -> np.ndarray:
    """Score a batch of equal-length fingerings.

    Args:
        coords: Array of shape ``(N, n, 2)`` holding ``(line, slot)``.

    Returns:
        Float array of ``N`` scores.
    """
    coords = np.asarray(coords, dtype=np.float64)
    count, length = coords.shape[0], coords.shape[1]

    mean = np.zeros((count, 2), dtype=np.float64)
    for k in range(length):
        mean = (k * mean + coords[:, k, :]) / (k + 1)

    # Accumulate point by point so a batch of one matches a larger batch bit for bit.
    scores = np.zeros(count, dtype=np.float64)
    for k in range(length):
        delta = coords[:, k, :] - mean
        scores += np.sqrt(delta[:, 0] * delta[:, 0] + delta[:, 1] * delta[:, 1])
    return scores


def cluster_distance(fingering: Fingering) -> float:
    """Compactness score of a single fingering (0.0 when empty)."""
    if not fingering:
        return 0.0
    coords = np.asarray([fingering], dtype=np.float64)
    return float(cluster_distances(coords)[0])


def rank_fingerings(
    fingerings: Sequence[Fingering],
    cutoff: int = SCALE_CUTOFF,
) -> list[ScoredFingering]:
    """Drop inconsistent fingerings and return the best *cutoff* by score.

    Args:
        fingerings: Equal-length fingerings of one scale, in enumeration
            order.
        cutoff: Maximum number of results.

    Returns:
        Up to *cutoff* :class:`ScoredFingering` in ascending score order.
        Empty when nothing is consistent.

    Raises:
        ValueError: If the fingerings do not all have the same length.
    """
    if not fingerings or cutoff <= 0:
        return []

    length = len(fingerings[0])
    if any(len(fingering) != length for fingering in fingerings):
        raise ValueError("All fingerings of one scale must have the same length")

    best_indices = np.empty(0, dtype=np.int64)
    best_scores = np.empty(0, dtype=np.float64)
    consistent_total = 0

    for start in range(0, len(fingerings), _CHUNK_SIZE):
        chunk = fingerings[start:start + _CHUNK_SIZE]
        coords = np.asarray(chunk, dtype=np.int64).reshape(len(chunk), length, 2)
        kept = np.flatnonzero(consistency_mask(coords))
        if kept.size == 0:
            continue
        consistent_total += int(kept.size)

        # Earlier winners come first, so the stable sort keeps enumeration order on ties.
        indices = np.concatenate([best_indices, kept + start])
        scores = np.concatenate([best_scores, cluster_distances(coords[kept])])
        order = np.argsort(scores, kind="stable")[:cutoff]
        best_indices = indices[order]
        best_scores = scores[order]

    logger.debug(
        "Ranked %d fingerings: %d consistent, kept %d",
        len(fingerings),
        consistent_total,
        best_indices.size,
    )
    return [
        ScoredFingering(tuple(fingerings[int(idx)]), float(score))
        for idx, score in zip(best_indices, best_scores)
    ]


class FingeringScorer:
    """Rank fingerings with a cutoff taken from the search settings.

    Args:
        cutoff: Maximum number of fingerings kept per scale.
    """

    def __init__(self, cutoff: int = SCALE_CUTOFF) -> None:
        if cutoff < 1:
            raise ValueError(f"scale_cutoff must be at least 1, got {cutoff}")
        self.cutoff = cutoff

    @classmethod
    def from_config(cls, config_path: str | Path | None = None) -> FingeringScorer:
        """Build a scorer from ``scale_search.yaml`` (or *config_path*)."""
        from ..config import load_settings

        return cls(cutoff=load_settings(config_path).scale_cutoff)

    def rank(self, fingerings: Sequence[Fingering]) -> list[ScoredFingering]:
        return rank_fingerings(fingerings, cutoff=self.cutoff)
