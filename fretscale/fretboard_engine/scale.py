"""Scale Generator — ordered pitch sequence from a root and a step pattern."""

from __future__ import annotations

from collections.abc import Sequence

from .instrument import Pitch


def get_scale(root: Pitch, steps: Sequence[int]) -> tuple[Pitch, ...]:
    """Build the scale rooted at *root*.

    Element ``i`` is *root* transposed by the sum of ``steps[:i]``, so the
    result has one pitch per step and the final step value is never used
    (it only closes the loop back to the root's next octave).

    Args:
        root: First pitch of the scale.
        steps: Semitone deltas, e.g. ``(2, 1, 2, 2, 1, 2, 2, 0)``.

    Returns:
        Tuple of ``len(steps)`` pitches.
    """
    scale: list[Pitch] = []
    offset = 0
    for step in steps:
        scale.append(root.transpose(offset))
        offset += step
    return tuple(scale)
