"""Renderer — draw a ranked fingering as a labelled fretboard diagram.

The diagram is a grid of ``(frets + 2) x (strings + 2)`` square cells:
grey border cells carry fret numbers (top/bottom) and string numbers
(left/right), pale yellow cells mark the open, middle and last frets,
every playable cell shows its pitch in light grey, and the cells of the
fingering show the step number and pitch in black. The scale label sits
in the top-left corner.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from ..config import RenderSettings
from .position_table import Fretboard
from .report import atomic_write
from .scorer import ScoredFingering

logger = logging.getLogger(__name__)

# ── Palette ───────────────────────────────────────────────────
_WHITE = (255, 255, 255)
_BLACK = (0, 0, 0)
_BORDER = (128, 128, 128)
_MARKER = (230, 230, 153)
_PITCH_HINT = (191, 191, 191)

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont


@lru_cache(maxsize=None)
def load_font(font_path: str | None, size: int) -> Font:
    """Load a TrueType font, falling back to Pillow's bundled font."""
    if font_path:
        try:
            return ImageFont.truetype(font_path, size)
        except OSError:
            logger.warning("Font '%s' could not be loaded; using the default font", font_path)
    return ImageFont.load_default(size=size)


def draw_fingering(
    scored: ScoredFingering,
    fretboard: Fretboard,
    title: str,
    settings: RenderSettings = RenderSettings(),
) -> Image.Image:
    """Draw one fingering and return the image (nothing is written)."""
    s = settings.square_length
    num_strings = fretboard.num_strings
    num_frets = fretboard.num_frets
    width = (num_frets + 2) * s
    height = (num_strings + 2) * s

    image = Image.new("RGB", (width, height), _WHITE)
    draw = ImageDraw.Draw(image)

    for row in range(1, num_strings + 2):
        draw.line([(0, row * s), (width, row * s)], fill=_BLACK)
    for col in range(1, num_frets + 2):
        draw.line([(col * s, 0), (col * s, height)], fill=_BLACK)

    regular = load_font(settings.font_regular, settings.font_size_regular)

    def cell(col: int, row: int, fill: tuple[int, int, int]) -> None:
        draw.rectangle([col * s, row * s, (col + 1) * s, (row + 1) * s], fill=fill)

    def text(x: float, y: float, label: str, font: Font, fill: tuple[int, int, int]) -> None:
        draw.text((x, y), label, font=font, fill=fill, anchor="mm")

    # ── String numbers and fret markers ───────────────────────
    for row in range(1, num_strings + 1):
        cell(0, row, _BORDER)
        cell(num_frets + 1, row, _BORDER)
        for col in (1, num_frets // 2 + 1, num_frets):
            cell(col, row, _MARKER)
        text(s / 2, (row + 0.5) * s, str(row), regular, _BLACK)
        text((num_frets + 1.5) * s, (row + 0.5) * s, str(row), regular, _BLACK)

    # ── Fret numbers ──────────────────────────────────────────
    for col in range(1, num_frets + 1):
        cell(col, 0, _BORDER)
        cell(col, num_strings + 1, _BORDER)
        if col > 1:
            text((col + 0.5) * s, s / 2, str(col - 1), regular, _BLACK)
            text((col + 0.5) * s, (num_strings + 1.5) * s, str(col - 1), regular, _BLACK)

    # ── Step numbers ──────────────────────────────────────────
    for step, position in enumerate(scored.fingering, start=1):
        text((position.slot + 1.5) * s, (position.line + 1.25) * s, str(step), regular, _BLACK)

    # ── Pitch labels ──────────────────────────────────────────
    light = load_font(settings.font_light, settings.font_size_light)
    for position, pitch in fretboard.layout.items():
        text((position.slot + 1.5) * s, (position.line + 1.75) * s, f"[{pitch}]", light, _PITCH_HINT)
    for position in scored.fingering:
        pitch = fretboard.pitch_at(position)
        text((position.slot + 1.5) * s, (position.line + 1.75) * s, f"[{pitch}]", light, _BLACK)

    title_font = load_font(settings.font_light, settings.font_size_title)
    text(s / 2, s / 2, title, title_font, _BLACK)
    return image


def save_fingering(
    scored: ScoredFingering,
    fretboard: Fretboard,
    output_path: str | Path,
    settings: RenderSettings = RenderSettings(),
) -> Path:
    """Render *scored* to a PNG at *output_path*.

    The parent directory name is used as the diagram title and is created
    if needed. The image is written to a temporary file next to the
    target and moved into place, so an existing artifact is never left
    half-written.

    Raises:
        OSError: If the directory or file cannot be written.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image = draw_fingering(scored, fretboard, output_path.parent.name, settings)

    with atomic_write(output_path) as tmp_path:
        image.save(tmp_path, format="PNG")
    return output_path
