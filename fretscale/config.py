"""Search and rendering settings for fretscale.

All tunables live in ``configs/scale_search.yaml`` inside the package.
A different file can be passed explicitly; if a required key is missing
a ``ValueError`` is raised with a clear message.

The helpers at the bottom validate user input at the command-line
boundary so the engine itself can assume well-formed requests.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .fretboard_engine.instrument import SCALE_STEPS

DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent / "configs" / "scale_search.yaml"

_REQUIRED_KEYS: list[str] = [
    "scale_cutoff",
    "min_octave",
    "max_octave",
    "output_dir",
    "render",
]

_REQUIRED_RENDER_KEYS: list[str] = [
    "square_length",
    "font_regular",
    "font_size_regular",
    "font_light",
    "font_size_light",
    "font_size_title",
]


@dataclass(frozen=True)
class RenderSettings:
    """Geometry and fonts of the fretboard diagrams."""

    square_length: int = 200
    font_regular: str | None = None
    font_size_regular: int = 96
    font_light: str | None = None
    font_size_light: int = 70
    font_size_title: int = 50


@dataclass(frozen=True)
class Settings:
    """Top-level settings loaded from YAML."""

    scale_cutoff: int = 10
    min_octave: int = 2
    max_octave: int = 6
    output_dir: str = "png"
    render: RenderSettings = RenderSettings()


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load and validate the settings file.

    Args:
        config_path: Path to a YAML file. Defaults to the bundled
            ``configs/scale_search.yaml``.

    Returns:
        Parsed :class:`Settings`.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If a required key is missing or a value is out of range.
    """
    config_path = DEFAULT_CONFIG_PATH if config_path is None else Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Settings file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as fh:
        cfg: dict[str, Any] = yaml.safe_load(fh) or {}

    for key in _REQUIRED_KEYS:
        if key not in cfg:
            raise ValueError(f"Missing required key '{key}' in settings: {config_path}")
    render_cfg: dict[str, Any] = cfg["render"] or {}
    for key in _REQUIRED_RENDER_KEYS:
        if key not in render_cfg:
            raise ValueError(f"Missing required key 'render.{key}' in settings: {config_path}")

    settings = Settings(
        scale_cutoff=int(cfg["scale_cutoff"]),
        min_octave=int(cfg["min_octave"]),
        max_octave=int(cfg["max_octave"]),
        output_dir=str(cfg["output_dir"]),
        render=RenderSettings(
            square_length=int(render_cfg["square_length"]),
            font_regular=render_cfg["font_regular"],
            font_size_regular=int(render_cfg["font_size_regular"]),
            font_light=render_cfg["font_light"],
            font_size_light=int(render_cfg["font_size_light"]),
            font_size_title=int(render_cfg["font_size_title"]),
        ),
    )

    if settings.scale_cutoff < 1:
        raise ValueError(f"scale_cutoff must be at least 1 in settings: {config_path}")
    if settings.min_octave > settings.max_octave:
        raise ValueError(
            f"min_octave ({settings.min_octave}) exceeds max_octave "
            f"({settings.max_octave}) in settings: {config_path}"
        )
    if settings.render.square_length < 1:
        raise ValueError(f"render.square_length must be positive in settings: {config_path}")
    return settings


# ── Boundary validation ───────────────────────────────────────

def validate_octave(octave: int, settings: Settings) -> int:
    """Reject octaves outside ``[min_octave, max_octave]``.

    Raises:
        ValueError: With the user-facing diagnostic.
    """
    if octave < settings.min_octave or octave > settings.max_octave:
        raise ValueError(
            f"Octave needs to be in interval [{settings.min_octave},...,{settings.max_octave}]"
        )
    return octave


def validate_scale_type(label: str) -> str:
    """Reject scale-type labels without a step pattern.

    Raises:
        ValueError: If *label* is not a key of ``SCALE_STEPS``.
    """
    if label not in SCALE_STEPS:
        known = ", ".join(SCALE_STEPS)
        raise ValueError(f"Unknown scale type '{label}'. Use one of: {known}.")
    return label
