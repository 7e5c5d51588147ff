"""fretscale CLI entry point.

Searches the twelve major and/or minor scales at one base octave, draws
the best fingerings of each as PNG diagrams and writes the reports.
"""

from __future__ import annotations

import logging
import sys

import click

from fretscale import __version__
from fretscale.config import load_settings, validate_octave
from fretscale.fretboard_engine.annotate import DEFAULT_SCALE_TYPES, generate_all
from fretscale.fretboard_engine.instrument import SCALE_STEPS, STANDARD_GUITAR
from fretscale.fretboard_engine.position_table import build_fretboard

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=_LOG_FORMAT,
        stream=sys.stderr,
    )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="fretscale")
@click.option(
    "--octave",
    type=int,
    required=True,
    help="Base octave of every root note (2 <= octave <= 6 with the default settings).",
)
@click.option(
    "--scale-type",
    "scale_types",
    type=click.Choice(list(SCALE_STEPS)),
    multiple=True,
    help="Scale type to search; repeat for several. Defaults to min then maj.",
)
@click.option(
    "--output-dir",
    "-o",
    default=None,
    metavar="DIR",
    help="Output root directory. Defaults to output_dir from the settings.",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Worker processes used to search scales in parallel.",
)
@click.option("--export-midi", is_flag=True, help="Also write scale.mid with the best fingering as lyrics.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, readable=True),
    default=None,
    help="Settings YAML. Defaults to the bundled scale_search.yaml.",
)
@click.option("--show-fretboard", is_flag=True, help="Print the fretboard layout before searching.")
@click.option("--verbose", "-v", is_flag=True, help="Log every scale and ranked fingering.")
def main(
    octave: int,
    scale_types: tuple[str, ...],
    output_dir: str | None,
    workers: int,
    export_midi: bool,
    config_path: str | None,
    show_fretboard: bool,
    verbose: bool,
) -> None:
    """
    Find and draw the most compact fingerings of every scale at OCTAVE.

    \b
    Examples:
      fretscale --octave 3
      fretscale --octave 4 --scale-type maj -o diagrams --workers 4
    """
    _configure_logging(verbose)

    try:
        settings = load_settings(config_path)
    except (OSError, ValueError) as exc:
        click.echo(f"ERROR: {exc}", err=True)
        sys.exit(1)

    try:
        validate_octave(octave, settings)
    except ValueError as exc:
        click.echo(str(exc), err=True)
        return

    fretboard = build_fretboard(STANDARD_GUITAR, settings.min_octave, settings.max_octave)
    if show_fretboard:
        click.echo(fretboard.format_table())

    resolved_types = scale_types or DEFAULT_SCALE_TYPES
    resolved_output = output_dir if output_dir is not None else settings.output_dir

    click.echo(f"fretscale v{__version__}")
    click.echo(f"  Octave : {octave}")
    click.echo(f"  Scales : {', '.join(resolved_types)}")
    click.echo(f"  Output : {resolved_output}")
    click.echo()

    summary = generate_all(
        fretboard,
        octave,
        scale_types=resolved_types,
        settings=settings,
        output_dir=resolved_output,
        workers=workers,
        export_midi=export_midi,
    )

    rendered = sum(1 for result in summary.results if result.ranked)
    click.echo(f"Rendered {rendered}/{len(summary.results)} scale(s), {len(summary.written)} file(s) written.")
    if summary.failures:
        click.echo(f"  ERROR: {summary.failures} artifact(s) could not be written.", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
