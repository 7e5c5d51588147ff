"""CLI tests through click's test runner."""

from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from fretscale.config import DEFAULT_CONFIG_PATH
from fretscale.main import main


@pytest.fixture
def small_config(tmp_path: Path) -> Path:
    with open(DEFAULT_CONFIG_PATH, "r", encoding="utf-8") as fh:
        cfg = yaml.safe_load(fh)
    cfg["scale_cutoff"] = 2
    cfg["render"].update(
        square_length=40,
        font_regular=None,
        font_size_regular=12,
        font_light=None,
        font_size_light=10,
        font_size_title=8,
    )
    path = tmp_path / "small.yaml"
    path.write_text(yaml.safe_dump(cfg), encoding="utf-8")
    return path


@pytest.mark.parametrize("octave", ["1", "7"])
def test_octave_out_of_range_exits_cleanly(tmp_path: Path, octave: str) -> None:
    out = tmp_path / "out"
    result = CliRunner().invoke(main, ["--octave", octave, "-o", str(out)])
    assert result.exit_code == 0
    assert "Octave needs to be in interval [2,...,6]" in result.output
    assert not out.exists()


def test_octave_is_required() -> None:
    result = CliRunner().invoke(main, [])
    assert result.exit_code == 2


def test_unknown_scale_type_is_rejected(tmp_path: Path) -> None:
    result = CliRunner().invoke(main, ["--octave", "3", "--scale-type", "dorian", "-o", str(tmp_path / "out")])
    assert result.exit_code == 2
    assert not (tmp_path / "out").exists()


def test_bad_config_reports_error(tmp_path: Path) -> None:
    broken = tmp_path / "broken.yaml"
    broken.write_text("scale_cutoff: 3\n", encoding="utf-8")
    result = CliRunner().invoke(main, ["--octave", "3", "--config", str(broken)])
    assert result.exit_code == 1
    assert "Missing required key" in result.output


def test_run_writes_diagrams(tmp_path: Path, small_config: Path) -> None:
    out = tmp_path / "out"
    result = CliRunner().invoke(
        main,
        ["--octave", "2", "--scale-type", "maj", "--config", str(small_config), "-o", str(out), "--export-midi"],
    )
    assert result.exit_code == 0, result.output
    assert (out / "E2maj" / "0.png").exists()
    assert (out / "E2maj" / "1.png").exists()
    assert not (out / "E2maj" / "2.png").exists()
    assert (out / "E2maj" / "scale.mid").exists()
    assert not (out / "C2maj").exists()
    assert (out / "rankings.csv").exists()


def test_show_fretboard(tmp_path: Path, small_config: Path) -> None:
    result = CliRunner().invoke(
        main,
        ["--octave", "6", "--config", str(small_config), "-o", str(tmp_path / "out"), "--show-fretboard"],
    )
    assert result.exit_code == 0
    assert "E4\tF4\tF#4" in result.output
    assert "Rendered 0/24 scale(s)" in result.output


def test_version() -> None:
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "fretscale" in result.output
