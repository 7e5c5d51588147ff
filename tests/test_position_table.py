"""Unit tests for the fretboard layout and its inverse index."""

from fretscale.fretboard_engine.instrument import CANONICAL_NOTES, Instrument, Pitch, Position
from fretscale.fretboard_engine.position_table import Fretboard, build_fretboard


def test_layout_is_total(fretboard: Fretboard) -> None:
    assert len(fretboard.layout) == 6 * 25
    for line in range(6):
        for slot in range(25):
            assert isinstance(fretboard.pitch_at(Position(line, slot)), Pitch)


def test_each_fret_is_one_semitone_up(fretboard: Fretboard) -> None:
    for line in range(fretboard.num_strings):
        for slot in range(fretboard.num_frets - 1):
            lower = fretboard.pitch_at(Position(line, slot))
            upper = fretboard.pitch_at(Position(line, slot + 1))
            step = (CANONICAL_NOTES.index(upper.name) - CANONICAL_NOTES.index(lower.name)) % 12
            assert step == 1
            expected_octave = lower.octave + 1 if upper.name == "C" else lower.octave
            assert upper.octave == expected_octave


def test_known_positions(fretboard: Fretboard) -> None:
    assert fretboard.pitch_at(Position(0, 0)) == Pitch("E", 4)
    assert fretboard.pitch_at(Position(4, 3)) == Pitch("C", 3)
    assert fretboard.pitch_at(Position(5, 24)) == Pitch("E", 4)


def test_index_points_back_to_layout(fretboard: Fretboard) -> None:
    for pitch, positions in fretboard.index.items():
        for position in positions:
            assert fretboard.pitch_at(position) == pitch


def test_every_layout_pitch_is_indexed(fretboard: Fretboard) -> None:
    for position, pitch in fretboard.layout.items():
        assert pitch in fretboard.index
        assert position in fretboard.positions_of(pitch)


def test_index_covers_modelled_octaves(fretboard: Fretboard) -> None:
    assert len(fretboard.index) == 12 * 5
    assert Pitch("C", 2) in fretboard.index
    assert Pitch("B", 6) in fretboard.index


def test_candidates_in_line_then_slot_order(fretboard: Fretboard) -> None:
    assert fretboard.positions_of(Pitch("E", 4)) == (
        Position(0, 0),
        Position(1, 5),
        Position(2, 9),
        Position(3, 14),
        Position(4, 19),
        Position(5, 24),
    )


def test_unplayable_pitches_have_no_positions(fretboard: Fretboard) -> None:
    assert fretboard.positions_of(Pitch("C", 2)) == ()
    assert fretboard.positions_of(Pitch("F", 6)) == ()
    assert fretboard.positions_of(Pitch("C", 7)) == ()


def test_custom_instrument_and_octave_range() -> None:
    board = build_fretboard(Instrument(open_pitches=(Pitch("G", 3),), num_frets=6), 3, 3)
    assert board.num_strings == 1
    assert [str(board.pitch_at(Position(0, slot))) for slot in range(6)] == [
        "G3", "G#3", "A3", "A#3", "B3", "C4",
    ]
    assert len(board.index) == 12
    assert board.positions_of(Pitch("C", 4)) == ()


def test_format_table(fretboard: Fretboard) -> None:
    rows = fretboard.format_table().splitlines()
    assert len(rows) == 6
    assert rows[0].split("\t")[:3] == ["E4", "F4", "F#4"]
    assert all(len(row.split("\t")) == 25 for row in rows)
