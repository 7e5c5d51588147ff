"""Unit tests for fingering enumeration."""

from fretscale.fretboard_engine.enumerator import enumerate_fingerings
from fretscale.fretboard_engine.instrument import Pitch, Position
from fretscale.fretboard_engine.position_table import Fretboard


def test_single_note_yields_one_fingering_per_candidate(fretboard: Fretboard) -> None:
    e4 = Pitch("E", 4)
    fingerings = enumerate_fingerings([e4], fretboard)
    assert fingerings == [(pos,) for pos in fretboard.positions_of(e4)]
    assert len(fingerings) == 6


def test_empty_scale(fretboard: Fretboard) -> None:
    assert enumerate_fingerings([], fretboard) == []


def test_unplayable_pitch_empties_result(fretboard: Fretboard) -> None:
    assert enumerate_fingerings([Pitch("E", 4), Pitch("C", 7)], fretboard) == []
    assert enumerate_fingerings([Pitch("C", 2), Pitch("E", 4)], fretboard) == []
    assert enumerate_fingerings([Pitch("E", 4), Pitch("C", 2), Pitch("E", 4)], fretboard) == []


def test_count_is_product_of_candidates(fretboard: Fretboard) -> None:
    scale = [Pitch("C", 3), Pitch("E", 4), Pitch("G", 3)]
    expected = 1
    for pitch in scale:
        expected *= len(fretboard.positions_of(pitch))
    assert len(enumerate_fingerings(scale, fretboard)) == expected


def test_order_follows_head_then_tail(fretboard: Fretboard) -> None:
    fingerings = enumerate_fingerings([Pitch("E", 4), Pitch("E", 4)], fretboard)
    assert len(fingerings) == 36
    assert fingerings[0] == (Position(0, 0), Position(0, 0))
    assert fingerings[1] == (Position(0, 0), Position(1, 5))
    assert fingerings[6] == (Position(1, 5), Position(0, 0))


def test_every_fingering_realises_the_scale(fretboard: Fretboard) -> None:
    scale = [Pitch("A", 2), Pitch("B", 2), Pitch("C#", 3)]
    fingerings = enumerate_fingerings(scale, fretboard)
    assert fingerings
    assert len(set(fingerings)) == len(fingerings)
    for fingering in fingerings:
        assert [fretboard.pitch_at(pos) for pos in fingering] == scale


def test_result_is_a_list_of_tuples(fretboard: Fretboard) -> None:
    fingerings = enumerate_fingerings([Pitch("A", 2), Pitch("B", 2)], fretboard)
    assert type(fingerings) is list
    assert all(type(fingering) is tuple for fingering in fingerings)
