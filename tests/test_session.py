"""Unit tests for progression session navigation."""

from src.chord_engine.session import ProgressionSession
from src.chord_engine.voicings import generate_all_voicings


def _session(loop_enabled: bool = True) -> ProgressionSession:
    chords = ["Am", "F", "C", "G"]
    voicings = [generate_all_voicings(c)[0] for c in chords]
    return ProgressionSession(chords=chords, voicings=voicings, loop_enabled=loop_enabled)


def test_load_optimizes_every_chord() -> None:
    session = ProgressionSession.load(["Am", "F", "C", "G"])
    assert len(session) == 4
    assert [v.chord_name for v in session.voicings] == ["Am", "F", "C", "G"]
    assert session.current_index == 0
    assert session.current is session.voicings[0]


def test_next_wraps_when_looping() -> None:
    session = _session()
    for _ in range(3):
        session.next_chord()
    assert session.current.chord_name == "G"
    assert session.next_chord().chord_name == "Am"


def test_prev_wraps_when_looping() -> None:
    session = _session()
    assert session.prev_chord().chord_name == "G"
    assert session.current_index == 3


def test_stepping_clamps_without_loop() -> None:
    session = _session(loop_enabled=False)
    assert session.prev_chord().chord_name == "Am"
    session.go_to(3)
    assert session.next_chord().chord_name == "G"
    assert session.current_index == 3


def test_go_to_ignores_out_of_range() -> None:
    session = _session()
    session.go_to(2)
    assert session.go_to(10).chord_name == "C"
    assert session.go_to(-1).chord_name == "C"


def test_empty_session() -> None:
    session = ProgressionSession()
    assert len(session) == 0
    assert session.current is None
    assert session.next_chord() is None
    assert session.prev_chord() is None
