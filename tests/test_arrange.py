"""Integration tests for the arrange pipeline."""

import json

from src.chord_engine.arrange import (
    arrange,
    arrangement_to_json_bytes,
    save_arrangement,
    voiceable_chords,
)
from src.chord_engine.voicings import generate_all_voicings


def test_arrange_writes_json_and_midi(tmp_path) -> None:
    arrangement = arrange(
        "Am, F, C, G",
        output_dir=tmp_path,
        name="my song",
        export_midi_file=True,
    )

    assert [entry["chordName"] for entry in arrangement] == ["Am", "F", "C", "G"]

    json_path = tmp_path / "my_song_voicings.json"
    assert json_path.exists()
    assert (tmp_path / "my_song.mid").exists()

    saved = json.loads(json_path.read_text(encoding="utf-8"))
    assert saved == arrangement
    assert set(saved[0]) == {
        "chordName", "shapeFamily", "positions", "baseFret",
        "fretSpan", "avgFret", "voicedQuality",
    }


def test_arrange_skips_midi_by_default(tmp_path) -> None:
    arrange("C", output_dir=tmp_path)
    assert (tmp_path / "progression_voicings.json").exists()
    assert not (tmp_path / "progression.mid").exists()


def test_arrange_without_valid_chords_writes_nothing(tmp_path) -> None:
    out = tmp_path / "out"
    assert arrange("xx, yy", output_dir=out) == []
    assert not out.exists()


def test_json_bytes() -> None:
    data = arrangement_to_json_bytes([{"chordName": "C"}])
    assert json.loads(data.decode("utf-8")) == [{"chordName": "C"}]


def test_voiceable_chords_respects_max_fret() -> None:
    # only the open A-minor shape stays at or below fret 2
    assert voiceable_chords(["Am", "F", "C"], max_fret=2) == ["Am"]
    assert voiceable_chords(["Am", "F", "C"]) == ["Am", "F", "C"]


def test_arrange_skips_chords_without_low_voicing(tmp_path) -> None:
    arrangement = arrange("Am, F, C", output_dir=tmp_path, max_fret=2)

    assert [entry["chordName"] for entry in arrangement] == ["Am"]
    assert all(p["fret"] <= 2 for p in arrangement[0]["positions"])
    assert (tmp_path / "progression_voicings.json").exists()


def test_arrange_with_no_playable_chord_writes_nothing(tmp_path) -> None:
    out = tmp_path / "out"
    assert arrange("F, C", output_dir=out, max_fret=2) == []
    assert not out.exists()


def test_save_arrangement_from_existing_voicings(tmp_path) -> None:
    voicings = [generate_all_voicings(c)[0] for c in ("Am", "G")]
    arrangement = save_arrangement(voicings, output_dir=tmp_path, name="pair", export_midi_file=True)

    assert [entry["chordName"] for entry in arrangement] == ["Am", "G"]
    saved = json.loads((tmp_path / "pair_voicings.json").read_text(encoding="utf-8"))
    assert saved == arrangement
    assert (tmp_path / "pair.mid").exists()
