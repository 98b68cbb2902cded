"""Unit tests for shape templates, the single resolver and the CAGED generator."""

import pytest

from src.chord_engine.chord_parser import ChordSymbol, parse_chord_name
from src.chord_engine.notes import note_index, pitch_class_at
from src.chord_engine.templates import (
    CAGED_SHAPES,
    FAMILY_ORDER,
    ChordQuality,
    ShapeTemplate,
)
from src.chord_engine.voicings import (
    Position,
    generate_all_voicings,
    resolve_chord_positions,
    summarize_positions,
)

CHORDS = [
    "C", "C#", "Db", "D", "Eb", "E", "F", "F#", "G", "Ab", "A", "Bb", "B",
    "Am", "Em", "Bm", "F#m", "C7", "G7", "Dm7", "Bbm7", "Fmaj7", "Ebmaj7",
    "Bdim", "Caug", "Dsus4", "Asus2", "G9", "Cadd9", "C/G",
]


def _frets(positions) -> list[tuple[int, int]]:
    return [(p.string, p.fret) for p in positions]


# ── Templates ─────────────────────────────────────────────────

def test_every_caged_template_has_six_strings() -> None:
    for family in FAMILY_ORDER:
        for template in CAGED_SHAPES[family].values():
            assert len(template.frets) == 6


def test_shape_template_rejects_wrong_length() -> None:
    with pytest.raises(ValueError):
        ShapeTemplate("E", ChordQuality.MAJOR, (0, 2, 2, 1, 0), 4)


def test_shape_template_rejects_negative_fret() -> None:
    with pytest.raises(ValueError):
        ShapeTemplate("E", ChordQuality.MAJOR, (0, 2, 2, -1, 0, 0), 4)


def test_caged_templates_voice_their_own_chord() -> None:
    for family in FAMILY_ORDER:
        for quality, template in CAGED_SHAPES[family].items():
            root = template.root_pitch_class
            sounded = {pitch_class_at(s, f) for s, f in template.sounded()}
            assert root in sounded, f"{family}/{quality.value} lacks its root"


# ── Single resolver ───────────────────────────────────────────

def test_resolve_open_e_major() -> None:
    positions = resolve_chord_positions("E")
    assert positions == [
        Position(6, 0, True),
        Position(5, 2, False),
        Position(4, 2, True),
        Position(3, 1, False),
        Position(2, 0, False),
        Position(1, 0, True),
    ]


def test_resolve_f_uses_e_shape_barre() -> None:
    assert _frets(resolve_chord_positions("F")) == [
        (6, 1), (5, 3), (4, 3), (3, 2), (2, 1), (1, 1),
    ]


def test_resolve_b_flat_uses_a_shape_barre() -> None:
    assert _frets(resolve_chord_positions("Bb")) == [
        (5, 1), (4, 3), (3, 3), (2, 3), (1, 1),
    ]


def test_resolve_open_root_without_open_shape_uses_barre() -> None:
    # No open G minor: E-shape at fret 3
    assert _frets(resolve_chord_positions("Gm")) == [
        (6, 3), (5, 5), (4, 5), (3, 3), (2, 3), (1, 3),
    ]
    # No open C7: A-shape 7 at fret 3
    assert _frets(resolve_chord_positions("C7")) == [
        (5, 3), (4, 5), (3, 3), (2, 5), (1, 3),
    ]


def test_resolve_without_template_scans_low_frets() -> None:
    # C dim = {C, Eb, Gb}: first chord tone per string within frets 0–5
    assert resolve_chord_positions("Cdim") == [
        Position(6, 2, False),
        Position(5, 3, True),
        Position(4, 1, False),
        Position(3, 5, True),
        Position(2, 1, True),
        Position(1, 2, False),
    ]


def test_resolve_parse_failure_is_empty() -> None:
    assert resolve_chord_positions("xx") == []


def test_resolver_and_generator_share_coordinates() -> None:
    e_shape = next(v for v in generate_all_voicings("F") if v.shape_family == "E")
    assert list(e_shape.positions) == resolve_chord_positions("F")


# ── Exhaustive generator ──────────────────────────────────────

def test_generate_c_major_all_families() -> None:
    voicings = generate_all_voicings("C")
    assert [v.shape_family for v in voicings] == ["C", "A", "G", "E", "D"]
    assert [v.avg_fret for v in voicings] == pytest.approx([1.2, 4.2, 38 / 6, 53 / 6, 11.75])

    open_c = voicings[0]
    assert _frets(open_c.positions) == [(5, 3), (4, 2), (3, 0), (2, 1), (1, 0)]
    assert open_c.base_fret == 1
    assert open_c.fret_span == 2


def test_generate_respects_max_fret() -> None:
    voicings = generate_all_voicings("C", max_fret=12)
    assert "D" not in {v.shape_family for v in voicings}
    assert len(voicings) == 4
    assert generate_all_voicings("E", max_fret=0) == []


def test_generate_a_minor_order() -> None:
    voicings = generate_all_voicings("Am")
    assert [v.shape_family for v in voicings] == ["A", "G", "E", "D", "C"]
    assert voicings[0].avg_fret == pytest.approx(1.0)


def test_generate_accepts_chord_symbol() -> None:
    voicings = generate_all_voicings(ChordSymbol("A", ChordQuality.MINOR))
    assert voicings
    assert all(v.chord_name == "Am" for v in voicings)


def test_generate_parse_failure_is_empty() -> None:
    assert generate_all_voicings("") == []
    assert generate_all_voicings("not a chord") == []


def test_unsupported_qualities_are_approximated_and_flagged() -> None:
    assert {v.voiced_quality for v in generate_all_voicings("Bdim")} == {ChordQuality.MINOR}
    assert {v.voiced_quality for v in generate_all_voicings("Dsus4")} == {ChordQuality.MAJOR}
    assert {v.voiced_quality for v in generate_all_voicings("G7")} == {ChordQuality.DOM7}


@pytest.mark.parametrize("name", CHORDS)
def test_generated_voicings_are_sorted(name: str) -> None:
    avgs = [v.avg_fret for v in generate_all_voicings(name)]
    assert avgs == sorted(avgs)


@pytest.mark.parametrize("name", CHORDS)
@pytest.mark.parametrize("max_fret", [12, 15])
def test_generated_positions_are_in_bounds(name: str, max_fret: int) -> None:
    for voicing in generate_all_voicings(name, max_fret=max_fret):
        assert len(voicing.positions) >= 3
        for position in voicing.positions:
            assert 1 <= position.string <= 6
            assert 0 <= position.fret <= max_fret


@pytest.mark.parametrize("name", CHORDS)
def test_is_root_matches_recomputed_pitch_class(name: str) -> None:
    root_pitch_class = note_index(parse_chord_name(name).root)
    for voicing in generate_all_voicings(name):
        for position in voicing.positions:
            expected = pitch_class_at(position.string, position.fret) == root_pitch_class
            assert position.is_root == expected


@pytest.mark.parametrize("name", CHORDS)
def test_summary_statistics(name: str) -> None:
    for voicing in generate_all_voicings(name):
        fretted = [p.fret for p in voicing.positions if p.fret > 0]
        assert voicing.base_fret == (min(fretted) if fretted else 0)
        assert voicing.fret_span == (max(fretted) - voicing.base_fret if fretted else 0)
        assert voicing.avg_fret == pytest.approx(
            sum(p.fret for p in voicing.positions) / len(voicing.positions)
        )


def test_summarize_all_open_strings() -> None:
    positions = [Position(3, 0, False), Position(2, 0, False), Position(1, 0, True)]
    assert summarize_positions(positions) == (0, 0, 0.0)


def test_voicing_to_dict() -> None:
    data = generate_all_voicings("E")[0].to_dict()
    assert data["chordName"] == "E"
    assert data["shapeFamily"] == "E"
    assert data["baseFret"] == 1
    assert data["positions"][0] == {"string": 6, "fret": 0, "isRoot": True}
    assert data["voicedQuality"] == "major"
