"""Note Model — semitone arithmetic and note-name spelling tables.

Pitch classes are integers 0–11 (C = 0).  Spelling goes through the sharp
table by default; the flat table is a display override only and never
changes the underlying pitch class.

Strings are numbered 1–6 with 6 = low E (standard tuning).
"""

from __future__ import annotations

from types import MappingProxyType

from .templates import CHORD_INTERVALS, ChordQuality, coerce_quality


# ── Spelling tables ───────────────────────────────────────────
NOTE_NAMES: tuple[str, ...] = (
    "C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B",
)

FLAT_NAMES: tuple[str, ...] = (
    "C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B",
)

# Canonical spellings plus the common enharmonic synonyms
NOTE_SEMITONES: MappingProxyType[str, int] = MappingProxyType(
    {
        "C": 0, "B#": 0,
        "C#": 1, "Db": 1,
        "D": 2,
        "D#": 3, "Eb": 3,
        "E": 4, "Fb": 4,
        "F": 5, "E#": 5,
        "F#": 6, "Gb": 6,
        "G": 7,
        "G#": 8, "Ab": 8,
        "A": 9,
        "A#": 10, "Bb": 10,
        "B": 11, "Cb": 11,
    }
)

# ── Standard tuning ───────────────────────────────────────────
OPEN_STRING_SEMITONES: MappingProxyType[int, int] = MappingProxyType(
    {
        6: 4,   # E (low)
        5: 9,   # A
        4: 2,   # D
        3: 7,   # G
        2: 11,  # B
        1: 4,   # E (high)
    }
)

STRINGS: tuple[int, ...] = (6, 5, 4, 3, 2, 1)
SEMITONES_PER_OCTAVE: int = 12


def note_index(name: str) -> int:
    """Return the pitch class of a spelled note, or ``-1`` if unknown.

    Args:
        name: Note spelling such as ``"F#"`` or ``"Bb"``.

    Returns:
        Pitch class 0–11, or ``-1`` for an unrecognised spelling.
    """
    return NOTE_SEMITONES.get(name, -1)


def spell(pitch_class: int, use_flats: bool = False) -> str:
    """Spell a pitch class through the sharp (default) or flat table."""
    table = FLAT_NAMES if use_flats else NOTE_NAMES
    return table[pitch_class % SEMITONES_PER_OCTAVE]


def _check_position(string: int, fret: int) -> None:
    if string not in OPEN_STRING_SEMITONES:
        raise ValueError(f"String must be 1–6. Got: {string}")
    if fret < 0:
        raise ValueError(f"Fret must be non-negative. Got: {fret}")


def pitch_class_at(string: int, fret: int) -> int:
    """Pitch class sounded by *string* stopped at *fret*.

    Raises:
        ValueError: If *string* is outside 1–6 or *fret* is negative.
    """
    _check_position(string, fret)
    return (OPEN_STRING_SEMITONES[string] + fret) % SEMITONES_PER_OCTAVE


def note_at(string: int, fret: int, use_flats: bool = False) -> str:
    """Spelled note name at a fretboard position.

    Args:
        string: String number (1–6, 6 = low E).
        fret: Fret number (0 = open string).
        use_flats: Respell accidentals as flats for display.

    Returns:
        Note name, e.g. ``"C#"`` (or ``"Db"`` with *use_flats*).
    """
    return spell(pitch_class_at(string, fret), use_flats)


def chord_pitch_classes(root: str, quality: ChordQuality | str) -> frozenset[int]:
    """Set of pitch classes in a chord; empty for an unknown root/quality."""
    root_index = note_index(root)
    intervals = CHORD_INTERVALS.get(coerce_quality(quality))
    if root_index == -1 or intervals is None:
        return frozenset()
    return frozenset((root_index + iv) % SEMITONES_PER_OCTAVE for iv in intervals)


def chord_notes(
    root: str,
    quality: ChordQuality | str,
    use_flats: bool = False,
) -> list[str]:
    """Spelled chord tones in interval order.

    Pitch classes only: extensions above the octave (e.g. a ninth = 14)
    wrap modulo 12 and no octave is tracked.

    Args:
        root: Root spelling, e.g. ``"F#"``.
        quality: Chord quality tag, e.g. ``"maj7"``.
        use_flats: Respell accidentals as flats for display.

    Returns:
        List of note names; empty if the root or quality is unknown.
    """
    root_index = note_index(root)
    intervals = CHORD_INTERVALS.get(coerce_quality(quality))
    if root_index == -1 or intervals is None:
        return []
    return [spell(root_index + iv, use_flats) for iv in intervals]
