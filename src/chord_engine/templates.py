"""Chord Template Library — interval sets and CAGED shape templates.

Static, read-only tables:
    CHORD_INTERVALS             – quality → semitone offsets from the root
    OPEN_SHAPES                 – open-position shapes for roots E, A, D, G, C
    CAGED_SHAPES                – movable family templates (E, A, D, G, C)
    SHAPE_QUALITY_APPROXIMATIONS – quality → nearest template quality

Shape templates list one entry per string, ordered string 6 (low E) to
string 1 (high E).  ``None`` marks a muted string; an integer is the fret
offset before transposition.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType


class ChordQuality(str, Enum):
    """Chord quality tag.  Members compare equal to their string value."""

    MAJOR = "major"
    MINOR = "minor"
    DIM = "dim"
    AUG = "aug"
    MAJ7 = "maj7"
    DOM7 = "7"
    MIN7 = "m7"
    DIM7 = "dim7"
    HALF_DIM7 = "m7b5"
    MIN_MAJ7 = "mMaj7"
    AUG7 = "aug7"
    DOM9 = "9"
    MAJ9 = "maj9"
    MIN9 = "m9"
    ADD9 = "add9"
    SIX = "6"
    MIN6 = "m6"
    SUS2 = "sus2"
    SUS4 = "sus4"
    DOM7_SUS4 = "7sus4"


def coerce_quality(quality: ChordQuality | str) -> ChordQuality | None:
    """Return *quality* as a :class:`ChordQuality`, or ``None`` if unknown."""
    try:
        return ChordQuality(quality)
    except ValueError:
        return None


# ── Interval sets ─────────────────────────────────────────────
_Q = ChordQuality

CHORD_INTERVALS: MappingProxyType[ChordQuality, tuple[int, ...]] = MappingProxyType(
    {
        # Triads
        _Q.MAJOR: (0, 4, 7),
        _Q.MINOR: (0, 3, 7),
        _Q.DIM: (0, 3, 6),
        _Q.AUG: (0, 4, 8),
        # Sevenths
        _Q.MAJ7: (0, 4, 7, 11),
        _Q.DOM7: (0, 4, 7, 10),
        _Q.MIN7: (0, 3, 7, 10),
        _Q.DIM7: (0, 3, 6, 9),
        _Q.HALF_DIM7: (0, 3, 6, 10),
        _Q.MIN_MAJ7: (0, 3, 7, 11),
        _Q.AUG7: (0, 4, 8, 10),
        # Extensions
        _Q.DOM9: (0, 4, 7, 10, 14),
        _Q.MAJ9: (0, 4, 7, 11, 14),
        _Q.MIN9: (0, 3, 7, 10, 14),
        _Q.ADD9: (0, 4, 7, 14),
        _Q.SIX: (0, 4, 7, 9),
        _Q.MIN6: (0, 3, 7, 9),
        # Suspended
        _Q.SUS2: (0, 2, 7),
        _Q.SUS4: (0, 5, 7),
        _Q.DOM7_SUS4: (0, 5, 7, 10),
    }
)


# ── Shape template value type ─────────────────────────────────
FretEntry = int | None


@dataclass(frozen=True)
class ShapeTemplate:
    """One six-string fingering template.

    Attributes:
        family: Shape family id (``"E"``, ``"A"``, ``"D"``, ``"G"``, ``"C"``).
        quality: Chord quality the template voices.
        frets: Exactly six entries, string 6 → string 1; ``None`` = muted.
        root_pitch_class: Pitch class of the untransposed template's root.
    """

    family: str
    quality: ChordQuality
    frets: tuple[FretEntry, FretEntry, FretEntry, FretEntry, FretEntry, FretEntry]
    root_pitch_class: int

    def __post_init__(self) -> None:
        if len(self.frets) != 6:
            raise ValueError(
                f"Shape {self.family}/{self.quality.value} needs 6 string entries, "
                f"got {len(self.frets)}"
            )
        for fret in self.frets:
            if fret is not None and fret < 0:
                raise ValueError(
                    f"Shape {self.family}/{self.quality.value} has negative fret {fret}"
                )

    def sounded(self) -> list[tuple[int, int]]:
        """``(string, fret_offset)`` pairs for every non-muted string."""
        return [
            (6 - index, fret)
            for index, fret in enumerate(self.frets)
            if fret is not None
        ]


# ── CAGED families ────────────────────────────────────────────
# Iteration order is load-bearing: it breaks avg_fret ties in the generator.
FAMILY_ORDER: tuple[str, ...] = ("E", "A", "D", "G", "C")

# Pitch class of each family's open-chord root (E=4, A=9, D=2, G=7, C=0)
FAMILY_ROOTS: MappingProxyType[str, int] = MappingProxyType(
    {"E": 4, "A": 9, "D": 2, "G": 7, "C": 0}
)

SUPPORTED_SHAPE_QUALITIES: tuple[ChordQuality, ...] = (
    _Q.MAJOR,
    _Q.MINOR,
    _Q.DOM7,
    _Q.MIN7,
    _Q.MAJ7,
)

# Lossy: qualities without their own templates borrow the triad whose third
# matches.  Voicings produced this way carry the borrowed quality in
# ``Voicing.voiced_quality``.
SHAPE_QUALITY_APPROXIMATIONS: MappingProxyType[ChordQuality, ChordQuality] = MappingProxyType(
    {
        _Q.DIM: _Q.MINOR,
        _Q.DIM7: _Q.MINOR,
        _Q.HALF_DIM7: _Q.MINOR,
        _Q.MIN_MAJ7: _Q.MINOR,
        _Q.MIN6: _Q.MINOR,
        _Q.MIN9: _Q.MINOR,
        _Q.AUG: _Q.MAJOR,
        _Q.AUG7: _Q.MAJOR,
        _Q.SUS2: _Q.MAJOR,
        _Q.SUS4: _Q.MAJOR,
        _Q.DOM7_SUS4: _Q.MAJOR,
        _Q.SIX: _Q.MAJOR,
        _Q.DOM9: _Q.MAJOR,
        _Q.MAJ9: _Q.MAJOR,
        _Q.ADD9: _Q.MAJOR,
    }
)


def shape_quality_for(quality: ChordQuality) -> ChordQuality:
    """Template quality used to voice *quality* in the CAGED generator."""
    if quality in SUPPORTED_SHAPE_QUALITIES:
        return quality
    return SHAPE_QUALITY_APPROXIMATIONS.get(quality, _Q.MAJOR)


def _shapes(family: str, table: dict[ChordQuality, tuple]) -> MappingProxyType:
    root = FAMILY_ROOTS[family]
    return MappingProxyType(
        {
            quality: ShapeTemplate(family, quality, frets, root)
            for quality, frets in table.items()
        }
    )


_X = None  # muted

CAGED_SHAPES: MappingProxyType[str, MappingProxyType[ChordQuality, ShapeTemplate]] = MappingProxyType(
    {
        # Root on string 6
        "E": _shapes("E", {
            _Q.MAJOR: (0, 2, 2, 1, 0, 0),
            _Q.MINOR: (0, 2, 2, 0, 0, 0),
            _Q.DOM7: (0, 2, 0, 1, 0, 0),
            _Q.MIN7: (0, 2, 0, 0, 0, 0),
            _Q.MAJ7: (0, 2, 1, 1, 0, 0),
        }),
        # Root on string 5
        "A": _shapes("A", {
            _Q.MAJOR: (_X, 0, 2, 2, 2, 0),
            _Q.MINOR: (_X, 0, 2, 2, 1, 0),
            _Q.DOM7: (_X, 0, 2, 0, 2, 0),
            _Q.MIN7: (_X, 0, 2, 0, 1, 0),
            _Q.MAJ7: (_X, 0, 2, 1, 2, 0),
        }),
        # Root on string 4
        "D": _shapes("D", {
            _Q.MAJOR: (_X, _X, 0, 2, 3, 2),
            _Q.MINOR: (_X, _X, 0, 2, 3, 1),
            _Q.DOM7: (_X, _X, 0, 2, 1, 2),
            _Q.MIN7: (_X, _X, 0, 2, 1, 1),
            _Q.MAJ7: (_X, _X, 0, 2, 2, 2),
        }),
        # Root on string 6, third fret
        "G": _shapes("G", {
            _Q.MAJOR: (3, 2, 0, 0, 0, 3),
            _Q.MINOR: (3, 1, 0, 0, 3, 3),
            _Q.DOM7: (3, 2, 0, 0, 0, 1),
            _Q.MIN7: (3, 1, 0, 0, 3, 1),
            _Q.MAJ7: (3, 2, 0, 0, 0, 2),
        }),
        # Root on string 5, third fret
        "C": _shapes("C", {
            _Q.MAJOR: (_X, 3, 2, 0, 1, 0),
            _Q.MINOR: (_X, 3, 1, 0, 1, _X),
            _Q.DOM7: (_X, 3, 2, 3, 1, 0),
            _Q.MIN7: (_X, 3, 1, 3, 1, _X),
            _Q.MAJ7: (_X, 3, 2, 0, 0, 0),
        }),
    }
)

# Open-position chords played as-is (transpose 0) by the single resolver
OPEN_SHAPES: MappingProxyType[tuple[int, ChordQuality], ShapeTemplate] = MappingProxyType(
    {
        (template.root_pitch_class, template.quality): template
        for template in (
            CAGED_SHAPES["E"][_Q.MAJOR],
            CAGED_SHAPES["E"][_Q.MINOR],
            CAGED_SHAPES["E"][_Q.DOM7],
            CAGED_SHAPES["E"][_Q.MIN7],
            CAGED_SHAPES["E"][_Q.MAJ7],
            CAGED_SHAPES["A"][_Q.MAJOR],
            CAGED_SHAPES["A"][_Q.MINOR],
            CAGED_SHAPES["A"][_Q.DOM7],
            CAGED_SHAPES["A"][_Q.MIN7],
            CAGED_SHAPES["A"][_Q.MAJ7],
            CAGED_SHAPES["D"][_Q.MAJOR],
            CAGED_SHAPES["D"][_Q.MINOR],
            CAGED_SHAPES["D"][_Q.DOM7],
            CAGED_SHAPES["D"][_Q.MIN7],
            CAGED_SHAPES["G"][_Q.MAJOR],
            CAGED_SHAPES["C"][_Q.MAJOR],
        )
    }
)

# Movable barre templates used for roots without an open shape
BARRE_FAMILIES: tuple[str, str] = ("E", "A")
