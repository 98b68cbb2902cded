"""Voicing Generator — chord symbol → concrete fretboard fingerings.

Two entry points share the same string/fret coordinates:
    resolve_chord_positions  – one fingering per chord (open shape, E/A
                               barre, or a greedy low-fret scan)
    generate_all_voicings    – every viable CAGED voicing, sorted by
                               average fret, consumed by the optimizer

``is_root`` is always recomputed from the sounded pitch class; it is
never copied from a template.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .chord_parser import ChordSymbol, format_chord_name, parse_chord_name
from .notes import STRINGS, chord_pitch_classes, note_index, pitch_class_at
from .templates import (
    BARRE_FAMILIES,
    CAGED_SHAPES,
    FAMILY_ORDER,
    OPEN_SHAPES,
    ChordQuality,
    ShapeTemplate,
    shape_quality_for,
)


logger = logging.getLogger(__name__)

DEFAULT_MAX_FRET: int = 15
MIN_SOUNDED_STRINGS: int = 3

# Greedy fallback scan bounds
SCAN_MAX_FRET: int = 5
SCAN_MAX_ATTEMPTS: int = 6


# ── Public types ──────────────────────────────────────────────
@dataclass(frozen=True)
class Position:
    """One sounded string: ``string`` 1–6, ``fret`` ≥ 0."""

    string: int
    fret: int
    is_root: bool

    def to_dict(self) -> dict[str, Any]:
        return {"string": self.string, "fret": self.fret, "isRoot": self.is_root}


@dataclass(frozen=True)
class Voicing:
    """A concrete placement of a chord on the fretboard.

    Attributes:
        chord_name: The chord text this voicing realises.
        shape_family: CAGED family id (``"E"``, ``"A"``, ``"D"``, ``"G"``, ``"C"``).
        positions: Sounded strings, ordered string 6 → string 1.
        base_fret: Lowest fretted (> 0) fret, ``0`` if all strings are open.
        fret_span: Highest fretted fret minus ``base_fret``.
        avg_fret: Mean fret over all sounded strings (open strings count 0).
        voiced_quality: Template quality actually used; differs from the
            parsed quality when the generator had to approximate.
    """

    chord_name: str
    shape_family: str
    positions: tuple[Position, ...]
    base_fret: int
    fret_span: int
    avg_fret: float
    voiced_quality: ChordQuality

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping for rendering collaborators."""
        return {
            "chordName": self.chord_name,
            "shapeFamily": self.shape_family,
            "positions": [p.to_dict() for p in self.positions],
            "baseFret": self.base_fret,
            "fretSpan": self.fret_span,
            "avgFret": round(self.avg_fret, 4),
            "voicedQuality": self.voiced_quality.value,
        }


# ── Helpers ───────────────────────────────────────────────────
def _as_symbol(chord: ChordSymbol | str) -> tuple[str, ChordSymbol | None]:
    if isinstance(chord, ChordSymbol):
        return format_chord_name(chord), chord
    return str(chord).strip(), parse_chord_name(chord)


def transpose_template(
    template: ShapeTemplate,
    transpose: int,
    root_pitch_class: int,
) -> list[Position]:
    """Shift every sounded string of *template* by *transpose* frets.

    Args:
        template: Six-string shape template.
        transpose: Uniform fret offset (barre transpose).
        root_pitch_class: Pitch class used to recompute ``is_root``.

    Returns:
        Positions ordered string 6 → string 1, muted strings omitted.
    """
    positions: list[Position] = []
    for string, offset in template.sounded():
        fret = offset + transpose
        positions.append(
            Position(
                string=string,
                fret=fret,
                is_root=pitch_class_at(string, fret) == root_pitch_class,
            )
        )
    return positions


def summarize_positions(positions: list[Position] | tuple[Position, ...]) -> tuple[int, int, float]:
    """Return ``(base_fret, fret_span, avg_fret)`` for a set of positions."""
    fretted = [p.fret for p in positions if p.fret > 0]
    base_fret = min(fretted) if fretted else 0
    fret_span = (max(fretted) - base_fret) if fretted else 0
    avg_fret = sum(p.fret for p in positions) / len(positions) if positions else 0.0
    return base_fret, fret_span, avg_fret


def scan_positions(root_pitch_class: int, tones: frozenset[int]) -> list[Position]:
    """Greedy low-fret voicing: first chord tone per string in frets 0–5.

    Strings are visited 6 → 1, each at most once, and the scan stops after
    six attempts.
    """
    positions: list[Position] = []
    for string in STRINGS:
        if len(positions) >= SCAN_MAX_ATTEMPTS:
            break
        for fret in range(SCAN_MAX_FRET + 1):
            pitch_class = pitch_class_at(string, fret)
            if pitch_class in tones:
                positions.append(
                    Position(string=string, fret=fret, is_root=pitch_class == root_pitch_class)
                )
                break
    return positions


# ── Single-voicing resolver ───────────────────────────────────
def find_chord_shape(root_pitch_class: int, quality: ChordQuality) -> tuple[ShapeTemplate, int] | None:
    """Pick a template and transpose for one chord.

    Open roots (E, A, D, G, C) use their open shape when one exists.
    Other roots use the E- or A-shape barre with the smaller distance;
    ties, or a distance above 7, go to the A-shape.

    Returns:
        ``(template, transpose)``, or ``None`` when no barre template covers
        *quality*.
    """
    open_shape = OPEN_SHAPES.get((root_pitch_class, quality))
    if open_shape is not None:
        return open_shape, 0

    e_family, a_family = BARRE_FAMILIES
    from_e = (root_pitch_class - CAGED_SHAPES[e_family][ChordQuality.MAJOR].root_pitch_class) % 12
    from_a = (root_pitch_class - CAGED_SHAPES[a_family][ChordQuality.MAJOR].root_pitch_class) % 12

    if from_e < from_a and from_e <= 7:
        family, transpose = e_family, from_e
    else:
        family, transpose = a_family, from_a

    template = CAGED_SHAPES[family].get(quality)
    if template is None:
        return None
    return template, transpose


def resolve_chord_positions(chord: ChordSymbol | str) -> list[Position]:
    """Resolve one fingering for a chord name.

    Args:
        chord: Chord text such as ``"Bbm7"`` or an already parsed symbol.

    Returns:
        Positions ordered string 6 → string 1; empty on parse failure.
    """
    name, symbol = _as_symbol(chord)
    if symbol is None:
        logger.warning("Could not parse chord: %r", name)
        return []

    root_pitch_class = note_index(symbol.root)
    if root_pitch_class == -1:
        logger.warning("Unknown root note: %r", symbol.root)
        return []

    found = find_chord_shape(root_pitch_class, symbol.quality)
    if found is not None:
        template, transpose = found
        return transpose_template(template, transpose, root_pitch_class)

    tones = chord_pitch_classes(symbol.root, symbol.quality)
    return scan_positions(root_pitch_class, tones)


# ── Exhaustive generator ──────────────────────────────────────
def generate_all_voicings(
    chord: ChordSymbol | str,
    max_fret: int = DEFAULT_MAX_FRET,
) -> list[Voicing]:
    """Generate every viable CAGED voicing for a chord.

    Qualities outside major / minor / 7 / m7 / maj7 are voiced with the
    nearest major or minor template (see
    :data:`~.templates.SHAPE_QUALITY_APPROXIMATIONS`); the substitution is
    recorded in :attr:`Voicing.voiced_quality`.

    Args:
        chord: Chord text or parsed symbol.
        max_fret: Voicings reaching past this fret are discarded.

    Returns:
        Voicings sorted by ``avg_fret`` ascending; ties keep family order
        E, A, D, G, C.  Empty on parse failure.
    """
    name, symbol = _as_symbol(chord)
    if symbol is None:
        return []

    root_pitch_class = note_index(symbol.root)
    if root_pitch_class == -1:
        return []

    shape_quality = shape_quality_for(symbol.quality)
    if shape_quality is not symbol.quality:
        logger.debug(
            "Approximating %s (%s) with %s shapes",
            name, symbol.quality.value, shape_quality.value,
        )

    voicings: list[Voicing] = []
    for family in FAMILY_ORDER:
        template = CAGED_SHAPES[family].get(shape_quality)
        if template is None:
            continue

        transpose = (root_pitch_class - template.root_pitch_class + 12) % 12
        positions = transpose_template(template, transpose, root_pitch_class)

        if any(p.fret > max_fret for p in positions):
            continue
        if len(positions) < MIN_SOUNDED_STRINGS:
            continue

        base_fret, fret_span, avg_fret = summarize_positions(positions)
        voicings.append(
            Voicing(
                chord_name=name,
                shape_family=family,
                positions=tuple(positions),
                base_fret=base_fret,
                fret_span=fret_span,
                avg_fret=avg_fret,
                voiced_quality=shape_quality,
            )
        )

    # list.sort is stable, so equal avg_fret keeps family order
    voicings.sort(key=lambda v: v.avg_fret)
    return voicings
