"""Chord Name Parser — text → :class:`ChordSymbol`.

Malformed input never raises: an empty string or an unrecognised root
letter yields ``None``.  An unrecognised quality suffix defaults to major.

Quality classification walks :data:`QUALITY_RULES` in order and stops at
the first match.  Order is load-bearing:
    - ``maj``/``M7``/``Δ`` markers come before the bare lowercase ``m``,
      otherwise ``Cmaj7`` would read as a minor chord.
    - every minor-marked extension (``m7``, ``m9``, ``m6``, ``m7b5``,
      ``mMaj7``) comes before the bare minor rule.
    - ``dim7``/``aug7``/``7sus4`` come before ``dim``/``aug``/``7``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .templates import ChordQuality


logger = logging.getLogger(__name__)

_CHORD_RE = re.compile(r"^([A-Ga-g])([#b]?)(.*)$", re.DOTALL)


@dataclass(frozen=True)
class ChordSymbol:
    """A parsed chord name.

    Attributes:
        root: Root letter (uppercase) plus optional accidental, e.g. ``"F#"``.
        quality: Classified chord quality.
        bass: Bass note text of a slash chord, or ``None``.
    """

    root: str
    quality: ChordQuality
    bass: str | None = None


@dataclass(frozen=True)
class QualityRule:
    """One row of the quality precedence table."""

    pattern: re.Pattern[str]
    quality: ChordQuality


def _rule(pattern: str, quality: ChordQuality, ignore_case: bool = False) -> QualityRule:
    flags = re.IGNORECASE if ignore_case else 0
    return QualityRule(re.compile(pattern, flags), quality)


_Q = ChordQuality

# ── Precedence table (first match wins) ───────────────────────
QUALITY_RULES: tuple[QualityRule, ...] = (
    _rule(r"^(m7b5|min7b5|ø)", _Q.HALF_DIM7),
    _rule(r"^(mmaj7|mMaj7|mM7|minmaj7|minMaj7|m\(maj7\))", _Q.MIN_MAJ7),
    _rule(r"^(maj9|Maj9|M9|Δ9)", _Q.MAJ9),
    _rule(r"^(maj7|Maj7|M7|Δ7|Δ)", _Q.MAJ7),
    _rule(r"^(maj|Maj)", _Q.MAJOR),
    _rule(r"^(m9|min9|-9)", _Q.MIN9),
    _rule(r"^(m7|min7|-7)", _Q.MIN7),
    _rule(r"^(m6|min6|-6)", _Q.MIN6),
    _rule(r"^(m|min|-)", _Q.MINOR),
    _rule(r"^(dim7|°7|o7)", _Q.DIM7, ignore_case=True),
    _rule(r"^(aug7|\+7)", _Q.AUG7, ignore_case=True),
    _rule(r"^7sus4", _Q.DOM7_SUS4, ignore_case=True),
    _rule(r"^add9", _Q.ADD9, ignore_case=True),
    _rule(r"^sus2", _Q.SUS2, ignore_case=True),
    _rule(r"^sus4?", _Q.SUS4, ignore_case=True),
    _rule(r"^(dim|°|o)", _Q.DIM, ignore_case=True),
    _rule(r"^(aug|\+)", _Q.AUG, ignore_case=True),
    _rule(r"^9", _Q.DOM9),
    _rule(r"^7", _Q.DOM7),
    _rule(r"^6", _Q.SIX),
)


def classify_quality(quality_text: str) -> ChordQuality:
    """Map a quality suffix (``"m7"``, ``"sus4"`` …) to a :class:`ChordQuality`.

    Unrecognised text defaults to major.
    """
    for rule in QUALITY_RULES:
        if rule.pattern.search(quality_text):
            return rule.quality
    return ChordQuality.MAJOR


def parse_chord_name(text: object) -> ChordSymbol | None:
    """Parse a chord name such as ``"Em7"``, ``"F#maj7"`` or ``"C/G"``.

    Args:
        text: Raw chord text.  Non-string input is treated as a failure.

    Returns:
        A :class:`ChordSymbol`, or ``None`` when the text is empty or does
        not start with a root letter A–G.
    """
    if not isinstance(text, str):
        return None

    text = text.strip()
    if not text:
        return None

    match = _CHORD_RE.match(text)
    if match is None:
        logger.debug("Could not parse chord: %r", text)
        return None

    letter, accidental, quality_text = match.groups()

    bass: str | None = None
    if "/" in quality_text:
        quality_text, _, bass_text = quality_text.partition("/")
        bass = bass_text.strip() or None

    return ChordSymbol(
        root=letter.upper() + accidental,
        quality=classify_quality(quality_text.strip()),
        bass=bass,
    )


_DISPLAY_SUFFIXES: dict[ChordQuality, str] = {
    ChordQuality.MAJOR: "",
    ChordQuality.MINOR: "m",
}


def format_chord_name(symbol: ChordSymbol) -> str:
    """Render a symbol back to a compact name, e.g. ``"Am"`` or ``"C/G"``."""
    suffix = _DISPLAY_SUFFIXES.get(symbol.quality, symbol.quality.value)
    name = f"{symbol.root}{suffix}"
    if symbol.bass:
        name += f"/{symbol.bass}"
    return name


def is_chord(text: object) -> bool:
    """``True`` if *text* parses as a chord name."""
    return parse_chord_name(text) is not None
