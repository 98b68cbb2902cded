"""Progression Parser — free text → ordered list of chord tokens.

Accepted separators: commas, hyphens, or runs of two or more spaces, e.g.
``"Fmaj7, Bb, Am, Dm7"`` or ``"Fmaj7 - Bb - Am - Dm7"``.  Plain single
spaces (``"Am C G"``) are accepted only when every token is a chord.
"""

from __future__ import annotations

import re

from .chord_parser import is_chord


_SEPARATOR_RE = re.compile(r"[,\-]+|\s{2,}")
_PROGRESSION_HINT_RE = re.compile(r"[,\-]")


def is_progression(text: str | None) -> bool:
    """``True`` if *text* looks like more than one chord."""
    if not text:
        return False
    return bool(_PROGRESSION_HINT_RE.search(text)) or len(text.split()) > 1


def parse_progression(text: str | None) -> list[str]:
    """Split a progression string into individually valid chord names.

    Args:
        text: Raw progression text.

    Returns:
        Chord tokens in input order.  Tokens that do not parse as chords
        are dropped silently.
    """
    if not text:
        return []

    parts = [part.strip() for part in _SEPARATOR_RE.split(text)]
    parts = [part for part in parts if part]

    # No separator found: fall back to single spaces, all-or-nothing
    if len(parts) == 1:
        space_parts = text.split()
        if len(space_parts) > 1 and all(is_chord(p) for p in space_parts):
            return space_parts

    return [part for part in parts if is_chord(part)]
