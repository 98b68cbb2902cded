"""Search — classify a free-text query as a progression, a chord, or a song.

The song table is static data in ``configs/songs.yaml``; it is a keyword
lookup only and plays no part in the theory engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

from src.config import DEFAULT_SONGS_PATH, load_yaml_config

from .chord_parser import parse_chord_name
from .notes import chord_notes
from .progression_parser import is_progression, parse_progression


@dataclass(frozen=True)
class Song:
    """One entry of the song lookup table."""

    key_name: str
    title: str
    artist: str
    chords: tuple[str, ...]
    key: str


@dataclass(frozen=True)
class SearchResult:
    """Outcome of :func:`handle_search`.

    ``kind`` is one of ``"empty"``, ``"progression"``, ``"chord"``,
    ``"songs"`` or ``"notfound"``; ``result`` holds the matching payload.
    """

    kind: str
    result: Any = None


@lru_cache(maxsize=4)
def load_songs(songs_path: str | Path = DEFAULT_SONGS_PATH) -> tuple[Song, ...]:
    """Load the song table.

    Raises:
        FileNotFoundError: If the YAML file does not exist.
        ValueError: If the file has no ``songs`` mapping.
    """
    cfg = load_yaml_config(songs_path, ["songs"])
    songs = cfg["songs"]
    if not isinstance(songs, dict):
        raise ValueError(f"'songs' must be a mapping in: {songs_path}")

    return tuple(
        Song(
            key_name=str(key_name),
            title=str(entry["title"]),
            artist=str(entry["artist"]),
            chords=tuple(str(c) for c in entry["chords"]),
            key=str(entry["key"]),
        )
        for key_name, entry in songs.items()
    )


def search_songs(query: str, songs_path: str | Path = DEFAULT_SONGS_PATH) -> list[Song]:
    """Songs whose key, title or artist contains *query* (case-insensitive)."""
    if not query or not query.strip():
        return []

    needle = query.strip().lower()
    return [
        song
        for song in load_songs(songs_path)
        if needle in song.key_name.lower()
        or needle in song.title.lower()
        or needle in song.artist.lower()
    ]


def search_chord(query: str) -> dict[str, Any] | None:
    """Parse *query* as a chord and attach its spelled notes."""
    symbol = parse_chord_name(query)
    if symbol is None:
        return None
    return {
        "name": query.strip(),
        "root": symbol.root,
        "quality": symbol.quality.value,
        "bass": symbol.bass,
        "notes": chord_notes(symbol.root, symbol.quality),
    }


def handle_search(query: str, songs_path: str | Path = DEFAULT_SONGS_PATH) -> SearchResult:
    """Route a query: progression first, then a single chord, then songs.

    Args:
        query: Raw search text.
        songs_path: Song table YAML.

    Returns:
        A :class:`SearchResult` describing what matched.
    """
    if not query or not query.strip():
        return SearchResult("empty")

    if is_progression(query):
        chords = parse_progression(query)
        if len(chords) > 1:
            return SearchResult("progression", chords)

    chord = search_chord(query)
    if chord is not None and chord["notes"]:
        return SearchResult("chord", chord)

    songs = search_songs(query, songs_path)
    if songs:
        return SearchResult("songs", songs)

    return SearchResult("notfound")
