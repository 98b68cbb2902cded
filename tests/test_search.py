"""Unit tests for query routing and song lookup."""

import pytest

from src.chord_engine.search import handle_search, load_songs, search_chord, search_songs


def test_song_table_loads() -> None:
    songs = load_songs()
    assert len(songs) == 10
    assert all(song.chords for song in songs)


@pytest.mark.parametrize(
    "query, title",
    [
        ("wonderwall", "Wonderwall"),
        ("Hotel", "Hotel California"),
        ("metallica", "Nothing Else Matters"),
        ("pink floyd", "Wish You Were Here"),
    ],
)
def test_search_songs(query: str, title: str) -> None:
    assert title in [song.title for song in search_songs(query)]


def test_search_songs_empty_query() -> None:
    assert search_songs("   ") == []


def test_search_chord() -> None:
    result = search_chord("F#maj7")
    assert result["root"] == "F#"
    assert result["quality"] == "maj7"
    assert result["notes"] == ["F#", "A#", "C#", "F"]


def test_route_progression() -> None:
    outcome = handle_search("Am, F, C")
    assert outcome.kind == "progression"
    assert outcome.result == ["Am", "F", "C"]


def test_route_chord() -> None:
    outcome = handle_search("F#maj7")
    assert outcome.kind == "chord"
    assert outcome.result["name"] == "F#maj7"


def test_route_songs() -> None:
    outcome = handle_search("wonderwall")
    assert outcome.kind == "songs"
    assert outcome.result[0].chords == ("Em7", "G", "Dsus4", "A7sus4")


def test_words_starting_with_a_note_letter_read_as_chords() -> None:
    # chord lookup runs before the song table
    assert handle_search("blackbird").kind == "chord"
    assert [song.title for song in search_songs("blackbird")] == ["Blackbird"]


@pytest.mark.parametrize("query, kind", [("", "empty"), ("   ", "empty"), ("zzz", "notfound")])
def test_route_empty_and_missing(query: str, kind: str) -> None:
    assert handle_search(query).kind == kind


def test_custom_song_table(tmp_path) -> None:
    table = tmp_path / "songs.yaml"
    table.write_text(
        "songs:\n"
        "  test song:\n"
        "    title: Test Song\n"
        "    artist: Nobody\n"
        "    chords: [C, G]\n"
        "    key: C major\n",
        encoding="utf-8",
    )
    (song,) = search_songs("nobody", table)
    assert song.chords == ("C", "G")


def test_song_key_match_ignores_case(tmp_path) -> None:
    table = tmp_path / "songs.yaml"
    table.write_text(
        "songs:\n"
        "  Campfire Tune:\n"
        "    title: Something Else\n"
        "    artist: Nobody\n"
        "    chords: [G, D]\n"
        "    key: G major\n",
        encoding="utf-8",
    )
    (song,) = search_songs("campfire", table)
    assert song.title == "Something Else"
