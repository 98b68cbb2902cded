"""MIDI Export — turn voicings into playable MIDI via *pretty_midi*.

Responsibilities:
    - Map a ``(string, fret)`` pair to a MIDI note number and frequency
      (standard tuning, E2–E4 open strings).
    - Render one voicing as a strummed chord.
    - Write a whole progression to a ``.mid`` file, one chord per
      ``beats_per_chord`` beats, chord names stored as lyric events.

No theory logic lives here; input is whatever the voicing generator or the
optimizer returned.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

import pretty_midi

from .voicings import Position, Voicing


# ── Standard tuning, MIDI note numbers ────────────────────────
OPEN_STRING_MIDI: dict[int, int] = {
    6: 40,  # E2
    5: 45,  # A2
    4: 50,  # D3
    3: 55,  # G3
    2: 59,  # B3
    1: 64,  # E4
}

GUITAR_PROGRAM: int = pretty_midi.instrument_name_to_program("Acoustic Guitar (nylon)")
STRUM_DIRECTIONS: tuple[str, str] = ("down", "up")


def position_to_midi(string: int, fret: int) -> int:
    """MIDI note number sounded at a fretboard position.

    Raises:
        ValueError: If *string* is outside 1–6 or *fret* is negative.
    """
    if string not in OPEN_STRING_MIDI:
        raise ValueError(f"String must be 1–6. Got: {string}")
    if fret < 0:
        raise ValueError(f"Fret must be non-negative. Got: {fret}")
    return OPEN_STRING_MIDI[string] + fret


def position_frequency(string: int, fret: int) -> float:
    """Frequency in Hz at a fretboard position (A4 = 440 Hz)."""
    return float(pretty_midi.note_number_to_hz(position_to_midi(string, fret)))


def strum_notes(
    positions: Iterable[Position],
    start: float,
    duration: float,
    direction: str = "down",
    strum_ms: float = 30.0,
    velocity: int = 90,
) -> list[pretty_midi.Note]:
    """Render positions as a strummed chord.

    Args:
        positions: Sounded strings of one voicing.
        start: Onset of the first stroke in seconds.
        duration: How long the chord rings, measured from *start*.
        direction: ``"down"`` strums string 6 → 1, ``"up"`` strums 1 → 6.
        strum_ms: Delay between consecutive strings in milliseconds.
        velocity: MIDI velocity 0–127.

    Returns:
        One ``pretty_midi.Note`` per position, in strum order.
    """
    if direction not in STRUM_DIRECTIONS:
        raise ValueError(f"Direction must be one of {STRUM_DIRECTIONS}. Got: {direction!r}")

    ordered = sorted(positions, key=lambda p: p.string, reverse=(direction == "down"))
    end = start + duration

    notes: list[pretty_midi.Note] = []
    for i, position in enumerate(ordered):
        onset = round(start + i * strum_ms / 1000.0, 6)
        notes.append(
            pretty_midi.Note(
                velocity=velocity,
                pitch=position_to_midi(position.string, position.fret),
                start=onset,
                end=max(end, onset + 0.01),
            )
        )
    return notes


def voicings_to_midi(
    voicings: Sequence[Voicing],
    tempo: float = 80.0,
    beats_per_chord: int = 2,
    direction: str = "down",
    strum_ms: float = 30.0,
) -> pretty_midi.PrettyMIDI:
    """Build a MIDI object playing each voicing in turn.

    Args:
        voicings: Voicings in playback order.
        tempo: Tempo in BPM.
        beats_per_chord: Beats each chord is held.
        direction: Strum direction, ``"down"`` or ``"up"``.
        strum_ms: Delay between strings in milliseconds.

    Returns:
        A ``pretty_midi.PrettyMIDI`` with one guitar track and a lyric
        event carrying each chord name.
    """
    midi_data = pretty_midi.PrettyMIDI(initial_tempo=tempo)
    guitar = pretty_midi.Instrument(program=GUITAR_PROGRAM, name="Guitar")

    seconds_per_chord = 60.0 / tempo * beats_per_chord
    for i, voicing in enumerate(voicings):
        start = i * seconds_per_chord
        guitar.notes.extend(
            strum_notes(voicing.positions, start, seconds_per_chord, direction, strum_ms)
        )
        midi_data.lyrics.append(pretty_midi.Lyric(text=voicing.chord_name, time=start))

    midi_data.instruments.append(guitar)
    return midi_data


def export_midi(
    voicings: Sequence[Voicing],
    midi_path: str | Path,
    tempo: float = 80.0,
    beats_per_chord: int = 2,
) -> Path:
    """Write *voicings* to a MIDI file and return its path."""
    midi_path = Path(midi_path)
    midi_path.parent.mkdir(parents=True, exist_ok=True)
    voicings_to_midi(voicings, tempo=tempo, beats_per_chord=beats_per_chord).write(str(midi_path))
    return midi_path
