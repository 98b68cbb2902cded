"""Progression session — caller-owned navigation state over an optimized progression.

The engine itself is stateless.  A :class:`ProgressionSession` holds the
loaded chords, the voicing chosen for each, and the current position, and
steps forward/backward with optional looping.  Playback timing belongs to
the caller.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .cost_model import MovementCostModel
from .solver import DEFAULT_FRET_RANGE, DEFAULT_PREFERRED_FRET, optimize_progression
from .voicings import DEFAULT_MAX_FRET, Voicing


@dataclass
class ProgressionSession:
    """Loaded progression plus a cursor.

    Attributes:
        chords: Chord names in order.
        voicings: One optimized voicing per chord.
        current_index: Index of the chord currently shown.
        loop_enabled: Wrap around at either end when stepping.
    """

    chords: list[str] = field(default_factory=list)
    voicings: list[Voicing] = field(default_factory=list)
    current_index: int = 0
    loop_enabled: bool = True

    @classmethod
    def load(
        cls,
        chords: Sequence[str],
        preferred_fret: float = DEFAULT_PREFERRED_FRET,
        fret_range: float = DEFAULT_FRET_RANGE,
        max_fret: int = DEFAULT_MAX_FRET,
        cost_model: MovementCostModel | None = None,
        config_path: str | Path | None = None,
        loop_enabled: bool = True,
    ) -> ProgressionSession:
        """Optimize *chords* and start a session at the first chord."""
        voicings = optimize_progression(
            chords,
            preferred_fret=preferred_fret,
            fret_range=fret_range,
            max_fret=max_fret,
            cost_model=cost_model,
            config_path=config_path,
        )
        return cls(chords=list(chords), voicings=voicings, loop_enabled=loop_enabled)

    def __len__(self) -> int:
        return len(self.voicings)

    @property
    def current(self) -> Voicing | None:
        """Voicing at the cursor, or ``None`` for an empty session."""
        if not self.voicings:
            return None
        return self.voicings[self.current_index]

    def go_to(self, index: int) -> Voicing | None:
        """Move the cursor to *index*; out-of-range indices are ignored."""
        if 0 <= index < len(self.voicings):
            self.current_index = index
        return self.current

    def next_chord(self) -> Voicing | None:
        """Step forward, wrapping to the start when looping."""
        if not self.voicings:
            return None
        index = self.current_index + 1
        if index >= len(self.voicings):
            index = 0 if self.loop_enabled else len(self.voicings) - 1
        return self.go_to(index)

    def prev_chord(self) -> Voicing | None:
        """Step backward, wrapping to the end when looping."""
        if not self.voicings:
            return None
        index = self.current_index - 1
        if index < 0:
            index = len(self.voicings) - 1 if self.loop_enabled else 0
        return self.go_to(index)
