"""Arranger — orchestrate the full progression pipeline and export results.

Responsibilities:
    1. Call the progression parser to split and validate chord tokens,
       then skip chords with no voicing under ``max_fret``.
    2. Call the DP solver to pick one voicing per chord.
    3. Save ``<name>_voicings.json`` (default: ``data/arrangements/``).
    4. Optionally export a strummed MIDI file (same folder).
    5. Return the arrangement data structure for programmatic use.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from .midi_export import export_midi
from .progression_parser import parse_progression
from .solver import (
    DEFAULT_FRET_RANGE,
    DEFAULT_PREFERRED_FRET,
    optimize_progression,
)
from .voicings import DEFAULT_MAX_FRET, Voicing, generate_all_voicings


logger = logging.getLogger(__name__)


def _safe_stem(name: str) -> str:
    stem = re.sub(r"[^\w\s#-]", "", name)
    stem = re.sub(r"\s+", "_", stem.strip())
    return stem or "progression"


def _resolve_output_dir(output_dir: str | Path | None) -> Path:
    if output_dir is None:
        return Path(__file__).resolve().parents[2] / "data" / "arrangements"
    return Path(output_dir)


def voiceable_chords(chords: Sequence[str], max_fret: int = DEFAULT_MAX_FRET) -> list[str]:
    """Drop chords that have no voicing at or below *max_fret*."""
    kept: list[str] = []
    for chord in chords:
        if generate_all_voicings(chord, max_fret=max_fret):
            kept.append(chord)
        else:
            logger.warning("No voicing for %r at or below fret %d; skipping", chord, max_fret)
    return kept


def save_arrangement(
    voicings: Sequence[Voicing],
    output_dir: str | Path | None = None,
    name: str = "progression",
    export_midi_file: bool = False,
    tempo: float = 80.0,
    beats_per_chord: int = 2,
) -> list[dict[str, Any]]:
    """Write ``<name>_voicings.json`` (and optionally ``<name>.mid``).

    Args:
        voicings: Optimized voicings in playback order.
        output_dir: Directory for output files.
            Defaults to ``data/arrangements/`` relative to the project root.
        name: Base filename for the outputs.
        export_midi_file: If ``True``, also save a strummed MIDI file.
        tempo: MIDI tempo in BPM.
        beats_per_chord: Beats each chord is held in the MIDI file.

    Returns:
        The arrangement as a list of voicing dicts.
    """
    output_dir = _resolve_output_dir(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    arrangement = [v.to_dict() for v in voicings]

    # ── Save <name>_voicings.json ─────────────────────────────
    stem = _safe_stem(name)
    json_path = output_dir / f"{stem}_voicings.json"
    with open(json_path, "w", encoding="utf-8") as fh:
        json.dump(arrangement, fh, indent=2, ensure_ascii=False)

    # ── Optional: export MIDI ─────────────────────────────────
    if export_midi_file:
        export_midi(
            voicings,
            output_dir / f"{stem}.mid",
            tempo=tempo,
            beats_per_chord=beats_per_chord,
        )

    return arrangement


def arrange(
    progression_text: str,
    output_dir: str | Path | None = None,
    name: str = "progression",
    preferred_fret: float = DEFAULT_PREFERRED_FRET,
    fret_range: float = DEFAULT_FRET_RANGE,
    max_fret: int = DEFAULT_MAX_FRET,
    config_path: str | Path | None = None,
    export_midi_file: bool = False,
    tempo: float = 80.0,
    beats_per_chord: int = 2,
) -> list[dict[str, Any]]:
    """Run the full pipeline on a progression string.

    Args:
        progression_text: Raw text, e.g. ``"Am, F, C, G"`` or a single chord.
        output_dir: Directory for output files.
            Defaults to ``data/arrangements/`` relative to the project root.
        name: Base filename for the outputs.
        preferred_fret: Hand position the optimizer starts from.
        fret_range: Candidate window half-width around *preferred_fret*.
        max_fret: Highest fret a voicing may use.
        config_path: Path to the cost-config YAML.
            Defaults to ``configs/movement_costs.yaml``.
        export_midi_file: If ``True``, also save a strummed MIDI file.
        tempo: MIDI tempo in BPM.
        beats_per_chord: Beats each chord is held in the MIDI file.

    Returns:
        List of voicing dicts (see :meth:`Voicing.to_dict`), one per chord
        that parses and has a voicing at or below *max_fret*.  Empty (and
        nothing written) if no chord survives.
    """
    chords = voiceable_chords(parse_progression(progression_text), max_fret)
    if not chords:
        logger.warning("No playable chords in %r", progression_text)
        return []

    voicings = optimize_progression(
        chords,
        preferred_fret=preferred_fret,
        fret_range=fret_range,
        max_fret=max_fret,
        config_path=config_path,
    )
    return save_arrangement(
        voicings,
        output_dir=output_dir,
        name=name,
        export_midi_file=export_midi_file,
        tempo=tempo,
        beats_per_chord=beats_per_chord,
    )


def arrangement_to_json_bytes(arrangement: list[dict[str, Any]]) -> bytes:
    """Serialise an arrangement to UTF-8 JSON bytes (for download buttons).

    Args:
        arrangement: The list of voicing dicts.

    Returns:
        UTF-8 encoded JSON bytes.
    """
    return json.dumps(arrangement, indent=2, ensure_ascii=False).encode("utf-8")
