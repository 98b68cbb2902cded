"""Solver — dynamic-programming search for the cheapest voicing sequence.

Layers:     one per chord; layer ``i`` holds chord ``i``'s candidate voicings.
Node cost:  layer 0 → distance from the preferred fret;
            layer i → min over predecessors of
            ``predecessor cost + MovementCostModel.total_cost``.
Output:     backtrack from the cheapest node of the final layer.

Design choices:
    - No randomness; ties resolve to the first minimal candidate.
    - Candidates are filtered to ``preferred_fret ± fret_range`` by average
      fret; a chord with nothing in range falls back to all its voicings.
    - A chord with no voicings at all is a caller error (tokens must be
      validated with the progression parser first) and raises ``ValueError``.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from pathlib import Path

from .cost_model import MovementCostModel
from .voicings import DEFAULT_MAX_FRET, Voicing, generate_all_voicings


logger = logging.getLogger(__name__)

DEFAULT_PREFERRED_FRET: int = 5
DEFAULT_FRET_RANGE: int = 7


def candidate_voicings(
    chord_name: str,
    preferred_fret: float = DEFAULT_PREFERRED_FRET,
    fret_range: float = DEFAULT_FRET_RANGE,
    max_fret: int = DEFAULT_MAX_FRET,
) -> list[Voicing]:
    """Voicings of *chord_name* whose average fret lies in the preferred window.

    Falls back to every voicing when none lies in the window.
    """
    voicings = generate_all_voicings(chord_name, max_fret=max_fret)
    low, high = preferred_fret - fret_range, preferred_fret + fret_range
    in_range = [v for v in voicings if low <= v.avg_fret <= high]
    if not in_range and voicings:
        logger.debug(
            "No voicing of %s within frets %s–%s; using all %d",
            chord_name, low, high, len(voicings),
        )
        return voicings
    return in_range


def optimize_progression(
    chord_names: Sequence[str],
    preferred_fret: float = DEFAULT_PREFERRED_FRET,
    fret_range: float = DEFAULT_FRET_RANGE,
    max_fret: int = DEFAULT_MAX_FRET,
    cost_model: MovementCostModel | None = None,
    config_path: str | Path | None = None,
) -> list[Voicing]:
    """Pick one voicing per chord minimising cumulative hand movement.

    Args:
        chord_names: Chord names, already validated (e.g. the output of
            :func:`~.progression_parser.parse_progression`).
        preferred_fret: Hand position to start from.
        fret_range: Half-width of the candidate window around *preferred_fret*.
        max_fret: Highest fret a voicing may use.
        cost_model: Cost model instance; built from *config_path* if omitted.
        config_path: Optional path to ``movement_costs.yaml``.

    Returns:
        Exactly one :class:`Voicing` per chord, in input order.

    Raises:
        ValueError: If any chord yields no voicing at all.
    """
    if not chord_names:
        return []

    layers: list[list[Voicing]] = []
    for name in chord_names:
        candidates = candidate_voicings(name, preferred_fret, fret_range, max_fret)
        if not candidates:
            raise ValueError(
                f"No voicing for chord {name!r}; validate chords before optimizing"
            )
        layers.append(candidates)

    if cost_model is None:
        cost_model = MovementCostModel(config_path)

    # ── Single chord ──────────────────────────────────────────
    if len(layers) == 1:
        return [min(layers[0], key=lambda v: cost_model.start_cost(v, preferred_fret))]

    n = len(layers)

    # ── DP tables ─────────────────────────────────────────────
    # dp[i][j] = minimum cumulative cost to reach candidate j of chord i
    # bp[i][j] = index of the predecessor candidate in chord i-1
    dp: list[list[float]] = [[math.inf] * len(layer) for layer in layers]
    bp: list[list[int | None]] = [[None] * len(layer) for layer in layers]

    # ── Initialise first chord ────────────────────────────────
    for j, voicing in enumerate(layers[0]):
        dp[0][j] = cost_model.start_cost(voicing, preferred_fret)

    # ── Forward pass ──────────────────────────────────────────
    for i in range(1, n):
        for j, voicing_b in enumerate(layers[i]):
            best_cost: float = math.inf
            best_prev: int | None = None

            for k, voicing_a in enumerate(layers[i - 1]):
                total = dp[i - 1][k] + cost_model.total_cost(voicing_a, voicing_b)
                if total < best_cost:
                    best_cost = total
                    best_prev = k

            dp[i][j] = best_cost
            bp[i][j] = best_prev

    # ── Backtrack ─────────────────────────────────────────────
    best_final_cost: float = math.inf
    best_final: int = 0
    for j, cost in enumerate(dp[n - 1]):
        if cost < best_final_cost:
            best_final_cost = cost
            best_final = j

    path: list[int] = [best_final]
    for i in range(n - 1, 0, -1):
        prev = bp[i][path[-1]]
        if prev is None:
            raise RuntimeError(f"Broken back-pointer at chord {i}")
        path.append(prev)

    path.reverse()

    logger.debug("Optimized %d chords, total cost %.3f", n, best_final_cost)
    return [layers[i][j] for i, j in enumerate(path)]


def progression_cost(
    voicings: Sequence[Voicing],
    preferred_fret: float = DEFAULT_PREFERRED_FRET,
    cost_model: MovementCostModel | None = None,
) -> float:
    """Objective value of a voicing sequence: start cost plus every transition."""
    if not voicings:
        return 0.0
    if cost_model is None:
        cost_model = MovementCostModel()

    total = cost_model.start_cost(voicings[0], preferred_fret)
    for voicing_a, voicing_b in zip(voicings, voicings[1:]):
        total += cost_model.total_cost(voicing_a, voicing_b)
    return total
