"""Cost Model — configurable transition cost between two voicings.

All weights are loaded from ``configs/movement_costs.yaml``.
No hardcoded constants: if a required key is missing from the YAML,
a ``ValueError`` is raised with a clear message.

Methods:
    fret_distance_cost – penalises moving the hand along the neck
    span_cost          – penalises changing the hand's stretch
    shape_cost         – discount (negative) for keeping the same shape family
    start_cost         – distance of the first voicing from the preferred fret
    total_cost         – aggregated movement cost

With the shipped weights the total is::

    2·|Δavg_fret| + 0.5·|Δfret_span| + (−1 if same shape family else 0)

The same-shape term is a discount, not a floor: totals may be negative.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from src.config import DEFAULT_COSTS_PATH, load_yaml_config

from .voicings import Voicing


REQUIRED_KEYS: tuple[str, ...] = (
    "fret_distance_weight",
    "span_difference_weight",
    "same_shape_bonus",
)


class MovementCostModel:
    """Heuristic hand-movement cost between consecutive voicings.

    Args:
        config_path: Path to the YAML configuration file.
            Defaults to ``configs/movement_costs.yaml`` at the project root.
    """

    def __init__(self, config_path: str | Path | None = None) -> None:
        self.config_path = Path(config_path) if config_path is not None else DEFAULT_COSTS_PATH
        self._cfg: dict[str, Any] = load_yaml_config(self.config_path, REQUIRED_KEYS)

        self.fret_distance_weight: float = float(self._cfg["fret_distance_weight"])
        self.span_difference_weight: float = float(self._cfg["span_difference_weight"])
        self.same_shape_bonus: float = float(self._cfg["same_shape_bonus"])

    # ── Individual cost components ────────────────────────────

    def fret_distance_cost(self, voicing_a: Voicing, voicing_b: Voicing) -> float:
        """Cost of shifting the hand between two average fret positions."""
        return abs(voicing_a.avg_fret - voicing_b.avg_fret) * self.fret_distance_weight

    def span_cost(self, voicing_a: Voicing, voicing_b: Voicing) -> float:
        """Cost of changing the hand's stretch (fret span)."""
        return abs(voicing_a.fret_span - voicing_b.fret_span) * self.span_difference_weight

    def shape_cost(self, voicing_a: Voicing, voicing_b: Voicing) -> float:
        """Same shape family → ``same_shape_bonus`` (negative), else 0."""
        if voicing_a.shape_family == voicing_b.shape_family:
            return self.same_shape_bonus
        return 0.0

    def start_cost(self, voicing: Voicing, preferred_fret: float) -> float:
        """Distance of an opening voicing from the preferred hand position."""
        return abs(voicing.avg_fret - preferred_fret)

    # ── Aggregate ─────────────────────────────────────────────

    def total_cost(self, voicing_a: Voicing, voicing_b: Voicing) -> float:
        """Movement cost from *voicing_a* to *voicing_b*.

        Args:
            voicing_a: Previous voicing.
            voicing_b: Next voicing.

        Returns:
            Aggregated cost.  May be negative because of the shape discount.
        """
        cost = 0.0
        cost += self.fret_distance_cost(voicing_a, voicing_b)
        cost += self.span_cost(voicing_a, voicing_b)
        cost += self.shape_cost(voicing_a, voicing_b)
        return cost
