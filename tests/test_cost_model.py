"""Unit tests for the movement cost model."""

import pytest

from src.chord_engine.cost_model import MovementCostModel
from src.chord_engine.templates import ChordQuality
from src.chord_engine.voicings import Voicing


def _voicing(family: str, avg_fret: float, fret_span: int) -> Voicing:
    return Voicing(
        chord_name="X",
        shape_family=family,
        positions=(),
        base_fret=0,
        fret_span=fret_span,
        avg_fret=avg_fret,
        voiced_quality=ChordQuality.MAJOR,
    )


def test_default_weights() -> None:
    model = MovementCostModel()
    assert model.fret_distance_weight == 2.0
    assert model.span_difference_weight == 0.5
    assert model.same_shape_bonus == -1.0


def test_total_cost_different_shapes() -> None:
    model = MovementCostModel()
    cost = model.total_cost(_voicing("E", 5.0, 2), _voicing("A", 3.0, 1))
    assert cost == pytest.approx(2 * 2.0 + 0.5 * 1)


def test_total_cost_same_shape_discount() -> None:
    model = MovementCostModel()
    cost = model.total_cost(_voicing("E", 5.0, 2), _voicing("E", 3.0, 1))
    assert cost == pytest.approx(4.0 + 0.5 - 1.0)


def test_same_shape_discount_can_go_negative() -> None:
    model = MovementCostModel()
    assert model.total_cost(_voicing("A", 4.0, 2), _voicing("A", 4.0, 2)) == pytest.approx(-1.0)


def test_start_cost() -> None:
    model = MovementCostModel()
    assert model.start_cost(_voicing("C", 1.5, 2), preferred_fret=5) == pytest.approx(3.5)


def test_custom_config(tmp_path) -> None:
    config = tmp_path / "costs.yaml"
    config.write_text(
        "fret_distance_weight: 1\nspan_difference_weight: 0\nsame_shape_bonus: 0\n",
        encoding="utf-8",
    )
    model = MovementCostModel(config)
    assert model.total_cost(_voicing("E", 5.0, 2), _voicing("E", 2.0, 0)) == pytest.approx(3.0)


def test_missing_key_raises(tmp_path) -> None:
    config = tmp_path / "costs.yaml"
    config.write_text("fret_distance_weight: 2\nspan_difference_weight: 0.5\n", encoding="utf-8")
    with pytest.raises(ValueError, match="same_shape_bonus"):
        MovementCostModel(config)


def test_missing_file_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        MovementCostModel(tmp_path / "nope.yaml")
