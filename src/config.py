"""Configuration for the Fretboard Voicing Engine.

YAML files live in ``configs/`` at the project root:
    movement_costs.yaml – optimizer cost weights plus CLI/UI defaults
    songs.yaml          – static song lookup table

No heavy imports; the engine itself never reads global configuration.
Only entry points (CLI, Streamlit) read the ``defaults`` block.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml


CONFIG_DIR: Path = Path(__file__).resolve().parents[1] / "configs"
DEFAULT_COSTS_PATH: Path = CONFIG_DIR / "movement_costs.yaml"
DEFAULT_SONGS_PATH: Path = CONFIG_DIR / "songs.yaml"

DEFAULT_TUNABLES: tuple[str, ...] = ("preferred_fret", "fret_range", "max_fret")

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def load_yaml_config(
    config_path: str | Path,
    required_keys: Iterable[str] = (),
) -> dict[str, Any]:
    """Load a YAML mapping and check that *required_keys* are present.

    Args:
        config_path: Path to the YAML file.
        required_keys: Top-level keys that must exist.

    Returns:
        The parsed mapping.

    Raises:
        FileNotFoundError: If *config_path* does not exist.
        ValueError: If the file is not a mapping or a key is missing.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as fh:
        cfg = yaml.safe_load(fh)

    if not isinstance(cfg, dict):
        raise ValueError(f"Config must be a YAML mapping: {config_path}")

    for key in required_keys:
        if key not in cfg:
            raise ValueError(f"Missing required key '{key}' in config: {config_path}")

    return cfg


def engine_defaults(config_path: str | Path | None = None) -> dict[str, int]:
    """Read the ``defaults`` block (preferred_fret, fret_range, max_fret).

    Args:
        config_path: Cost-config YAML.  Defaults to ``configs/movement_costs.yaml``.

    Returns:
        dict with keys ``preferred_fret``, ``fret_range``, ``max_fret``.
    """
    cfg = load_yaml_config(config_path or DEFAULT_COSTS_PATH, ["defaults"])
    defaults = cfg["defaults"]
    missing = [key for key in DEFAULT_TUNABLES if key not in defaults]
    if missing:
        raise ValueError(f"Missing defaults {missing} in config: {config_path or DEFAULT_COSTS_PATH}")
    return {key: int(defaults[key]) for key in DEFAULT_TUNABLES}


def setup_logging(verbose: bool = False) -> None:
    """Configure root logging for command-line use."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )
