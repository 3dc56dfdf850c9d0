"""Configuration for the note extractor.

Extraction settings are read from ``configs/extraction.yaml`` (PyYAML).
A missing required key raises ``ValueError`` with a clear message.
Also provides the logging setup shared by the CLI entry points.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parents[1] / "configs" / "extraction.yaml"

LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_REQUIRED_KEYS: tuple[str, ...] = (
    "default_tempo",
    "sustain_controller",
    "pedal_threshold",
)


@dataclass(frozen=True)
class ExtractionConfig:
    default_tempo: int = 500_000  # µs per quarter note (120 BPM)
    sustain_controller: int = 64
    pedal_threshold: int = 64


def load_config(config_path: str | Path | None = None) -> ExtractionConfig:
    """Load extraction settings from YAML.

    Args:
        config_path: Path to the YAML file. Defaults to
            ``configs/extraction.yaml`` relative to the project root; when
            that default file is absent the built-in defaults are used.

    Returns:
        A validated ``ExtractionConfig``.

    Raises:
        FileNotFoundError: If an explicit *config_path* does not exist.
        ValueError: If a required key is missing or a value is out of range.
    """
    if config_path is None:
        path = DEFAULT_CONFIG_PATH
        if not path.exists():
            logger.warning("No config at %s, using built-in defaults", path)
            return ExtractionConfig()
    else:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Extraction config not found: {path}")

    with open(path, "r", encoding="utf-8") as fh:
        raw: dict[str, Any] = yaml.safe_load(fh) or {}

    for key in _REQUIRED_KEYS:
        if key not in raw:
            raise ValueError(f"Missing required key '{key}' in extraction config: {path}")

    cfg = ExtractionConfig(
        default_tempo=int(raw["default_tempo"]),
        sustain_controller=int(raw["sustain_controller"]),
        pedal_threshold=int(raw["pedal_threshold"]),
    )

    if cfg.default_tempo <= 0:
        raise ValueError(f"default_tempo must be positive, got {cfg.default_tempo}")
    for name in ("sustain_controller", "pedal_threshold"):
        value = getattr(cfg, name)
        if not 0 <= value <= 127:
            raise ValueError(f"{name} must be within 0–127, got {value}")

    return cfg


def configure_logging(level: int = logging.INFO) -> None:
    """Install a console handler on the root logger (once)."""
    if logging.getLogger().handlers:
        return
    logging.basicConfig(level=level, format=LOG_FORMAT)
