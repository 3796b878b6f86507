"""Configuration helpers for edge editor settings persistence."""
from __future__ import annotations

import logging
import math
import os
from configparser import ConfigParser, Error
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional

from edge_editor.model.edge_model import DEFAULT_ALGORITHM, Algorithm
from edge_editor.model.point_updates import NUDGE_STEP
from edge_editor.path.linear import MIN_SEGMENT_LENGTH
from edge_editor.preview.connection_preview import FREE_DRAW_MIN_DISTANCE

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "EDGE_EDITOR_CONFIG"
CONFIG_FILENAME = "edge_editor.ini"
_SECTION = "edge_editor"


@dataclass(frozen=True)
class EditorSettings:
    # The two thresholds share a default but are unrelated settings.
    midpoint_min_segment_length: float = MIN_SEGMENT_LENGTH
    free_draw_min_distance: float = FREE_DRAW_MIN_DISTANCE
    nudge_step: float = NUDGE_STEP
    default_algorithm: Algorithm = DEFAULT_ALGORITHM


def default_config_path() -> Path:
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return Path.cwd() / CONFIG_FILENAME


def _parse_positive_float(raw: str) -> Optional[float]:
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if math.isfinite(value) and value > 0 else None


def _parse_algorithm(raw: str) -> Optional[Algorithm]:
    candidate = raw.strip()
    for algorithm in Algorithm:
        if candidate.lower() in (algorithm.value.lower(), algorithm.name.lower()):
            return algorithm
    return None


def load_settings(path: Optional[Path] = None) -> EditorSettings:
    """Read settings from an INI file; missing or invalid values keep their defaults."""
    ini_path = path or default_config_path()
    settings = EditorSettings()
    if not ini_path.exists():
        return settings

    parser = ConfigParser()
    try:
        with ini_path.open("r", encoding="utf-8") as handle:
            parser.read_file(handle)
    except (OSError, Error):
        logger.warning("Could not read settings from %s", ini_path, exc_info=True)
        return settings
    if not parser.has_section(_SECTION):
        return settings

    section = parser[_SECTION]
    overrides: dict[str, object] = {}
    for field in fields(EditorSettings):
        raw = section.get(field.name)
        if raw is None:
            continue
        if field.name == "default_algorithm":
            value = _parse_algorithm(raw)
        else:
            value = _parse_positive_float(raw)
        if value is None:
            logger.warning("Ignoring invalid %s=%r in %s", field.name, raw, ini_path)
            continue
        overrides[field.name] = value
    return replace(settings, **overrides)


def save_settings(settings: EditorSettings, path: Optional[Path] = None) -> Path:
    ini_path = path or default_config_path()
    parser = ConfigParser()
    parser[_SECTION] = {
        "midpoint_min_segment_length": str(settings.midpoint_min_segment_length),
        "free_draw_min_distance": str(settings.free_draw_min_distance),
        "nudge_step": str(settings.nudge_step),
        "default_algorithm": settings.default_algorithm.value,
    }
    with ini_path.open("w", encoding="utf-8") as handle:
        parser.write(handle)
    return ini_path
