"""
Configuration for the mind-map editor.

Settings are resolved in priority order:
1. Environment variables (MINDMAP_JITTER_X, MINDMAP_VERTICAL_STEP,
   MINDMAP_MAX_HISTORY, MINDMAP_LOG_LEVEL)
2. config.json next to the project root / executable
3. Built-in defaults
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from mindmap.constants import JITTER_X, VERTICAL_STEP
from mindmap.paths import get_config_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "MINDMAP_"


@dataclass
class EditorSettings:
    jitter_x: float = JITTER_X
    vertical_step: float = VERTICAL_STEP
    max_history: Optional[int] = None  # None keeps every undo step
    log_level: str = "INFO"


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration from config.json. Missing or malformed files give {}."""
    config_path = config_path or get_config_path()
    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
                return data if isinstance(data, dict) else {}
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Ignoring unreadable config {config_path}: {e}")
            return {}
    return {}


def save_config(config: dict, config_path: Optional[Path] = None) -> None:
    """Save configuration to config.json."""
    config_path = config_path or get_config_path()
    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(config, f, indent=2)


def _lookup(config: dict, key: str):
    env_val = os.environ.get(ENV_PREFIX + key.upper())
    if env_val is not None and env_val != "":
        return env_val
    return config.get(key)


def load_settings(config_path: Optional[Path] = None) -> EditorSettings:
    """
    Build EditorSettings from the environment and config file.

    Raises:
        ValueError if a value cannot be converted to its setting's type.
    """
    config = load_config(config_path)
    settings = EditorSettings()

    jitter = _lookup(config, "jitter_x")
    if jitter is not None:
        settings.jitter_x = float(jitter)

    step = _lookup(config, "vertical_step")
    if step is not None:
        settings.vertical_step = float(step)

    depth = _lookup(config, "max_history")
    if depth is not None and str(depth).lower() not in ("", "none", "0"):
        settings.max_history = int(depth)

    level = _lookup(config, "log_level")
    if level:
        settings.log_level = str(level).upper()

    return settings
