"""
Path utilities for the mind-map editor.

- In development: paths are relative to the project root
- When frozen: paths are relative to the executable location
"""

import sys
from pathlib import Path


def get_app_dir() -> Path:
    """
    Get the application directory: the project root in development, the
    directory containing the executable when frozen.
    """
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    return Path(__file__).parent.parent


def get_config_path() -> Path:
    """Get the path to the optional config file."""
    return get_app_dir() / "config.json"
