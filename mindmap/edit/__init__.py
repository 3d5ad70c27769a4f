"""
Editing commands for the mind-map.

This package provides:
- EditActions: command entry points (add, delete, copy/cut/paste, undo/redo, ...)
- edit_handlers: NiceGUI event handlers for app.py integration

Usage:
    from mindmap.edit import EditActions
    from mindmap.edit.handlers import setup_edit_handlers
"""

from mindmap.constants import (
    ROOT_NODE_ID,
    DEFAULT_LABEL,
    JITTER_X,
    VERTICAL_STEP,
)
from mindmap.edit.actions import EditActions

__all__ = [
    'EditActions',
    'ROOT_NODE_ID',
    'DEFAULT_LABEL',
    'JITTER_X',
    'VERTICAL_STEP',
]
