"""
Undo/redo history for the mind-map editor.

History is a linear past/present/future chain of document snapshots:

  past:    oldest -> newest
  present: the snapshot the store currently holds
  future:  nearest -> farthest (what redo would bring back, in order)

Committing after an undo discards the future; branches are not kept.
"""

import logging
from collections import deque
from typing import Callable, Deque, List, Optional

from mindmap.models import Snapshot

logger = logging.getLogger(__name__)


class HistoryManager:
    """Manages the snapshot chain behind undo and redo."""

    def __init__(self, initial: Snapshot, max_depth: Optional[int] = None):
        if max_depth is not None and max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {max_depth}")
        self.max_depth = max_depth
        self._past: Deque[Snapshot] = deque(maxlen=max_depth)
        self._present = initial
        self._future: Deque[Snapshot] = deque()

        self.on_state_changed: Optional[Callable[[], None]] = None

    @property
    def present(self) -> Snapshot:
        return self._present

    @property
    def past(self) -> List[Snapshot]:
        return list(self._past)

    @property
    def future(self) -> List[Snapshot]:
        return list(self._future)

    @property
    def can_undo(self) -> bool:
        return len(self._past) > 0

    @property
    def can_redo(self) -> bool:
        return len(self._future) > 0

    def commit(self, snapshot: Snapshot) -> None:
        """Record `snapshot` as the new present and drop any redo lineage."""
        self._past.append(self._present)
        self._present = snapshot
        self._future.clear()
        self._notify_changed()

    def undo(self) -> Optional[Snapshot]:
        """Step back one snapshot. Returns the new present, or None if there is no past."""
        if not self._past:
            return None

        self._future.appendleft(self._present)
        self._present = self._past.pop()
        self._notify_changed()
        return self._present

    def redo(self) -> Optional[Snapshot]:
        """Step forward one snapshot. Returns the new present, or None if there is no future."""
        if not self._future:
            return None

        self._past.append(self._present)
        self._present = self._future.popleft()
        self._notify_changed()
        return self._present

    def amend(self, snapshot: Snapshot) -> None:
        """Replace the present in place, e.g. after live edits that are not undo steps."""
        self._present = snapshot

    def clear(self, snapshot: Snapshot) -> None:
        """Forget all history and start again from `snapshot`."""
        self._past.clear()
        self._future.clear()
        self._present = snapshot
        self._notify_changed()

    def _notify_changed(self):
        logger.debug(f"history: past={len(self._past)} future={len(self._future)}")
        if self.on_state_changed:
            self.on_state_changed()
