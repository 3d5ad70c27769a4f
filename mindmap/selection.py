"""Tracks which nodes the host reports as selected."""

from typing import Iterable, List, Optional

from mindmap.exceptions import EmptyOperationError


class SelectionTracker:
    """
    Selected node ids, in the order the host reported them.

    Each notification replaces the selection wholesale. A missing notification
    (None) leaves it alone; an explicit empty list clears it.
    """

    def __init__(self):
        self._ids = {}

    @property
    def ids(self) -> List[str]:
        return list(self._ids)

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __bool__(self) -> bool:
        return bool(self._ids)

    def replace(self, node_ids: Optional[Iterable[str]], existing: Optional[Iterable[str]] = None) -> bool:
        """
        Replace the selection. Returns False when the notification was ignored.
        Ids not in `existing` (when given) are dropped.
        """
        if node_ids is None:
            return False
        allowed = None if existing is None else set(existing)
        self._ids = {nid: None for nid in node_ids if allowed is None or nid in allowed}
        return True

    def retain(self, existing: Iterable[str]) -> None:
        """Drop ids that are no longer in the graph."""
        allowed = set(existing)
        self._ids = {nid: None for nid in self._ids if nid in allowed}

    def clear(self) -> None:
        self._ids = {}

    def require(self) -> List[str]:
        """
        Return the selected ids.

        Raises:
            EmptyOperationError if nothing is selected.
        """
        if not self._ids:
            raise EmptyOperationError("Nothing selected")
        return self.ids
