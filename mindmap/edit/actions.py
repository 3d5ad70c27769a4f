"""
Edit Actions - command entry points for the mind-map editor.

Every command that changes the document runs as a transaction against the
session: read the store, compute the complete result, write it, then commit a
snapshot to history. Errors are raised before anything is written, so a
failed command leaves both the store and history untouched.

Commands with nothing to act on (delete/copy/cut with an empty selection,
paste with an empty clipboard, undo/redo at either end of history) are silent
no-ops and never create a history entry.
"""

import logging
from typing import Any, Iterable, List, Optional, Union

from mindmap.clipboard import clone_subgraph
from mindmap.exceptions import EmptyOperationError
from mindmap.models import Position, Snapshot
from mindmap.session import EditorSession

logger = logging.getLogger(__name__)

PositionLike = Union[Position, tuple, list, dict]


def to_position(value: PositionLike) -> Position:
    """Accept a Position, an (x, y) pair, or a {'x', 'y'} dict from the host."""
    if isinstance(value, Position):
        return value
    if isinstance(value, dict):
        return Position(float(value.get('x', 0.0)), float(value.get('y', 0.0)))
    x, y = value
    return Position(float(x), float(y))


class EditActions:
    """
    Executes editing commands against an EditorSession.

    Usage:
        session = EditorSession()
        actions = EditActions(session)
        child = actions.add()            # child of the anchor node
        actions.on_selection_changed([child])
        actions.cut()
        actions.paste()
        actions.undo()
    """

    def __init__(self, session: EditorSession):
        self.session = session

    # --- Internal helpers ---

    def _commit(self, description: str) -> bool:
        """Commit the store's content unless it matches the current history head."""
        snapshot = self.session.store.snapshot()
        if snapshot == self.session.history.present:
            logger.debug(f"{description}: no change, nothing committed")
            return False
        self.session.history.commit(snapshot)
        logger.info(description)
        return True

    def _sync_present(self) -> None:
        # Moves change the store without committing; fold them into present
        # so undo/redo carry them along.
        snapshot = self.session.store.snapshot()
        if snapshot != self.session.history.present:
            self.session.history.amend(snapshot)

    def _restore(self, snapshot: Snapshot) -> None:
        self.session.store.restore(snapshot)
        self.session.selection.retain(self.session.store.node_ids)

    # --- Structure ---

    def add(self, parent_id: Optional[str] = None) -> str:
        """
        Add a child node. Toolbar adds attach to the anchor node; a node's own
        "+" button passes its id.

        Raises:
            NotFoundError if the parent does not exist.
        """
        if parent_id is None:
            parent_id = self.session.anchor_id
        node_id = self.session.store.add_node(parent_id)
        self._commit(f"Added node {node_id} under {parent_id}")
        return node_id

    def connect(self, source_id: str, target_id: str) -> str:
        """
        Connect two nodes, as reported by the host's connect gesture.

        Raises:
            NotFoundError if either endpoint does not exist.
        """
        edge_id = self.session.store.connect(source_id, target_id)
        self._commit(f"Connected {source_id} -> {target_id}")
        return edge_id

    def delete(self) -> int:
        """Delete the selected nodes and their edges, then clear the selection."""
        try:
            selected = self.session.selection.require()
        except EmptyOperationError:
            logger.debug("delete: nothing selected")
            return 0

        removed = self.session.store.delete_nodes(selected)
        self.session.selection.clear()
        self._commit(f"Deleted {removed} nodes")
        return removed

    def relabel(self, node_id: str, text: str) -> bool:
        """Rename a node. Unknown ids are ignored."""
        if not self.session.store.relabel(node_id, text):
            logger.debug(f"relabel: node {node_id} no longer exists")
            return False
        return self._commit(f"Relabeled node {node_id}")

    def set_style(self, prop: str, value: Any) -> bool:
        """
        Apply a style property to every node (or, for the branch colour, to
        every edge).

        Raises:
            InvalidStyleError for unknown properties.
        """
        self.session.store.restyle(prop, value)
        return self._commit(f"Set {prop}={value!r} on all nodes")

    # --- Clipboard ---

    def copy(self) -> int:
        """
        Put the selected nodes, and the edges running between them, on the
        clipboard. Edges leaving the selection are not copied.
        Returns the number of nodes copied.
        """
        try:
            selected = self.session.selection.require()
        except EmptyOperationError:
            logger.debug("copy: nothing selected")
            return 0

        nodes, edges = self.session.store.induced_subgraph(selected)
        self.session.clipboard.store(nodes, edges)
        logger.info(f"Copied {len(nodes)} nodes and {len(edges)} edges")
        return len(nodes)

    def cut(self) -> int:
        """Copy, then delete. Copy never commits, so a cut is a single undo step."""
        copied = self.copy()
        if copied:
            self.delete()
        return copied

    def paste(self) -> List[str]:
        """
        Add a fresh copy of the clipboard to the graph.
        Returns the ids of the new nodes.
        """
        try:
            content = self.session.clipboard.require()
        except EmptyOperationError:
            logger.debug("paste: clipboard is empty")
            return []

        store = self.session.store
        nodes, edges = clone_subgraph(
            content,
            taken_node_ids=set(store.node_ids),
            taken_edge_ids={e.id for e in store.edges},
            place=store.jittered,
        )
        store.add_subgraph(nodes, edges)
        self._commit(f"Pasted {len(nodes)} nodes and {len(edges)} edges")
        return [n.id for n in nodes]

    # --- History ---

    def undo(self) -> bool:
        self._sync_present()
        snapshot = self.session.history.undo()
        if snapshot is None:
            logger.debug("undo: nothing to undo")
            return False
        self._restore(snapshot)
        logger.info("Undo")
        return True

    def redo(self) -> bool:
        self._sync_present()
        snapshot = self.session.history.redo()
        if snapshot is None:
            logger.debug("redo: nothing to redo")
            return False
        self._restore(snapshot)
        logger.info("Redo")
        return True

    # --- Host notifications ---

    def on_selection_changed(self, node_ids: Optional[Iterable[str]]) -> bool:
        """
        Replace the selection. None is ignored; an empty list clears.
        Ids that are not in the graph are dropped.
        """
        return self.session.selection.replace(node_ids, existing=self.session.store.node_ids)

    def on_node_moved(self, node_id: str, position: PositionLike) -> bool:
        """
        Record a node's new position from a drag. Not an undo step on its own;
        the next commit captures it.
        """
        return self.session.store.move_node(node_id, to_position(position))
