"""
Editing session: the single owner of all mutable editor state.

One EditorSession is constructed per open document and handed to EditActions
and the host. Nothing here is module-level.
"""

import random
from typing import Any, Dict, List, Optional

from mindmap.clipboard import Clipboard
from mindmap.config import EditorSettings
from mindmap.graph_store import GraphStore
from mindmap.history import HistoryManager
from mindmap.models import Node, Edge
from mindmap.selection import SelectionTracker
from mindmap.styles import effective_style


class EditorSession:
    """Graph store, history, selection and clipboard for one document."""

    def __init__(self, settings: Optional[EditorSettings] = None, rng: Optional[random.Random] = None):
        self.settings = settings or EditorSettings()
        self.store = GraphStore(
            jitter_x=self.settings.jitter_x,
            vertical_step=self.settings.vertical_step,
            rng=rng,
        )
        self.history = HistoryManager(self.store.snapshot(), max_depth=self.settings.max_history)
        self.selection = SelectionTracker()
        self.clipboard = Clipboard()
        # The first node created is the default parent for toolbar adds
        self.anchor_id = self.store.node_ids[0]

    # --- Read model ---

    @property
    def nodes(self) -> List[Node]:
        return self.store.nodes

    @property
    def edges(self) -> List[Edge]:
        return self.store.edges

    @property
    def current_style(self) -> Dict[str, Any]:
        return effective_style(self.store.nodes, self.store.edges)

    def to_graph(self) -> Dict[str, Any]:
        """Plain-dict view of the document for rendering."""
        return self.store.to_dict()
