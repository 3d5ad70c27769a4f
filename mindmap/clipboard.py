"""
Clipboard for copy/cut/paste of subgraphs.

The clipboard holds its own deep copy of the copied nodes and edges, so later
edits to the live graph never change what gets pasted.

Pasting clones the stored subgraph with fresh identities. One substitution
table (old node id -> new node id) is built per paste and every pasted edge is
remapped through it, so pasted edges only ever join pasted copies from the
same paste.
"""

import logging
from typing import Callable, Iterable, List, Optional, Set, Tuple

import networkx as nx

from mindmap.exceptions import EmptyOperationError
from mindmap.models import Node, Edge, Position, Snapshot, new_suffix

logger = logging.getLogger(__name__)


class Clipboard:
    """Detached copy of a subgraph held for later pasting."""

    def __init__(self):
        self._content: Optional[Snapshot] = None

    @property
    def content(self) -> Optional[Snapshot]:
        return self._content

    @property
    def is_empty(self) -> bool:
        return self._content is None or not self._content.nodes

    def store(self, nodes: Iterable[Node], edges: Iterable[Edge]) -> None:
        self._content = Snapshot.capture(nodes, edges)
        logger.debug(f"clipboard: holding {len(self._content.nodes)} nodes, {len(self._content.edges)} edges")

    def clear(self) -> None:
        self._content = None

    def require(self) -> Snapshot:
        """
        Raises:
            EmptyOperationError if nothing has been copied.
        """
        if self.is_empty:
            raise EmptyOperationError("Clipboard is empty")
        return self._content


def clone_subgraph(
    content: Snapshot,
    taken_node_ids: Set[str],
    taken_edge_ids: Set[str],
    place: Callable[[Position], Position],
) -> Tuple[List[Node], List[Edge]]:
    """
    Copy `content` with new ids.

    Node ids become "<old id>-<stamp>" and edge ids "<old edge id>-<stamp>",
    with one random stamp per call (redrawn if it would collide with a taken
    id). `place` computes each copy's position from the stored one.
    Edges whose endpoints are not both in `content` are dropped.
    """
    old_ids = [n.id for n in content.nodes]
    stamp = new_suffix()
    while (any(f"{nid}-{stamp}" in taken_node_ids for nid in old_ids)
           or any(f"{e.id}-{stamp}" in taken_edge_ids for e in content.edges)):
        stamp = new_suffix()
    mapping = {nid: f"{nid}-{stamp}" for nid in old_ids}

    graph = nx.MultiDiGraph()
    graph.add_nodes_from(old_ids)
    for seq, edge in enumerate(content.edges):
        if edge.source in mapping and edge.target in mapping:
            graph.add_edge(edge.source, edge.target, key=edge.id, style=edge.style, seq=seq)

    remapped = nx.relabel_nodes(graph, mapping, copy=True)

    nodes = [
        Node(mapping[n.id], place(n.position), n.label, dict(n.style))
        for n in content.nodes
    ]
    rows = sorted(remapped.edges(keys=True, data=True), key=lambda row: row[3]['seq'])
    edges = [
        Edge(f"{key}-{stamp}", source, target, dict(data['style']))
        for source, target, key, data in rows
    ]
    return nodes, edges
