"""
Canonical node/edge storage for a mind-map document.

Topology lives in a networkx MultiDiGraph keyed by node id, with edges keyed by
edge id so parallel edges and self-loops can coexist. Each node carries its
Node object under the 'node' attribute; each edge carries its Edge object
under 'edge' plus an insertion counter under 'seq' so edge order is stable
across snapshot and restore.

Because edges only exist inside the networkx graph, removing a node removes
every edge touching it. No edge can outlive one of its endpoints.
"""

import itertools
import logging
import random
from copy import deepcopy
from typing import Dict, Any, List, Optional, Iterable, Iterator, Tuple

import networkx as nx

from mindmap.constants import (
    ROOT_NODE_ID,
    ROOT_LABEL,
    ROOT_POSITION,
    DEFAULT_LABEL,
    DEFAULT_EDGE_STYLE,
    JITTER_X,
    VERTICAL_STEP,
)
from mindmap.exceptions import MindMapError, NotFoundError
from mindmap.models import Node, Edge, Position, Snapshot, new_node_id, new_suffix
from mindmap.styles import apply_style

logger = logging.getLogger(__name__)


class GraphStore:
    """
    Owns the live nodes and edges.

    Usage:
        store = GraphStore()
        child = store.add_node('1')
        store.connect(child, '1')
        store.delete_nodes({child})
    """

    def __init__(
        self,
        jitter_x: float = JITTER_X,
        vertical_step: float = VERTICAL_STEP,
        rng: Optional[random.Random] = None,
        with_root: bool = True,
    ):
        self.jitter_x = jitter_x
        self.vertical_step = vertical_step
        self._rng = rng or random.Random()
        self._graph = nx.MultiDiGraph()
        self._seq = itertools.count()

        if with_root:
            self._insert_node(Node(ROOT_NODE_ID, Position(*ROOT_POSITION), ROOT_LABEL))

    # --- Internal helpers ---

    def _insert_node(self, node: Node) -> None:
        self._graph.add_node(node.id, node=node)

    def _insert_edge(self, edge: Edge) -> None:
        self._graph.add_edge(edge.source, edge.target, key=edge.id, edge=edge, seq=next(self._seq))

    def _node(self, node_id: str) -> Node:
        try:
            return self._graph.nodes[node_id]['node']
        except KeyError:
            raise NotFoundError('node', node_id) from None

    def _iter_nodes(self) -> Iterator[Node]:
        for _, data in self._graph.nodes(data=True):
            yield data['node']

    def _iter_edges(self, graph: Optional[nx.MultiDiGraph] = None) -> Iterator[Edge]:
        graph = self._graph if graph is None else graph
        rows = sorted(graph.edges(keys=True, data=True), key=lambda row: row[3]['seq'])
        for _, _, _, data in rows:
            yield data['edge']

    def _edge_ids(self) -> set:
        return {key for _, _, key in self._graph.edges(keys=True)}

    # --- Queries ---

    @property
    def nodes(self) -> List[Node]:
        """Copies of the live nodes in creation order."""
        return [deepcopy(n) for n in self._iter_nodes()]

    @property
    def edges(self) -> List[Edge]:
        """Copies of the live edges in creation order."""
        return [deepcopy(e) for e in self._iter_edges()]

    @property
    def node_ids(self) -> List[str]:
        return list(self._graph.nodes)

    def has_node(self, node_id: str) -> bool:
        return node_id in self._graph

    def get_node(self, node_id: str) -> Node:
        return deepcopy(self._node(node_id))

    def get_edge(self, edge_id: str) -> Edge:
        for _, _, key, data in self._graph.edges(keys=True, data=True):
            if key == edge_id:
                return deepcopy(data['edge'])
        raise NotFoundError('edge', edge_id)

    def induced_subgraph(self, node_ids: Iterable[str]) -> Tuple[List[Node], List[Edge]]:
        """
        Copies of the given nodes and of every edge whose endpoints are both
        among them. Edges crossing the boundary are left out.
        """
        wanted = {nid for nid in node_ids if nid in self._graph}
        sub = self._graph.subgraph(wanted)
        nodes = [deepcopy(self._node(nid)) for nid in self._graph if nid in wanted]
        edges = [deepcopy(e) for e in self._iter_edges(sub)]
        return nodes, edges

    def jittered(self, position: Position) -> Position:
        """Placement for a node derived from `position`: below it, shifted sideways at random."""
        dx = self._rng.uniform(-self.jitter_x, self.jitter_x)
        return position.offset(dx, self.vertical_step)

    # --- Mutations ---

    def add_node(self, parent_id: str, label: str = DEFAULT_LABEL) -> str:
        """
        Create a child of `parent_id` and the edge connecting them.

        Raises:
            NotFoundError if the parent does not exist.
        """
        parent = self._node(parent_id)
        node_id = new_node_id()
        while node_id in self._graph:
            node_id = new_node_id()

        node = Node(node_id, self.jittered(parent.position), label)
        edge = Edge(f"{parent_id}-{node_id}", parent_id, node_id, dict(DEFAULT_EDGE_STYLE))

        self._insert_node(node)
        self._insert_edge(edge)
        logger.debug(f"add_node: {node_id} under {parent_id}")
        return node_id

    def connect(self, source_id: str, target_id: str) -> str:
        """
        Add an edge from source to target. Self-loops and parallel edges are
        allowed.

        Raises:
            NotFoundError if either endpoint does not exist.
        """
        self._node(source_id)
        self._node(target_id)

        existing = self._edge_ids()
        edge_id = f"e{source_id}-{target_id}-{new_suffix()}"
        while edge_id in existing:
            edge_id = f"e{source_id}-{target_id}-{new_suffix()}"

        self._insert_edge(Edge(edge_id, source_id, target_id, dict(DEFAULT_EDGE_STYLE)))
        logger.debug(f"connect: {source_id} -> {target_id} as {edge_id}")
        return edge_id

    def delete_nodes(self, node_ids: Iterable[str]) -> int:
        """
        Remove the nodes and every edge touching them.
        Unknown ids are ignored. Returns the number of nodes removed.
        """
        doomed = [nid for nid in set(node_ids) if nid in self._graph]
        if not doomed:
            return 0
        self._graph.remove_nodes_from(doomed)
        logger.debug(f"delete_nodes: removed {len(doomed)} nodes")
        return len(doomed)

    def relabel(self, node_id: str, label: str) -> bool:
        """Set a node's label. Returns False if the node is gone."""
        if node_id not in self._graph:
            return False
        self._node(node_id).label = label
        return True

    def move_node(self, node_id: str, position: Position) -> bool:
        """Set a node's position. Returns False if the node is gone."""
        if node_id not in self._graph:
            return False
        self._node(node_id).position = position
        return True

    def restyle(self, prop: str, value: Any, scope: Optional[Iterable[str]] = None) -> None:
        """Apply one style property to the nodes (or edges) in scope; None means all."""
        new_nodes, new_edges = apply_style(self._iter_nodes(), self._iter_edges(), prop, value, scope)

        for node in new_nodes:
            self._graph.nodes[node.id]['node'] = node
        for edge in new_edges:
            self._graph.edges[edge.source, edge.target, edge.id]['edge'] = edge

    def add_subgraph(self, nodes: List[Node], edges: List[Edge]) -> None:
        """
        Insert a batch of nodes and edges. Everything is validated first, so
        either the whole batch lands or nothing does.

        Raises:
            MindMapError if a node or edge id is already taken.
            NotFoundError if an edge endpoint is in neither the graph nor the batch.
        """
        new_ids = [n.id for n in nodes]
        taken = [nid for nid in new_ids if nid in self._graph]
        if taken or len(set(new_ids)) != len(new_ids):
            raise MindMapError(f"Node ids already in use: {taken or new_ids}")

        existing_edges = self._edge_ids()
        new_edge_ids = [e.id for e in edges]
        if existing_edges.intersection(new_edge_ids) or len(set(new_edge_ids)) != len(new_edge_ids):
            raise MindMapError("Edge ids already in use")

        known = set(self._graph.nodes).union(new_ids)
        for edge in edges:
            for endpoint in (edge.source, edge.target):
                if endpoint not in known:
                    raise NotFoundError('node', endpoint)

        for node in nodes:
            self._insert_node(deepcopy(node))
        for edge in edges:
            self._insert_edge(deepcopy(edge))

    # --- Snapshots ---

    def snapshot(self) -> Snapshot:
        return Snapshot.capture(self._iter_nodes(), self._iter_edges())

    def restore(self, snapshot: Snapshot) -> None:
        """Replace the live content with a copy of `snapshot`."""
        self._graph = nx.MultiDiGraph()
        for node in snapshot.nodes:
            self._insert_node(deepcopy(node))
        for edge in snapshot.edges:
            self._insert_edge(deepcopy(edge))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'nodes': [n.to_dict() for n in self._iter_nodes()],
            'edges': [e.to_dict() for e in self._iter_edges()],
        }
