"""
Document model for the mind-map editor.

Nodes and edges carry plain attributes only. Behaviour such as "add a child
here" or "rename this node" is dispatched by the host through EditActions
using the node id.

Dict format (used by the chart builder and the host):
  node: {"id", "position": {"x", "y"}, "label", "style": {...}}
  edge: {"id", "source", "target", "style": {...}}
"""

import uuid
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Dict, Any, Tuple, Iterable

from mindmap.constants import ID_SUFFIX_LENGTH


def new_node_id() -> str:
    return str(uuid.uuid4())


def new_suffix() -> str:
    """Short random hex string used to derive ids from existing ones."""
    return uuid.uuid4().hex[:ID_SUFFIX_LENGTH]


@dataclass(frozen=True)
class Position:
    x: float = 0.0
    y: float = 0.0

    def offset(self, dx: float, dy: float) -> 'Position':
        return Position(self.x + dx, self.y + dy)

    def to_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y}


@dataclass
class Node:
    id: str
    position: Position
    label: str = ''
    style: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'position': self.position.to_dict(),
            'label': self.label,
            'style': dict(self.style),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Node':
        pos = data.get('position') or {}
        return cls(
            id=str(data['id']),
            position=Position(float(pos.get('x', 0.0)), float(pos.get('y', 0.0))),
            label=data.get('label', ''),
            style=dict(data.get('style') or {}),
        )


@dataclass
class Edge:
    id: str
    source: str
    target: str
    style: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'source': self.source,
            'target': self.target,
            'style': dict(self.style),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Edge':
        return cls(
            id=str(data['id']),
            source=str(data['source']),
            target=str(data['target']),
            style=dict(data.get('style') or {}),
        )


@dataclass(frozen=True)
class Snapshot:
    """Immutable capture of the full node/edge set at one point in time."""
    nodes: Tuple[Node, ...] = ()
    edges: Tuple[Edge, ...] = ()

    @classmethod
    def capture(cls, nodes: Iterable[Node], edges: Iterable[Edge]) -> 'Snapshot':
        # Deep copies so later edits to the live objects never reach history
        return cls(
            nodes=tuple(deepcopy(n) for n in nodes),
            edges=tuple(deepcopy(e) for e in edges),
        )

    def node_ids(self) -> set:
        return {n.id for n in self.nodes}

    def to_dict(self) -> Dict[str, Any]:
        return {
            'nodes': [n.to_dict() for n in self.nodes],
            'edges': [e.to_dict() for e in self.edges],
        }
