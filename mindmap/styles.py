"""
Style propagation for nodes and edges.

The toolbar changes one style property at a time. Node properties (font size,
style, colour) land on nodes; the branch colour lands on edges. Functions here
never mutate their inputs, so callers can compute the full result before
writing anything back to the store.
"""

from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional, Tuple

from mindmap.constants import (
    NODE_STYLE_PROPERTIES,
    EDGE_STYLE_PROPERTIES,
    STYLE_ALIASES,
    DEFAULT_NODE_STYLE,
    DEFAULT_EDGE_STYLE,
)
from mindmap.exceptions import InvalidStyleError
from mindmap.models import Node, Edge


def resolve_property(prop: str) -> str:
    """Map toolbar aliases to canonical names and reject unknown properties."""
    name = STYLE_ALIASES.get(prop, prop)
    if name not in NODE_STYLE_PROPERTIES and name not in EDGE_STYLE_PROPERTIES:
        raise InvalidStyleError(
            f"Unknown style property '{prop}'. "
            f"Valid: {NODE_STYLE_PROPERTIES + EDGE_STYLE_PROPERTIES}"
        )
    return name


def is_edge_property(prop: str) -> bool:
    return resolve_property(prop) in EDGE_STYLE_PROPERTIES


def apply_style(
    nodes: Iterable[Node],
    edges: Iterable[Edge],
    prop: str,
    value: Any,
    scope: Optional[Iterable[str]] = None,
) -> Tuple[List[Node], List[Edge]]:
    """
    Return new node and edge lists with `prop` set to `value` on every target.

    scope: node ids to restyle; None means every node. For edge properties
    an edge is in scope when both of its endpoints are.
    """
    name = resolve_property(prop)
    scope_ids = None if scope is None else set(scope)

    new_nodes = list(nodes)
    new_edges = list(edges)

    if name in NODE_STYLE_PROPERTIES:
        new_nodes = [
            replace(n, style={**n.style, name: value})
            if scope_ids is None or n.id in scope_ids else n
            for n in new_nodes
        ]
    else:
        new_edges = [
            replace(e, style={**e.style, name: value})
            if scope_ids is None or (e.source in scope_ids and e.target in scope_ids) else e
            for e in new_edges
        ]
    return new_nodes, new_edges


def effective_style(nodes: Iterable[Node], edges: Iterable[Edge]) -> Dict[str, Any]:
    """
    The style the toolbar should display.

    A property shows the value every node (or edge) agrees on, and the default
    otherwise.
    """
    nodes = list(nodes)
    edges = list(edges)
    current = {}

    for prop, default in DEFAULT_NODE_STYLE.items():
        values = {n.style.get(prop) for n in nodes}
        current[prop] = values.pop() if len(values) == 1 and None not in values else default

    for prop, default in DEFAULT_EDGE_STYLE.items():
        values = {e.style.get(prop) for e in edges}
        current[prop] = values.pop() if len(values) == 1 and None not in values else default

    return current
