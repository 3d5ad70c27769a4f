"""
ECharts options builder for the mind-map canvas.

Converts the session's plain-dict graph into an ECharts 'graph' series with
fixed positions, and turns chart click payloads back into node ids.
"""

import re
from typing import Any, Dict, Iterable, Optional

from mindmap.constants import DEFAULT_NODE_STYLE, DEFAULT_EDGE_STYLE


# Event keys we request from ECharts click events
REQUESTED_EVENT_KEYS = ['componentType', 'name', 'dataType', 'value']

SELECTED_BORDER_COLOR = '#2196f3'


def font_size_px(value: Any, default: int = 12) -> int:
    """Parse '20', '20px' or 20 into a pixel size."""
    if isinstance(value, (int, float)):
        return int(value)
    match = re.match(r'\s*(\d+(?:\.\d+)?)', str(value or ''))
    return int(float(match.group(1))) if match else default


def build_echart_options(graph: Dict[str, Any], selected: Optional[Iterable[str]] = None) -> Dict[str, Any]:
    """
    Build ECharts options from the session graph.

    Args:
        graph: Dict with 'nodes' and 'edges' lists (EditorSession.to_graph())
        selected: Node ids to highlight

    Returns:
        ECharts options dict ready for ui.echart()
    """
    selected = set(selected or [])
    node_ids = set()

    e_nodes = []
    for n in graph.get('nodes', []):
        nid = n['id']
        node_ids.add(nid)
        style = {**DEFAULT_NODE_STYLE, **(n.get('style') or {})}
        pos = n.get('position') or {}
        is_selected = nid in selected

        e_nodes.append({
            'id': nid,
            'name': nid,
            'value': n.get('label', ''),
            'x': pos.get('x', 0),
            'y': pos.get('y', 0),
            'symbol': 'roundRect',
            'symbolSize': [110, 36],
            'itemStyle': {
                'color': '#ffffff',
                'borderColor': SELECTED_BORDER_COLOR if is_selected else '#dddddd',
                'borderWidth': 3 if is_selected else 1,
            },
            'label': {
                'show': True,
                'formatter': n.get('label', ''),
                'fontSize': font_size_px(style['fontSize']),
                'fontStyle': 'italic' if style['fontStyle'] == 'italic' else 'normal',
                'fontWeight': 'bold' if style['fontStyle'] == 'bold' else 'normal',
                'color': style['fontColor'],
            },
            'draggable': False,
        })

    e_links = []
    for e in graph.get('edges', []):
        # Skip links whose endpoints are no longer in the graph
        if e['source'] not in node_ids or e['target'] not in node_ids:
            continue
        style = {**DEFAULT_EDGE_STYLE, **(e.get('style') or {})}
        e_links.append({
            'id': e['id'],
            'source': e['source'],
            'target': e['target'],
            'lineStyle': {'color': style['strokeColor'], 'width': 1.5, 'curveness': 0.1},
            'symbol': ['none', 'arrow'],
        })

    return {
        'tooltip': {},
        'animationDurationUpdate': 0,
        'series': [{
            'type': 'graph',
            'layout': 'none',
            'roam': True,
            'data': e_nodes,
            'links': e_links,
        }],
    }


def normalize_click_payload(raw_payload: Any) -> Dict[str, Any]:
    """Normalize NiceGUI chart click payloads into a dictionary for easier parsing."""
    if isinstance(raw_payload, dict):
        return raw_payload
    if isinstance(raw_payload, (list, tuple)):
        return {
            REQUESTED_EVENT_KEYS[i]: raw_payload[i]
            for i in range(min(len(raw_payload), len(REQUESTED_EVENT_KEYS)))
        }
    if isinstance(raw_payload, str):
        return {'name': raw_payload}
    return {}


def resolve_node_id_from_payload(payload: Dict[str, Any], node_ids: Iterable[str]) -> Optional[str]:
    """Return the clicked node id, or None for edges, background or stale ids."""
    if not isinstance(payload, dict):
        return None
    if payload.get('componentType') not in (None, 'series'):
        return None
    if payload.get('dataType') == 'edge':
        return None

    node_id = payload.get('name')
    if node_id and node_id in set(node_ids):
        return node_id
    return None
