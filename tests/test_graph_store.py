import random

import pytest

from mindmap.constants import ROOT_NODE_ID, JITTER_X, VERTICAL_STEP, DEFAULT_LABEL
from mindmap.exceptions import MindMapError, NotFoundError, InvalidStyleError
from mindmap.graph_store import GraphStore
from mindmap.models import Node, Edge, Position


def assert_edges_valid(store):
    ids = set(store.node_ids)
    for edge in store.edges:
        assert edge.source in ids and edge.target in ids


@pytest.fixture
def store():
    return GraphStore(rng=random.Random(7))


def test_starts_with_single_root(store):
    nodes = store.nodes
    assert [n.id for n in nodes] == [ROOT_NODE_ID]
    assert nodes[0].label == 'Central Idea'
    assert nodes[0].position == Position(250.0, 250.0)
    assert store.edges == []


def test_add_node_places_child_below_parent(store):
    child_id = store.add_node(ROOT_NODE_ID)
    child = store.get_node(child_id)
    parent = store.get_node(ROOT_NODE_ID)

    assert child.label == DEFAULT_LABEL
    assert child.position.y == parent.position.y + VERTICAL_STEP
    assert abs(child.position.x - parent.position.x) <= JITTER_X

    edges = store.edges
    assert len(edges) == 1
    assert edges[0].source == ROOT_NODE_ID
    assert edges[0].target == child_id
    assert edges[0].id == f"{ROOT_NODE_ID}-{child_id}"
    assert edges[0].style == {'strokeColor': '#000'}


def test_add_node_unknown_parent_raises_and_leaves_graph(store):
    before = store.snapshot()
    with pytest.raises(NotFoundError):
        store.add_node('missing')
    assert store.snapshot() == before


def test_not_found_error_is_a_key_error(store):
    with pytest.raises(KeyError):
        store.add_node('missing')


def test_connect_allows_self_loops_and_parallel_edges(store):
    child = store.add_node(ROOT_NODE_ID)
    first = store.connect(ROOT_NODE_ID, child)
    second = store.connect(ROOT_NODE_ID, child)
    loop = store.connect(child, child)

    assert len({first, second, loop}) == 3
    assert len(store.edges) == 4
    assert store.get_edge(loop).source == store.get_edge(loop).target == child


def test_connect_missing_endpoint_raises(store):
    with pytest.raises(NotFoundError):
        store.connect(ROOT_NODE_ID, 'ghost')
    with pytest.raises(NotFoundError):
        store.connect('ghost', ROOT_NODE_ID)
    assert store.edges == []


def test_delete_cascades_edges(store):
    a = store.add_node(ROOT_NODE_ID)
    b = store.add_node(a)
    store.connect(b, ROOT_NODE_ID)

    removed = store.delete_nodes({a})

    assert removed == 1
    assert a not in store.node_ids
    # root->a, a->b gone; b->root stays
    assert [(e.source, e.target) for e in store.edges] == [(b, ROOT_NODE_ID)]
    assert_edges_valid(store)


def test_delete_empty_and_unknown_ids_is_noop(store):
    before = store.snapshot()
    assert store.delete_nodes(set()) == 0
    assert store.delete_nodes({'nope'}) == 0
    assert store.snapshot() == before


def test_relabel_and_move_tolerate_missing_nodes(store):
    assert store.relabel(ROOT_NODE_ID, 'Thesis') is True
    assert store.get_node(ROOT_NODE_ID).label == 'Thesis'
    assert store.relabel('gone', 'x') is False

    assert store.move_node(ROOT_NODE_ID, Position(1, 2)) is True
    assert store.get_node(ROOT_NODE_ID).position == Position(1, 2)
    assert store.move_node('gone', Position(0, 0)) is False


def test_restyle_all_nodes_and_edges(store):
    child = store.add_node(ROOT_NODE_ID)
    store.restyle('fontSize', '20')
    store.restyle('edgeColor', '#ff0000')

    assert all(n.style['fontSize'] == '20' for n in store.nodes)
    assert store.get_edge(f"{ROOT_NODE_ID}-{child}").style['strokeColor'] == '#ff0000'


def test_restyle_scope_limits_targets(store):
    child = store.add_node(ROOT_NODE_ID)
    store.restyle('fontColor', '#123456', scope=[child])
    assert 'fontColor' not in store.get_node(ROOT_NODE_ID).style
    assert store.get_node(child).style['fontColor'] == '#123456'


def test_restyle_unknown_property_raises(store):
    before = store.snapshot()
    with pytest.raises(InvalidStyleError):
        store.restyle('borderRadius', '5px')
    assert store.snapshot() == before


def test_induced_subgraph_drops_boundary_edges(store):
    a = store.add_node(ROOT_NODE_ID)
    b = store.add_node(a)

    nodes, edges = store.induced_subgraph([ROOT_NODE_ID, a])

    assert [n.id for n in nodes] == [ROOT_NODE_ID, a]
    assert [(e.source, e.target) for e in edges] == [(ROOT_NODE_ID, a)]


def test_read_model_returns_copies(store):
    store.nodes[0].label = 'mutated'
    store.nodes[0].style['fontSize'] = '99'
    root = store.get_node(ROOT_NODE_ID)
    assert root.label == 'Central Idea'
    assert root.style == {}


def test_add_subgraph_is_all_or_nothing(store):
    before = store.snapshot()
    nodes = [Node('x', Position(0, 0), 'X')]
    edges = [Edge('x-y', 'x', 'y')]

    with pytest.raises(NotFoundError):
        store.add_subgraph(nodes, edges)
    assert store.snapshot() == before

    with pytest.raises(MindMapError):
        store.add_subgraph([Node(ROOT_NODE_ID, Position(0, 0))], [])
    assert store.snapshot() == before


def test_snapshot_restore_round_trip(store):
    a = store.add_node(ROOT_NODE_ID)
    store.connect(a, ROOT_NODE_ID)
    snap = store.snapshot()

    store.delete_nodes({a})
    store.restore(snap)

    assert store.snapshot() == snap
    # Restored content is detached from the snapshot
    store.relabel(a, 'changed')
    assert [n.label for n in snap.nodes if n.id == a] == [DEFAULT_LABEL]
