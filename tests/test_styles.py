import pytest

from mindmap.exceptions import InvalidStyleError
from mindmap.models import Node, Edge, Position
from mindmap.styles import apply_style, effective_style, resolve_property, is_edge_property


def make_nodes():
    return [
        Node('1', Position(0, 0), 'one'),
        Node('2', Position(0, 0), 'two', {'fontSize': '14'}),
    ]


def test_resolve_property_aliases_and_rejects():
    assert resolve_property('edgeColor') == 'strokeColor'
    assert resolve_property('fontSize') == 'fontSize'
    assert is_edge_property('edgeColor')
    assert not is_edge_property('fontColor')
    with pytest.raises(InvalidStyleError):
        resolve_property('padding')


def test_apply_style_returns_new_objects():
    nodes = make_nodes()
    new_nodes, new_edges = apply_style(nodes, [], 'fontSize', '20')

    assert [n.style['fontSize'] for n in new_nodes] == ['20', '20']
    # inputs untouched
    assert nodes[0].style == {}
    assert nodes[1].style == {'fontSize': '14'}
    assert new_edges == []


def test_apply_edge_property_with_scope():
    nodes = make_nodes() + [Node('3', Position(0, 0))]
    edges = [Edge('e1', '1', '2'), Edge('e2', '2', '3')]

    _, new_edges = apply_style(nodes, edges, 'strokeColor', '#0f0', scope=['1', '2'])

    assert new_edges[0].style == {'strokeColor': '#0f0'}
    assert new_edges[1].style == {}


def test_effective_style_uses_shared_value_or_default():
    nodes = make_nodes()
    style = effective_style(nodes, [])
    # fontSize differs (absent vs '14') -> default
    assert style['fontSize'] == '12px'
    assert style['fontStyle'] == 'normal'
    assert style['strokeColor'] == '#000'

    nodes, edges = apply_style(nodes, [Edge('e', '1', '2')], 'fontSize', '22')
    _, edges = apply_style(nodes, edges, 'edgeColor', '#abcdef')
    style = effective_style(nodes, edges)
    assert style['fontSize'] == '22'
    assert style['strokeColor'] == '#abcdef'
