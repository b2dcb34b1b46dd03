"""
TEST: Connectivity Repair (T-junction splitting)
================================================

A node sitting on an element is only connected to it once the element is
split there. These tests check the geometry of the split, how element
properties and loads are carried over, and that the loaded structure is
statically the same before and after.
"""

import numpy as np
import pytest

from planeframe import (
    Element,
    Load,
    LoadKind,
    Node,
    prune_dangling_loads,
    repair_connectivity,
    solve,
)
from planeframe.repair import find_split_nodes, point_segment_distance

E, A, I = 200.0, 100.0, 100.0


def beam_with_midnode(*extra_nodes):
    nodes = [
        Node(1, 0.0, 0.0, (True, True, False)),
        Node(2, 6.0, 0.0, (False, True, False)),
        *extra_nodes,
    ]
    elements = [Element(1, 1, 2, E=E, A=A, I=I, release_start=True, release_end=True)]
    return nodes, elements


def test_point_segment_distance():
    a, b = Node(1, 0.0, 0.0), Node(2, 4.0, 0.0)

    dist, t = point_segment_distance(Node(3, 1.0, 0.5), a, b)
    assert dist == pytest.approx(0.5)
    assert t == pytest.approx(0.25)

    # beyond the end: t unclamped, distance to the endpoint
    dist, t = point_segment_distance(Node(4, 7.0, 4.0), a, b)
    assert dist == pytest.approx(5.0)
    assert t == pytest.approx(1.75)

    # degenerate segment
    _, t = point_segment_distance(Node(5, 1.0, 1.0), a, a)
    assert t == -1.0


def test_split_at_one_node():
    nodes, elements = beam_with_midnode(Node(3, 2.0, 0.0))
    loads = [
        Load("w", LoadKind.DISTRIBUTED, -5.0, element_id=1),
        Load("P", LoadKind.POINT, -10.0, element_id=1, location=0.5),
        Load("M", LoadKind.MOMENT, 4.0, element_id=1, location=0.2),
        Load("N", LoadKind.POINT, -1.0, node_id=3),
    ]

    new_nodes, new_elements, new_loads = repair_connectivity(nodes, elements, loads)

    assert new_nodes == nodes
    assert [(e.id, e.start, e.end) for e in new_elements] == [(2, 1, 3), (3, 3, 2)]
    assert all((e.E, e.A, e.I) == (E, A, I) for e in new_elements)

    by_node = {n.id: n for n in new_nodes}
    lengths = [np.hypot(by_node[e.end].x - by_node[e.start].x, by_node[e.end].y - by_node[e.start].y)
               for e in new_elements]
    np.testing.assert_allclose(lengths, [2.0, 4.0])
    assert sum(lengths) == pytest.approx(6.0)

    # the start release stays on the first piece, the end release on the last
    assert (new_elements[0].release_start, new_elements[0].release_end) == (True, False)
    assert (new_elements[1].release_start, new_elements[1].release_end) == (False, True)

    by_id = {load.id: load for load in new_loads}
    assert new_loads[0].id == "N"
    assert set(by_id) == {"N", "w/0", "w/1", "P/1", "M/0"}

    assert by_id["w/0"].element_id == 2
    assert by_id["w/1"].element_id == 3
    assert by_id["w/1"].magnitude == -5.0

    # 0.5 of 6 m is 3 m: 1 m into the 4 m second piece
    assert by_id["P/1"].element_id == 3
    assert by_id["P/1"].location == pytest.approx(0.25)

    # 0.2 of 6 m is 1.2 m: 0.6 of the 2 m first piece
    assert by_id["M/0"].element_id == 2
    assert by_id["M/0"].location == pytest.approx(0.6)


def test_point_load_on_split_point_goes_to_one_piece():
    nodes, elements = beam_with_midnode(Node(3, 3.0, 0.0))
    loads = [Load("P", LoadKind.POINT, -10.0, element_id=1, location=0.5)]

    _, _, new_loads = repair_connectivity(nodes, elements, loads)

    assert len(new_loads) == 1
    assert new_loads[0].id == "P/0"
    assert new_loads[0].location == pytest.approx(1.0)


def test_multiple_splits_follow_the_element():
    # listed out of order on purpose
    nodes, elements = beam_with_midnode(Node(3, 4.0, 0.0), Node(4, 2.0, 0.0))

    _, new_elements, _ = repair_connectivity(nodes, elements, [])

    assert [(e.start, e.end) for e in new_elements] == [(1, 4), (4, 3), (3, 2)]
    assert [e.id for e in new_elements] == [2, 3, 4]
    assert [(e.release_start, e.release_end) for e in new_elements] == [
        (True, False), (False, False), (False, True)
    ]


def test_split_respects_tolerance_and_ends():
    nodes, elements = beam_with_midnode(
        Node(3, 3.0, 0.1),     # 10 cm off the line
        Node(4, 0.03, 0.0),    # too close to the start
        Node(5, 9.0, 0.0),     # beyond the end
    )
    _, new_elements, _ = repair_connectivity(nodes, elements, [])
    assert new_elements == elements

    nodes, elements = beam_with_midnode(Node(3, 3.0, 0.04))   # 4 cm off: snapped in
    _, new_elements, _ = repair_connectivity(nodes, elements, [])
    assert len(new_elements) == 2


def test_find_split_nodes_sorted_by_position():
    nodes, elements = beam_with_midnode(Node(3, 5.0, 0.0), Node(4, 1.0, 0.0), Node(5, 3.0, 0.0))
    hits = find_split_nodes(elements[0], nodes[0], nodes[1], nodes)
    assert [node.id for _, node in hits] == [4, 5, 3]


def test_repair_is_idempotent():
    nodes, elements = beam_with_midnode(Node(3, 2.0, 0.0), Node(4, 4.5, 0.0))
    loads = [
        Load("w", LoadKind.DISTRIBUTED, -5.0, element_id=1),
        Load("P", LoadKind.POINT, -10.0, element_id=1, location=0.9),
    ]

    once = repair_connectivity(nodes, elements, loads)
    twice = repair_connectivity(*once)

    assert twice == once


def test_dangling_element_passes_through():
    nodes, _ = beam_with_midnode(Node(3, 2.0, 0.0))
    elements = [Element(7, 1, 99, E=E, A=A, I=I)]
    loads = [Load("w", LoadKind.DISTRIBUTED, -5.0, element_id=7)]

    _, new_elements, new_loads = repair_connectivity(nodes, elements, loads)

    assert new_elements == elements
    assert new_loads == loads


def test_repair_keeps_the_statics():
    """Reactions of a loaded simply supported beam are unchanged by splitting."""
    nodes = [
        Node(1, 0.0, 0.0, (True, True, False)),
        Node(2, 6.0, 0.0, (False, True, False)),
        Node(3, 2.0, 0.0),
    ]
    elements = [Element(1, 1, 2, E=E, A=A, I=I)]
    loads = [
        Load("w", LoadKind.DISTRIBUTED, -5.0, element_id=1),
        Load("P", LoadKind.POINT, -12.0, element_id=1, location=0.75),
        Load("M", LoadKind.MOMENT, 6.0, element_id=1, location=0.1),
    ]

    before = solve(nodes, elements, loads)
    after = solve(*repair_connectivity(nodes, elements, loads))

    for node_id in (1, 2):
        a, b = before.reaction(node_id), after.reaction(node_id)
        assert np.isclose(a.fx, b.fx, atol=1e-3)
        assert np.isclose(a.fy, b.fy, atol=1e-3)

    # ΣFy = 5·6 + 12
    assert np.isclose(sum(r.fy for r in after.reactions), 42.0, atol=1e-2)
    assert np.isclose(
        max(r.max_moment for r in after.elements),
        max(r.max_moment for r in before.elements),
        atol=1e-2,
    )


def test_prune_dangling_loads():
    nodes = [Node(1, 0.0, 0.0), Node(2, 1.0, 0.0)]
    elements = [Element(1, 1, 2, E=E, A=A, I=I)]
    loads = [
        Load("ok-node", LoadKind.POINT, -1.0, node_id=2),
        Load("ok-element", LoadKind.DISTRIBUTED, -1.0, element_id=1),
        Load("gone-node", LoadKind.POINT, -1.0, node_id=5),
        Load("gone-element", LoadKind.MOMENT, 1.0, element_id=5),
    ]

    kept = prune_dangling_loads(nodes, elements, loads)

    assert [load.id for load in kept] == ["ok-node", "ok-element"]
