# repair.py - T-junction splitting and dangling-load pruning
"""
CONNECTIVITY REPAIR
===================

A node drawn on top of an element is not connected to it unless the element
is split there. repair_connectivity finds such T-junctions and splits the
element into a chain of sub-segments, remapping the element's loads so the
loaded structure is unchanged:

    before:   1 ────────────── 2          node 3 sits on the element
                      3
    after:    1 ────── 3 ───── 2          two segments, continuous at 3

- each sub-segment copies E, A, I
- the start release stays on the first segment, the end release on the last
- distributed loads are copied onto every segment
- point loads and moments go to the one segment containing them, with the
  location re-normalized to that segment
"""

import logging
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .config import CONFIG, SolverConfig
from .model import Element, Load, LoadKind, Node

logger = logging.getLogger(__name__)


def point_segment_distance(p: Node, a: Node, b: Node) -> Tuple[float, float]:
    """
    Distance from p to segment a-b and the parameter t of the projection.

    t is unclamped (it can fall outside [0, 1]); the distance is measured to
    the nearest point of the segment. A degenerate segment gives t = -1.
    """
    cx, cy = b.x - a.x, b.y - a.y
    len_sq = cx * cx + cy * cy
    t = ((p.x - a.x) * cx + (p.y - a.y) * cy) / len_sq if len_sq != 0 else -1.0

    if t < 0:
        qx, qy = a.x, a.y
    elif t > 1:
        qx, qy = b.x, b.y
    else:
        qx, qy = a.x + t * cx, a.y + t * cy
    return float(np.hypot(p.x - qx, p.y - qy)), t


def find_split_nodes(
    element: Element,
    a: Node,
    b: Node,
    nodes: Sequence[Node],
    config: SolverConfig = CONFIG,
) -> List[Tuple[float, Node]]:
    """Foreign nodes lying on the element's interior, sorted by t."""
    hits = []
    for node in nodes:
        if node.id in (element.start, element.end):
            continue
        dist, t = point_segment_distance(node, a, b)
        if dist < config.split_tol and config.t_min < t < config.t_max:
            hits.append((t, node))
    hits.sort(key=lambda hit: hit[0])
    return hits


def repair_connectivity(
    nodes: Sequence[Node],
    elements: Sequence[Element],
    loads: Sequence[Load],
    config: Optional[SolverConfig] = None,
) -> Tuple[List[Node], List[Element], List[Load]]:
    """
    Split every element crossed by a foreign node.

    Parameters:
    -----------
    nodes, elements, loads : sequences of model objects (not modified)
    config : SolverConfig, optional
        split_tol, t_min, t_max and location_tol are used

    Returns:
    --------
    (nodes, elements, loads)
        nodes unchanged; elements with split ones replaced by their
        sub-segments (new ids above the current maximum, in input order);
        node loads first, then element loads remapped

    Running it again on its own output changes nothing.
    """
    config = config or CONFIG
    by_id = {n.id: n for n in nodes}
    next_id = max((e.id for e in elements), default=0) + 1

    element_loads = {}
    for load in loads:
        if load.on_element:
            element_loads.setdefault(load.element_id, []).append(load)

    new_elements = []
    new_loads = [load for load in loads if not load.on_element]

    for element in elements:
        a = by_id.get(element.start)
        b = by_id.get(element.end)
        own_loads = element_loads.get(element.id, [])
        hits = find_split_nodes(element, a, b, nodes, config) if a is not None and b is not None else []

        if not hits:
            new_elements.append(element)
            new_loads.extend(own_loads)
            continue

        logger.info(
            "Splitting element %s at node(s) %s",
            element.id, [node.id for _, node in hits],
        )
        points = hits + [(1.0, b)]
        start_node, t0 = a, 0.0
        claimed = set()

        for index, (t1, end_node) in enumerate(points):
            segment = replace(
                element,
                id=next_id,
                start=start_node.id,
                end=end_node.id,
                release_start=element.release_start if index == 0 else False,
                release_end=element.release_end if index == len(points) - 1 else False,
            )
            next_id += 1
            new_elements.append(segment)

            for load in own_loads:
                new_load = _remap_load(load, segment.id, index, t0, t1, claimed, config)
                if new_load is not None:
                    new_loads.append(new_load)

            start_node, t0 = end_node, t1

    return list(nodes), new_elements, new_loads


def _remap_load(load, segment_id, index, t0, t1, claimed, config):
    """Copy of load on segment [t0, t1], or None if it belongs elsewhere."""
    new_id = f"{load.id}/{index}"
    if load.kind is LoadKind.DISTRIBUTED:
        return replace(load, id=new_id, element_id=segment_id)

    # a load exactly on a split point goes to the first segment that reaches it
    if load.id in claimed:
        return None
    loc = load.position
    if not (t0 - config.location_tol <= loc <= t1 + config.location_tol):
        return None

    claimed.add(load.id)
    span = t1 - t0
    local = (loc - t0) / span if span > 1e-6 else 0.0
    return replace(load, id=new_id, element_id=segment_id,
                   location=min(1.0, max(0.0, local)))


def prune_dangling_loads(
    nodes: Sequence[Node],
    elements: Sequence[Element],
    loads: Sequence[Load],
) -> List[Load]:
    """Drop loads whose target node or element no longer exists."""
    node_ids = {n.id for n in nodes}
    element_ids = {e.id for e in elements}
    kept = []
    for load in loads:
        target_ok = (load.element_id in element_ids) if load.on_element else (load.node_id in node_ids)
        if target_ok:
            kept.append(load)
        else:
            logger.debug("Dropping load %s on a missing target", load.id)
    return kept
