# templates.py - Canonical node/element sets for common structure types

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from .model import Element, Node, SupportType, support_restraints


class StructureType(Enum):
    BEAM = "Beam"
    MULTI_SPAN_BEAM = "MultiSpanBeam"
    PORTAL_FRAME = "PortalFrame"
    MULTI_STORY_FRAME = "MultiStoryFrame"
    GABLE_FRAME = "GableFrame"
    TRUSS = "Truss"
    CANTILEVER = "Cantilever"


@dataclass
class TemplateParams:
    """
    Parameters shared by every archetype.

    Parameters:
    -----------
    width : float
        Total width / span (m)
    height : float
        Eaves or total height (m)
    roof_height : float
        Rise of the gable above the eaves (m), GABLE_FRAME only
    num_spans : int
        Spans for MULTI_SPAN_BEAM, panels for TRUSS (at least 2)
    num_stories, num_bays : int
        Grid size for MULTI_STORY_FRAME
    E, A, I : float
        Section properties in input units (GPa, cm², 10⁻⁶ m⁴)
    """
    width: float = 10.0
    height: float = 4.0
    roof_height: float = 2.0
    num_spans: int = 2
    num_stories: int = 2
    num_bays: int = 2
    E: float = 210.0
    A: float = 50.0
    I: float = 100.0


class _Builder:
    """Sequential ids from 1, the way a fresh model is numbered."""

    def __init__(self, params: TemplateParams):
        self.params = params
        self.nodes: List[Node] = []
        self.elements: List[Element] = []

    def node(self, x: float, y: float, support: SupportType = SupportType.FREE) -> int:
        node_id = len(self.nodes) + 1
        self.nodes.append(Node(node_id, x, y, support_restraints(support)))
        return node_id

    def element(self, ni: int, nj: int, hinge_start: bool = False, hinge_end: bool = False) -> int:
        p = self.params
        element_id = len(self.elements) + 1
        self.elements.append(Element(element_id, ni, nj, E=p.E, A=p.A, I=p.I,
                                     release_start=hinge_start, release_end=hinge_end))
        return element_id


def generate_geometry(kind: StructureType, params: TemplateParams) -> Tuple[List[Node], List[Element]]:
    """
    Generate nodes and elements for a named structure type.

    - BEAM: two spans, pin at the left, rollers at midspan and right
    - MULTI_SPAN_BEAM: num_spans equal spans, pin then rollers
    - PORTAL_FRAME: fixed bases, rigid knees
    - MULTI_STORY_FRAME: num_bays × num_stories grid, fixed ground floor
    - GABLE_FRAME: pinned bases, ridge at width/2
    - TRUSS: parallel-chord Pratt truss, every member pinned at both ends
    - CANTILEVER: fixed column with a free horizontal arm
    """
    p = params
    b = _Builder(p)

    if kind is StructureType.BEAM:
        n1 = b.node(0.0, 0.0, SupportType.PINNED)
        n2 = b.node(p.width / 2, 0.0, SupportType.ROLLER)
        n3 = b.node(p.width, 0.0, SupportType.ROLLER)
        b.element(n1, n2)
        b.element(n2, n3)

    elif kind is StructureType.MULTI_SPAN_BEAM:
        span = p.width / p.num_spans
        prev = b.node(0.0, 0.0, SupportType.PINNED)
        for i in range(1, p.num_spans + 1):
            cur = b.node(i * span, 0.0, SupportType.ROLLER)
            b.element(prev, cur)
            prev = cur

    elif kind is StructureType.PORTAL_FRAME:
        n1 = b.node(0.0, 0.0, SupportType.FIXED)
        n2 = b.node(0.0, p.height)
        n3 = b.node(p.width, p.height)
        n4 = b.node(p.width, 0.0, SupportType.FIXED)
        b.element(n1, n2)
        b.element(n2, n3)
        b.element(n3, n4)

    elif kind is StructureType.MULTI_STORY_FRAME:
        bay = p.width / p.num_bays
        story = p.height / p.num_stories
        grid = []
        for level in range(p.num_stories + 1):
            support = SupportType.FIXED if level == 0 else SupportType.FREE
            grid.append([b.node(i * bay, level * story, support) for i in range(p.num_bays + 1)])
        for level in range(p.num_stories + 1):
            for i in range(p.num_bays + 1):
                if level > 0 and i < p.num_bays:
                    b.element(grid[level][i], grid[level][i + 1])
                if level < p.num_stories:
                    b.element(grid[level][i], grid[level + 1][i])

    elif kind is StructureType.GABLE_FRAME:
        n1 = b.node(0.0, 0.0, SupportType.PINNED)
        n2 = b.node(0.0, p.height)
        n3 = b.node(p.width / 2, p.height + p.roof_height)
        n4 = b.node(p.width, p.height)
        n5 = b.node(p.width, 0.0, SupportType.PINNED)
        for ni, nj in [(n1, n2), (n2, n3), (n3, n4), (n4, n5)]:
            b.element(ni, nj)

    elif kind is StructureType.TRUSS:
        panels = max(2, int(p.num_spans))
        panel = p.width / panels
        bottom = []
        for i in range(panels + 1):
            if i == 0:
                support = SupportType.PINNED
            elif i == panels:
                support = SupportType.ROLLER
            else:
                support = SupportType.FREE
            bottom.append(b.node(i * panel, 0.0, support))
        top = [b.node(i * panel, p.height) for i in range(panels + 1)]

        for i in range(panels):
            b.element(bottom[i], bottom[i + 1], True, True)
            b.element(top[i], top[i + 1], True, True)
            b.element(bottom[i], top[i], True, True)
            b.element(bottom[i], top[i + 1], True, True)
        b.element(bottom[panels], top[panels], True, True)

    elif kind is StructureType.CANTILEVER:
        n1 = b.node(0.0, 0.0, SupportType.FIXED)
        n2 = b.node(0.0, p.height)
        n3 = b.node(p.width, p.height)
        b.element(n1, n2)
        b.element(n2, n3)

    else:
        raise ValueError(f"Unknown structure type: {kind}")

    return b.nodes, b.elements
