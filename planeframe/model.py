# Node, Element, Load (inputs) and Station, ElementResult, AnalysisResult (outputs)

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np


class StiffnessMode(Enum):
    """Global stiffness override applied to every element."""
    ELASTIC = "Elastic"
    AXIALLY_RIGID = "AxiallyRigid"   # inextensible members, bending unchanged
    RIGID = "Rigid"                  # near-rigid members


class LoadKind(Enum):
    POINT = "point"
    DISTRIBUTED = "distributed"
    MOMENT = "moment"


class Direction(Enum):
    X = "x"
    Y = "y"


class SupportType(Enum):
    """Common restraint combinations."""
    FIXED = "Fixed"
    PINNED = "Pinned"
    ROLLER = "Roller"        # fixes uy only
    ROLLER_X = "RollerX"     # fixes ux only
    FREE = "Free"
    CUSTOM = "Custom"


SUPPORT_RESTRAINTS = {
    SupportType.FIXED: (True, True, True),
    SupportType.PINNED: (True, True, False),
    SupportType.ROLLER: (False, True, False),
    SupportType.ROLLER_X: (True, False, False),
    SupportType.FREE: (False, False, False),
}


def support_restraints(kind: SupportType) -> Tuple[bool, bool, bool]:
    if kind not in SUPPORT_RESTRAINTS:
        raise ValueError(f"Support type {kind} has no fixed restraint pattern.")
    return SUPPORT_RESTRAINTS[kind]


def support_type_of(restraints: Tuple[bool, bool, bool]) -> SupportType:
    for kind, pattern in SUPPORT_RESTRAINTS.items():
        if tuple(restraints) == pattern:
            return kind
    return SupportType.CUSTOM


@dataclass(frozen=True)
class Node:
    id: int
    x: float
    y: float
    restraints: Tuple[bool, bool, bool] = (False, False, False)  # (ux, uy, rz)

    @property
    def is_supported(self) -> bool:
        return any(self.restraints)


@dataclass(frozen=True)
class Element:
    """
    2D frame element (Euler-Bernoulli): 2 nodes, 3 DOF per node: (ux, uy, rz)

    Section properties are stored in input units:
    E in GPa, A in cm², I in 10⁻⁶ m⁴.
    """
    id: int
    start: int
    end: int
    E: float
    A: float
    I: float
    release_start: bool = False
    release_end: bool = False

    def __post_init__(self):
        if self.start == self.end:
            raise ValueError(f"Element {self.id} starts and ends at node {self.start}.")


@dataclass(frozen=True)
class Load:
    """
    A load on exactly one node or one element.

    magnitude is kN (point), kN/m (distributed) or kNm (moment).
    direction is a global axis and is ignored for moments.
    location is the normalized position along the element; None means
    midspan. Distributed loads always span the whole element.
    """
    id: str
    kind: LoadKind
    magnitude: float
    node_id: Optional[int] = None
    element_id: Optional[int] = None
    direction: Direction = Direction.Y
    location: Optional[float] = None

    def __post_init__(self):
        if (self.node_id is None) == (self.element_id is None):
            raise ValueError(f"Load {self.id} must target exactly one node or element.")
        if self.location is not None and not 0.0 <= self.location <= 1.0:
            raise ValueError(f"Load {self.id} location {self.location} is outside [0, 1].")

    @property
    def on_element(self) -> bool:
        return self.element_id is not None

    @property
    def position(self) -> float:
        return 0.5 if self.location is None else self.location


@dataclass
class Station:
    """A single sample point along an element."""
    x: float            # local position (m)
    deflection: float   # local transverse deflection (mm)
    axial: float        # N, tension positive (kN)
    shear: float        # V (kN)
    moment: float       # M, sagging positive (kNm)
    global_x: float     # deflected global position (m)
    global_y: float


@dataclass
class EndForces:
    """Forces exerted by the start node on the element, local axes."""
    fx: float
    fy: float
    m: float


@dataclass
class ElementResult:
    element_id: int
    stations: List[Station]
    max_moment: float
    max_shear: float
    max_axial: float
    u_local: np.ndarray          # [u1, v1, th1, u2, v2, th2]
    start_forces: EndForces


@dataclass
class Reaction:
    node_id: int
    fx: float
    fy: float
    m: float


@dataclass
class AnalysisResult:
    elements: List[ElementResult] = field(default_factory=list)
    max_deflection: float = 0.0
    reactions: List[Reaction] = field(default_factory=list)

    def element(self, element_id: int) -> ElementResult:
        for result in self.elements:
            if result.element_id == element_id:
                return result
        raise KeyError(f"No result for element {element_id}.")

    def reaction(self, node_id: int) -> Reaction:
        for reaction in self.reactions:
            if reaction.node_id == node_id:
                return reaction
        raise KeyError(f"No reaction at node {node_id}.")
