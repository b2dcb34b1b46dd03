# Frame element stiffness (with end releases and rigidity overrides) + transformation

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from .config import CONFIG, SolverConfig
from .kernel.dof import DOFManager
from .model import Element, Node, StiffnessMode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Member:
    """An element that takes part in the analysis, with its geometry resolved."""
    element: Element
    ni: Node
    nj: Node
    L: float
    c: float
    s: float
    dof_map: Tuple[int, ...]


def prepare_members(
    nodes: Sequence[Node],
    elements: Sequence[Element],
    dof: DOFManager,
    config: SolverConfig = CONFIG,
) -> List[Member]:
    """
    Resolve node references and geometry once per solve.

    Nodes are looked up through the DOF manager, so `dof` must be built
    from this same node list.

    Elements that reference an unknown node id, or whose nodes coincide,
    are inert: they are left out here and therefore contribute nothing to
    K, F or the results.
    """
    members = []
    for e in elements:
        i, j = dof.index_of(e.start), dof.index_of(e.end)
        if i is None or j is None:
            logger.debug("Element %s references a missing node; skipped", e.id)
            continue
        ni, nj = nodes[i], nodes[j]
        if float(np.hypot(nj.x - ni.x, nj.y - ni.y)) < config.min_length:
            logger.debug("Element %s has zero length; skipped", e.id)
            continue
        L, c, s = element_geometry(ni, nj)
        members.append(Member(e, ni, nj, L, c, s, tuple(dof.element_dof_map(e.start, e.end))))
    return members


def element_geometry(ni: Node, nj: Node):
    """Length and direction cosines (L, c, s) of the segment ni -> nj."""
    dx = nj.x - ni.x
    dy = nj.y - ni.y
    L = float(np.hypot(dx, dy))
    if L <= 0.0:
        raise ValueError(f"Nodes {ni.id} and {nj.id} coincide.")
    c = dx / L
    s = dy / L
    return L, c, s


def effective_properties(
    element: Element,
    mode: StiffnessMode = StiffnessMode.ELASTIC,
    config: SolverConfig = CONFIG,
):
    """
    Section properties in analysis units (kPa, m², m⁴) after mode overrides.

    AXIALLY_RIGID scales A only, so members become inextensible but keep
    their bending flexibility. RIGID scales E, stiffening everything.
    """
    E = element.E * config.e_factor
    A = element.A * config.a_factor
    I = element.I * config.i_factor

    if mode is StiffnessMode.AXIALLY_RIGID:
        A *= config.rigid_multiplier
    elif mode is StiffnessMode.RIGID:
        E *= config.rigid_multiplier

    return E, A, I


def frame2d_local_stiffness(
    E: float,
    A: float,
    I: float,
    L: float,
    release_start: bool = False,
    release_end: bool = False,
) -> np.ndarray:
    """
    Local stiffness matrix in element local coords (x along member).
    DOF order: [uix, uiy, rzi, ujx, ujy, rzj]

    Bending terms depend on the release state:
    - no release: standard 12/6/4/2 EI family
    - start released: propped form, no stiffness on rzi
    - end released: propped form, no stiffness on rzj
    - both released: axial only (two-force member)
    """
    EA_L = E * A / L
    EI = E * I
    L2 = L * L
    L3 = L2 * L

    k = np.zeros((6, 6), dtype=float)
    k[0, 0] = k[3, 3] = EA_L
    k[0, 3] = k[3, 0] = -EA_L

    if release_start and release_end:
        return k

    if release_start:
        k33, k32, k31 = 3*EI/L3, 3*EI/L2, 3*EI/L
        k[np.ix_([1, 4, 5], [1, 4, 5])] = [
            [ k33, -k33,  k32],
            [-k33,  k33, -k32],
            [ k32, -k32,  k31],
        ]
    elif release_end:
        k33, k32, k31 = 3*EI/L3, 3*EI/L2, 3*EI/L
        k[np.ix_([1, 2, 4], [1, 2, 4])] = [
            [ k33,  k32, -k33],
            [ k32,  k31, -k32],
            [-k33, -k32,  k33],
        ]
    else:
        k[np.ix_([1, 2, 4, 5], [1, 2, 4, 5])] = [
            [ 12*EI/L3,  6*EI/L2, -12*EI/L3,  6*EI/L2],
            [  6*EI/L2,   4*EI/L,  -6*EI/L2,   2*EI/L],
            [-12*EI/L3, -6*EI/L2,  12*EI/L3, -6*EI/L2],
            [  6*EI/L2,   2*EI/L,  -6*EI/L2,   4*EI/L],
        ]
    return k


def frame2d_transform(c: float, s: float) -> np.ndarray:
    """
    6x6 transform from global DOFs to local DOFs.
    """
    T = np.array([
        [ c,  s, 0,  0, 0, 0],
        [-s,  c, 0,  0, 0, 0],
        [ 0,  0, 1,  0, 0, 0],
        [ 0,  0, 0,  c, s, 0],
        [ 0,  0, 0, -s, c, 0],
        [ 0,  0, 0,  0, 0, 1],
    ], dtype=float)
    return T


def element_local_stiffness(
    element: Element,
    L: float,
    mode: StiffnessMode = StiffnessMode.ELASTIC,
    config: SolverConfig = CONFIG,
) -> np.ndarray:
    E, A, I = effective_properties(element, mode, config)
    return frame2d_local_stiffness(E, A, I, L, element.release_start, element.release_end)


def frame2d_global_stiffness(
    element: Element,
    L: float,
    c: float,
    s: float,
    mode: StiffnessMode = StiffnessMode.ELASTIC,
    config: SolverConfig = CONFIG,
) -> np.ndarray:
    k_local = element_local_stiffness(element, L, mode, config)
    T = frame2d_transform(c, s)
    return T.T @ k_local @ T
