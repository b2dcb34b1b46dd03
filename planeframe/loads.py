# loads.py - Fixed-end actions and the global load vector

import numpy as np
from collections import defaultdict
from typing import Dict, List, Sequence

from .elements import Member, frame2d_transform
from .kernel.assemble import add_nodal_load, scatter_add
from .kernel.dof import DOFManager
from .model import Direction, Load, LoadKind


def local_components(load: Load, c: float, s: float):
    """
    Split a point or distributed load given along a global axis into
    (axial, transverse) components in the element's local axes.

    Moments have no direction and return (0, 0).
    """
    if load.kind is LoadKind.MOMENT:
        return 0.0, 0.0
    if load.direction is Direction.X:
        return load.magnitude * c, -load.magnitude * s
    return load.magnitude * s, load.magnitude * c


def fixed_end_actions(
    load: Load,
    L: float,
    c: float,
    s: float,
    release_start: bool = False,
    release_end: bool = False,
) -> np.ndarray:
    """
    Fixed-end actions of one element load in LOCAL coordinates.

    These are the forces the supports of a fully restrained segment exert
    on it: [fx1, v1, m1, fx2, v2, m2], moments counterclockwise positive.
    The equivalent nodal load is their negative.

    Formulas (a = location·L, b = L - a, w / P split into local x, y):
    - distributed:  m1 = -wL²/12,  m2 = +wL²/12,  v = -wL/2,  fx = -wₓL/2
    - point:        m1 = -Pab²/L², m2 = +Pa²b/L²,
                    v1 = -Pb²(3a+b)/L³,  v2 = -Pa²(a+3b)/L³,
                    fx1 = -Pₓb/L, fx2 = -Pₓa/L
    - moment M:     m1 = Mb(2a-b)/L²,  m2 = Ma(2b-a)/L²,
                    v1 = +6Mab/L³,  v2 = -6Mab/L³

    Releases:
    - one end released: that end moment is removed, half of it is carried
      over to the other end, and the end shears are corrected by
      ∓1.5·(removed moment)/L so the segment stays in equilibrium.
    - both ends released: no end moments, shears from simple-span statics,
      and no axial terms (two-force member).

    Parameters:
    -----------
    load : Load
        An element load. A missing location means midspan; distributed
        loads ignore location.
    L, c, s : float
        Element length and direction cosines
    release_start, release_end : bool
        Moment releases at the element ends

    Returns:
    --------
    np.ndarray
        Shape (6,) vector in local coordinates
    """
    px, py = local_components(load, c, s)
    a = load.position * L
    b = L - a
    L2 = L * L
    L3 = L2 * L

    if load.kind is LoadKind.DISTRIBUTED:
        m1, m2 = -py * L2 / 12.0, py * L2 / 12.0
        v1 = v2 = -py * L / 2.0
        fx1 = fx2 = -px * L / 2.0
    elif load.kind is LoadKind.POINT:
        m1, m2 = -py * a * b * b / L2, py * a * a * b / L2
        v1 = -py * b * b * (3 * a + b) / L3
        v2 = -py * a * a * (a + 3 * b) / L3
        fx1, fx2 = -px * b / L, -px * a / L
    else:
        M = load.magnitude
        m1, m2 = M * b * (2 * a - b) / L2, M * a * (2 * b - a) / L2
        v1, v2 = 6 * M * a * b / L3, -6 * M * a * b / L3
        fx1 = fx2 = 0.0

    if release_start and release_end:
        m1 = m2 = 0.0
        fx1 = fx2 = 0.0
        if load.kind is LoadKind.DISTRIBUTED:
            v1 = v2 = -py * L / 2.0
        elif load.kind is LoadKind.POINT:
            v1, v2 = -py * b / L, -py * a / L
        else:
            v1, v2 = load.magnitude / L, -load.magnitude / L
    elif release_start:
        removed = m1
        m1 = 0.0
        m2 -= 0.5 * removed
        v1 -= 1.5 * removed / L
        v2 += 1.5 * removed / L
    elif release_end:
        removed = m2
        m2 = 0.0
        m1 -= 0.5 * removed
        v1 -= 1.5 * removed / L
        v2 += 1.5 * removed / L

    return np.array([fx1, v1, m1, fx2, v2, m2], dtype=float)


def element_fixed_end_actions(member: Member, element_loads: Sequence[Load]) -> np.ndarray:
    """Sum of the fixed-end actions of every load on one member (local axes)."""
    fem = np.zeros(6, dtype=float)
    e = member.element
    for load in element_loads:
        fem += fixed_end_actions(load, member.L, member.c, member.s,
                                 e.release_start, e.release_end)
    return fem


def loads_by_element(loads: Sequence[Load]) -> Dict[int, List[Load]]:
    """Group element loads by element id, keeping input order."""
    grouped = defaultdict(list)
    for load in loads:
        if load.on_element:
            grouped[load.element_id].append(load)
    return dict(grouped)


def assemble_load_vector(
    members: Sequence[Member],
    dof: DOFManager,
    loads: Sequence[Load],
) -> np.ndarray:
    """
    Assemble the global load vector F.

    - Node loads go straight into their DOF: moments into rz, point loads
      into ux or uy by direction.
    - Element loads are converted to fixed-end actions, rotated to global
      axes (Tᵀ·fem) and SUBTRACTED from F.

    Loads whose target does not resolve (unknown node, unknown or inert
    element) are skipped.

    Returns:
    --------
    np.ndarray
        Global force vector F of shape (ndof,), freshly allocated
    """
    F = np.zeros(dof.ndof, dtype=float)

    for load in loads:
        if load.on_element or load.node_id not in dof:
            continue
        if load.kind is LoadKind.MOMENT:
            local_dof = 2
        elif load.direction is Direction.X:
            local_dof = 0
        else:
            local_dof = 1
        add_nodal_load(F, dof.idx(load.node_id, local_dof), load.magnitude)

    grouped = loads_by_element(loads)
    for member in members:
        element_loads = grouped.get(member.element.id)
        if not element_loads:
            continue
        fem_local = element_fixed_end_actions(member, element_loads)
        T = frame2d_transform(member.c, member.s)
        scatter_add(F, list(member.dof_map), T.T @ fem_local, sign=-1.0)

    return F
