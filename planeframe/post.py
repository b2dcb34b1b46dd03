# reactions, element end forces, exact N/V/M/deflection recovery, station sampling

from typing import Dict, List, Sequence

import numpy as np

from .config import CONFIG, SolverConfig
from .elements import Member, effective_properties, element_local_stiffness, frame2d_transform
from .kernel.dof import DOFManager
from .loads import element_fixed_end_actions, local_components
from .model import (
    ElementResult,
    EndForces,
    Load,
    LoadKind,
    Node,
    Reaction,
    Station,
    StiffnessMode,
)


def clean_value(val: float, config: SolverConfig = CONFIG) -> float:
    """
    Remove floating point noise from a display value.

    - |val| < 1e-4              -> 0
    - within 0.02 of an integer -> that integer (9.99 -> 10)
    - within 0.02 of a half     -> that half-integer (12.5001 -> 12.5)
    - otherwise                 -> rounded to 4 decimals

    Only ever applied to final, reported quantities.
    """
    if abs(val) < config.zero_tol:
        return 0.0
    rounded = round(val)
    if abs(val - rounded) < config.snap_tol:
        return float(rounded)
    # tolerance is on the doubled value
    doubled = round(val * 2)
    if abs(val * 2 - doubled) < config.snap_tol:
        return doubled / 2.0
    return round(val, config.decimals)


def local_displacements(member: Member, U: np.ndarray) -> np.ndarray:
    """Element end displacements rotated into local axes: [u1, v1, th1, u2, v2, th2]."""
    d_elem_global = U[list(member.dof_map)]
    return frame2d_transform(member.c, member.s) @ d_elem_global


def element_end_forces_local(
    member: Member,
    u_local: np.ndarray,
    element_loads: Sequence[Load],
    mode: StiffnessMode = StiffnessMode.ELASTIC,
    config: SolverConfig = CONFIG,
) -> np.ndarray:
    """
    Total end forces exerted by the nodes on the element, local axes.

    f = k_local · u_local + fixed-end actions, with k_local rebuilt using
    the same release and rigidity rules as assembly.
    """
    k_local = element_local_stiffness(member.element, member.L, mode, config)
    return k_local @ u_local + element_fixed_end_actions(member, element_loads)


def bending_deflection(
    x: float,
    L: float,
    EI: float,
    u_local: np.ndarray,
    start_forces: np.ndarray,
    element_loads: Sequence[Load],
    c: float,
    s: float,
) -> float:
    """
    Transverse deflection (m) at local position x, exact for the loads
    carried by the member.

    The curvature is M/EI, with M known in closed form from the start
    forces and the loads. Integrating twice (Macaulay brackets, <x-a> = 0
    left of a) gives

        EI·D(x) = -m·x²/2 + fy·x³/6 + Σ wy·x⁴/24 + Σ Py·<x-a>³/6 - Σ M0·<x-a>²/2

    and v(x) = v1 + θ·x + D(x), where θ is chosen so that v(L) = v2. End
    rotations never enter, so a released end needs no special case. A member
    without bending stiffness deflects linearly between its end values.
    """
    v1, v2 = u_local[1], u_local[4]
    if EI <= 0.0:
        return v1 + (v2 - v1) * x / L
    fy, m = start_forces[1], start_forces[2]

    def D(at):
        total = -m * at**2 / 2.0 + fy * at**3 / 6.0
        for load in element_loads:
            _, py = local_components(load, c, s)
            if load.kind is LoadKind.DISTRIBUTED:
                total += py * at**4 / 24.0
                continue
            arm = max(0.0, at - load.position * L)
            if load.kind is LoadKind.POINT:
                total += py * arm**3 / 6.0
            else:
                total -= load.magnitude * arm**2 / 2.0
        return total / EI

    theta = (v2 - v1 - D(L)) / L
    return v1 + theta * x + D(x)


def exact_values(
    x: float,
    L: float,
    c: float,
    s: float,
    u_local: np.ndarray,
    start_forces: np.ndarray,
    element_loads: Sequence[Load],
    EI: float,
    config: SolverConfig = CONFIG,
) -> Dict[str, float]:
    """
    Deflection and internal forces at local position x, unrounded.

    Deflection (m) comes from bending_deflection. N, V, M start from the
    start-end forces [fx, fy, m] and integrate along x:

        N = -fx,   V = fy,   M = -m + V·x

    then each load adds its running effect. A distributed load contributes
    linearly to N and V and quadratically to M. A point load or moment steps
    in once x is strictly past its location (by step_tol).
    """
    x = min(max(x, 0.0), L)
    if x < config.end_snap:
        x = 0.0
    if abs(x - L) < config.end_snap:
        x = L

    deflection = bending_deflection(x, L, EI, u_local, start_forces, element_loads, c, s)

    fx, fy, m = start_forces[0], start_forces[1], start_forces[2]
    axial = -fx
    shear = fy
    moment = -m + shear * x

    for load in element_loads:
        px, py = local_components(load, c, s)
        if load.kind is LoadKind.DISTRIBUTED:
            axial -= px * x
            shear += py * x
            moment += py * x * x / 2.0
            continue

        loc = load.position * L
        if x > loc + config.step_tol:
            if load.kind is LoadKind.POINT:
                axial -= px
                shear += py
                moment += py * (x - loc)
            else:
                moment -= load.magnitude

    return {
        'deflection': deflection,
        'axial': axial,
        'shear': shear,
        'moment': moment,
    }


def station_positions(
    L: float,
    element_loads: Sequence[Load],
    config: SolverConfig = CONFIG,
) -> List[float]:
    """
    Sample positions along an element.

    Ends, n_steps equal subdivisions, and for each load located strictly
    inside the element its location plus a point just before and after it.
    Merged, deduplicated and sorted.
    """
    xs = {0.0, L}
    for i in range(config.n_steps + 1):
        xs.add(i * L / config.n_steps)
    for load in element_loads:
        loc = load.position * L
        if 0.0 < loc < L:
            xs.add(loc)
            xs.add(max(0.0, loc - config.load_offset))
            xs.add(min(L, loc + config.load_offset))

    # grid points and load locations can differ only by rounding noise
    unique = {}
    for x in xs:
        unique.setdefault(round(x, 12), x)
    return sorted(unique.values())


def element_result(
    member: Member,
    U: np.ndarray,
    element_loads: Sequence[Load],
    mode: StiffnessMode = StiffnessMode.ELASTIC,
    config: SolverConfig = CONFIG,
) -> ElementResult:
    """
    Sampled diagrams and summary values for one member.
    """
    L, c, s = member.L, member.c, member.s
    u_local = local_displacements(member, U)
    f_total = element_end_forces_local(member, u_local, element_loads, mode, config)
    start = f_total[:3]
    E, _, I = effective_properties(member.element, mode, config)

    stations = []
    max_m = max_v = max_n = 0.0
    for x in station_positions(L, element_loads, config):
        raw = exact_values(x, L, c, s, u_local, start, element_loads, E * I, config)
        v = raw['deflection']

        station = Station(
            x=round(x, 6),
            deflection=clean_value(v * config.deflection_factor, config),
            axial=clean_value(raw['axial'], config),
            shear=clean_value(raw['shear'], config),
            moment=clean_value(raw['moment'], config),
            global_x=round(member.ni.x + x * c - v * s, 6),
            global_y=round(member.ni.y + x * s + v * c, 6),
        )
        stations.append(station)

        max_m = max(max_m, abs(station.moment))
        max_v = max(max_v, abs(station.shear))
        max_n = max(max_n, abs(station.axial))

    return ElementResult(
        element_id=member.element.id,
        stations=stations,
        max_moment=clean_value(max_m, config),
        max_shear=clean_value(max_v, config),
        max_axial=clean_value(max_n, config),
        u_local=u_local,
        start_forces=EndForces(
            fx=clean_value(start[0], config),
            fy=clean_value(start[1], config),
            m=clean_value(start[2], config),
        ),
    )


def compute_reactions(
    K: np.ndarray,
    F: np.ndarray,
    U: np.ndarray,
    nodes: Sequence[Node],
    dof: DOFManager,
    config: SolverConfig = CONFIG,
) -> List[Reaction]:
    """
    Support reactions R = K·U - F from the UNREDUCED K and F.

    One entry per node with at least one restraint; unrestrained
    components are reported as 0.
    """
    R = K @ U - F
    result = []
    for node in nodes:
        if not node.is_supported:
            continue
        comps = []
        for local_dof, is_fixed in enumerate(node.restraints):
            value = R[dof.idx(node.id, local_dof)] if is_fixed else 0.0
            comps.append(clean_value(float(value), config))
        result.append(Reaction(node.id, *comps))
    return result


def max_abs_deflection(results: Sequence[ElementResult]) -> float:
    """Largest |deflection| over every station of every element."""
    return max(
        (abs(st.deflection) for r in results for st in r.stations),
        default=0.0,
    )
