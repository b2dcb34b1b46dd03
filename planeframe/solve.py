# planeframe/solve.py
"""
SOLVE: The Analysis Pipeline
============================

    nodes + elements + loads
        │
        ├── prepare_members        resolve ids, drop inert elements
        ├── assemble_global_K      K  (symmetric, unreduced)
        ├── assemble_load_vector   F  (nodal loads - equivalent element loads)
        ├── apply_restraints       K', F'
        ├── gauss_jordan_solve     U
        └── post-processing        reactions (from K, F, U), element diagrams

Every buffer (K, F, K', F', U) is allocated inside this call and dropped
afterwards. Inputs are never mutated, so the same input always gives the
same AnalysisResult.
"""

import logging
from typing import Optional, Sequence

from .config import CONFIG, SolverConfig
from .elements import frame2d_global_stiffness, prepare_members
from .kernel.assemble import assemble_global_K
from .kernel.dof import DOF_PER_NODE, DOFManager
from .kernel.solve import apply_restraints, gauss_jordan_solve
from .loads import assemble_load_vector, loads_by_element
from .model import AnalysisResult, Element, Load, Node, StiffnessMode
from .post import compute_reactions, element_result, max_abs_deflection

logger = logging.getLogger(__name__)


def solve(
    nodes: Sequence[Node],
    elements: Sequence[Element],
    loads: Sequence[Load],
    stiffness_mode: StiffnessMode = StiffnessMode.ELASTIC,
    config: Optional[SolverConfig] = None,
) -> AnalysisResult:
    """
    Linear-elastic static analysis of a 2D frame.

    Args:
        nodes: Nodes with restraints; array order fixes DOF numbering
        elements: Frame elements; dangling or zero-length ones are ignored
        loads: Node and element loads; loads on unknown targets are ignored
        stiffness_mode: ELASTIC, AXIALLY_RIGID or RIGID override
        config: Numeric constants, CONFIG by default

    Returns:
        AnalysisResult with per-element diagrams, the global maximum
        |deflection| (mm) and one reaction per supported node
    """
    config = config or CONFIG
    dof = DOFManager.from_nodes(nodes)
    members = prepare_members(nodes, elements, dof, config)

    contributions = [
        (list(m.dof_map), frame2d_global_stiffness(m.element, m.L, m.c, m.s, stiffness_mode, config))
        for m in members
    ]
    K = assemble_global_K(dof.ndof, contributions)
    F = assemble_load_vector(members, dof, loads)

    K_red, F_red = apply_restraints(K, F, dof.restrained_dofs(nodes))
    U, stabilized = gauss_jordan_solve(K_red, F_red, config.pivot_tol)
    _report_stabilized(stabilized, dof)

    reactions = compute_reactions(K, F, U, nodes, dof, config)

    grouped = loads_by_element(loads)
    results = [
        element_result(m, U, grouped.get(m.element.id, []), stiffness_mode, config)
        for m in members
    ]

    logger.debug(
        "Solved %d nodes, %d/%d active elements, %d loads",
        len(nodes), len(members), len(elements), len(loads),
    )
    return AnalysisResult(
        elements=results,
        max_deflection=max_abs_deflection(results),
        reactions=reactions,
    )


def _report_stabilized(stabilized, dof: DOFManager) -> None:
    """
    Diagnostics for decoupled equations. Results are not affected.

    Only rows are swapped and the system keeps its full size, so a
    stabilized index i is global DOF i, and its displacement is exactly 0.
    A rotational DOF is the expected pin-jointed case. A translational one
    usually means a mechanism.
    """
    if not stabilized:
        return
    translational = [i for i in stabilized if i % DOF_PER_NODE != 2]
    logger.debug("Stabilized %d singular pivot(s): %s", len(stabilized), stabilized)
    if translational:
        node_ids = sorted({dof.node_ids[i // DOF_PER_NODE] for i in translational})
        logger.warning(
            "Translational DOF(s) without stiffness at node(s) %s; "
            "the structure may be a mechanism",
            node_ids,
        )
