# planeframe/kernel/assemble.py
"""
ASSEMBLY: Global Matrix Assembly
================================

PURPOSE:
--------
This module handles the scatter-add of element contributions into the
global stiffness matrix K and load vector F.

Assembly does not care how an element matrix was built (fixed-fixed,
released, rigid override). It just needs:
- Total number of DOFs
- For each element: its DOF map and its matrix / vector in global axes

Assembly is purely additive, so the result does not depend on element order,
and K stays symmetric as long as every ke is symmetric.

USAGE:
------
    contributions = []
    for element in active_elements:
        dof_map = dof.element_dof_map(element.start, element.end)
        ke = frame2d_global_stiffness(...)
        contributions.append((dof_map, ke))

    K = assemble_global_K(dof.ndof, contributions)
"""

import numpy as np
from typing import List, Tuple


def assemble_global_K(
    ndof: int,
    contributions: List[Tuple[List[int], np.ndarray]]
) -> np.ndarray:
    """
    Assemble the global stiffness matrix from element contributions.

    Each ke block lands on the rows and columns named by its dof_map:

        K[dof_map, dof_map] += ke

    A dof_map never repeats an index (an element joins two distinct nodes),
    so the block update with np.ix_ is exact.

    Parameters:
    -----------
    ndof : int
        Total number of DOFs in the system (3 × n_nodes)

    contributions : List[Tuple[List[int], np.ndarray]]
        (dof_map, ke) per element:
        - dof_map: 6 global DOF indices
        - ke: 6×6 element stiffness in global coordinates

    Returns:
    --------
    np.ndarray
        Global stiffness matrix K, shape (ndof, ndof), freshly allocated
    """
    K = np.zeros((ndof, ndof), dtype=float)

    for dof_map, ke in contributions:
        rows = np.asarray(dof_map, dtype=int)
        assert ke.shape == (rows.size, rows.size), \
            f"ke shape {ke.shape} does not fit a {rows.size}-entry dof_map"
        K[np.ix_(rows, rows)] += ke

    return K


def scatter_add(F: np.ndarray, dof_map: List[int], fe: np.ndarray, sign: float = 1.0) -> None:
    """
    Add an element vector into the global load vector (in-place).

    sign=-1 subtracts, which is how fixed-end actions enter F: the
    restraining forces oppose the equivalent nodal load.
    """
    assert fe.shape == (len(dof_map),), \
        f"Element fe shape {fe.shape} doesn't match dof_map length {len(dof_map)}"

    for a, ia in enumerate(dof_map):
        F[ia] += sign * fe[a]


def add_nodal_load(F: np.ndarray, dof_index: int, value: float) -> None:
    """Add a concentrated force or moment to a single global DOF (in-place)."""
    F[dof_index] += value
