# planeframe/kernel/solve.py
"""Boundary-condition reduction and the stabilized Gauss-Jordan linear solver."""

import logging
from typing import Iterable, List, Tuple

import numpy as np

logger = logging.getLogger(__name__)


def apply_restraints(
    K: np.ndarray,
    F: np.ndarray,
    fixed_dofs: Iterable[int]
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Enforce zero displacement at restrained DOFs by direct elimination.

    For each restrained DOF the full row and column are zeroed, the diagonal
    set to 1 and the load entry set to 0. The matrix keeps its dimension so
    reactions can be recovered from the unreduced K and F afterwards.

    Args:
        K: Global stiffness matrix (ndof x ndof), not modified
        F: Global load vector (ndof,), not modified

    Returns:
        K_red, F_red: reduced copies
    """
    K_red = K.copy()
    F_red = F.copy()
    for k in fixed_dofs:
        K_red[k, :] = 0.0
        K_red[:, k] = 0.0
        K_red[k, k] = 1.0
        F_red[k] = 0.0
    return K_red, F_red


def gauss_jordan_solve(
    A: np.ndarray,
    b: np.ndarray,
    pivot_tol: float = 1e-10
) -> Tuple[np.ndarray, List[int]]:
    """
    Solve A·x = b by elimination with partial pivoting on [A | b].

    Stabilization: if the best available pivot in a column is below
    pivot_tol, that equation has no stiffness (typically the rotation of a
    node whose attached members are all pinned). Its diagonal is forced to 1,
    its right-hand side to 0 and the rest of its row to 0, which locks that
    unknown at 0 without touching the other rows. No exception is raised.

    Args:
        A: Coefficient matrix (n x n), not modified
        b: Right-hand side (n,), not modified
        pivot_tol: Pivot magnitude below which an equation is decoupled

    Returns:
        x: Solution vector (n,)
        stabilized: Column indices that were decoupled, in elimination order
    """
    n = b.shape[0]
    M = np.hstack([np.array(A, dtype=float), np.array(b, dtype=float).reshape(n, 1)])
    stabilized = []

    for i in range(n):
        # Partial pivoting: largest magnitude in column i among rows i..n-1
        max_row = i + int(np.argmax(np.abs(M[i:, i])))
        if max_row != i:
            M[[i, max_row]] = M[[max_row, i]]

        if abs(M[i, i]) < pivot_tol:
            M[i, i] = 1.0
            M[i, n] = 0.0
            M[i, i + 1:n] = 0.0
            stabilized.append(i)
            logger.debug("Decoupled equation %d (pivot below %.0e)", i, pivot_tol)
            continue

        # Eliminate below the pivot
        factors = -M[i + 1:, i] / M[i, i]
        M[i + 1:, i:] += np.outer(factors, M[i, i:])
        M[i + 1:, i] = 0.0

    # Back substitution
    x = np.zeros(n, dtype=float)
    for i in range(n - 1, -1, -1):
        x[i] = (M[i, n] - M[i, i + 1:n] @ x[i + 1:]) / M[i, i]

    return x, stabilized
