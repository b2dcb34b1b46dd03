# planeframe/kernel - Assembly and solve core
"""
KERNEL: THE LINEAR-ALGEBRA FOUNDATION
=====================================

Assembly and solving don't care about element formulations.
They just need:
- A way to map (node_id, local_dof) → global_dof_index
- Element stiffness matrices and load vectors in global axes
- Restrained DOF lists

The ELEMENT implementations (stiffness with releases and rigidity overrides,
fixed-end actions) live one level up in elements.py and loads.py.
"""

from .dof import DOFManager, DOF_PER_NODE
from .assemble import assemble_global_K, scatter_add, add_nodal_load
from .solve import apply_restraints, gauss_jordan_solve

__all__ = [
    'DOFManager',
    'DOF_PER_NODE',
    'assemble_global_K',
    'scatter_add',
    'add_nodal_load',
    'apply_restraints',
    'gauss_jordan_solve',
]
