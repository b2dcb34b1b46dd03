# planeframe - 2D frame analysis by the direct stiffness method
"""
PLANEFRAME: Linear-Elastic Analysis of 2D Frames, Trusses and Beams
===================================================================

ARCHITECTURE:
-------------
    kernel/         DOF indexing, scatter-add assembly, restraints, solver
    model.py        Node, Element, Load and result dataclasses
    config.py       Numeric constants (SolverConfig / CONFIG)
    elements.py     Element stiffness with releases and rigidity overrides
    loads.py        Fixed-end actions and the global load vector
    post.py         Reactions, end forces, exact N/V/M/deflection stations
    solve.py        solve(): the analysis pipeline
    repair.py       repair_connectivity(): T-junction splitting
    templates.py    Canonical geometries (beam, portal, truss, ...)
"""

from .config import CONFIG, SolverConfig
from .model import (
    AnalysisResult,
    Direction,
    Element,
    ElementResult,
    EndForces,
    Load,
    LoadKind,
    Node,
    Reaction,
    Station,
    StiffnessMode,
    SupportType,
    support_restraints,
    support_type_of,
)
from .repair import prune_dangling_loads, repair_connectivity
from .solve import solve
from .templates import StructureType, TemplateParams, generate_geometry

__version__ = "0.1.0"

__all__ = [
    'CONFIG',
    'SolverConfig',
    'AnalysisResult',
    'Direction',
    'Element',
    'ElementResult',
    'EndForces',
    'Load',
    'LoadKind',
    'Node',
    'Reaction',
    'Station',
    'StiffnessMode',
    'SupportType',
    'support_restraints',
    'support_type_of',
    'prune_dangling_loads',
    'repair_connectivity',
    'solve',
    'StructureType',
    'TemplateParams',
    'generate_geometry',
]
