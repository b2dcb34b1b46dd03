# planeframe/config.py
"""
Solver configuration and defaults.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SolverConfig:
    """Numeric constants used across the analysis pipeline."""

    # Stiffness overrides
    rigid_multiplier: float = 1e4

    # Input units -> analysis units (kN, m)
    e_factor: float = 1e6        # GPa -> kPa
    a_factor: float = 1e-4       # cm² -> m²
    i_factor: float = 1e-6       # 10⁻⁶ m⁴ -> m⁴
    deflection_factor: float = 1000.0  # m -> mm for reported deflections

    # Assembly / solve
    min_length: float = 1e-6
    pivot_tol: float = 1e-10

    # Station sampling
    n_steps: int = 100
    load_offset: float = 1e-3
    step_tol: float = 1e-6
    end_snap: float = 1e-4

    # Display cleanup
    zero_tol: float = 1e-4
    snap_tol: float = 0.02
    decimals: int = 4

    # Connectivity repair
    split_tol: float = 0.05      # 5 cm
    t_min: float = 0.01
    t_max: float = 0.99
    location_tol: float = 1e-4


# Global config instance
CONFIG = SolverConfig()
