"""
Double Pendulum Package.

Lagrangian equations of motion for the planar double pendulum, a fixed-step
RK4 integrator, and matplotlib front-ends that consume them.
"""

# Expose Core Engine Tools
from .core import (
    IntegrationError,
    rk4_step,
    integrate_fixed_step,
    solve_ensemble,
    solve_trajectory,
    wrap_angle,
)

# --- Physics ---
from .physics import (
    G_EARTH,
    State,
    DoublePendulum,
    deriv,
    eom,
    get_coords,
)

# --- Configuration ---
from .configs import AnimationConfig, SimulationConfig, SliderRanges

__all__ = [
    # Core
    "IntegrationError",
    "rk4_step",
    "integrate_fixed_step",
    "solve_ensemble",
    "solve_trajectory",
    "wrap_angle",
    # Physics
    "G_EARTH",
    "State",
    "DoublePendulum",
    "deriv",
    "eom",
    "get_coords",
    # Configuration
    "AnimationConfig",
    "SimulationConfig",
    "SliderRanges",
]
