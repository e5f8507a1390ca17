"""
Chaos Control - RKF45 integration of a periodically disturbed Lorenz system.
"""

from .field import (
    LorenzParams,
    DerivativeField,
    ForcedLorenzField,
    FunctionField
)
from .integrator import (
    ButcherTableau,
    RKF45_TABLEAU,
    StepTimeConvention,
    NonFiniteStateError,
    RKF45Integrator
)
from .trajectory import (
    TrajectoryConfig,
    Trajectory,
    simulate_trajectory,
    trajectory_divergence
)

__version__ = "0.1.0"

__all__ = [
    # Field
    'LorenzParams',
    'DerivativeField',
    'ForcedLorenzField',
    'FunctionField',
    # Integrator
    'ButcherTableau',
    'RKF45_TABLEAU',
    'StepTimeConvention',
    'NonFiniteStateError',
    'RKF45Integrator',
    # Trajectory
    'TrajectoryConfig',
    'Trajectory',
    'simulate_trajectory',
    'trajectory_divergence',
]
