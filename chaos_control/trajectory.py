"""
Sampled trajectories of the forced Lorenz system.

Runs the integrator the way the chaos-control display loop does:
a fixed number of samples, each one a short burst of RKF45 steps,
recording the state after every burst.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .field import ForcedLorenzField, LorenzParams
from .integrator import RKF45Integrator, StepTimeConvention


@dataclass
class TrajectoryConfig:
    """
    Sampling and integration settings.

    Attributes:
        h: Integration step size
        n_samples: Number of recorded samples
        steps_per_sample: Integrator steps between samples
        transient_samples: Samples run and discarded before recording
        t0: Initial time
        initial_state: Initial (x, y, z)
        convention: Stage time convention passed to the integrator
        check_finite: Enable the integrator's finiteness check
    """
    h: float = 0.005
    n_samples: int = 4000
    steps_per_sample: int = 1
    transient_samples: int = 0
    t0: float = 0.0
    initial_state: Tuple[float, float, float] = (0.8, 0.8, 0.8)
    convention: StepTimeConvention = StepTimeConvention.PRE_STEP
    check_finite: bool = False

    def __post_init__(self):
        assert self.n_samples > 0, f"n_samples must be positive, got {self.n_samples}"
        assert self.steps_per_sample > 0, \
            f"steps_per_sample must be positive, got {self.steps_per_sample}"
        assert self.transient_samples >= 0, \
            f"transient_samples must be non-negative, got {self.transient_samples}"
        assert len(self.initial_state) == 3, "initial_state must have length 3"

    def copy(self, **overrides) -> 'TrajectoryConfig':
        """Create a copy with optional parameter overrides."""
        kwargs = {
            'h': self.h,
            'n_samples': self.n_samples,
            'steps_per_sample': self.steps_per_sample,
            'transient_samples': self.transient_samples,
            't0': self.t0,
            'initial_state': tuple(self.initial_state),
            'convention': self.convention,
            'check_finite': self.check_finite,
        }
        kwargs.update(overrides)
        return TrajectoryConfig(**kwargs)

    def sample_interval(self) -> float:
        """Simulation time between consecutive samples."""
        return self.h * self.steps_per_sample


@dataclass
class Trajectory:
    """
    Recorded samples of one run.

    Attributes:
        times: Sample times, shape (M,)
        states: Sampled states, shape (M, 3)
        config: Settings the run was made with
        params: System parameters the run was made with
    """
    times: np.ndarray
    states: np.ndarray
    config: TrajectoryConfig = field(default_factory=TrajectoryConfig)
    params: LorenzParams = field(default_factory=LorenzParams)

    def __len__(self) -> int:
        return len(self.times)

    @property
    def x(self) -> np.ndarray:
        return self.states[:, 0]

    @property
    def y(self) -> np.ndarray:
        return self.states[:, 1]

    @property
    def z(self) -> np.ndarray:
        return self.states[:, 2]

    def max_norm(self) -> float:
        """Largest Euclidean state norm over the run."""
        return float(np.max(np.linalg.norm(self.states, axis=1)))

    def bounding_box(self) -> Tuple[np.ndarray, np.ndarray]:
        """Per-component (min, max) over the run."""
        return self.states.min(axis=0), self.states.max(axis=0)


def simulate_trajectory(
    config: Optional[TrajectoryConfig] = None,
    params: Optional[LorenzParams] = None,
    verbose: bool = False
) -> Trajectory:
    """
    Integrate the forced Lorenz system and record samples.

    Args:
        config: Sampling settings (defaults to TrajectoryConfig())
        params: System parameters (defaults to LorenzParams())
        verbose: Print progress

    Returns:
        Trajectory with config.n_samples samples
    """
    if config is None:
        config = TrajectoryConfig()
    if params is None:
        params = LorenzParams()

    lorenz = ForcedLorenzField(params)
    integrator = RKF45Integrator(
        lorenz,
        convention=config.convention,
        check_finite=config.check_finite
    )

    u = np.array(config.initial_state, dtype=np.float64)
    t = config.t0

    if verbose:
        print(f"Simulating {config.n_samples} samples "
              f"(h={config.h}, k={params.k}, {config.convention.name})...")

    # Let transients decay
    if config.transient_samples:
        u, t = integrator.advance(
            u, config.transient_samples * config.steps_per_sample,
            config.h, t, lorenz.dimension
        )
        if verbose:
            print(f"  transient done at t={t:.3f}: {np.round(u, 3)}")

    times = np.empty(config.n_samples)
    states = np.empty((config.n_samples, lorenz.dimension))

    report_every = max(1, config.n_samples // 10)
    for i in range(config.n_samples):
        u, t = integrator.advance(u, config.steps_per_sample, config.h, t, lorenz.dimension)
        times[i] = t
        states[i] = u

        if verbose and (i + 1) % report_every == 0:
            print(f"  [{i + 1}/{config.n_samples}] t={t:.3f}")

    return Trajectory(times=times, states=states, config=config, params=params)


def trajectory_divergence(a: Trajectory, b: Trajectory) -> np.ndarray:
    """
    Per-sample Euclidean distance between two runs.

    Args:
        a, b: Trajectories with the same number of samples

    Returns:
        Array of shape (M,)
    """
    if a.states.shape != b.states.shape:
        raise ValueError(
            f"trajectory shapes differ: {a.states.shape} vs {b.states.shape}"
        )
    return np.linalg.norm(a.states - b.states, axis=1)
