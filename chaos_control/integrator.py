"""
Fixed-step Runge-Kutta-Fehlberg integration.

Six stages per step combined with the 5th-order Fehlberg weights.
The embedded 4th-order weights are part of the tableau but no
error estimate or step-size control is performed.
"""

import numpy as np
from enum import Enum
from dataclasses import dataclass
from typing import Tuple

from .field import DerivativeField


@dataclass(frozen=True)
class ButcherTableau:
    """
    Coefficients of an explicit Runge-Kutta method.

    Attributes:
        a: Stage time fractions, one per stage
        b: Stage coupling rows; row k holds k coefficients
        c: Weights of the propagated solution
        c_star: Weights of the embedded lower-order solution
    """
    a: Tuple[float, ...]
    b: Tuple[Tuple[float, ...], ...]
    c: Tuple[float, ...]
    c_star: Tuple[float, ...]

    @property
    def stages(self) -> int:
        return len(self.a)


RKF45_TABLEAU = ButcherTableau(
    a=(0.0, 1.0 / 4.0, 3.0 / 8.0, 12.0 / 13.0, 1.0, 1.0 / 2.0),
    b=(
        (),
        (1.0 / 4.0,),
        (3.0 / 32.0, 9.0 / 32.0),
        (1932.0 / 2197.0, -7200.0 / 2197.0, 7296.0 / 2197.0),
        (439.0 / 216.0, -8.0, 3680.0 / 513.0, -845.0 / 4104.0),
        (-8.0 / 27.0, 2.0, -3544.0 / 2565.0, 1859.0 / 4104.0, -11.0 / 40.0),
    ),
    c=(16.0 / 135.0, 0.0, 6656.0 / 12825.0, 28561.0 / 56430.0, -9.0 / 50.0, 2.0 / 55.0),
    c_star=(25.0 / 216.0, 0.0, 1408.0 / 2565.0, 2197.0 / 4104.0, -1.0 / 5.0, 0.0),
)


class StepTimeConvention(Enum):
    """Which time the stage offsets a[k]*h are measured from."""
    PRE_STEP = 0   # t at the start of the step (standard RKF45)
    POST_STEP = 1  # t already advanced by h before the stages run


class NonFiniteStateError(FloatingPointError):
    """Raised by the optional finiteness check when a step produces NaN or Inf."""


class RKF45Integrator:
    """
    Fixed-step RKF45 integrator over any DerivativeField.

    The field returns derivatives already scaled by h, so stage
    trial states and the final combination add the field output
    directly:
        u_k = u + Σ_j b[k][j] f[j]
        u'  = u + Σ_k c[k] f[k]

    States are never mutated: every call returns a new float64 array.

    Usage:
        integrator = RKF45Integrator(ForcedLorenzField())
        state, t = integrator.advance([0.8, 0.8, 0.8], 100, 0.005, 0.0, 3)

    Attributes:
        field: Derivative evaluator
        tableau: Butcher tableau (RKF45_TABLEAU by default)
        convention: StepTimeConvention used by step/advance
        check_finite: Raise NonFiniteStateError on NaN/Inf states
    """

    def __init__(
        self,
        field: DerivativeField,
        tableau: ButcherTableau = RKF45_TABLEAU,
        convention: StepTimeConvention = StepTimeConvention.PRE_STEP,
        check_finite: bool = False
    ):
        self.field = field
        self.tableau = tableau
        self.convention = StepTimeConvention(convention)
        self.check_finite = check_finite

    def stage_derivatives(self, state: np.ndarray, t: float, h: float) -> np.ndarray:
        """
        Evaluate all stages of one step.

        Args:
            state: Current state, shape (N,)
            t: Base time the stage offsets are added to
            h: Step size

        Returns:
            Array of shape (stages, N); row k is f[k]
        """
        u = np.asarray(state, dtype=np.float64)
        tab = self.tableau
        f = np.empty((tab.stages, u.shape[0]), dtype=np.float64)

        f[0] = self.field.evaluate(h, t, u)
        for k in range(1, tab.stages):
            tk = t + tab.a[k] * h
            uk = u.copy()
            for j, bkj in enumerate(tab.b[k]):
                uk += bkj * f[j]
            f[k] = self.field.evaluate(h, tk, uk)

        return f

    def step(self, state: np.ndarray, t: float, h: float) -> Tuple[np.ndarray, float]:
        """
        Take one fixed step.

        Args:
            state: Current state, shape (N,)
            t: Time at the start of the step
            h: Step size (zero and negative values are allowed)

        Returns:
            (new_state, t + h)
        """
        if self.convention is StepTimeConvention.POST_STEP:
            t = t + h
            f = self.stage_derivatives(state, t, h)
        else:
            f = self.stage_derivatives(state, t, h)
            t = t + h

        u = np.array(state, dtype=np.float64)
        for k, ck in enumerate(self.tableau.c):
            u += ck * f[k]

        return u, t

    def advance(
        self,
        state: np.ndarray,
        num_steps: int,
        h: float,
        t0: float,
        dimension: int
    ) -> Tuple[np.ndarray, float]:
        """
        Take num_steps fixed steps starting at (state, t0).

        Args:
            state: Initial state, length `dimension`; left untouched
            num_steps: Number of steps (0 returns the state unchanged)
            h: Step size
            t0: Initial time
            dimension: Expected state length

        Returns:
            (final_state, final_time)

        Raises:
            ValueError: On a dimension mismatch or invalid num_steps
            NonFiniteStateError: If check_finite is set and a step diverges
        """
        u = np.array(state, dtype=np.float64)

        if u.ndim != 1 or u.shape[0] != dimension:
            raise ValueError(
                f"state has shape {u.shape}, expected ({dimension},)"
            )
        field_dim = getattr(self.field, 'dimension', dimension)
        if field_dim != dimension:
            raise ValueError(
                f"dimension={dimension} does not match field dimension {field_dim}"
            )
        if isinstance(num_steps, bool) or not isinstance(num_steps, (int, np.integer)):
            raise ValueError(f"num_steps must be an integer, got {num_steps!r}")
        if num_steps < 0:
            raise ValueError(f"num_steps must be non-negative, got {num_steps}")

        t = float(t0)
        for i in range(num_steps):
            u, t = self.step(u, t, h)
            if self.check_finite and not np.all(np.isfinite(u)):
                raise NonFiniteStateError(
                    f"non-finite state {u} after step {i + 1} at t={t}"
                )

        return u, t
