"""
Derivative fields for the integrator.

The forced Lorenz system used by the chaos-control experiments,
plus the narrow interface any other system must satisfy to be
stepped by RKF45Integrator.
"""

import numpy as np
from dataclasses import dataclass
from typing import Callable, Protocol


@dataclass
class LorenzParams:
    """
    Parameters of the periodically forced Lorenz system.
    
    The Rayleigh parameter is disturbed by a cosine term:
        rho_eff(t) = rho + k * cos(omega * t)
    
    Attributes:
        sigma: Prandtl number
        rho: Base Rayleigh number
        beta: Geometric factor
        omega: Forcing angular frequency (rad per time unit)
        k: Forcing amplitude (0 gives the autonomous system)
    """
    sigma: float = 10.0
    rho: float = 80.0
    beta: float = 0.4
    omega: float = 2 * np.pi
    k: float = 2.0
    
    def __post_init__(self):
        for name in ('sigma', 'rho', 'beta', 'omega', 'k'):
            value = getattr(self, name)
            assert np.isfinite(value), f"{name} must be finite, got {value}"
        assert self.omega != 0.0, "omega must be nonzero"
    
    def copy(self, **overrides) -> 'LorenzParams':
        """Create a copy with optional parameter overrides."""
        kwargs = {
            'sigma': self.sigma,
            'rho': self.rho,
            'beta': self.beta,
            'omega': self.omega,
            'k': self.k,
        }
        kwargs.update(overrides)
        return LorenzParams(**kwargs)
    
    def forcing_period(self) -> float:
        """Length of one full forcing cycle, 2*pi/omega."""
        return 2 * np.pi / self.omega


class DerivativeField(Protocol):
    """
    Anything the integrator can step.
    
    evaluate(h, t, state) returns the derivative at (t, state)
    already multiplied by the step size h.
    """
    dimension: int
    
    def evaluate(self, h: float, t: float, state: np.ndarray) -> np.ndarray:
        ...


class ForcedLorenzField:
    """
    Lorenz system with a periodically disturbed Rayleigh parameter.
    
    Scaled derivative for state (x, y, z):
        dx = h * sigma * (y - x)
        dy = h * (-x*z + rho_eff(t)*x - y)
        dz = h * (x*y - beta*z)
    
    Non-finite inputs are not rejected; they propagate to the output.
    
    Attributes:
        p: LorenzParams instance
        dimension: State vector length (always 3)
    """
    
    dimension = 3
    
    def __init__(self, params: LorenzParams = None):
        self.p = params if params is not None else LorenzParams()
    
    def rho_effective(self, t: float) -> float:
        """Disturbed Rayleigh parameter at time t."""
        return self.p.rho + self.p.k * np.cos(self.p.omega * t)
    
    def evaluate(self, h: float, t: float, state: np.ndarray) -> np.ndarray:
        """
        Evaluate the h-scaled derivative.
        
        Args:
            h: Integration step size, used as a pre-multiplier
            t: Simulation time
            state: (x, y, z)
            
        Returns:
            Array of shape (3,)
        """
        x, y, z = state
        rho_eff = self.rho_effective(t)
        return np.array([
            h * self.p.sigma * (y - x),
            h * (-x * z + rho_eff * x - y),
            h * (x * y - self.p.beta * z),
        ], dtype=np.float64)
    
    def __call__(self, h: float, t: float, state: np.ndarray) -> np.ndarray:
        return self.evaluate(h, t, state)


class FunctionField:
    """
    Adapt a plain function func(h, t, state) to the DerivativeField interface.
    
    Usage:
        decay = FunctionField(lambda h, t, u: -h * u, dimension=2)
        integrator = RKF45Integrator(decay)
    """
    
    def __init__(self, func: Callable[[float, float, np.ndarray], np.ndarray], dimension: int):
        assert dimension > 0, f"dimension must be positive, got {dimension}"
        self.func = func
        self.dimension = dimension
    
    def evaluate(self, h: float, t: float, state: np.ndarray) -> np.ndarray:
        return np.asarray(self.func(h, t, state), dtype=np.float64)
    
    def __call__(self, h: float, t: float, state: np.ndarray) -> np.ndarray:
        return self.evaluate(h, t, state)
