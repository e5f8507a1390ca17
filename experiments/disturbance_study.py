"""
Disturbance study.

Compares the autonomous Lorenz system with its periodically
disturbed counterpart, and measures how quickly the two stage
time conventions drift apart on the forced system.
"""

import numpy as np
import matplotlib.pyplot as plt
from typing import Dict, List
import sys
sys.path.insert(0, '..')

from chaos_control.field import LorenzParams
from chaos_control.integrator import StepTimeConvention
from chaos_control.trajectory import (
    TrajectoryConfig,
    simulate_trajectory,
    trajectory_divergence
)


def run_forcing_sweep(
    amplitudes: List[float],
    config: TrajectoryConfig = None
) -> Dict[float, object]:
    """
    Simulate one trajectory per forcing amplitude k.

    Returns:
        Dict mapping k to its Trajectory
    """
    if config is None:
        config = TrajectoryConfig(transient_samples=1000)

    runs = {}
    for k in amplitudes:
        print(f"  k={k:.2f}")
        runs[k] = simulate_trajectory(config, LorenzParams(k=k))
    return runs


def plot_phase_portraits(runs: Dict[float, object], save_path: str = None):
    """x-z phase portrait per forcing amplitude."""
    fig, axes = plt.subplots(1, len(runs), figsize=(5 * len(runs), 4), squeeze=False)

    for ax, (k, traj) in zip(axes[0], runs.items()):
        ax.plot(traj.z, traj.x, ',', color='black', alpha=0.6)
        ax.set_xlabel('z')
        ax.set_ylabel('x')
        ax.set_title(f'k = {k}')

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150)
        print(f"Saved: {save_path}")

    return fig


def run_convention_comparison(config: TrajectoryConfig = None) -> Dict:
    """
    Divergence between PRE_STEP and POST_STEP runs of the forced system.

    Returns:
        Dictionary with sample times and distances
    """
    if config is None:
        config = TrajectoryConfig()

    pre = simulate_trajectory(config.copy(convention=StepTimeConvention.PRE_STEP))
    post = simulate_trajectory(config.copy(convention=StepTimeConvention.POST_STEP))

    return {
        'times': pre.times,
        'distance': trajectory_divergence(pre, post),
    }


def plot_convention_comparison(results: Dict, save_path: str = None):
    """Log-scale separation of the two conventions over time."""
    fig, ax = plt.subplots(figsize=(8, 4))

    ax.semilogy(results['times'], results['distance'] + 1e-16, linewidth=1)
    ax.set_xlabel('Time')
    ax.set_ylabel('|PRE_STEP - POST_STEP|')
    ax.set_title('Stage time convention divergence')

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150)
        print(f"Saved: {save_path}")

    return fig


if __name__ == "__main__":
    print("=" * 60)
    print("DISTURBANCE STUDY")
    print("=" * 60)

    print("\n1. Forcing sweep...")
    runs = run_forcing_sweep([0.0, 2.0, 8.0])
    for k, traj in runs.items():
        lo, hi = traj.bounding_box()
        print(f"  k={k:.1f}: max |u| = {traj.max_norm():.2f}, "
              f"x in [{lo[0]:.1f}, {hi[0]:.1f}], z in [{lo[2]:.1f}, {hi[2]:.1f}]")
    plot_phase_portraits(runs, 'phase_portraits.png')

    print("\n2. Step time conventions...")
    results = run_convention_comparison()
    crossed = np.nonzero(results['distance'] > 1.0)[0]
    if len(crossed):
        print(f"  Separation exceeds 1.0 at t={results['times'][crossed[0]]:.3f}")
    else:
        print("  Separation stayed below 1.0")
    plot_convention_comparison(results, 'convention_divergence.png')
