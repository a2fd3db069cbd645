"""
FORWARD DIFFUSION — Paradigm: DISSOLVE DATA INTO NOISE

===============================================================
WHAT IT IS (THE CORE IDEA)
===============================================================

Take a clean point cloud and mix in Gaussian noise, a little more at
every step, until nothing of the shape is left:

    x_0 → x_1 → x_2 → ... → x_T ≈ N(0, I)

Each step:
    q(x_t | x_{t-1}) = N(x_t; √(1-β_t) x_{t-1}, β_t I)

===============================================================
THE MATHEMATICS
===============================================================

LINEAR BETA SCHEDULE:
    β_t = β_start + (β_end - β_start) × t / (T-1),   t = 0 .. T-1

CUMULATIVE SIGNAL:
    α_t = 1 - β_t
    ᾱ_t = ∏_{s≤t} α_s          (strictly decreasing, every α_s < 1)

JUMP STRAIGHT TO ANY STEP (no loop over earlier steps):
    x_t = √ᾱ_t × x_0 + √(1-ᾱ_t) × ε,   ε ~ N(0, I)

    ᾱ_t ≈ 1 → x_t ≈ x_0
    ᾱ_t ≈ 0 → x_t ≈ ε, whatever x_0 was

===============================================================
TRAJECTORIES
===============================================================

A slider over t ∈ [0, T] should not rerun diffusion on every move.
We precompute a snapshot every `snapshot_interval` steps and, for an
arbitrary t, show the NEAREST snapshot.

    snapshot t=0     → x_0 itself (no noise)
    snapshot t=k     → forward_diffusion(x_0, k-1)   (ᾱ is 0-indexed)
    snapshot t=T     → always present

Every snapshot is sampled independently from x_0; they are marginals,
not one continuous noise path.
"""

import logging
import operator
from typing import List, NamedTuple

import numpy as np

from density_lab import config
from density_lab.errors import InvalidArgument
from density_lab.sampling import gaussian_random

logger = logging.getLogger(__name__)


class Snapshot(NamedTuple):
    t: int
    points: np.ndarray


# ============================================================
# NOISE SCHEDULE
# ============================================================

def generate_beta_schedule(T=config.T, beta_start=config.BETA_START, beta_end=config.BETA_END):
    """
    Linear noise schedule from beta_start to beta_end, both inclusive.

    Returns:
        betas: shape (T,), non-decreasing
    """
    if T < 2:
        raise InvalidArgument(f"beta schedule needs T >= 2, got {T}")
    return np.linspace(beta_start, beta_end, T)


def compute_alphas(betas):
    """
    α_t = 1 - β_t and the running product ᾱ_t.

    Returns:
        alphas, alpha_bars: both shape (T,)
    """
    betas = np.asarray(betas, dtype=float)
    alphas = 1.0 - betas
    alpha_bars = np.cumprod(alphas)
    return alphas, alpha_bars


def get_schedule_params(betas):
    """
    Every schedule-derived quantity the figures need.

    Returns dict with:
        betas, alphas, alpha_bars,
        sqrt_alpha_bars: √ᾱ_t (signal weight)
        sqrt_one_minus_alpha_bars: √(1-ᾱ_t) (noise weight)
        snr: ᾱ_t / (1-ᾱ_t)
    """
    alphas, alpha_bars = compute_alphas(betas)
    return {
        'betas': np.asarray(betas, dtype=float),
        'alphas': alphas,
        'alpha_bars': alpha_bars,
        'sqrt_alpha_bars': np.sqrt(alpha_bars),
        'sqrt_one_minus_alpha_bars': np.sqrt(1.0 - alpha_bars),
        'snr': alpha_bars / (1.0 - alpha_bars),
    }


# ============================================================
# FORWARD PROCESS
# ============================================================

def forward_diffusion(x0, t, alpha_bars, rng=None):
    """
    Sample x_t ~ q(x_t | x_0) in one shot.

    x_t = √ᾱ_t × x_0 + √(1-ᾱ_t) × ε

    Args:
        x0: Clean points, shape (n, 2). Never modified.
        t: Index into alpha_bars, 0 <= t < len(alpha_bars)
        alpha_bars: Cumulative products from compute_alphas
        rng: Optional random source for ε

    Returns:
        Freshly allocated noisy points, shape (n, 2)
    """
    alpha_bars = np.asarray(alpha_bars, dtype=float)
    try:
        t = operator.index(t)
    except TypeError:
        raise InvalidArgument(f"timestep must be an integer, got {t!r}") from None
    if not 0 <= t < len(alpha_bars):
        raise InvalidArgument(f"timestep {t} outside schedule of length {len(alpha_bars)}")

    x0 = np.asarray(x0, dtype=float)
    alpha_bar_t = alpha_bars[t]
    noise = gaussian_random(x0.shape, rng)

    return np.sqrt(alpha_bar_t) * x0 + np.sqrt(1.0 - alpha_bar_t) * noise


# ============================================================
# TRAJECTORY
# ============================================================

def _frozen(points):
    points = np.array(points, dtype=float)
    points.setflags(write=False)
    return points


def generate_trajectory(x0, T=config.T, snapshot_interval=config.SNAPSHOT_INTERVAL, rng=None):
    """
    Precompute snapshots from clean data (t=0) to pure noise (t=T).

    Args:
        x0: Clean points, shape (n, 2)
        T: Total diffusion steps
        snapshot_interval: Keep a snapshot every this many steps
        rng: Optional random source

    Returns:
        List[Snapshot] sorted by t, always starting at 0 and ending at T
    """
    if snapshot_interval < 1:
        raise InvalidArgument(f"snapshot interval must be >= 1, got {snapshot_interval}")

    betas = generate_beta_schedule(T)
    _, alpha_bars = compute_alphas(betas)

    trajectory: List[Snapshot] = [Snapshot(0, _frozen(x0))]

    for t in range(snapshot_interval, T + 1, snapshot_interval):
        trajectory.append(Snapshot(t, _frozen(forward_diffusion(x0, t - 1, alpha_bars, rng))))

    if trajectory[-1].t != T:
        trajectory.append(Snapshot(T, _frozen(forward_diffusion(x0, T - 1, alpha_bars, rng))))

    logger.debug("Built trajectory: %d points, T=%d, %d snapshots",
                 len(trajectory[0].points), T, len(trajectory))
    return trajectory


def get_points_at_timestep(trajectory, t):
    """
    Points of the snapshot closest to t.

    Ties go to the snapshot listed first (the lower t), the same result
    as a linear scan that only replaces on a strictly smaller gap.
    """
    if len(trajectory) == 0:
        raise InvalidArgument("trajectory has no snapshots")

    timesteps = np.array([snapshot.t for snapshot in trajectory])
    closest = int(np.argmin(np.abs(timesteps - t)))
    return trajectory[closest].points
