"""
GAUSSIAN SAMPLER — Box–Muller from uniform draws

Every random quantity in the labs (cluster jitter, diffusion noise,
pixel noise, the sampling-convergence histogram) comes from here.

BOX–MULLER:
    u1, u2 ~ U(0, 1)
    z = √(-2 ln u1) × cos(2π u2)   ~ N(0, 1)

    u1 = 0 would give ln(0) = -∞, so exact zeros are redrawn.

RANDOMNESS IS INJECTED:
    Pass rng=np.random.default_rng(seed) to make a run reproducible.
    Without it we draw from the global numpy state, the same way
    np.random.seed(42) scripts do.
"""

import numpy as np


def _nonzero_uniform(size, rng):
    """Uniform samples in (0, 1): redraw anything that landed on 0."""
    if size is None:
        u = 0.0
        while u == 0.0:
            u = rng.random()
        return u

    u = np.asarray(rng.random(size), dtype=float)
    zero = u == 0.0
    while zero.any():
        u[zero] = rng.random(int(zero.sum()))
        zero = u == 0.0
    return u


def gaussian_random(size=None, rng=None):
    """
    Standard normal samples via the Box–Muller transform.

    Args:
        size: None for a single float, otherwise an int or shape tuple
        rng: Anything with a numpy-style random(size) method.
             Defaults to the global np.random state.

    Returns:
        float if size is None, else an ndarray of the given shape
    """
    rng = np.random if rng is None else rng
    u1 = _nonzero_uniform(size, rng)
    u2 = _nonzero_uniform(size, rng)
    z = np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)
    if size is None:
        return float(z)
    return z
