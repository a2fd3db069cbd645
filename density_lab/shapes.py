"""
TARGET SHAPES — Clean 2D point clouds for the diffusion lab

Each generator returns an (n, 2) array of "clean data" x_0.
Forward diffusion then dissolves it into N(0, I).

WHY THESE SHAPES?
    Each one makes the noise look different on the way out:
    - CIRCLE:      a 1D manifold; you watch the ring thicken, then vanish
    - SPIRAL:      structure at several radii; inner turns die first
    - MULTIMODAL:  four blobs that merge into one
    - MOON:        an asymmetric band; its offset mean drifts to 0

USAGE:
    from density_lab.shapes import get_shape_generator

    x0 = get_shape_generator('spiral')(500)
"""

from enum import Enum

import numpy as np

from density_lab.errors import InvalidArgument
from density_lab.sampling import gaussian_random


DEFAULT_CENTERS = (
    (0.6, 0.6),
    (-0.6, 0.6),
    (0.6, -0.6),
    (-0.6, -0.6),
)


def _check_count(n):
    if n <= 0:
        raise InvalidArgument(f"point count must be positive, got {n}")


# ============================================================
# GENERATORS
# ============================================================

def generate_circle(n=500, radius=1.0, noise=0.02, rng=None):
    """
    WHAT: Points evenly spaced in angle around a ring.
    Each radius gets a uniform jitter in [-noise/2, noise/2).
    """
    _check_count(n)
    rng = np.random if rng is None else rng

    theta = 2 * np.pi * np.arange(n) / n
    r = radius + (rng.random(n) - 0.5) * noise
    return np.column_stack([r * np.cos(theta), r * np.sin(theta)])


def generate_spiral(n=500, turns=3, spacing=0.15, rng=None):
    """
    WHAT: Archimedean spiral, r = spacing × t.
    Deterministic: rng is accepted so every generator shares a signature.
    """
    _check_count(n)
    t = turns * 2 * np.pi * np.arange(n) / n
    r = spacing * t
    return np.column_stack([r * np.cos(t), r * np.sin(t)])


def generate_multimodal(n=500, centers=DEFAULT_CENTERS, std=0.15, rng=None):
    """
    WHAT: Isotropic Gaussian clusters around fixed centers.

    n // len(centers) points go to every cluster, in center order.
    The leftover n mod len(centers) points are appended to the FIRST
    cluster, so the total is always exactly n.

    Example: n=501 with 4 centers → sizes 126, 125, 125, 125.
    """
    _check_count(n)
    centers = np.asarray(centers, dtype=float).reshape(-1, 2)
    if len(centers) == 0:
        raise InvalidArgument("multimodal shape needs at least one center")

    per_cluster = n // len(centers)
    remaining = n - per_cluster * len(centers)

    # Cluster blocks first, then the remainder of cluster 0
    owners = np.concatenate([
        np.repeat(np.arange(len(centers)), per_cluster),
        np.zeros(remaining, dtype=int),
    ])
    return centers[owners] + gaussian_random((n, 2), rng) * std


def generate_moon(n=500, radius=1.0, rng=None):
    """
    WHAT: A crescent-like band over the left half of the plane.

    θ ∈ [π/2, 3π/2), r ∈ [0.7, 1.0) × radius, shifted left by 0.2.
    Not a true two-circle crescent: a quick visual approximation.
    """
    _check_count(n)
    rng = np.random if rng is None else rng

    theta = np.pi * (0.5 + rng.random(n))
    r = radius * (0.7 + 0.3 * rng.random(n))
    return np.column_stack([r * np.cos(theta) - 0.2, r * np.sin(theta)])


# ============================================================
# LOOKUP
# ============================================================

class Shape(str, Enum):
    CIRCLE = 'circle'
    SPIRAL = 'spiral'
    MULTIMODAL = 'multimodal'
    MOON = 'moon'


SHAPE_GENERATORS = {
    Shape.CIRCLE: generate_circle,
    Shape.SPIRAL: generate_spiral,
    Shape.MULTIMODAL: generate_multimodal,
    Shape.MOON: generate_moon,
}


def resolve_shape(name):
    """The Shape a name stands for; unknown names resolve to the circle."""
    try:
        return Shape(name)
    except ValueError:
        return Shape.CIRCLE


def get_shape_generator(name):
    """
    Generator for a shape name. Unknown names fall back to the circle.

    Args:
        name: A Shape, or its string value ('circle', 'spiral', ...)
    """
    return SHAPE_GENERATORS[resolve_shape(name)]
