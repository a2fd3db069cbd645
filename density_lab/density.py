"""
THE 1D GAUSSIAN — Density is height, probability is area

===============================================================
WHAT IT IS (THE FIRST MENTAL SHIFT)
===============================================================

p(x) is NOT a probability. It is a height. It can exceed 1
(σ = 0.3 gives a peak of ~1.33) and still integrate to 1.

Probability lives in AREA:
    P(a ≤ X ≤ b) = ∫_a^b p(x) dx = F(b) - F(a)

===============================================================
THE MATHEMATICS
===============================================================

DENSITY:
    p(x) = 1/(σ√(2π)) × exp(-(x-μ)² / (2σ²))

    μ moves the curve, σ spreads it.
    Low σ → spike (almost deterministic)
    High σ → flat (almost no information)

CDF:
    F(x) = ½ (1 + erf((x-μ) / (σ√2)))

LIKELIHOOD SCORING:
    Plug an observation into p(x). Low value = the model finds it
    surprising. This is anomaly detection in one line.

SAMPLING CONVERGENCE:
    Draw N samples, build a histogram normalised by N × bin width.
    As N → ∞ the bars converge to p(x). Density is what sampling
    frequency becomes in the limit.
"""

import numpy as np
from scipy.special import erf

from density_lab import config
from density_lab.errors import InvalidArgument
from density_lab.sampling import gaussian_random


def _check_sigma(sigma):
    if sigma <= 0:
        raise InvalidArgument(f"sigma must be positive, got {sigma}")


# ============================================================
# DENSITY & CDF
# ============================================================

def gaussian_pdf(x, mu=0.0, sigma=1.0):
    """p(x) for N(μ, σ²). Works on scalars and arrays."""
    _check_sigma(sigma)
    x = np.asarray(x, dtype=float)
    return np.exp(-(x - mu) ** 2 / (2 * sigma ** 2)) / (sigma * np.sqrt(2 * np.pi))


def gaussian_cdf(x, mu=0.0, sigma=1.0):
    """F(x) = P(X ≤ x) for N(μ, σ²)."""
    _check_sigma(sigma)
    x = np.asarray(x, dtype=float)
    return 0.5 * (1 + erf((x - mu) / (sigma * np.sqrt(2))))


def interval_probability(a, b, mu=0.0, sigma=1.0):
    """
    P(a ≤ X ≤ b) = F(b) - F(a)

    The shaded area in the CDF lab.
    """
    if a > b:
        raise InvalidArgument(f"interval lower bound {a} exceeds upper bound {b}")
    return float(gaussian_cdf(b, mu, sigma) - gaussian_cdf(a, mu, sigma))


def density_curve(mu=0.0, sigma=1.0, x_min=config.CURVE_RANGE[0],
                  x_max=config.CURVE_RANGE[1], step=config.CURVE_STEP):
    """
    (xs, p(xs)) on an evenly spaced grid, endpoints included.
    """
    n = int(round((x_max - x_min) / step)) + 1
    xs = np.linspace(x_min, x_max, n)
    return xs, gaussian_pdf(xs, mu, sigma)


# ============================================================
# LIKELIHOOD SCORING
# ============================================================

def likelihood(x, mu=0.0, sigma=1.0):
    """Likelihood of a single observation: the density at x."""
    return float(gaussian_pdf(x, mu, sigma))


def is_typical(x, mu=0.0, sigma=1.0, threshold=config.TYPICAL_THRESHOLD):
    """True when p(x) is above the anomaly threshold."""
    return likelihood(x, mu, sigma) > threshold


# ============================================================
# SAMPLING CONVERGENCE
# ============================================================

def draw_samples(n, mu=0.0, sigma=1.0, rng=None):
    """n samples of N(μ, σ²) via Box–Muller."""
    _check_sigma(sigma)
    return gaussian_random(n, rng) * sigma + mu


def sampling_histogram(samples, bin_size=config.HISTOGRAM_BIN,
                       x_min=config.HISTOGRAM_RANGE[0], x_max=config.HISTOGRAM_RANGE[1]):
    """
    Density-normalised histogram over fixed bins.

    Bin left edges run x_min, x_min + bin_size, ..., x_max.
    A sample s lands in the bin whose edge is floor(s / bin_size) × bin_size;
    samples outside every bin are dropped but still count toward N.

    Returns:
        edges: left bin edges
        heights: count / (N × bin_size), all zeros when N = 0
    """
    if bin_size <= 0:
        raise InvalidArgument(f"bin size must be positive, got {bin_size}")

    n_bins = int(round((x_max - x_min) / bin_size)) + 1
    edges = x_min + bin_size * np.arange(n_bins)

    samples = np.asarray(samples, dtype=float).ravel()
    if len(samples) == 0:
        return edges, np.zeros(n_bins)

    idx = np.floor(samples / bin_size) * bin_size
    idx = np.round((idx - x_min) / bin_size).astype(int)
    inside = (idx >= 0) & (idx < n_bins)
    counts = np.bincount(idx[inside], minlength=n_bins)

    return edges, counts / (len(samples) * bin_size)
