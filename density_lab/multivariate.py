"""
BIVARIATE GAUSSIAN — Covariance as geometry

===============================================================
WHAT IT IS
===============================================================

In 2D the density is a hill. Equal-density lines are ELLIPSES, and the
covariance matrix decides their shape:

    Σ = [[1, ρ],
         [ρ, 1]]

    eigenvalues:  λ₁ = 1 + ρ,  λ₂ = 1 - ρ
    eigenvectors: [1, 1], [1, -1]   → the ellipse is always tilted 45°

    k-σ contour: semi-axes k√λ₁ and k√λ₂

ρ → +1: the ellipse collapses onto y = x
ρ → -1: the ellipse collapses onto y = -x
ρ =  0: circles

===============================================================
CONDITIONALS & PSEUDO-LIKELIHOOD
===============================================================

Fixing one coordinate slices the hill into a 1D Gaussian:
    p(x₁ | x₂) = N(μ + ρ(x₂ - μ), (1 - ρ²) σ²)

Pseudo-likelihood replaces the joint with the product of conditionals:
    PL(ρ) = p(x₁ | x₂; ρ) × p(x₂ | x₁; ρ)

No normalising constant of the joint is needed, which is why it is
used for models where the joint is intractable.
"""

import numpy as np

from density_lab.density import gaussian_pdf
from density_lab.errors import InvalidArgument


def _check_rho(rho):
    if not -1.0 < rho < 1.0:
        raise InvalidArgument(f"correlation must lie strictly between -1 and 1, got {rho}")


# ============================================================
# CONTOURS
# ============================================================

def covariance_ellipse(rho, n_sigma=1.0):
    """
    Semi-axes and rotation of the n_sigma contour of Σ = [[1, ρ], [ρ, 1]].

    Returns:
        (major, minor, angle): axes along [1, 1] and [1, -1], angle = π/4
    """
    _check_rho(rho)
    return np.sqrt(1 + rho) * n_sigma, np.sqrt(1 - rho) * n_sigma, np.pi / 4


def ellipse_points(rho, n_sigma=1.0, n=200):
    """Closed polyline (n, 2) tracing the n_sigma contour."""
    a, b, angle = covariance_ellipse(rho, n_sigma)
    phi = np.linspace(0, 2 * np.pi, n)
    x, y = a * np.cos(phi), b * np.sin(phi)
    c, s = np.cos(angle), np.sin(angle)
    return np.column_stack([c * x - s * y, s * x + c * y])


def bivariate_pdf(x, y, rho):
    """
    Joint density of the standard bivariate normal with correlation ρ.

    p(x, y) = 1/(2π√(1-ρ²)) × exp(-(x² - 2ρxy + y²) / (2(1-ρ²)))
    """
    _check_rho(rho)
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    one_minus = 1 - rho ** 2
    quad = (x ** 2 - 2 * rho * x * y + y ** 2) / one_minus
    return np.exp(-0.5 * quad) / (2 * np.pi * np.sqrt(one_minus))


# ============================================================
# CONDITIONALS
# ============================================================

def conditional_gaussian(rho, given, mu=0.0, sigma=1.0):
    """
    Parameters of p(x_i | x_j = given).

    Returns:
        (mu_cond, sigma_cond)
    """
    _check_rho(rho)
    mu_cond = mu + rho * (given - mu)
    sigma_cond = np.sqrt((1 - rho * rho) * sigma * sigma)
    return mu_cond, sigma_cond


def conditional_curve(xs, rho, given, mu=0.0, sigma=1.0):
    """p(x | given) evaluated on xs, for plotting."""
    mu_cond, sigma_cond = conditional_gaussian(rho, given, mu, sigma)
    return gaussian_pdf(xs, mu_cond, sigma_cond)


def pseudo_likelihood(x1, x2, rho, mu=0.0, sigma=1.0):
    """PL = p(x₁ | x₂) × p(x₂ | x₁)."""
    mu1, s1 = conditional_gaussian(rho, x2, mu, sigma)
    mu2, s2 = conditional_gaussian(rho, x1, mu, sigma)
    return float(gaussian_pdf(x1, mu1, s1) * gaussian_pdf(x2, mu2, s2))
