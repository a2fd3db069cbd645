"""
SCORE MATCHING — Learn the gradient, not the density

===============================================================
WHAT IT IS (THE CORE IDEA)
===============================================================

The SCORE of a density is the gradient of its log:

    s(x) = ∇_x log p(x)

For a Gaussian:
    s(x) = -(x - μ) / σ²

It is a vector field that always points TOWARD THE MODE, and gets
stronger the further away you are. The normalising constant of p
disappears under ∇ log, which is the whole point.

===============================================================
THREE OBJECTIVES
===============================================================

EXPLICIT (ESM), needs the true score:
    J_ESM(θ) = E_q[ ½ (ψ(x; θ) - ∇ log q(x))² ]

IMPLICIT (ISM), Hyvärinen 2005, no true score needed:
    J_ISM(θ) = E_q[ ½ ψ(x; θ)² + ψ'(x; θ) ]

    J_ESM = J_ISM + C   (C does not depend on θ)

DENOISING (DSM), Vincent 2011: perturb x → x̃ = x + σε and regress
onto the score of the noise kernel, which is known in closed form:
    ∇ log q_σ(x̃ | x) = -(x̃ - x) / σ²
    J_DSM = ½ (ψ(x̃) - ∇ log q_σ(x̃ | x))²

This is exactly "predict the noise" in diffusion models.
"""

import numpy as np

from density_lab.density import gaussian_pdf
from density_lab.errors import InvalidArgument


def gaussian_score(x, mu=0.0, sigma=1.0):
    """s(x) = -(x - μ) / σ²"""
    if sigma <= 0:
        raise InvalidArgument(f"sigma must be positive, got {sigma}")
    return -(np.asarray(x, dtype=float) - mu) / sigma ** 2


# ============================================================
# DENOISING SCORE MATCHING
# ============================================================

def dsm_target_score(noisy_x, clean_x, sigma):
    """Score of the noise kernel q_σ(x̃ | x) at x̃."""
    return float(gaussian_score(noisy_x, clean_x, sigma))


def dsm_model_score(noisy_x, clean_x, sigma, theta):
    """
    Toy linear model ψ(x̃) = -θ (x̃ - x) / σ².

    θ = 1 recovers the target exactly.
    """
    return theta * dsm_target_score(noisy_x, clean_x, sigma)


def dsm_loss(noisy_x, clean_x, sigma, theta):
    """J = ½ (ψ(x̃) - target)²"""
    target = dsm_target_score(noisy_x, clean_x, sigma)
    model = dsm_model_score(noisy_x, clean_x, sigma, theta)
    return 0.5 * (model - target) ** 2


# ============================================================
# EXPLICIT vs IMPLICIT SCORE MATCHING
# ============================================================

def score_matching_objectives(theta, phi, mu_true=0.0, sigma_true=1.0,
                              x_min=-5.0, x_max=5.0, dx=0.1):
    """
    Riemann-sum estimates of J_ESM and J_ISM for the model
    ψ(x; θ, φ) = -φ (x - θ) against q = N(mu_true, sigma_true²).

    ψ'(x) = -φ, so the ISM integrand is q(x) (½ψ² - φ).

    Returns:
        (esm, ism)
    """
    n = int(round((x_max - x_min) / dx)) + 1
    xs = np.linspace(x_min, x_max, n)

    q = gaussian_pdf(xs, mu_true, sigma_true)
    s_true = gaussian_score(xs, mu_true, sigma_true)
    psi = -phi * (xs - theta)

    esm = np.sum(0.5 * q * (psi - s_true) ** 2) * dx
    ism = np.sum(q * (0.5 * psi ** 2 - phi)) * dx
    return float(esm), float(ism)
