"""
VISUALIZATIONS — One figure per lab

Every function builds and RETURNS a matplotlib Figure; saving is the
caller's job (see __main__.py). Each figure shows the lab at a few
slider settings side by side, since a PNG cannot be dragged.
"""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.gridspec import GridSpec

from density_lab import config
from density_lab.density import (
    density_curve, draw_samples, gaussian_pdf, interval_probability,
    is_typical, likelihood, sampling_histogram,
)
from density_lab.diffusion import generate_beta_schedule, get_schedule_params
from density_lab.labs import add_pixel_noise, make_base_image, noise_regime
from density_lab.multivariate import (
    bivariate_pdf, conditional_curve, ellipse_points, pseudo_likelihood,
)
from density_lab.score import (
    dsm_loss, dsm_model_score, dsm_target_score, gaussian_score,
    score_matching_objectives,
)


def _rgb(color):
    return tuple(c / 255 for c in color)


# ============================================================
# DENSITY LABS
# ============================================================

def visualize_gaussian_1d(settings=((0, 0.3), (0, 1), (0, 3), (2, 1))):
    """Density is height: several (μ, σ) curves on a shared axis."""
    fig, ax = plt.subplots(figsize=(10, 5))

    for mu, sigma in settings:
        xs, ys = density_curve(mu, sigma)
        ax.plot(xs, ys, linewidth=2, label=f'μ = {mu}, σ = {sigma}')
        ax.fill_between(xs, ys, alpha=0.15)

    ax.set_ylim(0, 1.4)
    ax.set_xlabel('x')
    ax.set_ylabel('p(x)')
    ax.legend()
    ax.grid(True, alpha=0.3)
    ax.set_title('THE FIRST MENTAL SHIFT\nDensity is height, probability is area (every curve has area 1)',
                 fontsize=12, fontweight='bold')
    plt.tight_layout()
    return fig


def visualize_cdf_integration(intervals=((-1, 1), (-2, 2), (0, 4))):
    """Probability as shaded area under N(0, 1)."""
    fig, axes = plt.subplots(1, len(intervals), figsize=(5 * len(intervals), 4))
    axes = np.atleast_1d(axes)
    xs, ys = density_curve(0, 1, *config.PLOT_RANGE)

    for ax, (a, b) in zip(axes, intervals):
        mask = (xs >= a) & (xs <= b)
        ax.plot(xs, ys, color='black', linewidth=1.5)
        ax.fill_between(xs[mask], ys[mask], color='tab:green', alpha=0.5)
        ax.set_ylim(0, 0.5)
        ax.set_title(f'P({a} ≤ X ≤ {b}) = {interval_probability(a, b):.4f}')
        ax.grid(True, alpha=0.3)

    plt.suptitle('CDF & AREA: P(a ≤ X ≤ b) = F(b) - F(a)', fontsize=12, fontweight='bold')
    plt.tight_layout()
    return fig


def visualize_likelihood(points=(0.0, 1.5, 3.0)):
    """Likelihood scoring: typical points sit high on the curve, anomalies low."""
    fig, ax = plt.subplots(figsize=(10, 5))
    xs, ys = density_curve(0, 1, *config.PLOT_RANGE)
    ax.plot(xs, ys, color='gray', linewidth=1.5, label='p(x)')

    for x in points:
        p = likelihood(x)
        color = 'orange' if is_typical(x) else 'red'
        ax.scatter([x], [p], s=120, color=color, edgecolor='black', zorder=3)
        ax.annotate(f'p({x}) = {p:.4f}', (x, p), textcoords='offset points', xytext=(8, 8))

    ax.axhline(config.TYPICAL_THRESHOLD, linestyle='--', color='red', alpha=0.5,
               label=f'anomaly threshold {config.TYPICAL_THRESHOLD}')
    ax.set_ylim(0, 0.5)
    ax.legend()
    ax.grid(True, alpha=0.3)
    ax.set_title('LIKELIHOOD SCORING\nLow density = surprising observation', fontsize=12, fontweight='bold')
    plt.tight_layout()
    return fig


def visualize_sampling_convergence(sample_sizes=(20, 200, 5000), rng=None):
    """Histograms of growing N approaching the true density."""
    fig, axes = plt.subplots(1, len(sample_sizes), figsize=(5 * len(sample_sizes), 4))
    axes = np.atleast_1d(axes)
    bin_size = config.HISTOGRAM_BIN

    for ax, n in zip(axes, sample_sizes):
        edges, heights = sampling_histogram(draw_samples(n, rng=rng))
        ax.bar(edges, heights, width=bin_size * 0.9, align='edge', alpha=0.5, color='tab:cyan')
        ax.plot(edges + bin_size / 2, gaussian_pdf(edges + bin_size / 2), color='black', linewidth=2)
        ax.set_ylim(0, 0.6)
        ax.set_title(f'N = {n}')
        ax.grid(True, alpha=0.3)

    plt.suptitle('SAMPLING CONVERGENCE\nDensity is what sampling frequency becomes in the limit',
                 fontsize=12, fontweight='bold')
    plt.tight_layout()
    return fig


# ============================================================
# MULTIVARIATE LABS
# ============================================================

def visualize_multivariate(rhos=(-0.8, 0.0, 0.5, 0.9)):
    """1σ, 2σ, 3σ contours for several correlations."""
    fig, axes = plt.subplots(1, len(rhos), figsize=(4 * len(rhos), 4))
    axes = np.atleast_1d(axes)
    grid = np.linspace(-4, 4, 161)
    X, Y = np.meshgrid(grid, grid)

    for ax, rho in zip(axes, rhos):
        ax.contourf(X, Y, bivariate_pdf(X, Y, rho), levels=20, cmap='Purples')
        for k in (1, 2, 3):
            ring = ellipse_points(rho, k)
            ax.plot(ring[:, 0], ring[:, 1], color='purple', linewidth=1.5)
        ax.set_aspect('equal')
        ax.set_title(f'Σ = [[1, {rho}], [{rho}, 1]]')

    plt.suptitle('MULTIVARIATE CONTOURS\nCovariance is geometry: equal density = ellipses',
                 fontsize=12, fontweight='bold')
    plt.tight_layout()
    return fig


def visualize_pseudo_likelihood(x1=1.0, x2=0.8):
    """Conditionals for one ρ, and the pseudo-likelihood as a function of ρ."""
    fig, axes = plt.subplots(1, 2, figsize=(12, 4))
    xs = np.linspace(-4, 4, 81)

    for rho in (0.0, 0.5, 0.9):
        axes[0].plot(xs, conditional_curve(xs, rho, x2), label=f'p(x₁ | x₂={x2}), ρ={rho}')
    axes[0].axvline(x1, color='black', linestyle='--', alpha=0.5)
    axes[0].set_ylim(0, 1.5)
    axes[0].legend(fontsize=8)
    axes[0].set_title('Conditionals tighten as |ρ| grows')

    rhos = np.linspace(-0.95, 0.95, 191)
    pl = np.array([pseudo_likelihood(x1, x2, r) for r in rhos])
    best = rhos[np.argmax(pl)]
    axes[1].plot(rhos, pl, linewidth=2)
    axes[1].axvline(best, color='red', linestyle='--', label=f'argmax ρ = {best:.2f}')
    axes[1].set_xlabel('ρ')
    axes[1].set_ylabel('p(x₁|x₂) p(x₂|x₁)')
    axes[1].legend()
    axes[1].grid(True, alpha=0.3)
    axes[1].set_title(f'Pseudo-likelihood at x = ({x1}, {x2})')

    plt.suptitle('PSEUDO-LIKELIHOOD: maximise the product of conditionals',
                 fontsize=12, fontweight='bold')
    plt.tight_layout()
    return fig


# ============================================================
# SCORE LABS
# ============================================================

def visualize_score_field(sigmas=(0.5, 1.0, 2.0)):
    """Score lines and arrows pointing toward the mode."""
    fig, axes = plt.subplots(1, len(sigmas), figsize=(5 * len(sigmas), 4))
    axes = np.atleast_1d(axes)
    xs = np.linspace(-5, 5, 51)
    arrows = np.arange(-4, 5)

    for ax, sigma in zip(axes, sigmas):
        ax.plot(xs, gaussian_score(xs, 0, sigma), color='tab:pink', linewidth=2, label='s(x)')
        ax.plot(xs, gaussian_pdf(xs, 0, sigma), color='gray', linestyle='--', label='p(x)')
        s = gaussian_score(arrows, 0, sigma)
        ax.quiver(arrows, np.zeros_like(arrows), s, np.zeros_like(s),
                  color='tab:pink', angles='xy', scale_units='xy', scale=4, alpha=0.7)
        ax.axhline(0, color='black', linewidth=0.5)
        ax.set_title(f'σ = {sigma}')
        ax.legend(fontsize=8)

    plt.suptitle('SCORE FIELD: s(x) = ∇ log p(x) = -(x - μ)/σ²\nPoints toward the data mode',
                 fontsize=12, fontweight='bold')
    plt.tight_layout()
    return fig


def visualize_dsm(clean_x=0.0, noisy_x=1.5, sigma=1.0):
    """Noise kernel, target vs model score, and the DSM loss over θ."""
    fig, axes = plt.subplots(1, 2, figsize=(12, 4))
    xs = np.linspace(-5, 5, 101)

    axes[0].fill_between(xs, gaussian_pdf(xs, clean_x, sigma), alpha=0.2, color='tab:blue',
                         label='q(x̃ | x)')
    axes[0].scatter([clean_x], [0], marker='D', color='black', label='clean x', zorder=3)
    axes[0].scatter([noisy_x], [0], color='tab:pink', s=80, label='noisy x̃', zorder=3)
    target = dsm_target_score(noisy_x, clean_x, sigma)
    model = dsm_model_score(noisy_x, clean_x, sigma, 0.8)
    axes[0].annotate('', xy=(noisy_x + target * 0.5, 0.15), xytext=(noisy_x, 0.15),
                     arrowprops=dict(arrowstyle='->', color='black'))
    axes[0].annotate('', xy=(noisy_x + model * 0.5, 0.08), xytext=(noisy_x, 0.08),
                     arrowprops=dict(arrowstyle='->', color='tab:pink'))
    axes[0].set_ylim(-0.1, 1.0)
    axes[0].legend(fontsize=8)
    axes[0].set_title(f'target = {target:.2f}, model(θ=0.8) = {model:.2f}')

    thetas = np.linspace(0, 2, 201)
    losses = [dsm_loss(noisy_x, clean_x, sigma, th) for th in thetas]
    axes[1].plot(thetas, losses, linewidth=2)
    axes[1].set_xlabel('θ')
    axes[1].set_ylabel('J_DSM')
    axes[1].grid(True, alpha=0.3)
    axes[1].set_title('Minimum at θ = 1: the model recovers the noise score')

    plt.suptitle('DENOISING SCORE MATCHING', fontsize=12, fontweight='bold')
    plt.tight_layout()
    return fig


def visualize_ism_vs_esm(phi=1.0):
    """ESM and ISM + C as the model shift θ sweeps: same minimiser."""
    thetas = np.linspace(-3, 3, 61)
    esm, ism = zip(*(score_matching_objectives(th, phi) for th in thetas))

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.plot(thetas, esm, linewidth=2, label='ESM')
    ax.plot(thetas, np.array(ism) + 0.5, linewidth=2, linestyle='--', label='ISM + 0.5')
    ax.set_xlabel('θ (model shift)')
    ax.set_ylabel('objective')
    ax.legend()
    ax.grid(True, alpha=0.3)
    ax.set_title(f'ESM = ISM + C   (φ = {phi})\nMinimise either one, get the same model',
                 fontsize=12, fontweight='bold')
    plt.tight_layout()
    return fig


# ============================================================
# DIFFUSION LABS
# ============================================================

def visualize_forward_noise(sigmas=(0, 40, 100, 250), rng=None):
    """Pixel-space forward noise on a synthetic image."""
    base = make_base_image(rng=rng)
    fig, axes = plt.subplots(1, len(sigmas), figsize=(4 * len(sigmas), 2.5))
    axes = np.atleast_1d(axes)

    for ax, sigma in zip(axes, sigmas):
        ax.imshow(add_pixel_noise(base, sigma, rng).astype(np.uint8))
        ax.set_title(f'σ = {sigma}\n{noise_regime(sigma)}')
        ax.axis('off')

    plt.suptitle('FORWARD DIFFUSION: x_t = x_0 + ε, ε ~ N(0, σ²I)', fontsize=12, fontweight='bold')
    plt.tight_layout()
    return fig


def visualize_noise_schedule(T=config.T):
    """β_t, ᾱ_t and SNR of the linear schedule."""
    params = get_schedule_params(generate_beta_schedule(T))

    fig, axes = plt.subplots(1, 3, figsize=(15, 4))
    axes[0].plot(params['betas'], linewidth=2)
    axes[0].set_title('Noise Added per Step (β_t)')
    axes[1].plot(params['alpha_bars'], linewidth=2, label='ᾱ_t')
    axes[1].plot(params['sqrt_alpha_bars'], linewidth=2, label='√ᾱ_t (signal)')
    axes[1].plot(params['sqrt_one_minus_alpha_bars'], linewidth=2, label='√(1-ᾱ_t) (noise)')
    axes[1].legend()
    axes[1].set_title('Signal Remaining')
    axes[2].semilogy(params['snr'], linewidth=2)
    axes[2].set_title('Signal-to-Noise Ratio')
    for ax in axes:
        ax.set_xlabel('Timestep t')
        ax.grid(True, alpha=0.3)

    plt.suptitle(f'LINEAR NOISE SCHEDULE (T = {T})', fontsize=12, fontweight='bold')
    plt.tight_layout()
    return fig


def visualize_point_cloud_diffusion(lab, timesteps=(0, 50, 100, 200, 400, 1000)):
    """
    Snapshots of a PointCloudDiffusionLab at several slider positions,
    coloured the way the lab colours them.
    """
    fig = plt.figure(figsize=(3 * len(timesteps), 3.5))
    gs = GridSpec(1, len(timesteps), figure=fig)
    saved_t = lab.current_t

    try:
        for i, t in enumerate(timesteps):
            lab.set_timestep(t)
            points = lab.current_points
            ax = fig.add_subplot(gs[0, i])
            ax.scatter(points[:, 0], points[:, 1], s=2, color=_rgb(lab.point_color()))
            ax.set_xlim(-3, 3)
            ax.set_ylim(-3, 3)
            ax.set_aspect('equal')
            ax.set_title(f't = {lab.current_t}')
            ax.set_xticks([])
            ax.set_yticks([])
    finally:
        lab.set_timestep(saved_t)

    fig.suptitle(f'POINT CLOUD DIFFUSION: {lab.shape}, {lab.n_points} points\n'
                 'x_t = √ᾱ_t × x_0 + √(1-ᾱ_t) × ε', fontsize=12, fontweight='bold')
    fig.tight_layout()
    return fig
