"""
DENSITY LAB — Interactive explorations of the Gaussian distribution

    density.py       1D density, CDF, likelihood, sampling convergence
    multivariate.py  covariance ellipses, conditionals, pseudo-likelihood
    score.py         score field, DSM, ESM vs ISM
    shapes.py        clean 2D point clouds
    diffusion.py     beta schedule, forward diffusion, trajectories
    labs.py          point-cloud lab state, pixel noise
    visualize.py     one matplotlib figure per lab
"""

from density_lab.diffusion import (
    Snapshot, compute_alphas, forward_diffusion, generate_beta_schedule,
    generate_trajectory, get_points_at_timestep,
)
from density_lab.errors import InvalidArgument
from density_lab.sampling import gaussian_random
from density_lab.shapes import (
    Shape, generate_circle, generate_moon, generate_multimodal,
    generate_spiral, get_shape_generator,
)

__version__ = '0.1.0'
