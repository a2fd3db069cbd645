"""
RENDER THE LABS
===============

    python -m density_lab                          # every lab
    python -m density_lab --lab point-cloud --shape spiral --points 800
    python -m density_lab --lab cdf --output-dir /tmp/figs

Each lab is saved as <lab>.png in the output directory.
"""

import argparse
import logging
import os

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np

from density_lab import config, visualize
from density_lab.labs import PointCloudDiffusionLab
from density_lab.logging_config import setup_logging
from density_lab.shapes import Shape

logger = logging.getLogger(__name__)


def _point_cloud_figure(args, rng):
    lab = PointCloudDiffusionLab(args.shape, args.points, rng=rng)
    return visualize.visualize_point_cloud_diffusion(lab)


LABS = {
    'gaussian1d': lambda args, rng: visualize.visualize_gaussian_1d(),
    'cdf': lambda args, rng: visualize.visualize_cdf_integration(),
    'likelihood': lambda args, rng: visualize.visualize_likelihood(),
    'sampling': lambda args, rng: visualize.visualize_sampling_convergence(rng=rng),
    'multivariate': lambda args, rng: visualize.visualize_multivariate(),
    'pseudo-likelihood': lambda args, rng: visualize.visualize_pseudo_likelihood(),
    'score': lambda args, rng: visualize.visualize_score_field(),
    'dsm': lambda args, rng: visualize.visualize_dsm(),
    'ism-esm': lambda args, rng: visualize.visualize_ism_vs_esm(),
    'forward-noise': lambda args, rng: visualize.visualize_forward_noise(rng=rng),
    'schedule': lambda args, rng: visualize.visualize_noise_schedule(),
    'point-cloud': _point_cloud_figure,
}


def positive_int(value):
    """argparse type for counts that must be at least one."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {number}")
    return number


def build_parser():
    parser = argparse.ArgumentParser(
        prog='density-lab',
        description='Render the Gaussian / score / diffusion labs to PNG files.')
    parser.add_argument('--lab', choices=['all'] + sorted(LABS), default='all',
                        help='which lab to render (default: all)')
    parser.add_argument('--shape', choices=[s.value for s in Shape], default=config.DEFAULT_SHAPE,
                        help='target shape for the point-cloud lab')
    parser.add_argument('--points', type=positive_int, default=config.DEFAULT_POINTS,
                        help=f'point count, recommended {config.POINTS_RANGE[0]}-{config.POINTS_RANGE[1]}')
    parser.add_argument('--seed', type=int, default=None, help='seed for reproducible figures')
    parser.add_argument('--output-dir', default=config.OUTPUT_DIR, help='where to write PNGs')
    parser.add_argument('--verbose', action='store_true', help='debug logging')
    return parser


def render(names, args, rng):
    """Render each named lab, returning the paths written."""
    os.makedirs(args.output_dir, exist_ok=True)
    written = []
    for name in names:
        logger.info("Rendering %s", name)
        fig = LABS[name](args, rng)
        path = os.path.join(args.output_dir, f'{name}.png')
        fig.savefig(path, dpi=150, bbox_inches='tight')
        plt.close(fig)
        written.append(path)
    return written


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    rng = np.random.default_rng(args.seed)

    print("=" * 60)
    print("DENSITY LAB — Gaussian, score and diffusion visualizations")
    print("=" * 60)

    names = sorted(LABS) if args.lab == 'all' else [args.lab]
    written = render(names, args, rng)

    print("\nGenerated visualizations:")
    for path in written:
        print(f"  {path} ({os.path.getsize(path) // 1024} KB)")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
