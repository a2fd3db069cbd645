import numpy as np
import pytest

from density_lab.density import (
    density_curve, draw_samples, gaussian_cdf, gaussian_pdf,
    interval_probability, is_typical, likelihood, sampling_histogram,
)
from density_lab.errors import InvalidArgument


@pytest.mark.parametrize('mu, sigma', [(0, 1), (2, 0.3), (-1, 2.5)])
def test_density_integrates_to_one(mu, sigma):
    xs = np.linspace(mu - 12 * sigma, mu + 12 * sigma, 20001)
    area = np.sum(gaussian_pdf(xs, mu, sigma)) * (xs[1] - xs[0])
    assert area == pytest.approx(1.0, abs=1e-6)


def test_density_is_height_not_probability():
    # A narrow Gaussian peaks above 1
    assert gaussian_pdf(0, 0, 0.3) > 1
    assert gaussian_pdf(0) == pytest.approx(1 / np.sqrt(2 * np.pi))


def test_cdf_reference_values():
    assert gaussian_cdf(0) == pytest.approx(0.5)
    assert gaussian_cdf(3, mu=3, sigma=2) == pytest.approx(0.5)
    assert gaussian_cdf(1.96) == pytest.approx(0.9750021, abs=1e-6)


def test_interval_probability_one_sigma():
    assert interval_probability(-1, 1) == pytest.approx(0.6826895, abs=1e-6)
    assert interval_probability(-2, 2) == pytest.approx(0.9544997, abs=1e-6)
    assert interval_probability(0.5, 0.5) == 0.0


def test_interval_probability_matches_area():
    xs = np.linspace(-0.5, 1.5, 20001)
    ys = gaussian_pdf(xs)
    area = np.sum((ys[1:] + ys[:-1]) / 2 * np.diff(xs))
    assert interval_probability(-0.5, 1.5) == pytest.approx(area, abs=1e-8)


def test_interval_bounds_must_be_ordered():
    with pytest.raises(InvalidArgument):
        interval_probability(1, -1)


@pytest.mark.parametrize('sigma', [0, -1])
def test_sigma_must_be_positive(sigma):
    with pytest.raises(InvalidArgument):
        gaussian_pdf(0, 0, sigma)
    with pytest.raises(InvalidArgument):
        gaussian_cdf(0, 0, sigma)


def test_density_curve_grid():
    xs, ys = density_curve(0, 1)
    assert len(xs) == 141
    assert xs[0] == -7 and xs[-1] == 7
    assert np.argmax(ys) == 70


def test_likelihood_scoring():
    assert likelihood(1.5) == pytest.approx(0.1295176, abs=1e-6)
    assert is_typical(1.5)
    assert not is_typical(3.0)


def test_histogram_bins_follow_floor_rule():
    edges, heights = sampling_histogram([0.1, 0.2, -0.3, 5.2, 7.0])
    assert len(edges) == 21
    assert edges[0] == -5 and edges[-1] == 5

    n, width = 5, 0.5
    assert heights[10] == pytest.approx(2 / (n * width))   # [0, 0.5)
    assert heights[9] == pytest.approx(1 / (n * width))    # [-0.5, 0)
    assert heights[20] == pytest.approx(1 / (n * width))   # 5.2 → edge 5.0
    # 7.0 has no bin but still counts toward N
    assert heights.sum() * width == pytest.approx(4 / 5)


def test_histogram_of_nothing_is_flat():
    edges, heights = sampling_histogram([])
    assert len(edges) == 21
    assert not heights.any()


def test_histogram_bin_size_must_be_positive():
    with pytest.raises(InvalidArgument):
        sampling_histogram([0.0], bin_size=0)


def test_histogram_converges_to_density(rng):
    edges, heights = sampling_histogram(draw_samples(200_000, rng=rng))
    centres = edges + 0.25
    assert np.max(np.abs(heights - gaussian_pdf(centres))) < 0.02


def test_draw_samples_moments(rng):
    samples = draw_samples(100_000, mu=2, sigma=3, rng=rng)
    assert samples.mean() == pytest.approx(2, abs=0.05)
    assert samples.std() == pytest.approx(3, abs=0.05)
