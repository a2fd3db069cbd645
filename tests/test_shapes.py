import numpy as np
import pytest

from density_lab.errors import InvalidArgument
from density_lab.shapes import (
    DEFAULT_CENTERS, Shape, generate_circle, generate_moon,
    generate_multimodal, generate_spiral, get_shape_generator,
)

GENERATORS = [generate_circle, generate_spiral, generate_multimodal, generate_moon]


@pytest.mark.parametrize('generator', GENERATORS)
@pytest.mark.parametrize('n', [1, 3, 500, 1001])
def test_exact_point_count(generator, n, rng):
    points = generator(n, rng=rng)
    assert points.shape == (n, 2)


@pytest.mark.parametrize('generator', GENERATORS)
@pytest.mark.parametrize('n', [0, -5])
def test_non_positive_count_is_rejected(generator, n):
    with pytest.raises(InvalidArgument):
        generator(n)


def test_circle_radii_stay_in_jitter_band(rng):
    points = generate_circle(500, radius=1.0, noise=0.02, rng=rng)
    radii = np.hypot(points[:, 0], points[:, 1])
    assert np.all(radii >= 1.0 - 0.01)
    assert np.all(radii <= 1.0 + 0.01)


def test_circle_angles_are_evenly_spaced(rng):
    points = generate_circle(8, noise=0.0, rng=rng)
    angles = np.mod(np.arctan2(points[:, 1], points[:, 0]), 2 * np.pi)
    np.testing.assert_allclose(angles, 2 * np.pi * np.arange(8) / 8, atol=1e-12)


def test_spiral_is_archimedean_and_deterministic():
    a = generate_spiral(300, turns=3, spacing=0.15)
    b = generate_spiral(300, turns=3, spacing=0.15)
    np.testing.assert_array_equal(a, b)

    t = 3 * 2 * np.pi * np.arange(300) / 300
    np.testing.assert_allclose(np.hypot(a[:, 0], a[:, 1]), 0.15 * t)
    np.testing.assert_array_equal(a[0], [0.0, 0.0])


def test_multimodal_remainder_goes_to_first_cluster(rng):
    points = generate_multimodal(501, std=1e-3, rng=rng)
    centers = np.array(DEFAULT_CENTERS)
    owner = np.argmin(np.linalg.norm(points[:, None, :] - centers[None], axis=2), axis=1)

    assert list(np.bincount(owner, minlength=4)) == [126, 125, 125, 125]
    # Cluster blocks come in center order, the remainder is appended last
    assert np.all(owner[:125] == 0)
    assert np.all(owner[125:250] == 1)
    assert owner[-1] == 0


def test_multimodal_custom_centers(rng):
    points = generate_multimodal(10, centers=[(5, 5), (-5, -5), (0, 3)], std=0.01, rng=rng)
    assert points.shape == (10, 2)
    assert np.sum(np.linalg.norm(points - [5, 5], axis=1) < 0.1) == 4


def test_multimodal_needs_a_center():
    with pytest.raises(InvalidArgument):
        generate_multimodal(10, centers=[])


def test_moon_band_geometry(rng):
    points = generate_moon(2000, radius=1.0, rng=rng)
    x = points[:, 0] + 0.2
    y = points[:, 1]
    r = np.hypot(x, y)
    assert np.all(r >= 0.7 - 1e-12)
    assert np.all(r <= 1.0 + 1e-12)
    # θ ∈ [π/2, 3π/2) → left half-plane around the shifted origin
    assert np.all(x <= 1e-12)


def test_random_shapes_reproduce_with_seed():
    for generator in (generate_circle, generate_multimodal, generate_moon):
        a = generator(50, rng=np.random.default_rng(9))
        b = generator(50, rng=np.random.default_rng(9))
        np.testing.assert_array_equal(a, b)


@pytest.mark.parametrize('name, expected', [
    ('circle', generate_circle),
    ('spiral', generate_spiral),
    ('multimodal', generate_multimodal),
    ('moon', generate_moon),
    (Shape.SPIRAL, generate_spiral),
])
def test_lookup_by_name(name, expected):
    assert get_shape_generator(name) is expected


@pytest.mark.parametrize('name', ['star', '', 'CIRCLE', None, 42])
def test_unknown_names_fall_back_to_circle(name):
    assert get_shape_generator(name) is generate_circle
