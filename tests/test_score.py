import numpy as np
import pytest

from density_lab.density import gaussian_pdf
from density_lab.errors import InvalidArgument
from density_lab.score import (
    dsm_loss, dsm_model_score, dsm_target_score, gaussian_score,
    score_matching_objectives,
)


def test_score_points_toward_the_mode():
    assert gaussian_score(2.0) == pytest.approx(-2.0)
    assert gaussian_score(-1.0, 0, 0.5) == pytest.approx(4.0)
    assert gaussian_score(3.0, mu=3.0) == 0


def test_score_is_gradient_of_log_density():
    xs = np.linspace(-3, 3, 13)
    h = 1e-5
    numeric = (np.log(gaussian_pdf(xs + h, 1, 1.5)) - np.log(gaussian_pdf(xs - h, 1, 1.5))) / (2 * h)
    np.testing.assert_allclose(gaussian_score(xs, 1, 1.5), numeric, atol=1e-6)


def test_score_needs_positive_sigma():
    with pytest.raises(InvalidArgument):
        gaussian_score(1.0, 0, 0)


def test_dsm_values():
    assert dsm_target_score(1.5, 0.0, 1.0) == pytest.approx(-1.5)
    assert dsm_model_score(1.5, 0.0, 1.0, 0.8) == pytest.approx(-1.2)
    assert dsm_loss(1.5, 0.0, 1.0, 0.8) == pytest.approx(0.045)


@pytest.mark.parametrize('noisy, clean, sigma', [(1.5, 0, 1), (-2, 1, 0.5), (0.3, 0.3, 2)])
def test_dsm_loss_vanishes_at_theta_one(noisy, clean, sigma):
    assert dsm_loss(noisy, clean, sigma, 1.0) == pytest.approx(0.0)


@pytest.mark.parametrize('theta, phi', [(1.0, 1.0), (0.0, 0.5), (-2.0, 2.5), (3.0, 3.0)])
def test_esm_and_ism_differ_by_a_constant(theta, phi):
    esm, ism = score_matching_objectives(theta, phi)
    # C = ½ E[s(x)²] = ½ for the standard normal
    assert esm - ism == pytest.approx(0.5, abs=1e-3)


def test_esm_is_zero_at_the_true_score():
    esm, ism = score_matching_objectives(0.0, 1.0)
    assert esm == pytest.approx(0.0, abs=1e-12)
    assert ism == pytest.approx(-0.5, abs=1e-3)
