import matplotlib.pyplot as plt
import pytest
from matplotlib.figure import Figure

from density_lab import visualize
from density_lab.labs import PointCloudDiffusionLab


@pytest.mark.parametrize('build', [
    visualize.visualize_gaussian_1d,
    visualize.visualize_cdf_integration,
    visualize.visualize_likelihood,
    visualize.visualize_multivariate,
    visualize.visualize_pseudo_likelihood,
    visualize.visualize_score_field,
    visualize.visualize_dsm,
    visualize.visualize_ism_vs_esm,
    lambda: visualize.visualize_noise_schedule(T=100),
])
def test_figures_build(build):
    fig = build()
    assert isinstance(fig, Figure)
    plt.close(fig)


def test_random_figures_build(rng):
    for fig in (visualize.visualize_sampling_convergence((10, 100), rng=rng),
                visualize.visualize_forward_noise((0, 100), rng=rng)):
        assert isinstance(fig, Figure)
        plt.close(fig)


def test_point_cloud_figure_restores_timestep(rng):
    lab = PointCloudDiffusionLab('moon', 100, T=100, rng=rng)
    lab.set_timestep(40)
    fig = visualize.visualize_point_cloud_diffusion(lab, timesteps=(0, 50, 100))
    assert len(fig.axes) == 3
    assert lab.current_t == 40
    plt.close(fig)


def test_point_cloud_figure_restores_timestep_on_failure(rng, monkeypatch):
    lab = PointCloudDiffusionLab('circle', 100, T=100, rng=rng)
    lab.set_timestep(40)

    def broken_color():
        raise RuntimeError('colour lookup failed')

    monkeypatch.setattr(lab, 'point_color', broken_color)
    with pytest.raises(RuntimeError):
        visualize.visualize_point_cloud_diffusion(lab, timesteps=(0, 50))
    assert lab.current_t == 40
    plt.close('all')
