"""
LAB STATE — What the sliders control

The point-cloud lab owns ONE trajectory:
    shape or point count changes → regenerate x_0 and the trajectory
    timestep changes             → only pick a different snapshot

Playback walks t from T down to 0 (noise → data), PLAYBACK_STEP per
frame. Driving the frames is left to whoever renders.

The pixel-noise lab is the image version of the same idea, with plain
additive noise x_t = x_0 + σε instead of a schedule.
"""

import logging

import numpy as np

from density_lab import config
from density_lab.diffusion import generate_trajectory, get_points_at_timestep
from density_lab.errors import InvalidArgument
from density_lab.sampling import gaussian_random
from density_lab.shapes import get_shape_generator, resolve_shape

logger = logging.getLogger(__name__)


# ============================================================
# POINT-CLOUD DIFFUSION
# ============================================================

class PointCloudDiffusionLab:
    """
    Shape / point-count / timestep state for the point-cloud lab.

    The trajectory is rebuilt eagerly whenever shape or n_points changes,
    so reading current_points never triggers diffusion.
    """

    def __init__(self, shape=config.DEFAULT_SHAPE, n_points=config.DEFAULT_POINTS,
                 T=config.T, snapshot_interval=config.SNAPSHOT_INTERVAL, rng=None):
        self.T = T
        self.snapshot_interval = snapshot_interval
        self.rng = rng
        self._shape = resolve_shape(shape).value
        self._n_points = n_points
        self.current_t = T
        self.playing = False
        self._regenerate()

    def _regenerate(self):
        x0 = get_shape_generator(self._shape)(self._n_points, rng=self.rng)
        self.trajectory = generate_trajectory(x0, self.T, self.snapshot_interval, rng=self.rng)
        logger.debug("Regenerated %s trajectory with %d points", self._shape, self._n_points)

    @property
    def shape(self):
        return self._shape

    @property
    def n_points(self):
        return self._n_points

    def set_shape(self, shape):
        shape = resolve_shape(shape).value
        if shape != self._shape:
            self._shape = shape
            self._regenerate()

    def set_n_points(self, n_points):
        if n_points <= 0:
            raise InvalidArgument(f"point count must be positive, got {n_points}")
        if n_points != self._n_points:
            self._n_points = n_points
            self._regenerate()

    def set_timestep(self, t):
        self.current_t = int(min(max(t, 0), self.T))

    @property
    def clean_points(self):
        return self.trajectory[0].points

    @property
    def current_points(self):
        return get_points_at_timestep(self.trajectory, self.current_t)

    def play(self):
        self.playing = True

    def pause(self):
        self.playing = False

    def advance(self, step=config.PLAYBACK_STEP):
        """
        One playback frame: move step timesteps toward clean data.

        Returns:
            False once t has reached 0 (playback stops), else True
        """
        if self.current_t <= 0:
            self.current_t = 0
            self.playing = False
            return False
        self.current_t = max(self.current_t - step, 0)
        return True

    def reset(self):
        self.playing = False
        self.current_t = self.T

    def point_color(self):
        """RGB blended from the noise colour (t=T) to the data colour (t=0)."""
        progress = 1 - self.current_t / self.T
        return tuple(
            int(np.floor(noise + (data - noise) * progress))
            for noise, data in zip(config.NOISE_COLOR, config.DATA_COLOR)
        )


def to_screen(points, width, height, scale=config.SCREEN_SCALE):
    """
    Data coordinates → canvas pixels, y pointing down.

    (x, y) → (cx + x·s, cy - y·s) with s = min(width, height) × scale
    """
    points = np.asarray(points, dtype=float)
    s = min(width, height) * scale
    cx, cy = width / 2, height / 2
    return np.column_stack([cx + points[:, 0] * s, cy - points[:, 1] * s])


# ============================================================
# PIXEL NOISE
# ============================================================

def add_pixel_noise(image, sigma, rng=None):
    """
    x_t = clip(x_0 + σε, 0, 255), one ε per pixel shared by R, G and B.

    Args:
        image: (H, W, 3) or (H, W, 4) array with values in [0, 255]
        sigma: Noise scale in intensity units
        rng: Optional random source

    Returns:
        New float array of the same shape; alpha (if any) set to 255
    """
    if sigma < 0:
        raise InvalidArgument(f"noise scale must be non-negative, got {sigma}")
    image = np.asarray(image, dtype=float)
    if image.ndim != 3 or image.shape[2] not in (3, 4):
        raise InvalidArgument(f"expected an (H, W, 3|4) image, got shape {image.shape}")

    noisy = image.copy()
    noise = gaussian_random(image.shape[:2], rng) * sigma
    noisy[..., :3] = np.clip(image[..., :3] + noise[..., np.newaxis], 0, 255)
    if image.shape[2] == 4:
        noisy[..., 3] = 255
    return noisy


def noise_regime(sigma):
    """Label shown under the pixel-noise slider."""
    if sigma < 50:
        return "Structured Data"
    if sigma < 150:
        return "Corrupted Manifold"
    return "Pure Gaussian Noise"


def make_base_image(width=200, height=100, n_rings=5, rng=None):
    """
    A gradient canvas with a few white rings: the "data" that gets noised.

    Returns:
        (height, width, 3) float array in [0, 255]
    """
    rng = np.random if rng is None else rng
    stops = np.array([[59, 130, 246], [244, 114, 182], [6, 182, 212]], dtype=float)

    # Diagonal gradient position in [0, 1]
    yy, xx = np.mgrid[0:height, 0:width]
    pos = (xx / max(width - 1, 1) + yy / max(height - 1, 1)) / 2
    image = np.empty((height, width, 3))
    for c in range(3):
        image[..., c] = np.interp(pos, [0, 0.5, 1], stops[:, c])

    radius = min(width, height) * 0.15
    for _ in range(n_rings):
        cx, cy = rng.random() * width, rng.random() * height
        dist = np.hypot(xx - cx, yy - cy)
        image[np.abs(dist - radius) < 1.0] = 255
    return image
