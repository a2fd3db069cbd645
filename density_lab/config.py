"""
Lab Defaults & Paths
====================
Central place for the constants every lab shares, so the pipeline, the
lab state and the CLI agree on T, the beta range, the slider ranges and
where figures get written.

Exports:
    T, BETA_START, BETA_END, SNAPSHOT_INTERVAL: diffusion pipeline defaults.
    DEFAULT_SHAPE, DEFAULT_POINTS, POINTS_RANGE: point-cloud lab defaults.
    OUTPUT_DIR (str): where the CLI saves figures.
"""
import os

# ============================================================
# DIFFUSION PIPELINE
# ============================================================

T = 1000                  # total diffusion steps
BETA_START = 1e-4         # β at t=0
BETA_END = 0.02           # β at t=T-1
SNAPSHOT_INTERVAL = 10    # trajectory keeps every 10th timestep

# ============================================================
# POINT-CLOUD LAB
# ============================================================

DEFAULT_SHAPE = 'circle'
DEFAULT_POINTS = 500
POINTS_RANGE = (100, 1000)
PLAYBACK_STEP = 5         # timesteps removed per animation frame

# Screen projection: the cloud fills 35% of the shorter canvas side
SCREEN_SCALE = 0.35

# Point colour is blended from NOISE_COLOR (t=T) to DATA_COLOR (t=0)
NOISE_COLOR = (59, 130, 246)
DATA_COLOR = (244, 114, 182)

# ============================================================
# DENSITY LABS
# ============================================================

CURVE_RANGE = (-7.0, 7.0)     # x range of the 1D density lab
PLOT_RANGE = (-4.0, 4.0)      # x range of the CDF / likelihood labs
CURVE_STEP = 0.1
HISTOGRAM_BIN = 0.5
HISTOGRAM_RANGE = (-5.0, 5.0)
TYPICAL_THRESHOLD = 0.1       # likelihood below this is flagged as anomalous

# ============================================================
# OUTPUT
# ============================================================

OUTPUT_DIR: str = os.environ.get('DENSITY_LAB_OUTPUT', os.path.join(os.getcwd(), 'figures'))
