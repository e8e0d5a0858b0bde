# hextergen/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the hex
world generator. These values are used if they are not explicitly provided by
the user's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC SIMULATION.
Instead, pass a configuration dictionary to the HexWorldGenerator instance.
================================================================================
"""

# --- Random Source ---
DEFAULT_SEED = 1337
# Offset applied to the master seed for the noise permutation table, so the
# base elevation texture never consumes draws from the plate simulation.
NOISE_SEED_OFFSET = 98761

# --- Grid Dimensions (in hexes) ---
DEFAULT_WIDTH = 200
DEFAULT_HEIGHT = 160

# --- Seed Placement (Rule 1) ---
DEFAULT_NUM_PLATES = 75
# None means "derive from the grid": diagonal / num_plates * SEED_SPACING_FACTOR.
DEFAULT_MIN_SEED_DISTANCE = None
SEED_SPACING_FACTOR = 2.5
# Rows next to each pole that never receive a seed.
DEFAULT_SEED_POLE_MARGIN = 2
# Rejection sampling gives up after num_plates * this many draws.
SEED_ATTEMPTS_PER_PLATE = 1000

# --- Elevation Shaping ---
# Strength S of the per-slope distance effect.
DEFAULT_ELEVATION_STRENGTH = 0.02
# Coefficient C multiplied in after each slope adjustment. Values above 1.0
# amplify every pass, which is why the field is rescaled to ELEVATION_BOUND.
DEFAULT_ELEVATION_COEFFICIENT = 1.03
# 'linear' is the primary formulation, 'sigmoid' the alternative blend.
ELEVATION_MODES = ('linear', 'sigmoid')
DEFAULT_ELEVATION_MODE = 'linear'
DEFAULT_SIGMOID_STEEPNESS = 10.0
# Offset added to the distance effect before strength is applied.
DISTANCE_EFFECT_OFFSET = 0.01
# Final elevations are rescaled into [-bound, bound]. None disables the bound.
# Seed hexes end every slope of their plate and take one coefficient
# multiplication per slope, so they set the peak. After the rescale most of
# the field sits close to zero; the elevation view compensates with
# ELEVATION_DISPLAY_PERCENTILE.
DEFAULT_ELEVATION_BOUND = 1.0

# --- Base Elevation Noise ---
# Feature scale in hexes: a larger number means larger continents.
DEFAULT_NOISE_SCALE = 40.0
DEFAULT_NOISE_OCTAVES = 6
DEFAULT_NOISE_PERSISTENCE = 0.6
DEFAULT_NOISE_LACUNARITY = 2.0

# --- Rendering & Output ---
# Circumradius of one hex in pixels.
DEFAULT_HEX_SIZE_PX = 6.0
# 1 renders in-process; more splits the image into quadrants across workers.
DEFAULT_RENDER_WORKERS = 1
VIEW_MODES = ('elevation', 'plates', 'borders')
# The elevation view maps this percentile of |elevation| to full color and
# clips the seed peaks above it. None colors against the largest |elevation|.
ELEVATION_DISPLAY_PERCENTILE = 99.0
DEFAULT_OUTPUT_DIR = 'generated_worlds'
