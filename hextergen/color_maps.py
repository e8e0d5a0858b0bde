# hextergen/color_maps.py

"""
================================================================================
SHARED COLOR MAPPING UTILITIES
================================================================================
This module contains the color constants and functions for converting per-hex
world data (elevation, plate ids, borders) into RGBA color arrays.

It is designed to be a pure, stateless utility with no dependencies on Pygame
or Pillow, so both the offline renderer and the viewer can use it.

Data Contract:
---------------
- Inputs: (height, width) arrays indexed [row, col], as stored on the Mesh.
- Outputs: (height, width, 4) uint8 RGBA arrays, one color per hex.
- Side Effects: None.
================================================================================
"""
import numpy as np

from . import config as DEFAULTS

# --- Debug Palette (Rule 1) ---
COLOR_LAND = (255, 181, 112)
COLOR_WATER = (82, 163, 255)
COLOR_SEED = (97, 255, 100)
COLOR_BORDER = (255, 112, 122)
COLOR_INTERIOR = (40, 40, 48)

ELEVATION_STEPS = 256


def create_elevation_lut() -> np.ndarray:
    """
    Creates a 256-entry RGBA LUT over elevations [-1, 1]. Land is brown and
    water blue; alpha grows with distance from sea level, from 50% at zero
    to fully opaque at either extreme.
    """
    e = np.linspace(-1.0, 1.0, ELEVATION_STEPS)
    lut = np.zeros((ELEVATION_STEPS, 4), dtype=np.uint8)
    land = e > 0.0
    lut[land, :3] = COLOR_LAND
    lut[~land, :3] = COLOR_WATER
    lut[:, 3] = ((np.abs(e) * 0.5 + 0.5) * 255).astype(np.uint8)
    return lut


def get_elevation_color_array(elevation_values: np.ndarray, elevation_lut: np.ndarray,
                              bound: float = DEFAULTS.DEFAULT_ELEVATION_BOUND) -> np.ndarray:
    """Converts elevations in [-bound, bound] to RGBA through a pre-computed LUT."""
    bound = bound or max(float(np.max(np.abs(elevation_values))), 1.0)
    normalized = np.clip(elevation_values / bound, -1.0, 1.0)
    indices = np.round((normalized + 1.0) * 0.5 * (ELEVATION_STEPS - 1)).astype(np.intp)
    return elevation_lut[indices]


def elevation_display_scale(elevation_values: np.ndarray,
                            percentile=DEFAULTS.ELEVATION_DISPLAY_PERCENTILE) -> float:
    """
    Returns the |elevation| that the elevation view treats as full color.

    A high percentile keeps a few tall seed hexes from washing out the rest
    of the field. Falls back to 1.0 for a flat field.
    """
    magnitudes = np.abs(elevation_values)
    if percentile is None:
        scale = float(np.max(magnitudes))
    else:
        scale = float(np.percentile(magnitudes, percentile))
    if scale <= 0.0:
        scale = float(np.max(magnitudes))
    return scale if scale > 0.0 else 1.0


def get_plate_color_array(plate_id_map: np.ndarray, num_plates: int, seed: int) -> np.ndarray:
    """Generates a color array where each plate has a unique, deterministic color."""
    # 1. Create a deterministic but random color for each plate ID.
    rng = np.random.default_rng(seed)
    color_palette = np.full((num_plates, 4), 255, dtype=np.uint8)
    color_palette[:, :3] = rng.integers(0, 256, size=(num_plates, 3), dtype=np.uint8)

    # 2. Use the plate_id_map as indices to look up colors from the palette.
    return color_palette[plate_id_map]


def get_border_color_array(border_mask: np.ndarray) -> np.ndarray:
    """Border hexes in red over a dark interior."""
    colors = np.empty(border_mask.shape + (4,), dtype=np.uint8)
    colors[...] = COLOR_INTERIOR + (255,)
    colors[border_mask] = COLOR_BORDER + (255,)
    return colors


def paint_seeds(colors: np.ndarray, seeds: list) -> np.ndarray:
    """Marks every seed hex in green, in place. Returns the same array."""
    for seed in seeds:
        colors[seed[1], seed[0]] = COLOR_SEED + (255,)
    return colors
