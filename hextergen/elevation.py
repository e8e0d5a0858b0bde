# hextergen/elevation.py

"""
================================================================================
ELEVATION SHAPING
================================================================================
Turns plate interactions into terrain. Every slope carries its interaction
from the border hex (index 0) down to the plate seed (index n); each hex on
the way is nudged up for a convergent border or down for a divergent one,
harder the further along the slope it sits, then scaled by a coefficient.

    effect(i, n)  = +-(0.01 + i / n)          (linear mode)
    new_elevation = (old + effect * strength) * coefficient

The base elevation the slopes act on comes from an injectable provider; the
default one samples cylindrical Perlin noise so the field wraps with the grid.

Data Contract:
---------------
- Inputs: a Mesh with elevations initialised, the ordered slopes from
  find_slopes, strength, coefficient and shaping mode.
- Outputs: mesh.elevation updated in place.
- Side Effects: bound_elevation logs any rescale it applies.
- Invariants: elevations stay finite; with a bound configured the largest
  absolute elevation never exceeds it.
================================================================================
"""
import logging
import math

import numpy as np

from . import config as DEFAULTS
from .exceptions import ElevationDiverged
from .hexgrid import HexGrid
from .mesh import Mesh
from .noise import cylinder_coordinates, make_permutation_table, perlin_noise_3d
from .tectonics import Interaction

logger = logging.getLogger(__name__)


def _signed(t: float, interaction: Interaction) -> float:
    magnitude = DEFAULTS.DISTANCE_EFFECT_OFFSET + t
    return magnitude if interaction is Interaction.CONVERGENT else -magnitude


def distance_effect(i: int, n: int, interaction: Interaction) -> float:
    """Linear effect for the hex at index i of a slope whose last index is n."""
    t = i / n if n > 0 else 0.0
    return _signed(t, interaction)


def sigmoid_distance_effect(i: int, n: int, interaction: Interaction,
                            steepness: float = DEFAULTS.DEFAULT_SIGMOID_STEEPNESS) -> float:
    """Like distance_effect, but t is passed through a logistic curve centred at 0.5."""
    t = i / n if n > 0 else 0.0
    t = 1.0 / (1.0 + math.exp(-steepness * (t - 0.5)))
    return _signed(t, interaction)


def shaped_elevation(old: float, effect: float, strength: float, coefficient: float) -> float:
    return (old + effect * strength) * coefficient


def shape_elevation(
    mesh: Mesh,
    slopes: list,
    strength: float = DEFAULTS.DEFAULT_ELEVATION_STRENGTH,
    coefficient: float = DEFAULTS.DEFAULT_ELEVATION_COEFFICIENT,
    mode: str = DEFAULTS.DEFAULT_ELEVATION_MODE,
    sigmoid_steepness: float = DEFAULTS.DEFAULT_SIGMOID_STEEPNESS,
) -> None:
    """
    Applies every slope to the mesh, in slope order.

    A hex that lies on several slopes is updated once per slope, so the
    order of the slope list is part of the result.

    Raises:
        ValueError: If mode is not one of ELEVATION_MODES.
        ElevationDiverged: If an update produces a non-finite elevation.
    """
    if mode not in DEFAULTS.ELEVATION_MODES:
        raise ValueError(f"Unknown elevation mode '{mode}', expected one of {DEFAULTS.ELEVATION_MODES}")

    elevation = mesh.elevation
    for slope in slopes:
        n = len(slope.hexes) - 1
        for i, coord in enumerate(slope.hexes):
            if mode == "sigmoid":
                effect = sigmoid_distance_effect(i, n, slope.interaction, sigmoid_steepness)
            else:
                effect = distance_effect(i, n, slope.interaction)
            value = shaped_elevation(float(elevation[coord.row, coord.col]), effect, strength, coefficient)
            if not math.isfinite(value):
                raise ElevationDiverged(
                    f"Elevation at {tuple(coord)} became {value} on slope {slope!r}; "
                    f"coefficient {coefficient} is too large for this grid"
                )
            elevation[coord.row, coord.col] = value


def bound_elevation(mesh: Mesh, bound=DEFAULTS.DEFAULT_ELEVATION_BOUND, log: logging.Logger = None) -> float:
    """
    Rescales the whole field so max |elevation| <= bound. Relative shape,
    sign and zero are preserved. A bound of None disables the step.

    Returns:
        float: The factor applied (1.0 when nothing was rescaled).
    """
    log = log or logger
    if bound is None:
        return 1.0
    if bound <= 0:
        raise ValueError(f"Elevation bound must be positive, got {bound}")
    peak = float(np.max(np.abs(mesh.elevation))) if mesh.elevation.size else 0.0
    if peak <= bound:
        return 1.0
    factor = bound / peak
    mesh.elevation *= factor
    log.info(f"Elevation peak {peak:.4f} exceeds bound {bound}; rescaled field by {factor:.6f}")
    return factor


def noise_elevation_field(
    grid: HexGrid,
    seed: int,
    scale: float = DEFAULTS.DEFAULT_NOISE_SCALE,
    octaves: int = DEFAULTS.DEFAULT_NOISE_OCTAVES,
    persistence: float = DEFAULTS.DEFAULT_NOISE_PERSISTENCE,
    lacunarity: float = DEFAULTS.DEFAULT_NOISE_LACUNARITY,
) -> np.ndarray:
    """(height, width) base elevation in about [-1, 1], seamless across the wrap."""
    p = make_permutation_table(seed)
    x, y, z = cylinder_coordinates(grid, scale)
    return perlin_noise_3d(p, x, y, z, octaves, persistence, lacunarity)


def field_elevation_seed(field: np.ndarray):
    """Wraps a (height, width) array as an elevation_seed(coord) -> float callable."""
    def elevation_seed(coord) -> float:
        return float(field[coord[1], coord[0]])
    return elevation_seed
