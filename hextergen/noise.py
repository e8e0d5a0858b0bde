# hextergen/noise.py

"""
================================================================================
NOISE GENERATION UTILITIES
================================================================================
This module provides 3D Perlin noise and the cylindrical projection used to
sample it, so the base elevation texture wraps seamlessly around the grid's
horizontal seam. It is designed to be a pure, stateless utility.

Data Contract:
---------------
- Inputs:
    - p: A pre-shuffled NumPy permutation table (int array of length 512).
    - x, y, z: NumPy arrays of coordinates, all of the same 2D shape.
    - octaves, persistence, lacunarity: Standard noise parameters.
- Outputs:
    - A NumPy array of noise values, normalized to roughly [-1, 1].
- Side Effects: None.
- Invariants: The shape of the output array matches the shape of the inputs.
================================================================================
"""

import numpy as np
from numba import njit


def make_permutation_table(seed: int) -> np.ndarray:
    """Builds the doubled 512-entry permutation table for a seed."""
    p = np.arange(256, dtype=np.int64)
    rng = np.random.default_rng(seed)
    rng.shuffle(p)
    return np.stack([p, p]).flatten()


def cylinder_coordinates(grid, scale: float = 1.0) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Projects every hex of the grid onto a cylinder.

    Columns sit on a circle whose circumference equals the grid's horizontal
    period in unit hex space (sqrt(3) per column), rows run along the axis at
    1.5 units per row, matching the hex centre spacing. Coordinates are then
    divided by the feature scale.

    Returns:
        (x, y, z): Arrays of shape (height, width).
    """
    width, height = grid.width, grid.height
    circumference = np.sqrt(3.0) * width
    radius = circumference / (2.0 * np.pi)
    rows, cols = np.mgrid[0:height, 0:width]
    # Odd rows are offset by half a hex, as in the grid's own layout.
    angle = 2.0 * np.pi * (cols + 0.5 * (rows % 2)) / width
    x = radius * np.cos(angle) / scale
    y = radius * np.sin(angle) / scale
    z = 1.5 * rows / scale
    return x, y, z


@njit
def _lerp(a, b, x):
    "Linear interpolation."
    return a + x * (b - a)


@njit
def _fade(t):
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (t * (t * 6 - 15) + 10)


@njit
def _gradient(h, x, y, z):
    """Dot product between one of 12 cube-edge gradients and the offset."""
    h = h & 15
    u = x if h < 8 else y
    if h < 4:
        v = y
    elif h == 12 or h == 14:
        v = x
    else:
        v = z
    return (u if (h & 1) == 0 else -u) + (v if (h & 2) == 0 else -v)


@njit
def perlin_noise_3d(p, x, y, z, octaves=1, persistence=0.5, lacunarity=2.0):
    """
    Generate 3D Perlin noise using a pre-computed permutation table.
    JIT-compiled with Numba; explicit loops compile to efficient machine code.
    The octave sum is divided by the total amplitude, keeping the result in
    roughly [-1, 1] regardless of the octave count.
    """
    rows, cols = x.shape
    total_noise = np.zeros((rows, cols))

    for i in range(rows):
        for j in range(cols):
            noise_val = 0.0
            amplitude = 1.0
            frequency = 1.0
            max_amplitude = 0.0

            for _ in range(octaves):
                xs = x[i, j] * frequency
                ys = y[i, j] * frequency
                zs = z[i, j] * frequency

                xi = int(np.floor(xs))
                yi = int(np.floor(ys))
                zi = int(np.floor(zs))

                xf = xs - xi
                yf = ys - yi
                zf = zs - zi

                u = _fade(xf)
                v = _fade(yf)
                w = _fade(zf)

                px = xi % 256
                py = yi % 256
                pz = zi % 256

                a = p[px] + py
                aa = p[a] + pz
                ab = p[a + 1] + pz
                b = p[px + 1] + py
                ba = p[b] + pz
                bb = p[b + 1] + pz

                x1 = _lerp(_gradient(p[aa], xf, yf, zf), _gradient(p[ba], xf - 1, yf, zf), u)
                x2 = _lerp(_gradient(p[ab], xf, yf - 1, zf), _gradient(p[bb], xf - 1, yf - 1, zf), u)
                y1 = _lerp(x1, x2, v)

                x1 = _lerp(_gradient(p[aa + 1], xf, yf, zf - 1), _gradient(p[ba + 1], xf - 1, yf, zf - 1), u)
                x2 = _lerp(_gradient(p[ab + 1], xf, yf - 1, zf - 1), _gradient(p[bb + 1], xf - 1, yf - 1, zf - 1), u)
                y2 = _lerp(x1, x2, v)

                noise_val += _lerp(y1, y2, w) * amplitude
                max_amplitude += amplitude
                amplitude *= persistence
                frequency *= lacunarity

            total_noise[i, j] = noise_val / max_amplitude if max_amplitude > 0 else 0.0

    return total_noise
