# hextergen/hexgrid.py

"""
================================================================================
CYLINDRICAL HEX GRID
================================================================================
Coordinate addressing and neighbour/distance primitives for a grid of
pointy-top hexes in "odd-r" offset layout (odd rows are shoved right by half
a hex). The grid wraps horizontally, so it is a cylinder: column arithmetic is
modulo the width. Rows do not wrap; anything above row 0 or below the last
row is a pole, reported as the POLE sentinel rather than a coordinate.

Data Contract:
---------------
- Inputs: HexCoordinate values inside [0, width) x [0, height).
- Outputs: neighbours, integer hex distances, unit-space centres, bearings.
- Side Effects: None. The grid is stateless apart from its dimensions.
- Errors: OutOfBounds for coordinates outside the grid.
================================================================================
"""

import math
from enum import Enum
from typing import Iterator, NamedTuple, Union

from .exceptions import OutOfBounds


class HexCoordinate(NamedTuple):
    col: int
    row: int


class Pole(Enum):
    """Sentinel for the missing cells beyond the first and last rows."""
    POLE = "pole"

    def __repr__(self):
        return "POLE"


POLE = Pole.POLE

Neighbor = Union[HexCoordinate, Pole]

# (dcol, drow) per direction, indexed by row parity.
_EVEN_ROW_DIRS = ((1, 0), (0, -1), (-1, -1), (-1, 0), (-1, 1), (0, 1))
_ODD_ROW_DIRS = ((1, 0), (1, -1), (0, -1), (-1, 0), (0, 1), (1, 1))

SQRT3 = math.sqrt(3.0)


def _to_axial(col: int, row: int) -> tuple[int, int]:
    return col - (row - (row & 1)) // 2, row


def _hex_distance(dq: int, dr: int) -> int:
    return (abs(dq) + abs(dq + dr) + abs(dr)) // 2


def normalize_angle(degrees: float) -> float:
    """Normalizes an angle into (-180, 180]."""
    angle = degrees % 360.0
    if angle > 180.0:
        angle -= 360.0
    return angle


class HexGrid:
    """A width x height hex grid wrapped into a cylinder."""

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Hex grid dimensions must be positive, got {width}x{height}")
        self._width = int(width)
        self._height = int(height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> int:
        return self._width * self._height

    @property
    def period(self) -> float:
        """Horizontal circumference of the cylinder in unit hex space."""
        return SQRT3 * self._width

    def __repr__(self):
        return f"HexGrid({self._width}x{self._height})"

    def contains(self, coord) -> bool:
        col, row = coord
        return 0 <= col < self._width and 0 <= row < self._height

    def check_bounds(self, coord) -> None:
        if not self.contains(coord):
            raise OutOfBounds(coord, self._width, self._height)

    def coordinates(self) -> Iterator[HexCoordinate]:
        """Yields every coordinate, row by row."""
        for row in range(self._height):
            for col in range(self._width):
                yield HexCoordinate(col, row)

    def neighbors(self, coord) -> list[Neighbor]:
        """
        Returns the six neighbours of a hex in direction order. Columns wrap
        around the cylinder; a step across the first or last row yields POLE.
        """
        self.check_bounds(coord)
        col, row = coord
        dirs = _ODD_ROW_DIRS if row & 1 else _EVEN_ROW_DIRS
        result: list[Neighbor] = []
        for dcol, drow in dirs:
            nrow = row + drow
            if nrow < 0 or nrow >= self._height:
                result.append(POLE)
            else:
                result.append(HexCoordinate((col + dcol) % self._width, nrow))
        return result

    def real_neighbors(self, coord) -> list[HexCoordinate]:
        return [n for n in self.neighbors(coord) if n is not POLE]

    def distance(self, a, b) -> int:
        """
        Hex distance between two coordinates, taking the shorter of the direct
        and the wrapped-around horizontal path.
        """
        self.check_bounds(a)
        self.check_bounds(b)
        aq, ar = _to_axial(a[0], a[1])
        best = None
        for shift in (0, -self._width, self._width):
            bq, br = _to_axial(b[0] + shift, b[1])
            d = _hex_distance(bq - aq, br - ar)
            if best is None or d < best:
                best = d
        return best

    def center(self, coord) -> tuple[float, float]:
        """Centre of a hex in unit hex-size space (circumradius 1)."""
        col, row = coord
        return SQRT3 * (col + 0.5 * (row & 1)), 1.5 * row

    def bearing(self, a, b) -> float:
        """
        Angle in degrees [0, 360) from hex a towards hex b, 0 = east and
        90 = north (towards row 0). The horizontal offset takes the shorter
        way around the cylinder.
        """
        self.check_bounds(a)
        self.check_bounds(b)
        ax, ay = self.center(a)
        bx, by = self.center(b)
        dx = bx - ax
        half = self.period / 2.0
        if dx > half:
            dx -= self.period
        elif dx < -half:
            dx += self.period
        dy = by - ay
        return math.degrees(math.atan2(-dy, dx)) % 360.0
