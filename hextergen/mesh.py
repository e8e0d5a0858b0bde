# hextergen/mesh.py

"""
================================================================================
HEX MESH
================================================================================
Dense per-hex storage for the simulation. Elevation and plate ownership live
in two NumPy arrays of shape (height, width), indexed [row, col], so every hex
record is owned by the mesh and plates refer to hexes only by coordinate.

Data Contract:
---------------
- Inputs (on initialization): a HexGrid.
- Outputs: read-only Hex records and bulk array access.
- Side Effects: PlateGrower writes plate_ids; ElevationShaper writes elevation.
- Invariants: the arrays are never resized; UNASSIGNED (-1) marks a hex with
  no plate yet.
================================================================================
"""
from typing import Callable, Iterator, NamedTuple

import numpy as np

from .hexgrid import POLE, HexCoordinate, HexGrid

UNASSIGNED = -1


class Hex(NamedTuple):
    """A read-only snapshot of one cell."""
    coord: HexCoordinate
    elevation: float
    plate_id: int
    is_border: bool


class Mesh:
    """Fixed-size hex mesh over a cylindrical grid."""

    def __init__(self, grid: HexGrid):
        self.grid = grid
        self.elevation = np.zeros((grid.height, grid.width), dtype=np.float64)
        self.plate_ids = np.full((grid.height, grid.width), UNASSIGNED, dtype=np.int32)

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def shape(self) -> tuple:
        return self.elevation.shape

    def plate_of(self, coord) -> int:
        self.grid.check_bounds(coord)
        return int(self.plate_ids[coord[1], coord[0]])

    def elevation_at(self, coord) -> float:
        self.grid.check_bounds(coord)
        return float(self.elevation[coord[1], coord[0]])

    def is_border(self, coord) -> bool:
        """True when a neighbour is a pole or belongs to another plate."""
        plate_id = self.plate_of(coord)
        for neighbor in self.grid.neighbors(coord):
            if neighbor is POLE or self.plate_ids[neighbor.row, neighbor.col] != plate_id:
                return True
        return False

    def hex(self, coord) -> Hex:
        self.grid.check_bounds(coord)
        coord = HexCoordinate(*coord)
        return Hex(coord, self.elevation_at(coord), self.plate_of(coord), self.is_border(coord))

    def hexes(self) -> Iterator[Hex]:
        for coord in self.grid.coordinates():
            yield self.hex(coord)

    def border_mask(self) -> np.ndarray:
        """Boolean (height, width) array of border hexes, derived on demand."""
        mask = np.zeros(self.shape, dtype=bool)
        for coord in self.grid.coordinates():
            mask[coord.row, coord.col] = self.is_border(coord)
        return mask

    def fill_elevation(self, elevation_seed: Callable[[HexCoordinate], float]) -> None:
        """Initialises every elevation from a base elevation provider."""
        for coord in self.grid.coordinates():
            self.elevation[coord.row, coord.col] = float(elevation_seed(coord))
