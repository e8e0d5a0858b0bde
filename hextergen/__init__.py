# hextergen/__init__.py

# Public API of the hextergen package.

from .exceptions import (
    ElevationDiverged,
    HextergenError,
    NoSeeds,
    OutOfBounds,
    SeedPlacementExhausted,
    UnreachableSeed,
)
from .generator import HexWorld, HexWorldGenerator
from .hexgrid import POLE, HexCoordinate, HexGrid
from .mesh import Hex, Mesh
from .slopes import Slope
from .tectonics import Interaction, Plate

__all__ = [
    "HexWorldGenerator", "HexWorld",
    "HexGrid", "HexCoordinate", "POLE",
    "Mesh", "Hex", "Plate", "Interaction", "Slope",
    "HextergenError", "OutOfBounds", "SeedPlacementExhausted", "NoSeeds",
    "UnreachableSeed", "ElevationDiverged",
]
