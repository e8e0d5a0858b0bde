# hextergen/slopes.py

"""
================================================================================
SLOPE FINDING
================================================================================
A slope is the path along which a border interaction is carried into a plate:
an ordered run of hexes from a border hex (index 0) to the plate's seed
(index n). Paths are found with A* restricted to the plate's own hexes.
Neighbour expansion order is shuffled so equally short paths are chosen at
random instead of always hugging the same straight line.

Data Contract:
---------------
- Inputs: a Mesh with plate ids, plates with borders and interactions, and
  the shared numpy.random.Generator.
- Outputs: Slope objects in a fixed order (plate id, border identity, border
  hex), plus the list of slopes that could not be built.
- Side Effects: Logs a warning for every skipped slope.
================================================================================
"""
import heapq
import logging

import numpy as np

from .exceptions import UnreachableSeed
from .hexgrid import HexCoordinate
from .mesh import Mesh

logger = logging.getLogger(__name__)


class Slope:
    """Path from a border hex to its plate's seed, tagged with the interaction."""

    def __init__(self, plate_id: int, opposing, interaction, hexes: list):
        self.plate_id = plate_id
        self.opposing = opposing
        self.interaction = interaction
        self.hexes = hexes

    @property
    def border(self) -> HexCoordinate:
        return self.hexes[0]

    @property
    def seed(self) -> HexCoordinate:
        return self.hexes[-1]

    def __len__(self):
        return len(self.hexes)

    def __repr__(self):
        return (f"Slope(plate={self.plate_id}, opposing={self.opposing!r}, "
                f"{self.interaction.value}, {len(self.hexes)} hexes)")


def find_slope(mesh: Mesh, plate, start, rng: np.random.Generator) -> list:
    """
    Shortest path from start to the plate seed over the plate's own hexes.

    Each step costs one hex; the heuristic is the hex distance to the seed,
    which never overestimates, so the returned path is a shortest one.

    Returns:
        list[HexCoordinate]: start ... seed, consecutive entries adjacent.

    Raises:
        UnreachableSeed: If the seed cannot be reached without leaving the plate.
    """
    grid = mesh.grid
    plate_ids = mesh.plate_ids
    goal = plate.seed
    start = HexCoordinate(*start)
    if mesh.plate_of(start) != plate.plate_id:
        raise UnreachableSeed(plate.plate_id, start, goal)

    open_set = [(grid.distance(start, goal), 0, start)]
    came_from = {}
    g_score = {start: 0}
    closed = set()
    counter = 1

    while open_set:
        _, _, current = heapq.heappop(open_set)
        if current in closed:
            continue
        closed.add(current)
        if current == goal:
            path = [current]
            while current in came_from:
                current = came_from[current]
                path.append(current)
            path.reverse()
            return path

        neighbors = grid.real_neighbors(current)
        order = rng.permutation(len(neighbors))
        for index in order:
            neighbor = neighbors[index]
            if neighbor in closed or plate_ids[neighbor.row, neighbor.col] != plate.plate_id:
                continue
            tentative = g_score[current] + 1
            if tentative < g_score.get(neighbor, float("inf")):
                came_from[neighbor] = current
                g_score[neighbor] = tentative
                heapq.heappush(open_set, (tentative + grid.distance(neighbor, goal), counter, neighbor))
                counter += 1

    raise UnreachableSeed(plate.plate_id, start, goal)


def find_slopes(mesh: Mesh, plates: list, rng: np.random.Generator, log: logging.Logger = None) -> tuple[list, list]:
    """
    Builds one slope per (border hex, opposing identity) pair of every plate.

    A border hex touching several identities shares one path between them.
    Unreachable seeds are logged and skipped rather than aborting the run.

    Returns:
        tuple[list[Slope], list[UnreachableSeed]]: slopes and skipped errors.
    """
    log = log or logger
    slopes = []
    skipped = []
    for plate in plates:
        paths = {}
        for identity, coords in plate.borders.items():
            interaction = plate.interactions[identity]
            for coord in coords:
                if coord not in paths:
                    try:
                        paths[coord] = find_slope(mesh, plate, coord, rng)
                    except UnreachableSeed as e:
                        log.warning(f"Skipping slope: {e}")
                        paths[coord] = None
                        skipped.append(e)
                if paths[coord] is not None:
                    slopes.append(Slope(plate.plate_id, identity, interaction, paths[coord]))
    return slopes, skipped
