# hextergen/tectonics.py

"""
================================================================================
TECTONIC PLATE SIMULATION
================================================================================
This module grows tectonic plates over the cylindrical hex mesh and works out
how neighbouring plates interact. It is a deliberately simplified abstraction
(Rule 8): plates have a movement angle and a size, nothing more, which is
enough to decide where the terrain should rise or sink.

Pipeline:
    place_seeds -> grow_plates -> find_borders -> classify_interactions

Data Contract:
---------------
- Inputs:
    - A Mesh (and its HexGrid), a target plate count, a minimum seed spacing.
    - A numpy.random.Generator threaded through every randomized step.
- Outputs:
    - A list of Plate objects, indexed by plate id.
    - mesh.plate_ids filled with the owning plate id of every hex.
- Side Effects: grow_plates writes mesh.plate_ids.
- Invariants:
    - Every hex belongs to exactly one plate once growth completes.
    - Given the same generator state, every stage is deterministic.
================================================================================
"""
import math
from enum import Enum

import numpy as np

from . import config as DEFAULTS
from .exceptions import NoSeeds, SeedPlacementExhausted
from .hexgrid import POLE, HexCoordinate, HexGrid, normalize_angle
from .mesh import UNASSIGNED, Mesh
from .queues import FIROQueue


class Interaction(Enum):
    CONVERGENT = "convergent"
    DIVERGENT = "divergent"


class Plate:
    """
    A connected region of hexes grown from one seed.

    Attributes:
        plate_id (int): Index of the plate in the plate list and value stored
            in mesh.plate_ids.
        seed (HexCoordinate): The origin hex.
        angle (float): Movement direction in degrees, [0, 360).
        members (list): Member coordinates in the order they were claimed.
        borders (dict): Opposing identity (plate id or POLE) -> list of member
            coordinates touching it.
        interactions (dict): Opposing identity -> Interaction.
    """

    def __init__(self, plate_id: int, seed: HexCoordinate, angle: float):
        self.plate_id = plate_id
        self.seed = seed
        self.angle = angle
        self.members = []
        self.borders = {}
        self.interactions = {}

    @property
    def magnitude(self) -> int:
        return len(self.members)

    def border_hexes(self) -> list:
        """Distinct border coordinates, in first-seen order."""
        seen = {}
        for coords in self.borders.values():
            for coord in coords:
                seen.setdefault(coord, None)
        return list(seen)

    def __repr__(self):
        return (f"Plate(id={self.plate_id}, seed={tuple(self.seed)}, "
                f"angle={self.angle:.1f}, magnitude={self.magnitude})")


def auto_min_distance(width: int, height: int, num_plates: int) -> float:
    """Seed spacing derived from the grid diagonal, used when none is configured."""
    if num_plates <= 0:
        raise NoSeeds("Cannot derive a seed spacing for zero plates")
    diagonal = math.sqrt(width ** 2 + height ** 2)
    return diagonal / num_plates * DEFAULTS.SEED_SPACING_FACTOR


def place_seeds(
    grid: HexGrid,
    count: int,
    min_distance: float,
    rng: np.random.Generator,
    max_attempts: int = None,
    pole_margin: int = 0,
) -> list:
    """
    Picks plate origins by rejection sampling: draw a random hex, keep it if
    it is at least min_distance away from every seed kept so far.

    Args:
        grid (HexGrid): The grid to place seeds on.
        count (int): Number of seeds wanted.
        min_distance (float): Minimum hex distance between any two seeds.
        rng (np.random.Generator): The shared random source.
        max_attempts (int, optional): Cap on total draws. Defaults to
            count * SEED_ATTEMPTS_PER_PLATE.
        pole_margin (int): Rows next to each pole that are never drawn.

    Returns:
        list[HexCoordinate]: The seeds, in acceptance order.

    Raises:
        NoSeeds: If count is not positive.
        SeedPlacementExhausted: If the attempts run out first.
    """
    if count <= 0:
        raise NoSeeds(f"Seed placement needs a positive plate count, got {count}")
    if pole_margin < 0 or grid.height - 2 * pole_margin <= 0:
        raise ValueError(f"Pole margin {pole_margin} leaves no rows on a grid of height {grid.height}")
    if max_attempts is None:
        max_attempts = count * DEFAULTS.SEED_ATTEMPTS_PER_PLATE

    seeds = []
    attempts = 0
    while len(seeds) < count:
        if attempts >= max_attempts:
            raise SeedPlacementExhausted(count, len(seeds), min_distance, attempts)
        attempts += 1
        col = int(rng.integers(0, grid.width))
        row = int(rng.integers(pole_margin, grid.height - pole_margin))
        candidate = HexCoordinate(col, row)
        if candidate in seeds:
            continue
        if all(grid.distance(candidate, seed) >= min_distance for seed in seeds):
            seeds.append(candidate)
    return seeds


def grow_plates(mesh: Mesh, seeds: list, rng: np.random.Generator) -> list:
    """
    Expands every seed into a plate with a shared first-in random-out queue.

    Seeds are claimed up front and draw their movement angle on creation.
    Each dequeued (plate, hex) candidate claims the hex only if it is still
    unassigned and then offers its unassigned neighbours to the same plate,
    so growth order, not a target size, decides how big each plate ends up.

    Returns:
        list[Plate]: Plates indexed by plate id.
    """
    if not seeds:
        raise NoSeeds("Plate growth needs at least one seed")
    if len(set(seeds)) != len(seeds):
        raise ValueError("Seeds must be distinct")
    for seed in seeds:
        mesh.grid.check_bounds(seed)

    grid = mesh.grid
    plate_ids = mesh.plate_ids
    plate_ids.fill(UNASSIGNED)
    queue = FIROQueue(rng)
    plates = []

    def claim(plate: Plate, coord: HexCoordinate):
        plate_ids[coord.row, coord.col] = plate.plate_id
        plate.members.append(coord)
        for neighbor in grid.real_neighbors(coord):
            if plate_ids[neighbor.row, neighbor.col] == UNASSIGNED:
                queue.enqueue((plate.plate_id, neighbor))

    for plate_id, seed in enumerate(seeds):
        seed = HexCoordinate(*seed)
        plate = Plate(plate_id, seed, float(rng.uniform(0.0, 360.0)))
        plates.append(plate)
        claim(plate, seed)

    while queue:
        plate_id, coord = queue.dequeue()
        if plate_ids[coord.row, coord.col] != UNASSIGNED:
            continue
        claim(plates[plate_id], coord)

    return plates


def find_borders(mesh: Mesh, plates: list) -> None:
    """
    Fills each plate's border map. A member hex is tagged once per distinct
    opposing identity it touches: a foreign plate id or POLE.
    """
    grid = mesh.grid
    plate_ids = mesh.plate_ids
    for plate in plates:
        plate.borders = {}
        seen = set()
        for coord in plate.members:
            for neighbor in grid.neighbors(coord):
                if neighbor is POLE:
                    identity = POLE
                else:
                    identity = int(plate_ids[neighbor.row, neighbor.col])
                    if identity == plate.plate_id:
                        continue
                if (coord, identity) in seen:
                    continue
                seen.add((coord, identity))
                plate.borders.setdefault(identity, []).append(coord)


def _is_toward(rectified: float) -> bool:
    return abs(rectified) < 90.0


def rectified_angles(grid: HexGrid, plate_a: Plate, plate_b: Plate) -> tuple[float, float]:
    """
    Re-expresses both movement angles in the frame of the pair: 0 means
    heading straight at the other plate, +-180 straight away from it.
    """
    bearing = grid.bearing(plate_a.seed, plate_b.seed)
    rect_a = normalize_angle(plate_a.angle - bearing)
    rect_b = normalize_angle(plate_b.angle - (bearing + 180.0))
    return rect_a, rect_b


def classify_interaction(grid: HexGrid, plate_a: Plate, plate_b) -> Interaction:
    """
    Decides whether two adjacent plates converge or diverge. plate_b may be
    POLE, which always diverges.

    When one plate heads toward the other and the other heads away, the larger
    plate's intent wins. A tie goes to plate_b, so only a tie can give a
    different answer when the plates are swapped.
    """
    if plate_b is POLE:
        return Interaction.DIVERGENT

    rect_a, rect_b = rectified_angles(grid, plate_a, plate_b)
    a_toward = _is_toward(rect_a)
    b_toward = _is_toward(rect_b)

    if a_toward and b_toward:
        return Interaction.CONVERGENT
    if not a_toward and not b_toward:
        return Interaction.DIVERGENT
    if a_toward:
        return Interaction.CONVERGENT if plate_a.magnitude > plate_b.magnitude else Interaction.DIVERGENT
    return Interaction.DIVERGENT if plate_a.magnitude > plate_b.magnitude else Interaction.CONVERGENT


def classify_interactions(mesh: Mesh, plates: list) -> None:
    """Fills each plate's interaction map for every identity in its border map."""
    for plate in plates:
        plate.interactions = {}
        for identity in plate.borders:
            opposing = POLE if identity is POLE else plates[identity]
            plate.interactions[identity] = classify_interaction(mesh.grid, plate, opposing)
