"""
Test suite for slope finding.

Tests cover:
- Path validity (border start, seed end, adjacent steps, own plate only)
- Shortest-path length
- One slope per (border hex, identity) pair with shared paths
- Unreachable seeds raised by find_slope, skipped and logged by find_slopes
- Determinism
"""

import logging

import numpy as np
import pytest

from hextergen.exceptions import UnreachableSeed
from hextergen.hexgrid import HexCoordinate, HexGrid
from hextergen.mesh import Mesh
from hextergen.slopes import Slope, find_slope, find_slopes
from hextergen.tectonics import (
    Interaction,
    Plate,
    classify_interactions,
    find_borders,
    grow_plates,
    place_seeds,
)


def _analysed(seed=3, width=14, height=10, count=4):
    grid = HexGrid(width, height)
    mesh = Mesh(grid)
    rng = np.random.default_rng(seed)
    seeds = place_seeds(grid, count, 3, rng)
    plates = grow_plates(mesh, seeds, rng)
    find_borders(mesh, plates)
    classify_interactions(mesh, plates)
    return mesh, plates, rng


def _walled_mesh():
    """Plate 0 owns the seed (0, 0) and an island at (5, 2) cut off by plate 1."""
    grid = HexGrid(10, 4)
    mesh = Mesh(grid)
    mesh.plate_ids.fill(1)
    mesh.plate_ids[0, 0] = 0
    mesh.plate_ids[2, 5] = 0
    plate = Plate(0, HexCoordinate(0, 0), 0.0)
    plate.members = [HexCoordinate(0, 0), HexCoordinate(5, 2)]
    return mesh, plate


class TestFindSlope:
    """Test single-path A* search."""

    def test_path_runs_from_start_to_seed(self):
        mesh, plates, rng = _analysed()
        plate = plates[0]
        start = plate.border_hexes()[0]
        path = find_slope(mesh, plate, start, rng)
        assert path[0] == start
        assert path[-1] == plate.seed

    def test_path_is_shortest_when_unobstructed(self, rng):
        grid = HexGrid(12, 8)
        mesh = Mesh(grid)
        mesh.plate_ids.fill(0)
        plate = Plate(0, HexCoordinate(6, 4), 0.0)
        start = HexCoordinate(1, 1)
        path = find_slope(mesh, plate, start, rng)
        assert len(path) - 1 == grid.distance(start, plate.seed)

    def test_path_crosses_seam_when_shorter(self, rng):
        grid = HexGrid(12, 4)
        mesh = Mesh(grid)
        mesh.plate_ids.fill(0)
        plate = Plate(0, HexCoordinate(11, 1), 0.0)
        path = find_slope(mesh, plate, HexCoordinate(1, 1), rng)
        assert len(path) == 3

    def test_seed_start_gives_single_hex(self, rng):
        mesh, plate = _walled_mesh()
        assert find_slope(mesh, plate, plate.seed, rng) == [plate.seed]

    def test_unreachable_seed_raises(self, rng):
        mesh, plate = _walled_mesh()
        with pytest.raises(UnreachableSeed) as excinfo:
            find_slope(mesh, plate, HexCoordinate(5, 2), rng)
        assert excinfo.value.plate_id == 0

    def test_start_outside_plate_raises(self, rng):
        mesh, plate = _walled_mesh()
        with pytest.raises(UnreachableSeed):
            find_slope(mesh, plate, HexCoordinate(3, 3), rng)


class TestFindSlopes:
    """Test slope extraction over whole plates."""

    def test_every_slope_is_valid(self):
        mesh, plates, rng = _analysed()
        slopes, skipped = find_slopes(mesh, plates, rng)
        grid = mesh.grid
        assert not skipped
        for slope in slopes:
            plate = plates[slope.plate_id]
            assert slope.border in plate.borders[slope.opposing]
            assert slope.seed == plate.seed
            assert slope.interaction is plate.interactions[slope.opposing]
            for coord in slope.hexes:
                assert mesh.plate_of(coord) == slope.plate_id
            for a, b in zip(slope.hexes, slope.hexes[1:]):
                assert grid.distance(a, b) == 1

    def test_one_slope_per_border_pair(self):
        mesh, plates, rng = _analysed()
        slopes, _ = find_slopes(mesh, plates, rng)
        expected = sum(len(coords) for plate in plates for coords in plate.borders.values())
        assert len(slopes) == expected
        pairs = {(s.plate_id, s.opposing, s.border) for s in slopes}
        assert len(pairs) == len(slopes)

    def test_shared_hex_reuses_path(self, rng):
        # Row 0 belongs to plate 0 and row 1 to plate 1, so every hex of
        # plate 0 touches both the pole and plate 1.
        grid = HexGrid(6, 2)
        mesh = Mesh(grid)
        mesh.plate_ids[0, :] = 0
        mesh.plate_ids[1, :] = 1
        plates = [Plate(0, HexCoordinate(0, 0), 0.0), Plate(1, HexCoordinate(0, 1), 180.0)]
        plates[0].members = [HexCoordinate(c, 0) for c in range(6)]
        plates[1].members = [HexCoordinate(c, 1) for c in range(6)]
        find_borders(mesh, plates)
        classify_interactions(mesh, plates)
        slopes, _ = find_slopes(mesh, plates[:1], rng)
        assert len(slopes) == 12
        by_hex = {}
        for slope in slopes:
            by_hex.setdefault(slope.border, []).append(slope)
        for group in by_hex.values():
            assert len(group) == 2
            assert group[0].hexes is group[1].hexes

    def test_slopes_ordered_by_plate(self):
        mesh, plates, rng = _analysed()
        slopes, _ = find_slopes(mesh, plates, rng)
        ids = [slope.plate_id for slope in slopes]
        assert ids == sorted(ids)

    def test_deterministic(self):
        mesh_a, plates_a, rng_a = _analysed(seed=17)
        mesh_b, plates_b, rng_b = _analysed(seed=17)
        slopes_a, _ = find_slopes(mesh_a, plates_a, rng_a)
        slopes_b, _ = find_slopes(mesh_b, plates_b, rng_b)
        assert [s.hexes for s in slopes_a] == [s.hexes for s in slopes_b]

    def test_unreachable_slope_skipped_and_logged(self, rng, caplog):
        mesh, plate = _walled_mesh()
        plate.borders = {1: [HexCoordinate(0, 0), HexCoordinate(5, 2)]}
        plate.interactions = {1: Interaction.DIVERGENT}
        with caplog.at_level(logging.WARNING):
            slopes, skipped = find_slopes(mesh, [plate], rng)
        assert len(slopes) == 1
        assert slopes[0].hexes == [HexCoordinate(0, 0)]
        assert len(skipped) == 1
        assert isinstance(skipped[0], UnreachableSeed)
        assert "Skipping slope" in caplog.text


class TestSlope:
    """Test the Slope record."""

    def test_border_and_seed_ends(self):
        hexes = [HexCoordinate(0, 0), HexCoordinate(1, 0), HexCoordinate(2, 0)]
        slope = Slope(0, 1, Interaction.CONVERGENT, hexes)
        assert slope.border == HexCoordinate(0, 0)
        assert slope.seed == HexCoordinate(2, 0)
        assert len(slope) == 3
