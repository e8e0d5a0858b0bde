"""
Test suite for the cylindrical HexGrid.

Tests cover:
- Constructor validation
- Bounds checking
- Neighbour topology (odd-r rows, horizontal wrap, poles)
- Wrap-aware hex distance
- Centres and bearings
- Angle normalization
"""

import pytest

from hextergen.exceptions import OutOfBounds
from hextergen.hexgrid import POLE, HexCoordinate, HexGrid, normalize_angle


class TestHexGridConstruction:
    """Test HexGrid initialization and properties."""

    def test_constructor_sets_dimensions(self):
        grid = HexGrid(width=12, height=7)
        assert grid.width == 12
        assert grid.height == 7
        assert grid.size == 84

    @pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-1, 4)])
    def test_non_positive_dimensions_rejected(self, width, height):
        with pytest.raises(ValueError):
            HexGrid(width, height)

    def test_coordinates_are_row_major(self, grid):
        coords = list(grid.coordinates())
        assert len(coords) == grid.size
        assert coords[0] == HexCoordinate(0, 0)
        assert coords[1] == HexCoordinate(1, 0)
        assert coords[grid.width] == HexCoordinate(0, 1)


class TestHexGridBounds:
    """Test bounds checking."""

    def test_contains(self, grid):
        assert grid.contains((0, 0))
        assert grid.contains((9, 9))
        assert not grid.contains((10, 0))
        assert not grid.contains((0, -1))

    def test_check_bounds_raises_out_of_bounds(self, grid):
        with pytest.raises(OutOfBounds):
            grid.check_bounds((3, 10))

    def test_out_of_bounds_is_a_value_error(self, grid):
        with pytest.raises(ValueError):
            grid.neighbors((-1, 0))


class TestHexGridNeighbors:
    """Test hex neighbour topology."""

    def test_even_row_neighbors_wrap_and_hit_pole(self, grid):
        assert grid.neighbors((0, 0)) == [
            HexCoordinate(1, 0), POLE, POLE,
            HexCoordinate(9, 0), HexCoordinate(9, 1), HexCoordinate(0, 1),
        ]

    def test_odd_row_neighbors_wrap(self, grid):
        assert grid.neighbors((9, 1)) == [
            HexCoordinate(0, 1), HexCoordinate(0, 0), HexCoordinate(9, 0),
            HexCoordinate(8, 1), HexCoordinate(9, 2), HexCoordinate(0, 2),
        ]

    def test_last_row_touches_pole(self, grid):
        neighbors = grid.neighbors((5, 9))
        assert neighbors[4] is POLE
        assert neighbors[5] is POLE
        assert len(grid.real_neighbors((5, 9))) == 4

    def test_interior_hex_has_six_real_neighbors(self, grid):
        assert len(grid.real_neighbors((4, 4))) == 6

    def test_neighbor_relation_is_symmetric(self, grid):
        for coord in grid.coordinates():
            for neighbor in grid.real_neighbors(coord):
                assert coord in grid.real_neighbors(neighbor)

    def test_every_neighbor_is_at_distance_one(self, grid):
        for coord in grid.coordinates():
            for neighbor in grid.real_neighbors(coord):
                assert grid.distance(coord, neighbor) == 1


class TestHexGridDistance:
    """Test wrap-aware hex distance."""

    def test_distance_to_self_is_zero(self, grid):
        assert grid.distance((3, 3), (3, 3)) == 0

    def test_distance_across_seam(self, grid):
        assert grid.distance((0, 0), (9, 0)) == 1

    def test_distance_takes_shorter_way_round(self, grid):
        assert grid.distance((0, 0), (5, 0)) == 5
        assert grid.distance((1, 0), (8, 0)) == 3

    def test_distance_along_rows(self, grid):
        assert grid.distance((0, 0), (0, 4)) == 4

    def test_distance_is_symmetric(self, grid):
        coords = list(grid.coordinates())
        for a in coords[::7]:
            for b in coords[::11]:
                assert grid.distance(a, b) == grid.distance(b, a)

    def test_distance_bounds_checked(self, grid):
        with pytest.raises(OutOfBounds):
            grid.distance((0, 0), (0, 12))


class TestHexGridBearing:
    """Test centres and bearings."""

    def test_center_offsets_odd_rows(self, grid):
        x0, y0 = grid.center((0, 0))
        x1, y1 = grid.center((0, 1))
        assert x0 == pytest.approx(0.0)
        assert x1 == pytest.approx(3 ** 0.5 / 2)
        assert y1 - y0 == pytest.approx(1.5)

    def test_bearing_east_and_west(self, grid):
        assert grid.bearing((0, 0), (1, 0)) == pytest.approx(0.0)
        assert grid.bearing((1, 0), (0, 0)) == pytest.approx(180.0)

    def test_bearing_north_is_towards_row_zero(self, grid):
        assert grid.bearing((0, 2), (0, 0)) == pytest.approx(90.0)
        assert grid.bearing((0, 0), (0, 2)) == pytest.approx(270.0)

    def test_bearing_crosses_seam(self, grid):
        assert grid.bearing((9, 0), (0, 0)) == pytest.approx(0.0)


class TestNormalizeAngle:
    """Test angle normalization into (-180, 180]."""

    @pytest.mark.parametrize("angle,expected", [
        (0.0, 0.0), (180.0, 180.0), (-180.0, 180.0), (270.0, -90.0), (-90.0, -90.0), (540.0, 180.0),
    ])
    def test_normalize(self, angle, expected):
        assert normalize_angle(angle) == pytest.approx(expected)
