"""Shared fixtures for the hextergen test suite."""

import logging

import numpy as np
import pytest

from hextergen.generator import HexWorldGenerator
from hextergen.hexgrid import HexGrid
from hextergen.mesh import Mesh


@pytest.fixture
def logger():
    return logging.getLogger("hextergen.tests")


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def grid():
    return HexGrid(width=10, height=10)


@pytest.fixture
def mesh(grid):
    return Mesh(grid)


@pytest.fixture
def small_config():
    return {
        'seed': 42,
        'width': 10,
        'height': 10,
        'num_plates': 3,
        'min_seed_distance': 2,
        'hex_size_px': 4.0,
        'render_workers': 1,
    }


@pytest.fixture
def small_world(small_config, logger):
    return HexWorldGenerator(small_config, logger).generate()
