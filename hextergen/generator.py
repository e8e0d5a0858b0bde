# hextergen/generator.py

"""
================================================================================
CORE HEX WORLD GENERATOR
================================================================================
This module contains the main HexWorldGenerator class, which runs the full
terrain pipeline over a cylindrical hex mesh and hands back the result as a
HexWorld.

    base elevation -> place_seeds -> grow_plates -> find_borders
        -> classify_interactions -> find_slopes -> shape_elevation -> bound

Data Contract:
---------------
- Inputs (on initialization):
    - config (dict): A dictionary of simulation parameters which can override
      the internal defaults. Expected keys include 'seed', 'width', etc.
    - logger: A configured Python logging object for runtime messages.
    - elevation_seed (callable, optional): coord -> float base elevation. If
      None, a cylindrical noise field is sampled from the seed.
- Outputs (from generate()):
    - A HexWorld holding the grid, mesh, plates and slope statistics.
- Side Effects: Logs messages using the provided logger.
- Invariants: Given the same seed and configuration, the output is deterministic.
================================================================================
"""

import logging
import time

import numpy as np

from . import config as DEFAULTS
from . import elevation
from . import tectonics
from .hexgrid import HexGrid, Pole
from .mesh import Mesh
from .slopes import find_slopes


class HexWorld:
    """The finished product of one generation run. Read-only by convention."""

    def __init__(self, grid: HexGrid, mesh: Mesh, plates: list, seeds: list,
                 slope_count: int, skipped: list, settings: dict):
        self.grid = grid
        self.mesh = mesh
        self.plates = plates
        self.seeds = seeds
        self.slope_count = slope_count
        self.skipped = skipped
        self.settings = settings

    @property
    def elevation(self) -> np.ndarray:
        return self.mesh.elevation

    @property
    def plate_ids(self) -> np.ndarray:
        return self.mesh.plate_ids

    def summary(self) -> dict:
        """Per-plate metadata in a JSON-friendly form."""
        plates = []
        for plate in self.plates:
            plates.append({
                'id': plate.plate_id,
                'seed': [int(plate.seed.col), int(plate.seed.row)],
                'angle': round(float(plate.angle), 6),
                'magnitude': plate.magnitude,
                'border_counts': {_identity_key(k): len(v) for k, v in plate.borders.items()},
                'interactions': {_identity_key(k): v.value for k, v in plate.interactions.items()},
            })
        return {
            'width': self.grid.width,
            'height': self.grid.height,
            'num_plates': len(self.plates),
            'slopes': self.slope_count,
            'skipped_slopes': len(self.skipped),
            'elevation_min': float(self.mesh.elevation.min()),
            'elevation_max': float(self.mesh.elevation.max()),
            'plates': plates,
        }


def _identity_key(identity) -> str:
    return "pole" if isinstance(identity, Pole) else str(identity)


class HexWorldGenerator:
    """
    Generates the elevation and plate data for a cylindrical hex world.
    This class is backend-only and does not handle any visualization.
    """
    def __init__(self, config: dict, logger: logging.Logger, elevation_seed=None):
        """
        Initializes the hex world generator.

        Args:
            config (dict): User-defined parameters to override defaults.
            logger (logging.Logger): The logger instance for all output.
            elevation_seed (callable, optional): Injected base elevation
                provider. If None, one is built from cylindrical noise.

        Raises:
            ValueError: If the consolidated settings are invalid.
        """
        self.logger = logger
        self.user_config = config or {}
        self.logger.info("HexWorldGenerator initializing...")

        # --- Consolidate Configuration ---
        self.settings = {
            'seed': self.user_config.get('seed', DEFAULTS.DEFAULT_SEED),
            'width': self.user_config.get('width', DEFAULTS.DEFAULT_WIDTH),
            'height': self.user_config.get('height', DEFAULTS.DEFAULT_HEIGHT),

            'num_plates': self.user_config.get('num_plates', DEFAULTS.DEFAULT_NUM_PLATES),
            'min_seed_distance': self.user_config.get('min_seed_distance', DEFAULTS.DEFAULT_MIN_SEED_DISTANCE),
            'seed_pole_margin': self.user_config.get('seed_pole_margin', DEFAULTS.DEFAULT_SEED_POLE_MARGIN),
            'seed_attempts_per_plate': self.user_config.get('seed_attempts_per_plate', DEFAULTS.SEED_ATTEMPTS_PER_PLATE),

            'elevation_strength': self.user_config.get('elevation_strength', DEFAULTS.DEFAULT_ELEVATION_STRENGTH),
            'elevation_coefficient': self.user_config.get('elevation_coefficient', DEFAULTS.DEFAULT_ELEVATION_COEFFICIENT),
            'elevation_mode': self.user_config.get('elevation_mode', DEFAULTS.DEFAULT_ELEVATION_MODE),
            'sigmoid_steepness': self.user_config.get('sigmoid_steepness', DEFAULTS.DEFAULT_SIGMOID_STEEPNESS),
            'elevation_bound': self.user_config.get('elevation_bound', DEFAULTS.DEFAULT_ELEVATION_BOUND),

            'noise_seed_offset': self.user_config.get('noise_seed_offset', DEFAULTS.NOISE_SEED_OFFSET),
            'noise_scale': self.user_config.get('noise_scale', DEFAULTS.DEFAULT_NOISE_SCALE),
            'noise_octaves': self.user_config.get('noise_octaves', DEFAULTS.DEFAULT_NOISE_OCTAVES),
            'noise_persistence': self.user_config.get('noise_persistence', DEFAULTS.DEFAULT_NOISE_PERSISTENCE),
            'noise_lacunarity': self.user_config.get('noise_lacunarity', DEFAULTS.DEFAULT_NOISE_LACUNARITY),

            'hex_size_px': self.user_config.get('hex_size_px', DEFAULTS.DEFAULT_HEX_SIZE_PX),
            'render_workers': self.user_config.get('render_workers', DEFAULTS.DEFAULT_RENDER_WORKERS),
        }
        self._validate_settings()

        # --- Derived settings ---
        if self.settings['min_seed_distance'] is None:
            self.settings['min_seed_distance'] = tectonics.auto_min_distance(
                self.settings['width'], self.settings['height'], self.settings['num_plates']
            )
            self.logger.debug(f"Derived min_seed_distance: {self.settings['min_seed_distance']:.3f}")

        # At least one row must stay available to the seed placer.
        max_margin = (self.settings['height'] - 1) // 2
        if self.settings['seed_pole_margin'] > max_margin:
            self.logger.warning(
                f"seed_pole_margin {self.settings['seed_pole_margin']} too large for height "
                f"{self.settings['height']}; clamped to {max_margin}"
            )
            self.settings['seed_pole_margin'] = max_margin

        # --- Public Properties for easy access ---
        self.seed = self.settings['seed']
        self.grid = HexGrid(self.settings['width'], self.settings['height'])
        self._elevation_seed = elevation_seed

        self.logger.info(f"HexWorldGenerator initialized with seed: {self.seed}")
        self.logger.info(
            f"World dimensions: {self.grid.width}x{self.grid.height} hexes, "
            f"{self.settings['num_plates']} plates"
        )

    def _validate_settings(self):
        s = self.settings
        if s['width'] <= 0 or s['height'] <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {s['width']}x{s['height']}")
        if s['num_plates'] > s['width'] * s['height']:
            raise ValueError(f"Cannot fit {s['num_plates']} plates on {s['width'] * s['height']} hexes")
        if s['elevation_mode'] not in DEFAULTS.ELEVATION_MODES:
            raise ValueError(f"Unknown elevation_mode '{s['elevation_mode']}', expected one of {DEFAULTS.ELEVATION_MODES}")
        if s['seed_pole_margin'] < 0:
            raise ValueError("seed_pole_margin cannot be negative")
        if s['elevation_bound'] is not None and s['elevation_bound'] <= 0:
            raise ValueError("elevation_bound must be positive or null")
        if s['render_workers'] < 1:
            raise ValueError("render_workers must be at least 1")

    def base_elevation_seed(self):
        """The injected provider, or a cylindrical noise field from the seed."""
        if self._elevation_seed is not None:
            return self._elevation_seed
        field = elevation.noise_elevation_field(
            self.grid,
            self.seed + self.settings['noise_seed_offset'],
            scale=self.settings['noise_scale'],
            octaves=self.settings['noise_octaves'],
            persistence=self.settings['noise_persistence'],
            lacunarity=self.settings['noise_lacunarity'],
        )
        return elevation.field_elevation_seed(field)

    def generate(self) -> HexWorld:
        """
        Runs the whole pipeline once.

        Raises:
            SeedPlacementExhausted: If seeds cannot be spaced as requested.
            ElevationDiverged: If shaping produces non-finite elevations.
        """
        s = self.settings
        rng = np.random.default_rng(self.seed)
        mesh = Mesh(self.grid)
        start_total = time.perf_counter()

        start = time.perf_counter()
        mesh.fill_elevation(self.base_elevation_seed())
        self.logger.info(f"Base elevation sampled in {time.perf_counter() - start:.2f}s")

        start = time.perf_counter()
        seeds = tectonics.place_seeds(
            self.grid, s['num_plates'], s['min_seed_distance'], rng,
            max_attempts=s['num_plates'] * s['seed_attempts_per_plate'],
            pole_margin=s['seed_pole_margin'],
        )
        self.logger.info(f"Placed {len(seeds)} seeds (min distance {s['min_seed_distance']:.2f}) in {time.perf_counter() - start:.2f}s")

        start = time.perf_counter()
        plates = tectonics.grow_plates(mesh, seeds, rng)
        sizes = [plate.magnitude for plate in plates]
        self.logger.info(
            f"Grew {len(plates)} plates in {time.perf_counter() - start:.2f}s "
            f"(sizes {min(sizes)}-{max(sizes)})"
        )

        start = time.perf_counter()
        tectonics.find_borders(mesh, plates)
        tectonics.classify_interactions(mesh, plates)
        border_count = sum(len(plate.border_hexes()) for plate in plates)
        self.logger.info(f"Found {border_count} border hexes in {time.perf_counter() - start:.2f}s")

        start = time.perf_counter()
        slopes, skipped = find_slopes(mesh, plates, rng, self.logger)
        self.logger.info(
            f"Found {len(slopes)} slopes in {time.perf_counter() - start:.2f}s"
            + (f", skipped {len(skipped)}" if skipped else "")
        )

        start = time.perf_counter()
        elevation.shape_elevation(
            mesh, slopes,
            strength=s['elevation_strength'],
            coefficient=s['elevation_coefficient'],
            mode=s['elevation_mode'],
            sigmoid_steepness=s['sigmoid_steepness'],
        )
        self.logger.debug(f"Shaped elevation range: {mesh.elevation.min():.4f} to {mesh.elevation.max():.4f}")
        elevation.bound_elevation(mesh, s['elevation_bound'], self.logger)
        self.logger.info(f"Elevation shaped in {time.perf_counter() - start:.2f}s")
        self.logger.debug(f"Final elevation range: {mesh.elevation.min():.4f} to {mesh.elevation.max():.4f}")

        self.logger.info(f"World generated in {time.perf_counter() - start_total:.2f}s")
        return HexWorld(self.grid, mesh, plates, seeds, len(slopes), skipped, dict(s))
