"""
Test suite for the HexWorldGenerator pipeline.

Tests cover:
- Settings consolidation, derivation and validation
- End-to-end reproducibility (byte-identical arrays)
- World-level invariants (coverage, magnitudes, pole interactions, bound)
- Injected base elevation
- The JSON summary
"""

import hashlib
import json

import numpy as np
import pytest

from hextergen import config as DEFAULTS
from hextergen.generator import HexWorldGenerator
from hextergen.hexgrid import POLE
from hextergen.mesh import UNASSIGNED
from hextergen.tectonics import Interaction


def _sha256(array: np.ndarray) -> str:
    return hashlib.sha256(array.tobytes()).hexdigest()


class TestSettings:
    """Test configuration consolidation."""

    def test_defaults_fill_missing_keys(self, logger):
        generator = HexWorldGenerator({}, logger)
        assert generator.settings['seed'] == DEFAULTS.DEFAULT_SEED
        assert generator.settings['width'] == DEFAULTS.DEFAULT_WIDTH
        assert generator.settings['elevation_mode'] == DEFAULTS.DEFAULT_ELEVATION_MODE

    def test_user_values_override(self, small_config, logger):
        generator = HexWorldGenerator(small_config, logger)
        assert generator.settings['width'] == 10
        assert generator.settings['num_plates'] == 3
        assert generator.grid.width == 10

    def test_min_seed_distance_derived_when_none(self, logger):
        generator = HexWorldGenerator({'width': 30, 'height': 40, 'num_plates': 10}, logger)
        assert generator.settings['min_seed_distance'] == pytest.approx(12.5)

    def test_pole_margin_clamped(self, logger):
        generator = HexWorldGenerator({'width': 10, 'height': 3, 'num_plates': 2,
                                       'seed_pole_margin': 5, 'min_seed_distance': 1}, logger)
        assert generator.settings['seed_pole_margin'] == 1

    @pytest.mark.parametrize("override", [
        {'elevation_mode': 'cubic'},
        {'width': 0},
        {'height': -2},
        {'num_plates': 500, 'width': 10, 'height': 10},
        {'elevation_bound': 0.0},
        {'render_workers': 0},
    ])
    def test_invalid_settings_rejected(self, override, logger):
        with pytest.raises(ValueError):
            HexWorldGenerator(override, logger)


class TestGenerate:
    """Test the end-to-end pipeline."""

    def test_two_runs_are_byte_identical(self, small_config, logger):
        a = HexWorldGenerator(small_config, logger).generate()
        b = HexWorldGenerator(small_config, logger).generate()
        assert _sha256(a.elevation) == _sha256(b.elevation)
        assert _sha256(a.plate_ids) == _sha256(b.plate_ids)
        assert a.seeds == b.seeds

    def test_full_coverage(self, small_world):
        assert not np.any(small_world.plate_ids == UNASSIGNED)
        assert len(small_world.plates) == 3
        assert sum(p.magnitude for p in small_world.plates) == 100

    def test_seeds_spaced(self, small_world):
        grid = small_world.grid
        seeds = small_world.seeds
        for i, a in enumerate(seeds):
            for b in seeds[i + 1:]:
                assert grid.distance(a, b) >= 2

    def test_pole_interactions_diverge(self, small_world):
        touching = [plate for plate in small_world.plates if POLE in plate.interactions]
        assert touching
        for plate in touching:
            assert plate.interactions[POLE] is Interaction.DIVERGENT

    def test_elevation_bounded_and_finite(self, small_world):
        assert np.all(np.isfinite(small_world.elevation))
        assert np.max(np.abs(small_world.elevation)) <= 1.0 + 1e-12

    def test_unbounded_run_keeps_raw_values(self, small_config, logger):
        small_config['elevation_bound'] = None
        world = HexWorldGenerator(small_config, logger, elevation_seed=lambda coord: 0.0).generate()
        assert np.all(np.isfinite(world.elevation))
        assert np.any(world.elevation != 0.0)

    def test_injected_elevation_seed_is_used(self, small_config, logger):
        small_config.update({'elevation_strength': 0.0, 'elevation_coefficient': 1.0})
        world = HexWorldGenerator(small_config, logger, elevation_seed=lambda coord: 0.25).generate()
        assert np.allclose(world.elevation, 0.25)

    def test_noise_settings_do_not_move_plates(self, small_config, logger):
        a = HexWorldGenerator(small_config, logger).generate()
        small_config['noise_scale'] = 3.0
        b = HexWorldGenerator(small_config, logger).generate()
        assert np.array_equal(a.plate_ids, b.plate_ids)

    def test_no_slopes_skipped_on_connected_plates(self, small_world):
        assert small_world.skipped == []
        assert small_world.slope_count > 0


class TestSummary:
    """Test the world summary used by the manifest."""

    def test_summary_is_json_serializable(self, small_world):
        text = json.dumps(small_world.summary())
        assert '"pole"' in text

    def test_summary_plate_entries(self, small_world):
        summary = small_world.summary()
        assert summary['width'] == 10
        assert summary['num_plates'] == 3
        assert summary['skipped_slopes'] == 0
        for entry, plate in zip(summary['plates'], small_world.plates):
            assert entry['magnitude'] == plate.magnitude
            assert entry['seed'] == [plate.seed.col, plate.seed.row]
            assert entry['interactions'].get('pole', 'divergent') == 'divergent'
            assert set(entry['border_counts']) == set(entry['interactions'])
