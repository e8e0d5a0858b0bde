# generate_world.py

"""
================================================================================
HEX WORLD GENERATION SCRIPT
================================================================================
This script is a command-line tool for generating a hex world and saving it
as a world package: raw master data, metadata and one image per view mode.
The package can then be browsed with viewer.py.

Usage:
    python generate_world.py --config configs/world.json
    python generate_world.py --seed 42 --width 120 --height 80 --workers 4
================================================================================
"""
import argparse
import json
import logging
import logging.config
import os
import sys

from hextergen import config as DEFAULTS
from hextergen.exceptions import ElevationDiverged, SeedPlacementExhausted
from hextergen.generator import HexWorldGenerator
from hextergen.package import write_package

DEFAULT_LOGGING_CONFIG = os.path.join("configs", "logging_config.json")
LOG_DIR = "logs"


def setup_logging(log_config_path: str) -> logging.Logger:
    """Initializes the logging system from a config file, falling back to console output."""
    if not os.path.exists(LOG_DIR):
        os.makedirs(LOG_DIR)
    try:
        with open(log_config_path, 'rt') as f:
            log_config = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s - %(levelname)s - %(message)s',
            stream=sys.stdout
        )
        logger = logging.getLogger("Generator")
        logger.warning(f"Could not load logging config '{log_config_path}' ({e}); using console logging.")
        return logger
    log_config['handlers']['file']['filename'] = os.path.join(LOG_DIR, 'generate_world.log')
    logging.config.dictConfig(log_config)
    return logging.getLogger("Generator")


def load_world_params(config_path: str, logger: logging.Logger):
    """Returns the 'world_generation_parameters' object, or None if the file is unusable."""
    if config_path is None:
        return {}
    logger.info(f"Loading configuration from: {config_path}")
    try:
        with open(config_path, 'r') as f:
            config = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.critical(f"Failed to load or parse config file: {e}")
        return None
    return config.get('world_generation_parameters', {})


def generate_with_retry(world_params: dict, logger: logging.Logger):
    """
    Generates a world, relaxing min_seed_distance by one hex each time seed
    placement runs out of attempts, down to a spacing of 1.
    """
    params = dict(world_params)
    while True:
        generator = HexWorldGenerator(config=params, logger=logger)
        try:
            return generator.generate()
        except SeedPlacementExhausted as e:
            current = generator.settings['min_seed_distance']
            if current <= 1:
                raise
            params['min_seed_distance'] = max(1, current - 1)
            logger.warning(f"{e}. Retrying with min_seed_distance={params['min_seed_distance']}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Tectonic hex world generator.")
    parser.add_argument("--config", type=str, default=None,
                        help="Path to a JSON file with a 'world_generation_parameters' object.")
    parser.add_argument("--logging-config", type=str, default=DEFAULT_LOGGING_CONFIG,
                        help="Path to a logging dictConfig JSON file.")
    parser.add_argument("--seed", type=int, help="Override the world seed.")
    parser.add_argument("--width", type=int, help="Override the grid width in hexes.")
    parser.add_argument("--height", type=int, help="Override the grid height in hexes.")
    parser.add_argument("--plates", type=int, help="Override the number of plates.")
    parser.add_argument("--workers", type=int, help="Render worker processes (1 renders in-process).")
    parser.add_argument("--output", type=str, default=None,
                        help="Package directory. Defaults to generated_worlds/seed_<seed>.")
    args = parser.parse_args(argv)

    logger = setup_logging(args.logging_config)

    world_params = load_world_params(args.config, logger)
    if world_params is None:
        return 1

    overrides = {'seed': args.seed, 'width': args.width, 'height': args.height,
                 'num_plates': args.plates, 'render_workers': args.workers}
    world_params.update({key: value for key, value in overrides.items() if value is not None})

    try:
        world = generate_with_retry(world_params, logger)
    except (SeedPlacementExhausted, ElevationDiverged, ValueError) as e:
        logger.critical(f"World generation failed: {e}")
        return 1

    output_dir = args.output or os.path.join(DEFAULTS.DEFAULT_OUTPUT_DIR, f"seed_{world.settings['seed']}")
    write_package(world, output_dir, logger)
    logger.info(f"World package saved to: {output_dir}")
    return 0


# --- Command-Line Interface ---
if __name__ == "__main__":
    sys.exit(main())
