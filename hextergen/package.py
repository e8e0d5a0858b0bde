# hextergen/package.py

"""
================================================================================
WORLD PACKAGE WRITER
================================================================================
Saves a generated HexWorld as a self-contained, portable package:

    <output_dir>/
        master_data/elevation.npy      float64 (height, width)
        master_data/plate_ids.npy      int32   (height, width)
        master_data/border_mask.npy    bool    (height, width)
        generation_config.json         the consolidated settings
        manifest.json                  dimensions, images and plate metadata
        <view_mode>.png                one image per view mode

Data Contract:
---------------
- Inputs: a HexWorld, an output directory and a logger.
- Outputs: the package path.
- Side Effects: Creates the directory tree and overwrites existing files.
================================================================================
"""
import json
import logging
import os
import time

import numpy as np

from . import config as DEFAULTS
from . import render

MASTER_DATA_DIR = "master_data"
MANIFEST_FILE = "manifest.json"
GENERATION_CONFIG_FILE = "generation_config.json"


def write_package(world, output_dir: str, logger: logging.Logger,
                  view_modes: tuple = DEFAULTS.VIEW_MODES, workers: int = None) -> str:
    """Writes master data, metadata and images for a world. Returns output_dir."""
    start_time = time.perf_counter()

    # 1. Create directory structure
    master_dir = os.path.join(output_dir, MASTER_DATA_DIR)
    os.makedirs(master_dir, exist_ok=True)
    logger.info(f"Output directory set to '{output_dir}'")

    # 2. Save the raw master data
    np.save(os.path.join(master_dir, "elevation.npy"), world.mesh.elevation)
    np.save(os.path.join(master_dir, "plate_ids.npy"), world.mesh.plate_ids)
    np.save(os.path.join(master_dir, "border_mask.npy"), world.mesh.border_mask())

    # 3. Render one image per view mode
    images = {}
    for mode in view_modes:
        filename = f"{mode}.png"
        pixels = render.render_view(world, mode, workers=workers)
        render.save_png(pixels, os.path.join(output_dir, filename))
        images[mode] = filename
        logger.info(f"Saved '{mode}' view ({pixels.shape[1]}x{pixels.shape[0]} px)")

    # 4. Save the manifest file
    manifest = world.summary()
    manifest["view_modes"] = list(view_modes)
    manifest["images"] = images
    manifest["hex_size_px"] = world.settings.get('hex_size_px', DEFAULTS.DEFAULT_HEX_SIZE_PX)
    with open(os.path.join(output_dir, MANIFEST_FILE), 'w') as f:
        json.dump(manifest, f, indent=2)

    # 5. Save the "birth certificate" generation_config.json
    with open(os.path.join(output_dir, GENERATION_CONFIG_FILE), 'w') as f:
        json.dump(world.settings, f, indent=4)

    logger.info(f"World package written in {time.perf_counter() - start_time:.2f} seconds.")
    return output_dir


def load_manifest(package_path: str) -> dict:
    """Reads a package manifest. Raises FileNotFoundError if it is missing."""
    manifest_path = os.path.join(package_path, MANIFEST_FILE)
    if not os.path.exists(manifest_path):
        raise FileNotFoundError(f"Could not find {MANIFEST_FILE} in '{package_path}'")
    with open(manifest_path, 'r') as f:
        return json.load(f)


def load_master_data(package_path: str) -> dict:
    """Loads every master data array of a package, keyed by name."""
    master_dir = os.path.join(package_path, MASTER_DATA_DIR)
    return {
        name: np.load(os.path.join(master_dir, f"{name}.npy"))
        for name in ("elevation", "plate_ids", "border_mask")
    }
