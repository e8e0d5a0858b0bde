# hextergen/render.py

"""
================================================================================
HEX MESH RASTERIZER
================================================================================
Turns per-hex colors into an image. Every pixel is assigned to the hex whose
centre is nearest (a Voronoi lookup through scipy's cKDTree), which for a
regular hex lattice reproduces the hexagons exactly. Pixels farther than one
circumradius from every centre lie outside the mesh and stay transparent.

The image can be split into four quadrants rendered by a process pool with
one worker per quadrant and a tqdm bar over completed quadrants.

Data Contract:
---------------
- Inputs: a HexWorld, a view mode, the hex circumradius in pixels and a
  worker count.
- Outputs: (H, W, 4) uint8 RGBA arrays in Pillow's row-major layout.
- Side Effects: save_png writes a file. Nothing else touches disk.
================================================================================
"""
import logging
import math
import multiprocessing

import numpy as np
from PIL import Image
from scipy.spatial import cKDTree
from tqdm import tqdm

from . import color_maps
from . import config as DEFAULTS
from .hexgrid import SQRT3

logger = logging.getLogger(__name__)


def image_size(width: int, height: int, hex_size: float) -> tuple[int, int]:
    """(pixel width, pixel height) needed to show a width x height mesh."""
    px_w = int(math.ceil(hex_size * SQRT3 * (width + 0.5)))
    px_h = int(math.ceil(hex_size * (1.5 * (height - 1) + 2.0)))
    return px_w, px_h


def hex_centers_px(width: int, height: int, hex_size: float) -> np.ndarray:
    """Pixel centres of every hex in row-major order, shape (height*width, 2) as (x, y)."""
    rows, cols = np.mgrid[0:height, 0:width]
    x = hex_size * SQRT3 * (cols + 0.5 * (rows % 2)) + hex_size * SQRT3 / 2.0
    y = hex_size * 1.5 * rows + hex_size
    return np.column_stack([x.ravel(), y.ravel()])


def hex_colors(world, mode: str) -> np.ndarray:
    """(height, width, 4) RGBA color per hex for a view mode."""
    if mode == "elevation":
        elevation = world.mesh.elevation
        colors = color_maps.get_elevation_color_array(
            elevation, color_maps.create_elevation_lut(), color_maps.elevation_display_scale(elevation)
        )
    elif mode == "plates":
        colors = color_maps.get_plate_color_array(world.mesh.plate_ids, len(world.plates), world.settings['seed'])
    elif mode == "borders":
        colors = color_maps.get_border_color_array(world.mesh.border_mask())
    else:
        raise ValueError(f"Unknown view mode '{mode}', expected one of {DEFAULTS.VIEW_MODES}")
    return color_maps.paint_seeds(colors, world.seeds)


def quadrants(px_w: int, px_h: int) -> list:
    """Splits the image into (x0, y0, x1, y1) boxes: top-left, top-right, bottom-left, bottom-right."""
    mid_x, mid_y = px_w // 2, px_h // 2
    boxes = [(0, 0, mid_x, mid_y), (mid_x, 0, px_w, mid_y), (0, mid_y, mid_x, px_h), (mid_x, mid_y, px_w, px_h)]
    return [box for box in boxes if box[2] > box[0] and box[3] > box[1]]


def rasterize_box(tree: cKDTree, flat_colors: np.ndarray, hex_size: float, box: tuple) -> np.ndarray:
    """Renders one pixel box against a centre tree. Returns (y1-y0, x1-x0, 4)."""
    x0, y0, x1, y1 = box
    ys, xs = np.mgrid[y0:y1, x0:x1]
    points = np.column_stack([xs.ravel() + 0.5, ys.ravel() + 0.5])
    dist, index = tree.query(points)
    pixels = flat_colors[index].copy()
    pixels[dist > hex_size, 3] = 0
    return pixels.reshape(y1 - y0, x1 - x0, 4)


# --- Global variables for worker processes ---
worker_tree = None
worker_colors = None
worker_hex_size = 0.0


def init_worker(centers, flat_colors, hex_size):
    """Initializes the global state for each worker process."""
    global worker_tree, worker_colors, worker_hex_size
    worker_tree = cKDTree(centers)
    worker_colors = flat_colors
    worker_hex_size = hex_size


def process_quadrant(box):
    return box, rasterize_box(worker_tree, worker_colors, worker_hex_size, box)


def rasterize(colors: np.ndarray, hex_size: float = DEFAULTS.DEFAULT_HEX_SIZE_PX,
              workers: int = DEFAULTS.DEFAULT_RENDER_WORKERS, desc: str = "Rendering") -> np.ndarray:
    """
    Rasterizes a (height, width, 4) per-hex color array into an RGBA image.

    With workers > 1 the four quadrants are rendered in a process pool;
    the result is identical to the in-process path.
    """
    height, width = colors.shape[:2]
    px_w, px_h = image_size(width, height, hex_size)
    centers = hex_centers_px(width, height, hex_size)
    flat_colors = colors.reshape(-1, 4)
    image = np.zeros((px_h, px_w, 4), dtype=np.uint8)
    boxes = quadrants(px_w, px_h)

    if workers <= 1:
        tree = cKDTree(centers)
        for box in boxes:
            x0, y0, x1, y1 = box
            image[y0:y1, x0:x1] = rasterize_box(tree, flat_colors, hex_size, box)
        return image

    num_workers = min(workers, len(boxes))
    logger.debug(f"Rendering {len(boxes)} quadrants with {num_workers} worker processes.")
    with multiprocessing.Pool(processes=num_workers, initializer=init_worker,
                              initargs=(centers, flat_colors, hex_size)) as pool:
        results_iterator = pool.imap_unordered(process_quadrant, boxes)
        for box, pixels in tqdm(results_iterator, total=len(boxes), desc=desc):
            x0, y0, x1, y1 = box
            image[y0:y1, x0:x1] = pixels
    return image


def render_view(world, mode: str, hex_size: float = None, workers: int = None) -> np.ndarray:
    """Renders one view mode of a world, using its settings for unspecified options."""
    hex_size = hex_size or world.settings.get('hex_size_px', DEFAULTS.DEFAULT_HEX_SIZE_PX)
    workers = workers or world.settings.get('render_workers', DEFAULTS.DEFAULT_RENDER_WORKERS)
    return rasterize(hex_colors(world, mode), hex_size, workers, desc=f"Rendering {mode}")


def save_png(pixels: np.ndarray, path: str) -> None:
    """Saves an (H, W, 4) uint8 array as an RGBA PNG with Pillow."""
    img = Image.fromarray(np.ascontiguousarray(pixels))
    img.save(path, 'PNG')
