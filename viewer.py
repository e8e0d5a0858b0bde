# viewer.py

"""
================================================================================
HEX WORLD PACKAGE VIEWER
================================================================================
A small Pygame application for browsing a world package written by
generate_world.py. The map wraps horizontally like the cylinder it was
generated on.

Controls:
    W/A/S/D     pan
    Mouse wheel zoom
    V           cycle view mode (elevation, plates, borders)
    Esc         quit

Usage:
    python viewer.py generated_worlds/seed_1337
================================================================================
"""
import argparse
import logging
import math
import os
import sys

import pygame

from hextergen.hexgrid import SQRT3
from hextergen.package import load_manifest

# --- Application Constants (Rule 1) ---
PAN_SPEED_PIXELS = 15
ZOOM_SPEED = 0.1
MAX_ZOOM = 8.0
MIN_ZOOM = 0.01
BACKGROUND_COLOR = (10, 10, 20)


class Camera:
    """A simple camera for the viewer to handle pan, zoom and horizontal wrap."""
    def __init__(self, screen_width, screen_height, world_pixel_width, world_pixel_height, wrap_period=None):
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.world_pixel_width = world_pixel_width
        self.world_pixel_height = world_pixel_height
        self.wrap_period = wrap_period

        zoom_x = self.screen_width / self.world_pixel_width
        zoom_y = self.screen_height / self.world_pixel_height
        self.zoom = min(zoom_x, zoom_y) if min(zoom_x, zoom_y) > 0 else MIN_ZOOM

        self.x = self.world_pixel_width / 2
        self.y = self.world_pixel_height / 2

    def world_to_screen(self, world_x, world_y):
        screen_x = (world_x - self.x) * self.zoom + self.screen_width / 2
        screen_y = (world_y - self.y) * self.zoom + self.screen_height / 2
        return screen_x, screen_y

    def pan(self, dx, dy):
        # Panning speed should be independent of zoom level
        self.x += dx / self.zoom
        self.y += dy / self.zoom
        if self.wrap_period:
            self.x %= self.wrap_period
        self.y = min(max(self.y, 0.0), self.world_pixel_height)

    def zoom_in(self):
        self.zoom = min(MAX_ZOOM, self.zoom * (1 + ZOOM_SPEED))

    def zoom_out(self):
        self.zoom = max(MIN_ZOOM, self.zoom * (1 - ZOOM_SPEED))

    def visible_copies(self):
        """Horizontal offsets at which the world image must be drawn to fill the screen."""
        if not self.wrap_period:
            return [0.0]
        half_view = (self.screen_width / 2) / self.zoom
        first = math.floor((self.x - half_view - self.world_pixel_width) / self.wrap_period)
        last = math.ceil((self.x + half_view) / self.wrap_period)
        return [k * self.wrap_period for k in range(first, last + 1)]


class WorldPackage:
    """
    Represents a loaded world package.
    Handles loading the manifest and on-demand loading/caching of view images.
    """
    def __init__(self, package_path: str):
        self.package_path = package_path
        self.logger = logging.getLogger(__name__)
        self.surface_cache = {}

        manifest = load_manifest(package_path)
        self.width = manifest["width"]
        self.height = manifest["height"]
        self.hex_size = manifest.get("hex_size_px", 6.0)
        self.view_modes = manifest.get("view_modes", [])
        self.images = manifest.get("images", {})
        self.num_plates = manifest.get("num_plates", 0)

        self.wrap_period = self.hex_size * SQRT3 * self.width
        self.world_pixel_width = None
        self.world_pixel_height = None

        self.logger.info(
            f"Successfully loaded world package '{package_path}' "
            f"({self.width}x{self.height} hexes, {self.num_plates} plates)."
        )

    def get_surface(self, mode: str):
        if mode in self.surface_cache:
            return self.surface_cache[mode]

        filename = self.images.get(mode)
        if not filename:
            return None
        filepath = os.path.join(self.package_path, filename)
        try:
            surface = pygame.image.load(filepath).convert_alpha()
        except (pygame.error, FileNotFoundError):
            self.logger.error(f"Failed to load '{mode}' image at '{filepath}'")
            return None
        self.surface_cache[mode] = surface
        self.world_pixel_width, self.world_pixel_height = surface.get_size()
        return surface


class ViewerApp:
    """The main application class for the world package viewer."""
    def __init__(self, package_path: str):
        logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
        self.logger = logging.getLogger(__name__)

        self.logger.info("Initializing Pygame...")
        pygame.init()

        self.screen_width = 1280
        self.screen_height = 720
        self.screen = pygame.display.set_mode((self.screen_width, self.screen_height))
        pygame.display.set_caption("Hex World Viewer")

        self.clock = pygame.time.Clock()
        self.is_running = True
        self.mode_index = 0

        try:
            self.world = WorldPackage(package_path)
        except FileNotFoundError as e:
            self.logger.critical(str(e))
            self.is_running = False
            return

        surface = self.world.get_surface(self.current_mode)
        if surface is None:
            self.logger.critical("World package contains no images to display.")
            self.is_running = False
            return
        self.camera = Camera(
            self.screen_width, self.screen_height,
            self.world.world_pixel_width, self.world.world_pixel_height,
            wrap_period=self.world.wrap_period,
        )

    @property
    def current_mode(self) -> str:
        return self.world.view_modes[self.mode_index] if self.world.view_modes else ""

    def run(self):
        """The main application loop."""
        while self.is_running:
            self.handle_events()
            self.update()
            self.draw()
            self.clock.tick(60)

        self.logger.info("Exiting viewer.")
        pygame.quit()

    def handle_events(self):
        """Processes user input and other events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.is_running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.is_running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_v:
                self.mode_index = (self.mode_index + 1) % len(self.world.view_modes)
                self.logger.info(f"View mode: {self.current_mode}")
            elif event.type == pygame.MOUSEWHEEL:
                if event.y > 0:
                    self.camera.zoom_in()
                elif event.y < 0:
                    self.camera.zoom_out()

    def update(self):
        """Handles continuous input like key presses for panning."""
        keys = pygame.key.get_pressed()
        if keys[pygame.K_w]:
            self.camera.pan(0, -PAN_SPEED_PIXELS)
        if keys[pygame.K_s]:
            self.camera.pan(0, PAN_SPEED_PIXELS)
        if keys[pygame.K_a]:
            self.camera.pan(-PAN_SPEED_PIXELS, 0)
        if keys[pygame.K_d]:
            self.camera.pan(PAN_SPEED_PIXELS, 0)

    def draw(self):
        """Handles all rendering for the application."""
        self.screen.fill(BACKGROUND_COLOR)

        surface = self.world.get_surface(self.current_mode)
        if surface is not None:
            scaled_w = math.ceil(self.world.world_pixel_width * self.camera.zoom)
            scaled_h = math.ceil(self.world.world_pixel_height * self.camera.zoom)
            if scaled_w > 0 and scaled_h > 0:
                scaled_surface = pygame.transform.smoothscale(surface, (scaled_w, scaled_h))
                for offset in self.camera.visible_copies():
                    self.screen.blit(scaled_surface, self.camera.world_to_screen(offset, 0))

        pygame.display.set_caption(
            f"Hex World Viewer | {self.current_mode} | Zoom: {self.camera.zoom:.2f}"
        )
        pygame.display.flip()


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description="Viewer for generated hex world packages.")
    parser.add_argument("package", type=str, help="Path to a world package directory.")
    args = parser.parse_args()

    if not os.path.isdir(args.package):
        print(f"Error: World package not found at '{args.package}'")
        print("Please run 'python generate_world.py' first.")
        sys.exit(1)

    app = ViewerApp(package_path=args.package)
    app.run()
