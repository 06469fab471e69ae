#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Draws the emulated screen onto an SDL window surface via PyGame.  Note that the
surface is allocated at the emulated resolution, and then the contents are
stretched (using 'Nearest Neighbour' translation) to fit the window itself.
This means we don't have to draw the same pixel multiple times.

Lit pixels are drawn in the configured colour, unlit pixels in black.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import Renderer as RendererBase, parse_colour
from ..constants import APP_NAME, DEFAULT_COLOUR

BACKGROUND_RGB = b"\x00\x00\x00"


class Renderer(RendererBase):
    def __init__(self, scale=None, colour=None, **kwargs):
        if scale is None:
            scale = 10  # Default window pixel size if not supplied, or set to default

        self.foreground_rgb = parse_colour(DEFAULT_COLOUR if colour is None else colour)  # Check before opening a window
        pygame.display.init()
        self.set_title(APP_NAME)
        self.rgb_buffer = None
        self.display_surface = None
        self.scaled_size = (0, 0)
        super().__init__(scale)

    def set_resolution(self, width, height):
        total_pixels = width * height
        self.rgb_buffer = memoryview(bytearray(total_pixels * 3))  # 24-bit, all background to start with

        if total_pixels:
            self.scaled_size = (width * self.scale, height * self.scale)
            self.display_surface = pygame.display.set_mode(self.scaled_size)

        # Call superclass method so display size is known on the next draw
        super().set_resolution(width, height)

    def draw(self, rows):
        height = len(rows)
        width = len(rows[0]) if height else 0

        if (width, height) != (self.width, self.height):
            self.set_resolution(width, height)

        # Update RGB buffer in-place to minimise allocations and PyGame calls
        rgb_buffer = self.rgb_buffer
        foreground_rgb = self.foreground_rgb
        rgb_location = 0

        for row in rows:
            for lit in row:
                rgb_buffer[rgb_location:rgb_location + 3] = foreground_rgb if lit else BACKGROUND_RGB
                rgb_location += 3

        # Blit the bytearray straight to the surface
        render_surface = pygame.image.frombuffer(rgb_buffer, (width, height), "RGB")
        scaled_win = pygame.transform.scale(render_surface, self.scaled_size)
        self.display_surface.blit(scaled_win, (0, 0))
        pygame.display.flip()
        super().draw(rows)

    def set_title(self, title):
        pygame.display.set_caption(title)

    def shutdown(self):
        # PyGame currently segfaults if display.quit is called via __del__
        pygame.display.quit()
        super().shutdown()
