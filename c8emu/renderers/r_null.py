#!/usr/bin/env python3

"""
Null Renderer Plugin

Base class for the other Renderer plugins.  On its own it shows nothing, which
is handy for running headless, but it still counts the frames it was asked
to draw.

Every renderer is handed the whole screen as a list of rows, each a list of
booleans where True is a lit pixel.  It is only called when the emulator has
changed the screen.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from string import hexdigits


class RendererError(Exception):
    pass


def parse_colour(colour):
    # RRGGBB hex digits to 3 bytes
    if len(colour) != 6 or not all(char in hexdigits for char in colour):
        raise RendererError("Colours must be exactly 6 hex digits, e.g. 00FF88.")

    rgb = int(colour, 16)
    return bytes((rgb >> 16, (rgb >> 8) & 0xFF, rgb & 0xFF))


class Renderer:
    def __init__(self, scale=None, **kwargs):  # pylint: disable=unused-argument
        if scale is not None and scale < 1:
            raise RendererError("The scale must be at least 1.")

        self.scale = scale or 1
        self.width = 0
        self.height = 0
        self.frames_drawn = 0
        self.set_resolution(0, 0)

    def set_resolution(self, width, height):
        self.width = width
        self.height = height

    def draw(self, rows):  # pylint: disable=unused-argument
        self.frames_drawn += 1

    def set_title(self, title):
        pass

    def shutdown(self):
        pass
