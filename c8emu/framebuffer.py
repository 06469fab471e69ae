#!/usr/bin/env python3

"""
Framebuffer Emulator

Programs for this system cannot write directly into video RAM.  Instead,
sprites are drawn to the screen using an XOR method against a single 64x32
monochrome plane, stored row-major with one byte per pixel.

A sprite's starting position always wraps around the screen, but any of its
pixels that would then land past the right or bottom edge are trimmed rather
than wrapped.

Collisions (where any pixel was set, but was unset by an XOR) are reported back
to the caller, which is responsible for setting the flag register.

The rendering system never sees the plane itself.  It is handed a grid of
booleans built from it once per frame, and only when a redraw was requested.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import VID_WIDTH, VID_HEIGHT
from .ram import RAM

SPRITE_WIDTH = 8


class Framebuffer:
    def __init__(self, vid_width=VID_WIDTH, vid_height=VID_HEIGHT):
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.plane = RAM(self.vid_size)

    def clear(self):
        self.plane.clear()

    def xor_pixel(self, x, y):
        # Returns flagging any collision, or None if the pixel is off-screen and was trimmed
        if x >= self.vid_width or y >= self.vid_height:
            return None

        vram_loc = y * self.vid_width + x
        pixel = self.plane.read(vram_loc)
        self.plane.write(vram_loc, pixel ^ 1)

        return pixel != 0

    def draw_sprite(self, x, y, sprite):
        # Draws one byte per row, most-significant bit on the left.  Returns True if anything was erased.
        x_pos = x % self.vid_width
        y_pos = y % self.vid_height
        collided = False

        for row, spr_data in enumerate(sprite):
            scr_y = y_pos + row

            if scr_y >= self.vid_height:
                break

            for col in range(SPRITE_WIDTH):
                if spr_data & (0x80 >> col) and self.xor_pixel(x_pos + col, scr_y):
                    # Don't stop drawing.  Set the flag, and never unset it.
                    collided = True

        return collided

    def get_pixel(self, x, y):
        return self.plane.read(y * self.vid_width + x) != 0

    def get_rows(self):
        width = self.vid_width
        mem = self.plane.mem
        return [[mem[row + x] != 0 for x in range(width)] for row in range(0, self.vid_size, width)]

    def get_vid_size(self):
        return self.vid_width, self.vid_height
