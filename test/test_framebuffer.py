#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from c8emu.framebuffer import Framebuffer


class TestFrameBuffer(unittest.TestCase):
    def setUp(self):
        self.framebuffer = Framebuffer()
        self.small_framebuffer = Framebuffer(4, 5)

    def test_framebuffer_size(self):
        self.assertEqual((64, 32), self.framebuffer.get_vid_size())
        rows = self.framebuffer.get_rows()
        self.assertEqual(32, len(rows))
        self.assertTrue(all(len(row) == 64 for row in rows))
        self.assertFalse(any(any(row) for row in rows))

    def test_framebuffer_writes(self):
        fb = self.small_framebuffer
        plane = fb.plane
        self.assertFalse(fb.xor_pixel(0, 0))
        self.assertEqual("0100000000000000000000000000000000000000", plane.mem.hex())
        self.assertFalse(fb.xor_pixel(1, 1))
        self.assertEqual("0100000000010000000000000000000000000000", plane.mem.hex())
        self.assertIsNone(fb.xor_pixel(4, 5))  # Should do nothing as pixels are trimmed, not wrapped
        self.assertEqual("0100000000010000000000000000000000000000", plane.mem.hex())
        self.assertTrue(fb.xor_pixel(0, 0))  # Collision, and the pixel is erased
        self.assertEqual("0000000000010000000000000000000000000000", plane.mem.hex())
        self.assertTrue(fb.get_pixel(1, 1))
        self.assertFalse(fb.get_pixel(0, 0))

        # Check clear works
        fb.clear()
        self.assertEqual("0000000000000000000000000000000000000000", plane.mem.hex())

    def test_framebuffer_rows(self):
        fb = self.small_framebuffer
        fb.xor_pixel(3, 0)
        fb.xor_pixel(0, 4)
        rows = fb.get_rows()
        self.assertEqual([False, False, False, True], rows[0])
        self.assertEqual([True, False, False, False], rows[4])

    def test_framebuffer_sprite_collision(self):
        fb = self.framebuffer
        self.assertFalse(fb.draw_sprite(10, 5, b"\xF0\x90"))
        self.assertEqual([True] * 4, fb.get_rows()[5][10:14])
        self.assertEqual([True, False, False, True], fb.get_rows()[6][10:14])
        self.assertTrue(fb.draw_sprite(10, 5, b"\xF0\x90"))
        self.assertFalse(any(any(row) for row in fb.get_rows()))

    def test_framebuffer_sprite_origin_wraps(self):
        fb = self.framebuffer
        fb.draw_sprite(64 + 2, 32 + 1, b"\x80")
        self.assertTrue(fb.get_pixel(2, 1))

    def test_framebuffer_sprite_clipped_right(self):
        fb = self.framebuffer
        fb.draw_sprite(60, 0, b"\xFF")
        row = fb.get_rows()[0]
        self.assertEqual([True] * 4, row[60:64])
        self.assertEqual([False] * 4, row[0:4])
        self.assertFalse(any(fb.get_rows()[1]))

    def test_framebuffer_sprite_clipped_bottom(self):
        fb = self.framebuffer
        fb.draw_sprite(0, 31, b"\x80\x80\x80")
        rows = fb.get_rows()
        self.assertTrue(rows[31][0])
        self.assertFalse(rows[0][0])
        self.assertFalse(rows[1][0])
