#!/usr/bin/env python3

"""
PyGame Input Plugin

SDL reports real key down and key up events, so the set of held keys is kept
exactly as the user holds them.  Events are drained once per frame.

Closing the window, or releasing ESC, asks the frame loop to stop.  Losing
window focus releases every key, because the matching key up events will never
arrive.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .i_null import Inputs as InputsBase


class Inputs(InputsBase):
    def __init__(self, keymap, renderer):
        super().__init__(keymap, renderer)
        self.held_keys = set()

        self.event_handlers = {
            pygame.QUIT:            self._on_quit,
            pygame.KEYDOWN:         self._on_key_down,
            pygame.KEYUP:           self._on_key_up,
            pygame.WINDOWFOCUSLOST: self._on_focus_lost
        }

    def process_messages(self):
        quit_requested = False

        for event in pygame.event.get():
            handler = self.event_handlers.get(event.type)

            # Keep draining the queue after a quit, so nothing is left behind for shutdown
            if handler is not None and handler(event):
                quit_requested = True

        return quit_requested

    def _on_quit(self, _):
        return True

    def _on_key_down(self, event):
        emulated_key = self.keymap_dict.get(event.key)

        if emulated_key is not None:
            self.held_keys.add(emulated_key)

        return False

    def _on_key_up(self, event):
        if event.key == pygame.K_ESCAPE:
            return True

        self.held_keys.discard(self.keymap_dict.get(event.key))
        return False

    def _on_focus_lost(self, _):
        self.held_keys.clear()
        return False

    def get_pressed_keys(self):
        return frozenset(self.held_keys)
