#!/usr/bin/env python3

"""
Curses Audio Plugin

Terminals have no way to hold a tone, so each time the sound timer is loaded
from silence, a single BEL (CTRL+G) is sent instead.  The beep length is up to
the terminal, and there is nothing to stop when the timer runs out.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import curses
from .a_null import Audio as AudioBase


class Audio(AudioBase):
    def __init__(self):
        self.sounding = False
        super().__init__()

    def enable_buzzer(self, enabled):
        if enabled and not self.sounding:
            curses.beep()

        self.sounding = enabled
