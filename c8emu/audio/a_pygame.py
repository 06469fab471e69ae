#!/usr/bin/env python3

"""
PyGame Audio Plugin

Plays a continuous tone within PyGame / SDL while the buzzer is enabled.

The emulated buzzer is only ever 'on' or 'off', so a single period of a square
wave at the tone frequency is built once, and looped for as long as the sound
timer is running.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .a_null import Audio as AudioBase

PLAYBACK_FREQUENCY = 44100
TONE_FREQUENCY = 680.0
DEFAULT_VOLUME = 0.1


class Audio(AudioBase):
    def __init__(self):
        self.buzzer_enabled = False
        pygame.mixer.pre_init(PLAYBACK_FREQUENCY, size=8, channels=1, buffer=512, allowedchanges=0)
        pygame.mixer.init()

        # One full period, high for the first half and low for the second
        period = max(2, int(PLAYBACK_FREQUENCY / TONE_FREQUENCY))
        half_period = period // 2
        self.buffer = memoryview(bytearray(b"\xFF" * half_period + b"\x00" * (period - half_period)))
        self.sound = pygame.mixer.Sound(self.buffer)
        self.sound.set_volume(DEFAULT_VOLUME)
        super().__init__()

    def enable_buzzer(self, enabled):
        # Enable or disable the buzzer, i.e. play or stop buffer playback.  If the tone is already playing, it won't be
        # restarted.
        if enabled:
            if not self.buzzer_enabled:
                self.sound.play(-1)
                self.buzzer_enabled = True
        else:
            if self.buzzer_enabled:
                self.sound.stop()
                self.buzzer_enabled = False

    def shutdown(self):
        self.sound.stop()
        pygame.mixer.quit()
        super().shutdown()
