#!/usr/bin/env python3

"""
Curses TTY Terminal Input Plugin

A terminal only ever delivers characters.  There is no 'key up', so a key is
counted as held for a short while after its character last arrived, and the
keyboard's auto-repeat keeps it held for as long as the user keeps it down.

Reading a character blocks, so a daemon thread does the reading and hands
emulated key numbers over through a queue.  ESC or CTRL+C asks the frame loop
to stop.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import queue
from threading import Event, Thread
from time import time

from .i_null import Inputs as InputsBase

HOLD_TIME = 0.2  # Seconds a key stays down after its last character
QUIT_CHARS = (27, 3)  # ESC, CTRL+C
QUIT_MESSAGE = None


class KeyReader(Thread):
    def __init__(self, screen, keymap_dict, key_queue):
        super().__init__(daemon=True)  # Don't hold up interpreter exit while blocked in getch()
        self.screen = screen
        self.keymap_dict = keymap_dict
        self.key_queue = key_queue
        self.stopping = Event()

    def run(self):
        while not self.stopping.is_set():
            char = ord(chr(self.screen.getch()).lower())

            if char in QUIT_CHARS:
                self.key_queue.put(QUIT_MESSAGE)
                return

            emulated_key = self.keymap_dict.get(char)

            if emulated_key is None:
                continue

            try:
                self.key_queue.put(emulated_key, block=False)
            except queue.Full:
                pass  # The main thread is behind.  Repeats will resend it.


class Inputs(InputsBase):
    def __init__(self, keymap, renderer):
        super().__init__(keymap, renderer, force_lowercase=True)
        self.release_times = {}
        self.key_queue = queue.Queue(16)
        self.reader = KeyReader(renderer.get_curses_screen(), self.keymap_dict, self.key_queue)
        self.reader.start()

    def process_messages(self):
        release_time = time() + HOLD_TIME

        while True:
            try:
                emulated_key = self.key_queue.get(block=False)
            except queue.Empty:
                return False

            if emulated_key is QUIT_MESSAGE:
                return True

            self.release_times[emulated_key] = release_time

    def get_pressed_keys(self):
        now = time()
        return frozenset(key for key, release_time in self.release_times.items() if release_time > now)

    def shutdown(self):
        # The reader only notices after its next character, and is never joined
        self.reader.stopping.set()
        super().shutdown()
