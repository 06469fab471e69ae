#!/usr/bin/env python3

"""
Frame Loop

Drives the emulator at 60 frames per second.  Each frame:

    1. Host messages are processed, and the loop ends if the user quits
    2. The set of held keys is handed to the emulator
    3. One frame's worth of instructions is executed
    4. The screen is redrawn, but only if the frame asked for it

Once a second, the measured frame rate is shown in the window title.

The emulator itself never reports errors.  The first fatal error it raises is
turned into an EmulationHalted exception here, carrying a full register and
stack dump, and the loop stops for good.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter, sleep
from .constants import APP_INTRO, APP_NAME, FPS
from .crashdump import crash_dump, format_opcode
from .errors import EmulatorError

DISPLAY_INTERVAL = 1.0 / FPS


class EmulationHalted(Exception):
    def __init__(self, message, kind):
        self.kind = kind
        super().__init__(message)


class Runner:
    def __init__(self, emulator, renderer, inputs):
        self.emulator = emulator
        self.renderer = renderer
        self.inputs = inputs
        self.perf_counter_fps = 0
        self.next_perf_report_time = 0

    def run(self):
        next_frame_time = perf_counter()

        while True:
            this_time = perf_counter()

            # Performance counters
            if this_time >= self.next_perf_report_time:
                self.next_perf_report_time = int(this_time) + 1.0
                self.renderer.set_title("{} - {} FPS".format(APP_NAME, self.perf_counter_fps))
                self.perf_counter_fps = 0

            if self.step():
                return

            self.perf_counter_fps += 1
            next_frame_time += DISPLAY_INTERVAL
            delay = next_frame_time - perf_counter()

            if delay > 0:
                sleep(delay)
            else:
                # We're running behind, so don't try to catch up with a burst of frames
                next_frame_time = perf_counter()

    def step(self):
        # Runs a single frame.  Returns True if the user has asked to quit.
        if self.inputs.process_messages():
            return True

        emulator = self.emulator
        emulator.set_keys_pressed(self.inputs.get_pressed_keys())

        try:
            emulator.run_frame()
        except EmulatorError as err:
            raise EmulationHalted(self._crash_report(err), err.kind) from err

        if emulator.should_redraw():
            self.renderer.draw(emulator.get_framebuffer())

        return False

    def _crash_report(self, err):
        emulator = self.emulator

        return (
            "Emulation halted.\n\n" +
            "{}Machine state:\n" +
            "{}\n\n{} (opcode 0x{} at address 0x{:03x})."
        ).format(APP_INTRO, crash_dump(emulator), err, format_opcode(emulator.opcode), emulator.debug_pc)
