#!/usr/bin/env python3

"""
Null Audio Plugin

Base class for the other Audio plugins, and a silent plugin in its own right.

The emulated machine has a single fixed-pitch tone.  The emulator calls
enable_buzzer(True) when its sound timer is loaded from zero, and
enable_buzzer(False) when the timer runs out or is cleared.  Nothing else is
ever asked of an Audio plugin.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Audio:
    def enable_buzzer(self, enabled):
        pass

    def shutdown(self):
        pass
