#!/usr/bin/env python3

"""
Null Input Plugin

Base class for the other Input plugins.  Used on its own, no key is ever held
and the frame loop is never asked to stop.

A keymap is 16 comma-separated decimal numbers.  The Nth number is the host
code (a PyGame keyscan, or a character for Curses) that stands for emulated
key N, so the first entry is key 0x0 and the last is key 0xF.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from ..constants import NUM_KEYS


class InputsError(Exception):
    pass


def parse_keymap(keymap, force_lowercase=False):
    # Returns a dictionary from host code to emulated key number
    host_codes = keymap.split(",")

    if len(host_codes) != NUM_KEYS:
        raise InputsError("A keymap needs exactly {} codes separated by commas, not {}".format(
            NUM_KEYS, len(host_codes)
        ))

    keymap_dict = {}

    for emulated_key, host_code in enumerate(host_codes):
        try:
            host_code = int(host_code)
        except ValueError:
            raise InputsError("Keymap entry '{}' is not a whole number".format(host_code.strip())) from None

        if force_lowercase:
            host_code = ord(chr(host_code).lower())

        if host_code in keymap_dict:
            raise InputsError("Code {} is mapped to more than one key".format(host_code))

        keymap_dict[host_code] = emulated_key

    return keymap_dict


class Inputs:
    def __init__(self, keymap, renderer, force_lowercase=False):
        self.renderer = renderer
        self.keymap_dict = parse_keymap(keymap, force_lowercase)

    def process_messages(self):
        # True asks the frame loop to stop
        return False

    def get_pressed_keys(self):
        return frozenset()

    def shutdown(self):
        pass
