#!/usr/bin/env python3

__author__ = "Gregory Maynard-Hoare"
__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"
__version__ = "0.1.0"

import sys
from argparse import ArgumentParser
from c8emu import main, StartupError
from c8emu.config import ConfigError
from c8emu.errors import EmulatorError
from c8emu.inputs.i_null import InputsError
from c8emu.renderers.r_null import RendererError
from c8emu.runner import EmulationHalted


def parse_args():
    parser = ArgumentParser()
    parser.add_argument("filename", help="ROM to execute (normally ending in .ch8 or .c8)")
    parser.add_argument(
        "-c", "--clock_speed", type=int,
        help="set the CPU speed in operations/second (default 400)"
    )
    parser.add_argument(
        "-r", "--renderer", choices=["pygame", "curses", "null"],
        help="set the rendering, input, and audio systems (pygame by default if available, otherwise curses)"
    )
    parser.add_argument(
        "-s", "--scale", type=int,
        help="set the size of each pixel in PyGame mode (default 10), and width in Curses mode (default 2)"
    )
    parser.add_argument(
        "-m", "--mute", type=int, choices=[0, 1],
        help="mute the emulated audio.  0 = unmuted (default for PyGame), 1 = muted (default for Curses)"
    )
    parser.add_argument(
        "-k", "--keymap",
        help="redefine the 16 keyscan codes (PyGame) or character numbers (Curses).  Separate each decimal with a comma"
    )
    parser.add_argument(
        "--colour",
        help="set the lit pixel colour for the PyGame renderer as 6 hex digits, e.g. 00FF88 (default 0000FF)"
    )
    parser.add_argument(
        "--curses_cursor_mode", type=int, choices=[0, 1, 2], default=0,
        help="control cursor visibility in the Curses renderer"
    )
    parser.add_argument(
        "--config",
        help="read options from this TOML file instead of config.toml in the user configuration directory.  "
             "Options given on the command line take precedence"
    )
    return parser.parse_args()  # Can call sys.exit(2) if args are incorrect


def run():
    args = vars(parse_args())

    # It is possible to start the emulator from a GUI by calling this with a dictionary
    try:
        main(args)
    except (EmulationHalted, EmulatorError, StartupError, ConfigError, InputsError, RendererError) as err:
        print("Error while running emulator: {}".format(err), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    run()
