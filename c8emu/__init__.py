#!/usr/bin/env python3

"""
Main Startup Module

Call main(args) to run a ROM, where args is a dictionary holding every option
the launcher defines.  Options left as None fall back to the configuration
file given by args["config"] (or config.toml in the user configuration
directory when that is None), and then to built-in defaults.

The host side is made up of three plugins (Renderer, Inputs and Audio) which
are always chosen together.  PyGame is preferred, then Curses.  The null
plugins can also be picked explicitly, to run without any window or terminal.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .config import apply_config, load_config, load_user_config
from .constants import APP_INTRO, APP_COPYRIGHT, DEFAULT_CLOCK_SPEED, DEFAULT_KEYMAP, VID_WIDTH, VID_HEIGHT
from .emulator import Emulator
from .hostio import Loader
from .runner import Runner


class StartupError(Exception):
    pass


# pylint: disable=import-outside-toplevel, unused-import
def _pygame_plugins(mute_audio):
    import pygame  # Raises ImportError if missing
    from .inputs.i_pygame import Inputs
    from .renderers.r_pygame import Renderer

    if mute_audio:
        from .audio.a_null import Audio
    else:
        from .audio.a_pygame import Audio

    return Renderer, Inputs, Audio


def _curses_plugins(mute_audio):
    import curses  # Raises ImportError if missing (Windows needs windows-curses)
    from .inputs.i_curses import Inputs
    from .renderers.r_curses import Renderer

    # A terminal beep is an odd substitute for a tone, so it has to be asked for
    if mute_audio is None or mute_audio:
        from .audio.a_null import Audio
    else:
        from .audio.a_curses import Audio

    return Renderer, Inputs, Audio


def _null_plugins(_):
    from .audio.a_null import Audio
    from .inputs.i_null import Inputs
    from .renderers.r_null import Renderer

    return Renderer, Inputs, Audio


PLUGIN_LOADERS = {
    "pygame": _pygame_plugins,
    "curses": _curses_plugins,
    "null":   _null_plugins
}


def select_plugins(renderer_name, mute_audio):
    if renderer_name is not None:
        try:
            return PLUGIN_LOADERS[renderer_name](mute_audio)
        except ImportError:
            raise StartupError("The {} renderer is not available on this system.".format(renderer_name)) from None

    for auto_name in "pygame", "curses":
        try:
            return PLUGIN_LOADERS[auto_name](mute_audio)
        except ImportError:
            continue

    raise StartupError("Neither PyGame nor Curses (or Windows-Curses) appear to be installed.")


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))

    if args["config"] is None:
        args = apply_config(args, load_user_config())
    else:
        args = apply_config(args, load_config(args["config"]))

    Renderer, Inputs, Audio = select_plugins(args["renderer"], args["mute"])  # pylint: disable=invalid-name
    clock_speed = args["clock_speed"]

    if clock_speed is None:
        clock_speed = DEFAULT_CLOCK_SPEED
    elif clock_speed <= 0:
        raise StartupError("The clock speed must be at least 1 operation/second.")

    program = Loader().load_binary(args["filename"])
    renderer = Renderer(scale=args["scale"], colour=args["colour"], curses_cursor_mode=args["curses_cursor_mode"])
    inputs = None
    audio = None

    try:
        # Inputs get the renderer, as Curses reads keys from the renderer's screen
        renderer.set_resolution(VID_WIDTH, VID_HEIGHT)
        inputs = Inputs(args["keymap"] or DEFAULT_KEYMAP, renderer)
        audio = Audio()
        emulator = Emulator(clock_speed, program, audio=audio)
        Runner(emulator, renderer, inputs).run()
    finally:
        # Shut down explicitly, as __del__ is not reliable under PyPy.  Only plugins that started need it.
        if audio is not None:
            audio.shutdown()

        if inputs is not None:
            inputs.shutdown()

        renderer.shutdown()
