#!/usr/bin/env python3

"""
Configuration File Support

Options can be stored in a TOML file and passed with --config, rather than
being typed in every time.  For example:

    clock_speed = 700
    scale = 12
    colour = "00FF88"
    keymap = [120, 49, 50, 51, 113, 119, 101, 97, 115, 100, 122, 99, 52, 114, 102, 118]

Without --config, config.toml is looked for in the per-user configuration
directory (e.g. ~/.config/chip8-emulator on Linux).  If it is not there, the
built-in defaults are used.  Anything given on the command line takes
precedence over the file.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import os
import tomllib
from platformdirs import user_config_dir

CONFIG_APP_NAME = "chip8-emulator"
CONFIG_FILENAME = "config.toml"

# Option name, and the types the file may use for it
CONFIG_OPTIONS = {
    "clock_speed": (int,),
    "scale":       (int,),
    "colour":      (str,),
    "keymap":      (str, list)
}


class ConfigError(Exception):
    pass


def load_config(filename):
    try:
        with open(filename, "rb") as f:
            config = tomllib.load(f)
    except tomllib.TOMLDecodeError as err:
        raise ConfigError("Could not parse configuration file {}: {}".format(filename, err)) from None

    for option, value in config.items():
        allowed_types = CONFIG_OPTIONS.get(option)

        if allowed_types is None:
            raise ConfigError("Unknown configuration option '{}'".format(option))

        # TOML booleans are not integers as far as the options are concerned
        if isinstance(value, bool) or not isinstance(value, allowed_types):
            raise ConfigError("Configuration option '{}' has the wrong type".format(option))

    keymap = config.get("keymap")

    if isinstance(keymap, list):
        if not all(isinstance(key, int) and not isinstance(key, bool) for key in keymap):
            raise ConfigError("Configuration option 'keymap' must only contain key numbers")

        config["keymap"] = ",".join(str(key) for key in keymap)

    return config


def apply_config(args, config):
    # Fill in any option not supplied on the command line.  Returns a new dictionary.
    merged = dict(args)

    for option, value in config.items():
        if merged.get(option) is None:
            merged[option] = value

    return merged


def user_config_path():
    return os.path.join(user_config_dir(CONFIG_APP_NAME, appauthor=False), CONFIG_FILENAME)


def load_user_config(filename=None):
    # A missing file is not an error here, unlike a file named with --config
    if filename is None:
        filename = user_config_path()

    if not os.path.isfile(filename):
        print("No config file found, using default configuration.")
        return {}

    return load_config(filename)
