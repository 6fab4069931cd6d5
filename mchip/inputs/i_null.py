#!/usr/bin/env python3

"""
Null Input Plugin

Serves as a base class for other Input plugins.  Can be used on its own if zero
input functionality is required, in which case no key is ever down, and a
program waiting for a keypress will wait forever.

The keymap is a comma-separated string of 16 decimal host key codes, one for
each key from 0x0 to 0xF.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from ..constants import NUM_KEYS


class InputsError(Exception):
    pass


def parse_keymap(keymap, force_lowercase=False):
    # Returns a dictionary mapping host key codes to keys 0x0 - 0xF
    keymap_dict = {}
    keymap_split = keymap.split(",")

    if len(keymap_split) != NUM_KEYS:
        raise InputsError("Incorrect number of keys defined -- 16 required.  Use commas to split numbers")

    for key_num, key_defined in enumerate(keymap_split):
        try:
            key_defined_ord = int(key_defined)
        except ValueError:
            raise InputsError("Defined keys are not all integer values") from None

        if force_lowercase:
            # If we are working with characters rather than keyscan codes, we should convert to lowercase
            key_defined_ord = ord(chr(key_defined_ord).lower())

        if key_defined_ord in keymap_dict:
            raise InputsError("Duplicate keys defined")

        keymap_dict[key_defined_ord] = key_num

    return keymap_dict


class Inputs:
    def __init__(self, keymap, renderer, force_lowercase=False):
        self.keymap_dict = parse_keymap(keymap, force_lowercase)
        self.renderer = renderer

    def process_messages(self):
        return False  # Don't exit the program

    def is_key_down(self, key):  # pylint: disable=unused-argument
        return False  # No keys are held

    def shutdown(self):
        pass
