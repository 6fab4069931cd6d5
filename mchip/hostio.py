#!/usr/bin/env python3

"""
Host I/O Functionality

Handles loading program images for later writing into RAM.  Two formats are
understood:
    * Binary ROMs, copied byte for byte
    * Hex text files, where each pair of hex digits (either case) is one byte

Programs always start at 0x200, so neither format may hold more than 3584
bytes.  Binary ROMs over that size are rejected outright.  Hex files are
simply cut off once memory is full, and a trailing unpaired digit is ignored.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import MAX_PROGRAM_SIZE

HEX_DIGITS = "0123456789abcdefABCDEF"


class LoaderError(Exception):
    pass


class Loader:
    def load_binary(self, filename):
        with open(filename, "rb") as f:
            return f.read()

    def load_rom(self, filename):
        data = self.load_binary(filename)

        if len(data) > MAX_PROGRAM_SIZE:
            raise LoaderError(
                "ROM too large ({} bytes, maximum is {} bytes).".format(len(data), MAX_PROGRAM_SIZE)
            )

        return data

    def load_hex(self, filename):
        return self.parse_hex(self.load_binary(filename).decode("ascii", errors="replace"))

    def parse_hex(self, text):
        data = bytearray()
        text_len = len(text) & ~1  # Drop any unpaired final digit

        for pos in range(0, text_len, 2):
            if len(data) >= MAX_PROGRAM_SIZE:
                break

            pair = text[pos:pos + 2]

            if pair[0] not in HEX_DIGITS or pair[1] not in HEX_DIGITS:
                raise LoaderError("Invalid hex digits {!r} at offset {}.".format(pair, pos))

            data.append(int(pair, 16))

        return bytes(data)

    def load_program(self, filename, use_hex=False):
        return self.load_hex(filename) if use_hex else self.load_rom(filename)
