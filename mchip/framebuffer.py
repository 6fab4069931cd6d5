#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here by the CPU, and are only drawn to the actual display
(the host rendering system) when the host decides to, usually at 60Hz.  The
interpreter core never talks to a renderer directly, so the framebuffer can be
read at any point between instructions, by any renderer, at any rate.

Programs for this system cannot write directly into video RAM.  Instead,
sprites are drawn to the screen using an XOR method, one pixel at a time.
Each cell holds either 0 or 1.

Collisions (where a pixel was set, but was unset by an XOR), are reported back
to the caller so the draw instruction can raise the flag register.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import VID_WIDTH, VID_HEIGHT
from .ram import RAM


class FramebufferError(Exception):
    pass


class Framebuffer:
    def __init__(self, vid_width=VID_WIDTH, vid_height=VID_HEIGHT):
        if vid_width <= 0 or vid_height <= 0:
            raise FramebufferError("Framebuffer dimensions must be positive")

        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        # Row-major, one byte per pixel.  Only the lowest bit is ever used
        self.ram_bank = RAM(self.vid_size)
        self.changed = True  # Renderers should draw the first frame regardless

    def clear(self):
        self.ram_bank.clear()
        self.changed = True

    def xor_pixel(self, x, y):
        # Coordinates always wrap around the screen edges.  Returns True if a set pixel was erased.
        vram_loc = (y % self.vid_height) * self.vid_width + (x % self.vid_width)
        pixel = self.ram_bank.mem[vram_loc]
        self.ram_bank.mem[vram_loc] = pixel ^ 1
        self.changed = True

        return pixel == 1

    def get_pixel(self, x, y):
        return self.ram_bank.mem[y * self.vid_width + x]

    def rows(self):
        # Copies each row, so callers can keep the result after the next instruction runs
        vid_width = self.vid_width
        mem = self.ram_bank.mem

        return [mem[y * vid_width:(y + 1) * vid_width].tolist() for y in range(self.vid_height)]

    def get_cells(self):
        # Live, read-only view of the whole buffer
        return self.ram_bank.mem.toreadonly()

    def get_vid_size(self):
        return self.vid_width, self.vid_height
