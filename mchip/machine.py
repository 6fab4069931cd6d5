#!/usr/bin/env python3

"""
Machine State

Everything the interpreter mutates lives on a single Machine object: RAM,
the V registers, the index register, the program counter, the call stack,
both timers, the framebuffer, the key-wait state, the timer tick accumulator
and the random number source.

The CPU and TimerUnit hold no state of their own, so a Machine can be stepped
by any CPU, copied, inspected between instructions, or thrown away at any
time.  Nothing here is shared between machines, so tests can run any number
of them side by side.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from fractions import Fraction
from random import Random
from .constants import FONT, FONT_LOC, MEM_SIZE, NUM_REGISTERS, PROGRAM_LOC, STACK_LEVELS
from .framebuffer import Framebuffer
from .ram import RAM
from .stack import Stack


class Machine:
    def __init__(self, seed=None, rng=None):
        self.ram = RAM(MEM_SIZE)
        self.stack = Stack(STACK_LEVELS)
        self.framebuffer = Framebuffer()
        # The RND instruction is the only source of nondeterminism, so it is seeded once, here
        self.rng = Random(seed) if rng is None else rng
        self.reset()

    def reset(self):
        self.ram.clear()
        self.ram.write_block(FONT_LOC, FONT)
        self.stack.clear()
        self.framebuffer.clear()

        # Initialise registers
        self.v = memoryview(bytearray(NUM_REGISTERS))  # Bytearrays are mutable, so this should be fast when updated
        self.i = 0  # Index register.  16 bits wide, but only 12 are used for addressing

        # Initialise timers
        self.dt = 0  # Delay timer (byte)
        self.st = 0  # Sound timer (byte)
        self.tick_accumulator = Fraction(0)  # Milliseconds not yet turned into a 60Hz tick

        self.pc = PROGRAM_LOC
        self.wait_key = None  # Target register while waiting for a keypress, otherwise None

    def load_program(self, data, location=PROGRAM_LOC):
        # Raises RAMError if the program would not fit
        self.ram.write_block(location, data)

    def is_waiting(self):
        return self.wait_key is not None

    @property
    def sp(self):
        return self.stack.pointer
