#!/usr/bin/env python3

"""
Timer Unit

The delay and sound timers count down at 60Hz regardless of how fast the CPU
runs.  The host tells the timer unit how many milliseconds have passed since
the last update, and the unit turns that into whole 60Hz ticks, carrying any
remainder over to the next update.

The remainder is kept as an exact fraction.  A 60Hz period is not a whole
number of milliseconds, so floating point would occasionally drop or add a
tick over a long run (1000ms must always come out as exactly 60 ticks).

While the sound timer is counting down, the buzzer is switched on every tick,
and it is switched off on the tick that brings the timer to zero.  Audio
plugins are therefore expected to ignore repeated requests to start the
buzzer.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from fractions import Fraction
from .constants import TIMER_FREQ

TIMER_PERIOD = Fraction(1000, TIMER_FREQ)  # Milliseconds


class TimerUnit:
    def __init__(self, audio=None):
        # If audio is None, sound timer ticks still happen but are not heard
        self.audio = audio

    def update(self, machine, delta_ms):
        """
        Add 'delta_ms' milliseconds of elapsed time to the machine's tick
        accumulator and apply every whole tick it now contains.  Returns the
        number of ticks applied.
        """

        machine.tick_accumulator += Fraction(delta_ms)
        ticks = 0

        while machine.tick_accumulator >= TIMER_PERIOD:
            machine.tick_accumulator -= TIMER_PERIOD
            self.tick(machine)
            ticks += 1

        return ticks

    def tick(self, machine):
        if machine.dt > 0:
            machine.dt -= 1

        if machine.st > 0:
            machine.st -= 1

            if self.audio is not None:
                # Sound timer just reached zero, so stop the buzzer.  Otherwise keep it going.
                self.audio.enable_buzzer(machine.st > 0)
