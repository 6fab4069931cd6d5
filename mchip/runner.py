#!/usr/bin/env python3

"""
Real-Time Runner

The interpreter core has no sense of time.  This module supplies it: each pass
around the loop measures how long has elapsed, runs as many instructions as
the clock speed allows for that time, hands the elapsed milliseconds to the
timer unit, and redraws the screen and polls the inputs at 60Hz.

If the host gets lagged, the next pass simply runs more instructions and more
timer ticks to catch up, up to a limit, so a long stall (e.g. dragging the
window) doesn't cause a burst of thousands of instructions afterwards.

Alterations should be checked against the 'operations per second' figure shown
in the window title, to ensure any changes are an improvement.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter
from .constants import APP_NAME, DEFAULT_CLOCK_SPEED, TIMER_FREQ

DISPLAY_INTERVAL = 1.0 / TIMER_FREQ  # 60Hz emulated display refresh
MAX_CATCH_UP = 0.1                   # Seconds of instructions to run at most after a stall
UNCAPPED_BATCH = 1000                # Instructions per pass when the clock speed is uncapped


class Runner:
    def __init__(self, cpu, machine, renderer, inputs, clock_speed=DEFAULT_CLOCK_SPEED):
        self.cpu = cpu
        self.machine = machine
        self.renderer = renderer
        self.inputs = inputs

        if clock_speed is None:
            clock_speed = DEFAULT_CLOCK_SPEED

        # User can specify 0 for infinite
        self.clock_speed = clock_speed if clock_speed > 0 else None
        self.step_budget = 0.0

        # Performance-related vars
        self.next_display_update_time = 0
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0
        self.next_perf_report_time = 0
        self.report_perf()

    def run(self):
        last_time = perf_counter()

        while True:
            this_time = perf_counter()  # Do this first for maximum precision
            elapsed = this_time - last_time
            last_time = this_time

            # Performance counters
            if this_time >= self.next_perf_report_time:
                self.next_perf_report_time = int(this_time) + 1.0
                # Reporting the performance should be done before a refresh, as refreshing will likely show the report
                self.report_perf(self.perf_counter_fps, self.perf_counter_ops)
                self.perf_counter_ops = 0
                self.perf_counter_fps = 0

            # Prevent unnecessary display rendering in excess of host frame rate
            if this_time >= self.next_display_update_time:
                if self.inputs.process_messages():  # Process inputs at 60Hz too, to avoid slowdown
                    return

                self.next_display_update_time = this_time + DISPLAY_INTERVAL
                self.renderer.draw(self.machine.framebuffer)
                self.perf_counter_fps += 1

            # Timers are linked to actual time, not the clock speed, so they tick at 60Hz whatever the CPU is doing
            self.cpu.update_timers(self.machine, elapsed * 1000.0)
            self.perf_counter_ops += self.cpu.run_cycles(self.machine, self.cycles_due(elapsed))

    def cycles_due(self, elapsed):
        # Number of instructions to run for 'elapsed' seconds, carrying any fraction over to the next pass
        if self.clock_speed is None:
            return UNCAPPED_BATCH

        self.step_budget = min(self.step_budget + elapsed * self.clock_speed, MAX_CATCH_UP * self.clock_speed)
        cycles = int(self.step_budget)
        self.step_budget -= cycles

        if cycles == 0:
            # Wait for the next CPU instruction.  Unfortunately we have to spin to get the timing right
            next_time = perf_counter() + (1.0 - self.step_budget) / self.clock_speed

            while perf_counter() < next_time:
                pass

        return cycles

    def report_perf(self, fps=0, ops=0):
        self.renderer.set_title("{} - {} FPS, {} OPS".format(APP_NAME, fps, ops))
