#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the interpreter, replacing args with a
dictionary of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import APP_INTRO, APP_COPYRIGHT
from .cpu import CPU
from .debugger import Debugger
from .hostio import Loader
from .machine import Machine
from .runner import Runner


class StartupError(Exception):
    pass


def select_plugins(opt_renderer, mute_audio):
    # Returns the Inputs, Renderer and Audio classes to use.  If necessary, try PyGame first, then Curses.
    auto_select_renderer = opt_renderer is None

    # flake8: noqa: F401
    if auto_select_renderer or opt_renderer == "pygame":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import pygame
        except ImportError:
            if auto_select_renderer:
                opt_renderer = "curses"
            else:
                raise StartupError(
                    "PyGame does not appear to be installed."
                )
        else:
            from .inputs.i_pygame import Inputs
            from .renderers.r_pygame import Renderer

            # PyGame can handle proper waveforms
            if mute_audio:
                from .audio.a_null import Audio
            else:
                from .audio.a_pygame import Audio

            return Inputs, Renderer, Audio

    if opt_renderer == "curses":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import curses
        except ImportError:
            if auto_select_renderer:
                raise StartupError(
                    "Neither PyGame nor Curses (or Windows-Curses) appear to be installed."
                )

            raise StartupError(
                "Curses (or Windows-Curses) does not appear to be installed."
            )
        else:
            from .inputs.i_curses import Inputs
            from .renderers.r_curses import Renderer

            # Terminals can handle fixed-length beeps, but not sampled sound
            if mute_audio or mute_audio is None:
                from .audio.a_null import Audio
            else:
                from .audio.a_curses import Audio

            return Inputs, Renderer, Audio

    # pylint: disable=import-outside-toplevel
    from .inputs.i_null import Inputs
    from .renderers.r_null import Renderer
    from .audio.a_null import Audio

    return Inputs, Renderer, Audio


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))

    # Read the program first, so a bad file is reported before any window or terminal mode is set up
    loader = Loader()
    program = loader.load_program(args["filename"], use_hex=args["hex"])

    # Seed the random number source once, here.  None seeds from the system.
    machine = Machine(seed=args["seed"])
    machine.load_program(program)

    Inputs, Renderer, Audio = select_plugins(args["renderer"], args["mute"])

    renderer = Renderer(
        scale=args["scale"],
        pygame_palette=args["pygame_palette"],
        curses_cursor_mode=args["curses_cursor_mode"],
        smoothing=args["smoothing"]
    )

    inputs = None
    audio = None

    try:
        # Set up host inputs, and link to the chosen rendering module in case it provides inputs too
        inputs = Inputs(args["keymap"], renderer)
        audio = Audio()

        # Set up debugger and live output if necessary
        debugger = Debugger()
        debugger.set_live(args["debug"])

        # Create a new CPU and plug it into the host
        cpu = CPU(inputs, audio, debugger, strict=args["strict"])
        Runner(cpu, machine, renderer, inputs, clock_speed=args["clock_speed"]).run()
    finally:
        # The CPU has quit, so shut down the rendering framework.  __del__ cannot be relied upon when using PyPy
        if audio is not None:
            audio.shutdown()

        if inputs is not None:
            inputs.shutdown()

        renderer.shutdown()
