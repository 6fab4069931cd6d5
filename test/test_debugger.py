#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import io
import unittest
from contextlib import redirect_stdout
from mchip.constants import DEFAULT_KEYMAP
from mchip.cpu import CPU
from mchip.debugger import Debugger
from mchip.decoder import decode
from mchip.inputs.i_null import Inputs
from mchip.machine import Machine
from mchip.renderers.r_null import Renderer


class TestDebugger(unittest.TestCase):
    def setUp(self):
        self.debugger = Debugger()
        self.machine = Machine(seed=0)

    def test_debugger_line(self):
        self.machine.v[0xF] = 0x01
        self.machine.v[0x0] = 0xAB
        self.machine.i = 0x2FE
        self.machine.dt = 0x10
        debug_str = self.debugger.debug(self.machine, 0x200, decode(0x6105))
        self.assertEqual(
            "V: 0x01" + "00" * 14 + "ab I: 0x02fe DT: 0x10 ST: 0x00 PC: 0x200 OP: 0x6105 IN: LD V1, 0x05",
            debug_str
        )

    def test_debugger_verbose(self):
        debug_str = self.debugger.debug(self.machine, 0x200, decode(0x00EE), verbose=True)
        self.assertTrue(debug_str.endswith("\nStack: (Empty)"))

        self.machine.stack.push(0x202)
        self.machine.stack.push(0x30A)
        self.machine.wait_key = 0xB
        debug_str = self.debugger.debug(self.machine, 0x200, decode(0x00EE), verbose=True)
        self.assertIn("\nStack: 0x202 0x30a", debug_str)
        self.assertTrue(debug_str.endswith("\nWait: Vb"))

    def test_debugger_live(self):
        self.assertFalse(self.debugger.is_live())
        self.debugger.set_live(True)
        self.assertTrue(self.debugger.is_live())

        cpu = CPU(Inputs(DEFAULT_KEYMAP, Renderer()), debugger=self.debugger)
        self.machine.load_program(b"\x61\x05\x00\xE0")
        output = io.StringIO()

        with redirect_stdout(output):
            cpu.run_cycles(self.machine, 2)

        lines = output.getvalue().splitlines()
        self.assertEqual(2, len(lines))
        self.assertTrue(lines[0].endswith("PC: 0x200 OP: 0x6105 IN: LD V1, 0x05"))
        self.assertTrue(lines[1].endswith("PC: 0x202 OP: 0x00e0 IN: CLS"))


if __name__ == "__main__":
    unittest.main()
