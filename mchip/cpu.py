#!/usr/bin/env python3

"""
CPU Interpreter (CHIP-8)

This is where the instructions are carried out.  The CPU holds no machine
state of its own: every call takes the Machine to work on, so the same CPU can
drive any number of machines, and a machine can be inspected or replaced at
any point between steps.

The CPU is wired to the host through two capabilities:
    * inputs - anything with an 'is_key_down(key)' method, keys 0x0 - 0xF, or None
    * audio  - anything with an 'enable_buzzer(enabled)' method, or None

Instructions are looked up in a 16-entry table indexed by the top nibble.  The
0, 8, E and F families are looked up a second time by their low byte or
nibble.  Anything that doesn't match a defined instruction does nothing at
all, unless the CPU was created with strict=True, in which case a CPUError is
raised.  The same goes for calling into a full stack or returning from an
empty one.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import APP_INTRO, FONT_GLYPH_SIZE, FONT_LOC, NUM_KEYS
from .debugger import Debugger
from .decoder import decode, fetch
from .timers import TimerUnit


class CPUError(Exception):
    pass


class CPU:
    def __init__(self, inputs, audio=None, debugger=None, strict=False):
        self.inputs = inputs
        self.audio = audio
        self.debugger = Debugger() if debugger is None else debugger
        self.live_debug = self.debugger.is_live()
        self.strict = strict
        self.timer_unit = TimerUnit(audio)

        # Define instruction pointers.
        # n = Nibble
        # kk = Byte
        # nnn = address
        # x/y = register (0-15)
        self.instructions = [
            # Initial lookup for instructions' first nibble
            self._0nnn,  # Looked up again by whole opcode
            self._1nnn,
            self._2nnn,
            self._3xkk,
            self._4xkk,
            self._5xy0,
            self._6xkk,
            self._7xkk,
            self._8nnn,  # Looked up again by low nibble
            self._9xy0,
            self._Annn,
            self._Bnnn,
            self._Cxkk,
            self._Dxyn,
            self._Ennn,  # Looked up again by low byte
            self._Fnnn   # Looked up again by low byte
        ]

        self.instructions_0 = {
            0x00E0: self._00E0,
            0x00EE: self._00EE
        }

        self.instructions_8 = {
            0x0: self._8xy0,
            0x1: self._8xy1,
            0x2: self._8xy2,
            0x3: self._8xy3,
            0x4: self._8xy4,
            0x5: self._8xy5,
            0x6: self._8xy6,
            0x7: self._8xy7,
            0xE: self._8xyE
        }

        self.instructions_E = {
            0x9E: self._Ex9E,
            0xA1: self._ExA1
        }

        self.instructions_F = {
            0x07: self._Fx07,
            0x0A: self._Fx0A,
            0x15: self._Fx15,
            0x18: self._Fx18,
            0x1E: self._Fx1E,
            0x29: self._Fx29,
            0x33: self._Fx33,
            0x55: self._Fx55,
            0x65: self._Fx65
        }

    def step(self, machine):
        """
        Attempt one instruction cycle.  Returns True if an instruction was
        executed, or False if the machine is still waiting for a keypress.
        """

        if machine.wait_key is not None and not self.resolve_key_wait(machine):
            return False

        location = machine.pc
        opcode = decode(fetch(machine.ram, location))
        machine.pc = (location + 2) & 0xFFF  # Program counter updates after fetch, but before execute

        if self.live_debug:
            self.debugger.output(machine, location, opcode)

        self.instructions[opcode.family](machine, opcode)
        return True

    def resolve_key_wait(self, machine):
        # Returns True once a key is down and its number has been stored.  Lowest key wins if several are held.
        if self.inputs is None:
            # No keypad, so never block.  The target register is left alone.
            machine.wait_key = None
            return True

        is_key_down = self.inputs.is_key_down

        for key in range(NUM_KEYS):
            if is_key_down(key):
                machine.v[machine.wait_key] = key
                machine.wait_key = None
                return True

        return False

    def update_timers(self, machine, delta_ms):
        return self.timer_unit.update(machine, delta_ms)

    def run_cycles(self, machine, cycles):
        # Convenience for hosts and tests.  Returns the number of instructions actually executed.
        executed = 0

        for _ in range(cycles):
            if self.step(machine):
                executed += 1

        return executed

    def _skip(self, machine):
        machine.pc = (machine.pc + 2) & 0xFFF

    def _opcode_unsupported(self, machine, opcode, reason="is not a defined instruction"):
        if not self.strict:
            return

        raise CPUError(
            (
                "Emulation halted.\n\n" +
                "{}Debug info:\n" +
                "{}\n\nOpcode 0x{:04x} at address 0x{:03x} {}."
            ).format(
                APP_INTRO, self.debugger.debug(machine, (machine.pc - 2) & 0xFFF, opcode, verbose=True),
                opcode.word, (machine.pc - 2) & 0xFFF, reason
            )
        )

    def _dispatch(self, table, key, machine, opcode):
        instruction = table.get(key)

        if instruction is None:
            self._opcode_unsupported(machine, opcode)
        else:
            instruction(machine, opcode)

    def _0nnn(self, machine, opcode):
        self._dispatch(self.instructions_0, opcode.word, machine, opcode)

    def _8nnn(self, machine, opcode):
        self._dispatch(self.instructions_8, opcode.nibble, machine, opcode)

    def _Ennn(self, machine, opcode):
        self._dispatch(self.instructions_E, opcode.byte, machine, opcode)

    def _Fnnn(self, machine, opcode):
        self._dispatch(self.instructions_F, opcode.byte, machine, opcode)

    def _00E0(self, machine, opcode):  # CLS
        machine.framebuffer.clear()

    def _00EE(self, machine, opcode):  # RET
        if machine.stack.is_empty():
            self._opcode_unsupported(machine, opcode, "returned with an empty stack")
            return

        machine.pc = machine.stack.pop()

    def _1nnn(self, machine, opcode):  # JP addr
        machine.pc = opcode.addr

    def _2nnn(self, machine, opcode):  # CALL addr
        if machine.stack.is_full():
            self._opcode_unsupported(machine, opcode, "called with a full stack")
            return

        machine.stack.push(machine.pc)
        machine.pc = opcode.addr

    def _3xkk(self, machine, opcode):  # SE Vx, byte
        if machine.v[opcode.x] == opcode.byte:
            self._skip(machine)

    def _4xkk(self, machine, opcode):  # SNE Vx, byte
        if machine.v[opcode.x] != opcode.byte:
            self._skip(machine)

    def _5xy0(self, machine, opcode):  # SE Vx, Vy
        # The low nibble is not checked, so 5xy1 - 5xyF behave the same
        if machine.v[opcode.x] == machine.v[opcode.y]:
            self._skip(machine)

    def _6xkk(self, machine, opcode):  # LD Vx, byte
        machine.v[opcode.x] = opcode.byte

    def _7xkk(self, machine, opcode):  # ADD Vx, byte
        # No carry flag for this one
        vx = opcode.x
        machine.v[vx] = (machine.v[vx] + opcode.byte) & 0xFF

    def _8xy0(self, machine, opcode):  # LD Vx, Vy
        machine.v[opcode.x] = machine.v[opcode.y]

    def _8xy1(self, machine, opcode):  # OR Vx, Vy
        machine.v[opcode.x] |= machine.v[opcode.y]

    def _8xy2(self, machine, opcode):  # AND Vx, Vy
        machine.v[opcode.x] &= machine.v[opcode.y]

    def _8xy3(self, machine, opcode):  # XOR Vx, Vy
        machine.v[opcode.x] ^= machine.v[opcode.y]

    # For the flag-setting instructions below, the flag is worked out from the operands before anything is written,
    # and Vf is written last.  If Vf is the destination, the flag overwrites the result.

    def _8xy4(self, machine, opcode):  # ADD Vx, Vy
        v = machine.v
        val = v[opcode.x] + v[opcode.y]
        v[opcode.x] = val & 0xFF
        v[0xF] = int(val > 0xFF)  # Vf is set when carrying.  With ADD Vf, Vy the flag wins, not the sum

    def _8xy5(self, machine, opcode):  # SUB Vx, Vy
        v = machine.v
        vx_val = v[opcode.x]
        vy_val = v[opcode.y]
        v[opcode.x] = (vx_val - vy_val) & 0xFF
        v[0xF] = int(vx_val > vy_val)  # Vf is set when NOT borrowing.  Equal operands count as a borrow

    def _8xy6(self, machine, opcode):  # SHR Vx
        v = machine.v
        val = v[opcode.x]
        v[opcode.x] = val >> 1
        v[0xF] = val & 1

    def _8xy7(self, machine, opcode):  # SUBN Vx, Vy
        v = machine.v
        vx_val = v[opcode.x]
        vy_val = v[opcode.y]
        v[opcode.x] = (vy_val - vx_val) & 0xFF
        v[0xF] = int(vy_val > vx_val)

    def _8xyE(self, machine, opcode):  # SHL Vx
        v = machine.v
        val = v[opcode.x]
        v[opcode.x] = (val << 1) & 0xFF
        v[0xF] = val >> 7

    def _9xy0(self, machine, opcode):  # SNE Vx, Vy
        if machine.v[opcode.x] != machine.v[opcode.y]:
            self._skip(machine)

    def _Annn(self, machine, opcode):  # LD I, addr
        machine.i = opcode.addr

    def _Bnnn(self, machine, opcode):  # JP V0, addr
        machine.pc = (machine.v[0] + opcode.addr) & 0xFFF

    def _Cxkk(self, machine, opcode):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        machine.v[opcode.x] = machine.rng.randint(0, 0xFF) & opcode.byte

    def _Dxyn(self, machine, opcode):  # DRW Vx, Vy, nibble
        # Sprites are always 8 pixels wide.  Every pixel wraps around the screen edges individually.
        v = machine.v
        ram = machine.ram
        xor_pixel = machine.framebuffer.xor_pixel
        # Coordinates are read once, before Vf changes, so DRW Vf, Vy starts at the old Vf column
        vx_pos = v[opcode.x]
        vy_pos = v[opcode.y]
        i = machine.i
        collided = False

        for y in range(opcode.nibble):
            spr_data = ram.read(i + y)

            for x in range(8):
                if spr_data & (0x80 >> x) and xor_pixel(vx_pos + x, vy_pos + y):
                    # Don't stop drawing.  Set the flag, and never unset it for this sprite.
                    collided = True

        v[0xF] = int(collided)

    def _Ex9E(self, machine, opcode):  # SKP Vx
        if self.inputs is not None and self.inputs.is_key_down(machine.v[opcode.x] & 0xF):
            self._skip(machine)

    def _ExA1(self, machine, opcode):  # SKNP Vx
        # Without a keypad neither skip instruction ever skips
        if self.inputs is not None and not self.inputs.is_key_down(machine.v[opcode.x] & 0xF):
            self._skip(machine)

    def _Fx07(self, machine, opcode):  # LD Vx, DT
        machine.v[opcode.x] = machine.dt

    def _Fx0A(self, machine, opcode):  # LD Vx, K
        # Nothing is fetched until a key is down.  The timers keep running, since they are driven separately.
        machine.wait_key = opcode.x

    def _Fx15(self, machine, opcode):  # LD DT, Vx
        machine.dt = machine.v[opcode.x]

    def _Fx18(self, machine, opcode):  # LD ST, Vx
        # The buzzer is switched on by the next timer tick
        machine.st = machine.v[opcode.x]

    def _Fx1E(self, machine, opcode):  # ADD I, Vx
        # No overflow flag.  The index register is 16 bits wide, even if only 12 are used for addressing.
        machine.i = (machine.i + machine.v[opcode.x]) & 0xFFFF

    def _Fx29(self, machine, opcode):  # LD F, Vx
        machine.i = FONT_LOC + (machine.v[opcode.x] & 0xF) * FONT_GLYPH_SIZE

    def _Fx33(self, machine, opcode):  # LD B, Vx
        val = machine.v[opcode.x]
        i = machine.i
        ram = machine.ram
        ram.write(i, val // 100)             # Most-significant digit
        ram.write(i + 1, (val // 10) % 10)   # Middle digit
        ram.write(i + 2, val % 10)           # Least-significant digit

    def _Fx55(self, machine, opcode):  # LD [I], Vx
        # The index register is left unchanged afterwards
        i = machine.i
        ram = machine.ram

        for reg in range(opcode.x + 1):
            ram.write(i + reg, machine.v[reg])

    def _Fx65(self, machine, opcode):  # LD Vx, [I]
        i = machine.i
        ram = machine.ram

        for reg in range(opcode.x + 1):
            machine.v[reg] = ram.read(i + reg)
