#!/usr/bin/env python3

"""
Instruction Decoder

Every instruction is a 16-bit big-endian word.  The operand fields always sit
in the same bit positions, whichever instruction is being decoded:

    F000  family  - top nibble, selects the handler
    0FFF  addr    - 12-bit address (nnn)
    00FF  byte    - 8-bit immediate (kk)
    000F  nibble  - 4-bit immediate (n)
    0F00  x       - first register index
    00F0  y       - second register index

Any 16-bit value decodes, so there is nothing to validate here.  Working out
whether the fields name a real instruction is left to the CPU.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple

CPU_ENDIAN = "big"  # CHIP-8 is big-endian

Opcode = namedtuple("Opcode", ["word", "family", "addr", "byte", "nibble", "x", "y"])


def fetch(ram, location):
    # The second byte wraps to 0x000 if the first sits at the very top of memory
    return ram.read(location) << 8 | ram.read(location + 1)


def decode(word):
    return Opcode(
        word,
        (word & 0xF000) >> 12,
        word & 0xFFF,
        word & 0xFF,
        word & 0xF,
        (word & 0xF00) >> 8,
        (word & 0xF0) >> 4
    )


def encode(word):
    # Mainly for loaders and tests that build programs from lists of opcodes
    return word.to_bytes(2, CPU_ENDIAN, signed=False)


# Mnemonics by family.  Families 0, 8, E and F are looked up again by their low byte or nibble.
_MNEMONICS = {
    0x1: "JP 0x{addr:03x}",
    0x2: "CALL 0x{addr:03x}",
    0x3: "SE V{x:01x}, 0x{byte:02x}",
    0x4: "SNE V{x:01x}, 0x{byte:02x}",
    0x5: "SE V{x:01x}, V{y:01x}",
    0x6: "LD V{x:01x}, 0x{byte:02x}",
    0x7: "ADD V{x:01x}, 0x{byte:02x}",
    0x9: "SNE V{x:01x}, V{y:01x}",
    0xA: "LD I, 0x{addr:03x}",
    0xB: "JP V0, 0x{addr:03x}",
    0xC: "RND V{x:01x}, 0x{byte:02x}",
    0xD: "DRW V{x:01x}, V{y:01x}, 0x{nibble:01x}"
}

_MNEMONICS_0 = {
    0xE0: "CLS",
    0xEE: "RET"
}

_MNEMONICS_8 = {
    0x0: "LD V{x:01x}, V{y:01x}",
    0x1: "OR V{x:01x}, V{y:01x}",
    0x2: "AND V{x:01x}, V{y:01x}",
    0x3: "XOR V{x:01x}, V{y:01x}",
    0x4: "ADD V{x:01x}, V{y:01x}",
    0x5: "SUB V{x:01x}, V{y:01x}",
    0x6: "SHR V{x:01x}",
    0x7: "SUBN V{x:01x}, V{y:01x}",
    0xE: "SHL V{x:01x}"
}

_MNEMONICS_E = {
    0x9E: "SKP V{x:01x}",
    0xA1: "SKNP V{x:01x}"
}

_MNEMONICS_F = {
    0x07: "LD V{x:01x}, DT",
    0x0A: "LD V{x:01x}, K",
    0x15: "LD DT, V{x:01x}",
    0x18: "LD ST, V{x:01x}",
    0x1E: "ADD I, V{x:01x}",
    0x29: "LD F, V{x:01x}",
    0x33: "LD B, V{x:01x}",
    0x55: "LD [I], V{x:01x}",
    0x65: "LD V{x:01x}, [I]"
}


def disassemble(opcode):
    """
    Return the assembly mnemonic for a decoded opcode, or '???' if the opcode
    does not name a defined instruction.
    """

    family = opcode.family

    if family == 0x0:
        template = _MNEMONICS_0.get(opcode.byte) if opcode.x == 0 else None
    elif family == 0x8:
        template = _MNEMONICS_8.get(opcode.nibble)
    elif family == 0xE:
        template = _MNEMONICS_E.get(opcode.byte)
    elif family == 0xF:
        template = _MNEMONICS_F.get(opcode.byte)
    else:
        template = _MNEMONICS[family]

    if template is None:
        return "???"

    return template.format(**opcode._asdict())
