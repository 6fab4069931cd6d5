#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from mchip.decoder import decode, disassemble, encode, fetch
from mchip.ram import RAM


class TestDecoder(unittest.TestCase):
    def test_decoder_fields(self):
        opcode = decode(0xD12A)
        self.assertEqual(0xD12A, opcode.word)
        self.assertEqual(0xD, opcode.family)
        self.assertEqual(0x12A, opcode.addr)
        self.assertEqual(0x2A, opcode.byte)
        self.assertEqual(0xA, opcode.nibble)
        self.assertEqual(0x1, opcode.x)
        self.assertEqual(0x2, opcode.y)

    def test_decoder_fetch(self):
        ram = RAM(0x1000)
        ram.write_block(0x200, b"\xAB\xCD")
        self.assertEqual(0xABCD, fetch(ram, 0x200))

    def test_decoder_fetch_wrap(self):
        ram = RAM(0x1000)
        ram.write(0xFFF, 0x12)
        ram.write(0x000, 0x34)
        self.assertEqual(0x1234, fetch(ram, 0xFFF))

    def test_decoder_encode(self):
        self.assertEqual(b"\x80\x14", encode(0x8014))

    def test_decoder_disassemble(self):
        for word, mnemonic in (
                (0x00E0, "CLS"),
                (0x00EE, "RET"),
                (0x1ABC, "JP 0xabc"),
                (0x2300, "CALL 0x300"),
                (0x3A12, "SE Va, 0x12"),
                (0x5120, "SE V1, V2"),
                (0x8014, "ADD V0, V1"),
                (0x8016, "SHR V0"),
                (0xB200, "JP V0, 0x200"),
                (0xD125, "DRW V1, V2, 0x5"),
                (0xE39E, "SKP V3"),
                (0xF40A, "LD V4, K"),
                (0xFF65, "LD Vf, [I]")):
            with self.subTest(word="0x{:04x}".format(word)):
                self.assertEqual(mnemonic, disassemble(decode(word)))

    def test_decoder_disassemble_undefined(self):
        for word in 0x0000, 0x0123, 0x01E0, 0x8008, 0xE0A2, 0xF0FF:
            with self.subTest(word="0x{:04x}".format(word)):
                self.assertEqual("???", disassemble(decode(word)))


if __name__ == "__main__":
    unittest.main()
