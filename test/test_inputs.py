#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from mchip.constants import DEFAULT_KEYMAP
from mchip.inputs.i_null import Inputs, InputsError, parse_keymap
from mchip.renderers.r_null import Renderer


class TestInputs(unittest.TestCase):
    def test_inputs_default_keymap(self):
        keymap_dict = parse_keymap(DEFAULT_KEYMAP)
        self.assertEqual(16, len(keymap_dict))
        self.assertEqual(0x0, keymap_dict[ord("x")])
        self.assertEqual(0x1, keymap_dict[ord("1")])
        self.assertEqual(0xC, keymap_dict[ord("4")])
        self.assertEqual(0xF, keymap_dict[ord("v")])

    def test_inputs_keymap_wrong_count(self):
        self.assertRaises(InputsError, parse_keymap, "1,2,3")

    def test_inputs_keymap_not_integers(self):
        self.assertRaises(InputsError, parse_keymap, ",".join(["a"] * 16))

    def test_inputs_keymap_duplicates(self):
        self.assertRaises(InputsError, parse_keymap, ",".join(["65"] * 16))

    def test_inputs_keymap_lowercase(self):
        keymap = ",".join(str(code) for code in range(65, 81))  # 'A' - 'P'
        keymap_dict = parse_keymap(keymap, force_lowercase=True)
        self.assertEqual(0x0, keymap_dict[ord("a")])
        self.assertNotIn(ord("A"), keymap_dict)

    def test_inputs_keymap_lowercase_duplicates(self):
        # 'A' and 'a' are the same key once lowercased
        keymap = ",".join(["65", "97"] + [str(code) for code in range(48, 62)])
        self.assertRaises(InputsError, parse_keymap, keymap, True)

    def test_inputs_null(self):
        inputs = Inputs(DEFAULT_KEYMAP, Renderer())
        self.assertFalse(inputs.process_messages())

        for key in range(16):
            self.assertFalse(inputs.is_key_down(key))

        inputs.shutdown()


if __name__ == "__main__":
    unittest.main()
