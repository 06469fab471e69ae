#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from c8emu.constants import DEFAULT_KEYMAP
from c8emu.inputs.i_null import Inputs, InputsError
from c8emu.renderers.r_null import Renderer


class TestInputs(unittest.TestCase):
    def setUp(self):
        self.renderer = Renderer()

    def test_inputs_default_keymap(self):
        inputs = Inputs(DEFAULT_KEYMAP, self.renderer)
        self.assertEqual(16, len(inputs.keymap_dict))
        self.assertEqual(0x0, inputs.keymap_dict[120])  # x
        self.assertEqual(0x1, inputs.keymap_dict[49])   # 1
        self.assertEqual(0xF, inputs.keymap_dict[118])  # v
        self.assertEqual(frozenset(), inputs.get_pressed_keys())
        self.assertFalse(inputs.process_messages())

    def test_inputs_force_lowercase(self):
        keymap = ",".join(str(ord(char)) for char in "X123QWEASDZC4RFV")
        inputs = Inputs(keymap, self.renderer, force_lowercase=True)
        self.assertEqual(0x0, inputs.keymap_dict[ord("x")])
        self.assertNotIn(ord("X"), inputs.keymap_dict)

    def test_inputs_wrong_count(self):
        self.assertRaises(InputsError, Inputs, "1,2,3", self.renderer)
        self.assertRaises(InputsError, Inputs, DEFAULT_KEYMAP + ",5", self.renderer)

    def test_inputs_not_integers(self):
        keymap = DEFAULT_KEYMAP.replace("120", "x")
        self.assertRaises(InputsError, Inputs, keymap, self.renderer)

    def test_inputs_duplicates(self):
        keymap = DEFAULT_KEYMAP.replace("49", "120")
        self.assertRaises(InputsError, Inputs, keymap, self.renderer)
