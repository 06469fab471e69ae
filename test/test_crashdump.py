#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from c8emu.crashdump import crash_dump, format_opcode, format_registers, format_stack
from c8emu.emulator import Emulator


class TestCrashDump(unittest.TestCase):
    def setUp(self):
        # LD Vf, 0x12; CALL 0x206; JP 0x204; RET
        self.emulator = Emulator(400, b"\x6f\x12\x22\x06\x12\x04\x00\xee")

    def test_crashdump_registers(self):
        self.emulator.tick()
        registers = format_registers(self.emulator)
        self.assertTrue(registers.startswith("V: 0x12" + "00" * 15 + " I: 0x0000"))
        self.assertTrue(registers.endswith("DT: 0x00 ST: 0x00 PC: 0x200 OP: 0x6f12"))

    def test_crashdump_stack(self):
        self.emulator.tick()
        self.emulator.tick()
        self.assertTrue(crash_dump(self.emulator).endswith("PC: 0x202 OP: 0x2206\nStack: 0x204"))

    def test_crashdump_empty_stack(self):
        self.assertEqual("Stack: (Empty)", format_stack([]))
        self.assertEqual("Stack: 0x202 0x304", format_stack([0x202, 0x304]))

    def test_crashdump_no_opcode(self):
        # Nothing has been fetched yet
        self.assertEqual("----", format_opcode(None))
        self.assertTrue(format_registers(self.emulator).endswith("OP: 0x----"))
