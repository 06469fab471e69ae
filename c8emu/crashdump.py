#!/usr/bin/env python3

"""
Crash Dump

Formats the machine state at the point emulation halted, for the error report:

    V:     V registers, Vf first, down to V0
    I:     Index register
    DT:    Delay timer
    ST:    Sound timer
    PC:    Address of the failing instruction
    OP:    Raw instruction word, or ---- if it could not be fetched
    Stack: Return addresses, oldest first
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

REGISTER_ORDER = range(15, -1, -1)


def format_opcode(opcode):
    return "----" if opcode is None else "{:04x}".format(opcode)


def format_registers(emulator):
    registers = "".join("{:02x}".format(emulator.v[reg_num]) for reg_num in REGISTER_ORDER)
    return "V: 0x{} I: 0x{:04x} DT: 0x{:02x} ST: 0x{:02x} PC: 0x{:03x} OP: 0x{}".format(
        registers, emulator.i, emulator.dt, emulator.st, emulator.debug_pc, format_opcode(emulator.opcode)
    )


def format_stack(items):
    if not items:
        return "Stack: (Empty)"

    return "Stack: " + " ".join("0x{:03x}".format(item) for item in items)


def crash_dump(emulator):
    return "{}\n{}".format(format_registers(emulator), format_stack(emulator.stack.get_items()))
