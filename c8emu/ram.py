#!/usr/bin/env python3

"""
RAM Emulator

Supports reading and writing of blocks of memory or individual bytes.  Every
access is checked against the end of memory.  Nothing is ever wrapped or
clamped, so a program that reads or writes past the top of RAM is halted.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .errors import EmulatorError, ErrorKind


class RAMError(EmulatorError):
    def __init__(self, detail=None):
        super().__init__(ErrorKind.MEMORY_ACCESS, detail)


class RAM:
    def __init__(self, mem_size):
        self.mem = memoryview(bytearray(mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size

    def read(self, location):
        self.check_overflow(location)
        return self.mem[location]

    def read_block(self, location, size=1):
        self.check_overflow(location, size)
        return self.mem[location:location + size]

    def write(self, location, byte):
        self.check_overflow(location)
        self.mem[location] = byte

    def write_block(self, location, block):
        block_size = len(block)
        self.check_overflow(location, block_size)
        self.mem[location:location + block_size] = block

    def check_overflow(self, location, size=1):
        if location < 0 or location + size > self.mem_size:
            raise RAMError("0x{:04x} (+{}) is outside 0x000-0x{:03x}".format(location, size, self.mem_top))

    def clear(self):
        self.mem[:] = bytes(self.mem_size)
