#!/usr/bin/env python3

"""
Stack Emulator

It is unnecessary to include the CPU call stack as part of system RAM, because
there is no specified location for it.  There is also no stack pointer (SP)
register exposed to the running program.  This means we can simply wrap a list
to fully (and quickly) emulate it.

The stack has no fixed depth.  Returning with nothing on it is fatal.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .errors import EmulatorError, ErrorKind


class StackError(EmulatorError):
    def __init__(self, detail=None):
        super().__init__(ErrorKind.STACK_UNDERFLOW, detail)


class Stack:
    def __init__(self):
        self.items = []

    def push(self, item):
        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackError("return with an empty call stack") from None

    def get_items(self):
        # For debugging
        return self.items

    def __len__(self):
        return len(self.items)
