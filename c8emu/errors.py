#!/usr/bin/env python3

"""
Emulator Errors

Every fatal condition raised while running a program is an EmulatorError
carrying one of a small, closed set of kinds.  The frame loop can use the kind
to decide how to report the failure, but none of them can be recovered from.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from enum import Enum


class ErrorKind(Enum):
    UNKNOWN_INSTRUCTION = "unknown instruction"
    MEMORY_ACCESS = "invalid memory access"
    STACK_UNDERFLOW = "stack underflow"


class EmulatorError(Exception):
    def __init__(self, kind, detail=None):
        self.kind = kind
        self.detail = detail
        super().__init__(kind.value if detail is None else "{}: {}".format(kind.value, detail))
