#!/usr/bin/env python3

"""
Instruction Decoder

Turns a 16-bit big-endian instruction word into an Instruction: the operation
it performs plus whichever operand fields that operation uses.  Decoding has no
state, and every one of the 65536 possible words either decodes or raises an
EmulatorError of kind UNKNOWN_INSTRUCTION.  There is no fallback no-op.

The first nibble selects one of 16 classes.  Ten of those map to a single
operation.  The other six (0x0, 0x5, 0x8, 0x9, 0xE and 0xF) alias several
operations, so the word is masked and looked up again:

    0x0       : bitmask 0xFFFF (exact match)
    0x5/8/9   : bitmask 0xF00F
    0xE/F     : bitmask 0xF0FF

Operand field naming follows the usual convention:

    x/y = register (0-15), taken from the second and third nibbles
    kk  = byte, the low 8 bits
    nnn = address, the low 12 bits
    n   = nibble, the low 4 bits
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple
from enum import Enum
from functools import lru_cache
from .errors import EmulatorError, ErrorKind


class Op(Enum):
    CLS = "00E0"
    RET = "00EE"
    JP = "1nnn"
    CALL = "2nnn"
    SE_BYTE = "3xkk"
    SNE_BYTE = "4xkk"
    SE_REG = "5xy0"
    LD_BYTE = "6xkk"
    ADD_BYTE = "7xkk"
    LD_REG = "8xy0"
    OR = "8xy1"
    AND = "8xy2"
    XOR = "8xy3"
    ADD_REG = "8xy4"
    SUB = "8xy5"
    SHR = "8xy6"
    SUBN = "8xy7"
    SHL = "8xyE"
    SNE_REG = "9xy0"
    LD_I = "Annn"
    JP_V0 = "Bnnn"
    RND = "Cxkk"
    DRW = "Dxyn"
    SKP = "Ex9E"
    SKNP = "ExA1"
    LD_VX_DT = "Fx07"
    LD_VX_K = "Fx0A"
    LD_DT_VX = "Fx15"
    LD_ST_VX = "Fx18"
    ADD_I = "Fx1E"
    LD_F = "Fx29"
    LD_B = "Fx33"
    LD_MEM_VX = "Fx55"
    LD_VX_MEM = "Fx65"


# Unused operand fields are None
Instruction = namedtuple("Instruction", ["op", "vx", "vy", "byte", "addr", "nibble"], defaults=(None,) * 5)


# Operand extraction.  Vx, Vy, byte, addr and nibble are always in the same position throughout all instructions.
FIELD_EXTRACTORS = {
    "vx":     lambda opcode: (opcode & 0xF00) >> 8,
    "vy":     lambda opcode: (opcode & 0xF0) >> 4,
    "byte":   lambda opcode: opcode & 0xFF,
    "addr":   lambda opcode: opcode & 0xFFF,
    "nibble": lambda opcode: opcode & 0xF
}

NO_ARGS = ()
ADDR = ("addr",)
VX = ("vx",)
VX_BYTE = ("vx", "byte")
VX_VY = ("vx", "vy")
VX_VY_NIBBLE = ("vx", "vy", "nibble")

# Classes that only ever hold one operation, looked up by first nibble
PRIMARY_OPS = {
    0x1: (Op.JP, ADDR),
    0x2: (Op.CALL, ADDR),
    0x3: (Op.SE_BYTE, VX_BYTE),
    0x4: (Op.SNE_BYTE, VX_BYTE),
    0x6: (Op.LD_BYTE, VX_BYTE),
    0x7: (Op.ADD_BYTE, VX_BYTE),
    0xA: (Op.LD_I, ADDR),
    0xB: (Op.JP_V0, ADDR),
    0xC: (Op.RND, VX_BYTE),
    0xD: (Op.DRW, VX_VY_NIBBLE)
}

# Aliased classes, and the bitmask that tells their operations apart
CLASS_MASKS = {
    0x0: 0xFFFF,
    0x5: 0xF00F,
    0x8: 0xF00F,
    0x9: 0xF00F,
    0xE: 0xF0FF,
    0xF: 0xF0FF
}

MASKED_OPS = {
    # Instructions beginning with nibble 0x0, bitmask 0xFFFF (i.e., exact match)
    0x00E0: (Op.CLS, NO_ARGS),
    0x00EE: (Op.RET, NO_ARGS),
    # Instructions beginning with nibble 0x5/0x8/0x9, bitmask 0xF00F
    0x5000: (Op.SE_REG, VX_VY),
    0x8000: (Op.LD_REG, VX_VY),
    0x8001: (Op.OR, VX_VY),
    0x8002: (Op.AND, VX_VY),
    0x8003: (Op.XOR, VX_VY),
    0x8004: (Op.ADD_REG, VX_VY),
    0x8005: (Op.SUB, VX_VY),
    0x8006: (Op.SHR, VX_VY),
    0x8007: (Op.SUBN, VX_VY),
    0x800E: (Op.SHL, VX_VY),
    0x9000: (Op.SNE_REG, VX_VY),
    # Instructions beginning with nibble 0xE/0xF, bitmask 0xF0FF
    0xE09E: (Op.SKP, VX),
    0xE0A1: (Op.SKNP, VX),
    0xF007: (Op.LD_VX_DT, VX),
    0xF00A: (Op.LD_VX_K, VX),
    0xF015: (Op.LD_DT_VX, VX),
    0xF018: (Op.LD_ST_VX, VX),
    0xF01E: (Op.ADD_I, VX),
    0xF029: (Op.LD_F, VX),
    0xF033: (Op.LD_B, VX),
    0xF055: (Op.LD_MEM_VX, VX),
    0xF065: (Op.LD_VX_MEM, VX)
}


@lru_cache(maxsize=0x10000)
def decode(opcode):
    if not 0 <= opcode <= 0xFFFF:
        raise ValueError("Instruction words are 16 bits, got 0x{:x}".format(opcode))

    op_class = opcode >> 12
    mask = CLASS_MASKS.get(op_class)
    entry = PRIMARY_OPS.get(op_class) if mask is None else MASKED_OPS.get(opcode & mask)

    if entry is None:
        raise EmulatorError(ErrorKind.UNKNOWN_INSTRUCTION, "opcode 0x{:04x}".format(opcode))

    op, fields = entry
    return Instruction(op, **{field: FIELD_EXTRACTORS[field](opcode) for field in fields})
