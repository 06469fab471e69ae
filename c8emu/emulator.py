#!/usr/bin/env python3

"""
Execution Engine (CHIP-8)

Like a real computer, this is where most of the processing happens.  The
engine owns every piece of machine state: RAM, the V registers, the index
register, the program counter, the call stack, both timers, the framebuffer,
and the set of keys currently held down.

Each tick fetches two bytes at the program counter, advances the counter,
decodes the word and applies exactly one state transition.  A frame is a fixed
number of ticks, derived once from the clock speed, with the timers counted
down every so many ticks on the same derived ratio.

Nothing in here prints, sleeps or quits.  The first fatal EmulatorError is
raised to whoever is driving the frames, and the engine must not be driven
again afterwards.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from math import floor
from random import Random
from .audio.a_null import Audio
from .constants import FONT_GLYPH_SIZE, FONT_LOC, FPS, MEM_SIZE, NUM_KEYS, PROGRAM_LOC, SYSTEM_FONT
from .decoder import Op, decode
from .framebuffer import Framebuffer
from .ram import RAM
from .stack import Stack

CPU_ENDIAN = "big"  # CHIP-8 is big-endian
TIMER_FREQ = 60     # 60Hz emulated system timer refresh
I_BITMASK = 0xFFFF  # The index register is 16 bits wide
VF = 0xF            # Carry, borrow, shift-out and collision flag


def ticks_per_interval(clock_speed, frequency):
    # Rounds half away from zero, so 150 ops/second gives 3 ticks at 60Hz, not 2.
    # Never less than 1, even below 30 ops/second.
    return max(1, floor(clock_speed / frequency + 0.5))


class Emulator:
    def __init__(self, clock_speed, program, audio=None, rng=None):
        if clock_speed <= 0:
            raise ValueError("Clock speed must be a positive number of operations/second")

        # Both are derived from the same ratio, but kept apart as the frame loop and timers are separate concerns
        self.ticks_per_frame = ticks_per_interval(clock_speed, FPS)
        self.timer_interval = ticks_per_interval(clock_speed, TIMER_FREQ)
        self.inst_count = 0  # Instructions executed since the timers were last updated

        self.ram = RAM(MEM_SIZE)
        self.ram.write_block(PROGRAM_LOC, bytes(program))  # Raises RAMError if the program is too large
        self.ram.write_block(FONT_LOC, SYSTEM_FONT)
        self.stack = Stack()
        self.framebuffer = Framebuffer()
        self.audio = Audio() if audio is None else audio
        self.rng = Random() if rng is None else rng

        # Initialise registers
        self.v = memoryview(bytearray(16))  # Bytearrays are mutable, so this should be fast when a register is updated
        self.i = 0  # Index register

        # Initialise timers
        self.dt = 0  # Delay timer
        self.st = 0  # Sound timer
        self.buzzer_on = False

        # Initialise program counter and current opcode
        self.pc = PROGRAM_LOC
        self.debug_pc = PROGRAM_LOC
        self.opcode = None

        self.keys_pressed = frozenset()
        self.redraw = False

        self.instructions = {
            Op.CLS:       self._00E0,
            Op.RET:       self._00EE,
            Op.JP:        self._1nnn,
            Op.CALL:      self._2nnn,
            Op.SE_BYTE:   self._3xkk,
            Op.SNE_BYTE:  self._4xkk,
            Op.SE_REG:    self._5xy0,
            Op.LD_BYTE:   self._6xkk,
            Op.ADD_BYTE:  self._7xkk,
            Op.LD_REG:    self._8xy0,
            Op.OR:        self._8xy1,
            Op.AND:       self._8xy2,
            Op.XOR:       self._8xy3,
            Op.ADD_REG:   self._8xy4,
            Op.SUB:       self._8xy5,
            Op.SHR:       self._8xy6,
            Op.SUBN:      self._8xy7,
            Op.SHL:       self._8xyE,
            Op.SNE_REG:   self._9xy0,
            Op.LD_I:      self._Annn,
            Op.JP_V0:     self._Bnnn,
            Op.RND:       self._Cxkk,
            Op.DRW:       self._Dxyn,
            Op.SKP:       self._Ex9E,
            Op.SKNP:      self._ExA1,
            Op.LD_VX_DT:  self._Fx07,
            Op.LD_VX_K:   self._Fx0A,
            Op.LD_DT_VX:  self._Fx15,
            Op.LD_ST_VX:  self._Fx18,
            Op.ADD_I:     self._Fx1E,
            Op.LD_F:      self._Fx29,
            Op.LD_B:      self._Fx33,
            Op.LD_MEM_VX: self._Fx55,
            Op.LD_VX_MEM: self._Fx65
        }

    # Flag register.  Only ADD Vx, Vy / SUB / SUBN / SHR / SHL and DRW write to it, always after their result.
    @property
    def vf(self):
        return self.v[VF]

    @vf.setter
    def vf(self, value):
        self.v[VF] = value

    # Frame-level interface for the host

    def set_keys_pressed(self, keys):
        keys = frozenset(keys)

        for key in keys:
            if not 0 <= key < NUM_KEYS:
                raise ValueError("Key {!r} is outside 0x0-0xf".format(key))

        self.keys_pressed = keys

    def should_redraw(self):
        return self.redraw

    def get_framebuffer(self):
        return self.framebuffer.get_rows()

    def run_frame(self):
        # Any EmulatorError stops the frame part-way through
        redraw = False

        for _ in range(self.ticks_per_frame):
            redraw = self.tick() or redraw
            self.inst_count += 1

            if self.inst_count >= self.timer_interval:
                self.update_timers()
                self.inst_count = 0

        self.redraw = redraw

    def tick(self):
        # Returns True if the display needs redrawing
        self.debug_pc = self.pc  # Keep track of the program counter before altering it, in case there is a crash
        self.opcode = None  # Stays unset if the fetch fails
        self.opcode = self.fetch()
        self.inc_pc()  # Program counter updates after fetch, but before execute
        instruction = decode(self.opcode)
        return bool(self.instructions[instruction.op](instruction))

    def fetch(self):
        return int.from_bytes(self.ram.read_block(self.pc, 2), CPU_ENDIAN, signed=False)

    def inc_pc(self):
        self.pc += 2

    def dec_pc(self):
        # Only used to re-run the key wait instruction
        self.pc -= 2

    def update_timers(self):
        # Both timers stop at zero
        if self.dt > 0:
            self.dt -= 1

        if self.st > 0:
            self.st -= 1

            if self.st == 0:
                # Audio timer just reached zero.  Stop the audio.
                self._set_buzzer(False)

    def _set_buzzer(self, enabled):
        # Only pass on changes, so the audio system sees a single start and a single stop
        if enabled != self.buzzer_on:
            self.audio.enable_buzzer(enabled)
            self.buzzer_on = enabled

    def _skip(self):
        self.inc_pc()

    def _00E0(self, ins):  # CLS
        self.framebuffer.clear()
        return True

    def _00EE(self, ins):  # RET
        self.pc = self.stack.pop()

    def _1nnn(self, ins):  # JP addr
        self.pc = ins.addr

    def _2nnn(self, ins):  # CALL addr
        self.stack.push(self.pc)
        self.pc = ins.addr

    def _3xkk(self, ins):  # SE Vx, byte
        if self.v[ins.vx] == ins.byte:
            self._skip()

    def _4xkk(self, ins):  # SNE Vx, byte
        if self.v[ins.vx] != ins.byte:
            self._skip()

    def _5xy0(self, ins):  # SE Vx, Vy
        if self.v[ins.vx] == self.v[ins.vy]:
            self._skip()

    def _6xkk(self, ins):  # LD Vx, byte
        self.v[ins.vx] = ins.byte

    def _7xkk(self, ins):  # ADD Vx, byte
        # No flag
        self.v[ins.vx] = (self.v[ins.vx] + ins.byte) & 0xFF

    def _8xy0(self, ins):  # LD Vx, Vy
        self.v[ins.vx] = self.v[ins.vy]

    def _8xy1(self, ins):  # OR Vx, Vy
        self.v[ins.vx] |= self.v[ins.vy]

    def _8xy2(self, ins):  # AND Vx, Vy
        self.v[ins.vx] &= self.v[ins.vy]

    def _8xy3(self, ins):  # XOR Vx, Vy
        self.v[ins.vx] ^= self.v[ins.vy]

    def _8xy4(self, ins):  # ADD Vx, Vy
        val = self.v[ins.vx] + self.v[ins.vy]
        self.v[ins.vx] = val & 0xFF
        # Vf is set when carrying, and this should happen AFTER Vx is set, as sometimes VF is specified in the
        # parameters
        self.vf = int(val > 0xFF)

    def _post_8xy5_8xy7(self, ins, minuend, subtrahend):  # Post-SUB/SUBN
        self.v[ins.vx] = (minuend - subtrahend) & 0xFF
        # Vf is set when NOT borrowing.  Equal operands count as a borrow.
        self.vf = int(minuend > subtrahend)

    def _8xy5(self, ins):  # SUB Vx, Vy
        self._post_8xy5_8xy7(ins, self.v[ins.vx], self.v[ins.vy])

    def _8xy6(self, ins):  # SHR Vx, Vy
        # Vy is shifted, and the result is put in Vx either way
        val = self.v[ins.vy]
        self.v[ins.vx] = val >> 1
        self.vf = val & 1

    def _8xy7(self, ins):  # SUBN Vx, Vy
        self._post_8xy5_8xy7(ins, self.v[ins.vy], self.v[ins.vx])

    def _8xyE(self, ins):  # SHL Vx, Vy
        val = self.v[ins.vy]
        self.v[ins.vx] = (val << 1) & 0xFF
        self.vf = val >> 7

    def _9xy0(self, ins):  # SNE Vx, Vy
        if self.v[ins.vx] != self.v[ins.vy]:
            self._skip()

    def _Annn(self, ins):  # LD I, addr
        self.i = ins.addr

    def _Bnnn(self, ins):  # JP V0, addr
        # Not masked.  Jumping off the top of RAM is caught on the next fetch.
        self.pc = ins.addr + self.v[0]

    def _Cxkk(self, ins):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.v[ins.vx] = self.rng.randint(0, 0xFF) & ins.byte

    def _Dxyn(self, ins):  # DRW Vx, Vy, nibble
        sprite = self.ram.read_block(self.i, ins.nibble)
        self.vf = int(self.framebuffer.draw_sprite(self.v[ins.vx], self.v[ins.vy], sprite))
        return True

    def _Ex9E(self, ins):  # SKP Vx
        # Values above 0xF can never be held down
        if self.v[ins.vx] in self.keys_pressed:
            self._skip()

    def _ExA1(self, ins):  # SKNP Vx
        if self.v[ins.vx] not in self.keys_pressed:
            self._skip()

    def _Fx07(self, ins):  # LD Vx, DT
        self.v[ins.vx] = self.dt

    def _Fx0A(self, ins):  # LD Vx, K
        # This opcode waits for a keypress, but since the timers still need to expire and the display still needs
        # updating, we return control and step the program counter back onto this instruction.  It only completes
        # when exactly one key is held.
        if len(self.keys_pressed) == 1:
            (key,) = self.keys_pressed
            self.v[ins.vx] = key
        else:
            self.dec_pc()

    def _Fx15(self, ins):  # LD DT, Vx
        self.dt = self.v[ins.vx]

    def _Fx18(self, ins):  # LD ST, Vx
        st = self.v[ins.vx]
        self.st = st
        # Allow the program to start the buzzer, or immediately stop it before the sound timer hits zero
        self._set_buzzer(st > 0)

    def _Fx1E(self, ins):  # ADD I, Vx
        self.i = (self.i + self.v[ins.vx]) & I_BITMASK

    def _Fx29(self, ins):  # LD F, Vx
        self.i = FONT_LOC + FONT_GLYPH_SIZE * self.v[ins.vx]

    def _Fx33(self, ins):  # LD B, Vx
        val = self.v[ins.vx]
        self.ram.write_block(self.i, bytes((val // 100, (val // 10) % 10, val % 10)))

    def _Fx55(self, ins):  # LD [I], Vx
        # Ensure with +1s that the final register is copied.  I is left alone.
        self.ram.write_block(self.i, self.v[:ins.vx + 1])

    def _Fx65(self, ins):  # LD Vx, [I]
        self.v[:ins.vx + 1] = self.ram.read_block(self.i, ins.vx + 1)
