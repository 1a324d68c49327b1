"""
CHIP-8 / SUPER-CHIP interpreter for SCHIP8.

Implements the 35 original CHIP-8 opcodes plus the SUPER-CHIP extensions
(scrolling, 128x64 mode, 16x16 sprites, large font, RPL user flags).

Key behaviours:

* Instruction words are big-endian: the byte at ``pc`` is the high byte.
* ``pc`` is masked to 12 bits after every instruction.
* CALL pushes the address of the CALL itself; RET pops it and adds two.
* The stack pointer wraps modulo 16 on push and pop.  There is no overflow
  or underflow detection.
* ``8xy6`` / ``8xyE`` shift ``vx`` in place and ignore ``vy``.  The original
  COSMAC VIP variant (shift ``vy`` into ``vx``) is kept as
  :meth:`Interpreter.shift_right_legacy` / :meth:`Interpreter.shift_left_legacy`
  but is never reached by :meth:`Interpreter.execute_cycle`.
* ``Fx0A`` does not advance ``pc`` until a key is held, so the instruction
  simply runs again on the next cycle.
* ``00FD`` (exit) performs a full reset instead of terminating.
"""

from __future__ import annotations

import logging
import random
from typing import Callable, Dict, List, Optional

from schip8.core.errors import RomTooLargeError, UnknownOpcodeError
from schip8.core.font_tables import HIRES_FONT, LORES_FONT
from schip8.core.frame_buffer import FrameBuffer
from schip8.core.types import (
    ADDRESS_MASK,
    FLAG_REGISTER,
    HIRES_FONT_START,
    HIRES_GLYPH_BYTES,
    LORES_FONT_START,
    LORES_GLYPH_BYTES,
    MAX_ROM_SIZE,
    NUM_KEYS,
    NUM_REGISTERS,
    NUM_RPL_FLAGS,
    PROGRAM_START,
    RAM_SIZE,
    STACK_SIZE,
    Mode,
)

logger = logging.getLogger(__name__)

# Scroll distance for 00FB / 00FC.
_SCROLL_COLUMNS: int = 4


class Interpreter:
    """CHIP-8 / SUPER-CHIP CPU, memory and display state.

    Parameters
    ----------
    rng:
        Source of randomness for ``Cxnn``.  Defaults to a fresh
        :class:`random.Random`; tests pass a seeded instance.
    """

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng: random.Random = rng if rng is not None else random.Random()

        # Cached ROM image so reset never has to touch the filesystem.
        self.rom: bytes = b""

        self._power_on()

        self._main_table: List[Callable[[], None]] = self._build_main_table()
        self._table_0: Dict[int, Callable[[], None]] = self._build_table_0()
        self._table_8: Dict[int, Callable[[], None]] = self._build_table_8()
        self._table_e: Dict[int, Callable[[], None]] = self._build_table_e()
        self._table_f: Dict[int, Callable[[], None]] = self._build_table_f()

    def _power_on(self) -> None:
        """Zero every piece of mutable state and reload both fonts."""
        self.mode: Mode = Mode.STANDARD
        self.opcode: int = 0x0000

        self.ram: bytearray = bytearray(RAM_SIZE)
        self.ram[LORES_FONT_START : LORES_FONT_START + len(LORES_FONT)] = LORES_FONT
        self.ram[HIRES_FONT_START : HIRES_FONT_START + len(HIRES_FONT)] = HIRES_FONT

        self.v: bytearray = bytearray(NUM_REGISTERS)
        self.index: int = 0x000
        self.pc: int = PROGRAM_START

        # stack[sp] is the next free slot; stack[sp - 1] is the top entry.
        self.stack: List[int] = [0] * STACK_SIZE
        self.sp: int = 0

        self.delay_timer: int = 0
        self.sound_timer: int = 0

        self.keys: List[bool] = [False] * NUM_KEYS
        self.rpl_flags: bytearray = bytearray(NUM_RPL_FLAGS)

        self.frame_buffer: FrameBuffer = FrameBuffer()
        # Sticky: set by any opcode that lights a pixel, cleared by the
        # emulation loop once it has published the frame.
        self.draw: bool = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def load_rom(self, rom: bytes) -> None:
        """Copy *rom* into RAM at the program start and cache it.

        Raises:
            RomTooLargeError: If *rom* is larger than :data:`MAX_ROM_SIZE`.
        """
        if len(rom) > MAX_ROM_SIZE:
            raise RomTooLargeError(len(rom), MAX_ROM_SIZE)
        self.rom = bytes(rom)
        self.ram[PROGRAM_START : PROGRAM_START + len(self.rom)] = self.rom
        logger.info("Loaded %d byte ROM at $%03X", len(self.rom), PROGRAM_START)

    def reset(self) -> None:
        """Return to the power-on state and reload the cached ROM."""
        self._power_on()
        self.load_rom(self.rom)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def width(self) -> int:
        """Width of the region addressed in the current mode."""
        return Mode.width(self.mode)

    @property
    def height(self) -> int:
        """Height of the region addressed in the current mode."""
        return Mode.height(self.mode)

    @property
    def beeping(self) -> bool:
        """``True`` while the sound timer is running."""
        return self.sound_timer > 0

    @property
    def frame(self):
        """The live ``(GFX_W, GFX_H)`` boolean pixel array."""
        return self.frame_buffer.pixels

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def fetch(self) -> int:
        """Read the big-endian instruction word at ``pc``."""
        hi = self.ram[self.pc & ADDRESS_MASK]
        lo = self.ram[(self.pc + 1) & ADDRESS_MASK]
        self.opcode = (hi << 8) | lo
        return self.opcode

    def execute(self, opcode: int) -> None:
        """Decode and execute a single instruction word.

        Raises:
            UnknownOpcodeError: If *opcode* matches no known instruction.
        """
        self.opcode = opcode & 0xFFFF
        self._main_table[self.opcode >> 12]()
        self.pc &= ADDRESS_MASK

    def execute_cycle(self) -> None:
        """Perform one fetch-decode-execute cycle."""
        self.execute(self.fetch())

    def update_timers(self) -> None:
        """Count both timers down by one, stopping at zero."""
        if self.delay_timer > 0:
            self.delay_timer -= 1
        if self.sound_timer > 0:
            self.sound_timer -= 1

    # ------------------------------------------------------------------
    # Operand fields
    # ------------------------------------------------------------------

    @property
    def _x(self) -> int:
        return (self.opcode >> 8) & 0xF

    @property
    def _y(self) -> int:
        return (self.opcode >> 4) & 0xF

    @property
    def _n(self) -> int:
        return self.opcode & 0xF

    @property
    def _nn(self) -> int:
        return self.opcode & 0xFF

    @property
    def _nnn(self) -> int:
        return self.opcode & 0xFFF

    def _next(self) -> None:
        self.pc += 2

    def _skip_if(self, cond: bool) -> None:
        self.pc += 4 if cond else 2

    # ------------------------------------------------------------------
    # 0nnn family -- screen and subroutine control
    # ------------------------------------------------------------------

    def op_00cn(self) -> None:
        """00Cn -- SCD: scroll the display down n rows."""
        self.frame_buffer.scroll_down(self._n)
        self.draw = True
        self._next()

    def op_00e0(self) -> None:
        """00E0 -- CLS: clear the display."""
        self.frame_buffer.clear()
        self.draw = True
        self._next()

    def op_00ee(self) -> None:
        """00EE -- RET: pop the return address and step past the CALL."""
        self.sp = (self.sp - 1) % STACK_SIZE
        self.pc = self.stack[self.sp] + 2

    def op_00fb(self) -> None:
        """00FB -- SCR: scroll the display right 4 pixels."""
        self.frame_buffer.scroll_right(_SCROLL_COLUMNS)
        self.draw = True
        self._next()

    def op_00fc(self) -> None:
        """00FC -- SCL: scroll the display left 4 pixels."""
        self.frame_buffer.scroll_left(_SCROLL_COLUMNS)
        self.draw = True
        self._next()

    def op_00fd(self) -> None:
        """00FD -- EXIT: reset the machine."""
        logger.info("EXIT at $%03X; resetting", self.pc)
        self.reset()

    def op_00fe(self) -> None:
        """00FE -- LOW: switch to standard (64x32) mode."""
        self.mode = Mode.STANDARD
        self._next()

    def op_00ff(self) -> None:
        """00FF -- HIGH: switch to super (128x64) mode."""
        self.mode = Mode.SUPER
        self._next()

    # ------------------------------------------------------------------
    # Jumps, calls and skips
    # ------------------------------------------------------------------

    def op_1nnn(self) -> None:
        """1nnn -- JP addr."""
        self.pc = self._nnn

    def op_2nnn(self) -> None:
        """2nnn -- CALL addr."""
        self.stack[self.sp] = self.pc
        self.sp = (self.sp + 1) % STACK_SIZE
        self.pc = self._nnn

    def op_3xnn(self) -> None:
        """3xnn -- SE vx, byte."""
        self._skip_if(self.v[self._x] == self._nn)

    def op_4xnn(self) -> None:
        """4xnn -- SNE vx, byte."""
        self._skip_if(self.v[self._x] != self._nn)

    def op_5xy0(self) -> None:
        """5xy0 -- SE vx, vy."""
        self._skip_if(self.v[self._x] == self.v[self._y])

    def op_9xy0(self) -> None:
        """9xy0 -- SNE vx, vy."""
        self._skip_if(self.v[self._x] != self.v[self._y])

    def op_bnnn(self) -> None:
        """Bnnn -- JP v0, addr."""
        self.pc = self._nnn + self.v[0]

    # ------------------------------------------------------------------
    # Immediate loads and arithmetic
    # ------------------------------------------------------------------

    def op_6xnn(self) -> None:
        """6xnn -- LD vx, byte."""
        self.v[self._x] = self._nn
        self._next()

    def op_7xnn(self) -> None:
        """7xnn -- ADD vx, byte (no carry flag)."""
        x = self._x
        self.v[x] = (self.v[x] + self._nn) & 0xFF
        self._next()

    def op_cxnn(self) -> None:
        """Cxnn -- RND vx, byte."""
        self.v[self._x] = self._rng.randrange(256) & self._nn
        self._next()

    # ------------------------------------------------------------------
    # 8xyn family -- register to register
    # ------------------------------------------------------------------

    def op_8xy0(self) -> None:
        """8xy0 -- LD vx, vy."""
        self.v[self._x] = self.v[self._y]
        self._next()

    def op_8xy1(self) -> None:
        """8xy1 -- OR vx, vy."""
        self.v[self._x] |= self.v[self._y]
        self._next()

    def op_8xy2(self) -> None:
        """8xy2 -- AND vx, vy."""
        self.v[self._x] &= self.v[self._y]
        self._next()

    def op_8xy3(self) -> None:
        """8xy3 -- XOR vx, vy."""
        self.v[self._x] ^= self.v[self._y]
        self._next()

    def op_8xy4(self) -> None:
        """8xy4 -- ADD vx, vy; vf = carry."""
        x = self._x
        total = self.v[x] + self.v[self._y]
        self.v[x] = total & 0xFF
        self.v[FLAG_REGISTER] = 1 if total > 0xFF else 0
        self._next()

    def op_8xy5(self) -> None:
        """8xy5 -- SUB vx, vy; vf = NOT borrow."""
        x = self._x
        vx = self.v[x]
        vy = self.v[self._y]
        self.v[x] = (vx - vy) & 0xFF
        self.v[FLAG_REGISTER] = 0 if vy > vx else 1
        self._next()

    def op_8xy6(self) -> None:
        """8xy6 -- SHR vx; vf = bit shifted out.  vy is ignored."""
        x = self._x
        self.v[FLAG_REGISTER] = self.v[x] & 0x01
        self.v[x] = self.v[x] >> 1
        self._next()

    def op_8xy7(self) -> None:
        """8xy7 -- SUBN vx, vy (vx = vy - vx); vf = NOT borrow."""
        x = self._x
        vx = self.v[x]
        vy = self.v[self._y]
        self.v[x] = (vy - vx) & 0xFF
        self.v[FLAG_REGISTER] = 0 if vx > vy else 1
        self._next()

    def op_8xye(self) -> None:
        """8xyE -- SHL vx; vf = bit shifted out.  vy is ignored."""
        x = self._x
        self.v[FLAG_REGISTER] = (self.v[x] >> 7) & 0x01
        self.v[x] = (self.v[x] << 1) & 0xFF
        self._next()

    # ------------------------------------------------------------------
    # COSMAC VIP shift variants (not wired into dispatch)
    # ------------------------------------------------------------------

    def shift_right_legacy(self, x: int, y: int) -> None:
        """8xy6 as on the COSMAC VIP: vx = vy >> 1, vf = low bit of vy."""
        vy = self.v[y]
        self.v[FLAG_REGISTER] = vy & 0x01
        self.v[x] = vy >> 1
        self._next()
        self.pc &= ADDRESS_MASK

    def shift_left_legacy(self, x: int, y: int) -> None:
        """8xyE as on the COSMAC VIP: vx = vy << 1, vf = high bit of vy."""
        vy = self.v[y]
        self.v[FLAG_REGISTER] = (vy >> 7) & 0x01
        self.v[x] = (vy << 1) & 0xFF
        self._next()
        self.pc &= ADDRESS_MASK

    # ------------------------------------------------------------------
    # Index register and drawing
    # ------------------------------------------------------------------

    def op_annn(self) -> None:
        """Annn -- LD I, addr."""
        self.index = self._nnn
        self._next()

    def op_dxyn(self) -> None:
        """Dxyn -- DRW vx, vy, n.

        XORs an 8xn sprite from ``ram[index]`` onto the canvas at
        ``(vx, vy)``.  ``n == 0`` draws 16 rows; in super mode those rows
        are 16 pixels (two bytes) wide.  Coordinates wrap around the
        region addressed by the current mode.
        """
        start_x = self.v[self._x]
        start_y = self.v[self._y]
        n = self._n
        sprite_w = 16 if n == 0 and self.mode == Mode.SUPER else 8
        sprite_h = 16 if n == 0 else n
        bytes_per_row = sprite_w // 8
        width = self.width
        height = self.height
        pixels = self.frame_buffer.pixels

        self.v[FLAG_REGISTER] = 0
        for row in range(sprite_h):
            gfx_y = (start_y + row) % height
            for col in range(bytes_per_row):
                addr = (self.index + row * bytes_per_row + col) & ADDRESS_MASK
                sprite_byte = self.ram[addr]
                if sprite_byte == 0:
                    continue
                for bit in range(8):
                    if not sprite_byte & (0x80 >> bit):
                        continue
                    gfx_x = (start_x + col * 8 + bit) % width
                    if pixels[gfx_x, gfx_y]:
                        pixels[gfx_x, gfx_y] = False
                        self.v[FLAG_REGISTER] = 1
                    else:
                        pixels[gfx_x, gfx_y] = True
                        self.draw = True
        self._next()

    # ------------------------------------------------------------------
    # Exnn family -- keypad skips
    # ------------------------------------------------------------------

    def op_ex9e(self) -> None:
        """Ex9E -- SKP vx."""
        self._skip_if(self.keys[self.v[self._x] & 0xF])

    def op_exa1(self) -> None:
        """ExA1 -- SKNP vx."""
        self._skip_if(not self.keys[self.v[self._x] & 0xF])

    # ------------------------------------------------------------------
    # Fxnn family -- timers, keypad wait, index and memory
    # ------------------------------------------------------------------

    def op_fx07(self) -> None:
        """Fx07 -- LD vx, DT."""
        self.v[self._x] = self.delay_timer
        self._next()

    def op_fx0a(self) -> None:
        """Fx0A -- LD vx, K: wait until a key is held.

        Captures the lowest-numbered held key.  With no key held ``pc`` is
        left alone so the instruction runs again next cycle.
        """
        for key, pressed in enumerate(self.keys):
            if pressed:
                self.v[self._x] = key
                self._next()
                return

    def op_fx15(self) -> None:
        """Fx15 -- LD DT, vx."""
        self.delay_timer = self.v[self._x]
        self._next()

    def op_fx18(self) -> None:
        """Fx18 -- LD ST, vx."""
        self.sound_timer = self.v[self._x]
        self._next()

    def op_fx1e(self) -> None:
        """Fx1E -- ADD I, vx; vf = 1 when I leaves the 12-bit range."""
        total = self.index + self.v[self._x]
        self.v[FLAG_REGISTER] = 1 if total > ADDRESS_MASK else 0
        self.index = total & ADDRESS_MASK
        self._next()

    def op_fx29(self) -> None:
        """Fx29 -- LD F, vx: point I at the 4x5 glyph for digit vx."""
        glyph = self.v[self._x] & 0xF
        self.index = LORES_FONT_START + glyph * LORES_GLYPH_BYTES
        self._next()

    def op_fx30(self) -> None:
        """Fx30 -- LD HF, vx: point I at the 8x10 glyph for digit vx."""
        glyph = self.v[self._x] & 0xF
        self.index = HIRES_FONT_START + glyph * HIRES_GLYPH_BYTES
        self._next()

    def op_fx33(self) -> None:
        """Fx33 -- LD B, vx: store the BCD digits of vx at I, I+1, I+2."""
        vx = self.v[self._x]
        self.ram[self.index & ADDRESS_MASK] = vx // 100
        self.ram[(self.index + 1) & ADDRESS_MASK] = (vx // 10) % 10
        self.ram[(self.index + 2) & ADDRESS_MASK] = vx % 10
        self._next()

    def op_fx55(self) -> None:
        """Fx55 -- LD [I], vx: store v0..vx at I.  I is unchanged."""
        for i in range(self._x + 1):
            self.ram[(self.index + i) & ADDRESS_MASK] = self.v[i]
        self._next()

    def op_fx65(self) -> None:
        """Fx65 -- LD vx, [I]: load v0..vx from I.  I is unchanged."""
        for i in range(self._x + 1):
            self.v[i] = self.ram[(self.index + i) & ADDRESS_MASK]
        self._next()

    def op_fx75(self) -> None:
        """Fx75 -- LD R, vx: save v0..vx to the RPL flags (x clamped to 7)."""
        for i in range(min(self._x, NUM_RPL_FLAGS - 1) + 1):
            self.rpl_flags[i] = self.v[i]
        self._next()

    def op_fx85(self) -> None:
        """Fx85 -- LD vx, R: restore v0..vx from the RPL flags (x clamped to 7)."""
        for i in range(min(self._x, NUM_RPL_FLAGS - 1) + 1):
            self.v[i] = self.rpl_flags[i]
        self._next()

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    def _unknown(self) -> None:
        raise UnknownOpcodeError(self.opcode, self.pc)

    def _dispatch_0(self) -> None:
        if self.opcode & 0x0FF0 == 0x00C0:
            self.op_00cn()
            return
        self._table_0.get(self.opcode & 0x0FFF, self._unknown)()

    def _dispatch_5(self) -> None:
        if self._n != 0:
            self._unknown()
        self.op_5xy0()

    def _dispatch_8(self) -> None:
        self._table_8.get(self._n, self._unknown)()

    def _dispatch_9(self) -> None:
        if self._n != 0:
            self._unknown()
        self.op_9xy0()

    def _dispatch_e(self) -> None:
        self._table_e.get(self._nn, self._unknown)()

    def _dispatch_f(self) -> None:
        self._table_f.get(self._nn, self._unknown)()

    def _build_main_table(self) -> List[Callable[[], None]]:
        """Handlers indexed by the top nibble of the instruction word."""
        return [
            self._dispatch_0,  # 0x0
            self.op_1nnn,      # 0x1
            self.op_2nnn,      # 0x2
            self.op_3xnn,      # 0x3
            self.op_4xnn,      # 0x4
            self._dispatch_5,  # 0x5
            self.op_6xnn,      # 0x6
            self.op_7xnn,      # 0x7
            self._dispatch_8,  # 0x8
            self._dispatch_9,  # 0x9
            self.op_annn,      # 0xA
            self.op_bnnn,      # 0xB
            self.op_cxnn,      # 0xC
            self.op_dxyn,      # 0xD
            self._dispatch_e,  # 0xE
            self._dispatch_f,  # 0xF
        ]

    def _build_table_0(self) -> Dict[int, Callable[[], None]]:
        return {
            0x0E0: self.op_00e0,
            0x0EE: self.op_00ee,
            0x0FB: self.op_00fb,
            0x0FC: self.op_00fc,
            0x0FD: self.op_00fd,
            0x0FE: self.op_00fe,
            0x0FF: self.op_00ff,
        }

    def _build_table_8(self) -> Dict[int, Callable[[], None]]:
        return {
            0x0: self.op_8xy0,
            0x1: self.op_8xy1,
            0x2: self.op_8xy2,
            0x3: self.op_8xy3,
            0x4: self.op_8xy4,
            0x5: self.op_8xy5,
            0x6: self.op_8xy6,
            0x7: self.op_8xy7,
            0xE: self.op_8xye,
        }

    def _build_table_e(self) -> Dict[int, Callable[[], None]]:
        return {
            0x9E: self.op_ex9e,
            0xA1: self.op_exa1,
        }

    def _build_table_f(self) -> Dict[int, Callable[[], None]]:
        return {
            0x07: self.op_fx07,
            0x0A: self.op_fx0a,
            0x15: self.op_fx15,
            0x18: self.op_fx18,
            0x1E: self.op_fx1e,
            0x29: self.op_fx29,
            0x30: self.op_fx30,
            0x33: self.op_fx33,
            0x55: self.op_fx55,
            0x65: self.op_fx65,
            0x75: self.op_fx75,
            0x85: self.op_fx85,
        }

    # ------------------------------------------------------------------
    # Debug / repr
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        return (
            f"Interpreter(PC=${self.pc:03X} I=${self.index:03X} "
            f"SP={self.sp} DT={self.delay_timer} ST={self.sound_timer} "
            f"mode={self.mode.name})"
        )
