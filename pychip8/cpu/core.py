"""CHIP-8 interpreter core: register file, call stack and executor."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from pychip8.bus import PROGRAM_START, Memory
from pychip8.io import Keypad
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import Framebuffer, glyph_address

from .opcodes import OPCODE_TABLE, DecodedInstruction, OpcodeTable, decode
from .rng import RandomSource
from .timers import TimerUnit


class CPUError(Exception):
    """Base error for interpreter failures."""


class StackUnderflowError(CPUError):
    """Raised when 00EE executes with an empty call stack."""


class StackOverflowError(CPUError):
    """Raised when a bounded call stack is full."""


FLAG_REGISTER = 0xF


class CallStack:
    """Return-address stack, unbounded unless ``capacity`` is given."""

    def __init__(self, capacity: int | None = None) -> None:
        if capacity is not None and capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._addresses: List[int] = []

    def push(self, address: int) -> None:
        if self.capacity is not None and len(self._addresses) >= self.capacity:
            raise StackOverflowError(f"call stack full ({self.capacity} entries) pushing {address:#06x}")
        self._addresses.append(address & 0xFFFF)

    def pop(self) -> int:
        if not self._addresses:
            raise StackUnderflowError("return with empty call stack")
        return self._addresses.pop()

    @property
    def depth(self) -> int:
        return len(self._addresses)

    def clear(self) -> None:
        self._addresses.clear()

    def clone(self) -> "CallStack":
        copy = CallStack(self.capacity)
        copy._addresses = list(self._addresses)
        return copy

    def __len__(self) -> int:
        return len(self._addresses)

    def __iter__(self):
        return iter(tuple(self._addresses))


@dataclass
class CPUState:
    """Snapshot of the CHIP-8 register file."""

    v: bytearray = field(default_factory=lambda: bytearray(16))
    i: int = 0x0000
    pc: int = PROGRAM_START
    stack: CallStack = field(default_factory=CallStack)

    def clone(self) -> "CPUState":
        return CPUState(bytearray(self.v), self.i, self.pc, self.stack.clone())


@dataclass
class Chip8CPU:
    """Fetch-decode-execute engine for the baseline CHIP-8 instruction set."""

    memory: Memory
    framebuffer: Framebuffer
    timers: TimerUnit
    keypad: Keypad
    rng: RandomSource = field(default_factory=RandomSource)
    instruction_table: OpcodeTable = field(default=OPCODE_TABLE)
    stack_capacity: int | None = None

    state: CPUState = field(init=False)
    cycle_count: int = 0
    waiting_for_key: bool = False

    def __post_init__(self) -> None:
        self.state = CPUState(stack=CallStack(self.stack_capacity))

    def reset(self) -> None:
        """Restore power-on register state; memory and display are untouched."""

        self.state = CPUState(stack=CallStack(self.stack_capacity))
        self.cycle_count = 0
        self.waiting_for_key = False

    def step(self) -> int:
        """Execute a single instruction and return the instruction word."""

        pc_before = self.state.pc
        word = self.memory.read_word(pc_before)
        self.state.pc = (pc_before + 2) & 0xFFFF

        decoded = decode(word)
        instruction = self.instruction_table.lookup(word)
        self.cycle_count += 1
        if instruction is None:
            if debug_enabled("cpu"):
                debug_log("cpu", "pc=%04x opcode=%04x ignored", pc_before, word)
            return word

        if debug_enabled("cpu"):
            debug_log("cpu", "pc=%04x opcode=%04x %s", pc_before, word, instruction.mnemonic)
        handler = getattr(self, instruction.handler, None)
        if handler is None:
            raise CPUError(f"handler '{instruction.handler}' not implemented")
        handler(decoded)
        return word

    # ------------------------------------------------------------------
    # Register helpers

    def get_register(self, index: int) -> int:
        return self.state.v[index]

    def set_register(self, index: int, value: int) -> None:
        self.state.v[index] = value & 0xFF

    def _skip_if(self, condition: bool) -> None:
        if condition:
            self.state.pc = (self.state.pc + 2) & 0xFFFF

    # ------------------------------------------------------------------
    # Flow control

    def op_cls(self, _: DecodedInstruction) -> None:
        self.framebuffer.clear()

    def op_ret(self, _: DecodedInstruction) -> None:
        self.state.pc = self.state.stack.pop()

    def op_jp(self, op: DecodedInstruction) -> None:
        self.state.pc = op.nnn

    def op_call(self, op: DecodedInstruction) -> None:
        self.state.stack.push(self.state.pc)
        self.state.pc = op.nnn

    def op_jp_offset(self, op: DecodedInstruction) -> None:
        self.state.pc = (op.nnn + self.state.v[0]) & 0xFFFF

    def op_se_imm(self, op: DecodedInstruction) -> None:
        self._skip_if(self.state.v[op.x] == op.nn)

    def op_sne_imm(self, op: DecodedInstruction) -> None:
        self._skip_if(self.state.v[op.x] != op.nn)

    def op_se_reg(self, op: DecodedInstruction) -> None:
        self._skip_if(self.state.v[op.x] == self.state.v[op.y])

    def op_sne_reg(self, op: DecodedInstruction) -> None:
        self._skip_if(self.state.v[op.x] != self.state.v[op.y])

    # ------------------------------------------------------------------
    # Register arithmetic

    def op_ld_imm(self, op: DecodedInstruction) -> None:
        self.set_register(op.x, op.nn)

    def op_add_imm(self, op: DecodedInstruction) -> None:
        # No carry flag for 7XNN.
        self.set_register(op.x, self.state.v[op.x] + op.nn)

    def op_ld_reg(self, op: DecodedInstruction) -> None:
        self.set_register(op.x, self.state.v[op.y])

    def op_or(self, op: DecodedInstruction) -> None:
        self.set_register(op.x, self.state.v[op.x] | self.state.v[op.y])

    def op_and(self, op: DecodedInstruction) -> None:
        self.set_register(op.x, self.state.v[op.x] & self.state.v[op.y])

    def op_xor(self, op: DecodedInstruction) -> None:
        self.set_register(op.x, self.state.v[op.x] ^ self.state.v[op.y])

    def op_add_reg(self, op: DecodedInstruction) -> None:
        total = self.state.v[op.x] + self.state.v[op.y]
        self.set_register(FLAG_REGISTER, 1 if total > 0xFF else 0)
        self.set_register(op.x, total)

    def op_sub(self, op: DecodedInstruction) -> None:
        vx = self.state.v[op.x]
        vy = self.state.v[op.y]
        self.set_register(op.x, vx - vy)
        self.set_register(FLAG_REGISTER, 1 if vx >= vy else 0)

    def op_subn(self, op: DecodedInstruction) -> None:
        # Result lands in VY, not VX.
        vx = self.state.v[op.x]
        vy = self.state.v[op.y]
        self.set_register(op.y, vy - vx)
        self.set_register(FLAG_REGISTER, 1 if vy >= vx else 0)

    def op_shr(self, op: DecodedInstruction) -> None:
        value = self.state.v[op.x]
        self.set_register(FLAG_REGISTER, value & 0x01)
        self.set_register(op.x, value >> 1)

    def op_shl(self, op: DecodedInstruction) -> None:
        value = self.state.v[op.x]
        self.set_register(FLAG_REGISTER, (value >> 7) & 0x01)
        self.set_register(op.x, value << 1)

    def op_rnd(self, op: DecodedInstruction) -> None:
        self.set_register(op.x, self.rng.nibble() & op.nn)

    # ------------------------------------------------------------------
    # Display

    def op_drw(self, op: DecodedInstruction) -> None:
        x = self.state.v[op.x] % self.framebuffer.width
        y = self.state.v[op.y] % self.framebuffer.height
        sprite = [self.memory.read(self.state.i + row) for row in range(op.n)]
        self.set_register(FLAG_REGISTER, 0)
        if self.framebuffer.draw_sprite(x, y, sprite):
            self.set_register(FLAG_REGISTER, 1)

    # ------------------------------------------------------------------
    # Keypad

    def op_skp(self, op: DecodedInstruction) -> None:
        self._skip_if(self.keypad.is_pressed(self.state.v[op.x]))

    def op_sknp(self, op: DecodedInstruction) -> None:
        self._skip_if(not self.keypad.is_pressed(self.state.v[op.x]))

    def op_wait_key(self, _: DecodedInstruction) -> None:
        if self.keypad.any_pressed():
            self.waiting_for_key = False
            return
        # Re-run this instruction on the next cycle.
        self.state.pc = (self.state.pc - 2) & 0xFFFF
        if not self.waiting_for_key and debug_enabled("input"):
            debug_log("input", "wait_key pc=%04x", self.state.pc)
        self.waiting_for_key = True

    # ------------------------------------------------------------------
    # Timers, index register and memory blocks

    def op_ld_from_delay(self, op: DecodedInstruction) -> None:
        self.set_register(op.x, self.timers.get_delay())

    def op_ld_delay(self, op: DecodedInstruction) -> None:
        self.timers.set_delay(self.state.v[op.x])

    def op_ld_sound(self, op: DecodedInstruction) -> None:
        self.timers.set_sound(self.state.v[op.x])

    def op_add_index(self, op: DecodedInstruction) -> None:
        self.state.i = (self.state.i + self.state.v[op.x]) & 0xFFFF

    def op_ld_index(self, op: DecodedInstruction) -> None:
        self.state.i = op.nnn

    def op_ld_font(self, op: DecodedInstruction) -> None:
        self.state.i = glyph_address(self.state.v[op.x])

    def op_bcd(self, op: DecodedInstruction) -> None:
        value = self.state.v[op.x]
        base = self.state.i
        self.memory.write(base, (value // 100) % 10)
        self.memory.write(base + 1, (value // 10) % 10)
        self.memory.write(base + 2, value % 10)

    def op_store_registers(self, op: DecodedInstruction) -> None:
        base = self.state.i
        for index in range(op.x + 1):
            self.memory.write(base + index, self.state.v[index])

    def op_load_registers(self, op: DecodedInstruction) -> None:
        base = self.state.i
        for index in range(op.x + 1):
            self.set_register(index, self.memory.read(base + index))
