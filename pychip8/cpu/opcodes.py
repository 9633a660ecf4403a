"""Instruction decoding and opcode metadata for the CHIP-8 interpreter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Final, Iterable, Sequence, Tuple


@dataclass(frozen=True)
class DecodedInstruction:
    """A 16-bit instruction word split into its nibble fields."""

    word: int
    n1: int
    x: int
    y: int
    n: int
    nn: int
    nnn: int


def decode(word: int) -> DecodedInstruction:
    """Split ``word`` into nibbles plus the low-byte and low-12-bit aggregates."""

    word &= 0xFFFF
    return DecodedInstruction(
        word=word,
        n1=(word >> 12) & 0xF,
        x=(word >> 8) & 0xF,
        y=(word >> 4) & 0xF,
        n=word & 0xF,
        nn=word & 0xFF,
        nnn=word & 0xFFF,
    )


@dataclass(frozen=True)
class Instruction:
    """Metadata describing one instruction form.

    ``pattern`` is compared against the instruction word after applying
    ``mask``; the operand nibbles are the bits cleared in ``mask``.
    """

    pattern: int
    mask: int
    mnemonic: str
    handler: str

    def __post_init__(self) -> None:
        if not 0 <= self.pattern <= 0xFFFF or not 0 <= self.mask <= 0xFFFF:
            raise ValueError(f"pattern out of range: {self.pattern:#x}/{self.mask:#x}")
        if self.pattern & ~self.mask:
            raise ValueError(f"pattern {self.pattern:#06x} has bits outside mask {self.mask:#06x}")

    def matches(self, word: int) -> bool:
        return (word & self.mask) == self.pattern


class OpcodeTable:
    """Lookup table keyed by ``(mask, word & mask)``."""

    def __init__(self, instructions: Iterable[Instruction]) -> None:
        self._entries: Dict[Tuple[int, int], Instruction] = {}
        masks: list[int] = []
        for instruction in instructions:
            key = (instruction.mask, instruction.pattern)
            if key in self._entries:
                existing = self._entries[key]
                raise ValueError(
                    f"pattern {instruction.pattern:#06x} already registered as {existing.mnemonic}")
            self._entries[key] = instruction
            if instruction.mask not in masks:
                masks.append(instruction.mask)
        # Most specific masks first so 00E0 is never shadowed by a wider entry.
        self._masks: Sequence[int] = tuple(sorted(masks, key=lambda m: bin(m).count("1"), reverse=True))

    def lookup(self, word: int) -> Instruction | None:
        word &= 0xFFFF
        for mask in self._masks:
            instruction = self._entries.get((mask, word & mask))
            if instruction is not None:
                return instruction
        return None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries.values())


_EXACT: Final[int] = 0xFFFF
_LEADING: Final[int] = 0xF000
_LEADING_LAST: Final[int] = 0xF00F
_LEADING_LOW_BYTE: Final[int] = 0xF0FF


DEFAULT_INSTRUCTIONS: Sequence[Instruction] = (
    Instruction(0x00E0, _EXACT, "CLS", "op_cls"),
    Instruction(0x00EE, _EXACT, "RET", "op_ret"),
    Instruction(0x1000, _LEADING, "JP", "op_jp"),
    Instruction(0x2000, _LEADING, "CALL", "op_call"),
    Instruction(0x3000, _LEADING, "SE", "op_se_imm"),
    Instruction(0x4000, _LEADING, "SNE", "op_sne_imm"),
    # 5XY0 and 9XY0 ignore the last nibble.
    Instruction(0x5000, _LEADING, "SE", "op_se_reg"),
    Instruction(0x6000, _LEADING, "LD", "op_ld_imm"),
    Instruction(0x7000, _LEADING, "ADD", "op_add_imm"),
    # ALU
    Instruction(0x8000, _LEADING_LAST, "LD", "op_ld_reg"),
    Instruction(0x8001, _LEADING_LAST, "OR", "op_or"),
    Instruction(0x8002, _LEADING_LAST, "AND", "op_and"),
    Instruction(0x8003, _LEADING_LAST, "XOR", "op_xor"),
    Instruction(0x8004, _LEADING_LAST, "ADD", "op_add_reg"),
    Instruction(0x8005, _LEADING_LAST, "SUB", "op_sub"),
    Instruction(0x8006, _LEADING_LAST, "SHR", "op_shr"),
    Instruction(0x8007, _LEADING_LAST, "SUBN", "op_subn"),
    Instruction(0x800E, _LEADING_LAST, "SHL", "op_shl"),
    Instruction(0x9000, _LEADING, "SNE", "op_sne_reg"),
    Instruction(0xA000, _LEADING, "LD", "op_ld_index"),
    Instruction(0xB000, _LEADING, "JP", "op_jp_offset"),
    Instruction(0xC000, _LEADING, "RND", "op_rnd"),
    Instruction(0xD000, _LEADING, "DRW", "op_drw"),
    # Keypad
    Instruction(0xE09E, _LEADING_LOW_BYTE, "SKP", "op_skp"),
    Instruction(0xE0A1, _LEADING_LOW_BYTE, "SKNP", "op_sknp"),
    # Timers, index and memory blocks
    Instruction(0xF007, _LEADING_LOW_BYTE, "LD", "op_ld_from_delay"),
    Instruction(0xF00A, _LEADING_LOW_BYTE, "LD", "op_wait_key"),
    Instruction(0xF015, _LEADING_LOW_BYTE, "LD", "op_ld_delay"),
    Instruction(0xF018, _LEADING_LOW_BYTE, "LD", "op_ld_sound"),
    Instruction(0xF01E, _LEADING_LOW_BYTE, "ADD", "op_add_index"),
    Instruction(0xF029, _LEADING_LOW_BYTE, "LD", "op_ld_font"),
    Instruction(0xF033, _LEADING_LOW_BYTE, "LD", "op_bcd"),
    Instruction(0xF055, _LEADING_LOW_BYTE, "LD", "op_store_registers"),
    Instruction(0xF065, _LEADING_LOW_BYTE, "LD", "op_load_registers"),
)


OPCODE_TABLE: OpcodeTable = OpcodeTable(DEFAULT_INSTRUCTIONS)


def lookup(word: int) -> Instruction | None:
    """Return the instruction form for ``word`` or ``None`` when unrecognised."""

    return OPCODE_TABLE.lookup(word)
