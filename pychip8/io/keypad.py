"""CHIP-8 hexadecimal keypad latch."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Mapping

from pychip8.utils import debug_enabled, debug_log

KEY_COUNT = 16


KEY_MAP: Mapping[str, int] = {
    # physical key -> logical key
    "1": 0x1,
    "2": 0x2,
    "3": 0x3,
    "4": 0xC,
    "q": 0x4,
    "w": 0x5,
    "e": 0x6,
    "r": 0xD,
    "a": 0x7,
    "s": 0x8,
    "d": 0x9,
    "f": 0xE,
    "z": 0xA,
    "x": 0x0,
    "c": 0xB,
    "v": 0xF,
}


def lookup(key_name: str) -> int | None:
    """Return the logical key bound to a physical key name."""

    return KEY_MAP.get(key_name.lower())


@dataclass
class Keypad:
    """Sixteen held/released flags, overwritten by the host every cycle."""

    _held: List[bool] = field(default_factory=lambda: [False] * KEY_COUNT)

    def set_key(self, index: int, held: bool) -> None:
        if not 0 <= index < KEY_COUNT:
            raise ValueError(f"key index {index} out of range (0-15)")
        held = bool(held)
        if self._held[index] != held and debug_enabled("input"):
            debug_log("input", "key=%X held=%s", index, held)
        self._held[index] = held

    def is_pressed(self, index: int) -> bool:
        return self._held[index & 0xF]

    def any_pressed(self) -> bool:
        return any(self._held)

    def first_pressed(self) -> int | None:
        for index, held in enumerate(self._held):
            if held:
                return index
        return None

    def snapshot(self) -> tuple[bool, ...]:
        return tuple(self._held)

    def reset(self) -> None:
        self._held[:] = [False] * KEY_COUNT
