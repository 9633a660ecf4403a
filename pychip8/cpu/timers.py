"""Delay and sound timers for the CHIP-8 interpreter."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class TimerUnit:
    """Two independent 8-bit down counters.

    The host calls :meth:`tick` at 60 Hz; the instruction clock never touches
    the counters except through the FX07/FX15/FX18 accessors.
    """

    delay: int = 0
    sound: int = 0

    def tick(self) -> None:
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1

    def set_delay(self, value: int) -> None:
        self.delay = value & 0xFF

    def set_sound(self, value: int) -> None:
        self.sound = value & 0xFF

    def get_delay(self) -> int:
        return self.delay

    def get_sound(self) -> int:
        return self.sound

    @property
    def sound_active(self) -> bool:
        return self.sound > 0

    def reset(self) -> None:
        self.delay = 0
        self.sound = 0
