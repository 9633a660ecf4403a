"""CHIP-8 machine assembly and host entry points."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pychip8.bus import Memory
from pychip8.cpu import Chip8CPU, RandomSource, TimerUnit
from pychip8.io import Keypad
from pychip8.loader import ProgramImage, load_program
from pychip8.video import FONT, FONT_BASE, Framebuffer


@dataclass
class MachineConfig:
    """Runtime configuration for the CHIP-8 machine."""

    program: Optional[bytes] = None
    program_name: str = ""
    rng_seed: Optional[int] = None
    stack_capacity: Optional[int] = None


@dataclass
class Machine:
    """Aggregates the components owned by one interpreter instance."""

    memory: Memory
    cpu: Chip8CPU
    framebuffer: Framebuffer
    timers: TimerUnit
    keypad: Keypad
    program: ProgramImage | None = None

    def update(self) -> int:
        """Run exactly one fetch-decode-execute cycle."""

        return self.cpu.step()

    def tick_timers(self) -> None:
        """Run exactly one 60 Hz timer decrement."""

        self.timers.tick()

    def set_key(self, index: int, held: bool) -> None:
        self.keypad.set_key(index, held)

    def load_program(self, data: bytes, name: str = "") -> ProgramImage:
        self.program = load_program(data, self.memory, name=name)
        return self.program

    @property
    def display(self) -> tuple[tuple[bool, ...], ...]:
        return self.framebuffer.rows()

    @property
    def sound_timer(self) -> int:
        return self.timers.get_sound()

    @property
    def delay_timer(self) -> int:
        return self.timers.get_delay()


def create_machine(config: MachineConfig | None = None) -> Machine:
    """Instantiate a CHIP-8 machine with the font preloaded."""

    config = config or MachineConfig()

    memory = Memory()
    memory.load(FONT, FONT_BASE)

    framebuffer = Framebuffer()
    timers = TimerUnit()
    keypad = Keypad()
    cpu = Chip8CPU(
        memory,
        framebuffer,
        timers,
        keypad,
        rng=RandomSource(config.rng_seed),
        stack_capacity=config.stack_capacity,
    )

    machine = Machine(
        memory=memory,
        cpu=cpu,
        framebuffer=framebuffer,
        timers=timers,
        keypad=keypad,
    )
    if config.program is not None:
        machine.load_program(config.program, config.program_name)
    return machine
