"""Pygame host application for the CHIP-8 interpreter."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pychip8.audio import ToneBeeper
from pychip8.bus import MemoryAccessError
from pychip8.cpu import CPUError
from pychip8.io import lookup
from pychip8.loader import ProgramFormatError, load_program_from_path
from pychip8.system import Machine, MachineConfig, create_machine
from pychip8.video import DISPLAY_HEIGHT, DISPLAY_WIDTH, Renderer
from pychip8.utils import TraceRecorder, debug_enabled, debug_log


@dataclass
class AppConfig:
    """Configuration for the CHIP-8 frontend."""

    rom_path: Optional[Path] = None
    scale: int = 8
    cycles_per_second: int = 700
    fullscreen: bool = False
    rng_seed: Optional[int] = None


class Chip8App:
    """Thin wrapper around the Pygame event loop."""

    def __init__(self, config: AppConfig) -> None:
        if config.scale <= 0:
            raise ValueError("scale must be positive")
        if config.cycles_per_second <= 0:
            raise ValueError("cycles_per_second must be positive")
        self._config = config
        self._running = False
        self._machine: Machine | None = None
        self._beeper: ToneBeeper | None = None
        self._renderer = Renderer()
        self._cycle_budget = 0.0
        self._perf_enabled = debug_enabled("perf")
        self._frame_counter = 0
        self._trace_recorder: TraceRecorder | None = None
        if debug_enabled("trace"):
            self._trace_recorder = TraceRecorder(512)

    @property
    def machine(self) -> Machine | None:
        return self._machine

    def run(self) -> None:
        if not self._config.rom_path:
            raise RuntimeError("ROM image is required; pass a ROM path")
        rom_path = self._config.rom_path
        if not rom_path.exists():
            raise RuntimeError(f"ROM file not found: {rom_path}")

        machine = self._create_machine(rom_path)
        self._machine = machine

        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the UI") from exc

        pygame.mixer.pre_init(44_100, -16, 1, 512)
        pygame.init()
        pygame.display.set_caption(f"CHIP-8 - {rom_path.name}")
        self._beeper = self._create_beeper(pygame)

        size = (DISPLAY_WIDTH * self._config.scale, DISPLAY_HEIGHT * self._config.scale)
        flags = pygame.FULLSCREEN if self._config.fullscreen else 0
        screen = pygame.display.set_mode(size, flags)

        clock = pygame.time.Clock()
        self._running = True

        import time

        try:
            while self._running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        self._running = False
                    elif event.type == pygame.KEYDOWN:
                        self._handle_key_event(pygame, event.key, pressed=True)
                    elif event.type == pygame.KEYUP:
                        self._handle_key_event(pygame, event.key, pressed=False)

                frame_start = time.perf_counter()
                executed = self._run_frame(machine)

                self._renderer.render_surface(screen, pygame, machine.display, self._config.scale)
                pygame.display.flip()

                if self._beeper is not None:
                    self._beeper.set_state(machine.sound_timer > 0)

                if self._perf_enabled:
                    elapsed = time.perf_counter() - frame_start
                    debug_log(
                        "perf",
                        "frame=%d cycles=%d frame_ms=%.3f",
                        self._frame_counter,
                        executed,
                        elapsed * 1000.0,
                    )

                clock.tick(_FRAME_RATE)
                self._frame_counter += 1
        finally:
            if self._beeper is not None:
                self._beeper.shutdown()
            pygame.quit()

    def _create_machine(self, rom_path: Path) -> Machine:
        machine = create_machine(MachineConfig(rng_seed=self._config.rng_seed))
        try:
            load_program_from_path(rom_path, machine.memory)
        except FileNotFoundError as exc:
            raise RuntimeError(f"ROM file not found: {rom_path}") from exc
        except ProgramFormatError as exc:
            raise RuntimeError(f"Failed to load ROM {rom_path}: {exc}") from exc
        return machine

    def _create_beeper(self, pygame) -> ToneBeeper | None:
        if pygame.mixer.get_init() is None:
            try:
                pygame.mixer.init(44_100, -16, 1)
            except pygame.error as exc:  # pragma: no cover - hardware dependent
                if debug_enabled("audio"):
                    debug_log("audio", "mixer_init_failed=%s", exc)
                return None
        try:
            return ToneBeeper(sample_rate=pygame.mixer.get_init()[0])
        except RuntimeError as exc:
            if debug_enabled("audio"):
                debug_log("audio", "beeper_init_failed=%s", exc)
            return None

    def _handle_key_event(self, pygame, key_code: int, *, pressed: bool) -> None:
        machine = self._machine
        if machine is None:
            return
        name = pygame.key.name(key_code)
        index = lookup(name)
        if debug_enabled("input"):
            debug_log("input", "event=%s key=%s pressed=%s", name, index, pressed)
        if index is None:
            return
        machine.set_key(index, pressed)

    def _run_frame(self, machine: Machine) -> int:
        """Run one frame's worth of cycles, then one timer tick."""

        self._cycle_budget += self._config.cycles_per_second / _FRAME_RATE
        cycles = int(self._cycle_budget)
        self._cycle_budget -= cycles

        trace = self._trace_recorder
        executed = 0
        try:
            for _ in range(cycles):
                if trace is not None:
                    self._record_trace(machine, trace)
                machine.update()
                executed += 1
        except (CPUError, MemoryAccessError) as exc:
            self._running = False
            if trace is not None:
                trace.dump("trace", 32)
            raise RuntimeError(f"Interpreter fault at pc={machine.cpu.state.pc:04X}: {exc}") from exc

        machine.tick_timers()
        return executed

    def _record_trace(self, machine: Machine, trace: TraceRecorder) -> None:
        cpu = machine.cpu
        state = cpu.state
        try:
            opcode = machine.memory.read_word(state.pc)
        except MemoryAccessError:
            opcode = None
        instruction = None if opcode is None else cpu.instruction_table.lookup(opcode)
        trace.record_step(
            state,
            opcode,
            delay=machine.delay_timer,
            sound=machine.sound_timer,
            waiting=cpu.waiting_for_key,
            mnemonic="" if instruction is None else instruction.mnemonic,
        )


_FRAME_RATE = 60
