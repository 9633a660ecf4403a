"""Raw CHIP-8 program loading."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pychip8.bus import PROGRAM_START, Memory


class ProgramFormatError(RuntimeError):
    """Raised when a program image cannot be placed in memory."""


@dataclass
class ProgramImage:
    """Describes a program copied into memory."""

    name: str = ""
    start: int = PROGRAM_START
    length: int = 0

    @property
    def end(self) -> int:
        return self.start + self.length - 1


def max_program_size(memory: Memory) -> int:
    return memory.size - PROGRAM_START


def load_program(data: bytes, memory: Memory, *, name: str = "") -> ProgramImage:
    """Copy ``data`` verbatim into ``memory`` at ``0x200``.

    The image has no header; its length must fit in the space above the
    reserved interpreter area.
    """

    if not data:
        raise ProgramFormatError("program image is empty")
    limit = max_program_size(memory)
    if len(data) > limit:
        raise ProgramFormatError(f"program is {len(data)} bytes; at most {limit} bytes fit above {PROGRAM_START:#05x}")
    memory.load(bytes(data), PROGRAM_START)
    return ProgramImage(name=name, start=PROGRAM_START, length=len(data))


def load_program_from_path(path: Path, memory: Memory) -> ProgramImage:
    """Load a program image from the filesystem."""

    return load_program(Path(path).read_bytes(), memory, name=Path(path).stem)
