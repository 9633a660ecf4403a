"""Tests for raw program loading."""

from __future__ import annotations

import pytest

from pychip8.bus import Memory
from pychip8.loader import ProgramFormatError, load_program, load_program_from_path, max_program_size


def test_load_program_at_0x200() -> None:
    memory = Memory()

    image = load_program(b"\x00\xE0\x12\x00", memory, name="loop")

    assert memory.snapshot()[0x200:0x204] == b"\x00\xE0\x12\x00"
    assert image.name == "loop"
    assert (image.start, image.length, image.end) == (0x200, 4, 0x203)


def test_load_largest_program() -> None:
    memory = Memory()
    data = bytes([0xAA]) * max_program_size(memory)

    load_program(data, memory)

    assert memory.read(0xFFF) == 0xAA


def test_oversized_program_rejected() -> None:
    memory = Memory()

    with pytest.raises(ProgramFormatError):
        load_program(bytes(4096 - 0x200 + 1), memory)


def test_empty_program_rejected() -> None:
    with pytest.raises(ProgramFormatError):
        load_program(b"", Memory())


def test_load_from_path(tmp_path) -> None:
    path = tmp_path / "pong.ch8"
    path.write_bytes(b"\x6A\x02")
    memory = Memory()

    image = load_program_from_path(path, memory)

    assert image.name == "pong"
    assert memory.read_word(0x200) == 0x6A02


def test_missing_file_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_program_from_path(tmp_path / "missing.ch8", Memory())
