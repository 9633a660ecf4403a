"""Flat 4 KiB memory for the CHIP-8 interpreter.

The whole address space is a single ``bytearray``. Addresses ``0x000``-``0x1FF``
are reserved for the interpreter (the hexadecimal font lives at ``0x050``) and
programs are loaded at ``0x200``. Every access is bounds checked; an address
outside the array is a defect in the running program and is reported with
:class:`MemoryAccessError` instead of being clamped or wrapped.
"""

from __future__ import annotations

MEMORY_SIZE = 0x1000
PROGRAM_START = 0x200


class MemoryAccessError(Exception):
    """Raised when an address or load range falls outside memory."""


class Memory:
    """Byte-addressable memory with bounds-checked access."""

    def __init__(self, size: int = MEMORY_SIZE) -> None:
        if size <= 0 or size > 0x10000:
            raise MemoryAccessError(f"memory size {size} out of range (1-65536)")
        self._data = bytearray(size)

    @property
    def size(self) -> int:
        return len(self._data)

    def _check(self, address: int) -> int:
        if not 0 <= address < len(self._data):
            raise MemoryAccessError(f"address {address:#06x} outside memory 0x0000-{len(self._data) - 1:#06x}")
        return address

    def load(self, data: bytes, offset: int) -> None:
        """Copy ``data`` verbatim into memory starting at ``offset``."""

        end = offset + len(data)
        if offset < 0 or end > len(self._data):
            raise MemoryAccessError(
                f"load of {len(data)} bytes at {offset:#06x} exceeds memory size {len(self._data):#06x}"
            )
        self._data[offset:end] = data

    def read(self, address: int) -> int:
        return self._data[self._check(address)]

    def write(self, address: int, value: int) -> None:
        self._data[self._check(address)] = value & 0xFF

    def read_word(self, address: int) -> int:
        high = self.read(address)
        low = self.read(address + 1)
        return (high << 8) | low

    def snapshot(self) -> bytes:
        return bytes(self._data)
