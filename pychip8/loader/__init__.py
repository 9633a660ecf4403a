"""Loaders for CHIP-8 program images."""

from __future__ import annotations

from .program import (
    ProgramFormatError,
    ProgramImage,
    load_program,
    load_program_from_path,
    max_program_size,
)

__all__ = [
    "ProgramImage",
    "ProgramFormatError",
    "load_program",
    "load_program_from_path",
    "max_program_size",
]
