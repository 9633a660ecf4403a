"""CPU package for the CHIP-8 interpreter."""

from .core import (
    FLAG_REGISTER,
    CallStack,
    Chip8CPU,
    CPUError,
    CPUState,
    StackOverflowError,
    StackUnderflowError,
)
from .rng import RandomSource
from .timers import TimerUnit
from . import opcodes

__all__ = [
    "Chip8CPU",
    "CPUState",
    "CallStack",
    "CPUError",
    "StackUnderflowError",
    "StackOverflowError",
    "FLAG_REGISTER",
    "RandomSource",
    "TimerUnit",
    "opcodes",
]
