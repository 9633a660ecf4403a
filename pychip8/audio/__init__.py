"""Audio output for the CHIP-8 interpreter."""

from .beeper import ToneBeeper

__all__ = ["ToneBeeper"]
