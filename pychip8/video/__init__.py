"""Video helpers for the CHIP-8 interpreter."""

from __future__ import annotations

from .font import FONT, FONT_BASE, GLYPH_BYTES, glyph, glyph_address
from .framebuffer import DISPLAY_HEIGHT, DISPLAY_WIDTH, Framebuffer
from .palette import MONOCHROME, validate_palette
from .renderer import RenderResult, Renderer

__all__ = [
    "FONT",
    "FONT_BASE",
    "GLYPH_BYTES",
    "glyph",
    "glyph_address",
    "DISPLAY_WIDTH",
    "DISPLAY_HEIGHT",
    "Framebuffer",
    "Renderer",
    "RenderResult",
    "MONOCHROME",
    "validate_palette",
]
