"""Convert the framebuffer into RGB frames for presentation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .palette import MONOCHROME, RGBColor, validate_palette


@dataclass
class RenderResult:
    """Packed RGB pixels of a rendered frame."""

    width: int
    height: int
    pixels: bytearray

    def get_pixel(self, x: int, y: int) -> RGBColor:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} frame")
        offset = (y * self.width + x) * 3
        return (self.pixels[offset], self.pixels[offset + 1], self.pixels[offset + 2])

    def to_surface(self):
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to build surfaces") from exc
        return pygame.image.frombuffer(bytes(self.pixels), (self.width, self.height), "RGB")


class Renderer:
    """Scale a row-major boolean grid into an RGB frame."""

    def __init__(self, palette: Sequence[RGBColor] = MONOCHROME) -> None:
        self._unlit, self._lit = validate_palette(palette)

    def render(self, rows: Sequence[Sequence[bool]], scale: int = 1) -> RenderResult:
        if scale <= 0:
            raise ValueError("scale must be positive")
        height = len(rows)
        width = len(rows[0]) if height else 0
        lit = bytes(self._lit) * scale
        unlit = bytes(self._unlit) * scale
        pixels = bytearray()
        for row in rows:
            line = b"".join(lit if value else unlit for value in row)
            pixels.extend(line * scale)
        return RenderResult(width * scale, height * scale, pixels)

    def render_surface(self, surface, pygame_module, rows: Sequence[Sequence[bool]], scale: int) -> None:
        """Draw ``rows`` straight onto a pygame ``surface``."""

        surface.fill(self._unlit)
        for y, row in enumerate(rows):
            for x, value in enumerate(row):
                if value:
                    pygame_module.draw.rect(surface, self._lit, (x * scale, y * scale, scale, scale))
