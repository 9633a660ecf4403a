"""Monochrome 64x32 framebuffer with XOR sprite drawing."""

from __future__ import annotations

from typing import Iterable, List, Tuple

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32


class Framebuffer:
    """Grid of lit/unlit pixels, stored row-major with the origin top-left."""

    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("framebuffer dimensions must be positive")
        self.width = width
        self.height = height
        self._rows: List[List[bool]] = [[False] * width for _ in range(height)]

    def clear(self) -> None:
        for row in self._rows:
            row[:] = [False] * self.width

    def get_pixel(self, x: int, y: int) -> bool | None:
        if 0 <= x < self.width and 0 <= y < self.height:
            return self._rows[y][x]
        return None

    def set_pixel(self, x: int, y: int, value: bool) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self._rows[y][x] = bool(value)

    def draw_sprite(self, x: int, y: int, sprite: Iterable[int]) -> bool:
        """XOR ``sprite`` rows onto the grid and report collisions.

        The origin wraps around the grid, the sprite body is clipped at the
        right and bottom edges. Returns ``True`` when any lit pixel was
        turned off.
        """

        origin_x = x % self.width
        origin_y = y % self.height
        collision = False
        for row_offset, bits in enumerate(sprite):
            py = origin_y + row_offset
            if py >= self.height:
                break
            row = self._rows[py]
            for bit in range(8):
                if not (bits >> (7 - bit)) & 1:
                    continue
                px = origin_x + bit
                if px >= self.width:
                    break
                if row[px]:
                    collision = True
                row[px] = not row[px]
        return collision

    def rows(self) -> Tuple[Tuple[bool, ...], ...]:
        return tuple(tuple(row) for row in self._rows)

    def lit_count(self) -> int:
        return sum(sum(row) for row in self._rows)
