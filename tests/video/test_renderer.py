"""Unit tests for the CHIP-8 frame renderer."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from pychip8.video import Framebuffer, Renderer, validate_palette


WHITE = (255, 255, 255)
BLACK = (0, 0, 0)


def test_render_single_pixel() -> None:
    fb = Framebuffer()
    fb.set_pixel(1, 0, True)

    result = Renderer().render(fb.rows())

    assert (result.width, result.height) == (64, 32)
    assert result.get_pixel(0, 0) == BLACK
    assert result.get_pixel(1, 0) == WHITE


def test_render_scale_factor() -> None:
    fb = Framebuffer()
    fb.set_pixel(0, 0, True)

    result = Renderer().render(fb.rows(), scale=4)

    assert (result.width, result.height) == (256, 128)
    assert result.get_pixel(3, 3) == WHITE
    assert result.get_pixel(4, 0) == BLACK
    assert result.get_pixel(0, 4) == BLACK


def test_render_custom_palette() -> None:
    renderer = Renderer(((10, 20, 30), (200, 100, 50)))

    result = renderer.render([[False, True]])

    assert result.get_pixel(0, 0) == (10, 20, 30)
    assert result.get_pixel(1, 0) == (200, 100, 50)


def test_get_pixel_out_of_range() -> None:
    result = Renderer().render([[False]])

    with pytest.raises(IndexError):
        result.get_pixel(1, 0)


def test_invalid_scale_rejected() -> None:
    with pytest.raises(ValueError):
        Renderer().render([[False]], scale=0)


def test_validate_palette_rejects_bad_entries() -> None:
    with pytest.raises(ValueError):
        validate_palette([(0, 0, 0)])
    with pytest.raises(ValueError):
        validate_palette([(0, 0), (1, 1)])


def test_render_surface_draws_lit_cells() -> None:
    calls: list[tuple] = []
    fills: list[tuple] = []
    surface = SimpleNamespace(fill=fills.append)
    fake_pygame = SimpleNamespace(draw=SimpleNamespace(rect=lambda surf, color, rect: calls.append((color, rect))))

    Renderer().render_surface(surface, fake_pygame, [[False, True], [True, False]], 3)

    assert fills == [BLACK]
    assert calls == [(WHITE, (3, 0, 3, 3)), (WHITE, (0, 3, 3, 3))]
