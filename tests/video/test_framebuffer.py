"""Unit tests for the CHIP-8 framebuffer."""

from __future__ import annotations

from pychip8.video import DISPLAY_HEIGHT, DISPLAY_WIDTH, Framebuffer, glyph, glyph_address


def test_blank_on_creation() -> None:
    fb = Framebuffer()

    rows = fb.rows()
    assert len(rows) == DISPLAY_HEIGHT == 32
    assert all(len(row) == DISPLAY_WIDTH == 64 for row in rows)
    assert fb.lit_count() == 0


def test_pixel_access_outside_grid() -> None:
    fb = Framebuffer()

    fb.set_pixel(64, 0, True)
    fb.set_pixel(0, 32, True)

    assert fb.get_pixel(64, 0) is None
    assert fb.get_pixel(-1, 0) is None
    assert fb.lit_count() == 0


def test_draw_sprite_sets_bits_msb_first() -> None:
    fb = Framebuffer()

    collision = fb.draw_sprite(10, 5, [0b10100000])

    assert collision is False
    assert fb.get_pixel(10, 5)
    assert not fb.get_pixel(11, 5)
    assert fb.get_pixel(12, 5)
    assert fb.lit_count() == 2


def test_draw_sprite_xor_and_collision() -> None:
    fb = Framebuffer()
    fb.draw_sprite(0, 0, glyph(0))

    collision = fb.draw_sprite(0, 0, glyph(0))

    assert collision is True
    assert fb.lit_count() == 0


def test_overlap_without_erasing_is_not_collision() -> None:
    fb = Framebuffer()
    fb.draw_sprite(0, 0, [0b10000000])

    assert fb.draw_sprite(1, 0, [0b10000000]) is False
    assert fb.lit_count() == 2


def test_sprite_clips_at_bottom_edge() -> None:
    fb = Framebuffer()

    fb.draw_sprite(0, 30, [0x80, 0x80, 0x80, 0x80])

    assert fb.get_pixel(0, 30)
    assert fb.get_pixel(0, 31)
    assert not fb.get_pixel(0, 0)
    assert not fb.get_pixel(0, 1)
    assert fb.lit_count() == 2


def test_origin_wraps_before_drawing() -> None:
    fb = Framebuffer()

    fb.draw_sprite(64 + 3, 32 + 4, [0x80])

    assert fb.get_pixel(3, 4)


def test_clear_turns_everything_off() -> None:
    fb = Framebuffer()
    fb.draw_sprite(20, 10, [0xFF, 0xFF])

    fb.clear()

    assert fb.lit_count() == 0


def test_glyph_addresses() -> None:
    assert glyph_address(0) == 0x050
    assert glyph_address(0xF) == 0x050 + 75
    assert glyph_address(0x1F) == glyph_address(0xF)
    assert glyph(0) == bytes((0xF0, 0x90, 0x90, 0x90, 0xF0))
