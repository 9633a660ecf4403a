"""Tests for the timer unit and random source."""

from __future__ import annotations

from pychip8.cpu import RandomSource, TimerUnit


def test_tick_decrements_both_timers() -> None:
    timers = TimerUnit()
    timers.set_delay(3)
    timers.set_sound(1)

    timers.tick()

    assert timers.get_delay() == 2
    assert timers.get_sound() == 0
    assert not timers.sound_active


def test_timers_floor_at_zero() -> None:
    timers = TimerUnit()
    timers.set_delay(1)

    timers.tick()
    timers.tick()
    timers.tick()

    assert timers.get_delay() == 0


def test_setters_mask_to_byte() -> None:
    timers = TimerUnit()
    timers.set_delay(0x1FF)
    timers.set_sound(0x101)

    assert timers.get_delay() == 0xFF
    assert timers.get_sound() == 0x01
    assert timers.sound_active


def test_reset_clears_timers() -> None:
    timers = TimerUnit(delay=5, sound=6)
    timers.reset()

    assert (timers.get_delay(), timers.get_sound()) == (0, 0)


def test_random_source_nibbles_in_range() -> None:
    source = RandomSource()
    values = {source.nibble() for _ in range(2000)}

    assert values <= set(range(16))
    assert len(values) > 1


def test_seeded_sources_repeat() -> None:
    first = RandomSource(7)
    second = RandomSource(7)

    assert [first.nibble() for _ in range(20)] == [second.nibble() for _ in range(20)]
