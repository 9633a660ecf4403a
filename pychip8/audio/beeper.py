"""Sine-wave tone played while the sound timer is running."""

from __future__ import annotations

from array import array
import math
from typing import Optional


class ToneBeeper:
    """Manage a looping tone using pygame's mixer."""

    def __init__(
        self,
        *,
        frequency: float = 440.0,
        sample_rate: int = 44_100,
        volume: float = 0.35,
    ) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required for audio output") from exc

        if pygame.mixer.get_init() is None:
            raise RuntimeError("pygame mixer must be initialised before creating ToneBeeper")

        if frequency <= 0.0:
            raise ValueError("frequency must be positive")

        self._pygame = pygame
        self._frequency = frequency
        self._sample_rate = max(1, sample_rate)
        self._volume = max(0.0, min(1.0, volume))
        self._channel: Optional[pygame.mixer.Channel] = None
        self._sound: Optional[pygame.mixer.Sound] = None
        self._playing = False

    # ------------------------------------------------------------------
    # Public API

    @property
    def playing(self) -> bool:
        return self._playing

    def set_state(self, enabled: bool) -> None:
        """Start or stop the tone."""

        if not enabled:
            self._stop()
            return
        if self._playing:
            return

        if self._sound is None:
            self._sound = self._build_sound()

        channel = self._channel
        if channel is None:
            channel = self._pygame.mixer.find_channel(True)
            if channel is None:
                return
            self._channel = channel

        channel.play(self._sound, loops=-1)
        channel.set_volume(self._volume)
        self._playing = True

    def shutdown(self) -> None:
        """Stop any active tone and release resources."""

        self._stop()
        self._channel = None
        self._sound = None

    # ------------------------------------------------------------------
    # Internals

    def _stop(self) -> None:
        if self._channel is not None and self._playing:
            self._channel.stop()
        self._playing = False

    def _build_sound(self) -> "pygame.mixer.Sound":
        # One full period per loop iteration keeps the loop seamless.
        period_samples = max(2, int(round(self._sample_rate / self._frequency)))
        amplitude = 12_000
        buffer = array("h")
        for index in range(period_samples):
            phase = (2.0 * math.pi * index) / period_samples
            buffer.append(int(math.sin(phase) * amplitude))
        return self._pygame.mixer.Sound(buffer=buffer.tobytes())


__all__ = ["ToneBeeper"]
