"""CHIP-8 interpreter with a pygame frontend.

The interpreter core lives in ``cpu``, ``bus`` and ``video``; ``system``
assembles one machine and ``ui`` drives it from a pygame window.
"""

from __future__ import annotations

from . import audio, bus, cpu, io, loader, system, ui, utils, video

__all__: list[str] = [
    "cpu",
    "bus",
    "video",
    "audio",
    "io",
    "loader",
    "system",
    "ui",
    "utils",
]
