"""Random value source for the CXNN instruction."""

from __future__ import annotations

import os
import random


class RandomSource:
    """Produce 4-bit random values.

    Seeded once at construction from process entropy unless ``seed`` is given.
    """

    def __init__(self, seed: int | None = None) -> None:
        if seed is None:
            seed = int.from_bytes(os.urandom(8), "big")
        self._random = random.Random(seed)

    def nibble(self) -> int:
        return self._random.getrandbits(32) & 0xF
