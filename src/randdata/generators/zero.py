"""Zero filled content."""

from __future__ import annotations

import random

__all__ = ["ZeroGenerator"]


class ZeroGenerator:
    """Return blocks of zero bytes without touching the draw stream."""

    def __init__(self, block_size: int = 256) -> None:
        if block_size < 1:
            raise ValueError("block_size must be positive")
        self.block_size = block_size

    def generate(self, rng: random.Random, pos: int, rem: int) -> bytes:
        _ = rng, pos
        return bytes(min(self.block_size, rem))

    def __repr__(self) -> str:
        return f"ZeroGenerator(block_size={self.block_size})"
