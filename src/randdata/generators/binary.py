"""Uniformly distributed binary content."""

from __future__ import annotations

import random

__all__ = ["BinaryGenerator"]


class BinaryGenerator:
    """Return blocks of uniformly random bytes drawn from the content stream."""

    def __init__(self, block_size: int = 256) -> None:
        if block_size < 1:
            raise ValueError("block_size must be positive")
        self.block_size = block_size

    def generate(self, rng: random.Random, pos: int, rem: int) -> bytes:
        _ = pos
        # Always draw a whole block so the bytes at a position do not depend on
        # the declared size; a shorter stream is then a prefix of a longer one.
        block = rng.randbytes(self.block_size)
        return block[: max(rem, 0)]

    def __repr__(self) -> str:
        return f"BinaryGenerator(block_size={self.block_size})"
