"""Generator protocol and draw stream seeding.

A generator turns a seeded draw stream into the canonical content of a stream,
one chunk per call.  Generators hold no state of their own: the draw stream,
the current position and the number of bytes remaining are supplied by the
caller on every call.  Given the same seed and the same sequence of calls a
generator must return the same chunks, which is what allows a reader and a
verifier to agree on content without talking to each other.

Chunks may be longer than the remaining length.  Callers keep the surplus for
the next request instead of dropping it, and always call with ``pos`` equal to
the total length of the chunks returned so far.
"""

from __future__ import annotations

import random
from typing import Protocol, runtime_checkable

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
_UINT64_MASK = 2**64 - 1


@runtime_checkable
class Generator(Protocol):
    """Protocol for content generators."""

    def generate(self, rng: random.Random, pos: int, rem: int) -> bytes:
        """Return the next chunk of content.

        Parameters
        ----------
        rng:
            Content draw stream.  Every draw advances it.
        pos:
            Offset of the chunk from the beginning of the stream.
        rem:
            Number of bytes remaining up to the declared end of the stream.
        """

        ...


def validate_seed(seed: int) -> int:
    """Return ``seed`` if it fits a signed 64-bit integer."""

    if isinstance(seed, bool) or not isinstance(seed, int):
        raise TypeError(f"seed must be an int, got {type(seed).__name__}")
    if not INT64_MIN <= seed <= INT64_MAX:
        raise ValueError(f"seed out of signed 64-bit range: {seed}")
    return seed


def draw_stream(seed: int) -> random.Random:
    """Return a new draw stream for ``seed``.

    The signed seed is mapped to its two's complement bit pattern because
    :class:`random.Random` ignores the sign of integer seeds.
    """

    return random.Random(validate_seed(seed) & _UINT64_MASK)


__all__ = ["INT64_MIN", "INT64_MAX", "Generator", "validate_seed", "draw_stream"]
