"""Shared refill policy for readers and verifiers.

:class:`ContentFeed` owns a content draw stream and the pending chunk returned
by the generator.  It asks the generator for more data only when the pending
chunk is exhausted, always with the current position and the remaining length.
Because that decision depends on nothing but the feed's own position, a reader
and a verifier built from the same parameters call the generator with the same
arguments in the same order, whatever sizes their callers read or write.

The feed is not thread safe; its owner serializes access.
"""

from __future__ import annotations

from .generators import Generator, draw_stream
from .utils.errors import GenerationError

__all__ = ["ContentFeed"]


class ContentFeed:
    """Canonical content of one stream, consumed front to back."""

    def __init__(self, generator: Generator, seed: int, size: int) -> None:
        self.generator = generator
        self.size = size
        self.position = 0
        self._rng = draw_stream(seed)
        self._pending = memoryview(b"")
        self._offset = 0

    @property
    def remaining(self) -> int:
        return self.size - self.position

    def _refill(self) -> None:
        chunk = self.generator.generate(self._rng, self.position, self.remaining)
        if not isinstance(chunk, (bytes, bytearray, memoryview)):
            raise GenerationError(
                f"generator returned {type(chunk).__name__}, expected a bytes-like object"
            )
        if len(chunk) == 0:
            raise GenerationError(f"generator returned no data at position {self.position}")
        self._pending = memoryview(bytes(chunk))
        self._offset = 0

    def take(self, limit: int) -> memoryview:
        """Return up to ``limit`` bytes of content and advance past them.

        The returned view is shorter than ``limit`` when the pending chunk runs
        out; the next call refills.  Generator errors propagate unchanged.
        """

        if self._offset >= len(self._pending):
            self._refill()
        end = min(self._offset + limit, len(self._pending))
        piece = self._pending[self._offset : end]
        self._offset = end
        self.position += len(piece)
        return piece
