"""Reproducible pseudo-random byte streams.

:class:`Reader` exposes the canonical content of a stream through the standard
:class:`io.RawIOBase` interface.  Two readers with the same data type, seed and
size always produce the same bytes.  The content can be checked by writing it
to a :class:`~randdata.verifier.Verifier` built from the same parameters, see
:meth:`Reader.new_verifier`.

Raw streams may return fewer bytes than requested and ``Reader`` does so on
purpose: unless jitter is disabled, every read exposes a pseudo-random number
of bytes between ``min_read`` and the requested size.  The sizes come from a
draw stream separate from the content stream, so they never change the content.
Code that cannot cope with short reads should wrap the reader in
:class:`io.BufferedReader`.

End of stream follows the raw I/O convention: :meth:`Reader.readinto` returns
``0`` and :meth:`Reader.read` returns ``b""``.  The only error a reader raises
itself is the failure of a custom generator; it ends the stream and is raised
again on every later read.
"""

from __future__ import annotations

import errno
import io
import sys
import threading
from typing import TYPE_CHECKING, Any

from .generators import Generator, draw_stream, ensure_generator, generator_for, validate_seed
from .stream import ContentFeed
from .types import DataType
from .utils.logging import get_logger
from .utils.units import ByteCount

if TYPE_CHECKING:  # pragma: no cover - used for type hints only
    from _typeshed import SupportsWrite

    from .config import ConfigModel
    from .verifier import Verifier

__all__ = ["Reader"]

log = get_logger(__name__)

DEFAULT_COPY_BUFFER_SIZE = 8192


def _validate_size(size: int) -> ByteCount:
    if isinstance(size, bool) or not isinstance(size, int):
        raise TypeError(f"size must be an int, got {type(size).__name__}")
    return ByteCount(size)


class Reader(io.RawIOBase):
    """Reproducible and verifiable pseudo-random byte stream.

    Parameters
    ----------
    data_type:
        Kind of content, as a :class:`~randdata.types.DataType` or its string
        value.  Reserved and unknown types raise
        :class:`~randdata.utils.errors.UnsupportedTypeError`.
    seed:
        Signed 64-bit seed for both content and read size jitter.
    size:
        Total number of bytes in the stream.
    jitter:
        Whether reads return pseudo-random short counts.
    min_read, max_read:
        Bounds of a jittered read.  ``max_read=None`` means no upper bound
        besides the caller's buffer.
    copy_buffer_size:
        Buffer size used by :meth:`write_to`.
    generator:
        Custom generator; only valid with the ``custom`` data type.  See
        :meth:`with_generator`.
    """

    def __init__(
        self,
        data_type: DataType | str,
        seed: int,
        size: int,
        *,
        jitter: bool = True,
        min_read: int = 1,
        max_read: int | None = None,
        copy_buffer_size: int = DEFAULT_COPY_BUFFER_SIZE,
        generator: Generator | None = None,
    ) -> None:
        super().__init__()
        dtype = DataType.coerce(data_type)
        if generator is None:
            generator = generator_for(dtype)
        elif dtype is DataType.CUSTOM:
            generator = ensure_generator(generator)
        else:
            raise ValueError(f"explicit generator requires the custom data type, got {dtype}")
        if min_read < 1:
            raise ValueError("min_read must be at least 1")
        if max_read is not None and max_read < min_read:
            raise ValueError("max_read must not be smaller than min_read")
        if copy_buffer_size < 1:
            raise ValueError("copy_buffer_size must be positive")

        self._data_type = dtype
        self._seed = validate_seed(seed)
        self._size = _validate_size(size)
        self._generator = generator
        self._jitter = jitter
        self._min_read = min_read
        self._max_read = sys.maxsize if max_read is None else max_read
        self._copy_buffer_size = copy_buffer_size
        self._len_rng = draw_stream(seed)
        self._feed = ContentFeed(generator, seed, self._size)
        self._failure: BaseException | None = None
        self._lock = threading.Lock()
        log.debug("reader created: type=%s seed=%d size=%s", dtype, seed, self._size)

    # -- Alternative constructors ---------------------------------------------

    @classmethod
    def with_generator(cls, generator: Generator, seed: int, size: int, **options: Any) -> "Reader":
        """Create a reader producing content from a custom ``generator``."""

        return cls(DataType.CUSTOM, seed, size, generator=generator, **options)

    @classmethod
    def from_config(
        cls,
        cfg: "ConfigModel",
        *,
        data_type: DataType | str | None = None,
        seed: int | None = None,
        size: int | None = None,
    ) -> "Reader":
        """Create a reader from configuration, optionally overriding parameters."""

        return cls(
            cfg.stream.type if data_type is None else data_type,
            cfg.stream.seed if seed is None else seed,
            cfg.stream.size if size is None else size,
            jitter=cfg.reader.jitter,
            min_read=cfg.reader.min_read,
            max_read=cfg.reader.max_read,
            copy_buffer_size=cfg.reader.copy_buffer_size,
        )

    def new_verifier(self, **options: Any) -> "Verifier":
        """Return a verifier for the stream produced by this reader."""

        from .verifier import Verifier

        if self._data_type is DataType.CUSTOM:
            return Verifier.with_generator(self._generator, self._seed, self._size, **options)
        return Verifier(self._data_type, self._seed, self._size, **options)

    # -- Accessors --------------------------------------------------------------

    @property
    def data_type(self) -> DataType:
        return self._data_type

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def size(self) -> ByteCount:
        return self._size

    @property
    def total_read(self) -> ByteCount:
        """Number of bytes already read."""

        with self._lock:
            return ByteCount(self._feed.position)

    @property
    def is_eof(self) -> bool:
        """``True`` once the whole stream has been read."""

        with self._lock:
            return self._feed.position >= self._size

    # -- RawIOBase ----------------------------------------------------------------

    def readable(self) -> bool:
        return True

    def _read_length(self, capacity: int) -> int:
        length = capacity
        if self._jitter and self._min_read < capacity and self._min_read < self._max_read:
            length = self._len_rng.randint(self._min_read, min(capacity, self._max_read))
        return min(length, self._feed.remaining)

    def readinto(self, buffer: Any) -> int:
        """Read up to ``len(buffer)`` bytes into ``buffer``.

        Returns the number of bytes copied, ``0`` at end of stream.  The count
        is usually smaller than the buffer when jitter is enabled.
        """

        if self.closed:
            raise ValueError("I/O operation on closed reader")
        with self._lock:
            if self._failure is not None:
                raise self._failure
            if self._feed.position >= self._size:
                return 0
            view = memoryview(buffer).cast("B")
            if len(view) == 0:
                return 0

            want = self._read_length(len(view))
            copied = 0
            while copied < want:
                try:
                    piece = self._feed.take(want - copied)
                except Exception as exc:
                    self._failure = exc
                    log.warning(
                        "generator failed at position %d: %s", self._feed.position, exc
                    )
                    if copied:
                        return copied
                    raise
                view[copied : copied + len(piece)] = piece
                copied += len(piece)

            if self._feed.position >= self._size:
                log.debug("reader reached end of stream: %s", self._size)
            return copied

    def read_byte(self) -> int:
        """Read and return the next byte.

        Raises
        ------
        EOFError
            At end of stream.
        """

        buf = bytearray(1)
        if self.readinto(buf) == 0:
            raise EOFError("end of stream")
        return buf[0]

    def write_to(self, sink: "SupportsWrite[bytes]") -> int:
        """Write the rest of the stream to ``sink`` and return the bytes written.

        Partial writes are retried until the chunk is consumed.  Errors raised
        by ``sink`` propagate immediately.  A ``None`` result counts as the whole
        chunk written, except from an :class:`io.RawIOBase` sink where it means a
        non-blocking write would block; such sinks are not supported and raise
        :class:`BlockingIOError`.
        """

        total = 0
        buf = bytearray(self._copy_buffer_size)
        view = memoryview(buf)
        while True:
            n = self.readinto(buf)
            if n == 0:
                return total
            chunk = view[:n]
            while chunk:
                written = sink.write(chunk)
                if written is None:
                    if isinstance(sink, io.RawIOBase):
                        raise BlockingIOError(
                            errno.EAGAIN, "non-blocking sink would block", total
                        )
                    written = len(chunk)
                elif written <= 0:
                    raise OSError(f"sink accepted no data after {total} bytes")
                total += written
                chunk = chunk[written:]

    def __repr__(self) -> str:
        return (
            f"Reader(data_type={self._data_type.value!r}, seed={self._seed}, "
            f"size={int(self._size)})"
        )
