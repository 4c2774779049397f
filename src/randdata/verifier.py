"""Incremental verification of reproducible byte streams.

A :class:`Verifier` regenerates the canonical content for a data type, seed and
size and compares everything written to it against that content.  Writes may be
chunked arbitrarily; the expected content is produced through the same refill
policy a :class:`~randdata.reader.Reader` uses, so the two only have to agree on
their parameters.

Failures are raised as exceptions carrying the details needed to report them:

* :class:`~randdata.utils.errors.UnexpectedBytesError` for the first byte that
  differs from the expected content,
* :class:`~randdata.utils.errors.TrailingExtraBytesError` for data beyond the
  declared size,
* :class:`~randdata.utils.errors.NotEnoughBytesError` from :meth:`Verifier.close`
  when the stream was cut short.

By default the first mismatch or overflow locks the verifier and every later
write raises :class:`~randdata.utils.errors.VerifierLockedError`.  With
``lockout_on_error=False`` the verifier keeps checking later writes at their
proper stream offsets instead.  A generator failure always ends verification;
the generator is never called again.
"""

from __future__ import annotations

import os
import threading
from types import TracebackType
from typing import IO, TYPE_CHECKING, Any

from .generators import Generator, ensure_generator, generator_for, validate_seed
from .stream import ContentFeed
from .types import DataType
from .utils.errors import (
    NotEnoughBytesError,
    TrailingExtraBytesError,
    UnexpectedBytesError,
    VerifierClosedError,
    VerifierLockedError,
)
from .utils.logging import get_logger
from .utils.units import ByteCount

if TYPE_CHECKING:  # pragma: no cover - used for type hints only
    from .config import ConfigModel

__all__ = ["Verifier"]

log = get_logger(__name__)

DEFAULT_DIFF_WINDOW = 8
_READ_CHUNK = 8192


def _first_difference(expected: memoryview, actual: memoryview) -> int:
    """Return the index of the first differing byte of two equal length views."""

    lo, hi = 0, len(expected)
    # Narrow down by halves; equality of slices is a fast memcmp.
    while hi - lo > 64:
        mid = (lo + hi) // 2
        if expected[lo:mid] == actual[lo:mid]:
            lo = mid
        else:
            hi = mid
    for i in range(lo, hi):
        if expected[i] != actual[i]:
            return i
    raise ValueError("views are equal")


class Verifier:
    """Verify a byte stream against the content a matching reader produces.

    Parameters
    ----------
    data_type:
        Kind of content, as a :class:`~randdata.types.DataType` or its string
        value.
    seed:
        Signed 64-bit seed the reader was created with.
    size:
        Expected total number of bytes.
    lockout_on_error:
        Reject all writes after the first mismatch or overflow.
    diff_window:
        Maximum number of bytes reported on each side of a mismatch.
    generator:
        Custom generator; only valid with the ``custom`` data type.
    """

    def __init__(
        self,
        data_type: DataType | str,
        seed: int,
        size: int,
        *,
        lockout_on_error: bool = True,
        diff_window: int = DEFAULT_DIFF_WINDOW,
        generator: Generator | None = None,
    ) -> None:
        dtype = DataType.coerce(data_type)
        if generator is None:
            generator = generator_for(dtype)
        elif dtype is DataType.CUSTOM:
            generator = ensure_generator(generator)
        else:
            raise ValueError(f"explicit generator requires the custom data type, got {dtype}")
        if diff_window < 1:
            raise ValueError("diff_window must be positive")
        if isinstance(size, bool) or not isinstance(size, int):
            raise TypeError(f"size must be an int, got {type(size).__name__}")

        self._data_type = dtype
        self._seed = validate_seed(seed)
        self._size = ByteCount(size)
        self._generator = generator
        self._lockout = lockout_on_error
        self._diff_window = diff_window
        self._feed = ContentFeed(generator, seed, self._size)
        self._verified = 0
        self._written = 0
        self._failure: BaseException | None = None
        self._gen_failure: BaseException | None = None
        self._closed = False
        self._lock = threading.Lock()
        log.debug("verifier created: type=%s seed=%d size=%s", dtype, seed, self._size)

    @classmethod
    def with_generator(
        cls, generator: Generator, seed: int, size: int, **options: Any
    ) -> "Verifier":
        """Create a verifier for content produced by a custom ``generator``."""

        return cls(DataType.CUSTOM, seed, size, generator=generator, **options)

    @classmethod
    def from_config(
        cls,
        cfg: "ConfigModel",
        *,
        data_type: DataType | str | None = None,
        seed: int | None = None,
        size: int | None = None,
    ) -> "Verifier":
        """Create a verifier from configuration, optionally overriding parameters."""

        return cls(
            cfg.stream.type if data_type is None else data_type,
            cfg.stream.seed if seed is None else seed,
            cfg.stream.size if size is None else size,
            lockout_on_error=cfg.verifier.lockout_on_error,
            diff_window=cfg.verifier.diff_window,
        )

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
    def total_verified(self) -> ByteCount:
        """Number of stream bytes checked so far.

        With lockout enabled this stops at the offset of the first mismatch.
        """

        with self._lock:
            return ByteCount(self._verified)

    @property
    def error(self) -> BaseException | None:
        """The first failure recorded, if any."""

        with self._lock:
            return self._failure

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    # -- Verification -----------------------------------------------------------

    def _fail(self, exc: BaseException) -> None:
        if self._failure is None:
            self._failure = exc
        log.warning("verification failed: %s", exc)

    def _compare(self, data: memoryview) -> UnexpectedBytesError | None:
        """Compare ``data`` with the next expected bytes, returning the first mismatch."""

        start = self._feed.position
        mismatch: UnexpectedBytesError | None = None
        compared = 0
        while compared < len(data):
            try:
                expected = self._feed.take(len(data) - compared)
            except Exception as exc:
                self._gen_failure = exc
                self._fail(exc)
                raise
            actual = data[compared : compared + len(expected)]
            if mismatch is None and expected != actual:
                i = _first_difference(expected, actual)
                window = min(self._diff_window, len(expected) - i)
                mismatch = UnexpectedBytesError(
                    start + compared + i,
                    bytes(expected[i : i + window]),
                    bytes(actual[i : i + window]),
                )
                if self._lockout:
                    self._verified = start + compared + i
                    return mismatch
            compared += len(expected)
        self._verified = self._feed.position
        return mismatch

    def write(self, data: Any) -> int:
        """Verify ``data`` as the next part of the stream.

        Returns the number of bytes written, which is always ``len(data)``.

        Raises
        ------
        UnexpectedBytesError
            If ``data`` differs from the expected content.
        TrailingExtraBytesError
            If ``data`` extends beyond the declared size while the in-range
            part matches.
        VerifierLockedError
            If the generator failed earlier, or an earlier write failed and
            lockout is enabled.
        VerifierClosedError
            If the verifier has been closed.
        """

        view = memoryview(data).cast("B")
        with self._lock:
            if self._closed:
                raise VerifierClosedError("write to closed verifier")
            if self._gen_failure is not None:
                raise VerifierLockedError(self._gen_failure) from self._gen_failure
            if self._failure is not None and self._lockout:
                raise VerifierLockedError(self._failure) from self._failure

            start = self._feed.position
            room = self._size - start
            self._written += len(view)
            in_range = view[:room] if len(view) > room else view

            mismatch = self._compare(in_range)
            if mismatch is not None:
                self._fail(mismatch)
                raise mismatch

            if len(view) > room:
                overflow = TrailingExtraBytesError(
                    self._size,
                    self._written,
                    bytes(in_range),
                    bytes(view[room:]),
                )
                self._fail(overflow)
                raise overflow
            return len(view)

    def close(self) -> None:
        """Finish verification.

        Raises
        ------
        NotEnoughBytesError
            If fewer than ``size`` bytes were written and no earlier failure
            was recorded.
        """

        with self._lock:
            if self._closed:
                return
            self._closed = True
            if self._failure is None and self._verified < self._size:
                shortfall = NotEnoughBytesError(self._size, self._verified)
                log.warning("verification failed: %s", shortfall)
                raise shortfall
            log.debug("verifier closed after %s", ByteCount(self._verified))

    def read_from(self, source: IO[bytes]) -> int:
        """Write everything readable from ``source`` and return the byte count.

        Errors from ``source`` and verification errors propagate immediately.
        """

        total = 0
        while True:
            chunk = source.read(_READ_CHUNK)
            if not chunk:
                return total
            self.write(chunk)
            total += len(chunk)

    def read_from_file(self, path: str | os.PathLike[str]) -> int:
        """Verify the contents of the file at ``path``."""

        with open(path, "rb") as f:
            return self.read_from(f)

    # -- Context manager --------------------------------------------------------

    def __enter__(self) -> "Verifier":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.close()
        else:
            with self._lock:
                self._closed = True

    def __repr__(self) -> str:
        return (
            f"Verifier(data_type={self._data_type.value!r}, seed={self._seed}, "
            f"size={int(self._size)})"
        )
