"""Typed exceptions for stream generation and verification.

Reader side failures are limited to :class:`GenerationError` (or whatever a
custom generator raises).  Verifier side conditions derive from
:class:`VerificationError` and carry the data needed to report them: the
offending offset and byte windows for a mismatch, the accepted and rejected
bytes for an overflow, and the declared and written lengths for a shortfall.
"""

from __future__ import annotations

from .units import ByteCount


class RandDataError(Exception):
    """Base class for all package errors."""


class UnsupportedTypeError(RandDataError, ValueError):
    """Raised when a data type tag has no generator implementation."""


class GenerationError(RandDataError):
    """Raised when a generator cannot produce the next chunk."""


class VerifierClosedError(RandDataError, ValueError):
    """Raised when writing to a verifier that has already been closed."""


class VerificationError(RandDataError):
    """Base class for verification failures."""


class UnexpectedBytesError(VerificationError):
    """Raised when a written byte differs from the expected stream content.

    ``pos`` is the absolute offset of the first differing byte; the first byte
    of the stream is ``0``.  ``expected_bytes`` and ``written_bytes`` are
    equally sized windows starting at that offset.
    """

    def __init__(self, pos: int, expected_bytes: bytes, written_bytes: bytes) -> None:
        self.pos = ByteCount(pos)
        self.expected_bytes = expected_bytes
        self.written_bytes = written_bytes
        super().__init__(
            f"unexpected byte at {pos}: want: {expected_bytes.hex()}, got: {written_bytes.hex()}"
        )


class TrailingExtraBytesError(VerificationError):
    """Raised when bytes are written beyond the end of the expected stream.

    ``written_len`` is the total length written including the excess.
    ``accepted_bytes`` is the in-range part of the offending write and
    ``extra_bytes`` the part beyond the declared size.
    """

    def __init__(
        self,
        expected_len: int,
        written_len: int,
        accepted_bytes: bytes,
        extra_bytes: bytes,
    ) -> None:
        self.expected_len = ByteCount(expected_len)
        self.written_len = ByteCount(written_len)
        self.accepted_bytes = accepted_bytes
        self.extra_bytes = extra_bytes
        super().__init__(f"trailing extra bytes: {extra_bytes.hex()}")


class NotEnoughBytesError(VerificationError):
    """Raised when a verifier is closed before the whole stream was written."""

    def __init__(self, expected_len: int, written_len: int) -> None:
        self.expected_len = ByteCount(expected_len)
        self.written_len = ByteCount(written_len)
        super().__init__(f"not enough bytes: {self.shortfall} short")

    @property
    def shortfall(self) -> ByteCount:
        return self.expected_len - self.written_len


class VerifierLockedError(VerificationError):
    """Raised on writes after a verifier recorded a terminal failure."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"verifier locked after earlier failure: {cause}")


__all__ = [
    "RandDataError",
    "UnsupportedTypeError",
    "GenerationError",
    "VerifierClosedError",
    "VerificationError",
    "UnexpectedBytesError",
    "TrailingExtraBytesError",
    "NotEnoughBytesError",
    "VerifierLockedError",
]
