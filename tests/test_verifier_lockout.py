"""Behaviour of verifiers after a mismatch or overflow, with and without lockout."""

from __future__ import annotations

import pytest

from randdata import (
    DataType,
    Reader,
    TrailingExtraBytesError,
    UnexpectedBytesError,
    Verifier,
    VerifierLockedError,
)


def canonical(size: int, seed: int = 31) -> bytes:
    return Reader(DataType.BINARY, seed, size, jitter=False).readall()


def tampered(size: int, *offsets: int) -> bytes:
    data = bytearray(canonical(size))
    for offset in offsets:
        data[offset] ^= 0x80
    return bytes(data)


def test_lockout_rejects_writes_after_mismatch() -> None:
    data = tampered(3000, 150)
    verifier = Verifier(DataType.BINARY, 31, 3000)
    with pytest.raises(UnexpectedBytesError) as excinfo:
        verifier.write(data[:1000])
    with pytest.raises(VerifierLockedError) as locked:
        verifier.write(data[1000:2000])
    assert locked.value.cause is excinfo.value
    assert locked.value.__cause__ is excinfo.value
    assert verifier.error is excinfo.value
    assert verifier.total_verified == 150


def test_lockout_rejects_writes_after_overflow() -> None:
    data = canonical(3000)
    verifier = Verifier(DataType.BINARY, 31, 2000)
    with pytest.raises(TrailingExtraBytesError):
        verifier.write(data[:2500])
    with pytest.raises(VerifierLockedError):
        verifier.write(data[2500:])


def test_lockout_close_after_failure_does_not_add_shortfall() -> None:
    data = tampered(3000, 10)
    verifier = Verifier(DataType.BINARY, 31, 3000)
    with pytest.raises(UnexpectedBytesError):
        verifier.write(data[:100])
    verifier.close()
    assert verifier.closed
    assert isinstance(verifier.error, UnexpectedBytesError)


def test_without_lockout_later_writes_stay_aligned() -> None:
    data = tampered(3000, 150, 2500)
    verifier = Verifier(DataType.BINARY, 31, 3000, lockout_on_error=False)
    with pytest.raises(UnexpectedBytesError) as first:
        verifier.write(data[:1000])
    assert first.value.pos == 150
    assert verifier.write(data[1000:2000]) == 1000
    with pytest.raises(UnexpectedBytesError) as second:
        verifier.write(data[2000:])
    assert second.value.pos == 2500
    assert verifier.total_verified == 3000
    assert verifier.error is first.value
    verifier.close()


def test_without_lockout_first_mismatch_in_chunk_reported() -> None:
    data = tampered(3000, 40, 41, 900)
    verifier = Verifier(DataType.BINARY, 31, 3000, lockout_on_error=False)
    with pytest.raises(UnexpectedBytesError) as excinfo:
        verifier.write(data)
    assert excinfo.value.pos == 40


def test_without_lockout_overflow_repeats() -> None:
    data = canonical(3000)
    verifier = Verifier(DataType.BINARY, 31, 2000, lockout_on_error=False)
    with pytest.raises(TrailingExtraBytesError) as first:
        verifier.write(data[:2500])
    assert first.value.extra_bytes == data[2000:2500]
    with pytest.raises(TrailingExtraBytesError) as second:
        verifier.write(data[2500:])
    assert second.value.accepted_bytes == b""
    assert second.value.extra_bytes == data[2500:]
    assert second.value.written_len == 3000
    verifier.close()
