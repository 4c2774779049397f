"""Byte count values with human readable formatting.

:class:`ByteCount` is a plain non-negative ``int`` whose string form uses SI
units with one decimal (``5000000`` renders as ``"5.0 MB"``, values below one
kilobyte as ``"10 B"``).  Addition and subtraction keep the type so that
differences such as a shortfall also format nicely.
"""

from __future__ import annotations

import re

__all__ = ["ByteCount"]

_SI_UNITS: tuple[str, ...] = ("kB", "MB", "GB", "TB", "PB", "EB")

_MULTIPLIERS: dict[str, int] = {
    "": 1,
    "b": 1,
    "kb": 1000,
    "mb": 1000**2,
    "gb": 1000**3,
    "tb": 1000**4,
    "pb": 1000**5,
    "eb": 1000**6,
    "kib": 1024,
    "mib": 1024**2,
    "gib": 1024**3,
    "tib": 1024**4,
    "pib": 1024**5,
    "eib": 1024**6,
}

_PARSE_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([A-Za-z]*)\s*$")


class ByteCount(int):
    """Non-negative number of bytes."""

    def __new__(cls, value: int = 0) -> "ByteCount":
        value = int(value)
        if value < 0:
            raise ValueError(f"byte count must be non-negative, got {value}")
        return super().__new__(cls, value)

    @classmethod
    def parse(cls, text: str) -> "ByteCount":
        """Parse strings like ``"4096"``, ``"5MB"``, ``"1.5 kB"`` or ``"2MiB"``."""

        match = _PARSE_RE.match(text)
        if match is None:
            raise ValueError(f"invalid byte count: {text!r}")
        number, unit = match.groups()
        multiplier = _MULTIPLIERS.get(unit.lower())
        if multiplier is None:
            raise ValueError(f"unknown byte count unit: {unit!r}")
        if "." in number:
            return cls(round(float(number) * multiplier))
        return cls(int(number) * multiplier)

    def __add__(self, other: object) -> "ByteCount":
        if not isinstance(other, int):
            return NotImplemented
        return ByteCount(int(self) + int(other))

    __radd__ = __add__

    def __sub__(self, other: object) -> "ByteCount":
        if not isinstance(other, int):
            return NotImplemented
        return ByteCount(int(self) - int(other))

    def __rsub__(self, other: object) -> "ByteCount":
        if not isinstance(other, int):
            return NotImplemented
        return ByteCount(int(other) - int(self))

    def __str__(self) -> str:
        value = int(self)
        if value < 1000:
            return f"{value} B"
        scaled = float(value)
        for unit in _SI_UNITS:
            scaled /= 1000.0
            if scaled < 999.95 or unit == _SI_UNITS[-1]:
                return f"{scaled:.1f} {unit}"
        raise AssertionError("unreachable")  # pragma: no cover

    def __repr__(self) -> str:
        return f"ByteCount({int(self)})"
