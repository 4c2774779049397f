"""Data type tags selecting a generator variant."""

from __future__ import annotations

from enum import Enum

from .utils.errors import UnsupportedTypeError


class DataType(Enum):
    """Enumeration of stream data types."""

    ZERO = "zero"  # zero filled data (not random)
    BINARY = "binary"
    TEXT = "text"
    UTF8_TEXT = "utf8-text"  # reserved, not implemented
    CUSTOM = "custom"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def coerce(cls, value: "DataType | str") -> "DataType":
        """Return ``value`` as a :class:`DataType`, accepting its string form."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise UnsupportedTypeError(f"unknown data type: {value!r}") from None


__all__ = ["DataType"]
