"""Content generators and the data type registry.

Built-in generators are registered per :class:`~randdata.types.DataType`.
:func:`generator_for` dispatches on the tag and raises
:class:`~randdata.utils.errors.UnsupportedTypeError` for tags without an
implementation instead of substituting another variant.  Custom generators are
any objects implementing :class:`Generator`.
"""

from __future__ import annotations

from typing import Callable

from ..types import DataType
from ..utils.errors import UnsupportedTypeError
from .base import INT64_MAX, INT64_MIN, Generator, draw_stream, validate_seed
from .binary import BinaryGenerator
from .text import TextGenerator
from .zero import ZeroGenerator

GeneratorFactory = Callable[[], Generator]

_FACTORIES: dict[DataType, GeneratorFactory] = {}


def register_generator(data_type: DataType, factory: GeneratorFactory) -> None:
    """Register ``factory`` as the builder for ``data_type``."""

    if data_type is DataType.CUSTOM:
        raise ValueError("custom generators are passed explicitly, not registered")
    _FACTORIES[data_type] = factory


def generator_for(data_type: DataType | str) -> Generator:
    """Return a new generator for ``data_type``.

    Raises
    ------
    UnsupportedTypeError
        If the tag is unknown, reserved, or ``custom``.
    """

    dtype = DataType.coerce(data_type)
    if dtype is DataType.CUSTOM:
        raise UnsupportedTypeError("custom data type requires an explicit generator")
    factory = _FACTORIES.get(dtype)
    if factory is None:
        raise UnsupportedTypeError(f"data type not implemented: {dtype}")
    return factory()


def ensure_generator(generator: object) -> Generator:
    """Return ``generator`` if it satisfies the :class:`Generator` protocol."""

    if not isinstance(generator, Generator):
        raise TypeError(f"{type(generator).__name__} does not implement generate(rng, pos, rem)")
    return generator


register_generator(DataType.ZERO, ZeroGenerator)
register_generator(DataType.BINARY, BinaryGenerator)
register_generator(DataType.TEXT, TextGenerator)

__all__ = [
    "INT64_MIN",
    "INT64_MAX",
    "Generator",
    "GeneratorFactory",
    "BinaryGenerator",
    "TextGenerator",
    "ZeroGenerator",
    "draw_stream",
    "ensure_generator",
    "generator_for",
    "register_generator",
    "validate_seed",
]
