"""Reproducible and verifiable pseudo-random byte streams.

A :class:`Reader` produces the canonical content of a stream identified by a
data type, a seed and a size, deliberately returning short reads.  A
:class:`Verifier` built from the same parameters checks a stream written to it
in arbitrary chunks, without either side holding the whole stream in memory::

    reader = Reader(DataType.BINARY, 123, 5_000_000)
    with reader.new_verifier() as verifier:
        reader.write_to(verifier)

The command line interface lives in :mod:`randdata.cli`.
"""

import logging

from .files import new_as_file, new_as_temp_file
from .generators import (
    BinaryGenerator,
    Generator,
    TextGenerator,
    ZeroGenerator,
    generator_for,
)
from .reader import Reader
from .types import DataType
from .utils.errors import (
    GenerationError,
    NotEnoughBytesError,
    RandDataError,
    TrailingExtraBytesError,
    UnexpectedBytesError,
    UnsupportedTypeError,
    VerificationError,
    VerifierClosedError,
    VerifierLockedError,
)
from .utils.units import ByteCount
from .verifier import Verifier

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "BinaryGenerator",
    "ByteCount",
    "DataType",
    "GenerationError",
    "Generator",
    "NotEnoughBytesError",
    "RandDataError",
    "Reader",
    "TextGenerator",
    "TrailingExtraBytesError",
    "UnexpectedBytesError",
    "UnsupportedTypeError",
    "VerificationError",
    "Verifier",
    "VerifierClosedError",
    "VerifierLockedError",
    "ZeroGenerator",
    "generator_for",
    "new_as_file",
    "new_as_temp_file",
]
