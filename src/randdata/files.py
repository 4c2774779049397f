"""Materialize streams into files.

Both helpers write exactly ``size`` bytes of the canonical stream and return a
:class:`~randdata.verifier.Verifier` with identical parameters so that the
file, or a copy of it, can be checked later.  A partially written file is
removed when anything fails.  Removing a successfully written file is the
caller's responsibility.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import BinaryIO

from .generators import Generator
from .reader import Reader
from .types import DataType
from .utils.logging import get_logger
from .verifier import Verifier

__all__ = ["new_as_file", "new_as_temp_file"]

log = get_logger(__name__)


def _make_reader(
    data_type: DataType | str, seed: int, size: int, generator: Generator | None
) -> Reader:
    if generator is not None:
        return Reader.with_generator(generator, seed, size)
    return Reader(data_type, seed, size)


def _fill(f: BinaryIO, path: Path, reader: Reader) -> None:
    """Write ``reader`` into the open file ``f``; remove ``path`` on failure."""

    try:
        with f:
            reader.write_to(f)
    except BaseException:
        path.unlink(missing_ok=True)
        log.debug("removed partial file %s", path)
        raise


def new_as_file(
    data_type: DataType | str,
    seed: int,
    size: int,
    path: str | os.PathLike[str],
    *,
    generator: Generator | None = None,
) -> Verifier:
    """Write the stream into ``path`` and return a matching verifier.

    The file is created or truncated; parent directories are created with
    ``exist_ok=True``.  Pass ``generator`` to use a custom generator, in which
    case ``data_type`` is ignored.
    """

    reader = _make_reader(data_type, seed, size, generator)
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    _fill(open(file_path, "wb"), file_path, reader)
    log.debug("wrote %s to %s", reader.total_read, file_path)
    return reader.new_verifier()


def new_as_temp_file(
    data_type: DataType | str,
    seed: int,
    size: int,
    *,
    generator: Generator | None = None,
) -> tuple[str, Verifier]:
    """Write the stream into a new temporary file.

    Returns
    -------
    tuple[str, Verifier]
        The temporary file name and a matching verifier.
    """

    reader = _make_reader(data_type, seed, size, generator)
    fd, name = tempfile.mkstemp(prefix="randdata", suffix=".tmp")
    _fill(os.fdopen(fd, "wb"), Path(name), reader)
    log.debug("wrote %s to %s", reader.total_read, name)
    return name, reader.new_verifier()
