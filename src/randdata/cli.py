"""Typer-based command line interface.

``randdata generate`` writes a canonical stream to a file or stdout and
``randdata verify`` checks a file or stdin against the stream described by the
same type, seed and size.  Parameters not given on the command line come from
the configuration (package defaults, ``--config`` YAML, ``RANDDATA_SEED``).

Exit codes
----------
0 success
3 I/O error (missing input, unwritable output)
4 configuration error (invalid config file, unknown type, bad size)
6 verification failure (mismatch, extra bytes, short stream)
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from time import perf_counter
from typing import BinaryIO, Optional

import typer
import yaml
from pydantic import ValidationError

from .config import ConfigModel, load_config
from .files import new_as_file
from .reader import Reader
from .utils.errors import RandDataError
from .utils.logging import configure_logging
from .utils.units import ByteCount
from .verifier import Verifier

if not sys.stdout.isatty():  # pragma: no cover - CLI test context
    os.environ.setdefault("NO_COLOR", "1")

app = typer.Typer(
    name="randdata",
    help="Reproducible pseudo-random data. Use 'randdata generate' and 'randdata verify'.",
)

STDIO = "-"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _safe_exit(code: int, msg: str | None = None) -> None:
    """Exit the CLI with ``code`` emitting ``msg`` to stderr if provided."""

    if msg:
        typer.echo(msg, err=True)
    raise typer.Exit(code)


def _load(config_path: Path | None, verbose: bool) -> ConfigModel:
    try:
        cfg = load_config(config_path)
    except (ValidationError, ValueError, OSError, yaml.YAMLError) as exc:
        _safe_exit(4, str(exc).splitlines()[0])
    configure_logging("DEBUG" if verbose else cfg.logging.level)
    if verbose:
        typer.echo("Loaded config", err=True)
    return cfg


def _parse_size(size: str | None) -> int | None:
    if size is None:
        return None
    try:
        return ByteCount.parse(size)
    except ValueError as exc:
        _safe_exit(4, str(exc))
    return None  # pragma: no cover - _safe_exit raises


def _stdout() -> BinaryIO:
    return sys.stdout.buffer


def _stdin() -> BinaryIO:
    return sys.stdin.buffer


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.callback()
def main() -> None:
    """Entry point for the randdata command group."""
    pass


@app.command()
def generate(
    out_path: str = typer.Option(..., "--out", help="Output file, '-' for stdout"),  # noqa: B008
    data_type: Optional[str] = typer.Option(  # noqa: B008
        None, "--type", "-t", help="Data type [zero|binary|text]"
    ),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),  # noqa: B008
    size: Optional[str] = typer.Option(  # noqa: B008
        None, "--size", "-n", help="Stream size, e.g. 4096, 5MB or 2MiB"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit progress messages to stderr"
    ),
) -> None:
    """Write a reproducible stream to ``--out``."""

    cfg = _load(config_path, verbose)
    stream_size = _parse_size(size)

    start = perf_counter()
    try:
        if out_path == STDIO:
            reader = Reader.from_config(cfg, data_type=data_type, seed=seed, size=stream_size)
            written = ByteCount(reader.write_to(_stdout()))
            _stdout().flush()
        else:
            verifier = new_as_file(
                data_type if data_type is not None else cfg.stream.type,
                seed if seed is not None else cfg.stream.seed,
                stream_size if stream_size is not None else cfg.stream.size,
                out_path,
            )
            written = verifier.size
    except (ValueError, TypeError) as exc:
        _safe_exit(4, str(exc))
    except OSError as exc:
        _safe_exit(3, str(exc))
    if verbose:
        elapsed = (perf_counter() - start) * 1000.0
        typer.echo(f"Wrote {written} in {elapsed:.1f} ms", err=True)


@app.command()
def verify(
    in_path: str = typer.Option(  # noqa: B008
        ..., "--in", "--input", help="File to verify, '-' for stdin"
    ),
    data_type: Optional[str] = typer.Option(  # noqa: B008
        None, "--type", "-t", help="Data type [zero|binary|text]"
    ),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),  # noqa: B008
    size: Optional[str] = typer.Option(  # noqa: B008
        None, "--size", "-n", help="Expected size, e.g. 4096, 5MB or 2MiB"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit progress messages to stderr"
    ),
) -> None:
    """Check that ``--in`` holds exactly the described stream."""

    cfg = _load(config_path, verbose)
    stream_size = _parse_size(size)

    try:
        verifier = Verifier.from_config(cfg, data_type=data_type, seed=seed, size=stream_size)
    except (ValueError, TypeError) as exc:
        _safe_exit(4, str(exc))

    start = perf_counter()
    try:
        if in_path == STDIO:
            verifier.read_from(_stdin())
        else:
            verifier.read_from_file(in_path)
        verifier.close()
    except RandDataError as exc:
        _safe_exit(6, str(exc))
    except OSError as exc:
        _safe_exit(3, str(exc))
    if verbose:
        elapsed = (perf_counter() - start) * 1000.0
        typer.echo(f"Verified {verifier.total_verified} in {elapsed:.1f} ms", err=True)
    typer.echo(f"OK {verifier.size}")
