from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from randdata import DataType, Reader
from randdata.cli import app

ARGS = ["-t", "binary", "-s", "5", "-n", "4096"]


def _canonical() -> bytes:
    return Reader(DataType.BINARY, 5, 4096).readall()


def test_missing_file(tmp_path: Path) -> None:
    missing = tmp_path / "missing.bin"
    runner = CliRunner()
    result = runner.invoke(app, ["verify", "--in", str(missing), *ARGS])
    assert result.exit_code == 3
    assert str(missing) in result.stderr


def test_output_is_directory(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["generate", "--out", str(tmp_path), *ARGS])
    assert result.exit_code == 3


def test_bad_config(tmp_path: Path) -> None:
    bad_cfg = tmp_path / "bad.yml"
    bad_cfg.write_text("unknown: true\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["generate", "--out", str(tmp_path / "out.bin"), "--config", str(bad_cfg)],
    )
    assert result.exit_code == 4


def test_missing_config(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app, ["generate", "--out", "-", "--config", str(tmp_path / "nope.yml")]
    )
    assert result.exit_code == 4


def test_unsupported_type(tmp_path: Path) -> None:
    runner = CliRunner()
    for data_type in ("custom", "utf8-text", "rainbow"):
        result = runner.invoke(
            app, ["generate", "--out", str(tmp_path / "x.bin"), "-t", data_type, "-n", "10"]
        )
        assert result.exit_code == 4
        result = runner.invoke(
            app, ["verify", "--in", "-", "-t", data_type, "-n", "10"], input=b""
        )
        assert result.exit_code == 4


def test_bad_size() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["generate", "--out", "-", "-n", "lots"])
    assert result.exit_code == 4


def test_bad_env_seed() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["generate", "--out", "-"], env={"RANDDATA_SEED": "abc"})
    assert result.exit_code == 4


def test_verify_tampered(tmp_path: Path) -> None:
    data = bytearray(_canonical())
    data[1000] ^= 0xFF
    in_path = tmp_path / "bad.bin"
    in_path.write_bytes(bytes(data))
    runner = CliRunner()
    result = runner.invoke(app, ["verify", "--in", str(in_path), *ARGS])
    assert result.exit_code == 6
    assert "unexpected byte at 1000" in result.stderr


def test_verify_short(tmp_path: Path) -> None:
    in_path = tmp_path / "short.bin"
    in_path.write_bytes(_canonical()[:4000])
    runner = CliRunner()
    result = runner.invoke(app, ["verify", "--in", str(in_path), *ARGS])
    assert result.exit_code == 6
    assert "not enough bytes: 96 B short" in result.stderr


def test_verify_extra(tmp_path: Path) -> None:
    in_path = tmp_path / "long.bin"
    in_path.write_bytes(_canonical() + b"\x00\x01")
    runner = CliRunner()
    result = runner.invoke(app, ["verify", "--in", str(in_path), *ARGS])
    assert result.exit_code == 6
    assert "trailing extra bytes: 0001" in result.stderr
