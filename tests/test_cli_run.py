from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from randdata import DataType, Reader
from randdata.cli import app


def test_cli_generate_and_verify_file(tmp_path: Path) -> None:
    out_path = tmp_path / "data.bin"
    runner = CliRunner()
    args = ["--type", "binary", "--seed", "123", "--size", "10kB"]
    result = runner.invoke(app, ["generate", "--out", str(out_path), *args])
    assert result.exit_code == 0
    assert out_path.read_bytes() == Reader(DataType.BINARY, 123, 10_000).readall()

    result = runner.invoke(app, ["verify", "--in", str(out_path), *args])
    assert result.exit_code == 0
    assert "OK 10.0 kB" in result.stdout


def test_cli_generate_stdout() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["generate", "--out", "-", "-t", "text", "--seed=-4", "-n", "5000"])
    assert result.exit_code == 0
    assert result.stdout_bytes == Reader(DataType.TEXT, -4, 5000).readall()


def test_cli_verify_stdin() -> None:
    data = Reader(DataType.ZERO, 1, 300).readall()
    runner = CliRunner()
    result = runner.invoke(
        app, ["verify", "--in", "-", "-t", "zero", "-s", "1", "-n", "300"], input=data
    )
    assert result.exit_code == 0
    assert "OK 300 B" in result.stdout


def test_cli_uses_config_defaults(tmp_path: Path) -> None:
    cfg_file = tmp_path / "cfg.yml"
    cfg_file.write_text("stream:\n  type: text\n  seed: 11\n  size: 2048\n")
    out_path = tmp_path / "data.txt"
    runner = CliRunner()
    result = runner.invoke(app, ["generate", "--out", str(out_path), "--config", str(cfg_file)])
    assert result.exit_code == 0
    assert out_path.read_bytes() == Reader(DataType.TEXT, 11, 2048).readall()
    result = runner.invoke(app, ["verify", "--in", str(out_path), "--config", str(cfg_file)])
    assert result.exit_code == 0


def test_cli_seed_from_env(tmp_path: Path) -> None:
    out_path = tmp_path / "data.bin"
    runner = CliRunner()
    env = {"RANDDATA_SEED": "77"}
    result = runner.invoke(app, ["generate", "--out", str(out_path), "-n", "500"], env=env)
    assert result.exit_code == 0
    assert out_path.read_bytes() == Reader(DataType.BINARY, 77, 500).readall()


def test_cli_verbose(tmp_path: Path) -> None:
    out_path = tmp_path / "data.bin"
    runner = CliRunner()
    result = runner.invoke(app, ["generate", "--out", str(out_path), "-n", "1000", "-v"])
    assert result.exit_code == 0
    assert "Wrote 1.0 kB" in result.stderr
