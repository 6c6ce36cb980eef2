"""Tests for the filego CLI."""

import json

from typer.testing import CliRunner

from filego.cli.main import app

runner = CliRunner()


def _last_line(output: str) -> str:
    return [line for line in output.splitlines() if line.strip()][-1]


def test_version():
    from filego import __version__

    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_split_check_merge(tmp_path):
    source = tmp_path / "input.bin"
    source.write_bytes(b"0123456789")
    chunk_dir = tmp_path / "chunks"
    out_file = tmp_path / "restored.bin"

    result = runner.invoke(
        app, ["split", str(source), str(chunk_dir), "--chunk-size", "3", "--json"]
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(_last_line(result.stdout))
    assert payload == {"file_size": 10, "total_chunks": 4}

    result = runner.invoke(
        app, ["check", str(chunk_dir), "--file-size", "10", "--total-chunks", "4"]
    )
    assert result.exit_code == 0, result.output
    assert "verified" in result.output

    result = runner.invoke(app, ["merge", str(chunk_dir), str(out_file)])
    assert result.exit_code == 0, result.output
    assert out_file.read_bytes() == b"0123456789"


def test_check_missing_exits_one(tmp_path):
    chunk_dir = tmp_path / "chunks"
    chunk_dir.mkdir()
    (chunk_dir / "0").write_bytes(b"abc")

    result = runner.invoke(
        app,
        ["check", str(chunk_dir), "--file-size", "6", "--total-chunks", "2", "--json"],
    )

    assert result.exit_code == 1
    payload = json.loads(_last_line(result.stdout))
    assert payload["success"] is False
    assert payload["error"]["error_type"] == "missing"
    assert payload["error"]["missing"] == [1]


def test_check_size_mismatch_exits_one(tmp_path):
    chunk_dir = tmp_path / "chunks"
    chunk_dir.mkdir()
    (chunk_dir / "0").write_bytes(b"abc")

    result = runner.invoke(
        app, ["check", str(chunk_dir), "--file-size", "4", "--total-chunks", "1"]
    )

    assert result.exit_code == 1
    assert "not equal to file_size" in result.output


def test_configuration_failure_exits_two(tmp_path):
    result = runner.invoke(
        app,
        ["check", str(tmp_path / "nope"), "--file-size", "1", "--total-chunks", "1"],
    )

    assert result.exit_code == 2
    assert "in_dir_not_found" in result.output


def test_merge_invalid_name_exits_two(tmp_path):
    chunk_dir = tmp_path / "chunks"
    chunk_dir.mkdir()
    (chunk_dir / "0").write_bytes(b"a")
    (chunk_dir / "README").write_bytes(b"stray")

    result = runner.invoke(app, ["merge", str(chunk_dir), str(tmp_path / "out")])

    assert result.exit_code == 2
    assert "in_file_name_invalid" in result.output


def test_split_uses_settings_chunk_size(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("FILEGO_CHUNK_SIZE", "4")
    source = tmp_path / "input.bin"
    source.write_bytes(b"abcdefghij")

    result = runner.invoke(app, ["split", str(source), str(tmp_path / "chunks"), "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(_last_line(result.stdout))["total_chunks"] == 3


def test_config_command_prints_settings(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("FILEGO_MAX_BUFFER_CAPACITY", "99")

    result = runner.invoke(app, ["config"])

    assert result.exit_code == 0
    assert '"FILEGO_MAX_BUFFER_CAPACITY": 99' in result.output
