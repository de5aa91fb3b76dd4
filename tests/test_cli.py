# tests/test_cli.py
"""Tests for the command line interface."""

import hashlib
import tempfile
from pathlib import Path

import pytest

from gish.cli import main


@pytest.fixture
def tmp_dir():
    """Create temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


class TestCli:
    """Test gish main()."""

    def test_prints_hex_digest(self, tmp_dir, capsys):
        path = tmp_dir / "hello.txt"
        path.write_bytes(b"hello\n")

        assert main([str(path)]) == 0
        out = capsys.readouterr().out
        assert out == hashlib.sha1(b"blob 6\0hello\n").hexdigest() + "\n"
        assert len(out.strip()) == 40

    def test_directory(self, tmp_dir, capsys):
        (tmp_dir / "f").write_bytes(b"x")
        assert main([str(tmp_dir), "--tree-concurrency", "1", "--blob-concurrency", "2"]) == 0
        assert len(capsys.readouterr().out.strip()) == 40

    def test_empty_directory_fails(self, tmp_dir, capsys):
        assert main([str(tmp_dir)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "EmptyDirectoryError" in captured.err

    def test_missing_path_fails(self, tmp_dir, capsys):
        assert main([str(tmp_dir / "missing")]) == 1
        assert "FileNotFoundError" in capsys.readouterr().err

    def test_invalid_override(self, tmp_dir, capsys):
        (tmp_dir / "f").write_bytes(b"x")
        assert main([str(tmp_dir), "--tree-concurrency", "0"]) == 1
        assert "Invalid config" in capsys.readouterr().err

    def test_config_file(self, tmp_dir, capsys):
        data = tmp_dir / "data"
        data.mkdir()
        (data / "f").write_bytes(b"x")
        (data / "skip").mkdir()
        (data / "skip" / "g").write_bytes(b"y")
        config = tmp_dir / "gish.yaml"
        config.write_text("metadata_dir: skip\n")

        assert main([str(data), "--config", str(config)]) == 0
        with_skip = capsys.readouterr().out

        (data / "skip" / "g").unlink()
        (data / "skip").rmdir()
        assert main([str(data)]) == 0
        assert capsys.readouterr().out == with_skip
