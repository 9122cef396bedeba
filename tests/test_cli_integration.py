"""Integration tests for the dir-manifest command.

These run in-process with CliRunner against real temporary directories.
"""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from dirmanifest.cli import app


EMPTY_MD5 = "d41d8cd98f00b204e9800998ecf8427e"
HELLO_MD5 = "5d41402abc4b2a76b9719d911017c592"


# ========== Fixtures ==========

@pytest.fixture
def runner():
    """Create a CliRunner for in-process testing."""
    return CliRunner()


# ========== Tests ==========

def test_generate_writes_manifest(runner, scan_root, write_file, tmp_path):
    write_file("a.txt", "hello")
    write_file("b/c.bin", b"")

    result = runner.invoke(app, [str(scan_root)])

    assert result.exit_code == 0, result.output
    assert "Found 2 files. Calculating hashes..." in result.output
    assert "\rHashed: 2 / 2" in result.output
    assert "Manifest written to" in result.output

    manifest_path = tmp_path / "root_manifest.json"
    assert json.loads(manifest_path.read_text()) == {
        "files": [
            {"path": "a.txt", "md5": HELLO_MD5},
            {"path": "b/c.bin", "md5": EMPTY_MD5},
        ]
    }


def test_missing_argument(runner):
    result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert "Usage: dir-manifest <directory>" in result.output


def test_path_does_not_exist(runner, tmp_path):
    result = runner.invoke(app, [str(tmp_path / "missing")])

    assert result.exit_code == 1
    assert "Provided path is not a directory" in result.output
    assert not (tmp_path / "missing_manifest.json").exists()


def test_path_is_a_file(runner, tmp_path):
    f = tmp_path / "file.txt"
    f.write_text("x")

    result = runner.invoke(app, [str(f)])

    assert result.exit_code == 1
    assert "Provided path is not a directory" in result.output


def test_workers_option(runner, sample_tree, tmp_path):
    root = sample_tree()

    serial = runner.invoke(app, [str(root), "--workers", "1"])
    serial_manifest = (tmp_path / "root_manifest.json").read_text()
    parallel = runner.invoke(app, [str(root), "-j", "8"])
    parallel_manifest = (tmp_path / "root_manifest.json").read_text()

    assert serial.exit_code == 0, serial.output
    assert parallel.exit_code == 0, parallel.output
    assert serial_manifest == parallel_manifest


def test_exclude_option(runner, scan_root, write_file, tmp_path):
    write_file("keep.txt")
    write_file("skip.tmp")

    result = runner.invoke(app, [str(scan_root), "--exclude", "*.tmp"])

    assert result.exit_code == 0, result.output
    files = json.loads((tmp_path / "root_manifest.json").read_text())["files"]
    assert [f["path"] for f in files] == ["keep.txt"]


def test_config_file(runner, scan_root, write_file, tmp_path):
    write_file("keep.txt")
    write_file("skip.log")
    cfg = tmp_path / "settings.yaml"
    cfg.write_text("manifest:\n  workers: 2\n  exclude:\n    - '*.log'\n")

    result = runner.invoke(app, [str(scan_root), "--config", str(cfg)])

    assert result.exit_code == 0, result.output
    files = json.loads((tmp_path / "root_manifest.json").read_text())["files"]
    assert [f["path"] for f in files] == ["keep.txt"]


def test_invalid_config_is_fatal(runner, scan_root, tmp_path):
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("workers: 0\n")

    result = runner.invoke(app, [str(scan_root), "--config", str(cfg)])

    assert result.exit_code == 1
    assert "Fatal error" in result.output


def test_per_file_error_keeps_exit_zero(runner, scan_root, write_file, tmp_path, monkeypatch):
    """Unreadable files are reported but do not fail the run."""
    write_file("a.txt", "hello")
    doomed = write_file("gone.txt", "bye")

    import dirmanifest.api as api

    real_hash_files = api.hash_files

    def delete_then_hash(entries, **kwargs):
        doomed.unlink()
        return real_hash_files(entries, **kwargs)

    monkeypatch.setattr(api, "hash_files", delete_then_hash)

    result = runner.invoke(app, [str(scan_root)])

    assert result.exit_code == 0, result.output
    assert "Error hashing gone.txt" in result.output
    assert "1 of 2 files could not be hashed" in result.output
    files = json.loads((tmp_path / "root_manifest.json").read_text())["files"]
    assert files == [{"path": "a.txt", "md5": HELLO_MD5}]


def test_write_failure_exits_one(runner, scan_root, write_file, monkeypatch):
    write_file("a.txt")

    def fail_write(path, text):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr("dirmanifest.manifest._atomic_write_text", fail_write)

    result = runner.invoke(app, [str(scan_root)])

    assert result.exit_code == 1
    assert "Fatal error" in result.output


def test_verbose_logging(runner, scan_root, write_file):
    write_file("a.txt")

    result = runner.invoke(app, [str(scan_root), "--verbose"])

    assert result.exit_code == 0, result.output
    assert "Manifest written to" in result.output


def test_relative_path_argument(runner, scan_root, write_file, tmp_path, monkeypatch):
    write_file("a.txt", "hello")
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["root"])

    assert result.exit_code == 0, result.output
    assert Path(tmp_path / "root_manifest.json").exists()
