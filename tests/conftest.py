"""Shared test fixtures and utilities."""

from pathlib import Path
import pytest


@pytest.fixture
def write_file(tmp_path):
    """Factory fixture to write files relative to tmp_path/root."""
    def _write(path: str, content="test content"):
        file_path = tmp_path / "root" / path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            file_path.write_bytes(content)
        else:
            file_path.write_text(content)
        return file_path
    return _write


@pytest.fixture
def scan_root(tmp_path) -> Path:
    """Empty directory to scan; the manifest lands in tmp_path."""
    root = tmp_path / "root"
    root.mkdir(exist_ok=True)
    return root


@pytest.fixture
def sample_tree(scan_root, write_file):
    """Create a small tree with nested, hidden and excluded files."""
    def make_tree():
        write_file("a.txt", "hello")
        write_file("b/c.bin", b"")
        write_file("src/main.py", "print('hello')")
        write_file("src/pkg/util.py", "X = 1\n")
        write_file("data/data.csv", "a,b,c\n1,2,3")
        write_file(".git/config", "[core]\n")
        write_file(".hidden", "secret")
        write_file("MANIFEST.JSON", "{}")
        write_file("old_manifest.json", "{}")
        return scan_root
    return make_tree
