"""Streaming file checksums.

MD5 is used for change detection only, not as a security primitive.
"""

from pathlib import Path
import hashlib

from .constants import DEFAULT_CHUNK_SIZE


def compute_file_digest(path: Path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """Compute MD5 hash of file contents.

    The file is read in ``chunk_size`` pieces, so it never has to fit in
    memory.

    Args:
        path: Path to file to hash
        chunk_size: Bytes read per iteration

    Returns:
        32-character lowercase hex digest

    Raises:
        OSError: If the file cannot be opened or read
    """
    md5 = hashlib.md5(usedforsecurity=False)
    with Path(path).open("rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            md5.update(chunk)
    return md5.hexdigest()


__all__ = [
    "compute_file_digest",
]
