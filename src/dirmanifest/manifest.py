"""Manifest assembly and output.

Workers complete in any order; assembly walks the result slots in
discovery order and drops the slots of files that failed to hash.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import List, Optional, Sequence

from .constants import OUTPUT_SUFFIX
from .errors import WriteError
from .models import FileEntry, HashResult, Manifest

logger = logging.getLogger(__name__)


def assemble_manifest(
    entries: Sequence[FileEntry],
    results: Sequence[Optional[HashResult]],
) -> Manifest:
    """Build the manifest from discovery-ordered entries and result slots.

    Args:
        entries: Discovered files in discovery order
        results: One slot per entry; None where hashing failed

    Returns:
        Manifest with successful results in discovery order

    Raises:
        ValueError: If entries and results have different lengths
    """
    if len(entries) != len(results):
        raise ValueError(
            f"Result count ({len(results)}) does not match entry count ({len(entries)})"
        )
    return Manifest(files=[result for result in results if result is not None])


def failed_paths(
    entries: Sequence[FileEntry],
    results: Sequence[Optional[HashResult]],
) -> List[str]:
    """Relative paths whose result slot is empty, in discovery order."""
    return [entry.relative_path for entry, result in zip(entries, results) if result is None]


def manifest_path_for(root: Path) -> Path:
    """Output location for a scan root: ``<parent>/<name>_manifest.json``."""
    resolved = Path(root).resolve()
    return resolved.parent / f"{resolved.name}{OUTPUT_SUFFIX}"


# ============= Atomic Write Helpers =============

def _fsync_dir(path: Path) -> None:
    """Fsync a directory so a rename inside it is durable (best-effort)."""
    try:
        flags = os.O_RDONLY
        if hasattr(os, "O_DIRECTORY"):
            flags |= os.O_DIRECTORY
        dirfd = os.open(str(path), flags)
        try:
            os.fsync(dirfd)
        finally:
            os.close(dirfd)
    except OSError:
        # Windows and some filesystems don't support directory fsync
        logger.debug("Directory fsync not supported for %s", path)


def _atomic_write_text(path: Path, text: str) -> None:
    """Atomically write text to file.

    1. Write to a temp file in the same directory and fsync it
    2. ``os.replace`` onto the target (appears all-at-once)
    3. Fsync the parent directory so the rename survives a crash

    The temp file is removed if anything fails.
    """
    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        delete=False,
        dir=path.parent,
        prefix=f".{path.name}.tmp-",
        suffix=""
    ) as f:
        tmp = Path(f.name)
        try:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        except BaseException:
            f.close()
            tmp.unlink(missing_ok=True)
            raise

    try:
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    _fsync_dir(path.parent)


def write_manifest(manifest: Manifest, path: Path) -> Path:
    """Write the manifest JSON atomically.

    Args:
        manifest: Assembled manifest
        path: Destination file

    Returns:
        The path written

    Raises:
        WriteError: If the file cannot be written; nothing is left behind
    """
    path = Path(path)
    try:
        _atomic_write_text(path, manifest.to_json())
    except OSError as e:
        raise WriteError(path, e) from e
    logger.info(f"Wrote manifest to {path}")
    return path
