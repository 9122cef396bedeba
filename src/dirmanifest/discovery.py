"""Directory tree enumeration.

Walks the scan root depth-first and returns every regular file as a
FileEntry. Entries within a directory are visited sorted by name, so
discovery order is stable across runs and platforms. The walk keeps an
explicit stack of open listings instead of recursing, so deep trees cannot
hit the interpreter recursion limit.

Symlinks are never followed (to files or directories). Symlinks, special
files and subdirectories that cannot be listed are reported through
``on_error`` and skipped; their siblings are still enumerated.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Iterator, List, Optional

from .errors import RootNotDirectoryError, SkippedEntryError
from .ignore import IgnoreSpec
from .models import FileEntry

logger = logging.getLogger(__name__)

SkipCallback = Callable[[str, SkippedEntryError], None]


def _log_skip(relpath: str, error: SkippedEntryError) -> None:
    logger.warning(str(error))


def _list_dir(path: str) -> List[os.DirEntry]:
    with os.scandir(path) as it:
        return sorted(it, key=lambda entry: entry.name)


def _relpath(root: str, path: str) -> str:
    return Path(os.path.relpath(path, root)).as_posix()


def validate_root(root: Path) -> Path:
    """Resolve the scan root and check it is an existing directory.

    Raises:
        RootNotDirectoryError: If the path is missing or not a directory
    """
    resolved = Path(root).resolve()
    if not resolved.is_dir():
        raise RootNotDirectoryError(resolved)
    return resolved


def discover_files(
    root: Path,
    ignore: Optional[IgnoreSpec] = None,
    on_error: Optional[SkipCallback] = None,
) -> List[FileEntry]:
    """Enumerate all regular files beneath ``root``.

    Args:
        root: Directory to scan
        ignore: Exclusion rules (defaults to the fixed name rules only)
        on_error: Called with (relative_path, error) for each skipped entry

    Returns:
        FileEntry list in discovery order

    Raises:
        RootNotDirectoryError: If root is missing or not a directory
        OSError: If the root itself cannot be listed
    """
    root_path = validate_root(root)
    ignore = ignore or IgnoreSpec()
    report = on_error or _log_skip
    base = str(root_path)

    files: List[FileEntry] = []
    stack: List[Iterator[os.DirEntry]] = [iter(_list_dir(base))]

    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue

        relpath = _relpath(base, entry.path)
        try:
            if entry.is_symlink():
                report(relpath, SkippedEntryError(relpath, "symbolic link not followed"))
            elif entry.is_dir(follow_symlinks=False):
                stack.append(iter(_list_dir(entry.path)))
            elif entry.is_file(follow_symlinks=False):
                if not ignore.is_ignored(relpath):
                    files.append(FileEntry(absolute_path=Path(entry.path), relative_path=relpath))
            else:
                report(relpath, SkippedEntryError(relpath, "not a regular file"))
        except OSError as e:
            reason = e.strerror or str(e)
            report(relpath, SkippedEntryError(relpath, reason))

    logger.debug(f"Discovered {len(files)} files under {root_path}")
    return files
