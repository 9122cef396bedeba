"""Exclusion rules for manifest scanning.

Two fixed rules always apply to file names: prior manifest files and hidden
files are skipped. Directories are never excluded by name, so hidden
directories such as ``.git`` are still descended into.

Extra gitignore-style patterns are applied only when the caller passes them
(``--exclude`` or a config file). Nothing inside the scanned tree changes
which files are listed.
"""

from typing import Iterable

from pathspec import GitIgnoreSpec

from .constants import MANIFEST_SUFFIX


def is_manifest_file(name: str) -> bool:
    """Check if a file name looks like a manifest (case-insensitive suffix)."""
    return name.lower().endswith(MANIFEST_SUFFIX)


def is_hidden_file(name: str) -> bool:
    """Check if a file name is hidden (leading dot)."""
    return name.startswith(".")


def is_excluded_name(name: str) -> bool:
    """Check if a file should be excluded based on its name alone."""
    return is_manifest_file(name) or is_hidden_file(name)


class IgnoreSpec:
    """Fixed name rules plus optional gitignore-style path patterns."""

    def __init__(self, patterns: Iterable[str] = ()):
        """Compile extra patterns once.

        Args:
            patterns: Gitignore-style patterns matched against relative POSIX paths
        """
        self.patterns = list(patterns)
        self.spec = GitIgnoreSpec.from_lines(self.patterns)

    def is_ignored(self, relpath: str) -> bool:
        """Check if a file at a root-relative POSIX path should be excluded.

        Args:
            relpath: Root-relative path with forward slashes

        Returns:
            True if the file name matches a fixed rule or the path matches a pattern
        """
        name = relpath.rsplit("/", 1)[-1]
        if is_excluded_name(name):
            return True
        if not self.patterns:
            return False
        return self.spec.match_file(relpath)
