"""Custom exceptions for dir-manifest.

This module defines typed exceptions so that per-file failures can be
isolated while path, configuration and write failures unwind to the CLI.
"""

from pathlib import Path
from typing import Union


class ManifestError(RuntimeError):
    """Base class for all manifest-related errors."""
    pass


class UsageError(ManifestError):
    """No directory argument was supplied."""
    pass


class ConfigError(ManifestError):
    """Configuration file is unreadable or invalid."""
    pass


class RootNotDirectoryError(ManifestError, NotADirectoryError):
    """Scan root does not exist or is not a directory."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"Provided path is not a directory: {self.path}")


# Per-entry errors (recoverable)
class FileReadError(ManifestError):
    """A single file could not be read while hashing."""

    def __init__(self, relative_path: str, cause: BaseException):
        self.relative_path = relative_path
        self.cause = cause
        reason = getattr(cause, "strerror", None) or str(cause) or type(cause).__name__
        super().__init__(f"Error hashing {relative_path}: {reason}")


class SkippedEntryError(ManifestError):
    """An entry was skipped during enumeration (symlink, special file, unreadable directory)."""

    def __init__(self, relative_path: str, reason: str):
        self.relative_path = relative_path
        self.reason = reason
        super().__init__(f"Skipped {relative_path}: {reason}")


# Output errors
class WriteError(ManifestError):
    """Final manifest could not be written."""

    def __init__(self, path: Union[str, Path], cause: BaseException):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Failed to write manifest to {self.path}: {cause}")
