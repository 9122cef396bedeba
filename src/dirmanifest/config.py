"""Run configuration helpers."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml

from .constants import DEFAULT_CHUNK_SIZE
from .errors import ConfigError


@dataclass
class ManifestConfig:
    """Settings controlling a manifest run."""

    workers: Optional[int] = None  # None = derive from CPU count
    chunk_size: int = DEFAULT_CHUNK_SIZE
    exclude: List[str] = field(default_factory=list)

    def merged(
        self,
        workers: Optional[int] = None,
        chunk_size: Optional[int] = None,
        exclude: Optional[List[str]] = None,
    ) -> "ManifestConfig":
        """Return a copy with explicit overrides applied (CLI wins over file)."""
        return ManifestConfig(
            workers=workers if workers is not None else self.workers,
            chunk_size=chunk_size if chunk_size is not None else self.chunk_size,
            exclude=self.exclude + list(exclude or []),
        )


def _positive_int(data: dict, key: str, default: Optional[int]) -> Optional[int]:
    value = data.get(key, default)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"'{key}' must be a positive integer, got {value!r}")
    return value


def load_config(path: Optional[Path] = None) -> ManifestConfig:
    """Load configuration from a YAML file.

    Keys may sit at the top level or under a ``manifest:`` section::

        manifest:
          workers: 8
          chunk_size: 1048576
          exclude:
            - "*.tmp"

    Args:
        path: YAML file, or None for defaults

    Raises:
        ConfigError: If the file is unreadable or contains invalid values
    """
    if path is None:
        return ManifestConfig()

    try:
        data = yaml.safe_load(Path(path).read_text()) or {}
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    section = data.get("manifest", data)
    if not isinstance(section, dict):
        raise ConfigError(f"'manifest' section in {path} must be a mapping")

    exclude = section.get("exclude", [])
    if isinstance(exclude, str):
        exclude = [exclude]
    if not isinstance(exclude, list) or not all(isinstance(p, str) for p in exclude):
        raise ConfigError("'exclude' must be a list of patterns")

    return ManifestConfig(
        workers=_positive_int(section, "workers", None),
        chunk_size=_positive_int(section, "chunk_size", DEFAULT_CHUNK_SIZE),
        exclude=exclude,
    )
