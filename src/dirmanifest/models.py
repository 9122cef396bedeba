"""Core data models for dir-manifest.

Lifecycle:
----------
FileEntry values are produced once by discovery and never change. Each
HashResult is created by exactly one worker and stored in the slot matching
its discovery index. The Manifest is assembled once, after the pool drains,
so its ordering is discovery order rather than completion order.
"""

import json
from pathlib import Path
from typing import List

from pydantic import BaseModel, Field


# ============= Discovery =============

class FileEntry(BaseModel):
    """A regular file found beneath the scan root."""

    model_config = {"frozen": True}

    absolute_path: Path
    relative_path: str  # POSIX separators, relative to the scan root


# ============= Hashing =============

class HashResult(BaseModel):
    """Checksum of one successfully hashed file."""

    model_config = {"frozen": True}

    path: str  # same as FileEntry.relative_path
    md5: str   # 32 lowercase hex chars


# ============= Output =============

class Manifest(BaseModel):
    """Ordered list of file checksums for a scanned directory."""

    files: List[HashResult] = Field(default_factory=list)

    def to_json(self, indent: int = 2) -> str:
        """Serialize as ``{"files": [{"path", "md5"}, ...]}``.

        Key order inside each entry is fixed (path, then md5) and list order
        is discovery order, so repeated runs diff cleanly.
        """
        return json.dumps(self.model_dump(mode="json"), indent=indent) + "\n"


class GenerateResult(BaseModel):
    """Result of a full manifest run."""

    manifest: Manifest
    output_path: Path
    total: int
    failed: List[str] = Field(default_factory=list)

    @property
    def hashed(self) -> int:
        return len(self.manifest.files)
