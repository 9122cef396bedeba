"""Stable API for generating directory manifests.

The CLI is a thin layer over ``generate_manifest``; other tools can call it
directly and receive a ``GenerateResult`` instead of parsing console output.
"""

import logging
from pathlib import Path
from typing import Callable, Optional

from .config import ManifestConfig
from .discovery import SkipCallback, discover_files, validate_root
from .ignore import IgnoreSpec
from .manifest import assemble_manifest, failed_paths, manifest_path_for, write_manifest
from .models import GenerateResult
from .pool import ErrorCallback, ProgressCallback, hash_files

logger = logging.getLogger(__name__)


def generate_manifest(
    root: Path,
    workers: Optional[int] = None,
    config: Optional[ManifestConfig] = None,
    on_progress: Optional[ProgressCallback] = None,
    on_error: Optional[ErrorCallback] = None,
    on_skip: Optional[SkipCallback] = None,
    on_discovered: Optional[Callable[[int], None]] = None,
) -> GenerateResult:
    """Scan a directory, hash its files and write ``<root>_manifest.json`` beside it.

    Args:
        root: Directory to scan
        workers: Parallelism degree; overrides config.workers
        config: Run settings (defaults to ManifestConfig())
        on_progress: Called with (completed, total) after each successful hash
        on_error: Called with (entry, FileReadError) for each unreadable file
        on_skip: Called with (relative_path, SkippedEntryError) during discovery
        on_discovered: Called once with the number of files found

    Returns:
        GenerateResult with the manifest, output path and failed paths

    Raises:
        RootNotDirectoryError: If root is missing or not a directory
        WriteError: If the manifest cannot be written

    Example:
        >>> from dirmanifest import generate_manifest
        >>> result = generate_manifest("game_folder", workers=4)
        >>> print(result.output_path)
        /path/to/game_folder_manifest.json
    """
    config = (config or ManifestConfig()).merged(workers=workers)
    root_path = validate_root(Path(root))

    ignore = IgnoreSpec(config.exclude)
    entries = discover_files(root_path, ignore=ignore, on_error=on_skip)
    if on_discovered:
        on_discovered(len(entries))

    results = hash_files(
        entries,
        workers=config.workers,
        chunk_size=config.chunk_size,
        on_progress=on_progress,
        on_error=on_error,
    )

    manifest = assemble_manifest(entries, results)
    failed = failed_paths(entries, results)
    if failed:
        logger.info(f"{len(failed)} of {len(entries)} files could not be hashed")

    output_path = write_manifest(manifest, manifest_path_for(root_path))
    return GenerateResult(
        manifest=manifest,
        output_path=output_path,
        total=len(entries),
        failed=failed,
    )
