"""Bounded worker pool for concurrent file hashing.

A fixed number of worker threads share three pieces of state:

- ``WorkQueue``: a cursor over the discovered entries. ``claim()`` is a
  lock-guarded fetch-and-increment, so every index is handed out once.
- the results list: pre-sized, one slot per entry. A worker only writes the
  slot of the index it claimed, so the list needs no lock.
- ``ProgressCounter``: completed-hash count, incremented under a lock.

A read failure on one file is reported and leaves its slot empty; it never
stops the pool or the other workers.
"""

import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence

from .constants import DEFAULT_CHUNK_SIZE, WORKERS_PER_CPU
from .errors import FileReadError
from .hashing import compute_file_digest
from .models import FileEntry, HashResult

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]
ErrorCallback = Callable[[FileEntry, FileReadError], None]


def default_worker_count() -> int:
    """Default parallelism: available CPUs times WORKERS_PER_CPU."""
    return (os.cpu_count() or 1) * WORKERS_PER_CPU


class WorkQueue:
    """Shared index cursor over a fixed-length sequence."""

    def __init__(self, length: int):
        self.length = length
        self._next = 0
        self._lock = threading.Lock()

    def claim(self) -> Optional[int]:
        """Claim the next unprocessed index, or None when exhausted."""
        with self._lock:
            if self._next >= self.length:
                return None
            index = self._next
            self._next += 1
            return index


class ProgressCounter:
    """Thread-safe completion counter.

    The callback runs while the lock is held, so reported counts are
    strictly increasing even when workers finish simultaneously.
    """

    def __init__(self, total: int, callback: Optional[ProgressCallback] = None):
        self.total = total
        self._completed = 0
        self._callback = callback
        self._lock = threading.Lock()

    @property
    def completed(self) -> int:
        with self._lock:
            return self._completed

    def increment(self) -> int:
        with self._lock:
            self._completed += 1
            if self._callback:
                self._callback(self._completed, self.total)
            return self._completed


def _log_failure(entry: FileEntry, error: FileReadError) -> None:
    logger.warning(str(error))


class HashWorkerPool:
    """Hash a sequence of files with a bounded number of threads."""

    def __init__(
        self,
        entries: Sequence[FileEntry],
        workers: Optional[int] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        on_progress: Optional[ProgressCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ):
        """Set up the pool.

        Args:
            entries: Files to hash, in discovery order
            workers: Parallelism degree (defaults to default_worker_count())
            chunk_size: Bytes read per chunk while hashing
            on_progress: Called with (completed, total) after each successful hash
            on_error: Called with (entry, error) for each file that could not be read

        Raises:
            ValueError: If workers or chunk_size is not positive
        """
        if workers is None:
            workers = default_worker_count()
        if workers < 1:
            raise ValueError(f"workers must be a positive integer, got {workers}")
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be a positive integer, got {chunk_size}")

        self.entries = list(entries)
        self.workers = min(workers, len(self.entries))
        self.chunk_size = chunk_size
        self.on_error = on_error or _log_failure
        self.queue = WorkQueue(len(self.entries))
        self.progress = ProgressCounter(len(self.entries), on_progress)
        self.results: List[Optional[HashResult]] = [None] * len(self.entries)

    def _hash_one(self, index: int) -> None:
        entry = self.entries[index]
        try:
            digest = compute_file_digest(entry.absolute_path, self.chunk_size)
        except OSError as e:
            self.on_error(entry, FileReadError(entry.relative_path, e))
            return
        self.results[index] = HashResult(path=entry.relative_path, md5=digest)
        self.progress.increment()

    def _worker(self) -> None:
        while True:
            index = self.queue.claim()
            if index is None:
                return
            self._hash_one(index)

    def run(self) -> List[Optional[HashResult]]:
        """Hash every entry and wait for all workers to finish.

        Returns:
            One slot per entry in discovery order; None where hashing failed
        """
        if not self.entries:
            return []

        logger.debug(f"Hashing {len(self.entries)} files with {self.workers} workers")
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = [executor.submit(self._worker) for _ in range(self.workers)]
        # Executor exit waits for all workers; surface unexpected errors afterwards
        for future in futures:
            future.result()
        return self.results


def hash_files(
    entries: Sequence[FileEntry],
    workers: Optional[int] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    on_progress: Optional[ProgressCallback] = None,
    on_error: Optional[ErrorCallback] = None,
) -> List[Optional[HashResult]]:
    """Hash entries concurrently. See HashWorkerPool."""
    pool = HashWorkerPool(
        entries,
        workers=workers,
        chunk_size=chunk_size,
        on_progress=on_progress,
        on_error=on_error,
    )
    return pool.run()
