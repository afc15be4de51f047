"""In-process serialisation of operations that touch the same jobs."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class JobLockRegistry:
    """Hand out one exclusive lock per job id.

    Locks for several ids are always taken in ascending id order, so two callers
    holding overlapping id sets cannot deadlock each other.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[int, threading.Lock] = {}

    def _lock_for(self, job_id: int) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(job_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[job_id] = lock
            return lock

    @contextmanager
    def hold(self, *job_ids: int) -> Iterator[None]:
        locks = [self._lock_for(job_id) for job_id in sorted(set(job_ids))]
        acquired: list[threading.Lock] = []
        try:
            for lock in locks:
                lock.acquire()
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()


MERGE_LOCKS = JobLockRegistry()
