"""Memoizing, request-coalescing cache for catalog records.

Each :class:`ResourceRef` maps to one ``Future``. The future is stored before
the fetch starts, so every caller asking for the same ref (concurrently or
later) waits on the same outcome and the catalog sees at most one request per
ref while its entry lives. "Not found" (``None``) is memoized like any other
result.

Entries expire only when a ``ttl`` is given. Pending entries never expire.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from dexline.datasources.pokeapi.models import CatalogRecord, ResourceRef

logger = structlog.get_logger()

Fetcher = Callable[["ResourceRef"], "CatalogRecord | None"]

DEFAULT_MAX_WORKERS = 8


@dataclass
class _Entry:
    future: Future[CatalogRecord | None]
    stored_at: float


class ResourceCache:
    """Owns the ref -> record mapping and the worker pool that fills it."""

    def __init__(
        self,
        fetcher: Fetcher,
        *,
        ttl: float | None = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Args:
            fetcher: Called with a ref, returns the record or None. Runs on
                the cache's worker threads.
            ttl: Seconds a completed entry stays valid. None keeps it forever.
            max_workers: Size of the fetch thread pool.
            clock: Monotonic time source (injectable for tests).
        """
        if ttl is not None and ttl <= 0:
            msg = f"ttl must be positive, got {ttl}"
            raise ValueError(msg)
        self._fetch = fetcher
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[ResourceRef, _Entry] = {}
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="dexline-fetch"
        )
        self.fetch_count = 0
        self.hits = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, ref: object) -> bool:
        with self._lock:
            return ref in self._entries

    def submit(self, ref: ResourceRef) -> Future[CatalogRecord | None]:
        """Start (or join) the fetch for ``ref`` without blocking."""
        with self._lock:
            entry = self._entries.get(ref)
            if entry is not None and not self._expired(entry):
                self.hits += 1
                return entry.future

            future: Future[CatalogRecord | None] = Future()
            self._entries[ref] = _Entry(future=future, stored_at=self._clock())
            self.fetch_count += 1

        try:
            self._executor.submit(self._fill, ref, future)
        except RuntimeError as exc:
            # Pool is shut down: release anyone already waiting on this entry.
            self._forget(ref, future)
            future.set_exception(exc)
            raise
        return future

    def resolve(self, ref: ResourceRef) -> CatalogRecord | None:
        """Return the record for ``ref``, or None if the catalog lacks it."""
        return self.submit(ref).result()

    def resolve_all(self, refs: Iterable[ResourceRef]) -> list[CatalogRecord | None]:
        """Resolve refs concurrently; results follow the input order."""
        futures = [self.submit(ref) for ref in refs]
        return [f.result() for f in futures]

    def evict(self, ref: ResourceRef) -> bool:
        """Drop a completed entry. Returns False if absent or still pending."""
        with self._lock:
            entry = self._entries.get(ref)
            if entry is None or not entry.future.done():
                return False
            del self._entries[ref]
            return True

    def clear(self) -> None:
        """Drop every completed entry."""
        with self._lock:
            self._entries = {
                ref: entry for ref, entry in self._entries.items() if not entry.future.done()
            }

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self) -> ResourceCache:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _expired(self, entry: _Entry) -> bool:
        if self.ttl is None or not entry.future.done():
            return False
        return self._clock() - entry.stored_at >= self.ttl

    def _fill(self, ref: ResourceRef, future: Future[CatalogRecord | None]) -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            record = self._fetch(ref)
        except Exception as exc:
            logger.exception("catalog_fetch_crashed", ref=str(ref))
            # Crashes are not "not found": forget the entry so a later call refetches.
            self._forget(ref, future)
            future.set_exception(exc)
            return
        if record is None:
            logger.debug("catalog_miss_memoized", ref=str(ref))
        # TTL runs from completion, not submission.
        with self._lock:
            entry = self._entries.get(ref)
            if entry is not None and entry.future is future:
                entry.stored_at = self._clock()
        future.set_result(record)

    def _forget(self, ref: ResourceRef, future: Future[CatalogRecord | None]) -> None:
        with self._lock:
            entry = self._entries.get(ref)
            if entry is not None and entry.future is future:
                del self._entries[ref]
