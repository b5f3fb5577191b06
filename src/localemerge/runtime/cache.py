"""Thread-safe read-through cache for translation files.

Keeps each locale's parsed document together with the modification time
observed when it was read. A cached document is served while the file's
current mtime still matches; otherwise the file is re-read.

Architecture:
    - One entry per locale, never shared across locales
    - Freshness via os.stat() st_mtime_ns (no content read)
    - Global lock guards the entry table; a per-locale lock serializes
      concurrent retrievals of the same file
    - Documents handed out as deeply read-only views (MappingProxyType
      at every level, arrays as tuples)

Lifecycle:
    The cache is an explicit object. Hosts running independent build
    sessions in one process call clear() between them.

Python 3.13+.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from threading import Lock
from typing import TYPE_CHECKING

from localemerge.core.merge import freeze_document
from localemerge.localization.loading import JsonFileLoader, parse_document

if TYPE_CHECKING:
    from pathlib import Path

    from localemerge.localization.types import JSONValue, LocaleCode, TranslationDocument

__all__ = ["CacheEntry", "CacheStats", "FileCache"]

logger = logging.getLogger(__name__)

_UNKNOWN_MTIME = -1


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """Cached document plus the mtime recorded when it was read.

    Attributes:
        document: Parsed translation document (read-only view)
        mtime_ns: File modification time in nanoseconds at read time
    """

    document: TranslationDocument
    mtime_ns: int


@dataclass(frozen=True, slots=True)
class CacheStats:
    """Snapshot of cache counters.

    Attributes:
        hits: retrieve() calls served from the cache
        misses: retrieve() calls that read the file
        reads: File content reads (successful or not)
        stat_calls: Metadata-only freshness checks
        size: Number of cached locales
    """

    hits: int
    misses: int
    reads: int
    stat_calls: int
    size: int


class FileCache:
    """Read-through cache of ``<source_path>/<locale>.json`` documents.

    Example:
        >>> cache = FileCache("src/locales")
        >>> doc = cache.retrieve("en")       # reads the file
        >>> doc is cache.retrieve("en")      # stat only, same view
        True
        >>> cache.is_fresh("en")
        True
    """

    __slots__ = (
        "_entries",
        "_hits",
        "_key_locks",
        "_loader",
        "_lock",
        "_misses",
        "_reads",
        "_stat_calls",
    )

    def __init__(self, source_path: str | os.PathLike[str]) -> None:
        """Initialize file cache.

        Args:
            source_path: Directory containing the per-locale JSON files
        """
        self._loader = JsonFileLoader(source_path)
        self._entries: dict[LocaleCode, CacheEntry] = {}
        self._key_locks: dict[LocaleCode, Lock] = {}
        self._lock = Lock()
        self._hits = 0
        self._misses = 0
        self._reads = 0
        self._stat_calls = 0

    @property
    def source_path(self) -> Path:
        """Directory the cache reads from."""
        return self._loader.source_path

    def path_for(self, locale: LocaleCode) -> Path:
        """Return the source file path for a locale."""
        return self._loader.path_for(locale)

    def is_fresh(self, locale: LocaleCode) -> bool:
        """Check whether the cached entry still matches the file on disk.

        Returns:
            False if the locale was never retrieved, if the file changed since,
            or if the file can no longer be stat'ed
        """
        with self._lock:
            entry = self._entries.get(locale)
        if entry is None:
            return False
        return self._current_mtime(locale) == entry.mtime_ns

    def stamp(self, locale: LocaleCode) -> int | None:
        """Return the mtime recorded at the last successful retrieve(), if any."""
        with self._lock:
            entry = self._entries.get(locale)
        return None if entry is None else entry.mtime_ns

    def retrieve(self, locale: LocaleCode) -> TranslationDocument:
        """Return the locale's document, reading the file only when stale.

        Args:
            locale: Locale to retrieve

        Returns:
            Read-only view of the parsed document

        Raises:
            LocaleFileError: If the file is missing, unreadable or malformed.
                The existing entry (if any) is left untouched.
        """
        return self.retrieve_entry(locale).document

    def retrieve_entry(self, locale: LocaleCode) -> CacheEntry:
        """Like retrieve(), but also return the mtime the document was read at.

        Raises:
            LocaleFileError: If the file is missing, unreadable or malformed
        """
        with self._key_lock(locale):
            with self._lock:
                entry = self._entries.get(locale)
            if entry is not None and self._current_mtime(locale) == entry.mtime_ns:
                with self._lock:
                    self._hits += 1
                logger.debug("Cache hit for %s", locale)
                return entry

            entry = self._read(locale)
            with self._lock:
                self._entries[locale] = entry
                self._misses += 1
            return entry

    def invalidate(self, locale: LocaleCode) -> None:
        """Drop a single locale's entry."""
        with self._lock:
            self._entries.pop(locale, None)

    def clear(self) -> None:
        """Drop all entries and reset counters.

        Entry point for hosts that start an independent build session.
        """
        with self._lock:
            self._entries.clear()
            self._key_locks.clear()
            self._hits = 0
            self._misses = 0
            self._reads = 0
            self._stat_calls = 0
        logger.debug("File cache cleared")

    @property
    def stats(self) -> CacheStats:
        """Current counters."""
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                reads=self._reads,
                stat_calls=self._stat_calls,
                size=len(self._entries),
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, locale: object) -> bool:
        with self._lock:
            return locale in self._entries

    def _key_lock(self, locale: LocaleCode) -> Lock:
        with self._lock:
            lock = self._key_locks.get(locale)
            if lock is None:
                lock = self._key_locks[locale] = Lock()
            return lock

    def _current_mtime(self, locale: LocaleCode) -> int | None:
        with self._lock:
            self._stat_calls += 1
        try:
            return os.stat(self._loader.path_for(locale)).st_mtime_ns
        except OSError:
            return None

    def _read(self, locale: LocaleCode) -> CacheEntry:
        """Read, parse and stamp a file. Raises before any state changes."""
        path = self._loader.path_for(locale)
        with self._lock:
            self._reads += 1
        # stat before reading: a write landing between the two is picked up
        # as stale on the next freshness check instead of being masked
        try:
            mtime_ns = os.stat(path).st_mtime_ns
        except OSError:
            # never matches a real mtime, so the entry is re-read next time
            mtime_ns = _UNKNOWN_MTIME
        raw = self._loader.read_bytes(locale, path)
        document: dict[str, JSONValue] = parse_document(locale, path, raw)
        logger.debug("Cached translations for %s (mtime_ns=%d)", locale, mtime_ns)
        return CacheEntry(document=freeze_document(document), mtime_ns=mtime_ns)
