"""Per-locale merge of fallback chains.

LocaleMerger turns each supported locale's fallback chain into one merged
TranslationDocument: master first, target locale last, more specific keys
winning at every key path.

Key architectural decisions:
- Fail-fast: any chain or file error aborts build_all() and nothing is
  returned. Merged state from the previous successful pass stays intact.
- All chains are resolved before any file is read, so configuration errors
  surface without touching the disk.
- Cache short-circuit: with a FileCache, a locale whose chain members are all
  fresh AND unchanged since its last merge reuses the previous document.
- Optional thread pool. Locales are independent once chains are known; all
  tasks are awaited and the first failure (in supported-locale order) wins.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from os import PathLike
from types import MappingProxyType
from typing import TYPE_CHECKING, TypeAlias

from localemerge.core.merge import copy_document, merge_chain
from localemerge.enums import MergeStatus
from localemerge.localization.loading import JsonFileLoader

if TYPE_CHECKING:
    from collections.abc import Mapping

    from localemerge.localization.fallback import FallbackResolver
    from localemerge.localization.types import (
        FallbackChain,
        JSONValue,
        LocaleCode,
        MergedOutput,
        TranslationDocument,
    )
    from localemerge.runtime.cache import FileCache

__all__ = ["LocaleMerger"]

logger = logging.getLogger(__name__)

# (locale, recorded mtime) for every chain member, master last
_ChainSignature: TypeAlias = "tuple[tuple[LocaleCode, int | None], ...]"


@dataclass(frozen=True, slots=True)
class _MergedEntry:
    signature: _ChainSignature
    document: dict[str, JSONValue]


class LocaleMerger:
    """Merge every supported locale with its fallback chain.

    Example:
        >>> resolver = FallbackResolver("en", {"en-GB": "en", "en-AU": "en-GB"})
        >>> merger = LocaleMerger(resolver, "src/locales", cache=FileCache("src/locales"))
        >>> output = merger.build_all(["en", "en-GB", "en-AU"])
        >>> output["en-AU"]
        {'a': '1', 'b': '3', 'c': '4'}

    Attributes:
        resolver: Fallback chain resolver
        cache: Optional file cache (None reads files directly on every pass)
    """

    __slots__ = ("_cache", "_last_statuses", "_loader", "_max_workers", "_merged", "_resolver")

    def __init__(
        self,
        resolver: FallbackResolver,
        source_path: str | PathLike[str],
        *,
        cache: FileCache | None = None,
        max_workers: int | None = None,
    ) -> None:
        """Initialize merger.

        Args:
            resolver: Fallback chain resolver
            source_path: Directory containing ``<locale>.json`` files. Used for
                direct reads when no cache is given.
            cache: Optional FileCache enabling read and merge reuse
            max_workers: Thread pool size; None or 1 merges sequentially

        Raises:
            ValueError: If max_workers is not positive
        """
        if max_workers is not None and max_workers <= 0:
            msg = "max_workers must be positive"
            raise ValueError(msg)
        self._resolver = resolver
        self._loader = JsonFileLoader(source_path)
        self._cache = cache
        self._max_workers = max_workers
        self._merged: dict[LocaleCode, _MergedEntry] = {}
        self._last_statuses: dict[LocaleCode, MergeStatus] = {}

    @property
    def resolver(self) -> FallbackResolver:
        """Fallback chain resolver."""
        return self._resolver

    @property
    def cache(self) -> FileCache | None:
        """File cache, if enabled."""
        return self._cache

    @property
    def last_statuses(self) -> Mapping[LocaleCode, MergeStatus]:
        """How each locale was produced in the last successful build_all()."""
        return MappingProxyType(self._last_statuses)

    def merge_locale(self, locale: LocaleCode) -> dict[str, JSONValue]:
        """Merge one locale's fallback chain without touching merge state.

        Raises:
            FallbackChainError: If the chain cannot be resolved
            LocaleFileError: If a chain member's file fails to load
        """
        chain = self._resolver.chain_for(locale)
        return merge_chain(self._fetch(member) for member in reversed(chain))

    def build_all(self, supported_locales: Iterable[LocaleCode]) -> MergedOutput:
        """Produce one merged document per supported locale.

        Args:
            supported_locales: Locales to produce output for

        Returns:
            Locale -> merged document, in supported-locale order. Callers get
            their own copies; mutating them does not affect later builds.

        Raises:
            FallbackChainError: If any chain cannot be resolved
            LocaleFileError: If any chain member's file fails to load
            DepthLimitExceededError: If documents nest too deeply
        """
        locales = tuple(dict.fromkeys(supported_locales))
        chains = self._resolver.chains_for(locales)

        if self._max_workers is not None and self._max_workers > 1 and len(locales) > 1:
            entries = self._build_parallel(chains)
        else:
            entries = {locale: self._build_one(locale, chain) for locale, chain in chains.items()}

        # Commit only once every locale succeeded
        self._merged.update({locale: entry for locale, (entry, _) in entries.items()})
        self._last_statuses = {locale: status for locale, (_, status) in entries.items()}
        return {locale: copy_document(entry.document) for locale, (entry, _) in entries.items()}

    def reset(self) -> None:
        """Forget previously merged documents (and clear the cache, if any)."""
        self._merged.clear()
        self._last_statuses = {}
        if self._cache is not None:
            self._cache.clear()

    def _build_parallel(
        self, chains: dict[LocaleCode, FallbackChain]
    ) -> dict[LocaleCode, tuple[_MergedEntry, MergeStatus]]:
        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            futures = {
                locale: executor.submit(self._build_one, locale, chain)
                for locale, chain in chains.items()
            }
        # Executor shutdown waits for every task; report the first failure
        # in supported-locale order and discard everything else.
        for future in futures.values():
            error = future.exception()
            if error is not None:
                raise error
        return {locale: future.result() for locale, future in futures.items()}

    def _build_one(
        self, locale: LocaleCode, chain: FallbackChain
    ) -> tuple[_MergedEntry, MergeStatus]:
        cache = self._cache
        if cache is None:
            documents = [self._loader.load(member) for member in reversed(chain)]
            signature = tuple((member, None) for member in chain)
            return _MergedEntry(signature, merge_chain(documents)), MergeStatus.MERGED

        previous = self._merged.get(locale)
        if previous is not None and _is_unchanged(cache, chain, previous.signature):
            logger.info("Using cached version for %s", locale)
            return previous, MergeStatus.CACHED

        # Reverse so the master is applied first and the target locale last
        entries = {member: cache.retrieve_entry(member) for member in reversed(chain)}
        merged = merge_chain(entry.document for entry in entries.values())
        signature = tuple((member, entries[member].mtime_ns) for member in chain)
        return _MergedEntry(signature, merged), MergeStatus.MERGED

    def _fetch(self, locale: LocaleCode) -> TranslationDocument:
        if self._cache is not None:
            return self._cache.retrieve(locale)
        return self._loader.load(locale)


def _is_unchanged(cache: FileCache, chain: FallbackChain, signature: _ChainSignature) -> bool:
    """Check that a previous merge used this chain and every member is still current."""
    if tuple(member for member, _ in signature) != chain:
        return False
    return all(
        cache.is_fresh(member) and cache.stamp(member) == mtime_ns
        for member, mtime_ns in signature
    )
