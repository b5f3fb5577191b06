"""Fallback chain resolution.

A locale's fallback chain is the path of parent links from the locale to
the master locale, inclusive at both ends:

    fallbacks = {"en-AU": "en-GB", "en-GB": "en"}, master = "en"
    chain_for("en-AU") == ("en-AU", "en-GB", "en")

The walk is bounded. A missing parent raises BrokenFallbackChainError; a
revisited locale or a walk longer than the hop limit raises
CyclicFallbackChainError.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from localemerge.diagnostics import (
    BrokenFallbackChainError,
    CyclicFallbackChainError,
    ErrorTemplate,
)
from localemerge.localization.types import FallbackChain, FallbackMap, LocaleCode

__all__ = ["FallbackResolver"]

logger = logging.getLogger(__name__)


class FallbackResolver:
    """Resolve locale fallback chains ending at the master locale.

    Pure: chain_for() depends only on (locale, fallbacks, master).

    Example:
        >>> resolver = FallbackResolver("en", {"en-GB": "en", "en-AU": "en-GB"})
        >>> resolver.chain_for("en-AU")
        ('en-AU', 'en-GB', 'en')
        >>> resolver.chain_for("en")
        ('en',)

    Attributes:
        master: Root of every fallback chain
        fallbacks: Read-only locale -> parent mapping
        max_hops: Longest parent walk accepted before the chain is cyclic
    """

    __slots__ = ("_fallbacks", "_master", "_max_hops")

    def __init__(
        self,
        master: LocaleCode,
        fallbacks: FallbackMap | None = None,
        *,
        max_hops: int | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            master: Master locale code
            fallbacks: Locale -> parent locale. The master's entry, if any,
                is never consulted.
            max_hops: Hop limit (default: one more than the number of
                fallback entries, which bounds every acyclic chain)

        Raises:
            ValueError: If master is empty or max_hops is not positive
        """
        if not master:
            msg = "master locale is required"
            raise ValueError(msg)
        self._master = master
        self._fallbacks: Mapping[LocaleCode, LocaleCode] = MappingProxyType(dict(fallbacks or {}))
        if max_hops is None:
            max_hops = len(self._fallbacks) + 1
        if max_hops <= 0:
            msg = "max_hops must be positive"
            raise ValueError(msg)
        self._max_hops = max_hops

    @property
    def master(self) -> LocaleCode:
        """Master locale code."""
        return self._master

    @property
    def fallbacks(self) -> Mapping[LocaleCode, LocaleCode]:
        """Read-only fallback mapping."""
        return self._fallbacks

    @property
    def max_hops(self) -> int:
        """Hop limit for a single walk."""
        return self._max_hops

    def chain_for(self, locale: LocaleCode) -> FallbackChain:
        """Compute the fallback chain for a locale.

        Args:
            locale: Supported locale (or the master)

        Returns:
            Tuple starting at ``locale`` and ending at the master

        Raises:
            BrokenFallbackChainError: A locale on the path has no parent
            CyclicFallbackChainError: The path never reaches the master
        """
        if locale == self._master:
            return (locale,)

        chain: list[LocaleCode] = [locale]
        seen: set[LocaleCode] = {locale}
        current = locale
        while current != self._master:
            parent = self._fallbacks.get(current)
            if not parent:
                walked = tuple(chain)
                raise BrokenFallbackChainError(
                    ErrorTemplate.broken_fallback_chain(current, locale, self._master, walked),
                    locale=current,
                    requested_locale=locale,
                    chain=walked,
                )
            chain.append(parent)
            if parent in seen or len(chain) - 1 > self._max_hops:
                walked = tuple(chain)
                raise CyclicFallbackChainError(
                    ErrorTemplate.cyclic_fallback_chain(locale, self._master, walked),
                    locale=locale,
                    requested_locale=locale,
                    chain=walked,
                )
            seen.add(parent)
            current = parent

        logger.debug("Locale fallbacks for %s -> %s", locale, chain)
        return tuple(chain)

    def chains_for(self, locales: Iterable[LocaleCode]) -> dict[LocaleCode, FallbackChain]:
        """Resolve several chains, keyed by locale in input order.

        Raises:
            FallbackChainError: On the first locale whose chain fails
        """
        return {locale: self.chain_for(locale) for locale in locales}

    def __repr__(self) -> str:
        return f"FallbackResolver(master={self._master!r}, fallbacks={dict(self._fallbacks)!r})"
