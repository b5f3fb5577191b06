"""Host-facing translation build.

TranslationBuild runs one build pass per call: merge every supported locale,
wrap each merged document in a lazily serialized OutputAsset, and declare
the source files the outputs depend on so the host can trigger rebuilds.

Assets are named ``<output_base_path>translations/<locale>.json``. A failed
pass raises and returns nothing; hosts never see a partial asset set.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from localemerge.constants import JSON_SEPARATORS, OUTPUT_DIRNAME, SOURCE_ENCODING
from localemerge.localization.fallback import FallbackResolver
from localemerge.localization.merger import LocaleMerger
from localemerge.runtime.cache import FileCache

if TYPE_CHECKING:
    from collections.abc import Mapping
    from os import PathLike

    from localemerge.config import BuildConfig
    from localemerge.enums import MergeStatus
    from localemerge.localization.types import JSONValue, LocaleCode, MergedOutput

__all__ = ["BuildResult", "OutputAsset", "TranslationBuild", "asset_name", "serialize_document"]

logger = logging.getLogger(__name__)


def asset_name(locale: LocaleCode, output_base_path: str = "") -> str:
    """Name of the emitted asset for a locale.

    Example:
        >>> asset_name("en-GB", "static/")
        'static/translations/en-GB.json'
    """
    return f"{output_base_path}{OUTPUT_DIRNAME}/{locale}.json"


def serialize_document(document: Mapping[str, JSONValue]) -> bytes:
    """Serialize a merged document to compact UTF-8 JSON, key order preserved."""
    return json.dumps(document, ensure_ascii=False, separators=JSON_SEPARATORS).encode(
        SOURCE_ENCODING
    )


class OutputAsset:
    """Named build output whose bytes are produced on first use.

    The host reads ``size()`` and ``source()``; serialization happens once,
    the first time either is called.

    Attributes:
        name: Asset name relative to the host's output directory
        locale: Locale the asset was produced for
    """

    __slots__ = ("_document", "_lock", "_source", "locale", "name")

    def __init__(self, name: str, locale: LocaleCode, document: Mapping[str, JSONValue]) -> None:
        self.name = name
        self.locale = locale
        self._document = document
        self._source: bytes | None = None
        self._lock = threading.Lock()

    @property
    def document(self) -> Mapping[str, JSONValue]:
        """Merged document backing the asset."""
        return self._document

    @property
    def materialized(self) -> bool:
        """True once the bytes have been produced."""
        return self._source is not None

    def source(self) -> bytes:
        """UTF-8 JSON bytes of the merged document."""
        with self._lock:
            if self._source is None:
                self._source = serialize_document(self._document)
                logger.debug("Serialized %s (%d bytes)", self.name, len(self._source))
            return self._source

    def size(self) -> int:
        """Byte size of source()."""
        return len(self.source())

    def __repr__(self) -> str:
        return f"OutputAsset(name={self.name!r}, materialized={self.materialized})"


@dataclass(frozen=True, slots=True)
class BuildResult:
    """Immutable result of one successful build pass.

    Attributes:
        output: Locale -> merged document
        assets: Asset name -> OutputAsset, in supported-locale order
        file_dependencies: Every source file in every supported locale's chain
        statuses: Locale -> how the document was produced (merged or cached)
    """

    output: MergedOutput
    assets: Mapping[str, OutputAsset]
    file_dependencies: frozenset[Path]
    statuses: Mapping[LocaleCode, MergeStatus]

    def asset_for(self, locale: LocaleCode) -> OutputAsset:
        """Look up a locale's asset.

        Raises:
            KeyError: If the locale was not part of the build
        """
        for asset in self.assets.values():
            if asset.locale == locale:
                return asset
        raise KeyError(locale)


class TranslationBuild:
    """Run translation build passes for a configuration.

    The file cache lives as long as the TranslationBuild, so repeated run()
    calls (watch mode) only re-read and re-merge what changed. Call reset()
    between independent build sessions.

    Example:
        >>> build = TranslationBuild(BuildConfig.from_file("i18n.json"))
        >>> result = build.run()
        >>> sorted(result.assets)
        ['translations/en-AU.json', 'translations/en-GB.json', 'translations/en.json']
        >>> build.write(result, "dist")

    Attributes:
        config: Build configuration
    """

    __slots__ = ("_cache", "_config", "_initialized", "_merger", "_resolver")

    def __init__(
        self,
        config: BuildConfig,
        *,
        use_cache: bool = True,
        max_workers: int | None = None,
    ) -> None:
        """Initialize build.

        Args:
            config: Build configuration
            use_cache: Keep parsed files and merged documents between runs
            max_workers: Merge locales on a thread pool of this size
        """
        self._config = config
        self._resolver = FallbackResolver(config.master, config.fallbacks)
        self._cache = FileCache(config.source_path) if use_cache else None
        self._merger = LocaleMerger(
            self._resolver, config.source_path, cache=self._cache, max_workers=max_workers
        )
        self._initialized = False

    @property
    def config(self) -> BuildConfig:
        """Build configuration."""
        return self._config

    @property
    def cache(self) -> FileCache | None:
        """File cache, if enabled."""
        return self._cache

    @property
    def merger(self) -> LocaleMerger:
        """Underlying locale merger."""
        return self._merger

    def run(self) -> BuildResult:
        """Run one build pass.

        Returns:
            BuildResult with merged output, lazy assets and dependencies

        Raises:
            FallbackChainError: If any supported locale's chain is broken
            LocaleFileError: If any source file fails to load
            DepthLimitExceededError: If documents nest too deeply
        """
        config = self._config
        if not self._initialized:
            logger.info("Initializing translation build (master: '%s')", config.master)
            logger.info("Supported locales: %s", ", ".join(config.supported_locales))
            self._initialized = True

        logger.info("Merging locales with their fallbacks...")
        output = self._merger.build_all(config.supported_locales)

        assets: dict[str, OutputAsset] = {}
        dependencies: set[Path] = set()
        for locale, document in output.items():
            name = asset_name(locale, config.output_base_path)
            assets[name] = OutputAsset(name, locale, document)
            dependencies.update(
                config.source_file(member) for member in self._resolver.chain_for(locale)
            )

        return BuildResult(
            output=output,
            assets=MappingProxyType(assets),
            file_dependencies=frozenset(dependencies),
            statuses=self._merger.last_statuses,
        )

    def reset(self) -> None:
        """Drop cached files and merged documents."""
        self._merger.reset()
        logger.debug("Translation build state reset")

    def write(self, result: BuildResult, out_dir: str | PathLike[str]) -> list[Path]:
        """Materialize every asset under a directory.

        Returns:
            Written file paths, in asset order
        """
        root = Path(out_dir)
        written: list[Path] = []
        for name, asset in result.assets.items():
            target = root / name
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(asset.source())
            written.append(target)
        logger.info("Wrote %d translation assets to %s", len(written), root)
        return written
