"""Localization package: fallback chains, file loading, merging and builds.

Submodules:
    types    - PEP 695 type aliases (LocaleCode, TranslationDocument, ...)
    loading  - JsonFileLoader and document parsing
    fallback - FallbackResolver
    merger   - LocaleMerger (per-locale fallback merge)
    build    - TranslationBuild, OutputAsset, BuildResult

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
# Import order matters: runtime.cache depends on loading being initialized.
from localemerge.localization.loading import JsonFileLoader, parse_document
from localemerge.localization.fallback import FallbackResolver
from localemerge.localization.merger import LocaleMerger
from localemerge.localization.build import (
    BuildResult,
    OutputAsset,
    TranslationBuild,
    asset_name,
    serialize_document,
)
from localemerge.localization.types import (
    FallbackChain,
    FallbackMap,
    JSONValue,
    LocaleCode,
    MergedOutput,
    TranslationDocument,
)

__all__ = [
    # Orchestration
    "TranslationBuild",
    "BuildResult",
    "OutputAsset",
    "asset_name",
    "serialize_document",
    # Merge pipeline
    "FallbackResolver",
    "LocaleMerger",
    # Loading
    "JsonFileLoader",
    "parse_document",
    # Type aliases for user code type annotations
    "FallbackChain",
    "FallbackMap",
    "JSONValue",
    "LocaleCode",
    "MergedOutput",
    "TranslationDocument",
]
