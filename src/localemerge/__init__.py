"""localemerge - build-time locale fallback merging for JSON translations.

Given a master locale's translation file and a set of supported locales,
each with a declared fallback parent, produces one merged JSON document per
supported locale that layers the locale's own strings over its fallback
chain up to the master.

Public API:
    TranslationBuild - One build pass per run(): merged output, assets, dependencies
    BuildConfig - Validated build configuration
    FallbackResolver - Fallback chain resolution
    LocaleMerger - Per-locale deep merge of fallback chains
    FileCache - mtime-keyed read-through cache of translation files
    deep_merge - Recursive document merge (more specific side wins)

Exceptions:
    LocaleMergeError - Base exception class
    BrokenFallbackChainError - Missing fallback entry
    CyclicFallbackChainError - Fallback chain never reaches the master
    LocaleFileError - Missing, unreadable or malformed translation file
"""

# Essential Public API - Minimal exports for clean namespace
from .config import BuildConfig
from .core import DepthLimitExceededError, deep_merge
from .diagnostics import (
    BrokenFallbackChainError,
    CyclicFallbackChainError,
    FallbackChainError,
    LocaleFileError,
    LocaleMergeError,
)
from .enums import MergeStatus
from .localization import (
    BuildResult,
    FallbackResolver,
    LocaleMerger,
    OutputAsset,
    TranslationBuild,
)
from .runtime import FileCache

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("localemerge")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "BrokenFallbackChainError",
    "BuildConfig",
    "BuildResult",
    "CyclicFallbackChainError",
    "DepthLimitExceededError",
    "FallbackChainError",
    "FallbackResolver",
    "FileCache",
    "LocaleFileError",
    "LocaleMergeError",
    "LocaleMerger",
    "MergeStatus",
    "OutputAsset",
    "TranslationBuild",
    "__version__",
    "deep_merge",
]
