"""Shared constants for localemerge.

Centralized configuration constants used across the core, runtime and
localization packages. Placing constants here avoids circular imports and
provides a single source of truth.

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # File layout
    "SOURCE_SUFFIX",
    "OUTPUT_DIRNAME",
    "SOURCE_ENCODING",
    # Serialization
    "JSON_SEPARATORS",
    # Watch mode
    "DEFAULT_WATCH_INTERVAL",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum nesting depth of translation documents during deep merge.
# Real translation files rarely nest deeper than 5 levels; 100 levels is
# malformed input and would otherwise end in RecursionError.
MAX_DEPTH: int = 100

# ============================================================================
# FILE LAYOUT
# ============================================================================

# Source files are named <locale>.json inside the configured source directory.
SOURCE_SUFFIX: str = ".json"

# Emitted assets live under <output_base_path>translations/<locale>.json
OUTPUT_DIRNAME: str = "translations"

SOURCE_ENCODING: str = "utf-8"

# ============================================================================
# SERIALIZATION
# ============================================================================

# Compact output: no whitespace between tokens.
JSON_SEPARATORS: tuple[str, str] = (",", ":")

# ============================================================================
# WATCH MODE
# ============================================================================

# Seconds between dependency polls in `localemerge build --watch`.
DEFAULT_WATCH_INTERVAL: float = 1.0
