"""Type aliases for the localization domain.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping
from typing import TypeAlias

__all__ = [
    "FallbackChain",
    "FallbackMap",
    "JSONValue",
    "LocaleCode",
    "MergedOutput",
    "TranslationDocument",
]

LocaleCode: TypeAlias = str
"""Locale identifier as configured (e.g., 'en', 'en-GB'). Also the file stem."""

JSONValue: TypeAlias = (
    str | int | float | bool | None | list["JSONValue"] | Mapping[str, "JSONValue"]
)
"""Any value a translation file may hold."""

TranslationDocument: TypeAlias = Mapping[str, JSONValue]
"""Parsed translation file: nested mapping from string keys to JSON values."""

FallbackMap: TypeAlias = Mapping[LocaleCode, LocaleCode]
"""Locale -> single parent locale. The master has no entry."""

FallbackChain: TypeAlias = tuple[LocaleCode, ...]
"""Target locale first, master locale last."""

MergedOutput: TypeAlias = dict[LocaleCode, dict[str, JSONValue]]
"""One merged document per supported locale."""
