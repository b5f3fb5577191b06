"""Locale code utilities.

Locale codes double as file names (``<locale>.json``), so every code is
checked for path safety at the configuration boundary. Optional CLDR
validation goes through Babel.

Python 3.13+.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

from localemerge.core.babel_compat import get_locale_class, get_unknown_locale_error

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "is_known_locale",
    "normalize_locale",
    "validate_locale_code",
]


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-GB), while Babel/POSIX uses underscores (en_GB).
    Only used for Babel lookups; file names keep the configured spelling.

    Example:
        >>> normalize_locale("en-GB")
        'en_GB'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.replace("-", "_")


def validate_locale_code(locale_code: str) -> None:
    """Validate a locale code for use as a source file name.

    Args:
        locale_code: Locale code to validate

    Raises:
        ValueError: If the code is empty, has surrounding whitespace, or
            contains path separators or traversal sequences
    """
    if not isinstance(locale_code, str) or not locale_code:
        msg = f"Locale code must be a non-empty string, got: {locale_code!r}"
        raise ValueError(msg)
    if locale_code.strip() != locale_code:
        msg = f"Locale code contains leading/trailing whitespace: {locale_code!r}"
        raise ValueError(msg)
    if ".." in locale_code:
        msg = f"Path traversal sequences not allowed in locale: '{locale_code}'"
        raise ValueError(msg)
    if "/" in locale_code or "\\" in locale_code:
        msg = f"Path separators not allowed in locale: '{locale_code}'"
        raise ValueError(msg)


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        BabelImportError: If Babel is not installed
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    return get_locale_class().parse(normalize_locale(locale_code))


def is_known_locale(locale_code: str) -> bool:
    """Check whether Babel's CLDR data knows the locale.

    Raises:
        BabelImportError: If Babel is not installed
    """
    unknown_locale_error = get_unknown_locale_error()
    try:
        get_babel_locale(locale_code)
    except (unknown_locale_error, ValueError):
        return False
    return True
