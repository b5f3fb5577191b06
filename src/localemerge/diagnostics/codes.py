"""Diagnostic codes and data structures.

Defines error codes and the structured diagnostic carried by every
localemerge exception.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Fallback chain errors (configuration graph problems)
        2000-2999: Locale file errors (missing, unreadable, malformed JSON)
        3000-3999: Merge errors (document structure limits)
    """

    # Fallback chain errors (1000-1999)
    BROKEN_FALLBACK_CHAIN = 1001
    CYCLIC_FALLBACK_CHAIN = 1002

    # Locale file errors (2000-2999)
    LOCALE_FILE_NOT_FOUND = 2001
    LOCALE_FILE_UNREADABLE = 2002
    LOCALE_FILE_INVALID_JSON = 2003
    LOCALE_FILE_NOT_OBJECT = 2004
    LOCALE_FILE_UNSAFE_PATH = 2005

    # Merge errors (3000-3999)
    MAX_DEPTH_EXCEEDED = 3001


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Carries enough context to make a
    broken translation set diagnosable from the error alone.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        locale: Offending locale (None when not locale-specific)
        path: Source file involved (None for configuration errors)
        chain: Fallback chain walked before the error (None if not applicable)
        hint: Suggestion for fixing the error
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    locale: str | None = None
    path: str | None = None
    chain: tuple[str, ...] | None = None
    hint: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[BROKEN_FALLBACK_CHAIN]: No fallback configured for locale 'fr-CA'
              --> locale: fr-CA
              = chain: fr-CA
              = help: Add a 'fr-CA' entry to fallbacks that leads to 'fr'

        Returns:
            Formatted error message
        """
        lines = [f"{self.severity}[{self.code.name}]: {self.message}"]
        if self.locale is not None:
            lines.append(f"  --> locale: {self.locale}")
        if self.path is not None:
            lines.append(f"  --> file: {self.path}")
        if self.chain:
            lines.append(f"  = chain: {' -> '.join(self.chain)}")
        if self.hint:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)
