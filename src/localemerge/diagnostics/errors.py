"""localemerge exception hierarchy with structured diagnostics.

All exceptions store Diagnostic objects for rich error information.
Every error is fatal to the build pass that raised it.

Hierarchy:
    LocaleMergeError (base)
    ├─ FallbackChainError
    │   ├─ BrokenFallbackChainError (missing fallback entry)
    │   └─ CyclicFallbackChainError (chain never reaches master)
    └─ LocaleFileError (missing, unreadable or malformed source file)

Python 3.13+. Zero external dependencies.
"""

from pathlib import Path

from .codes import Diagnostic

__all__ = [
    "BrokenFallbackChainError",
    "CyclicFallbackChainError",
    "FallbackChainError",
    "LocaleFileError",
    "LocaleMergeError",
]


class LocaleMergeError(Exception):
    """Base exception for all localemerge errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LocaleMergeError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class FallbackChainError(LocaleMergeError):
    """A locale's fallback chain cannot be resolved to the master.

    Attributes:
        locale: Locale at which resolution stopped
        requested_locale: Locale whose chain was being resolved
        chain: Locales walked before the failure
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        locale: str,
        requested_locale: str,
        chain: tuple[str, ...] = (),
    ) -> None:
        super().__init__(message)
        self.locale = locale
        self.requested_locale = requested_locale
        self.chain = chain


class BrokenFallbackChainError(FallbackChainError):
    """Parent lookup found no fallback entry before reaching the master.

    Example:
        fallbacks = {"fr-CA": None}, master = "fr"  ← fr-CA leads nowhere

    ``locale`` names the locale whose fallback entry is missing.
    """


class CyclicFallbackChainError(FallbackChainError):
    """Fallback walk did not terminate within the hop limit.

    Example:
        fallbacks = {"a": "b", "b": "a"}, master = "en"  ← a -> b -> a -> ...

    ``locale`` is the requested locale; ``chain`` shows the walked cycle.
    """


class LocaleFileError(LocaleMergeError):
    """Source translation file is missing, unreadable, or not a JSON object.

    The underlying exception is available as ``cause`` and is also chained
    as ``__cause__``.

    Attributes:
        locale: Locale whose file failed
        path: Path of the failed file
        cause: Original exception (None when the file parsed but had the
            wrong top-level type)
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        locale: str,
        path: Path,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.locale = locale
        self.path = path
        self.cause = cause
