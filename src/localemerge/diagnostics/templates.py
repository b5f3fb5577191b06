"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    Keeps messages testable and documents every error case in one place.
    """

    @staticmethod
    def broken_fallback_chain(
        locale: str, requested: str, master: str, chain: tuple[str, ...]
    ) -> Diagnostic:
        """Parent lookup found no fallback before reaching the master.

        Args:
            locale: Locale whose fallback entry is missing
            requested: Locale whose chain was being resolved
            master: Master locale the chain should reach
            chain: Locales walked so far (starting at requested)

        Returns:
            Diagnostic for BROKEN_FALLBACK_CHAIN
        """
        msg = f"No fallback configured for locale '{locale}'"
        if locale != requested:
            msg += f" (while resolving '{requested}')"
        return Diagnostic(
            code=DiagnosticCode.BROKEN_FALLBACK_CHAIN,
            message=msg,
            locale=locale,
            chain=chain,
            hint=f"Add a '{locale}' entry to fallbacks that leads to '{master}'",
        )

    @staticmethod
    def cyclic_fallback_chain(requested: str, master: str, chain: tuple[str, ...]) -> Diagnostic:
        """Fallback walk revisited a locale or ran past the hop limit.

        Args:
            requested: Locale whose chain was being resolved
            master: Master locale the chain never reached
            chain: Locales walked before the walk was stopped

        Returns:
            Diagnostic for CYCLIC_FALLBACK_CHAIN
        """
        msg = f"Fallback chain for locale '{requested}' never reaches master '{master}'"
        return Diagnostic(
            code=DiagnosticCode.CYCLIC_FALLBACK_CHAIN,
            message=msg,
            locale=requested,
            chain=chain,
            hint="Break the cycle so that every fallback path ends at the master locale",
        )

    @staticmethod
    def locale_file_not_found(locale: str, path: str) -> Diagnostic:
        """Translation file for a locale does not exist."""
        msg = f"Translation file for locale '{locale}' not found"
        return Diagnostic(
            code=DiagnosticCode.LOCALE_FILE_NOT_FOUND,
            message=msg,
            locale=locale,
            path=path,
            hint="Create the file or remove the locale from supported locales and fallbacks",
        )

    @staticmethod
    def locale_file_unreadable(locale: str, path: str, reason: str) -> Diagnostic:
        """Translation file exists but could not be read."""
        msg = f"Cannot read translation file for locale '{locale}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.LOCALE_FILE_UNREADABLE,
            message=msg,
            locale=locale,
            path=path,
        )

    @staticmethod
    def locale_file_invalid_json(locale: str, path: str, reason: str) -> Diagnostic:
        """Translation file is not valid JSON (or not valid UTF-8)."""
        msg = f"Invalid JSON in translation file for locale '{locale}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.LOCALE_FILE_INVALID_JSON,
            message=msg,
            locale=locale,
            path=path,
        )

    @staticmethod
    def locale_file_not_object(locale: str, path: str, type_name: str) -> Diagnostic:
        """Translation file parsed, but its top level is not a JSON object."""
        msg = (
            f"Translation file for locale '{locale}' must contain a JSON object, "
            f"got {type_name}"
        )
        return Diagnostic(
            code=DiagnosticCode.LOCALE_FILE_NOT_OBJECT,
            message=msg,
            locale=locale,
            path=path,
            hint="Wrap the translations in a top-level {...} object",
        )

    @staticmethod
    def locale_file_unsafe_path(locale: str, path: str, reason: str) -> Diagnostic:
        """Locale code cannot be used as a file name inside the source directory."""
        msg = f"Locale '{locale}' does not map to a file in the source directory: {reason}"
        return Diagnostic(
            code=DiagnosticCode.LOCALE_FILE_UNSAFE_PATH,
            message=msg,
            locale=locale,
            path=path,
            hint="Check fallbacks and supported locales for a misspelled locale code",
        )

    @staticmethod
    def merge_depth_exceeded(max_depth: int) -> Diagnostic:
        """Translation documents nest deeper than the merge depth limit."""
        msg = f"Maximum document nesting depth ({max_depth}) exceeded during merge"
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=msg,
            hint="Flatten the translation document structure",
        )
