"""Translation file loading.

Maps locale codes to ``<source_path>/<locale>.json`` files and turns every
way a file can fail (missing, unreadable, invalid JSON, wrong top-level
type) into a LocaleFileError that names the locale and the path.

Components:
    JsonFileLoader - Disk-based loader with path-traversal prevention
    parse_document - Decode raw bytes into a TranslationDocument

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from localemerge.constants import SOURCE_ENCODING, SOURCE_SUFFIX
from localemerge.diagnostics import ErrorTemplate, LocaleFileError
from localemerge.locale_utils import validate_locale_code

if TYPE_CHECKING:
    from localemerge.localization.types import JSONValue, LocaleCode

__all__ = ["JsonFileLoader", "parse_document"]

logger = logging.getLogger(__name__)


def parse_document(locale: LocaleCode, path: Path, raw: bytes) -> dict[str, JSONValue]:
    """Decode a translation file's bytes.

    Args:
        locale: Locale the file belongs to (for diagnostics)
        path: File path (for diagnostics)
        raw: File content

    Returns:
        Parsed document, keys in file order

    Raises:
        LocaleFileError: If the content is not UTF-8 JSON or not a JSON object
    """
    try:
        document = json.loads(raw.decode(SOURCE_ENCODING))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise LocaleFileError(
            ErrorTemplate.locale_file_invalid_json(locale, str(path), str(e)),
            locale=locale,
            path=path,
            cause=e,
        ) from e

    if not isinstance(document, dict):
        raise LocaleFileError(
            ErrorTemplate.locale_file_not_object(locale, str(path), type(document).__name__),
            locale=locale,
            path=path,
        )
    return document


@dataclass(frozen=True, slots=True)
class JsonFileLoader:
    """File system loader for per-locale JSON translation files.

    Security:
        Locale codes are validated before being used as file names, and the
        resolved file must stay inside the source directory.

    Example:
        >>> loader = JsonFileLoader("src/locales")
        >>> loader.path_for("en-GB")
        PosixPath('src/locales/en-GB.json')

    Attributes:
        source_path: Directory containing ``<locale>.json`` files
    """

    source_path: Path
    _resolved_root: Path = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Normalize source_path and cache the resolved root directory."""
        object.__setattr__(self, "source_path", Path(self.source_path))
        object.__setattr__(self, "_resolved_root", self.source_path.resolve())

    def path_for(self, locale: LocaleCode) -> Path:
        """Return the source file path for a locale.

        Raises:
            LocaleFileError: If the locale code is unsafe as a file name or
                resolves outside the source directory
        """
        path = self.source_path / f"{locale}{SOURCE_SUFFIX}"
        try:
            validate_locale_code(locale)
        except ValueError as e:
            raise self._unsafe_path(locale, path, str(e), e) from e
        try:
            path.resolve().relative_to(self._resolved_root)
        except ValueError as e:
            reason = "Path traversal detected: resolved path escapes source directory"
            raise self._unsafe_path(locale, path, reason, e) from e
        return path

    @staticmethod
    def _unsafe_path(
        locale: LocaleCode, path: Path, reason: str, cause: ValueError
    ) -> LocaleFileError:
        return LocaleFileError(
            ErrorTemplate.locale_file_unsafe_path(locale, str(path), reason),
            locale=locale,
            path=path,
            cause=cause,
        )

    def read_bytes(self, locale: LocaleCode, path: Path | None = None) -> bytes:
        """Read a locale's raw file content.

        Raises:
            LocaleFileError: If the file is missing or cannot be read
        """
        if path is None:
            path = self.path_for(locale)
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise LocaleFileError(
                ErrorTemplate.locale_file_not_found(locale, str(path)),
                locale=locale,
                path=path,
                cause=e,
            ) from e
        except OSError as e:
            raise LocaleFileError(
                ErrorTemplate.locale_file_unreadable(locale, str(path), e.strerror or str(e)),
                locale=locale,
                path=path,
                cause=e,
            ) from e

    def load(self, locale: LocaleCode) -> dict[str, JSONValue]:
        """Read and parse a locale's translation file.

        Raises:
            LocaleFileError: If the file is missing, unreadable or malformed
        """
        path = self.path_for(locale)
        logger.debug("Reading translations for %s from %s", locale, path)
        return parse_document(locale, path, self.read_bytes(locale, path))
