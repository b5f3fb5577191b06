"""Build configuration.

Provides a single frozen dataclass holding every option a host passes to a
translation build. Validation happens at construction time so that a bad
configuration fails before any file is touched.

Recognized option names in from_mapping():
    master                                   - root of all fallback chains
    sourcePath | source_path | path          - directory with <locale>.json
    supportedLocales | supported_locales     - locales to produce output for
    fallbacks                                - locale -> parent locale
    outputBasePath | output_base_path | basePath - asset name prefix
    validateLocales | validate_locales       - check codes against CLDR

Python 3.13+.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from localemerge.constants import SOURCE_SUFFIX
from localemerge.core.babel_compat import BabelImportError, is_babel_available
from localemerge.locale_utils import is_known_locale, validate_locale_code

if TYPE_CHECKING:
    from os import PathLike

    from localemerge.localization.types import LocaleCode

__all__ = ["BuildConfig"]

_ALIASES: dict[str, tuple[str, ...]] = {
    "master": ("master",),
    "source_path": ("sourcePath", "source_path", "path"),
    "supported_locales": ("supportedLocales", "supported_locales"),
    "fallbacks": ("fallbacks",),
    "output_base_path": ("outputBasePath", "output_base_path", "basePath"),
    "validate_locales": ("validateLocales", "validate_locales"),
}


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """Immutable configuration for a translation build.

    Attributes:
        master: Master locale, root of every fallback chain
        source_path: Directory containing ``<locale>.json`` files
        supported_locales: Locales to produce output for, in order
        fallbacks: Locale -> parent locale (read-only). The master's entry,
            if present, is ignored.
        output_base_path: Prefix for emitted asset names (default: "")
        validate_locales: Require every locale to be known to CLDR (needs Babel)

    Example:
        >>> config = BuildConfig(
        ...     master="en",
        ...     source_path="src/locales",
        ...     supported_locales=("en", "en-GB", "en-AU"),
        ...     fallbacks={"en-GB": "en", "en-AU": "en-GB"},
        ... )
        >>> config.source_file("en-GB")
        PosixPath('src/locales/en-GB.json')
    """

    master: LocaleCode
    source_path: Path
    supported_locales: tuple[LocaleCode, ...]
    fallbacks: Mapping[LocaleCode, LocaleCode] = field(default_factory=dict)
    output_base_path: str = ""
    validate_locales: bool = False

    def __post_init__(self) -> None:
        """Normalize containers and validate values.

        Raises:
            ValueError: On empty master, empty or duplicated supported
                locales, unsafe locale codes, non-string fallbacks, or (with
                validate_locales) locales unknown to CLDR
            BabelImportError: If validate_locales is set and Babel is missing
        """
        object.__setattr__(self, "source_path", Path(self.source_path))
        if isinstance(self.supported_locales, str):
            msg = "supported_locales must be a sequence of locale codes, not a string"
            raise ValueError(msg)
        object.__setattr__(self, "supported_locales", tuple(self.supported_locales))
        object.__setattr__(self, "fallbacks", MappingProxyType(dict(self.fallbacks or {})))

        if not self.master:
            msg = "master locale is required"
            raise ValueError(msg)
        if not self.supported_locales:
            msg = "At least one supported locale is required"
            raise ValueError(msg)
        duplicates = sorted(
            {code for code in self.supported_locales if self.supported_locales.count(code) > 1}
        )
        if duplicates:
            msg = f"Duplicate supported locales: {', '.join(duplicates)}"
            raise ValueError(msg)
        if not isinstance(self.output_base_path, str):
            msg = f"output_base_path must be a string, got {type(self.output_base_path).__name__}"
            raise ValueError(msg)

        for locale, parent in self.fallbacks.items():
            if parent is not None and not isinstance(parent, str):
                msg = f"Fallback for locale '{locale}' must be a string, got {parent!r}"
                raise ValueError(msg)

        for code in self.locales:
            validate_locale_code(code)

        if self.validate_locales:
            if not is_babel_available():
                raise BabelImportError("validate_locales")
            unknown = [code for code in self.locales if not is_known_locale(code)]
            if unknown:
                msg = f"Unknown locales (not in CLDR): {', '.join(unknown)}"
                raise ValueError(msg)

    @property
    def locales(self) -> tuple[LocaleCode, ...]:
        """Every locale the configuration mentions, master first, no duplicates."""
        mentioned = [self.master, *self.supported_locales]
        for locale, parent in self.fallbacks.items():
            mentioned.extend((locale, parent))
        return tuple(dict.fromkeys(code for code in mentioned if code))

    def source_file(self, locale: LocaleCode) -> Path:
        """Path of a locale's source file."""
        return self.source_path / f"{locale}{SOURCE_SUFFIX}"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, base_dir: Path | None = None) -> BuildConfig:
        """Build a configuration from plain option names.

        Args:
            data: Options using any of the recognized spellings
            base_dir: Directory relative source paths are resolved against

        Raises:
            ValueError: On unknown options, conflicting aliases, or missing
                required options
        """
        known = {alias for aliases in _ALIASES.values() for alias in aliases}
        unknown = sorted(set(data) - known)
        if unknown:
            msg = f"Unknown configuration options: {', '.join(unknown)}"
            raise ValueError(msg)

        values: dict[str, Any] = {}
        for name, aliases in _ALIASES.items():
            present = [alias for alias in aliases if alias in data]
            if len(present) > 1:
                msg = f"Conflicting configuration options: {', '.join(present)}"
                raise ValueError(msg)
            if present:
                values[name] = data[present[0]]

        for required in ("master", "source_path", "supported_locales"):
            if required not in values:
                msg = f"Missing required configuration option: {_ALIASES[required][0]}"
                raise ValueError(msg)

        source_path = Path(values["source_path"])
        if base_dir is not None and not source_path.is_absolute():
            source_path = base_dir / source_path
        values["source_path"] = source_path
        if values.get("fallbacks") is None:
            values["fallbacks"] = {}
        if values.get("output_base_path") is None:
            values["output_base_path"] = ""
        return cls(**values)

    @classmethod
    def from_file(cls, path: str | PathLike[str]) -> BuildConfig:
        """Load a JSON configuration file.

        Relative ``sourcePath`` values are resolved against the file's directory.

        Raises:
            OSError: If the file cannot be read
            ValueError: If the file is not a valid configuration
        """
        config_path = Path(path)
        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            msg = f"Invalid JSON in configuration file {config_path}: {e}"
            raise ValueError(msg) from e
        if not isinstance(data, dict):
            msg = f"Configuration file {config_path} must contain a JSON object"
            raise ValueError(msg)
        return cls.from_mapping(data, base_dir=config_path.parent)
