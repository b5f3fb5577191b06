"""Pytest configuration for the localemerge test suite.

Hypothesis profiles:
- dev: Local development with 200 examples (thorough property testing)
- ci: CI runs with 50 examples (fast feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- HYPOTHESIS_PROFILE env var -> explicit override
- CI=true environment variable -> "ci" profile
- Otherwise -> "dev" profile

Shared fixtures write per-locale JSON files into tmp_path.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pytest
from hypothesis import HealthCheck, Phase, Verbosity, settings

from tests.helpers.files import WriteLocale, write_locale_file

# =============================================================================
# HYPOTHESIS PROFILES
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=200,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context."""
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# LOCALE FILE FIXTURES
# =============================================================================


@pytest.fixture
def locales_dir(tmp_path: Path) -> Path:
    """Empty source directory for translation files."""
    directory = tmp_path / "locales"
    directory.mkdir()
    return directory


@pytest.fixture
def write_locale(locales_dir: Path) -> WriteLocale:
    """Write a translation file into locales_dir."""

    def _write(locale: str, content: Mapping[str, Any] | str, *, mtime_ns: int | None = None) -> Path:
        return write_locale_file(locales_dir, locale, content, mtime_ns=mtime_ns)

    return _write


@pytest.fixture
def english_locales(write_locale: WriteLocale, locales_dir: Path) -> Path:
    """The en / en-GB / en-AU scenario: en-AU -> en-GB -> en."""
    write_locale("en", {"a": "1", "b": "2"})
    write_locale("en-GB", {"b": "3"})
    write_locale("en-AU", {"c": "4"})
    return locales_dir

