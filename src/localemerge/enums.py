"""Enumerations for localemerge type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class MergeStatus(StrEnum):
    """How a locale's merged document was produced in a build pass.

    StrEnum provides automatic string conversion: str(MergeStatus.MERGED) == "merged"
    """

    MERGED = "merged"
    """Fallback chain was read and folded in this pass."""

    CACHED = "cached"
    """Every chain member was fresh; the previous document was reused."""


__all__ = [
    "MergeStatus",
]
