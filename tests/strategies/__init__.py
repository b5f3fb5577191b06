"""Hypothesis strategies for localemerge property-based testing.

Usage:
    from tests.strategies import fallback_trees, translation_documents
"""

from .localization import (
    fallback_trees,
    translation_documents,
    translation_keys,
    translation_scalars,
)

__all__ = [
    "fallback_trees",
    "translation_documents",
    "translation_keys",
    "translation_scalars",
]
