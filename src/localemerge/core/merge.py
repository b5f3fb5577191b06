"""Deep merge of translation documents.

Semantics (more specific document on the right):
    - Both values are mappings: merged recursively, key by key
    - Anything else: the right-hand value replaces the left-hand one
      (strings, numbers, booleans, null, and arrays, which are NOT concatenated)

Inputs are never mutated. Key order follows first insertion: left-hand keys
keep their position, keys new on the right are appended in their own order.
This keeps serialized output stable across builds for diffability.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from localemerge.core.depth_guard import DepthGuard

if TYPE_CHECKING:
    from localemerge.localization.types import JSONValue, TranslationDocument

__all__ = ["copy_document", "deep_merge", "freeze_document", "merge_chain"]


def deep_merge(
    base: TranslationDocument,
    override: TranslationDocument,
    *,
    max_depth: int | None = None,
) -> dict[str, JSONValue]:
    """Merge ``override`` into a copy of ``base``.

    Args:
        base: Less specific document
        override: More specific document; wins at every matching key path
        max_depth: Nesting limit (default: MAX_DEPTH)

    Returns:
        New document sharing no mutable mapping with either input

    Raises:
        DepthLimitExceededError: If either document nests deeper than max_depth

    Example:
        >>> deep_merge({"a": {"x": 1, "y": 2}}, {"a": {"y": 3}, "b": [1]})
        {'a': {'x': 1, 'y': 3}, 'b': [1]}
    """
    guard = DepthGuard() if max_depth is None else DepthGuard(max_depth=max_depth)
    with guard:
        return _merge_mappings(base, override, guard)


def merge_chain(
    documents: Iterable[TranslationDocument],
    *,
    max_depth: int | None = None,
) -> dict[str, JSONValue]:
    """Fold documents from least to most specific, starting from ``{}``.

    Args:
        documents: Documents ordered master first, target locale last
        max_depth: Nesting limit (default: MAX_DEPTH)

    Returns:
        Merged document (empty dict for an empty iterable)
    """
    merged: dict[str, JSONValue] = {}
    for document in documents:
        merged = deep_merge(merged, document, max_depth=max_depth)
    return merged


def _merge_mappings(
    base: Mapping[str, JSONValue],
    override: Mapping[str, JSONValue],
    guard: DepthGuard,
) -> dict[str, JSONValue]:
    merged: dict[str, JSONValue] = {key: _copy_value(value, guard) for key, value in base.items()}
    for key, value in override.items():
        current = merged.get(key)
        with guard:
            if isinstance(current, Mapping) and isinstance(value, Mapping):
                merged[key] = _merge_mappings(current, value, guard)
            else:
                merged[key] = _copy_value(value, guard)
    return merged


def _copy_value(value: JSONValue, guard: DepthGuard) -> JSONValue:
    """Copy containers so merged output never aliases a cached document."""
    match value:
        case Mapping():
            with guard:
                return {key: _copy_value(item, guard) for key, item in value.items()}
        case list() | tuple():
            with guard:
                return [_copy_value(item, guard) for item in value]
        case _:
            return value


def copy_document(document: TranslationDocument) -> dict[str, JSONValue]:
    """Return a mutable deep copy of a document (plain dicts and lists)."""
    guard = DepthGuard()
    with guard:
        return {key: _copy_value(value, guard) for key, value in document.items()}


def freeze_document(document: Mapping[str, JSONValue]) -> TranslationDocument:
    """Return a read-only deep view: nested mappings as MappingProxyType, arrays as tuples.

    Raises:
        DepthLimitExceededError: If the document nests deeper than MAX_DEPTH
    """
    guard = DepthGuard()
    with guard:
        frozen = {key: _freeze_value(value, guard) for key, value in document.items()}
        return MappingProxyType(frozen)


def _freeze_value(value: JSONValue, guard: DepthGuard) -> JSONValue:
    match value:
        case Mapping():
            with guard:
                frozen = {key: _freeze_value(item, guard) for key, item in value.items()}
                return MappingProxyType(frozen)
        case list() | tuple():
            with guard:
                return tuple(_freeze_value(item, guard) for item in value)
        case _:
            return value
