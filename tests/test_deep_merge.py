"""Tests for core/merge.py deep merge semantics.

Tests override rules, key ordering, input immutability and the fold along a
fallback chain, with Hypothesis for the algebraic properties.
"""

from __future__ import annotations

from types import MappingProxyType

import pytest
from hypothesis import given
from hypothesis import strategies as st

from localemerge.core import DepthLimitExceededError, deep_merge, merge_chain
from localemerge.core.merge import copy_document, freeze_document
from tests.strategies import translation_documents, translation_keys, translation_scalars


class TestOverrideRules:
    """Test which side wins at a key path."""

    def test_more_specific_scalar_wins(self) -> None:
        assert deep_merge({"a": "1", "b": "2"}, {"b": "3"}) == {"a": "1", "b": "3"}

    def test_new_keys_are_added(self) -> None:
        assert deep_merge({"a": "1"}, {"c": "4"}) == {"a": "1", "c": "4"}

    def test_nested_mappings_merge_key_by_key(self) -> None:
        base = {"menu": {"file": "File", "edit": "Edit"}}
        override = {"menu": {"edit": "Modifier"}}

        assert deep_merge(base, override) == {"menu": {"file": "File", "edit": "Modifier"}}

    def test_arrays_are_replaced_not_concatenated(self) -> None:
        merged = deep_merge({"days": ["Mon", "Tue", "Wed"]}, {"days": ["Lun"]})

        assert merged == {"days": ["Lun"]}

    def test_mapping_replaced_by_scalar(self) -> None:
        assert deep_merge({"a": {"x": "1"}}, {"a": "flat"}) == {"a": "flat"}

    def test_scalar_replaced_by_mapping(self) -> None:
        assert deep_merge({"a": "flat"}, {"a": {"x": "1"}}) == {"a": {"x": "1"}}

    def test_null_overrides(self) -> None:
        """JSON null is a value, not an absence."""
        assert deep_merge({"a": "1"}, {"a": None}) == {"a": None}

    def test_empty_override_is_identity(self) -> None:
        assert deep_merge({"a": {"b": "c"}}, {}) == {"a": {"b": "c"}}

    def test_read_only_inputs_accepted(self) -> None:
        """Cached documents are MappingProxyType views."""
        base = MappingProxyType({"a": MappingProxyType({"x": "1"})})
        merged = deep_merge(base, {"a": {"y": "2"}})

        assert merged == {"a": {"x": "1", "y": "2"}}
        assert type(merged["a"]) is dict


class TestKeyOrder:
    """Test first-insertion key order."""

    def test_base_keys_keep_position(self) -> None:
        merged = deep_merge({"z": "1", "a": "2", "m": "3"}, {"a": "x", "b": "y"})

        assert list(merged) == ["z", "a", "m", "b"]

    def test_nested_order(self) -> None:
        merged = deep_merge({"g": {"b": "1", "a": "2"}}, {"g": {"c": "3", "b": "4"}})

        assert list(merged["g"]) == ["b", "a", "c"]


class TestImmutability:
    """Test that inputs are never mutated or aliased."""

    def test_inputs_unchanged(self) -> None:
        base = {"a": {"x": "1"}, "l": [1, 2]}
        override = {"a": {"y": "2"}, "l": [3]}
        deep_merge(base, override)

        assert base == {"a": {"x": "1"}, "l": [1, 2]}
        assert override == {"a": {"y": "2"}, "l": [3]}

    def test_result_does_not_alias_inputs(self) -> None:
        base = {"a": {"x": "1"}}
        override = {"b": {"y": ["v"]}}
        merged = deep_merge(base, override)

        merged["a"]["x"] = "changed"  # type: ignore[index]
        merged["b"]["y"].append("w")  # type: ignore[index,union-attr]

        assert base == {"a": {"x": "1"}}
        assert override == {"b": {"y": ["v"]}}

    def test_copy_document_is_deep(self) -> None:
        source = MappingProxyType({"a": {"b": ["c"]}})
        copied = copy_document(source)

        copied["a"]["b"].append("d")  # type: ignore[index,union-attr]

        assert source["a"] == {"b": ["c"]}

    def test_freeze_document_is_deep(self) -> None:
        frozen = freeze_document({"a": {"b": ["c", {"d": "e"}]}})

        with pytest.raises(TypeError):
            frozen["a"]["x"] = "y"  # type: ignore[index]
        assert frozen["a"]["b"] == ("c", {"d": "e"})  # type: ignore[index]
        assert copy_document(frozen) == {"a": {"b": ["c", {"d": "e"}]}}


class TestMergeChain:
    """Test folding a chain from master to target."""

    def test_english_scenario(self) -> None:
        en = {"a": "1", "b": "2"}
        en_gb = {"b": "3"}
        en_au = {"c": "4"}

        assert merge_chain([en]) == {"a": "1", "b": "2"}
        assert merge_chain([en, en_gb]) == {"a": "1", "b": "3"}
        assert merge_chain([en, en_gb, en_au]) == {"a": "1", "b": "3", "c": "4"}

    def test_empty_chain(self) -> None:
        assert merge_chain([]) == {}

    def test_accepts_generator(self) -> None:
        assert merge_chain(d for d in ({"a": "1"}, {"a": "2"})) == {"a": "2"}


class TestDepthLimit:
    """Test merge recursion protection."""

    @staticmethod
    def _nested(depth: int) -> dict[str, object]:
        document: dict[str, object] = {"leaf": "x"}
        for _ in range(depth):
            document = {"n": document}
        return document

    def test_shallow_documents_pass(self) -> None:
        assert deep_merge(self._nested(5), self._nested(5), max_depth=10)

    def test_deep_override_raises(self) -> None:
        with pytest.raises(DepthLimitExceededError) as exc_info:
            deep_merge({}, self._nested(20), max_depth=10)

        assert "10" in str(exc_info.value)

    def test_deep_base_raises(self) -> None:
        with pytest.raises(DepthLimitExceededError):
            deep_merge(self._nested(20), {}, max_depth=10)


class TestMergeProperties:
    """Property-based tests for merge semantics."""

    @given(document=translation_documents())
    def test_empty_base_is_identity(self, document: dict[str, object]) -> None:
        """Merging into {} reproduces the document (master identity case)."""
        assert deep_merge({}, document) == document

    @given(document=translation_documents())
    def test_self_merge_is_identity(self, document: dict[str, object]) -> None:
        assert deep_merge(document, document) == document

    @given(
        master=translation_documents(),
        middle=translation_documents(),
        target=translation_documents(),
    )
    def test_chain_fold_equals_stepwise_merge(
        self,
        master: dict[str, object],
        middle: dict[str, object],
        target: dict[str, object],
    ) -> None:
        """Folding [master, middle, target] equals merging master+middle, then target."""
        stepwise = deep_merge(deep_merge(master, middle), target)

        assert merge_chain([master, middle, target]) == stepwise

    @given(
        documents=st.lists(
            st.fixed_dictionaries(
                {"group": st.dictionaries(translation_keys, translation_scalars, max_size=5)},
                optional={"title": translation_scalars},
            ),
            min_size=3,
            max_size=3,
        )
    )
    def test_associative_when_shapes_agree(self, documents: list[dict[str, object]]) -> None:
        """(a + b) + c == a + (b + c) when no key path switches between mapping and scalar."""
        a, b, c = documents

        assert deep_merge(deep_merge(a, b), c) == deep_merge(a, deep_merge(b, c))

    @given(
        master=translation_documents(),
        middle=translation_documents(),
        target=translation_documents(),
    )
    def test_most_specific_scalar_always_wins(
        self,
        master: dict[str, object],
        middle: dict[str, object],
        target: dict[str, object],
    ) -> None:
        """Top-level non-mapping values of the target survive any chain length."""
        merged = merge_chain([master, middle, target])

        for key, value in target.items():
            if not isinstance(value, dict):
                assert merged[key] == value

    @given(base=translation_documents(), override=translation_documents())
    def test_override_top_level_values_win(
        self, base: dict[str, object], override: dict[str, object]
    ) -> None:
        """Every non-mapping override value appears verbatim in the result."""
        merged = deep_merge(base, override)

        assert set(merged) == set(base) | set(override)
        for key, value in override.items():
            if not isinstance(value, dict):
                assert merged[key] == value
