"""Tests for runtime/cache.py FileCache.

Covers read-through behavior, mtime freshness, error handling without
partial updates, lifecycle (invalidate/clear) and concurrent retrieval.
"""

from __future__ import annotations

import threading
from pathlib import Path
from types import MappingProxyType

import pytest

from localemerge.diagnostics import DiagnosticCode, LocaleFileError
from localemerge.runtime import CacheStats, FileCache
from tests.helpers.files import WriteLocale, bump_mtime, rewrite_locale_file


class TestRetrieve:
    """Test retrieve() read-through behavior."""

    def test_first_retrieve_reads_file(self, write_locale: WriteLocale, locales_dir: Path) -> None:
        write_locale("en", {"hello": "Hello"})
        cache = FileCache(locales_dir)

        assert cache.retrieve("en") == {"hello": "Hello"}
        assert cache.stats.reads == 1
        assert cache.stats.misses == 1
        assert "en" in cache

    def test_second_retrieve_only_stats(self, write_locale: WriteLocale, locales_dir: Path) -> None:
        """A fresh entry is served without reading file content."""
        write_locale("en", {"hello": "Hello"})
        cache = FileCache(locales_dir)

        first = cache.retrieve("en")
        second = cache.retrieve("en")

        assert first is second
        assert cache.stats.reads == 1
        assert cache.stats.hits == 1

    def test_changed_file_is_reread(self, write_locale: WriteLocale, locales_dir: Path) -> None:
        write_locale("en", {"hello": "Hello"})
        cache = FileCache(locales_dir)
        cache.retrieve("en")

        rewrite_locale_file(locales_dir, "en", {"hello": "Hi"})

        assert cache.retrieve("en") == {"hello": "Hi"}
        assert cache.stats.reads == 2

    def test_documents_are_read_only(self, write_locale: WriteLocale, locales_dir: Path) -> None:
        """Callers cannot mutate the cached document."""
        write_locale("en", {"hello": "Hello"})
        cache = FileCache(locales_dir)
        document = cache.retrieve("en")

        assert isinstance(document, MappingProxyType)
        with pytest.raises(TypeError):
            document["hello"] = "changed"  # type: ignore[index]

    def test_nested_values_are_read_only(
        self, write_locale: WriteLocale, locales_dir: Path
    ) -> None:
        """Nested mappings and arrays are frozen too."""
        write_locale("en", {"menu": {"file": "File"}, "days": ["Mon", "Tue"]})
        cache = FileCache(locales_dir)
        document = cache.retrieve("en")

        with pytest.raises(TypeError):
            document["menu"]["file"] = "changed"  # type: ignore[index]
        with pytest.raises(AttributeError):
            document["days"].append("Wed")  # type: ignore[union-attr]

        assert document["menu"] == {"file": "File"}
        assert document["days"] == ("Mon", "Tue")
        assert cache.stats.reads == 1

    def test_key_order_preserved(self, write_locale: WriteLocale, locales_dir: Path) -> None:
        write_locale("en", '{"z": "1", "a": "2", "m": "3"}')

        assert list(FileCache(locales_dir).retrieve("en")) == ["z", "a", "m"]

    def test_non_ascii_content(self, write_locale: WriteLocale, locales_dir: Path) -> None:
        write_locale("lv", {"sveiki": "Sveiki, pasaule! Ā Č Ē"})

        assert FileCache(locales_dir).retrieve("lv")["sveiki"] == "Sveiki, pasaule! Ā Č Ē"

    def test_retrieve_entry_returns_mtime(self, write_locale: WriteLocale, locales_dir: Path) -> None:
        path = write_locale("en", {"a": "1"}, mtime_ns=1_700_000_000_000_000_000)
        entry = FileCache(locales_dir).retrieve_entry("en")

        assert entry.mtime_ns == path.stat().st_mtime_ns
        assert entry.document == {"a": "1"}


class TestFreshness:
    """Test is_fresh() and stamp()."""

    def test_never_retrieved_is_not_fresh(self, write_locale: WriteLocale, locales_dir: Path) -> None:
        write_locale("en", {"a": "1"})
        cache = FileCache(locales_dir)

        assert cache.is_fresh("en") is False
        assert cache.stamp("en") is None

    def test_fresh_after_retrieve(self, write_locale: WriteLocale, locales_dir: Path) -> None:
        write_locale("en", {"a": "1"})
        cache = FileCache(locales_dir)
        cache.retrieve("en")

        assert cache.is_fresh("en") is True

    def test_touch_makes_stale(self, write_locale: WriteLocale, locales_dir: Path) -> None:
        """Only the timestamp matters, not the content."""
        path = write_locale("en", {"a": "1"})
        cache = FileCache(locales_dir)
        cache.retrieve("en")

        bump_mtime(path)

        assert cache.is_fresh("en") is False

    def test_deleted_file_is_not_fresh(self, write_locale: WriteLocale, locales_dir: Path) -> None:
        path = write_locale("en", {"a": "1"})
        cache = FileCache(locales_dir)
        cache.retrieve("en")

        path.unlink()

        assert cache.is_fresh("en") is False

    def test_freshness_check_does_not_read(
        self, write_locale: WriteLocale, locales_dir: Path
    ) -> None:
        write_locale("en", {"a": "1"})
        cache = FileCache(locales_dir)
        cache.retrieve("en")

        for _ in range(3):
            cache.is_fresh("en")

        assert cache.stats.reads == 1
        assert cache.stats.stat_calls >= 3

    def test_stamp_tracks_mtime(self, write_locale: WriteLocale, locales_dir: Path) -> None:
        path = write_locale("en", {"a": "1"})
        cache = FileCache(locales_dir)
        cache.retrieve("en")

        assert cache.stamp("en") == path.stat().st_mtime_ns


class TestErrors:
    """Test LocaleFileError reporting and no partial updates."""

    def test_missing_file(self, locales_dir: Path) -> None:
        cache = FileCache(locales_dir)

        with pytest.raises(LocaleFileError) as exc_info:
            cache.retrieve("de")

        error = exc_info.value
        assert error.locale == "de"
        assert error.path == locales_dir / "de.json"
        assert isinstance(error.cause, FileNotFoundError)
        assert error.__cause__ is error.cause
        assert error.diagnostic is not None
        assert error.diagnostic.code == DiagnosticCode.LOCALE_FILE_NOT_FOUND
        assert "de" not in cache

    def test_invalid_json(self, write_locale: WriteLocale, locales_dir: Path) -> None:
        write_locale("en", '{"a": ')

        with pytest.raises(LocaleFileError) as exc_info:
            FileCache(locales_dir).retrieve("en")

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.LOCALE_FILE_INVALID_JSON
        assert "en.json" in str(exc_info.value)

    def test_invalid_utf8(self, locales_dir: Path) -> None:
        (locales_dir / "en.json").write_bytes(b'{"a": "\xff"}')

        with pytest.raises(LocaleFileError) as exc_info:
            FileCache(locales_dir).retrieve("en")

        assert isinstance(exc_info.value.cause, UnicodeDecodeError)

    @pytest.mark.parametrize("content", ["[]", '"text"', "42", "null"])
    def test_top_level_must_be_object(
        self, write_locale: WriteLocale, locales_dir: Path, content: str
    ) -> None:
        write_locale("en", content)

        with pytest.raises(LocaleFileError) as exc_info:
            FileCache(locales_dir).retrieve("en")

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.LOCALE_FILE_NOT_OBJECT
        assert exc_info.value.cause is None

    def test_failed_reread_keeps_previous_entry(
        self, write_locale: WriteLocale, locales_dir: Path
    ) -> None:
        """A broken edit does not corrupt the cached document."""
        path = write_locale("en", {"a": "1"})
        cache = FileCache(locales_dir)
        cache.retrieve("en")
        stamp = cache.stamp("en")

        path.write_text("{broken", encoding="utf-8")
        bump_mtime(path)

        with pytest.raises(LocaleFileError):
            cache.retrieve("en")
        assert cache.stamp("en") == stamp
        assert cache.is_fresh("en") is False

        rewrite_locale_file(locales_dir, "en", {"a": "2"})
        assert cache.retrieve("en") == {"a": "2"}

    @pytest.mark.parametrize("locale", ["../secret", "a/b", "a\\b", ""])
    def test_unsafe_locale_rejected(self, locales_dir: Path, locale: str) -> None:
        cache = FileCache(locales_dir)

        with pytest.raises(LocaleFileError) as exc_info:
            cache.retrieve(locale)

        error = exc_info.value
        assert error.locale == locale
        assert isinstance(error.cause, ValueError)
        assert error.diagnostic is not None
        assert error.diagnostic.code == DiagnosticCode.LOCALE_FILE_UNSAFE_PATH
        assert cache.stats.reads == 0

    def test_symlink_escaping_source_dir_rejected(self, locales_dir: Path, tmp_path: Path) -> None:
        outside = tmp_path / "outside.json"
        outside.write_text('{"secret": "x"}', encoding="utf-8")
        try:
            (locales_dir / "en.json").symlink_to(outside)
        except OSError:
            pytest.skip("symlinks not supported")

        with pytest.raises(LocaleFileError, match="escapes source directory"):
            FileCache(locales_dir).retrieve("en")


class TestLifecycle:
    """Test invalidate(), clear() and stats."""

    def test_invalidate_forces_reread(self, write_locale: WriteLocale, locales_dir: Path) -> None:
        write_locale("en", {"a": "1"})
        cache = FileCache(locales_dir)
        cache.retrieve("en")

        cache.invalidate("en")

        assert cache.is_fresh("en") is False
        cache.retrieve("en")
        assert cache.stats.reads == 2

    def test_invalidate_unknown_locale_is_noop(self, locales_dir: Path) -> None:
        FileCache(locales_dir).invalidate("xx")

    def test_clear_resets_everything(self, write_locale: WriteLocale, locales_dir: Path) -> None:
        write_locale("en", {"a": "1"})
        write_locale("de", {"a": "2"})
        cache = FileCache(locales_dir)
        cache.retrieve("en")
        cache.retrieve("de")

        cache.clear()

        assert len(cache) == 0
        assert cache.stats == CacheStats(hits=0, misses=0, reads=0, stat_calls=0, size=0)

    def test_entries_are_per_locale(self, write_locale: WriteLocale, locales_dir: Path) -> None:
        write_locale("en", {"a": "en"})
        write_locale("de", {"a": "de"})
        cache = FileCache(locales_dir)

        assert cache.retrieve("en") == {"a": "en"}
        assert cache.retrieve("de") == {"a": "de"}
        assert cache.stats.size == 2

    def test_path_for(self, locales_dir: Path) -> None:
        cache = FileCache(locales_dir)

        assert cache.path_for("en-GB") == locales_dir / "en-GB.json"
        assert cache.source_path == locales_dir


class TestConcurrency:
    """Test concurrent retrieval of the same locale."""

    def test_concurrent_retrieve_reads_once(
        self, write_locale: WriteLocale, locales_dir: Path
    ) -> None:
        write_locale("en", {f"key{i}": str(i) for i in range(200)})
        cache = FileCache(locales_dir)
        barrier = threading.Barrier(8)
        results: list[object] = []
        errors: list[BaseException] = []

        def worker() -> None:
            try:
                barrier.wait()
                results.append(cache.retrieve("en"))
            except BaseException as e:  # pragma: no cover - surfaced via assertion
                errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert cache.stats.reads == 1
        assert all(result is results[0] for result in results)
