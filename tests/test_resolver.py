"""Tests for nestbox.resolver: path resolution precedence."""

import pytest

from nestbox.config import ServeConfig
from nestbox.errors import UriSegmentError
from nestbox.resolver import ResolutionKind, resolve
from nestbox.resources import Resource, freeze_table

INDEX = Resource(b"<h1>Home</h1>", mime_type="text/html")
DOCS = Resource(b"<h1>Docs</h1>", mime_type="text/html")
HELLO = Resource(b"Hello, world", modified=1620000000, mime_type="text/plain")

TABLE = freeze_table({"index.html": INDEX, "docs/index.html": DOCS, "hello": HELLO})


class TestLookup:
    def test_exact(self) -> None:
        resolution = resolve("hello", TABLE, ServeConfig())
        assert resolution.kind is ResolutionKind.FOUND
        assert resolution.key == "hello"
        assert resolution.resource is HELLO

    def test_index_for_empty_path(self) -> None:
        resolution = resolve("", TABLE, ServeConfig())
        assert resolution.key == "index.html"
        assert resolution.resource is INDEX

    def test_index_for_trailing_slash(self) -> None:
        assert resolve("docs/", TABLE, ServeConfig()).resource is DOCS

    def test_index_disabled(self) -> None:
        resolution = resolve("docs/", TABLE, ServeConfig(resolve_index=False))
        assert resolution.kind is ResolutionKind.NOT_FOUND

    def test_no_index_without_trailing_slash(self) -> None:
        assert resolve("docs", TABLE, ServeConfig()).kind is ResolutionKind.NOT_FOUND

    def test_sanitized_lookup(self) -> None:
        assert resolve("docs/../hello", TABLE, ServeConfig()).resource is HELLO

    def test_double_slash(self) -> None:
        assert resolve("docs//index.html", TABLE, ServeConfig()).resource is DOCS

    def test_traversal_stays_in_table(self) -> None:
        resolution = resolve("../../etc/passwd", TABLE, ServeConfig())
        assert resolution.kind is ResolutionKind.NOT_FOUND


class TestUnsafePaths:
    @pytest.mark.parametrize("path", [".env", "*x", "a/b:", "x<", "docs/>"])
    def test_rejected_regardless_of_table(self, path: str) -> None:
        for table in (TABLE, freeze_table({})):
            with pytest.raises(UriSegmentError):
                resolve(path, table, ServeConfig())

    def test_rejected_even_with_fallback(self) -> None:
        with pytest.raises(UriSegmentError):
            resolve(".git/config", TABLE, ServeConfig(not_found_fallback="index.html"))


class TestFallback:
    def test_spa_fallback(self) -> None:
        config = ServeConfig(not_found_fallback="index.html")
        resolution = resolve("some/app/route", TABLE, config)
        assert resolution.kind is ResolutionKind.FALLBACK
        assert resolution.key == "index.html"
        assert resolution.resource is INDEX

    def test_missing_fallback_is_not_found(self) -> None:
        config = ServeConfig(not_found_fallback="app.html")
        assert resolve("nope", TABLE, config).kind is ResolutionKind.NOT_FOUND

    def test_found_beats_fallback(self) -> None:
        config = ServeConfig(not_found_fallback="index.html")
        assert resolve("hello", TABLE, config).resource is HELLO


class TestGuardMode:
    def test_unmatched_not_handled(self) -> None:
        resolution = resolve("nope", TABLE, ServeConfig(guard_mode=True))
        assert resolution.kind is ResolutionKind.NOT_HANDLED
        assert not resolution.resolved

    def test_matched_still_served(self) -> None:
        assert resolve("hello", TABLE, ServeConfig(guard_mode=True)).resource is HELLO

    def test_fallback_wins_over_guard(self) -> None:
        config = ServeConfig(guard_mode=True, not_found_fallback="index.html")
        assert resolve("nope", TABLE, config).kind is ResolutionKind.FALLBACK

    def test_guard_disabled_by_missing_fallback(self) -> None:
        config = ServeConfig(guard_mode=True, not_found_fallback="app.html")
        assert resolve("nope", TABLE, config).kind is ResolutionKind.NOT_FOUND
