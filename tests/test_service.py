"""Tests for nestbox.service: the ResourceFiles serving engine."""

import pytest

from nestbox.config import ServeConfig
from nestbox.http.request import Request
from nestbox.http.response import Response
from nestbox.resources import Resource, freeze_table
from nestbox.service import ResourceFiles

HELLO = Resource(b"Hello, world", modified=1620000000, mime_type="text/plain")
INDEX = Resource(b"<h1>Home</h1>", modified=1, mime_type="text/html")
TABLE = freeze_table({"hello": HELLO, "index.html": INDEX})
HELLO_ETAG = f'"c:{1620000000:x}"'


def _get(files: ResourceFiles, path: str, **headers: str) -> Response | None:
    return files.respond(Request.build("GET", path, {k.replace("_", "-"): v for k, v in headers.items()}))


class TestChainableConfig:
    def test_defaults(self) -> None:
        files = ResourceFiles("/", TABLE)
        assert files.config == ServeConfig()
        assert files.table is TABLE

    def test_returns_new_instances(self) -> None:
        files = ResourceFiles("/", TABLE)
        configured = files.do_not_resolve_index()
        assert configured is not files
        assert files.config.resolve_index is True
        assert configured.config.resolve_index is False

    def test_chain(self) -> None:
        files = (
            ResourceFiles("/static", TABLE)
            .do_not_resolve_index()
            .skip_when_unmatched()
            .with_cache_control("no-cache")
        )
        assert files.config == ServeConfig(
            mount_prefix="/static",
            resolve_index=False,
            guard_mode=True,
            cache_control="no-cache",
        )
        assert files.table is TABLE

    def test_fallback_to_root(self) -> None:
        files = ResourceFiles("/", TABLE).fallback_not_found_to_root()
        assert files.config.not_found_fallback == "index.html"

    def test_repr(self) -> None:
        assert repr(ResourceFiles("/", TABLE)) == "ResourceFiles(mount_prefix='/', resources=2)"


class TestRespond:
    def test_found(self) -> None:
        response = _get(ResourceFiles("/", TABLE), "/hello")
        assert response is not None
        assert response.status == 200
        assert response.body_bytes == b"Hello, world"
        assert response.content_type == "text/plain"
        assert response.header("ETag") == HELLO_ETAG

    def test_not_found_plain_text(self) -> None:
        response = _get(ResourceFiles("/", TABLE), "/missing")
        assert response is not None
        assert response.status == 404
        assert response.text == "Not found"
        assert response.header("ETag") is None
        assert response.header("Cache-Control") is None

    def test_method_not_allowed(self) -> None:
        response = ResourceFiles("/", TABLE).respond(Request.build("POST", "/hello"))
        assert response is not None
        assert response.status == 405
        assert response.header("Allow") == "GET, HEAD"

    def test_method_gate_before_path_checks(self) -> None:
        response = ResourceFiles("/", TABLE).respond(Request.build("DELETE", "/.env"))
        assert response is not None
        assert response.status == 405

    def test_bad_request_hides_detail(self) -> None:
        response = _get(ResourceFiles("/", TABLE), "/.env")
        assert response is not None
        assert response.status == 400
        assert "." not in response.text

    def test_outside_prefix_not_handled(self) -> None:
        assert _get(ResourceFiles("/static", TABLE), "/hello") is None

    def test_prefix_stripped(self) -> None:
        response = _get(ResourceFiles("/static", TABLE), "/static/hello")
        assert response is not None
        assert response.body_bytes == b"Hello, world"

    def test_prefix_root_resolves_index(self) -> None:
        response = _get(ResourceFiles("/static", TABLE), "/static")
        assert response is not None
        assert response.body_bytes == INDEX.data

    def test_guard_mode_declines(self) -> None:
        assert _get(ResourceFiles("/", TABLE).skip_when_unmatched(), "/missing") is None

    def test_guard_mode_still_rejects_unsafe(self) -> None:
        response = _get(ResourceFiles("/", TABLE).skip_when_unmatched(), "/*x")
        assert response is not None
        assert response.status == 400

    def test_fallback_served_as_requested(self) -> None:
        files = ResourceFiles("/", TABLE).fallback_not_found_to_root()
        response = _get(files, "/some/app/route")
        assert response is not None
        assert response.status == 200
        assert response.body_bytes == INDEX.data
        assert response.content_type == "text/html"
        assert response.header("ETag") == '"d:1"'

    def test_fallback_gets_conditional_treatment(self) -> None:
        files = ResourceFiles("/", TABLE).fallback_not_found_to_root()
        response = _get(files, "/route", if_none_match='"d:1"')
        assert response is not None
        assert response.status == 304


class TestConditional:
    def test_if_none_match_hit(self) -> None:
        response = _get(ResourceFiles("/", TABLE), "/hello", if_none_match=HELLO_ETAG)
        assert response is not None
        assert response.status == 304
        assert response.body_bytes == b""
        assert response.header("ETag") == HELLO_ETAG

    def test_if_none_match_star(self) -> None:
        response = _get(ResourceFiles("/", TABLE), "/hello", if_none_match="*")
        assert response is not None
        assert response.status == 304

    def test_if_match_other(self) -> None:
        response = _get(ResourceFiles("/", TABLE), "/hello", if_match='"other"')
        assert response is not None
        assert response.status == 412
        assert response.body_bytes == b""
        assert response.header("ETag") == HELLO_ETAG

    def test_if_match_hit(self) -> None:
        response = _get(ResourceFiles("/", TABLE), "/hello", if_match=HELLO_ETAG)
        assert response is not None
        assert response.status == 200

    def test_cache_control_on_success_and_304(self) -> None:
        files = ResourceFiles("/", TABLE).with_cache_control("public, max-age=60")
        ok = _get(files, "/hello")
        cached = _get(files, "/hello", if_none_match=HELLO_ETAG)
        failed = _get(files, "/hello", if_match='"other"')
        assert ok is not None and cached is not None and failed is not None
        assert ok.header("Cache-Control") == "public, max-age=60"
        assert cached.header("Cache-Control") == "public, max-age=60"
        assert failed.header("Cache-Control") is None


class TestMiddleware:
    @pytest.fixture
    def next_handler(self):  # noqa: ANN201
        calls: list[str] = []

        async def next(request: Request) -> Response:
            calls.append(request.path)
            return Response("from next")

        next.calls = calls  # type: ignore[attr-defined]
        return next

    async def test_serves_match(self, next_handler) -> None:  # noqa: ANN001
        files = ResourceFiles("/", TABLE)
        response = await files(Request.build("GET", "/hello"), next_handler)
        assert response.body_bytes == b"Hello, world"
        assert next_handler.calls == []

    async def test_falls_through_outside_prefix(self, next_handler) -> None:  # noqa: ANN001
        files = ResourceFiles("/static", TABLE)
        response = await files(Request.build("GET", "/api"), next_handler)
        assert response.text == "from next"
        assert next_handler.calls == ["/api"]

    async def test_falls_through_in_guard_mode(self, next_handler) -> None:  # noqa: ANN001
        files = ResourceFiles("/", TABLE).skip_when_unmatched()
        response = await files(Request.build("GET", "/missing"), next_handler)
        assert response.text == "from next"

    async def test_answers_404_without_guard(self, next_handler) -> None:  # noqa: ANN001
        files = ResourceFiles("/", TABLE)
        response = await files(Request.build("GET", "/missing"), next_handler)
        assert response.status == 404
        assert next_handler.calls == []
