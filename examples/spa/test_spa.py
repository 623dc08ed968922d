"""Tests for the single-page app example."""

from nestbox.testing import TestClient


class TestSPA:
    async def test_index(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/")
            assert response.status == 200
            assert "<h1>Nestbox SPA</h1>" in response.text
            assert response.header("cache-control") == "no-cache"

    async def test_client_route_falls_back_to_index(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/users/42/settings")
            assert response.status == 200
            assert "<h1>Nestbox SPA</h1>" in response.text

    async def test_asset(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/assets/style.css")
            assert response.status == 200
            assert response.content_type == "text/css"

    async def test_revalidation(self, example_app) -> None:
        async with TestClient(example_app) as client:
            first = await client.get("/assets/app.js")
            etag = first.header("etag")
            assert etag is not None
            second = await client.get("/assets/app.js", headers={"If-None-Match": etag})
            assert second.status == 304
            assert second.body_bytes == b""

    async def test_unsafe_path_rejected(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/.git/config")
            assert response.status == 400
