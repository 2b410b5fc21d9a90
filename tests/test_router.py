"""Tests for verb + path dispatch."""

import json

import pytest

from shortlink.lib.database.models import Link
from shortlink.lib.router import RequestRouter
from shortlink.lib.service import LinkService

from .conftest import BASE_URL, SequenceGenerator


@pytest.fixture
def router(service, logger):
    return RequestRouter(service, logger=logger)


class ExplodingService:
    async def create_short_link(self, long_url):
        raise RuntimeError("boom")


class TestRequestRouter:

    async def test_create_then_redirect(self, store, logger):
        service = LinkService(
            store=store,
            generator=SequenceGenerator(["abc123"]),
            base_url=BASE_URL,
            logger=logger,
        )
        router = RequestRouter(service, logger=logger)

        created = await router.dispatch("POST", "/", json.dumps({"url": "https://example.com"}))
        assert created.status_code == 200
        assert json.loads(created.body) == {"short_url": "https://host/abc123"}
        assert created.headers["Content-Type"] == "application/json"

        redirect = await router.dispatch("GET", "/abc123")
        assert redirect.status_code == 301
        assert redirect.headers["Location"] == "https://example.com"
        assert redirect.body == ""

    async def test_custom_code(self, router):
        response = await router.dispatch(
            "POST",
            "/createcustom",
            json.dumps({"url": "https://example.com", "code": "mycustom"}),
        )

        assert response.status_code == 200
        assert json.loads(response.body)["short_url"] == f"{BASE_URL}/mycustom"

    async def test_custom_code_too_short(self, router):
        response = await router.dispatch(
            "POST",
            "/createcustom",
            json.dumps({"url": "https://example.com", "code": "short"}),
        )

        assert response.status_code == 400
        assert "at least 8" in json.loads(response.body)["error"]

    async def test_custom_code_conflict(self, router):
        body = json.dumps({"url": "https://example.com", "code": "takencode"})
        await router.dispatch("POST", "/createcustom", body)

        response = await router.dispatch(
            "POST",
            "/createcustom",
            json.dumps({"url": "https://other.example", "code": "takencode"}),
        )
        assert response.status_code == 409

    async def test_bytes_body(self, router):
        response = await router.dispatch("POST", "/", b'{"url": "https://example.com"}')
        assert response.status_code == 200

    @pytest.mark.parametrize("body", [None, "", "not json", "[1, 2]", '{"url": ""}', '{"url": 5}'])
    async def test_bad_create_body(self, router, body):
        response = await router.dispatch("POST", "/", body)

        assert response.status_code == 400
        assert "error" in json.loads(response.body)

    async def test_invalid_utf8_body(self, router, store):
        response = await router.dispatch("POST", "/", b'{"url": "https://e.example/\xff\xfe"}')

        assert response.status_code == 400
        assert json.loads(response.body)["error"] == "Request body must be valid UTF-8"
        assert len(store) == 0

    @pytest.mark.parametrize("long_url,location", [
        ("https://ja.wikipedia.org/wiki/東京", "https://ja.wikipedia.org/wiki/%E6%9D%B1%E4%BA%AC"),
        ("https://example.com/a%20b?q=1&r=[2]#top", "https://example.com/a%20b?q=1&r=[2]#top"),
        ("https://example.com/a b", "https://example.com/a%20b"),
    ])
    async def test_location_is_ascii(self, router, store, long_url, location):
        await store.put(Link(code="encoded1", long_url=long_url))

        response = await router.dispatch("GET", "/encoded1")

        assert response.status_code == 301
        assert response.headers["Location"] == location

    async def test_resolve_missing_code(self, router):
        response = await router.dispatch("GET", "/")
        assert response.status_code == 400

    async def test_resolve_unknown_code(self, router):
        response = await router.dispatch("GET", "/nonexistent")
        assert response.status_code == 404

    async def test_resolve_trailing_slash(self, router, store):
        await store.put(Link(code="xyz789", long_url="https://example.com/x"))

        response = await router.dispatch("GET", "/xyz789/")
        assert response.status_code == 301
        assert response.headers["Location"] == "https://example.com/x"

    async def test_options_is_noop(self, router, store):
        response = await router.dispatch("OPTIONS", "/anything")

        assert response.status_code == 200
        assert response.body == ""
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        assert len(store) == 0

    @pytest.mark.parametrize("method", ["PUT", "DELETE", "PATCH", "HEAD"])
    async def test_method_not_allowed(self, router, method):
        response = await router.dispatch(method, "/abc123")
        assert response.status_code == 405

    async def test_missing_method(self, router):
        response = await router.dispatch("", "/")

        assert response.status_code == 400
        assert json.loads(response.body)["error"] == "HTTP Method is missing"

    async def test_lowercase_method(self, router):
        response = await router.dispatch("options", "/")
        assert response.status_code == 200

    async def test_cors_headers_on_errors(self, router):
        response = await router.dispatch("GET", "/nonexistent")
        assert response.headers["Access-Control-Allow-Methods"] == "GET,POST,OPTIONS"

    async def test_unexpected_error_is_500(self, logger):
        router = RequestRouter(ExplodingService(), logger=logger)

        response = await router.dispatch("POST", "/", '{"url": "https://example.com"}')

        assert response.status_code == 500
        assert json.loads(response.body) == {"error": "Internal server error"}
