"""Tests for the HTTP surface."""

import pytest


@pytest.mark.asyncio
class TestLinkEndpoints:
    """Create / create custom / redirect through FastAPI."""

    async def test_shorten_and_redirect(self, client, sample_urls):
        response = await client.post("/", json={"url": sample_urls[0]})

        assert response.status_code == 200
        short_url = response.json()["short_url"]
        assert short_url.startswith("https://host/")

        code = short_url.rsplit("/", 1)[-1]
        redirect = await client.get(f"/{code}", follow_redirects=False)
        assert redirect.status_code == 301
        assert redirect.headers["location"] == sample_urls[0]

    async def test_create_custom(self, client, sample_urls):
        response = await client.post(
            "/createcustom",
            json={"url": sample_urls[1], "code": "myrepo01"},
        )

        assert response.status_code == 200
        assert response.json() == {"short_url": "https://host/myrepo01"}

        redirect = await client.get("/myrepo01", follow_redirects=False)
        assert redirect.headers["location"] == sample_urls[1]

    async def test_create_custom_too_short(self, client):
        response = await client.post(
            "/createcustom",
            json={"url": "https://example.com", "code": "short"},
        )
        assert response.status_code == 400

    async def test_duplicate_custom_code(self, client, sample_urls):
        await client.post("/createcustom", json={"url": sample_urls[0], "code": "duplicate"})

        response = await client.post("/createcustom", json={"url": sample_urls[1], "code": "duplicate"})
        assert response.status_code == 409

        redirect = await client.get("/duplicate", follow_redirects=False)
        assert redirect.headers["location"] == sample_urls[0]

    async def test_redirect_not_found(self, client):
        response = await client.get("/nonexistent", follow_redirects=False)

        assert response.status_code == 404
        assert "error" in response.json()

    async def test_root_get_is_validation_error(self, client):
        response = await client.get("/", follow_redirects=False)
        assert response.status_code == 400

    async def test_options_request(self, client):
        response = await client.options("/abc123")

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    async def test_cors_preflight(self, client):
        response = await client.options(
            "/",
            headers={
                "Origin": "https://app.example",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    async def test_redirect_non_ascii_url(self, client, service):
        long_url = "https://ja.wikipedia.org/wiki/東京"
        response = await client.post("/", json={"url": long_url})
        assert response.status_code == 200

        code = response.json()["short_url"].rsplit("/", 1)[-1]
        redirect = await client.get(f"/{code}", follow_redirects=False)

        assert redirect.status_code == 301
        assert redirect.headers["location"] == "https://ja.wikipedia.org/wiki/%E6%9D%B1%E4%BA%AC"
        assert await service.resolve_short_link(code) == long_url

    @pytest.mark.parametrize("request_headers", [
        {"Access-Control-Request-Method": "DELETE"},
        {"Access-Control-Request-Method": "POST", "Access-Control-Request-Headers": "Authorization"},
    ])
    async def test_preflight_any_method_or_header(self, client, request_headers):
        response = await client.options(
            "/abc123",
            headers={"Origin": "https://app.example", **request_headers},
        )

        assert response.status_code == 200
        assert response.content == b""
        assert response.headers["access-control-allow-origin"] == "*"

    async def test_method_not_allowed(self, client):
        response = await client.delete("/abc123")
        assert response.status_code == 405

    async def test_invalid_json(self, client):
        response = await client.post(
            "/",
            content="not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400


@pytest.mark.asyncio
class TestAPIEndpoints:
    """Typed JSON API under /api."""

    async def test_shorten_url(self, client, sample_urls):
        response = await client.post("/api/shorten", json={"url": sample_urls[0]})

        assert response.status_code == 200
        assert response.json()["short_url"].startswith("https://host/")

    async def test_shorten_with_custom_code(self, client, sample_urls):
        response = await client.post("/api/shorten", json={"url": sample_urls[0], "code": "apicode01"})

        assert response.status_code == 200
        assert response.json()["short_url"] == "https://host/apicode01"

    async def test_shorten_duplicate_custom_code(self, client, sample_urls):
        await client.post("/api/shorten", json={"url": sample_urls[0], "code": "apicode02"})

        response = await client.post("/api/shorten", json={"url": sample_urls[1], "code": "apicode02"})
        assert response.status_code == 409
        assert "already exists" in response.json()["error"]

    async def test_shorten_empty_url(self, client):
        response = await client.post("/api/shorten", json={"url": ""})
        assert response.status_code == 400

    async def test_shorten_missing_url(self, client):
        response = await client.post("/api/shorten", json={})
        assert response.status_code == 400

    async def test_health_check(self, client):
        response = await client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["store"] == "healthy"
        assert data["cache"] == "healthy"
