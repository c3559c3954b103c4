"""Health endpoint and request-id middleware."""

from httpx import AsyncClient

from marketplace.core.config import get_settings


async def test_health_returns_success_envelope(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["statusCode"] == 200
    assert body["message"] == "Service is healthy"
    assert body["data"] == {"status": "ok", "version": get_settings().app_version}


async def test_request_id_is_echoed(client: AsyncClient) -> None:
    header = get_settings().request_id_header
    response = await client.get("/api/v1/health", headers={header: "req-123"})
    assert response.headers[header] == "req-123"


async def test_unknown_route_uses_error_envelope(client: AsyncClient) -> None:
    response = await client.get("/api/v1/nope")
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["statusCode"] == 404
    assert body["error"]["code"] == "HTTP_ERROR"
