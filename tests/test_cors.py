from __future__ import annotations

from fastapi.testclient import TestClient

from server.api import create_app
from server.config import Settings
from server.stats import RequestStats


def _preflight(client: TestClient, origin: str, method: str = "GET"):
    return client.options(
        "/hello",
        headers={
            "Origin": origin,
            "Access-Control-Request-Method": method,
            "Access-Control-Request-Headers": "Content-Type",
        },
    )


def test_preflight_from_known_origin_succeeds(api_client: TestClient) -> None:
    response = _preflight(api_client, "http://localhost:5173")
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
    assert response.headers["access-control-allow-credentials"] == "true"
    allowed = response.headers["access-control-allow-methods"]
    for method in ("GET", "POST", "PUT", "DELETE", "OPTIONS"):
        assert method in allowed


def test_preflight_from_cloudfront_origin_succeeds(api_client: TestClient) -> None:
    response = _preflight(api_client, "https://d3jx35gx2lx89p.cloudfront.net")
    assert response.status_code == 200


def test_preflight_from_unknown_origin_fails(api_client: TestClient) -> None:
    response = _preflight(api_client, "https://evil.example.com")
    assert response.status_code == 400
    assert "access-control-allow-origin" not in response.headers


def test_preflight_with_disallowed_method_fails(api_client: TestClient) -> None:
    response = _preflight(api_client, "http://localhost:5173", method="PATCH")
    assert response.status_code == 400


def test_simple_request_from_known_origin_is_tagged(api_client: TestClient) -> None:
    response = api_client.get("/hello", headers={"Origin": "http://localhost:3000"})
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
    assert response.headers["access-control-allow-credentials"] == "true"


def test_simple_request_from_unknown_origin_is_not_tagged(api_client: TestClient) -> None:
    response = api_client.get("/hello", headers={"Origin": "https://evil.example.com"})
    assert "access-control-allow-origin" not in response.headers


def test_preflights_are_not_counted() -> None:
    stats = RequestStats()
    client = TestClient(create_app(settings=Settings(), stats=stats))
    _preflight(client, "http://localhost:5173")
    _preflight(client, "https://evil.example.com")
    assert stats.requests == 0


def test_origin_allow_list_comes_from_settings() -> None:
    settings = Settings(cors_origins=["https://dashboard.example.org"])
    client = TestClient(create_app(settings=settings))
    assert _preflight(client, "https://dashboard.example.org").status_code == 200
    assert _preflight(client, "http://localhost:5173").status_code == 400
