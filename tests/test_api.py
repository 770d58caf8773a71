"""Endpoint tests for assist.main using FastAPI's TestClient."""

from __future__ import annotations

from unittest.mock import patch

import httpx
import pytest
from fastapi.testclient import TestClient

from assist import main
from assist.config import Settings
from assist.proxy import AssistProxy
from assist.templates import TEMPLATES
from assist.upstream import AnthropicClient

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def demo_client():
    """TestClient whose proxy serves fallback templates."""
    settings = Settings(_env_file=None, anthropic_api_key=None)
    with patch.object(main, "proxy", AssistProxy(settings, selector=lambda n: 0)):
        yield TestClient(main.app)


def _provider_proxy(handler) -> AssistProxy:
    settings = Settings(_env_file=None, anthropic_api_key="sk-test")
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return AssistProxy(settings, upstream=AnthropicClient(settings, http))


# ---------------------------------------------------------------------------
# POST /api/ai — demo mode
# ---------------------------------------------------------------------------


class TestDemoMode:
    def test_missing_prompt(self, demo_client: TestClient) -> None:
        resp = demo_client.post("/api/ai", json={})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Prompt is required"}

    def test_empty_prompt(self, demo_client: TestClient) -> None:
        resp = demo_client.post("/api/ai", json={"prompt": "", "context": "x"})
        assert resp.status_code == 400

    def test_fallback_response(self, demo_client: TestClient) -> None:
        resp = demo_client.post("/api/ai", json={"prompt": "brainstorm ideas"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["demo"] is True
        assert data["result"] == TEMPLATES[0]("brainstorm ideas", False)

    def test_random_fallback_is_known_shape(self) -> None:
        """Unseeded selection only ever yields one of the three templates."""
        settings = Settings(_env_file=None, anthropic_api_key=None)
        known = {t("brainstorm ideas", True) for t in TEMPLATES}
        with patch.object(main, "proxy", AssistProxy(settings)):
            client = TestClient(main.app)
            for _ in range(15):
                resp = client.post(
                    "/api/ai", json={"prompt": "brainstorm ideas", "context": "notes"}
                )
                assert resp.status_code == 200
                assert resp.json()["result"] in known

    def test_malformed_json(self, demo_client: TestClient) -> None:
        resp = demo_client.post(
            "/api/ai",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to process AI request"}

    def test_non_object_body(self, demo_client: TestClient) -> None:
        resp = demo_client.post("/api/ai", json=["prompt"])
        assert resp.status_code == 500


# ---------------------------------------------------------------------------
# POST /api/ai — provider mode
# ---------------------------------------------------------------------------


class TestProviderMode:
    def test_success(self) -> None:
        proxy = _provider_proxy(
            lambda request: httpx.Response(200, json={"content": [{"text": "Hello"}]})
        )
        with patch.object(main, "proxy", proxy):
            resp = TestClient(main.app).post("/api/ai", json={"prompt": "hi"})
        assert resp.status_code == 200
        assert resp.json() == {"result": "Hello"}

    def test_upstream_failure(self) -> None:
        proxy = _provider_proxy(
            lambda request: httpx.Response(500, json={"error": {"message": "overloaded"}})
        )
        with patch.object(main, "proxy", proxy):
            resp = TestClient(main.app).post("/api/ai", json={"prompt": "hi"})
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to process AI request"}
        assert "overloaded" not in resp.text


# ---------------------------------------------------------------------------
# Auxiliary endpoints
# ---------------------------------------------------------------------------


class TestHealthAndMetrics:
    def test_health_demo(self, demo_client: TestClient) -> None:
        data = demo_client.get("/health").json()
        assert data == {"status": "healthy", "mode": "demo", "model": None}

    def test_health_provider(self) -> None:
        proxy = _provider_proxy(lambda request: httpx.Response(200))
        with patch.object(main, "proxy", proxy):
            data = TestClient(main.app).get("/health").json()
        assert data["mode"] == "provider"
        assert data["model"] == "claude-3-5-sonnet-20241022"

    def test_metrics_exposes_counters(self, demo_client: TestClient) -> None:
        demo_client.post("/api/ai", json={"prompt": "x"})
        resp = demo_client.get("/metrics")
        assert resp.status_code == 200
        assert "assist_requests_total" in resp.text
        assert "assist_http_requests_total" in resp.text
