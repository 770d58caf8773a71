"""FastAPI application for the note assist service.

Endpoints:
  POST   /api/ai   — Turn a prompt plus note context into suggested text
  GET    /health   — Service status and which response mode is active
  GET    /metrics  — Prometheus metrics
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import asynccontextmanager
from typing import Any

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware

from assist.config import settings
from assist.errors import GENERIC_FAILURE
from assist.metrics import ASSIST_REQUESTS, HTTP_DURATION, HTTP_REQUESTS
from assist.proxy import AssistProxy
from assist.upstream import AnthropicClient

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
)
logger = logging.getLogger(__name__)

# --- Global instances ---
proxy = AssistProxy(settings)

# Endpoints excluded from HTTP metrics to avoid cardinality explosion
_METRICS_EXCLUDE = {"/metrics", "/openapi.json", "/docs", "/redoc"}


class MetricsMiddleware(BaseHTTPMiddleware):
    """Record HTTP request count and duration for Prometheus."""

    async def dispatch(self, request: Request, call_next):
        """Wrap each request with timing and counting."""
        path = request.url.path
        if path in _METRICS_EXCLUDE:
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start

        HTTP_REQUESTS.labels(
            method=request.method,
            endpoint=path,
            status_code=response.status_code,
        ).inc()
        HTTP_DURATION.labels(endpoint=path).observe(elapsed)
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: open the provider client when a key is configured."""
    http_client: httpx.AsyncClient | None = None
    if settings.provider_enabled:
        http_client = httpx.AsyncClient(timeout=settings.upstream_timeout)
        proxy.upstream = AnthropicClient(settings, http_client)
        logger.info("Provider mode — model %s", settings.anthropic_model)
    else:
        logger.info("No ANTHROPIC_API_KEY set — serving demo responses")
    yield
    if http_client is not None:
        await http_client.aclose()
        proxy.upstream = None
    logger.info("Assist service shut down.")


app = FastAPI(title="Note Assist", version="1.0.0", lifespan=lifespan)

app.add_middleware(MetricsMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Endpoints ---


@app.post("/api/ai")
async def ai_assist(request: Request) -> JSONResponse:
    """Return suggested text for a prompt and the current note content."""
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error("AI API error: malformed request body: %s", e)
        ASSIST_REQUESTS.labels(mode=proxy.mode, status="error").inc()
        return JSONResponse({"error": GENERIC_FAILURE}, status_code=500)

    reply = await proxy.handle(payload)
    return JSONResponse(reply.body, status_code=reply.status_code)


@app.get("/health")
async def health() -> dict[str, Any]:
    """Report which response mode the service is running in."""
    active = proxy.settings
    return {
        "status": "healthy",
        "mode": proxy.mode,
        "model": active.anthropic_model if active.provider_enabled else None,
    }


@app.get("/metrics")
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
