"""Thin HTTP client for the assist backend.

All functions return parsed JSON (dicts) or raise on failure.
Uses requests (synchronous) since Streamlit reruns are synchronous.
"""

from __future__ import annotations

import os
from typing import Any

import requests

BASE_URL = os.getenv("ASSIST_API_URL", "http://localhost:8000")


def assist(prompt: str, context: str | None = None) -> dict[str, Any]:
    """POST /api/ai — ask for text to append to the current note.

    No timeout is set: the request runs until the server answers or the
    connection drops.
    """
    resp = requests.post(
        f"{BASE_URL}/api/ai",
        json={"prompt": prompt, "context": context},
        timeout=None,
    )
    resp.raise_for_status()
    return resp.json()


def get_health() -> dict[str, Any]:
    """GET /health — service status and response mode."""
    resp = requests.get(f"{BASE_URL}/health", timeout=10)
    resp.raise_for_status()
    return resp.json()
