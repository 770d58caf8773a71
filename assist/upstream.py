"""HTTP client for the Anthropic Messages API.

Builds the single-turn request used by the assist endpoint and extracts the
first text block from the reply. The ``httpx.AsyncClient`` is passed in so
the transport can be swapped out in tests.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from assist.config import Settings
from assist.errors import UpstreamError
from assist.metrics import UPSTREAM_DURATION

logger = logging.getLogger(__name__)

EMPTY_NOTE_PLACEHOLDER = "(empty note)"

_INSTRUCTION = """You are a helpful AI assistant for a note-taking app. The user is working on their notes and needs help with brainstorming and expanding their ideas.

Current note content:
{context}

User request:
{prompt}

Please provide helpful, concise suggestions that will be added to their notes. Be creative, insightful, and actionable."""


def build_instruction(prompt: str, context: str | None = None) -> str:
    """Compose the user-turn text sent to the model."""
    return _INSTRUCTION.format(
        context=context or EMPTY_NOTE_PLACEHOLDER,
        prompt=prompt,
    )


def build_payload(
    prompt: str, context: str | None, model: str, max_tokens: int
) -> dict[str, Any]:
    """JSON body for a single-turn Messages API call."""
    return {
        "model": model,
        "max_tokens": max_tokens,
        "messages": [
            {"role": "user", "content": build_instruction(prompt, context)},
        ],
    }


def extract_text(data: Any) -> str:
    """Return ``content[0].text`` from a Messages API response."""
    try:
        text = data["content"][0]["text"]
    except (KeyError, IndexError, TypeError) as exc:
        raise UpstreamError(f"Unexpected provider response shape: {exc!r}") from exc
    if not isinstance(text, str):
        raise UpstreamError("Provider returned a non-text content block")
    return text


class AnthropicClient:
    """Sends prompts to the provider on behalf of the assist proxy."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient) -> None:
        if not settings.anthropic_api_key:
            raise ValueError("AnthropicClient requires an API key")
        self.settings = settings
        self._http = http_client

    @property
    def headers(self) -> dict[str, str]:
        return {
            "content-type": "application/json",
            "x-api-key": self.settings.anthropic_api_key or "",
            "anthropic-version": self.settings.anthropic_version,
        }

    async def complete(self, prompt: str, context: str | None = None) -> str:
        """Ask the model for suggestions and return its text verbatim."""
        payload = build_payload(
            prompt,
            context,
            model=self.settings.anthropic_model,
            max_tokens=self.settings.anthropic_max_tokens,
        )
        start = time.perf_counter()
        try:
            resp = await self._http.post(
                self.settings.anthropic_api_url,
                headers=self.headers,
                json=payload,
            )
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Provider request failed: {exc}") from exc
        finally:
            UPSTREAM_DURATION.observe(time.perf_counter() - start)

        if not resp.is_success:
            raise UpstreamError(
                f"Provider returned HTTP {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise UpstreamError("Provider returned invalid JSON") from exc

        text = extract_text(data)
        logger.info(
            "Provider reply model=%s chars=%d latency=%.0fms",
            self.settings.anthropic_model,
            len(text),
            (time.perf_counter() - start) * 1000,
        )
        return text
