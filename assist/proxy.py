"""Assist proxy: turns a prompt plus note context into suggested text.

With a provider key configured the prompt is forwarded to the model;
without one a canned template is returned and flagged as a demo reply.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from assist.config import Settings
from assist.errors import AssistError, ParseError, UpstreamError, ValidationError
from assist.metrics import ASSIST_REQUESTS
from assist.templates import Selector, render_fallback
from assist.upstream import AnthropicClient

logger = logging.getLogger(__name__)


@dataclass
class AssistResult:
    """Text to append to the note, and whether it came from the fallback."""

    result: str
    demo: bool = False

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"result": self.result}
        if self.demo:
            body["demo"] = True
        return body


@dataclass
class AssistReply:
    """HTTP-level outcome of an assist request."""

    status_code: int
    body: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status_code == 200


class AssistProxy:
    """Stateless request handler shared by all sessions."""

    def __init__(
        self,
        settings: Settings,
        upstream: Optional[AnthropicClient] = None,
        selector: Optional[Selector] = None,
    ) -> None:
        self.settings = settings
        self.upstream = upstream  # set during startup when a key is configured
        self.selector = selector

    @property
    def mode(self) -> str:
        return "provider" if self.settings.provider_enabled else "demo"

    async def generate(self, prompt: Any, context: str | None = None) -> AssistResult:
        """Produce suggestion text for *prompt*.

        Raises ValidationError for a missing prompt and UpstreamError when
        the provider call fails.
        """
        if not prompt:
            raise ValidationError()

        if not self.settings.provider_enabled:
            text = render_fallback(prompt, context, self.selector)
            return AssistResult(result=text, demo=True)

        if self.upstream is None:
            raise UpstreamError("Provider client is not initialised")
        text = await self.upstream.complete(prompt, context)
        return AssistResult(result=text)

    async def handle(self, payload: Any) -> AssistReply:
        """Validate a decoded request body and convert every failure to a reply."""
        try:
            prompt, context = _unpack(payload)
            outcome = await self.generate(prompt, context)
        except ValidationError as e:
            ASSIST_REQUESTS.labels(mode="none", status="invalid").inc()
            return AssistReply(e.status_code, {"error": e.public_message})
        except AssistError as e:
            logger.error("AI API error: %s", e)
            ASSIST_REQUESTS.labels(mode=self.mode, status="error").inc()
            return AssistReply(e.status_code, {"error": e.public_message})
        except Exception as e:
            logger.exception("AI API error: %s", e)
            ASSIST_REQUESTS.labels(mode=self.mode, status="error").inc()
            return AssistReply(500, {"error": AssistError.public_message})

        ASSIST_REQUESTS.labels(mode=self.mode, status="ok").inc()
        return AssistReply(200, outcome.to_body())


def _unpack(payload: Any) -> tuple[Any, str | None]:
    """Pull ``prompt`` and ``context`` out of a request body."""
    if not isinstance(payload, dict):
        raise ParseError("Request body must be a JSON object")
    prompt = payload.get("prompt")
    context = payload.get("context")
    if prompt and not isinstance(prompt, str):
        raise ParseError("prompt must be a string")
    if context is not None and not isinstance(context, str):
        raise ParseError("context must be a string")
    return prompt, context
