"""Unit tests for assist.proxy — request handling in both response modes."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from assist.config import Settings
from assist.errors import UpstreamError, ValidationError
from assist.proxy import AssistProxy, AssistResult
from assist.templates import TEMPLATES

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _demo_proxy(index: int = 0) -> AssistProxy:
    settings = Settings(_env_file=None, anthropic_api_key=None)
    return AssistProxy(settings, selector=lambda n: index)


def _provider_proxy(upstream=None) -> tuple[AssistProxy, AsyncMock]:
    settings = Settings(_env_file=None, anthropic_api_key="sk-test")
    upstream = upstream or AsyncMock()
    return AssistProxy(settings, upstream=upstream), upstream


# ---------------------------------------------------------------------------
# generate()
# ---------------------------------------------------------------------------


class TestGenerate:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("prompt", [None, ""])
    async def test_missing_prompt(self, prompt):
        with pytest.raises(ValidationError):
            await _demo_proxy().generate(prompt, "ctx")

    @pytest.mark.asyncio
    async def test_demo_mode_uses_template(self):
        result = await _demo_proxy(1).generate("improve", "some text")
        assert result == AssistResult(result=TEMPLATES[1]("improve", True), demo=True)

    @pytest.mark.asyncio
    async def test_demo_mode_makes_no_upstream_call(self):
        proxy = _demo_proxy()
        proxy.upstream = AsyncMock()
        await proxy.generate("hi")
        proxy.upstream.complete.assert_not_called()

    @pytest.mark.asyncio
    async def test_provider_mode(self):
        proxy, upstream = _provider_proxy()
        upstream.complete.return_value = "Generated"
        result = await proxy.generate("expand", "note body")
        assert result == AssistResult(result="Generated", demo=False)
        upstream.complete.assert_awaited_once_with("expand", "note body")

    @pytest.mark.asyncio
    async def test_provider_mode_without_client(self):
        settings = Settings(_env_file=None, anthropic_api_key="sk-test")
        with pytest.raises(UpstreamError):
            await AssistProxy(settings).generate("expand")

    def test_mode(self):
        assert _demo_proxy().mode == "demo"
        assert _provider_proxy()[0].mode == "provider"

    def test_blank_key_means_demo(self):
        settings = Settings(_env_file=None, anthropic_api_key="   ")
        assert settings.provider_enabled is False


# ---------------------------------------------------------------------------
# handle()
# ---------------------------------------------------------------------------


class TestHandle:
    @pytest.mark.asyncio
    async def test_missing_prompt_is_400(self):
        reply = await _demo_proxy().handle({})
        assert reply.status_code == 400
        assert reply.body == {"error": "Prompt is required"}

    @pytest.mark.asyncio
    async def test_demo_reply_carries_flag(self):
        reply = await _demo_proxy(2).handle({"prompt": "brainstorm ideas"})
        assert reply.ok
        assert reply.body["demo"] is True
        assert reply.body["result"] == TEMPLATES[2]("brainstorm ideas", False)

    @pytest.mark.asyncio
    async def test_provider_reply_has_no_demo_flag(self):
        proxy, upstream = _provider_proxy()
        upstream.complete.return_value = "Hello"
        reply = await proxy.handle({"prompt": "hi", "context": ""})
        assert reply.status_code == 200
        assert reply.body == {"result": "Hello"}

    @pytest.mark.asyncio
    async def test_upstream_error_is_generic_500(self):
        proxy, upstream = _provider_proxy()
        upstream.complete.side_effect = UpstreamError("HTTP 529 secret detail", 529)
        reply = await proxy.handle({"prompt": "hi"})
        assert reply.status_code == 500
        assert reply.body == {"error": "Failed to process AI request"}

    @pytest.mark.asyncio
    async def test_unexpected_error_is_generic_500(self):
        proxy, upstream = _provider_proxy()
        upstream.complete.side_effect = RuntimeError("boom")
        reply = await proxy.handle({"prompt": "hi"})
        assert reply.status_code == 500
        assert reply.body == {"error": "Failed to process AI request"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [[], "prompt", 42, {"prompt": 5}, {"prompt": "ok", "context": ["x"]}],
    )
    async def test_malformed_body_is_500(self, payload):
        reply = await _demo_proxy().handle(payload)
        assert reply.status_code == 500
        assert reply.body == {"error": "Failed to process AI request"}

    @pytest.mark.asyncio
    async def test_null_context_accepted(self):
        reply = await _demo_proxy(1).handle({"prompt": "x", "context": None})
        assert reply.ok
        assert "Building on" not in reply.body["result"]
