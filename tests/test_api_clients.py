"""
Tests for appforge/api_clients.py
=================================
The OpenAI SDK client is replaced by mocks; no network calls.
"""
from __future__ import annotations

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from appforge.api_clients import SYSTEM_PROMPT, CompletionClient, CompletionError
from appforge.config import Settings
from appforge.models import Model


# ── Helpers ───────────────────────────────────────────────────────────────────

def _response(text):
    message = SimpleNamespace(content=text)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _sdk(create) -> MagicMock:
    sdk = MagicMock()
    sdk.chat.completions.create = create
    return sdk


# ── Happy path ────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_complete_returns_message_text():
    create = AsyncMock(return_value=_response("```a.ts\nA\n```"))
    client = CompletionClient(Settings(api_key="sk"), client=_sdk(create))
    assert await client.complete("make a") == "```a.ts\nA\n```"


@pytest.mark.asyncio
async def test_request_carries_system_prompt_and_model():
    create = AsyncMock(return_value=_response("ok"))
    client = CompletionClient(Settings(api_key="sk", model=Model.GPT_4), client=_sdk(create))
    await client.complete("hello")
    kwargs = create.await_args.kwargs
    assert kwargs["model"] == "gpt-4"
    assert kwargs["messages"] == [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": "hello"},
    ]


@pytest.mark.asyncio
async def test_none_content_becomes_empty_string():
    create = AsyncMock(return_value=_response(None))
    client = CompletionClient(Settings(api_key="sk"), client=_sdk(create))
    assert await client.complete("x") == ""


@pytest.mark.asyncio
async def test_no_choices_becomes_empty_string():
    create = AsyncMock(return_value=SimpleNamespace(choices=[]))
    client = CompletionClient(Settings(api_key="sk"), client=_sdk(create))
    assert await client.complete("x") == ""


# ── Failures ──────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_error_is_wrapped_in_completion_error():
    create = AsyncMock(side_effect=RuntimeError("invalid api key"))
    client = CompletionClient(Settings(api_key="sk", retries=2), client=_sdk(create))
    with pytest.raises(CompletionError):
        await client.complete("x")
    # non rate-limit errors are not retried
    assert create.await_count == 1


@pytest.mark.asyncio
async def test_rate_limit_is_retried_then_succeeds():
    create = AsyncMock(side_effect=[RuntimeError("Error code: 429"), _response("ok")])
    client = CompletionClient(Settings(api_key="sk", retries=2), client=_sdk(create))
    with patch("appforge.api_clients.asyncio.sleep", new=AsyncMock()) as sleep:
        assert await client.complete("x") == "ok"
    sleep.assert_awaited_once_with(1)
    assert create.await_count == 2


@pytest.mark.asyncio
async def test_timeout_raises_completion_error():
    async def slow(**_):
        await asyncio.sleep(10)

    client = CompletionClient(Settings(api_key="sk", timeout=0.01, retries=0), client=_sdk(slow))
    with pytest.raises(CompletionError, match="timed out"):
        await client.complete("x")


@pytest.mark.asyncio
async def test_missing_key_raises_before_any_call():
    client = CompletionClient(Settings(api_key=""))
    with pytest.raises(CompletionError):
        await client.complete("x")


def test_sdk_client_built_from_settings():
    with patch("openai.AsyncOpenAI") as factory:
        client = CompletionClient(Settings(api_key="sk-1", base_url="http://localhost:8080/v1"))
        client._get_client()
    factory.assert_called_once_with(api_key="sk-1", base_url="http://localhost:8080/v1")
