"""
API Client — completion text for a prompt
=========================================
Wraps the OpenAI chat completions API behind one async call:

    text = await client.complete("a todo app with dark mode")

The system prompt asks the model to label every fenced block with its file
name, which is the shape appforge.parser understands. Timeouts and a short
rate-limit backoff live here; the parser and tree never see a network error.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Optional

from .config import Settings
from .models import Model, resolve_model

logger = logging.getLogger("appforge.api")

SYSTEM_PROMPT = (
    "You are an AI assistant that generates code for web applications. "
    "Provide code snippets for each file, wrapped in triple backticks with "
    "the filename as the language specifier."
)


class CompletionError(RuntimeError):
    """The completion service could not produce a response."""

    def __init__(self, message: str, model: Optional[Model] = None):
        super().__init__(message)
        self.model = model


class CompletionClient:
    """
    Async OpenAI client with:
    - Timeout enforcement
    - Retry with exponential backoff on rate limits

    ``client`` may be any object exposing ``chat.completions.create``; by
    default an AsyncOpenAI instance is built from settings on first use.
    """

    def __init__(self, settings: Settings, client: Optional[object] = None):
        self.settings = settings
        self._client = client

    def _get_client(self):
        if self._client is None:
            if not self.settings.has_credentials:
                raise CompletionError("No OpenAI API key configured")
            from openai import AsyncOpenAI
            kwargs = {"api_key": self.settings.api_key}
            if self.settings.base_url:
                kwargs["base_url"] = self.settings.base_url
            self._client = AsyncOpenAI(**kwargs)
            logger.info("OpenAI client initialized")
        return self._client

    async def complete(self, prompt: str, model: str | Model | None = None) -> str:
        """Return the model's text for ``prompt`` ("" when the body is empty)."""
        model = resolve_model(model or self.settings.model)
        client = self._get_client()
        retries = max(0, self.settings.retries)
        last_error: Optional[BaseException] = None

        for attempt in range(retries + 1):
            try:
                t0 = time.monotonic()
                text = await asyncio.wait_for(
                    self._call_openai(client, model, prompt),
                    timeout=self.settings.timeout,
                )
                logger.info(
                    "%s answered in %.0f ms (%d chars)",
                    model.value, (time.monotonic() - t0) * 1000, len(text),
                )
                return text
            except asyncio.TimeoutError:
                logger.warning("Timeout calling %s (attempt %d)", model.value, attempt + 1)
                last_error = TimeoutError(f"{model.value} timed out after {self.settings.timeout}s")
            except Exception as e:
                logger.warning("Error calling %s: %s (attempt %d)", model.value, e, attempt + 1)
                last_error = e
                if ("rate_limit" in str(e).lower() or "429" in str(e)) and attempt < retries:
                    await asyncio.sleep(2 ** attempt)
                    continue
                break

        raise CompletionError(f"Failed to call {model.value}: {last_error}", model) from last_error

    async def _call_openai(self, client, model: Model, prompt: str) -> str:
        response = await client.chat.completions.create(
            model=model.value,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
