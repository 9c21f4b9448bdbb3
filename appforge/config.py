"""
Settings — credentials and completion defaults from the environment.

``.env`` values are loaded first (override=True: .env wins over empty
system env vars); CLI flags override what is loaded here.

    OPENAI_API_KEY     credential for the completion service
    OPENAI_BASE_URL    optional OpenAI-compatible endpoint
    APPFORGE_MODEL     default model (gpt-3.5-turbo)
    APPFORGE_TIMEOUT   seconds per completion call (60)
    APPFORGE_RETRIES   extra attempts on rate limits (2)
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .models import DEFAULT_MODEL, Model, resolve_model

logger = logging.getLogger("appforge.config")


@dataclass(frozen=True)
class Settings:
    api_key: str = ""
    model: Model = DEFAULT_MODEL
    base_url: Optional[str] = None
    timeout: float = 60.0
    retries: int = 2

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key.strip())

    def with_overrides(self, **overrides) -> "Settings":
        """Copy with every non-empty override applied."""
        changes = {k: v for k, v in overrides.items() if v not in (None, "")}
        if "model" in changes:
            changes["model"] = resolve_model(changes["model"])
        return replace(self, **changes)


def _env_number(name: str, default, cast):
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r; using %r", name, raw, default)
        return default


def load_settings(dotenv: bool = True) -> Settings:
    if dotenv:
        load_dotenv(find_dotenv(usecwd=True), override=True)
    return Settings(
        api_key=os.environ.get("OPENAI_API_KEY", ""),
        model=resolve_model(os.environ.get("APPFORGE_MODEL")),
        base_url=os.environ.get("OPENAI_BASE_URL") or None,
        timeout=_env_number("APPFORGE_TIMEOUT", 60.0, float),
        retries=_env_number("APPFORGE_RETRIES", 2, int),
    )
