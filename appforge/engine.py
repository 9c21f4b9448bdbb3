"""
AppGenerator — prompt → completion → parse → synchronize
=========================================================
The only place that awaits anything. The completion call is the sole
suspension point; once the full text is back, applying it is a synchronous
parse + synchronize on the session's tree.

A failed call leaves the tree exactly as it was and turns into a notice for
the user. Nothing is raised to the caller.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from .api_clients import CompletionClient, CompletionError
from .config import Settings
from .hooks import EventType
from .models import Model, SyncReport, resolve_model
from .session import Session

logger = logging.getLogger("appforge.engine")

MISSING_KEY_NOTICE = "Please enter your OpenAI API key in the settings."
COMPLETION_FAILED_NOTICE = "Error calling OpenAI API. Please check your API key and try again."


@dataclass
class GenerationOutcome:
    """Result of one prompt submission."""
    ok: bool
    report: Optional[SyncReport] = None
    notice: str = ""
    response: str = ""
    changed: list[str] = field(default_factory=list)


class AppGenerator:
    """
    Usage:
        generator = AppGenerator(load_settings())
        outcome = asyncio.run(generator.generate("a pomodoro timer"))
        generator.session.tree.names()
    """

    def __init__(self, settings: Settings,
                 session: Optional[Session] = None,
                 client: Optional[CompletionClient] = None) -> None:
        self.settings = settings
        self.session = session or Session()
        self.client = client or CompletionClient(settings)

    async def generate(self, prompt: str, model: str | Model | None = None) -> GenerationOutcome:
        if not self.settings.has_credentials:
            self.session.notify(MISSING_KEY_NOTICE)
            return GenerationOutcome(ok=False, notice=MISSING_KEY_NOTICE)

        model = resolve_model(model or self.settings.model)
        logger.info("Requesting completion from %s (%d char prompt)", model.value, len(prompt))
        try:
            text = await self.client.complete(prompt, model=model)
        except CompletionError as exc:
            logger.error("Error calling OpenAI API: %s", exc)
            self.session.hooks.fire(EventType.COMPLETION_FAILED, prompt=prompt, error=exc)
            self.session.notify(COMPLETION_FAILED_NOTICE)
            return GenerationOutcome(ok=False, notice=COMPLETION_FAILED_NOTICE)

        report = self.session.apply_response(text)
        return GenerationOutcome(
            ok=True,
            report=report,
            response=self.session.state.last_response,
            changed=list(report.changed),
        )
