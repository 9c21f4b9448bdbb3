"""
Session — the explicit state of one editing view.
=================================================
Everything the presentation layer used to keep as ambient UI state lives
here: the project tree, the selected file, the last model response and the
terminal log. One Session is created per editing view and passed to whoever
needs it; there is no module-level store.

Mutations happen one event at a time (a response arrives, the user edits),
each running to completion before the next, so no locking is involved.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from .gateway import EditGateway
from .hooks import EventType, HookRegistry
from .models import SyncReport
from .parser import parse
from .project_tree import ProjectTree
from .scaffold import new_project_tree
from .synchronizer import synchronize

logger = logging.getLogger("appforge.session")

NO_RESPONSE = "No response from AI."
RESPONSE_HEADER = "$ AI Response:"
DEPLOY_NOTICE = "Deploying locally...\nApplication is now running on http://localhost:3000"


@dataclass
class SessionState:
    tree: ProjectTree = field(default_factory=new_project_tree)
    selected: Optional[str] = None
    last_response: str = ""
    terminal: list[str] = field(default_factory=list)


class Session:
    """
    Usage:
        session = Session()
        report = session.apply_response(model_text)
        session.select("src/App.tsx")
        session.edit_selected(new_source)
    """

    def __init__(self, state: Optional[SessionState] = None,
                 hooks: Optional[HookRegistry] = None) -> None:
        self.state = state or SessionState()
        self.hooks = hooks or HookRegistry()

    @property
    def tree(self) -> ProjectTree:
        return self.state.tree

    # ── Model responses ──────────────────────────────────────────────────────

    def apply_response(self, response_text: str) -> SyncReport:
        """Record the response in the terminal log and merge its files."""
        text = response_text or ""
        self.state.last_response = text or NO_RESPONSE
        self.state.terminal = [RESPONSE_HEADER, self.state.last_response]

        report = synchronize(self.state.tree, parse(text))
        if not report.has_changes:
            logger.info("Response contained no file blocks")
        self.hooks.fire(EventType.FILES_SYNCED, report=report)
        return report

    # ── Editing ──────────────────────────────────────────────────────────────

    def select(self, name: Optional[str]) -> bool:
        """Select an entry for display; unknown names clear the selection."""
        self.state.selected = name if name in self.state.tree else None
        self.hooks.fire(EventType.FILE_SELECTED, name=self.state.selected)
        return self.state.selected is not None

    def selected_content(self) -> str:
        if self.state.selected is None:
            return ""
        return self.state.tree.content_of(self.state.selected) or ""

    def edit(self, name: str, new_content: str) -> bool:
        applied = EditGateway(self.state.tree).replace(name, new_content)
        if applied:
            self.hooks.fire(EventType.FILE_EDITED, name=name, content=new_content)
        return applied

    def edit_selected(self, new_content: str) -> bool:
        if self.state.selected is None:
            return False
        return self.edit(self.state.selected, new_content)

    # ── Terminal panel ───────────────────────────────────────────────────────

    def notify(self, message: str) -> None:
        self.state.terminal.append(message)
        self.hooks.fire(EventType.NOTICE, message=message)

    def deploy(self) -> str:
        """
        Simulated local deploy: only appends a notice to the response log.
        Nothing is built, executed or served.
        """
        self.state.last_response = f"{self.state.last_response}\n\n{DEPLOY_NOTICE}"
        self.notify(DEPLOY_NOTICE)
        return self.state.last_response
