"""
HookRegistry — lightweight event hooks for the editing session.
================================================================
Lets the surrounding UI (file list, terminal panel, notices) observe session
changes without the core knowing about any widget. Callbacks are
synchronous and run in registration order.

Events fired by Session / AppGenerator (see EventType):
  FILES_SYNCED       — after a model response was applied to the tree
  FILE_EDITED        — after an editor replacement was applied
  FILE_SELECTED      — when the selected file changes
  NOTICE             — a human-readable message for the user
  COMPLETION_FAILED  — the completion call failed; tree untouched
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

logger = logging.getLogger("appforge.hooks")


class EventType(str, Enum):
    """
    Callback signatures (all kwargs):
      FILES_SYNCED       — report: SyncReport
      FILE_EDITED        — name: str, content: str
      FILE_SELECTED      — name: str | None
      NOTICE             — message: str
      COMPLETION_FAILED  — prompt: str, error: Exception
    """
    FILES_SYNCED      = "files_synced"
    FILE_EDITED       = "file_edited"
    FILE_SELECTED     = "file_selected"
    NOTICE            = "notice"
    COMPLETION_FAILED = "completion_failed"


class HookRegistry:
    """
    Session listeners, one list per EventType.

    Usage:
        hooks = HookRegistry()
        hooks.add(EventType.FILES_SYNCED, lambda report, **_: refresh(report.changed))
        session = Session(hooks=hooks)

    A listener that raises is logged and skipped, so a broken panel cannot
    stop the tree from being updated or later listeners from running.
    """

    def __init__(self) -> None:
        self._listeners: dict[EventType, list[Callable]] = {event: [] for event in EventType}

    def add(self, event: EventType, callback: Callable) -> None:
        self._listeners[EventType(event)].append(callback)

    def fire(self, event: EventType, **kwargs) -> None:
        for cb in self._listeners[event]:
            try:
                cb(**kwargs)
            except Exception as exc:  # noqa: BLE001
                logger.warning("Listener %r failed on %s: %s", cb, event.value, exc)
