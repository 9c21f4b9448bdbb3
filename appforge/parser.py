"""
Response Parser — model output text → ordered (name, content) extractions
==========================================================================
The model is asked to wrap every file in a fenced block whose label is the
file name:

    Here you go:
    ```src/App.tsx
    export default function App() { ... }
    ```

The scan is a single forward pass over the text. Each opening fence is
paired with the next closing fence, so blocks never overlap and results come
out in order of appearance. Anything that is not a complete labelled block
is skipped without raising: model output is untrusted free text.

Labels are not validated or split on path separators. ``src/App.tsx`` is
an opaque key for the synchronizer.
"""
from __future__ import annotations

import logging
from typing import Iterator

from .models import ExtractionResult

logger = logging.getLogger("appforge.parser")

FENCE = "```"


def iter_fenced_blocks(text: str) -> Iterator[ExtractionResult]:
    """
    Yield one ExtractionResult per labelled, terminated fenced block.

    Skipped without a result:
      - a fence with no newline after it (nothing can follow the label)
      - a fence whose label line is blank
      - a fence with no closing marker (unterminated; ends the scan)
    """
    if not text:
        return

    pos = 0
    while True:
        open_at = text.find(FENCE, pos)
        if open_at < 0:
            return

        label_start = open_at + len(FENCE)
        newline_at = text.find("\n", label_start)
        if newline_at < 0:
            logger.debug("Fence at %d has no body; stopping", open_at)
            return

        label_line = text[label_start:newline_at]
        inline_close = label_line.find(FENCE)
        if inline_close >= 0:
            # ```like this``` on one line: an inline span, not a file block
            pos = label_start + inline_close + len(FENCE)
            continue

        body_start = newline_at + 1
        close_at = text.find(FENCE, body_start)
        if close_at < 0:
            logger.debug("Unterminated fence at %d; stopping", open_at)
            return

        pos = close_at + len(FENCE)
        name = label_line.strip()
        if not name:
            logger.debug("Unlabelled fence at %d skipped", open_at)
            continue

        yield ExtractionResult(name, text[body_start:close_at].strip())


class ParsedResponse:
    """
    Lazy, restartable view over the extractions in one response.

    Every iteration rescans the text from the start, so the same object can
    be iterated any number of times with identical results.
    """
    __slots__ = ("text",)

    def __init__(self, text: str) -> None:
        self.text = text or ""

    def __iter__(self) -> Iterator[ExtractionResult]:
        return iter_fenced_blocks(self.text)

    def __bool__(self) -> bool:
        return next(iter(self), None) is not None

    def names(self) -> list[str]:
        return [result.name for result in self]

    def __repr__(self) -> str:
        return f"ParsedResponse({len(self.text)} chars)"


def parse(text: str) -> ParsedResponse:
    """Parse raw model output. Never raises; empty input yields nothing."""
    return ParsedResponse(text)
