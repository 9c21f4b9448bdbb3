"""
Synchronizer — merges parser output into a ProjectTree.

Create-or-overwrite per extraction, applied in order, so the last block for
a name wins. Nothing is ever deleted. Directory placeholders are never
touched: an extraction that names one is skipped, and parser output always
lands as a ``file`` entry.
"""
from __future__ import annotations

import logging
from typing import Iterable

from .models import ExtractionResult, FileKind, SyncReport
from .parser import parse
from .project_tree import ProjectTree

logger = logging.getLogger("appforge.synchronizer")


def synchronize(tree: ProjectTree, extractions: Iterable[ExtractionResult]) -> SyncReport:
    """
    Apply ``extractions`` to ``tree`` in place and report what changed.

    Total for any sequence of (name, content) pairs, including the empty one.
    """
    report = SyncReport(tree=tree)
    seen: set[str] = set()

    for name, content in extractions:
        if not name:
            report.skipped.append(name)
            continue

        existing = tree.get(name)
        if existing is not None and existing.kind == FileKind.DIRECTORY:
            logger.warning("Extraction %r targets a directory entry; skipped", name)
            report.skipped.append(name)
            continue

        created = tree.upsert(name, content)
        if name in seen:
            continue
        seen.add(name)
        report.changed.append(name)
        (report.created if created else report.updated).append(name)

    if report.changed:
        logger.info(
            "Synchronized %d file(s): %d created, %d updated",
            len(report.changed), len(report.created), len(report.updated),
        )
    return report


def apply_response(tree: ProjectTree, response_text: str) -> SyncReport:
    """parse() + synchronize() for one complete response."""
    return synchronize(tree, parse(response_text))
