"""
Output Directory Writer
=======================
Exports a ProjectTree to a directory so the generated app can be opened
with ordinary tools.

    <output_dir>/
    ├── index.html
    └── src/
        ├── main.tsx
        └── App.tsx

Entry names come from untrusted model output, so a name that is absolute
or climbs out with ``..`` is skipped rather than written. Nothing is built
or executed.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from .models import FileKind
from .project_tree import ProjectTree

logger = logging.getLogger("appforge.output_writer")

# "C:" or "C:/..." only; "a:b.txt" is an ordinary POSIX name
_WINDOWS_DRIVE = re.compile(r"^[A-Za-z]:(/|$)")


@dataclass
class WriteReport:
    root: Path
    files_written: list[str] = field(default_factory=list)
    dirs_created: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def safe_relative_path(name: str) -> str | None:
    """
    Normalise an entry name to a relative POSIX path.
    Returns None for names that are empty, absolute or traverse upwards.
    """
    cleaned = name.strip().replace("\\", "/")
    if not cleaned or cleaned.startswith("/") or _WINDOWS_DRIVE.match(cleaned):
        return None
    parts = [p for p in PurePosixPath(cleaned).parts if p not in ("", ".")]
    if not parts or ".." in parts:
        return None
    return "/".join(parts)


def write_project_dir(tree: ProjectTree, output_dir: str | Path) -> WriteReport:
    """Write every entry of ``tree`` under ``output_dir``, creating it if needed."""
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    report = WriteReport(root=out.resolve())

    for entry in tree:
        rel_path = safe_relative_path(entry.name)
        if rel_path is None:
            logger.warning("Refusing to write unsafe path %r", entry.name)
            report.skipped.append(entry.name)
            continue

        dest = out / rel_path
        try:
            if entry.kind == FileKind.DIRECTORY:
                dest.mkdir(parents=True, exist_ok=True)
                report.dirs_created.append(rel_path)
                continue
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_text(entry.content, encoding="utf-8")
        except OSError as exc:
            # e.g. "src" written as a file and later used as a directory
            logger.warning("Could not write %s: %s", rel_path, exc)
            report.skipped.append(entry.name)
            continue
        report.files_written.append(rel_path)
        logger.debug("Wrote %s (%d chars)", rel_path, len(entry.content))

    logger.info("Wrote %d file(s) to %s", len(report.files_written), report.root)
    return report
