"""
ProjectTree — the in-memory, order-preserving set of project files.
====================================================================
A flat collection keyed by entry name. Insertion order is the display
order; re-inserting an existing name updates that entry where it stands.

The tree owns every entry. Readers receive copies, so nothing outside the
tree can mutate stored content except through upsert()/replace_content().
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Iterator, Optional

from .models import FileEntry, FileKind

logger = logging.getLogger("appforge.tree")


class ProjectTree:
    """
    Usage:
        tree = ProjectTree.from_entries([("index.html", "file", "<html/>")])
        tree.upsert("src/App.tsx", "export default App")
        tree.replace_content("index.html", "<html></html>")
    """

    def __init__(self, entries: Optional[Iterable[FileEntry]] = None) -> None:
        # dict keeps insertion order, which is the tree's display order
        self._entries: dict[str, FileEntry] = {}
        for entry in entries or ():
            self._insert(replace(entry))

    @classmethod
    def from_entries(cls, triples: Iterable[tuple[str, str, str]]) -> "ProjectTree":
        """Build a tree from ordered (name, kind, content) triples."""
        return cls(FileEntry(name, FileKind(kind), content) for name, kind, content in triples)

    # ── Reads ────────────────────────────────────────────────────────────────

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[FileEntry]:
        for entry in list(self._entries.values()):
            yield replace(entry)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProjectTree):
            return NotImplemented
        return self.snapshot() == other.snapshot()

    def __repr__(self) -> str:
        return f"ProjectTree({self.names()!r})"

    def get(self, name: str) -> Optional[FileEntry]:
        """Return a copy of the entry for ``name``, or None."""
        entry = self._entries.get(name)
        return replace(entry) if entry is not None else None

    def content_of(self, name: str) -> Optional[str]:
        entry = self._entries.get(name)
        return entry.content if entry is not None else None

    def names(self) -> list[str]:
        return list(self._entries)

    def snapshot(self) -> tuple[tuple[str, str, str], ...]:
        """Ordered (name, kind, content) triples; safe to keep and compare."""
        return tuple(entry.as_triple() for entry in self._entries.values())

    def to_dict(self) -> dict[str, str]:
        """name -> content for file entries only."""
        return {
            name: entry.content
            for name, entry in self._entries.items()
            if entry.kind == FileKind.FILE
        }

    def copy(self) -> "ProjectTree":
        return ProjectTree(self._entries.values())

    # ── Mutations ────────────────────────────────────────────────────────────

    def upsert(self, name: str, content: str) -> bool:
        """
        Insert a file entry or overwrite an existing one's content in place.
        Returns True when a new entry was appended. A directory placeholder
        under ``name`` is left as it is (empty) and False is returned.
        """
        entry = self._entries.get(name)
        if entry is None:
            self._entries[name] = FileEntry(name, FileKind.FILE, content)
            logger.debug("Created %s (%d chars)", name, len(content))
            return True
        if entry.kind == FileKind.DIRECTORY:
            logger.debug("Not writing content into directory %s", name)
            return False
        entry.content = content
        logger.debug("Updated %s (%d chars)", name, len(content))
        return False

    def replace_content(self, name: str, content: str) -> bool:
        """
        Overwrite the content of an existing file entry.
        Returns False and changes nothing when ``name`` is absent or a directory.
        """
        entry = self._entries.get(name)
        if entry is None or entry.kind == FileKind.DIRECTORY:
            return False
        entry.content = content
        return True

    def _insert(self, entry: FileEntry) -> None:
        existing = self._entries.get(entry.name)
        if existing is None:
            self._entries[entry.name] = entry
        elif existing.kind == FileKind.FILE:
            existing.content = entry.content
