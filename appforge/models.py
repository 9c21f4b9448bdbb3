"""
AppForge — Core Models & Types
==============================
File entries, extraction results, synchronization reports and the
completion model table.

The project tree is a flat, uniquely-keyed collection. A name such as
``src/App.tsx`` is an opaque key; nesting is representational only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterator, NamedTuple

if TYPE_CHECKING:
    from .project_tree import ProjectTree


# ─────────────────────────────────────────────
# Enums
# ─────────────────────────────────────────────

class FileKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"


class Model(str, Enum):
    GPT_35_TURBO = "gpt-3.5-turbo"
    GPT_4 = "gpt-4"
    GPT_4_TURBO = "gpt-4-turbo-preview"


DEFAULT_MODEL = Model.GPT_35_TURBO

MODEL_LABELS: dict[Model, str] = {
    Model.GPT_35_TURBO: "GPT-3.5 Turbo",
    Model.GPT_4:        "GPT-4",
    Model.GPT_4_TURBO:  "GPT-4 Turbo",
}


def resolve_model(value: str | Model | None) -> Model:
    """
    Map a model identifier onto Model.
    Unknown or empty identifiers fall back to DEFAULT_MODEL.
    """
    if isinstance(value, Model):
        return value
    try:
        return Model((value or "").strip())
    except ValueError:
        return DEFAULT_MODEL


# ─────────────────────────────────────────────
# File entries
# ─────────────────────────────────────────────

@dataclass
class FileEntry:
    """
    One named entry of a project tree.

    Directory entries carry no content; they exist only as a display
    grouping and own nothing.
    """
    name: str
    kind: FileKind = FileKind.FILE
    content: str = ""

    def __post_init__(self):
        if not self.name:
            raise ValueError("FileEntry.name must be non-empty")
        self.kind = FileKind(self.kind)
        if self.kind == FileKind.DIRECTORY:
            self.content = ""

    @property
    def is_directory(self) -> bool:
        return self.kind == FileKind.DIRECTORY

    def as_triple(self) -> tuple[str, str, str]:
        return (self.name, self.kind.value, self.content)


class ExtractionResult(NamedTuple):
    """A (name, content) pair taken from one fenced block of model output."""
    name: str
    content: str


# ─────────────────────────────────────────────
# Synchronization report
# ─────────────────────────────────────────────

@dataclass
class SyncReport:
    """
    Outcome of applying one response's extractions to a tree.

    ``changed`` lists every created or updated name once, in the order the
    name first appeared. The report unpacks as ``tree, changed = report``.
    """
    tree: ProjectTree
    changed: list[str] = field(default_factory=list)
    created: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    def __iter__(self) -> Iterator:
        yield self.tree
        yield self.changed

    @property
    def has_changes(self) -> bool:
        return bool(self.changed)
