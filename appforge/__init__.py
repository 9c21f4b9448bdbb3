"""
AppForge
========
Turns a language model's free-form answer into an editable multi-file
project, and keeps that project consistent while a user edits it.

Basic usage:
    from appforge import Session

    session = Session()                      # starts from the bootstrap scaffold
    report = session.apply_response(model_text)
    report.changed                           # ["src/App.tsx", ...]
    session.edit("src/App.tsx", new_source)

Core functions (pure in-process calls, never raise on untrusted input):
    parse(text)                         -> iterable of (name, content)
    synchronize(tree, extractions)      -> SyncReport (tree, changed)
    replace_content(tree, name, text)   -> tree
"""

from .models import (
    DEFAULT_MODEL, ExtractionResult, FileEntry, FileKind, Model, SyncReport,
)
from .project_tree import ProjectTree
from .parser import ParsedResponse, parse
from .synchronizer import apply_response, synchronize
from .gateway import EditGateway, replace_content
from .scaffold import BOOTSTRAP_FILES, new_project_tree
from .hooks import EventType, HookRegistry
from .session import Session, SessionState
from .config import Settings, load_settings
from .api_clients import CompletionClient, CompletionError
from .engine import AppGenerator, GenerationOutcome
from .output_writer import write_project_dir

__version__ = "0.1.0"

__all__ = [
    # ── Core ────────────────────────────────────────────────────────────────
    "FileEntry", "FileKind", "ExtractionResult", "SyncReport",
    "ProjectTree", "parse", "ParsedResponse", "synchronize", "apply_response",
    "EditGateway", "replace_content", "BOOTSTRAP_FILES", "new_project_tree",
    # ── Session & collaborators ─────────────────────────────────────────────
    "Session", "SessionState", "EventType", "HookRegistry",
    "Settings", "load_settings", "Model", "DEFAULT_MODEL",
    "CompletionClient", "CompletionError", "AppGenerator", "GenerationOutcome",
    "write_project_dir",
]
