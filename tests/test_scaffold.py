"""Tests for the bootstrap scaffold."""
from __future__ import annotations

from appforge.models import FileKind
from appforge.scaffold import BOOTSTRAP_FILES, new_project_tree
from appforge.synchronizer import synchronize


def test_bootstrap_has_four_entries_in_order():
    tree = new_project_tree()
    assert tree.names() == ["index.html", "src", "src/main.tsx", "src/App.tsx"]
    assert tree.snapshot() == BOOTSTRAP_FILES


def test_bootstrap_kinds():
    tree = new_project_tree()
    assert tree.get("src").kind == FileKind.DIRECTORY
    assert all(tree.get(n).kind == FileKind.FILE for n in ("index.html", "src/main.tsx", "src/App.tsx"))


def test_bootstrap_content_references():
    tree = new_project_tree()
    assert '<script type="module" src="/src/main.tsx"></script>' in tree.content_of("index.html")
    assert "import App from './App'" in tree.content_of("src/main.tsx")
    assert "Hello, AI-generated App!" in tree.content_of("src/App.tsx")


def test_bootstrap_is_deterministic_across_sessions():
    first = new_project_tree()
    synchronize(first, [("src/App.tsx", "changed"), ("extra.ts", "x")])
    first.replace_content("index.html", "edited")

    for _ in range(3):
        fresh = new_project_tree()
        assert fresh.snapshot() == BOOTSTRAP_FILES
        assert len(fresh) == 4
