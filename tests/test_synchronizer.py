"""
Tests for appforge/synchronizer.py
==================================
Covers: create vs overwrite, order preservation, last-write-wins,
idempotence, directory placeholders, and the end-to-end response flow.
"""
from __future__ import annotations

from appforge.models import ExtractionResult, FileKind
from appforge.parser import parse
from appforge.project_tree import ProjectTree
from appforge.scaffold import new_project_tree
from appforge.synchronizer import apply_response, synchronize


# ── Helpers ───────────────────────────────────────────────────────────────────

def _x(*pairs) -> list[ExtractionResult]:
    return [ExtractionResult(n, c) for n, c in pairs]


# ── Create / overwrite ────────────────────────────────────────────────────────

def test_empty_sequence_is_noop():
    tree = new_project_tree()
    before = tree.snapshot()
    report = synchronize(tree, [])
    assert report.changed == []
    assert not report.has_changes
    assert tree.snapshot() == before


def test_new_names_are_appended_in_parser_order():
    tree = new_project_tree()
    original = tree.names()
    report = synchronize(tree, _x(("b.ts", "b"), ("a.ts", "a"), ("c.ts", "c")))
    assert tree.names() == original + ["b.ts", "a.ts", "c.ts"]
    assert report.created == ["b.ts", "a.ts", "c.ts"]
    assert report.updated == []


def test_existing_names_keep_their_position():
    tree = new_project_tree()
    original = tree.names()
    synchronize(tree, _x(("src/App.tsx", "new app"), ("index.html", "<html/>")))
    assert tree.names() == original
    assert tree.content_of("src/App.tsx") == "new app"
    assert tree.content_of("index.html") == "<html/>"
    assert tree.get("src/App.tsx").kind == FileKind.FILE


def test_last_write_wins_within_one_response():
    tree = ProjectTree()
    report = synchronize(tree, _x(("a", "1"), ("a", "2")))
    assert tree.content_of("a") == "2"
    assert len(tree) == 1
    assert report.changed == ["a"]


def test_changed_lists_created_and_updated_once_in_first_seen_order():
    tree = ProjectTree.from_entries([("old.js", "file", "o")])
    report = synchronize(tree, _x(("new.js", "n"), ("old.js", "x"), ("new.js", "n2")))
    assert report.changed == ["new.js", "old.js"]
    assert report.created == ["new.js"]
    assert report.updated == ["old.js"]


def test_report_unpacks_as_tree_and_changed():
    tree = ProjectTree()
    result_tree, changed = synchronize(tree, _x(("a", "1")))
    assert result_tree is tree
    assert changed == ["a"]


def test_resync_is_idempotent():
    extractions = _x(("src/App.tsx", "v1"), ("src/util.ts", "u"), ("src/App.tsx", "v2"))
    once = new_project_tree()
    synchronize(once, extractions)
    twice = new_project_tree()
    synchronize(twice, extractions)
    synchronize(twice, extractions)
    assert once.snapshot() == twice.snapshot()


def test_no_deletions():
    tree = new_project_tree()
    before = set(tree.names())
    synchronize(tree, _x(("x.ts", "x")))
    assert before <= set(tree.names())


# ── Directory placeholders ────────────────────────────────────────────────────

def test_extraction_naming_a_directory_is_skipped():
    tree = new_project_tree()
    report = synchronize(tree, _x(("src", "not a file"), ("ok.ts", "ok")))
    assert tree.get("src").kind == FileKind.DIRECTORY
    assert tree.content_of("src") == ""
    assert report.skipped == ["src"]
    assert report.changed == ["ok.ts"]


def test_empty_name_is_skipped():
    tree = ProjectTree()
    report = synchronize(tree, _x(("", "orphan")))
    assert len(tree) == 0
    assert report.skipped == [""]


# ── End-to-end ────────────────────────────────────────────────────────────────

def test_end_to_end_bootstrap_response():
    tree = new_project_tree()
    before = {e.name: e.as_triple() for e in tree}
    response = "Here you go:\n```src/App.tsx\nconsole.log('hi')\n```\n"

    extractions = list(parse(response))
    assert len(extractions) == 1

    tree2, changed = synchronize(tree, extractions)
    assert tree2.content_of("src/App.tsx") == "console.log('hi')"
    assert changed == ["src/App.tsx"]
    for entry in tree2:
        if entry.name != "src/App.tsx":
            assert entry.as_triple() == before[entry.name]


def test_apply_response_shortcut():
    tree = ProjectTree()
    report = apply_response(tree, "```a.txt\nA\n```\nprose\n```b.txt\nB\n```")
    assert report.changed == ["a.txt", "b.txt"]
    assert tree.to_dict() == {"a.txt": "A", "b.txt": "B"}
