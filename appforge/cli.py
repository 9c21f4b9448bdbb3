#!/usr/bin/env python3
"""
CLI Entry Point — run appforge from a terminal
==============================================
Usage:
    python -m appforge generate --prompt "a todo app with dark mode" -o ./todo-app
    python -m appforge parse response.md
    python -m appforge apply response.md -o ./app
    python -m appforge scaffold -o ./blank-app

`generate` is the only subcommand that talks to the completion service;
`parse` and `apply` work offline on a saved model response.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Sequence

from .config import load_settings
from .engine import AppGenerator
from .models import MODEL_LABELS, Model
from .output_writer import write_project_dir
from .parser import parse
from .project_tree import ProjectTree
from .scaffold import new_project_tree
from .session import Session


def setup_logging(verbose: bool = False):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
        force=True,  # re-apply even if already configured
    )


def _read_response(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    src = Path(path)
    if not src.is_file():
        print(f"ERROR: File does not exist: {src}", file=sys.stderr)
        sys.exit(1)
    return src.read_text(encoding="utf-8")


def _print_tree(tree: ProjectTree, changed: Sequence[str] = ()) -> None:
    print("Files:")
    for entry in tree:
        marker = "*" if entry.name in changed else " "
        suffix = "/" if entry.is_directory else f"  ({len(entry.content)} chars)"
        print(f"  {marker} {entry.name}{suffix}")


def _export(tree: ProjectTree, output_dir: str) -> None:
    report = write_project_dir(tree, output_dir)
    print(f"\nWrote {len(report.files_written)} file(s) to {report.root}")
    for name in report.skipped:
        print(f"  skipped unsafe path: {name}")


# ── Subcommands ───────────────────────────────────────────────────────────────

def cmd_generate(args) -> None:
    """Send the prompt, apply the response to a fresh scaffold, export it."""
    settings = load_settings().with_overrides(api_key=args.api_key, model=args.model)
    generator = AppGenerator(settings)

    print(f"Model: {settings.model.value}")
    print("-" * 60)
    outcome = asyncio.run(generator.generate(args.prompt))
    if not outcome.ok:
        print(f"ERROR: {outcome.notice}", file=sys.stderr)
        sys.exit(1)

    for line in generator.session.state.terminal:
        print(line)
    print("-" * 60)
    _print_tree(generator.session.tree, outcome.changed)
    if args.output_dir:
        _export(generator.session.tree, args.output_dir)


def cmd_parse(args) -> None:
    """List the file blocks found in a saved response."""
    results = list(parse(_read_response(args.file)))
    if not results:
        print("No file blocks found.")
        return
    for name, content in results:
        print(f"{name}  ({len(content)} chars)")


def cmd_apply(args) -> None:
    """Apply a saved response to the bootstrap scaffold."""
    session = Session()
    report = session.apply_response(_read_response(args.file))
    print(f"Changed: {', '.join(report.changed) if report.changed else '(none)'}")
    for name in report.skipped:
        print(f"  skipped: {name!r}")
    _print_tree(session.tree, report.changed)
    if args.output_dir:
        _export(session.tree, args.output_dir)


def cmd_scaffold(args) -> None:
    """Export the bootstrap scaffold."""
    _export(new_project_tree(), args.output_dir)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="appforge",
        description="AppForge — turn a prompt into an editable multi-file web app",
    )
    parser.add_argument("--verbose", "-v", action="store_true")
    subparsers = parser.add_subparsers(dest="subcommand", metavar="SUBCOMMAND")

    gp = subparsers.add_parser("generate", help="Generate an app from a prompt")
    gp.add_argument("--prompt", "-p", type=str, required=True,
                    help="What do you want to build?")
    gp.add_argument(
        "--model", "-m",
        choices=[m.value for m in Model],
        default=None,
        help="Completion model: " + ", ".join(
            f"{m.value} ({label})" for m, label in MODEL_LABELS.items()
        ) + " (default: APPFORGE_MODEL or gpt-3.5-turbo)",
    )
    gp.add_argument("--api-key", type=str, default="",
                    help="OpenAI API key (default: OPENAI_API_KEY)")
    gp.add_argument("--output-dir", "-o", type=str, default="",
                    help="Write the resulting project to this directory")
    gp.set_defaults(func=cmd_generate)

    pp = subparsers.add_parser("parse", help="List file blocks in a saved response")
    pp.add_argument("file", help="Response text file ('-' for stdin)")
    pp.set_defaults(func=cmd_parse)

    ap = subparsers.add_parser("apply", help="Apply a saved response to the scaffold")
    ap.add_argument("file", help="Response text file ('-' for stdin)")
    ap.add_argument("--output-dir", "-o", type=str, default="",
                    help="Write the resulting project to this directory")
    ap.set_defaults(func=cmd_apply)

    sp = subparsers.add_parser("scaffold", help="Write the bootstrap scaffold")
    sp.add_argument("--output-dir", "-o", type=str, required=True)
    sp.set_defaults(func=cmd_scaffold)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return
    func(args)


if __name__ == "__main__":
    main()
