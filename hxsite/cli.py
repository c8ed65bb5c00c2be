#!/usr/bin/env python3
"""
Highlight code and post-process generated pages.

Usage:
  python3 -m hxsite highlight --lang haxe Main.hx
  python3 -m hxsite rewrite export/wiki/index.html --page-dir wiki/ --release
  python3 -m hxsite languages
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from hxsite.config import BuildFlags, RewriteOptions
from hxsite.engine import Highlighter
from hxsite.errors import ERR_USAGE, SiteBuildError
from hxsite.registry import default_registry
from hxsite.rewriter import ReferenceRewriter, render_document

logger = logging.getLogger("hxsite")

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "WARNING") -> None:
    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)


def _read_input(path: str | None) -> str:
    if path is None or path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_highlight(args: argparse.Namespace) -> int:
    highlighter = Highlighter(default_registry())
    source = _read_input(args.file)
    if args.lang:
        result = highlighter.highlight(source, args.lang)
    else:
        result = highlighter.highlight_auto(source)
    logger.info("highlighted as %s (relevance %d)", result.language, result.relevance)
    sys.stdout.write(result.value)
    return 0


def cmd_rewrite(args: argparse.Namespace) -> int:
    flags = BuildFlags(
        is_release=args.release,
        is_actions=args.actions,
        is_full_build=args.full,
    )
    options = RewriteOptions.from_flags(flags, args.page_dir, args.site_root)
    rewriter = ReferenceRewriter(options, Highlighter(default_registry()))
    document = rewriter.rewrite(_read_input(args.file))
    html = render_document(document)

    if args.out:
        out_file = Path(args.out)
        out_file.parent.mkdir(parents=True, exist_ok=True)
        out_file.write_text(html, encoding="utf-8")
        print(f"Wrote {out_file}")
    else:
        sys.stdout.write(html)
    return 0


def cmd_languages(args: argparse.Namespace) -> int:
    for grammar in default_registry():
        aliases = ", ".join(grammar.aliases)
        print(f"{grammar.name}: {aliases}" if aliases else grammar.name)
    return 0


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hxsite", description="Highlight code and fix up generated pages")
    parser.add_argument("--log-level", default="WARNING", help="logging level (DEBUG, INFO, ...)")
    sub = parser.add_subparsers(dest="command", required=True)

    hl = sub.add_parser("highlight", help="print highlighted markup for a source file")
    hl.add_argument("file", nargs="?", help="source file, stdin when omitted")
    hl.add_argument("--lang", help="grammar name or alias; detected when omitted")
    hl.set_defaults(func=cmd_highlight)

    rw = sub.add_parser("rewrite", help="fix references and highlight code in an HTML page")
    rw.add_argument("file", nargs="?", help="HTML file, stdin when omitted")
    rw.add_argument("--page-dir", default=None, help="directory the page is exported to")
    rw.add_argument("--site-root", default=None, help="site root directory")
    rw.add_argument("--actions", action="store_true", help="drop .html from link targets")
    rw.add_argument("--release", action="store_true", help="fail on unknown code languages")
    rw.add_argument("--full", action="store_true", help="full build (implies --release)")
    rw.add_argument("--out", help="output file, stdout when omitted")
    rw.set_defaults(func=cmd_rewrite)

    langs = sub.add_parser("languages", help="list registered grammars")
    langs.set_defaults(func=cmd_languages)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return ERR_USAGE if exc.code else 0
    setup_logging(args.log_level)

    try:
        return args.func(args)
    except SiteBuildError as exc:
        logger.error("%s", exc)
        return exc.code


if __name__ == "__main__":
    raise SystemExit(main())
