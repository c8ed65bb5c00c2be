"""Code highlighting and link fix-ups for the static site build."""
from __future__ import annotations

from hxsite.engine import HighlightResult, Highlighter, tokenize
from hxsite.errors import SiteBuildError, UnknownGrammarError
from hxsite.registry import GrammarRegistry, default_registry
from hxsite.rewriter import ReferenceRewriter, render_document, rewrite

__version__ = "0.1.0"

__all__ = [
    "GrammarRegistry",
    "HighlightResult",
    "Highlighter",
    "ReferenceRewriter",
    "SiteBuildError",
    "UnknownGrammarError",
    "default_registry",
    "render_document",
    "rewrite",
    "tokenize",
]
