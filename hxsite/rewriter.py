"""
Post-processing of generated pages.

``rewrite`` parses a page, points every ``href``/``src``/``srcset`` at its
exported location, highlights code and tags inline code for styling. The
markup conventions it reacts to:

- ``<pre><code class="language-ID">``  block highlighted with grammar ``ID``
- ``<syntax lang="ID">``                inline snippet, becomes ``<code>``
- ``class="no-inline"``                 skip inline-code styling once
"""
from __future__ import annotations

import logging

from hxsite.config import RewriteOptions
from hxsite.dom import Document, Element, parse_html, serialize
from hxsite.engine import Highlighter
from hxsite.errors import UnknownGrammarError
from hxsite.paths import rewrite_path, rewrite_srcset

logger = logging.getLogger(__name__)

HIGHLIGHTED_CLASS = "hljs"
INLINE_CODE_CLASS = "inline-code"
INLINE_SYNTAX_CLASS = "inline-syntax"
NO_INLINE_CLASS = "no-inline"
LANGUAGE_CLASS_PREFIX = "language-"
SYNTAX_TAG = "syntax"


def code_language(element: Element) -> str | None:
    for name in element.classes:
        if name.startswith(LANGUAGE_CLASS_PREFIX):
            return name[len(LANGUAGE_CLASS_PREFIX):]
    return None


class ReferenceRewriter:
    def __init__(self, options: RewriteOptions, highlighter: Highlighter | None = None) -> None:
        self.options = options
        self.highlighter = highlighter if highlighter is not None else Highlighter()

    def rewrite(self, markup: str) -> Document:
        return self.rewrite_document(parse_html(markup))

    def rewrite_document(self, document: Document) -> Document:
        self.fix_references(document)
        self.highlight_blocks(document)
        self.mark_inline_code(document)
        self.expand_syntax_elements(document)
        return document

    # ------------------------------------------------------------------

    def fix_references(self, document: Document) -> None:
        opts = self.options
        for element in document.find_all(attr="href"):
            element.set("href", rewrite_path(
                element.get("href"), opts.page_dir, opts.page_dir, opts.site_root_dir, opts.is_actions,
            ))
        for element in document.find_all(attr="src"):
            element.set("src", rewrite_path(
                element.get("src"), opts.site_root_dir, opts.page_dir, opts.site_root_dir, opts.is_actions,
            ))
        for element in document.find_all(attr="srcset"):
            element.set("srcset", rewrite_srcset(
                element.get("srcset"), opts.site_root_dir, opts.page_dir, opts.site_root_dir, opts.is_actions,
            ))

    def highlight_blocks(self, document: Document) -> None:
        blocks = document.find_all(
            "code",
            where=lambda el: code_language(el) is not None and _parent_tag(el) == "pre",
        )
        for block in blocks:
            if self._highlight(block, code_language(block)):
                block.parent.add_class(HIGHLIGHTED_CLASS)

    def mark_inline_code(self, document: Document) -> None:
        plain = document.find_all("code", where=lambda el: code_language(el) is None)
        for code in plain:
            _mark_inline(code)
        for code in plain:
            if _parent_tag(code) == "pre":
                _mark_inline(code.parent)

    def expand_syntax_elements(self, document: Document) -> None:
        for element in document.find_all(SYNTAX_TAG):
            element.rename("code")
            element.add_class(INLINE_SYNTAX_CLASS, INLINE_CODE_CLASS)
            language = element.get("lang")
            element.remove_attr("lang")
            if language is not None:
                self._highlight(element, language)

    def _highlight(self, element: Element, language: str) -> bool:
        try:
            element.inner_html = self.highlighter.tokenize(element.text_content, language)
        except UnknownGrammarError:
            if self.options.strict:
                raise
            logger.warning("no grammar for %r, leaving code unhighlighted", language)
            return False
        return True


def _parent_tag(element: Element) -> str | None:
    return element.parent.tag if element.parent is not None else None


def _mark_inline(element: Element) -> None:
    # The opt-out marker is consumed, so a second pass styles the element.
    if element.has_class(NO_INLINE_CLASS):
        element.remove_class(NO_INLINE_CLASS)
    else:
        element.add_class(INLINE_CODE_CLASS)


def rewrite(
    html: str,
    page_dir: str,
    site_root_dir: str,
    is_actions_mode: bool,
    *,
    strict: bool = True,
    highlighter: Highlighter | None = None,
) -> Document:
    """Parse ``html`` and apply every reference and code fix-up to it."""
    options = RewriteOptions(page_dir, site_root_dir, is_actions_mode, strict)
    return ReferenceRewriter(options, highlighter).rewrite(html)


def render_document(document: Document) -> str:
    """Serialize a rewritten page, dropping empty ``<h2>`` headings."""
    for heading in document.find_all("h2", where=lambda el: not el.children):
        heading.remove()
    return serialize(document)
