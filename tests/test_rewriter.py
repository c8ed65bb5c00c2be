from __future__ import annotations

import logging

import pytest

from hxsite.config import BuildFlags, RewriteOptions
from hxsite.dom import parse_html, serialize
from hxsite.errors import UnknownGrammarError
from hxsite.rewriter import ReferenceRewriter, code_language, render_document, rewrite


def run(markup: str, page_dir: str = "./", *, actions: bool = False, strict: bool = True) -> str:
    return serialize(rewrite(markup, page_dir, "./", actions, strict=strict))


def test_references_are_rewritten() -> None:
    out = run(
        '<a href="/foo.md">x</a><img src="root/a.png" srcset="root/a.png 1x, root/b.png 2x">',
        page_dir="wiki/",
    )
    assert out == '<a href="/wiki/foo.html">x</a><img src="/a.png" srcset="/a.png 1x, /b.png 2x">'


def test_actions_mode_links() -> None:
    assert run('<a href="/page.html">p</a>', actions=True) == '<a href="/page">p</a>'


def test_code_block_is_highlighted() -> None:
    out = run('<pre><code class="language-haxe">var x = 1;</code></pre>')
    assert out == (
        '<pre class="hljs"><code class="language-haxe">'
        '<span class="hljs-keyword">var</span> x = <span class="hljs-number">1</span>;'
        "</code></pre>"
    )


def test_code_block_text_stays_escaped() -> None:
    out = run('<pre><code class="language-haxe">a &lt; b</code></pre>')
    assert "a &lt; b" in out


def test_language_class_outside_pre_is_left_alone() -> None:
    out = run('<p><code class="language-haxe">var</code></p>')
    assert out == '<p><code class="language-haxe">var</code></p>'


def test_unknown_language_fails_when_strict() -> None:
    with pytest.raises(UnknownGrammarError):
        run('<pre><code class="language-nope">x</code></pre>')


def test_unknown_language_warns_otherwise(caplog: pytest.LogCaptureFixture) -> None:
    page = '<pre><code class="language-nope">x</code></pre>'
    with caplog.at_level(logging.WARNING, logger="hxsite.rewriter"):
        assert run(page, strict=False) == page
    assert "nope" in caplog.text


def test_inline_code_is_marked_once() -> None:
    doc = rewrite("<p><code>x</code></p>", "./", "./", False)
    assert serialize(doc) == '<p><code class="inline-code">x</code></p>'
    ReferenceRewriter(RewriteOptions()).rewrite_document(doc)
    assert serialize(doc) == '<p><code class="inline-code">x</code></p>'


def test_no_inline_marker_is_consumed() -> None:
    doc = rewrite('<code class="no-inline">x</code>', "./", "./", False)
    assert serialize(doc) == "<code>x</code>"
    ReferenceRewriter(RewriteOptions()).rewrite_document(doc)
    assert serialize(doc) == '<code class="inline-code">x</code>'


def test_pre_around_plain_code_is_marked_too() -> None:
    assert run("<pre><code>x</code></pre>") == (
        '<pre class="inline-code"><code class="inline-code">x</code></pre>'
    )


def test_syntax_element_becomes_highlighted_code() -> None:
    out = run('<p>Use <syntax lang="haxe">null</syntax> here</p>')
    assert out == (
        '<p>Use <code class="inline-syntax inline-code">'
        '<span class="hljs-literal">null</span></code> here</p>'
    )


def test_syntax_element_without_language() -> None:
    assert run("<syntax>x</syntax>") == '<code class="inline-syntax inline-code">x</code>'


def test_render_document_drops_empty_headings() -> None:
    assert render_document(parse_html("<h2></h2><h2>T</h2>")) == "<h2>T</h2>"


def test_code_language_reads_the_first_language_class() -> None:
    code = parse_html('<code class="x language-hx language-json">a</code>').find_all("code")[0]
    assert code_language(code) == "hx"


def test_options_from_flags() -> None:
    options = RewriteOptions.from_flags(BuildFlags(is_full_build=True), "wiki", None)
    assert options.page_dir == "wiki/"
    assert options.site_root_dir == "./"
    assert options.strict
    assert not RewriteOptions.from_flags(BuildFlags()).strict
