from __future__ import annotations

import logging
from pathlib import Path

import pytest

from hxsite.cli import main
from hxsite.errors import ERR_GRAMMAR, ERR_USAGE


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_highlight_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "Main.hx"
    source.write_text("var x = 1;", encoding="utf-8")
    assert main(["highlight", "--lang", "hx", str(source)]) == 0
    assert capsys.readouterr().out == (
        '<span class="hljs-keyword">var</span> x = <span class="hljs-number">1</span>;'
    )


def test_highlight_detects_language(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "page.xml"
    source.write_text("<!-- c --><a/>", encoding="utf-8")
    assert main(["--log-level", "INFO", "highlight", str(source)]) == 0
    captured = capsys.readouterr()
    assert '<span class="hljs-comment">&lt;!-- c --&gt;</span>' in captured.out
    assert "highlighted as XML" in captured.err


def test_unknown_language_exit_code(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "a.txt"
    source.write_text("x", encoding="utf-8")
    assert main(["highlight", "--lang", "cobol", str(source)]) == ERR_GRAMMAR
    assert "unknown grammar: 'cobol'" in capsys.readouterr().err


def test_rewrite_to_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    page = tmp_path / "in.html"
    page.write_text('<a href="/guide.md">g</a><p><code>x</code></p>', encoding="utf-8")
    out_file = tmp_path / "out" / "wiki" / "index.html"
    assert main(["rewrite", str(page), "--page-dir", "wiki", "--out", str(out_file)]) == 0
    assert capsys.readouterr().out.strip() == f"Wrote {out_file}"
    assert out_file.read_text(encoding="utf-8") == (
        '<a href="/wiki/guide.html">g</a><p><code class="inline-code">x</code></p>'
    )


def test_rewrite_unknown_language_only_fails_release_builds(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    page = tmp_path / "in.html"
    page.write_text('<pre><code class="language-nope">x</code></pre>', encoding="utf-8")
    assert main(["rewrite", str(page)]) == 0
    assert 'class="language-nope"' in capsys.readouterr().out
    assert main(["rewrite", str(page), "--release"]) == ERR_GRAMMAR
    assert main(["rewrite", str(page), "--full"]) == ERR_GRAMMAR


def test_languages_listing(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["languages"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert "Haxe: haxe, hx, hscript, hsc" in lines
    assert "plaintext: text, txt, plain" in lines


def test_usage_errors(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["frobnicate"]) == ERR_USAGE
    assert main([]) == ERR_USAGE
    assert main(["--help"]) == 0
    capsys.readouterr()
