"""Markup grammar for XML and HTML snippets (Haxe project files, sprite sheets)."""
from __future__ import annotations

from hxsite.grammar import Grammar, Match, Span


_TAG_NAME_RE = r"[A-Za-z_][\w.:-]*"

ATTRIBUTE_VALUE = (
    Span('"', '"', scope="string", relevance=0),
    Span("'", "'", scope="string", relevance=0),
    Match(r"(?<==)[^\s\"'=<>`]+", scope="string", relevance=0),
)

TAG = Span(
    ("</?", _TAG_NAME_RE),
    r"/?>",
    scope="tag",
    begin_captures={2: "name"},
    contains=(
        Match(_TAG_NAME_RE + r"(?=\s*=)", scope="attr", relevance=0),
        Match("=", relevance=0),
        *ATTRIBUTE_VALUE,
        Match(_TAG_NAME_RE, scope="attr", relevance=0),
    ),
)

XML = Grammar(
    name="XML",
    aliases=("xml", "html", "xhtml", "svg", "plist"),
    rules=(
        Span(r"<!--", r"-->", scope="comment", relevance=10),
        Span(r"<!\[CDATA\[", r"\]\]>", scope="meta", relevance=10),
        Span(r"<\?xml", r"\?>", scope="meta", relevance=10),
        Span(r"<!DOCTYPE", r">", scope="meta", relevance=10),
        Match(r"&(?:[a-z]+|#[0-9]+|#x[a-fA-F0-9]+);", scope="symbol", relevance=0),
        TAG,
    ),
)
