"""Matchers shared between grammars (strings, comments, regex literals)."""
from __future__ import annotations

from hxsite.grammar import Match, Span


RE_STARTERS_RE = (
    r"!|!=|!==|%|%=|&|&&|&=|\*|\*=|\+|\+=|,|-|-=|/=|/|:|;|<<|<<=|<=|<|===|==|=|"
    r">>>=|>>=|>=|>>>|>>|>|\?|\[|\{|\(|\^|\^=|\||\|=|\|\||~"
)

BACKSLASH_ESCAPE = Match(r"\\[\s\S]", relevance=0)

DOCTAG = Match(r"\b(?:TODO|FIXME|NOTE|BUG|OPTIMIZE|HACK|XXX):", scope="doctag", relevance=0)

QUOTE_STRING_MODE = Span('"', '"', scope="string", illegal=r"\n", contains=(BACKSLASH_ESCAPE,))

C_LINE_COMMENT_MODE = Span("//", "$", scope="comment", contains=(DOCTAG,))
C_BLOCK_COMMENT_MODE = Span(r"/\*", r"\*/", scope="comment", contains=(DOCTAG,))

C_NUMBER_MODE = Match(
    r"(-?)(\b0[xX][a-fA-F0-9]+|(\b\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?)",
    scope="number",
    relevance=0,
)

REGEXP_MODE = Span(
    r"/(?=[^/\n]*/)",
    r"/[gimuy]*",
    scope="regexp",
    contains=(
        BACKSLASH_ESCAPE,
        Span(r"\[", r"\]", relevance=0, contains=(BACKSLASH_ESCAPE,)),
    ),
)


def shebang(binary: str | None = None, relevance: int = 0) -> Match:
    """A ``#!`` line; only ever matches at the very start of the input."""
    pattern = r"\A#![ ]*/"
    if binary:
        pattern += rf".*\b{binary}\b.*"
    else:
        pattern += r".*"
    return Match(pattern, scope="meta", relevance=relevance)
