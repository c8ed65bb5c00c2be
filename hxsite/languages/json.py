from __future__ import annotations

from hxsite.grammar import Grammar, KeywordTable, Match
from hxsite.modes import C_BLOCK_COMMENT_MODE, C_LINE_COMMENT_MODE, C_NUMBER_MODE, QUOTE_STRING_MODE


JSON = Grammar(
    name="JSON",
    aliases=("json", "jsonc"),
    keywords=KeywordTable.of(literal="true false null"),
    rules=(
        Match(r'"(?:\\.|[^\\"\r\n])*"(?=\s*:)', scope="attr", relevance=1),
        Match(r"[{}\[\],:]", scope="punctuation", relevance=0),
        QUOTE_STRING_MODE,
        C_NUMBER_MODE,
        C_LINE_COMMENT_MODE,
        C_BLOCK_COMMENT_MODE,
    ),
)
