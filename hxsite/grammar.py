"""
Declarative grammar definitions.

A grammar is an ordered tuple of matchers. Each matcher kind is its own
frozen dataclass so that invalid combinations (an end pattern on a
single-shot match, children on a keyword lookup) cannot be written down:

- ``Match``     single-shot pattern, optionally split into scoped parts
- ``Span``      begin/end delimited region with its own child matchers
- ``Keywords``  identifier lookup against a ``KeywordTable``
- ``SELF``      placeholder inside ``Span.contains`` for the span itself

Patterns are Python regular expressions given as strings.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Union


IDENT_RE = r"[A-Za-z$_][0-9A-Za-z$_]*"
UNDERSCORE_IDENT_RE = r"[a-zA-Z_]\w*"

# Lookup order for classifying a word found in more than one category.
KEYWORD_PRECEDENCE = ("keyword", "literal", "built_in", "variable.language")

# A pattern is one regex, or a tuple of regex parts matched back to back.
Pattern = Union[str, tuple[str, ...]]


class _SelfReference:
    __slots__ = ()

    def __repr__(self) -> str:
        return "SELF"


SELF = _SelfReference()


@dataclass(frozen=True)
class KeywordTable:
    """Words per category, consulted in ``KEYWORD_PRECEDENCE`` order."""

    keyword: frozenset[str] = frozenset()
    literal: frozenset[str] = frozenset()
    built_in: frozenset[str] = frozenset()
    variable_language: frozenset[str] = frozenset()

    @classmethod
    def of(cls, **categories: object) -> KeywordTable:
        return cls(**{
            name: frozenset(words.split() if isinstance(words, str) else words)
            for name, words in categories.items()
        })

    def classify(self, word: str) -> str | None:
        for scope in KEYWORD_PRECEDENCE:
            if word in getattr(self, scope.replace(".", "_")):
                return scope
        return None

    def __bool__(self) -> bool:
        return bool(self.keyword or self.literal or self.built_in or self.variable_language)


@dataclass(frozen=True, eq=False)
class Match:
    pattern: Pattern
    scope: str | None = None
    captures: Mapping[int, str] | None = None
    relevance: int = 1


@dataclass(frozen=True, eq=False)
class Span:
    begin: Pattern
    end: str | None = None
    scope: str | None = None
    begin_captures: Mapping[int, str] | None = None
    contains: tuple["Matcher", ...] = ()
    illegal: str | None = None
    exclude_begin: bool = False
    exclude_end: bool = False
    return_begin: bool = False
    relevance: int = 1


@dataclass(frozen=True, eq=False)
class Keywords:
    table: KeywordTable
    pattern: str = IDENT_RE
    relevance: int = 1


Matcher = Union[Match, Span, Keywords, _SelfReference]


@dataclass(frozen=True, eq=False)
class Grammar:
    name: str
    rules: tuple[Matcher, ...]
    aliases: tuple[str, ...] = ()
    keywords: KeywordTable = field(default_factory=KeywordTable)
    illegal: str | None = None

    @property
    def ids(self) -> tuple[str, ...]:
        return (self.name, *self.aliases)


def variants(*matchers: Matcher) -> tuple[Matcher, ...]:
    """Group alternatives that share a role; order is kept."""
    return tuple(matchers)


def either(*patterns: str) -> str:
    return "(?:" + "|".join(patterns) + ")"


def lookahead(pattern: str) -> str:
    return f"(?={pattern})"


def words(text: str) -> str:
    """Regex matching any of the whitespace separated words as a whole word."""
    return r"\b(?:" + "|".join(text.split()) + r")\b"


def scope_to_class(scope: str, prefix: str = "hljs-") -> str:
    """
    Map a dotted scope name to CSS classes.

    ``title.class.inherited`` becomes ``hljs-title class_ inherited__``, the
    convention highlight.js themes are written against.
    """
    if "." not in scope:
        return prefix + scope
    head, *rest = scope.split(".")
    return " ".join([prefix + head] + [piece + "_" * (i + 1) for i, piece in enumerate(rest)])
