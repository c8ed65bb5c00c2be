"""
Grammar engine: turns source text into HTML with classified spans.

The scanner keeps an explicit stack of frames instead of recursing, one
frame per open ``Span``. At every step the innermost frame's matchers are
tried in declaration order at the earliest position where any of them can
match; the frame's end pattern and illegal pattern come after its children.
"""
from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass, field

from hxsite.errors import GrammarDefinitionError
from hxsite.grammar import SELF, Grammar, Keywords, Match, Matcher, Pattern, Span, scope_to_class
from hxsite.registry import GrammarRegistry, default_registry

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 512

# Candidate kinds, in the order they are tried at one position.
_MATCH = "match"
_KEYWORDS = "keywords"
_BEGIN = "begin"
_END = "end"
_ILLEGAL = "illegal"


@dataclass
class HighlightResult:
    value: str
    language: str
    relevance: int = 0
    illegal: bool = False
    depth: int = 0


# ---------------------------------------------------------------------------
# Compilation
# ---------------------------------------------------------------------------

@dataclass
class _Candidate:
    kind: str
    matcher: Matcher | None
    regex: re.Pattern
    groups: tuple[int, ...] | None = None


@dataclass
class _Scope:
    """Matchers active inside one span (or at the top level of a grammar)."""

    span: Span | None
    candidates: list[_Candidate]
    search: re.Pattern


def _compile(pattern: Pattern) -> tuple[re.Pattern, tuple[int, ...] | None]:
    """Compile a pattern; multi-part patterns also return each part's group number."""
    try:
        if isinstance(pattern, str):
            return re.compile(pattern, re.MULTILINE), None
        groups = []
        sources = []
        index = 1
        for part in pattern:
            groups.append(index)
            sources.append(f"({part})")
            index += 1 + re.compile(part).groups
        return re.compile("".join(sources), re.MULTILINE), tuple(groups)
    except re.error as exc:
        raise GrammarDefinitionError(f"bad pattern {pattern!r}: {exc}") from exc


class _CompiledGrammar:
    def __init__(self, grammar: Grammar) -> None:
        self.grammar = grammar
        self._scopes: dict[int, _Scope] = {}
        rules = tuple(grammar.rules)
        if grammar.keywords:
            rules += (Keywords(grammar.keywords),)
        self.root = self._build(None, rules, None, grammar.illegal)

    def scope_for(self, span: Span) -> _Scope:
        scope = self._scopes.get(id(span))
        if scope is None:
            end = span.end if span.end is not None else ""
            scope = self._build(span, span.contains, end, span.illegal)
            self._scopes[id(span)] = scope
        return scope

    def _build(self, span: Span | None, contains, end: str | None, illegal: str | None) -> _Scope:
        candidates = []
        for matcher in contains:
            if matcher is SELF:
                if span is None:
                    raise GrammarDefinitionError(
                        f"{self.grammar.name}: SELF used outside of a span"
                    )
                matcher = span
            if isinstance(matcher, Match):
                regex, groups = _compile(matcher.pattern)
                candidates.append(_Candidate(_MATCH, matcher, regex, groups))
            elif isinstance(matcher, Span):
                regex, groups = _compile(matcher.begin)
                candidates.append(_Candidate(_BEGIN, matcher, regex, groups))
            elif isinstance(matcher, Keywords):
                regex, _ = _compile(matcher.pattern)
                candidates.append(_Candidate(_KEYWORDS, matcher, regex))
            else:
                raise GrammarDefinitionError(f"{self.grammar.name}: not a matcher: {matcher!r}")
        if end is not None:
            candidates.append(_Candidate(_END, None, _compile(end)[0]))
        if illegal is not None:
            candidates.append(_Candidate(_ILLEGAL, None, _compile(illegal)[0]))
        if candidates:
            search = re.compile(
                "|".join(f"(?:{c.regex.pattern})" for c in candidates), re.MULTILINE
            )
        else:
            search = re.compile(r"(?!)")
        return _Scope(span, candidates, search)


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------

@dataclass
class _Frame:
    scope: _Scope
    span: Span | None
    start: int
    body_start: int
    parts: list[str] = field(default_factory=list)


def _escape(text: str) -> str:
    return html.escape(text, quote=False)


def _wrap(scope: str | None, inner: str, prefix: str) -> str:
    if scope is None or not inner:
        return inner
    return f'<span class="{scope_to_class(scope, prefix)}">{inner}</span>'


def _find(scope: _Scope, text: str, pos: int, allow_push: bool):
    """Return the first candidate match at the earliest viable position."""
    while True:
        probe = scope.search.search(text, pos)
        if probe is None:
            return None
        at = probe.start()
        for candidate in scope.candidates:
            if candidate.kind == _BEGIN and not allow_push:
                continue
            m = candidate.regex.match(text, at)
            if m is None:
                continue
            # Only an end pattern may match the empty string.
            if m.end() == at and candidate.kind != _END:
                continue
            return candidate, m
        if at >= len(text):
            return None
        pos = at + 1


class Highlighter:
    """Highlights source text with grammars looked up in a registry."""

    def __init__(
        self,
        registry: GrammarRegistry | None = None,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
        class_prefix: str = "hljs-",
    ) -> None:
        self.registry = registry if registry is not None else default_registry()
        self.max_depth = max_depth
        self.class_prefix = class_prefix
        self._compiled: dict[str, _CompiledGrammar] = {}

    def _grammar(self, language: str) -> _CompiledGrammar:
        grammar = self.registry.get(language)
        compiled = self._compiled.get(grammar.name)
        if compiled is None:
            compiled = _CompiledGrammar(grammar)
            self._compiled[grammar.name] = compiled
        return compiled

    def tokenize(self, source: str, language: str) -> str:
        return self.highlight(source, language).value

    def highlight(self, source: str, language: str) -> HighlightResult:
        compiled = self._grammar(language)
        result = HighlightResult("", compiled.grammar.name)
        prefix = self.class_prefix
        stack = [_Frame(compiled.root, None, 0, 0)]
        pos = 0
        end_of_text = len(source)

        def render(candidate: _Candidate, m: re.Match, scope: str | None, captures) -> str:
            if candidate.groups is None:
                return _wrap(scope, _escape(m.group(0)), prefix)
            pieces = []
            for number, group in enumerate(candidate.groups, 1):
                piece = _escape(m.group(group) or "")
                pieces.append(_wrap((captures or {}).get(number), piece, prefix))
            return _wrap(scope, "".join(pieces), prefix)

        def close(frame: _Frame) -> None:
            stack[-1].parts.append(_wrap(frame.span.scope, "".join(frame.parts), prefix))

        while pos < end_of_text:
            frame = stack[-1]
            hit = _find(frame.scope, source, pos, allow_push=len(stack) <= self.max_depth)
            if hit is None:
                frame.parts.append(_escape(source[pos:]))
                pos = end_of_text
                break
            candidate, m = hit
            if m.start() > pos:
                frame.parts.append(_escape(source[pos:m.start()]))
            pos = m.start()

            if candidate.kind == _MATCH:
                matcher = candidate.matcher
                frame.parts.append(render(candidate, m, matcher.scope, matcher.captures))
                result.relevance += matcher.relevance
                pos = m.end()

            elif candidate.kind == _KEYWORDS:
                word = m.group(0)
                scope = candidate.matcher.table.classify(word)
                if scope is not None:
                    result.relevance += candidate.matcher.relevance
                frame.parts.append(_wrap(scope, _escape(word), prefix))
                pos = m.end()

            elif candidate.kind == _BEGIN:
                span = candidate.matcher
                child = _Frame(compiled.scope_for(span), span, pos, pos)
                if not span.return_begin:
                    begin = render(candidate, m, None, span.begin_captures)
                    if span.exclude_begin:
                        frame.parts.append(begin)
                        child.body_start = m.end()
                    else:
                        child.parts.append(begin)
                    pos = m.end()
                result.relevance += span.relevance
                stack.append(child)
                result.depth = max(result.depth, len(stack) - 1)

            elif candidate.kind == _END:
                stack.pop()
                end_text = _escape(m.group(0))
                if frame.span.exclude_end:
                    close(frame)
                    stack[-1].parts.append(end_text)
                else:
                    frame.parts.append(end_text)
                    close(frame)
                pos = m.end()
                if pos == frame.start:
                    # Nothing was consumed; step over one character.
                    stack[-1].parts.append(_escape(source[pos]))
                    pos += 1

            else:
                result.illegal = True
                if frame.span is None:
                    frame.parts.append(_escape(m.group(0)))
                    pos = m.end()
                    continue
                stack.pop()
                logger.debug(
                    "%s: illegal %r inside %r at %d",
                    compiled.grammar.name, m.group(0), frame.span.scope, pos,
                )
                stack[-1].parts.append(_escape(source[frame.body_start:pos]))
                if pos == frame.start:
                    stack[-1].parts.append(_escape(source[pos]))
                    pos += 1

        # Unterminated spans close at the end of the input.
        while len(stack) > 1:
            close(stack.pop())
        result.value = "".join(stack[0].parts)
        return result

    def highlight_auto(self, source: str, candidates: list[str] | None = None) -> HighlightResult:
        """Highlight with whichever grammar scores the highest relevance."""
        names = candidates if candidates is not None else self.registry.names()
        best: HighlightResult | None = None
        for name in names:
            attempt = self.highlight(source, name)
            if attempt.illegal:
                continue
            if best is None or attempt.relevance > best.relevance:
                best = attempt
        if best is None:
            return HighlightResult(_escape(source), "plaintext")
        return best


def tokenize(source: str, grammar_id: str, registry: GrammarRegistry | None = None) -> str:
    """Highlight ``source`` with the grammar registered as ``grammar_id``."""
    return Highlighter(registry).tokenize(source, grammar_id)
