from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping

from hxsite.errors import GrammarDefinitionError, UnknownGrammarError
from hxsite.grammar import Grammar


class GrammarRegistry:
    """
    Read-only mapping from grammar names and aliases to grammars.

    Lookups are case-sensitive. A registry is built once (usually through
    ``default_registry``) and handed to whatever needs to highlight.
    """

    def __init__(self, grammars: Iterable[Grammar] = ()) -> None:
        by_id: dict[str, Grammar] = {}
        order: list[Grammar] = []
        for grammar in grammars:
            for ident in grammar.ids:
                if ident in by_id:
                    raise GrammarDefinitionError(
                        f"grammar id {ident!r} registered by both "
                        f"{by_id[ident].name!r} and {grammar.name!r}"
                    )
                by_id[ident] = grammar
            order.append(grammar)
        self._by_id: Mapping[str, Grammar] = MappingProxyType(by_id)
        self._grammars = tuple(order)

    def get(self, grammar_id: str) -> Grammar:
        try:
            return self._by_id[grammar_id]
        except KeyError:
            raise UnknownGrammarError(grammar_id) from None

    def __contains__(self, grammar_id: object) -> bool:
        return grammar_id in self._by_id

    def __iter__(self):
        return iter(self._grammars)

    def __len__(self) -> int:
        return len(self._grammars)

    def names(self) -> list[str]:
        return [g.name for g in self._grammars]

    def with_grammars(self, *grammars: Grammar) -> GrammarRegistry:
        """Return a new registry holding these grammars on top of ours."""
        return GrammarRegistry((*self._grammars, *grammars))


_DEFAULT: GrammarRegistry | None = None


def default_registry() -> GrammarRegistry:
    """The registry of built-in grammars, created on first use."""
    global _DEFAULT
    if _DEFAULT is None:
        from hxsite.languages import BUILTIN_GRAMMARS

        _DEFAULT = GrammarRegistry(BUILTIN_GRAMMARS)
    return _DEFAULT
