from __future__ import annotations

from dataclasses import dataclass


ERR_USAGE = 2
ERR_GRAMMAR = 3
ERR_INTERNAL = 99


@dataclass(eq=False)
class SiteBuildError(Exception):
    message: str
    code: int = ERR_INTERNAL

    def __str__(self) -> str:
        return self.message


class UnknownGrammarError(SiteBuildError):
    """Raised when a language id matches no registered grammar name or alias."""

    def __init__(self, grammar_id: str) -> None:
        super().__init__(f"unknown grammar: {grammar_id!r}", ERR_GRAMMAR)
        self.grammar_id = grammar_id


class GrammarDefinitionError(SiteBuildError):
    def __init__(self, message: str) -> None:
        super().__init__(message, ERR_GRAMMAR)
