"""Grammars shipped with hxsite, in registration order."""
from __future__ import annotations

from hxsite.grammar import Grammar
from hxsite.languages.haxe import HAXE
from hxsite.languages.json import JSON
from hxsite.languages.xml import XML

PLAINTEXT = Grammar(name="plaintext", aliases=("text", "txt", "plain"), rules=())

BUILTIN_GRAMMARS = (HAXE, JSON, XML, PLAINTEXT)

__all__ = ["BUILTIN_GRAMMARS", "HAXE", "JSON", "PLAINTEXT", "XML"]
