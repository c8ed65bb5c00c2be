"""
Haxe grammar.

Haxe reads close enough to ECMAScript that the rule set below follows the
usual JavaScript one, with the keyword lists and string interpolation
switched over to Haxe. Rule order matters: declarations (``class X``,
``function f``) are listed before the generic identifier rules.
"""
from __future__ import annotations

from hxsite.grammar import (
    IDENT_RE,
    SELF,
    UNDERSCORE_IDENT_RE,
    Grammar,
    KeywordTable,
    Keywords,
    Match,
    Span,
    either,
    lookahead,
    variants,
    words,
)
from hxsite.modes import (
    BACKSLASH_ESCAPE,
    C_BLOCK_COMMENT_MODE,
    C_LINE_COMMENT_MODE,
    QUOTE_STRING_MODE,
    RE_STARTERS_RE,
    REGEXP_MODE,
    shebang,
)


# ---------------------------------------------------------------------------
# Keywords
# ---------------------------------------------------------------------------

HAXE_KEYWORDS = [
    "as", "in", "of", "if", "for", "while", "finally", "var", "public",
    "private", "static", "dynamic", "inline", "override", "macro", "extern",
    "interface", "abstract", "enum", "typedef", "package", "new", "function",
    "do", "return", "void", "else", "break", "catch", "throw", "case",
    "default", "try", "switch", "continue", "final", "class", "import",
    "from", "extends",
    # get/set are handled by their own rule
]

HAXE_LITERALS = ["true", "false", "null"]

HAXE_TYPES = [
    "Object", "Function", "Boolean", "Math", "Date", "Int", "Float",
    "String", "RegExp", "Array", "Map", "Json", "Reflect",
]

HAXE_ERROR_TYPES = [
    "Error", "EvalError", "InternalError", "RangeError", "ReferenceError",
    "SyntaxError", "TypeError", "URIError",
]

HAXE_BUILT_IN_VARIABLES = ["this", "super", "trace"]

KEYWORDS = KeywordTable.of(
    keyword=HAXE_KEYWORDS,
    literal=HAXE_LITERALS,
    built_in=HAXE_TYPES + HAXE_ERROR_TYPES,
    variable_language=HAXE_BUILT_IN_VARIABLES,
)
KEYWORD_LOOKUP = Keywords(KEYWORDS)


# ---------------------------------------------------------------------------
# Literals
# ---------------------------------------------------------------------------

_DECIMAL_DIGITS = r"[0-9](_?[0-9])*"
_FRAC = rf"\.({_DECIMAL_DIGITS})"
_DECIMAL_INTEGER = r"0|[1-9](_?[0-9])*|0[0-7]*[89][0-9]*"

NUMBER = variants(
    Match(
        rf"(\b({_DECIMAL_INTEGER})(({_FRAC})|\.)?|({_FRAC}))[eE][+-]?({_DECIMAL_DIGITS})\b",
        scope="number", relevance=0,
    ),
    Match(rf"\b({_DECIMAL_INTEGER})\b(({_FRAC})\b|\.)?|({_FRAC})\b", scope="number", relevance=0),
    Match(r"\b0[xX][0-9a-fA-F](_?[0-9a-fA-F])*n?\b", scope="number", relevance=0),
    Match(r"\b0[bB][0-1](_?[0-1])*n?\b", scope="number", relevance=0),
)

COMMENT = variants(C_BLOCK_COMMENT_MODE, C_LINE_COMMENT_MODE)

# What may appear inside ${...}; single-quoted strings are added after
# APOS_STRING exists, since it contains SUBST itself.
_SUBST_INTERNALS_BASE = (
    QUOTE_STRING_MODE,
    # numbers that are part of a variable name
    Match(r"\$\d+"),
    *NUMBER,
)

SUBST_BRACES = Span(
    r"\{", r"\}",
    contains=(SELF, *_SUBST_INTERNALS_BASE, KEYWORD_LOOKUP),
)

SUBST = Span(
    r"\$\{", r"\}",
    scope="subst",
    contains=(*_SUBST_INTERNALS_BASE, SUBST_BRACES, KEYWORD_LOOKUP),
)

# Single-quoted Haxe strings interpolate ``$name`` and ``${expr}``.
APOS_STRING = Span(
    "'", "'",
    scope="string",
    contains=(
        BACKSLASH_ESCAPE,
        Match(r"\$\$", relevance=0),
        SUBST,
        Match(r"\$" + IDENT_RE, scope="subst", relevance=0),
    ),
)

SUBST_INTERNALS = (APOS_STRING, *_SUBST_INTERNALS_BASE)
SUBST_AND_COMMENTS = (*COMMENT, *SUBST_INTERNALS, SUBST_BRACES)

PARENS = Span(
    r"(\s*)\(", r"\)",
    contains=(SELF, *SUBST_AND_COMMENTS, KEYWORD_LOOKUP),
)
PARAMS_CONTAINS = (*SUBST_AND_COMMENTS, PARENS)

PARAMS = Span(
    r"(\s*)\(", r"\)",
    scope="params",
    exclude_begin=True,
    exclude_end=True,
    contains=(*PARAMS_CONTAINS, KEYWORD_LOOKUP),
)


# ---------------------------------------------------------------------------
# Declarations and references
# ---------------------------------------------------------------------------

_DOTTED_IDENT = IDENT_RE + r"(\." + IDENT_RE + r")*"

CLASS_OR_EXTENDS = variants(
    # class Car extends Vehicle
    Match(
        ("class", r"\s+", IDENT_RE, r"\s+", "extends", r"\s+", _DOTTED_IDENT),
        captures={1: "keyword", 3: "title.class", 5: "keyword", 7: "title.class.inherited"},
    ),
    # class Car
    Match(("class", r"\s+", IDENT_RE), captures={1: "keyword", 3: "title.class"}),
)

CLASS_REFERENCE = Match(
    either(
        r"\bJSON",
        r"\b[A-Z][a-z]+([A-Z][a-z]*|\d)*",
        r"\b[A-Z]{2,}([A-Z][a-z]+|\d)+([A-Z][a-z]*)*",
        r"\b[A-Z]{2,}[a-z]+([A-Z][a-z]+|\d)*([A-Z][a-z]*)*",
    ),
    scope="title.class",
    relevance=0,
)

FUNCTION_DEFINITION = variants(
    Span(
        ("function", r"\s+", IDENT_RE, r"(?=\s*\()"),
        begin_captures={1: "keyword", 3: "title.function"},
        contains=(PARAMS,),
        illegal="%",
    ),
    # anonymous function
    Span(
        ("function", r"\s*(?=\()"),
        begin_captures={1: "keyword"},
        contains=(PARAMS,),
        illegal="%",
    ),
)

UPPER_CASE_CONSTANT = Match(r"\b[A-Z][A-Z_0-9]+\b", scope="variable.constant", relevance=0)


def _none_of(alternatives: list[str]) -> str:
    return "(?!" + "|".join(alternatives) + ")"


FUNCTION_CALL = Match(
    r"\b"
    + _none_of([rf"{name}\s*\(" for name in ("super", "import")])
    + IDENT_RE
    + lookahead(r"\s*\("),
    scope="title.function",
    relevance=0,
)

PROPERTY_ACCESS = Span(
    r"\." + lookahead(IDENT_RE + r"(?![0-9A-Za-z$_(])"),
    IDENT_RE,
    scope="property",
    exclude_begin=True,
    relevance=0,
)

GETTER_OR_SETTER = Span(
    ("get|set", r"\s+", IDENT_RE, r"(?=\()"),
    begin_captures={1: "keyword", 3: "title.function"},
    contains=(
        # eat to avoid empty params
        Match(r"\(\)"),
        PARAMS,
    ),
)

# Matches "(a, b) =>" or "x =>", allowing two levels of nested parens.
FUNC_LEAD_IN_RE = (
    r"(\("
    r"[^()]*(\("
    r"[^()]*(\("
    r"[^()]*"
    r"\)[^()]*)*"
    r"\)[^()]*)*"
    r"\)|" + UNDERSCORE_IDENT_RE + r")\s*=>"
)

FUNCTION_VARIABLE = Span(
    ("var|final", r"\s+", IDENT_RE, r"\s*", r"=\s*", lookahead(FUNC_LEAD_IN_RE)),
    begin_captures={1: "keyword", 3: "title.function"},
    contains=(PARAMS,),
)

ARROW_FUNCTION = Span(
    FUNC_LEAD_IN_RE,
    r"\s*(->|=>)",
    scope="function",
    return_begin=True,
    contains=(
        Match(UNDERSCORE_IDENT_RE, scope="params", relevance=0),
        Match(r"\(\s*\)"),
        Span(
            r"(\s*)\(", r"\)",
            scope="params",
            exclude_begin=True,
            exclude_end=True,
            contains=(*PARAMS_CONTAINS, KEYWORD_LOOKUP),
        ),
    ),
)

_VALUE_CONTENTS = (
    *COMMENT,
    REGEXP_MODE,
    ARROW_FUNCTION,
    # could be a comma delimited list of params to a function call
    Match(",", relevance=0),
    Match(r"\s+", relevance=0),
)

# Spots where an expression may start: regex literals and arrow functions
# are only recognized right after one of these.
VALUE_CONTAINER = variants(
    Span((words("case return throw"), r"\s*"), begin_captures={1: "keyword"},
         contains=_VALUE_CONTENTS, relevance=0),
    Span(f"(?:{RE_STARTERS_RE})" + r"\s*", contains=_VALUE_CONTENTS, relevance=0),
)

FUNCTION_WITH_BODY = Span(
    r"\b(?!function)" + UNDERSCORE_IDENT_RE
    + r"\("
    + r"[^()]*(\("
    + r"[^()]*(\("
    + r"[^()]*"
    + r"\)[^()]*)*"
    + r"\)[^()]*)*"
    + r"\)\s*\{",
    return_begin=True,
    contains=(PARAMS, Match(IDENT_RE, scope="title.function", relevance=0)),
)


HAXE = Grammar(
    name="Haxe",
    aliases=("haxe", "hx", "hscript", "hsc"),
    keywords=KEYWORDS,
    illegal=r"#(?![$_A-z])",
    rules=(
        shebang(binary="node", relevance=5),
        APOS_STRING,
        QUOTE_STRING_MODE,
        *COMMENT,
        Match(r"\$\d+"),
        *NUMBER,
        CLASS_REFERENCE,
        Match(IDENT_RE + lookahead(":"), scope="attr", relevance=0),
        FUNCTION_VARIABLE,
        *VALUE_CONTAINER,
        *FUNCTION_DEFINITION,
        # keep these from being read as function calls
        Match(words("while if switch catch for"), scope="keyword"),
        FUNCTION_WITH_BODY,
        # so "..." is not taken for a property access
        Match(r"\.\.\.", relevance=0),
        PROPERTY_ACCESS,
        Match(r"\$" + IDENT_RE, relevance=0),
        Span((r"\bnew(?=\s*\()",), begin_captures={1: "title.function"}, contains=(PARAMS,)),
        FUNCTION_CALL,
        UPPER_CASE_CONSTANT,
        *CLASS_OR_EXTENDS,
        GETTER_OR_SETTER,
        Match(r"\$[(.]"),
    ),
)
