"""
A small mutable HTML tree on top of ``html.parser``.

It keeps just enough of the DOM for post-processing generated pages:
attribute and class manipulation, text content, ``inner_html`` replacement
and tag renaming. Parsing is forgiving the way browsers are for the common
cases (void elements, implied ``</p>``/``</li>``, stray end tags), and
serialization writes back what was parsed.
"""
from __future__ import annotations

import html
from html.parser import HTMLParser
from typing import Callable, Iterator


VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input", "link",
    "meta", "param", "source", "track", "wbr",
})

RAW_TEXT_ELEMENTS = frozenset({"script", "style"})

_BLOCK_STARTS = frozenset({
    "address", "article", "aside", "blockquote", "details", "div", "dl",
    "fieldset", "figcaption", "figure", "footer", "form", "h1", "h2", "h3",
    "h4", "h5", "h6", "header", "hr", "main", "nav", "ol", "p", "pre",
    "section", "table", "ul",
})

# open element -> start tags that close it implicitly
_IMPLIED_END = {
    "p": _BLOCK_STARTS,
    "li": frozenset({"li"}),
    "dt": frozenset({"dt", "dd"}),
    "dd": frozenset({"dt", "dd"}),
    "option": frozenset({"option", "optgroup"}),
    "tr": frozenset({"tr"}),
    "td": frozenset({"td", "th", "tr"}),
    "th": frozenset({"td", "th", "tr"}),
}


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------

class Node:
    parent: Element | None = None

    def remove(self) -> None:
        if self.parent is not None:
            self.parent.children.remove(self)
            self.parent = None


class Text(Node):
    def __init__(self, data: str) -> None:
        self.data = data

    def __repr__(self) -> str:
        return f"Text({self.data!r})"


class Comment(Node):
    def __init__(self, data: str) -> None:
        self.data = data


class Declaration(Node):
    """``<!DOCTYPE ...>``, ``<![CDATA[...]]>`` or ``<?...>`` kept verbatim."""

    def __init__(self, markup: str) -> None:
        self.markup = markup


class Element(Node):
    def __init__(self, tag: str, attrs: dict[str, str | None] | None = None) -> None:
        self.tag = tag
        self.attrs: dict[str, str | None] = dict(attrs or {})
        self.children: list[Node] = []

    def __repr__(self) -> str:
        return f"<{self.tag} {self.attrs!r}>"

    # -- attributes ---------------------------------------------------------

    def get(self, name: str, default: str | None = None) -> str | None:
        value = self.attrs.get(name, default)
        return "" if value is None and name in self.attrs else value

    def has_attr(self, name: str) -> bool:
        return name in self.attrs

    def set(self, name: str, value: str) -> None:
        self.attrs[name] = value

    def remove_attr(self, name: str) -> None:
        self.attrs.pop(name, None)

    @property
    def classes(self) -> list[str]:
        return (self.get("class") or "").split()

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def add_class(self, *names: str) -> None:
        classes = self.classes
        for name in names:
            if name not in classes:
                classes.append(name)
        self.set("class", " ".join(classes))

    def remove_class(self, name: str) -> None:
        classes = [c for c in self.classes if c != name]
        if classes:
            self.set("class", " ".join(classes))
        else:
            self.remove_attr("class")

    # -- tree ---------------------------------------------------------------

    def append(self, node: Node) -> None:
        node.remove()
        node.parent = self
        self.children.append(node)

    def replace_children(self, nodes: list[Node]) -> None:
        for child in self.children:
            child.parent = None
        self.children = []
        for node in nodes:
            self.append(node)

    def rename(self, tag: str) -> Element:
        """Change the tag name, keeping attributes and children."""
        self.tag = tag
        return self

    def iter(self) -> Iterator[Element]:
        """Descendant elements in document order."""
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            if isinstance(node, Element):
                yield node
                stack.extend(reversed(node.children))

    def find_all(
        self,
        tag: str | None = None,
        *,
        attr: str | None = None,
        where: Callable[[Element], bool] | None = None,
    ) -> list[Element]:
        """Snapshot list of matching descendants, safe to mutate while looping."""
        return [
            el for el in self.iter()
            if (tag is None or el.tag == tag)
            and (attr is None or el.has_attr(attr))
            and (where is None or where(el))
        ]

    @property
    def text_content(self) -> str:
        parts = []
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            if isinstance(node, Text):
                parts.append(node.data)
            elif isinstance(node, Element):
                stack.extend(reversed(node.children))
        return "".join(parts)

    @property
    def inner_html(self) -> str:
        return "".join(serialize(child) for child in self.children)

    @inner_html.setter
    def inner_html(self, markup: str) -> None:
        self.replace_children(parse_fragment(markup))


class Document(Element):
    def __init__(self) -> None:
        super().__init__("#document")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

class _TreeBuilder(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.document = Document()
        self._open: list[Element] = [self.document]

    @property
    def _current(self) -> Element:
        return self._open[-1]

    def handle_starttag(self, tag, attrs):
        while len(self._open) > 1 and tag in _IMPLIED_END.get(self._current.tag, ()):
            self._open.pop()
        element = Element(tag)
        for name, value in attrs:
            element.attrs.setdefault(name, value)
        self._current.append(element)
        if tag not in VOID_ELEMENTS:
            self._open.append(element)

    def handle_startendtag(self, tag, attrs):
        element = Element(tag)
        for name, value in attrs:
            element.attrs.setdefault(name, value)
        self._current.append(element)

    def handle_endtag(self, tag):
        for index in range(len(self._open) - 1, 0, -1):
            if self._open[index].tag == tag:
                del self._open[index:]
                return
        # stray end tag, dropped

    def handle_data(self, data):
        children = self._current.children
        if children and isinstance(children[-1], Text):
            children[-1].data += data
        else:
            self._current.append(Text(data))

    def handle_comment(self, data):
        self._current.append(Comment(data))

    def handle_decl(self, decl):
        self._current.append(Declaration(f"<!{decl}>"))

    def unknown_decl(self, data):
        self._current.append(Declaration(f"<![{data}]>"))

    def handle_pi(self, data):
        self._current.append(Declaration(f"<?{data}>"))


def parse_html(markup: str) -> Document:
    builder = _TreeBuilder()
    builder.feed(markup)
    builder.close()
    return builder.document


def parse_fragment(markup: str) -> list[Node]:
    return list(parse_html(markup).children)


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def _attribute(name: str, value: str | None) -> str:
    if value is None:
        return f" {name}"
    return f' {name}="{html.escape(value, quote=False).replace(chr(34), "&quot;")}"'


def serialize(node: Node) -> str:
    """Serialize a node (a document serializes its children)."""
    out: list[str] = []
    # Entries are nodes to open, or strings already rendered (end tags).
    stack: list[Node | str] = [node]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            out.append(item)
        elif isinstance(item, Text):
            parent = item.parent
            if parent is not None and parent.tag in RAW_TEXT_ELEMENTS:
                out.append(item.data)
            else:
                out.append(html.escape(item.data, quote=False))
        elif isinstance(item, Comment):
            out.append(f"<!--{item.data}-->")
        elif isinstance(item, Declaration):
            out.append(item.markup)
        elif isinstance(item, Document):
            stack.extend(reversed(item.children))
        elif isinstance(item, Element):
            attrs = "".join(_attribute(k, v) for k, v in item.attrs.items())
            out.append(f"<{item.tag}{attrs}>")
            if item.tag in VOID_ELEMENTS:
                continue
            stack.append(f"</{item.tag}>")
            stack.extend(reversed(item.children))
    return "".join(out)
