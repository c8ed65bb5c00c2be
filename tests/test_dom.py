from __future__ import annotations

from hxsite.dom import Element, parse_html, serialize


def roundtrip(markup: str) -> str:
    return serialize(parse_html(markup))


def test_document_roundtrip() -> None:
    page = (
        "<!DOCTYPE html><html><head><title>T</title></head>"
        '<body><p class="a">x &amp; y</p><img src="a.png"><br><!-- note --></body></html>'
    )
    assert roundtrip(page) == page


def test_implied_end_tags() -> None:
    assert roundtrip("<ul><li>a<li>b</ul>") == "<ul><li>a</li><li>b</li></ul>"
    assert roundtrip("<p>a<div>b</div>") == "<p>a</p><div>b</div>"


def test_stray_end_tags_are_dropped() -> None:
    assert roundtrip("a</span>b") == "ab"


def test_script_text_is_not_escaped() -> None:
    page = "<script>if (a < b && c) {}</script>"
    assert roundtrip(page) == page


def test_attribute_quoting() -> None:
    assert roundtrip("<a title='say \"hi\"'>x</a>") == '<a title="say &quot;hi&quot;">x</a>'
    assert roundtrip("<input disabled>") == "<input disabled>"
    assert parse_html("<input disabled>").find_all("input")[0].get("disabled") == ""


def test_class_manipulation() -> None:
    el = Element("code", {"class": "a b"})
    el.add_class("b", "c")
    assert el.get("class") == "a b c"
    assert el.has_class("c")
    for name in ("a", "b", "c"):
        el.remove_class(name)
    assert not el.has_attr("class")


def test_inner_html_and_text_content() -> None:
    doc = parse_html("<pre><code>a &lt; <b>b</b></code></pre>")
    code = doc.find_all("code")[0]
    assert code.text_content == "a < b"
    assert code.inner_html == "a &lt; <b>b</b>"
    code.inner_html = '<span class="x">1</span>'
    assert serialize(doc) == '<pre><code><span class="x">1</span></code></pre>'
    assert code.children[0].parent is code


def test_rename_keeps_attributes_and_children() -> None:
    doc = parse_html('<syntax lang="hx">x</syntax>')
    doc.find_all("syntax")[0].rename("code")
    assert serialize(doc) == '<code lang="hx">x</code>'


def test_find_all_filters() -> None:
    doc = parse_html('<div><a href="x">1</a><a>2</a><img src="y"></div>')
    assert [el.tag for el in doc.find_all(attr="href")] == ["a"]
    assert len(doc.find_all("a")) == 2
    assert [el.text_content for el in doc.find_all("a", where=lambda el: not el.attrs)] == ["2"]


def test_remove_detaches_node() -> None:
    doc = parse_html("<h2></h2><p>x</p>")
    heading = doc.find_all("h2")[0]
    heading.remove()
    assert heading.parent is None
    assert serialize(doc) == "<p>x</p>"
