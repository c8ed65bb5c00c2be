from __future__ import annotations

import pytest

from hxsite.paths import is_external, normalize, rewrite_path, rewrite_srcset


def href(value: str, page_dir: str = "wiki/", site_root_dir: str = "./", actions: bool = False) -> str:
    return rewrite_path(value, page_dir, page_dir, site_root_dir, actions)


def src(value: str, page_dir: str = "wiki/", site_root_dir: str = "./", actions: bool = False) -> str:
    return rewrite_path(value, site_root_dir, page_dir, site_root_dir, actions)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("#", "#"),
        ("/foo.md", "/wiki/foo.html"),
        ("guide.md", "guide.html"),
        ("./wiki/guide.md", "./guide.html"),
        ("root/style.css", "/style.css"),
        ("notes.force-md", "notes"),
        ("../other.md", "../other.html"),
        ("/foo.md#intro", "/wiki/foo.html#intro"),
        ("guide.md?x=1", "guide.html?x=1"),
        ("https://x.org/a.md", "https://x.org/a.md"),
        ("mailto:me@x.org", "mailto:me@x.org"),
        ("//cdn.x.org/a.js", "//cdn.x.org/a.js"),
    ],
)
def test_href_rewriting(value: str, expected: str) -> None:
    assert href(value) == expected


def test_actions_mode_drops_html_suffix() -> None:
    assert href("/page.html", page_dir="./", actions=True) == "/page"
    assert href("guide.md", actions=True) == "guide"
    assert src("/page.html", actions=True) == "/page"


def test_src_is_rooted_at_the_site_root() -> None:
    assert src("/img/x.png") == "/img/x.png"
    assert src("/img/x.png", site_root_dir="site/") == "/site/img/x.png"
    assert src("..\\img\\a.png") == "../img/a.png"


def test_srcset_candidates_are_rewritten_individually() -> None:
    assert rewrite_srcset("root/a.png 1x, root/b.png 2x", "./", "wiki/", "./") == "/a.png 1x, /b.png 2x"
    assert rewrite_srcset("root/a.png", "./", "wiki/", "./") == "/a.png"


def test_normalize() -> None:
    assert normalize("/./a//b/../c") == "/a/c"
    assert normalize("/docs/") == "/docs/"
    assert normalize("//x") == "/x"
    assert normalize("") == ""


def test_is_external() -> None:
    assert is_external("http://x.org")
    assert is_external("//x.org")
    assert not is_external("/x.org")
    assert not is_external("root/x")
