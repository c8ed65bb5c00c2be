"""
Reference fix-ups for generated pages.

Authors write links the way they read in the source tree (``../guide.md``,
``/images/x.png``, ``root/style.css``); these helpers turn them into the
paths the exported site serves.
"""
from __future__ import annotations

import posixpath
import re


SAME_PAGE = "#"
ROOT_PREFIX = "root/"
FORCE_MD_SUFFIX = ".force-md"

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")
_SUFFIX_RE = re.compile(r"[?#]")
# Split between srcset candidates: after a descriptor, or a comma plus space.
_SRCSET_SPLIT_RE = re.compile(r"(?<=\d[wx]),\s*|,\s+")


def fix_path(url: str) -> str:
    """Use forward slashes regardless of how the path was written."""
    return url.replace("\\", "/")


def normalize(path: str) -> str:
    """Collapse ``.``/``..`` and duplicate slashes, keeping a trailing slash."""
    if not path:
        return path
    normalized = posixpath.normpath(path)
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    if path.endswith("/") and not normalized.endswith("/"):
        normalized += "/"
    return normalized


def is_external(url: str) -> bool:
    return bool(_SCHEME_RE.match(url)) or url.startswith("//")


def rewrite_path(
    value: str,
    base_dir: str,
    page_dir: str,
    site_root_dir: str,
    is_actions: bool = False,
) -> str:
    """
    Rewrite one reference.

    ``base_dir`` is what a root-absolute path (``/x``) is re-rooted under:
    the page directory for links and the site root for assets. Query and
    fragment suffixes are carried over untouched.
    """
    if value == SAME_PAGE or is_external(value):
        return value

    cut = _SUFFIX_RE.search(value)
    path, suffix = (value[:cut.start()], value[cut.start():]) if cut else (value, "")
    if not path:
        return value

    path = fix_path(path)
    if path.endswith(".md"):
        path = path[:-3] + ".html"
    path = path.replace("./" + page_dir, "./", 1)
    if path.startswith("/"):
        path = normalize("/" + base_dir + path[1:])
    if path.startswith(ROOT_PREFIX):
        path = normalize("/" + site_root_dir + path[len(ROOT_PREFIX):])
    if path.endswith(FORCE_MD_SUFFIX):
        path = path[:-len(FORCE_MD_SUFFIX)]
    path = fix_path(path)
    if is_actions and path.endswith(".html"):
        path = path[:-len(".html")]
    return path + suffix


def rewrite_srcset(
    value: str,
    base_dir: str,
    page_dir: str,
    site_root_dir: str,
    is_actions: bool = False,
) -> str:
    """Rewrite every candidate URL of a ``srcset``, keeping its descriptor."""
    if value == SAME_PAGE:
        return value
    candidates = []
    for candidate in _SRCSET_SPLIT_RE.split(value.strip()):
        url, _, descriptor = candidate.strip().partition(" ")
        url = rewrite_path(url, base_dir, page_dir, site_root_dir, is_actions)
        candidates.append(f"{url} {descriptor.strip()}" if descriptor.strip() else url)
    return ", ".join(candidates)
