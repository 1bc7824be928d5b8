"""
Classification of a single listing-page anchor into a typed link.

Listing rows look like::

    <a class="js-navigation-open link-gray-dark" href="/owner/repo/tree/main/docs">docs</a>
    <a class="js-navigation-open link-gray-dark" href="/owner/repo/blob/main/docs/guide.md">guide.md</a>

Everything else on the page (navigation, breadcrumbs, README links) is
classified as ``None``.
"""
from __future__ import annotations

import re
from typing import Iterable, List, Optional
from urllib.parse import urljoin, urlparse, urlunparse

from bs4.element import NavigableString, Tag

from tree_scout.config import DEFAULT_STYLE_CLASS
from tree_scout.crawler.models import DirectoryLink, FileLink, TypedLink

__all__ = ["classify", "is_ignored"]

#: /<owner>/<repo>/<kind>/<ref>/<rest...>
_KIND_INDEX = 2
_REF_INDEX = 3


def is_ignored(name: str, patterns: Iterable[re.Pattern[str]]) -> bool:
    """True if any pattern is found anywhere in the directory *name*."""
    return any(p.search(name) for p in patterns)


def _label(node: Tag) -> Optional[str]:
    if not node.contents:
        return None
    first = node.contents[0]
    if isinstance(first, Tag):
        return first.get_text().strip()
    if isinstance(first, NavigableString):
        return str(first).strip()
    return None


def _tree_url(parsed, segments: List[str]) -> str:
    """URL of the listing page for *segments* (``owner/repo/tree/ref/...``)."""
    return urlunparse((parsed.scheme, parsed.netloc, "/" + "/".join(segments), "", "", ""))


def classify(
    node: Tag,
    extension: str,
    ignore_patterns: Iterable[re.Pattern[str]] = (),
    *,
    origin: str = "https://github.com",
    style_class: str = DEFAULT_STYLE_CLASS,
) -> Optional[TypedLink]:
    """
    Decide whether *node* names a sub-directory, a tracked file, or neither.

    Returns a :class:`DirectoryLink`, a :class:`FileLink` or ``None``. Never
    raises for unrecognised anchors.
    """
    classes = node.get("class")
    if isinstance(classes, list):
        classes = " ".join(classes)
    if classes != style_class:
        return None

    href = node.get("href")
    if not isinstance(href, str) or not href.strip():
        return None
    label = _label(node)
    if label is None:
        return None

    try:
        url = urljoin(origin + "/", href.strip())
        parsed = urlparse(url)
    except ValueError:
        # malformed href, e.g. an unclosed IPv6 host
        return None
    segments = [s for s in parsed.path.split("/") if s]
    if len(segments) <= _REF_INDEX:
        return None

    kind = segments[_KIND_INDEX]
    if kind == "tree":
        dir_segments = segments[_REF_INDEX + 1:]
        is_file = False
    elif kind == "blob" and len(segments) > _REF_INDEX + 1 and segments[-1].endswith(extension):
        dir_segments = segments[_REF_INDEX + 1:-1]
        is_file = True
    else:
        return None

    dirname = "/".join(dir_segments)
    if is_ignored(dirname, ignore_patterns):
        return None

    if not is_file:
        return DirectoryLink(name=dirname, href=url)

    basename = label if label.endswith(extension) else segments[-1]
    tree = segments[:_KIND_INDEX] + ["tree"] + segments[_REF_INDEX:-1]
    return FileLink(
        name=basename[: len(basename) - len(extension)],
        href=url,
        directory=DirectoryLink(name=dirname, href=_tree_url(parsed, tree)),
    )
