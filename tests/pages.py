"""Builders of listing-page markup shared by the tests."""

from tree_scout.config import DEFAULT_STYLE_CLASS

REPO = "/octo/repo"


def row(href: str, label: str, css: str = DEFAULT_STYLE_CLASS) -> str:
    """One directory/file row the way the listing page renders it."""
    return f'<a class="{css}" href="{href}">{label}</a>'


def listing(*rows: str) -> str:
    """A listing page: navigation noise around the rows."""
    body = "".join(f'<div role="row"><div role="rowheader"><span>{r}</span></div></div>' for r in rows)
    return (
        "<html><head><title>repo</title></head><body>"
        '<header><a href="/">Home</a><a class="Header-link" href="/features">Features</a></header>'
        f'<nav><a href="{REPO}">repo</a><a href="{REPO}/issues">Issues</a></nav>'
        f'<div class="Box">{body}</div>'
        '<footer><a href="https://docs.github.com">Docs</a></footer>'
        "</body></html>"
    )


def tree(ref: str = "main", *parts: str) -> str:
    return "/".join([REPO, "tree", ref, *parts])


def blob(ref: str = "main", *parts: str) -> str:
    return "/".join([REPO, "blob", ref, *parts])
