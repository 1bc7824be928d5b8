"""
Data models for the TreeScout crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

__all__ = ["PageData", "DirectoryLink", "FileLink", "TypedLink"]


@dataclass(slots=True)
class PageData:
    """Holds the URL and decoded body of a fetched listing page."""

    url: str
    content: str


@dataclass(frozen=True, slots=True)
class DirectoryLink:
    """A directory of the remote tree: something to fetch and a grouping key.

    Equality and hashing use ``name`` only, so the same directory reached
    through different hrefs groups together.
    """

    name: str
    href: str = field(compare=False)


@dataclass(frozen=True, slots=True)
class FileLink:
    """A tracked file; ``name`` is the basename without the extension."""

    name: str
    href: str
    directory: DirectoryLink


TypedLink = Union[DirectoryLink, FileLink]
