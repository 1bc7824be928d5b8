"""Exception hierarchy for TreeScout.

Library code raises these; only :mod:`tree_scout.cli` turns them into exit codes.
"""
from __future__ import annotations

__all__ = ["TreeScoutError", "FetchError", "ParseError", "InputValidationError"]


class TreeScoutError(Exception):
    """Base class for every error raised by TreeScout."""


class FetchError(TreeScoutError):
    """A listing page could not be fetched (transport error or non-200 status)."""

    def __init__(self, url: str, reason: object) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"getting {url}: {reason}")


class ParseError(TreeScoutError):
    """A listing page body could not be decoded or parsed as HTML."""

    def __init__(self, url: str, reason: object) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"parsing {url}: {reason}")


class InputValidationError(TreeScoutError, ValueError):
    """Bad URL, extension, ignore pattern or config file, detected before crawling."""
