"""
Fetcher module: one GET per listing page, success only on HTTP 200.

There are no retries; any failure is reported as :class:`FetchError` or
:class:`ParseError` and aborts the crawl.
"""
from __future__ import annotations

import asyncio
import logging

from aiohttp import ClientError, ClientSession

from tree_scout.crawler.models import PageData
from tree_scout.errors import FetchError, ParseError


class Fetcher:
    """Fetches listing pages through a shared :class:`ClientSession`."""

    def __init__(self, session: ClientSession) -> None:
        self.session = session
        self.logger = logging.getLogger("TreeScout")

    async def fetch(self, url: str) -> PageData:
        """
        Fetch *url* and return its decoded body.

        Raises FetchError on transport errors, timeouts and non-200 statuses,
        ParseError if the body cannot be decoded as text.
        """
        self.logger.debug("GET %s", url)
        try:
            async with self.session.get(url, raise_for_status=False) as resp:
                if resp.status != 200:
                    raise FetchError(url, f"HTTP {resp.status} {resp.reason or ''}".rstrip())
                try:
                    text = await resp.text()
                except UnicodeDecodeError as exc:
                    raise ParseError(url, exc) from exc
        except asyncio.TimeoutError as exc:
            raise FetchError(url, "timeout") from exc
        except ClientError as exc:
            raise FetchError(url, exc) from exc
        return PageData(url, text)
