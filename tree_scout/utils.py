"""tree_scout.utils: naming of result files."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence, Union
from urllib.parse import urlparse

from tree_scout.logger import logger

__all__: Sequence[str] = (
    "report_name",
    "result_path",
)


def report_name(root_url: str) -> str:
    """Last path segment of *root_url* (``.../linksplatform/Setters/`` → ``Setters``)."""
    parsed = urlparse(root_url)
    name = parsed.path.rstrip("/").rsplit("/", 1)[-1] or parsed.netloc
    logger.debug("Report name for %s: %s", root_url, name)
    return name


def result_path(root_url: str, output_dir: Union[str, Path], suffix: str = ".md") -> Path:
    """Path of the result file for *root_url* inside *output_dir*."""
    return Path(output_dir) / f"{report_name(root_url)}{suffix}"
