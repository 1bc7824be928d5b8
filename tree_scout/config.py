"""
Loading and validating the TreeScout crawl configuration.

The configuration is a frozen Pydantic model built once at the boundary (CLI or
caller) and passed into the crawler. Values may come from keyword arguments,
from a YAML/JSON file, or from both (keyword arguments win).
"""
from __future__ import annotations

import errno
import json
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union
from urllib.parse import urlparse

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from tree_scout.errors import InputValidationError

__all__ = ["CrawlConfig", "build_config", "load_config", "DEFAULT_STYLE_CLASS"]

#: class attribute of directory/file rows in the listing markup
DEFAULT_STYLE_CLASS = "js-navigation-open link-gray-dark"

_EXTENSION_RE = re.compile(r"^\.\S*$")


class CrawlConfig(BaseModel):
    """Configuration for a single crawl."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    root_url: str = Field(..., description="Listing page of the repository (or sub-directory) to crawl.")
    extension: str = Field(..., description="Suffix of tracked files, e.g. '.md'.")
    ignore: Tuple[str, ...] = Field(default=(), description="Regex fragments of directory names to skip.")
    origin: str = Field("https://github.com", description="Scheme and host prefixed to relative hrefs.")
    style_class: str = Field(DEFAULT_STYLE_CLASS, min_length=1, description="class of file/directory rows.")
    user_agent: str = Field("TreeScoutBot/1.0", min_length=1, description="User-Agent header.")
    timeout: float = Field(10.0, gt=0, description="Timeout of one request (seconds).")
    max_concurrency: Optional[int] = Field(None, ge=1, description="Fetches in flight; None means unbounded.")
    dispatch_delay: float = Field(0.0, ge=0, description="Pause before each new directory fetch (seconds).")
    output_dir: Path = Field(Path("results"), description="Directory of the markdown result file.")

    @field_validator("extension")
    def _check_extension(cls, v: str) -> str:
        if not _EXTENSION_RE.match(v):
            raise ValueError(f"extension must start with a dot and contain no spaces, got {v!r}")
        return v

    @field_validator("ignore", mode="before")
    def _split_ignore(cls, v: Any) -> Any:
        if v is None:
            return ()
        if isinstance(v, str):
            v = v.split(" ")
        if isinstance(v, (list, tuple)):
            # "a  b" and "" split into empty fragments that would match everything
            return tuple(p for p in v if p != "")
        return v

    @field_validator("ignore")
    def _compile_ignore(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        for pattern in v:
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ValueError(f"bad ignore pattern {pattern!r}: {exc}") from exc
        return v

    @field_validator("origin", mode="before")
    def _strip_origin(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.rstrip("/")
            parsed = urlparse(v)
            if parsed.scheme not in ("http", "https") or not parsed.netloc or parsed.path:
                raise ValueError(f"origin must be scheme://host, got {v!r}")
        return v

    @model_validator(mode="after")
    def _check_root_url(self) -> CrawlConfig:
        if not re.match(rf"^{re.escape(self.origin)}/.*$", self.root_url):
            raise ValueError(f"root_url must start with {self.origin}/, got {self.root_url!r}")
        return self

    @property
    def ignore_patterns(self) -> Tuple[re.Pattern[str], ...]:
        return tuple(re.compile(p) for p in self.ignore)


def build_config(**values: Any) -> CrawlConfig:
    """Validate *values* into a :class:`CrawlConfig` or raise :class:`InputValidationError`."""
    try:
        return CrawlConfig(**values)
    except ValidationError as exc:
        raise InputValidationError(str(exc)) from exc


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise InputValidationError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise InputValidationError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise InputValidationError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise InputValidationError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def read_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a YAML or JSON config file into a plain mapping (not yet validated)."""
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise InputValidationError(f"Unsupported config format: {suffix}")


def load_config(path: Union[str, Path, None], **overrides: Any) -> CrawlConfig:
    """
    Build a :class:`CrawlConfig` from an optional file plus keyword overrides.

    Overrides whose value is ``None`` are ignored, so CLI options that were not
    given do not mask values from the file.
    """
    data: Dict[str, Any] = read_config_file(path) if path is not None else {}
    data.update({k: v for k, v in overrides.items() if v is not None})
    return build_config(**data)
