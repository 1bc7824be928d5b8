"""tree_scout.report: markdown and JSON renderers used by the CLI and tests."""

from tree_scout.report.json_report import render_json
from tree_scout.report.markdown_report import render_markdown, write_markdown

__all__ = ["render_json", "render_markdown", "write_markdown"]
