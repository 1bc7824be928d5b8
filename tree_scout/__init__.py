"""
TreeScout package initializer.
Defines package version and exposes CLI.
"""
__version__ = "0.1.0"

# Expose CLI entry point; `tree_scout.cli` stays the submodule
from tree_scout.cli import cli as main_cli  # noqa: E402

__all__ = ["__version__", "main_cli"]
