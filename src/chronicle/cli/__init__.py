# src/chronicle/cli/__init__.py
"""CLI package for Chronicle.

This package provides the command-line interface using Typer.
The CLI is a thin wrapper around the commands layer.
"""

from chronicle.cli.app import app, console

__all__ = ["app", "console"]
