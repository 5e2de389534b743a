"""Command-line interface for svgextruder.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bars for path processing
- Per-outline complexity and detail tables
- Verbose/quiet output modes
- Detailed error reporting for failed paths
"""

from svgextruder.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
