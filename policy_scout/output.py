"""Standardized terminal output utilities.

All user-facing CLI messages go through these functions so every command
looks the same. Diagnostics belong in ``logging``; these helpers are for
what the operator is meant to read.

Usage:
    from policy_scout.output import success, info, warn, error, detail

    success("Collected 10 image sources")
    info("Computing image sources...")
    warn("Skipped 2 assets with unreadable metadata")
    error("policy_id not found: abc123")
    detail("QmXoypizjW3WknFiJnKLwHCnL72vedxjQkDDP1mXWo6uco")

Warnings and errors go to stderr by default so stdout stays clean for
piping the collected sources.
"""

from __future__ import annotations

import sys
from typing import TextIO

import click

# ANSI color codes via click's style system
_STYLES = {
    "success": {"fg": "green"},
    "info": {"fg": "blue"},
    "warn": {"fg": "yellow"},
    "error": {"fg": "red"},
    "detail": {"fg": "bright_black"},
}

_PREFIXES = {
    "success": "✓",  # checkmark
    "info": "→",  # arrow
    "warn": "⚠",  # warning
    "error": "✗",  # X
    "detail": " ",
}


def _output(message: str, style: str, *, file: TextIO | None = None, nl: bool = True) -> None:
    """Write a prefixed, colored message.

    Args:
        message: The message to display.
        style: The style name (success, error, info, warn, detail).
        file: File to write to.
        nl: Whether to print a newline after the message.
    """
    fg_color = _STYLES[style]["fg"]
    styled_prefix = click.style(_PREFIXES[style], fg=fg_color)
    styled_message = click.style(message, fg=fg_color)
    click.echo(f"{styled_prefix} {styled_message}", file=file, nl=nl)


def success(message: str, *, file: TextIO | None = None, nl: bool = True) -> None:
    """Print a success message with green checkmark.

    Example:
        >>> success("Collected 3 image sources")
        ✓ Collected 3 image sources
    """
    _output(message, "success", file=file, nl=nl)


def info(message: str, *, file: TextIO | None = None, nl: bool = True) -> None:
    """Print an info message with blue arrow.

    Example:
        >>> info("Policy abc123 lists 42 assets")
        → Policy abc123 lists 42 assets
    """
    _output(message, "info", file=file, nl=nl)


def warn(message: str, *, file: TextIO | None = None, nl: bool = True) -> None:
    """Print a warning with yellow warning symbol (default: stderr)."""
    _output(message, "warn", file=file or sys.stderr, nl=nl)


def error(message: str, *, file: TextIO | None = None, nl: bool = True) -> None:
    """Print an error with red X (default: stderr)."""
    _output(message, "error", file=file or sys.stderr, nl=nl)


def detail(message: str, *, file: TextIO | None = None, nl: bool = True) -> None:
    """Print an indented, dimmed detail line."""
    _output(message, "detail", file=file, nl=nl)
