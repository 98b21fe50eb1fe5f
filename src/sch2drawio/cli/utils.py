"""Shared utilities for CLI commands."""

from __future__ import annotations

import sys
import traceback
from typing import TYPE_CHECKING

from sch2drawio.exceptions import Sch2DrawioError

if TYPE_CHECKING:
    from rich.console import Console

__all__ = ["format_error", "print_error", "get_error_console"]

# Module-level console for error output, created lazily
_error_console: Console | None = None


def get_error_console() -> Console:
    """Get or create the Rich console for error output.

    The console writes to stderr and is cached for reuse.
    """
    global _error_console
    if _error_console is None:
        from rich.console import Console

        _error_console = Console(stderr=True, force_terminal=None)
    return _error_console


def print_error(
    e: Exception,
    verbose: bool = False,
    use_rich: bool | None = None,
) -> None:
    """
    Print an exception, with Rich styling on a terminal.

    Plain text is used for non-TTY output (pipes, redirected logs).

    Args:
        e: The exception to print
        verbose: If True, include full stack trace
        use_rich: Override automatic TTY detection (None = auto-detect)
    """
    console = get_error_console()

    if use_rich is None:
        use_rich = console.is_terminal

    if verbose:
        print(traceback.format_exc(), file=sys.stderr)
        return

    if use_rich:
        from rich.text import Text

        # Text keeps brackets in messages (e.g. "[@cellName]") from being read as markup
        console.print(Text("Error: ", style="bold red") + Text(_error_body(e)))
    else:
        print(format_error(e, verbose=False), file=sys.stderr)


def _error_body(e: Exception) -> str:
    if isinstance(e, Sch2DrawioError):
        return str(e)
    return f"{type(e).__name__}: {e}"


def format_error(e: Exception, verbose: bool = False) -> str:
    """
    Format an exception for user-friendly display (plain text).

    Args:
        e: The exception to format
        verbose: If True, include full stack trace

    Returns:
        Formatted error message string
    """
    if verbose:
        return traceback.format_exc()
    return f"Error: {_error_body(e)}"
