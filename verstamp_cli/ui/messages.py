"""
Status messages for the VerStamp CLI

Rich-formatted success, warning and error lines plus diagnostic panels for
structured errors.
"""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from verstamp_generator.error_catalog import get_error_catalog
from verstamp_generator.exceptions import VerStampError

console = Console()

def show_success_message(message: str, details: Optional[str] = None):
    """Show a formatted success message."""
    console.print(f"✅ [bold green]{escape(message)}[/bold green]")
    if details:
        console.print(f"   [dim]{escape(details)}[/dim]")

def show_warning_message(message: str, details: Optional[str] = None):
    """Show a formatted warning message."""
    console.print(f"⚠️  [bold yellow]{escape(message)}[/bold yellow]")
    if details:
        console.print(f"   [dim]{escape(details)}[/dim]")

def show_error_message(message: str, details: Optional[str] = None):
    """Show a formatted error message."""
    console.print(f"❌ [bold red]{escape(message)}[/bold red]")
    if details:
        console.print(f"   [dim]{escape(details)}[/dim]")

def show_generation_error(error: Exception, verbose: bool = False):
    """Show an error with its resolution hints.

    Errors raised without hints are matched against the error catalog.
    """
    show_error_message(str(error))

    hints = list(getattr(error, "resolution_hints", []) or [])
    if not hints:
        hints = get_error_catalog().find_resolution_hints(str(error))

    for hint in hints:
        console.print(f"💡 [bold]{escape(hint.title)}[/bold]: {escape(hint.description)}")
        for step in hint.steps:
            console.print(f"   • [dim]{escape(step)}[/dim]")

    if verbose and isinstance(error, VerStampError):
        console.print(Panel(escape(error.format_diagnostic_message()), title="Diagnostics", border_style="red"))
