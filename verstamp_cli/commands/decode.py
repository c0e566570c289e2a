"""
Decode command for the VerStamp CLI

Turns a packed version number (as reported by a running binary) back into
its dotted form.
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from verstamp_generator.encoder import COMPONENT_NAMES, decode_bcd, format_dotted, parse_packed
from verstamp_generator.exceptions import VerStampError

from ..ui.messages import show_generation_error

console = Console()


def decode_version(value: str, verbose: bool = False):
    """Print the dotted version for a packed value."""
    try:
        packed = parse_packed(value)
    except VerStampError as e:
        show_generation_error(e)
        raise typer.Exit(1)

    components = decode_bcd(packed)
    console.print(f"[bold]0x{packed:08X}[/bold] → [bold green]{format_dotted(*components)}[/bold green]")

    if verbose:
        table = Table(show_header=True, header_style="bold blue")
        table.add_column("Component")
        table.add_column("Value", justify="right")
        table.add_column("Byte", justify="right")
        for name, component in zip(COMPONENT_NAMES, components):
            table.add_row(name, str(component), f"0x{component:02X}")
        console.print(table)
