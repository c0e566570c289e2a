"""
Generate, check and show commands for the VerStamp CLI

Render the version artifact, verify an existing artifact is current, or list
the bindings a template can use.
"""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from verstamp_generator.exceptions import VerStampError

from ..ui.messages import (
    show_error_message,
    show_generation_error,
    show_success_message,
    show_warning_message,
)
from ..utils.config_helpers import build_generator

console = Console()


def run_generate(
    config: Optional[str] = None,
    output: Optional[str] = None,
    template: Optional[str] = None,
    builtin: Optional[str] = None,
    set_version: Optional[str] = None,
    vcs_hash: Optional[str] = None,
    build_date: Optional[str] = None,
    dry_run: bool = False,
    strict: bool = False,
    verbose: bool = False,
):
    """Render the artifact and write it atomically."""
    try:
        generator = build_generator(config, template=template, builtin=builtin, verbose=verbose)
        version = generator.resolve_version(set_version, vcs_hash=vcs_hash, build_date=build_date)
        result = generator.generate(output, version=version, dry_run=dry_run, strict=strict)
    except (VerStampError, OSError) as e:
        show_generation_error(e, verbose=verbose)
        raise typer.Exit(1)

    if dry_run:
        typer.echo(result.text, nl=False)
        return

    details = f"{result.version.info} | {result.version.bcd_literal} | commit {result.version.vcs_hash or 'n/a'}"
    if result.changed:
        show_success_message(f"Generated {result.output_path}", details)
    else:
        show_success_message(f"Up to date: {result.output_path}", details)

    if not result.version.vcs_hash:
        show_warning_message("No VCS hash available", "artifact carries the 0x00000000 sentinel")

    extra_unused = [name for name in result.unused if name in generator.config.extra_bindings]
    if extra_unused:
        show_warning_message("Unused extra bindings", ", ".join(extra_unused))


def run_check(
    config: Optional[str] = None,
    output: Optional[str] = None,
    template: Optional[str] = None,
    builtin: Optional[str] = None,
    set_version: Optional[str] = None,
    exact: bool = False,
    verbose: bool = False,
):
    """Exit non-zero when the artifact differs from what generate would write."""
    try:
        generator = build_generator(config, template=template, builtin=builtin, verbose=verbose)
        version = generator.resolve_version(set_version) if set_version else None
        in_sync = generator.check(output, version=version, ignore_volatile=not exact)
        path = generator.output_path(output)
    except (VerStampError, OSError) as e:
        show_generation_error(e, verbose=verbose)
        raise typer.Exit(1)

    if in_sync:
        show_success_message(f"Artifact is current: {path}")
        return

    show_error_message(f"Artifact is missing or out of date: {path}", "run: verstamp generate")
    raise typer.Exit(1)


def show_bindings(
    config: Optional[str] = None,
    template: Optional[str] = None,
    builtin: Optional[str] = None,
    set_version: Optional[str] = None,
    vcs_hash: Optional[str] = None,
    build_date: Optional[str] = None,
    verbose: bool = False,
):
    """Print every binding and whether the template uses it."""
    try:
        generator = build_generator(config, template=template, builtin=builtin, verbose=verbose)
        version = generator.resolve_version(set_version, vcs_hash=vcs_hash, build_date=build_date)
        _, bindings, unused = generator.render(version)
    except VerStampError as e:
        show_generation_error(e, verbose=verbose)
        raise typer.Exit(1)

    table = Table(show_header=True, header_style="bold blue", title=f"Bindings for {version.info}")
    table.add_column("Name")
    table.add_column("Value", overflow="fold")
    table.add_column("Used", justify="center")

    unused_set = set(unused)
    for name, value in bindings.items():
        table.add_row(name, escape(str(value)), "" if name in unused_set else "✓")

    console.print(table)
