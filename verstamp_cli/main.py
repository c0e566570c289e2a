#!/usr/bin/env python3
"""
VerStamp CLI

Rich-based command line for stamping build version metadata into a
generated header, Python module or JSON file.
"""

from __future__ import annotations

import sys
from typing import Optional

import typer
from rich.console import Console

from .commands.decode import decode_version
from .commands.generate import run_check, run_generate, show_bindings
from .commands.init import init_config

# Initialize Rich console
console = Console()

# Main app
app = typer.Typer(
    name="verstamp",
    help="VerStamp - build version header generator",
    rich_markup_mode="rich",
    no_args_is_help=True,
    add_completion=False,
)

# Add version callback
def version_callback(value: bool):
    if value:
        from verstamp_cli import get_full_version
        console.print(f"VerStamp v{get_full_version()}")
        raise typer.Exit()

@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version information"
    ),
):
    """
    [bold blue]VerStamp[/bold blue]

    Generates the single source of truth for "what version is this build":
    packed version number, dotted strings, commit hash and build date.

    [dim]Examples:[/dim]
        verstamp init                              # Write a starter verstamp.yaml
        verstamp generate                          # Render the configured artifact
        verstamp generate --set-version 1.2.0.5-rc1
        verstamp check                             # Fail if the artifact is stale
        verstamp decode 0x01010200                 # -> 1.1.2.0
    """
    pass

# Generate command
@app.command("generate")
def generate(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to verstamp YAML config"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Artifact path (overrides config)"),
    template: Optional[str] = typer.Option(None, "--template", "-t", help="Template file (overrides config)"),
    builtin: Optional[str] = typer.Option(None, "--builtin", help="Built-in template: c_header, python, json"),
    set_version: Optional[str] = typer.Option(None, "--set-version", help="Version to stamp, e.g. '1.2.3.4-rc1'"),
    vcs_hash: Optional[str] = typer.Option(None, "--hash", help="Commit id to stamp instead of asking git"),
    build_date: Optional[str] = typer.Option(None, "--build-date", help="ISO-8601 build timestamp (UTC)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the rendered artifact instead of writing it"),
    strict: bool = typer.Option(False, "--strict", help="Fail when extra bindings are not used by the template"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
):
    """🏷️  Render the version artifact."""
    run_generate(
        config=config,
        output=output,
        template=template,
        builtin=builtin,
        set_version=set_version,
        vcs_hash=vcs_hash,
        build_date=build_date,
        dry_run=dry_run,
        strict=strict,
        verbose=verbose,
    )

# Check command
@app.command("check")
def check(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to verstamp YAML config"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Artifact path (overrides config)"),
    template: Optional[str] = typer.Option(None, "--template", "-t", help="Template file (overrides config)"),
    builtin: Optional[str] = typer.Option(None, "--builtin", help="Built-in template: c_header, python, json"),
    set_version: Optional[str] = typer.Option(None, "--set-version", help="Expected version, e.g. '1.2.3.4'"),
    exact: bool = typer.Option(False, "--exact", help="Also compare build date and commit hash"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
):
    """🔍 Verify the artifact matches its template and configuration."""
    run_check(
        config=config,
        output=output,
        template=template,
        builtin=builtin,
        set_version=set_version,
        exact=exact,
        verbose=verbose,
    )

# Show command
@app.command("show")
def show(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to verstamp YAML config"),
    template: Optional[str] = typer.Option(None, "--template", "-t", help="Template file (overrides config)"),
    builtin: Optional[str] = typer.Option(None, "--builtin", help="Built-in template: c_header, python, json"),
    set_version: Optional[str] = typer.Option(None, "--set-version", help="Version to show, e.g. '1.2.3.4'"),
    vcs_hash: Optional[str] = typer.Option(None, "--hash", help="Commit id instead of asking git"),
    build_date: Optional[str] = typer.Option(None, "--build-date", help="ISO-8601 build timestamp (UTC)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
):
    """📋 List every binding and whether the template uses it."""
    show_bindings(
        config=config,
        template=template,
        builtin=builtin,
        set_version=set_version,
        vcs_hash=vcs_hash,
        build_date=build_date,
        verbose=verbose,
    )

# Decode command
@app.command("decode")
def decode(
    value: str = typer.Argument(..., help="Packed version, e.g. 0x01010200 or 16843264"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show per-component bytes"),
):
    """🔢 Decode a packed version number to dotted form."""
    decode_version(value, verbose=verbose)

# Init command
@app.command("init")
def init(
    path: str = typer.Option("verstamp.yaml", "--path", "-p", help="Where to write the config"),
    project_name: str = typer.Option("MyProject", "--project-name", help="Project display name"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config"),
):
    """🆕 Write a starter configuration."""
    init_config(path=path, project_name=project_name, force=force)


def cli_main():
    """Entry point for the CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n🛑 [yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

if __name__ == "__main__":
    cli_main()
