"""CLI command for the system report."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from syskit.cli.utils import console, get_snapshot, handle_errors, output_report
from syskit.core.snapshot import DOMAINS


def show_cmd(
    section: Optional[str] = typer.Option(
        None,
        "--section",
        "-s",
        help="Only one domain (hardware, os, security, accounts)",
    ),
    format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format (terminal, json, markdown)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Show per-user detail, identifiers and probe issues",
    ),
) -> None:
    """
    Show what syskit knows about this Mac.

    Example:
        syskit show --section security --format json
    """
    if section is not None and section not in DOMAINS:
        console.print(f"[red]Error:[/red] Unknown section: {escape(section)} (choose from {', '.join(DOMAINS)})")
        raise typer.Exit(1)

    snapshot = get_snapshot()
    with handle_errors():
        if section is None:
            with console.status("Collecting system information..."):
                data = snapshot.report()
        else:
            data = getattr(snapshot, section)

    output_report(data, format, output, verbose)
