"""Shared utilities for CLI commands."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

import typer
from rich.console import Console
from rich.markup import escape

from syskit.core.snapshot import SystemSnapshot, get_default_snapshot
from syskit.renderers import OutputFormat, RenderContext, TerminalRenderer, get_renderer
from syskit.utils.config import get_config
from syskit.utils.errors import SyskitError

# Shared console instance
console = Console()


@contextmanager
def handle_errors() -> Iterator[None]:
    """Print a syskit error and exit with status 1."""
    try:
        yield
    except SyskitError as e:
        console.print(f"[red]Error:[/red] {escape(e.message)} [dim]({e.code})[/dim]")
        raise typer.Exit(1) from e


def get_snapshot() -> SystemSnapshot:
    """The process-wide snapshot; exits if this host cannot be read."""
    with handle_errors():
        return get_default_snapshot()


def resolve_format(format: str | None) -> OutputFormat:
    """Parse ``--format``, falling back to the configured default."""
    with handle_errors():
        value = format or get_config().output.default_format
    try:
        return OutputFormat(value.lower())
    except ValueError:
        choices = ", ".join(f.value for f in OutputFormat)
        console.print(f"[red]Error:[/red] Unsupported format: {escape(str(value))} (choose from {choices})")
        raise typer.Exit(1)


def output_report(data: Any, format: str | None, output: Path | None = None, verbose: bool = False) -> None:
    """Render a model to the console or to a file.

    Args:
        data: Snapshot report or domain model
        format: Output format name, None for the configured default
        output: Optional output file path
        verbose: Include detail rows
    """
    with handle_errors():
        config = get_config()
    context = RenderContext(
        format=resolve_format(format),
        output_path=output,
        verbose=verbose or config.output.verbose,
        color=config.output.color,
    )

    if context.format == OutputFormat.TERMINAL:
        renderer = TerminalRenderer(console=console)
    else:
        renderer = get_renderer(context.format)

    if output:
        renderer.render_to_file(data, context)
        console.print(f"Report written to {escape(str(output))}")
    elif context.format == OutputFormat.TERMINAL:
        renderer.render(data, context)
    else:
        typer.echo(renderer.render(data, context))
