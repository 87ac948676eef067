"""CLI commands for syskit configuration."""

from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.markup import escape

from syskit.cli.utils import console, handle_errors
from syskit.utils.config import SyskitConfig, default_config_path, get_config, get_config_paths, save_config

app = typer.Typer(help="Inspect and create syskit configuration.", no_args_is_help=True)


@app.command("show")
def show_cmd() -> None:
    """Show the effective configuration and where it is searched for."""
    with handle_errors():
        config = get_config()
    console.print("[bold]Search paths[/bold]")
    for path in get_config_paths():
        marker = "[green]*[/green]" if path.exists() else " "
        console.print(f"  {marker} {escape(str(path))}")
    console.print()
    typer.echo(yaml.safe_dump(config.model_dump(mode="json"), sort_keys=False).rstrip())


@app.command("init")
def init_cmd(
    path: Optional[Path] = typer.Option(
        None,
        "--path",
        "-p",
        help="Where to write the file (default ~/.config/syskit/config.yaml)",
    ),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Write a configuration file holding the defaults."""
    if path is None:
        path = default_config_path()
    if path.exists() and not force:
        console.print(f"[red]Error:[/red] {escape(str(path))} already exists (use --force to overwrite)")
        raise typer.Exit(1)

    with handle_errors():
        written = save_config(SyskitConfig(), path, include_defaults=True)
    console.print(f"Configuration written to {escape(str(written))}")
