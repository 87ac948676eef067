"""Main CLI entry point for syskit."""

from pathlib import Path
from typing import Optional

import typer

from syskit.cli import config, security, settings, show, user
from syskit.cli.utils import console, handle_errors

app = typer.Typer(
    name="syskit",
    help="Read hardware, OS, security and account information from a Mac.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register subcommands
app.command(name="show")(show.show_cmd)
app.command(name="security")(security.security_cmd)
app.add_typer(user.app, name="user")
app.command(name="open")(settings.open_cmd)
app.add_typer(config.app, name="config")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output"),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (default: search the standard locations)",
    ),
) -> None:
    """
    syskit: read-only system information for macOS.

    - [bold]show[/bold]: Hardware, OS, security and accounts report
    - [bold]security[/bold]: Re-check the security posture
    - [bold]user[/bold]: Password hints and current user status
    - [bold]open[/bold]: Open a System Settings pane
    - [bold]config[/bold]: Inspect and create configuration
    """
    from syskit.core.snapshot import set_default_snapshot
    from syskit.utils.config import load_config, set_config
    from syskit.utils.logging import configure_logging

    if verbose:
        configure_logging(level="DEBUG", structured=True)
    elif quiet:
        configure_logging(level="ERROR")
    else:
        configure_logging(level="WARNING")

    if config_file is not None:
        with handle_errors():
            set_config(load_config(config_file))
        set_default_snapshot(None)


@app.command()
def version() -> None:
    """Show the syskit version."""
    from syskit import __version__

    console.print(f"syskit version {__version__}")


if __name__ == "__main__":
    app()
