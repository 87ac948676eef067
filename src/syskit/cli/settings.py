"""CLI command for opening System Settings panes."""

import typer
from rich.markup import escape

from syskit.cli.utils import console, handle_errors
from syskit.core.launcher import SettingsLauncher, SettingsPane
from syskit.utils.config import get_config
from syskit.utils.shell import CommandRunner


def open_cmd(
    pane: str = typer.Argument(
        ...,
        help="Pane to open (software-update, security, apple-id, users-and-groups, about-this-mac)",
    ),
) -> None:
    """
    Open a System Settings pane.

    Example:
        syskit open security
    """
    try:
        target = SettingsPane.from_slug(pane)
    except ValueError:
        choices = ", ".join(p.slug for p in SettingsPane)
        console.print(f"[red]Error:[/red] Unknown pane: {escape(pane)} (choose from {choices})")
        raise typer.Exit(1)

    with handle_errors():
        config = get_config()
    launcher = SettingsLauncher(CommandRunner(timeout=config.commands.timeout), config.commands.open)
    launcher.open(target)
