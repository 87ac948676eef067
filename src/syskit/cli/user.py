"""CLI commands for local users."""

import getpass

import typer
from rich.markup import escape

from syskit.cli.utils import console, get_snapshot, handle_errors

app = typer.Typer(help="Look up local user accounts.", no_args_is_help=True)


@app.command("hint")
def hint_cmd(
    username: str = typer.Argument(..., help="Short name of a local user"),
) -> None:
    """
    Show the password hint of a local user.

    Prints 'no hint' when the user has none.

    Example:
        syskit user hint alice
    """
    snapshot = get_snapshot()
    with handle_errors():
        hint = snapshot.password_hint(username)
    console.print(hint, markup=False, highlight=False)


@app.command("whoami")
def whoami_cmd() -> None:
    """Show the current user and its admin and guest status."""
    snapshot = get_snapshot()
    with handle_errors():
        is_admin = snapshot.current_user_is_admin()
        is_guest = snapshot.current_user_is_guest()

    console.print(f"[bold]User:[/bold]  {escape(getpass.getuser())}")
    console.print(f"[bold]Admin:[/bold] {'yes' if is_admin else 'no'}")
    console.print(f"[bold]Guest:[/bold] {'yes' if is_guest else 'no'}")
