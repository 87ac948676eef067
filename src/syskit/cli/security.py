"""CLI command for the security posture."""

from typing import Optional

import typer

from syskit.cli.utils import get_snapshot, handle_errors, output_report


def security_cmd(
    format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format (terminal, json, markdown)",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Exit with status 2 if any protection is disabled or unknown",
    ),
) -> None:
    """
    Re-check the security posture of this Mac.

    Every probe runs again, even if a report was already collected.
    """
    snapshot = get_snapshot()
    with handle_errors():
        snapshot.refresh("security")
        security = snapshot.security

    output_report(security, format, verbose=True)

    if strict:
        flags = [
            security.sip_enabled,
            security.gatekeeper_enabled,
            security.filevault_enabled,
            security.firewall_enabled,
        ]
        # Output may be JSON, so the exit status is the only signal.
        if not all(flag is True for flag in flags):
            raise typer.Exit(2)
