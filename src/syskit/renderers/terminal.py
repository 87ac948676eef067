"""Terminal renderer for syskit output."""

from __future__ import annotations

import io
from typing import Any

from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from syskit.models.accounts import UserAccounts
from syskit.models.hardware import HardwareInfo
from syskit.models.security import SecurityInfo
from syskit.models.snapshot import SnapshotReport
from syskit.models.software import OSInfo
from syskit.renderers.base import (
    BaseRenderer,
    OutputFormat,
    RenderContext,
    format_date,
    format_flag,
    format_picture,
)

_FLAG_STYLES = {"Enabled": "green", "Disabled": "red", "Unknown": "yellow"}


class TerminalRenderer(BaseRenderer):
    """Renderer for rich terminal output, one table per domain.

    ``render`` prints to the console and returns an empty string. Use
    ``Console(record=True)`` or ``render_to_file`` to capture the text.

    Example:
        renderer = TerminalRenderer()
        renderer.render(snapshot.security, RenderContext())
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    @property
    def format(self) -> OutputFormat:
        return OutputFormat.TERMINAL

    def render(self, data: Any, context: RenderContext) -> str:
        if isinstance(data, SnapshotReport):
            self._console.print(
                Panel(
                    f"[bold]{escape(data.hardware.model_name)}[/bold] running "
                    f"[bold]{escape(data.os.title)} {escape(data.os.display_version)}[/bold]",
                    title="System Report",
                )
            )
            self._render_hardware(data.hardware, context)
            self._render_os(data.os, context)
            self._render_security(data.security, context)
            self._render_accounts(data.accounts, context)
        elif isinstance(data, HardwareInfo):
            self._render_hardware(data, context)
        elif isinstance(data, OSInfo):
            self._render_os(data, context)
        elif isinstance(data, SecurityInfo):
            self._render_security(data, context)
        elif isinstance(data, UserAccounts):
            self._render_accounts(data, context)
        else:
            self._render_generic(data, context)

        return ""

    def render_to_file(self, data: Any, context: RenderContext) -> None:
        """Capture the terminal output and write it to ``context.output_path``."""
        if context.output_path is None:
            raise ValueError("output_path must be set in context for file rendering")

        file_console = Console(record=True, file=io.StringIO(), force_terminal=context.color, width=120)
        original_console = self._console
        self._console = file_console

        try:
            self.render(data, context)
            output = file_console.export_text(styles=context.color)
            context.output_path.write_text(output, encoding="utf-8")
        finally:
            self._console = original_console

    def _render_hardware(self, hardware: HardwareInfo, context: RenderContext) -> None:
        table = self._property_table("Hardware")
        table.add_row("Model", f"{escape(hardware.model_name)} [dim]({escape(hardware.model_details)})[/dim]")
        table.add_row("Identifier", escape(hardware.model_identifier))
        table.add_row("Chip", escape(hardware.chip))
        table.add_row("Memory", escape(hardware.memory) + (" [dim](upgradable)[/dim]" if hardware.has_upgradable_memory else ""))
        table.add_row("Serial", escape(hardware.serial))
        if context.verbose:
            table.add_row("Configuration Code", escape(hardware.config_code))
            table.add_row("Board ID", escape(hardware.board_id))
            table.add_row("Regulatory ID", escape(hardware.regulatory_id))
        table.add_row("Kernel", escape(hardware.kernel_version))
        table.add_row("Uptime", hardware.formatted_uptime)
        self._console.print()
        self._console.print(table)

    def _render_os(self, os_info: OSInfo, context: RenderContext) -> None:
        updates = os_info.software_updates
        badges = [
            label
            for label, on in (
                ("beta", os_info.is_beta),
                ("internal", os_info.is_internal),
                ("virtual machine", os_info.is_virtual_machine),
            )
            if on
        ]

        table = self._property_table("Operating System")
        table.add_row("Title", escape(os_info.title))
        table.add_row("Version", escape(os_info.display_version) + (f" [yellow]({', '.join(badges)})[/yellow]" if badges else ""))
        table.add_row("Previous Build", escape(updates.previous_build))
        table.add_row("Last Upgrade", updates.last_upgrade_formatted)
        table.add_row("Last Update Check", format_date(updates.last_successful_check))
        table.add_row("Automatic Download", self._flag(updates.automatic_download))
        table.add_row("Critical Updates", self._flag(updates.critical_update_install))
        table.add_row("Automatic macOS Updates", self._flag(updates.automatically_install_macos_updates))
        self._console.print()
        self._console.print(table)

        if updates.recommended_updates:
            pending = Table(title="Recommended Updates")
            pending.add_column("Name", style="bold")
            pending.add_column("Version")
            pending.add_column("First Offered", style="dim")
            if context.verbose:
                pending.add_column("Identifier", style="dim")
            for update in updates.recommended_updates:
                row = [
                    escape(update.display_name),
                    escape(update.display_version),
                    format_date(updates.previous_offers.get(update.product_key)),
                ]
                if context.verbose:
                    row.append(escape(update.identifier))
                pending.add_row(*row)
            self._console.print(pending)
        else:
            self._console.print("[green]No pending updates.[/green]")

    def _render_security(self, security: SecurityInfo, context: RenderContext) -> None:
        table = self._property_table("Security")
        table.add_row("System Integrity Protection", self._flag(security.sip_enabled))
        table.add_row("Gatekeeper", self._flag(security.gatekeeper_enabled))
        table.add_row("FileVault", self._flag(security.filevault_enabled))
        table.add_row("Firewall", self._flag(security.firewall_enabled))
        table.add_row("Find My", self._flag(security.findmy_enabled))
        table.add_row("Allowed App Sources", security.allowed_app_sources.value)
        self._console.print()
        self._console.print(table)

        if security.issues:
            self._console.print(f"[yellow]{len(security.issues)} probe(s) indeterminate[/yellow]")
            if context.verbose:
                for issue in security.issues:
                    self._console.print(f"  [yellow]?[/yellow] {escape(issue.message)} [dim]({issue.code})[/dim]")

    def _render_accounts(self, accounts: UserAccounts, context: RenderContext) -> None:
        apple = accounts.apple_account
        table = self._property_table("Accounts")
        if apple is None:
            table.add_row("Apple Account", "[dim]Not signed in[/dim]")
        else:
            verified = "[green]verified[/green]" if apple.is_verified else "[yellow]unverified[/yellow]"
            table.add_row("Apple Account", f"{escape(apple.display_name)} ({escape(apple.account_id)}) {verified}")
        table.add_row("Guest Account", self._flag(accounts.guest_enabled))
        table.add_row("Recent Users", ", ".join(escape(name) for name in accounts.recent_users) or "[dim]none[/dim]")
        self._console.print()
        self._console.print(table)

        if accounts.managed_users:
            users = Table(title="Managed Users")
            users.add_column("Short Name", style="bold")
            users.add_column("Full Name")
            users.add_column("Type", style="dim")
            if context.verbose:
                users.add_column("Hint")
                users.add_column("Picture", style="dim")
            for user in accounts.managed_users:
                row = [escape(user.short_name), escape(user.full_name), escape(user.user_type)]
                if context.verbose:
                    row.extend([escape(user.password_hint) or "-", format_picture(user.picture_data)])
                users.add_row(*row)
            self._console.print(users)

        if accounts.deleted_users and context.verbose:
            deleted = Table(title="Deleted Users")
            deleted.add_column("Name", style="bold")
            deleted.add_column("Real Name")
            deleted.add_column("UID", justify="right")
            deleted.add_column("Deleted", style="dim")
            for user in accounts.deleted_users:
                deleted.add_row(escape(user.name), escape(user.real_name), str(user.unique_id), format_date(user.delete_date))
            self._console.print(deleted)

    def _render_generic(self, data: Any, context: RenderContext) -> None:
        if isinstance(data, BaseModel):
            data = data.model_dump(mode="json")
        if isinstance(data, dict):
            table = self._property_table(None)
            for key, value in data.items():
                table.add_row(escape(str(key)), escape(str(value)))
            self._console.print(table)
        else:
            self._console.print(data, markup=False)

    @staticmethod
    def _property_table(title: str | None) -> Table:
        table = Table(title=title, show_header=False)
        table.add_column("Property", style="bold")
        table.add_column("Value")
        return table

    @staticmethod
    def _flag(value: bool | None) -> str:
        label = format_flag(value)
        style = _FLAG_STYLES[label]
        return f"[{style}]{label}[/{style}]"
