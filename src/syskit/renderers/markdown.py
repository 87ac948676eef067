"""Markdown renderer for syskit output."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

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


class MarkdownRenderer(BaseRenderer):
    """Renderer for Markdown documents.

    A full report gets one second-level section per domain; a single
    domain model renders as that section alone.

    Example:
        renderer = MarkdownRenderer()
        md_str = renderer.render(snapshot.report(), context)
    """

    @property
    def format(self) -> OutputFormat:
        return OutputFormat.MARKDOWN

    def render(self, data: Any, context: RenderContext) -> str:
        if isinstance(data, SnapshotReport):
            lines = [
                "# System Report",
                "",
                f"**Generated:** {data.generated_at.isoformat()}",
                "",
            ]
            lines.extend(self._hardware(data.hardware, context))
            lines.extend(self._os(data.os, context))
            lines.extend(self._security(data.security, context))
            lines.extend(self._accounts(data.accounts, context))
        elif isinstance(data, HardwareInfo):
            lines = self._hardware(data, context)
        elif isinstance(data, OSInfo):
            lines = self._os(data, context)
        elif isinstance(data, SecurityInfo):
            lines = self._security(data, context)
        elif isinstance(data, UserAccounts):
            lines = self._accounts(data, context)
        else:
            lines = self._generic(data)

        return "\n".join(lines).rstrip() + "\n"

    def _hardware(self, hardware: HardwareInfo, context: RenderContext) -> list[str]:
        lines = ["## Hardware", ""]
        lines.extend(
            self._table(
                [
                    ("Model", f"{hardware.model_name} ({hardware.model_details})"),
                    ("Identifier", hardware.model_identifier),
                    ("Chip", hardware.chip),
                    ("Memory", hardware.memory),
                    ("Upgradable Memory", "Yes" if hardware.has_upgradable_memory else "No"),
                    ("Serial", hardware.serial),
                    ("Configuration Code", hardware.config_code),
                    ("Board ID", hardware.board_id),
                    ("Regulatory ID", hardware.regulatory_id),
                    ("Kernel", hardware.kernel_version),
                    ("Booted", format_date(hardware.boot_time)),
                    ("Uptime", hardware.formatted_uptime),
                ]
            )
        )
        return lines

    def _os(self, os_info: OSInfo, context: RenderContext) -> list[str]:
        updates = os_info.software_updates
        lines = ["## Operating System", ""]
        lines.extend(
            self._table(
                [
                    ("Title", os_info.title),
                    ("Version", os_info.display_version),
                    ("Beta", "Yes" if os_info.is_beta else "No"),
                    ("Internal Build", "Yes" if os_info.is_internal else "No"),
                    ("Virtual Machine", "Yes" if os_info.is_virtual_machine else "No"),
                    ("Previous Build", updates.previous_build),
                    ("Last Upgrade", updates.last_upgrade_formatted),
                    ("Last Update Check", format_date(updates.last_successful_check)),
                    ("Automatic Download", format_flag(updates.automatic_download)),
                    ("Critical Updates", format_flag(updates.critical_update_install)),
                    ("Automatic macOS Updates", format_flag(updates.automatically_install_macos_updates)),
                ]
            )
        )

        lines.extend(["### Recommended Updates", ""])
        if updates.recommended_updates:
            lines.extend(
                [
                    "| Name | Version | Identifier | First Offered |",
                    "|------|---------|------------|---------------|",
                ]
            )
            for update in updates.recommended_updates:
                offered = format_date(updates.previous_offers.get(update.product_key))
                lines.append(
                    f"| {self._escape_md(update.display_name)} | {update.display_version} | "
                    f"`{update.identifier}` | {offered} |"
                )
        else:
            lines.append("*No pending updates.*")
        lines.append("")
        return lines

    def _security(self, security: SecurityInfo, context: RenderContext) -> list[str]:
        lines = ["## Security", ""]
        lines.extend(
            self._table(
                [
                    ("System Integrity Protection", format_flag(security.sip_enabled)),
                    ("Gatekeeper", format_flag(security.gatekeeper_enabled)),
                    ("FileVault", format_flag(security.filevault_enabled)),
                    ("Firewall", format_flag(security.firewall_enabled)),
                    ("Find My", format_flag(security.findmy_enabled)),
                    ("Allowed App Sources", security.allowed_app_sources.value),
                    ("Checked", format_date(security.checked_at)),
                ]
            )
        )
        if security.issues:
            lines.extend(["### Indeterminate Probes", ""])
            for issue in security.issues:
                lines.append(f"- `{issue.code}` {self._escape_md(issue.message)}")
            lines.append("")
        return lines

    def _accounts(self, accounts: UserAccounts, context: RenderContext) -> list[str]:
        apple = accounts.apple_account
        lines = ["## Accounts", ""]
        lines.extend(
            self._table(
                [
                    ("Apple Account", f"{apple.display_name} ({apple.account_id})" if apple else "Not signed in"),
                    ("Apple Account Verified", ("Yes" if apple.is_verified else "No") if apple else "N/A"),
                    ("Guest Account", format_flag(accounts.guest_enabled)),
                    ("Recent Users", ", ".join(accounts.recent_users) or "none"),
                ]
            )
        )

        lines.extend(["### Managed Users", ""])
        if accounts.managed_users:
            lines.extend(
                [
                    "| Short Name | Full Name | Type | Hint | Picture |",
                    "|------------|-----------|------|------|---------|",
                ]
            )
            for user in accounts.managed_users:
                hint = self._escape_md(user.password_hint) if context.verbose else ("set" if user.password_hint else "-")
                lines.append(
                    f"| `{user.short_name}` | {self._escape_md(user.full_name)} | {user.user_type} | "
                    f"{hint or '-'} | {format_picture(user.picture_data)} |"
                )
        else:
            lines.append("*No managed users found.*")
        lines.append("")

        if accounts.deleted_users:
            lines.extend(
                [
                    "### Deleted Users",
                    "",
                    "| Name | Real Name | UID | Deleted |",
                    "|------|-----------|-----|---------|",
                ]
            )
            for deleted in accounts.deleted_users:
                lines.append(
                    f"| `{deleted.name}` | {self._escape_md(deleted.real_name)} | {deleted.unique_id} | "
                    f"{format_date(deleted.delete_date)} |"
                )
            lines.append("")
        return lines

    def _generic(self, data: Any) -> list[str]:
        if isinstance(data, BaseModel):
            data = data.model_dump(mode="json")
        if isinstance(data, dict):
            return self._table([(str(key), str(value)) for key, value in data.items()])
        return [str(data)]

    def _table(self, rows: list[tuple[str, str]]) -> list[str]:
        lines = ["| Property | Value |", "|----------|-------|"]
        for label, value in rows:
            lines.append(f"| {label} | {self._escape_md(value)} |")
        lines.append("")
        return lines

    @staticmethod
    def _escape_md(text: str) -> str:
        """Escape the characters that would break a table cell."""
        return text.replace("|", "\\|").replace("\n", " ")
