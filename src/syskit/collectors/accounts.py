"""User accounts collector."""

from __future__ import annotations

import getpass
import os
import pwd
import re
import uuid
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from syskit.core.launcher import SettingsPane
from syskit.models.accounts import (
    UNKNOWN_UNIQUE_ID,
    AppleAccount,
    DeletedUser,
    ManagedUser,
    UserAccounts,
)
from syskit.models.common import NOT_AVAILABLE
from syskit.utils.errors import CollectionError, CommandError, PreferenceReadError, validate_username
from syskit.utils.logging import get_logger_with_context
from syskit.utils.plist import plist_value, read_plist_dict

if TYPE_CHECKING:
    from syskit.core.context import SystemContext

logger = get_logger_with_context("collectors.accounts", domain="accounts")

NO_HINT = "no hint"
MEMBER_MARKER = "user is a member"
MANAGED_USER_DB = Path("var") / "db" / "CryptoUserInfo.plist"
HINT_LABEL = re.compile(r"^\s*AuthenticationHint:", re.IGNORECASE | re.MULTILINE)


def parse_apple_account(entry: dict[str, Any]) -> AppleAccount:
    """Map one ``MobileMeAccounts`` entry; missing fields become 'N/A'."""
    return AppleAccount(
        account_id=_text(entry.get("AccountID")),
        display_name=_text(entry.get("DisplayName")),
        is_verified=entry.get("primaryEmailVerified") == 1,
    )


def parse_managed_users(database: dict[str, Any]) -> list[ManagedUser]:
    """Map the managed-user database, skipping iCloud-typed entries."""
    users = []
    for record in database.values():
        if not isinstance(record, dict):
            continue
        user_type = record.get("UserType")
        if isinstance(user_type, str) and user_type.startswith("ICloud"):
            continue
        picture = record.get("PictureData")
        users.append(
            ManagedUser(
                full_name=_text(record.get("FullName")),
                short_name=_text(record.get("ShortName")),
                password_hint=record.get("PasswordHint") if isinstance(record.get("PasswordHint"), str) else "",
                picture_data=picture if isinstance(picture, bytes) else b"",
                user_type=_text(user_type),
            )
        )
    return users


def parse_deleted_users(entries: Any) -> list[DeletedUser]:
    """Map the ``deletedUsers`` array; each missing field gets its fallback."""
    if not isinstance(entries, list):
        return []
    users = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        unique_id = entry.get("dsAttrTypeStandard:UniqueID")
        deleted = entry.get("date")
        users.append(
            DeletedUser(
                name=_text(entry.get("name")),
                real_name=_text(entry.get("dsAttrTypeStandard:RealName")),
                unique_id=unique_id if isinstance(unique_id, int) and not isinstance(unique_id, bool) else UNKNOWN_UNIQUE_ID,
                delete_date=deleted if isinstance(deleted, datetime) else datetime.min,
            )
        )
    return users


def parse_password_hint(output: str) -> str:
    """Extract the hint from ``dscl -read ... AuthenticationHint`` output.

    The value follows the 'AuthenticationHint:' label at the start of a
    line, either on the same line or, when dscl wraps it, on the next one.
    A 'hint:' inside the value is part of the hint. Anything else yields
    'no hint'.
    """
    match = HINT_LABEL.search(output)
    if match is None:
        return NO_HINT
    for line in output[match.end():].splitlines():
        hint = line.strip()
        if hint:
            return hint
    return NO_HINT


def parse_membership(output: str) -> bool:
    """``dsmemberutil checkmembership``: 'user is a member of the group'."""
    return MEMBER_MARKER in output


def find_managed_user_database(preboot_root: Path) -> Path | None:
    """Find the managed-user database under a UUID-named preboot directory."""
    try:
        candidates = sorted(preboot_root.iterdir())
    except OSError as e:
        logger.debug("Cannot scan %s: %s", preboot_root, e)
        return None

    for candidate in candidates:
        try:
            uuid.UUID(candidate.name)
        except ValueError:
            continue
        database = candidate / MANAGED_USER_DB
        if database.is_file():
            return database
    return None


class AccountsCollector:
    """Collects the inventory of accounts known to this Mac.

    Example:
        collector = AccountsCollector()
        accounts = collector.collect(context)
        for user in accounts.managed_users:
            print(user.short_name, collector.password_hint(context, user.short_name))
    """

    @property
    def name(self) -> str:
        return "accounts"

    @property
    def description(self) -> str:
        return "Apple account, managed, recent and deleted users, guest access"

    def collect(self, context: "SystemContext") -> UserAccounts:
        paths = context.config.paths
        loginwindow = paths.resolve("loginwindow_plist")
        recent = plist_value(loginwindow, "RecentUsers", list, [])

        accounts = UserAccounts(
            apple_account=self._apple_account(paths.resolve("mobileme_plist")),
            managed_users=self._managed_users(paths.resolve("preboot_root")),
            recent_users=[name for name in recent if isinstance(name, str)],
            deleted_users=self._deleted_users(paths.resolve("accounts_plist")),
            guest_enabled=plist_value(loginwindow, "GuestEnabled", bool, False),
        )
        logger.debug(
            "Collected %d managed and %d deleted users",
            len(accounts.managed_users),
            len(accounts.deleted_users),
        )
        return accounts

    def current_user_is_guest(self) -> bool:
        """Whether the current uid belongs to the Guest account."""
        try:
            username = pwd.getpwuid(os.getuid()).pw_name
        except KeyError:
            return False
        return username.lower() == "guest"

    def current_user_is_admin(self, context: "SystemContext") -> bool:
        """Whether the current user is a member of the admin group."""
        args = [
            context.config.commands.dsmemberutil,
            "checkmembership",
            "-U",
            getpass.getuser(),
            "-G",
            "admin",
        ]
        try:
            result = context.runner.run(args)
        except CommandError as e:
            logger.warning("Cannot check admin membership: %s", e.reason)
            return False
        return parse_membership(result.stdout)

    def password_hint(self, context: "SystemContext", username: str) -> str:
        """Look up the password hint of any local user.

        Raises:
            ValidationError: If the user name is unusable
        """
        validate_username(username)
        args = [context.config.commands.dscl, ".", "-read", f"/Users/{username}", "AuthenticationHint"]
        try:
            result = context.runner.run(args, merge_stderr=True)
        except CommandError as e:
            logger.warning("Cannot read password hint for %s: %s", username, e.reason)
            return NO_HINT
        if not result.success:
            return NO_HINT
        return parse_password_hint(result.stdout)

    def open_apple_id_settings(self, context: "SystemContext") -> None:
        context.launcher.open(SettingsPane.APPLE_ID)

    def open_users_and_groups_settings(self, context: "SystemContext") -> None:
        context.launcher.open(SettingsPane.USERS_AND_GROUPS)

    def _apple_account(self, path: Path) -> AppleAccount | None:
        try:
            preferences = read_plist_dict(path)
        except PreferenceReadError as e:
            logger.warning("%s", e.message)
            return None
        accounts = (preferences or {}).get("Accounts")
        if not isinstance(accounts, list) or not accounts or not isinstance(accounts[0], dict):
            return None
        return parse_apple_account(accounts[0])

    def _managed_users(self, preboot_root: Path) -> list[ManagedUser]:
        database = find_managed_user_database(preboot_root)
        if database is None:
            logger.debug("No managed-user database under %s", preboot_root)
            return []
        try:
            data = read_plist_dict(database)
        except PreferenceReadError as e:
            raise CollectionError(e.message, domain=self.name) from e
        return parse_managed_users(data or {})

    def _deleted_users(self, path: Path) -> list[DeletedUser]:
        try:
            preferences = read_plist_dict(path)
        except PreferenceReadError as e:
            logger.warning("%s", e.message)
            return []
        return parse_deleted_users((preferences or {}).get("deletedUsers"))


def _text(value: Any) -> str:
    return value if isinstance(value, str) and value else NOT_AVAILABLE
