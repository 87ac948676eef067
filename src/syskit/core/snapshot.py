"""Lazily collected, memoized view of the whole system."""

from __future__ import annotations

import threading
from typing import Any

from pydantic import BaseModel

from syskit.collectors.registry import CollectorRegistry, create_default_registry
from syskit.core.context import SystemContext
from syskit.core.launcher import SettingsPane
from syskit.models.accounts import UserAccounts
from syskit.models.hardware import HardwareInfo
from syskit.models.security import AllowedAppSources, SecurityInfo
from syskit.models.snapshot import SnapshotReport
from syskit.models.software import OSInfo
from syskit.utils.logging import get_logger

logger = get_logger("snapshot")

DOMAINS = ("hardware", "os", "security", "accounts")


class SystemSnapshot:
    """One memoized reading of every domain.

    Each domain is collected the first time it is asked for and the
    result is kept until ``refresh`` discards it. Concurrent first reads
    of a domain collect it only once.

    A collection failure propagates to the caller and nothing is cached,
    so the next read tries again.

    Example:
        snapshot = SystemSnapshot(SystemContext.create())
        print(snapshot.hardware.model_name)
        snapshot.refresh("security")
        print(snapshot.security.filevault_enabled)
    """

    def __init__(self, context: SystemContext, registry: CollectorRegistry | None = None) -> None:
        self.context = context
        self.registry = registry or create_default_registry()
        self._values: dict[str, BaseModel] = {}
        self._lock = threading.Lock()

    @property
    def hardware(self) -> HardwareInfo:
        return self._get("hardware")  # type: ignore[return-value]

    @property
    def os(self) -> OSInfo:
        return self._get("os")  # type: ignore[return-value]

    @property
    def security(self) -> SecurityInfo:
        return self._get("security")  # type: ignore[return-value]

    @property
    def accounts(self) -> UserAccounts:
        return self._get("accounts")  # type: ignore[return-value]

    def is_collected(self, domain: str) -> bool:
        """Whether a domain is currently memoized."""
        with self._lock:
            return domain in self._values

    def refresh(self, *domains: str) -> None:
        """Discard memoized domains so the next read collects them again.

        With no arguments every domain is discarded.

        Raises:
            KeyError: If a domain has no registered collector
        """
        for domain in domains:
            if domain not in self.registry:
                raise KeyError(f"No collector named '{domain}' is registered")
        with self._lock:
            if domains:
                for domain in domains:
                    self._values.pop(domain, None)
            else:
                self._values.clear()
        logger.debug("Refreshed %s", ", ".join(domains) or "all domains")

    def report(self) -> SnapshotReport:
        """Collect every domain that is not memoized yet and bundle them."""
        return SnapshotReport(
            hardware=self.hardware,
            os=self.os,
            security=self.security,
            accounts=self.accounts,
        )

    # Live actions, never memoized

    def sip_enabled(self) -> bool | None:
        return self._collector("security").sip_enabled(self.context)

    def gatekeeper_enabled(self) -> bool | None:
        return self._collector("security").gatekeeper_enabled(self.context)

    def filevault_enabled(self) -> bool | None:
        return self._collector("security").filevault_enabled(self.context)

    def firewall_enabled(self) -> bool | None:
        return self._collector("security").firewall_enabled(self.context)

    def findmy_enabled(self) -> bool | None:
        return self._collector("security").findmy_enabled(self.context)

    def allowed_app_sources(self) -> AllowedAppSources:
        return self._collector("security").allowed_app_sources(self.context)

    def password_hint(self, username: str) -> str:
        return self._collector("accounts").password_hint(self.context, username)

    def current_user_is_admin(self) -> bool:
        return self._collector("accounts").current_user_is_admin(self.context)

    def current_user_is_guest(self) -> bool:
        return self._collector("accounts").current_user_is_guest()

    def open_settings(self, pane: SettingsPane) -> None:
        self.context.launcher.open(pane)

    def _get(self, domain: str) -> BaseModel:
        with self._lock:
            value = self._values.get(domain)
            if value is None:
                logger.debug("Collecting %s", domain)
                value = self.registry[domain].collect(self.context)
                self._values[domain] = value
            return value

    def _collector(self, domain: str) -> Any:
        return self.registry[domain]


_default_snapshot: SystemSnapshot | None = None
_default_lock = threading.Lock()


def get_default_snapshot() -> SystemSnapshot:
    """Get the process-wide snapshot, building it on first use.

    Raises:
        PlatformError: If this host has no facts provider
    """
    global _default_snapshot
    with _default_lock:
        if _default_snapshot is None:
            _default_snapshot = SystemSnapshot(SystemContext.create())
        return _default_snapshot


def set_default_snapshot(snapshot: SystemSnapshot | None) -> None:
    """Replace the process-wide snapshot; None resets it."""
    global _default_snapshot
    with _default_lock:
        _default_snapshot = snapshot
