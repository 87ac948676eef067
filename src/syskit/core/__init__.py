"""Context, snapshot and settings launcher."""

from syskit.core.launcher import SettingsLauncher, SettingsPane
from syskit.core.context import SystemContext
from syskit.core.snapshot import (
    DOMAINS,
    SystemSnapshot,
    get_default_snapshot,
    set_default_snapshot,
)

__all__ = [
    "SettingsLauncher",
    "SettingsPane",
    "SystemContext",
    "SystemSnapshot",
    "DOMAINS",
    "get_default_snapshot",
    "set_default_snapshot",
]
