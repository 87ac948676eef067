"""System Settings pane launcher."""

from __future__ import annotations

from enum import Enum

from syskit.utils.errors import CommandError
from syskit.utils.logging import get_logger
from syskit.utils.shell import CommandRunner

logger = get_logger("launcher")


class SettingsPane(str, Enum):
    """Settings locations syskit can open, keyed by their ``open`` target."""

    SOFTWARE_UPDATE = "x-apple.systempreferences:com.apple.Software-Update-Settings.extension"
    SECURITY = "x-apple.systempreferences:com.apple.preference.security"
    APPLE_ID = "x-apple.systempreferences:com.apple.AppleID-Settings.extension"
    USERS_AND_GROUPS = "x-apple.systempreferences:com.apple.Users-Groups-Settings.extension"
    ABOUT_THIS_MAC = "/System/Library/CoreServices/Applications/About This Mac.app"

    @property
    def slug(self) -> str:
        """Command-line name, e.g. 'software-update'."""
        return self.name.lower().replace("_", "-")

    @classmethod
    def from_slug(cls, slug: str) -> "SettingsPane":
        for pane in cls:
            if pane.slug == slug:
                return pane
        raise ValueError(f"Unknown settings pane: {slug}")


class SettingsLauncher:
    """Opens settings panes through ``open``.

    Opening is fire-and-forget: a failure is logged and never raised,
    since nothing downstream depends on the pane appearing.
    """

    def __init__(self, runner: CommandRunner, open_command: str = "/usr/bin/open") -> None:
        self._runner = runner
        self._open_command = open_command

    def open(self, pane: SettingsPane) -> None:
        try:
            result = self._runner.run([self._open_command, pane.value], merge_stderr=True)
        except CommandError as e:
            logger.warning("Cannot open %s: %s", pane.slug, e.reason)
            return
        if not result.success:
            logger.warning("Cannot open %s: %s", pane.slug, result.stdout.strip() or f"exit {result.returncode}")
