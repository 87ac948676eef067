"""Explicit collaborators shared by the collectors."""

from __future__ import annotations

from syskit.core.launcher import SettingsLauncher
from syskit.providers import PlatformFacts, get_platform_facts
from syskit.utils.config import SyskitConfig, get_config
from syskit.utils.shell import CommandRunner


class SystemContext:
    """Everything a collector needs to reach the operating system.

    The context is built by the caller and handed to a snapshot, so tests
    can substitute a fake command runner or a static facts provider.

    Example:
        context = SystemContext.create()
        snapshot = SystemSnapshot(context)
    """

    def __init__(
        self,
        config: SyskitConfig,
        facts: PlatformFacts,
        runner: CommandRunner,
        launcher: SettingsLauncher | None = None,
    ) -> None:
        self.config = config
        self.facts = facts
        self.runner = runner
        self.launcher = launcher or SettingsLauncher(runner, config.commands.open)

    @classmethod
    def create(
        cls,
        config: SyskitConfig | None = None,
        runner: CommandRunner | None = None,
        facts: PlatformFacts | None = None,
    ) -> "SystemContext":
        """Build a context for this host from configuration.

        Raises:
            PlatformError: If no facts provider is available and none was given
        """
        config = config or get_config()
        runner = runner or CommandRunner(timeout=config.commands.timeout)
        facts = facts or get_platform_facts(config, runner)
        return cls(config=config, facts=facts, runner=runner)
