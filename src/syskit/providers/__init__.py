"""Platform facts providers."""

from __future__ import annotations

import sys

from syskit.providers.base import HARDWARE_FACT_KEYS, OS_FACT_KEYS, PlatformFacts
from syskit.providers.macos import MacOSPlatformFacts
from syskit.providers.static import StaticPlatformFacts
from syskit.utils.config import SyskitConfig
from syskit.utils.errors import PlatformError
from syskit.utils.shell import CommandRunner

__all__ = [
    "HARDWARE_FACT_KEYS",
    "OS_FACT_KEYS",
    "PlatformFacts",
    "MacOSPlatformFacts",
    "StaticPlatformFacts",
    "get_platform_facts",
]


def get_platform_facts(config: SyskitConfig, runner: CommandRunner) -> PlatformFacts:
    """Select the facts provider for this host.

    A configured facts file always wins; otherwise the live macOS adapter
    is used on Darwin.

    Raises:
        PlatformError: If no provider can serve this host
    """
    if config.facts_file:
        return StaticPlatformFacts.from_file(config.facts_file)
    if sys.platform == "darwin":
        return MacOSPlatformFacts(runner, config)
    raise PlatformError(
        f"No platform facts provider for '{sys.platform}'; set facts_file in the configuration"
    )
