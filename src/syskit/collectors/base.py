"""Base collector protocol."""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pydantic import BaseModel

if TYPE_CHECKING:
    from syskit.core.context import SystemContext


@runtime_checkable
class Collector(Protocol):
    """Protocol for domain collectors.

    A collector reads one domain of system facts (hardware, OS, security,
    accounts) and returns a frozen model. Collection either succeeds
    completely or raises a CollectionError; optional facts fall back to
    documented placeholders instead of failing.

    Example:
        class BatteryCollector:
            @property
            def name(self) -> str:
                return "battery"

            @property
            def description(self) -> str:
                return "Battery health and cycle count"

            def collect(self, context: SystemContext) -> BatteryInfo:
                output = context.runner.run(["pmset", "-g", "batt"]).stdout
                return BatteryInfo.parse(output)
    """

    @property
    def name(self) -> str:
        """Unique domain name for this collector."""
        ...

    @property
    def description(self) -> str:
        """Human-readable description of what this collector reads."""
        ...

    def collect(self, context: "SystemContext") -> BaseModel:
        """Read the domain from the system.

        Args:
            context: Collaborators used to reach the operating system

        Returns:
            Frozen model describing the domain

        Raises:
            CollectionError: If a required fact cannot be obtained
        """
        ...
