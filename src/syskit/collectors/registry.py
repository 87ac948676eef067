"""Collector registry for looking up domain collectors by name."""

from typing import Iterator

from syskit.collectors.base import Collector


class CollectorRegistry:
    """Registry of domain collectors.

    A snapshot asks the registry for the collector of each domain it
    needs, so a domain can be replaced (or a new one added) without
    touching the snapshot.

    Example:
        registry = CollectorRegistry()
        registry.register(HardwareCollector())
        hardware = registry["hardware"].collect(context)
    """

    def __init__(self) -> None:
        self._collectors: dict[str, Collector] = {}

    def register(self, collector: Collector, replace: bool = False) -> None:
        """Register a collector.

        Args:
            collector: The collector to register
            replace: Replace an existing collector with the same name

        Raises:
            ValueError: If a collector with the same name is already registered
        """
        if collector.name in self._collectors and not replace:
            raise ValueError(f"Collector '{collector.name}' is already registered")
        self._collectors[collector.name] = collector

    def unregister(self, name: str) -> None:
        """Unregister a collector by name.

        Raises:
            KeyError: If no collector with that name is registered
        """
        if name not in self._collectors:
            raise KeyError(f"No collector named '{name}' is registered")
        del self._collectors[name]

    def get(self, name: str) -> Collector | None:
        return self._collectors.get(name)

    def __getitem__(self, name: str) -> Collector:
        if name not in self._collectors:
            raise KeyError(f"No collector named '{name}' is registered")
        return self._collectors[name]

    def __contains__(self, name: str) -> bool:
        return name in self._collectors

    def __iter__(self) -> Iterator[Collector]:
        return iter(self._collectors.values())

    def __len__(self) -> int:
        return len(self._collectors)

    @property
    def names(self) -> list[str]:
        """Names of all registered collectors, in registration order."""
        return list(self._collectors.keys())

    def clear(self) -> None:
        self._collectors.clear()


_default_registry: CollectorRegistry | None = None


def get_default_registry() -> CollectorRegistry:
    """Get the default registry, populated with the built-in domain collectors."""
    global _default_registry
    if _default_registry is None:
        _default_registry = create_default_registry()
    return _default_registry


def create_default_registry() -> CollectorRegistry:
    """Build a fresh registry holding the four built-in domain collectors."""
    from syskit.collectors.accounts import AccountsCollector
    from syskit.collectors.hardware import HardwareCollector
    from syskit.collectors.security import SecurityCollector
    from syskit.collectors.software import OSCollector

    registry = CollectorRegistry()
    registry.register(HardwareCollector())
    registry.register(OSCollector())
    registry.register(SecurityCollector())
    registry.register(AccountsCollector())
    return registry
