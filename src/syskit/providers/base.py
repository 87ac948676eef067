"""Platform facts provider protocol."""

from typing import Any, Protocol, runtime_checkable

# Keys a provider may return from hardware_facts().
HARDWARE_FACT_KEYS = (
    "macModelName",
    "macModelDetails",
    "processorString",
    "installedMemorySize",
    "boardID",
    "regulatoryID",
    "serialString",
    "configCode",
    "hasUpgradableMemory",
)

# Keys a provider may return from os_facts().
OS_FACT_KEYS = (
    "osTitleString",
    "osVersionString",
    "osBuildString",
    "isBeta",
    "isInternalBuild",
    "isVirtualMachine",
)


@runtime_checkable
class PlatformFacts(Protocol):
    """Protocol for platform facts providers.

    A provider answers the identity questions that only the operating
    system can: what machine this is and what OS it runs. Facts are
    returned as plain mappings keyed by the names in HARDWARE_FACT_KEYS
    and OS_FACT_KEYS; a key a provider cannot answer is simply left out,
    and the collectors decide whether that is fatal.

    Example:
        class FixedFacts:
            name = "fixed"

            def hardware_facts(self) -> dict[str, Any]:
                return {"macModelName": "Mac mini", "processorString": "Apple M2",
                        "installedMemorySize": "8 GB"}

            def os_facts(self) -> dict[str, Any]:
                return {"osTitleString": "macOS Sonoma", "osVersionString": "14.4",
                        "osBuildString": "23E214", "isBeta": False,
                        "isInternalBuild": False, "isVirtualMachine": False}

            def sysctl(self, name: str) -> str:
                return "N/A"
    """

    @property
    def name(self) -> str:
        """Short provider name used in logs."""
        ...

    def hardware_facts(self) -> dict[str, Any]:
        """Return the machine identity facts this provider can determine."""
        ...

    def os_facts(self) -> dict[str, Any]:
        """Return the operating system identity facts this provider can determine."""
        ...

    def sysctl(self, name: str) -> str:
        """Look up a kernel parameter by name.

        Args:
            name: Parameter name (e.g., "hw.model")

        Returns:
            The value as a string, or "N/A" if it cannot be read
        """
        ...
