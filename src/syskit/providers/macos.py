"""Platform facts provider for a live macOS host."""

from __future__ import annotations

import re
from typing import Any

from syskit.models.common import NOT_AVAILABLE
from syskit.utils.config import SyskitConfig
from syskit.utils.errors import CommandError, PreferenceReadError
from syskit.utils.logging import get_logger
from syskit.utils.plist import loads_plist, read_plist_dict
from syskit.utils.shell import CommandRunner

logger = get_logger("providers.macos")

MARKETING_NAMES: dict[int, str] = {
    11: "Big Sur",
    12: "Monterey",
    13: "Ventura",
    14: "Sonoma",
    15: "Sequoia",
    26: "Tahoe",
}


class MacOSPlatformFacts:
    """Reads machine and OS identity from the standard macOS tools.

    Hardware identity comes from ``system_profiler`` and the I/O registry's
    platform expert device; OS identity from ``SystemVersion.plist``;
    kernel parameters from ``sysctl``.

    Example:
        facts = MacOSPlatformFacts(CommandRunner())
        print(facts.hardware_facts()["macModelName"])
    """

    def __init__(self, runner: CommandRunner, config: SyskitConfig | None = None) -> None:
        self._runner = runner
        self._config = config or SyskitConfig()

    @property
    def name(self) -> str:
        return "macos"

    def hardware_facts(self) -> dict[str, Any]:
        hardware = self._profiler_item("SPHardwareDataType")
        expert = self._platform_expert()
        facts: dict[str, Any] = {}

        _put(facts, "macModelName", hardware.get("machine_name"))
        _put(facts, "macModelDetails", self._model_details())
        _put(facts, "processorString", hardware.get("chip_type") or _intel_processor(hardware))
        _put(facts, "installedMemorySize", hardware.get("physical_memory"))

        serial = hardware.get("serial_number") or _registry_string(expert.get("IOPlatformSerialNumber"))
        _put(facts, "serialString", serial)
        if serial and len(serial) == 12:
            facts["configCode"] = serial[-4:]

        board_id = _registry_string(expert.get("board-id")) or _registry_string(expert.get("target-type"))
        _put(facts, "boardID", board_id)
        _put(facts, "regulatoryID", _registry_string(expert.get("regulatory-model-number")))

        facts["hasUpgradableMemory"] = self._memory_upgradeable()
        return facts

    def os_facts(self) -> dict[str, Any]:
        paths = self._config.paths
        version_plist = paths.resolve("system_version_plist")
        try:
            version = read_plist_dict(version_plist) or {}
        except PreferenceReadError as e:
            logger.warning("%s", e.message)
            version = {}

        facts: dict[str, Any] = {}
        product = version.get("ProductName")
        product_version = version.get("ProductUserVisibleVersion") or version.get("ProductVersion")
        build = version.get("ProductBuildVersion")

        if product and product_version:
            facts["osTitleString"] = os_title(product, product_version)
        _put(facts, "osVersionString", product_version)
        _put(facts, "osBuildString", build)
        if build:
            facts["isBeta"] = is_beta_build(build)

        facts["isInternalBuild"] = paths.resolve("apple_internal_dir").is_dir()
        facts["isVirtualMachine"] = self.sysctl("kern.hv_vm_present") == "1"
        return facts

    def sysctl(self, name: str) -> str:
        try:
            result = self._runner.run([self._config.commands.sysctl, "-n", name])
        except CommandError as e:
            logger.debug("%s", e.message)
            return NOT_AVAILABLE
        value = result.stdout.strip()
        if not result.success or not value:
            return NOT_AVAILABLE
        return value

    def _profiler_item(self, data_type: str) -> dict[str, Any]:
        """Return the first item of a ``system_profiler -xml`` report."""
        items = self._profiler_items(data_type)
        return items[0] if items else {}

    def _platform_expert(self) -> dict[str, Any]:
        """Return the properties of the IOPlatformExpertDevice registry entry."""
        args = [self._config.commands.ioreg, "-a", "-r", "-c", "IOPlatformExpertDevice", "-d", "1"]
        try:
            result = self._runner.run(args)
            data = loads_plist(result.stdout, source="ioreg")
        except (CommandError, PreferenceReadError) as e:
            logger.warning("%s", e.message)
            return {}

        if isinstance(data, list) and data and isinstance(data[0], dict):
            return data[0]
        return {}

    def _memory_upgradeable(self) -> bool:
        memory = self._profiler_items("SPMemoryDataType")
        return any(item.get("is_memory_upgradeable") == "Yes" for item in memory)

    def _profiler_items(self, data_type: str) -> list[dict[str, Any]]:
        try:
            result = self._runner.run([self._config.commands.system_profiler, data_type, "-xml"])
            data = loads_plist(result.stdout, source=f"system_profiler {data_type}")
        except (CommandError, PreferenceReadError) as e:
            logger.debug("%s", e.message)
            return []
        if not isinstance(data, list) or not data or not isinstance(data[0], dict):
            return []
        return [item for item in data[0].get("_items") or [] if isinstance(item, dict)]

    def _model_details(self) -> str | None:
        """Parenthesized details from the System Profiler model name cache.

        The cache maps serial-derived keys to names like
        "MacBook Pro (14-inch, 2021)"; only the text in parentheses is kept.
        """
        try:
            cache = read_plist_dict(self._config.paths.resolve("system_profiler_cache"))
        except PreferenceReadError as e:
            logger.debug("%s", e.message)
            return None
        names = (cache or {}).get("CPU Names")
        if not isinstance(names, dict):
            return None
        for value in names.values():
            if isinstance(value, str):
                match = re.search(r"\(([^)]+)\)", value)
                if match:
                    return match.group(1)
        return None


def os_title(product: str, version: str) -> str:
    """Build the OS title, e.g. 'macOS Sequoia' for macOS 15.x."""
    try:
        major = int(version.split(".")[0])
    except ValueError:
        return product
    marketing = MARKETING_NAMES.get(major)
    return f"{product} {marketing}" if marketing else product


def is_beta_build(build: str) -> bool:
    """Apple seeds carry a trailing lowercase letter (e.g., '24A5264n')."""
    return bool(build) and build[-1].isalpha() and build[-1].islower()


def _intel_processor(hardware: dict[str, Any]) -> str | None:
    cpu_type = hardware.get("cpu_type")
    if not cpu_type:
        return None
    speed = hardware.get("current_processor_speed")
    return f"{speed} {cpu_type}" if speed else cpu_type


def _registry_string(value: Any) -> str | None:
    """Decode an I/O registry property, which may be NUL-padded bytes."""
    if isinstance(value, bytes):
        value = value.split(b"\0", 1)[0].decode("utf-8", errors="replace")
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return None


def _put(facts: dict[str, Any], key: str, value: Any) -> None:
    if value not in (None, ""):
        facts[key] = value

