"""Hardware identity collector."""

from __future__ import annotations

import re
from datetime import datetime
from typing import TYPE_CHECKING, Any

from syskit.models.common import NOT_AVAILABLE
from syskit.models.hardware import HardwareInfo
from syskit.utils.errors import MissingFactError
from syskit.utils.logging import get_logger_with_context

if TYPE_CHECKING:
    from syskit.core.context import SystemContext

logger = get_logger_with_context("collectors.hardware", domain="hardware")

_BOOTTIME_PATTERN = re.compile(r"sec\s*=\s*(\d+)")


class HardwareCollector:
    """Collects the static identity of the machine.

    Model name, chip and memory size are always present on genuine
    hardware, so their absence is fatal. Every other fact falls back
    to "N/A" (or False for the upgradable-memory flag).

    Example:
        hardware = HardwareCollector().collect(context)
        print(f"{hardware.model_name} ({hardware.chip})")
    """

    REQUIRED_FACTS = ("macModelName", "processorString", "installedMemorySize")

    @property
    def name(self) -> str:
        return "hardware"

    @property
    def description(self) -> str:
        return "Model, chip, memory, serial and kernel identity"

    def collect(self, context: "SystemContext") -> HardwareInfo:
        facts = context.facts.hardware_facts()
        for key in self.REQUIRED_FACTS:
            if not isinstance(facts.get(key), str) or not facts[key]:
                raise MissingFactError(key, domain=self.name)

        sysctl = context.facts.sysctl
        kernel_type = sysctl("kern.ostype")
        kernel_release = sysctl("kern.osrelease")
        kernel_version = (
            f"{kernel_type} {kernel_release}"
            if NOT_AVAILABLE not in (kernel_type, kernel_release)
            else NOT_AVAILABLE
        )

        hardware = HardwareInfo(
            model_name=facts["macModelName"],
            model_details=_text(facts, "macModelDetails"),
            chip=facts["processorString"],
            memory=facts["installedMemorySize"],
            board_id=_text(facts, "boardID"),
            regulatory_id=_text(facts, "regulatoryID"),
            serial=_text(facts, "serialString"),
            config_code=_text(facts, "configCode"),
            has_upgradable_memory=facts.get("hasUpgradableMemory") is True,
            model_identifier=sysctl("hw.model"),
            kernel_version=kernel_version,
            boot_time=parse_boottime(sysctl("kern.boottime")),
        )
        logger.debug("Collected hardware identity for %s", hardware.model_identifier)
        return hardware


def parse_boottime(value: str) -> datetime | None:
    """Parse ``sysctl kern.boottime`` output ('{ sec = 1700000000, usec = 0 } ...')."""
    match = _BOOTTIME_PATTERN.search(value or "")
    if match is None:
        return None
    return datetime.fromtimestamp(int(match.group(1)))


def _text(facts: dict[str, Any], key: str) -> str:
    value = facts.get(key)
    return value if isinstance(value, str) and value else NOT_AVAILABLE
