"""Operating system and software update collectors."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pydantic

from syskit.core.launcher import SettingsPane
from syskit.models.common import NOT_AVAILABLE
from syskit.models.software import OSInfo, SoftwareUpdatePreferences, UpdateInfo
from syskit.utils.errors import CollectionError, MissingFactError, PreferenceReadError
from syskit.utils.logging import get_logger_with_context
from syskit.utils.plist import plist_value, read_plist_dict

if TYPE_CHECKING:
    from syskit.core.context import SystemContext

logger = get_logger_with_context("collectors.software", domain="os")


def decode_update_preferences(data: dict[str, Any], source: str = "SoftwareUpdate") -> SoftwareUpdatePreferences:
    """Decode the software update preference dictionary.

    Args:
        data: Top-level dictionary of ``com.apple.SoftwareUpdate.plist``
        source: Name used in error messages

    Returns:
        The decoded preferences, with factory defaults for absent policy flags

    Raises:
        CollectionError: If a required key is missing or mistyped
    """
    try:
        return SoftwareUpdatePreferences.model_validate(data)
    except pydantic.ValidationError as e:
        fields = ", ".join(".".join(str(part) for part in err["loc"]) for err in e.errors())
        raise CollectionError(f"Cannot decode {source}: invalid or missing {fields}", domain="os") from e


class UpdateCollector:
    """Collects software update state.

    The previous build and last upgrade time come from the powerlogd
    statistics and are optional. The software update preferences are
    required: a missing or undecodable file fails the collection.
    """

    @property
    def name(self) -> str:
        return "updates"

    @property
    def description(self) -> str:
        return "Pending updates, last check and automatic update policy"

    def collect(self, context: "SystemContext") -> UpdateInfo:
        paths = context.config.paths
        powerlogd = paths.resolve("powerlogd_plist")
        previous_build = plist_value(powerlogd, "PreviousUpdateBuild", str, NOT_AVAILABLE)
        last_upgrade = plist_value(powerlogd, "LastUpgradeSystemTimestamp", float)

        source = paths.resolve("software_update_plist")
        try:
            data = read_plist_dict(source)
        except PreferenceReadError as e:
            raise CollectionError(e.message, domain="os") from e
        if data is None:
            raise CollectionError(f"Software update preferences not found: {source}", domain="os")

        preferences = decode_update_preferences(data, source=str(source))
        return UpdateInfo(
            previous_build=previous_build,
            last_upgrade_timestamp=last_upgrade,
            recommended_updates=preferences.recommended_updates,
            previous_offers=preferences.previous_offers,
            last_successful_check=preferences.last_successful_check,
            automatic_download=preferences.automatic_download,
            critical_update_install=preferences.critical_update_install,
            automatically_install_macos_updates=preferences.automatically_install_macos_updates,
        )


class OSCollector:
    """Collects the identity of the installed operating system.

    Example:
        os_info = OSCollector().collect(context)
        print(f"{os_info.title} {os_info.display_version}")
    """

    REQUIRED_TEXT = ("osTitleString", "osVersionString", "osBuildString")
    REQUIRED_FLAGS = ("isBeta", "isInternalBuild", "isVirtualMachine")

    def __init__(self, updates: UpdateCollector | None = None) -> None:
        self.updates = updates or UpdateCollector()

    @property
    def name(self) -> str:
        return "os"

    @property
    def description(self) -> str:
        return "OS title, version, build, release flags and update state"

    def collect(self, context: "SystemContext") -> OSInfo:
        facts = context.facts.os_facts()
        for key in self.REQUIRED_TEXT:
            if not isinstance(facts.get(key), str) or not facts[key]:
                raise MissingFactError(key, domain=self.name)
        for key in self.REQUIRED_FLAGS:
            if not isinstance(facts.get(key), bool):
                raise MissingFactError(key, domain=self.name)

        os_info = OSInfo(
            title=facts["osTitleString"],
            version=facts["osVersionString"],
            build=facts["osBuildString"],
            is_beta=facts["isBeta"],
            is_internal=facts["isInternalBuild"],
            is_virtual_machine=facts["isVirtualMachine"],
            software_updates=self.updates.collect(context),
        )
        logger.debug("Collected OS identity %s", os_info.display_version)
        return os_info

    def open_software_update_settings(self, context: "SystemContext") -> None:
        """Open the Software Update pane of System Settings."""
        context.launcher.open(SettingsPane.SOFTWARE_UPDATE)
