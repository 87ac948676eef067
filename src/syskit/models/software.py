"""Operating system and software update models."""

from datetime import datetime

from pydantic import BaseModel, Field

from syskit.models.common import NOT_AVAILABLE


class RecommendedUpdate(BaseModel):
    """A software update offered to this machine."""

    model_config = {"frozen": True, "populate_by_name": True}

    identifier: str = Field(alias="Identifier", description="Update identifier")
    display_name: str = Field(alias="Display Name", description="Name shown to the user")
    product_key: str = Field(alias="Product Key", description="Catalog product key")
    display_version: str = Field(alias="Display Version", description="Version shown to the user")


class SoftwareUpdatePreferences(BaseModel):
    """Decoded contents of ``com.apple.SoftwareUpdate.plist``.

    The three policy flags are only written once the user changes them in
    System Settings; until then macOS applies the factory values used as
    defaults here.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    recommended_updates: list[RecommendedUpdate] = Field(alias="RecommendedUpdates")
    previous_offers: dict[str, datetime] = Field(alias="FirstOfferDateDictionary")
    last_successful_check: datetime = Field(alias="LastSuccessfulDate")

    automatic_download: bool = Field(default=True, alias="AutomaticDownload")
    critical_update_install: bool = Field(default=True, alias="CriticalUpdateInstall")
    automatically_install_macos_updates: bool = Field(default=False, alias="AutomaticallyInstallMacOSUpdates")


class UpdateInfo(BaseModel):
    """Software update state of the machine."""

    model_config = {"frozen": True}

    previous_build: str = Field(default=NOT_AVAILABLE, description="Build installed before the last update")
    last_upgrade_timestamp: float | None = Field(
        default=None,
        description="Last system upgrade as UNIX epoch seconds",
    )
    recommended_updates: list[RecommendedUpdate] = Field(default_factory=list, description="Pending updates")
    previous_offers: dict[str, datetime] = Field(
        default_factory=dict,
        description="First date each update was offered",
    )
    last_successful_check: datetime = Field(description="Last successful update check")
    automatic_download: bool = Field(default=True, description="Download new updates automatically")
    critical_update_install: bool = Field(default=True, description="Install security responses automatically")
    automatically_install_macos_updates: bool = Field(
        default=False,
        description="Install macOS updates automatically",
    )

    @property
    def last_upgrade_time(self) -> datetime | None:
        """Last system upgrade as a local datetime."""
        if self.last_upgrade_timestamp is None:
            return None
        return datetime.fromtimestamp(self.last_upgrade_timestamp)

    @property
    def last_upgrade_formatted(self) -> str:
        """Last system upgrade as ``YYYY-MM-DD HH:MM``, or 'N/A'."""
        upgraded = self.last_upgrade_time
        if upgraded is None:
            return NOT_AVAILABLE
        return upgraded.strftime("%Y-%m-%d %H:%M")


class OSInfo(BaseModel):
    """Identity of the installed operating system."""

    model_config = {"frozen": True}

    title: str = Field(description="Product name (e.g., 'macOS Sequoia')")
    version: str = Field(description="Version string (e.g., '15.0')")
    build: str = Field(description="Build number (e.g., '24A335')")
    is_beta: bool = Field(default=False, description="Beta release")
    is_internal: bool = Field(default=False, description="Internal build")
    is_virtual_machine: bool = Field(default=False, description="Running in a virtual machine")
    software_updates: UpdateInfo = Field(description="Software update state")

    @property
    def display_version(self) -> str:
        """Version and build, e.g. '15.0 (24A335)'."""
        return f"{self.version} ({self.build})"
