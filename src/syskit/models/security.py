"""Security posture models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from syskit.models.common import ProbeIssue


class AllowedAppSources(str, Enum):
    """Which application sources Gatekeeper allows to run."""

    APP_STORE_ONLY = "App Store"
    APP_STORE_AND_DEVELOPERS = "App Store and Trusted Developers"
    ANYWHERE = "Anywhere"
    UNKNOWN = "Unknown"


class SecurityInfo(BaseModel):
    """Security configuration at the time of the check.

    Every flag is ``True`` (enabled), ``False`` (disabled) or ``None`` when
    the probe could not reach a verdict; ``issues`` explains each ``None``.
    """

    model_config = {"frozen": True}

    sip_enabled: bool | None = Field(default=None, description="System Integrity Protection")
    gatekeeper_enabled: bool | None = Field(default=None, description="Gatekeeper assessments")
    filevault_enabled: bool | None = Field(default=None, description="FileVault disk encryption")
    firewall_enabled: bool | None = Field(default=None, description="Application firewall")
    findmy_enabled: bool | None = Field(default=None, description="Find My Mac")
    allowed_app_sources: AllowedAppSources = Field(
        default=AllowedAppSources.UNKNOWN,
        description="Allowed application sources",
    )
    issues: list[ProbeIssue] = Field(default_factory=list, description="Why probes were indeterminate")
    checked_at: datetime = Field(default_factory=datetime.now, description="When the probes ran")

    @property
    def indeterminate(self) -> list[str]:
        """Names of the flags no verdict could be reached for."""
        names = ["sip_enabled", "gatekeeper_enabled", "filevault_enabled", "firewall_enabled", "findmy_enabled"]
        return [name for name in names if getattr(self, name) is None]
