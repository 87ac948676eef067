"""Data models for syskit.

All models are Pydantic BaseModel with frozen=True for immutability.
"""

from syskit.models.common import NOT_AVAILABLE, ProbeIssue
from syskit.models.hardware import HardwareInfo, format_duration
from syskit.models.software import (
    OSInfo,
    RecommendedUpdate,
    SoftwareUpdatePreferences,
    UpdateInfo,
)
from syskit.models.security import AllowedAppSources, SecurityInfo
from syskit.models.accounts import (
    UNKNOWN_UNIQUE_ID,
    AppleAccount,
    DeletedUser,
    ManagedUser,
    UserAccounts,
)
from syskit.models.snapshot import SnapshotReport

__all__ = [
    # Common
    "NOT_AVAILABLE",
    "ProbeIssue",
    # Hardware
    "HardwareInfo",
    "format_duration",
    # Software
    "OSInfo",
    "RecommendedUpdate",
    "SoftwareUpdatePreferences",
    "UpdateInfo",
    # Security
    "AllowedAppSources",
    "SecurityInfo",
    # Accounts
    "UNKNOWN_UNIQUE_ID",
    "AppleAccount",
    "DeletedUser",
    "ManagedUser",
    "UserAccounts",
    # Snapshot
    "SnapshotReport",
]
