"""Aggregate snapshot model."""

from datetime import datetime

from pydantic import BaseModel, Field

from syskit.models.accounts import UserAccounts
from syskit.models.hardware import HardwareInfo
from syskit.models.security import SecurityInfo
from syskit.models.software import OSInfo


class SnapshotReport(BaseModel):
    """Everything syskit knows about the machine, frozen for rendering."""

    model_config = {"frozen": True}

    hardware: HardwareInfo = Field(description="Hardware identity")
    os: OSInfo = Field(description="Operating system and updates")
    security: SecurityInfo = Field(description="Security posture")
    accounts: UserAccounts = Field(description="User accounts")
    generated_at: datetime = Field(default_factory=datetime.now, description="When the report was assembled")
