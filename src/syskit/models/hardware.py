"""Hardware identity models."""

from datetime import datetime, timedelta

from pydantic import BaseModel, Field

from syskit.models.common import NOT_AVAILABLE


class HardwareInfo(BaseModel):
    """Static identity of the machine."""

    model_config = {"frozen": True, "protected_namespaces": ()}

    model_name: str = Field(description="Marketing model name (e.g., 'MacBook Pro')")
    model_details: str = Field(default=NOT_AVAILABLE, description="Model details (e.g., '14-inch, 2023')")
    chip: str = Field(description="Processor or chip (e.g., 'Apple M1 Pro')")
    memory: str = Field(description="Installed memory (e.g., '16 GB')")

    board_id: str = Field(default=NOT_AVAILABLE, description="Logic board identifier")
    regulatory_id: str = Field(default=NOT_AVAILABLE, description="Regulatory model number")
    serial: str = Field(default=NOT_AVAILABLE, description="Serial number")
    config_code: str = Field(default=NOT_AVAILABLE, description="Model configuration code")
    has_upgradable_memory: bool = Field(default=False, description="Whether memory is user-upgradable")

    model_identifier: str = Field(default=NOT_AVAILABLE, description="Machine model identifier (e.g., 'MacBookPro18,3')")
    kernel_version: str = Field(default=NOT_AVAILABLE, description="Kernel name and release (e.g., 'Darwin 23.0.0')")
    boot_time: datetime | None = Field(default=None, description="When the system last booted")

    @property
    def uptime(self) -> timedelta | None:
        """Time elapsed since boot, if the boot time is known."""
        if self.boot_time is None:
            return None
        now = datetime.now(self.boot_time.tzinfo)
        return max(now - self.boot_time, timedelta(0))

    @property
    def formatted_uptime(self) -> str:
        """Uptime as days, hours and minutes (e.g., '4 hours, 10 minutes')."""
        uptime = self.uptime
        if uptime is None:
            return NOT_AVAILABLE
        return format_duration(uptime)


def format_duration(duration: timedelta) -> str:
    """Format a duration using its day, hour and minute components."""
    total_minutes = int(duration.total_seconds()) // 60
    days, remainder = divmod(total_minutes, 24 * 60)
    hours, minutes = divmod(remainder, 60)

    parts = []
    for value, unit in ((days, "day"), (hours, "hour"), (minutes, "minute")):
        if value:
            parts.append(f"{value} {unit}{'' if value == 1 else 's'}")
    return ", ".join(parts) if parts else "0 minutes"
