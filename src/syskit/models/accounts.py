"""User account models."""

from datetime import datetime

from pydantic import BaseModel, Field

from syskit.models.common import NOT_AVAILABLE

# Placeholder UID for a deleted account whose record lost its UniqueID.
UNKNOWN_UNIQUE_ID = 111


class AppleAccount(BaseModel):
    """Apple account signed in on this device."""

    model_config = {"frozen": True}

    account_id: str = Field(default=NOT_AVAILABLE, description="Account identifier")
    display_name: str = Field(default=NOT_AVAILABLE, description="Display name")
    is_verified: bool = Field(default=False, description="Primary email is verified")


class ManagedUser(BaseModel):
    """Local user registered in the preboot managed-user database."""

    model_config = {"frozen": True, "ser_json_bytes": "base64"}

    full_name: str = Field(default=NOT_AVAILABLE, description="Full name")
    short_name: str = Field(default=NOT_AVAILABLE, description="Account short name")
    password_hint: str = Field(default="", description="Password hint")
    picture_data: bytes = Field(default=b"", description="Raw profile picture")
    user_type: str = Field(default=NOT_AVAILABLE, description="Managed user type")


class DeletedUser(BaseModel):
    """Account that was removed from this Mac."""

    model_config = {"frozen": True}

    name: str = Field(default=NOT_AVAILABLE, description="Account short name")
    real_name: str = Field(default=NOT_AVAILABLE, description="Full name")
    unique_id: int = Field(default=UNKNOWN_UNIQUE_ID, description="User ID")
    delete_date: datetime = Field(default=datetime.min, description="When the account was deleted")


class UserAccounts(BaseModel):
    """Inventory of the accounts known to this Mac."""

    model_config = {"frozen": True}

    apple_account: AppleAccount | None = Field(default=None, description="Signed-in Apple account")
    managed_users: list[ManagedUser] = Field(default_factory=list, description="Local managed users")
    recent_users: list[str] = Field(default_factory=list, description="Recently logged-in user names")
    deleted_users: list[DeletedUser] = Field(default_factory=list, description="Deleted accounts")
    guest_enabled: bool = Field(default=False, description="Guest account enabled")
