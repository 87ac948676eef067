"""Error handling utilities for syskit."""

from __future__ import annotations

from typing import Any

from syskit.models.common import ProbeIssue


class SyskitError(Exception):
    """Base exception for syskit."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_issue(self) -> ProbeIssue:
        """Convert to ProbeIssue model."""
        return ProbeIssue(code=self.code, message=self.message, details=self.details)


class CollectionError(SyskitError):
    """A domain collector could not build its snapshot value."""

    def __init__(self, message: str, domain: str | None = None, code: str = "COLLECTION_ERROR"):
        details = {"domain": domain} if domain else {}
        super().__init__(message, code=code, details=details)
        self.domain = domain


class MissingFactError(CollectionError):
    """A required system fact is absent."""

    def __init__(self, fact: str, domain: str | None = None):
        super().__init__(f"Required fact is missing: {fact}", domain=domain, code="MISSING_FACT")
        self.details["fact"] = fact
        self.fact = fact


class CommandError(SyskitError):
    """An external tool could not be run to completion."""

    def __init__(self, command: list[str] | str, reason: str):
        if isinstance(command, list):
            command = " ".join(command)
        super().__init__(
            f"Command failed: {command}: {reason}",
            code="COMMAND_ERROR",
            details={"command": command, "reason": reason},
        )
        self.command = command
        self.reason = reason


class PreferenceReadError(SyskitError):
    """A property-list file exists but could not be read or parsed."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Cannot read property list {path}: {reason}",
            code="PREFERENCE_ERROR",
            details={"path": path, "reason": reason},
        )
        self.path = path


class PlatformError(SyskitError):
    """No platform facts provider is available on this host."""

    def __init__(self, message: str = "Unsupported platform"):
        super().__init__(message, code="PLATFORM_ERROR")


class ValidationError(SyskitError):
    """Validation failed."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class ConfigurationError(SyskitError):
    """Configuration error."""

    def __init__(self, message: str, config_key: str | None = None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, code="CONFIG_ERROR", details=details)


def validate_username(username: str) -> None:
    """Validate a short user name before handing it to a directory tool.

    Args:
        username: Account short name to validate

    Raises:
        ValidationError: If the name is empty or could be read as a path or option
    """
    if not username:
        raise ValidationError("User name cannot be empty", field="username")

    if username.startswith("-"):
        raise ValidationError("User name cannot start with '-'", field="username")

    for char in "/\\:\0\n":
        if char in username:
            raise ValidationError(
                f"User name contains invalid character: {char!r}",
                field="username",
            )
