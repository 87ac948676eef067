"""Shared utilities: configuration, errors, logging, subprocess and plist access."""

from syskit.utils.config import SyskitConfig, get_config, load_config, save_config, set_config
from syskit.utils.errors import (
    CollectionError,
    CommandError,
    ConfigurationError,
    MissingFactError,
    PlatformError,
    PreferenceReadError,
    SyskitError,
    ValidationError,
)
from syskit.utils.logging import configure_logging, get_logger
from syskit.utils.plist import plist_value, read_plist
from syskit.utils.shell import CommandResult, CommandRunner

__all__ = [
    "SyskitConfig",
    "get_config",
    "load_config",
    "save_config",
    "set_config",
    "SyskitError",
    "CollectionError",
    "MissingFactError",
    "CommandError",
    "PreferenceReadError",
    "PlatformError",
    "ConfigurationError",
    "ValidationError",
    "configure_logging",
    "get_logger",
    "plist_value",
    "read_plist",
    "CommandResult",
    "CommandRunner",
]
