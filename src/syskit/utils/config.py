"""Configuration file support for syskit."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from syskit.utils.errors import ConfigurationError


class PathsConfig(BaseModel):
    """Locations of the OS-owned files syskit reads."""

    software_update_plist: str = Field(
        default="/Library/Preferences/com.apple.SoftwareUpdate.plist",
        description="Software update state",
    )
    powerlogd_plist: str = Field(
        default="/Library/Preferences/com.apple.powerlogd.plist",
        description="Boot and upgrade statistics",
    )
    loginwindow_plist: str = Field(
        default="/Library/Preferences/com.apple.loginwindow.plist",
        description="Login window state (recent users, guest flag)",
    )
    accounts_plist: str = Field(
        default="/Library/Preferences/com.apple.preferences.accounts.plist",
        description="Deleted user accounts",
    )
    findmy_plist: str = Field(
        default="/Library/Preferences/com.apple.FindMyMac.plist",
        description="Find My Mac state",
    )
    mobileme_plist: str = Field(
        default="~/Library/Preferences/MobileMeAccounts.plist",
        description="Signed-in Apple accounts of the current user",
    )
    system_version_plist: str = Field(
        default="/System/Library/CoreServices/SystemVersion.plist",
        description="OS product name, version and build",
    )
    system_profiler_cache: str = Field(
        default="~/Library/Preferences/com.apple.SystemProfiler.plist",
        description="Marketing model name cache",
    )
    preboot_root: str = Field(
        default="/System/Volumes/Preboot",
        description="Preboot volume root holding the managed-user database",
    )
    apple_internal_dir: str = Field(
        default="/AppleInternal",
        description="Marker directory present on internal builds",
    )

    def resolve(self, name: str) -> Path:
        """Return a configured path with the home directory expanded."""
        return Path(getattr(self, name)).expanduser()


class CommandsConfig(BaseModel):
    """External tool settings."""

    timeout: float | None = Field(default=10.0, description="Per-command timeout in seconds (None waits forever)")
    csrutil: str = Field(default="/usr/bin/csrutil", description="SIP status tool")
    spctl: str = Field(default="/usr/sbin/spctl", description="Gatekeeper status tool")
    fdesetup: str = Field(default="/usr/bin/fdesetup", description="FileVault status tool")
    socketfilterfw: str = Field(
        default="/usr/libexec/ApplicationFirewall/socketfilterfw",
        description="Application firewall tool",
    )
    dsmemberutil: str = Field(default="/usr/bin/dsmemberutil", description="Group membership tool")
    dscl: str = Field(default="/usr/bin/dscl", description="Directory service command line")
    sysctl: str = Field(default="/usr/sbin/sysctl", description="Kernel parameter query tool")
    system_profiler: str = Field(default="/usr/sbin/system_profiler", description="Hardware report tool")
    ioreg: str = Field(default="/usr/sbin/ioreg", description="I/O registry dump tool")
    open: str = Field(default="/usr/bin/open", description="URL and application launcher")


class OutputConfig(BaseModel):
    """Output configuration."""

    default_format: str = Field(default="terminal", description="Default output format")
    color: bool = Field(default=True, description="Enable color output")
    verbose: bool = Field(default=False, description="Verbose output")


class SyskitConfig(BaseModel):
    """Main configuration for syskit."""

    paths: PathsConfig = Field(default_factory=PathsConfig)
    commands: CommandsConfig = Field(default_factory=CommandsConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    facts_file: str | None = Field(
        default=None,
        description="Static platform facts file used instead of querying the OS",
    )


def get_config_paths() -> list[Path]:
    """Get possible configuration file paths.

    Returns:
        List of paths to check for configuration files
    """
    paths = []

    paths.append(Path.cwd() / ".syskit.yaml")
    paths.append(Path.cwd() / "syskit.yaml")

    home = Path.home()
    paths.append(home / ".syskit.yaml")
    paths.append(home / ".config" / "syskit" / "config.yaml")

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        paths.append(Path(xdg_config) / "syskit" / "config.yaml")

    return paths


def load_config(config_path: Path | str | None = None) -> SyskitConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file. If None, searches default locations.

    Returns:
        Loaded configuration

    Raises:
        ConfigurationError: If an explicit file is missing or any file is invalid
    """
    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            return _load_config_file(path)
        raise ConfigurationError(f"Config file not found: {config_path}")

    for path in get_config_paths():
        if path.exists():
            return _load_config_file(path)

    return SyskitConfig()


def _load_config_file(path: Path) -> SyskitConfig:
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read config file {path}: {e}") from e

    if data is None:
        return SyskitConfig()
    try:
        return SyskitConfig.model_validate(data)
    except ValueError as e:
        raise ConfigurationError(f"Invalid config file {path}: {e}") from e


def default_config_path() -> Path:
    """Where `save_config` writes when no path is given."""
    return Path.home() / ".config" / "syskit" / "config.yaml"


def save_config(
    config: SyskitConfig,
    config_path: Path | str | None = None,
    include_defaults: bool = False,
) -> Path:
    """Save configuration to file.

    Args:
        config: Configuration to save
        config_path: Path to save to. Defaults to ~/.config/syskit/config.yaml
        include_defaults: Also write settings that still hold their default

    Returns:
        Path where config was saved
    """
    if config_path is None:
        config_path = default_config_path()
    else:
        config_path = Path(config_path)

    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json", exclude_defaults=not include_defaults)
    config_path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=False))

    return config_path


_config: SyskitConfig | None = None


def get_config() -> SyskitConfig:
    """Get the global configuration instance, loading it on first call."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: SyskitConfig | None) -> None:
    """Set (or with None, reset) the global configuration instance."""
    global _config
    _config = config
