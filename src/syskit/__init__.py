"""syskit: read-only system information for macOS.

Reads what a Mac knows about itself:

- **Hardware**: model, chip, memory, serial, kernel and uptime
- **Operating system**: title, version, build and software update state
- **Security**: SIP, Gatekeeper, FileVault, firewall, Find My, app sources
- **Accounts**: Apple account, managed, recent and deleted users

Usage:
    from syskit import SystemContext, SystemSnapshot

    snapshot = SystemSnapshot(SystemContext.create())
    print(snapshot.hardware.model_name)
    print(snapshot.os.display_version)

    # Values are memoized; refresh re-collects on the next read
    snapshot.refresh("security")
    if snapshot.security.filevault_enabled is None:
        print(snapshot.security.issues)

CLI:
    syskit show [--section security] [--format json]
    syskit security
    syskit user hint <username>
    syskit open software-update
"""

__version__ = "0.1.0"

# Core classes
from syskit.core.context import SystemContext
from syskit.core.launcher import SettingsLauncher, SettingsPane
from syskit.core.snapshot import SystemSnapshot, get_default_snapshot, set_default_snapshot

# Models (commonly used)
from syskit.models.accounts import AppleAccount, DeletedUser, ManagedUser, UserAccounts
from syskit.models.common import ProbeIssue
from syskit.models.hardware import HardwareInfo
from syskit.models.security import AllowedAppSources, SecurityInfo
from syskit.models.snapshot import SnapshotReport
from syskit.models.software import OSInfo, RecommendedUpdate, UpdateInfo

# Collectors
from syskit.collectors.base import Collector
from syskit.collectors.registry import CollectorRegistry, get_default_registry

# Providers
from syskit.providers import MacOSPlatformFacts, PlatformFacts, StaticPlatformFacts

# Renderers
from syskit.renderers.base import OutputFormat, RenderContext, Renderer

__all__ = [
    # Version
    "__version__",
    # Core
    "SystemContext",
    "SystemSnapshot",
    "SettingsLauncher",
    "SettingsPane",
    "get_default_snapshot",
    "set_default_snapshot",
    # Models
    "HardwareInfo",
    "OSInfo",
    "UpdateInfo",
    "RecommendedUpdate",
    "SecurityInfo",
    "AllowedAppSources",
    "UserAccounts",
    "AppleAccount",
    "ManagedUser",
    "DeletedUser",
    "SnapshotReport",
    "ProbeIssue",
    # Collectors
    "Collector",
    "CollectorRegistry",
    "get_default_registry",
    # Providers
    "PlatformFacts",
    "MacOSPlatformFacts",
    "StaticPlatformFacts",
    # Renderers
    "Renderer",
    "RenderContext",
    "OutputFormat",
]
