"""Domain collectors for system facts."""

from syskit.collectors.base import Collector
from syskit.collectors.registry import (
    CollectorRegistry,
    create_default_registry,
    get_default_registry,
)
from syskit.collectors.hardware import HardwareCollector
from syskit.collectors.software import OSCollector, UpdateCollector, decode_update_preferences
from syskit.collectors.security import (
    SecurityCollector,
    parse_app_sources,
    parse_filevault_status,
    parse_firewall_state,
    parse_gatekeeper_status,
    parse_sip_status,
)
from syskit.collectors.accounts import (
    NO_HINT,
    AccountsCollector,
    find_managed_user_database,
    parse_deleted_users,
    parse_managed_users,
    parse_password_hint,
)

__all__ = [
    # Base
    "Collector",
    "CollectorRegistry",
    "create_default_registry",
    "get_default_registry",
    # Domains
    "HardwareCollector",
    "OSCollector",
    "UpdateCollector",
    "SecurityCollector",
    "AccountsCollector",
    # Parsers
    "decode_update_preferences",
    "parse_app_sources",
    "parse_filevault_status",
    "parse_firewall_state",
    "parse_gatekeeper_status",
    "parse_sip_status",
    "parse_deleted_users",
    "parse_managed_users",
    "parse_password_hint",
    "find_managed_user_database",
    "NO_HINT",
]
