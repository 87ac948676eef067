"""Platform facts provider backed by fixed values."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from syskit.models.common import NOT_AVAILABLE
from syskit.providers.base import HARDWARE_FACT_KEYS, OS_FACT_KEYS
from syskit.utils.errors import ConfigurationError, PreferenceReadError
from syskit.utils.logging import get_logger
from syskit.utils.plist import read_plist_dict

logger = get_logger("providers.static")


class StaticPlatformFacts:
    """Serves facts from in-memory mappings.

    Used for tests and for rendering a snapshot of a machine that is not
    the one syskit runs on. A facts file is YAML (or a plist when the
    suffix is ``.plist``) with ``hardware``, ``os`` and ``sysctl`` sections.

    Example:
        facts = StaticPlatformFacts.from_file("mini.yaml")
        print(facts.os_facts()["osVersionString"])
    """

    def __init__(
        self,
        hardware: dict[str, Any] | None = None,
        os: dict[str, Any] | None = None,
        sysctl: dict[str, Any] | None = None,
        name: str = "static",
    ) -> None:
        self._hardware = dict(hardware or {})
        self._os = dict(os or {})
        self._sysctl = {key: str(value) for key, value in (sysctl or {}).items()}
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def hardware_facts(self) -> dict[str, Any]:
        return dict(self._hardware)

    def os_facts(self) -> dict[str, Any]:
        return dict(self._os)

    def sysctl(self, name: str) -> str:
        return self._sysctl.get(name, NOT_AVAILABLE)

    @classmethod
    def from_file(cls, path: Path | str) -> "StaticPlatformFacts":
        """Load facts from a YAML or plist file.

        Raises:
            ConfigurationError: If the file is missing or malformed
        """
        path = Path(path).expanduser()
        if not path.exists():
            raise ConfigurationError(f"Facts file not found: {path}", config_key="facts_file")

        if path.suffix == ".plist":
            try:
                data = read_plist_dict(path)
            except PreferenceReadError as e:
                raise ConfigurationError(e.message, config_key="facts_file") from e
        else:
            try:
                data = yaml.safe_load(path.read_text())
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in facts file {path}: {e}", config_key="facts_file") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Facts file {path} must contain a mapping", config_key="facts_file")

        hardware = data.get("hardware") or {}
        os_data = data.get("os") or {}
        sections = (("hardware", hardware, HARDWARE_FACT_KEYS), ("os", os_data, OS_FACT_KEYS))
        for section, values, known in sections:
            if not isinstance(values, dict):
                raise ConfigurationError(f"Section '{section}' in {path} must be a mapping", config_key="facts_file")
            unknown = sorted(set(values) - set(known))
            if unknown:
                logger.warning("Ignoring unknown %s facts in %s: %s", section, path, ", ".join(unknown))
                for key in unknown:
                    del values[key]

        sysctl = data.get("sysctl") or {}
        if not isinstance(sysctl, dict):
            raise ConfigurationError(f"Section 'sysctl' in {path} must be a mapping", config_key="facts_file")

        return cls(
            hardware=hardware,
            os=os_data,
            sysctl=sysctl,
            name=f"static:{path.name}",
        )
