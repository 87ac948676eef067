"""Security posture collector.

Each probe runs one status tool and hands its captured text to a parse
function below. The parse functions are pure, so the brittle substring
rules can be checked against literal tool output.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, TypeVar

from syskit.core.launcher import SettingsPane
from syskit.models.common import ProbeIssue
from syskit.models.security import AllowedAppSources, SecurityInfo
from syskit.utils.errors import CommandError, SyskitError
from syskit.utils.logging import get_logger_with_context
from syskit.utils.plist import read_plist_dict

if TYPE_CHECKING:
    from syskit.core.context import SystemContext

logger = get_logger_with_context("collectors.security", domain="security")

T = TypeVar("T")


def parse_sip_status(output: str) -> bool:
    """``csrutil status``: 'System Integrity Protection status: enabled.'"""
    return "enabled" in output


def parse_gatekeeper_status(output: str) -> bool:
    """``spctl --status``: 'assessments enabled'."""
    return "assessments enabled" in output


def parse_filevault_status(output: str) -> bool:
    """``fdesetup status``: 'FileVault is On.'"""
    return "FileVault is On" in output


def parse_app_sources(output: str) -> AllowedAppSources:
    """``spctl --status --verbose``: 'assessments enabled' / 'developer id enabled'."""
    if "assessments disabled" in output:
        return AllowedAppSources.ANYWHERE
    if "developer id enabled" in output:
        return AllowedAppSources.APP_STORE_AND_DEVELOPERS
    if "developer id disabled" in output:
        return AllowedAppSources.APP_STORE_ONLY
    return AllowedAppSources.UNKNOWN


def parse_firewall_state(output: str) -> bool:
    """``socketfilterfw --getglobalstate``: 'Firewall is enabled. (State = 1)'."""
    return "enabled" in output or "State = 1" in output


class SecurityCollector:
    """Collects the security configuration of the machine.

    A probe whose tool is missing, denied, times out or prints nothing is
    indeterminate: its flag is None and a ProbeIssue records why, so a
    broken probe is never reported as a disabled feature.

    The individual ``*_enabled`` methods re-run their probe on every call
    for callers that need the live state; ``collect`` runs them all once.

    Example:
        collector = SecurityCollector()
        security = collector.collect(context)
        if security.filevault_enabled is False:
            print("FileVault is off")
    """

    @property
    def name(self) -> str:
        return "security"

    @property
    def description(self) -> str:
        return "SIP, Gatekeeper, FileVault, firewall, Find My and app source policy"

    def collect(self, context: "SystemContext") -> SecurityInfo:
        issues: list[ProbeIssue] = []

        def verdict(probe: str, check: Callable[["SystemContext"], T]) -> T | None:
            try:
                return check(context)
            except SyskitError as e:
                issues.append(_issue(probe, e))
                logger.info("%s probe indeterminate: %s", probe, e.message)
                return None

        sources = verdict("app_sources", self._app_sources)
        security = SecurityInfo(
            sip_enabled=verdict("sip", self._sip),
            gatekeeper_enabled=verdict("gatekeeper", self._gatekeeper),
            filevault_enabled=verdict("filevault", self._filevault),
            firewall_enabled=verdict("firewall", self._firewall),
            findmy_enabled=verdict("findmy", self._findmy),
            allowed_app_sources=sources or AllowedAppSources.UNKNOWN,
            issues=issues,
        )
        logger.debug("Security probes finished with %d indeterminate", len(security.indeterminate))
        return security

    def sip_enabled(self, context: "SystemContext") -> bool | None:
        return self._live(self._sip, context)

    def gatekeeper_enabled(self, context: "SystemContext") -> bool | None:
        return self._live(self._gatekeeper, context)

    def filevault_enabled(self, context: "SystemContext") -> bool | None:
        return self._live(self._filevault, context)

    def firewall_enabled(self, context: "SystemContext") -> bool | None:
        return self._live(self._firewall, context)

    def findmy_enabled(self, context: "SystemContext") -> bool | None:
        return self._live(self._findmy, context)

    def allowed_app_sources(self, context: "SystemContext") -> AllowedAppSources:
        return self._live(self._app_sources, context) or AllowedAppSources.UNKNOWN

    def open_security_settings(self, context: "SystemContext") -> None:
        """Open the Security & Privacy pane of System Settings."""
        context.launcher.open(SettingsPane.SECURITY)

    def _sip(self, context: "SystemContext") -> bool:
        return parse_sip_status(_capture(context, [context.config.commands.csrutil, "status"]))

    def _gatekeeper(self, context: "SystemContext") -> bool:
        return parse_gatekeeper_status(_capture(context, [context.config.commands.spctl, "--status"]))

    def _filevault(self, context: "SystemContext") -> bool:
        return parse_filevault_status(_capture(context, [context.config.commands.fdesetup, "status"]))

    def _app_sources(self, context: "SystemContext") -> AllowedAppSources:
        args = [context.config.commands.spctl, "--status", "--verbose"]
        return parse_app_sources(_capture(context, args, merge_stderr=True))

    def _firewall(self, context: "SystemContext") -> bool:
        args = [context.config.commands.socketfilterfw, "--getglobalstate"]
        return parse_firewall_state(_capture(context, args, merge_stderr=True))

    def _findmy(self, context: "SystemContext") -> bool:
        # No file or no key means Find My was never turned on.
        data = read_plist_dict(context.config.paths.resolve("findmy_plist"))
        if data is None:
            return False
        value = data.get("FMMEnabled")
        return isinstance(value, int) and value == 1

    @staticmethod
    def _live(check: Callable[["SystemContext"], T], context: "SystemContext") -> T | None:
        try:
            return check(context)
        except SyskitError as e:
            logger.info("Probe indeterminate: %s", e.message)
            return None


def _capture(context: "SystemContext", args: list[str], merge_stderr: bool = False) -> str:
    """Run a status tool and return its output.

    Raises:
        CommandError: If the tool cannot run or prints nothing
    """
    result = context.runner.run(args, merge_stderr=merge_stderr)
    output = result.output.strip()
    if not output:
        raise CommandError(args, f"no output (exit status {result.returncode})")
    return output


def _issue(probe: str, error: SyskitError) -> ProbeIssue:
    issue = error.to_issue()
    return ProbeIssue(
        code=issue.code,
        message=f"{probe}: {issue.message}",
        details={**issue.details, "probe": probe},
    )

