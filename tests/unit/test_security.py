"""Unit tests for the security collector."""

import pytest

from conftest import add_security_responses
from syskit.collectors.security import (
    SecurityCollector,
    parse_app_sources,
    parse_filevault_status,
    parse_firewall_state,
    parse_gatekeeper_status,
    parse_sip_status,
)
from syskit.core.launcher import SettingsPane
from syskit.models.security import AllowedAppSources


class TestParsers:
    """Tests for the tool output parsers."""

    @pytest.mark.parametrize(
        "output,expected",
        [
            ("System Integrity Protection status: enabled.", True),
            ("System Integrity Protection status: disabled.", False),
        ],
    )
    def test_sip(self, output, expected):
        assert parse_sip_status(output) is expected

    @pytest.mark.parametrize(
        "output,expected",
        [
            ("assessments enabled", True),
            ("assessments disabled", False),
        ],
    )
    def test_gatekeeper(self, output, expected):
        assert parse_gatekeeper_status(output) is expected

    def test_filevault(self):
        assert parse_filevault_status("FileVault is On.") is True
        assert parse_filevault_status("FileVault is Off.") is False
        assert parse_filevault_status("FileVault is Off, but will be enabled after the next restart.") is False

    @pytest.mark.parametrize(
        "output,expected",
        [
            ("assessments disabled", AllowedAppSources.ANYWHERE),
            ("assessments enabled\ndeveloper id enabled", AllowedAppSources.APP_STORE_AND_DEVELOPERS),
            ("assessments enabled\ndeveloper id disabled", AllowedAppSources.APP_STORE_ONLY),
            ("something unexpected", AllowedAppSources.UNKNOWN),
        ],
    )
    def test_app_sources(self, output, expected):
        assert parse_app_sources(output) == expected

    def test_app_sources_disabled_wins(self):
        """Assessments off means anywhere, whatever the developer id line says."""
        assert parse_app_sources("assessments disabled\ndeveloper id enabled") == AllowedAppSources.ANYWHERE

    def test_firewall(self):
        assert parse_firewall_state("Firewall is enabled. (State = 1)") is True
        assert parse_firewall_state("Firewall is disabled. (State = 0)") is False


class TestSecurityCollector:
    """Tests for SecurityCollector.collect."""

    def test_all_enabled(self, context, fake_runner, config, write_plist):
        add_security_responses(fake_runner, config)
        write_plist(config.paths.resolve("findmy_plist"), {"FMMEnabled": 1})

        security = SecurityCollector().collect(context)

        assert security.sip_enabled is True
        assert security.gatekeeper_enabled is True
        assert security.filevault_enabled is True
        assert security.firewall_enabled is True
        assert security.findmy_enabled is True
        assert security.allowed_app_sources == AllowedAppSources.APP_STORE_AND_DEVELOPERS
        assert security.issues == []
        assert security.indeterminate == []

    def test_all_disabled(self, context, fake_runner, config, write_plist):
        add_security_responses(fake_runner, config, enabled=False)
        write_plist(config.paths.resolve("findmy_plist"), {"FMMEnabled": 0})

        security = SecurityCollector().collect(context)

        assert security.sip_enabled is False
        assert security.gatekeeper_enabled is False
        assert security.filevault_enabled is False
        assert security.firewall_enabled is False
        assert security.findmy_enabled is False
        assert security.allowed_app_sources == AllowedAppSources.ANYWHERE

    def test_filevault_reported_on(self, context, fake_runner, config):
        """A stub tool printing 'FileVault is On.' yields True."""
        fake_runner.add([config.commands.fdesetup, "status"], "FileVault is On.\n")
        assert SecurityCollector().collect(context).filevault_enabled is True

    def test_filevault_reported_off(self, context, fake_runner, config):
        fake_runner.add([config.commands.fdesetup, "status"], "FileVault is Off.\n")
        assert SecurityCollector().collect(context).filevault_enabled is False

    def test_failed_probe_is_indeterminate(self, context, fake_runner, config):
        """A tool that times out is unknown, not disabled."""
        add_security_responses(fake_runner, config)
        fake_runner.fail([config.commands.fdesetup, "status"])

        security = SecurityCollector().collect(context)

        assert security.filevault_enabled is None
        assert security.sip_enabled is True
        assert security.indeterminate == ["filevault_enabled"]
        assert len(security.issues) == 1
        issue = security.issues[0]
        assert issue.code == "COMMAND_ERROR"
        assert issue.details["probe"] == "filevault"
        assert "timed out" in issue.message

    def test_empty_output_is_indeterminate(self, context, fake_runner, config):
        add_security_responses(fake_runner, config)
        fake_runner.add([config.commands.csrutil, "status"], "", returncode=1)

        security = SecurityCollector().collect(context)

        assert security.sip_enabled is None
        assert "sip_enabled" in security.indeterminate

    def test_missing_tools(self, context):
        """No tool can run: every tool-backed flag is unknown."""
        security = SecurityCollector().collect(context)

        assert security.sip_enabled is None
        assert security.gatekeeper_enabled is None
        assert security.filevault_enabled is None
        assert security.firewall_enabled is None
        assert security.allowed_app_sources == AllowedAppSources.UNKNOWN
        assert len(security.issues) == 5

    def test_gatekeeper_status_on_stderr(self, context, fake_runner, config):
        """spctl writes its verbose status to stderr."""
        fake_runner.add(
            [config.commands.spctl, "--status", "--verbose"],
            stderr="assessments enabled\ndeveloper id disabled\n",
        )
        assert SecurityCollector().collect(context).allowed_app_sources == AllowedAppSources.APP_STORE_ONLY


class TestFindMy:
    """Tests for the Find My preference probe."""

    def test_missing_file_is_disabled(self, context):
        assert SecurityCollector().findmy_enabled(context) is False

    def test_missing_key_is_disabled(self, context, config, write_plist):
        write_plist(config.paths.resolve("findmy_plist"), {"Other": 1})
        assert SecurityCollector().findmy_enabled(context) is False

    def test_enabled(self, context, config, write_plist):
        write_plist(config.paths.resolve("findmy_plist"), {"FMMEnabled": 1})
        assert SecurityCollector().findmy_enabled(context) is True

    def test_corrupt_file_is_unknown(self, context, config):
        path = config.paths.resolve("findmy_plist")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"not a property list")

        assert SecurityCollector().findmy_enabled(context) is None
        security = SecurityCollector().collect(context)
        assert security.findmy_enabled is None
        assert any(issue.code == "PREFERENCE_ERROR" for issue in security.issues)


class TestLiveChecks:
    """Tests for the per-probe live methods."""

    def test_probe_runs_every_call(self, context, fake_runner, config):
        args = [config.commands.csrutil, "status"]
        fake_runner.add(args, "System Integrity Protection status: enabled.")
        collector = SecurityCollector()

        assert collector.sip_enabled(context) is True
        fake_runner.add(args, "System Integrity Protection status: disabled.")
        assert collector.sip_enabled(context) is False
        assert fake_runner.count(args) == 2

    def test_live_failure_is_unknown(self, context):
        collector = SecurityCollector()
        assert collector.firewall_enabled(context) is None
        assert collector.allowed_app_sources(context) == AllowedAppSources.UNKNOWN

    def test_open_security_settings(self, context, fake_runner, config):
        fake_runner.add([config.commands.open, SettingsPane.SECURITY.value])
        SecurityCollector().open_security_settings(context)
        assert fake_runner.calls == [(config.commands.open, SettingsPane.SECURITY.value)]
