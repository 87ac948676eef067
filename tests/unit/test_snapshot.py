"""Unit tests for SystemSnapshot."""

import threading
import time

import pytest
from pydantic import BaseModel

from syskit.collectors.registry import CollectorRegistry, create_default_registry
from syskit.core.launcher import SettingsPane
from syskit.core.snapshot import SystemSnapshot, get_default_snapshot, set_default_snapshot
from syskit.models.security import AllowedAppSources
from syskit.models.snapshot import SnapshotReport
from syskit.utils.errors import CollectionError


class Value(BaseModel):
    number: int


class CountingCollector:
    """Collector that counts how often it runs."""

    def __init__(self, name: str = "hardware", delay: float = 0.0) -> None:
        self._name = name
        self.delay = delay
        self.calls = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return "counts collections"

    def collect(self, context) -> Value:
        self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        return Value(number=self.calls)


@pytest.fixture
def counting():
    return CountingCollector()


@pytest.fixture
def counting_snapshot(context, counting):
    registry = CollectorRegistry()
    registry.register(counting)
    return SystemSnapshot(context, registry=registry)


class TestMemoization:
    """Tests for lazy, memoized collection."""

    def test_lazy(self, counting_snapshot, counting):
        assert counting.calls == 0
        assert counting_snapshot.is_collected("hardware") is False

    def test_collected_once(self, counting_snapshot, counting):
        first = counting_snapshot.hardware
        second = counting_snapshot.hardware

        assert first is second
        assert counting.calls == 1
        assert counting_snapshot.is_collected("hardware") is True

    def test_refresh_domain(self, counting_snapshot, counting):
        assert counting_snapshot.hardware.number == 1
        counting_snapshot.refresh("hardware")

        assert counting_snapshot.is_collected("hardware") is False
        assert counting_snapshot.hardware.number == 2

    def test_refresh_all(self, counting_snapshot, counting):
        counting_snapshot.hardware
        counting_snapshot.refresh()
        counting_snapshot.hardware
        assert counting.calls == 2

    def test_refresh_unknown_domain(self, counting_snapshot):
        with pytest.raises(KeyError):
            counting_snapshot.refresh("printers")

    def test_concurrent_first_read(self, context):
        """Threads racing on the first read collect only once."""
        slow = CountingCollector(delay=0.05)
        registry = CollectorRegistry()
        registry.register(slow)
        snapshot = SystemSnapshot(context, registry=registry)

        results = []
        threads = [threading.Thread(target=lambda: results.append(snapshot.hardware)) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert slow.calls == 1
        assert len(results) == 8
        assert all(result is results[0] for result in results)

    def test_failure_not_cached(self, context):
        """A failed collection is retried on the next read."""

        class Flaky(CountingCollector):
            def collect(self, context):
                self.calls += 1
                if self.calls == 1:
                    raise CollectionError("first read fails", domain="hardware")
                return Value(number=self.calls)

        flaky = Flaky()
        registry = CollectorRegistry()
        registry.register(flaky)
        snapshot = SystemSnapshot(context, registry=registry)

        with pytest.raises(CollectionError):
            snapshot.hardware
        assert snapshot.hardware.number == 2


class TestFullSnapshot:
    """Tests against the built-in collectors."""

    def test_report(self, snapshot):
        report = snapshot.report()

        assert isinstance(report, SnapshotReport)
        assert report.hardware.model_name == "MacBook Pro"
        assert report.os.display_version == "15.0 (24A335)"
        assert report.security.filevault_enabled is True
        assert report.accounts.guest_enabled is True

    def test_domains_independent(self, snapshot, live_context):
        """Reading one domain leaves the others uncollected."""
        snapshot.security
        assert snapshot.is_collected("security")
        assert not snapshot.is_collected("accounts")
        assert not snapshot.is_collected("hardware")

    def test_security_memoized_until_refresh(self, snapshot, security_runner, config):
        fdesetup = [config.commands.fdesetup, "status"]
        assert snapshot.security.filevault_enabled is True

        security_runner.add(fdesetup, "FileVault is Off.\n")
        assert snapshot.security.filevault_enabled is True

        snapshot.refresh("security")
        assert snapshot.security.filevault_enabled is False
        assert security_runner.count(fdesetup) == 2

    def test_live_checks_bypass_memo(self, snapshot, security_runner, config):
        snapshot.security
        security_runner.add([config.commands.fdesetup, "status"], "FileVault is Off.\n")

        assert snapshot.filevault_enabled() is False
        assert snapshot.security.filevault_enabled is True
        assert snapshot.sip_enabled() is True
        assert snapshot.gatekeeper_enabled() is True
        assert snapshot.firewall_enabled() is True
        assert snapshot.findmy_enabled() is True
        assert snapshot.allowed_app_sources() == AllowedAppSources.APP_STORE_AND_DEVELOPERS

    def test_account_actions(self, snapshot, security_runner, config):
        security_runner.add(
            [config.commands.dscl, ".", "-read", "/Users/alice", "AuthenticationHint"],
            "AuthenticationHint: favourite cat\n",
        )
        assert snapshot.password_hint("alice") == "favourite cat"
        assert snapshot.current_user_is_admin() is False
        assert isinstance(snapshot.current_user_is_guest(), bool)

    def test_open_settings(self, snapshot, security_runner, config):
        snapshot.open_settings(SettingsPane.ABOUT_THIS_MAC)
        assert security_runner.calls[-1] == (config.commands.open, SettingsPane.ABOUT_THIS_MAC.value)

    def test_default_registry(self, live_context):
        snapshot = SystemSnapshot(live_context)
        assert snapshot.registry.names == create_default_registry().names


class TestDefaultSnapshot:
    """Tests for the process-wide snapshot accessors."""

    def test_set_and_get(self, snapshot):
        set_default_snapshot(snapshot)
        assert get_default_snapshot() is snapshot

    def test_built_on_first_use(self, monkeypatch, live_context):
        monkeypatch.setattr("syskit.core.snapshot.SystemContext.create", classmethod(lambda cls: live_context))
        set_default_snapshot(None)

        first = get_default_snapshot()
        assert first.context is live_context
        assert get_default_snapshot() is first
