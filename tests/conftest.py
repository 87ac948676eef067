"""Shared test fixtures for syskit tests."""

import logging
import plistlib
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Sequence

import pytest

from syskit.core.context import SystemContext
from syskit.core.snapshot import SystemSnapshot, set_default_snapshot
from syskit.providers.static import StaticPlatformFacts
from syskit.utils.config import CommandsConfig, PathsConfig, SyskitConfig, set_config
from syskit.utils.errors import CommandError
from syskit.utils.shell import CommandResult, CommandRunner

MANAGED_VOLUME = "5A1D8E2C-3B4F-4C6D-9E8F-0A1B2C3D4E5F"


class FakeRunner(CommandRunner):
    """Command runner that answers from a table instead of spawning processes.

    Commands without a scripted answer fail the way a missing tool does.
    """

    def __init__(self) -> None:
        super().__init__(timeout=None)
        self.responses: dict[tuple[str, ...], CommandResult | CommandError] = {}
        self.calls: list[tuple[str, ...]] = []

    def add(self, args: Sequence[str], stdout: str = "", returncode: int = 0, stderr: str = "") -> None:
        key = tuple(args)
        self.responses[key] = CommandResult(args=list(key), returncode=returncode, stdout=stdout, stderr=stderr)

    def fail(self, args: Sequence[str], reason: str = "timed out after 10.0s") -> None:
        self.responses[tuple(args)] = CommandError(list(args), reason)

    def run(self, args: Sequence[str], merge_stderr: bool = False) -> CommandResult:
        key = tuple(str(arg) for arg in args)
        self.calls.append(key)
        response = self.responses.get(key)
        if response is None:
            raise CommandError(list(key), "not found")
        if isinstance(response, CommandError):
            raise response
        if merge_stderr and response.stderr:
            return CommandResult(
                args=response.args,
                returncode=response.returncode,
                stdout=response.stdout + response.stderr,
            )
        return response

    def count(self, args: Sequence[str]) -> int:
        return self.calls.count(tuple(args))


@pytest.fixture
def write_plist() -> Callable[[Path, Any], Path]:
    """Write an XML property list, creating parent directories."""

    def _write(path: Path, data: Any) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(plistlib.dumps(data))
        return path

    return _write


@pytest.fixture
def config(tmp_path: Path) -> SyskitConfig:
    """Configuration whose preference files all live under tmp_path."""
    prefs = tmp_path / "prefs"
    return SyskitConfig(
        paths=PathsConfig(
            software_update_plist=str(prefs / "com.apple.SoftwareUpdate.plist"),
            powerlogd_plist=str(prefs / "com.apple.powerlogd.plist"),
            loginwindow_plist=str(prefs / "com.apple.loginwindow.plist"),
            accounts_plist=str(prefs / "com.apple.preferences.accounts.plist"),
            findmy_plist=str(prefs / "com.apple.FindMyMac.plist"),
            mobileme_plist=str(prefs / "MobileMeAccounts.plist"),
            system_version_plist=str(prefs / "SystemVersion.plist"),
            system_profiler_cache=str(prefs / "com.apple.SystemProfiler.plist"),
            preboot_root=str(tmp_path / "Preboot"),
            apple_internal_dir=str(tmp_path / "AppleInternal"),
        ),
        commands=CommandsConfig(),
    )


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def static_facts() -> StaticPlatformFacts:
    """Facts of an Apple silicon MacBook Pro running a release build."""
    return StaticPlatformFacts(
        hardware={
            "macModelName": "MacBook Pro",
            "macModelDetails": "14-inch, 2021",
            "processorString": "Apple M1 Pro",
            "installedMemorySize": "16 GB",
            "boardID": "J314sAP",
            "regulatoryID": "A2442",
            "serialString": "C02XK1ABMD6T",
            "configCode": "MD6T",
            "hasUpgradableMemory": False,
        },
        os={
            "osTitleString": "macOS Sequoia",
            "osVersionString": "15.0",
            "osBuildString": "24A335",
            "isBeta": False,
            "isInternalBuild": False,
            "isVirtualMachine": False,
        },
        sysctl={
            "hw.model": "MacBookPro18,3",
            "kern.ostype": "Darwin",
            "kern.osrelease": "24.0.0",
            "kern.boottime": "{ sec = 1700000000, usec = 0 } Tue Nov 14 22:13:20 2023",
        },
    )


@pytest.fixture
def software_update_prefs() -> dict[str, Any]:
    """Contents of a SoftwareUpdate plist with one pending update."""
    return {
        "RecommendedUpdates": [
            {
                "Identifier": "MSU_UPDATE_24A348_patch_15.0.1",
                "Display Name": "macOS Sequoia 15.0.1",
                "Product Key": "062-78643",
                "Display Version": "15.0.1",
            }
        ],
        "FirstOfferDateDictionary": {"062-78643": datetime(2024, 10, 3, 18, 0, 0)},
        "LastSuccessfulDate": datetime(2024, 10, 4, 9, 30, 0),
    }


@pytest.fixture
def populated_prefs(
    config: SyskitConfig,
    write_plist: Callable[[Path, Any], Path],
    software_update_prefs: dict[str, Any],
) -> SyskitConfig:
    """Write a complete, healthy set of preference files for `config`."""
    paths = config.paths
    write_plist(paths.resolve("software_update_plist"), software_update_prefs)
    write_plist(
        paths.resolve("powerlogd_plist"),
        {"PreviousUpdateBuild": "23H124", "LastUpgradeSystemTimestamp": 1727000000.0},
    )
    write_plist(
        paths.resolve("loginwindow_plist"),
        {"RecentUsers": ["alice", "bob"], "GuestEnabled": True},
    )
    write_plist(
        paths.resolve("accounts_plist"),
        {
            "deletedUsers": [
                {
                    "name": "carol",
                    "dsAttrTypeStandard:RealName": "Carol Jones",
                    "dsAttrTypeStandard:UniqueID": 502,
                    "date": datetime(2024, 5, 1, 12, 0, 0),
                }
            ]
        },
    )
    write_plist(paths.resolve("findmy_plist"), {"FMMEnabled": 1})
    write_plist(
        paths.resolve("mobileme_plist"),
        {
            "Accounts": [
                {"AccountID": "alice@example.com", "DisplayName": "Alice Smith", "primaryEmailVerified": 1}
            ]
        },
    )
    write_plist(
        paths.resolve("preboot_root") / MANAGED_VOLUME / "var" / "db" / "CryptoUserInfo.plist",
        {
            "A1": {
                "FullName": "Alice Smith",
                "ShortName": "alice",
                "PasswordHint": "favourite cat",
                "PictureData": b"\x89PNG\r\n",
                "UserType": "Local",
            },
            "B2": {"FullName": "Alice iCloud", "ShortName": "alice", "UserType": "ICloudUser"},
        },
    )
    return config


def add_security_responses(runner: FakeRunner, config: SyskitConfig, enabled: bool = True) -> None:
    """Script every security tool to report everything on (or off)."""
    commands = config.commands
    state = "enabled" if enabled else "disabled"
    runner.add([commands.csrutil, "status"], f"System Integrity Protection status: {state}.\n")
    runner.add([commands.spctl, "--status"], f"assessments {state}\n", returncode=0 if enabled else 1)
    runner.add([commands.fdesetup, "status"], "FileVault is On.\n" if enabled else "FileVault is Off.\n")
    runner.add(
        [commands.spctl, "--status", "--verbose"],
        f"assessments {state}\ndeveloper id {state}\n",
        returncode=0 if enabled else 1,
    )
    runner.add(
        [commands.socketfilterfw, "--getglobalstate"],
        "Firewall is enabled. (State = 1)\n" if enabled else "Firewall is disabled. (State = 0)\n",
    )


@pytest.fixture
def security_runner(fake_runner: FakeRunner, config: SyskitConfig) -> FakeRunner:
    add_security_responses(fake_runner, config)
    return fake_runner


@pytest.fixture
def context(config: SyskitConfig, static_facts: StaticPlatformFacts, fake_runner: FakeRunner) -> SystemContext:
    return SystemContext(config=config, facts=static_facts, runner=fake_runner)


@pytest.fixture
def live_context(
    populated_prefs: SyskitConfig,
    static_facts: StaticPlatformFacts,
    security_runner: FakeRunner,
) -> SystemContext:
    """Context with healthy preference files and every security tool scripted."""
    return SystemContext(config=populated_prefs, facts=static_facts, runner=security_runner)


@pytest.fixture
def snapshot(live_context: SystemContext) -> SystemSnapshot:
    return SystemSnapshot(live_context)


@pytest.fixture(autouse=True)
def reset_globals():
    """Keep process-wide configuration, snapshot and logging from leaking between tests."""
    yield
    set_config(None)
    set_default_snapshot(None)
    logger = logging.getLogger("syskit")
    logger.handlers = []
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
