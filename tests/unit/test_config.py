"""Unit tests for configuration loading."""

from pathlib import Path

import pytest
import yaml

from syskit.utils.config import (
    SyskitConfig,
    get_config,
    get_config_paths,
    load_config,
    save_config,
    set_config,
)
from syskit.utils.errors import ConfigurationError


class TestDefaults:
    """Tests for default configuration values."""

    def test_defaults(self):
        config = SyskitConfig()

        assert config.commands.timeout == 10.0
        assert config.commands.fdesetup == "/usr/bin/fdesetup"
        assert config.output.default_format == "terminal"
        assert config.facts_file is None
        assert config.paths.preboot_root == "/System/Volumes/Preboot"

    def test_resolve_expands_home(self):
        resolved = SyskitConfig().paths.resolve("mobileme_plist")
        assert resolved.is_absolute()
        assert "~" not in str(resolved)
        assert resolved.name == "MobileMeAccounts.plist"


class TestLoadConfig:
    """Tests for load_config."""

    def test_explicit_file(self, tmp_path):
        path = tmp_path / "syskit.yaml"
        path.write_text("commands:\n  timeout: 2.5\noutput:\n  default_format: json\n")

        config = load_config(path)

        assert config.commands.timeout == 2.5
        assert config.output.default_format == "json"
        assert config.commands.csrutil == "/usr/bin/csrutil"

    def test_explicit_file_missing(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "syskit.yaml"
        path.write_text("commands: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_config(path)

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "syskit.yaml"
        path.write_text("commands:\n  timeout: soon\n")
        with pytest.raises(ConfigurationError, match="Invalid config"):
            load_config(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "syskit.yaml"
        path.write_text("")
        assert load_config(path) == SyskitConfig()

    def test_searches_working_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path / "home"))
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        (tmp_path / ".syskit.yaml").write_text("facts_file: facts.yaml\n")

        assert load_config().facts_file == "facts.yaml"

    def test_no_file_found(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path / "home"))
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)

        assert load_config() == SyskitConfig()


class TestConfigPaths:
    """Tests for get_config_paths."""

    def test_xdg(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
        paths = get_config_paths()

        assert paths[0] == Path.cwd() / ".syskit.yaml"
        assert paths[-1] == tmp_path / "xdg" / "syskit" / "config.yaml"


class TestSaveConfig:
    """Tests for save_config."""

    def test_round_trip_changes_only(self, tmp_path):
        config = SyskitConfig.model_validate({"commands": {"timeout": 30}})
        path = save_config(config, tmp_path / "nested" / "config.yaml")

        assert yaml.safe_load(path.read_text()) == {"commands": {"timeout": 30.0}}
        assert load_config(path).commands.timeout == 30

    def test_include_defaults(self, tmp_path):
        path = save_config(SyskitConfig(), tmp_path / "config.yaml", include_defaults=True)
        data = yaml.safe_load(path.read_text())

        assert data["commands"]["timeout"] == 10.0
        assert data["paths"]["preboot_root"] == "/System/Volumes/Preboot"


class TestGlobalConfig:
    """Tests for get_config and set_config."""

    def test_set_and_get(self):
        config = SyskitConfig.model_validate({"output": {"verbose": True}})
        set_config(config)
        assert get_config() is config

    def test_reset(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        set_config(SyskitConfig.model_validate({"output": {"verbose": True}}))
        set_config(None)
        assert get_config().output.verbose is False
