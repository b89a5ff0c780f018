"""Tests for config loading, validation, and env var overrides."""

from pathlib import Path

import pytest

from branchguard.config.loader import ConfigError, load_config
from branchguard.config.schema import status_blocks


class TestStatusThreshold:
    def test_enforced_threshold(self):
        assert status_blocks("fail", "enforced") is True
        assert status_blocks("bypass", "enforced") is False
        assert status_blocks("pass", "enforced") is False

    def test_bypass_threshold(self):
        assert status_blocks("fail", "bypass") is True
        assert status_blocks("bypass", "bypass") is True
        assert status_blocks("pass", "bypass") is False


class TestConfigLoading:
    def test_default_config(self, tmp_path: Path):
        cfg = load_config(tmp_path)
        assert cfg.rules.file == ".github/rulesets.yaml"
        assert cfg.rules.default_branch is None
        assert cfg.check.fail_on == "enforced"
        assert cfg.output.format == "terminal"

    def test_custom_toml(self, tmp_path: Path):
        (tmp_path / ".branchguard.toml").write_text(
            'version = "1.0"\n'
            '[rules]\n'
            'file = "policy/rules.json"\n'
            'default_branch = "trunk"\n'
            '[check]\n'
            'fail_on = "bypass"\n'
            '[output]\n'
            'unknown_key = 1\n'
        )
        cfg = load_config(tmp_path)
        assert cfg.rules.file == "policy/rules.json"
        assert cfg.rules.default_branch == "trunk"
        assert cfg.check.fail_on == "bypass"

    def test_config_override_path(self, tmp_path: Path):
        custom = tmp_path / "custom.toml"
        custom.write_text('[output]\nformat = "json"\n')
        cfg = load_config(tmp_path, config_override=str(custom))
        assert cfg.output.format == "json"

    def test_missing_override_raises(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_config(tmp_path, config_override="/nonexistent/config.toml")

    def test_invalid_toml_raises(self, tmp_path: Path):
        (tmp_path / ".branchguard.toml").write_text("this is not valid [toml")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_invalid_value_raises(self, tmp_path: Path):
        (tmp_path / ".branchguard.toml").write_text('[check]\nfail_on = "sometimes"\n')
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_section_must_be_table(self, tmp_path: Path):
        (tmp_path / ".branchguard.toml").write_text('rules = "oops"\n')
        with pytest.raises(ConfigError):
            load_config(tmp_path)


class TestEnvVarOverrides:
    def test_fail_on_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("CI_BRANCHGUARD_FAIL_ON", "bypass")
        cfg = load_config(tmp_path)
        assert cfg.check.fail_on == "bypass"

    def test_format_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("CI_BRANCHGUARD_FORMAT", "json")
        cfg = load_config(tmp_path)
        assert cfg.output.format == "json"

    def test_rules_file_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("CI_BRANCHGUARD_RULES_FILE", "/tmp/rules.yaml")
        cfg = load_config(tmp_path)
        assert cfg.rules.file == "/tmp/rules.yaml"

    def test_default_branch_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("CI_BRANCHGUARD_DEFAULT_BRANCH", "develop")
        cfg = load_config(tmp_path)
        assert cfg.rules.default_branch == "develop"

    def test_invalid_env_ignored(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("CI_BRANCHGUARD_FAIL_ON", "not_a_level")
        cfg = load_config(tmp_path)
        assert cfg.check.fail_on == "enforced"
