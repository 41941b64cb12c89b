"""Tests for config loading, validation, and env var overrides."""

from pathlib import Path

import pytest

from stagefmt.config.loader import ConfigError, load_config


class TestConfigLoading:
    def test_default_config(self, tmp_path: Path):
        cfg = load_config(tmp_path)
        assert cfg.format.formatter == ""
        assert cfg.format.patterns == []
        assert cfg.format.update_working_tree is True
        assert cfg.format.write is True
        assert cfg.format.jobs == 1
        assert cfg.format.timeout is None
        assert cfg.output.format == "terminal"

    def test_custom_toml(self, tmp_path: Path):
        (tmp_path / ".stagefmt.toml").write_text(
            'version = "1.0"\n'
            '[format]\n'
            'formatter = "black -q -"\n'
            'patterns = ["*.py", "!migrations/*"]\n'
            'update_working_tree = false\n'
            'jobs = 4\n'
            '[output]\n'
            'format = "json"\n'
        )
        cfg = load_config(tmp_path)
        assert cfg.format.formatter == "black -q -"
        assert cfg.format.patterns == ["*.py", "!migrations/*"]
        assert cfg.format.update_working_tree is False
        assert cfg.format.jobs == 4
        assert cfg.output.format == "json"

    def test_unknown_keys_ignored(self, tmp_path: Path):
        (tmp_path / ".stagefmt.toml").write_text('[format]\nflavour = "mint"\n')
        assert load_config(tmp_path).format.formatter == ""

    def test_zero_timeout_disables(self, tmp_path: Path):
        (tmp_path / ".stagefmt.toml").write_text("[format]\ntimeout = 0\n")
        assert load_config(tmp_path).format.timeout is None

    def test_config_override_path(self, tmp_path: Path):
        custom = tmp_path / "custom.toml"
        custom.write_text('[format]\nformatter = "cat"\n')
        cfg = load_config(tmp_path, config_override=str(custom))
        assert cfg.format.formatter == "cat"

    def test_missing_override_raises(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_config(tmp_path, config_override="/nonexistent/config.toml")

    def test_invalid_toml_raises(self, tmp_path: Path):
        (tmp_path / ".stagefmt.toml").write_text("this is not valid [toml")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    @pytest.mark.parametrize(
        "body",
        [
            '[format]\npatterns = "*.py"\n',
            "[format]\njobs = -1\n",
            "[format]\ntimeout = -3\n",
            '[output]\nformat = "sarif"\n',
            'format = "not a table"\n',
        ],
    )
    def test_invalid_values_raise(self, tmp_path: Path, body: str):
        (tmp_path / ".stagefmt.toml").write_text(body)
        with pytest.raises(ConfigError):
            load_config(tmp_path)


class TestEnvVarOverrides:
    def test_formatter_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("STAGEFMT_FORMATTER", "prettier --stdin-filepath {}")
        assert load_config(tmp_path).format.formatter == "prettier --stdin-filepath {}"

    def test_format_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("STAGEFMT_FORMAT", "json")
        assert load_config(tmp_path).output.format == "json"

    def test_jobs_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("STAGEFMT_JOBS", "3")
        assert load_config(tmp_path).format.jobs == 3

    def test_timeout_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("STAGEFMT_TIMEOUT", "2.5")
        assert load_config(tmp_path).format.timeout == 2.5

    def test_invalid_env_ignored(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("STAGEFMT_FORMAT", "xml")
        monkeypatch.setenv("STAGEFMT_JOBS", "many")
        monkeypatch.setenv("STAGEFMT_TIMEOUT", "-1")
        cfg = load_config(tmp_path)
        assert cfg.output.format == "terminal"
        assert cfg.format.jobs == 1
        assert cfg.format.timeout is None
