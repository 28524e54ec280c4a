"""Tests for configuration loading and resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from logpress.core.config import load_env_config, load_toml_config, resolve_settings
from logpress.errors import ConfigError
from logpress.types.config import Settings


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every test from an empty cwd with a fake home and no LOGPRESS_* vars."""
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    for var in (
        "LOGPRESS_MIN_SIZE", "LOGPRESS_MIN_AGE", "LOGPRESS_DIRS", "LOGPRESS_ALGORITHM",
        "LOGPRESS_LEVEL", "LOGPRESS_PID_FILE", "LOGPRESS_LOG_FILE", "LOGPRESS_NICE",
    ):
        monkeypatch.delenv(var, raising=False)
    return home


class TestLoadEnvConfig:
    def test_empty(self) -> None:
        assert load_env_config() == {}

    def test_reads_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOGPRESS_MIN_SIZE", "8")
        monkeypatch.setenv("LOGPRESS_DIRS", "/a:/b")
        config = load_env_config()
        assert config["min_size"] == "8"
        assert config["directories"] == ["/a", "/b"]


class TestLoadTomlConfig:
    def test_no_file(self) -> None:
        assert load_toml_config() == {}

    def test_cwd_file_with_table(self) -> None:
        Path("logpress.toml").write_text('[logpress]\nmin_age = 3\nalgorithm = "xz"\n')
        assert load_toml_config() == {"min_age": 3, "algorithm": "xz"}

    def test_user_file_top_level(self, isolated_env: Path) -> None:
        cfg = isolated_env / ".config" / "logpress" / "config.toml"
        cfg.parent.mkdir(parents=True)
        cfg.write_text("min_size = 4096\n")
        assert load_toml_config() == {"min_size": 4096}

    def test_explicit_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_toml_config(tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.toml"
        bad.write_text("min_size = = 3\n")
        with pytest.raises(ConfigError, match="Cannot read"):
            load_toml_config(bad)


class TestResolveSettings:
    def test_defaults(self) -> None:
        settings = resolve_settings({"directories": ["/var/log/app"]})
        assert settings == Settings(directories=(Path("/var/log/app"),))
        assert settings.policy().min_size_bytes == 10 * 1024
        assert settings.policy().min_age_days == 7
        assert settings.policy().dry_run is False

    def test_precedence(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        cfg = tmp_path / "cfg.toml"
        cfg.write_text('min_size = 2\nmin_age = 1\nlevel = 1\ndirectories = ["/from/toml"]\n')
        monkeypatch.setenv("LOGPRESS_MIN_AGE", "5")
        monkeypatch.setenv("LOGPRESS_LEVEL", "4")

        settings = resolve_settings({"level": 9, "directories": []}, config_path=cfg)

        assert settings.min_size == 2
        assert settings.min_age_days == 5
        assert settings.level == 9
        assert settings.directories == (Path("/from/toml"),)

    def test_dry_run_from_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "cfg.toml"
        cfg.write_text('dry_run = true\ndirectories = ["/x"]\n')
        assert resolve_settings(config_path=cfg).policy().dry_run is True

    def test_dry_run_string_rejected(self, tmp_path: Path) -> None:
        cfg = tmp_path / "cfg.toml"
        cfg.write_text('dry_run = "false"\ndirectories = ["/x"]\n')
        with pytest.raises(ConfigError, match="dry_run must be true or false"):
            resolve_settings(config_path=cfg)

    def test_cli_false_overrides_toml_dry_run(self, tmp_path: Path) -> None:
        cfg = tmp_path / "cfg.toml"
        cfg.write_text('dry_run = true\ndirectories = ["/x"]\n')
        assert resolve_settings({"dry_run": False}, config_path=cfg).dry_run is False

    def test_non_numeric_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOGPRESS_MIN_SIZE", "ten")
        with pytest.raises(ConfigError, match="min_size must be an integer"):
            resolve_settings({"directories": ["/x"]})

    def test_negative_rejected(self) -> None:
        with pytest.raises(ConfigError, match="min_age must be >= 0"):
            resolve_settings({"directories": ["/x"], "min_age": -1})

    def test_level_out_of_range(self) -> None:
        with pytest.raises(ConfigError, match="level"):
            resolve_settings({"directories": ["/x"], "level": 10})

    def test_no_directories(self) -> None:
        with pytest.raises(ConfigError, match="No directories"):
            resolve_settings({})

    def test_unknown_algorithm(self) -> None:
        with pytest.raises(ConfigError, match="Unknown compression algorithm"):
            resolve_settings({"directories": ["/x"], "algorithm": "rar"})

    def test_unknown_key(self) -> None:
        Path("logpress.toml").write_text('colour = "blue"\ndirectories = ["/x"]\n')
        with pytest.raises(ConfigError, match="colour"):
            resolve_settings()

    def test_paths_expanded(self, isolated_env: Path) -> None:
        settings = resolve_settings({"directories": ["~/logs"], "pid_file": "~/run/logpress.pid"})
        assert settings.directories == (isolated_env / "logs",)
        assert settings.pid_file == isolated_env / "run" / "logpress.pid"
