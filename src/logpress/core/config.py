"""Configuration loading (TOML, env vars, .env) and resolution into Settings."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from logpress.compressors.registry import resolve_algorithm
from logpress.errors import ConfigError
from logpress.types.config import (
    DEFAULT_ALGORITHM,
    DEFAULT_LEVEL,
    DEFAULT_MIN_AGE_DAYS,
    DEFAULT_MIN_SIZE,
    DEFAULT_NICE,
    Settings,
)

# Load .env from current directory (and parents), won't override existing env vars
load_dotenv()

CONFIG_FILENAME = "logpress.toml"

ENV_MAP = {
    "min_size": "LOGPRESS_MIN_SIZE",
    "min_age": "LOGPRESS_MIN_AGE",
    "directories": "LOGPRESS_DIRS",
    "algorithm": "LOGPRESS_ALGORITHM",
    "level": "LOGPRESS_LEVEL",
    "pid_file": "LOGPRESS_PID_FILE",
    "log_file": "LOGPRESS_LOG_FILE",
    "nice": "LOGPRESS_NICE",
}

_INT_KEYS = ("min_size", "min_age", "level", "nice")


def user_config_path() -> Path:
    return Path.home() / ".config" / "logpress" / "config.toml"


def load_env_config() -> dict[str, Any]:
    """Load configuration from LOGPRESS_* environment variables."""
    config: dict[str, Any] = {}
    for key, env_var in ENV_MAP.items():
        value = os.environ.get(env_var)
        if not value:
            continue
        if key == "directories":
            config[key] = [d for d in value.split(os.pathsep) if d]
        else:
            config[key] = value
    return config


def load_toml_config(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from a TOML file.

    An explicit *path* must exist. Otherwise ``./logpress.toml`` and then
    ``~/.config/logpress/config.toml`` are tried. Settings may live at the
    top level or under a ``[logpress]`` table.
    """
    if path is not None:
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
        candidates = [path]
    else:
        candidates = [Path.cwd() / CONFIG_FILENAME, user_config_path()]

    for toml_path in candidates:
        if not toml_path.is_file():
            continue
        try:
            with open(toml_path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ConfigError(f"Cannot read config file {toml_path}: {exc}") from exc
        section = data.get("logpress", data)
        if not isinstance(section, dict):
            raise ConfigError(f"[logpress] in {toml_path} must be a table")
        return dict(section)
    return {}


def _as_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    try:
        number = int(str(value).strip())
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got {value!r}") from None
    if number < 0:
        raise ConfigError(f"{key} must be >= 0, got {number}")
    return number


def _as_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    raise ConfigError(f"{key} must be true or false, got {value!r}")


def _as_directories(value: Any) -> tuple[Path, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise ConfigError(f"directories must be a list of paths, got {value!r}")
    return tuple(Path(str(d)).expanduser() for d in value)


def resolve_settings(
    overrides: dict[str, Any] | None = None,
    *,
    config_path: Path | None = None,
) -> Settings:
    """Merge defaults < TOML < environment < *overrides* into validated Settings.

    *overrides* holds explicit CLI values; ``None`` entries and empty
    sequences are ignored so they don't mask lower layers.
    """
    merged: dict[str, Any] = {}
    merged.update(load_toml_config(config_path))
    merged.update(load_env_config())
    for key, value in (overrides or {}).items():
        if value is None or value == () or value == []:
            continue
        merged[key] = value

    unknown = set(merged) - set(ENV_MAP) - {"dry_run"}
    if unknown:
        raise ConfigError(f"Unknown configuration key(s): {', '.join(sorted(unknown))}")

    ints = {key: _as_int(key, merged[key]) for key in _INT_KEYS if key in merged}
    if ints.get("level", DEFAULT_LEVEL) > 9:
        raise ConfigError(f"level must be between 0 and 9, got {ints['level']}")

    directories = _as_directories(merged.get("directories", []))
    if not directories:
        raise ConfigError("No directories to scan (pass them as arguments or set LOGPRESS_DIRS)")

    try:
        algorithm = resolve_algorithm(str(merged.get("algorithm", DEFAULT_ALGORITHM)))
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc

    pid_file = merged.get("pid_file")
    log_file = merged.get("log_file")
    return Settings(
        directories=directories,
        min_size=ints.get("min_size", DEFAULT_MIN_SIZE),
        min_age_days=ints.get("min_age", DEFAULT_MIN_AGE_DAYS),
        dry_run=_as_bool("dry_run", merged.get("dry_run", False)),
        algorithm=algorithm,
        level=ints.get("level", DEFAULT_LEVEL),
        pid_file=Path(str(pid_file)).expanduser() if pid_file else None,
        log_file=str(log_file) if log_file else None,
        nice=ints.get("nice", DEFAULT_NICE),
    )
