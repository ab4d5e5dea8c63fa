"""Loading and saving the connection settings."""

from __future__ import annotations

import tomllib
from dataclasses import asdict, dataclass, fields
from pathlib import Path

import platformdirs
import tomli_w

APP_NAME = "qbtui"
CONFIG_FILE_NAME = "default-config.toml"


@dataclass
class AppConfig:
    """Where the qBittorrent Web API lives and how to log in to it."""

    api_url: str = "http://localhost:8080"
    username: str = "admin"
    password: str = ""


def default_config_path() -> Path:
    """Return the per-user location of the configuration file."""
    return platformdirs.user_config_path(APP_NAME) / CONFIG_FILE_NAME


def _resolve(path: str | Path | None) -> Path:
    return default_config_path() if path is None else Path(path)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Read the configuration, writing the defaults first if the file is missing.

    Raises ValueError if the file is not valid TOML or lacks a setting.
    """
    target = _resolve(path)
    if not target.exists():
        config = AppConfig()
        save_config(config, target)
        return config
    with target.open("rb") as handle:
        data = tomllib.load(handle)
    values = {}
    for field in fields(AppConfig):
        if field.name not in data:
            raise ValueError(f"missing setting {field.name!r} in {target}")
        value = data[field.name]
        if not isinstance(value, str):
            raise ValueError(f"setting {field.name!r} in {target} must be a string")
        values[field.name] = value
    return AppConfig(**values)


def save_config(config: AppConfig, path: str | Path | None = None) -> Path:
    """Write the configuration as TOML and return the path written."""
    target = _resolve(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(tomli_w.dumps(asdict(config)), encoding="utf-8")
    return target