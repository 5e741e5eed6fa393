from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Dict

CONFIG_PATH_ENV = "AGENT_BRIDGE_CONFIG"
DEFAULT_CONFIG_PATH = Path("config.toml")


def config_path() -> Path:
    """Return the config file location: ``$AGENT_BRIDGE_CONFIG`` or ./config.toml."""
    override = os.getenv(CONFIG_PATH_ENV)
    return Path(override) if override else DEFAULT_CONFIG_PATH


def load_raw_config(path: str | Path | None = None) -> Dict[str, Any]:
    """
    Parse the bridge's TOML config.

    A missing file yields ``{}`` and every setting falls back to its
    environment variable.
    """
    target = Path(path) if path is not None else config_path()
    if not target.is_file():
        return {}

    with target.open("rb") as handle:
        return tomllib.load(handle)


def section(config: dict | None, name: str) -> Dict[str, Any]:
    """Return the ``[bridge.<name>]`` table of a raw config, or ``{}``."""
    return (config or {}).get("bridge", {}).get(name, {})


__all__ = ["load_raw_config", "config_path", "section", "CONFIG_PATH_ENV", "DEFAULT_CONFIG_PATH"]
