# echosh: Console Echo Shell for Teaching-OS User Space
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Configuration and data root resolution for echosh.

Handles:
- Packaged YAML defaults loading (echosh/defaults/system.yaml)
- Validation of the console + loop sections
- Data root resolution for the crash log (ECHOSH_DATA_HOME, ~/.local/share)
- Role slot numbers and exit statuses
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

try:
    # Py3.9+
    from importlib import resources as importlib_resources
except Exception:  # pragma: no cover
    import importlib_resources  # type: ignore


# -----------------------
# Role slots + exit statuses
# -----------------------

STDIN = 0
STDOUT = 1
STDERR = 2

# Order matters: binding walks the roles input -> output -> error
ROLE_SLOTS: tuple[int, int, int] = (STDIN, STDOUT, STDERR)

ROLE_NAMES: dict[int, str] = {
    STDIN: "stdin",
    STDOUT: "stdout",
    STDERR: "stderr",
}

EXIT_OK = 0
EXIT_CONSOLE_UNAVAILABLE = 1
EXIT_CRASH = 2


# -----------------------
# Config model wrapper
# -----------------------


class YAMLConfig:
    """Simple config wrapper that implements ConfigModel protocol."""

    def __init__(self, config_dict: dict[str, Any]):
        self._config = config_dict

    @property
    def console(self) -> dict[str, Any]:
        console_cfg = self._config.get("console", {})
        return console_cfg if isinstance(console_cfg, dict) else {}

    @property
    def loop(self) -> dict[str, Any]:
        loop_cfg = self._config.get("loop", {})
        return loop_cfg if isinstance(loop_cfg, dict) else {}

    @property
    def console_path(self) -> str:
        return str(self.console.get("path", "console"))

    @property
    def device_numbers(self) -> tuple[int, int]:
        return (
            int(self.console.get("major", 1)),
            int(self.console.get("minor", 1)),
        )

    @property
    def node_mode(self) -> int:
        return int(self.console.get("mode", 0o600))

    @property
    def prompt(self) -> str:
        return str(self.loop.get("prompt", "$ "))

    @property
    def line_capacity(self) -> int:
        return int(self.loop.get("line_capacity", 100))

    def get(self, key: str, default: Any = None) -> Any:
        return self._config.get(key, default)

    def get_path(self, path: str, default: Any = None) -> Any:
        """
        Nested lookup using dot-separated path.
        Example: get_path("loop.line_capacity", 100) -> 100
        """
        if not path:
            return default

        cur: Any = self._config
        for part in path.split("."):
            if not isinstance(cur, dict):
                return default
            if part not in cur:
                return default
            cur = cur[part]
        return cur


def validate_config(cfg: YAMLConfig) -> YAMLConfig:
    """Reject values the binder or the loop cannot work with.

    Raises:
        ValueError: on a bad capacity, prompt, path or device number
    """
    capacity = cfg.get_path("loop.line_capacity", 100)
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise ValueError(
            f"loop.line_capacity must be an integer, got {capacity!r}"
        )
    if capacity <= 0:
        raise ValueError(
            f"loop.line_capacity must be positive, got {capacity}"
        )

    prompt = cfg.get_path("loop.prompt", "$ ")
    if not isinstance(prompt, str):
        raise ValueError(f"loop.prompt must be a string, got {prompt!r}")

    path = cfg.get_path("console.path", "console")
    if not isinstance(path, str) or not path:
        raise ValueError(
            f"console.path must be a non-empty string, got {path!r}"
        )

    for key in ("major", "minor"):
        val = cfg.get_path(f"console.{key}", 1)
        if isinstance(val, bool) or not isinstance(val, int) or val < 0:
            raise ValueError(
                f"console.{key} must be a non-negative integer, got {val!r}"
            )

    return cfg


# -----------------------
# Data root (crash log only)
# -----------------------


def get_data_root() -> Path:
    """Get the data root directory for echosh.

    Resolution order:
    1. ECHOSH_DATA_HOME environment variable (if set)
    2. ~/.local/share (default, XDG_DATA_HOME is ignored)

    Unlike RepOS-style roots this is not created here; the crash log
    creates its directory only when it actually writes.
    """
    data_home = os.getenv("ECHOSH_DATA_HOME")
    if data_home:
        return Path(data_home)
    return Path.home() / ".local" / "share"


def crash_log_path(data_root: Path) -> Path:
    """<data_root>/echosh/logs/crash.log"""
    return data_root / "echosh" / "logs" / "crash.log"


# -----------------------
# Packaged defaults loading
# -----------------------


def _defaults_dir() -> Path:
    """Return the installed path to packaged defaults directory."""
    return Path(
        importlib_resources.files("echosh.defaults")
    )  # type: ignore[arg-type]


def load_defaults_yaml(filename: str) -> dict[str, Any]:
    """
    Load a YAML file from echosh/defaults/.
    """
    defaults_dir = _defaults_dir()
    path = defaults_dir / filename
    if not path.exists():
        raise FileNotFoundError(
            f"Missing defaults YAML: {filename} "
            f"(looked in {defaults_dir})"
        )

    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(
            f"Defaults YAML {filename} must load to a mapping/dict."
        )
    return data


def load_system_config() -> YAMLConfig:
    """
    Load system.yaml from packaged defaults and return a validated
    YAMLConfig wrapper.
    """
    return validate_config(YAMLConfig(load_defaults_yaml("system.yaml")))
