"""
Tests that verify Protocol definitions are valid and implementations comply.
These tests don't test behavior - just that contracts exist.
"""

from __future__ import annotations

from fakes import FakeConfig, FakeConsoleSystem

from echosh import interfaces

CONSOLE_SYSTEM_METHODS = [
    "open_rdwr",
    "make_char_device",
    "identity",
    "duplicate_to",
    "close",
    "read",
    "write",
]

CONFIG_MODEL_ATTRS = [
    "console",
    "loop",
    "console_path",
    "device_numbers",
    "node_mode",
    "prompt",
    "line_capacity",
]


def test_console_system_protocol_exists():
    """ConsoleSystem Protocol must define every descriptor operation."""
    assert hasattr(interfaces, "ConsoleSystem")

    protocol = interfaces.ConsoleSystem

    for method in CONSOLE_SYSTEM_METHODS:
        assert hasattr(protocol, method), f"ConsoleSystem missing {method}"


def test_config_model_protocol_exists():
    """ConfigModel Protocol must define required attributes."""
    assert hasattr(interfaces, "ConfigModel")

    protocol = interfaces.ConfigModel

    for attr in CONFIG_MODEL_ATTRS:
        assert hasattr(protocol, attr), f"ConfigModel missing {attr}"


def test_posix_console_system_conforms_to_protocol():
    from echosh.system import PosixConsoleSystem

    system = PosixConsoleSystem()

    for method in CONSOLE_SYSTEM_METHODS:
        assert callable(getattr(system, method)), f"missing {method}"


def test_yaml_config_conforms_to_config_model_protocol():
    from echosh.config import YAMLConfig

    cfg = YAMLConfig({})

    for attr in CONFIG_MODEL_ATTRS:
        assert hasattr(cfg, attr), f"YAMLConfig missing {attr}"


def test_test_fakes_conform_to_protocols():
    system = FakeConsoleSystem()
    cfg = FakeConfig()

    for method in CONSOLE_SYSTEM_METHODS:
        assert callable(getattr(system, method))
    for attr in CONFIG_MODEL_ATTRS:
        assert hasattr(cfg, attr)
