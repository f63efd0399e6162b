from __future__ import annotations

import os
from pathlib import Path

import pytest

from echosh import config


@pytest.fixture
def tmp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    home.mkdir(parents=True, exist_ok=True)
    monkeypatch.setenv("HOME", str(home))
    return home


# ----------------------------------------------------------------
# Packaged defaults
# ----------------------------------------------------------------


def test_load_system_config_reads_packaged_defaults() -> None:
    """
    system.yaml ships the console node name, device numbers, prompt
    and line capacity.
    """
    cfg = config.load_system_config()

    assert cfg.console_path == "console"
    assert cfg.device_numbers == (1, 1)
    assert cfg.node_mode == 0o600
    assert cfg.prompt == "$ "
    assert cfg.line_capacity == 100


def test_load_defaults_yaml_missing_file_raises() -> None:
    with pytest.raises(FileNotFoundError, match="Missing defaults YAML"):
        config.load_defaults_yaml("does-not-exist.yaml")


def test_load_defaults_yaml_rejects_non_mapping(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / "list.yaml").write_text("- a\n- b\n", encoding="utf-8")
    monkeypatch.setattr(config, "_defaults_dir", lambda: tmp_path)

    with pytest.raises(ValueError, match="mapping"):
        config.load_defaults_yaml("list.yaml")


def test_load_defaults_yaml_empty_file_is_empty_mapping(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / "empty.yaml").write_text("", encoding="utf-8")
    monkeypatch.setattr(config, "_defaults_dir", lambda: tmp_path)

    assert config.load_defaults_yaml("empty.yaml") == {}


def test_load_system_config_validates(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / "system.yaml").write_text(
        "loop:\n  line_capacity: 0\n", encoding="utf-8"
    )
    monkeypatch.setattr(config, "_defaults_dir", lambda: tmp_path)

    with pytest.raises(ValueError, match="line_capacity"):
        config.load_system_config()


# ----------------------------------------------------------------
# YAMLConfig
# ----------------------------------------------------------------


def test_yaml_config_defaults_for_missing_sections() -> None:
    cfg = config.YAMLConfig({})

    assert cfg.console == {}
    assert cfg.loop == {}
    assert cfg.console_path == "console"
    assert cfg.device_numbers == (1, 1)
    assert cfg.prompt == "$ "
    assert cfg.line_capacity == 100


def test_yaml_config_ignores_non_mapping_sections() -> None:
    cfg = config.YAMLConfig({"console": "nope", "loop": [1, 2]})

    assert cfg.console == {}
    assert cfg.loop == {}


def test_get_path_walks_nested_keys() -> None:
    cfg = config.YAMLConfig({"loop": {"prompt": "> "}})

    assert cfg.get_path("loop.prompt") == "> "
    assert cfg.get_path("loop.missing", "dflt") == "dflt"
    assert cfg.get_path("loop.prompt.deeper", "dflt") == "dflt"
    assert cfg.get_path("", "dflt") == "dflt"
    assert cfg.get("loop") == {"prompt": "> "}


# ----------------------------------------------------------------
# Validation
# ----------------------------------------------------------------


@pytest.mark.parametrize(
    "raw, match",
    [
        ({"loop": {"line_capacity": -1}}, "line_capacity"),
        ({"loop": {"line_capacity": "100"}}, "line_capacity"),
        ({"loop": {"line_capacity": True}}, "line_capacity"),
        ({"loop": {"prompt": 5}}, "prompt"),
        ({"console": {"path": ""}}, "console.path"),
        ({"console": {"major": -1}}, "console.major"),
        ({"console": {"minor": "1"}}, "console.minor"),
    ],
)
def test_validate_config_rejects_bad_values(raw: dict, match: str) -> None:
    with pytest.raises(ValueError, match=match):
        config.validate_config(config.YAMLConfig(raw))


def test_validate_config_returns_config() -> None:
    cfg = config.YAMLConfig({"loop": {"line_capacity": 1, "prompt": ""}})

    assert config.validate_config(cfg) is cfg


# ----------------------------------------------------------------
# Data root
# ----------------------------------------------------------------


def test_get_data_root_prefers_echosh_data_home(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("ECHOSH_DATA_HOME", str(tmp_path / "data"))

    assert config.get_data_root() == tmp_path / "data"
    # not created until something is written
    assert not (tmp_path / "data").exists()


def test_get_data_root_defaults_to_local_share_and_ignores_xdg(
    tmp_home: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("ECHOSH_DATA_HOME", raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_home / "xdg_should_be_ignored"))

    expected = Path(os.path.expanduser("~")) / ".local" / "share"
    assert config.get_data_root() == expected


def test_crash_log_path_is_under_data_root(tmp_path: Path) -> None:
    assert config.crash_log_path(tmp_path) == (
        tmp_path / "echosh" / "logs" / "crash.log"
    )


def test_role_slots_are_stdin_stdout_stderr() -> None:
    assert config.ROLE_SLOTS == (0, 1, 2)
    assert [config.ROLE_NAMES[s] for s in config.ROLE_SLOTS] == [
        "stdin", "stdout", "stderr"
    ]
