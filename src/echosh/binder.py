# echosh: Console Echo Shell for Teaching-OS User Space
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Console binding for echosh.

Responsibilities:
- Open the console device read-write
- Create the device node once when it is missing, then retry the open
- Point the stdin/stdout/stderr role slots at the opened console
- Close the opening descriptor when it is not one of those slots

Important boundary:
- This module never touches ``os`` directly; all descriptor work goes
  through the injected ConsoleSystem.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .config import ROLE_NAMES, ROLE_SLOTS
from .interfaces import ConfigModel, ConsoleSystem


class ConsoleUnavailable(Exception):
    """The console device could not be opened, even after creating it."""

    def __init__(self, path: str, cause: OSError | None = None) -> None:
        self.path = path
        self.cause = cause
        reason = (cause.strerror or str(cause)) if cause is not None else ""
        msg = f"console device unavailable: {path}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


@dataclass
class BindResult:
    """What bind_console did to the descriptor table."""

    fd: int
    created_node: bool = False
    rebound: list[int] = field(default_factory=list)
    closed_original: bool = False


def _open_console(
    system: ConsoleSystem, config: ConfigModel
) -> tuple[int, bool]:
    """Open the console, creating the node and retrying once on failure.

    Returns:
        (fd, created_node)

    Raises:
        ConsoleUnavailable: if the retried open fails too
    """
    path = config.console_path
    try:
        return (system.open_rdwr(path), False)
    except OSError:
        pass

    major, minor = config.device_numbers
    created = False
    try:
        system.make_char_device(path, major, minor, config.node_mode)
        created = True
    except OSError:
        # Another process may have created it; the retry decides.
        created = False

    try:
        return (system.open_rdwr(path), created)
    except OSError as e:
        raise ConsoleUnavailable(path, e) from e


def bind_roles(system: ConsoleSystem, fd: int) -> list[int]:
    """Ensure every role slot references the same open file as fd.

    A slot that already references it is left alone; a closed slot or a
    slot bound elsewhere is re-pointed with duplicate_to().

    Returns:
        The slots that were (re)bound, in role order.
    """
    target = system.identity(fd)
    rebound: list[int] = []
    for slot in ROLE_SLOTS:
        if slot == fd:
            continue
        if target is not None and system.identity(slot) == target:
            continue
        system.duplicate_to(fd, slot)
        rebound.append(slot)
    return rebound


def bind_console(system: ConsoleSystem, config: ConfigModel) -> BindResult:
    """Bind stdin, stdout and stderr to the console device.

    Raises:
        ConsoleUnavailable: the device could not be opened
    """
    fd, created = _open_console(system, config)
    result = BindResult(fd=fd, created_node=created)
    result.rebound = bind_roles(system, fd)

    if fd not in ROLE_SLOTS:
        system.close(fd)
        result.closed_original = True

    return result


def describe_binding(result: BindResult) -> str:
    """One-line summary of a BindResult, e.g. for crash logs."""
    roles = ",".join(ROLE_NAMES[s] for s in result.rebound) or "none"
    parts = [f"fd={result.fd}", f"rebound={roles}"]
    if result.created_node:
        parts.append("created_node")
    if result.closed_original:
        parts.append("closed_original")
    return " ".join(parts)
