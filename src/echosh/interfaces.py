# echosh: Console Echo Shell for Teaching-OS User Space
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Protocol definitions for dependency injection.

These interfaces separate the binder and the echo loop from the
operating system facilities they consume (descriptor table, device
nodes, blocking reads) and from configuration loading.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any, Protocol


class ConsoleSystem(Protocol):
    """Protocol for the descriptor-table and device-node operations."""

    def open_rdwr(self, path: str) -> int:
        """Open path read-write and return the new descriptor.

        Raises OSError when the path cannot be opened.
        """
        ...

    def make_char_device(
        self, path: str, major: int, minor: int, mode: int = 0o600
    ) -> None:
        """Create a character special file at path.

        Raises OSError when the node cannot be created.
        """
        ...

    def identity(self, fd: int) -> Hashable | None:
        """Return a value identifying the open file behind fd.

        Two descriptors referencing the same open device compare equal.
        Returns None when fd is not open.
        """
        ...

    def duplicate_to(self, fd: int, slot: int) -> None:
        """Make slot reference the same open file as fd."""
        ...

    def close(self, fd: int) -> None:
        """Close a descriptor."""
        ...

    def read(self, fd: int, count: int) -> bytes:
        """Blocking read of up to count bytes; b"" at end-of-input."""
        ...

    def write(self, fd: int, data: bytes) -> int:
        """Write data and return the number of bytes accepted."""
        ...


class ConfigModel(Protocol):
    """Protocol for configuration access."""

    @property
    def console(self) -> dict[str, Any]:
        """Console device configuration."""
        ...

    @property
    def loop(self) -> dict[str, Any]:
        """Echo loop configuration."""
        ...

    @property
    def console_path(self) -> str:
        """Path of the console device node."""
        ...

    @property
    def device_numbers(self) -> tuple[int, int]:
        """(major, minor) used when creating the node."""
        ...

    @property
    def node_mode(self) -> int:
        """Permission bits used when creating the node."""
        ...

    @property
    def prompt(self) -> str:
        """Prompt written before every read."""
        ...

    @property
    def line_capacity(self) -> int:
        """Capacity of the line buffer in bytes."""
        ...
