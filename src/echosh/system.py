# echosh: Console Echo Shell for Teaching-OS User Space
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
POSIX implementation of the ConsoleSystem protocol.

Thin wrapper over the ``os`` module: every call maps onto one system
call, so OSError propagates unchanged to the binder or the loop.
"""

from __future__ import annotations

import errno
import os
import stat


class PosixConsoleSystem:
    """os-module implementation of ConsoleSystem protocol."""

    def open_rdwr(self, path: str) -> int:
        return os.open(path, os.O_RDWR)

    def make_char_device(
        self, path: str, major: int, minor: int, mode: int = 0o600
    ) -> None:
        """Create a character special file.

        Args:
            path: where the node is created
            major: device class number
            minor: device instance number
            mode: permission bits (file type bits are added here)
        """
        os.mknod(
            path,
            mode=stat.S_IFCHR | (mode & 0o7777),
            device=os.makedev(major, minor),
        )

    def identity(self, fd: int) -> tuple[int, int] | None:
        try:
            st = os.fstat(fd)
        except OSError as e:
            if e.errno == errno.EBADF:
                return None
            raise
        return (st.st_dev, st.st_ino)

    def duplicate_to(self, fd: int, slot: int) -> None:
        os.dup2(fd, slot)

    def close(self, fd: int) -> None:
        os.close(fd)

    def read(self, fd: int, count: int) -> bytes:
        return os.read(fd, count)

    def write(self, fd: int, data: bytes) -> int:
        return os.write(fd, data)
