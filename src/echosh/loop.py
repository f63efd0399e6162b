# echosh: Console Echo Shell for Teaching-OS User Space
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
echosh echo loop.

PROMPT -> READ -> (empty? TERMINATE) -> ECHO -> PROMPT

- The prompt is written once per cycle, right before the blocking read.
- Lines are read one byte at a time into a fixed-capacity buffer, so
  nothing past the current line is consumed from the console.
- A bare newline and end-of-input both leave the buffer empty and stop
  the loop; run() reports which one it was.
"""

from __future__ import annotations

import errno
from enum import Enum, auto

from .config import STDIN, STDOUT
from .interfaces import ConfigModel, ConsoleSystem

NEWLINE = 0x0A
CARRIAGE_RETURN = 0x0D


class Termination(Enum):
    """Why the echo loop stopped. Both reasons exit with success."""

    EMPTY_LINE = auto()
    END_OF_INPUT = auto()


class LineBuffer:
    """Fixed-capacity byte buffer holding the most recent line."""

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._data = bytearray(capacity)
        self._length = 0

    def __len__(self) -> int:
        return self._length

    @property
    def full(self) -> bool:
        return self._length >= self.capacity

    def clear(self) -> None:
        self._length = 0

    def append(self, byte: int) -> bool:
        """Store one byte; returns False (and stores nothing) when full."""
        if self.full:
            return False
        self._data[self._length] = byte
        self._length += 1
        return True

    def drop_last(self) -> None:
        if self._length:
            self._length -= 1

    def last(self) -> int | None:
        if not self._length:
            return None
        return self._data[self._length - 1]

    def content(self) -> bytes:
        return bytes(self._data[: self._length])


def read_line(system: ConsoleSystem, fd: int, buffer: LineBuffer) -> bool:
    """Read one line from fd into buffer (newline not stored).

    Bytes past the buffer capacity are read and discarded up to the end
    of the physical line. A carriage return right before the newline is
    dropped.

    Returns:
        True if end-of-input was reached while reading this line.
    """
    buffer.clear()
    truncated = False
    while True:
        chunk = system.read(fd, 1)
        if not chunk:
            return True

        byte = chunk[0]
        if byte == NEWLINE:
            if not truncated and buffer.last() == CARRIAGE_RETURN:
                buffer.drop_last()
            return False

        if not buffer.append(byte):
            # full: keep draining the rest of the line
            truncated = True


class EchoLoop:
    """Prompt, read a line, echo it back; stop on an empty line or EOF."""

    def __init__(
        self,
        system: ConsoleSystem,
        config: ConfigModel,
        input_fd: int = STDIN,
        output_fd: int = STDOUT,
    ) -> None:
        self.system = system
        self.input_fd = input_fd
        self.output_fd = output_fd
        self.prompt = config.prompt.encode("utf-8")
        self.buffer = LineBuffer(config.line_capacity)

    def _write_all(self, data: bytes) -> None:
        view = memoryview(data)
        while view:
            written = self.system.write(self.output_fd, view.tobytes())
            if written <= 0:
                raise OSError(errno.EIO, "console write made no progress")
            view = view[written:]

    def run(self) -> Termination:
        """Run until an empty line or end-of-input."""
        while True:
            self._write_all(self.prompt)
            at_eof = read_line(self.system, self.input_fd, self.buffer)

            if not len(self.buffer):
                if at_eof:
                    return Termination.END_OF_INPUT
                return Termination.EMPTY_LINE

            self._write_all(self.buffer.content() + b"\n")
