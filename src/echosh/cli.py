# echosh: Console Echo Shell for Teaching-OS User Space
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
echosh CLI entry point.

Design:
- CLI owns process startup: config loading and OS wiring.
- Binder runs once, then the echo loop runs until termination.
- The exit status is the only thing reported past the process boundary.
"""

from __future__ import annotations

import sys
import traceback
from collections.abc import Callable
from datetime import datetime

from . import config
from .binder import (
    BindResult,
    ConsoleUnavailable,
    bind_console,
    describe_binding,
)
from .interfaces import ConfigModel, ConsoleSystem
from .loop import EchoLoop
from .system import PosixConsoleSystem


def write_crash_log(
    error: Exception,
    stage: str = "",
    device_path: str = "",
    binding: BindResult | None = None,
) -> None:
    """Write an entry to the crash log.

    Logs unhandled exceptions only.
    Only creates the log directory when actually needed.
    Appends to crash.log (never overwrites).
    """
    try:
        crash_log = config.crash_log_path(config.get_data_root())

        # Create logs directory only when we need to write
        crash_log.parent.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().isoformat()
        lines = [
            f"{timestamp}",
            f"stage={stage}",
        ]

        if device_path:
            lines.append(f"device={device_path}")
        if binding is not None:
            lines.append(f"binding={describe_binding(binding)}")

        lines.append(f"error={type(error).__name__}: {error}")
        lines.append("traceback:")
        lines.append(
            "".join(
                traceback.format_exception(
                    type(error), error, error.__traceback__
                )
            ).rstrip("\n")
        )
        lines.append("----")

        with crash_log.open("a", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")

    except Exception:
        # If we can't write the crash log, fail silently
        # (we're already in an error state)
        pass


def _write_stderr(text: str) -> None:
    stream = sys.stderr
    # None when the process started with descriptor 2 closed
    if stream is None:
        return
    stream.write(text)
    stream.flush()


def _report(error_fn: Callable[[str], None], text: str) -> None:
    """Best-effort error report; the error stream may be the failed console."""
    try:
        error_fn(text)
    except Exception:
        pass


def _crash(
    error: Exception,
    error_fn: Callable[[str], None],
    stage: str,
    device_path: str = "",
    binding: BindResult | None = None,
) -> int:
    write_crash_log(
        error, stage=stage, device_path=device_path, binding=binding
    )
    _report(
        error_fn,
        f"[ERROR] Unhandled exception: {type(error).__name__}: {error}\n",
    )
    return config.EXIT_CRASH


def run_session(
    system: ConsoleSystem,
    cfg: ConfigModel,
    error_fn: Callable[[str], None] = _write_stderr,
) -> int:
    """Bind the console, run the echo loop, and return the exit status."""
    stage = "bind"
    binding: BindResult | None = None
    try:
        binding = bind_console(system, cfg)

        stage = "loop"
        EchoLoop(system, cfg).run()
        return config.EXIT_OK

    except ConsoleUnavailable as e:
        _report(error_fn, f"[ERROR] {e}\n")
        return config.EXIT_CONSOLE_UNAVAILABLE

    except Exception as e:
        return _crash(
            e, error_fn, stage, device_path=cfg.console_path, binding=binding
        )


def main() -> int:
    """Main entry point for echosh. Command-line arguments are ignored."""
    try:
        cfg = config.load_system_config()
    except Exception as e:
        return _crash(e, _write_stderr, "config")
    return run_session(PosixConsoleSystem(), cfg)
