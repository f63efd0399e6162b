# echosh: Console Echo Shell for Teaching-OS User Space
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
echosh core package.

Binds stdin/stdout/stderr to a console device, then echoes lines back
until an empty line or end-of-input.
"""
from .binder import ConsoleUnavailable as ConsoleUnavailable  # noqa: F401 (re-export)
from .binder import bind_console as bind_console  # noqa: F401 (re-export)
from .loop import EchoLoop as EchoLoop  # noqa: F401 (re-export)
from .loop import Termination as Termination  # noqa: F401 (re-export)
