# echosh: Console Echo Shell for Teaching-OS User Space
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""Allow ``python -m echosh``."""

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
