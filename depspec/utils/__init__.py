"""
Utility helpers for depspec.

- Console output helpers (Rich-based)
- Logging configuration and retrieval
- Filesystem read helpers

Only symbols listed in ``__all__`` are considered part of the public API.
"""

from __future__ import annotations

from depspec.utils.filesystem import resolve_path, safe_read_file
from depspec.utils.logger import (
    get_logger,
    level_for_verbosity,
    setup_logging,
)
from depspec.utils.console import (
    get_raw_console,
    print_error,
    print_json,
    print_table,
    print_warning,
    reconfigure_console,
)

__all__ = [
    # Console
    "print_error",
    "print_json",
    "print_table",
    "print_warning",
    "get_raw_console",
    "reconfigure_console",
    # Logging
    "get_logger",
    "setup_logging",
    "level_for_verbosity",
    # Filesystem
    "resolve_path",
    "safe_read_file",
]
