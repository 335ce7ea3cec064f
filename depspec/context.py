"""
Shared context object for depspec CLI commands.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from depspec.config import DepSpecConfig


class DepSpecContext:
    """Per-invocation state shared by the CLI group and its commands.

    Attributes:
        config_path: Path to the configuration file, if one was used.
        config: The loaded configuration (defaults if none was found).
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG).
        color: Whether colored terminal output is enabled.
    """

    __slots__ = ("config_path", "config", "verbose", "color")

    def __init__(self) -> None:
        self.config_path: Optional[Path] = None
        self.config: DepSpecConfig = DepSpecConfig()
        self.verbose: int = 0
        self.color: bool = True

    def configured_path(self, path: str) -> Path:
        """Resolve a path from the config file against that file's directory."""
        candidate = Path(path)
        if candidate.is_absolute() or self.config.source_path is None:
            return candidate
        return self.config.source_path.parent / candidate


#: Click decorator for injecting :class:`DepSpecContext` into commands.
pass_context = click.make_pass_decorator(DepSpecContext, ensure=True)
