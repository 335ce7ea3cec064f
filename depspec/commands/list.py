"""List command implementation for depspec.

Prints the merged requirements of the given sources, one per line, in a
form that can be fed back to ``pip install -r``. Constraints, overrides
and extras are not considered.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Tuple

import click

from depspec.core import read_requirements
from depspec.exceptions import DepSpecError
from depspec.commands.common import requirement_option, requirement_sources
from depspec.utils import get_logger, get_raw_console, print_error

logger = get_logger("commands.list")


@click.command(name="list")
@click.argument("packages", nargs=-1)
@requirement_option
def list_command(
    packages: Tuple[str, ...],
    requirement_files: Tuple[Path, ...],
) -> None:
    """List the requirements of PACKAGES and -r files, one per line."""
    sources = requirement_sources(packages, requirement_files)

    try:
        requirements = read_requirements(sources)
    except DepSpecError as exc:
        print_error(str(exc))
        logger.debug("Failed to read sources", exc_info=True)
        sys.exit(1)

    console = get_raw_console()
    for requirement in requirements:
        console.print(str(requirement), markup=False, highlight=False, soft_wrap=True)
