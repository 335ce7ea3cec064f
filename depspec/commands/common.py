"""
Option handling shared by the depspec commands.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Sequence

import click

from depspec.context import DepSpecContext
from depspec.models import ExtrasSpecification, RequirementsSource

#: ``-r`` option shared by every command that reads requirement sources.
requirement_option = click.option(
    "--requirement",
    "-r",
    "requirement_files",
    multiple=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Read requirements from a requirements file or pyproject.toml (repeatable).",
)


def requirement_sources(
    packages: Iterable[str],
    requirement_files: Iterable[Path],
) -> List[RequirementsSource]:
    """Literal packages first, then files, each in command-line order."""
    sources = [RequirementsSource.from_literal(name) for name in packages]
    sources.extend(RequirementsSource.from_path(path) for path in requirement_files)
    if not sources:
        raise click.UsageError(
            "No requirement sources given: pass a PACKAGE or -r FILE."
        )
    return sources


def file_sources(
    ctx: DepSpecContext,
    cli_files: Sequence[Path],
    configured: Sequence[str],
) -> List[RequirementsSource]:
    """Sources for the given files, followed by the configured ones."""
    paths = list(cli_files)
    paths.extend(ctx.configured_path(path) for path in configured)
    return [RequirementsSource.from_path(path) for path in paths]


def extras_specification(
    ctx: DepSpecContext,
    extras: Sequence[str],
    all_extras: bool,
) -> ExtrasSpecification:
    """Resolve ``--extra`` / ``--all-extras``, falling back to the config.

    Raises:
        click.UsageError: Both options were given.
        InvalidNameError: An ``--extra`` value is not a valid extra name.
    """
    if extras and all_extras:
        raise click.UsageError("--extra and --all-extras are mutually exclusive.")
    if all_extras:
        return ExtrasSpecification.all()
    if extras:
        return ExtrasSpecification.some(extras)
    return ctx.config.extras_specification()
