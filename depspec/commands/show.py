"""Show command implementation for depspec.

Reads every requirement, constraint and override source given on the
command line (plus those from the configuration file), merges them, and
prints the result.

Typical usage::

    # Requirements of a project, with its "dev" extra
    $ depspec show -r pyproject.toml --extra dev

    # A literal requirement plus a requirements file, pinned by constraints
    $ depspec show flask -r requirements.txt -c constraints.txt

    # Machine-readable output
    $ depspec show -r requirements.txt --format json
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List, Tuple

import click

from depspec.context import DepSpecContext, pass_context
from depspec.core import RequirementsSpecification
from depspec.exceptions import DepSpecError
from depspec.commands.common import (
    extras_specification,
    file_sources,
    requirement_option,
    requirement_sources,
)
from depspec.utils import (
    get_logger,
    print_error,
    print_json,
    print_table,
    print_warning,
)

logger = get_logger("commands.show")


@click.command()
@click.argument("packages", nargs=-1)
@requirement_option
@click.option(
    "--constraint",
    "-c",
    "constraint_files",
    multiple=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Constrain versions using a file; everything it yields is a constraint.",
)
@click.option(
    "--override",
    "-o",
    "override_files",
    multiple=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Override versions using a file; everything it yields is an override.",
)
@click.option(
    "--extra",
    "extras",
    multiple=True,
    help="Include an optional-dependency group from pyproject.toml (repeatable).",
)
@click.option(
    "--all-extras",
    is_flag=True,
    help="Include every optional-dependency group from pyproject.toml.",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@pass_context
def show(
    ctx: DepSpecContext,
    packages: Tuple[str, ...],
    requirement_files: Tuple[Path, ...],
    constraint_files: Tuple[Path, ...],
    override_files: Tuple[Path, ...],
    extras: Tuple[str, ...],
    all_extras: bool,
    format: str,
) -> None:
    """Merge requirement sources and show the resulting specification.

    PACKAGES are literal requirements such as ``flask>=2``. Files passed
    with ``-r`` are read as a project manifest when named
    ``pyproject.toml`` and as requirements files otherwise.

    Exits 0 on success and 1 if any source cannot be read.
    """
    sources = requirement_sources(packages, requirement_files)

    try:
        spec = RequirementsSpecification.from_sources(
            sources,
            file_sources(ctx, constraint_files, ctx.config.constraints),
            file_sources(ctx, override_files, ctx.config.overrides),
            extras_specification(ctx, extras, all_extras),
        )
    except DepSpecError as exc:
        print_error(str(exc))
        logger.debug("Failed to read sources", exc_info=True)
        sys.exit(1)

    if format.lower() == "json":
        print_json(spec.to_dict())
        return

    _display_table(spec)


def _display_table(spec: RequirementsSpecification) -> None:
    rows = _table_rows(spec)
    if not rows:
        print_warning("No requirements found")
        return

    extras = ", ".join(sorted(spec.extras)) or "none"
    print_table(
        rows,
        headers=["Type", "Requirement"],
        title=f"Project: {spec.project or '-'}",
        caption=f"Extras: {extras}",
    )


def _table_rows(spec: RequirementsSpecification) -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    for kind, requirements in (
        ("requirement", spec.requirements),
        ("constraint", spec.constraints),
        ("override", spec.overrides),
    ):
        rows.extend({"Type": kind, "Requirement": str(r)} for r in requirements)
    return rows
