"""
Command-line interface for depspec.

The ``cli`` group sets up logging and color, loads the configuration file
and hands a :class:`DepSpecContext` to the ``show`` and ``list`` commands.
"""

from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click

from depspec.config import load_config
from depspec.__version__ import __version__
from depspec.context import DepSpecContext
from depspec.constants import CONFIG_ENV_VAR
from depspec.exceptions import ConfigError, DepSpecError
from depspec.utils.logger import get_logger, level_for_verbosity, setup_logging
from depspec.utils.console import print_error, print_warning, reconfigure_console
from depspec.commands.list import list_command
from depspec.commands.show import show

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read settings from this depspec.toml or pyproject.toml.",
    envvar=CONFIG_ENV_VAR,
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Log more detail: -v for progress, -vv for debugging.",
)
@click.option(
    "--color/--no-color",
    default=True,
    help="Colorize terminal output.",
    envvar="DEPSPEC_COLOR",
)
@click.version_option(
    version=__version__,
    prog_name="depspec",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """depspec: merge requirement strings, requirements files and pyproject.toml.

    \b
    Available commands:
      depspec show                 Show merged requirements, constraints, overrides
      depspec list                 List merged requirements, one per line

    \b
    Examples:
      depspec show -r pyproject.toml --extra dev
      depspec show flask -r requirements.txt -c constraints.txt
      depspec list -r requirements.txt
    """
    level = level_for_verbosity(verbose)
    setup_logging(level=level, verbose=verbose >= 2)
    logger.debug("Logging initialized at %s level", logging.getLevelName(level))

    # Rich and the log formatter both read NO_COLOR
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()

    try:
        loaded_config = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    depspec_ctx = DepSpecContext()
    depspec_ctx.config_path = loaded_config.source_path
    depspec_ctx.config = loaded_config
    depspec_ctx.color = color
    depspec_ctx.verbose = verbose
    ctx.obj = depspec_ctx

    logger.debug("depspec v%s", __version__)
    logger.debug("Config path: %s", depspec_ctx.config_path)
    logger.debug("Verbosity: %s | Color: %s", verbose, color)


cli.add_command(show)
cli.add_command(list_command)


def main() -> int:
    """Main entry point for the depspec CLI.

    Returns:
        Exit code:
            0   Success
            1   Unhandled or application error
            2   Usage error (Click)
            130 Interrupted by user (Ctrl+C)
    """
    try:
        result = cli(standalone_mode=False)
        # --help and --version come back as an exit code
        return result if isinstance(result, int) else 0

    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    except click.exceptions.Abort:
        print_warning("Aborted")
        return 1

    except DepSpecError as exc:
        print_error(str(exc))
        logger.debug("DepSpecError details: %s", exc.details or "<none>", exc_info=True)
        return 1

    except KeyboardInterrupt:
        print_warning("\nOperation cancelled by user")
        return 130

    except SystemExit as exc:
        if exc.code is None:
            return 0
        return exc.code if isinstance(exc.code, int) else 1

    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return 1


if __name__ == "__main__":
    sys.exit(main())
