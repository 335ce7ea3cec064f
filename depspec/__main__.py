"""
Executable module for depspec.

Running:
    python -m depspec

is equivalent to:
    depspec
"""

from __future__ import annotations

import sys


def _print_startup_error(exc: ImportError) -> None:
    """Report a CLI import failure on stderr."""
    sys.stderr.write("depspec CLI could not be started.\n")
    sys.stderr.write(f"Python version : {sys.version}\n")
    try:
        from depspec.__version__ import __version__

        sys.stderr.write(f"depspec version: {__version__}\n")
    except ImportError:
        sys.stderr.write("depspec version: <unknown>\n")
    sys.stderr.write(f"ImportError: {exc}\n")


def main() -> int:
    """Main entrypoint when executing ``python -m depspec``.

    Returns:
        Exit code returned by the CLI, or 1 if it cannot be imported.
    """
    try:
        # Import lazily so click and rich are only loaded for CLI use
        from depspec.cli import main as cli_main
    except ImportError as exc:
        _print_startup_error(exc)
        return 1

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
