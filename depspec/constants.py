"""
Centralized constants for depspec.

This module defines immutable values used across depspec, including
manifest and configuration file names, requirements-file directives, and
logging formats. All values are intended to be treated as read-only.
"""

from typing import Final, FrozenSet

# ---------------------------------------------------------------------------
# Manifest and configuration files
# ---------------------------------------------------------------------------

#: Exact file name that marks a source as a project manifest.
PYPROJECT_FILE_NAME: Final[str] = "pyproject.toml"

#: Dedicated configuration file name, settings under ``[depspec]``.
CONFIG_FILE_NAME: Final[str] = "depspec.toml"

#: Environment variable holding an explicit configuration path.
CONFIG_ENV_VAR: Final[str] = "DEPSPEC_CONFIG"

# ---------------------------------------------------------------------------
# Requirement file directives
# ---------------------------------------------------------------------------

#: Short include directive for requirement files.
INCLUDE_DIRECTIVE: Final[str] = "-r"

#: Long include directive for requirement files.
INCLUDE_DIRECTIVE_LONG: Final[str] = "--requirement"

#: Short constraint directive.
CONSTRAINT_DIRECTIVE: Final[str] = "-c"

#: Long constraint directive.
CONSTRAINT_DIRECTIVE_LONG: Final[str] = "--constraint"

#: Short editable-install directive.
EDITABLE_DIRECTIVE: Final[str] = "-e"

#: Long editable-install directive.
EDITABLE_DIRECTIVE_LONG: Final[str] = "--editable"

#: Hash-checking directive.
HASH_DIRECTIVE: Final[str] = "--hash"

#: pip global options that carry no requirement and are skipped.
IGNORED_OPTIONS: Final[FrozenSet[str]] = frozenset(
    {
        "-i",
        "--index-url",
        "--extra-index-url",
        "-f",
        "--find-links",
        "--no-index",
        "--pre",
        "--prefer-binary",
        "--only-binary",
        "--no-binary",
        "--trusted-host",
    }
)

# ---------------------------------------------------------------------------
# Security constraints
# ---------------------------------------------------------------------------

#: Maximum allowed file size (in bytes) when reading requirement sources.
MAX_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10 MB

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Root logger namespace.
LOGGER_NAMESPACE: Final[str] = "depspec"

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
