"""Configuration file loader for depspec.

Supports two formats:

- ``depspec.toml``: settings under a ``[depspec]`` table
- ``pyproject.toml``: settings under a ``[tool.depspec]`` table

Discovery order:

1. Explicit path from ``--config`` or ``DEPSPEC_CONFIG``
2. ``depspec.toml`` in the current directory
3. ``pyproject.toml`` with a ``[tool.depspec]`` table in the current directory

Configured values are defaults for the CLI; command-line flags extend them.

Example (``depspec.toml``)::

    [depspec]
    constraints = ["constraints.txt"]
    overrides = ["overrides.txt"]
    extras = ["dev", "docs"]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import tomli as tomllib

from depspec.constants import CONFIG_FILE_NAME, PYPROJECT_FILE_NAME
from depspec.exceptions import ConfigError
from depspec.models import ExtrasSpecification
from depspec.utils.logger import get_logger

logger = get_logger("config")

_KNOWN_KEYS = frozenset({"constraints", "overrides", "extras", "all-extras"})


@dataclass
class DepSpecConfig:
    """Parsed and validated depspec configuration.

    All fields have defaults, so an empty configuration is valid.

    Attributes:
        constraints: Constraint files always applied.
        overrides: Override files always applied.
        extras: Extras selected by default.
        all_extras: Select every extra by default.
        source_path: Path to the loaded file, or ``None`` for defaults.
    """

    constraints: List[str] = field(default_factory=list)
    overrides: List[str] = field(default_factory=list)
    extras: List[str] = field(default_factory=list)
    all_extras: bool = False

    source_path: Optional[Path] = field(default=None, repr=False)

    def extras_specification(self) -> ExtrasSpecification:
        """The configured extras as an :class:`ExtrasSpecification`."""
        if self.all_extras:
            return ExtrasSpecification.all()
        if self.extras:
            return ExtrasSpecification.some(self.extras)
        return ExtrasSpecification.none()

    def to_log_dict(self) -> Dict[str, Any]:
        return {
            "constraints": list(self.constraints),
            "overrides": list(self.overrides),
            "extras": list(self.extras),
            "all_extras": self.all_extras,
        }


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Args:
        explicit_path: Explicit config path. If provided, it must exist.

    Returns:
        Path to the config file, or ``None`` if none was found.

    Raises:
        ConfigError: ``explicit_path`` does not exist.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    cwd = Path.cwd()

    depspec_toml = cwd / CONFIG_FILE_NAME
    if depspec_toml.is_file():
        logger.debug("Found %s: %s", CONFIG_FILE_NAME, depspec_toml)
        return depspec_toml

    pyproject_toml = cwd / PYPROJECT_FILE_NAME
    if pyproject_toml.is_file() and _pyproject_has_depspec_section(pyproject_toml):
        logger.debug("Found [tool.depspec] in %s", pyproject_toml)
        return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_depspec_section(path: Path) -> bool:
    """Return True if ``path`` has a ``[tool.depspec]`` table.

    An unreadable or invalid ``pyproject.toml`` simply has no section here;
    it is reported later if it is also used as a requirement source.
    """
    try:
        raw = _read_toml(path)
    except ConfigError:
        return False
    tool = raw.get("tool", {})
    return isinstance(tool, dict) and "depspec" in tool


def load_config(config_path: Optional[Path] = None) -> DepSpecConfig:
    """Load and validate depspec configuration.

    Args:
        config_path: Explicit path to a config file. If ``None``, the file
            is discovered (see :func:`discover_config_file`).

    Returns:
        The validated configuration, or defaults if no file was found.

    Raises:
        ConfigError: The file cannot be parsed, has unknown keys, or has
            invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        return DepSpecConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == PYPROJECT_FILE_NAME:
        tool = _table(raw.get("tool", {}), "tool", resolved)
        section = _table(tool.get("depspec", {}), "tool.depspec", resolved)
    else:
        section = _table(raw.get("depspec", {}), "depspec", resolved)

    if not section:
        logger.debug("Config file has no depspec section, using defaults")
        return DepSpecConfig(source_path=resolved)

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


def _table(value: Any, key: str, path: Path) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ConfigError(
            f"`{key}` must be a table, got {type(value).__name__}",
            config_path=str(path),
            option=key,
        )
    return value


def _parse_section(section: Dict[str, Any], *, config_path: str) -> DepSpecConfig:
    """Validate a ``[depspec]`` / ``[tool.depspec]`` table.

    Raises:
        ConfigError: Unknown keys, wrong types, or both ``extras`` and
            ``all-extras = true``.
    """
    unknown = set(section.keys()) - _KNOWN_KEYS
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown))}",
            config_path=config_path,
        )

    config = DepSpecConfig()

    for key in ("constraints", "overrides", "extras"):
        if key in section:
            setattr(config, key, _string_list(section[key], key, config_path))

    if "all-extras" in section:
        value = section["all-extras"]
        if not isinstance(value, bool):
            raise ConfigError(
                f"all-extras must be a boolean, got {type(value).__name__}",
                config_path=config_path,
                option="all-extras",
            )
        config.all_extras = value

    if config.all_extras and config.extras:
        raise ConfigError(
            "extras and all-extras cannot be used together",
            config_path=config_path,
            option="extras",
        )

    return config


def _string_list(value: Any, option: str, config_path: str) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(
            f"{option} must be an array of strings",
            config_path=config_path,
            option=option,
        )
    return list(value)
