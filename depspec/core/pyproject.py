"""Reading the ``[project]`` table of a ``pyproject.toml``.

Only the subset depspec needs is modelled::

    [project]
    name = "my-app"
    dependencies = ["flask>=2"]

    [project.optional-dependencies]
    dev = ["pytest"]

A manifest without a ``[project]`` table is valid and yields
``PyProjectToml(project=None)``. Anything else in the file is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import tomli as tomllib

from depspec.exceptions import ManifestError


@dataclass
class Project:
    """The ``[project]`` table.

    Attributes:
        name: Raw, unvalidated project name.
        dependencies: Raw requirement strings; ``None`` if the key is absent.
        optional_dependencies: Raw group names mapped to requirement strings,
            in table order; ``None`` if the key is absent.
    """

    name: str
    dependencies: Optional[List[str]] = None
    optional_dependencies: Optional[Dict[str, List[str]]] = None


@dataclass
class PyProjectToml:
    project: Optional[Project] = field(default=None)

    @classmethod
    def from_string(
        cls,
        contents: str,
        path: Optional[Union[str, Path]] = None,
    ) -> "PyProjectToml":
        """Parse manifest text.

        Args:
            contents: The TOML document.
            path: Where ``contents`` came from, for error messages.

        Raises:
            ManifestError: ``contents`` is not valid TOML, or the
                ``[project]`` table does not have the expected shape.
        """
        file_path = str(path) if path is not None else None
        try:
            raw = tomllib.loads(contents)
        except tomllib.TOMLDecodeError as exc:
            raise ManifestError(
                f"Failed to read `{file_path or '<string>'}`: {exc}",
                file_path=file_path,
            ) from exc

        table = raw.get("project")
        if table is None:
            return cls(project=None)
        return cls(project=_parse_project(table, file_path))


def _parse_project(table: Any, file_path: Optional[str]) -> Project:
    if not isinstance(table, Mapping):
        raise ManifestError("`project` must be a table", file_path=file_path)

    name = table.get("name")
    if not isinstance(name, str):
        raise ManifestError(
            "`project.name` is required and must be a string",
            file_path=file_path,
        )

    dependencies = table.get("dependencies")
    if dependencies is not None:
        dependencies = _string_array(dependencies, "project.dependencies", file_path)

    optional = table.get("optional-dependencies")
    if optional is not None:
        if not isinstance(optional, Mapping):
            raise ManifestError(
                "`project.optional-dependencies` must be a table",
                file_path=file_path,
            )
        optional = {
            group: _string_array(
                requirements, f"project.optional-dependencies.{group}", file_path
            )
            for group, requirements in optional.items()
        }

    return Project(
        name=name,
        dependencies=dependencies,
        optional_dependencies=optional,
    )


def _string_array(value: Any, key: str, file_path: Optional[str]) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ManifestError(
            f"`{key}` must be an array of strings",
            file_path=file_path,
        )
    return list(value)
