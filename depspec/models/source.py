"""
Requirement sources.

A :class:`RequirementsSource` says where requirements come from. Which kind
of source a path is depends only on its final component; nothing is read
from disk until the source is handed to a reader.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from depspec.constants import PYPROJECT_FILE_NAME


class SourceKind(enum.Enum):
    """The closed set of source kinds."""

    #: A requirement given literally, e.g. ``depspec show flask``.
    NAME = "name"
    #: A ``requirements.txt``-style file, e.g. ``-r requirements.txt``.
    REQUIREMENTS_TXT = "requirements-txt"
    #: A ``pyproject.toml`` manifest.
    PYPROJECT_TOML = "pyproject-toml"


@dataclass(frozen=True)
class RequirementsSource:
    """One classified input. Build it with :meth:`from_literal` or :meth:`from_path`.

    Attributes:
        kind: Which reader handles this source.
        value: The requirement string for ``NAME``, otherwise the file path.
    """

    kind: SourceKind
    value: Union[str, Path]

    @classmethod
    def from_literal(cls, name: str) -> "RequirementsSource":
        """A literal string is always a requirement, never a file."""
        return cls(SourceKind.NAME, name)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "RequirementsSource":
        """Classify a path as a manifest or a requirements file by its name.

        Only a final component spelled exactly ``pyproject.toml`` makes a
        manifest; ``PyProject.toml`` or ``pyproject.toml.bak`` are
        requirements files.
        """
        path = Path(path)
        if path.name == PYPROJECT_FILE_NAME:
            return cls(SourceKind.PYPROJECT_TOML, path)
        return cls(SourceKind.REQUIREMENTS_TXT, path)

    @property
    def path(self) -> Path:
        """The file path of a file-backed source."""
        if self.kind is SourceKind.NAME:
            raise TypeError("A literal requirement source has no path")
        return Path(self.value)

    def __str__(self) -> str:
        return str(self.value)
