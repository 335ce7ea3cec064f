"""
Extras selection.

Decides which optional-dependency groups of a ``pyproject.toml`` are pulled
in: none (the default), all of them, or an explicit set.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable

from depspec.models.names import ExtraName


class ExtrasMode(enum.Enum):
    NONE = "none"
    ALL = "all"
    SOME = "some"


@dataclass(frozen=True)
class ExtrasSpecification:
    """Which extras to include.

    Attributes:
        mode: ``NONE``, ``ALL`` or ``SOME``.
        names: The selected extras; only meaningful for ``SOME``.
    """

    mode: ExtrasMode = ExtrasMode.NONE
    names: FrozenSet[ExtraName] = field(default_factory=frozenset)

    @classmethod
    def none(cls) -> "ExtrasSpecification":
        return cls(ExtrasMode.NONE)

    @classmethod
    def all(cls) -> "ExtrasSpecification":
        return cls(ExtrasMode.ALL)

    @classmethod
    def some(cls, names: Iterable[str]) -> "ExtrasSpecification":
        """Select the given extras, normalizing each name.

        Raises:
            InvalidNameError: A name is not a valid extra name.
        """
        return cls(ExtrasMode.SOME, frozenset(ExtraName(name) for name in names))

    @property
    def is_none(self) -> bool:
        return self.mode is ExtrasMode.NONE

    def contains(self, name: ExtraName) -> bool:
        """Return True if ``name`` is selected."""
        if self.mode is ExtrasMode.ALL:
            return True
        if self.mode is ExtrasMode.NONE:
            return False
        return name in self.names
