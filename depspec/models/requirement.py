"""
Requirement entry data model.

A :class:`RequirementEntry` is one requirement read from a requirements
file together with where it came from. Readers strip the provenance and
keep only :attr:`RequirementEntry.requirement` when building a
specification.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from packaging.requirements import Requirement


@dataclass
class RequirementEntry:
    """
    A parsed requirement line plus provenance metadata.

    Attributes:
        requirement: The parsed PEP 508 requirement.
        file_path: File the line was read from.
        line_number: Original line number in that file.
        editable: Whether this is an editable install (``-e``).
        hashes: Hash values used for verification.
        comment: Inline comment without the ``#`` prefix.
    """

    requirement: Requirement
    file_path: Optional[str] = None
    line_number: int = 0
    editable: bool = False
    hashes: List[str] = field(default_factory=list)
    comment: Optional[str] = None

    @property
    def name(self) -> str:
        return self.requirement.name

    def to_string(self, *, include_hashes: bool = True) -> str:
        """Render the entry back into ``requirements.txt`` syntax."""
        result = str(self.requirement)
        if self.editable:
            result = f"-e {result}"
        if include_hashes:
            for hash_value in self.hashes:
                result += f" --hash={hash_value}"
        return result

    def __str__(self) -> str:
        return self.to_string()


@dataclass
class RequirementsTxt:
    """The flattened contents of one requirements file.

    Attributes:
        requirements: Entries from the file and everything it includes
            with ``-r``, in file order.
        constraints: Requirements pulled in through ``-c`` directives.
    """

    requirements: List[RequirementEntry] = field(default_factory=list)
    constraints: List[Requirement] = field(default_factory=list)

    def extend(self, other: "RequirementsTxt") -> None:
        self.requirements.extend(other.requirements)
        self.constraints.extend(other.constraints)
