"""
Core functionality exports for depspec.

    from depspec.core import RequirementsSpecification, RequirementsParser
"""

from __future__ import annotations

from depspec.core.parser import RequirementsParser, parse_requirement
from depspec.core.pyproject import Project, PyProjectToml
from depspec.core.specification import RequirementsSpecification, read_requirements

__all__ = [
    "RequirementsParser",
    "parse_requirement",
    "Project",
    "PyProjectToml",
    "RequirementsSpecification",
    "read_requirements",
]
