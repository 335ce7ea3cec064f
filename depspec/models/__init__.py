"""
Data model exports for depspec.

Example:
    >>> from depspec.models import RequirementsSource, ExtrasSpecification
"""

from __future__ import annotations

from depspec.models.names import ExtraName, PackageName
from depspec.models.source import RequirementsSource, SourceKind
from depspec.models.extras import ExtrasMode, ExtrasSpecification
from depspec.models.requirement import RequirementEntry, RequirementsTxt

__all__ = [
    "ExtraName",
    "PackageName",
    "RequirementsSource",
    "SourceKind",
    "ExtrasMode",
    "ExtrasSpecification",
    "RequirementEntry",
    "RequirementsTxt",
]
