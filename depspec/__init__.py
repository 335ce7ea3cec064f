"""
depspec: unified requirement sources for Python dependency tooling

depspec reads the ways a Python project can declare what it depends on and
folds them into one resolver-ready structure:

    • bare requirement strings (``flask>=2``)
    • ``requirements.txt`` files, including ``-r`` / ``-c`` directives
    • ``pyproject.toml`` manifests, with optional-dependency groups

The result, :class:`RequirementsSpecification`, holds requirements,
constraints and overrides as separate lists plus the extras that were used.
"""

from __future__ import annotations

from depspec.__version__ import __version__
from depspec.models import ExtrasSpecification, RequirementsSource
from depspec.core import RequirementsSpecification, read_requirements

__author__ = "depspec Contributors"
__license__ = "Apache-2.0"
__description__ = "Unify requirement strings, requirements files and pyproject.toml."

__all__ = [
    "__version__",
    "ExtrasSpecification",
    "RequirementsSource",
    "RequirementsSpecification",
    "read_requirements",
]
