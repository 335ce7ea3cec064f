"""Combining requirement sources into one specification.

A :class:`RequirementsSpecification` is what a resolver consumes: the
project name (if any manifest provided one), requirements, constraints,
overrides, and the extras that were used to collect requirements.

Reading is all-or-nothing. The first error from any source aborts the
merge and propagates unchanged; no partially filled specification is ever
returned.

Typical usage::

    spec = RequirementsSpecification.from_sources(
        [RequirementsSource.from_path("pyproject.toml")],
        [RequirementsSource.from_path("constraints.txt")],
        [],
        ExtrasSpecification.some(["dev"]),
    )
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Set, Union

from packaging.requirements import Requirement

from depspec.core.parser import RequirementsParser, parse_requirement
from depspec.core.pyproject import PyProjectToml
from depspec.exceptions import InvalidNameError
from depspec.models import (
    ExtraName,
    ExtrasSpecification,
    PackageName,
    RequirementsSource,
    SourceKind,
)
from depspec.utils import get_logger, resolve_path, safe_read_file

logger = get_logger("specification")

PathLike = Union[str, Path]


@dataclass
class RequirementsSpecification:
    """The merged requirements of one or more sources.

    Attributes:
        project: Name of the project specifying requirements, taken from the
            first requirement source that declares one.
        requirements: Requirements, in source order. Not deduplicated.
        constraints: Constraints, in source order. Not deduplicated.
        overrides: Overrides, in source order. Not deduplicated.
        extras: Extras used to collect requirements.
    """

    project: Optional[PackageName] = None
    requirements: List[Requirement] = field(default_factory=list)
    constraints: List[Requirement] = field(default_factory=list)
    overrides: List[Requirement] = field(default_factory=list)
    extras: Set[ExtraName] = field(default_factory=set)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable view; extras are sorted for stable output."""
        return {
            "project": str(self.project) if self.project is not None else None,
            "requirements": [str(r) for r in self.requirements],
            "constraints": [str(r) for r in self.constraints],
            "overrides": [str(r) for r in self.overrides],
            "extras": sorted(str(e) for e in self.extras),
        }

    @classmethod
    def from_source(
        cls,
        source: RequirementsSource,
        extras: ExtrasSpecification = ExtrasSpecification(),
        *,
        working_dir: Optional[PathLike] = None,
    ) -> "RequirementsSpecification":
        """Read requirements and constraints from a single source.

        ``extras`` only applies to ``pyproject.toml`` sources; requirements
        files ignore it.

        Args:
            source: The source to read.
            extras: Which optional-dependency groups to include.
            working_dir: Base for a relative file path;
                defaults to the current working directory.

        Raises:
            ParseError: A requirement string or requirements file is malformed.
            FileOperationError: A file is missing or unreadable.
            ManifestError: A ``pyproject.toml`` is not valid TOML.
            InvalidNameError: A project or extra name is invalid.
        """
        logger.debug("Reading %s source: %s", source.kind.value, source)

        if source.kind is SourceKind.NAME:
            return cls(requirements=[parse_requirement(str(source.value))])

        if source.kind is SourceKind.REQUIREMENTS_TXT:
            parsed = RequirementsParser().parse_file(
                source.path, working_dir if working_dir is not None else Path.cwd()
            )
            return cls(
                requirements=[entry.requirement for entry in parsed.requirements],
                constraints=list(parsed.constraints),
            )

        return cls._from_pyproject_toml(source.path, extras, working_dir)

    @classmethod
    def _from_pyproject_toml(
        cls,
        path: Path,
        extras: ExtrasSpecification,
        working_dir: Optional[PathLike],
    ) -> "RequirementsSpecification":
        file_path = str(path)
        contents = safe_read_file(resolve_path(path, working_dir))
        pyproject_toml = PyProjectToml.from_string(contents, file_path)

        project = pyproject_toml.project
        if project is None:
            logger.debug("No [project] table in %s", file_path)
            return cls()

        try:
            project_name = PackageName(project.name)
        except InvalidNameError as exc:
            raise InvalidNameError(
                f"Invalid `project.name` in {file_path}: {exc.message}",
                name=project.name,
                kind=PackageName.kind,
                file_path=file_path,
            ) from exc

        requirements = [
            parse_requirement(text, file_path=file_path)
            for text in project.dependencies or []
        ]

        used_extras: Set[ExtraName] = set()
        if not extras.is_none:
            for name, optional_requirements in (
                project.optional_dependencies or {}
            ).items():
                # Normalize before filtering: an invalid group name fails
                # even when the group is not selected
                try:
                    normalized_name = ExtraName(name)
                except InvalidNameError as exc:
                    raise InvalidNameError(
                        f"Invalid `project.optional-dependencies` group in {file_path}: {exc.message}",
                        name=name,
                        kind=ExtraName.kind,
                        file_path=file_path,
                    ) from exc
                if extras.contains(normalized_name):
                    used_extras.add(normalized_name)
                    requirements.extend(
                        parse_requirement(text, file_path=file_path)
                        for text in optional_requirements
                    )

        logger.debug(
            "Read %d requirement(s) for %s from %s (extras: %s)",
            len(requirements),
            project_name,
            file_path,
            ", ".join(sorted(used_extras)) or "none",
        )

        return cls(
            project=project_name,
            requirements=requirements,
            extras=used_extras,
        )

    @classmethod
    def from_sources(
        cls,
        requirements: Sequence[RequirementsSource],
        constraints: Sequence[RequirementsSource],
        overrides: Sequence[RequirementsSource],
        extras: ExtrasSpecification = ExtrasSpecification(),
        *,
        working_dir: Optional[PathLike] = None,
    ) -> "RequirementsSpecification":
        """Read the combined requirements, constraints and overrides.

        Sources are read strictly in order: requirement sources, then
        constraint sources, then override sources.

        - A requirement source contributes to all three lists, since a
          requirements file can carry ``-c`` constraints of its own. The
          first source with a project name sets :attr:`project`.
        - Everything a constraint source yields becomes a constraint.
        - Everything an override source yields becomes an override.

        Constraint and override sources never contribute a project name or
        extras.

        Raises:
            DepSpecError: The first error raised while reading any source.
        """
        spec = cls()

        for source in requirements:
            read = cls.from_source(source, extras, working_dir=working_dir)
            spec.requirements.extend(read.requirements)
            spec.constraints.extend(read.constraints)
            spec.overrides.extend(read.overrides)
            spec.extras.update(read.extras)

            if spec.project is None:
                spec.project = read.project

        for source in constraints:
            read = cls.from_source(source, extras, working_dir=working_dir)
            spec.constraints.extend(read.requirements)
            spec.constraints.extend(read.constraints)
            spec.constraints.extend(read.overrides)

        for source in overrides:
            read = cls.from_source(source, extras, working_dir=working_dir)
            spec.overrides.extend(read.requirements)
            spec.overrides.extend(read.constraints)
            spec.overrides.extend(read.overrides)

        logger.info(
            "Collected %d requirement(s), %d constraint(s), %d override(s) from %d source(s)",
            len(spec.requirements),
            len(spec.constraints),
            len(spec.overrides),
            len(requirements) + len(constraints) + len(overrides),
        )
        return spec


def read_requirements(
    sources: Sequence[RequirementsSource],
    *,
    working_dir: Optional[PathLike] = None,
) -> List[Requirement]:
    """Read only the requirements from ``sources``, with no extras."""
    return RequirementsSpecification.from_sources(
        sources,
        [],
        [],
        ExtrasSpecification.none(),
        working_dir=working_dir,
    ).requirements
