"""Requirement string and requirements file parsing.

:func:`parse_requirement` turns one PEP 508 string into a
``packaging.requirements.Requirement``.

:class:`RequirementsParser` reads pip-style requirements files and returns
a flattened :class:`RequirementsTxt`:

- Standard PEP 508 specifiers (``requests>=2.25.0``)
- Direct URLs with VCS schemes (``git+https://...#egg=pkg``)
- Local paths (``./pkg``, ``/abs/pkg``, ``.``) with optional ``#egg=``
- Editable installs (``-e .`` or ``--editable git+...``)
- Includes (``-r other.txt`` / ``--requirement other.txt``); everything the
  included file yields is spliced in at the directive's position
- Constraints (``-c constraints.txt`` / ``--constraint``); everything the
  referenced file yields becomes a constraint
- Hashes (``--hash sha256:...``), inline comments, ``\\`` continuations
- pip global options such as ``--index-url``, which are skipped

Typical usage::

    from depspec.core.parser import RequirementsParser

    parsed = RequirementsParser().parse_file("requirements.txt")
    for entry in parsed.requirements:
        print(entry.requirement, entry.line_number)
    print(parsed.constraints)
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from packaging.requirements import InvalidRequirement, Requirement
from packaging.utils import (
    InvalidSdistFilename,
    InvalidWheelFilename,
    parse_sdist_filename,
    parse_wheel_filename,
)

from depspec.models.requirement import RequirementEntry, RequirementsTxt
from depspec.utils import get_logger, resolve_path, safe_read_file
from depspec.exceptions import FileOperationError, ParseError
from depspec.constants import (
    CONSTRAINT_DIRECTIVE,
    CONSTRAINT_DIRECTIVE_LONG,
    EDITABLE_DIRECTIVE,
    EDITABLE_DIRECTIVE_LONG,
    IGNORED_OPTIONS,
    INCLUDE_DIRECTIVE,
    INCLUDE_DIRECTIVE_LONG,
)

logger = get_logger("parser")

URL_SCHEMES = (
    "git+https://",
    "git+http://",
    "git+ssh://",
    "git+git://",
    "git+file://",
    "bzr+https://",
    "bzr+http://",
    "bzr+ssh://",
    "hg+https://",
    "hg+http://",
    "hg+ssh://",
    "svn+https://",
    "svn+http://",
    "svn+ssh://",
    "https://",
    "http://",
    "file://",
)

_HASH_PATTERN = re.compile(r"--hash[=\s]+(\S+)")

#: Source distribution suffixes ``packaging`` can parse a name from.
_SDIST_SUFFIXES = (".tar.gz", ".zip")

PathLike = Union[str, Path]


def parse_requirement(
    text: str,
    *,
    file_path: Optional[str] = None,
    line_number: Optional[int] = None,
) -> Requirement:
    """Parse a single PEP 508 requirement string.

    Args:
        text: Requirement string, e.g. ``"flask[async]>=2; python_version>'3.8'"``.
        file_path: File the string came from, for error context.
        line_number: Line the string came from, for error context.

    Raises:
        ParseError: ``text`` is not a valid PEP 508 requirement. The error
            carries ``text`` as its content.
    """
    try:
        return Requirement(text)
    except InvalidRequirement as exc:
        raise ParseError(
            f"Failed to parse `{text}`: {exc}",
            line_number=line_number,
            line_content=text,
            file_path=file_path,
        ) from exc


class RequirementsParser:
    """Parser for pip-style requirements files.

    The only state kept between lines is the stack of files currently
    being read, which is how circular ``-r`` / ``-c`` chains are detected.
    One parser may be reused for any number of :meth:`parse_file` calls.

    Example::

        >>> parsed = RequirementsParser().parse_file("requirements/prod.txt")
        >>> [str(e.requirement) for e in parsed.requirements if e.editable]
        ['my-local-package@ file:///project/my-local-package']
    """

    def __init__(self) -> None:
        self._included_files_stack: List[Path] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse_file(
        self,
        file_path: PathLike,
        working_dir: Optional[PathLike] = None,
    ) -> RequirementsTxt:
        """Parse a requirements file and everything it includes.

        Args:
            file_path: Path to the requirements file. A relative path is
                resolved against ``working_dir``.
            working_dir: Base directory for a relative ``file_path``;
                defaults to the current working directory. Nested ``-r`` /
                ``-c`` paths are resolved against the including file's
                directory.

        Raises:
            FileOperationError: The file does not exist or cannot be read.
            ParseError: A line is malformed, a nested file cannot be read,
                or an include chain is circular.
        """
        resolved_path = resolve_path(file_path, working_dir)
        return self._parse_resolved(resolved_path)

    def parse_string(
        self,
        content: str,
        source_file_path: Optional[str] = None,
        _current_file: Optional[Path] = None,
    ) -> RequirementsTxt:
        """Parse requirements from raw text content.

        ``-r`` / ``-c`` directives in ``content`` need a file to be relative
        to, so they fail unless ``_current_file`` is set (internal use).

        Example::

            >>> parsed = RequirementsParser().parse_string("flask>=2.0\\n# c\\nrequests")
            >>> [e.name for e in parsed.requirements]
            ['flask', 'requests']
        """
        result = RequirementsTxt()

        for line_number, line_text in self._logical_lines(content):
            parsed = self.parse_line(
                line_text,
                line_number,
                source_file_path,
                _current_file=_current_file,
            )
            if parsed is None:
                continue
            if isinstance(parsed, RequirementsTxt):
                result.extend(parsed)
            else:
                result.requirements.append(parsed)

        logger.debug(
            "Parsed %d requirement(s) and %d constraint(s)%s",
            len(result.requirements),
            len(result.constraints),
            f" from {source_file_path}" if source_file_path else "",
        )
        return result

    def parse_line(
        self,
        line_text: str,
        line_number: int,
        source_file_path: Optional[str] = None,
        _current_file: Optional[Path] = None,
    ) -> Optional[Union[RequirementEntry, RequirementsTxt]]:
        """Parse one logical line.

        Returns:
            - ``None`` for blank lines, comments and skipped pip options.
            - :class:`RequirementsTxt` for ``-r`` and ``-c`` directives.
            - :class:`RequirementEntry` for everything else.

        Raises:
            ParseError: The line is not a valid requirement or directive.
        """
        stripped_line = line_text.strip()
        if not stripped_line or stripped_line.startswith("#"):
            return None

        spec, inline_comment = self._extract_inline_comment(stripped_line)

        included = _option_argument(spec, INCLUDE_DIRECTIVE, INCLUDE_DIRECTIVE_LONG)
        if included is not None:
            return self._handle_include_directive(
                spec, included, line_number, source_file_path, _current_file
            )

        constrained = _option_argument(
            spec, CONSTRAINT_DIRECTIVE, CONSTRAINT_DIRECTIVE_LONG
        )
        if constrained is not None:
            return self._handle_constraint_directive(
                spec, constrained, line_number, source_file_path, _current_file
            )

        option = re.split(r"[=\s]", spec, maxsplit=1)[0]
        if option in IGNORED_OPTIONS:
            logger.debug("Line %d: skipping pip option %s", line_number, option)
            return None

        spec = self._remove_surrounding_quotes(spec)

        editable_target = _option_argument(
            spec, EDITABLE_DIRECTIVE, EDITABLE_DIRECTIVE_LONG
        )
        is_editable = editable_target is not None
        if is_editable:
            spec = editable_target

        hash_values = _HASH_PATTERN.findall(spec)
        if hash_values:
            spec = _HASH_PATTERN.sub("", spec).strip()

        if not spec:
            raise ParseError(
                "Missing requirement",
                line_number=line_number,
                line_content=stripped_line,
                file_path=source_file_path,
            )

        url_components = self._parse_direct_url(spec)
        if url_components:
            requirement_text = self._url_requirement_text(
                spec, url_components, line_number, source_file_path
            )
        elif local_components := self._parse_local_file_path(spec):
            requirement_text = self._local_path_requirement_text(
                local_components, _current_file, line_number, source_file_path
            )
        else:
            requirement_text = spec

        return RequirementEntry(
            requirement=parse_requirement(
                requirement_text,
                file_path=source_file_path,
                line_number=line_number,
            ),
            file_path=source_file_path,
            line_number=line_number,
            editable=is_editable,
            hashes=hash_values,
            comment=inline_comment,
        )

    # ------------------------------------------------------------------
    # File handling (private)
    # ------------------------------------------------------------------

    def _parse_resolved(self, resolved_path: Path) -> RequirementsTxt:
        if resolved_path in self._included_files_stack:
            cycle_path = " -> ".join(
                str(p) for p in self._included_files_stack + [resolved_path]
            )
            raise ParseError(
                f"Circular dependency detected: {cycle_path}",
                file_path=str(resolved_path),
            )

        logger.debug("Parsing requirements file: %s", resolved_path)
        file_content = safe_read_file(resolved_path)

        self._included_files_stack.append(resolved_path)
        try:
            return self.parse_string(
                file_content,
                source_file_path=str(resolved_path),
                _current_file=resolved_path,
            )
        finally:
            self._included_files_stack.pop()

    def _parse_nested(
        self,
        directive: str,
        target: str,
        line_number: int,
        source_file_path: Optional[str],
        current_file: Optional[Path],
    ) -> RequirementsTxt:
        """Parse the file a ``-r`` / ``-c`` directive points at."""
        if not target:
            raise ParseError(
                "Directive is missing a file path",
                line_number=line_number,
                line_content=directive,
                file_path=source_file_path,
            )
        if current_file is None:
            raise ParseError(
                "Cannot resolve a nested file without a base file",
                line_number=line_number,
                line_content=directive,
                file_path=source_file_path,
            )

        try:
            return self._parse_resolved(
                resolve_path(self._remove_surrounding_quotes(target), current_file.parent)
            )
        except (FileOperationError, ParseError) as exc:
            raise ParseError(
                f"Failed to process directive: {exc}",
                line_number=line_number,
                line_content=directive,
                file_path=source_file_path,
            ) from exc

    def _handle_include_directive(
        self,
        directive: str,
        target: str,
        line_number: int,
        source_file_path: Optional[str],
        current_file: Optional[Path],
    ) -> RequirementsTxt:
        included = self._parse_nested(
            directive, target, line_number, source_file_path, current_file
        )
        logger.debug(
            "Line %d: included %d requirement(s) from %s",
            line_number,
            len(included.requirements),
            target,
        )
        return included

    def _handle_constraint_directive(
        self,
        directive: str,
        target: str,
        line_number: int,
        source_file_path: Optional[str],
        current_file: Optional[Path],
    ) -> RequirementsTxt:
        """Everything a constraints file yields, requirements included, is a constraint."""
        nested = self._parse_nested(
            directive, target, line_number, source_file_path, current_file
        )
        constraints = [entry.requirement for entry in nested.requirements]
        constraints.extend(nested.constraints)
        logger.debug(
            "Line %d: loaded %d constraint(s) from %s",
            line_number,
            len(constraints),
            target,
        )
        return RequirementsTxt(constraints=constraints)

    # ------------------------------------------------------------------
    # Requirement builders (private)
    # ------------------------------------------------------------------

    def _url_requirement_text(
        self,
        url: str,
        url_components: Dict[str, Optional[str]],
        line_number: int,
        source_file_path: Optional[str],
    ) -> str:
        """Turn a bare URL into ``name @ url``, taking the name from ``#egg=``."""
        package_name = url_components.get("egg")
        if not package_name:
            package_name = self._infer_package_name_from_url(
                url, line_number, source_file_path
            )
            if not package_name:
                raise ParseError(
                    "URL requirements must include '#egg=<name>' or an inferable package name",
                    line_number=line_number,
                    line_content=url,
                    file_path=source_file_path,
                )
            logger.warning(
                "Line %d: URL without '#egg=' - inferred name '%s'",
                line_number,
                package_name,
            )
        return f"{package_name} @ {url}"

    def _local_path_requirement_text(
        self,
        path_components: Dict[str, Optional[str]],
        current_file: Optional[Path],
        line_number: int,
        source_file_path: Optional[str],
    ) -> str:
        """Turn a local path into ``name @ file://...``."""
        base_dir = current_file.parent if current_file is not None else None
        resolved = resolve_path(path_components["path"] or ".", base_dir)
        package_name = path_components.get("egg") or self._infer_package_name_from_path(
            resolved, line_number, source_file_path
        )
        return f"{package_name} @ {resolved.as_uri()}"

    # ------------------------------------------------------------------
    # Parsing helpers (private)
    # ------------------------------------------------------------------

    @staticmethod
    def _logical_lines(content: str) -> List[Tuple[int, str]]:
        """Join ``\\``-continued lines, keeping the first physical line number."""
        logical: List[Tuple[int, str]] = []
        buffer: List[str] = []
        start = 0

        for line_number, line in enumerate(content.splitlines(), start=1):
            if not buffer:
                start = line_number
            if line.endswith("\\") and not line.lstrip().startswith("#"):
                buffer.append(line[:-1])
                continue
            buffer.append(line)
            logical.append((start, " ".join(part.strip() for part in buffer)))
            buffer = []

        if buffer:
            logical.append((start, " ".join(part.strip() for part in buffer)))
        return logical

    def _parse_direct_url(
        self, requirement_line: str
    ) -> Optional[Dict[str, Optional[str]]]:
        """Detect a direct URL and extract its ``#egg=`` name, if any.

        >>> RequirementsParser()._parse_direct_url("git+https://host/repo.git#egg=pkg")
        {'scheme': 'git+https://', 'egg': 'pkg'}
        """
        for scheme in URL_SCHEMES:
            if requirement_line.startswith(scheme):
                return {"scheme": scheme, "egg": _egg_fragment(requirement_line)}
        return None

    def _parse_local_file_path(
        self, requirement_line: str
    ) -> Optional[Dict[str, Optional[str]]]:
        """Detect a local path: ``.``, ``./x``, ``../x``, ``/x`` or ``C:\\x``."""
        is_local_path = (
            requirement_line == "."
            or requirement_line.startswith(".#")
            or requirement_line.startswith(("./", "../", ".\\", "..\\", "/"))
            or (
                len(requirement_line) >= 3
                and requirement_line[1] == ":"
                and requirement_line[2] == "\\"
            )
        )
        if not is_local_path:
            return None

        path_part = requirement_line.split("#", 1)[0]
        return {"path": path_part, "egg": _egg_fragment(requirement_line)}

    def _infer_package_name_from_path(
        self,
        file_path: Path,
        line_number: int = 0,
        source_file_path: Optional[str] = None,
    ) -> str:
        """Name a local wheel, sdist or project directory.

        >>> RequirementsParser()._infer_package_name_from_path(Path("/x/local-pkg"))
        'local-pkg'
        >>> RequirementsParser()._infer_package_name_from_path(Path("/d/requests-2.31.0.tar.gz"))
        'requests'
        """
        filename = file_path.name
        archive_name = _archive_project_name(
            filename, line_number, str(file_path), source_file_path
        )
        return archive_name or filename

    def _infer_package_name_from_url(
        self,
        url: str,
        line_number: int = 0,
        source_file_path: Optional[str] = None,
    ) -> Optional[str]:
        """Name a URL requirement from its last path segment.

        Wheel and sdist file names are parsed; for anything else the segment
        without a VCS revision and ``.git`` suffix is used.
        """
        url_path = url.split("://", 1)[1] if "://" in url else url
        url_path = url_path.split("#", 1)[0].split("?", 1)[0]

        segments = [s for s in url_path.replace("\\", "/").split("/") if s]
        # The first segment is the host, never a package name
        if len(segments) < 2:
            return None

        archive_name = _archive_project_name(
            segments[-1], line_number, url, source_file_path
        )
        if archive_name:
            return archive_name

        # Drop a VCS revision (``repo.git@v1.0``) and the ``.git`` suffix
        name = segments[-1].split("@", 1)[0]
        if name.endswith(".git"):
            name = name[:-4]
        return name or None

    def _remove_surrounding_quotes(self, text: str) -> str:
        if len(text) >= 2 and text[0] in ('"', "'") and text[0] == text[-1]:
            return text[1:-1]
        return text

    def _extract_inline_comment(self, line: str) -> Tuple[str, Optional[str]]:
        """Split a line into requirement text and inline comment.

        A ``#`` starts a comment unless it is a URL fragment (``#egg=``,
        ``#subdirectory=``, ``#sha256=``) or sits inside a URL token.

        >>> RequirementsParser()._extract_inline_comment("requests>=2.25  # pinned")
        ('requests>=2.25', 'pinned')
        """
        for char_index, char in enumerate(line):
            if char != "#":
                continue

            text_before_hash = line[:char_index]
            text_after_hash = line[char_index + 1 :]

            if text_after_hash.startswith(
                ("egg=", "subdirectory=", "sha1=", "sha256=")
            ):
                continue

            # Inside a URL token (no whitespace since '://') '#' is a fragment
            url_scheme_position = text_before_hash.rfind("://")
            if (
                url_scheme_position == -1
                or " " in text_before_hash[url_scheme_position:]
            ):
                return text_before_hash.strip(), text_after_hash.strip()

        return line, None


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------


def _option_argument(line: str, short: str, long: str) -> Optional[str]:
    """Return the argument of ``short`` / ``long`` if ``line`` starts with it.

    ``""`` means the option is present without an argument; ``None`` means
    the line is not this option at all. The short form also accepts its
    argument joined on, as pip does (``-rbase.txt``).

    >>> _option_argument("--requirement=base.txt", "-r", "--requirement")
    'base.txt'
    >>> _option_argument("-cpins.txt", "-c", "--constraint")
    'pins.txt'
    >>> _option_argument("requests", "-r", "--requirement") is None
    True
    """
    if line == long or line.startswith(f"{long}="):
        return line[len(long) + 1 :].strip()
    if line.startswith(long) and line[len(long)].isspace():
        return line[len(long) :].strip()
    if line.startswith(short):
        return line[len(short) :].strip()
    return None


def _archive_project_name(
    filename: str,
    line_number: int,
    location: str,
    source_file_path: Optional[str],
) -> Optional[str]:
    """Return the project name of a wheel or sdist file name, else ``None``.

    Raises:
        ParseError: ``filename`` looks like a distribution but is malformed.
    """
    try:
        if filename.endswith(".whl"):
            return str(parse_wheel_filename(filename)[0])
        if filename.endswith(_SDIST_SUFFIXES):
            return str(parse_sdist_filename(filename)[0])
    except (InvalidWheelFilename, InvalidSdistFilename) as exc:
        raise ParseError(
            f"Invalid distribution file name `{filename}`: {exc}",
            line_number=line_number or None,
            line_content=location,
            file_path=source_file_path,
        ) from exc
    return None


def _egg_fragment(text: str) -> Optional[str]:
    """Return the ``#egg=`` name from a URL or path, if present."""
    if "#egg=" not in text:
        return None
    egg_part = text.split("#egg=", 1)[1]
    egg_name = egg_part.split("&")[0].split()
    return egg_name[0] if egg_name else None
