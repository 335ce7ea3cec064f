"""
Custom exception hierarchy for depspec.

All exceptions inherit from :class:`DepSpecError` and carry structured
metadata in ``details`` so that every failure can name the source it came
from: the literal requirement string or the path of the file being read.

Reading is fail-fast. Readers raise the first error they meet and chain the
underlying cause with ``raise ... from``.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


def _present(**fields: Any) -> Dict[str, Any]:
    """Keep only the fields that were actually provided."""
    return {key: value for key, value in fields.items() if value is not None}


class DepSpecError(Exception):
    """Base exception for all depspec errors.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})

    def __str__(self) -> str:
        if not self.details:
            return self.message
        pairs = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({pairs})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, details={self.details!r})"


class ParseError(DepSpecError):
    """A requirement string or a requirements file line is malformed.

    Attributes:
        line_number: 1-based line of the failure, when reading a file.
        line_content: The offending text.
        file_path: The file being read, if any.
    """

    __slots__ = ("line_number", "line_content", "file_path")

    def __init__(
        self,
        message: str,
        *,
        line_number: Optional[int] = None,
        line_content: Optional[str] = None,
        file_path: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            _present(line=line_number, content=line_content, file=file_path),
        )
        self.line_number = line_number
        self.line_content = line_content
        self.file_path = file_path


class FileOperationError(DepSpecError):
    """A source file is missing, too large, or cannot be decoded."""

    __slots__ = ("file_path", "operation", "original_error")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(
            message,
            _present(
                path=file_path,
                operation=operation,
                original_error=str(original_error) if original_error else None,
            ),
        )
        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error


class ManifestError(DepSpecError):
    """A ``pyproject.toml`` is not valid TOML or its ``[project]`` has the wrong shape."""

    __slots__ = ("file_path",)

    def __init__(self, message: str, *, file_path: Optional[str] = None) -> None:
        super().__init__(message, _present(file=file_path))
        self.file_path = file_path


class InvalidNameError(DepSpecError):
    """A package or extra name fails validation.

    Attributes:
        name: The raw name that was rejected.
        kind: ``"package"`` or ``"extra"``.
        file_path: Manifest the name was read from, if any.
    """

    __slots__ = ("name", "kind", "file_path")

    def __init__(
        self,
        message: str,
        *,
        name: Optional[str] = None,
        kind: Optional[str] = None,
        file_path: Optional[str] = None,
    ) -> None:
        super().__init__(message, _present(name=name, kind=kind, file=file_path))
        self.name = name
        self.kind = kind
        self.file_path = file_path


class ConfigError(DepSpecError):
    """The depspec configuration file is unreadable or invalid."""

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        super().__init__(message, _present(config=config_path, option=option))
        self.config_path = config_path
        self.option = option
