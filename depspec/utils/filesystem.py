"""
Filesystem helpers for depspec.

Requirement sources are read whole and closed immediately; nothing is held
open across sources. All filesystem errors are normalized to
``FileOperationError`` carrying the offending path.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from depspec.utils.logger import get_logger
from depspec.exceptions import FileOperationError
from depspec.constants import MAX_FILE_SIZE

logger = get_logger("filesystem")

PathLike = Union[str, Path]


def resolve_path(path: PathLike, base_dir: Optional[PathLike] = None) -> Path:
    """Return ``path`` as an absolute path.

    Relative paths are anchored at ``base_dir`` when given, otherwise at the
    current working directory. The path does not have to exist.
    """
    candidate = Path(path).expanduser()
    if base_dir is not None and not candidate.is_absolute():
        candidate = Path(base_dir) / candidate
    return candidate.resolve(strict=False)


def _validated_file(path: Path) -> Path:
    """Ensure ``path`` names an existing regular file and resolve it."""
    if not path.exists():
        raise FileOperationError(
            f"File not found: {path}",
            file_path=str(path),
            operation="read",
        )
    if not path.is_file():
        raise FileOperationError(
            f"Not a file: {path}",
            file_path=str(path),
            operation="read",
        )
    return path.resolve()


def safe_read_file(
    file_path: PathLike,
    *,
    max_size: Optional[int] = MAX_FILE_SIZE,
    encoding: str = "utf-8",
) -> str:
    """Read a text file in one go, enforcing an optional size limit.

    Args:
        file_path: Path to the file.
        max_size: Maximum allowed file size in bytes (None disables limit).
        encoding: Text encoding.

    Returns:
        File contents as a string.

    Raises:
        FileOperationError: The file is missing, too large, or unreadable.
    """
    path = _validated_file(Path(file_path))
    size = path.stat().st_size

    if max_size is not None and size > max_size:
        raise FileOperationError(
            f"File too large: {size} bytes (max {max_size})",
            file_path=str(path),
            operation="read",
        )

    try:
        content = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise FileOperationError(
            f"Failed to read file: {exc}",
            file_path=str(path),
            operation="read",
            original_error=exc,
        ) from exc

    logger.debug("Read %d byte(s) from %s", size, path)
    return content
