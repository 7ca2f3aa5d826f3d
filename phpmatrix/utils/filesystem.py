"""
File access helpers for phpmatrix.

Manifests and catalog files are read through :func:`safe_read_file`, CI
outputs are written through :func:`safe_append_file`. Both report every
failure as :class:`~phpmatrix.exceptions.FileOperationError` carrying the
path and the operation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from phpmatrix.constants import MAX_FILE_SIZE
from phpmatrix.utils.logger import get_logger
from phpmatrix.exceptions import FileOperationError

logger = get_logger("filesystem")

PathLike = Union[str, Path]


def _fail(message: str, path: Path, operation: str, exc: Optional[Exception] = None) -> FileOperationError:
    return FileOperationError(
        message,
        file_path=str(path),
        operation=operation,
        original_error=exc,
    )


def safe_read_file(
    file_path: PathLike,
    *,
    max_size: Optional[int] = MAX_FILE_SIZE,
    encoding: str = "utf-8",
) -> str:
    """Return the text of ``file_path``.

    Args:
        file_path: File to read.
        max_size: Largest accepted size in bytes; ``None`` disables the check.
        encoding: Text encoding.

    Raises:
        FileOperationError: The path is missing or not a regular file, the
            file exceeds ``max_size``, or it cannot be read or decoded.
    """
    path = Path(file_path)

    if not path.exists():
        raise _fail(f"File not found: {path}", path, "read")
    if not path.is_file():
        raise _fail(f"Not a file: {path}", path, "read")

    path = path.resolve()
    size = path.stat().st_size
    if max_size is not None and size > max_size:
        raise _fail(f"File too large: {size} bytes (max {max_size})", path, "read")

    try:
        text = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise _fail(f"Failed to read file: {exc}", path, "read", exc) from exc

    logger.debug("Read %d bytes from %s", size, path)
    return text


def safe_append_file(file_path: PathLike, content: str, *, encoding: str = "utf-8") -> None:
    """Append ``content`` to ``file_path``, creating the file and its parents.

    Output files handed out by CI runners are shared between steps, so
    existing content is always kept.

    Raises:
        FileOperationError: The path is a directory or cannot be written.
    """
    path = Path(file_path)

    if path.exists() and not path.is_file():
        raise _fail(f"Not a file: {path}", path, "append")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding=encoding) as fh:
            fh.write(content)
    except OSError as exc:
        raise _fail(f"Failed to append to file: {exc}", path, "append", exc) from exc

    logger.debug("Appended %d characters to %s", len(content), path)


def validate_path(path: PathLike, *, base_dir: Optional[PathLike] = None) -> Path:
    """Return ``path`` made absolute, optionally confined to ``base_dir``.

    The path does not need to exist.

    Raises:
        FileOperationError: ``base_dir`` is given and ``path`` resolves
            outside of it.
    """
    resolved = Path(path).expanduser().resolve(strict=False)

    if base_dir is not None:
        base = Path(base_dir).expanduser().resolve(strict=False)
        if resolved != base and base not in resolved.parents:
            raise _fail(f"Path outside allowed base directory: {resolved}", Path(path), "validate")

    return resolved
