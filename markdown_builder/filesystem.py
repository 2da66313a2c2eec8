"""Input file checks for the markdown-builder command line."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TextIO

MAX_FILE_SIZE_ENV_VAR = "MARKDOWN_BUILDER_MAX_FILE_SIZE"
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Size limit for input files, in bytes.

    `MARKDOWN_BUILDER_MAX_FILE_SIZE` overrides `default` when set.

    Raises:
        ValueError: If the variable holds anything but a positive integer.
    """
    raw_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if raw_value is None:
        return default

    try:
        limit = int(raw_value)
    except ValueError:
        limit = 0

    if limit <= 0:
        raise ValueError(f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {raw_value!r}")
    return limit


def resolve_input(raw_path: str, extensions: tuple[str, ...]) -> Path:
    """Resolve a user-supplied input path and check its suffix.

    Args:
        raw_path: Absolute or relative path, `~` allowed.
        extensions: Accepted lowercase suffixes, dot included.

    Returns:
        Path: Absolute path to the input file.

    Raises:
        ValueError: If the file does not exist or has another suffix.

    Examples:
        resolve_input("data/people.csv", (".csv",))
    """
    path = Path(raw_path).expanduser()
    try:
        resolved = path.resolve(strict=True)
    except OSError as error:
        raise ValueError(f"{path} does not exist.") from error

    if resolved.suffix.lower() not in extensions:
        raise ValueError(
            f"{resolved} has an unsupported extension (expected {', '.join(extensions)})."
        )
    return resolved


def open_input(filepath: Path, max_size: int) -> TextIO:
    """Open an input file once it passes the size limit.

    The handle reads UTF-8 with newline translation off, as `csv` expects.

    Raises:
        IOError: If the file cannot be read or is larger than `max_size` bytes.
    """
    try:
        size = filepath.stat().st_size
    except OSError as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error

    if size > max_size:
        raise IOError(f"{filepath} exceeds the maximum allowed size of {max_size} bytes.")

    try:
        return open(filepath, encoding="utf-8", newline="")
    except OSError as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error
