"""Loading format configuration from TOML files."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
import tomllib

from .exceptions import InvalidHorizontalRuleCountError, UnknownStyleError
from .formatting import HorizontalRuleFormat, MarkdownFormat, validate_format

logger = logging.getLogger(__name__)

CONFIG_TABLE = "markdown-builder"
DOTFILE_NAME = ".markdown-builder.toml"


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Attributes:
        args: Arguments provided to the underlying `ValueError`.

    Examples:
        raise ConfigError("`table_padding` must be a boolean")
    """


def load_format(search_path: Path) -> MarkdownFormat:
    """Load a format from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.markdown-builder]`` table from `pyproject.toml` and the
    ``[markdown-builder]`` or ``[tool.markdown-builder]`` table from
    `.markdown-builder.toml` when present. Returns the default format when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        MarkdownFormat: Loaded format with defaults for unset fields.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_format(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_format = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", CONFIG_TABLE)]
        )
        if pyproject_format is not None:
            return pyproject_format

        dotfile_format = _load_from_file(
            current / DOTFILE_NAME,
            table_paths=[(CONFIG_TABLE,), ("tool", CONFIG_TABLE)],
        )
        if dotfile_format is not None:
            return dotfile_format

        parent = current.parent
        if parent == current:
            break
        current = parent

    return MarkdownFormat()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> MarkdownFormat | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError) as error:
        logger.debug("Skipping unreadable config file %s: %s", config_file, error)
        return None

    for table_path in table_paths:
        raw_format = _extract_table(data, table_path)
        if raw_format is _MISSING:
            continue
        logger.debug("Loading format from [%s] in %s", ".".join(table_path), config_file)
        return _build_format_from_raw(raw_format, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_format_from_raw(
    raw_format: object, config_file: Path, table_path: tuple[str, ...]
) -> MarkdownFormat:
    table_display = ".".join(table_path)

    if raw_format is None:
        return MarkdownFormat()

    if not isinstance(raw_format, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_format:
        return MarkdownFormat()

    values = dict(raw_format)
    rule = values.get("horizontal_rule")
    try:
        if isinstance(rule, dict):
            values["horizontal_rule"] = HorizontalRuleFormat(**rule)
        elif rule is not None:
            raise TypeError("horizontal_rule must be a table")
        return MarkdownFormat(**values)
    except (TypeError, InvalidHorizontalRuleCountError) as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def apply_overrides(markdown_format: MarkdownFormat, **overrides: object) -> MarkdownFormat:
    """Apply override values to a `MarkdownFormat`.

    Args:
        markdown_format: Base format to update.
        overrides: Override values keyed by format field name; values set to
            None are ignored.

    Returns:
        MarkdownFormat: New format with the provided overrides applied. The
        original format is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `MarkdownFormat`.

    Examples:
        updated = apply_overrides(markdown_format, bold_style="underscore")
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return markdown_format
    return replace(markdown_format, **changes)


def validate_config(markdown_format: MarkdownFormat) -> None:
    """Validate a loaded format eagerly.

    Args:
        markdown_format: Format to validate.

    Returns:
        None.

    Raises:
        ConfigError: If a style value is unknown, a boolean option is not a
            boolean, the indentation is empty, or the horizontal rule count is
            not an integer.

    Examples:
        validate_config(MarkdownFormat(list_style="plus"))
    """
    _ensure_integers({"horizontal_rule.count": markdown_format.horizontal_rule.count})

    if not isinstance(markdown_format.indent_chars, str) or not markdown_format.indent_chars:
        raise ConfigError("`indent_chars` must be a non-empty string")
    if not isinstance(markdown_format.horizontal_rule.space, str):
        raise ConfigError("`horizontal_rule.space` must be a string")

    try:
        validate_format(markdown_format)
    except (UnknownStyleError, TypeError) as error:
        raise ConfigError(str(error)) from error


def build_format(search_path: Path, **overrides: object) -> MarkdownFormat:
    """Load, override, and validate a format.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by format field names; None values
            are ignored.

    Returns:
        MarkdownFormat: Validated format ready for rendering.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        markdown_format = build_format(Path.cwd(), list_style="asterisk")
    """
    markdown_format = load_format(search_path)
    markdown_format = apply_overrides(markdown_format, **overrides)
    validate_config(markdown_format)
    return markdown_format


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
