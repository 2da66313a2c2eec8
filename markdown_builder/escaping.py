"""Context-aware backslash escaping for Markdown text."""

from __future__ import annotations

from collections.abc import Callable

ESCAPE_CHAR = "\\"

# Characters that may start or end Markdown syntax in regular text.
TEXT_CHARS = frozenset("\\`*_{}[]()#+-.!<")
TABLE_CELL_CHARS = TEXT_CHARS | {"|"}
INLINE_CODE_CHARS = frozenset("`")
LINK_TEXT_CHARS = frozenset("[]")
LINK_URL_CHARS = frozenset("()")
LINK_TITLE_CHARS = frozenset('"')
ANGLE_BRACKET_CHARS = frozenset("<>")


def should_be_escaped(ch: str) -> bool:
    """Return True when `ch` must be escaped in regular text."""
    return ch in TEXT_CHARS


def should_be_escaped_in_table_cell(ch: str) -> bool:
    """Return True when `ch` must be escaped inside a table cell."""
    return ch in TABLE_CELL_CHARS


def should_be_escaped_in_inline_code(ch: str) -> bool:
    """Return True when `ch` is the inline code delimiter."""
    return ch in INLINE_CODE_CHARS


def should_be_escaped_in_link_text(ch: str) -> bool:
    """Return True when `ch` must be escaped between ``[`` and ``]``."""
    return ch in LINK_TEXT_CHARS


def should_be_escaped_in_link_url(ch: str) -> bool:
    """Return True when `ch` must be escaped between ``(`` and ``)``."""
    return ch in LINK_URL_CHARS


def should_be_escaped_in_link_title(ch: str) -> bool:
    """Return True when `ch` must be escaped in a double-quoted link title."""
    return ch in LINK_TITLE_CHARS


def should_be_escaped_in_angle_brackets(ch: str) -> bool:
    """Return True when `ch` must be escaped between ``<`` and ``>``."""
    return ch in ANGLE_BRACKET_CHARS


def never_escaped(ch: str) -> bool:
    return False


def escape(
    value: str,
    predicate: Callable[[str], bool] | None = None,
    escape_char: str = ESCAPE_CHAR,
) -> str:
    r"""Insert `escape_char` before every character selected by a predicate.

    The string is scanned once. When no character needs escaping the original
    object is returned unchanged. An escape character that already precedes a
    character selected by the predicate is kept as an escaped pair, so
    escaping is idempotent: ``escape(escape(s)) == escape(s)``.

    Args:
        value: Text to escape.
        predicate: Predicate selecting characters to escape. Defaults to the
            regular text rule.
        escape_char: Character inserted before escaped characters.

    Returns:
        str: The escaped text.

    Examples:
        escape("1. item")  # "1\\. item"
        escape("[x]", should_be_escaped_in_link_text)  # "\\[x\\]"
        escape("\\*")  # "\\*" (already escaped)
    """
    positions = find_escape_positions(value, predicate or should_be_escaped, escape_char)
    if not positions:
        return value

    parts = []
    last_index = 0
    for position in positions:
        parts.append(value[last_index:position])
        parts.append(escape_char)
        last_index = position
    parts.append(value[last_index:])
    return "".join(parts)


def find_escape_positions(
    value: str,
    predicate: Callable[[str], bool],
    escape_char: str = ESCAPE_CHAR,
) -> list[int]:
    """Return the indices of characters that `escape` would prefix.

    Shares the scanning rules of `escape`, including the treatment of
    already escaped pairs, so callers that stream text piece by piece produce
    exactly the same output as `escape`.

    Args:
        value: Text to inspect.
        predicate: Predicate selecting characters to escape.
        escape_char: Escape character recognized in already escaped pairs.

    Returns:
        list[int]: Zero-based positions in ascending order.
    """
    positions = []
    length = len(value)
    i = 0

    while i < length:
        ch = value[i]

        if ch == escape_char and i + 1 < length and predicate(value[i + 1]):
            i += 2
            continue

        if predicate(ch):
            positions.append(i)

        i += 1

    return positions


def contains_whitespace(value: str) -> bool:
    """Return True when `value` contains any whitespace character."""
    return any(ch.isspace() for ch in value)


def is_alphanumeric(value: str) -> bool:
    """Return True when `value` is non-empty and made of ASCII letters and digits."""
    return bool(value) and value.isascii() and value.isalnum()


def is_whitespace(value: str) -> bool:
    """Return True when `value` is empty or holds only whitespace."""
    return not value or value.isspace()
