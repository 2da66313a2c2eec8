"""Format configuration: style enumerations and immutable format policies."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from enum import Enum

from .exceptions import InvalidHorizontalRuleCountError, UnknownStyleError


class EmphasisStyle(str, Enum):
    """Delimiter character used for bold and italic text."""

    ASTERISK = "asterisk"
    UNDERSCORE = "underscore"


class ListStyle(str, Enum):
    """Bullet character used for bullet and task list items."""

    ASTERISK = "asterisk"
    PLUS = "plus"
    MINUS = "minus"


class OrderedListStyle(str, Enum):
    """Character following the number of an ordered list item."""

    DOT = "dot"
    PARENTHESIS = "parenthesis"


class HeadingStyle(str, Enum):
    NUMBER_SIGN = "number_sign"


class CodeFenceStyle(str, Enum):
    BACKTICK = "backtick"
    TILDE = "tilde"


class CharReferenceFormat(str, Enum):
    """Numeral base used for numeric character references."""

    HEXADECIMAL = "hexadecimal"
    DECIMAL = "decimal"


class HorizontalRuleStyle(str, Enum):
    HYPHEN = "hyphen"
    ASTERISK = "asterisk"
    UNDERSCORE = "underscore"


class Alignment(str, Enum):
    """Table column alignment."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class NewLineHandling(str, Enum):
    """How line breaks found in written text reach the output.

    Attributes:
        REPLACE: Every line break is replaced with the configured newline.
        NONE: Line breaks are copied as written.
    """

    REPLACE = "replace"
    NONE = "none"


_EMPHASIS_CHARS = {
    EmphasisStyle.ASTERISK: "*",
    EmphasisStyle.UNDERSCORE: "_",
}

_LIST_ITEM_STARTS = {
    ListStyle.ASTERISK: "* ",
    ListStyle.PLUS: "+ ",
    ListStyle.MINUS: "- ",
}

_ORDERED_LIST_ITEM_ENDS = {
    OrderedListStyle.DOT: ". ",
    OrderedListStyle.PARENTHESIS: ") ",
}

_HEADING_START_CHARS = {
    HeadingStyle.NUMBER_SIGN: "#",
}

_CODE_FENCES = {
    CodeFenceStyle.BACKTICK: "```",
    CodeFenceStyle.TILDE: "~~~",
}

_HORIZONTAL_RULE_CHARS = {
    HorizontalRuleStyle.HYPHEN: "-",
    HorizontalRuleStyle.ASTERISK: "*",
    HorizontalRuleStyle.UNDERSCORE: "_",
}


def _resolve(enum_type: type[Enum], field_name: str, value: object) -> Enum:
    try:
        return enum_type(value)
    except ValueError as error:
        raise UnknownStyleError(field_name, value) from error


@dataclass(frozen=True)
class HorizontalRuleFormat:
    """Shape of a horizontal rule.

    Attributes:
        style: Character style of the rule.
        count: Number of rule characters; at least 3.
        space: Separator written between rule characters.

    Examples:
        HorizontalRuleFormat(HorizontalRuleStyle.ASTERISK, count=5, space="")
    """

    style: HorizontalRuleStyle | str = HorizontalRuleStyle.HYPHEN
    count: int = 3
    space: str = " "

    def __post_init__(self):
        if self.count < 3:
            raise InvalidHorizontalRuleCountError("count", self.count)

    @property
    def char(self) -> str:
        style = _resolve(HorizontalRuleStyle, "horizontal_rule.style", self.style)
        return _HORIZONTAL_RULE_CHARS[style]


@dataclass(frozen=True)
class MarkdownFormat:
    """Immutable set of style choices consumed by the writer.

    Style fields accept enum members or their string values. Unknown values
    are accepted at construction and rejected with `UnknownStyleError` only
    when the writer consumes them; call `validate_format` to check eagerly.

    Attributes:
        bold_style: Delimiter style for bold text.
        italic_style: Delimiter style for italic text.
        list_style: Bullet used by bullet and task list items.
        ordered_list_style: Character following ordered list item numbers.
        heading_style: Marker used for ATX headings.
        empty_line_before_heading: Insert an empty line before headings.
        empty_line_after_heading: Insert an empty line after headings.
        underline_heading1: Render level 1 headings underlined with ``=``.
        underline_heading2: Render level 2 headings underlined with ``-``.
        close_heading: Repeat the heading marker after the heading text.
        code_fence_style: Fence characters of fenced code blocks.
        empty_line_before_code_block: Insert an empty line before code blocks.
        empty_line_after_code_block: Insert an empty line after code blocks.
        char_reference_format: Numeral base of numeric character references.
        format_table_header: Pad header cells and size the separator row.
        format_table_content: Pad body cells to the column width.
        table_padding: Put a space between cell content and pipes.
        table_outer_delimiter: Start and end every row with a pipe.
        empty_line_before_table: Insert an empty line before tables.
        empty_line_after_table: Insert an empty line after tables.
        horizontal_rule: Default horizontal rule shape.
        indent_chars: Indentation unit owed for every open list item.

    Examples:
        MarkdownFormat().with_bold_style(EmphasisStyle.UNDERSCORE)
    """

    bold_style: EmphasisStyle | str = EmphasisStyle.ASTERISK
    italic_style: EmphasisStyle | str = EmphasisStyle.ASTERISK
    list_style: ListStyle | str = ListStyle.MINUS
    ordered_list_style: OrderedListStyle | str = OrderedListStyle.DOT
    heading_style: HeadingStyle | str = HeadingStyle.NUMBER_SIGN
    empty_line_before_heading: bool = True
    empty_line_after_heading: bool = True
    underline_heading1: bool = False
    underline_heading2: bool = False
    close_heading: bool = False
    code_fence_style: CodeFenceStyle | str = CodeFenceStyle.BACKTICK
    empty_line_before_code_block: bool = True
    empty_line_after_code_block: bool = True
    char_reference_format: CharReferenceFormat | str = CharReferenceFormat.HEXADECIMAL
    format_table_header: bool = True
    format_table_content: bool = True
    table_padding: bool = True
    table_outer_delimiter: bool = True
    empty_line_before_table: bool = True
    empty_line_after_table: bool = True
    horizontal_rule: HorizontalRuleFormat = field(default_factory=HorizontalRuleFormat)
    indent_chars: str = "  "

    @property
    def bold_delimiter(self) -> str:
        return _EMPHASIS_CHARS[_resolve(EmphasisStyle, "bold_style", self.bold_style)] * 2

    @property
    def italic_delimiter(self) -> str:
        return _EMPHASIS_CHARS[_resolve(EmphasisStyle, "italic_style", self.italic_style)]

    @property
    def alternative_bold_style(self) -> EmphasisStyle:
        return _alternative(_resolve(EmphasisStyle, "bold_style", self.bold_style))

    @property
    def alternative_italic_style(self) -> EmphasisStyle:
        return _alternative(_resolve(EmphasisStyle, "italic_style", self.italic_style))

    @property
    def list_item_start(self) -> str:
        return _LIST_ITEM_STARTS[_resolve(ListStyle, "list_style", self.list_style)]

    def ordered_list_item_start(self, number: int) -> str:
        style = _resolve(OrderedListStyle, "ordered_list_style", self.ordered_list_style)
        return f"{number}{_ORDERED_LIST_ITEM_ENDS[style]}"

    def task_list_item_start(self, is_completed: bool = False) -> str:
        return f"{self.list_item_start}[{'x' if is_completed else ' '}] "

    @property
    def heading_start_char(self) -> str:
        return _HEADING_START_CHARS[_resolve(HeadingStyle, "heading_style", self.heading_style)]

    @property
    def code_fence(self) -> str:
        return _CODE_FENCES[_resolve(CodeFenceStyle, "code_fence_style", self.code_fence_style)]

    @property
    def horizontal_rule_char(self) -> str:
        return self.horizontal_rule.char

    def format_char_reference(self, number: int) -> str:
        """Return the numeral part of a character reference (``x41`` or ``65``)."""
        reference_format = _resolve(
            CharReferenceFormat, "char_reference_format", self.char_reference_format
        )
        if reference_format is CharReferenceFormat.HEXADECIMAL:
            return f"x{number:x}"
        return str(number)

    def with_bold_style(self, bold_style: EmphasisStyle | str) -> MarkdownFormat:
        return replace(self, bold_style=bold_style)

    def with_italic_style(self, italic_style: EmphasisStyle | str) -> MarkdownFormat:
        return replace(self, italic_style=italic_style)

    def with_list_style(self, list_style: ListStyle | str) -> MarkdownFormat:
        return replace(self, list_style=list_style)

    def with_ordered_list_style(self, ordered_list_style: OrderedListStyle | str) -> MarkdownFormat:
        return replace(self, ordered_list_style=ordered_list_style)

    def with_heading_style(self, heading_style: HeadingStyle | str) -> MarkdownFormat:
        return replace(self, heading_style=heading_style)

    def with_heading_options(
        self,
        empty_line_before: bool | None = None,
        empty_line_after: bool | None = None,
        underline_heading1: bool | None = None,
        underline_heading2: bool | None = None,
        close: bool | None = None,
    ) -> MarkdownFormat:
        """Return a copy with the given heading options changed; None keeps a value."""
        return self._with_changes(
            empty_line_before_heading=empty_line_before,
            empty_line_after_heading=empty_line_after,
            underline_heading1=underline_heading1,
            underline_heading2=underline_heading2,
            close_heading=close,
        )

    def with_code_fence_style(self, code_fence_style: CodeFenceStyle | str) -> MarkdownFormat:
        return replace(self, code_fence_style=code_fence_style)

    def with_code_block_options(
        self, empty_line_before: bool | None = None, empty_line_after: bool | None = None
    ) -> MarkdownFormat:
        return self._with_changes(
            empty_line_before_code_block=empty_line_before,
            empty_line_after_code_block=empty_line_after,
        )

    def with_char_reference_format(
        self, char_reference_format: CharReferenceFormat | str
    ) -> MarkdownFormat:
        return replace(self, char_reference_format=char_reference_format)

    def with_table_options(
        self,
        format_header: bool | None = None,
        format_content: bool | None = None,
        padding: bool | None = None,
        outer_delimiter: bool | None = None,
        empty_line_before: bool | None = None,
        empty_line_after: bool | None = None,
    ) -> MarkdownFormat:
        """Return a copy with the given table options changed; None keeps a value."""
        return self._with_changes(
            format_table_header=format_header,
            format_table_content=format_content,
            table_padding=padding,
            table_outer_delimiter=outer_delimiter,
            empty_line_before_table=empty_line_before,
            empty_line_after_table=empty_line_after,
        )

    def with_horizontal_rule(self, horizontal_rule: HorizontalRuleFormat) -> MarkdownFormat:
        return replace(self, horizontal_rule=horizontal_rule)

    def with_indent_chars(self, indent_chars: str) -> MarkdownFormat:
        return replace(self, indent_chars=indent_chars)

    def _with_changes(self, **changes: object) -> MarkdownFormat:
        changes = {key: value for key, value in changes.items() if value is not None}
        if not changes:
            return self
        return replace(self, **changes)


def _alternative(style: EmphasisStyle) -> EmphasisStyle:
    if style is EmphasisStyle.ASTERISK:
        return EmphasisStyle.UNDERSCORE
    return EmphasisStyle.ASTERISK


STYLE_FIELDS: dict[str, type[Enum]] = {
    "bold_style": EmphasisStyle,
    "italic_style": EmphasisStyle,
    "list_style": ListStyle,
    "ordered_list_style": OrderedListStyle,
    "heading_style": HeadingStyle,
    "code_fence_style": CodeFenceStyle,
    "char_reference_format": CharReferenceFormat,
}


def validate_format(markdown_format: MarkdownFormat) -> None:
    """Check every style field of a format eagerly.

    Args:
        markdown_format: Format to validate.

    Returns:
        None.

    Raises:
        UnknownStyleError: If a style field holds a value outside its
            enumeration.
        TypeError: If a boolean option holds a non-boolean value.

    Examples:
        validate_format(MarkdownFormat(bold_style="underscore"))
    """
    for name, enum_type in STYLE_FIELDS.items():
        _resolve(enum_type, name, getattr(markdown_format, name))

    _resolve(
        HorizontalRuleStyle, "horizontal_rule.style", markdown_format.horizontal_rule.style
    )

    for item in fields(markdown_format):
        if item.type in ("bool", bool):
            value = getattr(markdown_format, item.name)
            if not isinstance(value, bool):
                raise TypeError(f"`{item.name}` must be a boolean")


@dataclass(frozen=True)
class WriterSettings:
    """Settings of a writer session.

    Attributes:
        format: Style choices applied by the writer.
        new_line_chars: Characters written for every line break.
        new_line_handling: How line breaks inside written text are emitted.
        encoding: Text encoding used when writing to byte streams.
        close_output: Close the underlying stream when the writer closes.
    """

    format: MarkdownFormat = field(default_factory=MarkdownFormat)
    new_line_chars: str = "\n"
    new_line_handling: NewLineHandling | str = NewLineHandling.REPLACE
    encoding: str = "utf-8"
    close_output: bool = False

    @classmethod
    def from_format(cls, markdown_format: MarkdownFormat | None) -> WriterSettings:
        if markdown_format is None:
            return DEFAULT_SETTINGS
        return cls(format=markdown_format)

    @property
    def replaces_new_lines(self) -> bool:
        handling = _resolve(NewLineHandling, "new_line_handling", self.new_line_handling)
        return handling is NewLineHandling.REPLACE


DEFAULT_FORMAT = MarkdownFormat()
DEFAULT_SETTINGS = WriterSettings(format=DEFAULT_FORMAT)
