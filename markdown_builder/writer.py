"""Streaming Markdown writer.

The writer turns write calls, or a document tree rendering itself, into
escaped and indented Markdown text. Line breaks are deferred: a construct
that ends a line only records it, and the next write emits the queued line
break or empty line first. Empty lines are therefore never duplicated.
"""

from __future__ import annotations

import io
import logging
import re
from collections.abc import Callable, Iterable
from typing import TextIO

from . import escaping
from .exceptions import WriterStateError
from .formatting import (
    DEFAULT_SETTINGS,
    Alignment,
    HorizontalRuleFormat,
    HorizontalRuleStyle,
    MarkdownFormat,
    WriterSettings,
)
from .models import LIST_ITEM_STATES, TableColumnInfo, WriteState
from .nodes import (
    Node,
    check_comment,
    check_entity_name,
    check_heading_level,
    check_item_number,
    check_url,
)
from .table import analyze_table, row_cells

logger = logging.getLogger(__name__)

STRIKETHROUGH_DELIMITER = "~~"
CODE_DELIMITER = "`"
BLOCK_QUOTE_START = "> "
TABLE_DELIMITER = "|"
CODE_BLOCK_INDENT = "    "

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class MarkdownWriter:
    """Base class of Markdown writers.

    Subclasses supply the output sink through `_write_core` and `length`.
    Every public write method returns the writer so calls can be chained.

    Args:
        settings: Writer settings. Defaults apply when None.

    Examples:
        writer = MarkdownWriter.create()
        writer.write_heading(1, "Title").write_string("hello")
        writer.write_line_if_necessary()
        writer.getvalue()  # "# Title\\n\\nhello\\n"
    """

    def __init__(self, settings: WriterSettings | None = None):
        self.settings = settings or DEFAULT_SETTINGS
        self._closed = False
        self._reset_state()

    @staticmethod
    def create(output=None, settings: WriterSettings | None = None) -> MarkdownWriter:
        """Create a writer for an output target.

        Args:
            output: None for an in-memory string writer, a byte stream (encoded
                with ``settings.encoding``), or a text stream.
            settings: Writer settings. Defaults apply when None.

        Returns:
            MarkdownWriter: A string writer or a text writer.
        """
        if output is None:
            return MarkdownStringWriter(settings)
        if isinstance(output, (io.RawIOBase, io.BufferedIOBase)):
            return MarkdownTextWriter.for_binary_stream(output, settings)
        return MarkdownTextWriter(output, settings)

    def _reset_state(self) -> None:
        self._states: list[WriteState] = []
        self._start_of_document = True
        self._start_of_line = True
        self._empty_line = False
        self._pending_empty_line = False
        self._item_start_length = -1
        self._heading: tuple[int, bool, int] | None = None
        self._columns: list[TableColumnInfo] = []
        self._column_index = 0
        self._column_count = 0
        self._row_index = 0
        self._cell_start = 0

    @property
    def format(self) -> MarkdownFormat:
        return self.settings.format

    @property
    def states(self) -> tuple[WriteState, ...]:
        """Open constructs, outermost first."""
        return tuple(self._states)

    @property
    def quote_level(self) -> int:
        return self._states.count(WriteState.BLOCK_QUOTE)

    @property
    def list_level(self) -> int:
        return sum(1 for state in self._states if state in LIST_ITEM_STATES)

    @property
    def columns(self) -> list[TableColumnInfo]:
        """Columns of the open table; empty outside a table."""
        return list(self._columns)

    @property
    def column_index(self) -> int:
        return self._column_index

    @property
    def column_count(self) -> int:
        return self._column_count

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def length(self) -> int:
        """Number of characters written so far."""
        raise NotImplementedError

    def _write_core(self, text: str) -> None:
        raise NotImplementedError

    def flush(self) -> None:
        pass

    def close(self) -> None:
        """Flush the output and reject further writes."""
        if self._closed:
            return
        self.flush()
        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    # Construct stack

    def _check_open(self) -> None:
        if self._closed:
            raise WriterStateError("Cannot write to a closed writer")

    def _push_state(self, state: WriteState) -> None:
        self._check_open()
        self._states.append(state)

    def _pop_state(self, state: WriteState) -> None:
        self._check_open()
        if not self._states:
            raise WriterStateError(f"Cannot end {state.name}: no construct is open")
        if self._states[-1] is not state:
            raise WriterStateError(
                f"Cannot end {state.name}: {self._states[-1].name} is open"
            )
        self._states.pop()

    def _require_state(self, state: WriteState) -> None:
        if not self._states or self._states[-1] is not state:
            raise WriterStateError(f"{state.name} is not the innermost open construct")

    def _in_list_item(self) -> bool:
        return any(state in LIST_ITEM_STATES for state in self._states)

    def _at_item_start(self) -> bool:
        return (
            not self._start_of_line
            and self.length == self._item_start_length
            and bool(self._states)
            and self._states[-1] in LIST_ITEM_STATES
        )

    # Line management

    def _append(self, text: str) -> None:
        self._check_open()
        if text:
            self._write_core(text)

    def _indentation(self) -> str:
        # Quote markers always come before list indents, whatever the nesting.
        indentation = BLOCK_QUOTE_START * self.quote_level
        indentation += self.format.indent_chars * self.list_level
        if WriteState.INDENTED_CODE_BLOCK in self._states:
            indentation += CODE_BLOCK_INDENT
        return indentation

    def _before_write(self) -> None:
        self._check_open()
        if self._pending_empty_line:
            self.write_line()

        if self._start_of_line:
            self._append(self._indentation())
            self._start_of_document = False
            self._start_of_line = False
            self._empty_line = False

    def _write_new_line(self, new_line: str) -> None:
        if self._start_of_line:
            self._append(self._indentation().rstrip())
        self._append(new_line)
        self._after_write_line()

    def _after_write_line(self) -> None:
        self._pending_empty_line = False
        if self._start_of_line:
            self._empty_line = True
        else:
            self._start_of_line = True

    def _write_syntax(self, text: str) -> None:
        self._before_write()
        self._append(text)

    def _write_text(
        self,
        value: str | None,
        predicate: Callable[[str], bool],
        escape_char: str = escaping.ESCAPE_CHAR,
    ) -> None:
        if not value:
            return

        replace = self.settings.replaces_new_lines
        position = 0
        for match in _LINE_BREAK.finditer(value):
            self._write_segment(value[position : match.start()], predicate, escape_char)
            self._write_new_line(self.settings.new_line_chars if replace else match.group())
            position = match.end()
        self._write_segment(value[position:], predicate, escape_char)

    def _write_segment(self, segment: str, predicate, escape_char: str) -> None:
        if segment:
            self._before_write()
            self._append(escaping.escape(segment, predicate, escape_char))

    def _text_predicate(self) -> Callable[[str], bool]:
        if WriteState.TABLE_CELL in self._states:
            return escaping.should_be_escaped_in_table_cell
        return escaping.should_be_escaped

    def _write_block_start(self, empty_line: bool) -> None:
        self.write_line_if_necessary()
        if empty_line:
            self._write_empty_line()

    def _write_empty_line(self) -> None:
        if not (self._start_of_document or self._empty_line):
            self.write_line()

    def write_line(self, value=None) -> MarkdownWriter:
        """Write `value` (if any), then end the current line."""
        self._check_open()
        if value is not None:
            self.write(value)
        self._write_new_line(self.settings.new_line_chars)
        return self

    def write_line_if_necessary(self) -> MarkdownWriter:
        """End the current line unless the writer is already at a line start."""
        self._check_open()
        if not self._start_of_line:
            self.write_line()
        return self

    def write_empty_line(self) -> MarkdownWriter:
        """Make sure the output ends with an empty line.

        Nothing is written at the start of the document or when the previous
        line is already empty.
        """
        self.write_line_if_necessary()
        self._write_empty_line()
        return self

    # Text

    def write(self, value) -> MarkdownWriter:
        """Write any value.

        Args:
            value: A node (rendered through `Node.write_to`), a string
                (escaped), None (ignored), an iterable of values (written in
                order), or any other object (written as escaped ``str(value)``).

        Returns:
            MarkdownWriter: This writer.

        Raises:
            TypeError: If `value` is bytes; decode it first.
        """
        self._check_open()
        if value is None:
            return self
        if isinstance(value, Node):
            value.write_to(self)
        elif isinstance(value, str):
            self.write_string(value)
        elif isinstance(value, (bytes, bytearray)):
            raise TypeError("Cannot write bytes, decode them to str first")
        elif isinstance(value, Iterable):
            for item in value:
                self.write(item)
        else:
            self.write_string(str(value))
        return self

    def write_string(self, text: str | None, escape: bool = True) -> MarkdownWriter:
        self._check_open()
        if escape:
            self._write_text(text, self._text_predicate())
        else:
            self._write_text(text, escaping.never_escaped)
        return self

    def write_raw(self, text: str | None) -> MarkdownWriter:
        """Write text verbatim; only line breaks are processed."""
        self._check_open()
        self._write_text(text, escaping.never_escaped)
        return self

    # Inline constructs

    def _write_delimited(self, state: WriteState, delimiter: str, content) -> MarkdownWriter:
        if state in self._states:
            return self.write(content)

        self._write_syntax(delimiter)
        self._push_state(state)
        self.write(content)
        self._pop_state(state)
        self._write_syntax(delimiter)
        return self

    def write_bold(self, *content) -> MarkdownWriter:
        """Write content between bold delimiters.

        Content written while a bold span is already open gets no extra
        delimiters.
        """
        return self._write_delimited(WriteState.BOLD, self.format.bold_delimiter, content)

    def write_start_bold(self) -> MarkdownWriter:
        self._write_syntax(self.format.bold_delimiter)
        self._push_state(WriteState.BOLD)
        return self

    def write_end_bold(self) -> MarkdownWriter:
        self._pop_state(WriteState.BOLD)
        self._write_syntax(self.format.bold_delimiter)
        return self

    def write_italic(self, *content) -> MarkdownWriter:
        return self._write_delimited(WriteState.ITALIC, self.format.italic_delimiter, content)

    def write_start_italic(self) -> MarkdownWriter:
        self._write_syntax(self.format.italic_delimiter)
        self._push_state(WriteState.ITALIC)
        return self

    def write_end_italic(self) -> MarkdownWriter:
        self._pop_state(WriteState.ITALIC)
        self._write_syntax(self.format.italic_delimiter)
        return self

    def write_strikethrough(self, *content) -> MarkdownWriter:
        return self._write_delimited(WriteState.STRIKETHROUGH, STRIKETHROUGH_DELIMITER, content)

    def write_start_strikethrough(self) -> MarkdownWriter:
        self._write_syntax(STRIKETHROUGH_DELIMITER)
        self._push_state(WriteState.STRIKETHROUGH)
        return self

    def write_end_strikethrough(self) -> MarkdownWriter:
        self._pop_state(WriteState.STRIKETHROUGH)
        self._write_syntax(STRIKETHROUGH_DELIMITER)
        return self

    def write_inline_code(self, text: str | None) -> MarkdownWriter:
        """Write a code span.

        Backticks inside the text are escaped. A space pads the text when it
        starts or ends with a backtick.

        Examples:
            writer.write_inline_code("a`b")  # `a\\`b`
        """
        self._write_syntax(CODE_DELIMITER)
        if text:
            if text[0] == CODE_DELIMITER:
                self._write_syntax(" ")
            self._write_text(text, escaping.should_be_escaped_in_inline_code)
            if text[-1] == CODE_DELIMITER:
                self._write_syntax(" ")
        self._write_syntax(CODE_DELIMITER)
        return self

    # Headings

    def write_heading(self, level: int, *content) -> MarkdownWriter:
        """Write a heading.

        Args:
            level: Heading level from 1 to 6.
            *content: Inline content of the heading.

        Returns:
            MarkdownWriter: This writer.

        Raises:
            InvalidHeadingLevelError: If `level` is not in range from 1 to 6.
        """
        self.write_start_heading(level)
        self.write(content)
        return self.write_end_heading()

    def write_heading1(self, *content) -> MarkdownWriter:
        return self.write_heading(1, content)

    def write_heading2(self, *content) -> MarkdownWriter:
        return self.write_heading(2, content)

    def write_heading3(self, *content) -> MarkdownWriter:
        return self.write_heading(3, content)

    def write_heading4(self, *content) -> MarkdownWriter:
        return self.write_heading(4, content)

    def write_heading5(self, *content) -> MarkdownWriter:
        return self.write_heading(5, content)

    def write_heading6(self, *content) -> MarkdownWriter:
        return self.write_heading(6, content)

    def write_start_heading(self, level: int) -> MarkdownWriter:
        check_heading_level(level)
        if WriteState.HEADING in self._states:
            raise WriterStateError("Headings cannot be nested")

        markdown_format = self.format
        underline = (level == 1 and markdown_format.underline_heading1) or (
            level == 2 and markdown_format.underline_heading2
        )

        # A heading opened right after a list item prefix stays on the item's line.
        if not self._at_item_start():
            self._write_block_start(markdown_format.empty_line_before_heading)

        if underline:
            self._before_write()
        else:
            self._write_syntax(markdown_format.heading_start_char * level + " ")

        self._push_state(WriteState.HEADING)
        self._heading = (level, underline, self.length)
        return self

    def write_end_heading(self) -> MarkdownWriter:
        self._pop_state(WriteState.HEADING)
        level, underline, start = self._heading
        self._heading = None

        markdown_format = self.format
        length = self.length - start

        if length > 0 and not underline and markdown_format.close_heading:
            self._write_syntax(" " + markdown_format.heading_start_char * level)

        self.write_line_if_necessary()

        if underline and length > 0:
            self._write_syntax(("=" if level == 1 else "-") * length)
            self.write_line()

        if markdown_format.empty_line_after_heading:
            self._pending_empty_line = True
        return self

    # Lists

    def _write_start_item(self, state: WriteState, prefix: str) -> MarkdownWriter:
        self.write_line_if_necessary()
        self._write_syntax(prefix)
        self._item_start_length = self.length
        self._push_state(state)
        return self

    def _write_end_item(self, state: WriteState) -> MarkdownWriter:
        self._pop_state(state)
        self.write_line_if_necessary()
        return self

    def write_bullet_item(self, *content) -> MarkdownWriter:
        self.write_start_bullet_item()
        self.write(content)
        return self.write_end_bullet_item()

    def write_start_bullet_item(self) -> MarkdownWriter:
        return self._write_start_item(WriteState.BULLET_ITEM, self.format.list_item_start)

    def write_end_bullet_item(self) -> MarkdownWriter:
        return self._write_end_item(WriteState.BULLET_ITEM)

    def write_ordered_item(self, number: int, *content) -> MarkdownWriter:
        """Write an ordered list item such as ``1. text``.

        Raises:
            InvalidItemNumberError: If `number` is negative.
        """
        self.write_start_ordered_item(number)
        self.write(content)
        return self.write_end_ordered_item()

    def write_start_ordered_item(self, number: int) -> MarkdownWriter:
        check_item_number(number)
        return self._write_start_item(
            WriteState.ORDERED_ITEM, self.format.ordered_list_item_start(number)
        )

    def write_end_ordered_item(self) -> MarkdownWriter:
        return self._write_end_item(WriteState.ORDERED_ITEM)

    def write_task_item(self, *content, is_completed: bool = False) -> MarkdownWriter:
        self.write_start_task_item(is_completed)
        self.write(content)
        return self.write_end_task_item()

    def write_completed_task_item(self, *content) -> MarkdownWriter:
        return self.write_task_item(content, is_completed=True)

    def write_start_task_item(self, is_completed: bool = False) -> MarkdownWriter:
        return self._write_start_item(
            WriteState.TASK_ITEM, self.format.task_list_item_start(is_completed)
        )

    def write_end_task_item(self) -> MarkdownWriter:
        return self._write_end_item(WriteState.TASK_ITEM)

    def _write_start_list(self, state: WriteState) -> MarkdownWriter:
        nested = self._in_list_item()
        self.write_line_if_necessary()
        if not nested:
            self._write_empty_line()
        self._push_state(state)
        return self

    def _write_end_list(self, state: WriteState) -> MarkdownWriter:
        self._pop_state(state)
        self.write_line_if_necessary()
        if not self._in_list_item():
            self._pending_empty_line = True
        return self

    def write_start_bullet_list(self) -> MarkdownWriter:
        return self._write_start_list(WriteState.BULLET_LIST)

    def write_end_bullet_list(self) -> MarkdownWriter:
        return self._write_end_list(WriteState.BULLET_LIST)

    def write_start_ordered_list(self) -> MarkdownWriter:
        return self._write_start_list(WriteState.ORDERED_LIST)

    def write_end_ordered_list(self) -> MarkdownWriter:
        return self._write_end_list(WriteState.ORDERED_LIST)

    def write_start_task_list(self) -> MarkdownWriter:
        return self._write_start_list(WriteState.TASK_LIST)

    def write_end_task_list(self) -> MarkdownWriter:
        return self._write_end_list(WriteState.TASK_LIST)

    # Block quotes

    def write_block_quote(self, *content) -> MarkdownWriter:
        self.write_start_block_quote()
        self.write(content)
        return self.write_end_block_quote()

    def write_start_block_quote(self) -> MarkdownWriter:
        """Open a block quote.

        A quote opened directly after a list item prefix starts on the item's
        line.
        """
        if self._at_item_start():
            self._push_state(WriteState.BLOCK_QUOTE)
            self._write_syntax(BLOCK_QUOTE_START)
            return self

        self._write_block_start(True)
        self._push_state(WriteState.BLOCK_QUOTE)
        return self

    def write_end_block_quote(self) -> MarkdownWriter:
        self._pop_state(WriteState.BLOCK_QUOTE)
        self.write_line_if_necessary()
        self._pending_empty_line = True
        return self

    # Code blocks

    def write_fenced_code_block(self, text: str | None, info: str | None = None) -> MarkdownWriter:
        """Write a fenced code block.

        Args:
            text: Code written verbatim.
            info: Optional info string written after the opening fence.

        Returns:
            MarkdownWriter: This writer.
        """
        markdown_format = self.format
        fence = markdown_format.code_fence

        self._write_block_start(markdown_format.empty_line_before_code_block)
        self._write_syntax(fence)
        self.write_raw(info)
        self.write_line()

        self.write_raw(text)
        self.write_line_if_necessary()

        self._write_syntax(fence)
        self.write_line()

        if markdown_format.empty_line_after_code_block:
            self._pending_empty_line = True
        return self

    def write_indented_code_block(self, text: str | None) -> MarkdownWriter:
        markdown_format = self.format

        self._write_block_start(markdown_format.empty_line_before_code_block)
        self._push_state(WriteState.INDENTED_CODE_BLOCK)
        self.write_raw(text)
        self.write_line_if_necessary()
        self._pop_state(WriteState.INDENTED_CODE_BLOCK)

        if markdown_format.empty_line_after_code_block:
            self._pending_empty_line = True
        return self

    # Links

    def _write_square_brackets(self, value: str | None) -> None:
        self._write_syntax("[")
        self._write_text(value, escaping.should_be_escaped_in_link_text)
        self._write_syntax("]")

    def _write_angle_brackets(self, value: str | None) -> None:
        self._write_syntax("<")
        self._write_text(value, escaping.should_be_escaped_in_angle_brackets)
        self._write_syntax(">")

    def _write_link_title(self, title: str | None) -> None:
        if title:
            self._write_syntax(' "')
            self._write_text(title, escaping.should_be_escaped_in_link_title)
            self._write_syntax('"')

    def _write_link_core(self, text: str, url: str, title: str | None) -> None:
        self._write_square_brackets(text)
        self._write_syntax("(")
        self._write_text(url, escaping.should_be_escaped_in_link_url)
        self._write_link_title(title)
        self._write_syntax(")")

    def write_link(self, text: str, url: str, title: str | None = None) -> MarkdownWriter:
        """Write an inline link ``[text](url "title")``.

        Raises:
            InvalidUrlError: If `url` contains whitespace.
        """
        check_url(url)
        self._write_link_core(text, url, title)
        return self

    def write_image(self, text: str, url: str, title: str | None = None) -> MarkdownWriter:
        check_url(url)
        self._write_syntax("!")
        self._write_link_core(text, url, title)
        return self

    def write_link_or_text(
        self, text: str, url: str | None = None, title: str | None = None
    ) -> MarkdownWriter:
        """Write a link when `url` is set, otherwise escaped text."""
        if not url:
            return self.write_string(text)
        return self.write_link(text, url, title)

    def write_autolink(self, url: str) -> MarkdownWriter:
        check_url(url)
        self._write_angle_brackets(url)
        return self

    def write_link_reference(self, text: str, label: str | None = None) -> MarkdownWriter:
        self._write_square_brackets(text)
        self._write_square_brackets(label)
        return self

    def write_image_reference(self, text: str, label: str | None = None) -> MarkdownWriter:
        self._write_syntax("!")
        return self.write_link_reference(text, label)

    def write_label(self, label: str, url: str, title: str | None = None) -> MarkdownWriter:
        """Write a link reference definition ``[label]: <url> "title"`` on its own line."""
        check_url(url)
        self.write_line_if_necessary()
        self._write_square_brackets(label)
        self._write_syntax(": ")
        self._write_angle_brackets(url)
        self._write_link_title(title)
        self.write_line_if_necessary()
        return self

    # Other leaves

    def write_horizontal_rule(
        self,
        style: HorizontalRuleStyle | str | None = None,
        count: int | None = None,
        space: str | None = None,
    ) -> MarkdownWriter:
        """Write a horizontal rule on its own line.

        Unset arguments fall back to the format's horizontal rule.

        Raises:
            InvalidHorizontalRuleCountError: If `count` is less than 3.
        """
        default = self.format.horizontal_rule
        rule = HorizontalRuleFormat(
            style=default.style if style is None else style,
            count=default.count if count is None else count,
            space=default.space if space is None else space,
        )

        self._write_block_start(True)
        self._write_syntax(rule.space.join(rule.char for _ in range(rule.count)))
        self.write_line()
        return self

    def write_char_reference(self, number: int) -> MarkdownWriter:
        self._write_syntax(f"&#{self.format.format_char_reference(number)};")
        return self

    def write_entity_reference(self, name: str) -> MarkdownWriter:
        """Write a named entity reference such as ``&copy;``.

        Raises:
            InvalidEntityNameError: If `name` is empty or not alphanumeric.
        """
        check_entity_name(name)
        self._write_syntax(f"&{name};")
        return self

    def write_comment(self, text: str) -> MarkdownWriter:
        """Write an HTML comment.

        Raises:
            InvalidCommentError: If `text` contains ``--`` or ends with ``-``.
        """
        check_comment(text)
        self._write_syntax("<!-- ")
        self.write_raw(text)
        self._write_syntax(" -->")
        return self

    # Tables

    def write_table(self, rows: Iterable) -> MarkdownWriter:
        """Write a table whose first row is the header.

        Args:
            rows: Rows accepted by `write_table_row`. An empty sequence writes
                nothing.

        Returns:
            MarkdownWriter: This writer.
        """
        rows = list(rows)
        columns = analyze_table(rows, self.settings)
        if not columns:
            return self

        self.write_start_table(columns)
        self.write_table_row(rows[0])
        self.write_table_header_separator()
        for row in rows[1:]:
            self.write_table_row(row)
        return self.write_end_table()

    def write_start_table(self, columns: Iterable[TableColumnInfo]) -> MarkdownWriter:
        if WriteState.TABLE in self._states:
            raise WriterStateError("Tables cannot be nested")

        self._write_block_start(self.format.empty_line_before_table)
        self._push_state(WriteState.TABLE)
        self._columns = list(columns)
        self._column_count = len(self._columns)
        self._column_index = 0
        self._row_index = 0
        return self

    def write_end_table(self) -> MarkdownWriter:
        self._pop_state(WriteState.TABLE)
        self.write_line_if_necessary()
        self._columns = []
        self._column_count = 0
        self._column_index = 0
        self._row_index = 0

        if self.format.empty_line_after_table:
            self._pending_empty_line = True
        return self

    def write_table_row(self, row) -> MarkdownWriter:
        """Write one table row inside an open table.

        Missing trailing cells are written blank; cells beyond the column
        count are dropped.

        Args:
            row: A `TableRow`, an iterable of cell values, or a single value
                forming a one-cell row.

        Returns:
            MarkdownWriter: This writer.

        Raises:
            WriterStateError: If no table is open.
        """
        self.write_start_table_row()
        cells = row_cells(row)
        if len(cells) > self._column_count:
            logger.warning(
                "Dropping %d table cell(s) beyond %d column(s)",
                len(cells) - self._column_count,
                self._column_count,
            )
            cells = cells[: self._column_count]

        for cell in cells:
            self.write_start_table_cell()
            self.write_cell_content(cell)
            self.write_end_table_cell()
        return self.write_end_table_row()

    def write_start_table_row(self) -> MarkdownWriter:
        self._require_state(WriteState.TABLE)
        self.write_line_if_necessary()
        self._push_state(WriteState.TABLE_ROW)
        self._column_index = 0
        return self

    def write_end_table_row(self) -> MarkdownWriter:
        while self._column_index < self._column_count:
            self.write_start_table_cell()
            self.write_end_table_cell()

        self._pop_state(WriteState.TABLE_ROW)
        self.write_line()
        self._row_index += 1
        return self

    def write_start_table_cell(self) -> MarkdownWriter:
        self._require_state(WriteState.TABLE_ROW)
        if self._column_index >= self._column_count:
            raise WriterStateError("Table row has more cells than the table has columns")

        markdown_format = self.format
        index = self._column_index
        column = self._columns[index]
        is_header = self._row_index == 0

        if index == 0:
            if (
                markdown_format.table_outer_delimiter
                or index == self._column_count - 1
                or (is_header and column.is_whitespace)
            ):
                self._write_syntax(TABLE_DELIMITER)
        else:
            self._write_syntax(TABLE_DELIMITER)

        if markdown_format.table_padding or (
            is_header
            and markdown_format.format_table_header
            and column.alignment is Alignment.CENTER
        ):
            self._write_syntax(" ")

        self._before_write()
        self._cell_start = self.length
        self._push_state(WriteState.TABLE_CELL)
        return self

    def write_end_table_cell(self) -> MarkdownWriter:
        self._pop_state(WriteState.TABLE_CELL)

        markdown_format = self.format
        index = self._column_index
        column = self._columns[index]
        is_header = self._row_index == 0
        is_last = index == self._column_count - 1
        width = self.length - self._cell_start

        if is_header:
            if markdown_format.format_table_header:
                self._write_padding(width, max(column.width, width, 3))
                if not markdown_format.table_padding and column.alignment is not Alignment.LEFT:
                    self._write_syntax(" ")
        elif markdown_format.format_table_content:
            self._write_padding(width, column.width)

        if is_last:
            if markdown_format.table_outer_delimiter:
                self._write_table_padding()
                self._write_syntax(TABLE_DELIMITER)
            elif is_header and column.is_whitespace:
                self._write_syntax(TABLE_DELIMITER)
        else:
            self._write_table_padding()

        self._column_index += 1
        return self

    def write_cell_content(self, cell) -> int:
        """Write one cell's content in table cell context.

        Args:
            cell: Cell value; a `TableColumn` writes its content.

        Returns:
            int: Rendered width of the content.
        """
        opened = not self._states or self._states[-1] is not WriteState.TABLE_CELL
        if opened:
            self._push_state(WriteState.TABLE_CELL)

        self._before_write()
        start = self.length
        self.write(cell)

        if opened:
            self._pop_state(WriteState.TABLE_CELL)
        return self.length - start

    def write_table_header_separator(self) -> MarkdownWriter:
        """Write the separator row (``---``, ``:--``, ``:-:``, ``--:``) under the header."""
        self._require_state(WriteState.TABLE)
        self.write_line_if_necessary()

        markdown_format = self.format
        count = self._column_count

        for index, column in enumerate(self._columns):
            is_last = index == count - 1

            if index == 0:
                if markdown_format.table_outer_delimiter or is_last or column.is_whitespace:
                    self._write_syntax(TABLE_DELIMITER)
            else:
                self._write_syntax(TABLE_DELIMITER)

            if column.alignment is Alignment.CENTER:
                self._write_syntax(":")
            else:
                self._write_table_padding()

            self._write_syntax("---")
            if markdown_format.format_table_header:
                self._write_padding(3, column.width, "-")

            if column.alignment is not Alignment.LEFT:
                self._write_syntax(":")
            else:
                self._write_table_padding()

            if is_last and (markdown_format.table_outer_delimiter or column.is_whitespace):
                self._write_syntax(TABLE_DELIMITER)

        self.write_line()
        return self

    def _write_table_padding(self) -> None:
        if self.format.table_padding:
            self._write_syntax(" ")

    def _write_padding(self, width: int, total_width: int, char: str = " ") -> None:
        if total_width > width:
            self._write_syntax(char * (total_width - width))


class MarkdownStringWriter(MarkdownWriter):
    """Writer collecting output in memory.

    Examples:
        with MarkdownStringWriter() as writer:
            writer.write_bold("hi")
            writer.getvalue()  # "**hi**"
    """

    def __init__(self, settings: WriterSettings | None = None):
        super().__init__(settings)
        self._buffer = io.StringIO()
        self._length = 0

    @property
    def length(self) -> int:
        return self._length

    def _write_core(self, text: str) -> None:
        self._buffer.write(text)
        self._length += len(text)

    def getvalue(self) -> str:
        return self._buffer.getvalue()

    def clear(self) -> None:
        """Discard the output and reset the writer to its initial state."""
        self._buffer = io.StringIO()
        self._length = 0
        self._closed = False
        self._reset_state()

    def __str__(self) -> str:
        return self.getvalue()


class MarkdownTextWriter(MarkdownWriter):
    """Writer appending to a text stream.

    Args:
        stream: Text stream receiving the output.
        settings: Writer settings. With ``close_output`` set, closing the
            writer closes the stream.
    """

    def __init__(self, stream: TextIO, settings: WriterSettings | None = None):
        super().__init__(settings)
        self._stream = stream
        self._length = 0
        self._detach_on_close = False

    @classmethod
    def for_binary_stream(cls, stream, settings: WriterSettings | None = None) -> MarkdownTextWriter:
        """Create a writer encoding its output into a byte stream.

        Args:
            stream: Binary stream receiving the encoded output.
            settings: Writer settings; ``settings.encoding`` selects the codec.

        Returns:
            MarkdownTextWriter: The writer. Unless ``close_output`` is set,
            closing it leaves `stream` open.
        """
        settings = settings or DEFAULT_SETTINGS
        wrapper = io.TextIOWrapper(stream, encoding=settings.encoding, newline="")
        writer = cls(wrapper, settings)
        writer._detach_on_close = True
        return writer

    @property
    def length(self) -> int:
        return self._length

    def _write_core(self, text: str) -> None:
        self._stream.write(text)
        self._length += len(text)

    def flush(self) -> None:
        self._stream.flush()

    def close(self) -> None:
        if self._closed:
            return
        super().close()
        if self.settings.close_output:
            self._stream.close()
        elif self._detach_on_close:
            self._stream.detach()
