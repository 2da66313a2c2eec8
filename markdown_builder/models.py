"""Session state types shared by the writer and the table analyzer."""

from dataclasses import dataclass
from enum import Enum, auto

from .formatting import Alignment


class WriteState(Enum):
    """Constructs that can be open on a writer's construct stack.

    Every ``write_start_*`` call pushes one member and the matching
    ``write_end_*`` call pops it.

    Attributes:
        BOLD: Inside a bold span.
        ITALIC: Inside an italic span.
        STRIKETHROUGH: Inside a strikethrough span.
        HEADING: Inside an ATX or underlined heading.
        BULLET_ITEM: Inside a bullet list item.
        ORDERED_ITEM: Inside an ordered list item.
        TASK_ITEM: Inside a task list item.
        BULLET_LIST: Inside a bullet list.
        ORDERED_LIST: Inside an ordered list.
        TASK_LIST: Inside a task list.
        BLOCK_QUOTE: Inside a block quote.
        INDENTED_CODE_BLOCK: Inside an indented code block.
        TABLE: Inside a table.
        TABLE_ROW: Inside a table row.
        TABLE_CELL: Inside a table cell.
    """

    BOLD = auto()
    ITALIC = auto()
    STRIKETHROUGH = auto()
    HEADING = auto()
    BULLET_ITEM = auto()
    ORDERED_ITEM = auto()
    TASK_ITEM = auto()
    BULLET_LIST = auto()
    ORDERED_LIST = auto()
    TASK_LIST = auto()
    BLOCK_QUOTE = auto()
    INDENTED_CODE_BLOCK = auto()
    TABLE = auto()
    TABLE_ROW = auto()
    TABLE_CELL = auto()


LIST_ITEM_STATES = frozenset(
    {WriteState.BULLET_ITEM, WriteState.ORDERED_ITEM, WriteState.TASK_ITEM}
)


@dataclass
class TableColumnInfo:
    """Measured shape of one table column.

    Attributes:
        alignment: Declared alignment of the column.
        width: Rendered width of the widest measured cell, at least 3.
        is_whitespace: Header cell rendered as whitespace only.
    """

    alignment: Alignment = Alignment.LEFT
    width: int = 0
    is_whitespace: bool = False

    def update_width_if_greater(self, width: int) -> None:
        if width > self.width:
            self.width = width
