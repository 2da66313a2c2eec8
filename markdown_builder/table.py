"""Table column width analysis.

Column widths are measured by rendering cells through a scratch writer that
shares the real writer's settings, so escaping and delimiter choices change
the measured width exactly as they change the final output.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from . import escaping
from .formatting import Alignment, WriterSettings
from .models import TableColumnInfo
from .nodes import Container, Node, TableColumn

logger = logging.getLogger(__name__)

MIN_COLUMN_WIDTH = 3

_pool = threading.local()


def acquire_scratch_writer(settings: WriterSettings):
    """Return a string writer for measurement, reusing this thread's idle one.

    Args:
        settings: Settings the scratch writer must share with the real writer.

    Returns:
        MarkdownStringWriter: An empty writer configured with `settings`.
    """
    from .writer import MarkdownStringWriter

    writer = getattr(_pool, "writer", None)
    if writer is None:
        return MarkdownStringWriter(settings)

    _pool.writer = None
    logger.debug("Reusing pooled scratch writer")
    writer.clear()
    writer.settings = settings
    return writer


def release_scratch_writer(writer) -> None:
    """Return a scratch writer to this thread's pool, which holds at most one."""
    writer.clear()
    _pool.writer = writer


def row_cells(row) -> list:
    """Return the cells of a table row.

    Args:
        row: A `TableRow` (or other container), a single node or string
            forming a one-cell row, or an iterable of cell values.

    Returns:
        list: Cell values in column order.
    """
    if isinstance(row, Container):
        return list(row.elements())
    if row is None or isinstance(row, (Node, str)):
        return [row]
    if isinstance(row, Iterable):
        return list(row)
    return [row]


def analyze_table(rows: Iterable, settings: WriterSettings) -> list[TableColumnInfo] | None:
    """Measure the width and alignment of every column of a table.

    The first row is the header. Header cells are measured when header
    formatting is enabled, otherwise header widths start at 0. Body rows are
    measured when content formatting is enabled; cells beyond the header's
    column count are ignored.

    Args:
        rows: Table rows, header first.
        settings: Settings of the writer that will render the table.

    Returns:
        list[TableColumnInfo] | None: One entry per header cell, or None when
        there are no rows.

    Examples:
        analyze_table([["Name", "Age"], ["Al", "30"]], WriterSettings())
        # widths [4, 3]
    """
    iterator = iter(rows)
    header = next(iterator, None)
    if header is None:
        return None

    markdown_format = settings.format
    writer = acquire_scratch_writer(settings)
    try:
        columns = []
        for cell in row_cells(header):
            start = writer.length
            width = writer.write_cell_content(cell)
            is_whitespace = escaping.is_whitespace(writer.getvalue()[start:])
            alignment = cell.alignment if isinstance(cell, TableColumn) else Alignment.LEFT
            columns.append(
                TableColumnInfo(
                    alignment=alignment,
                    width=width if markdown_format.format_table_header else 0,
                    is_whitespace=is_whitespace,
                )
            )

        if markdown_format.format_table_content:
            for row in iterator:
                for column, cell in zip(columns, row_cells(row)):
                    column.update_width_if_greater(writer.write_cell_content(cell))
    finally:
        release_scratch_writer(writer)

    for column in columns:
        column.update_width_if_greater(MIN_COLUMN_WIDTH)

    logger.debug("Analyzed table columns: %s", [column.width for column in columns])
    return columns
