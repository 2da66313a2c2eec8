from __future__ import annotations

import logging

import pytest

from markdown_builder import factory as md
from markdown_builder.exceptions import WriterStateError
from markdown_builder.formatting import Alignment, MarkdownFormat, WriterSettings
from markdown_builder.models import TableColumnInfo
from markdown_builder.table import (
    MIN_COLUMN_WIDTH,
    acquire_scratch_writer,
    analyze_table,
    release_scratch_writer,
    row_cells,
)


def test_simple_table(writer):
    writer.write_table([["Name", "Age"], ["Al", "30"]])
    assert writer.getvalue() == "| Name | Age |\n| ---- | --- |\n| Al   | 30  |\n"


def test_empty_table_writes_nothing(writer):
    writer.write_table([])
    assert writer.getvalue() == ""


def test_table_without_outer_pipes_and_padding(make_writer):
    writer = make_writer(table_outer_delimiter=False, table_padding=False)
    writer.write_table([["a", "b"], ["1", "2"]])
    assert writer.getvalue() == "a  |b  \n---|---\n1  |2  \n"


def test_table_without_content_formatting(make_writer):
    writer = make_writer(format_table_content=False)
    writer.write_table([["Name", "Age"], ["Albert", "30"]])
    assert writer.getvalue() == "| Name | Age |\n| ---- | --- |\n| Albert | 30 |\n"


def test_table_without_header_formatting(make_writer):
    writer = make_writer(format_table_header=False)
    writer.write_table([["a", "b"], ["12345", "2"]])
    assert writer.getvalue() == "| a | b |\n| --- | --- |\n| 12345 | 2   |\n"


def test_short_rows_are_padded(writer):
    writer.write_table([["a", "b"], ["1"]])
    assert writer.getvalue() == "| a   | b   |\n| --- | --- |\n| 1   |     |\n"


def test_extra_cells_are_dropped_with_warning(writer, caplog):
    with caplog.at_level(logging.WARNING, logger="markdown_builder.writer"):
        writer.write_table([["a"], ["1", "2"]])

    assert writer.getvalue() == "| a   |\n| --- |\n| 1   |\n"
    assert "Dropping 1 table cell(s)" in caplog.text


def test_cell_content_escapes_pipes(writer):
    writer.write_table([["a|b"], ["c"]])
    assert writer.getvalue() == "| a\\|b |\n| ---- |\n| c    |\n"


def test_aligned_columns():
    table = md.table(
        md.table_row(
            md.table_column("Name"),
            md.table_column("Age", alignment=Alignment.RIGHT),
            md.table_column("City", alignment="center"),
        ),
        md.table_row("Al", "30", "Rome"),
    )

    assert table.to_string() == (
        "| Name | Age | City |\n"
        "| ---- | ---:|:----:|\n"
        "| Al   | 30  | Rome |\n"
    )


def test_cells_with_inline_nodes(writer):
    link = "[site](https://al.example)"
    writer.write_table([[md.bold("Name"), "Link"], ["Al", md.link("site", "https://al.example")]])

    width = len(link)
    assert writer.getvalue() == (
        f"| **Name** | {'Link'.ljust(width)} |\n"
        f"| -------- | {'-' * width} |\n"
        f"| Al       | {link} |\n"
    )


def test_table_in_document_has_surrounding_empty_lines():
    document = md.document("before", md.table(md.table_row("a")), "after")
    assert document.to_string() == "before\n\n| a   |\n| --- |\n\nafter\n"


def test_tables_cannot_nest(writer):
    writer.write_start_table([TableColumnInfo()])
    with pytest.raises(WriterStateError):
        writer.write_start_table([TableColumnInfo()])


def test_row_outside_table_raises(writer):
    with pytest.raises(WriterStateError):
        writer.write_table_row(["a"])


def test_cell_outside_row_raises(writer):
    writer.write_start_table([TableColumnInfo()])
    with pytest.raises(WriterStateError):
        writer.write_start_table_cell()


def test_manual_table_protocol(writer):
    columns = [TableColumnInfo(width=3), TableColumnInfo(width=5)]
    writer.write_start_table(columns)
    writer.write_table_row(["id", "label"])
    writer.write_table_header_separator()
    writer.write_start_table_row()
    writer.write_start_table_cell()
    writer.write_string("1")
    writer.write_end_table_cell()
    writer.write_end_table_row()
    writer.write_end_table()

    assert writer.column_count == 0
    assert writer.getvalue() == "| id  | label |\n| --- | ----- |\n| 1   |       |\n"


def test_analyze_table_widths():
    columns = analyze_table([["Name", "Age"], ["Al", "30"]], WriterSettings())
    assert [column.width for column in columns] == [4, 3]
    assert [column.is_whitespace for column in columns] == [False, False]


def test_analyze_table_empty():
    assert analyze_table([], WriterSettings()) is None


def test_analyze_table_minimum_width():
    columns = analyze_table([["a"]], WriterSettings())
    assert columns[0].width == MIN_COLUMN_WIDTH


def test_analyze_table_whitespace_header():
    columns = analyze_table([["", " ", "x"]], WriterSettings())
    assert [column.is_whitespace for column in columns] == [True, True, False]


def test_analyze_table_ignores_header_when_not_formatted():
    settings = WriterSettings.from_format(MarkdownFormat(format_table_header=False))
    columns = analyze_table([["Header", "b"], ["1", "2"]], settings)
    assert [column.width for column in columns] == [3, 3]


def test_analyze_table_ignores_body_when_not_formatted():
    settings = WriterSettings.from_format(MarkdownFormat(format_table_content=False))
    columns = analyze_table([["a"], ["long value"]], settings)
    assert columns[0].width == 3


def test_analyze_table_measures_escaped_width():
    columns = analyze_table([["a*b|c"]], WriterSettings())
    assert columns[0].width == 7


def test_analyze_table_reads_alignment():
    columns = analyze_table(
        [md.table_row(md.table_column("a", alignment="center"), "b")], WriterSettings()
    )
    assert [column.alignment for column in columns] == [Alignment.CENTER, Alignment.LEFT]


def test_scratch_writer_is_reused():
    settings = WriterSettings()
    writer = acquire_scratch_writer(settings)
    writer.write_string("dirty")
    release_scratch_writer(writer)

    again = acquire_scratch_writer(settings)
    assert again is writer
    assert again.getvalue() == ""
    release_scratch_writer(again)


def test_row_cells():
    assert row_cells(["a", "b"]) == ["a", "b"]
    assert row_cells("a") == ["a"]
    assert row_cells(None) == [None]
    assert row_cells(md.table_row("a", "b")) == [md.text("a"), md.text("b")]
