from __future__ import annotations

import pytest

from markdown_builder.exceptions import InvalidHeadingLevelError, WriterStateError


@pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
def test_heading_levels(writer, level: int):
    writer.write_heading(level, "Title")
    assert writer.getvalue() == f"{'#' * level} Title\n"


@pytest.mark.parametrize("level", [0, 7, -1])
def test_heading_level_out_of_range(writer, level: int):
    with pytest.raises(InvalidHeadingLevelError):
        writer.write_heading(level, "Title")


def test_numbered_heading_helpers(writer):
    writer.write_heading1("a").write_heading3("b").write_heading6("c")
    assert writer.getvalue() == "# a\n\n### b\n\n###### c\n"


def test_heading_text_is_escaped(writer):
    writer.write_heading(2, "1. *intro*")
    assert writer.getvalue() == "## 1\\. \\*intro\\*\n"


def test_closed_heading(make_writer):
    writer = make_writer(close_heading=True)
    writer.write_heading(2, "Title")
    assert writer.getvalue() == "## Title ##\n"


def test_closed_heading_without_content(make_writer):
    writer = make_writer(close_heading=True)
    writer.write_heading(2)
    assert writer.getvalue() == "## \n"


def test_underlined_headings(make_writer):
    writer = make_writer(underline_heading1=True, underline_heading2=True)
    writer.write_heading(1, "Title").write_heading(2, "Sub").write_heading(3, "Deep")
    assert writer.getvalue() == "Title\n=====\n\nSub\n---\n\n### Deep\n"


def test_underline_matches_escaped_width(make_writer):
    writer = make_writer(underline_heading1=True)
    writer.write_heading(1, "a*b")
    assert writer.getvalue() == "a\\*b\n====\n"


def test_heading_without_surrounding_empty_lines(make_writer):
    writer = make_writer(empty_line_before_heading=False, empty_line_after_heading=False)
    writer.write_string("a").write_heading(2, "b").write_string("c")
    assert writer.getvalue() == "a\n## b\nc"


def test_heading_with_inline_content(writer):
    writer.write_start_heading(2)
    writer.write_string("Using ").write_inline_code("pip").write_bold(" fast")
    writer.write_end_heading()
    assert writer.getvalue() == "## Using `pip`** fast**\n"


def test_headings_cannot_nest(writer):
    writer.write_start_heading(1)
    with pytest.raises(WriterStateError):
        writer.write_start_heading(2)


def test_heading_inside_list_item_stays_on_item_line(writer):
    writer.write_start_bullet_item()
    writer.write_heading(2, "H")
    writer.write_end_bullet_item()
    assert writer.getvalue() == "- ## H\n"


def test_underlined_heading_inside_list_item(make_writer):
    writer = make_writer(underline_heading1=True)
    writer.write_start_bullet_item()
    writer.write_heading(1, "Title")
    writer.write_end_bullet_item()
    assert writer.getvalue() == "- Title\n  =====\n"
