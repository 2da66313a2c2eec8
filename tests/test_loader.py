from __future__ import annotations

import io

import pytest

from markdown_builder.loader import LoadError, build_content, build_node, load_document, load_json
from markdown_builder.nodes import (
    Bold,
    Document,
    Heading,
    HorizontalRule,
    Italic,
    Link,
    OrderedItem,
)


def test_strings_are_text():
    assert build_content("a") == "a"
    assert build_content(3) == "3"
    assert build_content(None) is None


def test_build_node_with_options():
    assert build_node({"heading": "Title", "level": 2}) == Heading("Title", level=2)
    assert build_node({"ordered_item": "a", "number": 4}) == OrderedItem("a", number=4)
    assert build_node({"link": "docs", "url": "https://example.com"}) == Link(
        "docs", "https://example.com"
    )


def test_nested_content():
    node = build_node({"bold": ["a", {"italic": "b"}]})
    assert node.to_string() == "**a*b***"


def test_load_document_from_list():
    document = load_document([{"heading": "Title", "level": 1}, "hello"])
    assert isinstance(document, Document)
    assert document.to_string() == "# Title\n\nhello\n"


def test_load_document_from_document_object():
    document = load_document({"document": [{"bullet_list": ["a", {"bold": "b"}]}]})
    assert document.to_string() == "- a\n- **b**\n"


def test_load_table_rows_from_lists():
    document = load_document({"table": [["Name", "Age"], ["Al", 30]]})
    assert document.to_string() == "| Name | Age |\n| ---- | --- |\n| Al   | 30  |\n"


def test_load_table_with_column_objects():
    document = load_document(
        {
            "table": [
                {"table_row": [{"table_column": "a", "alignment": "right"}, "b"]},
                ["1", "2"],
            ]
        }
    )
    assert document.to_string() == "| a   | b   |\n| ---:| --- |\n| 1   | 2   |\n"


def test_load_leaves():
    assert build_node({"horizontal_rule": "asterisk", "count": 4}) == HorizontalRule(
        "asterisk", 4
    )
    assert build_node({"horizontal_rule": None}).to_string() == "- - -\n"
    assert build_node({"fenced_code_block": "x", "info": "py"}).to_string() == "```py\nx\n```\n"
    assert build_node({"char_reference": 65}).to_string() == "&#x41;"
    assert build_node({"completed_task_item": "done"}).to_string() == "- [x] done\n"
    assert build_node({"bold_italic": "x"}) == Bold(Italic("x"))


@pytest.mark.parametrize(
    "data",
    [
        {"heading": "a", "size": 2},
        {"bold": "a", "italic": "b"},
        {"unknown": "a"},
        {"heading": "a", "level": 9},
        {"link": "a", "url": "has space"},
        {"table": "not rows"},
        {"table": ["not a row"]},
        {"heading": {"bullet_list": ["a"]}},
        {"bold": True},
    ],
)
def test_invalid_nodes(data):
    with pytest.raises(LoadError):
        load_document(data)


def test_invalid_top_level_value():
    with pytest.raises(LoadError):
        load_document(True)


def test_load_json():
    document = load_json(io.StringIO('["a", {"bold": "b"}]'))
    assert document.to_string() == "a**b**\n"


def test_load_json_rejects_malformed_input():
    with pytest.raises(LoadError, match="Invalid JSON"):
        load_json(io.StringIO("{not json"))


def test_load_error_is_value_error():
    assert issubclass(LoadError, ValueError)
