from __future__ import annotations

import logging

import pytest

from markdown_builder.exceptions import (
    InvalidCommentError,
    InvalidContentError,
    InvalidEntityNameError,
    InvalidHeadingLevelError,
    InvalidHorizontalRuleCountError,
    InvalidItemNumberError,
    InvalidUrlError,
)
from markdown_builder.formatting import Alignment, MarkdownFormat, WriterSettings
from markdown_builder.nodes import (
    BlockQuote,
    Bold,
    BulletList,
    Comment,
    Document,
    EntityReference,
    Heading,
    HorizontalRule,
    Italic,
    Link,
    MarkdownKind,
    OrderedItem,
    Table,
    TableColumn,
    TableRow,
    Text,
)


def test_leaf_fields_are_read_only():
    text = Text("a")
    with pytest.raises(AttributeError):
        text.text = "b"


def test_leaf_structural_equality_and_hash():
    assert Text("a") == Text("a")
    assert Text("a") != Text("b")
    assert len({Text("a"), Text("a"), Text("b")}) == 2
    assert Link("a", "https://example.com") == Link("a", "https://example.com", None)


def test_leaf_with_methods_return_new_instances():
    link = Link("docs", "https://example.com")
    titled = link.with_title("Docs")

    assert link.title is None
    assert titled == Link("docs", "https://example.com", "Docs")


def test_leaf_validation():
    with pytest.raises(InvalidUrlError):
        Link("a", "https://example.com/a b")
    with pytest.raises(InvalidEntityNameError):
        EntityReference("not valid")
    with pytest.raises(InvalidCommentError):
        Comment("a--b")
    with pytest.raises(InvalidCommentError):
        Comment("trailing-")
    with pytest.raises(InvalidHorizontalRuleCountError):
        HorizontalRule(count=2)


def test_container_validation():
    with pytest.raises(InvalidHeadingLevelError):
        Heading("x", level=7)
    with pytest.raises(InvalidItemNumberError):
        OrderedItem("x", number=-1)


def test_container_rejects_unaccepted_kinds():
    with pytest.raises(InvalidContentError) as excinfo:
        Heading(BulletList("a"))
    assert str(excinfo.value) == "heading cannot contain bullet_list"

    with pytest.raises(InvalidContentError):
        Table("not a row")


def test_strings_concatenate():
    bold = Bold("a", "b", 1)
    assert bold.text_or_elements() == "ab1"
    assert list(bold.elements()) == [Text("ab1")]


def test_rows_keep_strings_separate():
    row = TableRow("a", "b")
    assert list(row.elements()) == [Text("a"), Text("b")]


def test_add_flattens_iterables_and_ignores_none():
    italic = Italic(["a", None, ("b", Bold("c"))])
    assert list(italic.elements()) == [Text("ab"), Bold("c")]


def test_add_rejects_bytes():
    italic = Italic("a")
    with pytest.raises(TypeError):
        italic.add(b"x")
    assert italic.to_string() == "*a*"


def test_node_navigation():
    heading = Heading("a")
    text = Text("b")
    document = Document(heading, text)

    assert heading.parent is document
    assert heading.document is document
    assert heading.next_element is text
    assert text.previous_element is heading
    assert heading.previous_element is None
    assert text.next_element is None
    assert document.first_element is heading
    assert document.last_element is text
    assert list(heading.elements_after_self()) == [text]
    assert list(text.elements_before_self()) == [heading]


def test_ancestors_from_parent_to_root():
    bold = Bold("b")
    heading = Heading(bold)
    document = Document(heading)
    text = bold.first_element

    ancestors = list(text.ancestors())
    assert len(ancestors) == 3
    assert ancestors[0] is bold
    assert ancestors[1] is heading
    assert ancestors[2] is document


def test_descendants_in_pre_order():
    document = Document(Heading("a", Bold("b")), BulletList("c"))

    kinds = [node.kind for node in document.descendants()]
    assert kinds == [
        MarkdownKind.HEADING,
        MarkdownKind.TEXT,
        MarkdownKind.BOLD,
        MarkdownKind.TEXT,
        MarkdownKind.BULLET_LIST,
        MarkdownKind.TEXT,
    ]
    assert next(document.descendants_and_self()) is document


def test_attached_node_is_cloned_on_reparent(caplog):
    text = Text("a")
    first = Bold(text)

    with caplog.at_level(logging.DEBUG, logger="markdown_builder.nodes"):
        second = Italic(text)

    assert first.first_element is text
    assert second.first_element is not text
    assert second.first_element == text
    assert second.first_element.parent is second
    assert "Cloning text node" in caplog.text


def test_adding_tree_root_to_itself_adds_a_clone():
    bold = Bold("x")
    bold.add(bold)

    children = list(bold.elements())
    assert len(children) == 2
    assert children[1] is not bold
    assert children[1] == Bold("x")


def test_remove_detaches_node():
    heading = Heading("a")
    document = Document(heading, Text("b"))

    heading.remove()

    assert heading.parent is None
    assert document.first_element == Text("b")


def test_remove_without_parent_raises():
    with pytest.raises(ValueError):
        Text("a").remove()


def test_remove_all_and_is_empty():
    document = Document(Heading("a"), "b")
    child = document.first_element

    document.remove_all()

    assert document.is_empty
    assert child.parent is None
    assert Document().is_empty


def test_clone_is_deep_and_detached():
    document = Document(Heading("a", Bold("b")))
    other = document.clone()

    assert other == document
    assert other.first_element is not document.first_element
    assert other.first_element.parent is other
    assert other.parent is None


def test_container_equality_includes_own_values():
    assert Heading("a", level=1) != Heading("a", level=2)
    assert TableColumn("a", alignment="right") == TableColumn("a", alignment=Alignment.RIGHT)
    assert Bold("a") != Italic("a")


def test_containers_are_unhashable():
    with pytest.raises(TypeError):
        hash(Bold("a"))


def test_with_level_returns_copy():
    heading = Heading("a")
    second = heading.with_level(2)

    assert heading.level == 1
    assert second.level == 2
    assert second.to_string() == "## a\n"


def test_to_string_accepts_format_or_settings():
    bold = Bold("a")
    markdown_format = MarkdownFormat(bold_style="underscore")

    assert bold.to_string() == "**a**"
    assert str(bold) == "**a**"
    assert bold.to_string(markdown_format) == "__a__"
    assert bold.to_string(WriterSettings(format=markdown_format)) == "__a__"


def test_block_quote_accepts_blocks():
    quote = BlockQuote(Heading("a"), BulletList("b"))
    assert quote.to_string() == "> # a\n>\n> - b\n"
