"""Building document trees from JSON-like data.

A JSON string is text. A JSON array is a sequence of content. A JSON object
names its node with exactly one key and carries the node's options in the
remaining keys:

    {"heading": "Title", "level": 2}
    {"bullet_list": ["one", {"bold": "two"}]}
    {"link": "docs", "url": "https://example.com", "title": "Docs"}
    {"table": [["Name", "Age"], ["Al", "30"]]}
"""

from __future__ import annotations

import json
from typing import TextIO

from . import factory
from .exceptions import MarkdownError
from .nodes import (
    Autolink,
    BlockQuote,
    Bold,
    BulletItem,
    BulletList,
    CharReference,
    Comment,
    Document,
    EntityReference,
    FencedCodeBlock,
    Heading,
    HorizontalRule,
    Image,
    ImageReference,
    IndentedCodeBlock,
    Inline,
    InlineCode,
    Italic,
    Label,
    Link,
    LinkReference,
    Node,
    OrderedItem,
    OrderedList,
    Raw,
    Strikethrough,
    Table,
    TableColumn,
    TableRow,
    TaskItem,
    TaskList,
    Text,
)

# Node name -> (constructor, option keys). Containers receive converted content.
CONTAINER_BUILDERS = {
    "document": (Document, ()),
    "inline": (Inline, ()),
    "bold": (Bold, ()),
    "italic": (Italic, ()),
    "bold_italic": (factory.bold_italic, ()),
    "strikethrough": (Strikethrough, ()),
    "heading": (Heading, ("level",)),
    "bullet_item": (BulletItem, ()),
    "ordered_item": (OrderedItem, ("number",)),
    "task_item": (TaskItem, ("is_completed",)),
    "completed_task_item": (factory.completed_task_item, ()),
    "bullet_list": (BulletList, ()),
    "ordered_list": (OrderedList, ()),
    "task_list": (TaskList, ()),
    "block_quote": (BlockQuote, ()),
    "table_row": (TableRow, ()),
    "table_column": (TableColumn, ("alignment",)),
}

# Node name -> (constructor, option keys). Leaves receive the raw value.
LEAF_BUILDERS = {
    "text": (Text, ()),
    "raw": (Raw, ()),
    "inline_code": (InlineCode, ()),
    "link": (Link, ("url", "title")),
    "image": (Image, ("url", "title")),
    "autolink": (Autolink, ()),
    "link_reference": (LinkReference, ("label",)),
    "image_reference": (ImageReference, ("label",)),
    "label": (Label, ("url", "title")),
    "fenced_code_block": (FencedCodeBlock, ("info",)),
    "indented_code_block": (IndentedCodeBlock, ()),
    "horizontal_rule": (HorizontalRule, ("count", "space")),
    "char_reference": (CharReference, ()),
    "entity_reference": (EntityReference, ()),
    "comment": (Comment, ()),
}

NODE_NAMES = frozenset(CONTAINER_BUILDERS) | frozenset(LEAF_BUILDERS) | {"table"}


class LoadError(ValueError):
    """Raised when data does not describe a valid document tree."""


def build_content(data):
    """Convert JSON-like data into container content.

    Args:
        data: None, a string, a number, a list of content, or a node object.

    Returns:
        None, a string, a list of content, or a `Node`.

    Raises:
        LoadError: If the data contains an unsupported value or node.
    """
    if data is None or isinstance(data, str):
        return data
    if isinstance(data, bool):
        raise LoadError(f"Unsupported content value: {data!r}")
    if isinstance(data, (int, float)):
        return str(data)
    if isinstance(data, list):
        return [build_content(item) for item in data]
    if isinstance(data, dict):
        return build_node(data)
    raise LoadError(f"Unsupported content value: {data!r}")


def build_node(data: dict) -> Node:
    """Convert one node object into a `Node`.

    Raises:
        LoadError: If the object does not name exactly one node, carries
            unknown keys, or holds values the node rejects.

    Examples:
        build_node({"heading": "Title", "level": 2})
    """
    names = [key for key in data if key in NODE_NAMES]
    if len(names) != 1:
        raise LoadError(f"Expected exactly one node name in {sorted(data)}")
    name = names[0]
    value = data[name]

    if name == "table":
        options = ()
    elif name in CONTAINER_BUILDERS:
        builder, options = CONTAINER_BUILDERS[name]
    else:
        builder, options = LEAF_BUILDERS[name]

    unknown = set(data) - {name} - set(options)
    if unknown:
        raise LoadError(f"Unknown option(s) for {name!r}: {', '.join(sorted(unknown))}")
    kwargs = {option: data[option] for option in options if option in data}

    try:
        if name == "table":
            return _build_table(value)
        if name in CONTAINER_BUILDERS:
            return builder(build_content(value), **kwargs)
        return builder(value, **kwargs)
    except LoadError:
        raise
    except (MarkdownError, TypeError, ValueError) as error:
        raise LoadError(f"Invalid {name!r} node: {error}") from error


def _build_table(value) -> Table:
    if not isinstance(value, list):
        raise LoadError("A table must be a list of rows")

    rows = []
    for row in value:
        if isinstance(row, list):
            rows.append(TableRow([build_content(cell) for cell in row]))
        else:
            rows.append(build_content(row))
    return Table(rows)


def load_document(data) -> Document:
    """Build a `Document` from JSON-like data.

    A top-level ``{"document": ...}`` object is used as is; any other value
    becomes the content of a new document.

    Raises:
        LoadError: If the data does not describe a valid tree.
    """
    if isinstance(data, dict) and "document" in data:
        return build_node(data)

    try:
        return Document(build_content(data))
    except MarkdownError as error:
        raise LoadError(str(error)) from error


def load_json(stream: TextIO) -> Document:
    """Read a JSON document description from a text stream.

    Raises:
        LoadError: If the stream does not hold valid JSON or the JSON does not
            describe a valid tree.
    """
    try:
        data = json.load(stream)
    except json.JSONDecodeError as error:
        raise LoadError(f"Invalid JSON: {error}") from error
    return load_document(data)
