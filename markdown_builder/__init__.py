"""
markdown-builder: Build and serialize Markdown documents.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    markdown-builder table people.csv
    markdown-builder render document.json

Library Usage:
    from markdown_builder import factory as md

    document = md.document(
        md.heading1("Title"),
        md.bullet_list("one", md.bold("two")),
    )
    text = document.to_string()

    with MarkdownWriter.create() as writer:
        writer.write_heading(1, "Title").write_string("hello")
        writer.write_line_if_necessary()
        text = writer.getvalue()
"""

from . import factory
from .exceptions import (
    InvalidCommentError,
    InvalidContentError,
    InvalidEntityNameError,
    InvalidHeadingLevelError,
    InvalidHorizontalRuleCountError,
    InvalidItemNumberError,
    InvalidUrlError,
    MarkdownError,
    UnknownStyleError,
    ValidationError,
    WriterStateError,
)
from .formatting import (
    Alignment,
    CharReferenceFormat,
    CodeFenceStyle,
    EmphasisStyle,
    HeadingStyle,
    HorizontalRuleFormat,
    HorizontalRuleStyle,
    ListStyle,
    MarkdownFormat,
    NewLineHandling,
    OrderedListStyle,
    WriterSettings,
)
from .loader import LoadError, load_document
from .models import TableColumnInfo, WriteState
from .nodes import Container, Document, Leaf, MarkdownKind, Node
from .table import analyze_table
from .writer import MarkdownStringWriter, MarkdownTextWriter, MarkdownWriter

__version__ = "0.1.0"

__all__ = [
    # Writers
    "MarkdownWriter",
    "MarkdownStringWriter",
    "MarkdownTextWriter",
    # Document tree
    "factory",
    "Node",
    "Leaf",
    "Container",
    "Document",
    "MarkdownKind",
    "load_document",
    # Formatting
    "MarkdownFormat",
    "WriterSettings",
    "HorizontalRuleFormat",
    "EmphasisStyle",
    "ListStyle",
    "OrderedListStyle",
    "HeadingStyle",
    "CodeFenceStyle",
    "CharReferenceFormat",
    "HorizontalRuleStyle",
    "Alignment",
    "NewLineHandling",
    # Tables
    "analyze_table",
    "TableColumnInfo",
    "WriteState",
    # Exceptions
    "MarkdownError",
    "ValidationError",
    "InvalidHeadingLevelError",
    "InvalidHorizontalRuleCountError",
    "InvalidItemNumberError",
    "InvalidUrlError",
    "InvalidEntityNameError",
    "InvalidCommentError",
    "InvalidContentError",
    "WriterStateError",
    "UnknownStyleError",
    "LoadError",
    # Version
    "__version__",
]
