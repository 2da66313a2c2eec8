"""Factory helpers for building document trees.

Usage:
    from markdown_builder import factory as md

    doc = md.document(
        md.heading1("Title"),
        md.bullet_list("first", md.bullet_item(md.bold("second"))),
    )
    print(doc.to_string())
"""

from __future__ import annotations

from collections.abc import Iterable

from .formatting import Alignment, HorizontalRuleStyle
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


def document(*content) -> Document:
    return Document(*content)


def heading(*content, level: int = 1) -> Heading:
    """Create a heading.

    Args:
        *content: Inline content of the heading.
        level: Heading level from 1 to 6.

    Returns:
        Heading: The new heading.

    Raises:
        InvalidHeadingLevelError: If `level` is not in range from 1 to 6.
    """
    return Heading(*content, level=level)


def heading1(*content) -> Heading:
    return Heading(*content, level=1)


def heading2(*content) -> Heading:
    return Heading(*content, level=2)


def heading3(*content) -> Heading:
    return Heading(*content, level=3)


def heading4(*content) -> Heading:
    return Heading(*content, level=4)


def heading5(*content) -> Heading:
    return Heading(*content, level=5)


def heading6(*content) -> Heading:
    return Heading(*content, level=6)


def bold(*content) -> Bold:
    return Bold(*content)


def italic(*content) -> Italic:
    return Italic(*content)


def strikethrough(*content) -> Strikethrough:
    return Strikethrough(*content)


def bold_italic(*content) -> Bold:
    """Create bold text wrapping italic text, rendered ``***text***`` by default."""
    return Bold(Italic(*content))


def inline(*content) -> Inline:
    return Inline(*content)


def join(separator, values: Iterable) -> Inline:
    """Join values into one inline container with a separator between them.

    Args:
        separator: Value placed between consecutive values. A node separator
            is cloned for every position after the first.
        values: Values to join.

    Returns:
        Inline: The joined content.

    Examples:
        join(", ", [bold("a"), "b"]).to_string()  # "**a**, b"
    """
    content = []
    for index, value in enumerate(values):
        if index:
            content.append(separator)
        content.append(value)
    return Inline(content)


def inline_code(text: str) -> InlineCode:
    return InlineCode(text)


def link(text: str, url: str, title: str | None = None) -> Link:
    return Link(text, url, title)


def link_or_text(text: str, url: str | None = None, title: str | None = None) -> Link | Text:
    """Return a link when `url` is set, otherwise plain text."""
    if not url:
        return Text(text)
    return Link(text, url, title)


def image(text: str, url: str, title: str | None = None) -> Image:
    return Image(text, url, title)


def autolink(url: str) -> Autolink:
    return Autolink(url)


def link_reference(text: str, label: str | None = None) -> LinkReference:
    return LinkReference(text, label)


def image_reference(text: str, label: str | None = None) -> ImageReference:
    return ImageReference(text, label)


def label(label: str, url: str, title: str | None = None) -> Label:
    return Label(label, url, title)


def bullet_item(*content) -> BulletItem:
    return BulletItem(*content)


def ordered_item(number: int, *content) -> OrderedItem:
    return OrderedItem(*content, number=number)


def task_item(*content, is_completed: bool = False) -> TaskItem:
    return TaskItem(*content, is_completed=is_completed)


def completed_task_item(*content) -> TaskItem:
    return TaskItem(*content, is_completed=True)


def bullet_list(*content) -> BulletList:
    return BulletList(*content)


def ordered_list(*content) -> OrderedList:
    return OrderedList(*content)


def task_list(*content) -> TaskList:
    return TaskList(*content)


def block_quote(*content) -> BlockQuote:
    return BlockQuote(*content)


def fenced_code_block(text: str, info: str | None = None) -> FencedCodeBlock:
    return FencedCodeBlock(text, info)


def indented_code_block(text: str) -> IndentedCodeBlock:
    return IndentedCodeBlock(text)


def horizontal_rule(
    style: HorizontalRuleStyle | str | None = None,
    count: int | None = None,
    space: str | None = None,
) -> HorizontalRule:
    return HorizontalRule(style, count, space)


def table(*rows) -> Table:
    return Table(*rows)


def table_row(*cells) -> TableRow:
    return TableRow(*cells)


def table_column(*content, alignment: Alignment | str = Alignment.LEFT) -> TableColumn:
    return TableColumn(*content, alignment=alignment)


def char_reference(number: int) -> CharReference:
    return CharReference(number)


def entity_reference(name: str) -> EntityReference:
    return EntityReference(name)


def comment(text: str) -> Comment:
    return Comment(text)


def raw(text: str) -> Raw:
    return Raw(text)


def text(value: str) -> Text:
    return Text(value)


def nbsp() -> EntityReference:
    return EntityReference("nbsp")


def lt() -> EntityReference:
    return EntityReference("lt")


def gt() -> EntityReference:
    return EntityReference("gt")


def amp() -> EntityReference:
    return EntityReference("amp")


def quot() -> EntityReference:
    return EntityReference("quot")


def reg() -> EntityReference:
    return EntityReference("reg")


def copy() -> EntityReference:
    return EntityReference("copy")
