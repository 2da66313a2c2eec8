"""In-memory Markdown document tree.

Nodes are either immutable leaves (text, links, code blocks, references) or
containers that own an ordered list of children. Every node renders itself
through a `MarkdownWriter`.
"""

from __future__ import annotations

import copy
import logging
import weakref
from collections.abc import Iterable, Iterator
from enum import Enum

from . import escaping
from .exceptions import (
    InvalidCommentError,
    InvalidContentError,
    InvalidEntityNameError,
    InvalidHeadingLevelError,
    InvalidHorizontalRuleCountError,
    InvalidItemNumberError,
    InvalidUrlError,
)
from .formatting import Alignment, HorizontalRuleStyle, MarkdownFormat, WriterSettings

logger = logging.getLogger(__name__)


class MarkdownKind(Enum):
    """Syntactic category of a node."""

    TEXT = "text"
    RAW = "raw"
    INLINE_CODE = "inline_code"
    LINK = "link"
    IMAGE = "image"
    AUTOLINK = "autolink"
    LINK_REFERENCE = "link_reference"
    IMAGE_REFERENCE = "image_reference"
    LABEL = "label"
    FENCED_CODE_BLOCK = "fenced_code_block"
    INDENTED_CODE_BLOCK = "indented_code_block"
    HORIZONTAL_RULE = "horizontal_rule"
    CHAR_REFERENCE = "char_reference"
    ENTITY_REFERENCE = "entity_reference"
    COMMENT = "comment"
    DOCUMENT = "document"
    INLINE = "inline"
    BOLD = "bold"
    ITALIC = "italic"
    STRIKETHROUGH = "strikethrough"
    HEADING = "heading"
    BULLET_ITEM = "bullet_item"
    ORDERED_ITEM = "ordered_item"
    TASK_ITEM = "task_item"
    BULLET_LIST = "bullet_list"
    ORDERED_LIST = "ordered_list"
    TASK_LIST = "task_list"
    BLOCK_QUOTE = "block_quote"
    TABLE = "table"
    TABLE_ROW = "table_row"
    TABLE_COLUMN = "table_column"

    def __str__(self) -> str:
        return self.value


INLINE_KINDS = frozenset(
    {
        MarkdownKind.TEXT,
        MarkdownKind.RAW,
        MarkdownKind.INLINE_CODE,
        MarkdownKind.LINK,
        MarkdownKind.IMAGE,
        MarkdownKind.AUTOLINK,
        MarkdownKind.LINK_REFERENCE,
        MarkdownKind.IMAGE_REFERENCE,
        MarkdownKind.CHAR_REFERENCE,
        MarkdownKind.ENTITY_REFERENCE,
        MarkdownKind.COMMENT,
        MarkdownKind.INLINE,
        MarkdownKind.BOLD,
        MarkdownKind.ITALIC,
        MarkdownKind.STRIKETHROUGH,
    }
)

BLOCK_KINDS = frozenset(MarkdownKind) - {
    MarkdownKind.DOCUMENT,
    MarkdownKind.TABLE_ROW,
    MarkdownKind.TABLE_COLUMN,
}


def check_url(url: str, argument: str = "url") -> str:
    if escaping.contains_whitespace(url):
        raise InvalidUrlError(argument, url)
    return url


def check_heading_level(level: int) -> int:
    if not 1 <= level <= 6:
        raise InvalidHeadingLevelError("level", level)
    return level


def check_item_number(number: int) -> int:
    if number < 0:
        raise InvalidItemNumberError("number", number)
    return number


def check_entity_name(name: str) -> str:
    if not escaping.is_alphanumeric(name):
        raise InvalidEntityNameError("name", name)
    return name


def check_comment(text: str) -> str:
    if "--" in text or text.endswith("-"):
        raise InvalidCommentError("text", text)
    return text


class Node:
    """Base class of every tree element.

    Attributes:
        kind: Syntactic category of the node.
    """

    kind: MarkdownKind

    def __init__(self):
        self._parent_ref: weakref.ref[Container] | None = None

    @property
    def parent(self) -> Container | None:
        """Container currently owning the node, if any."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def document(self) -> Document | None:
        """The `Document` at the root of the tree, if the root is one."""
        root = self
        while root.parent is not None:
            root = root.parent
        return root if isinstance(root, Document) else None

    @property
    def next_element(self) -> Node | None:
        parent = self.parent
        if parent is None:
            return None
        children = parent._content
        index = parent._index_of(self)
        return children[index + 1] if index + 1 < len(children) else None

    @property
    def previous_element(self) -> Node | None:
        parent = self.parent
        if parent is None:
            return None
        index = parent._index_of(self)
        return parent._content[index - 1] if index > 0 else None

    def ancestors(self) -> Iterator[Container]:
        """Yield the containing nodes from the parent up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def elements_after_self(self) -> Iterator[Node]:
        parent = self.parent
        if parent is None:
            return
        index = parent._index_of(self)
        yield from parent._content[index + 1 :]

    def elements_before_self(self) -> Iterator[Node]:
        parent = self.parent
        if parent is None:
            return
        index = parent._index_of(self)
        yield from parent._content[:index]

    def remove(self) -> None:
        """Detach the node from its parent.

        Raises:
            ValueError: If the node has no parent.
        """
        parent = self.parent
        if parent is None:
            raise ValueError("Node has no parent")
        parent._remove_child(self)

    def clone(self) -> Node:
        """Return a detached deep copy of the node."""
        other = copy.copy(self)
        other._parent_ref = None
        return other

    def write_to(self, writer):
        raise NotImplementedError

    def to_string(self, settings: WriterSettings | MarkdownFormat | None = None) -> str:
        """Render the node as Markdown text.

        Args:
            settings: Writer settings or a bare format. Defaults apply when
                None.

        Returns:
            str: The rendered Markdown.

        Examples:
            Bold("hello").to_string()  # "**hello**"
        """
        from .writer import MarkdownStringWriter

        if isinstance(settings, MarkdownFormat):
            settings = WriterSettings.from_format(settings)

        with MarkdownStringWriter(settings) as writer:
            self.write_to(writer)
            return writer.getvalue()

    def __str__(self) -> str:
        return self.to_string()


class Leaf(Node):
    """Immutable node defined entirely by its field values."""

    _fields: tuple[str, ...] = ()

    def __setattr__(self, name, value):
        if name in self._fields and name in self.__dict__:
            raise AttributeError(f"{type(self).__name__}.{name} is read-only")
        super().__setattr__(name, value)

    def _values(self) -> tuple:
        return tuple(getattr(self, name) for name in self._fields)

    def _replace(self, **changes):
        values = {name: getattr(self, name) for name in self._fields}
        values.update(changes)
        return type(self)(**values)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._values() == other._values()

    def __hash__(self):
        return hash((type(self), self._values()))

    def __repr__(self):
        arguments = ", ".join(f"{name}={getattr(self, name)!r}" for name in self._fields)
        return f"{type(self).__name__}({arguments})"


class Text(Leaf):
    """Plain text, escaped when written."""

    kind = MarkdownKind.TEXT
    _fields = ("text",)

    def __init__(self, text: str):
        super().__init__()
        self.text = text

    def with_text(self, text: str) -> Text:
        return self._replace(text=text)

    def write_to(self, writer):
        return writer.write_string(self.text)


class Raw(Leaf):
    """Text written verbatim, without escaping."""

    kind = MarkdownKind.RAW
    _fields = ("text",)

    def __init__(self, text: str):
        super().__init__()
        self.text = text

    def with_text(self, text: str) -> Raw:
        return self._replace(text=text)

    def write_to(self, writer):
        return writer.write_raw(self.text)


class InlineCode(Leaf):
    kind = MarkdownKind.INLINE_CODE
    _fields = ("text",)

    def __init__(self, text: str):
        super().__init__()
        self.text = text

    def with_text(self, text: str) -> InlineCode:
        return self._replace(text=text)

    def write_to(self, writer):
        return writer.write_inline_code(self.text)


class Link(Leaf):
    """Inline link ``[text](url "title")``.

    Raises:
        InvalidUrlError: If `url` contains whitespace.
    """

    kind = MarkdownKind.LINK
    _fields = ("text", "url", "title")

    def __init__(self, text: str, url: str, title: str | None = None):
        super().__init__()
        self.text = text
        self.url = check_url(url)
        self.title = title

    def with_text(self, text: str) -> Link:
        return self._replace(text=text)

    def with_url(self, url: str) -> Link:
        return self._replace(url=url)

    def with_title(self, title: str | None) -> Link:
        return self._replace(title=title)

    def write_to(self, writer):
        return writer.write_link(self.text, self.url, self.title)


class Image(Link):
    """Inline image ``![text](url "title")``."""

    kind = MarkdownKind.IMAGE

    def write_to(self, writer):
        return writer.write_image(self.text, self.url, self.title)


class Autolink(Leaf):
    kind = MarkdownKind.AUTOLINK
    _fields = ("url",)

    def __init__(self, url: str):
        super().__init__()
        self.url = check_url(url)

    def with_url(self, url: str) -> Autolink:
        return self._replace(url=url)

    def write_to(self, writer):
        return writer.write_autolink(self.url)


class LinkReference(Leaf):
    """Reference link ``[text][label]``; an empty label collapses to ``[text][]``."""

    kind = MarkdownKind.LINK_REFERENCE
    _fields = ("text", "label")

    def __init__(self, text: str, label: str | None = None):
        super().__init__()
        self.text = text
        self.label = label

    def with_text(self, text: str):
        return self._replace(text=text)

    def with_label(self, label: str | None):
        return self._replace(label=label)

    def write_to(self, writer):
        return writer.write_link_reference(self.text, self.label)


class ImageReference(LinkReference):
    kind = MarkdownKind.IMAGE_REFERENCE

    def write_to(self, writer):
        return writer.write_image_reference(self.text, self.label)


class Label(Leaf):
    """Link reference definition ``[label]: <url> "title"``."""

    kind = MarkdownKind.LABEL
    _fields = ("label", "url", "title")

    def __init__(self, label: str, url: str, title: str | None = None):
        super().__init__()
        self.label = label
        self.url = check_url(url)
        self.title = title

    def with_label(self, label: str) -> Label:
        return self._replace(label=label)

    def with_url(self, url: str) -> Label:
        return self._replace(url=url)

    def with_title(self, title: str | None) -> Label:
        return self._replace(title=title)

    def write_to(self, writer):
        return writer.write_label(self.label, self.url, self.title)


class FencedCodeBlock(Leaf):
    kind = MarkdownKind.FENCED_CODE_BLOCK
    _fields = ("text", "info")

    def __init__(self, text: str, info: str | None = None):
        super().__init__()
        self.text = text
        self.info = info

    def with_text(self, text: str) -> FencedCodeBlock:
        return self._replace(text=text)

    def with_info(self, info: str | None) -> FencedCodeBlock:
        return self._replace(info=info)

    def write_to(self, writer):
        return writer.write_fenced_code_block(self.text, self.info)


class IndentedCodeBlock(Leaf):
    kind = MarkdownKind.INDENTED_CODE_BLOCK
    _fields = ("text",)

    def __init__(self, text: str):
        super().__init__()
        self.text = text

    def with_text(self, text: str) -> IndentedCodeBlock:
        return self._replace(text=text)

    def write_to(self, writer):
        return writer.write_indented_code_block(self.text)


class HorizontalRule(Leaf):
    """Thematic break. Unset fields fall back to the writer's format.

    Raises:
        InvalidHorizontalRuleCountError: If `count` is less than 3.
    """

    kind = MarkdownKind.HORIZONTAL_RULE
    _fields = ("style", "count", "space")

    def __init__(
        self,
        style: HorizontalRuleStyle | str | None = None,
        count: int | None = None,
        space: str | None = None,
    ):
        super().__init__()
        if count is not None and count < 3:
            raise InvalidHorizontalRuleCountError("count", count)
        self.style = style
        self.count = count
        self.space = space

    def with_style(self, style: HorizontalRuleStyle | str | None) -> HorizontalRule:
        return self._replace(style=style)

    def with_count(self, count: int | None) -> HorizontalRule:
        return self._replace(count=count)

    def with_space(self, space: str | None) -> HorizontalRule:
        return self._replace(space=space)

    def write_to(self, writer):
        return writer.write_horizontal_rule(self.style, self.count, self.space)


class CharReference(Leaf):
    kind = MarkdownKind.CHAR_REFERENCE
    _fields = ("number",)

    def __init__(self, number: int):
        super().__init__()
        self.number = number

    def with_number(self, number: int) -> CharReference:
        return self._replace(number=number)

    def write_to(self, writer):
        return writer.write_char_reference(self.number)


class EntityReference(Leaf):
    """Named entity reference such as ``&nbsp;``.

    Raises:
        InvalidEntityNameError: If `name` is empty or not alphanumeric.
    """

    kind = MarkdownKind.ENTITY_REFERENCE
    _fields = ("name",)

    def __init__(self, name: str):
        super().__init__()
        self.name = check_entity_name(name)

    def with_name(self, name: str) -> EntityReference:
        return self._replace(name=name)

    def write_to(self, writer):
        return writer.write_entity_reference(self.name)


class Comment(Leaf):
    """HTML comment ``<!-- text -->``.

    Raises:
        InvalidCommentError: If `text` contains ``--`` or ends with ``-``.
    """

    kind = MarkdownKind.COMMENT
    _fields = ("text",)

    def __init__(self, text: str):
        super().__init__()
        self.text = check_comment(text)

    def with_text(self, text: str) -> Comment:
        return self._replace(text=text)

    def write_to(self, writer):
        return writer.write_comment(self.text)


class Container(Node):
    """Node that owns an ordered sequence of children.

    Content is empty, a single run of text, or a list of child nodes. The text
    run becomes a `Text` child the first time a node is appended or the
    children are enumerated.

    Attaching a node that already has a parent, or the root of this
    container's own tree, attaches a clone instead.
    """

    accepted_kinds: frozenset[MarkdownKind] = INLINE_KINDS
    allow_string_concatenation = True

    def __init__(self, *content):
        super().__init__()
        self._content: str | list[Node] | None = None
        self.add(*content)

    def add(self, *content) -> None:
        """Append content to the container.

        Args:
            *content: Nodes, strings, None (ignored), or iterables of those,
                flattened depth-first. Other values are added as ``str(value)``.

        Raises:
            InvalidContentError: If the container does not accept a node kind.
            TypeError: If an item is bytes.
        """
        for item in content:
            self._add_item(item)

    def _add_item(self, item) -> None:
        if item is None:
            return
        if isinstance(item, Node):
            self._append_node(item)
        elif isinstance(item, str):
            self._add_string(item)
        elif isinstance(item, (bytes, bytearray)):
            raise TypeError("Cannot add bytes, decode them to str first")
        elif isinstance(item, Iterable):
            for value in item:
                self._add_item(value)
        else:
            self._add_string(str(item))

    def _add_string(self, text: str) -> None:
        self.validate_kind(MarkdownKind.TEXT)

        if self._content is None:
            self._content = text
        elif isinstance(self._content, str):
            if self.allow_string_concatenation:
                self._content += text
            else:
                self._convert_text_to_element()
                self._adopt(Text(text))
        else:
            last = self._content[-1] if self._content else None
            if self.allow_string_concatenation and type(last) is Text:
                last._parent_ref = None
                self._content[-1] = Text(last.text + text)
                self._content[-1]._parent_ref = weakref.ref(self)
            else:
                self._adopt(Text(text))

    def _append_node(self, node: Node) -> None:
        self.validate_kind(node.kind)

        if node.parent is not None or node is self._root():
            logger.debug("Cloning %s node attached to %s", node.kind, self.kind)
            node = node.clone()

        self._convert_text_to_element()
        self._adopt(node)

    def _adopt(self, node: Node) -> None:
        node._parent_ref = weakref.ref(self)
        self._content.append(node)

    def _root(self) -> Node:
        root = self
        while root.parent is not None:
            root = root.parent
        return root

    def _convert_text_to_element(self) -> None:
        if self._content is None:
            self._content = []
        elif isinstance(self._content, str):
            text = self._content
            self._content = []
            self._adopt(Text(text))

    def _index_of(self, child: Node) -> int:
        for index, node in enumerate(self._content):
            if node is child:
                return index
        raise ValueError("Node is not a child of this container")

    def _remove_child(self, child: Node) -> None:
        del self._content[self._index_of(child)]
        child._parent_ref = None

    def validate_kind(self, kind: MarkdownKind) -> None:
        """Raise `InvalidContentError` unless the container accepts `kind`."""
        if kind not in self.accepted_kinds:
            raise InvalidContentError(self.kind, kind)

    def elements(self) -> Iterator[Node]:
        """Yield the direct children in insertion order."""
        self._convert_text_to_element()
        yield from list(self._content)

    def descendants(self) -> Iterator[Node]:
        """Yield every node below this one in pre-order."""
        stack = [self.elements()]
        while stack:
            for node in stack[-1]:
                yield node
                if isinstance(node, Container):
                    stack.append(node.elements())
                break
            else:
                stack.pop()

    def descendants_and_self(self) -> Iterator[Node]:
        yield self
        yield from self.descendants()

    @property
    def first_element(self) -> Node | None:
        self._convert_text_to_element()
        return self._content[0] if self._content else None

    @property
    def last_element(self) -> Node | None:
        self._convert_text_to_element()
        return self._content[-1] if self._content else None

    @property
    def is_empty(self) -> bool:
        return not self._content

    def remove_all(self) -> None:
        """Detach every child and leave the container empty."""
        if isinstance(self._content, list):
            for node in self._content:
                node._parent_ref = None
        self._content = None

    def text_or_elements(self) -> str | list[Node] | None:
        """Return the raw content: None, the text run, or the child list."""
        return self._content

    def write_content_to(self, writer):
        return writer.write(self._content)

    def clone(self) -> Container:
        other = copy.copy(self)
        other._parent_ref = None
        if isinstance(self._content, list):
            other._content = []
            for node in self._content:
                other._adopt(node.clone())
        return other

    def _own_values(self) -> tuple:
        return ()

    def _normalized_content(self) -> tuple[Node, ...]:
        if not self._content:
            return ()
        if isinstance(self._content, str):
            return (Text(self._content),)
        return tuple(self._content)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return (
            self._own_values() == other._own_values()
            and self._normalized_content() == other._normalized_content()
        )

    __hash__ = None

    def __repr__(self):
        content = ", ".join(repr(node) for node in self._normalized_content())
        return f"{type(self).__name__}({content})"


class BlockContainer(Container):
    accepted_kinds = BLOCK_KINDS


class Document(BlockContainer):
    """Root of a Markdown document."""

    kind = MarkdownKind.DOCUMENT

    def write_to(self, writer):
        writer.write(self._content)
        writer.write_line_if_necessary()
        return writer


class Inline(Container):
    """Inline content without delimiters."""

    kind = MarkdownKind.INLINE

    def write_to(self, writer):
        return writer.write(self._content)


class Bold(Container):
    kind = MarkdownKind.BOLD

    def write_to(self, writer):
        return writer.write_bold(self._content)


class Italic(Container):
    kind = MarkdownKind.ITALIC

    def write_to(self, writer):
        return writer.write_italic(self._content)


class Strikethrough(Container):
    kind = MarkdownKind.STRIKETHROUGH

    def write_to(self, writer):
        return writer.write_strikethrough(self._content)


class Heading(Container):
    """Heading with inline content.

    Raises:
        InvalidHeadingLevelError: If `level` is not in range from 1 to 6.
    """

    kind = MarkdownKind.HEADING

    def __init__(self, *content, level: int = 1):
        self.level = check_heading_level(level)
        super().__init__(*content)

    def with_level(self, level: int) -> Heading:
        other = self.clone()
        other.level = check_heading_level(level)
        return other

    def _own_values(self) -> tuple:
        return (self.level,)

    def write_to(self, writer):
        return writer.write_heading(self.level, self._content)

    def __repr__(self):
        content = ", ".join(repr(node) for node in self._normalized_content())
        return f"Heading({content}, level={self.level})"


class BulletItem(BlockContainer):
    kind = MarkdownKind.BULLET_ITEM

    def write_to(self, writer):
        return writer.write_bullet_item(self._content)


class OrderedItem(BlockContainer):
    """Ordered list item.

    Raises:
        InvalidItemNumberError: If `number` is negative.
    """

    kind = MarkdownKind.ORDERED_ITEM

    def __init__(self, *content, number: int = 1):
        self.number = check_item_number(number)
        super().__init__(*content)

    def with_number(self, number: int) -> OrderedItem:
        other = self.clone()
        other.number = check_item_number(number)
        return other

    def _own_values(self) -> tuple:
        return (self.number,)

    def write_to(self, writer):
        return writer.write_ordered_item(self.number, self._content)


class TaskItem(BlockContainer):
    kind = MarkdownKind.TASK_ITEM

    def __init__(self, *content, is_completed: bool = False):
        self.is_completed = is_completed
        super().__init__(*content)

    def with_is_completed(self, is_completed: bool) -> TaskItem:
        other = self.clone()
        other.is_completed = is_completed
        return other

    def _own_values(self) -> tuple:
        return (self.is_completed,)

    def write_to(self, writer):
        return writer.write_task_item(self._content, is_completed=self.is_completed)


class BulletList(Container):
    """Bullet list. Children that are not bullet items render as items."""

    kind = MarkdownKind.BULLET_LIST
    accepted_kinds = INLINE_KINDS | {MarkdownKind.BULLET_ITEM}
    allow_string_concatenation = False

    def write_to(self, writer):
        writer.write_start_bullet_list()
        for element in self.elements():
            if isinstance(element, BulletItem):
                writer.write_bullet_item(element.text_or_elements())
            else:
                writer.write_bullet_item(element)
        writer.write_end_bullet_list()
        return writer


class OrderedList(Container):
    """Ordered list. Children that are not ordered items are numbered in sequence."""

    kind = MarkdownKind.ORDERED_LIST
    accepted_kinds = INLINE_KINDS | {MarkdownKind.ORDERED_ITEM}
    allow_string_concatenation = False

    def write_to(self, writer):
        writer.write_start_ordered_list()
        number = 1
        for element in self.elements():
            if isinstance(element, OrderedItem):
                number = element.number
                writer.write_ordered_item(number, element.text_or_elements())
            else:
                writer.write_ordered_item(number, element)
            number += 1
        writer.write_end_ordered_list()
        return writer


class TaskList(Container):
    kind = MarkdownKind.TASK_LIST
    accepted_kinds = INLINE_KINDS | {MarkdownKind.TASK_ITEM}
    allow_string_concatenation = False

    def write_to(self, writer):
        writer.write_start_task_list()
        for element in self.elements():
            if isinstance(element, TaskItem):
                writer.write_task_item(
                    element.text_or_elements(), is_completed=element.is_completed
                )
            else:
                writer.write_task_item(element)
        writer.write_end_task_list()
        return writer


class BlockQuote(BlockContainer):
    kind = MarkdownKind.BLOCK_QUOTE

    def write_to(self, writer):
        return writer.write_block_quote(self._content)


class Table(Container):
    """Table whose first row is the header."""

    kind = MarkdownKind.TABLE
    accepted_kinds = frozenset({MarkdownKind.TABLE_ROW})

    def write_to(self, writer):
        return writer.write_table(list(self.elements()))


class TableRow(Container):
    """Table row. Every string added becomes a separate cell."""

    kind = MarkdownKind.TABLE_ROW
    accepted_kinds = INLINE_KINDS | {MarkdownKind.TABLE_COLUMN}
    allow_string_concatenation = False

    def write_to(self, writer):
        return writer.write_table_row(self)


class TableColumn(Container):
    """Table cell carrying the alignment of its column when used in the header."""

    kind = MarkdownKind.TABLE_COLUMN

    def __init__(self, *content, alignment: Alignment | str = Alignment.LEFT):
        self.alignment = Alignment(alignment)
        super().__init__(*content)

    def with_alignment(self, alignment: Alignment | str) -> TableColumn:
        other = self.clone()
        other.alignment = Alignment(alignment)
        return other

    def _own_values(self) -> tuple:
        return (self.alignment,)

    def write_to(self, writer):
        return writer.write(self._content)
