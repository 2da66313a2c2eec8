"""Package-specific exception types."""

from __future__ import annotations


class MarkdownError(Exception):
    """Base class for all markdown-builder errors."""


class ValidationError(MarkdownError, ValueError):
    """Raised when a caller supplies a value outside its domain.

    Args:
        argument: Name of the offending argument.
        value: The rejected value.
    """

    reason = "is invalid"

    def __init__(self, argument: str, value: object):
        self.argument = argument
        self.value = value
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return f"`{self.argument}` {self.reason} (got {self.value!r})"


class InvalidHeadingLevelError(ValidationError):
    """Raised when a heading level is not in range from 1 to 6."""

    reason = "must be in range from 1 to 6"


class InvalidHorizontalRuleCountError(ValidationError):
    """Raised when a horizontal rule has fewer than three characters."""

    reason = "cannot be less than 3"


class InvalidItemNumberError(ValidationError):
    """Raised when an ordered list item number is negative."""

    reason = "cannot be negative"


class InvalidUrlError(ValidationError):
    """Raised when a link or image URL contains whitespace."""

    reason = "cannot contain whitespace characters"


class InvalidEntityNameError(ValidationError):
    """Raised when an entity name is empty or not alphanumeric."""

    reason = "must be a non-empty alphanumeric name"


class InvalidCommentError(ValidationError):
    """Raised when comment text cannot be represented inside ``<!-- -->``."""

    reason = "cannot contain '--' or end with '-'"


class InvalidContentError(ValidationError):
    """Raised when a container does not accept a node of a given kind.

    Args:
        container: Kind of the container receiving the node.
        element: Kind of the rejected node.
    """

    def __init__(self, container: object, element: object):
        self.container = container
        super().__init__("content", element)

    def _build_message(self) -> str:
        return f"{self.container} cannot contain {self.value}"


class WriterStateError(MarkdownError, RuntimeError):
    """Raised when writer calls are made out of order or after closing."""


class UnknownStyleError(MarkdownError, ValueError):
    """Raised when a style value is not a member of its enumeration.

    Args:
        field: Format field holding the value.
        value: The unrecognized value.
    """

    def __init__(self, field: str, value: object):
        self.field = field
        self.value = value
        super().__init__(f"Unknown value {value!r} for `{field}`")
