"""Error types raised while parsing, compiling and interpreting markup."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from xaml_forge.markup.events import OpenTag

# Line breaks as XML counts them: CRLF, a lone CR or LF.
LINE_BREAK_RE = re.compile(r"\r\n?|\n")


def line_starts(text: str) -> list[int]:
    """Offsets at which each line of ``text`` begins."""
    return [0] + [match.end() for match in LINE_BREAK_RE.finditer(text)]


@dataclass(frozen=True)
class SourcePosition:
    """A location in markup text.

    ``offset`` is a 0-based character index, ``line`` and ``column`` are 1-based.
    """

    offset: int
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


class MarkupError(Exception):
    """Base class for every error raised by xaml_forge."""


class ParseError(MarkupError):
    """Markup could not be turned into a validated control tree."""

    def __init__(self, message: str, position: SourcePosition | None = None):
        super().__init__(message)
        self.message = message
        self.position = position

    def locate(self, position: SourcePosition | None) -> ParseError:
        """Attach a position if the error does not carry one yet."""
        if self.position is None:
            self.position = position
        return self

    def __str__(self) -> str:
        if self.position is not None:
            return f"{self.message} (line {self.position.line}, column {self.position.column})"
        return self.message


class MarkupSyntaxError(ParseError):
    """Structurally malformed markup.

    When the error lies inside a start tag, ``incomplete_tag`` holds the
    element name and the attributes read before it, so that schema errors
    earlier in the same tag can be reported first.
    """

    incomplete_tag: OpenTag | None = None


class UnterminatedTagError(MarkupSyntaxError):
    """Input ended inside a tag, attribute value or comment."""


class MismatchedTagError(MarkupSyntaxError):
    """A close tag does not match the element it closes."""

    def __init__(self, expected: str, found: str, position: SourcePosition | None = None):
        super().__init__(
            f"Mismatched close tag </{found}>, expected </{expected}>",
            position,
        )
        self.expected = expected
        self.found = found


class TruncatedInputError(MarkupSyntaxError):
    """Input ended before the root element was complete."""


class UnknownElementError(ParseError):
    """Element name is not in the registry."""

    def __init__(self, name: str, position: SourcePosition | None = None):
        super().__init__(f"Unsupported element <{name}>", position)
        self.name = name


class UnknownAttributeError(ParseError):
    """Attribute is not legal for its element."""

    def __init__(self, element: str, attribute: str, position: SourcePosition | None = None):
        super().__init__(f"Unknown attribute '{attribute}' on <{element}>", position)
        self.element = element
        self.attribute = attribute


class ContentModelError(ParseError):
    """Element has children its content model does not allow."""

    def __init__(self, element: str, reason: str, position: SourcePosition | None = None):
        super().__init__(f"Invalid content for <{element}>: {reason}", position)
        self.element = element
        self.reason = reason


class GrammarError(ParseError):
    """Attribute value cannot be parsed under its declared type."""

    def __init__(
        self,
        attribute: str,
        raw_value: str,
        reason: str,
        position: SourcePosition | None = None,
    ):
        label = f"'{attribute}'" if attribute else "value"
        super().__init__(f"Invalid {label} value {raw_value!r}: {reason}", position)
        self.attribute = attribute
        self.raw_value = raw_value
        self.reason = reason


class CompileError(MarkupError):
    """Static compilation failed; ``diagnostic`` is ready to show at build time."""

    def __init__(self, error: ParseError, diagnostic: str):
        super().__init__(diagnostic)
        self.error = error
        self.diagnostic = diagnostic


class InterpretError(MarkupError):
    """Runtime interpretation of a control tree failed."""


class BackendConstructionError(InterpretError):
    """The UI backend rejected a construct, set_property or append_child call."""

    def __init__(self, operation: str, kind: str, detail: str, property_name: str | None = None):
        target = f"<{kind}>" if property_name is None else f"<{kind}>.{property_name}"
        super().__init__(f"Backend {operation} failed for {target}: {detail}")
        self.operation = operation
        self.kind = kind
        self.property_name = property_name
