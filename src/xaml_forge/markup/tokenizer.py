"""Structural parser: markup text to a stream of element events.

Well-formedness is checked by lxml's pull parser, which also unescapes
attribute values. Each element it reports is then located in the source
text, which gives exact line/column positions and tells ``<X/>`` apart
from ``<X></X>``. Only elements, attributes quoted with ``"`` or ``'``,
comments and whitespace between tags are accepted; text content, DTDs,
CDATA sections, processing instructions and namespace declarations are
rejected.
"""

from __future__ import annotations

import logging
import re
from bisect import bisect_right
from typing import Iterator

from lxml import etree

from xaml_forge.errors import (
    MarkupSyntaxError,
    MismatchedTagError,
    SourcePosition,
    TruncatedInputError,
    UnterminatedTagError,
    line_starts,
)
from xaml_forge.markup.events import (
    CloseTag,
    EmptyTag,
    EndOfInput,
    MarkupEvent,
    OpenTag,
    RawAttribute,
)

logger = logging.getLogger(__name__)

_START_TAG_RE = re.compile(
    r"""<([^\s/>]+)((?:\s+[^\s=/>]+\s*=\s*(?:"[^"]*"|'[^']*'))*)\s*(/?)>"""
)
_ATTRIBUTE_RE = re.compile(r"""\s+([^\s=/>]+)\s*=\s*("[^"]*"|'[^']*')""")
_END_TAG_RE = re.compile(r"</([^\s>]+)\s*>")
# Rest of a tag up to its closing '>', skipping quoted values.
_TAG_END_RE = re.compile(r"""(?:[^>"']|"[^"]*"|'[^']*')*>""")
_NAME_RE = re.compile(r"""[^\s/>="']+""")
_WHITESPACE_RE = re.compile(r"[ \t\r\n]*")
# Attribute-value normalization: each literal tab or line break is one space.
_VALUE_WHITESPACE_RE = re.compile(r"\r\n|[\t\n\r]")
# Anything outside the XML 1.0 Char production.
_INVALID_CHAR_RE = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")
_LXML_LOCATION_RE = re.compile(r",? line \d+, column \d+$")


def _new_parser() -> etree.XMLPullParser:
    # Entity resolution keeps its default so undeclared entities stay
    # fatal; a DTD never reaches the parser, so no entity can be declared.
    return etree.XMLPullParser(
        events=("start", "end", "start-ns", "pi"),
        no_network=True,
        load_dtd=False,
        huge_tree=True,
    )


class MarkupTokenizer:
    """Single-use tokenizer over one markup string."""

    def __init__(self, markup: str) -> None:
        self._text = markup
        self._origin = 1 if markup.startswith("\ufeff") else 0
        self._cursor = self._origin
        self._line_starts = line_starts(markup)
        # (name, position) of every element opened and not yet closed
        self._open: list[tuple[str, SourcePosition]] = []
        self._root_seen = False
        self._root_closed = False
        self._skip_end = False
        self._consumed = False
        self._parser = _new_parser()

    def position(self, offset: int) -> SourcePosition:
        """Convert a character offset into a line/column position."""
        index = bisect_right(self._line_starts, offset) - 1
        return SourcePosition(offset, index + 1, offset - self._line_starts[index] + 1)

    def events(self) -> Iterator[MarkupEvent]:
        """Yield events up to and including EndOfInput.

        The markup is fed to the parser a line at a time, so events for
        earlier lines are produced before a later line is checked.

        Raises:
            MarkupSyntaxError: On the first structural problem.
            RuntimeError: If called a second time.
        """
        if self._consumed:
            raise RuntimeError("Markup event stream has already been consumed")
        self._consumed = True

        # DTDs and declarations are rejected before the parser sees them.
        self._next_construct()

        for start, end in self._lines():
            chunk = self._text[start:end]
            invalid = _INVALID_CHAR_RE.search(chunk)
            if invalid is not None:
                chunk = chunk[:invalid.start()]
            failure = self._feed(chunk)
            yield from self._drain()
            if failure is not None:
                raise self._syntax_error(failure)
            if invalid is not None:
                raise self._invalid_character(start + invalid.start())

        failure = None
        try:
            self._parser.close()
        except etree.XMLSyntaxError as exc:
            failure = exc
        yield from self._drain()
        yield self._end_of_input(failure)

    def _lines(self) -> Iterator[tuple[int, int]]:
        start = self._origin
        for end in [*self._line_starts[1:], len(self._text)]:
            if end > start:
                yield start, end
                start = end

    def _feed(self, chunk: str) -> etree.XMLSyntaxError | None:
        if not chunk:
            return None
        try:
            self._parser.feed(chunk.encode("utf-8"))
        except etree.XMLSyntaxError as exc:
            return exc
        return None

    def _drain(self) -> Iterator[MarkupEvent]:
        for action, element in self._parser.read_events():
            if action == "start":
                yield self._start_event(element)
            elif action == "end":
                if self._skip_end:
                    self._skip_end = False
                else:
                    yield self._close_event()
            elif action == "start-ns":
                raise MarkupSyntaxError(
                    "Namespace declarations are not supported",
                    self.position(self._next_construct()),
                )
            else:
                self._next_construct()
                raise MarkupSyntaxError(
                    "Processing instructions are not supported",
                    self.position(self._cursor),
                )

    def _next_construct(self) -> int:
        """Skip whitespace and comments; return the offset of the next tag.

        Raises on text, DTDs, CDATA sections and processing instructions,
        which are the only other things that can appear between tags.
        """
        text = self._text
        pos = self._cursor
        while True:
            pos = _WHITESPACE_RE.match(text, pos).end()
            if not text.startswith("<!--", pos):
                break
            end = text.find("-->", pos + 4)
            if end == -1:
                raise UnterminatedTagError("Unterminated comment", self.position(pos))
            pos = end + 3
        self._cursor = pos

        if pos >= len(text):
            return pos
        if text[pos] != "<":
            snippet = text[pos:pos + 20].split("<")[0].strip()
            raise MarkupSyntaxError(
                f"Unexpected text {snippet!r}; text must be given as an attribute",
                self.position(pos),
            )
        if text.startswith("<!", pos):
            raise MarkupSyntaxError(
                "DTD declarations and CDATA sections are not supported",
                self.position(pos),
            )
        if text.startswith("<?", pos):
            raise MarkupSyntaxError(
                "Processing instructions are not supported",
                self.position(pos),
            )
        return pos

    def _start_event(self, element: etree._Element) -> OpenTag | EmptyTag:
        text = self._text
        start = self._next_construct()
        position = self.position(start)
        match = _START_TAG_RE.match(text, start)
        if match is None:
            raise MarkupSyntaxError("Malformed start tag", position)

        offsets: dict[str, int] = {}
        cursor = match.start(2)
        while cursor < match.end(2):
            attribute = _ATTRIBUTE_RE.match(text, cursor)
            offsets[attribute.group(1)] = attribute.start(1)
            cursor = attribute.end()
        # lxml keeps attributes in document order, already unescaped.
        attributes = tuple(
            RawAttribute(name, value, self.position(offsets.get(name, start)))
            for name, value in element.attrib.items()
        )

        name = match.group(1)
        depth = len(self._open)
        self._cursor = match.end()
        self._root_seen = True
        if match.group(3):
            self._skip_end = True
            if not self._open:
                self._root_closed = True
            return EmptyTag(name, attributes, position, depth)
        self._open.append((name, position))
        return OpenTag(name, attributes, position, depth)

    def _close_event(self) -> CloseTag:
        start = self._next_construct()
        match = _END_TAG_RE.match(self._text, start)
        if match is None:
            raise MarkupSyntaxError("Malformed close tag", self.position(start))
        name, _ = self._open.pop()
        self._cursor = match.end()
        if not self._open:
            self._root_closed = True
        return CloseTag(name, self.position(start), depth=len(self._open))

    def _syntax_error(self, failure: etree.XMLSyntaxError | None) -> MarkupSyntaxError:
        """Describe the construct at the cursor that the parser rejected."""
        text = self._text
        start = self._next_construct()
        if start >= len(text):
            return self._parser_error(failure)

        position = self.position(start)
        closing = text.startswith("</", start)
        if not closing and self._root_closed:
            return MarkupSyntaxError("Unexpected element after the root element", position)

        match = _NAME_RE.match(text, start + (2 if closing else 1))
        name = match.group() if match is not None else ""
        if _TAG_END_RE.match(text, start + 1) is None:
            label = f"</{name}>" if closing else f"<{name}>"
            return UnterminatedTagError(f"Unterminated tag {label}", position)

        if closing:
            if _END_TAG_RE.match(text, start) is not None:
                if not self._open:
                    return MarkupSyntaxError(
                        f"Close tag </{name}> has no matching open tag", position
                    )
                expected, _ = self._open[-1]
                if name != expected:
                    return MismatchedTagError(expected, name, position)
            return self._parser_error(failure)

        error = self._parser_error(failure)
        if name:
            error.incomplete_tag = self._incomplete_tag(start, name)
        return error

    def _incomplete_tag(self, start: int, name: str) -> OpenTag:
        """Read the well-formed leading attributes of a rejected start tag."""
        text = self._text
        attributes: list[RawAttribute] = []
        cursor = start + 1 + len(name)
        while True:
            match = _ATTRIBUTE_RE.match(text, cursor)
            if match is None:
                break
            raw = _VALUE_WHITESPACE_RE.sub(" ", match.group(2)[1:-1])
            if "&" in raw or "<" in raw:
                break
            attributes.append(RawAttribute(match.group(1), raw, self.position(match.start(1))))
            cursor = match.end()
        return OpenTag(name, tuple(attributes), self.position(start), len(self._open))

    def _parser_error(self, failure: etree.XMLSyntaxError | None) -> MarkupSyntaxError:
        if failure is None:
            return MarkupSyntaxError("Malformed markup", self.position(self._cursor))
        message = _LXML_LOCATION_RE.sub("", str(failure)).strip()
        line, column = failure.position
        line = min(max(line or 1, 1), len(self._line_starts))
        offset = self._line_starts[line - 1] + max(column or 1, 1) - 1
        return MarkupSyntaxError(message, self.position(min(offset, len(self._text))))

    def _invalid_character(self, offset: int) -> MarkupSyntaxError:
        return MarkupSyntaxError(
            f"Character U+{ord(self._text[offset]):04X} is not allowed in markup",
            self.position(offset),
        )

    def _end_of_input(self, failure: etree.XMLSyntaxError | None) -> EndOfInput:
        if self._next_construct() < len(self._text):
            raise self._syntax_error(failure)
        eof = self.position(len(self._text))
        if self._open:
            name, opened_at = self._open[-1]
            raise TruncatedInputError(
                f"Unexpected end of input: <{name}> opened at line {opened_at.line}, "
                f"column {opened_at.column} is not closed",
                eof,
            )
        if not self._root_seen:
            raise TruncatedInputError("No root element found", eof)
        if failure is not None:
            raise self._parser_error(failure)
        return EndOfInput(eof)


def iter_events(markup: str) -> Iterator[MarkupEvent]:
    """Lazily tokenize ``markup`` into element events.

    The returned iterator is single-use. Errors are raised when the
    offending construct is reached, not up front.

    Example:
        >>> [type(e).__name__ for e in iter_events('<Grid><Button/></Grid>')]
        ['OpenTag', 'EmptyTag', 'CloseTag', 'EndOfInput']
    """
    logger.debug("Tokenizing %d characters of markup", len(markup))
    return MarkupTokenizer(markup).events()
