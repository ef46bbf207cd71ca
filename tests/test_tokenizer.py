"""Tests for the structural markup tokenizer."""

from __future__ import annotations

import pytest

from xaml_forge.errors import (
    MarkupSyntaxError,
    MismatchedTagError,
    TruncatedInputError,
    UnterminatedTagError,
)
from xaml_forge.markup.events import CloseTag, EmptyTag, EndOfInput, OpenTag
from xaml_forge.markup.tokenizer import MarkupTokenizer, iter_events


def _events(markup: str) -> list:
    return list(iter_events(markup))


def _pairs(tag: OpenTag | EmptyTag) -> list[tuple[str, str]]:
    return [(attribute.name, attribute.value) for attribute in tag.attributes]


class TestEventStream:
    """Tests for well-formed markup."""

    def test_nested_elements(self) -> None:
        """Test open, empty and close events with their depth."""
        events = _events("<Grid><Button/></Grid>")

        assert [type(e) for e in events] == [OpenTag, EmptyTag, CloseTag, EndOfInput]
        assert [e.depth for e in events[:3]] == [0, 1, 0]
        assert events[0].name == "Grid"
        assert events[2].name == "Grid"

    def test_attributes_in_document_order(self) -> None:
        """Test attributes are reported in the order written."""
        (tag, _) = _events('<Button Content="OK" Width="80" Height="30"/>')

        assert _pairs(tag) == [("Content", "OK"), ("Width", "80"), ("Height", "30")]

    def test_single_quotes_and_whitespace(self) -> None:
        """Test single-quoted values and whitespace around '='."""
        (tag, _) = _events("<TextBlock Text = 'say \"hi\"' />")

        assert _pairs(tag) == [("Text", 'say "hi"')]

    def test_entities_are_unescaped(self) -> None:
        """Test predefined entities and character references in values."""
        (tag, _) = _events('<TextBlock Text="a &amp; b &lt;c&gt; &quot;&apos; &#65;&#x42;"/>')

        assert tag.attributes[0].value == "a & b <c> \"' AB"

    def test_comments_and_whitespace_are_skipped(self) -> None:
        """Test comments before, inside and after the root are ignored."""
        markup = "<!-- header -->\n<Grid>\n  <!-- body -->\n  <Button/>\n</Grid>\n<!-- end -->\n"

        events = _events(markup)

        assert [type(e) for e in events] == [OpenTag, EmptyTag, CloseTag, EndOfInput]

    def test_byte_order_mark(self) -> None:
        """Test a leading byte order mark is ignored."""
        events = _events("\ufeff<Button/>")

        assert isinstance(events[0], EmptyTag)

    def test_positions(self) -> None:
        """Test line and column of tags and attributes."""
        events = _events('<StackPanel>\n  <Button Width="80"/>\n</StackPanel>')

        button = events[1]
        assert (button.position.line, button.position.column) == (2, 3)
        assert (button.attributes[0].position.line, button.attributes[0].position.column) == (2, 11)
        assert (events[2].position.line, events[2].position.column) == (3, 1)

    def test_line_breaks(self) -> None:
        """Test CRLF and lone CR both end a line."""
        for newline in ("\r\n", "\r"):
            markup = newline.join(["<StackPanel>", '  <Button Width="80"/>', "</StackPanel>"])

            events = _events(markup)

            assert (events[1].position.line, events[1].position.column) == (2, 3)
            assert (events[2].position.line, events[2].position.column) == (3, 1)

    def test_deep_nesting(self) -> None:
        """Test nesting deeper than the interpreter's recursion limit."""
        depth = 1200
        markup = "<StackPanel>" * depth + "<Button/>" + "</StackPanel>" * depth

        events = _events(markup)

        assert len(events) == 2 * depth + 2
        assert isinstance(events[depth], EmptyTag)
        assert events[depth].depth == depth
        assert events[-2].depth == 0

    def test_open_tag_with_close_tag(self) -> None:
        """Test an element written with a separate close tag is not empty."""
        events = _events('<Button Content="OK"></Button>')

        assert [type(e) for e in events] == [OpenTag, CloseTag, EndOfInput]

    def test_lazy_errors(self) -> None:
        """Test events before an error are still produced."""
        events = iter_events("<Button/>\ntrailing text")

        assert isinstance(next(events), EmptyTag)
        with pytest.raises(MarkupSyntaxError):
            next(events)

    def test_single_use(self) -> None:
        """Test the event stream cannot be restarted."""
        tokenizer = MarkupTokenizer("<Button/>")
        list(tokenizer.events())

        with pytest.raises(RuntimeError):
            list(tokenizer.events())


class TestSyntaxErrors:
    """Tests for rejected markup."""

    def test_unterminated_tag(self) -> None:
        """Test input ending inside a start tag."""
        with pytest.raises(UnterminatedTagError) as exc_info:
            _events('<Button Content="OK"')

        assert exc_info.value.position.column == 1

    def test_unterminated_value(self) -> None:
        """Test input ending inside an attribute value."""
        with pytest.raises(UnterminatedTagError):
            _events('<Button Content="OK/>')

    def test_unterminated_comment(self) -> None:
        """Test input ending inside a comment."""
        with pytest.raises(UnterminatedTagError):
            _events("<!-- never closed <Button/>")

    def test_mismatched_close_tag(self) -> None:
        """Test close tag naming a different element."""
        with pytest.raises(MismatchedTagError) as exc_info:
            _events("<Grid></StackPanel>")

        error = exc_info.value
        assert error.expected == "Grid"
        assert error.found == "StackPanel"
        assert error.position.column == 7

    def test_truncated_input(self) -> None:
        """Test end of input with an open element."""
        with pytest.raises(TruncatedInputError) as exc_info:
            _events("<Button><TextBlock/>")

        assert "<Button>" in exc_info.value.message
        assert exc_info.value.position.offset == len("<Button><TextBlock/>")

    def test_empty_input(self) -> None:
        """Test input without a root element."""
        with pytest.raises(TruncatedInputError, match="No root element"):
            _events("  <!-- nothing -->  ")

    def test_distinct_error_types(self) -> None:
        """Test the three structural failures are distinguishable."""
        assert not issubclass(UnterminatedTagError, MismatchedTagError)
        assert not issubclass(TruncatedInputError, UnterminatedTagError)
        assert issubclass(TruncatedInputError, MarkupSyntaxError)

    @pytest.mark.parametrize(
        "markup",
        [
            "<Grid>hello</Grid>",
            '<?xml version="1.0"?><Grid/>',
            "<!DOCTYPE Grid><Grid/>",
            "<Grid><![CDATA[x]]></Grid>",
            "<Button/><Button/>",
            "</Button>",
            "<Button Content=OK/>",
            '<Button Content="a"Width="1"/>',
            '<Button Content "OK"/>',
            '<Button Content="a < b"/>',
            '<Button Content="Tom & Jerry"/>',
            '<Button Content="&nbsp;"/>',
            '<Button Content="&#0;"/>',
            "<Button /x>",
            "< Button/>",
        ],
    )
    def test_rejected(self, markup: str) -> None:
        """Test malformed or unsupported constructs raise MarkupSyntaxError."""
        with pytest.raises(MarkupSyntaxError):
            _events(markup)

    def test_duplicate_attribute(self) -> None:
        """Test an attribute given twice on one element is rejected."""
        with pytest.raises(MarkupSyntaxError):
            _events('<Button Content="A" Width="1" Content="B"/>')

    def test_namespace_declaration(self) -> None:
        """Test xmlns declarations are rejected at their element."""
        with pytest.raises(MarkupSyntaxError, match="Namespace") as exc_info:
            _events('<Grid>\n  <Button xmlns="urn:example"/>\n</Grid>')

        assert (exc_info.value.position.line, exc_info.value.position.column) == (2, 3)

    def test_processing_instruction_in_content(self) -> None:
        """Test a processing instruction between elements is rejected."""
        with pytest.raises(MarkupSyntaxError, match="Processing instructions") as exc_info:
            _events("<Grid>\n  <?render fast?>\n</Grid>")

        assert exc_info.value.position.line == 2

    def test_close_tag_after_root(self) -> None:
        """Test a stray close tag after the root element."""
        with pytest.raises(MarkupSyntaxError, match="no matching open tag"):
            _events("<Button/></Button>")

    def test_element_after_root(self) -> None:
        """Test a second root element."""
        with pytest.raises(MarkupSyntaxError, match="after the root element"):
            _events("<Button/>\n<Button/>")

    def test_incomplete_tag(self) -> None:
        """Test a malformed start tag reports the names read before the error."""
        with pytest.raises(MarkupSyntaxError) as exc_info:
            _events('<Grid>\n  <Button Colr="x" Width=80/>\n</Grid>')

        tag = exc_info.value.incomplete_tag
        assert tag.name == "Button"
        assert _pairs(tag) == [("Colr", "x")]
        assert (tag.attributes[0].position.line, tag.attributes[0].position.column) == (2, 11)

    def test_incomplete_tag_stops_at_references(self) -> None:
        """Test values with references are left to the parser."""
        with pytest.raises(MarkupSyntaxError) as exc_info:
            _events('<Button Content="&nbsp;" Width="80"/>')

        assert exc_info.value.incomplete_tag.attributes == ()


class TestCharacterValidity:
    """Tests for characters XML does not allow."""

    @pytest.mark.parametrize("reference", ["&#1;", "&#x1F;", "&#xFFFE;", "&#xD800;"])
    def test_invalid_character_reference(self, reference: str) -> None:
        """Test references to characters outside the XML character range."""
        with pytest.raises(MarkupSyntaxError):
            _events(f'<TextBlock Text="a{reference}b"/>')

    @pytest.mark.parametrize("code", [0x01, 0x08, 0x0B, 0x1F, 0xFFFE])
    def test_raw_control_character(self, code: int) -> None:
        """Test a raw control character in a value is rejected where it occurs."""
        markup = '<Grid>\n  <TextBlock Text="a' + chr(code) + 'b"/>\n</Grid>'

        with pytest.raises(MarkupSyntaxError, match=f"U\\+{code:04X}") as exc_info:
            _events(markup)

        assert (exc_info.value.position.line, exc_info.value.position.column) == (2, 21)

    def test_raw_control_character_in_comment(self) -> None:
        """Test comments are held to the same character range."""
        with pytest.raises(MarkupSyntaxError):
            _events("<Grid><!-- " + chr(0x07) + " --></Grid>")

    def test_allowed_whitespace_references(self) -> None:
        """Test tab, newline and carriage return references are kept."""
        (tag, _) = _events('<TextBlock Text="a&#9;b&#10;c&#13;d"/>')

        assert tag.attributes[0].value == "a\tb\nc\rd"
