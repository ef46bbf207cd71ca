"""Build-time diagnostics for markup errors."""

from __future__ import annotations

from xaml_forge.errors import LINE_BREAK_RE, ParseError


def source_line(markup: str, line: int) -> str:
    """Get a 1-based line of ``markup`` without its line ending.

    Lines end at CRLF, CR or LF, as they do for source positions.
    """
    lines = LINE_BREAK_RE.split(markup)
    if 1 <= line <= len(lines):
        return lines[line - 1]
    return ""


def format_diagnostic(error: ParseError, markup: str, source_name: str = "<markup>") -> str:
    """Format ``error`` as a compiler-style diagnostic.

    Example output::

        main.xaml:1:9: error: Unknown attribute 'Color' on <Button>
            <Button Color="#FF0078D4"/>
                    ^
    """
    position = error.position
    if position is None:
        return f"{source_name}: error: {error.message}"

    header = f"{source_name}:{position.line}:{position.column}: error: {error.message}"
    fragment = source_line(markup, position.line)
    if not fragment:
        return header

    # Keep tabs so the caret lines up with the fragment.
    lead = "".join(c if c == "\t" else " " for c in fragment[:position.column - 1])
    return f"{header}\n    {fragment}\n    {lead}^"
