"""Markup parsing: structural tokenizer, events and the tree builder."""

from xaml_forge.markup.builder import TreeBuilder, build_tree, parse_markup
from xaml_forge.markup.events import (
    CloseTag,
    EmptyTag,
    EndOfInput,
    MarkupEvent,
    OpenTag,
    RawAttribute,
)
from xaml_forge.markup.nodes import ControlNode
from xaml_forge.markup.tokenizer import MarkupTokenizer, iter_events

__all__ = [
    # Events
    "CloseTag",
    "EmptyTag",
    "EndOfInput",
    "MarkupEvent",
    "OpenTag",
    "RawAttribute",
    # Tokenizer
    "MarkupTokenizer",
    "iter_events",
    # Tree
    "ControlNode",
    "TreeBuilder",
    "build_tree",
    "parse_markup",
]
