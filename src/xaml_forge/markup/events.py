"""Events produced by the structural parser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from xaml_forge.errors import SourcePosition


@dataclass(frozen=True)
class RawAttribute:
    """An attribute as written in markup, value already unescaped."""

    name: str
    value: str
    position: SourcePosition | None = None


@dataclass(frozen=True)
class OpenTag:
    """``<Name ...>``: children follow until the matching close tag."""

    name: str
    attributes: tuple[RawAttribute, ...] = ()
    position: SourcePosition | None = None
    depth: int = 0


@dataclass(frozen=True)
class EmptyTag:
    """``<Name .../>``: a complete element without children."""

    name: str
    attributes: tuple[RawAttribute, ...] = ()
    position: SourcePosition | None = None
    depth: int = 0


@dataclass(frozen=True)
class CloseTag:
    """``</Name>``."""

    name: str
    position: SourcePosition | None = None
    depth: int = 0


@dataclass(frozen=True)
class EndOfInput:
    position: SourcePosition | None = None


MarkupEvent = Union[OpenTag, EmptyTag, CloseTag, EndOfInput]
