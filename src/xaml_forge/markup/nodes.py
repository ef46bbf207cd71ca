"""The validated control tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping

from xaml_forge.errors import SourcePosition
from xaml_forge.schema.registry import ElementKind
from xaml_forge.schema.types import PropertyValue


@dataclass(frozen=True)
class ControlNode:
    """One validated element and its subtree.

    ``properties`` keeps document order and is read-only. ``children`` order
    is the visual and tab order the UI backend must honor. ``position`` points
    at the element's start tag and does not take part in equality.
    """

    kind: ElementKind
    properties: Mapping[str, PropertyValue] = field(default_factory=lambda: MappingProxyType({}))
    children: tuple[ControlNode, ...] = ()
    position: SourcePosition | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.properties, MappingProxyType):
            object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    @property
    def name(self) -> str:
        return self.kind.value

    def walk(self) -> Iterator[ControlNode]:
        """Iterate over this node and its descendants depth-first, in document order."""
        stack: list[ControlNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    @property
    def node_count(self) -> int:
        return sum(1 for _ in self.walk())
