"""In-memory UI backend producing a live, mutable descriptor tree."""

from __future__ import annotations

import itertools
from typing import Iterator

from xaml_forge.backends.base import BackendError, UiBackend
from xaml_forge.schema.registry import ElementKind
from xaml_forge.schema.types import PropertyValue, Text


class ControlDescriptor:
    """A live control description that application code may modify."""

    def __init__(self, kind: ElementKind, ident: int) -> None:
        self.kind = kind
        self.ident = ident
        self.properties: dict[str, PropertyValue] = {}
        self.children: list[ControlDescriptor] = []
        self.parent: ControlDescriptor | None = None

    @property
    def name(self) -> str | None:
        """Value of the ``Name`` property, if set."""
        value = self.properties.get("Name")
        return value.value if isinstance(value, Text) else None

    def walk(self) -> Iterator[ControlDescriptor]:
        """Iterate over this descriptor and its descendants in document order."""
        stack = [self]
        while stack:
            descriptor = stack.pop()
            yield descriptor
            stack.extend(reversed(descriptor.children))

    def find(self, name: str) -> ControlDescriptor | None:
        """Find the first descriptor whose ``Name`` property equals ``name``."""
        for descriptor in self.walk():
            if descriptor.name == name:
                return descriptor
        return None

    def __repr__(self) -> str:
        return (
            f"ControlDescriptor({self.kind.value}#{self.ident}, "
            f"properties={len(self.properties)}, children={len(self.children)})"
        )


class DescriptorBackend(UiBackend):
    """Builds ControlDescriptor objects instead of native controls."""

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self.created: list[ControlDescriptor] = []

    def construct(self, kind: ElementKind) -> ControlDescriptor:
        descriptor = ControlDescriptor(kind, next(self._ids))
        self.created.append(descriptor)
        return descriptor

    def set_property(self, handle: ControlDescriptor, name: str, value: PropertyValue) -> None:
        if not isinstance(handle, ControlDescriptor):
            raise BackendError(f"Not a control descriptor: {handle!r}")
        handle.properties[name] = value

    def append_child(self, parent: ControlDescriptor, child: ControlDescriptor) -> None:
        if child is parent:
            raise BackendError("A control cannot be its own child")
        if child.parent is not None:
            raise BackendError(
                f"{child.kind.value}#{child.ident} already has a parent "
                f"({child.parent.kind.value}#{child.parent.ident})"
            )
        child.parent = parent
        parent.children.append(child)
