"""The UI backend collaborator interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from xaml_forge.schema.registry import ElementKind
from xaml_forge.schema.types import PropertyValue

# Opaque to the compiler; whatever the backend returns from construct().
ControlHandle = Any


class BackendError(Exception):
    """Raised by a UI backend that rejects a construction call."""


class UiBackend(ABC):
    """Creates and configures controls on behalf of the compiler.

    Both the interpreter and generated construction code drive a backend
    through exactly these three calls, in document order.
    """

    @abstractmethod
    def construct(self, kind: ElementKind) -> ControlHandle:
        """Create a control of ``kind`` and return a handle to it."""

    @abstractmethod
    def set_property(self, handle: ControlHandle, name: str, value: PropertyValue) -> None:
        """Set one typed property on a control.

        Raises:
            BackendError: If the control rejects the value.
        """

    @abstractmethod
    def append_child(self, parent: ControlHandle, child: ControlHandle) -> None:
        """Attach ``child`` as the last child of ``parent``."""
