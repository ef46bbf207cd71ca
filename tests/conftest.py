"""pytest configuration and fixtures for xaml_forge tests."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Any

import pytest

from xaml_forge.backends.base import BackendError, UiBackend
from xaml_forge.schema.registry import ElementKind
from xaml_forge.schema.types import PropertyValue
from tests.fixture_loader import FIXTURES_DIR, load_fixture_text


class RecordingBackend(UiBackend):
    """UiBackend double that logs every call.

    Handles are sequential integers, so two backends driven with the same
    tree produce identical call logs.

    Args:
        fail_on: Optional ``(operation, detail)`` pair; the first matching call
            raises BackendError. ``detail`` is the kind for construct and the
            property name for set_property.
    """

    def __init__(self, fail_on: tuple[str, Any] | None = None) -> None:
        self.calls: list[tuple[Any, ...]] = []
        self.fail_on = fail_on
        self._next = 0

    def construct(self, kind: ElementKind) -> int:
        if self.fail_on == ("construct", kind):
            raise BackendError(f"cannot create {kind.value}")
        self._next += 1
        self.calls.append(("construct", kind, self._next))
        return self._next

    def set_property(self, handle: int, name: str, value: PropertyValue) -> None:
        if self.fail_on == ("set_property", name):
            raise BackendError(f"rejected {name}")
        self.calls.append(("set_property", handle, name, value))

    def append_child(self, parent: int, child: int) -> None:
        if self.fail_on == ("append_child", None):
            raise BackendError("rejected child")
        self.calls.append(("append_child", parent, child))


@pytest.fixture
def recording_backend() -> RecordingBackend:
    """Provide a fresh RecordingBackend."""
    return RecordingBackend()


@pytest.fixture
def settings_markup() -> str:
    """Markup of the settings panel fixture."""
    return load_fixture_text("valid", "settings_panel.xaml")


@pytest.fixture
def markup_dir(tmp_path: Path) -> Path:
    """Copy the valid fixtures into a temporary directory tree."""
    target = tmp_path / "ui"
    shutil.copytree(FIXTURES_DIR / "valid", target / "views")
    return target


@pytest.fixture
def invalid_markup_file(tmp_path: Path) -> Path:
    """A markup file with an unknown attribute."""
    path = tmp_path / "broken.xaml"
    shutil.copy(FIXTURES_DIR / "invalid" / "unknown_attribute.xaml", path)
    return path
