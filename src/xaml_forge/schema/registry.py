"""Element schema registry.

A fixed table of every control kind the compiler can build and, per kind,
the attributes it accepts with their declared value types. The table is
built once at import time and exposed through read-only mappings; there is
no way to register new kinds at parse time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

from xaml_forge.errors import GrammarError, UnknownAttributeError, UnknownElementError
from xaml_forge.schema.grammar import parse_value
from xaml_forge.schema.types import (
    FontWeight,
    HorizontalAlignment,
    Integer,
    Number,
    Orientation,
    PropertyValue,
    ScrollBarVisibility,
    ScrollMode,
    SelectionMode,
    Stretch,
    TextAlignment,
    TextWrapping,
    ValueType,
    VerticalAlignment,
    Visibility,
)


class ElementKind(Enum):
    """Control kinds recognised in markup. Values are the element names."""

    BUTTON = "Button"
    TEXT_BLOCK = "TextBlock"
    TEXT_BOX = "TextBox"
    CHECK_BOX = "CheckBox"
    RADIO_BUTTON = "RadioButton"
    COMBO_BOX = "ComboBox"
    COMBO_BOX_ITEM = "ComboBoxItem"
    SLIDER = "Slider"
    PROGRESS_BAR = "ProgressBar"
    TOGGLE_SWITCH = "ToggleSwitch"
    IMAGE = "Image"
    STACK_PANEL = "StackPanel"
    GRID = "Grid"
    CANVAS = "Canvas"
    BORDER = "Border"
    SCROLL_VIEWER = "ScrollViewer"
    LIST_VIEW = "ListView"


class ContentModel(Enum):
    """How many child elements a kind accepts."""

    EMPTY = "empty"
    SINGLE = "single"
    MULTIPLE = "multiple"


@dataclass(frozen=True)
class AttributeSpec:
    """Declared type of one attribute, with optional inclusive numeric bounds."""

    name: str
    value_type: ValueType
    enum_type: type[Enum] | None = None
    min_value: float | None = None
    max_value: float | None = None

    def parse(self, raw: str) -> PropertyValue:
        """Parse ``raw`` under this attribute's type and bounds.

        Raises:
            GrammarError: If the value is malformed or out of bounds.
        """
        value = parse_value(
            self.value_type,
            raw,
            attribute=self.name,
            enum_type=self.enum_type,
        )
        if isinstance(value, (Number, Integer)):
            if self.min_value is not None and value.value < self.min_value:
                raise GrammarError(
                    self.name, raw, f"value is less than minimum {self.min_value:g}"
                )
            if self.max_value is not None and value.value > self.max_value:
                raise GrammarError(
                    self.name, raw, f"value exceeds maximum {self.max_value:g}"
                )
        return value


@dataclass(frozen=True)
class ElementSchema:
    """Schema of one control kind."""

    kind: ElementKind
    attributes: Mapping[str, AttributeSpec]
    content: ContentModel = ContentModel.EMPTY
    allowed_children: frozenset[ElementKind] | None = None
    summary: str = field(default="", compare=False)

    @property
    def name(self) -> str:
        return self.kind.value

    def attribute(self, name: str) -> AttributeSpec:
        """Get the spec for an attribute, rejecting names the kind does not accept."""
        spec = self.attributes.get(name)
        if spec is None:
            raise UnknownAttributeError(self.name, name)
        return spec

    def accepts_child(self, kind: ElementKind) -> bool:
        if self.content is ContentModel.EMPTY:
            return False
        return self.allowed_children is None or kind in self.allowed_children


class ElementRegistry:
    """Read-only lookup of element schemas by name and kind."""

    def __init__(self, schemas: Iterable[ElementSchema]) -> None:
        by_kind = {schema.kind: schema for schema in schemas}
        self._by_kind: Mapping[ElementKind, ElementSchema] = MappingProxyType(by_kind)
        self._by_name: Mapping[str, ElementSchema] = MappingProxyType(
            {schema.name: schema for schema in by_kind.values()}
        )

    def resolve(self, name: str) -> ElementKind:
        """Resolve an element name to its kind.

        Raises:
            UnknownElementError: If the name is not registered.
        """
        schema = self._by_name.get(name)
        if schema is None:
            raise UnknownElementError(name)
        return schema.kind

    def get(self, kind: ElementKind) -> ElementSchema:
        return self._by_kind[kind]

    def get_by_name(self, name: str) -> ElementSchema:
        return self.get(self.resolve(name))

    def legal_attributes(self, kind: ElementKind) -> Mapping[str, AttributeSpec]:
        return self._by_kind[kind].attributes

    @property
    def kinds(self) -> tuple[ElementKind, ...]:
        return tuple(self._by_kind)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_kind)


def _text(name: str) -> AttributeSpec:
    return AttributeSpec(name, ValueType.TEXT)


def _number(name: str, min_value: float | None = None, max_value: float | None = None) -> AttributeSpec:
    return AttributeSpec(name, ValueType.NUMBER, min_value=min_value, max_value=max_value)


def _size(name: str) -> AttributeSpec:
    return _number(name, min_value=0)


def _integer(name: str, min_value: int | None = None) -> AttributeSpec:
    return AttributeSpec(name, ValueType.INTEGER, min_value=min_value)


def _boolean(name: str) -> AttributeSpec:
    return AttributeSpec(name, ValueType.BOOLEAN)


def _color(name: str) -> AttributeSpec:
    return AttributeSpec(name, ValueType.COLOR)


def _thickness(name: str) -> AttributeSpec:
    return AttributeSpec(name, ValueType.THICKNESS)


def _enum(name: str, enum_type: type[Enum]) -> AttributeSpec:
    return AttributeSpec(name, ValueType.ENUM, enum_type=enum_type)


# Every element accepts these.
LAYOUT_ATTRIBUTES = (
    _text("Name"),
    _text("Tag"),
    _size("Width"),
    _size("Height"),
    _size("MinWidth"),
    _size("MinHeight"),
    _size("MaxWidth"),
    _size("MaxHeight"),
    _thickness("Margin"),
    _enum("HorizontalAlignment", HorizontalAlignment),
    _enum("VerticalAlignment", VerticalAlignment),
    _number("Opacity", min_value=0, max_value=1),
    _enum("Visibility", Visibility),
)

# Attached properties read by the parent panel.
ATTACHED_ATTRIBUTES = (
    _integer("Grid.Row", min_value=0),
    _integer("Grid.Column", min_value=0),
    _integer("Grid.RowSpan", min_value=1),
    _integer("Grid.ColumnSpan", min_value=1),
    _number("Canvas.Left"),
    _number("Canvas.Top"),
    _integer("Canvas.ZIndex"),
)

CONTROL_ATTRIBUTES = (
    _boolean("IsEnabled"),
    _color("Foreground"),
    _size("FontSize"),
    _enum("FontWeight", FontWeight),
)


def _schema(
    kind: ElementKind,
    *attributes: AttributeSpec,
    content: ContentModel = ContentModel.EMPTY,
    allowed_children: Iterable[ElementKind] | None = None,
    summary: str = "",
) -> ElementSchema:
    table: dict[str, AttributeSpec] = {}
    for spec in (*LAYOUT_ATTRIBUTES, *ATTACHED_ATTRIBUTES, *attributes):
        table[spec.name] = spec
    return ElementSchema(
        kind=kind,
        attributes=MappingProxyType(table),
        content=content,
        allowed_children=frozenset(allowed_children) if allowed_children is not None else None,
        summary=summary,
    )


def _create_registry() -> ElementRegistry:
    """Create the built-in element table."""
    schemas = [
        _schema(
            ElementKind.BUTTON,
            *CONTROL_ATTRIBUTES,
            _text("Content"),
            _color("Background"),
            _size("CornerRadius"),
            _thickness("Padding"),
            _color("BorderBrush"),
            _thickness("BorderThickness"),
            summary="Clickable push button.",
        ),
        _schema(
            ElementKind.TEXT_BLOCK,
            _text("Text"),
            _color("Foreground"),
            _size("FontSize"),
            _enum("FontWeight", FontWeight),
            _text("FontFamily"),
            _enum("TextWrapping", TextWrapping),
            _enum("TextAlignment", TextAlignment),
            summary="Read-only text display.",
        ),
        _schema(
            ElementKind.TEXT_BOX,
            *CONTROL_ATTRIBUTES,
            _text("Text"),
            _text("PlaceholderText"),
            _color("Background"),
            _size("CornerRadius"),
            _thickness("Padding"),
            _integer("MaxLength", min_value=0),
            _boolean("IsReadOnly"),
            _boolean("AcceptsReturn"),
            _enum("TextWrapping", TextWrapping),
            summary="Single or multi-line text input.",
        ),
        _schema(
            ElementKind.CHECK_BOX,
            *CONTROL_ATTRIBUTES,
            _text("Content"),
            _boolean("IsChecked"),
            summary="Two-state check box.",
        ),
        _schema(
            ElementKind.RADIO_BUTTON,
            *CONTROL_ATTRIBUTES,
            _text("Content"),
            _boolean("IsChecked"),
            _text("GroupName"),
            summary="Mutually exclusive option within a group.",
        ),
        _schema(
            ElementKind.COMBO_BOX,
            *CONTROL_ATTRIBUTES,
            _integer("SelectedIndex", min_value=-1),
            _text("PlaceholderText"),
            _color("Background"),
            content=ContentModel.MULTIPLE,
            allowed_children=[ElementKind.COMBO_BOX_ITEM],
            summary="Drop-down list of ComboBoxItem children.",
        ),
        _schema(
            ElementKind.COMBO_BOX_ITEM,
            _text("Content"),
            _boolean("IsSelected"),
            summary="Entry of a ComboBox.",
        ),
        _schema(
            ElementKind.SLIDER,
            _boolean("IsEnabled"),
            _number("Minimum"),
            _number("Maximum"),
            _number("Value"),
            _number("StepFrequency", min_value=0),
            _enum("Orientation", Orientation),
            _text("Header"),
            summary="Range value picker.",
        ),
        _schema(
            ElementKind.PROGRESS_BAR,
            _number("Minimum"),
            _number("Maximum"),
            _number("Value"),
            _boolean("IsIndeterminate"),
            _color("Foreground"),
            _color("Background"),
            summary="Progress indicator.",
        ),
        _schema(
            ElementKind.TOGGLE_SWITCH,
            _boolean("IsEnabled"),
            _text("Header"),
            _boolean("IsOn"),
            _text("OnContent"),
            _text("OffContent"),
            summary="On/off switch.",
        ),
        _schema(
            ElementKind.IMAGE,
            _text("Source"),
            _enum("Stretch", Stretch),
            summary="Bitmap image loaded from a URI.",
        ),
        _schema(
            ElementKind.STACK_PANEL,
            _enum("Orientation", Orientation),
            _size("Spacing"),
            _thickness("Padding"),
            _color("Background"),
            _size("CornerRadius"),
            _color("BorderBrush"),
            _thickness("BorderThickness"),
            content=ContentModel.MULTIPLE,
            summary="Stacks children vertically or horizontally.",
        ),
        _schema(
            ElementKind.GRID,
            _size("RowSpacing"),
            _size("ColumnSpacing"),
            _thickness("Padding"),
            _color("Background"),
            _size("CornerRadius"),
            content=ContentModel.MULTIPLE,
            summary="Cell-based layout; children use Grid.Row and Grid.Column.",
        ),
        _schema(
            ElementKind.CANVAS,
            _color("Background"),
            content=ContentModel.MULTIPLE,
            summary="Absolute layout; children use Canvas.Left and Canvas.Top.",
        ),
        _schema(
            ElementKind.BORDER,
            _thickness("BorderThickness"),
            _color("BorderBrush"),
            _size("CornerRadius"),
            _thickness("Padding"),
            _color("Background"),
            content=ContentModel.SINGLE,
            summary="Draws a border around a single child.",
        ),
        _schema(
            ElementKind.SCROLL_VIEWER,
            _enum("HorizontalScrollBarVisibility", ScrollBarVisibility),
            _enum("VerticalScrollBarVisibility", ScrollBarVisibility),
            _enum("HorizontalScrollMode", ScrollMode),
            _enum("VerticalScrollMode", ScrollMode),
            _thickness("Padding"),
            _color("Background"),
            content=ContentModel.SINGLE,
            summary="Scrollable region around a single child.",
        ),
        _schema(
            ElementKind.LIST_VIEW,
            _integer("SelectedIndex", min_value=-1),
            _enum("SelectionMode", SelectionMode),
            _color("Background"),
            content=ContentModel.MULTIPLE,
            summary="Vertical list of arbitrary children.",
        ),
    ]
    return ElementRegistry(schemas)


# Global registry instance
ELEMENT_REGISTRY = _create_registry()


def resolve(name: str) -> ElementKind:
    """Resolve an element name against the built-in registry."""
    return ELEMENT_REGISTRY.resolve(name)


def get_schema(kind: ElementKind) -> ElementSchema:
    """Get the built-in schema of a kind."""
    return ELEMENT_REGISTRY.get(kind)


def legal_attributes(kind: ElementKind) -> Mapping[str, AttributeSpec]:
    """Get the attribute table of a kind, keyed by attribute name."""
    return ELEMENT_REGISTRY.legal_attributes(kind)
