"""Element vocabulary, attribute types and the attribute-value grammar."""

from xaml_forge.schema.grammar import NAMED_COLORS, parse_enum, parse_value
from xaml_forge.schema.registry import (
    ELEMENT_REGISTRY,
    AttributeSpec,
    ContentModel,
    ElementKind,
    ElementRegistry,
    ElementSchema,
    get_schema,
    legal_attributes,
    resolve,
)
from xaml_forge.schema.types import (
    ENUM_TYPES,
    Boolean,
    Color,
    EnumValue,
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
    Text,
    TextAlignment,
    TextWrapping,
    Thickness,
    ValueType,
    VerticalAlignment,
    Visibility,
)

__all__ = [
    # Grammar
    "NAMED_COLORS",
    "parse_enum",
    "parse_value",
    # Registry
    "ELEMENT_REGISTRY",
    "AttributeSpec",
    "ContentModel",
    "ElementKind",
    "ElementRegistry",
    "ElementSchema",
    "get_schema",
    "legal_attributes",
    "resolve",
    # Values
    "Boolean",
    "Color",
    "EnumValue",
    "Integer",
    "Number",
    "PropertyValue",
    "Text",
    "Thickness",
    "ValueType",
    # Symbol tables
    "ENUM_TYPES",
    "FontWeight",
    "HorizontalAlignment",
    "Orientation",
    "ScrollBarVisibility",
    "ScrollMode",
    "SelectionMode",
    "Stretch",
    "TextAlignment",
    "TextWrapping",
    "VerticalAlignment",
    "Visibility",
]
