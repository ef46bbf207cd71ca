"""Typed property values produced by the attribute grammar."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class ValueType(Enum):
    """Declared type of an attribute."""

    TEXT = "text"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    COLOR = "color"
    THICKNESS = "thickness"
    ENUM = "enum"


# Symbol tables for enumerated attributes. Member values are the markup spelling.


class Orientation(Enum):
    VERTICAL = "Vertical"
    HORIZONTAL = "Horizontal"


class HorizontalAlignment(Enum):
    LEFT = "Left"
    CENTER = "Center"
    RIGHT = "Right"
    STRETCH = "Stretch"


class VerticalAlignment(Enum):
    TOP = "Top"
    CENTER = "Center"
    BOTTOM = "Bottom"
    STRETCH = "Stretch"


class FontWeight(Enum):
    """Font weights, with their OpenType weight in ``weight``."""

    THIN = "Thin"
    EXTRA_LIGHT = "ExtraLight"
    LIGHT = "Light"
    SEMI_LIGHT = "SemiLight"
    NORMAL = "Normal"
    MEDIUM = "Medium"
    SEMI_BOLD = "SemiBold"
    BOLD = "Bold"
    EXTRA_BOLD = "ExtraBold"
    BLACK = "Black"
    EXTRA_BLACK = "ExtraBlack"

    @property
    def weight(self) -> int:
        return _FONT_WEIGHTS[self]


_FONT_WEIGHTS = {
    FontWeight.THIN: 100,
    FontWeight.EXTRA_LIGHT: 200,
    FontWeight.LIGHT: 300,
    FontWeight.SEMI_LIGHT: 350,
    FontWeight.NORMAL: 400,
    FontWeight.MEDIUM: 500,
    FontWeight.SEMI_BOLD: 600,
    FontWeight.BOLD: 700,
    FontWeight.EXTRA_BOLD: 800,
    FontWeight.BLACK: 900,
    FontWeight.EXTRA_BLACK: 950,
}


class TextWrapping(Enum):
    NO_WRAP = "NoWrap"
    WRAP = "Wrap"
    WRAP_WHOLE_WORDS = "WrapWholeWords"


class TextAlignment(Enum):
    LEFT = "Left"
    CENTER = "Center"
    RIGHT = "Right"
    JUSTIFY = "Justify"


class Stretch(Enum):
    NONE = "None"
    FILL = "Fill"
    UNIFORM = "Uniform"
    UNIFORM_TO_FILL = "UniformToFill"


class Visibility(Enum):
    VISIBLE = "Visible"
    COLLAPSED = "Collapsed"


class ScrollBarVisibility(Enum):
    DISABLED = "Disabled"
    AUTO = "Auto"
    HIDDEN = "Hidden"
    VISIBLE = "Visible"


class ScrollMode(Enum):
    DISABLED = "Disabled"
    ENABLED = "Enabled"
    AUTO = "Auto"


class SelectionMode(Enum):
    NONE = "None"
    SINGLE = "Single"
    MULTIPLE = "Multiple"
    EXTENDED = "Extended"


ENUM_TYPES: tuple[type[Enum], ...] = (
    Orientation,
    HorizontalAlignment,
    VerticalAlignment,
    FontWeight,
    TextWrapping,
    TextAlignment,
    Stretch,
    Visibility,
    ScrollBarVisibility,
    ScrollMode,
    SelectionMode,
)


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class Integer:
    value: int


@dataclass(frozen=True)
class Boolean:
    value: bool


@dataclass(frozen=True)
class Color:
    """A 32-bit ARGB color."""

    argb: int

    @property
    def alpha(self) -> int:
        return (self.argb >> 24) & 0xFF

    @property
    def red(self) -> int:
        return (self.argb >> 16) & 0xFF

    @property
    def green(self) -> int:
        return (self.argb >> 8) & 0xFF

    @property
    def blue(self) -> int:
        return self.argb & 0xFF

    def __repr__(self) -> str:
        return f"Color(0x{self.argb:08X})"


@dataclass(frozen=True)
class Thickness:
    """Edge sizes in left, top, right, bottom order."""

    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def uniform(cls, value: float) -> Thickness:
        return cls(value, value, value, value)

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.left, self.top, self.right, self.bottom)


@dataclass(frozen=True)
class EnumValue:
    """A symbol from one of the attribute-specific enums."""

    member: Enum

    @property
    def symbol(self) -> str:
        return self.member.value


PropertyValue = Union[Text, Number, Integer, Boolean, Color, Thickness, EnumValue]
