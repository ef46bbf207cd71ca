"""Attribute-value grammar: raw attribute strings to typed property values.

Every rule rejects invalid input explicitly. Nothing is coerced or
defaulted; a value that does not match its declared type raises
:class:`~xaml_forge.errors.GrammarError`.
"""

from __future__ import annotations

import math
import re
from enum import Enum
from typing import Callable

from xaml_forge.errors import GrammarError
from xaml_forge.schema.types import (
    Boolean,
    Color,
    EnumValue,
    Integer,
    Number,
    PropertyValue,
    Text,
    Thickness,
    ValueType,
)

_NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_HEX_COLOR_RE = re.compile(r"#([0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})")

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

BOOLEAN_VALUES = {"True": True, "False": False}

# Keys are lower-case; palette names match case-insensitively.
NAMED_COLORS: dict[str, int] = {
    "black": 0xFF000000,
    "white": 0xFFFFFFFF,
    "red": 0xFFFF0000,
    "green": 0xFF008000,
    "blue": 0xFF0000FF,
    "gray": 0xFF808080,
    "transparent": 0x00FFFFFF,
}


def _parse_text(raw: str) -> Text:
    return Text(raw)


def _parse_float(raw: str) -> float:
    token = raw.strip()
    if not _NUMBER_RE.fullmatch(token):
        raise ValueError("expected a decimal number")
    value = float(token)
    if not math.isfinite(value):
        raise ValueError("number is out of range")
    return value


def _parse_number(raw: str) -> Number:
    return Number(_parse_float(raw))


def _parse_integer(raw: str) -> Integer:
    token = raw.strip()
    if not _INTEGER_RE.fullmatch(token):
        raise ValueError("expected an integer without a decimal point")
    value = int(token)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError("integer is out of the 64-bit range")
    return Integer(value)


def _parse_boolean(raw: str) -> Boolean:
    if raw not in BOOLEAN_VALUES:
        raise ValueError("expected 'True' or 'False'")
    return Boolean(BOOLEAN_VALUES[raw])


def _parse_color(raw: str) -> Color:
    token = raw.strip()
    match = _HEX_COLOR_RE.fullmatch(token)
    if match:
        digits = match.group(1)
        value = int(digits, 16)
        if len(digits) == 6:
            value |= 0xFF000000
        return Color(value)
    named = NAMED_COLORS.get(token.lower())
    if named is None:
        raise ValueError("expected #AARRGGBB, #RRGGBB or a named color")
    return Color(named)


def _parse_thickness(raw: str) -> Thickness:
    tokens = raw.split(",")
    try:
        parts = [_parse_float(token) for token in tokens]
    except ValueError as exc:
        raise ValueError(f"thickness component {exc}") from None

    if len(parts) == 1:
        return Thickness.uniform(parts[0])
    if len(parts) == 2:
        horizontal, vertical = parts
        return Thickness(horizontal, vertical, horizontal, vertical)
    if len(parts) == 4:
        return Thickness(*parts)
    raise ValueError(f"expected 1, 2 or 4 comma-separated numbers, got {len(parts)}")


_PARSERS: dict[ValueType, Callable[[str], PropertyValue]] = {
    ValueType.TEXT: _parse_text,
    ValueType.NUMBER: _parse_number,
    ValueType.INTEGER: _parse_integer,
    ValueType.BOOLEAN: _parse_boolean,
    ValueType.COLOR: _parse_color,
    ValueType.THICKNESS: _parse_thickness,
}


def parse_enum(enum_type: type[Enum], raw: str, attribute: str = "") -> EnumValue:
    """Look up ``raw`` in ``enum_type`` by its exact markup symbol."""
    for member in enum_type:
        if member.value == raw:
            return EnumValue(member)
    allowed = ", ".join(member.value for member in enum_type)
    raise GrammarError(
        attribute,
        raw,
        f"unknown {enum_type.__name__} symbol '{raw}' (expected one of: {allowed})",
    )


def parse_value(
    value_type: ValueType,
    raw: str,
    *,
    attribute: str = "",
    enum_type: type[Enum] | None = None,
) -> PropertyValue:
    """Convert a raw attribute string into a typed property value.

    Args:
        value_type: Declared type of the attribute.
        raw: Unescaped attribute text.
        attribute: Attribute name, used in error messages.
        enum_type: Symbol table, required when ``value_type`` is ENUM.

    Returns:
        The parsed PropertyValue.

    Raises:
        GrammarError: If ``raw`` is not valid for ``value_type``.
    """
    if value_type is ValueType.ENUM:
        if enum_type is None:
            raise ValueError(f"Enum attribute '{attribute}' has no symbol table")
        return parse_enum(enum_type, raw, attribute)

    try:
        return _PARSERS[value_type](raw)
    except ValueError as exc:
        raise GrammarError(attribute, raw, str(exc)) from None
