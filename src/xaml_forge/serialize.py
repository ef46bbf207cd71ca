"""Write control trees back out as canonical markup."""

from __future__ import annotations

from lxml import etree

from xaml_forge.markup.nodes import ControlNode
from xaml_forge.schema.types import (
    Boolean,
    Color,
    EnumValue,
    Integer,
    Number,
    PropertyValue,
    Text,
    Thickness,
)


def format_number(value: float) -> str:
    """Shortest markup spelling of a number that parses back to the same float."""
    if value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(value)


def format_value(value: PropertyValue) -> str:
    """Convert a property value back to its raw attribute string."""
    if isinstance(value, Text):
        return value.value
    if isinstance(value, Number):
        return format_number(value.value)
    if isinstance(value, Integer):
        return str(value.value)
    if isinstance(value, Boolean):
        return "True" if value.value else "False"
    if isinstance(value, Color):
        return f"#{value.argb:08X}"
    if isinstance(value, Thickness):
        left, top, right, bottom = value.as_tuple()
        if left == top == right == bottom:
            parts: tuple[float, ...] = (left,)
        elif left == right and top == bottom:
            parts = (left, top)
        else:
            parts = (left, top, right, bottom)
        return ",".join(format_number(part) for part in parts)
    if isinstance(value, EnumValue):
        return value.symbol
    raise TypeError(f"Cannot format property value {value!r}")


def to_element(node: ControlNode) -> etree._Element:
    """Build an lxml element for ``node`` and its subtree."""
    root = etree.Element(node.name)
    stack = [(node, root)]
    while stack:
        node, element = stack.pop()
        for name, value in node.properties.items():
            element.set(name, format_value(value))
        children = [(child, etree.SubElement(element, child.name)) for child in node.children]
        stack.extend(reversed(children))
    return root


def to_markup(node: ControlNode, pretty: bool = True) -> str:
    """Serialize a control tree to markup that parses back to an equal tree."""
    return etree.tostring(to_element(node), encoding="unicode", pretty_print=pretty)
