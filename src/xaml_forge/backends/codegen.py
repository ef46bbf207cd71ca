"""Static code-generation backend.

Turns a validated ControlNode tree into the source of a Python module with
one function, ``build(backend)``, that performs the same ``construct`` /
``set_property`` / ``append_child`` calls the interpreter would make, in the
same order. Generation runs at build time; the output only imports
``xaml_forge.schema``.
"""

from __future__ import annotations

import keyword
import logging
from dataclasses import dataclass
from typing import Any, Callable

from xaml_forge.markup.nodes import ControlNode
from xaml_forge.schema.registry import ElementKind
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

logger = logging.getLogger(__name__)

INDENT = "    "


@dataclass(frozen=True)
class GeneratedCode:
    """Source of a generated construction module."""

    source: str
    function_name: str
    root_kind: ElementKind
    node_count: int
    source_name: str = "<markup>"

    def load(self) -> Callable[[Any], Any]:
        """Compile the source and return its build function."""
        namespace: dict[str, Any] = {"__name__": "xaml_forge_generated"}
        code = compile(self.source, self.source_name, "exec")
        exec(code, namespace)
        return namespace[self.function_name]


def format_literal(value: PropertyValue) -> str:
    """Render a property value as a Python expression."""
    if isinstance(value, Text):
        return f"Text({value.value!r})"
    if isinstance(value, Number):
        return f"Number({value.value!r})"
    if isinstance(value, Integer):
        return f"Integer({value.value!r})"
    if isinstance(value, Boolean):
        return f"Boolean({value.value!r})"
    if isinstance(value, Color):
        return f"Color(0x{value.argb:08X})"
    if isinstance(value, Thickness):
        return "Thickness({!r}, {!r}, {!r}, {!r})".format(*value.as_tuple())
    if isinstance(value, EnumValue):
        return f"EnumValue({type(value.member).__name__}.{value.member.name})"
    raise TypeError(f"Cannot generate a literal for {value!r}")


def _value_imports(value: PropertyValue) -> set[str]:
    names = {type(value).__name__}
    if isinstance(value, EnumValue):
        names.add(type(value.member).__name__)
    return names


class StaticCodeGenerator:
    """Generates construction code for validated control trees.

    Args:
        function_name: Name of the generated build function.
        source_name: Markup file name, recorded in the module header.
    """

    def __init__(self, function_name: str = "build", source_name: str = "<markup>"):
        if not function_name.isidentifier() or keyword.iskeyword(function_name):
            raise ValueError(f"Invalid function name: {function_name!r}")
        self.function_name = function_name
        self.source_name = source_name
        self._counter = 0

    def generate(self, root: ControlNode) -> GeneratedCode:
        """Generate the module source for ``root``."""
        self._counter = 0
        body: list[str] = []
        root_var = self._emit_node(root, body)

        imports: set[str] = set()
        for node in root.walk():
            for value in node.properties.values():
                imports |= _value_imports(value)

        lines = [
            f"# Generated by xaml-forge from {self.source_name!r}. Do not edit.",
            "",
            "from xaml_forge.schema.registry import ElementKind",
        ]
        if imports:
            lines.append("from xaml_forge.schema.types import (")
            lines.extend(f"{INDENT}{name}," for name in sorted(imports))
            lines.append(")")
        lines.extend([
            "",
            "",
            f"def {self.function_name}(backend):",
            f'{INDENT}"""Construct the <{root.name}> tree and return its root handle."""',
        ])
        lines.extend(f"{INDENT}{line}" for line in body)
        lines.append(f"{INDENT}return {root_var}")
        lines.append("")

        node_count = root.node_count
        logger.debug(
            "Generated %s() for <%s> with %d nodes", self.function_name, root.name, node_count
        )
        return GeneratedCode(
            source="\n".join(lines),
            function_name=self.function_name,
            root_kind=root.kind,
            node_count=node_count,
            source_name=self.source_name,
        )

    def _emit_node(self, root: ControlNode, out: list[str]) -> str:
        root_var = self._emit_construction(root, out)
        # (node, variable, children still to emit) for every open element
        stack = [(root, root_var, iter(root.children))]
        while stack:
            node, var, children = stack[-1]
            child = next(children, None)
            if child is not None:
                stack.append((child, self._emit_construction(child, out), iter(child.children)))
                continue
            stack.pop()
            out.append(f"# </{node.name}>")
            if stack:
                out.append(f"backend.append_child({stack[-1][1]}, {var})")
        return root_var

    def _emit_construction(self, node: ControlNode, out: list[str]) -> str:
        self._counter += 1
        var = f"{node.kind.name.lower()}_{self._counter}"

        opening = f"# <{node.name}>"
        if node.position is not None:
            opening += f" line {node.position.line}"
        out.append(opening)
        out.append(f"{var} = backend.construct(ElementKind.{node.kind.name})")
        for name, value in node.properties.items():
            out.append(f"backend.set_property({var}, {name!r}, {format_literal(value)})")
        return var
