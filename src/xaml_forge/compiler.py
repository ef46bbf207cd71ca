"""Public entry points shared by the static and runtime paths.

Both paths run the same tokenizer, grammar and tree builder; they differ
only in what happens to the validated tree.
"""

from __future__ import annotations

import logging

from xaml_forge.backends.base import ControlHandle, UiBackend
from xaml_forge.backends.codegen import GeneratedCode, StaticCodeGenerator
from xaml_forge.backends.descriptors import DescriptorBackend
from xaml_forge.backends.interpreter import interpret
from xaml_forge.diagnostics import format_diagnostic
from xaml_forge.errors import CompileError, ParseError
from xaml_forge.markup.builder import parse_markup
from xaml_forge.markup.nodes import ControlNode

logger = logging.getLogger(__name__)

__all__ = ["compile_static", "interpret", "load_markup", "parse_dynamic"]


def parse_dynamic(markup: str) -> ControlNode:
    """Parse markup into a validated, immutable ControlNode tree.

    Raises:
        ParseError: For the first syntax, schema or grammar problem.
    """
    return parse_markup(markup)


def compile_static(
    markup: str,
    *,
    source_name: str = "<markup>",
    function_name: str = "build",
) -> GeneratedCode:
    """Compile markup into construction code at build time.

    Args:
        markup: Markup text.
        source_name: Name of the markup source, used in diagnostics.
        function_name: Name of the generated build function.

    Returns:
        The generated module.

    Raises:
        CompileError: With a diagnostic naming the offending fragment. No
            code is generated for markup with errors.
    """
    try:
        tree = parse_markup(markup)
    except ParseError as exc:
        diagnostic = format_diagnostic(exc, markup, source_name)
        logger.debug("Compilation of %s failed: %s", source_name, exc)
        raise CompileError(exc, diagnostic) from exc

    generator = StaticCodeGenerator(function_name=function_name, source_name=source_name)
    return generator.generate(tree)


def load_markup(markup: str, backend: UiBackend | None = None) -> ControlHandle:
    """Parse markup at run time and build it through ``backend``.

    Args:
        markup: Markup text, e.g. read from a user-editable resource.
        backend: UI backend to drive; a DescriptorBackend when omitted.

    Returns:
        The root handle created by the backend.

    Raises:
        ParseError: If the markup is invalid.
        BackendConstructionError: If the backend rejects a call.
    """
    if backend is None:
        backend = DescriptorBackend()
    return interpret(parse_markup(markup), backend)
