"""xaml-forge - compile declarative UI markup to construction code or live controls.

One markup description, two backends: generate Python construction code at
build time, or interpret the same markup at run time.

Example:
    from xaml_forge import compile_static, load_markup, parse_dynamic

    markup = '<StackPanel Orientation="Horizontal" Spacing="10">'
    markup += '<Button Content="OK"/></StackPanel>'

    # Validated, immutable tree
    tree = parse_dynamic(markup)

    # Build-time code generation
    code = compile_static(markup, source_name="main.xaml")
    print(code.source)

    # Run-time construction of live descriptors
    root = load_markup(markup)
    print(root.children[0].properties["Content"])
"""

from xaml_forge.backends import (
    BackendError,
    ControlDescriptor,
    DescriptorBackend,
    GeneratedCode,
    Interpreter,
    StaticCodeGenerator,
    UiBackend,
)
from xaml_forge.compiler import compile_static, interpret, load_markup, parse_dynamic
from xaml_forge.errors import (
    BackendConstructionError,
    CompileError,
    ContentModelError,
    GrammarError,
    InterpretError,
    MarkupError,
    MarkupSyntaxError,
    MismatchedTagError,
    ParseError,
    SourcePosition,
    TruncatedInputError,
    UnknownAttributeError,
    UnknownElementError,
    UnterminatedTagError,
)
from xaml_forge.markup import ControlNode, TreeBuilder, iter_events
from xaml_forge.schema import ElementKind, PropertyValue, ValueType
from xaml_forge.serialize import to_markup

__version__ = "0.1.0"

__all__ = [
    # Main API
    "compile_static",
    "interpret",
    "load_markup",
    "parse_dynamic",
    "to_markup",
    # Tree and pipeline
    "ControlNode",
    "ElementKind",
    "PropertyValue",
    "TreeBuilder",
    "ValueType",
    "iter_events",
    # Backends
    "BackendError",
    "ControlDescriptor",
    "DescriptorBackend",
    "GeneratedCode",
    "Interpreter",
    "StaticCodeGenerator",
    "UiBackend",
    # Errors
    "BackendConstructionError",
    "CompileError",
    "ContentModelError",
    "GrammarError",
    "InterpretError",
    "MarkupError",
    "MarkupSyntaxError",
    "MismatchedTagError",
    "ParseError",
    "SourcePosition",
    "TruncatedInputError",
    "UnknownAttributeError",
    "UnknownElementError",
    "UnterminatedTagError",
]
