"""Consumers of validated control trees: code generation and interpretation."""

from xaml_forge.backends.base import BackendError, ControlHandle, UiBackend
from xaml_forge.backends.codegen import GeneratedCode, StaticCodeGenerator, format_literal
from xaml_forge.backends.descriptors import ControlDescriptor, DescriptorBackend
from xaml_forge.backends.interpreter import Interpreter, interpret

__all__ = [
    # Collaborator interface
    "BackendError",
    "ControlHandle",
    "UiBackend",
    # Static backend
    "GeneratedCode",
    "StaticCodeGenerator",
    "format_literal",
    # Runtime backend
    "ControlDescriptor",
    "DescriptorBackend",
    "Interpreter",
    "interpret",
]
