"""
errordef - declarative error types for Python.

Compiles a compact notation describing a family of error variants into a
Python module: an exception base class, one subclass per variant, debug
and display text, a fixed description, an optional cause and conversion
constructors.
"""

from __future__ import annotations

from ._version import get_version
from .codegen import generate, render_module
from .compiler import CompileResult, compile_error_def, compile_file, compile_source

# Re-export commonly used types for convenience
from .core import ir
from .core.definitions import load_definitions
from .core.dsl_parser_impl import parse_variants, parse_variants_text
from .core.errors import ErrordefError, ParseError, TemplateError
from .core.formatter import format_definition, format_variants
from .core.lexer import tokenize

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "CompileResult",
    "ErrordefError",
    "ParseError",
    "TemplateError",
    "compile_error_def",
    "compile_file",
    "compile_source",
    "format_definition",
    "format_variants",
    "generate",
    "load_definitions",
    "parse_variants",
    "parse_variants_text",
    "render_module",
    "tokenize",
]
