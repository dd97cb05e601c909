"""
Compile error definitions to Python modules.

`compile_error_def` is the core entry point: a token stream and a type
name in, the generated artifacts out. It keeps no state between calls.
The file-level helpers below split a definition file into blocks and
compile each one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .codegen import DEFAULT_HEADER, generate
from .core import ir
from .core.definitions import load_definitions, parse_definition, split_definitions
from .core.dsl_parser_impl import ExpressionParser, parse_variants
from .core.errors import ParseError, with_source_context
from .core.lexer import Token, tokenize

logger = logging.getLogger(__name__)


def compile_error_def(
    type_name: str,
    tokens: list[Token],
    file: Path | None = None,
    parse_expression: ExpressionParser | None = None,
    header: str = DEFAULT_HEADER,
) -> ir.Artifacts:
    """
    Compile the body of one error definition.

    Args:
        type_name: Name of the generated base class
        tokens: Token stream of the block body
        file: Source file path (for error reporting)
        parse_expression: Optional callback parsing one format argument
        header: Line placed in the generated module's docstring

    Returns:
        The generated artifacts

    Raises:
        ParseError: If the definition is malformed; nothing is generated
    """
    variants = parse_variants(tokens, file, parse_expression)
    return generate(ir.ErrorDefinition(name=type_name, variants=variants), header)


def compile_source(
    text: str,
    file: Path | None = None,
    header: str = DEFAULT_HEADER,
) -> list[ir.Artifacts]:
    """
    Compile every block of a definition file, failing on the first error.

    Raises:
        ParseError: With a source snippet and the failing block's name
    """
    return [generate(d, header) for d in load_definitions(text, file)]


@dataclass
class CompileResult:
    """
    Outcome of compiling one block of a file.

    Exactly one of `artifacts` and `error` is set.
    """

    name: str
    artifacts: ir.Artifacts | None = None
    error: ParseError | None = None

    @property
    def success(self) -> bool:
        return self.error is None


def compile_file(path: Path, header: str = DEFAULT_HEADER) -> list[CompileResult]:
    """
    Compile each block of a file independently.

    A malformed block yields a failed result and the remaining blocks are
    still compiled.

    Raises:
        ParseError: If the file cannot be split into blocks
    """
    text = path.read_text(encoding="utf-8")
    try:
        blocks = split_definitions(tokenize(text, path), path)
    except ParseError as e:
        raise with_source_context(e, text) from None

    results: list[CompileResult] = []
    for block in blocks:
        try:
            definition = parse_definition(block, path)
        except ParseError as e:
            logger.debug("error_def %s in %s failed: %s", block.name, path, e.message)
            results.append(CompileResult(block.name, error=with_source_context(e, text, block.name)))
            continue
        results.append(CompileResult(block.name, artifacts=generate(definition, header)))
    return results
