"""
Project-level CLI commands.

Commands for compiling, checking and formatting definition files.
"""

import logging
from pathlib import Path

import typer

from errordef.cli_ui import print_error, print_header, print_info, print_success
from errordef.codegen import DEFAULT_HEADER
from errordef.compiler import compile_file, compile_source
from errordef.core.definitions import load_definitions
from errordef.core.errors import ErrordefError, ParseError
from errordef.core.formatter import format_definition
from errordef.core.manifest import MANIFEST_NAME, discover_source_files, load_manifest
from errordef.core.strings import snake_case

logger = logging.getLogger(__name__)


def _unreadable(path: Path, error: OSError | UnicodeDecodeError) -> str:
    if isinstance(error, UnicodeDecodeError):
        return f"Cannot read {path}: not UTF-8 ({error.reason} at byte {error.start})"
    return f"Cannot read {path}: {error.strerror or error}"


def _read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ErrordefError(_unreadable(path, e)) from None


def _report(error: ErrordefError) -> None:
    label = "Parse error" if isinstance(error, ParseError) else "Error"
    typer.echo(f"{label}: {error}", err=True)


def _init_module(exports: dict[str, str], header: str) -> str:
    """Render a package __init__ re-exporting each generated type."""
    lines = ['"""', "Generated error types.", "", header, '"""', ""]
    lines.extend(f"from .{module} import {name}" for name, module in exports.items())
    lines.extend(["", "__all__ = ["])
    lines.extend(f'    "{name}",' for name in exports)
    lines.extend(["]", ""])
    return "\n".join(lines)


def build_command(
    manifest: str = typer.Option(MANIFEST_NAME, "--manifest", "-m", help="Path to errordef.toml"),
    out: str | None = typer.Option(
        None, "--out", "-o", help="Output directory (default: [output].dir of the manifest)"
    ),
) -> None:
    """
    Compile every error definition of the project into Python modules.

    Each `error_def Name` becomes <out>/<name_in_snake_case>.py. A failing
    definition is reported and skipped; the command then exits with code 1.
    """
    manifest_path = Path(manifest).resolve()
    root = manifest_path.parent

    try:
        mf = load_manifest(manifest_path)
    except ErrordefError as e:
        _report(e)
        raise typer.Exit(code=1) from None

    out_dir = Path(out) if out else root / mf.output.dir
    source_files = discover_source_files(root, mf)
    if not source_files:
        typer.echo(f"Error: no definition files found under {', '.join(mf.source_paths)}", err=True)
        raise typer.Exit(code=1)

    print_header(f"Building {mf.name} {mf.version}", f"{len(source_files)} definition file(s)")

    failed = False
    written: dict[str, str] = {}
    for path in source_files:
        try:
            results = compile_file(path, mf.output.header)
        except ParseError as e:
            _report(e)
            failed = True
            continue
        except (OSError, UnicodeDecodeError) as e:
            typer.echo(f"Error: {_unreadable(path, e)}", err=True)
            failed = True
            continue

        for result in results:
            artifacts = result.artifacts
            if artifacts is None:
                if result.error is not None:
                    _report(result.error)
                failed = True
                continue
            module_name = snake_case(artifacts.type_name)
            if artifacts.type_name in written or module_name in written.values():
                typer.echo(f"Error: module {module_name}.py already written ({path})", err=True)
                failed = True
                continue

            out_dir.mkdir(parents=True, exist_ok=True)
            target = out_dir / f"{module_name}.py"
            target.write_text(artifacts.module, encoding="utf-8")
            written[artifacts.type_name] = module_name
            logger.info("Wrote %s", target)
            print_info(f"{artifacts.type_name} -> {target}")

    if written and mf.output.init_file:
        (out_dir / "__init__.py").write_text(
            _init_module(written, mf.output.header), encoding="utf-8"
        )

    if failed:
        print_error(f"Build finished with errors ({len(written)} error type(s) written)")
        raise typer.Exit(code=1)
    print_success(f"Compiled {len(written)} error type(s) to {out_dir}")


def check_command(
    files: list[Path] = typer.Argument(..., help="Definition files to check"),
) -> None:
    """
    Parse definition files and report the first error in each.

    Nothing is generated or written.
    """
    failed = False
    for path in files:
        try:
            definitions = load_definitions(_read_source(path), path)
        except ErrordefError as e:
            _report(e)
            failed = True
            continue

        variant_count = sum(len(d.variants) for d in definitions)
        print_success(f"{path}: {len(definitions)} error type(s), {variant_count} variant(s)")

    if failed:
        raise typer.Exit(code=1)


def show_command(
    file: Path = typer.Argument(..., help="Definition file"),
    definition: str | None = typer.Option(
        None, "--definition", "-d", help="Only show the error type with this name"
    ),
) -> None:
    """
    Print the Python module generated for each definition in FILE.
    """
    try:
        artifacts = compile_source(_read_source(file), file, DEFAULT_HEADER)
    except ErrordefError as e:
        _report(e)
        raise typer.Exit(code=1) from None

    if definition is not None:
        artifacts = [a for a in artifacts if a.type_name == definition]
        if not artifacts:
            typer.echo(f"Error: no error_def named {definition} in {file}", err=True)
            raise typer.Exit(code=1)

    typer.echo("\n\n".join(a.module for a in artifacts), nl=False)


def fmt_command(
    file: Path = typer.Argument(..., help="Definition file"),
    write: bool = typer.Option(False, "--write", "-w", help="Rewrite the file in place"),
) -> None:
    """
    Print FILE with every definition in canonical form.

    Comments are not preserved.
    """
    try:
        definitions = load_definitions(_read_source(file), file)
    except ErrordefError as e:
        _report(e)
        raise typer.Exit(code=1) from None

    formatted = "\n".join(format_definition(d) for d in definitions)
    if write:
        file.write_text(formatted, encoding="utf-8")
        print_success(f"Formatted {file}")
    else:
        typer.echo(formatted, nl=False)
