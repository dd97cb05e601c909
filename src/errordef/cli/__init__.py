"""
errordef command line.

`errordef build` compiles the project described by errordef.toml;
`check`, `show` and `fmt` work on individual .errdef files. The command
bodies live in cli/project.py.
"""

import logging
import platform
import sys

import typer

from errordef._version import get_version
from errordef.cli.project import build_command, check_command, fmt_command, show_command

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

app = typer.Typer(
    help="""Compile `error_def` blocks into Python exception modules.

Typical use:
  errordef check errors/app.errdef   # report syntax errors
  errordef show errors/app.errdef    # print the generated module
  errordef build                     # compile everything errordef.toml lists
""",
    no_args_is_help=True,
)

for _name, _command in (
    ("build", build_command),
    ("check", check_command),
    ("show", show_command),
    ("fmt", fmt_command),
):
    app.command(name=_name)(_command)


def version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(f"errordef version {get_version()}")
    typer.echo(f"{platform.python_implementation()} {platform.python_version()} ({platform.system()})")
    raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Print the errordef and Python versions, then exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Debug logging from the parser and generators"),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT)


def main(argv: list[str] | None = None) -> None:
    """Console-script entry point."""
    app(args=sys.argv[1:] if argv is None else argv, standalone_mode=True)


__all__ = ["app", "main", "version_callback"]
