"""
Status output for the errordef CLI.

Progress and results go to stdout, failures to stderr. Generated source
is echoed plain by the commands so it can be piped.
"""

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

THEME = Theme(
    {
        "errordef.heading": "bold bright_cyan",
        "errordef.detail": "bright_black",
        "errordef.ok": "bold green",
        "errordef.fail": "bold red",
        "errordef.step": "cyan",
    }
)

console = Console(theme=THEME, soft_wrap=True)
err_console = Console(theme=THEME, stderr=True, soft_wrap=True)


def _line(target: Console, style: str, text: str) -> None:
    target.print(f"[{style}]{escape(text)}[/]")


def print_header(title: str, subtitle: str = "") -> None:
    _line(console, "errordef.heading", title)
    if subtitle:
        _line(console, "errordef.detail", subtitle)


def print_success(message: str) -> None:
    _line(console, "errordef.ok", f"✓ {message}")


def print_error(message: str) -> None:
    _line(err_console, "errordef.fail", f"✗ {message}")


def print_info(message: str) -> None:
    """Indented progress line, one per file written."""
    _line(console, "errordef.step", f"  {message}")
