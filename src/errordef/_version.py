"""Version lookup for errordef."""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION = "errordef"


def get_version() -> str:
    """Version of the installed distribution, else the one in the source tree's pyproject.toml."""
    try:
        return version(DISTRIBUTION)
    except PackageNotFoundError:
        pass

    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return "0.0.0"
    return data.get("project", {}).get("version", "0.0.0")
