"""
errordef.toml: project name, where definitions live, where modules go.

    [project]
    name = "myapp"
    version = "1.2.3"

    [sources]
    paths = ["errors/"]          # files or directories, relative to the manifest

    [output]
    dir = "src/myapp/errors"
    header = "Generated by errordef - DO NOT EDIT."
    init_file = true
"""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..codegen import DEFAULT_HEADER
from .errors import ErrordefError

MANIFEST_NAME = "errordef.toml"
SOURCE_SUFFIX = ".errdef"


@dataclass
class OutputConfig:
    dir: str = "generated"
    header: str = DEFAULT_HEADER
    init_file: bool = True  # __init__.py re-exporting every generated type


@dataclass
class ProjectManifest:
    name: str
    version: str
    source_paths: list[str] = field(default_factory=lambda: ["."])
    output: OutputConfig = field(default_factory=OutputConfig)


def _table(data: dict[str, Any], key: str, path: Path) -> dict[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, dict):
        raise ErrordefError(f"Invalid {path}: [{key}] must be a table")
    return value


def load_manifest(path: Path) -> ProjectManifest:
    """
    Read `path` into a ProjectManifest; absent keys take their defaults.

    Raises:
        ErrordefError: The file is missing, is not TOML, or a section is not a table
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ErrordefError(f"No {MANIFEST_NAME} found at {path}") from None
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as e:
        raise ErrordefError(f"Invalid {path}: {e}") from None

    project = _table(data, "project", path)
    out = _table(data, "output", path)
    paths = _table(data, "sources", path).get("paths", ["."])
    if isinstance(paths, str):
        paths = [paths]

    return ProjectManifest(
        name=project.get("name", path.parent.name),
        version=project.get("version", "0.0.0"),
        source_paths=list(paths),
        output=OutputConfig(
            dir=out.get("dir", OutputConfig.dir),
            header=out.get("header", DEFAULT_HEADER),
            init_file=out.get("init_file", True),
        ),
    )


def discover_source_files(root: Path, manifest: ProjectManifest) -> list[Path]:
    """
    Every .errdef file named by the manifest's source paths, resolved and sorted.

    Directories are searched recursively. Paths that do not exist are skipped.
    """
    found: set[Path] = set()
    for entry in manifest.source_paths:
        target = (root / entry).resolve()
        if target.is_file():
            found.add(target)
        elif target.is_dir():
            found.update(target.rglob(f"*{SOURCE_SUFFIX}"))
    return sorted(found)
