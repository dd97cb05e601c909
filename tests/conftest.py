"""Shared pytest fixtures for errordef tests."""

import types
from collections.abc import Callable
from pathlib import Path

import pytest

from errordef.compiler import compile_source


def load_generated(source: str, name: str = "generated_errors") -> types.ModuleType:
    """Execute generated source as a fresh module."""
    module = types.ModuleType(name)
    exec(compile(source, f"<{name}>", "exec"), module.__dict__)
    return module


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def example_path(fixtures_dir: Path) -> Path:
    """Return path to the ExampleError definition file."""
    return fixtures_dir / "example.errdef"


@pytest.fixture
def example_source(example_path: Path) -> str:
    return example_path.read_text(encoding="utf-8")


@pytest.fixture
def load_module() -> Callable[[str], types.ModuleType]:
    """Return a loader that executes generated module source."""
    return load_generated


@pytest.fixture
def example_module(example_source: str, example_path: Path) -> types.ModuleType:
    """Compile the ExampleError definition and load the generated module."""
    (artifacts,) = compile_source(example_source, example_path)
    return load_generated(artifacts.module, "example_error")
