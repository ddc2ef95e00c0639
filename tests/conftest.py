"""Pytest configuration.

Run pytest from this project's root. pythonpath in pyproject.toml puts both
src/ (the package) and the root (``tests.unit.syntax_builders``) on sys.path.
"""

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from callsite_rewriter.infrastructure.di.container import RewriterContainer


@pytest.fixture(autouse=True)
def _reset_container_singleton() -> Iterator[None]:
    """The pylint plugin caches a process-wide container; never leak it between tests."""
    RewriterContainer._instance = None
    yield
    RewriterContainer._instance = None


@pytest.fixture
def write_module(tmp_path: Path) -> Callable[..., Path]:
    """Write a Python module under tmp_path and return its path."""

    def _write(source: str, name: str = "sample.py") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")
        return path

    return _write
