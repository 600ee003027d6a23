"""Shared pytest fixtures for the brizzle test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from brizzle.config import ProjectConfig
from brizzle.generator import ScaffoldGenerator
from brizzle.models import Dialect, GeneratorOptions


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Empty Next.js project root (auto-cleanup)."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def make_generator(project_dir: Path):
    """Factory for generators bound to the temporary project."""

    def _make(dialect: Dialect = Dialect.SQLITE, **options) -> ScaffoldGenerator:
        config = ProjectConfig(root=project_dir, dialect=dialect)
        return ScaffoldGenerator(config, GeneratorOptions(**options))

    return _make


@pytest.fixture
def read_file(project_dir: Path):
    """Read a file relative to the project root."""

    def _read(relative_path: str) -> str:
        return (project_dir / relative_path).read_text()

    return _read
