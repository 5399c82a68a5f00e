"""Test utilities for the recdiff test suite."""

import shutil
import tempfile
from pathlib import Path


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp())


def cleanup_test_dir(temp_dir: Path) -> None:
    """Clean up test directory and files."""
    if temp_dir.exists():
        shutil.rmtree(temp_dir)


def write_text_file(directory: Path, name: str, content: str) -> Path:
    """Write ``content`` to ``directory/name`` as UTF-8 and return the path."""
    path = directory / name
    path.write_text(content, encoding="utf-8", newline="")
    return path
