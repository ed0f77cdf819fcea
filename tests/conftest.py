"""Shared fixtures for the test suite."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Callable, Dict

import pytest

from utils.cache import file_cache
from utils.log import PROJECT_LOGGERS


@pytest.fixture(autouse=True)
def clear_file_cache():
    """Each test starts with an empty content cache."""
    file_cache.clear()
    yield
    file_cache.clear()


@pytest.fixture
def workspace():
    """A temporary workspace root, with symlinks resolved."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(os.path.realpath(tmpdir))


@pytest.fixture
def write(workspace) -> Callable[[Dict[str, str]], Path]:
    """Create files (relative path -> content) under the workspace."""

    def _write(files: Dict[str, str]) -> Path:
        for relative, content in files.items():
            path = workspace / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return workspace

    return _write


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo handlers installed by configure_logging()."""
    yield
    for name in PROJECT_LOGGERS:
        package_logger = logging.getLogger(name)
        package_logger.handlers.clear()
        package_logger.setLevel(logging.NOTSET)
        package_logger.propagate = True
