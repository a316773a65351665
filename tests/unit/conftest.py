"""Shared fixtures for unit tests."""

import logging
from pathlib import Path

import pytest

from httpwire.domain.file_store import FileStore


@pytest.fixture(autouse=True)
def enable_log_propagation():
    """Let httpwire records reach the root logger so caplog sees them."""
    logger = logging.getLogger("httpwire")
    old_propagate = logger.propagate
    logger.propagate = True
    yield
    logger.propagate = old_propagate


@pytest.fixture()
def file_store(tmp_path: Path) -> FileStore:
    """A FileStore rooted at a fresh temporary directory."""
    return FileStore(str(tmp_path))
