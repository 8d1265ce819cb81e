"""Pytest configuration and fixtures for jjconflict tests."""

import tempfile
from pathlib import Path

import pytest

from jjconflict.core.log import ConsoleSink, setup_logger


@pytest.fixture(autouse=True, scope="session")
def configure_logging():
    """Configure console-only logging for the test session."""
    test_log_root = Path(tempfile.gettempdir()) / "jjconflict-tests"
    setup_logger(
        log_root=test_log_root,
        session_name="test",
        console=ConsoleSink(level="debug"),
    )


@pytest.fixture
def conflict_file(tmp_path):
    """A file containing one diff3-style conflict."""
    path = tmp_path / "conflicted.txt"
    path.write_text(
        "before\n"
        "<<<<<<< HEAD\n"
        "ours\n"
        "||||||| base\n"
        "base line\n"
        "=======\n"
        "theirs\n"
        ">>>>>>> branch\n"
        "after\n"
    )
    return path


@pytest.fixture
def clean_file(tmp_path):
    """A file without conflict markers."""
    path = tmp_path / "clean.txt"
    path.write_text("line 1\nline 2\n")
    return path
