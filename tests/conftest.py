"""Pytest configuration and shared fixtures for the chunkgrep test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import logging
import os
from pathlib import Path
from typing import Generator

import pytest
from hypothesis import Phase, Verbosity, settings
from utils import POEM_LINES, cleanup_test_dir, create_test_temp_dir, write_lines

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests - full pipeline tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "search: Tests for the chunked search pipeline")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files.

    Yields
    ------
    Path
        Temporary directory path that will be cleaned up after test.

    """
    temp_path = create_test_temp_dir()
    try:
        yield temp_path
    finally:
        cleanup_test_dir(temp_path)


@pytest.fixture
def poem_lines() -> list[str]:
    """Provide the short sample used across search tests."""
    return list(POEM_LINES)


@pytest.fixture
def poem_file(tmp_path: Path, poem_lines: list[str]) -> Path:
    """Write the sample lines to a newline-terminated UTF-8 file."""
    return write_lines(tmp_path / "poem.txt", poem_lines)


@pytest.fixture
def large_lines() -> list[str]:
    """Provide a few thousand varied lines with sparse hits."""
    words = ["alpha", "beta", "cat", "gamma", "concat", "cat_", "Cat", "delta"]
    return [" ".join(words[(number + offset) % len(words)] for offset in range(number % 5 + 1)) for number in range(3000)]


@pytest.fixture
def large_file(tmp_path: Path, large_lines: list[str]) -> Path:
    """Write ``large_lines`` to disk."""
    return write_lines(tmp_path / "large.txt", large_lines)


@pytest.fixture(autouse=True)
def _reset_root_logging() -> Generator[None, None, None]:
    """Restore root logger handlers changed by ``configure_logging``."""
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)
