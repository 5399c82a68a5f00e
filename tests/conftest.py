"""Pytest configuration and shared fixtures for the recdiff test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import logging
import os
from pathlib import Path
from typing import Generator

import pytest
from utils import cleanup_test_dir, create_test_temp_dir

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=20)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )

    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # Hypothesis not installed, property tests will be skipped
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests - full pipeline tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "property: Property-based tests using Hypothesis")


@pytest.fixture(autouse=True)
def reset_recdiff_logger() -> Generator[None, None, None]:
    """Undo ``configure_logging`` so caplog sees recdiff records in every test."""
    yield
    package_logger = logging.getLogger("recdiff")
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


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
def isolated_config(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in an empty directory with no discoverable configuration.

    The working directory and home directory both point at ``temp_dir`` and
    ``RECDIFF_CONFIG`` is unset.
    """
    monkeypatch.chdir(temp_dir)
    monkeypatch.setenv("HOME", str(temp_dir))
    monkeypatch.delenv("RECDIFF_CONFIG", raising=False)
    return temp_dir


@pytest.fixture
def incident_xml_a() -> str:
    """Two incident records."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<Incidents>
  <Incident id="1" kind="fire">
    <Unit>E12</Unit>
    <Address>12 Main St</Address>
  </Incident>
  <Incident id="2" kind="medical">
    <Unit>M3</Unit>
  </Incident>
</Incidents>
"""


@pytest.fixture
def incident_xml_b() -> str:
    """The records of ``incident_xml_a`` reordered, with attributes and children shuffled."""
    return """<Incidents>
  <Incident kind="medical" id="2"><Unit>M3</Unit></Incident>
  <Incident kind="fire" id="1">
    <Address>12   Main St</Address>
    <Unit>E12</Unit>
  </Incident>
</Incidents>"""
