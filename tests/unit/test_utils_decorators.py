"""Tests for dependency checking and timing helpers."""

import logging
import sys

import pytest

from recdiff.exceptions import DependencyError
from recdiff.utils import (
    check_version_requirement,
    debug_timer,
    get_package_version,
    is_dependency_available,
    probe_dependencies,
    requires_dependencies,
)


@pytest.mark.unit
class TestRequiresDependencies:
    """Test the requires_dependencies decorator."""

    def test_available_dependency_runs_function(self):
        """The wrapped function runs when every import succeeds."""

        @requires_dependencies("json-feature", [("json", "json", "")])
        def wrapped(value):
            return value * 2

        assert wrapped(21) == 42

    def test_missing_dependency_raises(self, monkeypatch):
        """A missing module raises DependencyError naming the package."""
        monkeypatch.setitem(sys.modules, "recdiff_missing_module", None)

        @requires_dependencies("demo", [("missing-dist", "recdiff_missing_module", ">=1.0")])
        def wrapped():
            return "called"

        with pytest.raises(DependencyError) as exc_info:
            wrapped()

        error = exc_info.value
        assert error.feature_name == "demo"
        assert error.missing_packages == [("missing-dist", ">=1.0")]
        assert isinstance(error.original_import_error, ImportError)
        assert "pip install" in str(error)

    def test_version_mismatch(self):
        """An installed package that is too old is reported as a mismatch."""

        @requires_dependencies("packaging-feature", [("packaging", "packaging", ">=9999")])
        def wrapped():
            return "called"

        with pytest.raises(DependencyError) as exc_info:
            wrapped()

        assert exc_info.value.missing_packages == []
        assert exc_info.value.version_mismatches[0][:2] == ("packaging", ">=9999")
        assert "version mismatches" in str(exc_info.value)

    def test_preserves_metadata(self):
        """functools.wraps keeps the name and docstring."""

        @requires_dependencies("json-feature", [("json", "json", "")])
        def documented():
            """Docstring."""

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docstring."


@pytest.mark.unit
class TestPackages:
    """Test installed-package version helpers."""

    def test_installed_version(self):
        """packaging is a dependency and must report a version."""
        assert get_package_version("packaging")

    def test_unknown_distribution(self):
        """Unknown distributions have no version."""
        assert get_package_version("recdiff-definitely-not-installed") is None
        assert check_version_requirement("recdiff-definitely-not-installed", ">=1") == (False, None)

    def test_requirement_met(self):
        """Any installed version satisfies >=0."""
        meets, installed = check_version_requirement("packaging", ">=0")
        assert meets is True
        assert installed == get_package_version("packaging")

    def test_invalid_specifier(self):
        """A malformed specifier raises ValueError."""
        with pytest.raises(ValueError, match="Invalid version specifier"):
            check_version_requirement("packaging", "not a spec")


@pytest.mark.unit
class TestDebugTimer:
    """Test the debug_timer context manager."""

    def test_logs_when_debug_enabled(self, caplog):
        """Elapsed time is logged at DEBUG."""
        logger = logging.getLogger("recdiff.tests.timer")
        with caplog.at_level(logging.DEBUG, logger="recdiff.tests.timer"):
            with debug_timer(logger, "Sample operation"):
                pass

        assert any("Sample operation completed in" in record.message for record in caplog.records)

    def test_silent_when_debug_disabled(self, caplog):
        """Nothing is logged above DEBUG."""
        logger = logging.getLogger("recdiff.tests.timer")
        with caplog.at_level(logging.INFO, logger="recdiff.tests.timer"):
            with debug_timer(logger, "Sample operation"):
                pass

        assert not caplog.records

    def test_exceptions_propagate(self):
        """Errors raised inside the block are not swallowed."""
        logger = logging.getLogger("recdiff.tests.timer")
        with pytest.raises(RuntimeError):
            with debug_timer(logger, "Failing operation"):
                raise RuntimeError("boom")

    def test_failure_is_logged(self, caplog):
        """A failing block is logged as failed."""
        logger = logging.getLogger("recdiff.tests.timer")
        with caplog.at_level(logging.DEBUG, logger="recdiff.tests.timer"):
            with pytest.raises(ValueError):
                with debug_timer(logger, "Broken operation"):
                    raise ValueError("bad")

        assert any("Broken operation failed after" in record.message for record in caplog.records)


@pytest.mark.unit
class TestProbeDependencies:
    """Test dependency probing."""

    def test_all_satisfied(self):
        """Stdlib modules without a version spec are always satisfied."""
        probe = probe_dependencies([("json", "json", ""), ("re", "re", "")])
        assert probe.satisfied
        assert probe.import_error is None

    def test_collects_every_problem(self, monkeypatch):
        """Missing packages and mismatches are both collected."""
        monkeypatch.setitem(sys.modules, "recdiff_missing_module", None)
        probe = probe_dependencies(
            [("missing-dist", "recdiff_missing_module", ""), ("packaging", "packaging", "<0.1")]
        )

        assert not probe.satisfied
        assert probe.missing == [("missing-dist", "")]
        assert [name for name, _, _ in probe.version_mismatches] == ["packaging"]
        assert isinstance(probe.import_error, ImportError)

    def test_is_dependency_available(self, monkeypatch):
        """Single-package convenience check."""
        assert is_dependency_available("packaging")
        monkeypatch.setitem(sys.modules, "recdiff_missing_module", None)
        assert not is_dependency_available("missing-dist", "recdiff_missing_module")
