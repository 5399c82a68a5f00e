#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/recdiff/utils/decorators.py
"""Optional-dependency checks and DEBUG-level timing.

Dependencies are declared as ``(install_name, import_name, version_spec)``
tuples, e.g. ``("defusedxml", "defusedxml.ElementTree", ">=0.7.0")``. The
install name is what pip and ``importlib.metadata`` know, the import name
is what Python imports, and an empty version spec accepts any version.
"""

from __future__ import annotations

import importlib
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, Callable, Generator, List, Optional, Sequence, Tuple

from recdiff.exceptions import DependencyError
from recdiff.utils.packages import check_version_requirement

logger = logging.getLogger(__name__)

DependencySpec = Tuple[str, str, str]


@dataclass
class DependencyProbe:
    """Outcome of importing and version-checking a set of dependencies."""

    missing: List[Tuple[str, str]] = field(default_factory=list)
    version_mismatches: List[Tuple[str, str, str]] = field(default_factory=list)
    import_error: Optional[ImportError] = None

    @property
    def satisfied(self) -> bool:
        return not (self.missing or self.version_mismatches)


def probe_dependencies(packages: Sequence[DependencySpec]) -> DependencyProbe:
    """Import each package and compare installed versions to their specs."""
    probe = DependencyProbe()
    for install_name, import_name, version_spec in packages:
        try:
            # nosemgrep: python.lang.security.audit.non-literal-import.non-literal-import
            importlib.import_module(import_name)
        except ImportError as e:
            probe.missing.append((install_name, version_spec))
            probe.import_error = probe.import_error or e
            continue

        if not version_spec:
            continue
        meets, installed = check_version_requirement(install_name, version_spec)
        if not meets:
            probe.version_mismatches.append((install_name, version_spec, installed or "unknown"))
    return probe


def is_dependency_available(install_name: str, import_name: Optional[str] = None, version_spec: str = "") -> bool:
    """Return True if a single optional dependency can be used."""
    return probe_dependencies([(install_name, import_name or install_name, version_spec)]).satisfied


def requires_dependencies(feature_name: str, packages: Sequence[DependencySpec]) -> Callable:
    """Check dependencies each time the decorated function is called.

    Parameters
    ----------
    feature_name : str
        Name shown in the error message (e.g. ``"xml-records"``)
    packages : sequence of tuple
        ``(install_name, import_name, version_spec)`` per dependency

    Raises
    ------
    DependencyError
        From the wrapped function when a package is missing or too old.
        The first ImportError is chained as the cause.

    Examples
    --------
        >>> @requires_dependencies("xml-records", [("defusedxml", "defusedxml.ElementTree", ">=0.7.0")])
        ... def parse_xml(text):
        ...     import defusedxml.ElementTree as ET
        ...     return ET.fromstring(text)

    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            probe = probe_dependencies(packages)
            if not probe.satisfied:
                logger.debug(
                    "%s is unavailable: missing=%s mismatches=%s",
                    feature_name,
                    probe.missing,
                    probe.version_mismatches,
                )
                raise DependencyError(
                    feature_name=feature_name,
                    missing_packages=probe.missing,
                    version_mismatches=probe.version_mismatches,
                    original_import_error=probe.import_error,
                ) from probe.import_error
            return func(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(log: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Log how long the ``with`` block took, at DEBUG level.

    Nothing is measured unless ``log`` has DEBUG enabled. A block that
    raises is logged as failed and the exception propagates.
    """
    if not log.isEnabledFor(logging.DEBUG):
        yield
        return

    start = time.perf_counter()
    try:
        yield
    except BaseException:
        log.debug("%s failed after %.4fs", operation, time.perf_counter() - start)
        raise
    log.debug("%s completed in %.4fs", operation, time.perf_counter() - start)
