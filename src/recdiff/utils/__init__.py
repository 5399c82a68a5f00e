#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/recdiff/utils/__init__.py
"""Utility modules for the recdiff package.

This package contains dependency checking and timing helpers shared by the
comparison engine.
"""

from recdiff.utils.decorators import (
    DependencyProbe,
    debug_timer,
    is_dependency_available,
    probe_dependencies,
    requires_dependencies,
)
from recdiff.utils.packages import check_version_requirement, get_package_version

__all__ = [
    "DependencyProbe",
    "check_version_requirement",
    "debug_timer",
    "get_package_version",
    "is_dependency_available",
    "probe_dependencies",
    "requires_dependencies",
]
