#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the recdiff library.

Constants are organized by category:
1. Type Definitions - Literal types shared by reports and renderers
2. Canonicalization Defaults - Line-mode comparison options
3. XML Record Defaults - Record flattening options
4. Output Formatting - Diff header labels and delimiters
5. CLI - Exit codes and configuration file names
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

DiffLineTag = Literal["context", "added", "removed"]
PositionalTag = Literal["unchanged", "added", "removed"]
ComparisonSource = Literal["lines", "xml"]
OutputFormat = Literal["text", "json"]
ColorMode = Literal["auto", "always", "never"]

# =============================================================================
# Canonicalization Defaults
# =============================================================================

DEFAULT_TRIM = True
DEFAULT_COLLAPSE_WHITESPACE = False
DEFAULT_CASE_SENSITIVE = True
DEFAULT_IGNORE_ORDER = False

# =============================================================================
# XML Record Defaults
# =============================================================================

DEFAULT_RECORD_SELECTOR = "Incident"
DEFAULT_INCLUDE_TEXT = True
DEFAULT_INCLUDE_ATTRIBUTES = True
DEFAULT_IGNORE_EMPTY_TEXT = True
DEFAULT_COLLAPSE_INNER_WHITESPACE = True

RECORD_FIELD_DELIMITER = "|"
RECORD_TEXT_STEP = "#text"
RECORD_ATTRIBUTE_PREFIX = "@"

# =============================================================================
# Output Formatting
# =============================================================================

DEFAULT_LABEL_A = "A"
DEFAULT_LABEL_B = "B"

# =============================================================================
# CLI
# =============================================================================

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4

CONFIG_ENV_VAR = "RECDIFF_CONFIG"
CONFIG_FILENAMES = [".recdiff.toml", ".recdiff.yaml", ".recdiff.yml", ".recdiff.json"]
PYPROJECT_TOOL_SECTION = "recdiff"
