#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the recdiff CLI.

Settings can live in ``.recdiff.toml``, ``.recdiff.yaml``/``.yml``,
``.recdiff.json`` or a ``[tool.recdiff]`` table of ``pyproject.toml``. Keys
are the :class:`~recdiff.options.CompareOptions` fields, flat or grouped in
``line``/``xml`` tables, plus the output keys listed in ``CLI_KEYS``::

    # .recdiff.toml
    ignore_order = true
    format = "json"

    [line]
    case_sensitive = false

    [xml]
    record_selector = "Incident, Event"
"""

import argparse
import json
import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Callable, Dict, Iterator, NamedTuple, Optional, Tuple

import yaml

from recdiff.constants import CONFIG_ENV_VAR, CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION
from recdiff.options.compare import CompareOptions

logger = logging.getLogger(__name__)

CLI_KEYS = ("format", "color", "positional", "rich")


class _ConfigFormat(NamedTuple):
    label: str
    binary: bool
    load: Callable[[Any], Any]
    decode_error: type


_FORMATS: Dict[str, _ConfigFormat] = {
    ".toml": _ConfigFormat("TOML", True, tomllib.load, tomllib.TOMLDecodeError),
    ".yaml": _ConfigFormat("YAML", False, yaml.safe_load, yaml.YAMLError),
    ".yml": _ConfigFormat("YAML", False, yaml.safe_load, yaml.YAMLError),
    ".json": _ConfigFormat("JSON", False, json.load, json.JSONDecodeError),
}


def _load_mapping(config_path: Path, fmt: _ConfigFormat) -> Dict[str, Any]:
    """Parse ``config_path`` with ``fmt`` and require a mapping at the top.

    An empty YAML document (or a JSON ``null``) is an empty configuration.

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be read or parsed, or is not a mapping

    """
    try:
        if fmt.binary:
            with open(config_path, "rb") as f:
                data = fmt.load(f)
        else:
            with open(config_path, "r", encoding="utf-8") as f:
                data = fmt.load(f)
    except fmt.decode_error as e:
        raise argparse.ArgumentTypeError(f"Invalid {fmt.label} in config file {config_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise argparse.ArgumentTypeError(f"Error reading {fmt.label} config {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise argparse.ArgumentTypeError(
            f"{fmt.label} config file {config_path} must contain a mapping, got {type(data).__name__}"
        )
    return data


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Return the ``[tool.recdiff]`` table of a pyproject.toml ({} if absent)."""
    data = _load_mapping(pyproject_path, _FORMATS[".toml"])
    section = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION, {})
    if not isinstance(section, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] in {pyproject_path} must be a table, got {type(section).__name__}"
        )
    return section


def _has_pyproject_section(pyproject_path: Path) -> bool:
    try:
        return bool(_load_pyproject_section(pyproject_path))
    except argparse.ArgumentTypeError as e:
        logger.debug("Skipping unreadable %s: %s", pyproject_path, e)
        return False


def _config_in_directory(directory: Path, include_pyproject: bool = True) -> Optional[Path]:
    for filename in CONFIG_FILENAMES:
        candidate = directory / filename
        if candidate.is_file():
            return candidate

    if include_pyproject:
        pyproject_path = directory / "pyproject.toml"
        if pyproject_path.is_file() and _has_pyproject_section(pyproject_path):
            return pyproject_path
    return None


def _walk_up(start_dir: Optional[Path]) -> Iterator[Path]:
    current = (start_dir or Path.cwd()).resolve()
    yield current
    yield from current.parents


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest configuration file at or above ``start_dir``.

    In each directory the dedicated files are checked in ``CONFIG_FILENAMES``
    order, then ``pyproject.toml`` if it has a ``[tool.recdiff]`` table.
    Unreadable pyproject files are skipped.

    Parameters
    ----------
    start_dir : Path, optional
        Directory to start from; the current working directory by default

    Returns
    -------
    Path or None
        The first configuration file found

    """
    for directory in _walk_up(start_dir):
        found = _config_in_directory(directory)
        if found is not None:
            return found
    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file up the directory tree, then in the home directory."""
    return find_config_in_parents(start_dir) or _config_in_directory(Path.home(), include_pyproject=False)


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load a configuration file, choosing the parser from its name.

    Parameters
    ----------
    config_path : Path or str
        A ``.toml``, ``.yaml``, ``.yml`` or ``.json`` file, or a
        ``pyproject.toml`` whose ``[tool.recdiff]`` table is returned

    Returns
    -------
    dict
        The configuration mapping

    Raises
    ------
    argparse.ArgumentTypeError
        If the file is missing, has an unsupported extension or is invalid

    """
    path = Path(config_path)
    if not path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {path}")
    if not path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {path}")

    if path.name.lower() == "pyproject.toml":
        return _load_pyproject_section(path)

    fmt = _FORMATS.get(path.suffix.lower())
    if fmt is None:
        raise argparse.ArgumentTypeError(
            f"Unsupported config file format: {path.suffix or path.name}. Use .toml, .yaml, .yml or .json"
        )
    return _load_mapping(path, fmt)


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``base`` updated with ``override``, merging nested tables.

    Neither argument is modified.

    Examples
    --------
    >>> merge_configs({"line": {"trim": False}, "format": "text"}, {"line": {"case_sensitive": False}})
    {'line': {'trim': False, 'case_sensitive': False}, 'format': 'text'}

    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_configs(current, value)
        else:
            merged[key] = value
    return merged


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> Dict[str, Any]:
    """Load the configuration that applies to this run.

    The first of these wins: ``--config``, the ``RECDIFF_CONFIG`` path, a
    discovered file. No configuration at all gives an empty dict.

    Raises
    ------
    argparse.ArgumentTypeError
        If the chosen file cannot be loaded

    """
    for origin, path in (("--config", explicit_path), (CONFIG_ENV_VAR, env_var_path)):
        if path:
            logger.debug("Loading config from %s: %s", origin, path)
            return load_config_file(path)

    discovered = discover_config_file()
    if discovered is None:
        return {}
    logger.debug("Discovered config file: %s", discovered)
    return load_config_file(discovered)


def split_config(config: Dict[str, Any]) -> Tuple[CompareOptions, Dict[str, Any]]:
    """Separate output settings from comparison options.

    Returns
    -------
    tuple
        ``(CompareOptions, cli_settings)`` where ``cli_settings`` holds the
        ``CLI_KEYS`` present in ``config``

    Raises
    ------
    ValidationError
        If a comparison option is unknown or has the wrong type

    """
    cli_settings = {key: config[key] for key in CLI_KEYS if key in config}
    option_data = {key: value for key, value in config.items() if key not in CLI_KEYS}
    return CompareOptions.from_dict(option_data), cli_settings
