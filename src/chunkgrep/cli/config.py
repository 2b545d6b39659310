#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the chunkgrep CLI.

Settings live under a ``search`` table, in a dedicated ``.chunkgrep.*`` file
or in the ``[tool.chunkgrep]`` table of a ``pyproject.toml``::

    [search]
    workers = 8
    executor = "thread"
    case_sensitive = false

Loader failures are reported as :class:`argparse.ArgumentTypeError` so the
CLI can treat them like any other bad argument.
"""

import argparse
import json
import logging
import sys
from dataclasses import fields
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import yaml

from chunkgrep.options.search import SearchOptions

logger = logging.getLogger(__name__)

DEDICATED_CONFIG_FILENAMES = (".chunkgrep.toml", ".chunkgrep.yaml", ".chunkgrep.yml", ".chunkgrep.json")
PYPROJECT_FILENAME = "pyproject.toml"
SEARCH_SECTION = "search"


def _read_toml(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in config file {config_path}: {e}") from e


def _read_json(config_path: Path) -> Any:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid JSON in config file {config_path}: {e}") from e


def _read_yaml(config_path: Path) -> Any:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise argparse.ArgumentTypeError(f"Invalid YAML in config file {config_path}: {e}") from e


_READERS: Dict[str, Callable[[Path], Any]] = {
    ".toml": _read_toml,
    ".json": _read_json,
    ".yaml": _read_yaml,
    ".yml": _read_yaml,
}


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Return the ``[tool.chunkgrep]`` table of a pyproject file, or an empty dict."""
    section = _read_toml(pyproject_path).get("tool", {}).get("chunkgrep", {})
    if not isinstance(section, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.chunkgrep] section in {pyproject_path} must be a table, got {type(section).__name__}"
        )
    return section


def _dedicated_config_in(directory: Path) -> Optional[Path]:
    for filename in DEDICATED_CONFIG_FILENAMES:
        candidate = directory / filename
        if candidate.is_file():
            return candidate
    return None


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest configuration file from ``start_dir`` up to the filesystem root.

    In each directory the dedicated files are checked first, in the order of
    ``DEDICATED_CONFIG_FILENAMES``, then a ``pyproject.toml`` that carries a
    non-empty ``[tool.chunkgrep]`` table. Unparseable pyproject files are
    skipped.

    Parameters
    ----------
    start_dir : Path, optional
        Directory to start from, defaults to the current working directory

    Returns
    -------
    Path or None
        First configuration file found, or None

    """
    current = (start_dir or Path.cwd()).resolve()

    for directory in (current, *current.parents):
        dedicated = _dedicated_config_in(directory)
        if dedicated is not None:
            return dedicated

        pyproject_path = directory / PYPROJECT_FILENAME
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except (argparse.ArgumentTypeError, OSError) as e:
                logger.debug("Skipping unreadable %s: %s", pyproject_path, e)

    return None


def discover_config_file() -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    The working directory and its parents are searched first, then the
    user's home directory (dedicated files only).
    """
    found = find_config_in_parents()
    if found is not None:
        return found
    return _dedicated_config_in(Path.home())


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load a configuration mapping from a TOML, YAML, JSON or pyproject file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration mapping

    Raises
    ------
    argparse.ArgumentTypeError
        If the file is missing, has an unsupported extension, cannot be
        parsed, or does not hold a mapping at its root

    Examples
    --------
    >>> config = load_config_file(".chunkgrep.toml")
    >>> config["search"]["workers"]
    8

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")
    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    if config_path.name.lower() == PYPROJECT_FILENAME:
        return _load_pyproject_section(config_path)

    ext = config_path.suffix.lower()
    reader = _READERS.get(ext)
    if reader is None:
        raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml")

    try:
        config = reader(config_path)
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading config file {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"Config file {config_path} must contain a mapping at root level, got {type(config).__name__}"
        )

    logger.debug("Loaded configuration from %s", config_path)
    return config


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge ``override`` onto ``base``; nested tables merge key by key.

    Examples
    --------
    >>> merge_configs({"search": {"workers": 2, "fuzzy": True}}, {"search": {"workers": 8}})
    {'search': {'workers': 8, 'fuzzy': True}}

    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value
    return result


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> Dict[str, Any]:
    """Load configuration from the highest-priority source available.

    Priority order (highest to lowest):
    1. Explicit config file path (``--config``)
    2. Path from the ``CHUNKGREP_CONFIG`` environment variable
    3. Auto-discovered config file

    Returns an empty dict when no source is found.

    Raises
    ------
    argparse.ArgumentTypeError
        If a config file is specified or discovered but cannot be loaded

    """
    if explicit_path:
        return load_config_file(explicit_path)

    if env_var_path:
        return load_config_file(env_var_path)

    discovered_path = discover_config_file()
    if discovered_path:
        return load_config_file(discovered_path)

    return {}


def get_config_search_paths() -> list[Path]:
    """Return representative config paths in search order.

    The real search also walks every parent of the working directory.
    """
    cwd = Path.cwd()
    home = Path.home()
    return [
        *(cwd / filename for filename in DEDICATED_CONFIG_FILENAMES),
        cwd / PYPROJECT_FILENAME,
        *(home / filename for filename in DEDICATED_CONFIG_FILENAMES),
    ]


def apply_search_config(options: SearchOptions, config: Mapping[str, Any]) -> SearchOptions:
    """Apply the ``search`` table of ``config`` to ``options``.

    Keys that are not ``SearchOptions`` fields are logged and ignored.

    Raises
    ------
    argparse.ArgumentTypeError
        If the ``search`` entry is not a table
    ValueError
        If a value fails ``SearchOptions`` validation

    """
    section = config.get(SEARCH_SECTION) or {}
    if not isinstance(section, Mapping):
        raise argparse.ArgumentTypeError(f"[{SEARCH_SECTION}] must be a table, got {type(section).__name__}")

    valid_fields = {field.name for field in fields(SearchOptions)}
    unknown = sorted(set(section) - valid_fields)
    if unknown:
        logger.warning("Ignoring unknown [%s] settings: %s", SEARCH_SECTION, ", ".join(unknown))

    filtered = {key: value for key, value in section.items() if key in valid_fields}
    if not filtered:
        return options
    return options.create_updated(**filtered)
