#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for mdscroll.

Preferences come from three layers, lowest priority first:

1. ``ViewerOptions`` defaults
2. A configuration file: an explicit path, or the first of
   ``.mdscroll.toml``, ``.mdscroll.yaml``, ``.mdscroll.yml``,
   ``.mdscroll.json`` or a ``pyproject.toml`` with a ``[tool.mdscroll]``
   table found walking up from the working directory, then the same
   dedicated files in the home directory
3. ``MDSCROLL_*`` environment variables
"""

import json
import logging
import os
import sys
from dataclasses import fields
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Mapping, Optional

import yaml

from mdscroll.constants import (
    CONFIG_FILENAMES,
    ENV_HIGHLIGHT,
    ENV_LINE_NUMBERS,
    ENV_LINE_WRAP,
    ENV_OUTLINE,
    ENV_THEME,
    PYPROJECT_SECTION,
    TRUTHY_VALUES,
)
from mdscroll.exceptions import ConfigError
from mdscroll.options import RendererOptions, ViewerOptions

logger = logging.getLogger(__name__)

_BOOL_ENV_FIELDS = {
    ENV_LINE_WRAP: "line_wrap",
    ENV_OUTLINE: "show_outline",
    ENV_LINE_NUMBERS: "show_line_numbers",
    ENV_HIGHLIGHT: "syntax_highlighting",
}


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.mdscroll]`` table from a pyproject.toml file.

    Returns an empty dict when the table is absent.

    Raises
    ------
    ConfigError
        If the file cannot be parsed or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {pyproject_path}: {e}", str(pyproject_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading {pyproject_path}: {e}", str(pyproject_path), e) from e

    config = data.get("tool", {}).get(PYPROJECT_SECTION)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"[tool.{PYPROJECT_SECTION}] section in {pyproject_path} must be a table, got {type(config).__name__}",
            str(pyproject_path),
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Dedicated config files take priority over pyproject.toml within each
    directory; a pyproject.toml only counts when it has a
    ``[tool.mdscroll]`` table.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except ConfigError:
                logger.debug("Skipping unreadable %s", pyproject_path)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the parent chain, then the home directory."""
    found = find_config_in_parents(start_dir)
    if found:
        return found

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load a configuration mapping from a TOML, YAML, JSON or pyproject file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    ConfigError
        If the file is missing, unreadable, malformed or not a mapping

    """
    config_path = Path(config_path)

    if not config_path.is_file():
        raise ConfigError(f"Configuration file does not exist: {config_path}", str(config_path))

    if config_path.name.lower() == "pyproject.toml":
        return _load_pyproject_section(config_path)

    ext = config_path.suffix.lower()
    try:
        if ext == ".toml":
            with open(config_path, "rb") as f:
                config = tomllib.load(f)
        elif ext in (".yaml", ".yml"):
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        elif ext == ".json":
            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        else:
            raise ConfigError(
                f"Unsupported config file format: {ext}. Use .toml, .yaml or .json", str(config_path)
            )
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading config file {config_path}: {e}", str(config_path), e) from e

    # An empty YAML document loads as None
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"Config file {config_path} must contain a mapping, got {type(config).__name__}", str(config_path)
        )
    return config


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in TRUTHY_VALUES


def env_overrides(env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Collect option overrides from ``MDSCROLL_*`` environment variables.

    Boolean variables are true for ``1``, ``true`` or ``yes`` (any case) and
    false for anything else.
    """
    env = os.environ if env is None else env
    overrides: Dict[str, Any] = {}

    theme = env.get(ENV_THEME)
    if theme:
        overrides["theme"] = theme

    for var, field_name in _BOOL_ENV_FIELDS.items():
        value = env.get(var)
        if value is not None:
            overrides[field_name] = _parse_bool(value)

    return overrides


def _known_fields(cls: type, data: Mapping[str, Any], section: str) -> Dict[str, Any]:
    names = {f.name for f in fields(cls)}
    known = {}
    for key, value in data.items():
        normalized = key.replace("-", "_")
        if normalized in names:
            known[normalized] = value
        else:
            logger.warning("Ignoring unknown %s option: %s", section, key)
    return known


def options_from_dict(data: Mapping[str, Any], config_path: Optional[str] = None) -> ViewerOptions:
    """Build ``ViewerOptions`` from a configuration mapping.

    Keys may use dashes or underscores. A nested ``renderer`` table maps to
    ``RendererOptions``. Unknown keys are logged and ignored.

    Raises
    ------
    ConfigError
        If a value is rejected by option validation

    """
    known = _known_fields(ViewerOptions, data, "config")
    renderer = known.get("renderer")
    try:
        if renderer is not None:
            if not isinstance(renderer, Mapping):
                raise ConfigError(
                    f"'renderer' must be a table, got {type(renderer).__name__}", config_path
                )
            known["renderer"] = RendererOptions(**_known_fields(RendererOptions, renderer, "renderer"))
        return ViewerOptions(**known)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration value: {e}", config_path, e) from e


def load_config(
    path: Optional[Path | str] = None,
    env: Optional[Mapping[str, str]] = None,
    start_dir: Optional[Path] = None,
) -> ViewerOptions:
    """Resolve viewer options from file and environment.

    Parameters
    ----------
    path : Path or str, optional
        Explicit configuration file; disables discovery
    env : Mapping, optional
        Environment to read overrides from, defaults to ``os.environ``
    start_dir : Path, optional
        Directory discovery starts from, defaults to the working directory

    Returns
    -------
    ViewerOptions
        Options with file values applied over defaults and environment
        values applied over both

    Raises
    ------
    ConfigError
        If a configuration file is malformed or holds invalid values

    Examples
    --------
        >>> options = load_config(env={"MDSCROLL_THEME": "nord"})
        >>> options.theme
        'nord'

    """
    config_path = Path(path) if path is not None else discover_config_file(start_dir)
    data: Dict[str, Any] = {}
    if config_path is not None:
        data = load_config_file(config_path)
        logger.debug("Loaded configuration from %s", config_path)

    data.update(env_overrides(env))
    return options_from_dict(data, str(config_path) if config_path else None)
