# global_config_parser.py
"""
YAML-based global configuration loader.

Loads configuration from a structured symbolex.yaml file with:
- Hierarchical section-based access (paths.output_dir, logging.verbosity)
- Environment variable interpolation (${ENV_VAR} and ${ENV_VAR:-default})
- .env file loading (python-dotenv) before environment overrides are applied
- Environment variable overrides for the flat SYMBOLEX_* keys
- Type-safe accessor methods (str, bool, int, list, path)
- Merge support: layer an override YAML file on top of the base file
- Required-key validation

Dependencies: PyYAML, python-dotenv

Usage:
    from utils.parsers.global_config_parser import GlobalConfig

    config = GlobalConfig()                                  # auto-discover
    config = GlobalConfig(config_file="./config/symbolex.yaml")

    out_dir   = config.get_path("paths.output_dir")
    verbosity = config.get_int("logging.verbosity", 1)
    keyword   = config.get("extraction.keyword", "localparam")
    verbosity = config.get("SYMBOLEX_VERBOSITY")             # flat key form
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

import yaml
from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Flat-key to YAML-path mapping (environment overrides)
# ---------------------------------------------------------------------------

FLAT_KEY_MAP: Dict[str, str] = {
    # Paths
    "SYMBOLEX_SOURCE_PATH":   "paths.source_path",
    "SYMBOLEX_OUTPUT_DIR":    "paths.output_dir",
    # Extraction
    "SYMBOLEX_KEYWORD":       "extraction.keyword",
    "SYMBOLEX_ENCODING":      "extraction.encoding",
    "SYMBOLEX_EXTENSIONS":    "extraction.source_extensions",
    # Logging
    "SYMBOLEX_VERBOSITY":     "logging.verbosity",
    "LOG_LEVEL":              "logging.level",
}

# Environment variable interpolation pattern: ${VAR} or ${VAR:-default}
_ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-(.*?))?\}")

PATH_KEYS: Set[str] = {"paths.source_path", "paths.output_dir"}


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ConfigError(Exception):
    """Base error for configuration operations."""


class ConfigFileError(ConfigError):
    """Configuration file could not be loaded or parsed."""


class ConfigValidationError(ConfigError):
    """Required configuration keys are missing."""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _load_yaml(filepath: str) -> Dict[str, Any]:
    """
    Load a YAML file.

    Raises:
        ConfigFileError: If the file cannot be read or parsed, or its top
            level is not a mapping.
    """
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigFileError(f"Failed to load YAML config '{filepath}': {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigFileError(f"YAML config '{filepath}' must contain a mapping at top level.")
    return data


def _interpolate_env_vars(value: Any) -> Any:
    """Recursively resolve ${ENV_VAR} and ${ENV_VAR:-default} in string values."""
    if isinstance(value, str):
        def _replace(match):
            env_val = os.environ.get(match.group(1))
            if env_val is not None:
                return env_val
            if match.group(2) is not None:
                return match.group(2)
            return match.group(0)
        return _ENV_VAR_PATTERN.sub(_replace, value)
    elif isinstance(value, dict):
        return {k: _interpolate_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_interpolate_env_vars(item) for item in value]
    return value


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """Deep-merge two dicts; values in `override` win, nested dicts merge."""
    merged = dict(base)
    for key, val in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(val, dict):
            merged[key] = _deep_merge(merged[key], val)
        else:
            merged[key] = val
    return merged


def _get_by_path(data: Dict[str, Any], path: str, default: Any = None) -> Any:
    current = data
    for key in path.split("."):
        if isinstance(current, dict) and key in current:
            current = current[key]
        else:
            return default
    return current


def _set_by_path(data: Dict[str, Any], path: str, value: Any) -> None:
    keys = path.split(".")
    current = data
    for key in keys[:-1]:
        current = current.setdefault(key, {})
    current[keys[-1]] = value


# ---------------------------------------------------------------------------
# GlobalConfig
# ---------------------------------------------------------------------------

class GlobalConfig:
    """
    Hierarchical YAML configuration with dot-path access and env overrides.

    Sections:
        paths       source_path, output_dir
        extraction  keyword, source_extensions, table_extension, encoding
        logging     verbosity, level
    """

    SEARCH_PATHS = [
        "symbolex.yaml",
        "config/symbolex.yaml",
        "symbolex.yml",
    ]

    def __init__(
        self,
        config_file: Optional[str] = None,
        override_file: Optional[str] = None,
        env_file: Optional[str] = None,
        required: Optional[List[str]] = None,
        auto_load: bool = True,
        env_override: bool = True,
    ):
        """
        Args:
            config_file: Path to the YAML config file. Auto-discovers if None.
            override_file: Optional second YAML file layered on top.
            env_file: Optional .env file; searched from the CWD if None.
            required: Dot-paths that must be set after loading.
            auto_load: Load configuration immediately on construction.
            env_override: Allow environment variables to override YAML values.
        """
        self._data: Dict[str, Any] = {}
        self._config_file: Optional[str] = None
        self._override_file: Optional[str] = None
        self._env_file: Optional[str] = None
        self._required = required or []
        self._env_override = env_override

        if auto_load:
            self.load(config_file, override_file, env_file)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(
        self,
        config_file: Optional[str] = None,
        override_file: Optional[str] = None,
        env_file: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Load, merge, interpolate, override and validate configuration."""
        if config_file and not os.path.isfile(config_file):
            raise ConfigFileError(f"Config file not found: '{config_file}'")

        base_path = config_file or self._discover_config_file()
        if base_path:
            self._data = _load_yaml(base_path)
            self._config_file = base_path
        else:
            logger.info("No YAML config file found; using defaults and environment.")
            self._data = {}

        if override_file:
            if not os.path.isfile(override_file):
                raise ConfigFileError(f"Override config file not found: '{override_file}'")
            self._data = _deep_merge(self._data, _load_yaml(override_file))
            self._override_file = override_file
            logger.info("Applied override config: %s", override_file)

        if self._env_override:
            self._load_dotenv(env_file)

        self._data = _interpolate_env_vars(self._data)

        if self._env_override:
            self._apply_env_overrides()

        self._normalize_paths()
        self._validate()

        return self._data

    def _discover_config_file(self) -> Optional[str]:
        for candidate in self.SEARCH_PATHS:
            if os.path.isfile(candidate):
                return candidate
        return None

    def _load_dotenv(self, env_file: Optional[str]) -> None:
        target = env_file or find_dotenv(usecwd=True)
        if target and os.path.isfile(target):
            load_dotenv(target)
            self._env_file = target
            logger.info("Loaded .env from: %s", target)

    def _apply_env_overrides(self) -> None:
        for env_key, dot_path in FLAT_KEY_MAP.items():
            env_val = os.environ.get(env_key)
            if env_val is not None:
                _set_by_path(self._data, dot_path, env_val)

    def _normalize_paths(self) -> None:
        for path_key in PATH_KEYS:
            val = _get_by_path(self._data, path_key)
            if val and isinstance(val, str):
                _set_by_path(self._data, path_key, str(Path(val).expanduser()))

    def _validate(self) -> None:
        missing = [key for key in self._required if not self.has(key)]
        if missing:
            msg = f"Missing required configuration keys: {missing}"
            logger.error(msg)
            raise ConfigValidationError(msg)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-path ("logging.verbosity") or flat key ("SYMBOLEX_VERBOSITY")."""
        val = _get_by_path(self._data, FLAT_KEY_MAP.get(key, key))
        return default if val is None else val

    def get_bool(self, key: str, default: bool = False) -> bool:
        val = self.get(key)
        if val is None:
            return default
        if isinstance(val, str):
            return val.strip().lower() in ("1", "true", "yes", "on")
        return bool(val)

    def get_int(self, key: str, default: int = 0) -> int:
        """Get an integer value; a present but non-numeric value is an error."""
        val = self.get(key)
        if val is None:
            return default
        try:
            return int(val)
        except (ValueError, TypeError) as e:
            raise ConfigValidationError(f"Configuration key '{key}' must be an integer, got {val!r}") from e

    def get_list(self, key: str, separator: str = ",", default: Optional[List] = None) -> List:
        """Get a list; YAML lists are returned as-is, strings are split on *separator*."""
        val = self.get(key)
        if val is None:
            return list(default or [])
        if isinstance(val, list):
            return val
        if isinstance(val, str):
            return [item.strip() for item in val.split(separator) if item.strip()]
        return [val]

    def get_path(self, key: str, default: Optional[str] = None) -> Optional[str]:
        val = self.get(key) or default
        if val and isinstance(val, str):
            return str(Path(val).expanduser())
        return None

    def get_section(self, section: str) -> Dict[str, Any]:
        val = self._data.get(section)
        return dict(val) if isinstance(val, dict) else {}

    def has(self, key: str) -> bool:
        val = self.get(key)
        return val is not None and val != ""

    def sections(self) -> List[str]:
        return [k for k, v in self._data.items() if isinstance(v, dict)]

    @property
    def config_file(self) -> Optional[str]:
        return self._config_file

    # ------------------------------------------------------------------
    # Representation
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        source = self._config_file or "no file"
        override = f" + {self._override_file}" if self._override_file else ""
        return f"GlobalConfig(source='{source}{override}', sections={self.sections()})"

    def __contains__(self, key: str) -> bool:
        return self.has(key)
