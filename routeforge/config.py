"""
Config system - Layered configuration for route tables.

Route files (YAML or JSON), ``.env`` files, environment variables and
manual overrides are merged, then validated into a typed ``RouterConfig``.
"""

from typing import Any, Dict, Optional, Type, get_args, get_origin
from dataclasses import dataclass, field, fields, MISSING
from glob import glob
from pathlib import Path
import json
import logging
import os
import types

import yaml

from .faults import ConfigInvalidFault, ConfigMissingFault

logger = logging.getLogger("routeforge.config")


class ConfigError(ConfigInvalidFault):
    """Raised when configuration validation fails."""
    pass


@dataclass
class RouterConfig:
    """
    Typed configuration for a ``Router``.

    ``routes`` holds route definitions: mappings with ``method``,
    ``name``, ``pattern`` and optional ``conditions``, ``defaults`` and
    ``controller``.
    """
    routes: list = field(default_factory=list)
    cache_enabled: bool = True
    cache_max_size: int = 1000
    log_level: str = "WARNING"


class ConfigLoader:
    """
    Loads and merges configuration from multiple sources with precedence:
    Overrides > Environment variables > .env file > config files
    """

    def __init__(self, env_prefix: str = "ROUTEFORGE_"):
        self.env_prefix = env_prefix
        self.config_data: Dict[str, Any] = {}

    @classmethod
    def load(
        cls,
        paths: Optional[list[str]] = None,
        env_prefix: str = "ROUTEFORGE_",
        env_file: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> "ConfigLoader":
        """
        Load configuration from multiple sources.

        Merge order (later overrides earlier):
        1. Config files (JSON/YAML, glob patterns supported)
        2. .env file
        3. Environment variables (prefix, ``__`` separates nested keys)
        4. Manual overrides

        Args:
            paths: List of config file paths
            env_prefix: Prefix for environment variables
            env_file: Path to .env file
            overrides: Manual overrides (highest precedence)

        Returns:
            Configured ConfigLoader instance
        """
        loader = cls(env_prefix=env_prefix)

        for pattern in paths or []:
            loader._load_from_files(pattern)

        if env_file:
            loader._load_env_file(env_file)

        loader._load_from_env()

        if overrides:
            loader._merge_dict(loader.config_data, overrides)

        return loader

    def _load_from_files(self, pattern: str):
        """Load config from JSON or YAML files."""
        matched = sorted(glob(pattern))
        if not matched:
            raise ConfigError(pattern, "no config file matches this path")

        for path_str in matched:
            path = Path(path_str)

            if path.suffix == ".json":
                self._load_json_file(path)
            elif path.suffix in (".yaml", ".yml"):
                self._load_yaml_file(path)
            else:
                raise ConfigError(path_str, f"unsupported config file type '{path.suffix}'")

    def _load_json_file(self, path: Path):
        """Load config from JSON file."""
        with open(path) as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as exc:
                raise ConfigError(str(path), f"invalid JSON: {exc}") from exc
        self._merge_file_data(path, data)

    def _load_yaml_file(self, path: Path):
        """Load config from YAML file."""
        with open(path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise ConfigError(str(path), f"invalid YAML: {exc}") from exc
        self._merge_file_data(path, data)

    def _merge_file_data(self, path: Path, data: Any):
        if not data:
            return
        if not isinstance(data, dict):
            raise ConfigError(str(path), "top level must be a mapping")
        logger.debug("Loaded config file %s", path)
        self._merge_dict(self.config_data, data)

    def _load_env_file(self, path: str):
        """Load config from .env file."""
        env_path = Path(path)
        if not env_path.exists():
            return

        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue

                if "=" in line:
                    key, value = line.split("=", 1)
                    key = key.strip()
                    value = value.strip().strip('"').strip("'")

                    if key.startswith(self.env_prefix):
                        self._set_nested(key, value)

        logger.debug("Loaded env file %s", env_path)

    def _load_from_env(self):
        """Load config from environment variables."""
        for key, value in os.environ.items():
            if key.startswith(self.env_prefix):
                self._set_nested(key, value)

    def _set_nested(self, key: str, value: str):
        """Convert ROUTEFORGE_CACHE_MAX_SIZE to a config key."""
        key = key[len(self.env_prefix):]

        # Split by double underscore for nested keys
        parts = key.lower().split("__")

        current = self.config_data
        for part in parts[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]

        current[parts[-1]] = self._parse_value(value)

    def _parse_value(self, value: str) -> Any:
        """Parse string value to appropriate type."""
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        if value.startswith(("{", "[")):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass

        return value

    def _merge_dict(self, target: dict, source: dict):
        """Deep merge source into target."""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._merge_dict(target[key], value)
            else:
                target[key] = value

    def get(self, path: str, default: Any = None) -> Any:
        """Get config value by dot-separated path."""
        current = self.config_data

        for part in path.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default

        return current

    def require(self, path: str) -> Any:
        """Get config value by dot-separated path, failing if absent."""
        sentinel = object()
        value = self.get(path, sentinel)
        if value is sentinel:
            raise ConfigMissingFault(path)
        return value

    def to_router_config(self) -> RouterConfig:
        """Validate the merged data into a ``RouterConfig``."""
        config = self._instantiate_dataclass(RouterConfig, self.config_data)

        # getLevelName maps known names to their int level
        if not isinstance(logging.getLevelName(config.log_level.upper()), int):
            raise ConfigError("log_level", f"unknown logging level {config.log_level!r}")

        return config

    def _instantiate_dataclass(self, config_class: Type, data: dict):
        """Instantiate dataclass config with validation."""
        kwargs = {}

        for field_info in fields(config_class):
            field_name = field_info.name
            field_type = field_info.type

            if field_name in data:
                value = data[field_name]

                if not self._check_type(value, field_type):
                    raise ConfigError(
                        field_name,
                        f"expected {getattr(field_type, '__name__', field_type)}, "
                        f"got {type(value).__name__}",
                    )

                kwargs[field_name] = value
            elif field_info.default is not MISSING:
                kwargs[field_name] = field_info.default
            elif field_info.default_factory is not MISSING:
                kwargs[field_name] = field_info.default_factory()
            else:
                raise ConfigMissingFault(field_name)

        return config_class(**kwargs)

    def _check_type(self, value: Any, expected_type: Type) -> bool:
        """Basic type checking."""
        origin = get_origin(expected_type)
        if origin is types.UnionType or str(origin) == "typing.Union":
            args = get_args(expected_type)
            if value is None:
                return True
            if args:
                return self._check_type(value, args[0])

        if origin:
            return isinstance(value, origin)

        # bool is an int subclass; a flag is never a size
        if expected_type is int and isinstance(value, bool):
            return False

        try:
            return isinstance(value, expected_type)
        except TypeError:
            return True

    def to_dict(self) -> dict:
        """Export all config as dictionary."""
        return self.config_data.copy()
