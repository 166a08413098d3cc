"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from sqlglot.dialects.dialect import Dialect

from ...logging_config import get_logger
from .naming import export_name
from .parser import DEFAULT_DIALECT
from .schema import parse_table_list

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Settings for one generation run."""

    # Package/namespace named in the generated module
    package_name: str = "models"

    # Raw table names to generate; empty means all tables
    tables: List[str] = field(default_factory=list)

    # User template replacing the built-in one
    template_file: Optional[str] = None

    # Destination file; None writes to stdout
    output_file: Optional[str] = None

    # sqlglot dialect used to read the schema
    dialect: str = DEFAULT_DIALECT


_STRING_FIELDS = {"package_name", "dialect"}
_OPTIONAL_PATH_FIELDS = {"template_file", "output_file"}


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Any] = asdict(GeneratorConfig())

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Explicit overrides (highest precedence)
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        # Start with defaults
        base_config = dict(self._defaults)

        # Load from file if provided
        if config_file:
            base_config.update(self._load_config_file(config_file))

        # Apply custom overrides
        if custom_config:
            base_config.update(custom_config)

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(
                f"Invalid JSON in configuration file {path}: {str(e)}"
            ) from e
        except OSError as e:
            raise ConfigError(
                f"Failed to load configuration file {path}: {str(e)}"
            ) from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.info("Loaded configuration from %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}
        config_args = {}

        for key, value in config_dict.items():
            if key not in known_fields:
                logger.warning("Ignoring unknown configuration key: %s", key)
                continue
            config_args[key] = value

        for key in _STRING_FIELDS:
            if not isinstance(config_args.get(key), str):
                raise ConfigError(f"'{key}' must be a string")

        for key in _OPTIONAL_PATH_FIELDS:
            value = config_args.get(key)
            if value is not None and not isinstance(value, (str, Path)):
                raise ConfigError(f"'{key}' must be a path string")
            # An empty path means "not set"
            config_args[key] = str(value) if value else None

        tables = config_args.get("tables")
        if tables is not None and not isinstance(tables, (str, list, tuple, set)):
            raise ConfigError("'tables' must be a list or a comma-separated string")
        config_args["tables"] = sorted(parse_table_list(tables))

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)
        config_dict = asdict(config)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {str(e)}") from e

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        try:
            Dialect.get_or_raise(config.dialect)
        except ValueError:
            warnings.append(f"Unknown SQL dialect: {config.dialect}")

        for table in config.tables:
            if not export_name(table).isidentifier():
                warnings.append(
                    f"Table '{table}' does not map to a valid Python identifier"
                )

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    manager = get_config_manager()
    return manager.get_config(custom_config, config_file)


# Example configuration file for reference
EXAMPLE_CONFIG = {
    "package_name": "models",
    "tables": ["users", "posts"],
    "template_file": "templates/constants.py.j2",
    "output_file": "models/tables.py",
    "dialect": "postgres",
}
