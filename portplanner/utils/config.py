"""Configuration management with validation and environment support."""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass, field
import logging

from portplanner.utils.constants import (
    DEFAULT_STRATEGY, SUPPORTED_STRATEGIES, SUPPORTED_LOG_LEVELS, ENV_PREFIX,
    CONFIG_FILE_NAME, DEFAULT_LOG_FILE_MAX_BYTES, DEFAULT_LOG_FILE_BACKUP_COUNT,
    DEFAULT_LOG_DIR
)

logger = logging.getLogger(__name__)


@dataclass
class PlannerConfig:
    """Spanning tree selection configuration."""
    strategy: str = DEFAULT_STRATEGY
    cross_check: bool = False  # Run the other strategy too and compare totals
    describe_network: bool = True  # Dump cities and highways at DEBUG level


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_enabled: bool = False
    file_dir: str = DEFAULT_LOG_DIR
    file_max_size: int = DEFAULT_LOG_FILE_MAX_BYTES
    file_backup_count: int = DEFAULT_LOG_FILE_BACKUP_COUNT


@dataclass
class AppConfig:
    """Main application configuration."""
    planner: PlannerConfig = field(default_factory=PlannerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AppConfig':
        """Create config from dictionary."""
        config = cls()

        # Update each section
        for section_name, section_data in data.items():
            if hasattr(config, section_name) and isinstance(section_data, dict):
                section = getattr(config, section_name)
                for key, value in section_data.items():
                    if hasattr(section, key):
                        setattr(section, key, value)
                    else:
                        logger.warning(f"Unknown config key: {section_name}.{key}")
            else:
                logger.warning(f"Unknown config section: {section_name}")

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        result = {}

        for field_name in self.__dataclass_fields__:
            field_value = getattr(self, field_name)
            if hasattr(field_value, '__dataclass_fields__'):
                result[field_name] = {
                    sub_field: getattr(field_value, sub_field)
                    for sub_field in field_value.__dataclass_fields__
                }
            else:
                result[field_name] = field_value

        return result

    def validate(self) -> bool:
        """Validate configuration."""
        errors = []

        if self.planner.strategy not in SUPPORTED_STRATEGIES:
            errors.append(
                f"planner.strategy must be one of {', '.join(SUPPORTED_STRATEGIES)}, "
                f"got {self.planner.strategy!r}"
            )

        if str(self.logging.level).upper() not in SUPPORTED_LOG_LEVELS:
            errors.append(f"logging.level must be one of {', '.join(SUPPORTED_LOG_LEVELS)}")

        if self.logging.file_max_size <= 0:
            errors.append("logging.file_max_size must be positive")

        if self.logging.file_backup_count < 0:
            errors.append("logging.file_backup_count must be non-negative")

        if errors:
            for error in errors:
                logger.error(f"Config validation error: {error}")
            return False

        return True


class ConfigManager:
    """Configuration manager with environment support."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize config manager."""
        self.config_path = config_path or self._find_config_file()
        self.config: Optional[AppConfig] = None

    def _find_config_file(self) -> Optional[str]:
        """Find configuration file in standard locations."""
        search_paths = [
            f"./{CONFIG_FILE_NAME}",
            f"./config/{CONFIG_FILE_NAME}",
            os.path.expanduser("~/.portplanner/config.yaml"),
        ]

        for path in search_paths:
            if Path(path).exists():
                logger.info(f"Found config file: {path}")
                return path

        logger.info("No config file found, using defaults")
        return None

    def load_config(self, config_file_path: Optional[str] = None) -> AppConfig:
        """Load configuration from file and environment."""
        config_path_to_use = config_file_path or self.config_path

        config_data: Dict[str, Any] = {}

        # Load from file if available
        if config_path_to_use and Path(config_path_to_use).exists():
            try:
                with open(config_path_to_use, 'r') as f:
                    file_config = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                logger.error(f"Failed to load config file {config_path_to_use}: {e}")
                raise ValueError(f"Cannot read config file {config_path_to_use}: {e}") from e

            if file_config:
                if not isinstance(file_config, dict):
                    raise ValueError(f"Config file {config_path_to_use} must contain a mapping")
                config_data.update(file_config)
                logger.info(f"Loaded config from {config_path_to_use}")
        elif config_path_to_use:
            logger.warning(f"Config file not found: {config_path_to_use}")

        # Override with environment variables
        env_overrides = self._load_env_overrides()
        if env_overrides:
            for section, values in env_overrides.items():
                existing = config_data.get(section)
                if isinstance(existing, dict):
                    config_data[section] = {**existing, **values}
                else:
                    config_data[section] = values
            logger.info(f"Applied {sum(len(v) for v in env_overrides.values())} environment overrides")

        # Create config object
        self.config = AppConfig.from_dict(config_data)

        # Validate configuration
        if not self.config.validate():
            raise ValueError("Configuration validation failed")

        return self.config

    def _load_env_overrides(self) -> Dict[str, Dict[str, Any]]:
        """Load configuration overrides from environment variables."""
        overrides: Dict[str, Dict[str, Any]] = {}

        # Map environment variables to config paths
        env_mappings = {
            f"{ENV_PREFIX}STRATEGY": ("planner", "strategy", str),
            f"{ENV_PREFIX}CROSS_CHECK": ("planner", "cross_check", bool),
            f"{ENV_PREFIX}LOG_LEVEL": ("logging", "level", str),
            f"{ENV_PREFIX}LOG_FILE": ("logging", "file_enabled", bool),
        }

        for env_var, (section, key, type_func) in env_mappings.items():
            value = os.getenv(env_var)
            if value is not None:
                try:
                    # Handle boolean conversion
                    if type_func is bool:
                        value = value.lower() in ('true', '1', 'yes', 'on')
                    else:
                        value = type_func(value)

                    if section not in overrides:
                        overrides[section] = {}
                    overrides[section][key] = value

                except (ValueError, TypeError) as e:
                    logger.warning(f"Invalid environment variable {env_var}={value}: {e}")

        return overrides

    def save_config(self, config: AppConfig, path: Optional[str] = None):
        """Save configuration to file."""
        save_path = path or self.config_path or f"./{CONFIG_FILE_NAME}"

        try:
            config_dict = config.to_dict()

            with open(save_path, 'w') as f:
                yaml.dump(config_dict, f, default_flow_style=False, indent=2)

            logger.info(f"Configuration saved to {save_path}")

        except OSError as e:
            logger.error(f"Failed to save config to {save_path}: {e}")
            raise


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Simple config loader function."""
    config_manager = ConfigManager(config_path)
    return config_manager.load_config()
