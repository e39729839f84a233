"""Configuration Management for NatDate

Handles loading, validation, and management of engine configuration.
Supports hierarchical YAML files with environment variable overrides.
"""

import os
import re
import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union, get_origin

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .error_handler import ConfigurationError


KNOWN_TIME_UNITS = ("minute", "hour", "day", "week", "month", "year")


class ParserConfig(BaseModel):
    """Configuration for the date parser."""
    timezone_offsets: Dict[str, int] = Field(default_factory=lambda: {
        "utc": 0,
        "gmt": 0,
        "wet": 0,
        "cet": 1,
        "cest": 2,
        "eet": 2,
        "eest": 3,
        "msk": 3,
        "ist": 5,
        "jst": 9,
        "aest": 10,
        "est": -5,
        "edt": -4,
        "cst": -6,
        "cdt": -5,
        "mst": -7,
        "mdt": -6,
        "pst": -8,
        "pdt": -7,
    })

    @field_validator('timezone_offsets')
    @classmethod
    def validate_offsets(cls, v):
        """Lowercase labels and keep offsets within a day"""
        for label, offset in v.items():
            if not -12 <= offset <= 14:
                raise ValueError(f"Offset for '{label}' must be between -12 and 14 hours")
        return {label.lower(): offset for label, offset in v.items()}


class GeneratorConfig(BaseModel):
    """Configuration for date generation."""
    random_max_amount: int = Field(default=100, ge=1)


class SuggestionConfig(BaseModel):
    """Configuration for suggestion ranking and completion."""
    time_units: List[str] = Field(default_factory=lambda: list(KNOWN_TIME_UNITS))
    common_times: List[str] = Field(default_factory=lambda: ["9:00", "12:00", "15:00", "18:00"])
    default_suggestions: List[str] = Field(default_factory=lambda: [
        "in 1 hour", "in 1 day", "in 1 week", "at 9:00", "at 12:00", "at 15:00", "at 18:00"
    ])
    tomorrow_scale: float = Field(default=0.9, ge=0.0, le=1.0)
    date_format: str = Field(default="{month}/{day}/{year}")

    @field_validator('time_units')
    @classmethod
    def validate_time_units(cls, v):
        """Only units the generator can apply are allowed"""
        unknown = [unit for unit in v if unit not in KNOWN_TIME_UNITS]
        if unknown:
            raise ValueError(f"Unknown time units: {', '.join(unknown)}")
        return v

    @field_validator('common_times')
    @classmethod
    def validate_common_times(cls, v):
        """Common times must read H:MM or HH:MM"""
        for value in v:
            match = re.fullmatch(r'(\d{1,2}):(\d{2})', value)
            if not match or int(match.group(1)) > 23 or int(match.group(2)) > 59:
                raise ValueError(f"Common time '{value}' must be in H:MM format")
        return v

    @field_validator('date_format')
    @classmethod
    def validate_date_format(cls, v):
        """Date format may only reference day, month and year"""
        try:
            v.format(day=1, month=1, year=2000)
        except (KeyError, IndexError, ValueError) as e:
            raise ValueError(f"Invalid date format '{v}': {e}")
        return v


class LoggingConfig(BaseModel):
    """Configuration for logging."""
    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    log_to_console: bool = Field(default=True)
    log_to_file: bool = Field(default=False)
    file_path: str = Field(default="logs/natdate.log")
    max_file_size: str = Field(default="10MB")
    backup_count: int = Field(default=5, ge=1, le=20)

    @field_validator('level', mode='before')
    @classmethod
    def normalize_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @field_validator('max_file_size')
    @classmethod
    def validate_file_size(cls, v):
        """Validate file size format"""
        if not re.match(r'^\d+[KMG]B$', v.upper()):
            raise ValueError("File size must be in format: 10KB, 10MB, or 1GB")
        return v

    @property
    def max_file_bytes(self) -> int:
        multipliers = {"K": 1024, "M": 1024 ** 2, "G": 1024 ** 3}
        size = self.max_file_size.upper()
        return int(size[:-2]) * multipliers[size[-2]]


class AppConfig(BaseModel):
    """Main application configuration."""
    model_config = ConfigDict(validate_assignment=True)

    app_name: str = Field(default="NatDate")
    version: str = Field(default="0.1.0")
    environment: str = Field(default="development", pattern="^(development|testing|production)$")
    debug_mode: bool = Field(default=False)

    parser: ParserConfig = Field(default_factory=ParserConfig)
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    suggestions: SuggestionConfig = Field(default_factory=SuggestionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class ConfigManager:
    """Manages configuration loading and validation."""

    ENV_PREFIX = "NATDATE_"
    SECTIONS = {"parser", "generator", "suggestions", "logging"}

    def __init__(self, config_path: Optional[Path] = None, environment: Optional[str] = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional directory holding configuration files
            environment: Environment name (development, testing, production)
        """
        self.config_base_path = Path(config_path) if config_path else self._get_default_config_path()
        self.environment = environment or os.getenv('NATDATE_ENV', 'development')
        self._config: Optional[AppConfig] = None
        self._lock = threading.Lock()
        self.logger = logging.getLogger(__name__)

        self.config_files = self._get_config_files()

    def _get_default_config_path(self) -> Path:
        """Get the default configuration directory."""
        config_locations = [
            Path("config"),
            Path.home() / ".natdate",
        ]

        for location in config_locations:
            if location.exists() and location.is_dir():
                return location

        return Path("config")

    def _get_config_files(self) -> Dict[str, Path]:
        """Get configuration file paths for hierarchical loading."""
        base_dir = self.config_base_path

        return {
            'default': base_dir / 'default_config.yaml',
            'environment': base_dir / f'{self.environment}.yaml',
            'local': base_dir / 'local.yaml'
        }

    def load_config(self) -> AppConfig:
        """Load and validate configuration with hierarchical overrides.

        Returns:
            Validated application configuration

        Raises:
            ConfigurationError: If a file cannot be parsed or validation fails
        """
        with self._lock:
            if self._config:
                return self._config

            config_data: Dict[str, Any] = {}

            for config_type, config_file in self.config_files.items():
                if config_file.exists():
                    self.logger.info(f"Loading {config_type} config from {config_file}")
                    self._deep_merge(config_data, self._load_yaml_file(config_file))

            env_overrides = self._get_env_overrides()
            if env_overrides:
                self.logger.info(f"Applying environment overrides: {list(env_overrides.keys())}")
                self._deep_merge(config_data, env_overrides)

            config_data.setdefault('environment', self.environment)

            try:
                self._config = AppConfig(**config_data)
            except ValidationError as e:
                self.logger.error(f"Configuration validation failed: {e}")
                raise ConfigurationError(f"Invalid configuration: {e}")

            return self._config

    def reload_config(self) -> AppConfig:
        """Drop the cached configuration and load it again."""
        with self._lock:
            self._config = None
        return self.load_config()

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load YAML configuration file.

        Returns:
            Configuration dictionary
        """
        try:
            with open(file_path, 'r') as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            self.logger.error(f"Failed to parse YAML file {file_path}: {e}")
            raise ConfigurationError(f"Invalid YAML in {file_path}: {e}")

    def _get_env_overrides(self) -> Dict[str, Any]:
        """Get configuration overrides from environment variables.

        Environment variables follow pattern: NATDATE_<SECTION>_<KEY>
        Example: NATDATE_GENERATOR_RANDOM_MAX_AMOUNT -> generator.random_max_amount
        """
        overrides: Dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(self.ENV_PREFIX) or key == 'NATDATE_ENV':
                continue

            name = key[len(self.ENV_PREFIX):].lower()
            section, _, field_name = name.partition('_')

            if section in self.SECTIONS and field_name:
                section_model = AppConfig.model_fields[section].annotation
                overrides.setdefault(section, {})[field_name] = self._convert_env_value(
                    value, self._is_list_field(section_model, field_name)
                )
            elif name in AppConfig.model_fields:
                overrides[name] = self._convert_env_value(value, self._is_list_field(AppConfig, name))

        return overrides

    @staticmethod
    def _is_list_field(model: Type[BaseModel], field_name: str) -> bool:
        field = model.model_fields.get(field_name)
        return field is not None and get_origin(field.annotation) is list

    def _convert_env_value(self, value: str, as_list: bool = False) -> Union[str, int, float, bool, List[str]]:
        """Convert environment variable string to appropriate type.

        List fields always split on commas, so a single value becomes a
        one-item list.
        """
        if as_list:
            return [v.strip() for v in value.split(',') if v.strip()]

        if value.lower() in ('true', 'false'):
            return value.lower() == 'true'

        try:
            if '.' in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        # List conversion (comma-separated)
        if ',' in value:
            return [v.strip() for v in value.split(',')]

        return value

    def _deep_merge(self, base_dict: Dict[str, Any], update_dict: Dict[str, Any]):
        """Recursively merge update_dict into base_dict."""
        for key, value in update_dict.items():
            if key in base_dict and isinstance(base_dict[key], dict) and isinstance(value, dict):
                self._deep_merge(base_dict[key], value)
            else:
                base_dict[key] = value

    def save_config(self, file_path: Optional[Path] = None) -> Path:
        """Write the current configuration to YAML.

        Args:
            file_path: Destination; defaults to the default config file

        Returns:
            Path that was written
        """
        config = self.load_config()
        target = Path(file_path) if file_path else self.config_files['default']
        target.parent.mkdir(parents=True, exist_ok=True)

        with open(target, 'w') as f:
            yaml.dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)

        self.logger.info(f"Saved configuration to {target}")
        return target
