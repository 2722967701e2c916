"""
Configuration Management

Centralized configuration management with YAML file support
and environment variable overrides.
"""

import os
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass, field, asdict
import yaml
from dotenv import load_dotenv

from .exceptions import ConfigurationError

# Load .env file if it exists
load_dotenv()

DEFAULT_CONFIG_PATH = Path("config/default.yaml")


@dataclass
class StorageConfig:
    """Key-value store settings."""
    url: str = "sqlite:///data/quizdrill.db"
    echo: bool = False


@dataclass
class EvaluationConfig:
    """Answer evaluation settings."""
    similarity_threshold_percent: int = 80
    keyword_min_length: int = 3


@dataclass
class SessionConfig:
    """Test session defaults."""
    shuffle: bool = False
    default_limit: Optional[int] = None


@dataclass
class DocumentsConfig:
    """Document extraction settings."""
    preview_characters: int = 500


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    console_level: str = "WARNING"  # Separate level for console output
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: str = "logs/quizdrill.log"
    max_size: str = "10MB"
    backup_count: int = 5


@dataclass
class AppConfig:
    """Main application configuration."""
    name: str = "quizdrill"
    version: str = "1.0.0"
    environment: str = "production"
    debug: bool = False

    storage: StorageConfig = field(default_factory=StorageConfig)
    evaluation: EvaluationConfig = field(default_factory=EvaluationConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    documents: DocumentsConfig = field(default_factory=DocumentsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, config_path: Path) -> "AppConfig":
        """Load configuration from YAML file."""
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Configuration root must be a mapping: {config_path}")

        return cls.from_dict(config_data)

    @classmethod
    def from_dict(cls, config_data: Dict[str, Any]) -> "AppConfig":
        """Build configuration from a plain dictionary, applying env overrides."""
        config_data = cls._apply_env_overrides(dict(config_data))

        # Handle nested app configuration structure
        if 'app' in config_data:
            app_config = config_data.pop('app')
            config_data.update(app_config)

        sections = {
            'storage': StorageConfig,
            'evaluation': EvaluationConfig,
            'session': SessionConfig,
            'documents': DocumentsConfig,
            'logging': LoggingConfig,
        }

        try:
            for name, section_cls in sections.items():
                if name in config_data and isinstance(config_data[name], dict):
                    config_data[name] = section_cls(**config_data[name])
            config = cls(**config_data)
        except TypeError as e:
            raise ConfigurationError(f"Unknown configuration key: {e}") from e

        config._coerce_types()
        config.validate()
        return config

    @staticmethod
    def _apply_env_overrides(config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration."""
        env_mappings = {
            'QUIZDRILL_DATABASE_URL': ['storage', 'url'],
            'QUIZDRILL_SIMILARITY_THRESHOLD': ['evaluation', 'similarity_threshold_percent'],
            'LOG_LEVEL': ['logging', 'level'],
            'DEBUG': ['debug'],
            'ENVIRONMENT': ['environment'],
        }

        for env_var, config_path in env_mappings.items():
            env_value = os.getenv(env_var)
            if env_value:
                current = config_data
                for key in config_path[:-1]:
                    current = current.setdefault(key, {})
                current[config_path[-1]] = env_value

        return config_data

    def _coerce_types(self) -> None:
        """Convert string values coming from the environment."""
        if isinstance(self.debug, str):
            self.debug = self.debug.strip().lower() in ('1', 'true', 'yes', 'on')

        threshold = self.evaluation.similarity_threshold_percent
        if isinstance(threshold, str):
            try:
                self.evaluation.similarity_threshold_percent = int(threshold)
            except ValueError as e:
                raise ConfigurationError(
                    f"Similarity threshold must be an integer, got {threshold!r}"
                ) from e

    def validate(self) -> None:
        """Validate configuration values."""
        threshold = self.evaluation.similarity_threshold_percent
        if not isinstance(threshold, int) or isinstance(threshold, bool) or not 0 <= threshold <= 100:
            raise ConfigurationError(
                f"evaluation.similarity_threshold_percent must be between 0 and 100, got {threshold!r}"
            )

        if self.evaluation.keyword_min_length < 1:
            raise ConfigurationError("evaluation.keyword_min_length must be at least 1")

        limit = self.session.default_limit
        if limit is not None and limit < 1:
            raise ConfigurationError("session.default_limit must be positive when set")

        if not self.storage.url:
            raise ConfigurationError("storage.url must not be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a plain dictionary."""
        return asdict(self)


# Global configuration instance
_config: Optional[AppConfig] = None


def get_config(config_path: Optional[Path] = None) -> AppConfig:
    """Get the application configuration instance."""
    global _config

    if _config is None:
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        if config_path.exists():
            _config = AppConfig.from_yaml(config_path)
        else:
            # Use default configuration if file doesn't exist
            _config = AppConfig.from_dict({})

    return _config


def set_config(config: Optional[AppConfig]) -> None:
    """Set the global configuration instance (useful for testing)."""
    global _config
    _config = config


def reload_config(config_path: Optional[Path] = None) -> AppConfig:
    """Reload configuration from file."""
    global _config
    _config = None
    return get_config(config_path)
