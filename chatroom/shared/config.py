"""
Configuration Management

Provides the session configuration and environment/file-based loading.
"""

import json
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .constants import (
    DEFAULT_HOST,
    DEFAULT_MAX_READ_LENGTH,
    DEFAULT_PORT,
    MAX_PORT,
    MIN_PORT,
)
from .exceptions import (
    ConfigurationError,
    InvalidConfigurationError,
    MissingConfigurationError,
)


@dataclass(frozen=True)
class SessionConfig:
    """Connection settings consumed by the chat room builder."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    max_read_length: int = DEFAULT_MAX_READ_LENGTH

    def validate(self) -> None:
        """Validate configuration values."""
        errors: List[str] = []

        if not isinstance(self.host, str) or not self.host.strip():
            errors.append("host must be a non-empty string")

        if (not isinstance(self.port, int) or isinstance(self.port, bool)
                or not (MIN_PORT <= self.port <= MAX_PORT)):
            errors.append(f"port must be an integer between {MIN_PORT} and {MAX_PORT}")

        if (not isinstance(self.max_read_length, int) or isinstance(self.max_read_length, bool)
                or self.max_read_length < 1):
            errors.append("max_read_length must be a positive integer")

        if errors:
            raise InvalidConfigurationError(
                f"Session configuration validation failed: {'; '.join(errors)}",
                details={"errors": errors}
            )

    @property
    def address(self) -> str:
        """Get the endpoint as a host:port string."""
        return f"{self.host}:{self.port}"

    @classmethod
    def from_env(cls) -> "SessionConfig":
        """Load configuration from environment variables."""
        try:
            config = cls(
                host=os.getenv("CHAT_HOST", cls.host),
                port=int(os.getenv("CHAT_PORT", str(cls.port))),
                max_read_length=int(
                    os.getenv("CHAT_MAX_READ_LENGTH", str(cls.max_read_length))
                ),
            )
        except ValueError as e:
            raise ConfigurationError(f"Failed to load session configuration from environment: {e}")
        config.validate()
        return config

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionConfig":
        """Create configuration from dictionary."""
        try:
            # Filter only known fields
            field_names = {f.name for f in fields(cls)}
            filtered_data = {k: v for k, v in data.items() if k in field_names}
            config = cls(**filtered_data)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Failed to create session configuration from dictionary: {e}")
        config.validate()
        return config


class ConfigurationLoader:
    """Configuration loader with support for file and environment sources."""

    DEFAULT_CONFIG_PATHS = [
        "chat_config.json",
        ".chat_config.json",
        "chat_config.yaml",
        ".chat_config.yaml",
        "chat_config.yml",
        ".chat_config.yml"
    ]

    @staticmethod
    def find_default_config() -> Optional[Path]:
        """Return the first default configuration file present, if any."""
        for path in ConfigurationLoader.DEFAULT_CONFIG_PATHS:
            if os.path.exists(path):
                return Path(path)
        return None

    @staticmethod
    def load_from_file(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
        """
        Load configuration from a JSON or YAML file.

        Args:
            config_path: Path to configuration file. If None, looks for default locations.

        Returns:
            Dictionary containing configuration values.

        Raises:
            ConfigurationError: If file cannot be loaded or parsed.
        """
        if config_path is None:
            config_path = ConfigurationLoader.find_default_config()

        if config_path is None:
            return {}

        config_path = Path(config_path)

        if not config_path.exists():
            raise MissingConfigurationError(f"Configuration file not found: {config_path}")

        if config_path.suffix not in ('.json', '.yml', '.yaml'):
            raise ConfigurationError(f"Unsupported configuration file format: {config_path.suffix}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                if config_path.suffix == '.json':
                    data = json.load(f)
                else:
                    import yaml
                    data = yaml.safe_load(f)
        except ImportError:
            raise ConfigurationError(
                "PyYAML is required for YAML configuration files. Install with: pip install PyYAML"
            )
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in configuration file {config_path}: {e}")
        except Exception as e:
            raise ConfigurationError(f"Failed to load configuration from {config_path}: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {config_path} must contain a mapping")
        return data

    @staticmethod
    def load_session_config(
        config_path: Optional[Union[str, Path]] = None,
        use_env: bool = True
    ) -> SessionConfig:
        """
        Load session configuration from file and/or environment.

        Args:
            config_path: Path to configuration file.
            use_env: Whether to load from environment variables.

        Returns:
            SessionConfig instance.
        """
        file_config = ConfigurationLoader.load_from_file(config_path)
        session_data = file_config.get('session', {})

        if session_data:
            config = SessionConfig.from_dict(session_data)
        else:
            config = SessionConfig()

        # Environment only overrides values that differ from the defaults
        if use_env:
            env_config = SessionConfig.from_env()
            default_config = SessionConfig()
            overrides = {}
            for field in fields(SessionConfig):
                env_value = getattr(env_config, field.name)
                if env_value != getattr(default_config, field.name):
                    overrides[field.name] = env_value
            if overrides:
                config = replace(config, **overrides)

        config.validate()
        return config
