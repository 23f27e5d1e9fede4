"""Configuration management for rigid."""

import logging
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigurationError
from .signing import (
    DEFAULT_SIGNATURE_LENGTH,
    MAX_SIGNATURE_LENGTH,
    MIN_SIGNATURE_LENGTH,
)

CONFIG_PATH_ENV = "RIGID_CONFIG"
DEFAULT_CONFIG_PATH = Path("./rigid.yaml")
DEFAULT_SECRET_KEY_ENV = "RIGID_SECRET_KEY"


class SigningConfig(BaseModel):
    """Signing configuration.

    The secret key itself is never stored here, only the name of the
    environment variable that holds it.
    """

    signature_length: int = DEFAULT_SIGNATURE_LENGTH
    secret_key_env: str = DEFAULT_SECRET_KEY_ENV

    @field_validator("signature_length")
    @classmethod
    def validate_signature_length(cls, v):
        """Ensure the signature length is within the supported range."""
        if not MIN_SIGNATURE_LENGTH <= v <= MAX_SIGNATURE_LENGTH:
            raise ValueError(
                f"signature_length must be between {MIN_SIGNATURE_LENGTH} "
                f"and {MAX_SIGNATURE_LENGTH}"
            )
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    console_level: str = "WARNING"
    file_level: str = "DEBUG"
    log_dir: Optional[str] = None

    @field_validator("console_level", "file_level")
    @classmethod
    def validate_level(cls, v):
        """Ensure log levels name a standard logging level."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


class Config(BaseModel):
    """Main configuration class."""

    signing: SigningConfig = Field(default_factory=SigningConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def get_config_path(cls) -> Path:
        """Get the configuration file path."""
        return Path(os.environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH)).resolve()

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for YAML serialization."""
        return self.model_dump()

    def to_yaml(self) -> str:
        """Convert config to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    @classmethod
    def from_yaml_file(cls, config_path: Path) -> "Config":
        """Load configuration from YAML file."""
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

    def save_to_yaml_file(self, config_path: Path) -> None:
        """Save configuration to YAML file."""
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w", encoding="utf-8") as f:
            f.write(self.to_yaml())


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file, or return defaults if there is none.

    Raises:
        ConfigurationError: If the file exists but cannot be parsed or validated
    """
    if config_path is None:
        config_path = Config.get_config_path()
    config_path = Path(config_path)

    if not config_path.exists():
        return Config()

    try:
        return Config.from_yaml_file(config_path)
    except (OSError, yaml.YAMLError, ValidationError, TypeError) as e:
        raise ConfigurationError(f"Failed to load config from {config_path}: {e}") from e


def resolve_secret_key(
    config: Config, explicit: Optional[Union[str, bytes]] = None
) -> bytes:
    """Pick the secret key from an explicit value or the configured env var.

    Raises:
        ConfigurationError: If no key is available
    """
    if explicit is not None:
        return explicit.encode("utf-8") if isinstance(explicit, str) else bytes(explicit)

    env_name = config.signing.secret_key_env
    value = os.environ.get(env_name)
    if not value:
        raise ConfigurationError(
            f"No secret key provided; set {env_name} or pass one explicitly"
        )

    return value.encode("utf-8")
