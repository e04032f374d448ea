"""
Configuration management for body-cache.

Settings come from dataclass defaults, a YAML file (``Config.from_file``) or
``BODY_CACHE_*`` environment variables (``Config.from_env``).
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .encoding import DEFAULT_CHARACTER_ENCODING
from .exceptions import ConfigurationError
from .logging import configure_logging

logger = logging.getLogger(__name__)

ENV_PREFIX = "BODY_CACHE_"


class Environment(Enum):
    """Environment types for configuration."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


@dataclass
class LoggingConfig:
    """Structured logging configuration."""

    level: str = "INFO"
    json_format: bool = True


@dataclass
class RequestLoggingConfig:
    """What the request-logging middleware puts into its messages."""

    include_query_string: bool = False
    include_client_info: bool = False
    include_headers: bool = False
    include_payload: bool = False
    max_payload_length: int = 50

    before_message_prefix: str = "Before request ["
    before_message_suffix: str = "]"
    after_message_prefix: str = "After request ["
    after_message_suffix: str = "]"

    # Used when a request declares no charset
    default_encoding: str = DEFAULT_CHARACTER_ENCODING

    def __post_init__(self) -> None:
        if self.max_payload_length < 0:
            raise ConfigurationError(
                f"max_payload_length must be >= 0, got {self.max_payload_length}",
                component="config",
            )


@dataclass
class Config:
    """Main configuration class for body-cache."""

    environment: Environment = Environment.DEVELOPMENT
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    request_logging: RequestLoggingConfig = field(
        default_factory=RequestLoggingConfig
    )

    def apply_logging(self) -> None:
        """Configure structured logging from the logging section."""
        configure_logging(level=self.logging.level, json_format=self.logging.json_format)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Build a configuration from a plain mapping."""
        try:
            return cls(
                environment=Environment(data.get("environment", "development")),
                logging=LoggingConfig(**(data.get("logging") or {})),
                request_logging=RequestLoggingConfig(
                    **(data.get("request_logging") or {})
                ),
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Invalid configuration: {e}", component="config"
            ) from e

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "Config":
        """Load configuration from YAML file."""
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"YAML file not found: {config_path}")

        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if data is None:
            logger.warning(f"YAML file is empty or contains only comments: {config_path}")
            data = {}
        elif not isinstance(data, dict):
            raise ConfigurationError(
                f"Expected a mapping at the top of {config_path}", component="config"
            )

        logger.debug(f"Loaded configuration from {config_path}")
        return cls.from_dict(data)

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""

        def getenv_bool(name: str, default: bool) -> bool:
            v = os.getenv(ENV_PREFIX + name)
            return default if v is None else v.lower() in {"1", "true", "yes", "on"}

        def getenv_int(name: str, default: int) -> int:
            v = os.getenv(ENV_PREFIX + name)
            if v is None:
                return default
            try:
                return int(v)
            except ValueError as e:
                raise ConfigurationError(
                    f"{ENV_PREFIX + name} must be an integer, got {v!r}",
                    component="config",
                ) from e

        def getenv_str(name: str, default: str) -> str:
            return os.getenv(ENV_PREFIX + name, default)

        try:
            env = Environment(getenv_str("ENV", "development"))
        except ValueError as e:
            raise ConfigurationError(str(e), component="config") from e

        logging_config = LoggingConfig(
            level=getenv_str("LOGGING__LEVEL", "INFO"),
            json_format=getenv_bool("LOGGING__JSON_FORMAT", True),
        )

        defaults = RequestLoggingConfig()
        request_logging = RequestLoggingConfig(
            include_query_string=getenv_bool(
                "REQUEST_LOGGING__INCLUDE_QUERY_STRING", defaults.include_query_string
            ),
            include_client_info=getenv_bool(
                "REQUEST_LOGGING__INCLUDE_CLIENT_INFO", defaults.include_client_info
            ),
            include_headers=getenv_bool(
                "REQUEST_LOGGING__INCLUDE_HEADERS", defaults.include_headers
            ),
            include_payload=getenv_bool(
                "REQUEST_LOGGING__INCLUDE_PAYLOAD", defaults.include_payload
            ),
            max_payload_length=getenv_int(
                "REQUEST_LOGGING__MAX_PAYLOAD_LENGTH", defaults.max_payload_length
            ),
            default_encoding=getenv_str(
                "REQUEST_LOGGING__DEFAULT_ENCODING", defaults.default_encoding
            ),
        )

        return cls(
            environment=env,
            logging=logging_config,
            request_logging=request_logging,
        )
