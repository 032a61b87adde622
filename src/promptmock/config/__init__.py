"""
promptmock - Configuration Management

This module provides configuration management including:
- YAML configuration loading and validation
- .env handling
- PROMPTMOCK_* environment overrides
"""

from promptmock.config.environment import ensure_dotenv_loaded, reset_environment
from promptmock.config.loader import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_PATHS,
    ENV_VAR_OVERRIDES,
    ConfigLoader,
    ConfigurationError,
    get_config,
    load_config,
    load_config_from_env,
    reset_config,
)
from promptmock.config.models import (
    FixturesConfig,
    GenerationConfig,
    LoggingConfig,
    LogLevel,
    PromptMockConfig,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_PATHS",
    "ENV_VAR_OVERRIDES",
    "ConfigLoader",
    "ConfigurationError",
    "FixturesConfig",
    "GenerationConfig",
    "LogLevel",
    "LoggingConfig",
    "PromptMockConfig",
    "ensure_dotenv_loaded",
    "get_config",
    "load_config",
    "load_config_from_env",
    "reset_config",
    "reset_environment",
]
