"""
Configuration Loader.

Loads and validates configuration from YAML files with environment
variable substitution.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from promptmock.config.environment import ensure_dotenv_loaded
from promptmock.config.models import PromptMockConfig

logger = logging.getLogger(__name__)

# Default configuration file locations
DEFAULT_CONFIG_PATHS = [
    "promptmock.yaml",
    "promptmock.yml",
    ".promptmock.yaml",
    ".promptmock.yml",
]

# Environment variable for config path
CONFIG_ENV_VAR = "PROMPTMOCK_CONFIG"

# Environment variable overrides, mapped to dot-separated config paths
ENV_VAR_OVERRIDES = {
    "PROMPTMOCK_MAX_TOKENS": "generation.max_tokens",
    "PROMPTMOCK_TOP_P": "generation.top_p",
    "PROMPTMOCK_N": "generation.n",
    "PROMPTMOCK_STOP": "generation.stop",
    "PROMPTMOCK_STREAM": "generation.stream",
    "PROMPTMOCK_FIXTURES_ROOT": "fixtures.root",
    "PROMPTMOCK_ENCODING": "fixtures.encoding",
    "PROMPTMOCK_LOG_LEVEL": "logging.level",
    "PROMPTMOCK_LOG_FILE": "logging.file",
    "PROMPTMOCK_MODEL": "model",
}


class ConfigurationError(Exception):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        errors: list[dict] | None = None,
        path: Path | None = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Error message
            errors: List of validation errors (from Pydantic)
            path: Path to the config file that caused the error
        """
        super().__init__(message)
        self.errors = errors or []
        self.path = path

    def __str__(self) -> str:
        """Format error message with details."""
        msg = super().__str__()
        if self.path:
            msg = f"{msg} (file: {self.path})"
        if self.errors:
            error_details = []
            for err in self.errors[:5]:
                loc = ".".join(str(x) for x in err.get("loc", []))
                error_msg = err.get("msg", "Unknown error")
                error_details.append(f"  - {loc}: {error_msg}")
            if len(self.errors) > 5:
                error_details.append(f"  ... and {len(self.errors) - 5} more errors")
            msg = f"{msg}\n" + "\n".join(error_details)
        return msg


class ConfigLoader:
    """Loads configuration from YAML files.

    Supports:
    - YAML configuration files
    - Environment variable substitution (${VAR} and ${VAR:-default} syntax)
    - PROMPTMOCK_* environment overrides
    - Validation via Pydantic

    Usage:
        # Load from specific file
        config = ConfigLoader("promptmock.yaml").load()

        # Load from PROMPTMOCK_CONFIG or default locations
        config = ConfigLoader().load_from_env()
    """

    # Matches ${VAR_NAME}, ${VAR_NAME:-default} or ${VAR_NAME:default}
    ENV_PATTERN = re.compile(r"\$\{(\w+)(?::-?([^}]*))?\}")

    def __init__(
        self,
        config_path: str | Path | None = None,
        env_file: str = ".env",
    ) -> None:
        """Initialize the config loader.

        Args:
            config_path: Path to YAML config file (optional)
            env_file: Path to .env file for environment loading
        """
        self._config_path = Path(config_path) if config_path else None
        self._env_file = env_file
        self._config: PromptMockConfig | None = None
        self._loaded_from_path: Path | None = None

    @property
    def config_path(self) -> Path | None:
        """Get config file path."""
        return self._config_path

    @property
    def loaded_from_path(self) -> Path | None:
        """Get the path the config was actually loaded from, if any."""
        return self._loaded_from_path

    def get(self) -> PromptMockConfig:
        """Get the loaded configuration.

        Raises:
            RuntimeError: If configuration has not been loaded yet.
        """
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call load() or load_from_env() first.")
        return self._config

    def load(self, path: str | Path | None = None) -> PromptMockConfig:
        """Load and validate configuration.

        Args:
            path: Optional path to config file, overriding the one given
                in __init__. Without any path, defaults are used.

        Returns:
            Validated PromptMockConfig

        Raises:
            ConfigurationError: If config is invalid
            FileNotFoundError: If config file not found
        """
        if path is not None:
            self._config_path = Path(path)

        ensure_dotenv_loaded(self._env_file)

        if self._config_path:
            raw_config = self._load_yaml()
            self._loaded_from_path = self._config_path
        else:
            raw_config = {}
            self._loaded_from_path = None

        processed = self._substitute_env_vars(raw_config)
        processed = self._apply_env_overrides(processed)
        # YAML parses empty sections as None; drop them so defaults apply
        processed = self._clean_none_values(processed)

        try:
            self._config = PromptMockConfig(**processed)
        except ValidationError as e:
            raise ConfigurationError(
                f"Configuration validation failed: {e.error_count()} errors",
                errors=e.errors(),
                path=self._loaded_from_path,
            ) from e

        logger.debug("Configuration loaded from %s", self._loaded_from_path or "defaults")
        return self._config

    def load_from_env(self) -> PromptMockConfig:
        """Load configuration from PROMPTMOCK_CONFIG or default locations.

        Searches PROMPTMOCK_CONFIG first, then DEFAULT_CONFIG_PATHS in the
        current directory. When no file is found, defaults are used.

        Returns:
            Validated PromptMockConfig

        Raises:
            ConfigurationError: If config is invalid
            FileNotFoundError: If PROMPTMOCK_CONFIG names a missing file
        """
        ensure_dotenv_loaded(self._env_file)

        env_config_path = os.environ.get(CONFIG_ENV_VAR)
        if env_config_path:
            config_path = Path(env_config_path)
            if not config_path.exists():
                raise FileNotFoundError(
                    f"Config file specified by {CONFIG_ENV_VAR} not found: {env_config_path}"
                )
            return self.load(config_path)

        for default_path in DEFAULT_CONFIG_PATHS:
            path = Path(default_path)
            if path.exists():
                return self.load(path)

        return self.load()

    def _load_yaml(self) -> dict[str, Any]:
        if not self._config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self._config_path}")

        try:
            with open(self._config_path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML: {e}", path=self._config_path) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Configuration root must be a mapping", path=self._config_path
            )
        return data

    def _substitute_env_vars(self, data: Any) -> Any:
        """Recursively substitute environment variables in config values."""
        if isinstance(data, dict):
            return {k: self._substitute_env_vars(v) for k, v in data.items()}
        elif isinstance(data, list):
            return [self._substitute_env_vars(item) for item in data]
        elif isinstance(data, str):
            return self._substitute_string(data)
        else:
            return data

    def _substitute_string(self, value: str) -> Any:
        full_match = self.ENV_PATTERN.fullmatch(value)
        if full_match:
            env_value = os.environ.get(full_match.group(1))
            resolved = env_value if env_value is not None else full_match.group(2)
            if resolved is not None:
                return self._coerce_type(resolved)
            # Left as-is; validation reports it if the field needs a value
            return value

        def replace(match: re.Match[str]) -> str:
            env_value = os.environ.get(match.group(1))
            if env_value is not None:
                return env_value
            if match.group(2) is not None:
                return match.group(2)
            return match.group(0)

        return self.ENV_PATTERN.sub(replace, value)

    def _coerce_type(self, value: str) -> Any:
        """Map empty strings to None; Pydantic coerces everything else."""
        if value == "":
            return None
        return value

    def _clean_none_values(self, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: self._clean_none_values(v) for k, v in data.items() if v is not None}
        elif isinstance(data, list):
            return [self._clean_none_values(item) for item in data]
        else:
            return data

    def _apply_env_overrides(self, config_dict: dict[str, Any]) -> dict[str, Any]:
        """Apply PROMPTMOCK_* overrides, which take precedence over the file."""
        for env_var, config_path in ENV_VAR_OVERRIDES.items():
            env_value = os.environ.get(env_var)
            if env_value is not None:
                self._set_nested_value(config_dict, config_path, self._coerce_type(env_value))
        return config_dict

    def _set_nested_value(self, config_dict: dict[str, Any], path: str, value: Any) -> None:
        parts = path.split(".")
        current = config_dict
        for part in parts[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]
        current[parts[-1]] = value

    def save(self, path: str | Path | None = None) -> None:
        """Save current configuration to a YAML file.

        Args:
            path: Path to save to (defaults to original config_path)

        Raises:
            ValueError: If no config loaded or no path specified
        """
        if self._config is None:
            raise ValueError("No configuration loaded")

        save_path = Path(path) if path else self._config_path
        if save_path is None:
            raise ValueError("No path specified for saving")

        with open(save_path, "w") as f:
            yaml.safe_dump(
                self._config.to_yaml_dict(),
                f,
                default_flow_style=False,
                sort_keys=False,
            )


# Global configuration, cached by load_config / load_config_from_env
_global_config: PromptMockConfig | None = None


def load_config(
    config_path: str | Path | None = None,
    env_file: str = ".env",
) -> PromptMockConfig:
    """Load configuration from a specific file and cache it globally."""
    global _global_config

    _global_config = ConfigLoader(config_path, env_file).load()
    return _global_config


def load_config_from_env(env_file: str = ".env") -> PromptMockConfig:
    """Load configuration from PROMPTMOCK_CONFIG or default locations."""
    global _global_config

    _global_config = ConfigLoader(env_file=env_file).load_from_env()
    return _global_config


def get_config() -> PromptMockConfig:
    """Get the global configuration.

    Raises:
        RuntimeError: If configuration not loaded
    """
    if _global_config is None:
        raise RuntimeError(
            "Configuration not loaded. Call load_config() or load_config_from_env() first."
        )
    return _global_config


def reset_config() -> None:
    """Reset global configuration. Useful for testing."""
    global _global_config
    _global_config = None
