"""
Configuration Data Models.

Defines the configuration schema using Pydantic for validation
and type safety.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    """Logging levels accepted in configuration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class GenerationConfig(BaseModel):
    """Generation parameters applied to every request built from fixtures.

    Attributes:
        max_tokens: Maximum tokens to generate
        top_p: Nucleus sampling parameter
        n: Number of completions per request
        stream: Streamed response flag
        stop: Stop sequence
    """

    max_tokens: int = Field(
        default=16,
        ge=1,
        description="Maximum tokens to generate",
    )
    top_p: int | None = Field(
        default=None,
        description="Nucleus sampling parameter",
    )
    n: int | None = Field(
        default=None,
        ge=1,
        description="Completions per request",
    )
    stream: bool | None = Field(
        default=None,
        description="Streamed response flag",
    )
    stop: str | None = Field(
        default=None,
        description="Stop sequence",
    )


class FixturesConfig(BaseModel):
    """Location and format of fixture directories.

    Attributes:
        root: Directory holding fixture directories
        encoding: Text encoding of fixture files
        recursive: Descend into nested directories when scanning
    """

    root: str = Field(
        default="./fixtures",
        description="Root directory of fixtures",
    )
    encoding: str = Field(
        default="utf-8",
        description="Fixture file encoding",
    )
    recursive: bool = Field(
        default=True,
        description="Scan nested directories",
    )

    @field_validator("root")
    @classmethod
    def validate_root(cls, v: str) -> str:
        """Validate that root is not empty."""
        if not v.strip():
            raise ValueError("Fixtures root cannot be empty")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration.

    Attributes:
        level: Log level for the promptmock logger
        file: Optional log file path
        format: Log record format
    """

    level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Log level",
    )
    file: str | None = Field(
        default=None,
        description="Log file path",
    )
    format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log record format",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        """Accept lowercase level names."""
        if isinstance(v, str):
            return v.upper()
        return v


class PromptMockConfig(BaseModel):
    """Root configuration.

    Attributes:
        generation: Generation parameters for fixture requests
        fixtures: Fixture location and format
        logging: Logging configuration
        model: Model name reported in mocked responses
    """

    generation: GenerationConfig = Field(
        default_factory=GenerationConfig,
        description="Generation parameters",
    )
    fixtures: FixturesConfig = Field(
        default_factory=FixturesConfig,
        description="Fixture configuration",
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration",
    )
    model: str = Field(
        default="mock-model",
        description="Model name in mocked responses",
    )

    def to_yaml_dict(self) -> dict[str, Any]:
        """Convert to YAML-friendly dictionary.

        Returns:
            Dict suitable for YAML serialization
        """
        return self.model_dump(mode="json", exclude_none=True)
