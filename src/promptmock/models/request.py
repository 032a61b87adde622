"""
Request descriptor for completions calls.

A CompletionRequest is the lookup key for mocked outputs: two requests with
identical field values are the same key, whether they were built from a
fixture directory or decoded from an HTTP request body.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class CompletionRequest(BaseModel):
    """Immutable description of a text-completion request.

    Attributes:
        prompt: Prompt text sent to the model
        temperature: Sampling temperature, kept as a Decimal so that
            ``0.7`` parsed from a filename equals ``0.7`` parsed from JSON
        max_tokens: Maximum number of tokens to generate
        n: Number of completions requested
        top_p: Nucleus sampling parameter
        stop: Stop sequence
        stream: Whether the caller asked for a streamed response
    """

    model_config = ConfigDict(frozen=True)

    prompt: str = Field(..., description="Prompt text")
    temperature: Decimal = Field(..., ge=0, description="Sampling temperature")
    max_tokens: int = Field(..., description="Maximum tokens to generate")
    n: int | None = Field(default=None, description="Number of completions")
    top_p: int | None = Field(default=None, description="Nucleus sampling parameter")
    stop: str | None = Field(default=None, description="Stop sequence")
    stream: bool | None = Field(default=None, description="Streamed response requested")


# Result of processing one fixture directory: each request maps to its
# outputs in file and split order.
OutputsByRequest = dict[CompletionRequest, list[str]]
