"""
Completions-API shaped response models.

These mirror the body returned by a ``/completions`` endpoint closely enough
for client code under test to consume mocked outputs unchanged.
"""

import time
import uuid
from typing import Literal

from pydantic import BaseModel, Field


class CompletionChoice(BaseModel):
    """One generated completion.

    Attributes:
        text: Generated text
        index: Position of this choice in the response
        finish_reason: Why generation stopped
        logprobs: Always None for mocked outputs
    """

    text: str
    index: int = Field(default=0, ge=0)
    finish_reason: str = "stop"
    logprobs: None = None


class CompletionResponse(BaseModel):
    """Response body for a completions call."""

    id: str = Field(default_factory=lambda: f"cmpl-mock-{uuid.uuid4().hex[:24]}")
    object: Literal["text_completion"] = "text_completion"
    created: int = Field(default_factory=lambda: int(time.time()))
    model: str = "mock-model"
    choices: list[CompletionChoice] = Field(default_factory=list)

    @classmethod
    def from_outputs(cls, outputs: list[str], model: str = "mock-model") -> "CompletionResponse":
        """Build a response whose choices are the given outputs, in order."""
        return cls(
            model=model,
            choices=[CompletionChoice(text=text, index=i) for i, text in enumerate(outputs)],
        )
