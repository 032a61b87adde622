"""
promptmock - Data Models

Pydantic models for completion requests and responses.
"""

from promptmock.models.request import CompletionRequest, OutputsByRequest
from promptmock.models.response import CompletionChoice, CompletionResponse

__all__ = [
    "CompletionChoice",
    "CompletionRequest",
    "CompletionResponse",
    "OutputsByRequest",
]
