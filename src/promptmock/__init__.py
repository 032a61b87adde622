"""
promptmock: Fixture-backed mocks for text-completion APIs.

Parses fixture directories (a prompt file plus output files whose names carry
a sampling temperature) into request/response pairs, and serves those pairs
back to code under test.

Example:
    from promptmock import DirectoryExampleProcessor, MockResponseRegistry

    processor = DirectoryExampleProcessor(max_tokens=64)
    registry = MockResponseRegistry()
    registry.load_tree("tests/fixtures/prompts", processor)
"""

from promptmock.mocking import (
    CompletionsMockHandler,
    MockResponseRegistry,
    NoMockResponseError,
)
from promptmock.models import (
    CompletionChoice,
    CompletionRequest,
    CompletionResponse,
    OutputsByRequest,
)
from promptmock.processors import (
    DirectoryExampleProcessor,
    FileProcessor,
    ProcessorError,
    TemperatureParseError,
    UnsupportedExampleError,
)
from promptmock.version import __version__

__all__ = [
    "__version__",
    "CompletionChoice",
    "CompletionRequest",
    "CompletionResponse",
    "CompletionsMockHandler",
    "DirectoryExampleProcessor",
    "FileProcessor",
    "MockResponseRegistry",
    "NoMockResponseError",
    "OutputsByRequest",
    "ProcessorError",
    "TemperatureParseError",
    "UnsupportedExampleError",
]
