"""
promptmock - Mocking

Registry of mocked outputs and the httpx handler that serves them.
"""

from promptmock.mocking.registry import MockResponseRegistry, NoMockResponseError
from promptmock.mocking.transport import CompletionsMockHandler

__all__ = [
    "CompletionsMockHandler",
    "MockResponseRegistry",
    "NoMockResponseError",
]
