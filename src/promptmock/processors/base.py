"""
Abstract File Processor Interface.

Defines the contract for components that turn a fixture on disk into
request/response pairs, plus the errors they raise.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from promptmock.models.request import OutputsByRequest


class ProcessorError(Exception):
    """Base exception for fixture processing errors."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        msg = super().__str__()
        if self.path is not None:
            msg = f"{msg} (path: {self.path})"
        return msg


class UnsupportedExampleError(ProcessorError):
    """Raised when a path does not have the layout a processor requires."""

    pass


class TemperatureParseError(ProcessorError, ValueError):
    """Raised when an output filename does not encode a temperature."""

    pass


class FileProcessor(ABC):
    """Abstract base class for fixture processors.

    A processor first decides whether a path is something it understands,
    then converts it into a mapping from request to mocked outputs.
    Callers must check ``is_supported`` before ``process_example``;
    implementations raise UnsupportedExampleError when that precondition
    does not hold.
    """

    @abstractmethod
    def is_supported(self, path: str | Path | None) -> bool:
        """Check whether the processor can handle the given path.

        Args:
            path: File or directory to check

        Returns:
            True if process_example can be called on this path
        """
        pass

    @abstractmethod
    def process_example(self, path: str | Path) -> OutputsByRequest:
        """Convert the fixture at path into request/output pairs.

        Args:
            path: A path for which is_supported returned True

        Returns:
            Mapping from request to outputs, in discovery order

        Raises:
            UnsupportedExampleError: If the path is not supported
            OSError: If a file cannot be read
        """
        pass
