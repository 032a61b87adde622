"""
Mock Response Registry.

Collects request/output pairs from fixture processors and serves them back
to code under test. Outputs for a request are handed out in order and cycle
once exhausted, so repeated calls with the same request see every fixture
output.
"""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from promptmock.models.request import CompletionRequest
from promptmock.models.response import CompletionResponse
from promptmock.processors.base import FileProcessor

logger = logging.getLogger(__name__)


class NoMockResponseError(KeyError):
    """Raised when no outputs are registered for a request."""

    def __init__(self, request: CompletionRequest) -> None:
        super().__init__(request)
        self.request = request

    def __str__(self) -> str:
        return (
            f"No mocked outputs registered for prompt {self.request.prompt[:40]!r} "
            f"at temperature {self.request.temperature}"
        )


class MockResponseRegistry:
    """In-memory store of mocked outputs keyed by request.

    Usage:
        registry = MockResponseRegistry()
        registry.load_tree("tests/fixtures/prompts", processor)

        response = registry.complete(request)
    """

    def __init__(self) -> None:
        self._outputs: dict[CompletionRequest, list[str]] = {}
        self._cursors: dict[CompletionRequest, int] = {}

    def __len__(self) -> int:
        return len(self._outputs)

    def __contains__(self, request: object) -> bool:
        return request in self._outputs

    def requests(self) -> list[CompletionRequest]:
        """List registered requests in registration order."""
        return list(self._outputs)

    def register(self, request: CompletionRequest, outputs: Iterable[str]) -> None:
        """Append outputs to those already registered for a request."""
        self._outputs.setdefault(request, []).extend(outputs)

    def register_example(self, path: str | Path, processor: FileProcessor) -> int:
        """Process one fixture and register everything it yields.

        Args:
            path: Fixture path supported by the processor
            processor: Processor used to parse the fixture

        Returns:
            Number of outputs registered
        """
        added = 0
        for request, outputs in processor.process_example(path).items():
            self.register(request, outputs)
            added += len(outputs)
        return added

    def load_tree(
        self,
        root: str | Path,
        processor: FileProcessor,
        recursive: bool = True,
    ) -> list[Path]:
        """Register every supported fixture under a root directory.

        The root itself is checked first, then each subdirectory in sorted
        order. Subdirectories of a supported fixture are still visited.

        Args:
            root: Directory to scan
            processor: Processor deciding which directories are fixtures
            recursive: Visit nested directories, not only direct children

        Returns:
            Directories that were registered, in visiting order

        Raises:
            FileNotFoundError: If root does not exist or is not a directory
        """
        loaded = []
        for directory in self.find_examples(root, processor, recursive):
            added = self.register_example(directory, processor)
            logger.info("Loaded %d outputs from %s", added, directory)
            loaded.append(directory)
        return loaded

    @staticmethod
    def find_examples(
        root: str | Path,
        processor: FileProcessor,
        recursive: bool = True,
    ) -> list[Path]:
        """List the directories under root that the processor supports.

        Raises:
            FileNotFoundError: If root does not exist or is not a directory
        """
        root = Path(root)
        if not root.is_dir():
            raise FileNotFoundError(f"Fixture root not found: {root}")

        if recursive:
            candidates = []
            for dirpath, dirnames, _ in os.walk(root):
                dirnames.sort()
                candidates.append(Path(dirpath))
        else:
            candidates = [root] + sorted(p for p in root.iterdir() if p.is_dir())

        examples = []
        for directory in candidates:
            if processor.is_supported(directory):
                examples.append(directory)
            else:
                logger.debug("Skipping %s: not a supported fixture", directory)
        return examples

    def responses_for(self, request: CompletionRequest) -> list[str]:
        """Get all outputs registered for a request.

        Raises:
            NoMockResponseError: If the request is not registered
        """
        if request not in self._outputs:
            raise NoMockResponseError(request)
        return list(self._outputs[request])

    def next_response(self, request: CompletionRequest) -> str:
        """Get the next output for a request, cycling after the last one.

        Raises:
            NoMockResponseError: If the request is not registered
        """
        outputs = self._outputs.get(request)
        if not outputs:
            raise NoMockResponseError(request)
        cursor = self._cursors.get(request, 0)
        self._cursors[request] = (cursor + 1) % len(outputs)
        return outputs[cursor % len(outputs)]

    def complete(self, request: CompletionRequest, model: str = "mock-model") -> CompletionResponse:
        """Build a completions response with ``request.n`` choices (default 1).

        Raises:
            NoMockResponseError: If the request is not registered
        """
        count = request.n or 1
        outputs = [self.next_response(request) for _ in range(count)]
        return CompletionResponse.from_outputs(outputs, model=model)

    def reset_cursors(self) -> None:
        """Start handing out outputs from the first one again."""
        self._cursors.clear()

    def clear(self) -> None:
        """Remove all registered outputs."""
        self._outputs.clear()
        self._cursors.clear()
