"""
promptmock Test Configuration and Fixtures

Builds fixture directories under tmp_path so tests never depend on files
checked into the repository.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from promptmock.processors import DirectoryExampleProcessor

ExampleFactory = Callable[..., Path]


@pytest.fixture
def make_example(tmp_path: Path) -> ExampleFactory:
    """Return a factory that writes a fixture directory.

    Usage:
        example = make_example("translate", prompt="Translate: hello\\n",
                               outputs={"output_0_7.txt": "..."})
    """

    def _make(
        name: str = "example",
        prompt: str | None = "Translate: hello\n",
        outputs: dict[str, str] | None = None,
        extra: dict[str, str] | None = None,
        parent: Path | None = None,
    ) -> Path:
        directory = (parent or tmp_path) / name
        directory.mkdir(parents=True, exist_ok=True)
        if prompt is not None:
            (directory / "prompt.txt").write_bytes(prompt.encode("utf-8"))
        for filename, content in (outputs or {}).items():
            (directory / filename).write_bytes(content.encode("utf-8"))
        for filename, content in (extra or {}).items():
            (directory / filename).write_bytes(content.encode("utf-8"))
        return directory

    return _make


@pytest.fixture
def translate_example(make_example: ExampleFactory) -> Path:
    """Fixture directory with one text and one markdown output file."""
    return make_example(
        "translate",
        outputs={
            "output_0_7.txt": "Translate: helloBonjour---Translate: helloSalut\n",
            "output_1_0.md": "**Translate: hello**World\n",
        },
    )


@pytest.fixture
def processor() -> DirectoryExampleProcessor:
    """Processor with fixed generation parameters."""
    return DirectoryExampleProcessor(max_tokens=64, top_p=1, n=2, stream=False, stop="\n\n")
