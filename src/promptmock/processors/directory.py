"""
Directory Example Processor.

Reads a fixture directory laid out as::

    example/
        prompt.txt          the prompt, optionally ending in one newline
        output_0_7.txt      outputs sampled at temperature 0.7
        output_1_0.md       markdown outputs sampled at temperature 1.0

Each output file holds one or more ``---`` separated parts. Every part
repeats the prompt and continues with the generated text; the text after the
prompt becomes one mocked output.
"""

import logging
from pathlib import Path

from promptmock.config.models import GenerationConfig
from promptmock.models.request import CompletionRequest, OutputsByRequest
from promptmock.processors.base import FileProcessor, UnsupportedExampleError
from promptmock.processors.filenames import (
    is_markdown,
    is_output_file,
    is_prompt_file,
    parse_temperature,
)

logger = logging.getLogger(__name__)

PART_DELIMITER = "---"
MARKDOWN_BOLD = "**"


def _strip_one_newline(text: str) -> str:
    return text.removesuffix("\n")


class DirectoryExampleProcessor(FileProcessor):
    """Processes a fixture directory of one prompt and its outputs.

    The generation parameters given at construction are applied to every
    request produced; only the prompt and temperature come from disk.

    Usage:
        processor = DirectoryExampleProcessor(max_tokens=64, n=1)
        if processor.is_supported(path):
            outputs_by_request = processor.process_example(path)
    """

    def __init__(
        self,
        max_tokens: int,
        top_p: int | None = None,
        n: int | None = None,
        stream: bool | None = None,
        stop: str | None = None,
        encoding: str = "utf-8",
    ) -> None:
        """Initialize the processor.

        Args:
            max_tokens: max_tokens for every request produced
            top_p: top_p for every request produced
            n: n for every request produced
            stream: stream flag for every request produced
            stop: Stop sequence for every request produced
            encoding: Text encoding of fixture files
        """
        self.max_tokens = max_tokens
        self.top_p = top_p
        self.n = n
        self.stream = stream
        self.stop = stop
        self.encoding = encoding

    @classmethod
    def from_config(
        cls,
        generation: GenerationConfig,
        encoding: str = "utf-8",
    ) -> "DirectoryExampleProcessor":
        """Create a processor from generation settings."""
        return cls(
            max_tokens=generation.max_tokens,
            top_p=generation.top_p,
            n=generation.n,
            stream=generation.stream,
            stop=generation.stop,
            encoding=encoding,
        )

    def is_supported(self, path: str | Path | None) -> bool:
        """Check for exactly one prompt file and at least one output file."""
        if path is None:
            return False
        directory = Path(path)
        if not directory.is_dir():
            return False
        prompt_files, output_files = self._scan(directory)
        return len(prompt_files) == 1 and len(output_files) > 0

    def process_example(self, path: str | Path) -> OutputsByRequest:
        """Parse a fixture directory into request/output pairs.

        Args:
            path: Fixture directory

        Returns:
            Mapping from request to outputs, ordered by output filename
            and then by position within each file

        Raises:
            UnsupportedExampleError: If the directory does not contain exactly
                one prompt file and at least one output file
            TemperatureParseError: If an output filename has no temperature
            OSError: If a file cannot be read
        """
        directory = Path(path)
        if not directory.is_dir():
            raise UnsupportedExampleError("Example is not a directory", path=directory)

        prompt_files, output_files = self._scan(directory)
        if len(prompt_files) != 1 or not output_files:
            raise UnsupportedExampleError(
                f"Expected exactly one prompt file and at least one output file, "
                f"found {len(prompt_files)} prompt and {len(output_files)} output files",
                path=directory,
            )

        prompt = _strip_one_newline(self._read(prompt_files[0]))

        outputs_by_request: OutputsByRequest = {}
        for output_file in output_files:
            temperature = parse_temperature(output_file)
            contents = self._read(output_file)
            if is_markdown(output_file):
                contents = contents.replace(MARKDOWN_BOLD, "")

            for part in contents.split(PART_DELIMITER):
                if len(part) <= len(prompt) + 1:
                    continue
                output = _strip_one_newline(part[len(prompt) :])
                request = CompletionRequest(
                    prompt=prompt,
                    temperature=temperature,
                    max_tokens=self.max_tokens,
                    n=self.n,
                    top_p=self.top_p,
                    stop=self.stop,
                    stream=self.stream,
                )
                outputs_by_request.setdefault(request, []).append(output)

        logger.debug(
            "Processed %s: %d requests, %d outputs",
            directory,
            len(outputs_by_request),
            sum(len(outputs) for outputs in outputs_by_request.values()),
        )
        return outputs_by_request

    def _scan(self, directory: Path) -> tuple[list[Path], list[Path]]:
        entries = sorted(directory.iterdir())
        prompt_files = [entry for entry in entries if is_prompt_file(entry)]
        output_files = [entry for entry in entries if is_output_file(entry)]
        return prompt_files, output_files

    def _read(self, path: Path) -> str:
        logger.debug("Reading %s", path)
        # newline="" keeps \r\n intact so prompt-length offsets match the file
        with open(path, encoding=self.encoding, newline="") as f:
            return f.read()
