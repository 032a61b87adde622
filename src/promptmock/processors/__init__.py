"""
promptmock - Fixture Processors

Processors turn fixtures on disk into request/output pairs.
"""

from promptmock.processors.base import (
    FileProcessor,
    ProcessorError,
    TemperatureParseError,
    UnsupportedExampleError,
)
from promptmock.processors.directory import DirectoryExampleProcessor
from promptmock.processors.filenames import parse_temperature

__all__ = [
    "DirectoryExampleProcessor",
    "FileProcessor",
    "ProcessorError",
    "TemperatureParseError",
    "UnsupportedExampleError",
    "parse_temperature",
]
