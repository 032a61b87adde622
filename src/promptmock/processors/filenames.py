"""
Output filename grammar.

Output files carry their sampling temperature around the last underscore of
the name, as one digit, an underscore and one digit: ``output_0_7.txt`` is
temperature 0.7 and ``davinci_output_1_0.md`` is temperature 1.0.
"""

import re
from decimal import Decimal
from pathlib import Path

from promptmock.processors.base import TemperatureParseError

PROMPT_FILE_SUFFIX = "prompt.txt"
OUTPUT_FILE_MARKER = "output_"
MARKDOWN_SUFFIX = ".md"

# Digit, the last underscore in the name, digit.
TEMPERATURE_PATTERN = re.compile(r"(\d)_(\d)[^_]*$")


def is_prompt_file(path: Path) -> bool:
    """Check whether a path names the prompt file of a fixture."""
    return path.name.endswith(PROMPT_FILE_SUFFIX)


def is_output_file(path: Path) -> bool:
    """Check whether a path names an output file of a fixture.

    Only the entry's own name is matched. Parent directories are ignored,
    so a fixture stored under e.g. ``output_runs/`` does not turn its
    prompt file into an output.
    """
    return OUTPUT_FILE_MARKER in path.name


def is_markdown(path: Path) -> bool:
    """Check whether an output file is markdown."""
    return path.name.endswith(MARKDOWN_SUFFIX)


def parse_temperature(path: str | Path) -> Decimal:
    """Extract the sampling temperature from an output filename.

    Args:
        path: Output file path; only its final component is inspected

    Returns:
        Temperature as a Decimal, e.g. Decimal("0.7")

    Raises:
        TemperatureParseError: If the name does not follow the grammar
    """
    path = Path(path)
    match = TEMPERATURE_PATTERN.search(path.name)
    if match is None:
        raise TemperatureParseError(
            f"Cannot derive temperature from filename '{path.name}'",
            path=path,
        )
    return Decimal(f"{match.group(1)}.{match.group(2)}")
