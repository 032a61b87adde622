"""
promptmock Command Line Interface.

This module provides the CLI entry point for inspecting fixture directories.
"""

import json
import logging
import os
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from promptmock.config import ConfigurationError, load_config, load_config_from_env
from promptmock.config.models import LoggingConfig, PromptMockConfig
from promptmock.mocking import MockResponseRegistry
from promptmock.models import OutputsByRequest
from promptmock.processors import DirectoryExampleProcessor, ProcessorError
from promptmock.version import __version__

console = Console()


def _configure_logging(logging_config: LoggingConfig, verbose: bool) -> None:
    """Configure the promptmock logger from configuration."""
    level = logging.DEBUG if verbose else getattr(logging, logging_config.level.value)
    logging.basicConfig(
        level=logging.WARNING,
        format=logging_config.format,
        handlers=[logging.StreamHandler()],
    )
    logger = logging.getLogger("promptmock")
    logger.setLevel(level)

    if logging_config.file:
        # One handler per log file, however often the CLI is invoked
        log_path = os.path.abspath(logging_config.file)
        for handler in logger.handlers:
            if isinstance(handler, logging.FileHandler) and handler.baseFilename == log_path:
                return
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(logging.Formatter(logging_config.format))
        logger.addHandler(file_handler)


def _load(ctx: click.Context, config_path: str | None) -> PromptMockConfig:
    """Load configuration and set up logging, exiting on configuration errors."""
    try:
        cfg = load_config(config_path) if config_path else load_config_from_env()
    except (ConfigurationError, FileNotFoundError) as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        sys.exit(1)
    _configure_logging(cfg.logging, ctx.obj.get("verbose", False))
    return cfg


@click.group()
@click.version_option(version=__version__, prog_name="promptmock")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """promptmock: fixture-backed mocks for text-completion APIs.

    Parses fixture directories of prompts and sampled outputs into
    request/response pairs.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@main.command()
@click.argument("example_dir", type=click.Path(exists=True, file_okay=False))
@click.option("--config", "-c", "config_path", type=click.Path(exists=True), help="Path to configuration file")
@click.option("--max-tokens", type=int, default=None, help="Override max_tokens")
@click.option("--top-p", type=int, default=None, help="Override top_p")
@click.option("--n", "n", type=int, default=None, help="Override n")
@click.option("--stop", default=None, help="Override stop sequence")
@click.option("--stream/--no-stream", default=None, help="Override stream flag")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
@click.pass_context
def inspect(
    ctx: click.Context,
    example_dir: str,
    config_path: str | None,
    max_tokens: int | None,
    top_p: int | None,
    n: int | None,
    stop: str | None,
    stream: bool | None,
    output_format: str,
) -> None:
    """Parse a fixture directory and show its request/output pairs.

    EXAMPLE_DIR is a directory holding one prompt.txt and output_* files.
    """
    cfg = _load(ctx, config_path)

    overrides = {
        "max_tokens": max_tokens,
        "top_p": top_p,
        "n": n,
        "stop": stop,
        "stream": stream,
    }
    generation = cfg.generation.model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )
    processor = DirectoryExampleProcessor.from_config(generation, encoding=cfg.fixtures.encoding)

    try:
        outputs_by_request = processor.process_example(example_dir)
    except (ProcessorError, OSError) as e:
        console.print(f"[red]Error:[/red] {e}")
        if ctx.obj.get("verbose"):
            console.print_exception()
        sys.exit(1)

    if output_format == "json":
        click.echo(json.dumps(_to_json(outputs_by_request), indent=2))
    else:
        _display_example(Path(example_dir), outputs_by_request)


def _to_json(outputs_by_request: OutputsByRequest) -> list[dict]:
    return [
        {"request": request.model_dump(mode="json"), "outputs": outputs}
        for request, outputs in outputs_by_request.items()
    ]


def _display_example(example_dir: Path, outputs_by_request: OutputsByRequest) -> None:
    """Display the pairs parsed from one fixture directory."""
    if not outputs_by_request:
        console.print(f"[yellow]No outputs found in {example_dir}[/yellow]")
        return

    prompt = next(iter(outputs_by_request)).prompt
    console.print(Panel(prompt, title=f"Prompt ({example_dir.name})"))

    table = Table(title="Outputs", show_header=True)
    table.add_column("Temperature", style="cyan")
    table.add_column("#", style="dim")
    table.add_column("Output", style="green")
    for request, outputs in outputs_by_request.items():
        for index, output in enumerate(outputs):
            table.add_row(str(request.temperature), str(index), output)
    console.print(table)


@main.command()
@click.argument("root", type=click.Path(exists=True, file_okay=False))
@click.option("--config", "-c", "config_path", type=click.Path(exists=True), help="Path to configuration file")
@click.option("--recursive/--no-recursive", default=None, help="Scan nested directories")
@click.pass_context
def scan(ctx: click.Context, root: str, config_path: str | None, recursive: bool | None) -> None:
    """List the fixture directories found under ROOT."""
    cfg = _load(ctx, config_path)
    if recursive is None:
        recursive = cfg.fixtures.recursive

    processor = DirectoryExampleProcessor.from_config(cfg.generation, encoding=cfg.fixtures.encoding)
    root_path = Path(root)

    table = Table(title=f"Fixtures under {root_path}", show_header=True)
    table.add_column("Directory", style="cyan")
    table.add_column("Requests", style="green")
    table.add_column("Outputs", style="green")

    try:
        for directory in MockResponseRegistry.find_examples(root_path, processor, recursive):
            outputs_by_request = processor.process_example(directory)
            table.add_row(
                str(directory.relative_to(root_path)),
                str(len(outputs_by_request)),
                str(sum(len(o) for o in outputs_by_request.values())),
            )
    except (ProcessorError, OSError) as e:
        console.print(f"[red]Error:[/red] {e}")
        if ctx.obj.get("verbose"):
            console.print_exception()
        sys.exit(1)

    if table.row_count == 0:
        console.print(f"[yellow]No fixture directories found under {root_path}[/yellow]")
        return
    console.print(table)


@main.command()
@click.option("--config", "-c", "config_path", type=click.Path(exists=True), help="Path to configuration file")
@click.pass_context
def config(ctx: click.Context, config_path: str | None) -> None:
    """Display current configuration."""
    cfg = _load(ctx, config_path)

    console.print(Panel("[bold blue]promptmock Configuration[/bold blue]", title="Configuration"))

    console.print("[bold]Generation[/bold]")
    console.print(f"  Max Tokens: {cfg.generation.max_tokens}")
    console.print(f"  Top P: {cfg.generation.top_p}")
    console.print(f"  N: {cfg.generation.n}")
    console.print(f"  Stop: {cfg.generation.stop!r}")
    console.print(f"  Stream: {cfg.generation.stream}")
    console.print()

    console.print("[bold]Fixtures[/bold]")
    console.print(f"  Root: {cfg.fixtures.root}")
    console.print(f"  Encoding: {cfg.fixtures.encoding}")
    console.print(f"  Recursive: {cfg.fixtures.recursive}")
    console.print()

    console.print("[bold]Logging[/bold]")
    console.print(f"  Level: {cfg.logging.level.value}")
    console.print(f"  File: {cfg.logging.file or '-'}")
    console.print()

    console.print(f"[bold]Model[/bold]: {cfg.model}")


if __name__ == "__main__":
    main()
