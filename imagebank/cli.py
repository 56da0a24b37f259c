"""
Console entry point for imagebank.

The command takes no options; runs are configured through
``IMAGEBANK_*`` environment variables.
"""

import logging
import os
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from imagebank import __version__
from imagebank.config import PipelineConfig
from imagebank.exceptions import ImageBankError
from imagebank.pipeline import run_pipeline

console = Console()


def _configure_logging() -> None:
    logger = logging.getLogger("imagebank")
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(RichHandler(console=console, show_path=False))
    level = os.environ.get("IMAGEBANK_LOG_LEVEL", "INFO").upper()
    logger.setLevel(getattr(logging, level, logging.INFO))
    logger.propagate = False


@click.command()
@click.version_option(version=__version__)
def cli():
    """
    Assemble a folder of images into one captioned PDF.
    """
    _configure_logging()
    try:
        config = PipelineConfig.from_env()
        console.print(f"\n[bold cyan]Processing {escape(str(config.source_dir))}...[/bold cyan]")
        result = run_pipeline(config)
    except ImageBankError as exc:
        console.print(f"[bold red]✗ Error:[/bold red] {escape(str(exc))}")
        sys.exit(1)

    table = Table(title="Image Bank", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Output", str(result.final.path))
    table.add_row("Pages", str(result.final.page_count))
    table.add_row("Images", f"{result.normalized_count} of {result.source_count}")
    table.add_row("Documents merged", str(result.chunk_count))
    console.print(table)

    if result.skipped:
        console.print("\n[bold yellow]Skipped images:[/bold yellow]")
        for path in result.skipped:
            console.print(f"  • {escape(path.name)}")

    console.print("\n[bold green]✓ Done[/bold green]\n")


if __name__ == "__main__":
    cli()
