"""Command line interface for Radcliffe."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from radcliffe.config import AppConfig
from radcliffe.decoding import load_document
from radcliffe.inference.pipeline import SchemaInferrer
from radcliffe.models import Metadata
from radcliffe.utils.files import output_path_for, validate_input_path, write_records
from radcliffe.web.app import create_app


console = Console()
app = typer.Typer(help="Radcliffe - infer a flat schema from JSON documents")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _render_table(records: List[Metadata]) -> Table:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Path")
    table.add_column("Type")
    table.add_column("Format")
    for record in sorted(records, key=lambda item: item.path):
        table.add_row(record.path, record.type.value, record.format.value if record.format else "")
    return table


@app.command()
def infer(
    file: Path = typer.Argument(..., help="JSON file to analyse.", resolve_path=True),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Where to write the inferred schema"
    ),
    workers: Optional[int] = typer.Option(
        None, min=1, help="Classification workers (defaults to the CPU count)"
    ),
    queue_size: int = typer.Option(AppConfig().queue_size, min=0, help="Pair queue capacity"),
    show: bool = typer.Option(False, "--show", help="Print the inferred schema as a table"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Infer the schema of a JSON file and write it next to the input."""
    _setup_logging(verbose)
    config = AppConfig(workers=workers, queue_size=queue_size)

    try:
        validate_input_path(file)
        document = load_document(file.read_bytes())
    except (ValueError, OSError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)

    records = SchemaInferrer.from_config(config).infer(document)

    destination = output if output is not None else output_path_for(file, config.output_suffix)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        write_records(destination, records)
    except OSError as exc:
        console.print(f"[red]Unable to write {destination}: {exc}[/red]")
        raise typer.Exit(code=1)

    if show:
        console.print(_render_table(records))
    console.print(f"finished writing file: {destination}")


@app.command()
def serve(
    host: str = typer.Option(AppConfig().host, help="Host interface"),
    port: int = typer.Option(AppConfig().port, help="Server port"),
    workers: Optional[int] = typer.Option(
        None, min=1, help="Classification workers per request"
    ),
    debug: bool = typer.Option(False, "--debug", help="Debug logging"),
) -> None:
    """Start the HTTP service."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    config = AppConfig(workers=workers, host=host, port=port, debug=debug)
    console.print(f"Starting radcliffe on http://{config.host}:{config.port}")
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        reload=False,
        log_level="debug" if config.debug else "info",
    )
