"""Command line entry point: validate the local document store or serve the API."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from app.config import get_settings
from app.log_config import configure_logging
from app.services.local_db import LocalDbClient, collection_fetchers
from app.services.validation_report import DatabaseValidationReport, build_database_report, write_report
from app.validators import RECOGNIZED_COLLECTIONS, CollectionValidator, DocumentStatus, schema_registry

app = typer.Typer(no_args_is_help=True, help="Schema-conformance checks for stored collections.")

_console = Console()


async def _validate(collections: list[str], db_dir: Path, verbose: bool):
    validator = CollectionValidator(collection_fetchers(LocalDbClient(db_dir)))
    return await validator.validate_multiple_collections(collections, verbose)


def _print_report(report: DatabaseValidationReport) -> None:
    table = Table(title="Database Schema Validation")
    table.add_column("Collection", style="bright_green", no_wrap=True)
    table.add_column("Total", justify="right")
    table.add_column("Valid", justify="right")
    table.add_column("Invalid", justify="right", style="yellow")
    table.add_column("Errors", justify="right", style="red")
    table.add_column("Valid %", justify="right")

    for name, collection in report.collections.items():
        summary = collection.summary
        table.add_row(
            name,
            str(summary.total_documents),
            str(summary.valid_documents),
            str(summary.invalid_documents),
            str(summary.error_documents),
            f"{collection.valid_percentage}%",
        )

    _console.print(table)

    for name, collection in report.collections.items():
        for result in collection.results:
            if result.status == DocumentStatus.ERROR:
                _console.print(f"[red]✗ {name}:[/red] {escape(result.fetch_error or '')}")
            elif result.status == DocumentStatus.INVALID:
                _console.print(f"\n[yellow]⚠ {name}/{result.id}[/yellow]")
                for error in result.errors or []:
                    _console.print(f"  - Field '{error.field}': {escape(error.message)}")
                    _console.print(f"    Received: {escape(repr(error.received))}", style="dim")


@app.command()
def validate(
    collection: Optional[list[str]] = typer.Option(
        None, "--collection", "-c", help="Collection to validate (repeatable). Defaults to all."
    ),
    db_dir: Optional[Path] = typer.Option(None, "--db-dir", help="Local document store directory."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Where to write the JSON report."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every valid document too."),
    log_level: str = typer.Option("warning", "--log-level", help="Minimum log level."),
) -> None:
    """Validate collections, print a summary and write the JSON report."""
    settings = get_settings()
    verbose = verbose or settings.VALIDATION_VERBOSE
    configure_logging(debug=True, level="info" if verbose else log_level)

    collections = collection or list(RECOGNIZED_COLLECTIONS)
    unknown = [name for name in collections if name not in schema_registry]
    if unknown:
        raise typer.BadParameter(
            f"no schema registered for: {', '.join(unknown)}", param_hint="'--collection'"
        )

    results = asyncio.run(_validate(collections, db_dir or Path(settings.LOCAL_DB_PATH), verbose))
    report = build_database_report(results)

    _print_report(report)

    path = write_report(report, output or Path(settings.VALIDATION_REPORT_PATH))
    _console.print(f"\nDetailed report saved to [bold]{path}[/bold]")

    if report.all_valid:
        _console.print("\n[green]✓ All documents follow the schema definitions[/green]")
        return

    _console.print("\n[bold]Recommendations:[/bold]")
    for i, recommendation in enumerate(report.recommendations, start=1):
        _console.print(f"{i}. {recommendation}")
    raise typer.Exit(code=1)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host"),
    port: Optional[int] = typer.Option(None, "--port"),
) -> None:
    """Run the validation API."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=host or settings.HOST,
        port=port or settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    app()
