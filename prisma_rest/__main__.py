"""Entry point: python -m prisma_rest generate

Reads a Prisma schema and writes Next.js route handlers under app/api.
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .errors import GeneratorError
from .generator import run
from .models import DEFAULT_BASE_URL, DEFAULT_PRISMA_IMPORT, DEFAULT_SCHEMA_PATH, GeneratorConfig, RunReport

app = typer.Typer(
    name="prisma-rest",
    help="Generate REST API routes for Next.js from a Prisma schema",
)

console = Console()


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def _routes_table(report: RunReport) -> Table:
    table = Table(title="Routes")
    table.add_column("Method")
    table.add_column("Path")
    table.add_column("Handler")
    for route in report.routes:
        table.add_row(route.method, escape(route.path), route.handler)
    return table


def print_summary(report: RunReport, config: GeneratorConfig, verbose: bool = False) -> None:
    if report.routes and (verbose or config.dry_run):
        console.print(_routes_table(report))

    if config.dry_run:
        console.print(f"\n[blue]DRY RUN: Would generate {_plural(report.generated, 'route')}[/blue]")
    else:
        console.print(f"\n[green]Successfully generated {_plural(report.generated, 'route')}![/green]")

    if report.skipped:
        console.print(f"[yellow]Skipped {_plural(report.skipped, 'existing route')}[/yellow]")

    if report.directive_skipped:
        console.print(f"[yellow]Skipped by @rest-skip: {', '.join(report.directive_skipped)}[/yellow]")

    if report.conflicted:
        console.print(f"\n[red]Routes already exist for: {', '.join(report.conflicted)}[/red]")
        console.print("[yellow]   Use --force to overwrite or --skip-existing to skip them[/yellow]")

    if not config.dry_run and report.generated:
        console.print(
            f"\n[yellow]Make sure you have a Prisma client instance at {escape(config.prisma_import_path)}[/yellow]"
        )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"prisma-rest {__version__}")
        raise typer.Exit()


@app.callback()
def cli(
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit"
    ),
) -> None:
    """Generate REST API routes for Next.js from a Prisma schema."""


@app.command()
def generate(
    schema: Path = typer.Option(DEFAULT_SCHEMA_PATH, "--schema", "-s", help="Path to Prisma schema file"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output directory for generated routes"),
    base_url: str = typer.Option(DEFAULT_BASE_URL, "--base-url", "-b", help="Base URL for API routes"),
    api_prefix: Optional[str] = typer.Option(
        None, "--api-prefix", help='Additional path prefix for API routes (e.g. "rest" for /api/rest)'
    ),
    prisma_import: str = typer.Option(
        DEFAULT_PRISMA_IMPORT, "--prisma-import", "-p", help="Import path for Prisma client"
    ),
    include: Optional[List[str]] = typer.Option(None, "--include", help="Include only specific models"),
    exclude: Optional[List[str]] = typer.Option(None, "--exclude", help="Exclude specific models"),
    force: bool = typer.Option(False, "--force", help="Overwrite existing route files"),
    skip_existing: bool = typer.Option(False, "--skip-existing", help="Only generate routes for new models"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be generated without creating files"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
):
    """Generate REST API routes from a Prisma schema."""
    setup_logging(verbose)

    config = GeneratorConfig.from_options(
        schema=schema,
        output=output,
        base_url=base_url,
        api_prefix=api_prefix,
        prisma_import=prisma_import,
        include=include,
        exclude=exclude,
        force=force,
        skip_existing=skip_existing,
        dry_run=dry_run,
    )

    console.print("[blue]Generating REST API routes...[/blue]")
    try:
        report = run(config)
    except GeneratorError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        raise typer.Exit(1)
    except Exception as exc:
        logging.getLogger(__name__).exception("Route generation failed")
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        raise typer.Exit(1)

    print_summary(report, config, verbose)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
