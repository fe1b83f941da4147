"""Command line interface for db-planter."""

import logging
import sys
from pathlib import Path
from sys import stdout
from typing import Annotated

from cyclopts import App, Parameter
from diagram import PlanterError, tables_to_plantuml
from rasterize import KROKI_URL, plantuml_to_image
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn
from schema import load_tables
from schema.main import Driver
from sqlalchemy.exc import SQLAlchemyError

app = App(help="Generate PlantUML entity diagrams from database schemas")

err_console = Console(stderr=True)


def print_error(message: str) -> None:
    """Print error message to stderr."""
    err_console.print(f"[bold red]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print success message to stderr."""
    err_console.print(f"[bold green]✓[/] {message}")


def print_info(message: str) -> None:
    """Print info message to stderr."""
    err_console.print(f"[bold blue]i[/] {message}")


def configure_logging(*, verbose: bool) -> None:
    """Send library logs to the stderr console when running verbosely."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def validate_output_path(output: Path) -> None:
    """Validate output path is writable."""
    output_dir = output.parent
    if not output_dir.exists():
        print_error(f"Output directory does not exist: {output_dir}")
        sys.exit(1)
    if not output_dir.is_dir():
        print_error(f"Output path parent is not a directory: {output_dir}")
        sys.exit(1)


@app.default
def generate(  # noqa: PLR0913
    conn: str,
    *,
    driver: Annotated[Driver, Parameter(name=["--driver", "-d"])] = "mysql",
    schema: Annotated[str | None, Parameter(name=["--schema", "-s"])] = None,
    output: Annotated[Path | None, Parameter(name=["--output", "-o"])] = None,
    table: Annotated[list[str] | None, Parameter(name=["--table", "-t"])] = None,
    exclude: Annotated[list[str] | None, Parameter(name=["--exclude", "-x"])] = None,
    title: Annotated[str, Parameter(name=["--title", "-T"])] = "",
    svg: bool = False,
    png: bool = False,
    infer: bool = True,
    server: str = KROKI_URL,
    verbose: bool = False,
) -> None:
    """Render the schema of a MySQL, PostgreSQL or SQLite database as PlantUML.

    CONN is a SQLAlchemy style connection URL, or a file path for SQLite.
    """
    configure_logging(verbose=verbose)

    if svg and png:
        print_error("Choose either --svg or --png, not both")
        sys.exit(1)
    if output:
        validate_output_path(output)

    print_info(f"Driver: {driver}")

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=err_console,
        ) as progress:
            task = progress.add_task("Loading schema...", total=None)
            tables = load_tables(driver, conn, schema)

            progress.update(task, description="Generating diagram...")
            source = tables_to_plantuml(
                tables,
                include=table or (),
                exclude=exclude or (),
                title=title,
                infer=infer,
            )

            if svg or png:
                progress.update(task, description="Rendering image...")
                source = plantuml_to_image(
                    source.decode(),
                    "svg" if svg else "png",
                    server=server,
                )
    except (PlanterError, SQLAlchemyError, ValueError) as e:
        print_error(str(e))
        sys.exit(1)

    if output:
        try:
            output.write_bytes(source)
        except OSError as e:
            print_error(f"Failed to write output file: {e}")
            sys.exit(1)
        print_success(f"Diagram written to {output}")
    else:
        stdout.buffer.write(source)
        print_success("Diagram written to stdout")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
