"""Typer based command line entry point for csvpost."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from csvpost import __version__
from csvpost.core.errors import ConfigError
from csvpost.core.logger import configure_logger, log_file_path
from csvpost.core.pipeline import EXIT_FAILURE, ImportPipeline
from csvpost.core.reporter import ConsoleReporter
from csvpost.core.settings import RunOptions, load_settings

app = typer.Typer(
    name="csvpost",
    help="Read a pharmacy shipment CSV file and POST it to the pharmacy POS API.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"csvpost {__version__}")
        raise typer.Exit()


@app.command()
def post(
    csv: Path = typer.Option(..., "--csv", help="CSV file path (date,code,quantity,price)."),
    api: str = typer.Option(..., "--api", help="API endpoint URL, must start with http."),
    supplier: Optional[str] = typer.Option(None, "--supplier", help="Default supplier id."),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug output."),
    config: Optional[Path] = typer.Option(None, "--config", help="Optional YAML settings file."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Validate a shipment CSV file and upload it."""

    try:
        settings = load_settings(config)
    except ConfigError as exc:
        typer.secho(f"ERROR: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=EXIT_FAILURE) from exc

    logger = configure_logger(settings.log_dir, verbose=verbose)
    reporter = ConsoleReporter(verbose=verbose, logger=logger)
    if log_file_path(logger) is None:
        reporter.warn(f"Cannot write logs to {settings.log_dir}, continuing without a log file")

    options = RunOptions(
        csv_path=csv,
        api_url=api,
        supplier_id=supplier if supplier is not None else settings.default_supplier_id,
        verbose=verbose,
        settings=settings,
    )
    code = ImportPipeline(options, reporter, logger=logger).run()
    if code:
        raise typer.Exit(code=code)


def main() -> None:
    app(prog_name="csvpost")


if __name__ == "__main__":
    main()
