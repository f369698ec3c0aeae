"""Console summary of a finished CSV import."""

from __future__ import annotations

from csvpost.core.reporter import ConsoleReporter

from .models import ImportResult


def report_import(reporter: ConsoleReporter, result: ImportResult) -> None:
    """Print the item count and every rejected row."""

    reporter.success(f"CSV read complete, {len(result.items)} valid line items")
    reporter.debug("CSV summary:")
    reporter.debug(f"- total rows: {result.total_rows}")
    reporter.debug(f"- valid items: {len(result.items)}")
    reporter.debug(f"- invalid rows: {len(result.errors)}")

    if result.errors:
        reporter.warn("CSV file contains invalid rows:")
        for error in result.errors:
            reporter.warn(f"  {error}")
