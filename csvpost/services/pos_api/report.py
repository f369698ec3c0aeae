"""Console summary of an upload response."""

from __future__ import annotations

from typing import Any

from csvpost.core.reporter import ConsoleReporter

from .models import UploadOutcome

NOT_PROVIDED = "not provided"


def _show(value: Any) -> Any:
    if value is None or value == "":
        return NOT_PROVIDED
    return value


def report_upload(reporter: ConsoleReporter, outcome: UploadOutcome) -> bool:
    """Print the server reply; return ``True`` when the upload succeeded."""

    if not outcome.success:
        reporter.error(f"CSV upload failed: {_show(outcome.msg)}")
        if outcome.error:
            reporter.error(f"Error detail: {outcome.error}")
        if outcome.errors:
            reporter.error("Error list:")
            for error in outcome.errors:
                reporter.error(f"  {error}")
        return False

    reporter.success("CSV upload succeeded")
    reporter.divider()
    reporter.info("API response summary:")
    reporter.info(f"- message: {_show(outcome.msg)}")
    order = outcome.shipping_order
    if order is None:
        reporter.info(f"- shipping order: {NOT_PROVIDED}")
    else:
        reporter.info(f"- order id: {_show(order.soid)}")
        reporter.info(f"- supplier: {_show(order.supplier)}")
        reporter.info(f"- item count: {_show(order.item_count)}")
        reporter.info(f"- total amount: {_show(order.total_amount)}")
        reporter.info(f"- created at: {_show(order.created_at)}")
    reporter.divider()

    summary = outcome.summary
    reporter.info("Import summary:")
    if summary is None:
        reporter.info(f"- {NOT_PROVIDED}")
        return True
    reporter.info(f"- total items: {_show(summary.total_items)}")
    reporter.info(f"- succeeded: {_show(summary.success_count)}")
    reporter.info(f"- failed: {_show(summary.fail_count)}")
    if summary.errors:
        reporter.warn("Errors reported during import:")
        for error in summary.errors:
            reporter.warn(f"  {error}")
    return True
