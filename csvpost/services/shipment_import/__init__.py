"""Shipment CSV reading and validation."""

from .models import EmptyDataset, ImportOk, ImportOutcome, ImportResult, LineItem, ReadFault, RowError
from .reader import read_shipment_file
from .validate import collect_line_items, validate_row

__all__ = [
    "EmptyDataset",
    "ImportOk",
    "ImportOutcome",
    "ImportResult",
    "LineItem",
    "ReadFault",
    "RowError",
    "collect_line_items",
    "read_shipment_file",
    "validate_row",
]
