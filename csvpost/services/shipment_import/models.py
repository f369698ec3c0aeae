"""Data models used by the shipment import service."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import NamedTuple, Union

EXPECTED_COLUMNS = ("date", "code", "quantity", "price")


class ShipmentColumns(NamedTuple):
    """The four leading cells of a data row, in file order."""

    raw_date: str
    nh_code: str
    quantity: str
    nh_price: str


@dataclass(frozen=True, slots=True)
class LineItem:
    """One validated pharmacy product entry."""

    raw_date: str
    nh_code: str
    quantity: int
    nh_price: Decimal


@dataclass(frozen=True, slots=True)
class RowError:
    """Diagnostic for a rejected row; ``row_number`` is 1-based, header excluded."""

    row_number: int
    reason: str

    def __str__(self) -> str:
        return f"row {self.row_number}: {self.reason}"


@dataclass(frozen=True, slots=True)
class ImportResult:
    """Validated line items and row errors of one file."""

    items: tuple[LineItem, ...]
    errors: tuple[RowError, ...]
    total_rows: int


@dataclass(frozen=True, slots=True)
class ImportOk:
    """At least one valid line item was read."""

    result: ImportResult


@dataclass(frozen=True, slots=True)
class EmptyDataset:
    """Every row was read but none produced a line item."""

    errors: tuple[RowError, ...]
    total_rows: int


@dataclass(frozen=True, slots=True)
class ReadFault:
    """The row source failed before the end of the file."""

    path: Path
    message: str
    rows_read: int = 0


ImportOutcome = Union[ImportOk, EmptyDataset, ReadFault]


__all__ = [
    "EXPECTED_COLUMNS",
    "EmptyDataset",
    "ImportOk",
    "ImportOutcome",
    "ImportResult",
    "LineItem",
    "ReadFault",
    "RowError",
    "ShipmentColumns",
]
