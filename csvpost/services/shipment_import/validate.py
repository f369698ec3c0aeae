"""Row validation and aggregation for shipment CSV files."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Iterable, List, Sequence

from .models import (
    EXPECTED_COLUMNS,
    EmptyDataset,
    ImportOk,
    ImportResult,
    LineItem,
    RowError,
    ShipmentColumns,
)

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_DECIMAL_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

WRONG_COLUMN_COUNT = f'wrong column count, expected "{",".join(EXPECTED_COLUMNS)}"'
# int() refuses longer digit strings on current interpreters
MAX_QUANTITY_DIGITS = 4300


def parse_quantity(text: str) -> int:
    """Return the leading integer of ``text`` or 0 (``"12pcs"`` -> 12, ``"3.7"`` -> 3)."""

    match = _INT_PREFIX.match(text or "")
    if match is None:
        return 0
    digits = match.group(1)
    if len(digits.lstrip("+-")) > MAX_QUANTITY_DIGITS:
        return 0
    return int(digits)


def parse_price(text: str) -> Decimal:
    """Return the leading decimal literal of ``text`` or ``Decimal(0)``."""

    match = _DECIMAL_PREFIX.match(text or "")
    if match is None:
        return Decimal(0)
    try:
        return Decimal(match.group(1))
    except InvalidOperation:
        return Decimal(0)


def split_columns(row: Sequence[str]) -> ShipmentColumns | None:
    """Return the four leading cells, trimmed, or ``None`` for short rows."""

    if len(row) < len(EXPECTED_COLUMNS):
        return None
    return ShipmentColumns(*(str(cell).strip() for cell in row[: len(EXPECTED_COLUMNS)]))


def validate_row(row: Sequence[str], row_number: int) -> LineItem | RowError:
    """Turn one raw CSV row into a :class:`LineItem` or a :class:`RowError`."""

    columns = split_columns(row)
    if columns is None:
        return RowError(row_number=row_number, reason=WRONG_COLUMN_COUNT)

    quantity = parse_quantity(columns.quantity)
    nh_price = parse_price(columns.nh_price)

    if columns.nh_code and quantity > 0 and nh_price > 0:
        return LineItem(
            raw_date=columns.raw_date,
            nh_code=columns.nh_code,
            quantity=quantity,
            nh_price=nh_price,
        )
    return RowError(
        row_number=row_number,
        reason=(
            "incomplete or malformed data "
            f"(code: {columns.nh_code}, quantity: {quantity}, price: {nh_price})"
        ),
    )


def collect_line_items(rows: Iterable[Sequence[str]]) -> ImportOk | EmptyDataset:
    """Validate ``rows`` in order and split them into items and errors.

    Rows are numbered from 1 in the order they are read, whether accepted or
    not. A file without a single valid item yields :class:`EmptyDataset`.
    """

    items: List[LineItem] = []
    errors: List[RowError] = []
    total = 0

    for row_number, row in enumerate(rows, start=1):
        total = row_number
        outcome = validate_row(row, row_number)
        if isinstance(outcome, LineItem):
            items.append(outcome)
        else:
            errors.append(outcome)

    if not items:
        return EmptyDataset(errors=tuple(errors), total_rows=total)
    return ImportOk(result=ImportResult(items=tuple(items), errors=tuple(errors), total_rows=total))


__all__ = [
    "WRONG_COLUMN_COUNT",
    "collect_line_items",
    "parse_price",
    "parse_quantity",
    "split_columns",
    "validate_row",
]
