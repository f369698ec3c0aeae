"""CSV row source for shipment files."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterator, List

from csvpost.core.logger import get_logger
from csvpost.core.settings import DEFAULT_ENCODING

from .models import ImportOutcome, ReadFault
from .validate import collect_line_items

LOGGER = get_logger("shipment_import")


class RowSource:
    """Lazily yields data rows of a CSV file, header skipped.

    Blank lines are not rows. ``rows_read`` counts rows handed out so far.
    """

    def __init__(self, path: Path, *, encoding: str = DEFAULT_ENCODING) -> None:
        self.path = Path(path)
        self.encoding = encoding
        self.header: List[str] | None = None
        self.rows_read = 0

    def __iter__(self) -> Iterator[List[str]]:
        with open(self.path, "r", encoding=self.encoding, newline="") as handle:
            reader = csv.reader(handle)
            for row in reader:
                if not row:
                    continue
                if self.header is None:
                    self.header = row
                    continue
                self.rows_read += 1
                yield row


def read_shipment_file(
    path: Path,
    *,
    encoding: str = DEFAULT_ENCODING,
    logger: logging.Logger | None = None,
) -> ImportOutcome:
    """Read and validate a shipment CSV file.

    I/O and decoding failures are returned as :class:`ReadFault` rather than
    raised.
    """

    log = logger or LOGGER
    source = RowSource(path, encoding=encoding)
    try:
        outcome = collect_line_items(source)
    except (OSError, csv.Error, UnicodeDecodeError) as exc:
        log.error("failed reading %s after %d rows: %s", path, source.rows_read, exc)
        return ReadFault(path=Path(path), message=str(exc), rows_read=source.rows_read)

    log.debug("header columns: %s", source.header)
    log.debug("read %d data rows from %s", source.rows_read, path)
    return outcome


__all__ = ["RowSource", "read_shipment_file"]
