from __future__ import annotations

import logging
import traceback

from csvpost.services.pos_api.client import PosApiClient, check_api_address
from csvpost.services.pos_api.report import report_upload
from csvpost.services.shipment_import.models import EmptyDataset, ReadFault
from csvpost.services.shipment_import.reader import read_shipment_file
from csvpost.services.shipment_import.report import report_import

from .errors import ConfigError
from .logger import get_logger
from .reporter import ConsoleReporter
from .settings import RunOptions

EXIT_OK = 0
EXIT_FAILURE = 1

NO_VALID_ITEMS = "no valid line items in file"


class ImportPipeline:
    """Coordinates Check -> Read & Validate -> Upload -> Report steps."""

    def __init__(
        self,
        options: RunOptions,
        reporter: ConsoleReporter,
        *,
        client: PosApiClient | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.options = options
        self.reporter = reporter
        self.logger = logger or get_logger("pipeline")
        self._client = client
        self._owns_client = client is None

    def run(self) -> int:
        """Execute one import and return the process exit code."""

        try:
            return self._run()
        except ConfigError as exc:
            self.reporter.error(str(exc))
            return EXIT_FAILURE
        except Exception as exc:  # noqa: BLE001 - outermost boundary
            self.reporter.error(f"Error during run: {exc}")
            if self.options.verbose:
                self.reporter.debug(f"Traceback:\n{traceback.format_exc()}")
            return EXIT_FAILURE
        finally:
            if self._owns_client and self._client is not None:
                self._client.close()

    def _run(self) -> int:
        options = self.options
        self.reporter.info("csvpost started")
        self.reporter.debug(
            f"options: csv={options.csv_path} api={options.api_url} "
            f"supplier={options.supplier_id} verbose={options.verbose}"
        )

        # 1. Check inputs
        csv_path = options.csv_path.expanduser().resolve()
        if not csv_path.is_file():
            raise ConfigError(f"CSV file not found: {csv_path}")
        self.reporter.info(f"Using CSV file: {csv_path}")
        check_api_address(options.api_url)
        self.reporter.info(f"Using API address: {options.api_url}")

        # 2. Read & validate
        self.reporter.info("Reading CSV file...")
        outcome = read_shipment_file(
            csv_path,
            encoding=options.settings.encoding,
            logger=self.logger,
        )
        if isinstance(outcome, ReadFault):
            self.reporter.error(f"Failed to read CSV file {outcome.path}: {outcome.message}")
            return EXIT_FAILURE
        if isinstance(outcome, EmptyDataset):
            self.reporter.error(f"CSV read failed: {NO_VALID_ITEMS}")
            self.reporter.debug(f"- total rows: {outcome.total_rows}")
            for error in outcome.errors:
                self.reporter.debug(f"  {error}")
            return EXIT_FAILURE
        report_import(self.reporter, outcome.result)

        # 3. Upload
        self.reporter.info("Sending CSV file to API...")
        response = self._get_client().upload(options.api_url, csv_path, options.supplier_id)

        # 4. Report
        if not report_upload(self.reporter, response):
            return EXIT_FAILURE
        self.reporter.success("Done")
        return EXIT_OK

    def _get_client(self) -> PosApiClient:
        if self._client is None:
            self._client = PosApiClient(self.options.settings, logger=get_logger("pos_api"))
        return self._client


__all__ = ["EXIT_FAILURE", "EXIT_OK", "ImportPipeline", "NO_VALID_ITEMS"]
