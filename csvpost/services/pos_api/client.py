"""HTTP client for the pharmacy POS shipment import endpoint."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

import requests
from pydantic import ValidationError
from requests import Response
from requests.exceptions import ChunkedEncodingError, ConnectionError, Timeout

from csvpost.core.errors import ConfigError, TransportError, UploadError
from csvpost.core.logger import get_logger
from csvpost.core.settings import Settings

from .models import UploadOutcome

LOGGER = get_logger("pos_api")

FILE_FIELD = "file"
SUPPLIER_FIELD = "defaultSupplierId"
CSV_CONTENT_TYPE = "text/csv"
BODY_EXCERPT_LIMIT = 200


def check_api_address(server_address: str) -> str:
    """Return ``server_address`` if it looks like an HTTP(S) URL."""

    if not isinstance(server_address, str) or not server_address.startswith("http"):
        raise ConfigError(f"Invalid API address: {server_address}")
    return server_address


class PosApiClient:
    """Uploads shipment CSV files as ``multipart/form-data``."""

    def __init__(
        self,
        settings: Settings,
        *,
        session: requests.Session | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._settings = settings
        self._session = session or requests.Session()
        self._session.verify = settings.verify_tls
        self._session.trust_env = settings.trust_env
        self._session.headers["User-Agent"] = settings.user_agent
        self._logger = logger or LOGGER

    def upload(
        self,
        server_address: str,
        file_path: str | Path,
        default_supplier_id: str | None = None,
    ) -> UploadOutcome:
        """POST ``file_path`` to ``server_address`` and decode the reply.

        Error replies from the server are returned as an unsuccessful
        :class:`UploadOutcome`.

        Raises:
            ConfigError: If ``server_address`` is not an HTTP(S) URL.
            UploadError: If the file does not exist.
            TransportError: If the request was sent but no response arrived.
            requests.RequestException: If the request could not be built or sent.
        """

        check_api_address(server_address)
        path = Path(file_path)
        if not path.is_file():
            raise UploadError(f"CSV file not found: {path}")

        self._logger.debug("preparing upload of %s to %s", path, server_address)
        data: Dict[str, str] = {}
        if default_supplier_id is not None:
            data[SUPPLIER_FIELD] = default_supplier_id
            self._logger.debug("using default supplier id %s", default_supplier_id)

        with path.open("rb") as handle:
            files = {FILE_FIELD: (path.name, handle, CSV_CONTENT_TYPE)}
            self._logger.debug("sending POST request")
            try:
                response = self._session.post(
                    server_address,
                    files=files,
                    data=data,
                    timeout=self._settings.timeout_sec,
                )
            except (ConnectionError, Timeout, ChunkedEncodingError) as exc:
                self._logger.error("no response from API %s: %s", server_address, exc)
                raise TransportError(f"No response from API: {exc}") from exc
            except requests.RequestException as exc:
                self._logger.error("request setup failed for %s: %s", server_address, exc)
                raise

        self._logger.debug("received response, status %s", response.status_code)
        return self._decode(response)

    def close(self) -> None:
        self._session.close()

    # Internal helpers -------------------------------------------------

    def _decode(self, response: Response) -> UploadOutcome:
        status = response.status_code
        payload = self._safe_json(response)
        if payload is None:
            excerpt = self._excerpt(response)
            self._logger.error("non-JSON API response (%s): %s", status, excerpt)
            return UploadOutcome(
                success=False,
                msg=f"unexpected response from API (HTTP {status})",
                error=excerpt,
                status_code=status,
            )
        if status >= 400:
            self._logger.error("API error response (%s): %s", status, payload)

        try:
            outcome = UploadOutcome.model_validate(payload)
        except ValidationError as exc:
            self._logger.warning("cannot decode API response details: %s", exc)
            return self._fallback_outcome(payload, status)
        return outcome.model_copy(update={"status_code": status})

    def _fallback_outcome(self, payload: Dict[str, Any], status: int) -> UploadOutcome:
        """Keep the success flag and message of a reply whose details do not parse."""

        success = payload.get("success") is True
        msg = payload.get("msg")
        if msg is None and not success:
            msg = f"unrecognised response from API (HTTP {status})"
        return UploadOutcome(
            success=success,
            msg=None if msg is None else str(msg),
            error=None if success else str(payload)[:BODY_EXCERPT_LIMIT],
            status_code=status,
        )

    def _safe_json(self, response: Response) -> Dict[str, Any] | None:
        try:
            data = response.json()
        except ValueError:
            return None
        return data if isinstance(data, dict) else None

    def _excerpt(self, response: Response) -> str:
        text = response.text or ""
        if len(text) > BODY_EXCERPT_LIMIT:
            text = text[:BODY_EXCERPT_LIMIT] + "..."
        return text


__all__ = ["PosApiClient", "check_api_address"]
