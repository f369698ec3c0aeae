from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
import requests

from csvpost.core.errors import ConfigError, TransportError, UploadError
from csvpost.core.settings import Settings
from csvpost.services.pos_api.client import PosApiClient


@dataclass
class MockResponse:
    status_code: int = 200
    json_data: Any = None
    text_data: str | None = None

    def json(self) -> Any:
        if self.json_data is None:
            raise ValueError("JSON body not set")
        return self.json_data

    @property
    def text(self) -> str:
        if self.text_data is not None:
            return self.text_data
        if self.json_data is not None:
            return json.dumps(self.json_data)
        return ""


class FakeSession:
    def __init__(self, responses: list[MockResponse | Exception]) -> None:
        self._responses = responses
        self.headers: dict[str, str] = {}
        self.verify = True
        self.trust_env = True
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.closed = False

    def post(self, url: str, **kwargs: Any) -> MockResponse:
        if not self._responses:
            raise AssertionError("No more responses queued")
        files = kwargs.get("files") or {}
        uploaded = {name: (part[0], part[1].read(), part[2]) for name, part in files.items()}
        self.calls.append((url, {**kwargs, "files": uploaded}))
        action = self._responses.pop(0)
        if isinstance(action, Exception):
            raise action
        return action

    def close(self) -> None:
        self.closed = True


SUCCESS_BODY = {
    "success": True,
    "msg": "imported",
    "shippingOrder": {
        "soid": "SO-1",
        "supplier": "ACME",
        "itemCount": 2,
        "totalAmount": 31.5,
        "createdAt": "2024-01-05T10:00:00Z",
    },
    "summary": {"totalItems": 2, "successCount": 2, "failCount": 0},
}


@pytest.fixture
def shipment_file(write_csv) -> Path:
    return write_csv(["2024-01-01,A001,10,5.5"])


def _client(responses: list[MockResponse | Exception], **settings: Any) -> tuple[PosApiClient, FakeSession]:
    session = FakeSession(responses)
    client = PosApiClient(Settings(**settings), session=session)  # type: ignore[arg-type]
    return client, session


def test_upload_success_without_supplier(shipment_file: Path) -> None:
    client, session = _client([MockResponse(json_data=SUCCESS_BODY)])
    outcome = client.upload("http://pos.local/api/import", shipment_file, None)

    assert outcome.success is True
    assert outcome.shipping_order is not None
    assert outcome.shipping_order.soid == "SO-1"
    assert outcome.shipping_order.item_count == 2
    assert outcome.summary is not None and outcome.summary.success_count == 2
    assert outcome.status_code == 200

    url, kwargs = session.calls[0]
    assert url == "http://pos.local/api/import"
    assert kwargs["data"] == {}
    name, content, content_type = kwargs["files"]["file"]
    assert name == "shipment.csv"
    assert content == shipment_file.read_bytes()
    assert content_type == "text/csv"


def test_upload_attaches_supplier_once(shipment_file: Path) -> None:
    client, session = _client([MockResponse(json_data=SUCCESS_BODY)])
    client.upload("https://pos.local/api/import", shipment_file, "SUP-9")
    data = session.calls[0][1]["data"]
    assert data == {"defaultSupplierId": "SUP-9"}
    assert list(data).count("defaultSupplierId") == 1


def test_session_configured_from_settings(shipment_file: Path) -> None:
    client, session = _client([], verify_tls=False, trust_env=False, timeout_sec=5.0)
    assert session.verify is False
    assert session.trust_env is False
    assert session.headers["User-Agent"].startswith("csvpost/")
    client.close()
    assert session.closed is True


def test_timeout_forwarded(shipment_file: Path) -> None:
    client, session = _client([MockResponse(json_data=SUCCESS_BODY)], timeout_sec=2.5)
    client.upload("http://pos.local", shipment_file)
    assert session.calls[0][1]["timeout"] == 2.5


def test_server_error_payload_is_returned(shipment_file: Path) -> None:
    body = {"success": False, "msg": "bad file", "error": "missing header", "errors": ["row 1", "row 2"]}
    client, _ = _client([MockResponse(status_code=400, json_data=body)])
    outcome = client.upload("http://pos.local", shipment_file)
    assert outcome.success is False
    assert outcome.msg == "bad file"
    assert outcome.error == "missing header"
    assert outcome.errors == ["row 1", "row 2"]
    assert outcome.status_code == 400


def test_non_json_response_becomes_failed_outcome(shipment_file: Path) -> None:
    client, _ = _client([MockResponse(status_code=502, text_data="<html>" + "x" * 500)])
    outcome = client.upload("http://pos.local", shipment_file)
    assert outcome.success is False
    assert "502" in (outcome.msg or "")
    assert outcome.error.endswith("...")
    assert len(outcome.error) == 203


def test_connection_error_raises_transport_error(shipment_file: Path) -> None:
    client, _ = _client([requests.exceptions.ConnectionError("refused")])
    with pytest.raises(TransportError):
        client.upload("http://pos.local", shipment_file)


def test_timeout_raises_transport_error(shipment_file: Path) -> None:
    client, _ = _client([requests.exceptions.ReadTimeout("slow")])
    with pytest.raises(TransportError):
        client.upload("http://pos.local", shipment_file)


def test_request_setup_error_propagates(shipment_file: Path) -> None:
    client, _ = _client([requests.exceptions.InvalidURL("bad url")])
    with pytest.raises(requests.exceptions.InvalidURL):
        client.upload("http://", shipment_file)


def test_missing_file_raises_upload_error(tmp_path: Path) -> None:
    client, session = _client([])
    with pytest.raises(UploadError):
        client.upload("http://pos.local", tmp_path / "gone.csv")
    assert session.calls == []


def test_invalid_address_rejected(shipment_file: Path) -> None:
    client, session = _client([])
    with pytest.raises(ConfigError):
        client.upload("ftp://pos.local", shipment_file)
    assert session.calls == []


def test_non_integer_counters_keep_success(shipment_file: Path) -> None:
    body = {"success": True, "msg": "ok", "shippingOrder": {"soid": "S1", "itemCount": 2.5}}
    client, _ = _client([MockResponse(json_data=body)])
    outcome = client.upload("http://pos.local", shipment_file)
    assert outcome.success is True
    assert outcome.msg == "ok"
    assert outcome.shipping_order is not None
    assert outcome.shipping_order.item_count == 2.5


def test_malformed_details_keep_success_flag(shipment_file: Path) -> None:
    body = {"success": True, "msg": "ok", "shippingOrder": "SO-1", "summary": {"errors": "none"}}
    client, _ = _client([MockResponse(json_data=body)])
    outcome = client.upload("http://pos.local", shipment_file)
    assert outcome.success is True
    assert outcome.msg == "ok"
    assert outcome.shipping_order is None
    assert outcome.error is None
    assert outcome.status_code == 200


def test_malformed_failure_reply_stays_failed(shipment_file: Path) -> None:
    body = {"success": "perhaps", "shippingOrder": "SO-1"}
    client, _ = _client([MockResponse(status_code=500, json_data=body)])
    outcome = client.upload("http://pos.local", shipment_file)
    assert outcome.success is False
    assert "unrecognised response from API (HTTP 500)" == outcome.msg
    assert "SO-1" in outcome.error
