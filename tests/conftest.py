from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from csvpost.core.logger import LOGGER_NAME

CSVPOST_ENV_VARS = (
    "CSVPOST_TIMEOUT_SEC",
    "CSVPOST_VERIFY_TLS",
    "CSVPOST_TRUST_ENV",
    "CSVPOST_ENCODING",
    "CSVPOST_LOG_DIR",
    "CSVPOST_SUPPLIER_ID",
)

HEADER = "date,code,quantity,price"


@pytest.fixture(autouse=True)
def _isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep settings and log files of each test inside its tmp_path."""

    for key in CSVPOST_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("CSVPOST_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.chdir(tmp_path)
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[..., Path]:
    """Write data lines below the standard header and return the file path."""

    def _write(lines: list[str], *, name: str = "shipment.csv", header: str | None = HEADER) -> Path:
        path = tmp_path / name
        content = list(lines) if header is None else [header, *lines]
        path.write_text("\n".join(content) + "\n", encoding="utf-8")
        return path

    return _write
