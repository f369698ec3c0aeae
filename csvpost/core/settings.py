"""Runtime settings for csvpost.

Settings are resolved once per run from, in increasing precedence, built-in
defaults, an optional YAML file, environment variables (``.env`` is honoured)
and explicit command line flags. The resolved objects are immutable and handed
to each component explicitly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from csvpost import __version__

from .errors import ConfigError

DEFAULT_LOG_DIR = Path.home() / ".csvpost" / "logs"
DEFAULT_ENCODING = "utf-8-sig"
USER_AGENT = f"csvpost/{__version__}"

TIMEOUT_ENV = "CSVPOST_TIMEOUT_SEC"
VERIFY_TLS_ENV = "CSVPOST_VERIFY_TLS"
TRUST_ENV_ENV = "CSVPOST_TRUST_ENV"
ENCODING_ENV = "CSVPOST_ENCODING"
LOG_DIR_ENV = "CSVPOST_LOG_DIR"
SUPPLIER_ENV = "CSVPOST_SUPPLIER_ID"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class Settings(BaseModel):
    """Resolved configuration shared by the reader, uploader and logger."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    timeout_sec: float | None = None
    verify_tls: bool = True
    trust_env: bool = True
    user_agent: str = USER_AGENT
    encoding: str = DEFAULT_ENCODING
    log_dir: Path = Field(default_factory=lambda: DEFAULT_LOG_DIR)
    default_supplier_id: str | None = None


@dataclass(frozen=True)
class RunOptions:
    """Inputs of a single import run."""

    csv_path: Path
    api_url: str
    supplier_id: str | None
    verbose: bool
    settings: Settings


def load_settings(
    config_path: str | Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> Settings:
    """Build :class:`Settings` from a YAML file and the environment.

    Args:
        config_path: Optional YAML file with top-level setting keys.
        env: Environment mapping; defaults to ``os.environ`` after loading ``.env``.

    Raises:
        ConfigError: If the file cannot be parsed or a value is invalid.
    """

    if env is None:
        load_dotenv(override=False)
        env = os.environ

    data: Dict[str, Any] = {}
    if config_path is not None:
        data.update(_load_yaml(Path(config_path)))
    data.update(_env_overrides(env))

    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings: {exc}") from exc


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config file is not valid YAML: {path}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a mapping: {path}")
    return data


def _env_overrides(env: Mapping[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}

    timeout = _read(env, TIMEOUT_ENV)
    if timeout:
        try:
            overrides["timeout_sec"] = float(timeout)
        except ValueError as exc:
            raise ConfigError(f"Environment variable {TIMEOUT_ENV} must be a number") from exc

    for key, field_name in ((VERIFY_TLS_ENV, "verify_tls"), (TRUST_ENV_ENV, "trust_env")):
        value = _read(env, key)
        if value:
            overrides[field_name] = _parse_bool(key, value)

    encoding = _read(env, ENCODING_ENV)
    if encoding:
        overrides["encoding"] = encoding

    log_dir = _read(env, LOG_DIR_ENV)
    if log_dir:
        overrides["log_dir"] = Path(log_dir).expanduser()

    supplier = _read(env, SUPPLIER_ENV)
    if supplier:
        overrides["default_supplier_id"] = supplier

    return overrides


def _read(env: Mapping[str, str], key: str) -> str | None:
    value = env.get(key)
    if value is None:
        return None
    return value.strip()


def _parse_bool(key: str, value: str) -> bool:
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"Environment variable {key} must be a boolean, got {value!r}")


__all__ = ["RunOptions", "Settings", "load_settings"]
