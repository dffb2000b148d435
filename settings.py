from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple


DEFAULT_WFS_URL = "https://opendata.fmi.fi/wfs"
DEFAULT_STORED_QUERY = "fmi::observations::weather::hourly::timevaluepair"
DEFAULT_TEMPERATURE_HINTS: Tuple[str, ...] = (
    "-t2m",
    "-temperature",
    "TA_PT1H_AVG",
    "AirTemperature",
)
DEFAULT_DUMP_PATH = "fmi_initial_response.xml"

_WFS_URL_ENV = "FMI_WFS_URL"
_STORED_QUERY_ENV = "FMI_STORED_QUERY"
_HINTS_ENV = "FMI_TEMPERATURE_HINTS"
_DUMP_PATH_ENV = "FMI_RESPONSE_DUMP_PATH"
_TIMEOUT_ENV = "FMI_REQUEST_TIMEOUT"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    wfs_url: str
    stored_query: str
    temperature_hints: Tuple[str, ...]
    response_dump_path: Optional[str]
    request_timeout: Optional[float]
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_hints(default: Tuple[str, ...]) -> Tuple[str, ...]:
    value = os.getenv(_HINTS_ENV)
    if value is None:
        return default
    hints = tuple(part.strip() for part in value.split(",") if part.strip())
    return hints or default


def _read_timeout(default: Optional[float]) -> Optional[float]:
    value = os.getenv(_TIMEOUT_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        wfs_url=_read_str_env(_WFS_URL_ENV, DEFAULT_WFS_URL),
        stored_query=_read_str_env(_STORED_QUERY_ENV, DEFAULT_STORED_QUERY),
        temperature_hints=_read_hints(DEFAULT_TEMPERATURE_HINTS),
        response_dump_path=_read_optional_env(_DUMP_PATH_ENV, DEFAULT_DUMP_PATH),
        request_timeout=_read_timeout(None),
        log_level=_read_log_level("INFO"),
    )
