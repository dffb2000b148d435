from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_BUCKET = "fmi"
DEFAULT_MEASUREMENT = "measurement"

_HOST_ENV = "INFLUXDB_HOST"
_ORG_ENV = "INFLUXDB_ORG"
_TOKEN_ENV = "INFLUXDB_TOKEN"
_BUCKET_ENV = "INFLUXDB_BUCKET"
_MEASUREMENT_ENV = "INFLUXDB_MEASUREMENT"


@dataclass(frozen=True)
class CLIConfig:
    influx_host: Optional[str] = None
    influx_org: Optional[str] = None
    influx_token: Optional[str] = None
    bucket: str = DEFAULT_BUCKET
    measurement: str = DEFAULT_MEASUREMENT


def _read_env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    candidate = value.strip()
    return candidate or None


def load_config(
    influx_host: Optional[str] = None,
    influx_org: Optional[str] = None,
    influx_token: Optional[str] = None,
    bucket: Optional[str] = None,
    measurement: Optional[str] = None,
) -> CLIConfig:
    return CLIConfig(
        influx_host=influx_host or _read_env(_HOST_ENV),
        influx_org=influx_org or _read_env(_ORG_ENV),
        influx_token=influx_token or _read_env(_TOKEN_ENV),
        bucket=bucket or _read_env(_BUCKET_ENV) or DEFAULT_BUCKET,
        measurement=measurement or _read_env(_MEASUREMENT_ENV) or DEFAULT_MEASUREMENT,
    )
