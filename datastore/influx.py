from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from influxdb_client import InfluxDBClient, Point, WritePrecision
from influxdb_client.client.write_api import SYNCHRONOUS
from influxdb_client.rest import ApiException
from urllib3.exceptions import HTTPError

from models.records import Datapoint
from services.errors import WriteError

logger = logging.getLogger(__name__)

TEMPERATURE_FIELD = "temperature"


class InfluxWriter:
    """Persists temperature series as tagged points in an InfluxDB 2 bucket."""

    def __init__(
        self,
        client: InfluxDBClient,
        bucket: str,
        org: str,
        measurement: str,
    ) -> None:
        self.client = client
        self.bucket = bucket
        self.org = org
        self.measurement = measurement

    def to_points(self, datapoints: Iterable[Datapoint], place: str) -> List[Point]:
        return [
            Point(self.measurement)
            .tag("place", place)
            .field(TEMPERATURE_FIELD, point.value)
            .time(point.timestamp, WritePrecision.NS)
            for point in datapoints
        ]

    def write(self, datapoints: Iterable[Datapoint], place: str) -> int:
        points = self.to_points(datapoints, place)
        write_api = self.client.write_api(write_options=SYNCHRONOUS)
        try:
            write_api.write(bucket=self.bucket, org=self.org, record=points)
        except (ApiException, HTTPError, OSError) as exc:
            logger.error(
                "Failed to write datapoints to InfluxDB",
                extra={"bucket": self.bucket, "place": place, "reason": exc},
            )
            raise WriteError(f"failed to write to InfluxDB bucket {self.bucket!r}: {exc}") from exc

        logger.info(
            "Wrote datapoints to InfluxDB",
            extra={"bucket": self.bucket, "place": place, "datapoint_count": len(points)},
        )
        return len(points)

    def close(self) -> None:
        self.client.close()


def build_writer(
    host: Optional[str],
    org: Optional[str],
    token: Optional[str],
    bucket: str,
    measurement: str,
) -> InfluxWriter:
    missing = [
        name
        for name, value in (
            ("INFLUXDB_HOST", host),
            ("INFLUXDB_ORG", org),
            ("INFLUXDB_TOKEN", token),
        )
        if not value
    ]
    if missing:
        raise ValueError(f"InfluxDB settings missing: {', '.join(missing)}")

    client = InfluxDBClient(url=host, token=token, org=org)
    return InfluxWriter(client=client, bucket=bucket, org=org, measurement=measurement)
