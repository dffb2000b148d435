"""Fetch-then-extract pipeline for one place and time window."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from models.records import Datapoint
from services.extractor import TemperatureExtractor
from services.wfs_client import WfsClient
from settings import get_settings
from storage.diagnostics import ResponseDump

logger = logging.getLogger(__name__)


def format_rfc3339(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat()


class TemperatureService:
    """Retrieves the hourly air-temperature series of a place from the FMI WFS."""

    def __init__(
        self,
        client: WfsClient,
        extractor: TemperatureExtractor,
        stored_query: str,
        dump: Optional[ResponseDump] = None,
    ) -> None:
        self.client = client
        self.extractor = extractor
        self.stored_query = stored_query
        self.dump = dump or ResponseDump(None)

    def fetch(self, place: str, start_time: datetime, end_time: datetime) -> List[Datapoint]:
        parameters = [
            ("starttime", format_rfc3339(start_time)),
            ("endtime", format_rfc3339(end_time)),
            ("place", place),
        ]
        logger.info(
            "Fetching temperature observations",
            extra={"place": place, "stored_query": self.stored_query},
        )
        xml = self.client.get_feature(self.stored_query, parameters)
        self.dump.write(xml)

        datapoints = self.extractor.extract(xml)
        logger.info(
            "Fetched temperature observations",
            extra={"place": place, "datapoint_count": len(datapoints)},
        )
        return datapoints

    def close(self) -> None:
        self.client.close()


def build_default_service(base_url: Optional[str] = None) -> TemperatureService:
    """Factory that wires the service from environment settings."""
    settings = get_settings()
    client = WfsClient(base_url or settings.wfs_url, timeout=settings.request_timeout)
    dump_path = Path(settings.response_dump_path) if settings.response_dump_path else None
    return TemperatureService(
        client=client,
        extractor=TemperatureExtractor(hints=settings.temperature_hints),
        stored_query=settings.stored_query,
        dump=ResponseDump(dump_path),
    )
