"""Summary statistics for an extracted temperature series."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from models.records import Datapoint


@dataclass
class SeriesSummary:
    """Computed statistics for a series of datapoints."""

    count: int = 0
    min_value: float | None = None
    max_value: float | None = None
    mean_value: float | None = None
    first_timestamp: datetime | None = None
    last_timestamp: datetime | None = None


class SeriesAggregator:
    """Pure aggregation component that can be unit tested in isolation."""

    def aggregate(self, datapoints: Iterable[Datapoint]) -> SeriesSummary:
        summary = SeriesSummary()
        total = 0.0

        for point in datapoints:
            summary.count += 1
            value = point.value
            total += value

            if summary.min_value is None or value < summary.min_value:
                summary.min_value = value
            if summary.max_value is None or value > summary.max_value:
                summary.max_value = value

            # Series keep document order, so the earliest timestamp is not always first.
            if summary.first_timestamp is None or point.timestamp < summary.first_timestamp:
                summary.first_timestamp = point.timestamp
            if summary.last_timestamp is None or point.timestamp > summary.last_timestamp:
                summary.last_timestamp = point.timestamp

        if summary.count:
            summary.mean_value = total / summary.count

        return summary
