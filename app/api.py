"""HTTP route definitions for the service."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterator

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.schemas import DatapointOut, SeriesSummaryOut, TemperatureSeries
from services.aggregator import SeriesAggregator
from services.errors import ExtractionError, FetchError
from services.temperatures import TemperatureService, build_default_service

router = APIRouter()


def get_service() -> Iterator[TemperatureService]:
    service = build_default_service()
    try:
        yield service
    finally:
        service.close()


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


@router.get(
    "/temperatures",
    response_model=TemperatureSeries,
    summary="Fetch the hourly air-temperature series of a place.",
)
def get_temperatures(
    place: str = Query(..., min_length=1, description="Place name understood by the FMI WFS."),
    starttime: datetime = Query(..., description="Start of the window (ISO 8601)."),
    endtime: datetime = Query(..., description="End of the window (ISO 8601)."),
    service: TemperatureService = Depends(get_service),
) -> TemperatureSeries:
    start_time = _as_utc(starttime)
    end_time = _as_utc(endtime)
    if end_time <= start_time:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="endtime must be later than starttime.",
        )

    try:
        datapoints = service.fetch(place, start_time, end_time)
    except (FetchError, ExtractionError) as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(exc),
        ) from exc

    summary = SeriesAggregator().aggregate(datapoints)
    return TemperatureSeries(
        place=place,
        starttime=start_time,
        endtime=end_time,
        points=[DatapointOut(timestamp=point.timestamp, value=point.value) for point in datapoints],
        summary=SeriesSummaryOut(
            count=summary.count,
            min_value=summary.min_value,
            max_value=summary.max_value,
            mean_value=summary.mean_value,
            first_timestamp=summary.first_timestamp,
            last_timestamp=summary.last_timestamp,
        ),
    )


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}
