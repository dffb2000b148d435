"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class DatapointOut(BaseModel):
    """One hourly temperature observation."""

    timestamp: datetime
    value: float


class SeriesSummaryOut(BaseModel):
    """Aggregate metrics computed for a returned series."""

    count: int = Field(..., ge=0)
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    mean_value: Optional[float] = None
    first_timestamp: Optional[datetime] = None
    last_timestamp: Optional[datetime] = None


class TemperatureSeries(BaseModel):
    """Full temperature series for a place and window."""

    place: str
    starttime: datetime
    endtime: datetime
    points: List[DatapointOut] = Field(default_factory=list)
    summary: SeriesSummaryOut
