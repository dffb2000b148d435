"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Datapoint:
    """A single hourly observation extracted from the WFS response."""

    timestamp: datetime
    value: float
