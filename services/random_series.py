from __future__ import annotations

import random
from datetime import datetime, timedelta
from typing import List, Optional

from models.records import Datapoint

MIN_TEMPERATURE = -25.0
MAX_TEMPERATURE = 35.0


def generate_random_datapoints(
    start: datetime,
    count: int,
    rng: Optional[random.Random] = None,
) -> List[Datapoint]:
    """Build ``count`` hourly synthetic readings beginning at ``start``."""
    if count < 0:
        raise ValueError("count must not be negative.")
    if count == 0:
        return []

    generator = rng or random.Random()
    return [
        Datapoint(
            timestamp=start + timedelta(hours=offset),
            value=generator.uniform(MIN_TEMPERATURE, MAX_TEMPERATURE),
        )
        for offset in range(count)
    ]
