from __future__ import annotations

import pytest

from settings import get_settings
from wfs_documents import TEMPERATURE_POINTS, WIND_POINTS, document, member, observed_property, series


@pytest.fixture()
def fmi_response() -> str:
    """Two-parameter response: temperature followed by wind speed."""
    return document(
        [
            member(
                observed_property("https://opendata.fmi.fi/meta?param=t2m"),
                series("obs-obs-1-1-t2m", TEMPERATURE_POINTS),
            ),
            member(
                observed_property("https://opendata.fmi.fi/meta?param=ws_10min"),
                series("obs-obs-1-1-ws_10min", WIND_POINTS),
            ),
        ]
    )


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
