"""Builders for FMI-style WaterML2 WFS responses used across the tests."""

from __future__ import annotations

from typing import Iterable, Sequence, Tuple


_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<wfs:FeatureCollection timeStamp="2022-08-02T06:00:00Z" numberMatched="2" numberReturned="2"\n'
    '    xmlns:wfs="http://www.opengis.net/wfs/2.0"\n'
    '    xmlns:gml="http://www.opengis.net/gml/3.2"\n'
    '    xmlns:om="http://www.opengis.net/om/2.0"\n'
    '    xmlns:omso="http://inspire.ec.europa.eu/schemas/omso/3.0"\n'
    '    xmlns:xlink="http://www.w3.org/1999/xlink"\n'
    '    xmlns:wml2="http://www.opengis.net/waterml/2.0">\n'
)
_FOOTER = "</wfs:FeatureCollection>\n"


def tvp(time: str | None, value: str | None) -> str:
    parts = ["<wml2:point><wml2:MeasurementTVP>"]
    if time is not None:
        parts.append(f"<wml2:time>{time}</wml2:time>")
    if value is not None:
        parts.append(f"<wml2:value>{value}</wml2:value>")
    parts.append("</wml2:MeasurementTVP></wml2:point>")
    return "".join(parts)


def series(series_id: str, points: Sequence[Tuple[str | None, str | None]]) -> str:
    body = "\n".join(tvp(time, value) for time, value in points)
    return (
        "<om:result>\n"
        f'<wml2:MeasurementTimeseries gml:id="{series_id}">\n'
        f"{body}\n"
        "</wml2:MeasurementTimeseries>\n"
        "</om:result>\n"
    )


def observed_property(text: str) -> str:
    return f"<om:observedProperty>{text}</om:observedProperty>\n"


def member(*parts: str) -> str:
    return (
        "<wfs:member><omso:PointTimeSeriesObservation>\n"
        + "".join(parts)
        + "</omso:PointTimeSeriesObservation></wfs:member>\n"
    )


def document(members: Iterable[str]) -> str:
    return _HEADER + "".join(members) + _FOOTER


TEMPERATURE_POINTS = [
    ("2022-08-01T00:00:00Z", "12.3"),
    ("2022-08-01T01:00:00Z", "11.8"),
]
WIND_POINTS = [
    ("2022-08-01T00:00:00Z", "4.1"),
    ("2022-08-01T01:00:00Z", "3.9"),
]
