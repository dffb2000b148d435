"""Single-pass extraction of temperature datapoints from a WaterML2 WFS response.

The FMI stored queries bundle every requested parameter (temperature, wind,
humidity, ...) into one document. Each parameter lives in its own
``wml2:MeasurementTimeseries`` block and nothing in the block says which
quantity it carries, so blocks are classified from their ``gml:id`` and from
the most recent ``om:observedProperty`` seen before them.

The document is consumed with ``lxml.etree.iterparse`` and finished subtrees
are released as soon as they have been handled: each point, its ``wml2:point``
wrapper, each timeseries block and each ``wfs:member``. Memory stays bounded by
one member rather than by the whole response.
"""

from __future__ import annotations

import io
import logging
import math
import re
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional, Sequence, Union

from lxml import etree

from models.records import Datapoint
from services.classifier import (
    is_temperature_series,
    observed_property_mentions_temperature,
    series_identifier,
)
from services.errors import InvalidTimestampError, InvalidValueError, XmlSyntaxError
from settings import DEFAULT_TEMPERATURE_HINTS

logger = logging.getLogger(__name__)

_TIMESERIES = "MeasurementTimeseries"
_POINT = "MeasurementTVP"
_TIME = "time"
_VALUE = "value"
_OBSERVED_PROPERTY = "observedProperty"
_POINT_WRAPPER = "point"
_MEMBER = "member"


_RFC3339 = re.compile(
    r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})[Tt ]"
    r"(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})(?:\.(?P<fraction>[0-9]+))?"
    r"(?P<offset>[Zz]|[+-][0-9]{2}:[0-9]{2})"
)


def parse_rfc3339(text: str) -> datetime:
    """Parse an RFC 3339 timestamp into an aware UTC datetime.

    Only the RFC 3339 profile of ISO 8601 is accepted: full date, full time
    and a mandatory ``Z`` or ``+HH:MM`` offset. Fractions beyond microseconds
    are truncated.
    """
    match = _RFC3339.fullmatch(text.strip())
    if match is None:
        raise ValueError(f"Not an RFC 3339 timestamp: {text!r}")

    offset = match["offset"]
    if offset in ("Z", "z"):
        tzinfo = timezone.utc
    else:
        sign = -1 if offset[0] == "-" else 1
        hours, minutes = int(offset[1:3]), int(offset[4:6])
        if minutes > 59:
            raise ValueError(f"Invalid UTC offset: {offset!r}")
        tzinfo = timezone(sign * timedelta(hours=hours, minutes=minutes))

    fraction = match["fraction"] or ""
    microsecond = int(fraction[:6].ljust(6, "0")) if fraction else 0

    parsed = datetime(
        int(match["year"]),
        int(match["month"]),
        int(match["day"]),
        int(match["hour"]),
        int(match["minute"]),
        int(match["second"]),
        microsecond,
        tzinfo=tzinfo,
    )
    return parsed.astimezone(timezone.utc)


def _local_name(tag: object) -> Optional[str]:
    if not isinstance(tag, str):
        return None
    return etree.QName(tag).localname


def _text_of(element: etree._Element) -> str:
    return "".join(element.itertext()).strip()


def _release(element: etree._Element) -> None:
    element.clear(keep_tail=True)
    parent = element.getparent()
    if parent is None:
        return
    while element.getprevious() is not None:
        del parent[0]


class _TimeseriesScan:
    """Mutable state for one pass over one document."""

    def __init__(self, hints: Sequence[str]) -> None:
        self.hints = hints
        self.upcoming_temperature_series = False
        self.in_temperature_series = False
        self.in_point = False
        self.current_time: Optional[datetime] = None
        self.datapoints: List[Datapoint] = []
        self.skipped = 0

    def start(self, name: str, element: etree._Element) -> None:
        if name == _TIMESERIES:
            identifier = series_identifier(element.attrib)
            self.in_temperature_series = is_temperature_series(
                identifier, self.upcoming_temperature_series, self.hints
            )
            self.upcoming_temperature_series = False
            logger.debug(
                "Timeseries block opened (temperature=%s)",
                self.in_temperature_series,
                extra={"series_id": identifier},
            )
        elif name == _POINT:
            self.in_point = True
            self.current_time = None

    def end(self, name: str, element: etree._Element) -> None:
        if name == _TIMESERIES:
            self.in_temperature_series = False
            self.upcoming_temperature_series = False
            _release(element)
        elif name == _POINT:
            self.in_point = False
            self.current_time = None
            _release(element)
        elif name in (_POINT_WRAPPER, _MEMBER):
            _release(element)
        elif name == _OBSERVED_PROPERTY:
            self.upcoming_temperature_series = observed_property_mentions_temperature(
                _text_of(element)
            )
        elif name == _TIME and self._collecting():
            self._handle_time(_text_of(element))
        elif name == _VALUE and self._collecting():
            self._handle_value(_text_of(element))

    def _collecting(self) -> bool:
        return self.in_temperature_series and self.in_point

    def _handle_time(self, text: str) -> None:
        try:
            self.current_time = parse_rfc3339(text)
        except ValueError as exc:
            raise InvalidTimestampError(text) from exc

    def _handle_value(self, text: str) -> None:
        if not text or text.lower() == "nan":
            self.skipped += 1
            return
        if "_" in text or not text.isascii():
            raise InvalidValueError(text)
        try:
            value = float(text)
        except ValueError as exc:
            raise InvalidValueError(text) from exc
        if math.isnan(value):
            self.skipped += 1
            return
        if math.isinf(value):
            raise InvalidValueError(text)

        if self.current_time is not None:
            self.datapoints.append(Datapoint(timestamp=self.current_time, value=value))


class TemperatureExtractor:
    """Turns a raw WFS response into the ordered temperature series it contains."""

    def __init__(self, hints: Optional[Iterable[str]] = None) -> None:
        self.hints = tuple(hints) if hints is not None else DEFAULT_TEMPERATURE_HINTS

    def extract(self, xml: Union[str, bytes]) -> List[Datapoint]:
        data = xml.encode("utf-8") if isinstance(xml, str) else xml
        scan = _TimeseriesScan(self.hints)
        events = etree.iterparse(
            io.BytesIO(data),
            events=("start", "end"),
            resolve_entities=False,
            no_network=True,
            remove_comments=True,
        )

        try:
            for event, element in events:
                name = _local_name(element.tag)
                if name is None:
                    continue
                if event == "start":
                    scan.start(name, element)
                else:
                    scan.end(name, element)
        except etree.XMLSyntaxError as exc:
            raise XmlSyntaxError(exc.msg or str(exc), line=exc.lineno) from exc

        logger.debug(
            "Extracted temperature series",
            extra={"datapoint_count": len(scan.datapoints), "skipped_count": scan.skipped},
        )
        return scan.datapoints


def parse_temperature_timeseries(
    xml: Union[str, bytes], hints: Optional[Iterable[str]] = None
) -> List[Datapoint]:
    return TemperatureExtractor(hints=hints).extract(xml)
