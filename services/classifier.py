"""Heuristics deciding whether a WaterML2 timeseries block holds air temperature."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from settings import DEFAULT_TEMPERATURE_HINTS

_OBSERVED_PROPERTY_NEEDLES = ("temperature", "airtemp")


def _local_name(name: str) -> str:
    if name.startswith("{"):
        return name.rsplit("}", 1)[1]
    return name.rsplit(":", 1)[-1]


def series_identifier(attrib: Mapping[str, str]) -> Optional[str]:
    """Return the block's ``id``, falling back to a namespaced ``id`` such as ``gml:id``."""
    plain = attrib.get("id")
    if plain is not None:
        return plain
    for key, value in attrib.items():
        if _local_name(key) == "id":
            return value
    return None


def identifier_has_hint(identifier: Optional[str], hints: Iterable[str]) -> bool:
    if not identifier:
        return False
    return any(hint in identifier for hint in hints)


def observed_property_mentions_temperature(text: Optional[str]) -> bool:
    if not text:
        return False
    needle = text.strip().lower()
    return any(word in needle for word in _OBSERVED_PROPERTY_NEEDLES)


def is_temperature_series(
    identifier: Optional[str],
    carried_over: bool,
    hints: Iterable[str] = DEFAULT_TEMPERATURE_HINTS,
) -> bool:
    """Combine the identifier hint with the latched observedProperty match."""
    return identifier_has_hint(identifier, hints) or carried_over
