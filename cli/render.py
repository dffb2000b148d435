from __future__ import annotations

from typing import Any, Iterable, Sequence

import typer

from models.records import Datapoint
from services.aggregator import SeriesAggregator


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_series(place: str, datapoints: Sequence[Datapoint]) -> None:
    echo_heading(f"Temperatures for {place}")
    if datapoints:
        for point in datapoints:
            typer.echo(f"  {point.timestamp.isoformat()}  {point.value:.1f}")
    else:
        typer.echo("No datapoints returned.")

    summary = SeriesAggregator().aggregate(datapoints)
    typer.echo()
    echo_heading("Summary")
    echo_key_values(
        [
            ("count", summary.count),
            ("min_value", summary.min_value),
            ("max_value", summary.max_value),
            ("mean_value", None if summary.mean_value is None else round(summary.mean_value, 2)),
            ("first_timestamp", summary.first_timestamp),
            ("last_timestamp", summary.last_timestamp),
        ]
    )
