from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import NoReturn, Optional

import typer

from cli.config import CLIConfig, load_config
from cli.render import render_series
from datastore.influx import build_writer
from logging_config import configure_logging
from services.errors import TemperatureImportError
from services.random_series import generate_random_datapoints
from services.temperatures import TemperatureService, build_default_service


@dataclass
class CLIState:
    config: CLIConfig
    service: TemperatureService


app = typer.Typer(
    help="Import historical hourly temperatures from the FMI open-data WFS.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


def _parse_timestamp(value: str, option: str) -> datetime:
    candidate = value.strip()
    if candidate.endswith(("Z", "z")):
        candidate = candidate[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError as exc:
        raise typer.BadParameter(f"{value!r} is not an ISO 8601 timestamp.", param_hint=option) from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _fail(message: str) -> NoReturn:
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="WFS endpoint (defaults to FMI_WFS_URL env or https://opendata.fmi.fi/wfs).",
    ),
) -> None:
    """Entry point for the CLI."""
    configure_logging()
    service = build_default_service(base_url=base_url)
    ctx.obj = CLIState(config=load_config(), service=service)
    ctx.call_on_close(service.close)


@app.command("fetch")
def fetch_command(
    ctx: typer.Context,
    place: str = typer.Option(..., "--place", "-p", help="A place name passed to the WFS endpoint (eg. a city)."),
    starttime: str = typer.Option(..., "--starttime", "-s", help="Timestamp in ISO 8601."),
    endtime: str = typer.Option(..., "--endtime", "-e", help="Timestamp in ISO 8601."),
    write_influxdb: bool = typer.Option(False, "--write-influxdb", "-w", help="Write data to InfluxDB."),
    random_count: Optional[int] = typer.Option(
        None,
        "--random-count",
        min=0,
        help="Generate this many random datapoints instead of fetching from FMI.",
    ),
    influx_host: Optional[str] = typer.Option(None, "--influx-host", help="Overrides INFLUXDB_HOST."),
    influx_org: Optional[str] = typer.Option(None, "--influx-org", help="Overrides INFLUXDB_ORG."),
    influx_token: Optional[str] = typer.Option(None, "--influx-token", help="Overrides INFLUXDB_TOKEN."),
    bucket: Optional[str] = typer.Option(None, "--bucket", help="Overrides INFLUXDB_BUCKET."),
) -> None:
    """Fetch the temperature series of a place and print it or write it to InfluxDB."""
    state = _get_state(ctx)
    start_time = _parse_timestamp(starttime, "--starttime")
    end_time = _parse_timestamp(endtime, "--endtime")

    if random_count is not None:
        datapoints = generate_random_datapoints(start_time, random_count)
        typer.echo(f"Generated {len(datapoints)} random datapoints starting at {start_time.isoformat()}")
    else:
        if end_time <= start_time:
            raise typer.BadParameter("must be later than --starttime.", param_hint="--endtime")
        try:
            datapoints = state.service.fetch(place, start_time, end_time)
        except TemperatureImportError as exc:
            _fail(str(exc))

    if not write_influxdb:
        render_series(place, datapoints)
        return

    config = load_config(
        influx_host=influx_host or state.config.influx_host,
        influx_org=influx_org or state.config.influx_org,
        influx_token=influx_token or state.config.influx_token,
        bucket=bucket or state.config.bucket,
        measurement=state.config.measurement,
    )
    try:
        writer = build_writer(
            host=config.influx_host,
            org=config.influx_org,
            token=config.influx_token,
            bucket=config.bucket,
            measurement=config.measurement,
        )
    except ValueError as exc:
        _fail(str(exc))
    try:
        written = writer.write(datapoints, place)
    except TemperatureImportError as exc:
        _fail(str(exc))
    finally:
        writer.close()
    typer.secho(f"Wrote {written} datapoints to bucket {config.bucket}.", fg=typer.colors.GREEN)
