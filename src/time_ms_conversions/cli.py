from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from time_ms_conversions.config import DEFAULT_CONFIG_PATH, load_config
from time_ms_conversions.convert.split import time_ms_to_secs_nsecs
from time_ms_conversions.convert.utc import epoch_ms_to_utc, now_to_epoch_ms, to_iso_string
from time_ms_conversions.parse.dt_str import parse_to_epoch_ms
from time_ms_conversions.parse.errors import TimeParseError
from time_ms_conversions.parse.massaging import TzMassaging
from time_ms_conversions.utils.logging import get_logger

app = typer.Typer(help="Epoch-millisecond time conversion CLI")
logger = get_logger(__name__)


@app.command("now")
def now_cmd() -> None:
    """Print the current UTC time as epoch milliseconds."""
    typer.echo(now_to_epoch_ms())


@app.command("to-utc")
def to_utc_cmd(
    time_ms: int = typer.Argument(..., help="Epoch milliseconds; pass negatives after `--`"),
    zulu: Optional[bool] = typer.Option(None, "--zulu/--no-zulu", help="Use Z suffix, defaults to config value"),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Default config path"),
) -> None:
    """Render epoch milliseconds as an RFC3339 UTC string."""
    cfg = load_config(config)
    resolved_zulu = cfg.zulu if zulu is None else zulu
    typer.echo(to_iso_string(epoch_ms_to_utc(time_ms), with_zulu=resolved_zulu))


@app.command("split")
def split_cmd(
    time_ms: int = typer.Argument(..., help="Epoch milliseconds; pass negatives after `--`"),
) -> None:
    """Print the whole-second and nanosecond parts of epoch milliseconds."""
    secs, nsecs = time_ms_to_secs_nsecs(time_ms)
    typer.echo(f"{secs} {nsecs}")


@app.command("parse")
def parse_cmd(
    text: str = typer.Argument(..., help="Date-time string, e.g. '1970-01-01 00:00:00.123'"),
    policy: Optional[str] = typer.Option(None, help="cond_add_tz_utc | has_tz | local_tz, defaults to config value"),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Default config path"),
) -> None:
    """Parse a date-time string into UTC epoch milliseconds."""
    cfg = load_config(config)
    try:
        resolved_policy = cfg.policy if policy is None else TzMassaging.from_name(policy)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--policy") from exc

    logger.info("Parsing %r with policy=%s", text, resolved_policy.value)
    try:
        time_ms = parse_to_epoch_ms(text, resolved_policy)
    except TimeParseError as exc:
        logger.error("Parse failed (%s): %s", type(exc).__name__, exc)
        raise typer.Exit(code=1) from exc
    typer.echo(time_ms)


if __name__ == "__main__":
    app()
