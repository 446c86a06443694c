"""Epoch-millisecond <-> UTC instant conversions and RFC3339 formatting.

Instants are timezone-aware ``pandas.Timestamp`` values in UTC. Converting
from epoch milliseconds only ever produces whole milliseconds, so
``utc_to_epoch_ms(epoch_ms_to_utc(t)) == t`` for every ``t`` in range.
"""

from __future__ import annotations

import time
from datetime import datetime

import pandas as pd

from time_ms_conversions.convert.split import time_ms_to_secs_nsecs
from time_ms_conversions.utils.time_utils import parse_utc_timestamp, round_ns_to_ms, to_nanoseconds

MS_PER_SECOND = 1_000
NS_PER_MS = 1_000_000
UTC_OFFSET_SUFFIX = "+00:00"
ZULU_SUFFIX = "Z"


def epoch_ms_to_utc(time_ms: int) -> pd.Timestamp:
    """Convert epoch milliseconds to a UTC timestamp."""
    secs, nsecs = time_ms_to_secs_nsecs(time_ms)
    # Millisecond unit keeps instants outside the nanosecond range representable.
    return pd.Timestamp(secs * MS_PER_SECOND + nsecs // NS_PER_MS, unit="ms", tz="UTC")


def utc_to_epoch_ms(instant: str | datetime | pd.Timestamp) -> int:
    """Convert an instant to epoch milliseconds, rounding half-up on the nanosecond remainder.

    Naive values are taken as UTC; aware values are converted to UTC first.
    """
    return round_ns_to_ms(to_nanoseconds(instant))


def now_to_epoch_ms() -> int:
    """Current wall-clock UTC time in epoch milliseconds."""
    return round_ns_to_ms(time.time_ns())


def to_iso_string(instant: str | datetime | pd.Timestamp, with_zulu: bool) -> str:
    """Render an instant as RFC3339 in UTC with exactly millisecond precision."""
    ts = parse_utc_timestamp(instant)
    text = ts.isoformat(timespec="milliseconds")
    if with_zulu and text.endswith(UTC_OFFSET_SUFFIX):
        return text[: -len(UTC_OFFSET_SUFFIX)] + ZULU_SUFFIX
    return text


def epoch_ms_to_utc_string(time_ms: int) -> str:
    """Epoch milliseconds as RFC3339 with a ``+00:00`` suffix."""
    return to_iso_string(epoch_ms_to_utc(time_ms), with_zulu=False)


def epoch_ms_to_utc_zulu_string(time_ms: int) -> str:
    """Epoch milliseconds as RFC3339 with a ``Z`` suffix."""
    return to_iso_string(epoch_ms_to_utc(time_ms), with_zulu=True)
