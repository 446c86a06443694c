from __future__ import annotations

from datetime import datetime

import pandas as pd

NS_PER_MS = 1_000_000
HALF_MS_NS = 500_000
NS_PER_UNIT = {"s": 1_000_000_000, "ms": 1_000_000, "us": 1_000, "ns": 1}


def parse_utc_timestamp(value: str | datetime | pd.Timestamp) -> pd.Timestamp:
    """Parse a timestamp-like value and normalize it to UTC."""
    ts = pd.Timestamp(value)
    if ts.tzinfo is None:
        return ts.tz_localize("UTC")
    return ts.tz_convert("UTC")


def round_ns_to_ms(ns: int) -> int:
    """Round nanoseconds since epoch to milliseconds, ties toward +inf."""
    return (int(ns) + HALF_MS_NS) // NS_PER_MS


def to_nanoseconds(ts: str | datetime | pd.Timestamp) -> int:
    """Return nanoseconds since epoch for a timestamp normalized to UTC.

    Counts in the timestamp's own unit, so s/ms/us timestamps outside the
    nanosecond range (about 1677-2262) convert without overflow.
    """
    utc_ts = parse_utc_timestamp(ts)
    ticks = int(utc_ts.asm8.astype("int64"))
    return ticks * NS_PER_UNIT[utc_ts.unit]
