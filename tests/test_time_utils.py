from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pandas as pd

from time_ms_conversions.utils.time_utils import parse_utc_timestamp, round_ns_to_ms, to_nanoseconds


def test_parse_utc_timestamp_localizes_naive_and_converts_aware() -> None:
    naive = parse_utc_timestamp("2024-01-01 00:00:00")
    assert naive == pd.Timestamp("2024-01-01T00:00:00Z")
    assert str(naive.tzinfo) == "UTC"

    aware = parse_utc_timestamp(datetime(2024, 1, 1, 1, 0, tzinfo=timezone(timedelta(hours=1))))
    assert aware == pd.Timestamp("2024-01-01T00:00:00Z")
    assert str(aware.tzinfo) == "UTC"


def test_round_ns_to_ms_rounds_half_up() -> None:
    assert round_ns_to_ms(0) == 0
    assert round_ns_to_ms(499_999) == 0
    assert round_ns_to_ms(500_000) == 1
    assert round_ns_to_ms(1_499_999) == 1
    assert round_ns_to_ms(-1_000_000) == -1
    assert round_ns_to_ms(-500_000) == 0
    assert round_ns_to_ms(-500_001) == -1


def test_to_nanoseconds_is_relative_to_epoch() -> None:
    assert to_nanoseconds(pd.Timestamp("1970-01-01T00:00:01Z")) == 1_000_000_000
    assert to_nanoseconds(pd.Timestamp("1969-12-31T23:59:59.999999999Z")) == -1


def test_to_nanoseconds_outside_nanosecond_range() -> None:
    year_1600 = pd.Timestamp(datetime(1600, 1, 1, 0, 0, 0, 1))

    assert to_nanoseconds(year_1600) == -11_676_096_000_000_000_000 + 1_000
    assert to_nanoseconds(datetime(2300, 1, 1, tzinfo=timezone.utc)) == 10_413_792_000_000_000_000
