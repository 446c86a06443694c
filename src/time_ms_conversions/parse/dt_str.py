"""Date-time string to epoch-millisecond parsing with timezone massaging.

Accepted layouts, chosen by whether the string holds exactly one ``T``:

    YYYY-MM-DDTHH:MM:SS[.fff...][offset]
    YYYY-MM-DD HH:MM:SS[.fff...][offset]

Offsets are numeric only: ``+HH``, ``+HHMM`` or ``+HH:MM`` (and ``-``).
Fractional seconds may have any number of digits; the first nine are kept and
the final instant is rounded half-up to milliseconds.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo

import pandas as pd

from time_ms_conversions.convert.utc import utc_to_epoch_ms
from time_ms_conversions.parse.errors import (
    AmbiguousLocalTimeError,
    MalformedInputError,
    MissingTimezoneError,
    NonexistentLocalTimeError,
)
from time_ms_conversions.parse.massaging import TzMassaging
from time_ms_conversions.utils.logging import get_logger

logger = get_logger(__name__)

ISO_SEPARATOR = "T"
SPACE_SEPARATOR = " "
UTC_OFFSET = "+0000"
# "2020-01-01T..." -> the second date hyphen sits at index 7.
LAST_DATE_HYPHEN_INDEX = 7
MAX_FRACTION_DIGITS = 9
LEAP_SECOND = 60

_DATE_TIME = (
    r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"{sep}"
    r"(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
)
_OFFSET = r"(?P<sign>[+-])(?P<offset_hours>\d{2})(?::?(?P<offset_minutes>\d{2}))?"

_PATTERNS: dict[tuple[str, bool], re.Pattern[str]] = {
    (sep, with_offset): re.compile(
        _DATE_TIME.replace("{sep}", sep) + (_OFFSET if with_offset else ""),
        re.ASCII,
    )
    for sep in (ISO_SEPARATOR, SPACE_SEPARATOR)
    for with_offset in (True, False)
}


def _layout_separator(text: str) -> str:
    return ISO_SEPARATOR if text.count(ISO_SEPARATOR) == 1 else SPACE_SEPARATOR


def _match(text: str, sep: str, with_offset: bool) -> re.Match[str] | None:
    return _PATTERNS[(sep, with_offset)].fullmatch(text)


def _has_explicit_offset(text: str) -> bool:
    if "+" in text:
        return True
    # A hyphen at or before index 7 is a date separator.
    return text.rfind("-") > LAST_DATE_HYPHEN_INDEX


def _naive_timestamp(match: re.Match[str], dt_str: str) -> pd.Timestamp:
    fraction = (match.group("fraction") or "")[:MAX_FRACTION_DIGITS]
    nanos = int(fraction.ljust(MAX_FRACTION_DIGITS, "0"))
    second = int(match.group("second"))
    # A leap second (:60) is folded into the first second of the next minute.
    leap = second == LEAP_SECOND
    try:
        wall = datetime(
            int(match.group("year")),
            int(match.group("month")),
            int(match.group("day")),
            int(match.group("hour")),
            int(match.group("minute")),
            second - 1 if leap else second,
            nanos // 1_000,
        )
        if leap:
            wall += timedelta(seconds=1)
        ts = pd.Timestamp(wall)
    except (ValueError, OverflowError) as exc:
        raise MalformedInputError(
            f"Invalid date-time value {dt_str!r}: {exc}", dt_str=dt_str, wrapped=exc
        ) from exc

    # Sub-microsecond digits never move the half-up millisecond rounding, so
    # they are only kept where a nanosecond timestamp can hold them.
    sub_micros = nanos % 1_000
    if sub_micros and pd.Timestamp.min <= ts < pd.Timestamp.max.floor("us"):
        ts = ts.as_unit("ns") + pd.Timedelta(nanoseconds=sub_micros)
    return ts


def _fixed_offset(match: re.Match[str], dt_str: str) -> timezone:
    hours = int(match.group("offset_hours"))
    minutes = int(match.group("offset_minutes") or 0)
    if minutes > 59:
        raise MalformedInputError(f"Invalid offset minutes in {dt_str!r}", dt_str=dt_str)

    delta = timedelta(hours=hours, minutes=minutes)
    if match.group("sign") == "-":
        delta = -delta
    try:
        return timezone(delta)
    except ValueError as exc:
        raise MalformedInputError(
            f"Offset out of range in {dt_str!r}: {exc}", dt_str=dt_str, wrapped=exc
        ) from exc


def _localize(naive: pd.Timestamp, tz: tzinfo, dt_str: str) -> int:
    try:
        instant = naive.tz_localize(tz)
        return utc_to_epoch_ms(instant)
    except (ValueError, OverflowError) as exc:
        raise MalformedInputError(
            f"Date-time out of range {dt_str!r}: {exc}", dt_str=dt_str, wrapped=exc
        ) from exc


def _parse_with_offset(text: str, sep: str, dt_str: str) -> int:
    match = _match(text, sep, with_offset=True)
    if match is None:
        if _match(text, sep, with_offset=False) is not None:
            raise MissingTimezoneError(f"Missing numeric timezone offset in {dt_str!r}", dt_str=dt_str)
        raise MalformedInputError(f"Unrecognized date-time layout: {dt_str!r}", dt_str=dt_str)

    naive = _naive_timestamp(match, dt_str)
    return _localize(naive, _fixed_offset(match, dt_str), dt_str)


def _attach_local(wall: datetime, local_tz: tzinfo | None, fold: int) -> datetime:
    candidate = wall.replace(fold=fold)
    if local_tz is None:
        return candidate.astimezone()
    return candidate.replace(tzinfo=local_tz)


def _local_wall_clock(aware: datetime, local_tz: tzinfo | None) -> datetime:
    utc = aware.astimezone(timezone.utc)
    local = utc.astimezone() if local_tz is None else utc.astimezone(local_tz)
    return local.replace(tzinfo=None)


def _local_utc_offset(naive: pd.Timestamp, local_tz: tzinfo | None, dt_str: str) -> timedelta:
    """Resolve the UTC offset of a local wall-clock time, refusing to guess.

    Both folds of the wall time agree outside transitions. When they differ,
    the time is either repeated (the earlier fold maps back onto itself) or
    skipped (neither fold does).
    """
    # Transitions happen on whole seconds.
    wall = naive.floor("s").to_pydatetime()
    try:
        earlier = _attach_local(wall, local_tz, fold=0)
        later = _attach_local(wall, local_tz, fold=1)
        earlier_offset = earlier.utcoffset()
        later_offset = later.utcoffset()
        round_trips = _local_wall_clock(earlier, local_tz) == wall
    except (ValueError, OverflowError, OSError) as exc:
        raise MalformedInputError(
            f"Cannot resolve local time {dt_str!r}: {exc}", dt_str=dt_str, wrapped=exc
        ) from exc

    if earlier_offset is None:
        raise MalformedInputError(f"Local timezone has no UTC offset for {dt_str!r}", dt_str=dt_str)
    if earlier_offset == later_offset:
        return earlier_offset

    if round_trips:
        logger.debug("Local time %r is repeated (offsets %s / %s)", dt_str, earlier_offset, later_offset)
        raise AmbiguousLocalTimeError(f"ambiguous result for local time {dt_str!r}", dt_str=dt_str)
    logger.debug("Local time %r is skipped (offsets %s / %s)", dt_str, earlier_offset, later_offset)
    raise NonexistentLocalTimeError(f"no result for local time {dt_str!r}", dt_str=dt_str)


def _parse_local(text: str, sep: str, dt_str: str, local_tz: tzinfo | None) -> int:
    match = _match(text, sep, with_offset=False)
    if match is None:
        raise MalformedInputError(f"Unrecognized local date-time layout: {dt_str!r}", dt_str=dt_str)

    naive = _naive_timestamp(match, dt_str)
    offset = _local_utc_offset(naive, local_tz, dt_str)
    return _localize(naive, timezone(offset), dt_str)


def parse_to_epoch_ms(
    dt_str: str,
    tz_massaging: TzMassaging,
    local_tz: tzinfo | None = None,
) -> int:
    """Parse a date-time string into UTC epoch milliseconds.

    Args:
        dt_str: Date-time text; surrounding whitespace is ignored.
        tz_massaging: How a missing or present offset is interpreted.
        local_tz: Zone used by ``TzMassaging.LOCAL_TZ`` instead of the
            process's local timezone. Ignored by the other policies.

    Returns:
        Milliseconds since 1970-01-01T00:00:00Z.

    Raises:
        MalformedInputError: The text does not match the layout or holds
            out-of-range values.
        MissingTimezoneError: ``HAS_TZ`` and no numeric offset.
        AmbiguousLocalTimeError: ``LOCAL_TZ`` and the wall time is repeated.
        NonexistentLocalTimeError: ``LOCAL_TZ`` and the wall time is skipped.
    """
    if not isinstance(dt_str, str):
        raise TypeError(f"dt_str must be a str, got {type(dt_str).__name__}")

    text = dt_str.strip()
    sep = _layout_separator(text)

    if tz_massaging is TzMassaging.HAS_TZ:
        return _parse_with_offset(text, sep, dt_str)
    if tz_massaging is TzMassaging.COND_ADD_TZ_UTC:
        if not _has_explicit_offset(text):
            logger.debug("No offset in %r, assuming UTC", dt_str)
            text = f"{text}{UTC_OFFSET}"
        return _parse_with_offset(text, sep, dt_str)
    if tz_massaging is TzMassaging.LOCAL_TZ:
        return _parse_local(text, sep, dt_str, local_tz)

    raise TypeError(f"tz_massaging must be a TzMassaging member, got {tz_massaging!r}")
