from __future__ import annotations

MS_PER_SECOND = 1_000
NS_PER_MS = 1_000_000


def time_ms_to_secs_nsecs(time_ms: int) -> tuple[int, int]:
    """Split epoch milliseconds into whole seconds and a forward nanosecond offset.

    The nanosecond part is always in [0, 999_000_000], so instants before the
    epoch borrow one second: -1 ms is (-1, 999_000_000), not (0, -1_000_000).
    """
    if isinstance(time_ms, bool) or not isinstance(time_ms, int):
        raise TypeError(f"time_ms must be an int, got {type(time_ms).__name__}")

    # Floor divmod keeps the remainder non-negative, which is exactly the
    # borrow rule for negative values (-1001 -> (-2, 999)).
    secs, millis = divmod(time_ms, MS_PER_SECOND)
    return secs, millis * NS_PER_MS
