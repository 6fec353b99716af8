"""Quantizing timestamps into overlapping time buckets"""

from typing import Tuple

# Location storage interval, 5 minutes
TIME_WINDOW_INTERVAL_MS = 5 * 60 * 1000


def time_windows(
    timestamp_ms: int, interval_ms: int = TIME_WINDOW_INTERVAL_MS
) -> Tuple[int, int]:
    """
    Round a timestamp down and up by half an interval.

    Returns the (early, late) interval boundaries surrounding the timestamp,
    so two observations less than half an interval apart share at least
    one bucket. Floor division is used throughout, so pre-epoch timestamps
    round toward negative infinity.
    """
    if interval_ms <= 0:
        raise ValueError("interval_ms must be positive")

    half = interval_ms // 2
    early = (timestamp_ms - half) // interval_ms * interval_ms
    late = (timestamp_ms + half) // interval_ms * interval_ms
    return early, late
