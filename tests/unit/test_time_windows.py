"""Unit tests for time window quantization."""

import pytest

from exposure_tokens.time_windows import TIME_WINDOW_INTERVAL_MS, time_windows


class TestTimeWindows:
    """Test early/late bucket computation."""

    def test_default_interval_is_five_minutes(self):
        """Test the storage interval constant."""
        assert TIME_WINDOW_INTERVAL_MS == 300000

    def test_golden_vector_on_boundary(self):
        """Test a timestamp that sits exactly on a bucket boundary."""
        early, late = time_windows(1590000000000, 300000)

        assert (early, late) == (1589999700000, 1590000000000)
        assert early <= 1590000000000 <= late

    def test_mid_bucket_timestamp(self):
        """Test a timestamp in the middle of a bucket rounds both ways."""
        assert time_windows(1590000000000 + 200000) == (1590000000000, 1590000300000)
        assert time_windows(1590000000000 + 100000) == (1589999700000, 1590000000000)

    @pytest.mark.parametrize(
        "timestamp",
        [0, 1, 149999, 150000, 299999, 1590000000000, 1590000123456, 1700000000001],
    )
    def test_window_invariants(self, timestamp):
        """Test ordering, spacing and alignment of the two windows."""
        early, late = time_windows(timestamp)

        assert early <= late
        assert late - early in (0, TIME_WINDOW_INTERVAL_MS)
        assert early % TIME_WINDOW_INTERVAL_MS == 0
        assert late % TIME_WINDOW_INTERVAL_MS == 0
        half = TIME_WINDOW_INTERVAL_MS // 2
        assert early <= timestamp - half
        assert timestamp - half < late <= timestamp + half

    def test_nearby_timestamps_share_a_window(self):
        """Test observations under half an interval apart share a bucket."""
        a = set(time_windows(1590000000000 + 140000))
        b = set(time_windows(1590000000000 + 140000 + 149000))

        assert a & b

    def test_negative_timestamp_uses_floor(self):
        """Test pre-epoch timestamps round toward negative infinity."""
        early, late = time_windows(-1, 300000)

        assert (early, late) == (-300000, 0)

    def test_odd_interval(self):
        """Test an odd interval still yields aligned windows."""
        early, late = time_windows(10, 7)

        assert early % 7 == 0 and late % 7 == 0
        assert late - early in (0, 7)

    def test_invalid_interval(self):
        """Test a non-positive interval is rejected."""
        with pytest.raises(ValueError):
            time_windows(1590000000000, 0)
