"""Unit tests for the delay module."""

import pytest
from datetime import datetime, timedelta, timezone

from reminder_cli.delay import DelayFormatError, delay_to_seconds, parse_delay


REFERENCE_TIME = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)


class TestDelayToSeconds:
    """Tests for delay_to_seconds function."""

    @pytest.mark.parametrize("delay, seconds", [
        ("10s", 10),
        ("30m", 1800),
        ("2h", 7200),
        ("0s", 0),
        (" 5m ", 300),
    ])
    def test_valid_delays(self, delay, seconds):
        """Test converting valid delay strings."""
        assert delay_to_seconds(delay) == seconds

    @pytest.mark.parametrize("delay", [
        "2x",
        "h",
        "",
        "10",
        "1.5h",
        "-5m",
        "5 m",
        "10M",
        "abc",
    ])
    def test_invalid_delays(self, delay):
        """Test that malformed delay strings are rejected."""
        with pytest.raises(DelayFormatError, match="Invalid delay format"):
            delay_to_seconds(delay)

    def test_non_string(self):
        """Test that non-string delays are rejected."""
        with pytest.raises(DelayFormatError):
            delay_to_seconds(30)

    def test_format_error_is_value_error(self):
        """Test that callers can catch the error as ValueError."""
        with pytest.raises(ValueError):
            delay_to_seconds("2x")


class TestParseDelay:
    """Tests for parse_delay function."""

    def test_minutes(self):
        """Test that 30m points 1800 seconds ahead."""
        assert parse_delay("30m", now=REFERENCE_TIME) == REFERENCE_TIME + timedelta(seconds=1800)

    def test_seconds(self):
        """Test a delay in seconds."""
        assert parse_delay("45s", now=REFERENCE_TIME) == REFERENCE_TIME + timedelta(seconds=45)

    def test_hours(self):
        """Test a delay in hours."""
        assert parse_delay("3h", now=REFERENCE_TIME) == REFERENCE_TIME + timedelta(hours=3)

    def test_default_now_is_current_aware_time(self):
        """Test that the default reference time is the current local time."""
        before = datetime.now().astimezone()
        result = parse_delay("1m")
        after = datetime.now().astimezone()

        assert result.tzinfo is not None
        assert before + timedelta(minutes=1) <= result <= after + timedelta(minutes=1)

    def test_invalid_unit(self):
        """Test that an unknown unit raises a format error."""
        with pytest.raises(DelayFormatError):
            parse_delay("2x", now=REFERENCE_TIME)

    def test_missing_amount(self):
        """Test that a unit without a number raises a format error."""
        with pytest.raises(DelayFormatError):
            parse_delay("h", now=REFERENCE_TIME)

    @pytest.mark.parametrize("delay", ["999999999h", "99999999999999h"])
    def test_too_large(self, delay):
        """Test that a delay past the representable range raises a format error."""
        with pytest.raises(DelayFormatError, match="too large"):
            parse_delay(delay, now=REFERENCE_TIME)
