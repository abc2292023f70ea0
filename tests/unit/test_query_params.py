"""Tests for time parameter parsing."""

import pytest

from cloudseries.adapters.frameworks.query_params import (
    DEFAULT_RANGE_SECONDS,
    _parse_time_param,
    _parse_window_params,
)
from cloudseries.core.models import TimeWindow

NOW = 1_700_000_000

pytestmark = pytest.mark.tier(0)


class TestParseTimeParam:
    """Tests for _parse_time_param()."""

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_returns_default(self, value: str | None) -> None:
        assert _parse_time_param(value, NOW, default=42) == 42

    def test_now_returns_reference_time(self) -> None:
        """The literal "now" is the reference time, not the default."""
        assert _parse_time_param("now", NOW, default=42) == NOW

    def test_absolute_seconds(self) -> None:
        assert _parse_time_param("1699990000", NOW, default=0) == 1_699_990_000

    def test_fractional_seconds_are_truncated(self) -> None:
        assert _parse_time_param("1699990000.9", NOW, default=0) == 1_699_990_000

    @pytest.mark.parametrize(
        ("value", "offset"),
        [("-30s", 30), ("-5min", 300), ("-2h", 7200), ("-1d", 86400), ("-1w", 604800)],
    )
    def test_relative_offsets(self, value: str, offset: int) -> None:
        assert _parse_time_param(value, NOW, default=0) == NOW - offset

    @pytest.mark.parametrize("value", ["yesterday", "-1y", "-5", "nan", "inf", "-10"])
    def test_invalid_values_raise(self, value: str) -> None:
        with pytest.raises(ValueError):
            _parse_time_param(value, NOW, default=0)


class TestParseWindowParams:
    """Tests for _parse_window_params()."""

    def test_defaults_to_last_day(self) -> None:
        window = _parse_window_params(None, None, now=NOW)
        assert window == TimeWindow(NOW - DEFAULT_RANGE_SECONDS, NOW)

    def test_explicit_window(self) -> None:
        assert _parse_window_params("0", "600", now=NOW) == TimeWindow(0, 600)

    def test_relative_window(self) -> None:
        window = _parse_window_params("-1h", "now", now=NOW)
        assert window == TimeWindow(NOW - 3600, NOW)

    def test_empty_window_raises(self) -> None:
        with pytest.raises(ValueError, match="earlier than"):
            _parse_window_params("600", "600", now=NOW)

    def test_from_now_is_not_the_default_start(self) -> None:
        """from=now starts the window at now, leaving it empty."""
        with pytest.raises(ValueError, match="earlier than"):
            _parse_window_params("now", None, now=NOW)
        with pytest.raises(ValueError, match="earlier than"):
            _parse_window_params("now", "now", now=NOW)
