"""Tests for beaconadmin.formatting.durations — relative ages."""

from datetime import UTC, datetime

import pytest

from beaconadmin.formatting import format_age

NOW = 1_700_000_000  # 2023-11-14T22:13:20Z


class TestFormatAge:
    def test_days_and_hours(self) -> None:
        assert format_age(NOW - 183600, reference=NOW) == "2d 3h ago"

    def test_future_drops_ago(self) -> None:
        assert format_age(NOW + 600, future=True, reference=NOW) == "10mins 0s"

    def test_past_with_future_flag_keeps_ago(self) -> None:
        assert format_age(NOW - 30, future=True, reference=NOW) == "30s ago"

    def test_seconds_only(self) -> None:
        assert format_age(NOW - 30, reference=NOW) == "30s ago"

    def test_zero(self) -> None:
        assert format_age(NOW, reference=NOW) == "0s ago"

    def test_unit_needs_twice_its_size(self) -> None:
        assert format_age(NOW - 90, reference=NOW) == "90s ago"
        assert format_age(NOW - 120, reference=NOW) == "2mins 0s ago"

    def test_47_hours_stays_in_hours(self) -> None:
        assert format_age(NOW - 47 * 3600, reference=NOW) == "47h 0s ago"

    def test_48_hours_becomes_days(self) -> None:
        assert format_age(NOW - 48 * 3600, reference=NOW) == "2d 0s ago"

    def test_at_most_two_pairs(self) -> None:
        text = format_age(NOW - (3 * 365 * 86400 + 5 * 86400 + 7), reference=NOW)
        assert text == "3y 5d ago"
        assert len(text.removesuffix(" ago").split()) == 2

    @pytest.mark.parametrize("delta", [1, 59, 3600, 86400 * 3 + 61, 86400 * 400])
    def test_larger_unit_first(self, delta: int) -> None:
        order = ["y", "m", "d", "h", "mins", "s"]
        parts = format_age(NOW - delta, reference=NOW).removesuffix(" ago").split()
        suffixes = [p.lstrip("0123456789") for p in parts]
        assert len(parts) <= 2
        assert [order.index(s) for s in suffixes] == sorted(order.index(s) for s in suffixes)

    def test_datetime_input(self) -> None:
        instant = datetime.fromtimestamp(NOW - 7200, UTC)
        assert format_age(instant, reference=NOW) == "2h 0s ago"

    def test_rfc3339_input(self) -> None:
        assert format_age("2023-11-14T20:13:20Z", reference=NOW) == "2h 0s ago"

    def test_datetime_reference(self) -> None:
        reference = datetime.fromtimestamp(NOW, UTC)
        assert format_age(NOW - 600, reference=reference) == "10mins 0s ago"
