"""Tests for beaconadmin.display — committed content and alerts."""

import logging

import pytest

from beaconadmin.display import Display


class TestDisplay:
    def test_initial_state(self) -> None:
        display = Display()
        assert display.content == ""
        assert display.location is None
        assert display.loading is False
        assert display.alerts == []

    def test_commit_replaces_content(self) -> None:
        display = Display()
        display.loading = True
        display.commit("#a", "<p>a</p>")
        display.commit("#b", "<p>b</p>")
        assert (display.location, display.content, display.loading) == ("#b", "<p>b</p>", False)

    def test_alert_keeps_content(self, caplog: pytest.LogCaptureFixture) -> None:
        seen: list[str] = []
        display = Display(seen.append)
        display.commit("#a", "<p>a</p>")
        display.loading = True
        with caplog.at_level(logging.ERROR, logger="beaconadmin.display"):
            display.alert("Error: Domains: boom")
        assert seen == ["Error: Domains: boom"]
        assert display.content == "<p>a</p>"
        assert display.loading is False
        assert "Error: Domains: boom" in caplog.text
