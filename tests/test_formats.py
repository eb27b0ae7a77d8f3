"""Tests for 12/24-hour preference detection."""

import pytest

from timedate_mcp.formats import preferred_format, territory_for


class TestTerritory:
    @pytest.mark.parametrize(
        "tz,territory",
        [
            ("America/New_York", "US"),
            ("America/Indiana/Indianapolis", "US"),
            ("US/Pacific", "US"),
            ("Australia/Sydney", "AU"),
            ("Asia/Kolkata", "IN"),
            ("Europe/London", "GB"),
        ],
    )
    def test_known(self, tz: str, territory: str):
        assert territory_for(tz) == territory

    def test_unknown(self):
        assert territory_for("Etc/GMT+5") is None


class TestPreferredFormat:
    @pytest.mark.parametrize(
        "tz", ["America/Los_Angeles", "Australia/Perth", "Asia/Manila", "Pacific/Auckland"]
    )
    def test_twelve_hour(self, tz: str):
        assert preferred_format(tz).is_12_hour is True

    @pytest.mark.parametrize("tz", ["Europe/Berlin", "Asia/Tokyo", "Europe/London"])
    def test_twenty_four_hour(self, tz: str):
        assert preferred_format(tz).is_12_hour is False

    @pytest.mark.parametrize("tz", ["UTC", "Etc/GMT-3", "Antarctica/Troll", "Unknown/Zone"])
    def test_unmapped_defaults_to_24h(self, tz: str):
        assert preferred_format(tz).is_12_hour is False

    def test_independent_of_locale_env(self, monkeypatch):
        monkeypatch.setenv("LANG", "en_US.UTF-8")
        monkeypatch.setenv("LC_TIME", "en_US.UTF-8")
        assert preferred_format("Europe/Paris").is_12_hour is False
