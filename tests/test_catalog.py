"""Tests for the timezone catalog."""

import zoneinfo
from datetime import datetime, timezone

import pytest

from timedate_mcp import catalog as catalog_module
from timedate_mcp.catalog import TimezoneCatalog, get_catalog, reload_catalog
from timedate_mcp.errors import CatalogLoadFailure, UnknownTimezone


def _utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# load
# ---------------------------------------------------------------------------


class TestLoad:
    def test_contains_common_zones(self, catalog: TimezoneCatalog):
        assert "UTC" in catalog
        assert "America/New_York" in catalog
        assert "Europe/London" in catalog
        assert len(catalog) > 300

    def test_empty_database_refused(self, monkeypatch):
        monkeypatch.setattr(zoneinfo, "available_timezones", lambda: set())
        with pytest.raises(CatalogLoadFailure):
            TimezoneCatalog.load()

    def test_unreadable_database_refused(self, monkeypatch):
        def _broken():
            raise OSError("tzdata missing")

        monkeypatch.setattr(zoneinfo, "available_timezones", _broken)
        with pytest.raises(CatalogLoadFailure, match="tzdata missing"):
            TimezoneCatalog.load()

    def test_database_without_utc_refused(self, monkeypatch):
        monkeypatch.setattr(
            zoneinfo, "available_timezones", lambda: {"Europe/London"}
        )
        with pytest.raises(CatalogLoadFailure):
            TimezoneCatalog.load()


class TestSharedCatalog:
    def test_get_catalog_is_shared(self, monkeypatch):
        monkeypatch.setattr(catalog_module, "_catalog", None)
        assert get_catalog() is get_catalog()

    def test_reload_swaps_instance(self, monkeypatch):
        monkeypatch.setattr(catalog_module, "_catalog", None)
        first = get_catalog()
        fresh = reload_catalog()
        assert fresh is not first
        assert get_catalog() is fresh
        assert first.list() == fresh.list()

    def test_failed_reload_keeps_current(self, monkeypatch):
        monkeypatch.setattr(catalog_module, "_catalog", None)
        current = get_catalog()
        monkeypatch.setattr(zoneinfo, "available_timezones", lambda: set())
        with pytest.raises(CatalogLoadFailure):
            reload_catalog()
        assert get_catalog() is current


# ---------------------------------------------------------------------------
# resolve
# ---------------------------------------------------------------------------


class TestResolve:
    def test_exact_name(self, catalog: TimezoneCatalog):
        zone = catalog.resolve("America/New_York")
        assert zone.key == "America/New_York"

    def test_unknown_name(self, catalog: TimezoneCatalog):
        with pytest.raises(UnknownTimezone, match="Mars/Phobos") as excinfo:
            catalog.resolve("Mars/Phobos")
        assert excinfo.value.name == "Mars/Phobos"

    def test_case_sensitive(self, catalog: TimezoneCatalog):
        with pytest.raises(UnknownTimezone):
            catalog.resolve("america/new_york")

    def test_no_whitespace_stripping(self, catalog: TimezoneCatalog):
        with pytest.raises(UnknownTimezone):
            catalog.resolve(" UTC")

    def test_empty_name(self, catalog: TimezoneCatalog):
        with pytest.raises(UnknownTimezone):
            catalog.resolve("")

    def test_fixed_offset_zone(self, catalog: TimezoneCatalog):
        zone = catalog.resolve("Etc/GMT+5")
        rule = catalog.rules_for(zone, _utc(2024, 1, 1))
        assert rule.utc_offset_minutes == -300


# ---------------------------------------------------------------------------
# rules_for
# ---------------------------------------------------------------------------


class TestRulesFor:
    def test_new_york_winter(self, catalog: TimezoneCatalog):
        zone = catalog.resolve("America/New_York")
        rule = catalog.rules_for(zone, _utc(2024, 1, 15, 12))
        assert rule.utc_offset_minutes == -300
        assert rule.is_dst is False
        assert rule.abbreviation == "EST"

    def test_new_york_summer(self, catalog: TimezoneCatalog):
        zone = catalog.resolve("America/New_York")
        rule = catalog.rules_for(zone, _utc(2024, 7, 1, 12))
        assert rule.utc_offset_minutes == -240
        assert rule.is_dst is True
        assert rule.abbreviation == "EDT"

    def test_historical_moscow_permanent_summer(self, catalog: TimezoneCatalog):
        """Moscow stayed on UTC+4 from 2011 to 2014, then moved to UTC+3."""
        zone = catalog.resolve("Europe/Moscow")
        assert catalog.rules_for(zone, _utc(2012, 1, 15)).utc_offset_minutes == 240
        assert catalog.rules_for(zone, _utc(2015, 1, 15)).utc_offset_minutes == 180

    def test_us_dst_rule_change_2007(self, catalog: TimezoneCatalog):
        """Before 2007, US DST started in April rather than March."""
        zone = catalog.resolve("America/New_York")
        assert catalog.rules_for(zone, _utc(2006, 3, 20, 12)).is_dst is False
        assert catalog.rules_for(zone, _utc(2007, 3, 20, 12)).is_dst is True

    def test_half_hour_offset(self, catalog: TimezoneCatalog):
        zone = catalog.resolve("Asia/Kolkata")
        assert catalog.rules_for(zone, _utc(2024, 1, 1)).utc_offset_minutes == 330

    def test_naive_instant_rejected(self, catalog: TimezoneCatalog):
        zone = catalog.resolve("UTC")
        with pytest.raises(ValueError):
            catalog.rules_for(zone, datetime(2024, 1, 1))


# ---------------------------------------------------------------------------
# list
# ---------------------------------------------------------------------------


class TestList:
    def test_full_catalog_sorted(self, catalog: TimezoneCatalog):
        names = catalog.list()
        assert len(names) == len(catalog)
        assert names == sorted(names)

    def test_empty_filter_is_full_catalog(self, catalog: TimezoneCatalog):
        assert catalog.list("") == catalog.list()

    def test_exact_match_filter(self, catalog: TimezoneCatalog):
        assert catalog.list("America/New_York") == ["America/New_York"]

    def test_case_insensitive_substring(self, catalog: TimezoneCatalog):
        names = catalog.list("new_york")
        assert "America/New_York" in names
        assert all("new_york" in n.lower() for n in names)

    def test_no_match(self, catalog: TimezoneCatalog):
        assert catalog.list("zzz_no_match") == []

    def test_filtered_result_sorted(self, catalog: TimezoneCatalog):
        names = catalog.list("europe/")
        assert len(names) > 30
        assert names == sorted(names)
