"""IANA timezone catalog backed by ``zoneinfo``.

The catalog is loaded once and never mutated.  ``reload_catalog`` builds a
complete replacement and swaps the shared reference, so callers holding the
old catalog keep a consistent view.
"""

import logging
import zoneinfo
from datetime import datetime

from .errors import CatalogLoadFailure, UnknownTimezone
from .types import ZoneRule

logger = logging.getLogger(__name__)


def _offset_minutes(seconds: int) -> int:
    # Historical LMT offsets carry seconds; truncate toward zero.
    minutes = abs(seconds) // 60
    return -minutes if seconds < 0 else minutes


class TimezoneCatalog:
    """Read-only set of canonical zone identifiers."""

    def __init__(self, names: frozenset[str]):
        self._names = names
        self._ordered = tuple(sorted(names))

    @classmethod
    def load(cls) -> "TimezoneCatalog":
        """Load the timezone database.

        Raises:
            CatalogLoadFailure: the database is missing, empty or unreadable.
        """
        try:
            names = frozenset(zoneinfo.available_timezones())
            zoneinfo.ZoneInfo("UTC")
        except (zoneinfo.ZoneInfoNotFoundError, OSError, ValueError) as e:
            raise CatalogLoadFailure(f"Timezone database unavailable: {e}") from e

        if not names:
            raise CatalogLoadFailure("Timezone database contains no zones")
        if "UTC" not in names:
            raise CatalogLoadFailure("Timezone database has no UTC zone")

        logger.info("Loaded timezone catalog with %d zones", len(names))
        return cls(names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    def resolve(self, name: str) -> zoneinfo.ZoneInfo:
        """Return the zone for an exact, case-sensitive identifier."""
        if name not in self._names:
            raise UnknownTimezone(name)
        try:
            return zoneinfo.ZoneInfo(name)
        except (zoneinfo.ZoneInfoNotFoundError, ValueError) as e:
            raise UnknownTimezone(name) from e

    def rules_for(self, zone: zoneinfo.ZoneInfo, instant: datetime) -> ZoneRule:
        """Offset, DST flag and abbreviation of *zone* in force at *instant*."""
        if instant.tzinfo is None:
            raise ValueError("instant must be timezone-aware")
        local = instant.astimezone(zone)
        offset = local.utcoffset()
        dst = local.dst()
        return ZoneRule(
            utc_offset_minutes=_offset_minutes(int(offset.total_seconds())),
            is_dst=bool(dst),
            abbreviation=local.tzname() or "",
        )

    def list(self, filter: str | None = None) -> list[str]:
        """Identifiers containing *filter* (case-insensitive), sorted."""
        if not filter:
            return list(self._ordered)
        needle = filter.lower()
        return [name for name in self._ordered if needle in name.lower()]


_catalog: TimezoneCatalog | None = None


def get_catalog() -> TimezoneCatalog:
    """Return the process-wide catalog, loading it on first use."""
    global _catalog
    if _catalog is None:
        _catalog = TimezoneCatalog.load()
    return _catalog


def reload_catalog() -> TimezoneCatalog:
    """Load a fresh catalog and swap it in as the process-wide instance."""
    global _catalog
    fresh = TimezoneCatalog.load()
    _catalog = fresh
    return fresh
