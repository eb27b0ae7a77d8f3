"""Time engine: snapshots, elapsed-time offsets and timezone conversion.

Local-time resolution policy
----------------------------
A naive wall-clock time is placed in a zone with two explicit rules:

* ``GAP_POLICY = "shift_forward"`` - a time skipped by a forward transition
  (e.g. 02:30 on a spring-forward night) resolves to the transition instant
  itself, the first valid wall-clock time after the gap.
* ``OVERLAP_POLICY = "earlier"`` - a time repeated by a backward transition
  resolves to its first occurrence, i.e. the pre-transition offset.

Both rules are implemented here rather than inherited from ``zoneinfo``'s
``fold`` handling, which maps gap times by the pre-transition offset.
"""

import logging
import math
import zoneinfo
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from .catalog import TimezoneCatalog
from .errors import InvalidOffset, ParseError
from .formats import preferred_format
from .parser import ParsedTemporal
from .types import (
    TimeFormatInfo,
    TimeSnapshot,
    TimezoneInfo,
    format_utc_offset,
)

logger = logging.getLogger(__name__)

GAP_POLICY = "shift_forward"
OVERLAP_POLICY = "earlier"

_FORMAT_12H = "%I:%M:%S %p"
_FORMAT_24H = "%H:%M:%S"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _exists(candidate: datetime, naive: datetime, zone: zoneinfo.ZoneInfo) -> bool:
    return candidate.astimezone(zone).replace(tzinfo=None) == naive


def _transition_after(lo: datetime, hi: datetime, zone: zoneinfo.ZoneInfo) -> datetime:
    """First instant in ``(lo, hi]`` carrying the offset in force at *hi*.

    Transitions in the tz database fall on whole seconds, so a bisection over
    POSIX seconds finds the exact instant.
    """
    target = hi.astimezone(zone).utcoffset()
    lo_s, hi_s = math.floor(lo.timestamp()), math.ceil(hi.timestamp())
    while hi_s - lo_s > 1:
        mid = (lo_s + hi_s) // 2
        if datetime.fromtimestamp(mid, tz=zone).utcoffset() == target:
            hi_s = mid
        else:
            lo_s = mid
    return datetime.fromtimestamp(hi_s, tz=timezone.utc)


def resolve_local(naive: datetime, zone: zoneinfo.ZoneInfo) -> datetime:
    """Place a naive wall-clock time in *zone* and return the UTC instant."""
    before = naive.replace(tzinfo=zone, fold=0).utcoffset()
    after = naive.replace(tzinfo=zone, fold=1).utcoffset()

    if before == after:
        return (naive - before).replace(tzinfo=timezone.utc)

    candidates = sorted(
        {
            (naive - before).replace(tzinfo=timezone.utc),
            (naive - after).replace(tzinfo=timezone.utc),
        }
    )
    valid = [c for c in candidates if _exists(c, naive, zone)]

    if len(valid) == 2:
        # overlap: first occurrence
        return valid[0]
    if len(valid) == 1:
        return valid[0]

    # gap: the wall clock jumps past naive at the transition
    return _transition_after(candidates[0], candidates[1], zone)


def _rfc3339(local: datetime) -> str:
    stamp = local.isoformat()
    if local.utcoffset() == timedelta(0):
        stamp = stamp[:-6] + "Z"
    return stamp


class TimeEngine:
    """Resolves parsed input and zone names into ``TimeSnapshot`` values.

    Zone names are resolved through the catalog on every call, so unknown
    names raise ``UnknownTimezone`` before any computation.
    """

    def __init__(
        self,
        catalog: TimezoneCatalog,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.catalog = catalog
        self._clock = clock

    def now(self) -> datetime:
        return self._clock().astimezone(timezone.utc)

    def resolve_instant(
        self, parsed: ParsedTemporal, zone: zoneinfo.ZoneInfo
    ) -> datetime:
        if parsed.is_absolute:
            return parsed.instant
        try:
            return resolve_local(parsed.local, zone)
        except OverflowError as e:
            raise ParseError(parsed.text) from e

    def snapshot(self, instant: datetime, zone: zoneinfo.ZoneInfo) -> TimeSnapshot:
        """Describe *instant* in *zone*; offset and DST come from the zone rules."""
        rule = self.catalog.rules_for(zone, instant)
        local = instant.astimezone(zone)
        return TimeSnapshot(
            instant=instant.astimezone(timezone.utc),
            timezone=zone.key,
            utc_offset_minutes=rule.utc_offset_minutes,
            is_dst=rule.is_dst,
            format_12h=local.strftime(_FORMAT_12H),
            format_24h=local.strftime(_FORMAT_24H),
            timestamp=_rfc3339(local),
        )

    def current(self, tz_name: str) -> TimeSnapshot:
        zone = self.catalog.resolve(tz_name)
        return self.snapshot(self.now(), zone)

    def snapshot_at(self, parsed: ParsedTemporal, tz_name: str) -> TimeSnapshot:
        zone = self.catalog.resolve(tz_name)
        instant = self.resolve_instant(parsed, zone)
        try:
            return self.snapshot(instant, zone)
        except OverflowError as e:
            raise ParseError(parsed.text) from e

    def offset(self, base: ParsedTemporal, hours: float, tz_name: str) -> TimeSnapshot:
        """Add *hours* of elapsed time to *base*.

        The addition happens on the UTC instant, so crossing a DST transition
        changes the displayed wall-clock offset without gaining or losing time.
        """
        zone = self.catalog.resolve(tz_name)
        if not math.isfinite(hours):
            raise InvalidOffset(hours)

        instant = self.resolve_instant(base, zone)
        try:
            shifted = instant + timedelta(hours=hours)
            return self.snapshot(shifted, zone)
        except OverflowError as e:
            raise InvalidOffset(hours) from e

    def convert(
        self, parsed: ParsedTemporal, from_tz: str, to_tz: str
    ) -> TimeSnapshot:
        source = self.catalog.resolve(from_tz)
        target = self.catalog.resolve(to_tz)
        instant = self.resolve_instant(parsed, source)
        logger.debug("Converting %s from %s to %s", instant, from_tz, to_tz)
        try:
            return self.snapshot(instant, target)
        except OverflowError as e:
            raise ParseError(parsed.text) from e

    def timezone_info(self, tz_name: str) -> TimezoneInfo:
        """Current offset and DST state of the (explicitly given) system zone."""
        zone = self.catalog.resolve(tz_name)
        instant = self.now()
        rule = self.catalog.rules_for(zone, instant)
        local = instant.astimezone(zone)
        return TimezoneInfo(
            name=zone.key,
            current_time=f"{local:%Y-%m-%d %H:%M:%S} {rule.abbreviation}",
            utc_offset=format_utc_offset(rule.utc_offset_minutes),
            is_dst=rule.is_dst,
        )

    def time_format(self, tz_name: str, hour_format: str = "auto") -> TimeFormatInfo:
        """12/24-hour preference for *tz_name*, or the forced *hour_format*."""
        snap = self.current(tz_name)
        if hour_format == "auto":
            is_12_hour = preferred_format(snap.timezone).is_12_hour
        else:
            is_12_hour = hour_format == "12h"
        return TimeFormatInfo(
            timezone=snap.timezone,
            detected_format="12-hour" if is_12_hour else "24-hour",
            is_12_hour=is_12_hour,
            current_time_12h=snap.format_12h,
            current_time_24h=snap.format_24h,
        )
