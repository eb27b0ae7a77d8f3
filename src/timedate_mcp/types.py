"""Data models for time snapshots and tool responses."""

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel


def format_utc_offset(minutes: int) -> str:
    """Render an offset in minutes as ``±HHMM``."""
    sign = "-" if minutes < 0 else "+"
    hours, mins = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}{mins:02d}"


@dataclass(frozen=True)
class ZoneRule:
    """Offset and DST state of a zone at one instant."""

    utc_offset_minutes: int
    is_dst: bool
    abbreviation: str


@dataclass(frozen=True)
class TimeSnapshot:
    """An instant as displayed in a specific timezone.

    Built only by ``TimeEngine.snapshot``: the offset and DST fields come from
    the zone rule in force at ``instant``, never from the caller.
    """

    instant: datetime
    timezone: str
    utc_offset_minutes: int
    is_dst: bool
    format_12h: str
    format_24h: str
    timestamp: str

    @property
    def utc_offset(self) -> str:
        return format_utc_offset(self.utc_offset_minutes)

    def to_info(self) -> "TimeInfo":
        return TimeInfo(
            timestamp=self.timestamp,
            timezone=self.timezone,
            utc_offset=self.utc_offset,
            is_dst=self.is_dst,
            format_12h=self.format_12h,
            format_24h=self.format_24h,
        )


@dataclass(frozen=True)
class FormatPreference:
    is_12_hour: bool


class TimeInfo(BaseModel):
    """Serialized time snapshot."""

    timestamp: str
    timezone: str
    utc_offset: str
    is_dst: bool
    format_12h: str
    format_24h: str


class TimezoneInfo(BaseModel):
    """Summary of the system timezone."""

    name: str
    current_time: str
    utc_offset: str
    is_dst: bool


class TimeFormatInfo(BaseModel):
    """12/24-hour preference with the current time in both formats."""

    timezone: str
    detected_format: str
    is_12_hour: bool
    current_time_12h: str
    current_time_24h: str


class TimezoneList(BaseModel):
    """Ordered timezone identifiers matching a filter."""

    filter: str | None = None
    count: int
    timezones: list[str] = []
