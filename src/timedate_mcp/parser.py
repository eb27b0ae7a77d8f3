"""Parsing of date/time text into absolute or naive values.

Accepted forms, tried in order:

1. ``now`` (case-insensitive)
2. RFC 3339 with an explicit ``Z`` or ``±HH:MM`` offset (``±HH:MM:SS`` is also
   read, as written for historical local-mean-time offsets).  A leap second
   ``:60`` is clamped to ``:59``, since ``datetime`` cannot represent it.
3. ``YYYY-MM-DD HH:MM:SS`` or ``YYYY-MM-DD HH:MM`` (``T`` also accepted)
4. ``YYYY-MM-DD``

Forms 3 and 4 carry no offset.  They stay naive until the engine places them
in a zone.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from .errors import ParseError

_RFC3339 = re.compile(
    r"(?P<date>\d{4}-\d{2}-\d{2})[Tt ]"
    r"(?P<time>\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<frac>\d+))?"
    r"(?P<offset>[Zz]|[+-]\d{2}:\d{2}(?::\d{2})?)"
)
_LOCAL_DATETIME = re.compile(
    r"(?P<date>\d{4}-\d{2}-\d{2})[T ]"
    r"(?P<time>\d{2}:\d{2}(?::\d{2})?)"
)
_LOCAL_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


@dataclass(frozen=True)
class ParsedTemporal:
    """Either an absolute ``instant`` (UTC) or a naive ``local`` datetime."""

    text: str
    instant: datetime | None = None
    local: datetime | None = None

    @property
    def is_absolute(self) -> bool:
        return self.instant is not None


def _parse_offset(raw: str) -> timezone:
    if raw in ("Z", "z"):
        return timezone.utc
    sign = -1 if raw[0] == "-" else 1
    hours, minutes = int(raw[1:3]), int(raw[4:6])
    seconds = int(raw[7:9]) if len(raw) > 6 else 0
    if hours > 23 or minutes > 59 or seconds > 59:
        raise ValueError(f"offset out of range: {raw}")
    return timezone(sign * timedelta(hours=hours, minutes=minutes, seconds=seconds))


def _parse_rfc3339(match: re.Match) -> datetime:
    clock = match["time"]
    if clock.endswith(":60"):
        clock = clock[:-2] + "59"
    value = datetime.strptime(f"{match['date']} {clock}", "%Y-%m-%d %H:%M:%S")
    frac = match["frac"]
    if frac:
        value = value.replace(microsecond=int(frac[:6].ljust(6, "0")))
    value = value.replace(tzinfo=_parse_offset(match["offset"]))
    return value.astimezone(timezone.utc)


def parse_temporal(text: str, reference_now: datetime) -> ParsedTemporal:
    """Parse *text* against *reference_now* (an aware datetime).

    Raises:
        ParseError: *text* matches none of the accepted forms, or one of its
            fields is out of range.
    """
    if reference_now.tzinfo is None:
        raise ValueError("reference_now must be timezone-aware")

    candidate = text.strip()

    if candidate.lower() == "now":
        return ParsedTemporal(text, instant=reference_now.astimezone(timezone.utc))

    try:
        if match := _RFC3339.fullmatch(candidate):
            return ParsedTemporal(text, instant=_parse_rfc3339(match))

        if match := _LOCAL_DATETIME.fullmatch(candidate):
            fmt = "%H:%M:%S" if match["time"].count(":") == 2 else "%H:%M"
            local = datetime.strptime(
                f"{match['date']} {match['time']}", f"%Y-%m-%d {fmt}"
            )
            return ParsedTemporal(text, local=local)

        if _LOCAL_DATE.fullmatch(candidate):
            return ParsedTemporal(text, local=datetime.strptime(candidate, "%Y-%m-%d"))
    except (ValueError, OverflowError) as e:
        raise ParseError(text) from e

    raise ParseError(text)
