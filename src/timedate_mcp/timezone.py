"""Host timezone detection for the server layer."""

import os
import time
from pathlib import Path

from .catalog import TimezoneCatalog

# Abbreviation → IANA timezone mapping (US/Europe-focused)
_TZ_ABBREV_MAP: dict[str, str] = {
    "UTC": "UTC",
    "GMT": "Europe/London",
    "BST": "Europe/London",
    "CET": "Europe/Paris",
    "CEST": "Europe/Paris",
    "EST": "America/New_York",
    "EDT": "America/New_York",
    "CST": "America/Chicago",
    "CDT": "America/Chicago",
    "MST": "America/Denver",
    "MDT": "America/Denver",
    "PST": "America/Los_Angeles",
    "PDT": "America/Los_Angeles",
    "JST": "Asia/Tokyo",
}

_LOCALTIME = Path("/etc/localtime")
_FALLBACK_TZ = "UTC"


def _from_localtime_link(path: Path) -> str | None:
    """Zone name from a ``.../zoneinfo/<Area>/<City>`` symlink target."""
    try:
        target = os.readlink(path)
    except OSError:
        return None
    _, sep, name = target.rpartition("zoneinfo/")
    return name if sep else None


def detect_system_timezone(catalog: TimezoneCatalog) -> str:
    """Best-effort name of the host timezone, validated against *catalog*.

    Tries ``$TZ``, the ``/etc/localtime`` symlink, then ``time.tzname``;
    falls back to UTC.
    """
    candidates = [
        os.environ.get("TZ", "").lstrip(":"),
        _from_localtime_link(_LOCALTIME),
    ]
    if time.tzname:
        candidates.append(_TZ_ABBREV_MAP.get(time.tzname[time.daylight]))

    for name in candidates:
        if name and name in catalog:
            return name
    return _FALLBACK_TZ
