"""12-hour / 24-hour clock preference by timezone territory.

A static lookup, independent of the host locale: zone -> ISO 3166 territory,
then territory -> clock convention.  Zones without a known territory use the
24-hour clock.
"""

from .types import FormatPreference

# Territories where the 12-hour clock is the everyday convention
_TWELVE_HOUR_TERRITORIES = frozenset(
    {
        "AU", "BD", "CA", "CO", "EG", "IN", "JO", "KR", "MY", "NZ",
        "PH", "PK", "SA", "SV", "HN", "NI", "TW", "US",
    }
)

# Exact zone -> territory
_ZONE_TERRITORY: dict[str, str] = {
    # United States
    "America/New_York": "US",
    "America/Chicago": "US",
    "America/Denver": "US",
    "America/Phoenix": "US",
    "America/Los_Angeles": "US",
    "America/Anchorage": "US",
    "America/Adak": "US",
    "America/Boise": "US",
    "America/Detroit": "US",
    "America/Juneau": "US",
    "America/Menominee": "US",
    "America/Metlakatla": "US",
    "America/Nome": "US",
    "America/Sitka": "US",
    "America/Yakutat": "US",
    "America/Puerto_Rico": "US",
    "Pacific/Honolulu": "US",
    "Pacific/Guam": "US",
    "EST5EDT": "US",
    "CST6CDT": "US",
    "MST7MDT": "US",
    "PST8PDT": "US",
    "Navajo": "US",
    # Canada (English-speaking provinces)
    "America/Toronto": "CA",
    "America/Vancouver": "CA",
    "America/Edmonton": "CA",
    "America/Winnipeg": "CA",
    "America/Regina": "CA",
    "America/Halifax": "CA",
    "America/St_Johns": "CA",
    "America/Moncton": "CA",
    "America/Whitehorse": "CA",
    "America/Yellowknife": "CA",
    # Oceania
    "Pacific/Auckland": "NZ",
    "Pacific/Chatham": "NZ",
    "NZ": "NZ",
    "NZ-CHAT": "NZ",
    # Asia / Middle East / Africa
    "Asia/Kolkata": "IN",
    "Asia/Calcutta": "IN",
    "Asia/Karachi": "PK",
    "Asia/Dhaka": "BD",
    "Asia/Dacca": "BD",
    "Asia/Manila": "PH",
    "Asia/Kuala_Lumpur": "MY",
    "Asia/Kuching": "MY",
    "Asia/Seoul": "KR",
    "ROK": "KR",
    "Asia/Taipei": "TW",
    "ROC": "TW",
    "Asia/Riyadh": "SA",
    "Asia/Amman": "JO",
    "Africa/Cairo": "EG",
    "Egypt": "EG",
    # Latin America
    "America/Bogota": "CO",
    "America/El_Salvador": "SV",
    "America/Tegucigalpa": "HN",
    "America/Managua": "NI",
    # Europe (24-hour, listed so the territory is known)
    "Europe/London": "GB",
    "Europe/Dublin": "IE",
    "Europe/Paris": "FR",
    "Europe/Berlin": "DE",
    "Europe/Madrid": "ES",
    "Europe/Rome": "IT",
    "Asia/Tokyo": "JP",
    "Asia/Shanghai": "CN",
}

# Zone prefix -> territory, checked after the exact table
_PREFIX_TERRITORY: tuple[tuple[str, str], ...] = (
    ("America/Indiana/", "US"),
    ("America/Kentucky/", "US"),
    ("America/North_Dakota/", "US"),
    ("US/", "US"),
    ("Australia/", "AU"),
    ("Canada/", "CA"),
)


def territory_for(tz_name: str) -> str | None:
    """ISO 3166 territory associated with *tz_name*, if known."""
    if tz_name in _ZONE_TERRITORY:
        return _ZONE_TERRITORY[tz_name]
    for prefix, territory in _PREFIX_TERRITORY:
        if tz_name.startswith(prefix):
            return territory
    return None


def preferred_format(tz_name: str) -> FormatPreference:
    """Clock convention for *tz_name*; 24-hour when the territory is unknown."""
    return FormatPreference(is_12_hour=territory_for(tz_name) in _TWELVE_HOUR_TERRITORIES)
