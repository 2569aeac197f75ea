"""Time zone option list for the general settings form."""

from collections.abc import Iterable
from datetime import datetime, timezone
from functools import lru_cache
from zoneinfo import ZoneInfo, available_timezones

# Zones outside these regions are legacy aliases (US/Eastern, GB, Zulu),
# POSIX-style rules (EST5EDT) or Etc/*
REGION_PREFIXES = (
    "Africa/",
    "America/",
    "Antarctica/",
    "Arctic/",
    "Asia/",
    "Atlantic/",
    "Australia/",
    "Europe/",
    "Indian/",
    "Pacific/",
)


@lru_cache
def region_timezones() -> frozenset[str]:
    """Region time zone ids plus "UTC"."""
    return frozenset(
        zone_id for zone_id in available_timezones() if zone_id == "UTC" or zone_id.startswith(REGION_PREFIXES)
    )


def is_region_timezone(zone_id: str) -> bool:
    return zone_id in region_timezones()


def format_utc_offset(offset_minutes: int) -> str:
    """Format an offset as "+H" or "+H:MM" ("" for zero)."""
    if not offset_minutes:
        return ""
    sign = "+" if offset_minutes > 0 else "-"
    hours, minutes = divmod(abs(offset_minutes), 60)
    formatted = f"{sign}{hours}"
    if minutes:
        formatted += f":{minutes:02d}"
    return formatted


def timezone_label(zone_id: str, offset_minutes: int, abbr: str) -> str:
    """Build "UTC±H[:MM] (abbr) – zone_id".

    The abbreviation is left out when it is "UTC", and the zone id is left
    out for the UTC zone itself.
    """
    label = "UTC" + format_utc_offset(offset_minutes)
    if abbr != "UTC":
        label += f" ({abbr})"
    if zone_id != "UTC":
        label += f" – {zone_id}"
    return label


def timezone_options(
    now: datetime | None = None,
    zone_ids: Iterable[str] | None = None,
) -> list[dict[str, str]]:
    """All time zones as select options, sorted by current UTC offset then id.

    Args:
        now: Moment at which offsets and abbreviations are evaluated (defaults to now)
        zone_ids: Zones to include (defaults to the region zones plus UTC)
    """
    now = now or datetime.now(timezone.utc)
    entries = []

    for zone_id in zone_ids if zone_ids is not None else region_timezones():
        local = now.astimezone(ZoneInfo(zone_id))
        offset = round(local.utcoffset().total_seconds() / 60)
        abbr = local.tzname() or ""
        entries.append((offset, zone_id, {"value": zone_id, "label": timezone_label(zone_id, offset, abbr)}))

    entries.sort(key=lambda entry: (entry[0], entry[1]))
    return [option for _, _, option in entries]
