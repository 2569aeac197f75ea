from datetime import datetime, timezone

import pytest

from controlpanel.utils.timezones import format_utc_offset, is_region_timezone, timezone_label, timezone_options

WINTER = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "minutes, expected",
    [
        (0, ""),
        (60, "+1"),
        (330, "+5:30"),
        (-300, "-5"),
        (-570, "-9:30"),
        (765, "+12:45"),
    ],
)
def test_format_utc_offset(minutes, expected):
    assert format_utc_offset(minutes) == expected


def test_label_for_utc_itself_is_bare():
    assert timezone_label("UTC", 0, "UTC") == "UTC"


def test_label_includes_abbreviation_and_zone():
    assert timezone_label("America/New_York", -300, "EST") == "UTC-5 (EST) – America/New_York"


def test_label_skips_utc_abbreviation_for_other_zones():
    assert timezone_label("Etc/UTC", 0, "UTC") == "UTC – Etc/UTC"


def test_options_sorted_by_offset_then_zone_id():
    options = timezone_options(
        now=WINTER,
        zone_ids=["Asia/Kolkata", "UTC", "America/New_York", "Europe/London"],
    )

    assert [option["value"] for option in options] == [
        "America/New_York",
        "Europe/London",
        "UTC",
        "Asia/Kolkata",
    ]
    assert options[0]["label"] == "UTC-5 (EST) – America/New_York"
    assert options[1]["label"] == "UTC (GMT) – Europe/London"
    assert options[2]["label"] == "UTC"
    assert options[3]["label"] == "UTC+5:30 (IST) – Asia/Kolkata"


def test_options_cover_every_zone():
    options = timezone_options(now=WINTER)
    values = [option["value"] for option in options]

    assert "UTC" in values
    assert "Pacific/Auckland" in values
    assert len(values) == len(set(values))


def test_options_leave_out_aliases_and_non_region_zones():
    values = {option["value"] for option in timezone_options(now=WINTER)}

    for zone_id in ("Factory", "US/Eastern", "GB", "Zulu", "EST5EDT", "Etc/GMT+5", "Etc/UTC"):
        assert zone_id not in values


def test_is_region_timezone():
    assert is_region_timezone("UTC")
    assert is_region_timezone("America/Argentina/Buenos_Aires")
    assert not is_region_timezone("Factory")
    assert not is_region_timezone("Mars/Olympus_Mons")
