from datetime import date, datetime, timezone
import pytest
from lineup_prep.errors import TimezoneError
from lineup_prep.timezones import (day_name, format_iso, format_local_hhmm, offset_minutes_for, parse_iso,
                                   to_instant)

NEW_YORK = 'America/New_York'

def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)

def test_daylight_time_offset():
    assert to_instant(date(2025, 9, 19), 13, 0, NEW_YORK) == utc(2025, 9, 19, 17, 0)

def test_offset_follows_the_date_across_the_dst_change():
    # US clocks fall back on 2025-11-02
    assert to_instant(date(2025, 11, 1), 13, 0, NEW_YORK) == utc(2025, 11, 1, 17, 0)
    assert to_instant(date(2025, 11, 2), 13, 0, NEW_YORK) == utc(2025, 11, 2, 18, 0)

def test_non_whole_hour_offset():
    assert offset_minutes_for(datetime(2025, 7, 1, 12, 0), 'Asia/Kolkata') == 330

def test_injected_offset_and_hour_rollover():
    assert to_instant(date(2025, 9, 19), 24, 15, NEW_YORK, lambda local, zone: 0) == utc(2025, 9, 20, 0, 15)

# a bare region name is a directory inside the tz database, not a zone
@pytest.mark.parametrize('zone', ['Mars/Olympus_Mons', 'America', ['America/New_York']])
def test_unknown_zone(zone):
    with pytest.raises(TimezoneError, match='Unknown timezone'):
        to_instant(date(2025, 9, 19), 13, 0, zone)

def test_format_and_parse_iso():
    instant = utc(2025, 9, 19, 17, 0)
    assert format_iso(instant) == '2025-09-19T17:00:00.000Z'
    assert parse_iso('2025-09-19T17:00:00.000Z') == instant

@pytest.mark.parametrize('zone', [NEW_YORK, 'Europe/Berlin', 'Australia/Sydney'])
def test_local_time_round_trip(zone):
    assert format_local_hhmm(to_instant(date(2025, 10, 5), 13, 45, zone), zone) == '13:45'

def test_day_name():
    assert day_name(date(2025, 9, 19)) == 'Friday'
    assert day_name(date(2025, 9, 21)) == 'Sunday'
