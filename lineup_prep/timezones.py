from datetime import date, datetime, time, timedelta, timezone
from typing import Callable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from .errors import TimezoneError

# (naive local wall-clock time, IANA zone name) -> minutes east of UTC observed at that time
OffsetLookup = Callable[[datetime, str], int]

def get_zone(zone: str) -> ZoneInfo:
    try:
        return ZoneInfo(zone)
    except (ZoneInfoNotFoundError, ValueError, TypeError, OSError) as ex:
        raise TimezoneError(f'Unknown timezone “{zone}”! Use an IANA name such as America/New_York.') from ex

def offset_minutes_for(local: datetime, zone: str) -> int:
    offset = local.replace(tzinfo=get_zone(zone)).utcoffset()
    if offset is None:
        raise TimezoneError(f'Could not determine the UTC offset of {zone} at {local.isoformat()}')
    return int(offset.total_seconds()) // 60

def to_instant(day: date, hour: int, minute: int, zone: str,
               offset_lookup: OffsetLookup = offset_minutes_for) -> datetime:
    """Converts a wall-clock time on the given day to an aware UTC datetime.

    The offset is looked up for that exact local time, so days on either side of a daylight-saving change
    each get their own offset. Hours of 24 or more roll over into the following days.
    """
    local = datetime.combine(day, time()) + timedelta(hours=hour, minutes=minute)
    utc = local - timedelta(minutes=offset_lookup(local, zone))
    return utc.replace(tzinfo=timezone.utc)

def format_iso(instant: datetime) -> str:
    utc = instant.astimezone(timezone.utc)
    return utc.strftime('%Y-%m-%dT%H:%M:%S.') + f'{utc.microsecond // 1000:03d}Z'

def parse_iso(text: str) -> datetime:
    return datetime.fromisoformat(text)

def format_local_hhmm(instant: datetime, zone: str) -> str:
    return instant.astimezone(get_zone(zone)).strftime('%H:%M')

DAY_NAMES = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')

def day_name(day: date) -> str:
    # not strftime('%A'), which follows the process locale
    return DAY_NAMES[day.weekday()]
