from datetime import date
import json
from pathlib import Path
from .config import ScheduleConfig
from .errors import InputError
from .normalize import write_json_file
from .timezones import day_name, format_local_hhmm, parse_iso

DEFAULT_OUT_FILE = 'all-days.schedule.json'
SET_KEYS = ('stage', 'artist', 'startISO', 'endISO')

# helper functions

def load_schedule(path: Path) -> dict:
    try:
        document = json.loads(Path(path).read_text(encoding='utf-8'))
    except FileNotFoundError as ex:
        raise InputError(f'Schedule file {path} does not exist!') from ex
    except (OSError, UnicodeDecodeError) as ex:
        raise InputError(f'Could not read schedule file {path}: {ex}') from ex
    except json.JSONDecodeError as ex:
        raise InputError(f'Schedule file {path} is not valid JSON: {ex}') from ex

    check_schedule(document, path)
    return document

def check_schedule(document, path) -> None:
    if not isinstance(document, dict) or not isinstance(document.get('schedule'), list):
        raise InputError(f'{path} is not a normalized day schedule (missing “schedule” list)')
    if not isinstance(document.get('meta', {}), dict):
        raise InputError(f'{path} has a malformed “meta” section')
    zone = document.get('meta', {}).get('timezone')
    if zone is not None and not isinstance(zone, str):
        raise InputError(f'{path}: meta.timezone must be a zone name, got {zone!r}')
    for i, s in enumerate(document['schedule']):
        if not isinstance(s, dict) or any(not isinstance(s.get(k), str) for k in SET_KEYS):
            raise InputError(f'{path}: set #{i + 1} needs string fields {", ".join(SET_KEYS)}')

def display_day(document: dict) -> str:
    meta = document.get('meta', {})
    if meta.get('date'):
        try:
            return day_name(date.fromisoformat(meta['date']))
        except (TypeError, ValueError) as ex:
            raise InputError(f'Bad date in schedule meta: {meta["date"]!r}') from ex
    return document.get('day')

def reshape_day(document: dict, default_timezone: str = ScheduleConfig.timezone) -> dict:
    """Groups a normalized day's sets by stage, with start and end as local HH:MM times."""
    check_schedule(document, 'schedule document')
    zone = document.get('meta', {}).get('timezone') or default_timezone
    stages: dict[str, list[dict]] = {}

    for s in document['schedule']:
        try:
            start, end = parse_iso(s['startISO']), parse_iso(s['endISO'])
        except ValueError as ex:
            raise InputError(f'Bad timestamp in set “{s["artist"]}” on {s["stage"]}: {ex}') from ex
        if start.tzinfo is None or end.tzinfo is None:
            raise InputError(f'Timestamps of set “{s["artist"]}” on {s["stage"]} have no UTC offset')
        stages.setdefault(s['stage'], []).append({
            'artist': s['artist'],
            'start': format_local_hhmm(start, zone),
            'end': format_local_hhmm(end, zone),
        })

    # string order matches time order as long as a stage doesn't play past midnight
    for sets in stages.values():
        sets.sort(key=lambda s: s['start'])

    return {'day': display_day(document), 'stages': stages}

def merge_schedules(documents: list[dict], default_timezone: str = ScheduleConfig.timezone) -> dict:
    # days stay in the order given; callers decide what that is
    return {'schedule': [reshape_day(d, default_timezone) for d in documents]}

# command processing

def merge_files(schedule_files: list[Path], out_file: Path = Path(DEFAULT_OUT_FILE),
                default_timezone: str = ScheduleConfig.timezone) -> dict:
    documents = []
    for f in schedule_files:
        documents.append(load_schedule(f))
    merged = merge_schedules(documents, default_timezone)

    write_json_file(out_file, merged)
    print(f'Wrote {out_file} ({len(documents)} days)')

    return merged
