from argparse import ArgumentParser, ArgumentTypeError
from datetime import date
import locale
from pathlib import Path
import re
import sys
from . import fetch
from . import merge
from . import normalize
from .config import ScheduleConfig
from .errors import LineupPrepError

def start_time(value: str) -> tuple[int, int]:
    m = re.fullmatch(r'(\d{1,2}):(\d{2})', value.strip())
    if not m or int(m[1]) > 23 or int(m[2]) > 59:
        raise ArgumentTypeError(f'“{value}” is not a 24-hour HH:MM time')
    return int(m[1]), int(m[2])

def session_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ArgumentTypeError(f'“{value}” is not a YYYY-MM-DD date') from None

def build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog='lineup-prep', description='Turns a festival’s spreadsheet of set times into '
                            + 'the JSON schedule used by the lineup page.')
    commands = parser.add_subparsers(title='commands', dest='command', required=True)

    normalize_parser = commands.add_parser('normalize', help='Rebuild one day’s sets from a CSV export of the '
                                           + 'set-times grid (one column per stage, one row per time slot).')
    normalize_parser.add_argument('csv', help='Path to the day’s CSV file, or an http(s) URL of a CSV export.')
    normalize_parser.add_argument('date', type=session_date, help='The day’s date as YYYY-MM-DD.')
    normalize_parser.add_argument('-o', '--output', type=Path,
                                  help='Where to write the day’s JSON. Defaults to standard output.')
    normalize_parser.add_argument('-c', '--config', type=Path,
                                  help='JSON file with startHour, startMinute, slotMinutes, timezone and '
                                  + 'ignoredHeaders. Options given on the command line win.')
    normalize_parser.add_argument('--start', type=start_time,
                                  help='Local time of the first grid row as HH:MM. Defaults to 13:00.')
    normalize_parser.add_argument('--slot-minutes', type=int, help='Minutes per grid row. Defaults to 15.')
    normalize_parser.add_argument('--timezone', help='IANA timezone of the grid. Defaults to America/New_York.')
    normalize_parser.add_argument('--ignore-header', action='append', default=[], metavar='LABEL',
                                  help='A column label that is not a stage. May be repeated.')
    normalize_parser.add_argument('--day', help='Day label to store. Defaults to the weekday of the date.')
    normalize_parser.add_argument('--refresh', action='store_true',
                                  help='Download the CSV again even if a cached copy exists.')
    normalize_parser.add_argument('--debug', action='store_true',
                                  help='Print detected headers, stages and row times to standard error.')

    merge_parser = commands.add_parser('merge', help='Combine normalized day files into one multi-day schedule. '
                                       + 'Days appear in the order the files are given.')
    merge_parser.add_argument('schedule_files', nargs='+', type=Path, metavar='day_json',
                              help='Normalized day schedules, in display order.')
    merge_parser.add_argument('-o', '--output', type=Path, default=Path(merge.DEFAULT_OUT_FILE),
                              help=f'Where to write the combined schedule. Defaults to {merge.DEFAULT_OUT_FILE}.')
    merge_parser.add_argument('--timezone', default=ScheduleConfig.timezone,
                              help='Zone for day files that don’t record one. Defaults to America/New_York.')

    commands.add_parser('clear-cache', help='Remove downloaded CSV exports.')
    return parser

def ensure_utf8_mode():
    if not re.fullmatch('utf-?8', locale.getpreferredencoding(), re.IGNORECASE):
        print('This utility needs to be run with utf-8 default encoding enabled!', file=sys.stderr)
        print('To enable utf-8 mode please invoke via “python -X utf8 -m lineup_prep ...”', file=sys.stderr)
        sys.exit(1)

def schedule_config(args) -> ScheduleConfig:
    config = ScheduleConfig.from_file(args.config) if args.config else ScheduleConfig()
    start_hour, start_minute = args.start or (None, None)
    return config.with_overrides(start_hour=start_hour, start_minute=start_minute, slot_minutes=args.slot_minutes,
                                 timezone=args.timezone,
                                 ignored_headers=(config.ignored_headers + tuple(args.ignore_header)) or None)

def main(argv: list[str] | None = None):
    args = build_parser().parse_args(argv)
    ensure_utf8_mode()

    try:
        match args.command:
            case 'normalize':
                normalize.normalize(args.csv, args.date, schedule_config(args), args.output, day_label=args.day,
                                    debug=args.debug, refresh=args.refresh)

            case 'merge':
                merge.merge_files(args.schedule_files, args.output, args.timezone)

            case 'clear-cache':
                fetch.clear_cache()

    except LineupPrepError as ex:
        print(f'Error: {ex}', file=sys.stderr)
        sys.exit(1)
