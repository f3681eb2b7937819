from datetime import date
import json
from pathlib import Path, PurePosixPath
import sys
from urllib.parse import urlparse
from .config import ScheduleConfig
from .csv_grid import parse_csv, read_grid
from .errors import InputError, OutputError
from .fetch import fetch_csv, is_url
from .reconstruct import Reconstruction, reconstruct_schedule
from .timezones import OffsetLookup, day_name, offset_minutes_for

# helper functions

def source_name(source: str) -> str:
    if is_url(source):
        return PurePosixPath(urlparse(source).path).name or source
    return Path(source).name

def load_csv_rows(source: str, refresh: bool = False) -> list[list[str]]:
    if not is_url(source):
        return read_grid(Path(source))

    rows = parse_csv(fetch_csv(source, refresh))
    if not rows:
        raise InputError(f'CSV {source} appears empty')
    return rows

def build_document(reconstruction: Reconstruction, source: str, day: date, config: ScheduleConfig,
                   day_label: str | None = None) -> dict:
    return {
        'day': day_label or day_name(day),
        'meta': {
            'source': source_name(source),
            'date': day.isoformat(),
            'startLocal': config.start_local,
            'slotMinutes': config.slot_minutes,
            'timezone': config.timezone,
            'headers': reconstruction.headers,
            'stages': reconstruction.stage_names,
            'rowCount': len(reconstruction.row_times),
            'setCount': len(reconstruction.sets),
        },
        'schedule': [s.to_json() for s in reconstruction.sets],
    }

def to_json_text(document: dict) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False) + '\n'

def write_json_file(out_file: Path, document: dict):
    try:
        Path(out_file).write_text(to_json_text(document), encoding='utf-8')
    except OSError as ex:
        raise OutputError(f'Could not write {out_file}: {ex.strerror}') from ex

def print_diagnostics(reconstruction: Reconstruction):
    print(f'[normalize] headers: {json.dumps(reconstruction.headers, ensure_ascii=False)}', file=sys.stderr)
    print(f'[normalize] stages: {json.dumps(reconstruction.stage_names, ensure_ascii=False)}', file=sys.stderr)
    print(f'[normalize] rows: {len(reconstruction.row_times)}, sets: {len(reconstruction.sets)}', file=sys.stderr)
    if reconstruction.row_times:
        first_times = ', '.join(t.local for t in reconstruction.row_times[:5])
        print(f'[normalize] first 5 times: {first_times}', file=sys.stderr)

# command processing

def normalize(source: str, day: date, config: ScheduleConfig, out_file: Path | None = None,
              day_label: str | None = None, debug: bool = False, refresh: bool = False,
              offset_lookup: OffsetLookup = offset_minutes_for) -> dict:
    rows = load_csv_rows(source, refresh)
    reconstruction = reconstruct_schedule(rows, day, config, offset_lookup)
    document = build_document(reconstruction, source, day, config, day_label)

    if debug:
        print_diagnostics(reconstruction)

    # nothing is written until the whole document exists, so a failed run leaves no partial file
    if out_file is None:
        sys.stdout.write(to_json_text(document))
    else:
        write_json_file(out_file, document)
        print(f'Wrote {out_file}')

    return document
