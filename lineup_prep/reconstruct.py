from dataclasses import dataclass
from datetime import date, datetime
from .config import ScheduleConfig
from .csv_grid import is_blank_row, rectangularize
from .errors import InputError
from .timezones import OffsetLookup, format_iso, offset_minutes_for, to_instant

# a set still playing when the grid runs out ends at this local time
SENTINEL_END = (23, 59)

@dataclass(frozen=True)
class StageColumn:
    name: str
    index: int

@dataclass(frozen=True)
class RowTime:
    row: int
    hour: int
    minute: int
    instant: datetime

    @property
    def iso(self) -> str:
        return format_iso(self.instant)

    @property
    def local(self) -> str:
        return f'{self.hour}:{self.minute:02d}'

@dataclass(frozen=True)
class ArtistSet:
    stage: str
    artist: str
    start: datetime
    end: datetime

    def to_json(self) -> dict:
        return {'stage': self.stage, 'artist': self.artist,
                'startISO': format_iso(self.start), 'endISO': format_iso(self.end)}

# states of the per-stage scan

@dataclass(frozen=True)
class NoOpenBlock:
    pass

@dataclass(frozen=True)
class OpenBlock:
    artist: str
    start_row: int

@dataclass(frozen=True)
class Reconstruction:
    headers: list[str]
    stages: list[StageColumn]
    row_times: list[RowTime]
    sets: list[ArtistSet]

    @property
    def stage_names(self) -> list[str]:
        return [s.name for s in self.stages]

# helper functions

def find_header(rows: list[list[str]]) -> int:
    for idx, row in enumerate(rows):
        if not is_blank_row(row):
            return idx
    raise InputError('No header row found')

def detect_stage_columns(headers: list[str], ignored_headers=()) -> list[StageColumn]:
    stages = [StageColumn(name, idx) for idx, name in enumerate(headers) if name and name not in ignored_headers]
    if stages:
        return stages

    # no usable labels at all, so every column that isn't explicitly ignored is a stage
    return [StageColumn(name or f'Stage {idx + 1}', idx)
            for idx, name in enumerate(headers) if name not in ignored_headers]

def build_row_times(row_count: int, day: date, config: ScheduleConfig,
                    offset_lookup: OffsetLookup = offset_minutes_for) -> list[RowTime]:
    row_times = []
    for r in range(row_count):
        total_minutes = config.start_hour * 60 + config.start_minute + r * config.slot_minutes
        hour, minute = divmod(total_minutes, 60)
        instant = to_instant(day, hour, minute, config.timezone, offset_lookup)
        row_times.append(RowTime(r, hour, minute, instant))
    return row_times

def scan_stage(cells: list[str], stage: str, row_times: list[RowTime], sentinel_end: datetime) -> list[ArtistSet]:
    """Turns one stage column into sets, one per run of identical non-empty cells."""
    sets = []
    state = NoOpenBlock()

    for r, cell in enumerate(cells):
        match state, cell:
            case NoOpenBlock(), '':
                pass
            case NoOpenBlock(), artist:
                state = OpenBlock(artist, r)
            case OpenBlock(artist=current), artist if artist == current:
                pass
            case OpenBlock(artist=current, start_row=start_row), artist:
                sets.append(ArtistSet(stage, current, row_times[start_row].instant, row_times[r].instant))
                state = OpenBlock(artist, r) if artist else NoOpenBlock()

    if isinstance(state, OpenBlock):
        sets.append(ArtistSet(stage, state.artist, row_times[state.start_row].instant, sentinel_end))

    return sets

# reconstruction

def reconstruct_schedule(csv_rows: list[list[str]], day: date, config: ScheduleConfig = ScheduleConfig(),
                         offset_lookup: OffsetLookup = offset_minutes_for) -> Reconstruction:
    if not csv_rows:
        raise InputError('CSV appears empty')

    header_idx = find_header(csv_rows)
    headers = [h.strip() for h in csv_rows[header_idx]]
    width = max(len(r) for r in csv_rows)
    rows = rectangularize(csv_rows[header_idx + 1:], width)

    stages = detect_stage_columns(headers, config.ignored_headers)
    # blank rows are kept on purpose: each one still advances the clock by a slot
    row_times = build_row_times(len(rows), day, config, offset_lookup)
    sentinel_end = to_instant(day, *SENTINEL_END, config.timezone, offset_lookup)

    sets = []
    for stage in stages:
        sets.extend(scan_stage([row[stage.index] for row in rows], stage.name, row_times, sentinel_end))

    # sorted() is stable, so sets starting together keep stage order
    sets = sorted(sets, key=lambda s: s.start)

    return Reconstruction(headers, stages, row_times, sets)
