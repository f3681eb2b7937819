from dataclasses import dataclass, field, replace
import json
from pathlib import Path
from .errors import ConfigError

# keys accepted in a JSON configuration file, mapped to ScheduleConfig fields
CONFIG_KEYS = {
    'startHour': 'start_hour',
    'startMinute': 'start_minute',
    'slotMinutes': 'slot_minutes',
    'timezone': 'timezone',
    'ignoredHeaders': 'ignored_headers',
}

@dataclass(frozen=True)
class ScheduleConfig:
    """Layout of a day's set-times grid: when the first row starts, how long each row lasts, which zone
    the wall-clock times are in and which header labels are not stages."""
    start_hour: int = 13
    start_minute: int = 0
    slot_minutes: int = 15
    timezone: str = 'America/New_York'
    ignored_headers: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        for name in ('start_hour', 'start_minute', 'slot_minutes'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f'{name} must be an integer, got {value!r}')
        if not 0 <= self.start_hour <= 23:
            raise ConfigError(f'start_hour must be between 0 and 23, got {self.start_hour}')
        if not 0 <= self.start_minute <= 59:
            raise ConfigError(f'start_minute must be between 0 and 59, got {self.start_minute}')
        if self.slot_minutes <= 0:
            raise ConfigError(f'slot_minutes must be positive, got {self.slot_minutes}')
        if not isinstance(self.timezone, str) or not self.timezone.strip():
            raise ConfigError('timezone must be a non-empty IANA zone name')
        if isinstance(self.ignored_headers, str) or not all(isinstance(h, str) for h in self.ignored_headers):
            raise ConfigError('ignored_headers must be a list of header labels')
        object.__setattr__(self, 'ignored_headers', tuple(h.strip() for h in self.ignored_headers))

    @property
    def start_local(self) -> str:
        return f'{self.start_hour:02d}:{self.start_minute:02d}'

    @classmethod
    def from_mapping(cls, values: dict) -> 'ScheduleConfig':
        unknown = [k for k in values if k not in CONFIG_KEYS]
        if unknown:
            raise ConfigError(f'Unknown configuration option(s): {", ".join(unknown)}. '
                              + f'Recognized options are {", ".join(CONFIG_KEYS)}.')
        return cls(**{CONFIG_KEYS[k]: v for k, v in values.items()})

    @classmethod
    def from_file(cls, path: Path) -> 'ScheduleConfig':
        try:
            values = json.loads(Path(path).read_text(encoding='utf-8'))
        except OSError as ex:
            raise ConfigError(f'Could not read configuration file {path}: {ex.strerror}') from ex
        except json.JSONDecodeError as ex:
            raise ConfigError(f'Configuration file {path} is not valid JSON: {ex}') from ex
        if not isinstance(values, dict):
            raise ConfigError(f'Configuration file {path} must contain a JSON object')
        return cls.from_mapping(values)

    def with_overrides(self, **overrides) -> 'ScheduleConfig':
        """Returns a copy with every override that isn't None applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
