import json
import pytest
from lineup_prep.config import ScheduleConfig
from lineup_prep.errors import ConfigError

def test_defaults():
    config = ScheduleConfig()
    assert (config.start_hour, config.start_minute, config.slot_minutes) == (13, 0, 15)
    assert config.timezone == 'America/New_York'
    assert config.ignored_headers == ()
    assert config.start_local == '13:00'

def test_from_file(tmp_path):
    path = tmp_path / 'festival.json'
    path.write_text(json.dumps({'startHour': 12, 'startMinute': 30, 'slotMinutes': 30,
                                'timezone': 'Europe/London', 'ignoredHeaders': ['Time ']}))

    config = ScheduleConfig.from_file(path)

    assert config == ScheduleConfig(12, 30, 30, 'Europe/London', ('Time',))
    assert config.start_local == '12:30'

def test_unknown_option(tmp_path):
    with pytest.raises(ConfigError, match='slotMins'):
        ScheduleConfig.from_mapping({'slotMins': 30})

def test_config_file_must_be_an_object(tmp_path):
    path = tmp_path / 'festival.json'
    path.write_text('[]')
    with pytest.raises(ConfigError, match='JSON object'):
        ScheduleConfig.from_file(path)

def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigError, match='Could not read'):
        ScheduleConfig.from_file(tmp_path / 'missing.json')

@pytest.mark.parametrize('values', [
    {'start_hour': 24}, {'start_minute': 60}, {'slot_minutes': 0}, {'slot_minutes': '15'},
    {'timezone': ''}, {'ignored_headers': 'Time'}, {'ignored_headers': [1]},
])
def test_invalid_values(values):
    with pytest.raises(ConfigError):
        ScheduleConfig(**values)

def test_overrides_skip_none():
    config = ScheduleConfig().with_overrides(start_hour=None, slot_minutes=30)
    assert (config.start_hour, config.slot_minutes) == (13, 30)
