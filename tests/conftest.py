from datetime import date
import pytest

FRIDAY = date(2025, 9, 19)

def edt(local, zone):
    return -240

@pytest.fixture
def write_csv(tmp_path):
    def write(text: str, name: str = 'friday.csv', encoding: str = 'utf-8'):
        path = tmp_path / name
        path.write_text(text, encoding=encoding)
        return path
    return write
