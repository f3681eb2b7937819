from pathlib import Path
from .errors import InputError

BOM = '\ufeff'

def strip_bom(text: str) -> str:
    return text[1:] if text.startswith(BOM) else text

def parse_csv(text: str) -> list[list[str]]:
    """Splits comma-separated text into rows of trimmed cells.

    Quoted fields may contain commas, newlines and "" escapes. Blank rows inside the grid are kept since
    they still stand for a time slot; blank rows at the end are dropped. Running out of text inside an open
    quote is not an error: whatever was collected so far becomes the last field.
    """
    text = text.replace('\r\n', '\n')
    rows: list[list[str]] = []
    row: list[str] = []
    field = ''
    in_quotes = False
    i = 0

    while i < len(text):
        ch = text[i]
        if in_quotes:
            if ch == '"':
                if text[i + 1:i + 2] == '"':
                    field += '"'
                    i += 1
                else:
                    in_quotes = False
            else:
                field += ch
        else:
            match ch:
                case '"':
                    in_quotes = True
                case ',':
                    row.append(field.strip())
                    field = ''
                case '\n':
                    row.append(field.strip())
                    rows.append(row)
                    row = []
                    field = ''
                case _:
                    field += ch
        i += 1

    if field or in_quotes or row:
        row.append(field.strip())
        rows.append(row)

    while rows and is_blank_row(rows[-1]):
        rows.pop()

    return rows

def is_blank_row(row: list[str]) -> bool:
    return all(not cell.strip() for cell in row)

def rectangularize(rows: list[list[str]], width: int) -> list[list[str]]:
    return [[cell.strip() for cell in row] + [''] * (width - len(row)) for row in rows]

def read_csv_text(path: Path) -> str:
    try:
        raw = Path(path).read_text(encoding='utf-8')
    except FileNotFoundError as ex:
        raise InputError(f'CSV file {path} does not exist!') from ex
    except (OSError, UnicodeDecodeError) as ex:
        raise InputError(f'Could not read CSV file {path}: {ex}') from ex

    return strip_bom(raw)

def read_grid(path: Path) -> list[list[str]]:
    rows = parse_csv(read_csv_text(path))
    if not rows:
        raise InputError(f'CSV file {path} appears empty')
    return rows
